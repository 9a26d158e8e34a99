"""Shared pytest fixtures."""
from __future__ import annotations

import csv
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from activity_monitor.engine import RecordingEngine
from activity_monitor.platform.base import DeviceSample, DeviceSampler
from activity_monitor.sinks import DETAILS_FILE, SESSIONS_FILE, DetailedSink, SummarySink


class FakeSampler(DeviceSampler):
    """Returns whatever state the test last set."""

    def __init__(self) -> None:
        self.keys: tuple[str, ...] = ()
        self.pointer: tuple[int, int] = (0, 0)
        self.calls = 0

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def set(self, keys=None, pointer=None) -> None:
        if keys is not None:
            self.keys = tuple(keys)
        if pointer is not None:
            self.pointer = pointer

    def sample(self) -> DeviceSample:
        self.calls += 1
        return DeviceSample(pressed_keys=self.keys, pointer=self.pointer)


class StepClock:
    """Deterministic clock that advances one millisecond per reading."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 5, 1, 9, 30, 0, tzinfo=timezone(timedelta(hours=2)))
        self.readings = 0

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(milliseconds=1)
        self.readings += 1
        return value


def read_rows(path: Path) -> list[list[str]]:
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def sampler() -> FakeSampler:
    return FakeSampler()


@pytest.fixture
def summary_path(tmp_path: Path) -> Path:
    return tmp_path / SESSIONS_FILE


@pytest.fixture
def details_path(tmp_path: Path) -> Path:
    return tmp_path / DETAILS_FILE


@pytest.fixture
def engine(sampler, clock, summary_path, details_path):
    summary = SummarySink(summary_path)
    detailed = DetailedSink(details_path)
    eng = RecordingEngine(sampler, summary, detailed, clock=clock)
    yield eng
    summary.close()
    detailed.close()
