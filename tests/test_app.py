"""Tests for startup wiring and fatal error handling."""
from __future__ import annotations

import logging
import sys

import pytest

from activity_monitor import app
from activity_monitor.platform.base import SamplerUnavailable
from activity_monitor.sinks import SinkError

from conftest import FakeSampler


class TestProbe:
    def test_logs_current_state(self, caplog):
        sampler = FakeSampler()
        sampler.set(keys=["LShift"], pointer=(4, 2))
        with caplog.at_level(logging.INFO, logger="activity_monitor.app"):
            app.probe_sampler(sampler)
        assert "(4, 2)" in caplog.text
        assert "['LShift']" in caplog.text


class TestFatalStartup:
    def test_sampler_unavailable_exits(self, monkeypatch):
        def no_sampler():
            raise SamplerUnavailable("no display")

        monkeypatch.setattr(app, "get_sampler", no_sampler)
        with pytest.raises(SystemExit) as exc_info:
            app.main()
        assert exc_info.value.code == 1

    def test_unwritable_output_exits(self, monkeypatch):
        sampler = FakeSampler()
        stopped = []
        sampler.stop = lambda: stopped.append(True)

        def broken_sink(path):
            raise SinkError("read-only file system")

        monkeypatch.setattr(app, "get_sampler", lambda: sampler)
        monkeypatch.setattr(app, "SummarySink", broken_sink)
        with pytest.raises(SystemExit) as exc_info:
            app.main()
        assert exc_info.value.code == 1
        assert stopped == [True]


class TestCleanup:
    def test_missing_tk_still_releases_resources(self, monkeypatch, tmp_path):
        sampler = FakeSampler()
        stopped = []
        sampler.stop = lambda: stopped.append(True)
        closed = []

        class TrackedSummarySink(app.SummarySink):
            def close(self):
                closed.append("summary")
                super().close()

        monkeypatch.setattr(app, "get_sampler", lambda: sampler)
        monkeypatch.setattr(app, "SummarySink", TrackedSummarySink)
        monkeypatch.setattr(app.Config, "SESSIONS_PATH", tmp_path / "sessions.csv")
        monkeypatch.setattr(app.Config, "DETAILS_PATH", tmp_path / "details.csv")
        monkeypatch.setitem(sys.modules, "activity_monitor.gui", None)

        with pytest.raises(ImportError):
            app.main()
        assert stopped == [True]
        assert closed == ["summary"]
