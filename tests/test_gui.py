"""Tests for the window's tick loop (no display needed)."""
from __future__ import annotations

from types import SimpleNamespace

import pytest

pytest.importorskip("tkinter")

from activity_monitor.config import Config
from activity_monitor.gui import MonitorWindow
from activity_monitor.platform.base import SamplerUnavailable


def _window(engine) -> MonitorWindow:
    """A MonitorWindow wired to fakes instead of Tk widgets."""
    window = MonitorWindow.__new__(MonitorWindow)
    window.engine = engine
    window.scheduled = []
    window.root = SimpleNamespace(after=lambda ms, fn: window.scheduled.append((ms, fn)))
    window.refreshes = 0

    def refresh():
        window.refreshes += 1

    window._refresh = refresh
    return window


class TestTickLoop:
    def test_reschedules_after_normal_tick(self, engine):
        window = _window(engine)
        window._tick()
        assert window.scheduled == [(Config.TICK_INTERVAL_MS, window._tick)]
        assert window.refreshes == 1

    def test_sampling_error_keeps_loop_alive(self, engine, sampler, caplog):
        def broken():
            raise SamplerUnavailable("X connection lost")

        engine.start("build")
        sampler.sample = broken
        window = _window(engine)
        window._tick()
        assert window.scheduled == [(Config.TICK_INTERVAL_MS, window._tick)]
        assert engine.is_monitoring
        assert engine.status_text == "Error: X connection lost"
        assert "Tick failed" in caplog.text

        del sampler.sample
        sampler.set(pointer=(5, 5))
        window._tick()
        assert len(engine.current_session.actions) == 1
        assert len(window.scheduled) == 2
