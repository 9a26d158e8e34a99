"""
Desktop activity monitor — process entry point.

Startup
-------
1. Configure logging from Config.
2. Pick a device sampler for this OS and check that keyboard and mouse
   can actually be read.
3. Open both CSV sinks.
4. Show the window; it drives the recording engine until closed.

Any failure in steps 2–3 is fatal: it is logged and the process exits with
status 1 before the window appears.
"""

from __future__ import annotations

import logging

from activity_monitor.config import Config
from activity_monitor.engine import RecordingEngine
from activity_monitor.platform.base import DeviceSampler, SamplerUnavailable
from activity_monitor.platform.factory import get_sampler
from activity_monitor.sinks import DetailedSink, SinkError, SummarySink

logger = logging.getLogger("activity_monitor.app")


def _configure_logging() -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if Config.LOG_FILE:
        handlers.append(logging.FileHandler(Config.LOG_FILE, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def probe_sampler(sampler: DeviceSampler) -> None:
    """Log one sample so the operator can see input detection works."""
    sample = sampler.sample()
    logger.info("✓ Mouse detection working (current position: %s)", sample.pointer)
    logger.info("✓ Keyboard detection working (current keys: %s)", list(sample.pressed_keys))


def main() -> None:
    _configure_logging()
    logger.info("=== %s ===", Config.WINDOW_TITLE)
    logger.info("Initializing...")
    logger.info("  Sessions file : %s", Config.SESSIONS_PATH)
    logger.info("  Details file  : %s", Config.DETAILS_PATH)
    logger.info("  Log level     : %s", Config.LOG_LEVEL)

    try:
        sampler = get_sampler()
        sampler.start()
        probe_sampler(sampler)
    except SamplerUnavailable as exc:
        logger.error("Cannot read keyboard/mouse: %s", exc)
        raise SystemExit(1)

    try:
        summary_sink = SummarySink(Config.SESSIONS_PATH)
        detailed_sink = DetailedSink(Config.DETAILS_PATH)
    except SinkError as exc:
        logger.error("Cannot open output files: %s", exc)
        sampler.stop()
        raise SystemExit(1)

    engine = RecordingEngine(sampler, summary_sink, detailed_sink)

    try:
        # Imported late so a missing Tk only fails after the device checks
        from activity_monitor.gui import MonitorWindow

        MonitorWindow(engine).run()
    finally:
        if engine.is_monitoring:
            engine.stop()
        sampler.stop()
        summary_sink.close()
        detailed_sink.close()
        logger.info("Monitor stopped.")


if __name__ == "__main__":
    main()
