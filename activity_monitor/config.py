"""
Monitor configuration — loaded from environment / .env file.

File names and the tick cadence are fixed; only where files go and how
much gets logged can be changed.
"""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from activity_monitor.sinks import DETAILS_FILE, SESSIONS_FILE

# Load .env from the working directory (or the nearest parent that has one)
load_dotenv(find_dotenv(usecwd=True))


class Config:
    """Runtime settings for the desktop monitor."""

    # ── Output ──────────────────────────────────────────────────
    OUTPUT_DIR: Path = Path(os.getenv("ACTIVITY_OUTPUT_DIR", "."))
    SESSIONS_PATH: Path = OUTPUT_DIR / SESSIONS_FILE
    DETAILS_PATH: Path = OUTPUT_DIR / DETAILS_FILE

    # ── Logging ─────────────────────────────────────────────────
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    # Empty = console only
    LOG_FILE: str = os.getenv("LOG_FILE", "")

    # ── Presentation ────────────────────────────────────────────
    # How often the window drives RecordingEngine.tick()
    TICK_INTERVAL_MS: int = 50
    WINDOW_TITLE: str = "Desktop Activity Monitor"
