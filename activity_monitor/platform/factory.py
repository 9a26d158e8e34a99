"""
Factory that returns a DeviceSampler for the current OS.
"""

from __future__ import annotations

import logging
import os
import platform

from activity_monitor.platform.base import DeviceSampler, SamplerUnavailable
from activity_monitor.platform.pynput_sampler import PynputSampler

logger = logging.getLogger("activity_monitor.platform")


def get_sampler() -> DeviceSampler:
    """
    Detect the current OS and return a sampler for it.

    Raises SamplerUnavailable if the platform is unsupported or has no
    display to read input from.
    """
    system = platform.system().lower()

    if system == "darwin":
        logger.info("Detected macOS — using PynputSampler (requires Accessibility permission).")
        return PynputSampler()

    elif system == "windows":
        logger.info("Detected Windows — using PynputSampler.")
        return PynputSampler()

    elif system == "linux":
        if not (os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY")):
            raise SamplerUnavailable(
                "No DISPLAY or WAYLAND_DISPLAY set; keyboard and mouse cannot be sampled."
            )
        logger.info("Detected Linux — using PynputSampler.")
        return PynputSampler()

    else:
        raise SamplerUnavailable(
            f"Unsupported platform: {system}. "
            "Implement a DeviceSampler subclass in activity_monitor/platform/."
        )
