"""
Abstract base class for device samplers.

The recording engine never talks to the OS directly; it asks a sampler for
the current input state once per tick.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple


class SamplerUnavailable(RuntimeError):
    """Raised when input devices cannot be sampled on this machine."""


class DeviceSample(NamedTuple):
    """Input state at one instant."""

    pressed_keys: tuple[str, ...]
    pointer: tuple[int, int]


class DeviceSampler(ABC):
    """
    Contract that every sampler must fulfill.

    Responsibilities:
      • start() / stop() — manage whatever background hooks the sampler needs
      • sample()         — return the held keys (in order) and pointer position
    """

    @abstractmethod
    def start(self) -> None:
        """Acquire device hooks. Raises SamplerUnavailable on failure."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Release device hooks."""
        ...

    @abstractmethod
    def sample(self) -> DeviceSample:
        """Return the current pressed keys and pointer coordinates."""
        ...
