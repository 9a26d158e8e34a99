"""
Change detector — turns successive device samples into actions.

Detection is edge-triggered: an action is emitted only when the held-key
sequence or the pointer position differs from the previous sample, never
for "key still held" or "mouse still here".

Key comparison is order-sensitive, so the same keys held in a different
order count as a change. Each emitted action reads the clock separately,
so a key action and a pointer action from the same tick may carry slightly
different timestamps.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from activity_monitor.events import Action, KeyPress, PointerMove
from activity_monitor.platform.base import DeviceSample

Clock = Callable[[], datetime]

INITIAL_POINTER: tuple[int, int] = (0, 0)


def local_now() -> datetime:
    """Current local time with its UTC offset."""
    return datetime.now().astimezone()


def detect_changes(
    last_keys: tuple[str, ...],
    last_pointer: tuple[int, int],
    sample: DeviceSample,
    clock: Clock = local_now,
) -> tuple[list[Action], tuple[str, ...], tuple[int, int]]:
    """
    Compare ``sample`` against the previous state.

    Returns (actions, keys, pointer) where keys/pointer are the state to
    carry into the next tick.
    """
    actions: list[Action] = []
    keys = tuple(sample.pressed_keys)
    pointer = (int(sample.pointer[0]), int(sample.pointer[1]))

    if keys != last_keys:
        actions.append(KeyPress(timestamp=clock().isoformat(), keys=keys))
        last_keys = keys

    if pointer != last_pointer:
        actions.append(PointerMove(timestamp=clock().isoformat(), coords=pointer))
        last_pointer = pointer

    return actions, last_keys, last_pointer


class ChangeDetector:
    """Holds the previous sample between ticks."""

    def __init__(self, clock: Clock = local_now) -> None:
        self._clock = clock
        self.last_keys: tuple[str, ...] = ()
        self.last_pointer: tuple[int, int] = INITIAL_POINTER

    def update(self, sample: DeviceSample) -> list[Action]:
        actions, self.last_keys, self.last_pointer = detect_changes(
            self.last_keys, self.last_pointer, sample, self._clock
        )
        return actions
