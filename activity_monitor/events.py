"""
Event model — the two kinds of input actions a session records.

PointerMove — the pointer moved to new coordinates.
KeyPress    — the set of held keys changed; carries every key held now.

Both render to a compact text form used in the session summary file:

    {mouse,2024-05-01T09:30:00.123456+02:00,(10,20)}
    {key,2024-05-01T09:30:00.456789+02:00,"LShift+A"}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


def debug_quote(text: str) -> str:
    """
    Wrap ``text`` in double quotes, escaping it the way a debug formatter does.

    Backslash, quote and ASCII control characters match that formatter
    exactly. Other non-printable characters use Python's notion of
    printable, which escapes a few code points (e.g. U+00A0) the formatter
    would leave alone; key names never contain them.
    """
    out = ['"']
    for ch in text:
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif ch == "\0":
            out.append("\\0")
        elif not ch.isprintable():
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def debug_list(items) -> str:
    """Render a sequence of strings as ``["a", "b"]``."""
    return "[" + ", ".join(debug_quote(item) for item in items) + "]"


@dataclass(frozen=True)
class PointerMove:
    """The pointer moved to ``coords``."""

    timestamp: str
    coords: tuple[int, int]

    event_type = "mouse_move"

    @property
    def details(self) -> str:
        return f"Moved to ({self.coords[0]}, {self.coords[1]})"

    def render(self) -> str:
        return f"{{mouse,{self.timestamp},({self.coords[0]},{self.coords[1]})}}"


@dataclass(frozen=True)
class KeyPress:
    """The held-key set changed; ``keys`` is the full set held at ``timestamp``."""

    timestamp: str
    keys: tuple[str, ...]

    event_type = "keyboard"

    @property
    def details(self) -> str:
        return debug_list(self.keys)

    def render(self) -> str:
        return f"{{key,{self.timestamp},{debug_quote('+'.join(self.keys))}}}"


Action = Union[PointerMove, KeyPress]


def render(action) -> str:
    """Return the canonical text encoding of an action."""
    return action.render()
