"""
pynput-backed device sampler.

Uses:
  • pynput.keyboard.Listener to track which keys are currently held
  • pynput.mouse.Controller to read the pointer position on demand

Key names use the conventional key-code spelling ("A", "Key1", "LShift",
"Space", "F5", ...) so the CSV output is stable across platforms.
"""

from __future__ import annotations

import logging
import threading

from activity_monitor.platform.base import DeviceSample, DeviceSampler, SamplerUnavailable

logger = logging.getLogger("activity_monitor.sampler")

# ── Key naming ──────────────────────────────────────────────────────

_SPECIAL_KEYS: dict[str, str] = {
    "alt": "LAlt",
    "alt_l": "LAlt",
    "alt_r": "RAlt",
    "alt_gr": "RAlt",
    "backspace": "Backspace",
    "caps_lock": "CapsLock",
    "cmd": "Meta",
    "cmd_l": "LMeta",
    "cmd_r": "RMeta",
    "ctrl": "LControl",
    "ctrl_l": "LControl",
    "ctrl_r": "RControl",
    "delete": "Delete",
    "down": "Down",
    "end": "End",
    "enter": "Enter",
    "esc": "Escape",
    "home": "Home",
    "insert": "Insert",
    "left": "Left",
    "menu": "Menu",
    "num_lock": "NumLock",
    "page_down": "PageDown",
    "page_up": "PageUp",
    "pause": "Pause",
    "print_screen": "PrintScreen",
    "right": "Right",
    "scroll_lock": "ScrollLock",
    "shift": "LShift",
    "shift_l": "LShift",
    "shift_r": "RShift",
    "space": "Space",
    "tab": "Tab",
    "up": "Up",
}

_PUNCTUATION: dict[str, str] = {
    "`": "Grave",
    "-": "Minus",
    "=": "Equal",
    "[": "LeftBracket",
    "]": "RightBracket",
    "\\": "BackSlash",
    ";": "Semicolon",
    "'": "Apostrophe",
    ",": "Comma",
    ".": "Dot",
    "/": "Slash",
    " ": "Space",
}


def key_name(key) -> str:
    """
    Return a stable display name for a pynput key object.

    Character keys (KeyCode) carry ``char``; special keys (the Key enum)
    carry ``name``. Anything else falls back to its virtual key code.
    """
    char = getattr(key, "char", None)
    if char:
        if char in _PUNCTUATION:
            return _PUNCTUATION[char]
        if char.isdigit():
            return f"Key{char}"
        if char.isalpha():
            return char.upper()
        if char.isprintable():
            return char

    name = getattr(key, "name", None)
    if name:
        if name in _SPECIAL_KEYS:
            return _SPECIAL_KEYS[name]
        if name.startswith("f") and name[1:].isdigit():
            return name.upper()
        return "".join(part.capitalize() for part in name.split("_"))

    vk = getattr(key, "vk", None)
    if vk is not None:
        return f"Unknown({vk})"
    return "Unknown"


def key_identity(key) -> tuple:
    """
    Return what identifies the physical key, independent of modifiers.

    Shift+1 and 1 produce different chars but share a virtual key code, so a
    release always finds the entry its press added.
    """
    vk = getattr(key, "vk", None)
    if vk is not None:
        return ("vk", vk)
    name = getattr(key, "name", None)
    if name:
        return ("key", name)
    return ("name", key_name(key))


class PynputSampler(DeviceSampler):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        # identity -> display name, in press order
        self._held: dict[tuple, str] = {}
        self._kb_listener = None
        self._mouse = None

    # ── Listener callbacks (run on the pynput thread) ───────────
    def on_press(self, key) -> None:
        ident = key_identity(key)
        name = key_name(key)
        with self._lock:
            self._held.setdefault(ident, name)

    def on_release(self, key) -> None:
        ident = key_identity(key)
        with self._lock:
            if self._held.pop(ident, None) is not None:
                return
            # Press and release disagreed on identity (no vk on one side)
            name = key_name(key)
            for held_ident, held_name in self._held.items():
                if held_name == name:
                    del self._held[held_ident]
                    break

    # ── Lifecycle ───────────────────────────────────────────────
    def start(self) -> None:
        try:
            from pynput import keyboard, mouse
        except ImportError as exc:
            raise SamplerUnavailable(f"pynput cannot access input devices: {exc}") from exc

        try:
            self._mouse = mouse.Controller()
            self._kb_listener = keyboard.Listener(
                on_press=self.on_press, on_release=self.on_release
            )
            self._kb_listener.start()
        except Exception as exc:
            raise SamplerUnavailable(f"Could not start keyboard listener: {exc}") from exc
        logger.info("pynput keyboard listener started.")

    def stop(self) -> None:
        if self._kb_listener:
            self._kb_listener.stop()
            self._kb_listener = None
            logger.info("pynput keyboard listener stopped.")

    def sample(self) -> DeviceSample:
        if self._mouse is None:
            raise SamplerUnavailable("Sampler has not been started.")
        with self._lock:
            keys = tuple(dict.fromkeys(self._held.values()))
        x, y = self._mouse.position
        return DeviceSample(pressed_keys=keys, pointer=(int(x), int(y)))
