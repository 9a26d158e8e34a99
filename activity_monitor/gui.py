"""
Tkinter window for the desktop monitor.

Shows a task-name field, Start / Stop buttons and the engine's status line,
and drives RecordingEngine.tick() every Config.TICK_INTERVAL_MS while open.
"""

from __future__ import annotations

import logging
import tkinter as tk

from activity_monitor.config import Config
from activity_monitor.engine import RecordingEngine

logger = logging.getLogger("activity_monitor.gui")

WIDTH, HEIGHT = 440, 260


class MonitorWindow:
    def __init__(self, engine: RecordingEngine) -> None:
        self.engine = engine

        self.root = tk.Tk()
        self.root.title(Config.WINDOW_TITLE)
        self.root.resizable(False, False)

        # Center on screen
        self.root.update_idletasks()
        x = (self.root.winfo_screenwidth() - WIDTH) // 2
        y = (self.root.winfo_screenheight() - HEIGHT) // 2
        self.root.geometry(f"{WIDTH}x{HEIGHT}+{x}+{y}")

        tk.Label(
            self.root, text=Config.WINDOW_TITLE, font=("Segoe UI", 14, "bold")
        ).pack(pady=(16, 10))

        frame = tk.Frame(self.root)
        frame.pack(pady=5)
        tk.Label(frame, text="Task Name:", width=10, anchor="e", font=("Segoe UI", 10)).grid(
            row=0, column=0, padx=5
        )
        self.task_var = tk.StringVar(value=engine.task_name)
        self.task_var.trace_add("write", lambda *_: self._refresh())
        self.task_entry = tk.Entry(
            frame, textvariable=self.task_var, width=30, font=("Segoe UI", 10)
        )
        self.task_entry.grid(row=0, column=1, padx=5)
        self.task_entry.focus_set()

        buttons = tk.Frame(self.root)
        buttons.pack(pady=10)
        self.start_button = tk.Button(
            buttons, text="Start Monitoring", command=self.on_start, width=16
        )
        self.start_button.grid(row=0, column=0, padx=5)
        tk.Button(buttons, text="Stop Monitoring", command=self.on_stop, width=16).grid(
            row=0, column=1, padx=5
        )

        self.status_var = tk.StringVar(value=engine.status_text)
        tk.Label(
            self.root, textvariable=self.status_var, wraplength=WIDTH - 40, font=("Segoe UI", 10)
        ).pack(pady=(6, 10))

        tk.Label(
            self.root,
            text=f"Sessions are saved in: {Config.SESSIONS_PATH.name}\n"
            f"Latest detailed events are in: {Config.DETAILS_PATH.name}",
            font=("Segoe UI", 9),
            fg="gray30",
        ).pack()

        self.root.bind("<Return>", lambda e: self.on_start())
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)
        self._refresh()

    # ── Button handlers ─────────────────────────────────────────
    def on_start(self) -> None:
        self.engine.start(self.task_var.get())
        self._refresh()

    def on_stop(self) -> None:
        self.engine.stop()
        self._refresh()

    def on_close(self) -> None:
        if self.engine.is_monitoring:
            logger.info("Window closed while monitoring — saving session.")
            self.engine.stop()
        self.root.destroy()

    # ── Tick loop ───────────────────────────────────────────────
    def _tick(self) -> None:
        try:
            self.engine.tick()
        except Exception as exc:
            logger.exception("Tick failed: %s", exc)
            self.engine.status_text = f"Error: {exc}"
        finally:
            self.root.after(Config.TICK_INTERVAL_MS, self._tick)
        self._refresh()

    def _refresh(self) -> None:
        monitoring = self.engine.is_monitoring
        self.task_entry.configure(state="readonly" if monitoring else "normal")
        has_name = bool(self.task_var.get().strip())
        self.start_button.configure(state="normal" if has_name else "disabled")
        self.status_var.set(self.engine.status_text)

    def run(self) -> None:
        self.root.after(Config.TICK_INTERVAL_MS, self._tick)
        self.root.mainloop()
