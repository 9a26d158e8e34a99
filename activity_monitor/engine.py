"""
Recording engine — the Idle / Monitoring state machine.

Behaviour
---------
start(task_name)
    Opens a new Session, truncates the detailed file and begins monitoring.
    Rejected (status message only) while already monitoring or when the
    task name is blank.

tick()
    Called by the presentation layer on a fixed cadence. Samples the
    device once, runs change detection, and for every action:
      - appends it to the current session
      - writes one detailed row, flushed immediately
    Does nothing while idle.

stop()
    Stamps the session's end time and appends one summary row.

Write failures are shown in ``status_text`` and logged; they never roll back
the in-memory session or stop monitoring.
"""

from __future__ import annotations

import logging
import threading

from activity_monitor.detector import ChangeDetector, Clock, local_now
from activity_monitor.events import Action, KeyPress
from activity_monitor.platform.base import DeviceSample, DeviceSampler
from activity_monitor.session import Session, new_session, to_summary_record
from activity_monitor.sinks import DetailedEvent, DetailedSink, SinkError, SummarySink

logger = logging.getLogger("activity_monitor.engine")

READY_STATUS = "Enter task name to start monitoring"


class RecordingEngine:
    def __init__(
        self,
        sampler: DeviceSampler,
        summary_sink: SummarySink,
        detailed_sink: DetailedSink,
        clock: Clock = local_now,
    ) -> None:
        self._sampler = sampler
        self._summary_sink = summary_sink
        self._detailed_sink = detailed_sink
        self._clock = clock
        self._detector = ChangeDetector(clock)
        self._lock = threading.Lock()

        self.is_monitoring = False
        self.events_recorded = False
        self.task_name = ""
        self.current_session: Session | None = None
        self.status_text = READY_STATUS

    # ── Transitions ─────────────────────────────────────────────
    def start(self, task_name: str | None = None) -> bool:
        """Begin a session. Returns True if monitoring started."""
        with self._lock:
            if self.is_monitoring:
                self.status_text = "Already monitoring!"
                return False

            name = self.task_name if task_name is None else task_name
            if not name.strip():
                self.status_text = "Please enter a task name first"
                return False

            self.task_name = name
            self.current_session = new_session(name, self._clock())
            self.events_recorded = False
            self.status_text = f"Started monitoring task: {name}"

            try:
                self._detailed_sink.reset()
            except SinkError as exc:
                logger.error("Could not reset detailed log: %s", exc)
                self.status_text = f"Error: {exc}"

            self.is_monitoring = True
            logger.info(
                "Session %s started for task %r.", self.current_session.session_id, name
            )
            return True

    def stop(self) -> bool:
        """End the active session and persist it. Returns True if a session was stopped."""
        with self._lock:
            if not self.is_monitoring:
                self.status_text = "Monitoring is not running"
                return False

            self.status_text = "Stopping monitoring..."
            self.is_monitoring = False
            session = self.current_session
            session.finish(self._clock())

            try:
                self._summary_sink.append(to_summary_record(session))
            except SinkError as exc:
                logger.error("Could not save session %s: %s", session.session_id, exc)
                self.status_text = f"Error saving session: {exc}"
                return True

            if self.events_recorded:
                self.status_text = (
                    f"Monitoring stopped for task: {self.task_name}. Activities were recorded."
                )
            else:
                self.status_text = (
                    f"Monitoring stopped for task: {self.task_name}. No activities were recorded."
                )
            logger.info(
                "Session %s stopped with %d actions.", session.session_id, len(session.actions)
            )
            return True

    def tick(self) -> list[Action]:
        """Sample the device once and record any changes. Returns the new actions."""
        with self._lock:
            if not self.is_monitoring:
                return []

            sample = self._sampler.sample()
            actions = self._detector.update(sample)
            for action in actions:
                self._record(action, sample)
            return actions

    # ── Internals ───────────────────────────────────────────────
    def _record(self, action: Action, sample: DeviceSample) -> None:
        self.current_session.actions.append(action)
        self.events_recorded = True

        mouse_x, mouse_y = sample.pointer
        event = DetailedEvent(
            timestamp=action.timestamp,
            task_name=self.task_name,
            event_type=action.event_type,
            details=action.details,
            mouse_x=mouse_x,
            mouse_y=mouse_y,
        )
        logger.debug("%s %s", event.event_type, event.details)

        try:
            self._detailed_sink.write(event)
        except SinkError as exc:
            logger.error("Could not write detailed event: %s", exc)
            self.status_text = f"Error: {exc}"
            return

        if isinstance(action, KeyPress):
            self.status_text = f"Task: {self.task_name} - Keyboard: {action.details}"
        else:
            self.status_text = f"Task: {self.task_name} - Mouse: ({mouse_x}, {mouse_y})"
