"""
Session model — one bounded monitoring interval tied to a task name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from activity_monitor.events import Action, render

SESSION_ID_FORMAT = "%Y%m%d_%H%M%S"

SUMMARY_COLUMNS = ("session_id", "task_name", "start_time", "end_time", "actions")

ACTION_SEPARATOR = ";"


@dataclass
class Session:
    """
    An ordered list of actions recorded under one task name.

    Fields
    ------
    session_id : start time as YYYYMMDD_HHMMSS
    task_name  : what the operator said they were working on
    start_time : ISO-8601 timestamp when monitoring started
    end_time   : ISO-8601 timestamp when monitoring stopped (None while active)
    actions    : every PointerMove / KeyPress detected, in order
    """

    session_id: str
    task_name: str
    start_time: str
    end_time: str | None = None
    actions: list[Action] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    def finish(self, now: datetime) -> None:
        self.end_time = now.isoformat()

    def __repr__(self) -> str:
        return (
            f"<Session id={self.session_id!r} task={self.task_name!r} "
            f"actions={len(self.actions)} active={self.is_active}>"
        )


def new_session(task_name: str, now: datetime) -> Session:
    return Session(
        session_id=now.strftime(SESSION_ID_FORMAT),
        task_name=task_name,
        start_time=now.isoformat(),
    )


def to_summary_record(session: Session) -> list[str]:
    """Return the session as one row of the summary file (see SUMMARY_COLUMNS)."""
    return [
        session.session_id,
        session.task_name,
        session.start_time,
        session.end_time or "",
        ACTION_SEPARATOR.join(render(action) for action in session.actions),
    ]
