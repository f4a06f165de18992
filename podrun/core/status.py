"""
Pod status normalization for podrun.
"""

from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    """Pod phase as reported by the API server. Only observed, never written."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({TaskStatus.SUCCEEDED, TaskStatus.FAILED})


def normalize_status(raw_phase: Optional[str]) -> TaskStatus:
    """
    Map a raw pod phase to a TaskStatus.

    A pod that has no phase yet (freshly created, not scheduled) is Pending.
    Unrecognized values map to Unknown, which is not terminal.
    """
    if raw_phase is None or not str(raw_phase).strip():
        return TaskStatus.PENDING
    value = str(raw_phase).strip().lower()
    for status in TaskStatus:
        if status.value.lower() == value:
            return status
    return TaskStatus.UNKNOWN
