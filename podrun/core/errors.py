"""
Standardized error classification for podrun.

Every failure of a run is raised as a PodRunError subclass tagged with the
phase that produced it. The original exception is always chained, so the
orchestrator's message reaches the caller verbatim.

Usage:
    try:
        result = run_script_pod("script.py")
    except PodRunError as e:
        print(e.info.to_dict())
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """Run phase an error originated from."""

    CONFIG = "config"               # Cluster connection config missing/unparsable
    PATH = "path"                   # Script path cannot be made absolute
    SUBMISSION = "submission"       # Pod creation rejected or unreachable
    POLL = "poll"                   # Status query failed mid-loop
    RETRIEVAL = "retrieval"         # Log stream could not be opened or drained


class ErrorInfo(BaseModel):
    """
    Structured view of a run failure, suitable for logging or JSON output.
    """

    kind: ErrorKind = Field(description="Phase that failed")
    message: str = Field(description="Human-readable error message")
    http_status: Optional[int] = Field(
        None, description="API server status code (for orchestrator errors)"
    )
    exception_type: Optional[str] = Field(
        None, description="Class name of the underlying exception"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d = {
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.http_status is not None:
            d["http_status"] = self.http_status
        if self.exception_type is not None:
            d["exception_type"] = self.exception_type
        if self.details:
            d["details"] = self.details
        return d


class PodRunError(Exception):
    """Base class for all fatal run errors."""

    kind: ErrorKind = ErrorKind.CONFIG

    def __init__(self, message: str, cause: Optional[BaseException] = None, **details: Any):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details

    @property
    def info(self) -> ErrorInfo:
        status = getattr(self.cause, "status", None)
        return ErrorInfo(
            kind=self.kind,
            message=self.message,
            http_status=status if isinstance(status, int) else None,
            exception_type=type(self.cause).__name__ if self.cause is not None else None,
            details=self.details,
        )


class ConfigError(PodRunError):
    kind = ErrorKind.CONFIG


class PathResolutionError(PodRunError):
    kind = ErrorKind.PATH


class SubmissionError(PodRunError):
    kind = ErrorKind.SUBMISSION


class PollError(PodRunError):
    kind = ErrorKind.POLL


class RetrievalError(PodRunError):
    kind = ErrorKind.RETRIEVAL


__all__ = [
    "ErrorKind",
    "ErrorInfo",
    "PodRunError",
    "ConfigError",
    "PathResolutionError",
    "SubmissionError",
    "PollError",
    "RetrievalError",
]
