from podrun.core.errors import (
    ErrorKind,
    ErrorInfo,
    PodRunError,
    ConfigError,
    PathResolutionError,
    SubmissionError,
    PollError,
    RetrievalError,
)
from podrun.core.status import TaskStatus, normalize_status
from podrun.core.config import Settings, get_settings
from podrun.core.logger import setup_logger

__all__ = [
    "ErrorKind",
    "ErrorInfo",
    "PodRunError",
    "ConfigError",
    "PathResolutionError",
    "SubmissionError",
    "PollError",
    "RetrievalError",
    "TaskStatus",
    "normalize_status",
    "Settings",
    "get_settings",
    "setup_logger",
]
