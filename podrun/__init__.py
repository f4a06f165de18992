__version__ = "0.1.0"

from podrun.core.errors import PodRunError
from podrun.core.status import TaskStatus
from podrun.pod import run_script_pod, RunResult, TaskHandle, TaskSpec

__all__ = [
    "__version__",
    "PodRunError",
    "TaskStatus",
    "run_script_pod",
    "RunResult",
    "TaskHandle",
    "TaskSpec",
]
