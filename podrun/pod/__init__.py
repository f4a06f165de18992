"""
Script pod tool for podrun.

This package runs a local script as a single Kubernetes pod with:
- hostPath mount of the script's directory
- Pod creation in a configurable namespace
- Fixed-interval completion polling
- Pod log streaming, buffered or chunked
- Optional pod cleanup

Usage:
    from podrun.pod import run_script_pod

    result = run_script_pod("script.py")
    print(result.status, result.output)
"""

from podrun.pod.executor import run_script_pod
from podrun.pod.models import Completion, RunResult, TaskHandle, TaskSpec, VolumeMount

__all__ = [
    'run_script_pod',
    'Completion',
    'RunResult',
    'TaskHandle',
    'TaskSpec',
    'VolumeMount',
]
