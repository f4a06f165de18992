"""
Script pod execution orchestration.

Main entry point for running a local script in a Kubernetes pod:
- Cluster client construction from kubeconfig or in-cluster config
- Pod description with the script's directory mounted via hostPath
- Pod creation, completion polling and log retrieval
- Optional cleanup after the output has been retrieved
"""

import os
from typing import Optional, Union
from kubernetes import client

from podrun.core.config import Settings, get_settings
from podrun.core.logger import setup_logger
from podrun.pod.client import load_core_api
from podrun.pod.descriptor import build_task_spec
from podrun.pod.models import RunResult
from podrun.pod.pod import delete_pod, get_pod_logs, submit_pod, wait_for_pod_completion

logger = setup_logger(__name__, include_location=True)


def run_script_pod(
    script_path: Union[str, os.PathLike],
    settings: Optional[Settings] = None,
    core_v1: Optional[client.CoreV1Api] = None
) -> RunResult:
    """
    Run a script as a single ephemeral pod and return its output.

    The phases run strictly in order: build, submit, poll, retrieve. The
    first error aborts the run and propagates as a PodRunError subclass;
    later phases are never started. A pod that ends in Failed is still a
    completed run: check RunResult.status.

    Args:
        script_path: Local script to run
        settings: Run configuration (defaults from get_settings())
        core_v1: Pre-built API client; loaded from settings when omitted

    Returns:
        RunResult with the pod handle, terminal status, exit code and output

    Example:
        >>> result = run_script_pod("script.py")
        >>> result.status
        <TaskStatus.SUCCEEDED: 'Succeeded'>
    """
    settings = settings or get_settings()

    if core_v1 is None:
        core_v1 = load_core_api(settings.kubeconfig_path, in_cluster=settings.in_cluster)

    spec = build_task_spec(script_path, settings)
    logger.info(f"Starting script pod: script={script_path}, image={spec.image}, namespace={settings.namespace}")

    handle = submit_pod(core_v1, spec, settings.namespace)
    completion = wait_for_pod_completion(core_v1, handle, settings.poll_interval)
    output = get_pod_logs(core_v1, handle, settings.log_chunk_size)

    if settings.cleanup:
        delete_pod(core_v1, handle)

    logger.success(f"Script pod {handle} finished with status {completion.status.value}")
    return RunResult(
        handle=handle,
        status=completion.status,
        output=output,
        exit_code=completion.exit_code,
        reason=completion.reason,
    )
