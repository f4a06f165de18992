"""
Kubernetes Pod management for script tasks.

Handles Pod creation, completion polling, log retrieval, and cleanup.
"""

import time
from typing import Iterator, Optional
from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from podrun.core.errors import PollError, RetrievalError, SubmissionError
from podrun.core.logger import setup_logger
from podrun.core.status import TaskStatus, normalize_status
from podrun.pod.models import Completion, TaskHandle, TaskSpec

logger = setup_logger(__name__, include_location=True)

DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_CHUNK_SIZE = 64 * 1024

# Transport failures surface as urllib3 errors, API rejections as ApiException
ORCHESTRATOR_ERRORS = (ApiException, HTTPError, OSError)


def submit_pod(
    core_v1: client.CoreV1Api,
    spec: TaskSpec,
    namespace: str = 'default'
) -> TaskHandle:
    """
    Create the pod described by spec.

    Not idempotent: every call creates a new pod with a new generated name.

    Args:
        core_v1: Kubernetes CoreV1Api client
        spec: Task description
        namespace: Target namespace

    Returns:
        Handle carrying the server-assigned pod name

    Raises:
        SubmissionError: If the API server rejects the pod or cannot be reached
    """
    try:
        created = core_v1.create_namespaced_pod(namespace, spec.to_pod())
    except ORCHESTRATOR_ERRORS as e:
        logger.error(f"Failed to create Pod in namespace {namespace}: {e}")
        raise SubmissionError(f"Failed to create pod: {e}", cause=e, namespace=namespace) from e

    handle = TaskHandle(name=created.metadata.name, namespace=namespace)
    logger.info(f"Created Pod {handle.name} in namespace {namespace}")
    return handle


def _terminated_state(pod) -> Optional[client.V1ContainerStateTerminated]:
    statuses = getattr(pod.status, 'container_statuses', None) if pod.status else None
    if not statuses:
        return None
    state = statuses[0].state
    return state.terminated if state else None


def wait_for_pod_completion(
    core_v1: client.CoreV1Api,
    handle: TaskHandle,
    poll_interval: float = DEFAULT_POLL_INTERVAL
) -> Completion:
    """
    Block until the pod reaches Succeeded or Failed.

    Both outcomes count as completion; the returned Completion tells them
    apart. There is no timeout: the loop runs until the pod is terminal or a
    status query fails.

    Args:
        core_v1: Kubernetes CoreV1Api client
        handle: Pod returned by submit_pod
        poll_interval: Seconds between status checks

    Returns:
        Terminal status with the container's exit code and reason when known

    Raises:
        PollError: On the first failed status query (including pod not found)
    """
    logger.info(f"Waiting for Pod {handle} to complete (poll interval: {poll_interval}s)")

    attempts = 0
    while True:
        attempts += 1
        try:
            pod = core_v1.read_namespaced_pod(handle.name, handle.namespace)
        except ORCHESTRATOR_ERRORS as e:
            logger.error(f"Status query {attempts} for Pod {handle} failed: {e}")
            raise PollError(
                f"Failed to read status of pod {handle}: {e}",
                cause=e,
                pod=handle.name,
                attempt=attempts,
            ) from e

        status = normalize_status(pod.status.phase if pod.status else None)
        logger.debug(f"Pod {handle} phase: {status.value}")

        if status.is_terminal:
            terminated = _terminated_state(pod)
            completion = Completion(
                status=status,
                exit_code=terminated.exit_code if terminated else None,
                reason=terminated.reason if terminated else None,
            )
            if status == TaskStatus.SUCCEEDED:
                logger.info(f"Pod {handle} succeeded")
            else:
                logger.warning(f"Pod {handle} failed: reason={completion.reason}, exit_code={completion.exit_code}")
            return completion

        time.sleep(poll_interval)


def iter_pod_log_chunks(
    core_v1: client.CoreV1Api,
    handle: TaskHandle,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[bytes]:
    """
    Stream the pod's captured output as raw byte chunks.

    The generator is finite and cannot be restarted. The underlying
    connection is released when the generator finishes, fails, or is closed.

    Raises:
        RetrievalError: If the stream cannot be opened or read to the end
    """
    try:
        response = core_v1.read_namespaced_pod_log(
            handle.name,
            handle.namespace,
            _preload_content=False
        )
    except ORCHESTRATOR_ERRORS as e:
        logger.error(f"Failed to open log stream of Pod {handle}: {e}")
        raise RetrievalError(f"Failed to open log stream of pod {handle}: {e}", cause=e, pod=handle.name) from e

    try:
        for chunk in response.stream(chunk_size, decode_content=True):
            if chunk:
                yield chunk
    except ORCHESTRATOR_ERRORS as e:
        logger.error(f"Log stream of Pod {handle} broke: {e}")
        raise RetrievalError(f"Failed to read log stream of pod {handle}: {e}", cause=e, pod=handle.name) from e
    finally:
        response.close()
        response.release_conn()


def get_pod_logs(
    core_v1: client.CoreV1Api,
    handle: TaskHandle,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> str:
    """
    Retrieve the pod's complete output as one string.

    All or nothing: if the stream fails partway, the bytes read so far are
    discarded and RetrievalError propagates.
    """
    data = b"".join(iter_pod_log_chunks(core_v1, handle, chunk_size))
    logger.info(f"Retrieved {len(data)} bytes of logs from Pod {handle}")
    return data.decode('utf-8', errors='replace')


def delete_pod(
    core_v1: client.CoreV1Api,
    handle: TaskHandle
) -> None:
    """
    Delete the pod. Missing pods are ignored; other failures are logged.
    """
    try:
        core_v1.delete_namespaced_pod(handle.name, handle.namespace)
        logger.debug(f"Deleted Pod {handle}")
    except ApiException as e:
        if e.status == 404:
            logger.debug(f"Pod {handle} not found (already deleted)")
        else:
            logger.warning(f"Failed to delete Pod {handle}: {e}")
    except (HTTPError, OSError) as e:
        logger.warning(f"Failed to delete Pod {handle}: {e}")
