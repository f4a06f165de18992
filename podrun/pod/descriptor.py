"""
Build the pod description for a local script.

The script's whole containing directory is mounted into the container
through a hostPath volume, and the interpreter is pointed at the script's
base name under the mount point.
"""

import os
import posixpath
from typing import Optional, Union

from podrun.core.config import Settings, get_settings
from podrun.core.errors import PathResolutionError
from podrun.core.logger import setup_logger
from podrun.pod.models import TaskSpec, VolumeMount

logger = setup_logger(__name__, include_location=True)


def resolve_script_path(script_path: Union[str, os.PathLike]) -> str:
    """
    Return the absolute, normalized form of script_path.

    Raises:
        PathResolutionError: If the path is empty or cannot be made absolute
    """
    raw = os.fspath(script_path) if script_path is not None else ""
    if not str(raw).strip():
        raise PathResolutionError("Script path is empty")
    try:
        resolved = os.path.abspath(raw)
    except (OSError, ValueError) as e:
        raise PathResolutionError(f"Cannot resolve script path {raw!r}: {e}", cause=e) from e
    if not os.path.basename(resolved):
        raise PathResolutionError(f"Script path {raw!r} does not name a file")
    return resolved


def build_task_spec(script_path: Union[str, os.PathLike], settings: Optional[Settings] = None) -> TaskSpec:
    """
    Construct the TaskSpec for running script_path in a container.

    Args:
        script_path: Local path to the script, absolute or relative to cwd
        settings: Image, interpreter and mount layout (defaults from get_settings())

    Returns:
        Immutable TaskSpec; nothing is sent to the cluster here

    Example:
        >>> spec = build_task_spec("/home/u/project/script.py")
        >>> spec.mounts[0].host_path, spec.command
        ('/home/u/project', ('python', '/scripts/script.py'))
    """
    settings = settings or get_settings()
    absolute = resolve_script_path(script_path)
    host_dir = os.path.dirname(absolute)
    script_name = os.path.basename(absolute)

    spec = TaskSpec(
        image=settings.image,
        command=(settings.interpreter, posixpath.join(settings.mount_path, script_name)),
        mounts=(
            VolumeMount(
                name=settings.volume_name,
                host_path=host_dir,
                container_path=settings.mount_path,
            ),
        ),
        generate_name=settings.generate_name,
        container_name=settings.container_name,
    )
    logger.debug(f"Built task spec for {absolute}: image={spec.image}, command={list(spec.command)}")
    return spec
