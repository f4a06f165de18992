import os

import pytest
from pydantic import ValidationError

from podrun.core.config import Settings
from podrun.core.errors import PathResolutionError
from podrun.pod.descriptor import build_task_spec, resolve_script_path


def test_mount_exposes_script_directory(settings):
    spec = build_task_spec("/home/u/project/script.py", settings)

    assert len(spec.mounts) == 1
    assert spec.mounts[0].host_path == "/home/u/project"
    assert spec.mounts[0].container_path == "/scripts"
    assert spec.command == ("python", "/scripts/script.py")


def test_defaults_match_python_script_pod(settings):
    spec = build_task_spec("/tmp/script.py", settings)

    assert spec.image == "python:3.8"
    assert spec.restart_policy == "Never"
    assert spec.generate_name == "python-script-"
    assert spec.container_name == "python"
    assert spec.mounts[0].name == "script-volume"


def test_relative_path_resolves_against_cwd(settings, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    spec = build_task_spec("script.py", settings)

    assert spec.mounts[0].host_path == os.getcwd()
    assert spec.command[-1] == "/scripts/script.py"


def test_custom_layout():
    settings = Settings(
        kubeconfig="/nonexistent/kubeconfig",
        image="python:3.12-slim",
        interpreter="python3",
        mount_path="/work/",
    )

    spec = build_task_spec("/srv/jobs/etl/run.py", settings)

    assert spec.image == "python:3.12-slim"
    assert spec.command == ("python3", "/work/run.py")
    assert spec.mounts[0].container_path == "/work"
    assert spec.mounts[0].host_path == "/srv/jobs/etl"


@pytest.mark.parametrize("path", ["", "   ", None, "/"])
def test_unresolvable_path_raises(path):
    with pytest.raises(PathResolutionError):
        resolve_script_path(path)


def test_spec_is_immutable(settings):
    spec = build_task_spec("/tmp/script.py", settings)

    with pytest.raises(ValidationError):
        spec.image = "alpine:3"


def test_to_pod_renders_host_path_volume(settings):
    pod = build_task_spec("/home/u/project/script.py", settings).to_pod()

    assert pod.kind == "Pod"
    assert pod.metadata.generate_name == "python-script-"
    assert pod.metadata.name is None
    assert pod.spec.restart_policy == "Never"

    container = pod.spec.containers[0]
    assert container.image == "python:3.8"
    assert container.command == ["python", "/scripts/script.py"]
    assert container.volume_mounts[0].name == "script-volume"
    assert container.volume_mounts[0].mount_path == "/scripts"

    volume = pod.spec.volumes[0]
    assert volume.name == "script-volume"
    assert volume.host_path.path == "/home/u/project"
