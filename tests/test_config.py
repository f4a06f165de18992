from unittest.mock import patch

import pytest

import podrun.core.config as core_config
from podrun.core.config import DEFAULT_KUBECONFIG, get_settings
from podrun.core.errors import ConfigError
from podrun.pod.executor import run_script_pod


def test_defaults():
    settings = get_settings()

    assert settings.namespace == "default"
    assert settings.image == "python:3.8"
    assert settings.poll_interval == 5.0
    assert settings.mount_path == "/scripts"
    assert settings.kubeconfig == DEFAULT_KUBECONFIG
    assert settings.cleanup is False
    assert settings.in_cluster is False


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_environment_values(monkeypatch):
    monkeypatch.setenv("PODRUN_NAMESPACE", "jobs")
    monkeypatch.setenv("PODRUN_POLL_INTERVAL", "2.5")
    monkeypatch.setenv("PODRUN_CLEANUP", "yes")
    monkeypatch.setenv("KUBECONFIG", "/a/config:/b/config")

    settings = get_settings(reload=True)

    assert settings.namespace == "jobs"
    assert settings.poll_interval == 2.5
    assert settings.cleanup is True
    assert settings.kubeconfig == "/a/config"


def test_overrides_do_not_replace_cached_settings(monkeypatch):
    cached = get_settings()

    overridden = get_settings(namespace="batch", image=None)

    assert overridden.namespace == "batch"
    assert overridden.image == "python:3.8"
    assert get_settings() is cached


def test_env_file_is_loaded(tmp_path, monkeypatch):
    env_file = tmp_path / "podrun.env"
    env_file.write_text("# podrun\nexport PODRUN_IMAGE='python:3.12'\n")
    monkeypatch.setenv("PODRUN_ENV_FILE", str(env_file))
    # registered so the value written by the loader is removed afterwards
    monkeypatch.setenv("PODRUN_IMAGE", "unset")
    monkeypatch.delenv("PODRUN_IMAGE")

    settings = get_settings(reload=True)

    assert settings.image == "python:3.12"


@pytest.mark.parametrize("env, value", [
    ("PODRUN_POLL_INTERVAL", "0"),
    ("PODRUN_POLL_INTERVAL", "soon"),
    ("PODRUN_POLL_INTERVAL", "nan"),
    ("PODRUN_POLL_INTERVAL", "inf"),
    ("PODRUN_CLEANUP", "maybe"),
    ("PODRUN_MOUNT_PATH", "scripts"),
    ("PODRUN_NAMESPACE", "  "),
])
def test_invalid_values_raise_config_error(monkeypatch, env, value):
    monkeypatch.setenv(env, value)

    with pytest.raises(ConfigError):
        get_settings(reload=True)

    assert core_config._settings is None


def test_unknown_override():
    with pytest.raises(ConfigError):
        get_settings(replicas=3)


@patch("podrun.pod.pod.time.sleep")
def test_non_finite_poll_interval_never_creates_pod(mock_sleep, monkeypatch, core_api):
    monkeypatch.setenv("PODRUN_POLL_INTERVAL", "nan")

    with pytest.raises(ConfigError):
        run_script_pod("/tmp/script.py", get_settings(reload=True), core_v1=core_api)

    core_api.create_namespaced_pod.assert_not_called()
    mock_sleep.assert_not_called()
