from unittest.mock import MagicMock

import pytest

import podrun.core.config as core_config
from podrun.core.config import Settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for name in list(core_config._ENV_ALIASES) + ["PODRUN_ENV_FILE"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(core_config, "_settings", None)
    monkeypatch.setattr(core_config, "_ENV_LOADED", True)


@pytest.fixture
def settings():
    return Settings(kubeconfig="/nonexistent/kubeconfig")


@pytest.fixture
def core_api():
    return MagicMock()
