import math
import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, ConfigDict, ValidationError, field_validator

from podrun.core.errors import ConfigError


_ENV_LOADED = False

DEFAULT_KUBECONFIG = str(Path.home() / ".kube" / "config")


def _load_env_file(path: str, allow_override: bool = False) -> None:
    """
    Minimal .env loader: loads KEY=VALUE pairs into os.environ.
    - Ignores empty lines and lines starting with '#'
    - Supports values wrapped in single or double quotes
    - By default, does not override existing environment variables
    """
    if not path or not os.path.exists(path):
        return
    try:
        with open(path, "r", encoding="utf-8") as f:
            for raw_line in f:
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue
                if line.startswith("export "):
                    line = line[len("export "):].strip()
                if "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()
                if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
                    value = value[1:-1]
                if allow_override or key not in os.environ:
                    os.environ[key] = value
    except OSError as e:
        print(f"FATAL: Failed to load environment file {path}: {e}", file=sys.stderr)
        raise ConfigError(f"Failed to load environment file {path}: {e}", cause=e) from e


def load_env_if_present(force_reload: bool = False) -> None:
    """
    Load environment variables from PODRUN_ENV_FILE when set, else from ./.env.
    """
    global _ENV_LOADED
    if _ENV_LOADED and not force_reload:
        return

    custom = os.environ.get("PODRUN_ENV_FILE")
    _load_env_file(custom or ".env", allow_override=False)
    _ENV_LOADED = True


def _default_kubeconfig() -> str:
    # KUBECONFIG may hold a path list; the first entry wins
    env_value = os.environ.get("KUBECONFIG", "").strip()
    if env_value:
        return env_value.split(os.pathsep)[0]
    return DEFAULT_KUBECONFIG


class Settings(BaseModel):
    """
    podrun settings. Every field can come from the environment through its
    alias; CLI options override environment values.
    """
    model_config = ConfigDict(validate_assignment=True, populate_by_name=True, frozen=False)

    kubeconfig: str = Field(default_factory=_default_kubeconfig, alias="KUBECONFIG")
    in_cluster: bool = Field(default=False, alias="PODRUN_IN_CLUSTER")

    # Orchestrator default namespace
    namespace: str = Field(default="default", alias="PODRUN_NAMESPACE")

    # Pod layout
    image: str = Field(default="python:3.8", alias="PODRUN_IMAGE")
    interpreter: str = Field(default="python", alias="PODRUN_INTERPRETER")
    mount_path: str = Field(default="/scripts", alias="PODRUN_MOUNT_PATH")
    generate_name: str = Field(default="python-script-", alias="PODRUN_NAME_PREFIX")
    container_name: str = Field(default="python", alias="PODRUN_CONTAINER_NAME")
    volume_name: str = Field(default="script-volume", alias="PODRUN_VOLUME_NAME")

    # Lifecycle
    poll_interval: float = Field(default=5.0, alias="PODRUN_POLL_INTERVAL")
    log_chunk_size: int = Field(default=64 * 1024, alias="PODRUN_LOG_CHUNK_SIZE")
    cleanup: bool = Field(default=False, alias="PODRUN_CLEANUP")

    @field_validator('namespace', 'image', 'interpreter', 'generate_name',
                     'container_name', 'volume_name', 'kubeconfig', mode='before')
    def validate_not_empty_str(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Value cannot be empty or whitespace only")
        return v.strip()

    @field_validator('mount_path', mode='before')
    def validate_mount_path(cls, v):
        if not isinstance(v, str) or not v.strip().startswith("/"):
            raise ValueError("mount_path must be an absolute container path")
        v = v.strip()
        return v.rstrip("/") or "/"

    @field_validator('in_cluster', 'cleanup', mode='before')
    def coerce_bool(cls, v):
        if isinstance(v, bool):
            return v
        if not isinstance(v, str):
            raise ValueError("Expected string for boolean field")
        val = v.strip().lower()
        if val in ("true", "1", "yes", "y", "on"):
            return True
        if val in ("false", "0", "no", "n", "off", ""):
            return False
        raise ValueError(f"Invalid boolean value: {v}")

    @field_validator('poll_interval', mode='before')
    def coerce_float(cls, v):
        if isinstance(v, str):
            v = float(v.strip())
        if not isinstance(v, (int, float)) or not math.isfinite(v) or v <= 0:
            raise ValueError("poll_interval must be a positive, finite number of seconds")
        return float(v)

    @field_validator('log_chunk_size', mode='before')
    def coerce_int(cls, v):
        if isinstance(v, str):
            v = int(v.strip())
        if not isinstance(v, int) or v <= 0:
            raise ValueError("log_chunk_size must be a positive integer")
        return v

    @property
    def kubeconfig_path(self) -> Path:
        return Path(self.kubeconfig).expanduser()


_settings: Optional[Settings] = None

_ENV_ALIASES = {
    field.alias: name
    for name, field in Settings.model_fields.items()
    if field.alias
}


def _settings_from_env() -> Dict[str, Any]:
    values = {}
    for alias in _ENV_ALIASES:
        if alias in os.environ:
            values[alias] = os.environ[alias]
    if "KUBECONFIG" in values:
        values["KUBECONFIG"] = _default_kubeconfig()
    return values


def get_settings(reload: bool = False, **overrides: Any) -> Settings:
    """
    Retrieve settings with validation.

    Overrides use field names (e.g. namespace="jobs"); a None override keeps
    the environment/default value. Passing overrides always builds a fresh
    Settings object without replacing the cached one.
    """
    global _settings
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if _settings is not None and not reload and not overrides:
        return _settings

    load_env_if_present(force_reload=reload)
    values = _settings_from_env()
    for name, value in overrides.items():
        if name not in Settings.model_fields:
            raise ConfigError(f"Unknown setting: {name}")
        alias = Settings.model_fields[name].alias or name
        values[alias] = value

    try:
        built = Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid podrun settings: {e}", cause=e) from e

    if not overrides:
        _settings = built
    return built
