"""
Kubernetes API client construction.
"""

from pathlib import Path
from typing import Union
import yaml
from kubernetes import client, config

from podrun.core.errors import ConfigError
from podrun.core.logger import setup_logger

logger = setup_logger(__name__, include_location=True)


def load_core_api(kubeconfig: Union[str, Path], in_cluster: bool = False) -> client.CoreV1Api:
    """
    Build a CoreV1Api session from a kubeconfig file or the in-cluster
    service account.

    Args:
        kubeconfig: Path to the kubeconfig file (ignored when in_cluster)
        in_cluster: Use the pod's service-account configuration

    Returns:
        CoreV1Api bound to its own ApiClient

    Raises:
        ConfigError: If the configuration cannot be found or parsed
    """
    if in_cluster:
        try:
            configuration = client.Configuration()
            config.load_incluster_config(client_configuration=configuration)
        except config.ConfigException as e:
            raise ConfigError(f"Failed to load in-cluster configuration: {e}", cause=e) from e
        logger.debug("Loaded in-cluster Kubernetes configuration")
        return client.CoreV1Api(client.ApiClient(configuration))

    path = Path(kubeconfig).expanduser()
    if not path.is_file():
        raise ConfigError(f"Kubeconfig file not found: {path}", kubeconfig=str(path))

    configuration = client.Configuration()
    try:
        config.load_kube_config(config_file=str(path), client_configuration=configuration)
    except (config.ConfigException, yaml.YAMLError, OSError, ValueError, TypeError, AttributeError) as e:
        # malformed files fail inside the loader with TypeError/AttributeError
        raise ConfigError(f"Failed to load kubeconfig {path}: {e}", cause=e, kubeconfig=str(path)) from e

    logger.debug(f"Loaded kubeconfig configuration from {path}")
    return client.CoreV1Api(client.ApiClient(configuration))
