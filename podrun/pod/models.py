"""
Value types passed between the run phases.
"""

from typing import Optional, Tuple
from kubernetes import client
from pydantic import BaseModel, ConfigDict, Field, field_validator

from podrun.core.status import TaskStatus


class VolumeMount(BaseModel):
    """A hostPath directory exposed inside the container."""
    model_config = ConfigDict(frozen=True)

    name: str
    host_path: str
    container_path: str


class TaskSpec(BaseModel):
    """Single-container, never-restarting pod description."""
    model_config = ConfigDict(frozen=True)

    image: str
    command: Tuple[str, ...]
    mounts: Tuple[VolumeMount, ...] = Field(min_length=1)
    generate_name: str = "python-script-"
    container_name: str = "python"
    restart_policy: str = "Never"

    @field_validator('restart_policy')
    def validate_restart_policy(cls, v):
        if v != "Never":
            raise ValueError("Ephemeral tasks must use restart_policy 'Never'")
        return v

    def to_pod(self) -> client.V1Pod:
        """Render as a V1Pod body for create_namespaced_pod."""
        container = client.V1Container(
            name=self.container_name,
            image=self.image,
            command=list(self.command),
            volume_mounts=[
                client.V1VolumeMount(name=m.name, mount_path=m.container_path)
                for m in self.mounts
            ],
        )
        volumes = [
            client.V1Volume(
                name=m.name,
                host_path=client.V1HostPathVolumeSource(path=m.host_path),
            )
            for m in self.mounts
        ]
        return client.V1Pod(
            api_version='v1',
            kind='Pod',
            metadata=client.V1ObjectMeta(
                generate_name=self.generate_name,
                labels={
                    'app': 'podrun',
                    'component': 'script-task',
                },
            ),
            spec=client.V1PodSpec(
                containers=[container],
                volumes=volumes,
                restart_policy=self.restart_policy,
            ),
        )


class TaskHandle(BaseModel):
    """Orchestrator-assigned identity of a created pod."""
    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


class Completion(BaseModel):
    """Terminal observation of a pod."""
    model_config = ConfigDict(frozen=True)

    status: TaskStatus
    exit_code: Optional[int] = None
    reason: Optional[str] = None


class RunResult(BaseModel):
    """Outcome of one run: the handle, its terminal status and the full output."""
    model_config = ConfigDict(frozen=True)

    handle: TaskHandle
    status: TaskStatus
    output: str
    exit_code: Optional[int] = None
    reason: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == TaskStatus.SUCCEEDED


__all__ = ["VolumeMount", "TaskSpec", "TaskHandle", "Completion", "RunResult"]
