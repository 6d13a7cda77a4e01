"""Value types passed between the resolution stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ContainerDescriptor:
    """A container inside a task.

    Attributes
    ----------
    name : str
        Container name from the task definition
    runtime_id : str
        Docker container id on the host instance, empty when ECS omits it
    """

    name: str
    runtime_id: str = ""


@dataclass(frozen=True)
class TaskDetail:
    """Subset of ``describe_tasks`` output needed to reach a container."""

    task_arn: str
    container_instance_arn: str | None
    containers: list[ContainerDescriptor] = field(default_factory=list)


@dataclass(frozen=True)
class ResolvedContainer:
    """Fully resolved target of a remote session.

    Attributes
    ----------
    cluster : str
        Cluster ARN
    service : str
        Service ARN
    task_arn : str
        Task ARN
    container : ContainerDescriptor
        Selected container, always with a non-empty runtime id
    instance_id : str
        EC2 instance id hosting the task
    """

    cluster: str
    service: str
    task_arn: str
    container: ContainerDescriptor
    instance_id: str


@dataclass(frozen=True)
class CallerIdentity:
    """Identity returned by STS ``get_caller_identity``."""

    account: str
    arn: str
    user_id: str

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> CallerIdentity:
        return cls(
            account=response.get("Account", ""),
            arn=response.get("Arn", ""),
            user_id=response.get("UserId", ""),
        )


@dataclass
class VerifiedSession:
    """Credentials proven live against STS.

    Every API client of a command is created from ``session`` so the profile
    never has to be exported into the process environment.

    Attributes
    ----------
    session : Any
        boto3 Session holding the resolved credentials
    profile : str | None
        Profile name the session was created with, if any
    region : str
        Region API clients are created in
    identity : CallerIdentity
        Caller identity reported by STS
    """

    session: Any
    profile: str | None
    region: str
    identity: CallerIdentity

    def client(self, service_name: str) -> Any:
        """Create a boto3 client for ``service_name`` in the session region."""
        return self.session.client(service_name, region_name=self.region)
