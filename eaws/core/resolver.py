"""Cascading resolution of a running container.

The resolver walks cluster -> service -> task -> container -> host instance.
Each stage lists candidates, stops when there are none, picks the only
candidate without asking, and otherwise asks the chooser. The full identifier
of the selection, never its display name, is passed on to the next stage.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from eaws.console import StatusConsole, highlight
from eaws.constants import ResolveStage
from eaws.core.exceptions import (
    MissingFieldError,
    NoneFoundError,
    SelectionCancelledError,
)
from eaws.core.interfaces import Chooser
from eaws.core.models import ContainerDescriptor, ResolvedContainer
from eaws.providers.aws.utils import resource_name, resource_names

logger = logging.getLogger(__name__)

T = TypeVar("T")

STAGE_LABELS = {
    ResolveStage.CLUSTER: "Select cluster",
    ResolveStage.SERVICE: "Select service",
    ResolveStage.TASK: "Select task",
    ResolveStage.CONTAINER: "Select container",
}


class ContainerResolver:
    """Resolve a container and its host instance, one stage at a time.

    Parameters
    ----------
    ecs_manager : Any
        Object providing the ECS discovery calls (see ``ECSManager``)
    chooser : Chooser
        Interactive chooser used when a stage has several candidates
    console : StatusConsole | None
        Console receiving progress lines
    """

    def __init__(
        self,
        ecs_manager: Any,
        chooser: Chooser,
        console: StatusConsole | None = None,
    ) -> None:
        self.ecs_manager = ecs_manager
        self.chooser = chooser
        self.console = console or StatusConsole()

    def _timed(self, label: str, func: Callable[..., T], *args: Any) -> T:
        started = time.monotonic()
        result = func(*args)
        self.console.timing(label, time.monotonic() - started)
        return result

    def select(
        self,
        stage: ResolveStage,
        candidates: Sequence[T],
        display: Callable[[T], str] = resource_name,  # type: ignore[assignment]
    ) -> T:
        """Select one candidate for a stage.

        Parameters
        ----------
        stage : ResolveStage
            Stage being resolved
        candidates : Sequence[T]
            Candidates returned by the discovery call
        display : Callable[[T], str]
            Maps a candidate to the name shown to the user

        Returns
        -------
        T
            The selected candidate itself (not its display name)

        Raises
        ------
        NoneFoundError
            If there are no candidates
        SelectionCancelledError
            If the user dismisses the prompt
        """
        if not candidates:
            raise NoneFoundError(stage)

        names = [display(candidate) for candidate in candidates]

        if len(candidates) == 1:
            self.console.info(f"Using {stage.value}: {highlight(names[0])}")
            return candidates[0]

        try:
            chosen = self.chooser.choose(STAGE_LABELS[stage], names)
        except SelectionCancelledError as e:
            raise SelectionCancelledError(stage, label=STAGE_LABELS[stage]) from e

        selected = candidates[names.index(chosen)]
        logger.debug("Selected %s", chosen, extra={"stage": stage})
        self.console.info(f"Selected {stage.value}: {highlight(chosen)}")
        return selected

    def select_cluster(self) -> str:
        clusters = self._timed("List clusters", self.ecs_manager.list_clusters)
        return self.select(ResolveStage.CLUSTER, clusters)

    def list_service_names(self) -> tuple[str, list[str]]:
        """Select a cluster and return the display names of its services.

        Returns
        -------
        tuple[str, list[str]]
            Selected cluster ARN and the service names in it

        Raises
        ------
        NoneFoundError
            If there are no clusters or the cluster has no services
        """
        cluster = self.select_cluster()
        services = self._timed(
            "List services", self.ecs_manager.list_services, cluster
        )
        if not services:
            raise NoneFoundError(ResolveStage.SERVICE)
        return cluster, resource_names(services)

    def resolve_container(self) -> ResolvedContainer:
        """Walk every stage and return the container to connect to.

        Returns
        -------
        ResolvedContainer
            Cluster, service, task, container and host instance id

        Raises
        ------
        NoneFoundError
            If any stage has no candidates
        SelectionCancelledError
            If the user dismisses a prompt
        MissingFieldError
            If a describe call lacks the task, container instance, runtime id
            or EC2 instance id
        ProviderAPIError
            If any ECS call fails
        """
        cluster = self.select_cluster()

        services = self._timed(
            "List services", self.ecs_manager.list_services, cluster
        )
        service = self.select(ResolveStage.SERVICE, services)

        tasks = self._timed(
            "List tasks", self.ecs_manager.list_tasks, cluster, service
        )
        task_arn = self.select(ResolveStage.TASK, tasks)

        detail = self._timed(
            "Describe task", self.ecs_manager.describe_task, cluster, task_arn
        )
        if detail is None:
            raise MissingFieldError(
                ResolveStage.TASK, "task details", "No task details found"
            )
        if not detail.container_instance_arn:
            raise MissingFieldError(ResolveStage.TASK, "container instance")

        container: ContainerDescriptor = self.select(
            ResolveStage.CONTAINER,
            detail.containers,
            display=lambda c: c.name,
        )
        if not container.runtime_id:
            raise MissingFieldError(ResolveStage.CONTAINER, "runtime ID")

        instance_id = self._timed(
            "Describe container instance",
            self.ecs_manager.describe_container_instance,
            cluster,
            detail.container_instance_arn,
        )
        if not instance_id:
            raise MissingFieldError(
                ResolveStage.INSTANCE, "EC2 instance ID", "No EC2 instance ID found"
            )

        self.console.info(f"EC2 Instance: {highlight(instance_id)}")

        return ResolvedContainer(
            cluster=cluster,
            service=service,
            task_arn=task_arn,
            container=container,
            instance_id=instance_id,
        )
