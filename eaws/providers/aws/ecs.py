"""ECS discovery calls used by the container resolver."""

from __future__ import annotations

import logging
from typing import Any

from eaws.core.models import ContainerDescriptor, TaskDetail, VerifiedSession
from eaws.providers.aws.errors import handle_aws_errors
from eaws.providers.aws.utils import first_or_none, resource_name

logger = logging.getLogger(__name__)


class ECSManager:
    """Thin wrapper over the boto3 ECS client.

    List calls follow pagination so that large accounts return every
    resource. Every call wraps botocore errors in ``ProviderAPIError`` with
    the name of the failing operation.

    Parameters
    ----------
    session : VerifiedSession | None
        Verified session the ECS client is created from
    ecs_client : Any
        Pre-built ECS client, used instead of ``session`` when given
    """

    def __init__(
        self,
        session: VerifiedSession | None = None,
        ecs_client: Any = None,
    ) -> None:
        if ecs_client is None:
            if session is None:
                raise ValueError("ECSManager requires a session or an ECS client")
            ecs_client = session.client("ecs")
        self.ecs_client = ecs_client

    def _paginate(self, operation: str, result_key: str, **kwargs: Any) -> list[str]:
        paginator = self.ecs_client.get_paginator(operation)
        items: list[str] = []
        for page in paginator.paginate(**kwargs):
            items.extend(page.get(result_key, []))
        return items

    @handle_aws_errors("list clusters")
    def list_clusters(self) -> list[str]:
        """Return the ARNs of all clusters in the region."""
        return self._paginate("list_clusters", "clusterArns")

    @handle_aws_errors("list services")
    def list_services(self, cluster: str) -> list[str]:
        """Return the ARNs of all services in ``cluster``."""
        return self._paginate("list_services", "serviceArns", cluster=cluster)

    @handle_aws_errors("list tasks")
    def list_tasks(self, cluster: str, service: str) -> list[str]:
        """Return the ARNs of the running tasks of ``service``.

        Parameters
        ----------
        cluster : str
            Cluster name or ARN
        service : str
            Service name or ARN; ARNs are reduced to the service name

        Returns
        -------
        list[str]
            Task ARNs
        """
        return self._paginate(
            "list_tasks",
            "taskArns",
            cluster=cluster,
            serviceName=resource_name(service),
        )

    @handle_aws_errors("describe task")
    def describe_task(self, cluster: str, task_arn: str) -> TaskDetail | None:
        """Describe a single task.

        Parameters
        ----------
        cluster : str
            Cluster name or ARN
        task_arn : str
            Task ARN

        Returns
        -------
        TaskDetail | None
            Task detail, or None if ECS returned no task
        """
        response = self.ecs_client.describe_tasks(cluster=cluster, tasks=[task_arn])
        task = first_or_none(response.get("tasks"))
        if task is None:
            logger.debug("describe_tasks returned no task for %s", task_arn)
            return None

        containers = [
            ContainerDescriptor(
                name=container.get("name", ""),
                runtime_id=container.get("runtimeId") or "",
            )
            for container in task.get("containers", [])
        ]
        return TaskDetail(
            task_arn=task.get("taskArn", task_arn),
            container_instance_arn=task.get("containerInstanceArn"),
            containers=containers,
        )

    @handle_aws_errors("describe container instance")
    def describe_container_instance(
        self, cluster: str, container_instance_arn: str
    ) -> str | None:
        """Return the EC2 instance id behind a container instance.

        Parameters
        ----------
        cluster : str
            Cluster name or ARN
        container_instance_arn : str
            Container instance ARN from the task detail

        Returns
        -------
        str | None
            EC2 instance id, or None if absent from the response
        """
        response = self.ecs_client.describe_container_instances(
            cluster=cluster, containerInstances=[container_instance_arn]
        )
        instance = first_or_none(response.get("containerInstances"))
        if instance is None:
            return None
        return instance.get("ec2InstanceId") or None
