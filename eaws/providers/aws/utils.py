"""AWS-specific utility functions for eaws."""

from __future__ import annotations

from typing import Any


def resource_name(arn: str) -> str:
    """Return the display name of an ECS resource ARN.

    The display name is the trailing ``/``-delimited segment, so cluster,
    service and task ARNs (which embed the cluster name) all reduce to the
    name or id of the resource itself. Applying it to a name is a no-op.

    Parameters
    ----------
    arn : str
        Full resource identifier, e.g.
        ``arn:aws:ecs:us-east-1:123456789012:cluster/my-cluster``

    Returns
    -------
    str
        Trailing segment, e.g. ``my-cluster``
    """
    return arn.rsplit("/", 1)[-1]


def resource_names(arns: list[str]) -> list[str]:
    """Return display names for a list of ARNs, preserving order."""
    return [resource_name(arn) for arn in arns]


def first_or_none(items: list[dict[str, Any]] | None) -> dict[str, Any] | None:
    """Return the first element of a describe-call result list, or None."""
    if not items:
        return None
    return items[0]

