"""Core eaws functionality."""

from __future__ import annotations

from eaws.core.exceptions import (
    MissingFieldError,
    NoneFoundError,
    ResolveError,
    SelectionCancelledError,
)
from eaws.core.interfaces import Chooser, ProcessRunner
from eaws.core.models import (
    CallerIdentity,
    ContainerDescriptor,
    ResolvedContainer,
    TaskDetail,
    VerifiedSession,
)

__all__ = [
    "Chooser",
    "ProcessRunner",
    "ResolveError",
    "NoneFoundError",
    "SelectionCancelledError",
    "MissingFieldError",
    "CallerIdentity",
    "ContainerDescriptor",
    "ResolvedContainer",
    "TaskDetail",
    "VerifiedSession",
]
