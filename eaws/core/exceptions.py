"""Errors raised while resolving a container."""

from __future__ import annotations

from eaws.constants import ResolveStage


class ResolveError(Exception):
    """Base class for resolution failures.

    Parameters
    ----------
    stage : ResolveStage
        Stage at which resolution stopped
    message : str
        Human readable description
    """

    soft = False

    def __init__(self, stage: ResolveStage, message: str) -> None:
        super().__init__(message)
        self.stage = stage


class NoneFoundError(ResolveError):
    """A stage produced no candidates. Reported as a warning, not a failure."""

    soft = True

    NONE_FOUND_MESSAGES = {
        ResolveStage.CLUSTER: "No clusters found",
        ResolveStage.SERVICE: "No services found in this cluster",
        ResolveStage.TASK: "No tasks found for this service",
        ResolveStage.CONTAINER: "No containers found in this task",
    }

    def __init__(self, stage: ResolveStage) -> None:
        super().__init__(
            stage, self.NONE_FOUND_MESSAGES.get(stage, f"No {stage.value} found")
        )


class SelectionCancelledError(ResolveError):
    """The user dismissed an interactive prompt."""

    soft = True

    def __init__(self, stage: ResolveStage | None = None, label: str = "") -> None:
        if stage is None:
            message = "Selection cancelled"
        else:
            message = f"{stage.value.capitalize()} selection cancelled"
        super().__init__(stage, message)
        self.label = label


class MissingFieldError(ResolveError):
    """An API response lacked a field required to continue.

    Parameters
    ----------
    stage : ResolveStage
        Stage whose response was incomplete
    field : str
        Name of the missing field
    message : str | None
        Full message, when "No <field> found for <stage>" does not read well
    """

    def __init__(
        self, stage: ResolveStage, field: str, message: str | None = None
    ) -> None:
        super().__init__(stage, message or f"No {field} found for {stage.value}")
        self.field = field
