"""Global constants for eaws.

This module contains application-wide constants that are used across multiple
components. AWS-specific values live in ``eaws.providers.aws.constants``.
"""

from enum import Enum

DEFAULT_REGION = "us-east-1"
"""Fallback region for API clients.

Used when no region is given on the command line, in the configuration file,
or through the boto3 default resolution chain (environment, shared config).
"""

DEFAULT_SHELL = "sh"
"""Shell started inside the container when a session is bootstrapped.

``sh`` is present in practically every container image, unlike ``bash``.
"""

DEFAULT_CONFIG_PATH = "~/.config/eaws/eaws.yaml"
"""Location of the optional YAML configuration file.

Overridden by the ``EAWS_CONFIG`` environment variable.
"""

EXIT_SUCCESS = 0
"""Exit code indicating successful program completion.

Also used when a resolution stage legitimately finds nothing to select
or the user cancels a prompt.
"""

EXIT_ERROR = 1
"""Exit code indicating an authentication, API or session error."""

EXIT_CONFIG_ERROR = 2
"""Exit code indicating a configuration error.

Used when the configuration file cannot be parsed or resolved.
"""


class ResolveStage(str, Enum):
    """Stages of the container resolution pipeline, in order."""

    CLUSTER = "cluster"
    SERVICE = "service"
    TASK = "task"
    CONTAINER = "container"
    INSTANCE = "instance"
