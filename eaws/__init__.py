"""eaws - interactive helper for AWS ECS containers."""

from eaws.app import __version__

__all__ = ["__version__"]
