"""Command line interface for eaws."""

from __future__ import annotations

from eaws.cli.main import EawsCLI

__all__ = ["EawsCLI"]
