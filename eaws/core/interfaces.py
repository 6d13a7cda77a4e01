"""Protocols for the capabilities injected into resolution and bootstrap."""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class Chooser(Protocol):
    """Interactive single-choice selection."""

    def choose(self, label: str, candidates: Sequence[str]) -> str:
        """Return one of ``candidates``.

        Raises
        ------
        SelectionCancelledError
            If the user dismisses the prompt
        """
        ...


@runtime_checkable
class ProcessRunner(Protocol):
    """Runs external programs such as ``assume`` and ``aws``."""

    def which(self, program: str) -> str | None:
        """Return the full path of ``program`` on PATH, or None."""
        ...

    def run(
        self, args: Sequence[str], env: Mapping[str, str] | None = None
    ) -> subprocess.CompletedProcess:
        """Run to completion, capturing stdout and stderr as text."""
        ...

    def run_interactive(
        self, args: Sequence[str], env: Mapping[str, str] | None = None
    ) -> int:
        """Run attached to the caller's stdin, stdout and stderr.

        Returns
        -------
        int
            Exit code of the child process
        """
        ...
