"""Subprocess-backed implementation of the ProcessRunner protocol."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Mapping, Sequence

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Run external tools with the standard library ``subprocess`` module."""

    def which(self, program: str) -> str | None:
        return shutil.which(program)

    def run(
        self, args: Sequence[str], env: Mapping[str, str] | None = None
    ) -> subprocess.CompletedProcess:
        """Run a command to completion and capture its output.

        Parameters
        ----------
        args : Sequence[str]
            Program and arguments
        env : Mapping[str, str] | None
            Extra environment variables layered over the current environment

        Returns
        -------
        subprocess.CompletedProcess
            Completed process with text stdout and stderr
        """
        logger.debug("Running %s", " ".join(args))
        return subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            check=False,
            env=self._merged_env(env),
        )

    def run_interactive(
        self, args: Sequence[str], env: Mapping[str, str] | None = None
    ) -> int:
        """Run a command wired to the caller's standard streams.

        Parameters
        ----------
        args : Sequence[str]
            Program and arguments
        env : Mapping[str, str] | None
            Extra environment variables layered over the current environment

        Returns
        -------
        int
            Exit code of the child process
        """
        logger.debug("Running interactively %s", " ".join(args))
        completed = subprocess.run(list(args), check=False, env=self._merged_env(env))
        return completed.returncode

    def _merged_env(self, env: Mapping[str, str] | None) -> dict[str, str] | None:
        if not env:
            return None
        merged = dict(os.environ)
        merged.update(env)
        return merged
