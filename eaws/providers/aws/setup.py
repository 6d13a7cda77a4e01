"""Remediation advice printed after a credential failure."""

from __future__ import annotations

import logging
import os
import socket
from collections.abc import Sequence
from pathlib import Path

from rich.markup import escape

from eaws.console import StatusConsole
from eaws.providers.aws.constants import (
    ASSUME_INSTALL_PATHS,
    AWS_CLI_INSTALL_PATHS,
    CORP_HOSTNAME_MARKERS,
    SSO_CONFIG_DIR,
)
from eaws.providers.aws.errors import AWSAuthError

logger = logging.getLogger(__name__)


class SetupAdvisor:
    """Print setup instructions tailored to the local environment.

    The advice depends only on two detections: whether this looks like a
    corporate machine and whether the granted ``assume`` helper is
    installed. Nothing here changes control flow.

    Parameters
    ----------
    console : StatusConsole | None
        Console the advice is printed to
    home : Path | None
        Home directory (default: ``Path.home()``)
    hostname : str | None
        Host name (default: ``socket.gethostname()``)
    assume_paths : Sequence[str]
        Install locations checked for the ``assume`` helper
    aws_cli_paths : Sequence[str]
        Install locations checked for the AWS CLI
    """

    def __init__(
        self,
        console: StatusConsole | None = None,
        home: Path | None = None,
        hostname: str | None = None,
        assume_paths: Sequence[str] = ASSUME_INSTALL_PATHS,
        aws_cli_paths: Sequence[str] = AWS_CLI_INSTALL_PATHS,
    ) -> None:
        self.console = console or StatusConsole()
        self.home = home
        self.hostname = hostname
        self.assume_paths = assume_paths
        self.aws_cli_paths = aws_cli_paths

    def _home(self) -> Path:
        return self.home if self.home is not None else Path.home()

    def _hostname(self) -> str:
        if self.hostname is not None:
            return self.hostname
        try:
            return socket.gethostname()
        except OSError as e:
            logger.debug("Could not determine hostname: %s", e)
            return ""

    def is_corp_environment(self) -> bool:
        """Return True for machines with SSO config or a corporate hostname."""
        if (self._home() / SSO_CONFIG_DIR).exists():
            return True

        hostname = self._hostname()
        return any(marker in hostname for marker in CORP_HOSTNAME_MARKERS)

    def is_assume_available(self) -> bool:
        return any(Path(path).exists() for path in self.assume_paths)

    def detect_aws_issue(self) -> str:
        """Return a one-line diagnosis of the most likely setup problem.

        Returns
        -------
        str
            Diagnosis message
        """
        if not any(Path(path).exists() for path in self.aws_cli_paths):
            return (
                "AWS CLI is not installed. Please install it first: "
                "https://docs.aws.amazon.com/cli/latest/userguide/install-cliv2.html"
            )

        aws_dir = self._home() / ".aws"
        if not (aws_dir / "credentials").exists() and not (aws_dir / "config").exists():
            return "No AWS configuration found. Run 'aws configure' to set up your credentials."

        if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
            return "No AWS profile or access key set. Set AWS_PROFILE or run 'aws configure'."

        return (
            "AWS credentials may be expired or invalid. "
            "Try 'aws sts get-caller-identity' to verify."
        )

    def advise(self, error: AWSAuthError | None = None) -> None:
        """Print the three advice blocks.

        Parameters
        ----------
        error : AWSAuthError | None
            Classified failure that triggered the advice
        """
        if error is not None:
            logger.info("Printing setup advice for %s", error.kind.value)

        self.console.heading("AWS Setup Instructions:")
        self.console.line(f"  {escape(self.detect_aws_issue())}")
        self.print_environment_instructions()
        self.print_troubleshooting()
        self.print_quick_fixes()

    def _block(self, title: str, items: Sequence[str]) -> None:
        self.console.line(f"  [blue]•[/blue] {title}")
        for item in items:
            self.console.line(f"    • {escape(item)}")

    def print_environment_instructions(self) -> None:
        self.console.heading("[green]Environment-specific setup:[/green]")

        if self.is_corp_environment():
            self._block(
                "Corporate environment detected",
                [
                    "Use AWS SSO: aws sso login --profile <profile-name>",
                    "Use granted: assume <profile-name>",
                    "Contact your AWS administrator for SSO setup",
                ],
            )
            return

        if self.is_assume_available():
            self._block(
                "Granted is available:",
                [
                    "List profiles: assume",
                    "Use profile: assume <profile-name>",
                    "Or use with eaws: eaws --profile <profile-name> [command]",
                ],
            )
        else:
            self._block(
                "Standard AWS setup:",
                [
                    "Configure credentials: aws configure",
                    "Use named profile: aws configure --profile <profile-name>",
                    "Set profile: export AWS_PROFILE=<profile-name>",
                ],
            )

    def print_troubleshooting(self) -> None:
        self.console.heading("[green]Troubleshooting:[/green]")
        self._block(
            "Check AWS configuration:",
            [
                "aws sts get-caller-identity",
                "aws configure list",
                "echo $AWS_PROFILE",
            ],
        )
        self._block("Check AWS SSO (if using SSO):", ["aws sso login", "aws configure sso"])
        self._block("Check credentials location:", ["~/.aws/credentials", "~/.aws/config"])

    def print_quick_fixes(self) -> None:
        self.console.heading("[green]Quick fixes:[/green]")
        self._block(
            "For immediate access:",
            [
                "Set temporary credentials:",
                "  export AWS_ACCESS_KEY_ID=your_access_key",
                "  export AWS_SECRET_ACCESS_KEY=your_secret_key",
                "  export AWS_DEFAULT_REGION=us-east-1",
            ],
        )
        self._block(
            "For development:",
            [
                "Use LocalStack for local development",
                "Use AWS CLI profiles for different environments",
            ],
        )
        self._block(
            "For CI/CD:",
            [
                "Use IAM roles for EC2/ECS/Lambda",
                "Use environment variables in CI systems",
            ],
        )
