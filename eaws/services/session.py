"""Interactive shell sessions into ECS containers through SSM.

The SSM API cannot drive an interactive terminal by itself, so the session is
delegated to ``aws ssm start-session`` (and its session-manager plugin). The
child process inherits this process's stdin, stdout and stderr.

Examples
--------
>>> bootstrapper = SessionBootstrapper()
>>> bootstrapper.build_shell_command("0123456789ab")
'sudo docker exec -ti 0123456789ab sh'
"""

from __future__ import annotations

import logging

from eaws.console import StatusConsole, code
from eaws.constants import DEFAULT_SHELL
from eaws.core.interfaces import ProcessRunner
from eaws.core.models import VerifiedSession
from eaws.core.runner import SubprocessRunner
from eaws.providers.aws.constants import DOCKER_EXEC_TEMPLATE, SESSION_DOCUMENT_NAME

logger = logging.getLogger(__name__)

AWS_CLI = "aws"


class SessionError(RuntimeError):
    """The session broker could not be started or exited with an error."""


class SessionBootstrapper:
    """Start a remote shell inside a container on its host instance.

    Parameters
    ----------
    runner : ProcessRunner | None
        Runner used to spawn the AWS CLI
    console : StatusConsole | None
        Console receiving progress lines
    shell : str
        Shell started inside the container
    document_name : str
        SSM document used for the session
    """

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        console: StatusConsole | None = None,
        shell: str = DEFAULT_SHELL,
        document_name: str = SESSION_DOCUMENT_NAME,
    ) -> None:
        self.runner = runner or SubprocessRunner()
        self.console = console or StatusConsole()
        self.shell = shell
        self.document_name = document_name

    def build_shell_command(self, runtime_id: str) -> str:
        """Return the host command attaching a shell to the container.

        Parameters
        ----------
        runtime_id : str
            Docker container id reported by ECS

        Returns
        -------
        str
            Command run on the host instance

        Raises
        ------
        ValueError
            If ``runtime_id`` is empty
        """
        if not runtime_id:
            raise ValueError("Container runtime ID must not be empty")
        return DOCKER_EXEC_TEMPLATE.format(runtime_id=runtime_id, shell=self.shell)

    def build_session_args(self, instance_id: str, command: str) -> list[str]:
        return [
            AWS_CLI,
            "ssm",
            "start-session",
            "--target",
            instance_id,
            "--document-name",
            self.document_name,
            "--parameters",
            f"command={command}",
        ]

    def session_env(self, session: VerifiedSession | None) -> dict[str, str]:
        """Environment handed to the AWS CLI so it uses the verified profile.

        Only the child process sees these variables.
        """
        if session is None:
            return {}
        env = {"AWS_REGION": session.region, "AWS_DEFAULT_REGION": session.region}
        if session.profile:
            env["AWS_PROFILE"] = session.profile
        return env

    def start_session(
        self,
        instance_id: str,
        runtime_id: str,
        session: VerifiedSession | None = None,
    ) -> None:
        """Open an interactive shell in the container.

        Blocks until the remote shell exits.

        Parameters
        ----------
        instance_id : str
            EC2 instance id hosting the container
        runtime_id : str
            Docker container id
        session : VerifiedSession | None
            Verified session whose profile and region the AWS CLI should use

        Raises
        ------
        SessionError
            If the AWS CLI is missing, cannot be spawned, or exits nonzero
        """
        if not self.runner.which(AWS_CLI):
            raise SessionError(
                "AWS CLI not installed locally.\n\n"
                "Interactive sessions are started with 'aws ssm start-session'.\n"
                "Install the AWS CLI and the Session Manager plugin:\n\n"
                "  https://docs.aws.amazon.com/cli/latest/userguide/install-cliv2.html\n"
                "  https://docs.aws.amazon.com/systems-manager/latest/userguide/"
                "session-manager-working-with-install-plugin.html"
            )

        command = self.build_shell_command(runtime_id)
        args = self.build_session_args(instance_id, command)

        self.console.info(f"Starting session with command: {code(command)}")
        self.console.info("🚀 Connecting to container...")

        try:
            exit_code = self.runner.run_interactive(args, env=self.session_env(session))
        except OSError as e:
            raise SessionError(f"failed to start SSM session: {e}") from e

        if exit_code != 0:
            raise SessionError(
                f"failed to start SSM session: aws exited with status {exit_code}"
            )

        logger.debug("SSM session to %s closed", instance_id)
