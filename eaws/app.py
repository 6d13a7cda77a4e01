"""Command implementations behind the eaws CLI."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from rich.markup import escape

from eaws.console import StatusConsole, highlight
from eaws.core.config import ConfigLoader
from eaws.core.exceptions import ResolveError
from eaws.core.interfaces import Chooser, ProcessRunner
from eaws.core.models import VerifiedSession
from eaws.core.prompt import QuestionaryChooser
from eaws.core.resolver import ContainerResolver
from eaws.core.runner import SubprocessRunner
from eaws.providers.aws.credentials import CredentialVerifier, check_profile
from eaws.providers.aws.ecs import ECSManager
from eaws.providers.aws.setup import SetupAdvisor
from eaws.services.session import SessionBootstrapper

logger = logging.getLogger(__name__)

__version__ = "0.2.0"


class Eaws:
    """Simple AWS CLI for ECS containers.

    Parameters
    ----------
    profile : str | None
        AWS profile to use
    verbose : bool
        Print step timings
    region : str | None
        AWS region override
    chooser : Chooser | None
        Interactive chooser (default: questionary prompt)
    runner : ProcessRunner | None
        External process runner (default: subprocess)
    session_factory : Callable[..., Any] | None
        boto3 session factory (default: ``boto3.Session``)
    ecs_manager_factory : Callable[[VerifiedSession], Any] | None
        Factory creating the ECS adapter from a verified session
    console : StatusConsole | None
        Console for status lines
    config_loader : ConfigLoader | None
        Configuration loader
    """

    def __init__(
        self,
        profile: str | None = None,
        verbose: bool = False,
        region: str | None = None,
        chooser: Chooser | None = None,
        runner: ProcessRunner | None = None,
        session_factory: Callable[..., Any] | None = None,
        ecs_manager_factory: Callable[[VerifiedSession], Any] | None = None,
        console: StatusConsole | None = None,
        config_loader: ConfigLoader | None = None,
    ) -> None:
        self._config_loader = config_loader or ConfigLoader()
        self._settings = self._config_loader.get_settings(
            self._config_loader.load_config(),
            overrides={"profile": profile, "region": region},
        )
        self._verbose = bool(verbose)
        self._console = console or StatusConsole(verbose=self._verbose)
        self._chooser = chooser or QuestionaryChooser()
        self._runner = runner or SubprocessRunner()
        self._session_factory = session_factory
        self._ecs_manager_factory = ecs_manager_factory or (
            lambda session: ECSManager(session=session)
        )

        self.container = ContainerCommands(self)
        self.logs = LogsCommands(self)

    def _check_profile(self) -> VerifiedSession:
        started = time.monotonic()
        verifier = CredentialVerifier(
            runner=self._runner,
            session_factory=self._session_factory,
            console=self._console,
        )
        session = check_profile(
            verifier,
            self._settings["profile"],
            self._settings["region"],
            advisor=SetupAdvisor(console=self._console),
        )
        self._console.timing("AWS profile check", time.monotonic() - started)
        return session

    def _resolver(self, session: VerifiedSession) -> ContainerResolver:
        return ContainerResolver(
            ecs_manager=self._ecs_manager_factory(session),
            chooser=self._chooser,
            console=self._console,
        )

    def _report_soft_error(self, error: ResolveError) -> None:
        logger.info("Resolution stopped: %s", error, extra={"stage": error.stage})
        self._console.warning(escape(str(error)))

    def version(self) -> str:
        """Print the eaws version."""
        return __version__


class ContainerCommands:
    """Helper commands to manage ECS containers."""

    def __init__(self, app: Eaws) -> None:
        self._app = app

    def connect(self) -> None:
        """Connect to a container using AWS Systems Manager Session Manager."""
        app = self._app
        started = time.monotonic()
        session = app._check_profile()

        try:
            target = app._resolver(session).resolve_container()
        except ResolveError as e:
            if not e.soft:
                raise
            app._report_soft_error(e)
            return None

        bootstrapper = SessionBootstrapper(
            runner=app._runner,
            console=app._console,
            shell=app._settings["shell"],
            document_name=app._settings["document_name"],
        )
        session_started = time.monotonic()
        bootstrapper.start_session(
            target.instance_id, target.container.runtime_id, session=session
        )
        app._console.timing("SSM session completed", time.monotonic() - session_started)
        app._console.timing("Total execution time", time.monotonic() - started)
        return None

    def list(self) -> None:
        """List the services of an interactively selected cluster."""
        app = self._app
        session = app._check_profile()

        try:
            _, service_names = app._resolver(session).list_service_names()
        except ResolveError as e:
            if not e.soft:
                raise
            app._report_soft_error(e)
            return None

        app._console.heading("[green]Services in cluster:[/green]")
        for name in service_names:
            app._console.line(f"  • {highlight(name)}")
        return None


class LogsCommands:
    """Show logs from CloudWatch."""

    def __init__(self, app: Eaws) -> None:
        self._app = app

    def query(self, project: str | None = None) -> None:
        """Use CloudWatch Insights to query logs."""
        self._app._check_profile()
        self._app._console.info("CloudWatch Insights query functionality")
        self._app._console.warning("This command is not yet implemented")
        return None

    def view(self, project: str | None = None) -> None:
        """Show the log stream of a container or service."""
        self._app._check_profile()
        self._app._console.info("Log stream viewing functionality")
        self._app._console.warning("This command is not yet implemented")
        return None
