import sys
from unittest.mock import patch

import pytest
from botocore.exceptions import NoCredentialsError

from eaws.app import Eaws, __version__
from eaws.cli import main as cli_main
from eaws.cli.main import (
    handle_api_error,
    handle_auth_error,
    handle_resolve_error,
    handle_runtime_error,
    handle_session_error,
    handle_value_error,
    main,
    normalize_verbose_flag,
)
from eaws.constants import ResolveStage
from eaws.core.exceptions import MissingFieldError, NoneFoundError, SelectionCancelledError
from eaws.providers.aws.errors import AWSAuthError, AuthErrorKind
from eaws.providers.exceptions import ProviderAPIError
from eaws.services.session import SessionError
from tests.unit.fakes.fake_ecs_manager import FakeECSManager, single_path_manager
from tests.unit.fakes.fake_runner import FakeChooser, FakeRunner, recorded
from tests.unit.fakes.fake_session import RecordingFactory, fake_session


def make_app(console, manager, runner=None, session=None, **kwargs) -> Eaws:
    return Eaws(
        chooser=FakeChooser(),
        runner=runner or FakeRunner(available={"aws"}),
        session_factory=RecordingFactory(session or fake_session()),
        ecs_manager_factory=lambda verified: manager,
        console=console,
        **kwargs,
    )


class TestContainerConnect:
    def test_connect_starts_session_on_resolved_instance(self, console) -> None:
        runner = FakeRunner(available={"aws"})
        app = make_app(console, single_path_manager(), runner=runner, profile="dev")

        app.container.connect()

        assert len(runner.interactive_runs) == 1
        args, env = runner.interactive_runs[0]
        assert args[:5] == ["aws", "ssm", "start-session", "--target", "i-0123456789abcdef0"]
        assert args[-1] == "command=sudo docker exec -ti abc123 sh"
        assert env == {
            "AWS_REGION": "eu-west-1",
            "AWS_DEFAULT_REGION": "eu-west-1",
            "AWS_PROFILE": "dev",
        }

    def test_region_flag_reaches_session_env(self, console) -> None:
        runner = FakeRunner(available={"aws"})
        app = make_app(console, single_path_manager(), runner=runner, region="us-west-2")

        app.container.connect()

        _, env = runner.interactive_runs[0]
        assert env["AWS_REGION"] == "us-west-2"
        assert "AWS_PROFILE" not in env

    def test_configured_shell_is_used(self, console, write_config) -> None:
        write_config({"defaults": {"shell": "bash"}})
        runner = FakeRunner(available={"aws"})
        app = make_app(console, single_path_manager(), runner=runner)

        app.container.connect()

        args, _ = runner.interactive_runs[0]
        assert args[-1] == "command=sudo docker exec -ti abc123 bash"

    def test_no_clusters_is_a_warning(self, console) -> None:
        runner = FakeRunner(available={"aws"})
        app = make_app(console, FakeECSManager(), runner=runner)

        assert app.container.connect() is None

        assert runner.interactive_runs == []
        assert "No clusters found" in recorded(console)

    def test_cancelled_selection_is_a_warning(self, console) -> None:
        runner = FakeRunner(available={"aws"})
        app = make_app(console, single_path_manager(task_ids=["t1", "t2"]), runner=runner)
        app._chooser = FakeChooser(cancel=True)

        app.container.connect()

        assert runner.interactive_runs == []
        assert "Task selection cancelled" in recorded(console)

    def test_missing_runtime_id_propagates(self, console) -> None:
        from eaws.core.models import ContainerDescriptor

        runner = FakeRunner(available={"aws"})
        manager = single_path_manager(containers=[ContainerDescriptor(name="web")])
        app = make_app(console, manager, runner=runner)

        with pytest.raises(MissingFieldError):
            app.container.connect()

        assert runner.interactive_runs == []

    def test_credential_failure_stops_before_ecs(self, console) -> None:
        manager = single_path_manager()
        app = make_app(
            console, manager, session=fake_session(error=NoCredentialsError())
        )

        with pytest.raises(AWSAuthError) as exc_info:
            app.container.connect()

        assert exc_info.value.advised
        assert manager.calls == []
        assert "AWS Setup Instructions:" in recorded(console)


class TestContainerList:
    def test_lists_service_names(self, console) -> None:
        app = make_app(console, single_path_manager())

        app.container.list()

        output = recorded(console)
        assert "Services in cluster:" in output
        assert "• api" in output

    def test_empty_cluster_is_a_warning(self, console) -> None:
        manager = single_path_manager()
        manager.services = {}
        app = make_app(console, manager)

        app.container.list()

        assert "No services found in this cluster" in recorded(console)


class TestLogs:
    def test_query_not_implemented(self, console) -> None:
        app = make_app(console, FakeECSManager())

        app.logs.query(project="api")

        output = recorded(console)
        assert "CloudWatch Insights query functionality" in output
        assert "This command is not yet implemented" in output

    def test_view_not_implemented(self, console) -> None:
        app = make_app(console, FakeECSManager())

        app.logs.view()

        assert "Log stream viewing functionality" in recorded(console)


def test_version(console) -> None:
    assert make_app(console, FakeECSManager()).version() == __version__


def test_invalid_region_flag_raises_value_error(console) -> None:
    with pytest.raises(ValueError, match="Invalid region"):
        make_app(console, FakeECSManager(), region="nowhere")


class TestErrorHandlers:
    def test_soft_resolve_error_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            handle_resolve_error(NoneFoundError(ResolveStage.CLUSTER), debug_mode=False)
        assert exc_info.value.code == 0

    def test_cancel_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            handle_resolve_error(SelectionCancelledError(ResolveStage.TASK), False)
        assert exc_info.value.code == 0

    def test_hard_resolve_error_exits_one(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            handle_resolve_error(
                MissingFieldError(ResolveStage.CONTAINER, "runtime ID"), False
            )
        assert exc_info.value.code == 1
        assert "No runtime ID found for container" in capsys.readouterr().err

    def test_api_error_access_denied_hint(self, capsys) -> None:
        error = ProviderAPIError("failed to list clusters: denied", "AccessDeniedException")

        with pytest.raises(SystemExit) as exc_info:
            handle_api_error(error, False)

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Insufficient IAM permissions" in err
        assert "Error: failed to list clusters: denied" in err

    def test_api_error_not_found_hint(self, capsys) -> None:
        error = ProviderAPIError("failed to list services: gone", "ClusterNotFoundException")

        with pytest.raises(SystemExit):
            handle_api_error(error, False)

        assert "ECS resource not found" in capsys.readouterr().err

    def test_advised_auth_error_is_not_repeated(self, capsys) -> None:
        error = AWSAuthError(AuthErrorKind.EXPIRED_TOKEN)
        error.advised = True

        with pytest.raises(SystemExit) as exc_info:
            handle_auth_error(error, False)

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "AWS Setup Instructions" not in err
        assert "Error: failed to configure AWS profile: AWS credentials have expired" in err

    def test_session_error_exits_one(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            handle_session_error(SessionError("aws exited with status 255"), False)
        assert exc_info.value.code == 1

    def test_value_error_exits_two(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            handle_value_error(ValueError("Invalid region 'x'"), False)
        assert exc_info.value.code == 2
        assert "Configuration error: Invalid region 'x'" in capsys.readouterr().err

    def test_runtime_error_exits_one(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            handle_runtime_error(RuntimeError("boom"), False)
        assert exc_info.value.code == 1

    @pytest.mark.parametrize(
        "handler,error",
        [
            (handle_resolve_error, NoneFoundError(ResolveStage.CLUSTER)),
            (handle_value_error, ValueError("bad")),
            (handle_session_error, SessionError("bad")),
        ],
    )
    def test_debug_mode_reraises(self, handler, error) -> None:
        with pytest.raises(type(error)):
            handler(error, debug_mode=True)


class TestMain:
    @pytest.fixture(autouse=True)
    def keep_logging_config(self, monkeypatch) -> None:
        monkeypatch.setattr(cli_main, "configure_logging", lambda verbose=False: None)

    def test_version_command(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr(sys, "argv", ["eaws", "version"])

        main()

        assert __version__ in capsys.readouterr().out

    def test_soft_error_exits_zero(self, monkeypatch) -> None:
        monkeypatch.delenv("EAWS_DEBUG", raising=False)

        with patch("fire.Fire", side_effect=NoneFoundError(ResolveStage.SERVICE)):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 0

    def test_debug_mode_reraises(self, monkeypatch) -> None:
        monkeypatch.setenv("EAWS_DEBUG", "1")

        with patch("fire.Fire", side_effect=ProviderAPIError("failed to list clusters")):
            with pytest.raises(ProviderAPIError):
                main()


class RecordingCLI(cli_main.EawsCLI):
    """EawsCLI that remembers the global flags Fire passed to it."""

    created: list[dict] = []

    def __init__(
        self,
        profile: str | None = None,
        verbose: bool = False,
        region: str | None = None,
    ) -> None:
        RecordingCLI.created.append(
            {"profile": profile, "verbose": verbose, "region": region}
        )
        super().__init__(profile=profile, verbose=verbose, region=region)


class TestGlobalFlags:
    @pytest.fixture(autouse=True)
    def recording_cli(self, monkeypatch) -> None:
        monkeypatch.setattr(cli_main, "configure_logging", lambda verbose=False: None)
        monkeypatch.setattr(cli_main, "EawsCLI", RecordingCLI)
        RecordingCLI.created = []

    @pytest.mark.parametrize(
        "argv",
        [
            ["--verbose", "version"],
            ["-v", "version"],
            ["version", "--verbose"],
            ["version", "-v"],
        ],
    )
    def test_verbose_before_or_after_command(self, argv, capsys) -> None:
        main(argv)

        assert RecordingCLI.created[-1]["verbose"] is True
        assert __version__ in capsys.readouterr().out

    def test_verbose_with_profile_and_region(self, capsys) -> None:
        main(["-p", "dev", "-v", "--region", "eu-west-1", "version"])

        assert RecordingCLI.created[-1] == {
            "profile": "dev",
            "verbose": True,
            "region": "eu-west-1",
        }

    def test_without_verbose(self, capsys) -> None:
        main(["version"])

        assert not RecordingCLI.created[-1]["verbose"]

    def test_normalize_verbose_flag(self) -> None:
        assert normalize_verbose_flag(["--verbose", "container", "connect"]) == [
            "--verbose=True",
            "container",
            "connect",
        ]
        assert normalize_verbose_flag(["container", "list"]) == ["container", "list"]
        assert normalize_verbose_flag(["version", "--", "-v"]) == ["version", "--", "-v"]


def test_settings_are_not_a_command() -> None:
    public = [name for name in vars(Eaws) if not name.startswith("_")]

    assert public == ["version"]
