"""CLI entry point for eaws."""

from __future__ import annotations

import logging
import os
import sys

import fire

from eaws.app import Eaws
from eaws.constants import EXIT_CONFIG_ERROR, EXIT_ERROR, EXIT_SUCCESS
from eaws.core.exceptions import ResolveError
from eaws.logging import configure_logging
from eaws.providers.aws.errors import AWSAuthError
from eaws.providers.aws.setup import SetupAdvisor
from eaws.providers.exceptions import ProviderAPIError
from eaws.services.session import SessionError
from eaws.utils import log_and_print_error

logger = logging.getLogger(__name__)

VERBOSE_FLAGS = ("-v", "--verbose")


class EawsCLI(Eaws):
    """A simple AWS CLI giving interactive access to ECS containers.

    Parameters
    ----------
    profile : str | None
        AWS profile to use
    verbose : bool
        Print everything, including step timings
    region : str | None
        AWS region override
    """

    def __init__(
        self,
        profile: str | None = None,
        verbose: bool = False,
        region: str | None = None,
    ) -> None:
        configure_logging(verbose=bool(verbose))
        super().__init__(profile=profile, verbose=verbose, region=region)


def handle_auth_error(error: AWSAuthError, debug_mode: bool) -> None:
    """Handle a classified credential failure.

    Parameters
    ----------
    error : AWSAuthError
        The classified failure
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    AWSAuthError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    if not error.advised:
        print(error.message, file=sys.stderr)
        SetupAdvisor().advise(error)

    log_and_print_error("failed to configure AWS profile: %s", error.message)
    sys.exit(EXIT_ERROR)


def handle_api_error(error: ProviderAPIError, debug_mode: bool) -> None:
    """Handle ECS API error with context-specific messages.

    Parameters
    ----------
    error : ProviderAPIError
        The API error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ProviderAPIError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    error_code = error.error_code

    if error_code in ["AccessDeniedException", "AccessDenied", "UnauthorizedOperation"]:
        print("Insufficient IAM permissions\n", file=sys.stderr)
        print("Your AWS credentials don't have the required permissions.", file=sys.stderr)
        print("Contact your AWS administrator to grant:", file=sys.stderr)
        print(
            "  - ECS read permissions (ListClusters, ListServices, ListTasks, "
            "DescribeTasks, DescribeContainerInstances)",
            file=sys.stderr,
        )
        print("  - SSM permissions (StartSession)", file=sys.stderr)
    elif error_code in ["ClusterNotFoundException", "ServiceNotFoundException"]:
        print("ECS resource not found\n", file=sys.stderr)
        print("This usually means:", file=sys.stderr)
        print("  - The resource was deleted while selecting", file=sys.stderr)
        print("  - The region does not match the cluster\n", file=sys.stderr)
        print("Fix it:", file=sys.stderr)
        print("  eaws --region <region> container connect", file=sys.stderr)

    log_and_print_error("%s", error)
    sys.exit(EXIT_ERROR)


def handle_resolve_error(error: ResolveError, debug_mode: bool) -> None:
    """Handle a resolution failure.

    Soft failures (nothing found, prompt cancelled) exit successfully.

    Parameters
    ----------
    error : ResolveError
        The resolution failure
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ResolveError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    if error.soft:
        print(str(error), file=sys.stderr)
        sys.exit(EXIT_SUCCESS)

    log_and_print_error("%s", error)
    sys.exit(EXIT_ERROR)


def handle_session_error(error: SessionError, debug_mode: bool) -> None:
    """Handle a failed SSM session.

    Parameters
    ----------
    error : SessionError
        The session failure
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    SessionError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    log_and_print_error("%s", error)
    sys.exit(EXIT_ERROR)


def handle_value_error(error: ValueError, debug_mode: bool) -> None:
    """Handle configuration error.

    Parameters
    ----------
    error : ValueError
        The value error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ValueError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    print(f"Configuration error: {error}", file=sys.stderr)
    sys.exit(EXIT_CONFIG_ERROR)


def handle_runtime_error(error: RuntimeError, debug_mode: bool) -> None:
    """Handle unexpected runtime error.

    Parameters
    ----------
    error : RuntimeError
        The runtime error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    RuntimeError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise error

    print(f"Unexpected error: {error}", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def normalize_verbose_flag(argv: list[str]) -> list[str]:
    """Rewrite a bare ``--verbose`` or ``-v`` into ``--verbose=True``.

    Fire reads the word after a bare boolean flag as its value, so
    ``eaws --verbose container connect`` would set ``verbose="container"``.
    Arguments after a ``--`` separator belong to Fire and are left alone.

    Parameters
    ----------
    argv : list[str]
        Command line arguments without the program name

    Returns
    -------
    list[str]
        Arguments with every bare verbose flag replaced by a single
        leading ``--verbose=True``
    """
    if "--" in argv:
        separator = argv.index("--")
        head, tail = argv[:separator], argv[separator:]
    else:
        head, tail = list(argv), []

    if not any(arg in VERBOSE_FLAGS for arg in head):
        return list(argv)

    head = [arg for arg in head if arg not in VERBOSE_FLAGS]
    return ["--verbose=True", *head, *tail]


def main(argv: list[str] | None = None) -> None:
    """Entry point for Fire CLI with graceful error handling.

    Fire maps the ``EawsCLI`` constructor arguments to global flags and its
    ``container`` and ``logs`` attributes to command groups. Global flags may
    come before or after the command.

    Parameters
    ----------
    argv : list[str] | None
        Command line arguments (default: ``sys.argv[1:]``)
    """
    configure_logging()

    debug_mode = os.environ.get("EAWS_DEBUG") == "1"
    command = normalize_verbose_flag(sys.argv[1:] if argv is None else argv)

    try:
        fire.Fire(EawsCLI, command=command, name="eaws")
    except AWSAuthError as e:
        handle_auth_error(e, debug_mode)
    except ProviderAPIError as e:
        handle_api_error(e, debug_mode)
    except ResolveError as e:
        handle_resolve_error(e, debug_mode)
    except SessionError as e:
        handle_session_error(e, debug_mode)
    except ValueError as e:
        handle_value_error(e, debug_mode)
    except RuntimeError as e:
        handle_runtime_error(e, debug_mode)
