"""Credential resolution and verification for AWS."""

from __future__ import annotations

import logging
import os
from typing import Any, Callable

import boto3
from botocore.exceptions import BotoCoreError, ClientError, ProfileNotFound
from rich.markup import escape

from eaws.console import StatusConsole, highlight
from eaws.constants import DEFAULT_REGION
from eaws.core.interfaces import ProcessRunner
from eaws.core.models import CallerIdentity, VerifiedSession
from eaws.core.runner import SubprocessRunner
from eaws.providers.aws.constants import ASSUME_COMMAND
from eaws.providers.aws.errors import (
    AWSAuthError,
    AuthErrorKind,
    auth_error_from_exception,
)

logger = logging.getLogger(__name__)


class CredentialVerifier:
    """Establish an AWS session for an optional profile and prove it works.

    Parameters
    ----------
    runner : ProcessRunner | None
        Runner used to call the granted ``assume`` helper
    session_factory : Callable[..., Any] | None
        Factory creating boto3 sessions (default: ``boto3.Session``)
    console : StatusConsole | None
        Console receiving progress and warning lines
    default_region : str | None
        Region used when neither the caller nor the session provide one
    """

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        session_factory: Callable[..., Any] | None = None,
        console: StatusConsole | None = None,
        default_region: str | None = None,
    ) -> None:
        self.runner = runner or SubprocessRunner()
        self.session_factory = session_factory or boto3.Session
        self.console = console or StatusConsole()
        self.default_region = default_region or DEFAULT_REGION

    def activate_profile(self, profile: str) -> None:
        """Activate a named profile through ``assume`` when it is installed.

        Parameters
        ----------
        profile : str
            Profile name

        Raises
        ------
        AWSAuthError
            If ``assume`` is installed but fails for the profile
        """
        if not self.runner.which(ASSUME_COMMAND):
            self.console.info(f"Using AWS profile: {highlight(profile)}")
            return

        result = self.runner.run([ASSUME_COMMAND, profile])
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            logger.debug("assume %s failed: %s", profile, stderr)
            if "no such file or directory" in stderr:
                raise AWSAuthError(
                    AuthErrorKind.PROFILE_NOT_FOUND,
                    f"AWS profile '{profile}' not found or granted tool not "
                    "properly configured. Please check your AWS SSO configuration.",
                )
            raise AWSAuthError(
                AuthErrorKind.ASSUME_FAILED,
                f"Failed to assume AWS profile '{profile}': {stderr}",
            )

        self.console.success(f"Successfully assumed AWS profile: {highlight(profile)}")

    def try_default_profile(self) -> None:
        """Best-effort parameterless ``assume``; failures only warn."""
        if self.runner.which(ASSUME_COMMAND):
            result = self.runner.run([ASSUME_COMMAND])
            if result.returncode == 0:
                return
            logger.debug("assume without profile failed: %s", result.stderr)
        else:
            logger.debug("%s not found on PATH", ASSUME_COMMAND)

        self.console.warning("No AWS profile configured, using default credentials")

    def create_session(self, profile: str | None) -> Any:
        """Create a boto3 session for ``profile`` or the default chain.

        Raises
        ------
        AWSAuthError
            If the named profile does not exist in the shared config
        """
        try:
            if profile:
                return self.session_factory(profile_name=profile)
            return self.session_factory()
        except ProfileNotFound as e:
            raise AWSAuthError(
                AuthErrorKind.PROFILE_NOT_FOUND,
                f"AWS profile '{profile}' not found. "
                "Check ~/.aws/config or run 'aws configure --profile "
                f"{profile}'.",
                cause=e,
            ) from e

    def verify(self, session: Any, region: str) -> CallerIdentity:
        """Call STS ``get_caller_identity`` and classify any failure.

        Parameters
        ----------
        session : Any
            boto3 Session to verify
        region : str
            Region for the STS client

        Returns
        -------
        CallerIdentity
            Identity of the credentials

        Raises
        ------
        AWSAuthError
            Classified failure
        """
        sts_client = None
        try:
            sts_client = session.client("sts", region_name=region)
            response = sts_client.get_caller_identity()
        except (BotoCoreError, ClientError) as e:
            raise auth_error_from_exception(e) from e
        finally:
            if sts_client is not None:
                sts_client.close()

        identity = CallerIdentity.from_response(response)
        logger.debug("Verified credentials for %s", identity.arn)
        return identity

    def resolve_credentials(
        self, profile: str | None = None, region: str | None = None
    ) -> VerifiedSession:
        """Resolve credentials and prove them live.

        Parameters
        ----------
        profile : str | None
            Named profile, or None for the environment and default chain
        region : str | None
            Region override

        Returns
        -------
        VerifiedSession
            Session to create every API client from

        Raises
        ------
        AWSAuthError
            Classified failure, never retried
        """
        if profile:
            self.activate_profile(profile)
        elif not os.environ.get("AWS_PROFILE"):
            self.try_default_profile()

        session = self.create_session(profile)
        effective_region = (
            region or getattr(session, "region_name", None) or self.default_region
        )
        identity = self.verify(session, effective_region)

        return VerifiedSession(
            session=session,
            profile=profile or os.environ.get("AWS_PROFILE") or None,
            region=effective_region,
            identity=identity,
        )


def check_profile(
    verifier: CredentialVerifier,
    profile: str | None,
    region: str | None = None,
    advisor: Any = None,
) -> VerifiedSession:
    """Gate used by every command: verify credentials or advise and re-raise.

    Parameters
    ----------
    verifier : CredentialVerifier
        Verifier performing the checks
    profile : str | None
        Named profile
    region : str | None
        Region override
    advisor : Any
        Setup advisor printing remediation steps on failure

    Returns
    -------
    VerifiedSession
        Verified session

    Raises
    ------
    AWSAuthError
        After the message and the advice have been printed
    """
    try:
        return verifier.resolve_credentials(profile, region)
    except AWSAuthError as e:
        verifier.console.error(escape(e.message))
        if advisor is not None:
            advisor.advise(e)
        e.advised = True
        raise
