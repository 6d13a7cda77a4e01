"""Classification and wrapping of AWS errors."""

from __future__ import annotations

import functools
import logging
from enum import Enum
from typing import Any, Callable, TypeVar

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
    SSOTokenLoadError,
    TokenRetrievalError,
    UnauthorizedSSOTokenError,
)

from eaws.providers.aws.constants import (
    ACCESS_DENIED_CODES,
    ACCESS_DENIED_MARKERS,
    EXPIRED_TOKEN_CODES,
    EXPIRED_TOKEN_MARKERS,
    NO_CREDENTIALS_MARKERS,
)
from eaws.providers.exceptions import ProviderAPIError, ProviderCredentialsError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class AuthErrorKind(str, Enum):
    """Categories of authentication failure."""

    NO_CREDENTIALS = "no-credentials"
    EXPIRED_TOKEN = "expired-token"
    INSUFFICIENT_PERMISSIONS = "insufficient-permissions"
    GENERIC = "generic-auth-failure"
    PROFILE_NOT_FOUND = "profile-not-found"
    ASSUME_FAILED = "assume-failed"


AUTH_ERROR_MESSAGES = {
    AuthErrorKind.NO_CREDENTIALS: (
        "No AWS credentials found. Please run 'aws configure' "
        "or set up AWS SSO with 'aws sso login'."
    ),
    AuthErrorKind.EXPIRED_TOKEN: (
        "AWS credentials have expired. "
        "Please run 'aws sso login' to refresh your credentials."
    ),
    AuthErrorKind.INSUFFICIENT_PERMISSIONS: (
        "AWS credentials are valid but insufficient permissions. "
        "Please check your IAM permissions."
    ),
    AuthErrorKind.GENERIC: (
        "Failed to verify AWS credentials. Please check your AWS configuration."
    ),
}

TEXT_MARKER_PRECEDENCE = (
    (AuthErrorKind.NO_CREDENTIALS, NO_CREDENTIALS_MARKERS),
    (AuthErrorKind.EXPIRED_TOKEN, EXPIRED_TOKEN_MARKERS),
    (AuthErrorKind.INSUFFICIENT_PERMISSIONS, ACCESS_DENIED_MARKERS),
)
"""Substring table for untyped error text, checked top to bottom."""


class AWSAuthError(ProviderCredentialsError):
    """Classified authentication failure.

    Parameters
    ----------
    kind : AuthErrorKind
        Failure category
    message : str | None
        User-facing remediation message. Defaults to the fixed message of the
        category.
    cause : BaseException | None
        Underlying exception
    """

    def __init__(
        self,
        kind: AuthErrorKind,
        message: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.kind = kind
        self.message = message or AUTH_ERROR_MESSAGES.get(
            kind, AUTH_ERROR_MESSAGES[AuthErrorKind.GENERIC]
        )
        self.cause = cause
        self.advised = False
        super().__init__(self.message)


def get_error_code(error: BaseException) -> str:
    """Return the AWS error code of a ClientError, or an empty string."""
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code", "")
    return ""


def classify_auth_text(text: str) -> AuthErrorKind:
    """Classify untyped error text using the marker precedence table.

    Parameters
    ----------
    text : str
        Error text to inspect

    Returns
    -------
    AuthErrorKind
        First category whose markers occur in the text, GENERIC otherwise
    """
    for kind, markers in TEXT_MARKER_PRECEDENCE:
        if any(marker in text for marker in markers):
            return kind
    return AuthErrorKind.GENERIC


def classify_auth_error(error: BaseException) -> AuthErrorKind:
    """Classify an exception raised while verifying credentials.

    Typed botocore exceptions and AWS error codes are inspected first. The
    error text is only consulted when neither identifies the failure.

    Parameters
    ----------
    error : BaseException
        Exception raised by the credential chain or the STS call

    Returns
    -------
    AuthErrorKind
        Failure category
    """
    if isinstance(error, (NoCredentialsError, PartialCredentialsError)):
        return AuthErrorKind.NO_CREDENTIALS

    if isinstance(
        error, (SSOTokenLoadError, TokenRetrievalError, UnauthorizedSSOTokenError)
    ):
        return AuthErrorKind.EXPIRED_TOKEN

    code = get_error_code(error)
    if code in EXPIRED_TOKEN_CODES:
        return AuthErrorKind.EXPIRED_TOKEN
    if code in ACCESS_DENIED_CODES:
        return AuthErrorKind.INSUFFICIENT_PERMISSIONS

    return classify_auth_text(str(error))


def auth_error_from_exception(error: BaseException) -> AWSAuthError:
    """Build a classified AWSAuthError from any credential failure."""
    kind = classify_auth_error(error)
    logger.debug("Classified credential failure as %s: %s", kind.value, error)
    return AWSAuthError(kind, cause=error)


def handle_aws_errors(operation: str) -> Callable[[F], F]:
    """Wrap botocore failures of an API call with operation context.

    ``ClientError`` and ``BotoCoreError`` become ``ProviderAPIError`` with the
    message ``failed to <operation>: <error>``. Credential failures surfacing
    mid-pipeline become a classified ``AWSAuthError``.

    Parameters
    ----------
    operation : str
        Short description of the call, e.g. ``"list services"``

    Returns
    -------
    Callable[[F], F]
        Decorator applying the wrapping
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except (NoCredentialsError, PartialCredentialsError) as e:
                raise auth_error_from_exception(e) from e
            except ClientError as e:
                code = get_error_code(e)
                if code in EXPIRED_TOKEN_CODES:
                    raise auth_error_from_exception(e) from e
                raise ProviderAPIError(f"failed to {operation}: {e}", code) from e
            except BotoCoreError as e:
                raise ProviderAPIError(f"failed to {operation}: {e}") from e

        return wrapper  # type: ignore[return-value]

    return decorator
