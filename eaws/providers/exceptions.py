"""Provider-agnostic exception hierarchy.

Commands catch these types rather than SDK exceptions so that the error
handlers in ``eaws.cli.main`` stay independent of boto3.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for all provider errors."""


class ProviderCredentialsError(ProviderError):
    """Raised when credentials are missing, expired or rejected."""


class ProviderAPIError(ProviderError):
    """Raised when a provider API call fails.

    Parameters
    ----------
    message : str
        Human readable message, prefixed with the failing operation
    error_code : str | None
        Provider error code (e.g. ``AccessDeniedException``), if known
    """

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code
