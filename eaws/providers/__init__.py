"""Cloud provider integrations."""

from __future__ import annotations

from eaws.providers.exceptions import (
    ProviderAPIError,
    ProviderCredentialsError,
    ProviderError,
)

__all__ = [
    "ProviderError",
    "ProviderCredentialsError",
    "ProviderAPIError",
]
