"""AWS provider: credentials, ECS discovery and setup advice."""

from eaws.providers.aws.credentials import CredentialVerifier, check_profile
from eaws.providers.aws.ecs import ECSManager
from eaws.providers.aws.errors import AWSAuthError, AuthErrorKind, classify_auth_error
from eaws.providers.aws.setup import SetupAdvisor

__all__ = [
    "AWSAuthError",
    "AuthErrorKind",
    "CredentialVerifier",
    "ECSManager",
    "SetupAdvisor",
    "check_profile",
    "classify_auth_error",
]
