"""AWS-specific constants for credential handling and session bootstrap.

This module contains constants specific to the AWS provider: external helper
tools, the SSM document used for interactive sessions, and the markers used
to classify authentication failures.
"""

ASSUME_COMMAND = "assume"
"""Executable of the granted credential helper.

Invoked as ``assume <profile>`` to activate a profile, or without arguments
to activate the helper's default profile.
"""

ASSUME_INSTALL_PATHS = (
    "/usr/local/bin/assume",
    "/opt/homebrew/bin/assume",
)
"""Well-known install locations of the granted ``assume`` helper.

Checked by the setup advisor to tailor remediation advice.
"""

AWS_CLI_INSTALL_PATHS = (
    "/usr/local/bin/aws",
    "/opt/homebrew/bin/aws",
)
"""Well-known install locations of the AWS CLI."""

SSO_CONFIG_DIR = ".aws/sso"
"""SSO cache directory, relative to the home directory.

Its presence marks a machine set up for AWS SSO, which usually means a
corporate environment.
"""

CORP_HOSTNAME_MARKERS = (".corp", ".internal", ".company", ".local")
"""Hostname substrings that indicate a corporate network."""

SESSION_DOCUMENT_NAME = "AWS-StartInteractiveCommand"
"""SSM document used to run an interactive command on the host instance."""

DOCKER_EXEC_TEMPLATE = "sudo docker exec -ti {runtime_id} {shell}"
"""Command run on the host instance to attach a shell to the container.

The runtime id is the Docker container id reported by ECS.
"""

NO_CREDENTIALS_MARKERS = ("NoCredentialsError", "Unable to locate credentials")
"""Error text markers meaning no credential material was found at all."""

EXPIRED_TOKEN_MARKERS = ("TokenRefreshRequired", "ExpiredToken")
"""Error text markers meaning credentials exist but have expired."""

ACCESS_DENIED_MARKERS = ("UnauthorizedOperation", "AccessDenied")
"""Error text markers meaning credentials work but lack permissions."""

EXPIRED_TOKEN_CODES = frozenset(
    (
        "ExpiredToken",
        "ExpiredTokenException",
        "RequestExpired",
        "TokenRefreshRequired",
    )
)
"""AWS error codes classified as expired credentials."""

ACCESS_DENIED_CODES = frozenset(
    (
        "AccessDenied",
        "AccessDeniedException",
        "UnauthorizedOperation",
    )
)
"""AWS error codes classified as insufficient permissions."""
