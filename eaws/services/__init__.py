"""Services built on top of resolved resources."""

from eaws.services.session import SessionBootstrapper, SessionError

__all__ = ["SessionBootstrapper", "SessionError"]
