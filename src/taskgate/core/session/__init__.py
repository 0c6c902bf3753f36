"""Session state shared by every access-control consumer."""

from taskgate.core.session.store import SessionSnapshot, SessionStore


__all__ = [
    "SessionSnapshot",
    "SessionStore",
]
