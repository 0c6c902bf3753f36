"""Current-session state.

The store owns the only mutable reference in the system: the current
``SessionSnapshot``. A snapshot pairs a principal with the effective
permission set computed from it, and the pair is always replaced as a
whole so no reader sees roles from one principal next to permissions
from another.
"""

import threading
from collections.abc import Callable
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from taskgate.core.errors import UnauthorizedError
from taskgate.core.permissions.aggregator import EffectivePermissionSet, aggregate
from taskgate.core.permissions.models import Principal


logger = structlog.get_logger()

Listener = Callable[["SessionSnapshot"], None]


class SessionSnapshot(BaseModel):
    """Immutable view of the current session.

    Attributes:
        principal: The authenticated principal, or None
        effective: Effective permissions derived from ``principal``
        is_authenticated: Whether a principal is logged in
    """

    model_config = ConfigDict(frozen=True)

    principal: Principal | None = None
    effective: EffectivePermissionSet = EffectivePermissionSet()
    is_authenticated: bool = False

    @classmethod
    def anonymous(cls) -> "SessionSnapshot":
        return cls()

    @classmethod
    def for_principal(cls, principal: Principal) -> "SessionSnapshot":
        return cls(
            principal=principal,
            effective=aggregate(principal),
            is_authenticated=True,
        )


class SessionStore:
    """Holds and publishes the current session snapshot.

    The identity service calls ``publish`` after login or a profile fetch
    and ``clear`` on logout. Consumers read ``snapshot`` when they need
    an answer, or ``subscribe`` to be told about replacements.

    Listeners are called in replacement order: the last snapshot a
    listener receives is always the current one.
    """

    def __init__(self, snapshot: SessionSnapshot | None = None) -> None:
        self._snapshot = snapshot or SessionSnapshot.anonymous()
        self._lock = threading.Lock()
        self._notify_lock = threading.RLock()
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def is_authenticated(self) -> bool:
        return self._snapshot.is_authenticated

    def publish(self, principal: Principal | None) -> SessionSnapshot:
        """Replace the session with a freshly fetched principal.

        The effective set is recomputed from scratch.

        Args:
            principal: The new principal; None logs out

        Returns:
            The published snapshot
        """
        if principal is None:
            return self.clear()

        snapshot = SessionSnapshot.for_principal(principal)
        self._replace(snapshot)
        logger.info(
            "session_published",
            principal_id=str(principal.id),
            roles=list(principal.role_names),
            permission_count=len(snapshot.effective),
        )
        return snapshot

    def update_profile(self, **fields: Any) -> SessionSnapshot:
        """Change profile fields (e.g. avatar) without touching access data.

        Raises:
            UnauthorizedError: If there is no authenticated principal
            ValueError: If a non-profile field is passed
        """
        with self._notify_lock:
            with self._lock:
                current = self._snapshot
                if current.principal is None:
                    raise UnauthorizedError(
                        "No active session to update",
                        error_code="no_session",
                    )
                snapshot = current.model_copy(
                    update={"principal": current.principal.with_profile(**fields)}
                )
                self._snapshot = snapshot
                listeners = list(self._listeners)
            self._notify(listeners, snapshot)

        logger.info("session_profile_updated", fields=sorted(fields))
        return snapshot

    def clear(self) -> SessionSnapshot:
        """Log out: replace the session with the anonymous snapshot."""
        snapshot = SessionSnapshot.anonymous()
        self._replace(snapshot)
        logger.info("session_cleared")
        return snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with each new snapshot.

        Returns:
            A function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, snapshot: SessionSnapshot) -> None:
        # Held across swap and notify so listeners see replacements in order.
        with self._notify_lock:
            with self._lock:
                self._snapshot = snapshot
                listeners = list(self._listeners)
            self._notify(listeners, snapshot)

    @staticmethod
    def _notify(listeners: list[Listener], snapshot: SessionSnapshot) -> None:
        for listener in listeners:
            listener(snapshot)
