"""Unit tests for the session store."""

import threading
import time

import pytest

from taskgate.core.errors import UnauthorizedError
from taskgate.core.permissions.aggregator import aggregate
from taskgate.core.permissions.models import Principal
from taskgate.core.session.store import SessionSnapshot, SessionStore
from tests.factories import make_principal


pytestmark = pytest.mark.unit


class TestSessionStore:
    """Tests for SessionStore."""

    def test_starts_anonymous(self, session_store: SessionStore):
        snapshot = session_store.snapshot

        assert snapshot == SessionSnapshot.anonymous()
        assert snapshot.principal is None
        assert len(snapshot.effective) == 0
        assert session_store.is_authenticated is False

    def test_publish_computes_effective_set(
        self, session_store: SessionStore, manager: Principal
    ):
        snapshot = session_store.publish(manager)

        assert snapshot.is_authenticated is True
        assert snapshot.principal == manager
        assert snapshot.effective == aggregate(manager)
        assert session_store.snapshot is snapshot

    def test_publish_replaces_rather_than_patches(self, session_store: SessionStore):
        """Re-publishing after a role change drops the revoked permissions."""
        first = make_principal(roles={"manager": ["view projects"]})
        session_store.publish(first)
        held = session_store.snapshot

        session_store.publish(first.model_copy(update={"roles": ()}))

        assert "view projects" in held.effective
        assert "view projects" not in session_store.snapshot.effective

    def test_publish_none_logs_out(self, session_store: SessionStore, manager: Principal):
        session_store.publish(manager)

        snapshot = session_store.publish(None)

        assert snapshot.is_authenticated is False
        assert snapshot.principal is None

    def test_clear(self, session_store: SessionStore, manager: Principal):
        session_store.publish(manager)

        session_store.clear()

        assert session_store.snapshot == SessionSnapshot.anonymous()

    def test_update_profile_keeps_effective_set(
        self, session_store: SessionStore, manager: Principal
    ):
        before = session_store.publish(manager)

        after = session_store.update_profile(avatar_url="https://cdn.example.com/x.png")

        assert after.principal is not None
        assert after.principal.avatar_url == "https://cdn.example.com/x.png"
        assert after.effective is before.effective
        assert after.principal.roles == manager.roles

    def test_update_profile_requires_session(self, session_store: SessionStore):
        with pytest.raises(UnauthorizedError):
            session_store.update_profile(name="Nobody")

    def test_update_profile_rejects_access_fields(
        self, session_store: SessionStore, manager: Principal
    ):
        session_store.publish(manager)

        with pytest.raises(ValueError):
            session_store.update_profile(permissions=())

        assert session_store.snapshot.principal == manager

    def test_subscribers_receive_each_snapshot(
        self, session_store: SessionStore, manager: Principal
    ):
        received: list[SessionSnapshot] = []
        session_store.subscribe(received.append)

        session_store.publish(manager)
        session_store.update_profile(name="Renamed")
        session_store.clear()

        assert [s.is_authenticated for s in received] == [True, True, False]
        assert received[1].principal is not None
        assert received[1].principal.name == "Renamed"

    def test_unsubscribe(self, session_store: SessionStore, manager: Principal):
        received: list[SessionSnapshot] = []
        unsubscribe = session_store.subscribe(received.append)

        unsubscribe()
        unsubscribe()
        session_store.publish(manager)

        assert received == []

    def test_readers_see_consistent_pairs(self, session_store: SessionStore):
        """Every observed snapshot pairs a principal with its own effective set."""
        principals = [
            make_principal(roles={f"role-{i}": [f"perm {i}"]}) for i in range(20)
        ]
        mismatches: list[SessionSnapshot] = []
        done = threading.Event()

        def reader() -> None:
            while not done.is_set():
                snapshot = session_store.snapshot
                if snapshot.principal is None:
                    continue
                if snapshot.effective != aggregate(snapshot.principal):
                    mismatches.append(snapshot)

        thread = threading.Thread(target=reader)
        thread.start()
        try:
            for _ in range(10):
                for principal in principals:
                    session_store.publish(principal)
        finally:
            done.set()
            thread.join()

        assert mismatches == []

    def test_listeners_end_on_the_current_snapshot(self, session_store: SessionStore):
        """Concurrent publishes reach listeners in the order they were applied."""
        principals = [make_principal(permissions=[f"perm {i}"]) for i in range(8)]
        received: list[SessionSnapshot] = []
        start = threading.Barrier(len(principals))

        def listener(snapshot: SessionSnapshot) -> None:
            time.sleep(0.001)
            received.append(snapshot)

        session_store.subscribe(listener)

        def writer(principal: Principal) -> None:
            start.wait()
            for _ in range(5):
                session_store.publish(principal)

        threads = [threading.Thread(target=writer, args=(p,)) for p in principals]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(received) == 40
        assert received[-1] == session_store.snapshot
