import os
import sys
import threading
import time

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from codekeeper.exceptions import SessionNotFound
from codekeeper.modules.session import Session, SessionRegistry


def test_create_session(registry):
    """Test session creation records metadata."""
    before = int(time.time() * 1000)
    session = registry.create("E1", "S1", 60)

    assert isinstance(session, Session)
    assert len(session.session_id) == 36
    assert session.session_id.count("-") == 4
    assert session.event_id == "E1"
    assert session.event_session_id == "S1"
    assert session.nominal_expiration_seconds == 60
    assert session.start_time >= before


def test_create_allocates_unique_ids(registry):
    ids = {registry.create("E1", f"S{i}", 60).session_id for i in range(50)}
    assert len(ids) == 50
    assert len(registry) == 50


def test_exists_and_get(registry):
    session = registry.create("E1", "S1", 60)

    assert registry.exists(session.session_id) is True
    assert registry.exists("unknown") is False
    assert registry.get(session.session_id) == session
    assert registry.get("unknown") is None


def test_remove_returns_session(registry):
    session = registry.create("E1", "S1", 60)

    removed = registry.remove(session.session_id)

    assert removed == session
    assert registry.exists(session.session_id) is False
    assert len(registry) == 0


def test_remove_twice_raises(registry):
    """Removal is not idempotent."""
    session = registry.create("E1", "S1", 60)
    registry.remove(session.session_id)

    with pytest.raises(SessionNotFound) as exc_info:
        registry.remove(session.session_id)

    assert exc_info.value.session_id == session.session_id


def test_list_all_is_snapshot_in_insertion_order(registry):
    first = registry.create("E1", "S1", 60)
    second = registry.create("E2", "S2", 30)

    snapshot = registry.list_all()
    registry.remove(first.session_id)
    third = registry.create("E3", "S3", 10)

    # Snapshot is unaffected by later mutations
    assert snapshot == [first, second]
    assert registry.list_all() == [second, third]


def test_session_to_dict():
    session = Session(
        session_id="id-1",
        event_id="E1",
        event_session_id="S1",
        start_time=1700000000000,
        nominal_expiration_seconds=60,
    )

    assert session.to_dict() == {
        "session_id": "id-1",
        "event_id": "E1",
        "event_session_id": "S1",
        "start_time": 1700000000000,
        "nominal_expiration_seconds": 60,
    }


def test_concurrent_create_and_remove():
    """Mutations from several threads never lose or duplicate entries."""
    registry = SessionRegistry()
    created = []
    created_lock = threading.Lock()

    def worker(n):
        for i in range(100):
            session = registry.create(f"E{n}", f"S{i}", 60)
            with created_lock:
                created.append(session.session_id)
            registry.list_all()

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(registry) == 400
    assert len(set(created)) == 400

    for session_id in created[:200]:
        registry.remove(session_id)
    assert len(registry) == 200


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
