import threading
import time
import uuid
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from codekeeper.exceptions import SessionNotFound


@dataclass(frozen=True)
class Session:
    """An event session tracked by the registry."""

    session_id: str
    event_id: str
    event_session_id: str
    start_time: int  # epoch milliseconds
    nominal_expiration_seconds: int

    def to_dict(self) -> dict:
        return asdict(self)


class SessionRegistry:
    def __init__(self):
        """
        Initialize an empty registry.

        The registry is ephemeral: nothing survives a process restart.
        """
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(self, event_id: str, event_session_id: str, expiration_seconds: int) -> Session:
        """
        Register a new session.

        Args:
            event_id: Owning event identifier
            event_session_id: Caller correlation identifier
            expiration_seconds: TTL of the initial code, kept for reference

        Returns:
            The new Session

        Logic:
        1. Allocate a UUID4 not already in use
        2. Record start time
        3. Insert under the lock
        """
        with self._lock:
            session_id = str(uuid.uuid4())
            while session_id in self._sessions:
                session_id = str(uuid.uuid4())

            session = Session(
                session_id=session_id,
                event_id=event_id,
                event_session_id=event_session_id,
                start_time=int(time.time() * 1000),
                nominal_expiration_seconds=expiration_seconds,
            )
            self._sessions[session_id] = session

        return session

    def exists(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(session_id)

    def remove(self, session_id: str) -> Session:
        """
        Remove a session and return it.

        Not idempotent: removing an absent session raises, and shutdown
        paths are expected to treat that as benign.

        Raises:
            SessionNotFound: session_id is not registered
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)

        if session is None:
            raise SessionNotFound(session_id)
        return session

    def list_all(self) -> List[Session]:
        """
        Snapshot of all registered sessions in insertion order.

        The copy is taken under the lock so a scan never sees a
        half-inserted or half-removed entry.
        """
        with self._lock:
            return list(self._sessions.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
