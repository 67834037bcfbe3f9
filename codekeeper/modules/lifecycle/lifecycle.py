import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from codekeeper.exceptions import InvalidInput, NoMatch, SessionNotFound, StoreUnavailable
from codekeeper.modules.codes import CodeStore, generate_code
from codekeeper.modules.session import Session, SessionRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartedSession:
    session_id: str
    code: str
    event_session_id: str


@dataclass(frozen=True)
class ValidatedSession:
    event_id: str
    session_id: str
    event_session_id: str


class SessionLifecycle:
    def __init__(
        self,
        registry: SessionRegistry,
        code_store: CodeStore,
        code_generator: Callable[[], str] = generate_code,
    ):
        """
        Initialize lifecycle orchestrator.

        Args:
            registry: Session registry owned by the caller
            code_store: TTL-backed code store
            code_generator: Callable returning a fresh access code
        """
        self.registry = registry
        self.code_store = code_store
        self.generate_code = code_generator

    async def start(
        self,
        event_id: str,
        expiration_time: int,
        event_session_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> StartedSession:
        """
        Start a session and issue its first code.

        Args:
            event_id: Owning event
            expiration_time: Code TTL in seconds
            event_session_id: Caller correlation id
            session_id: Accepted in place of event_session_id

        Returns:
            StartedSession with the registry session id and code

        Raises:
            InvalidInput: No correlation id supplied
            StoreUnavailable: Code could not be stored. The registry entry
                is kept; the session simply has no live code.
        """
        correlation_id = event_session_id or session_id
        if not correlation_id:
            raise InvalidInput("Event session ID is required")

        session = self.registry.create(event_id, correlation_id, expiration_time)
        code = self.generate_code()

        logger.info(f"Creating new session for event {event_id}: {session.session_id}")

        await self.code_store.set(event_id, session.session_id, code, expiration_time)

        logger.info(
            f"Session started for event {event_id}: {session.session_id}, "
            f"Expiration: {expiration_time}s"
        )
        return StartedSession(
            session_id=session.session_id,
            code=code,
            event_session_id=correlation_id,
        )

    async def rotate(
        self, event_id: str, session_id: str, expiration_time: Optional[int] = None
    ) -> str:
        """
        Replace a session's code.

        The old key is deleted before the new one is written, whether or not
        it has already expired. The registry entry is left untouched,
        including its nominal expiration.

        Args:
            event_id: Event the key is stored under
            session_id: Registry session id
            expiration_time: TTL for the new code; defaults to the session's
                nominal expiration

        Returns:
            The new code

        Raises:
            SessionNotFound: Unknown session_id
            StoreUnavailable: Delete or set failed
        """
        session = self.registry.get(session_id)
        if session is None:
            logger.warning(f"Attempt to generate code for non-existent session: {session_id}")
            raise SessionNotFound(session_id)

        if session.event_id != event_id:
            logger.warning(
                f"Session {session_id} belongs to event {session.event_id}, "
                f"rotating under event {event_id}"
            )

        ttl = expiration_time or session.nominal_expiration_seconds

        await self.code_store.delete(event_id, session_id)
        new_code = self.generate_code()
        await self.code_store.set(event_id, session_id, new_code, ttl)

        logger.info(
            f"New code generated for event {event_id}, session {session_id}, Expiration: {ttl}s"
        )
        return new_code

    async def validate(self, code: str) -> ValidatedSession:
        """
        Find the session holding a code.

        Scans a registry snapshot in insertion order and stops at the first
        session whose stored code equals the presented one. Sessions whose
        code expired read as absent and are skipped.

        Raises:
            InvalidInput: Empty code
            NoMatch: No live session holds the code
            StoreUnavailable: A lookup failed
        """
        if not code:
            logger.warning("Attempt to validate without code")
            raise InvalidInput("Access code is required")

        for session in self.registry.list_all():
            stored_code = await self.code_store.get(session.event_id, session.session_id)
            if stored_code == code:
                logger.info(
                    f"Valid code found for event {session.event_id}, session {session.session_id}"
                )
                return ValidatedSession(
                    event_id=session.event_id,
                    session_id=session.session_id,
                    event_session_id=session.event_session_id,
                )

        logger.warning("No matching code found")
        raise NoMatch("Invalid or expired access code")

    async def stop(self, event_id: str, session_id: str) -> Session:
        """
        Stop a session.

        The registry entry is always removed. Deleting the code is
        best-effort: if the store is unreachable the key lapses via its TTL.

        Raises:
            SessionNotFound: Unknown session_id
        """
        try:
            session = self.registry.remove(session_id)
        except SessionNotFound:
            logger.warning(
                f"Attempt to stop non-existent session for event {event_id}: {session_id}"
            )
            raise

        try:
            await self.code_store.delete(event_id, session_id)
        except StoreUnavailable as e:
            logger.warning(f"Could not delete code for session {session_id}, leaving it to expire: {e}")

        logger.info(f"Session stopped for event {event_id}: {session_id}")
        return session

    def list_active(self) -> List[Session]:
        return self.registry.list_all()

    async def shutdown(self) -> int:
        """
        Delete the codes of every registered session.

        Advisory cleanup run on process termination. Failures are logged and
        skipped; anything left behind expires on its own.

        Returns:
            Number of codes deleted
        """
        sessions = self.registry.list_all()
        deleted = 0

        for session in sessions:
            try:
                await self.code_store.delete(session.event_id, session.session_id)
                deleted += 1
            except StoreUnavailable as e:
                logger.warning(f"Failed to delete code for session {session.session_id}: {e}")

        logger.info(f"Cleared codes for {deleted}/{len(sessions)} active sessions")
        return deleted
