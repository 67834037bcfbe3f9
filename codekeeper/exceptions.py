"""Error taxonomy shared by all Codekeeper modules."""


class CodekeeperError(Exception):
    """Base class for recoverable errors surfaced to callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(CodekeeperError):
    """A required field (correlation id, access code) was missing or empty."""


class SessionNotFound(CodekeeperError):
    """The referenced session id is not in the registry."""

    def __init__(self, session_id: str, message: str = "Session not found"):
        super().__init__(message)
        self.session_id = session_id


class NoMatch(CodekeeperError):
    """Validation scanned every live session without finding the code."""


class StoreUnavailable(CodekeeperError):
    """A code store call failed or timed out."""
