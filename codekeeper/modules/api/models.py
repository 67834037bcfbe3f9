"""
Codekeeper HTTP data models.

The wire format is camelCase JSON. Models accept either the camelCase alias
or the Python field name.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from codekeeper.modules.lifecycle import StartedSession, ValidatedSession
from codekeeper.modules.session import Session


class CamelModel(BaseModel):
    """Base model serializing to camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Request Models (API Input)


class StartSessionRequest(CamelModel):
    """Request to start an event session."""

    expiration_time: int = Field(..., description="Code TTL in seconds", ge=1)
    event_session_id: Optional[str] = Field(None, description="Caller correlation ID")
    session_id: Optional[str] = Field(
        None, description="Accepted in place of eventSessionId"
    )

    @field_validator("event_session_id", "session_id", mode="before")
    @classmethod
    def numbers_as_strings(cls, v):
        """Accept numeric correlation IDs, stored as their string form."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class GenerateCodeRequest(CamelModel):
    """Request to rotate a session's code."""

    expiration_time: Optional[int] = Field(
        None, description="TTL for the new code; defaults to the session's initial TTL", ge=1
    )


class ValidateCodeRequest(CamelModel):
    """Request to validate an access code."""

    code: Optional[str] = Field(None, description="Access code presented by the user")


# Response Models (API Output)


class StartSessionResponse(CamelModel):
    """Response after starting a session."""

    session_id: str
    code: str
    event_session_id: str

    @classmethod
    def from_started(cls, started: StartedSession) -> "StartSessionResponse":
        return cls(
            session_id=started.session_id,
            code=started.code,
            event_session_id=started.event_session_id,
        )


class CodeResponse(CamelModel):
    """Response after rotating a code."""

    code: str


class ValidateCodeResponse(CamelModel):
    """Response for a code that matched a live session."""

    valid: bool = True
    event_id: str
    session_id: str
    event_session_id: str

    @classmethod
    def from_validated(cls, validated: ValidatedSession) -> "ValidateCodeResponse":
        return cls(
            event_id=validated.event_id,
            session_id=validated.session_id,
            event_session_id=validated.event_session_id,
        )


class MessageResponse(CamelModel):
    message: str


class ActiveSessionResponse(CamelModel):
    """A registered session as listed by /active-sessions."""

    session_id: str
    event_id: str
    event_session_id: str
    start_time: int = Field(..., description="Creation time, epoch milliseconds")
    expiration_time: int = Field(..., description="TTL of the session's initial code")

    @classmethod
    def from_session(cls, session: Session) -> "ActiveSessionResponse":
        return cls(
            session_id=session.session_id,
            event_id=session.event_id,
            event_session_id=session.event_session_id,
            start_time=session.start_time,
            expiration_time=session.nominal_expiration_seconds,
        )
