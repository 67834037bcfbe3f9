"""
API Module - Black Box Interface

Purpose: HTTP request and response shapes
Interface: Pydantic models used by the REST endpoints
Hidden: Field aliasing, conversion from core records

The API module only describes the wire format - it contains no business logic.
"""

from .models import (
    ActiveSessionResponse,
    CodeResponse,
    GenerateCodeRequest,
    MessageResponse,
    StartSessionRequest,
    StartSessionResponse,
    ValidateCodeRequest,
    ValidateCodeResponse,
)

__all__ = [
    "StartSessionRequest",
    "GenerateCodeRequest",
    "ValidateCodeRequest",
    "StartSessionResponse",
    "CodeResponse",
    "ValidateCodeResponse",
    "MessageResponse",
    "ActiveSessionResponse",
]
