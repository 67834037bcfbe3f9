"""
Unit tests for Codekeeper HTTP data models.
"""

import os
import sys

import pytest
from pydantic import ValidationError

sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from codekeeper.modules.api import (
    ActiveSessionResponse,
    GenerateCodeRequest,
    StartSessionRequest,
    StartSessionResponse,
    ValidateCodeRequest,
    ValidateCodeResponse,
)
from codekeeper.modules.lifecycle import StartedSession, ValidatedSession
from codekeeper.modules.session import Session


class TestStartSessionRequest:
    """Test session start request model."""

    def test_camel_case_fields(self):
        request = StartSessionRequest.model_validate(
            {"expirationTime": 60, "eventSessionId": "S1"}
        )
        assert request.expiration_time == 60
        assert request.event_session_id == "S1"
        assert request.session_id is None

    def test_field_names_accepted(self):
        request = StartSessionRequest(expiration_time=30, session_id="S2")
        assert request.session_id == "S2"

    def test_numeric_string_expiration(self):
        request = StartSessionRequest.model_validate({"expirationTime": "60"})
        assert request.expiration_time == 60

    def test_numeric_correlation_ids_become_strings(self):
        request = StartSessionRequest.model_validate(
            {"expirationTime": 60, "eventSessionId": 42, "sessionId": 7}
        )
        assert request.event_session_id == "42"
        assert request.session_id == "7"

    def test_boolean_correlation_id_rejected(self):
        with pytest.raises(ValidationError):
            StartSessionRequest.model_validate({"expirationTime": 60, "eventSessionId": True})

    def test_expiration_required(self):
        with pytest.raises(ValidationError):
            StartSessionRequest.model_validate({"eventSessionId": "S1"})

    def test_expiration_must_be_positive(self):
        with pytest.raises(ValidationError):
            StartSessionRequest.model_validate({"expirationTime": 0})


class TestGenerateCodeRequest:
    def test_expiration_optional(self):
        assert GenerateCodeRequest.model_validate({}).expiration_time is None

    def test_expiration_must_be_positive(self):
        with pytest.raises(ValidationError):
            GenerateCodeRequest.model_validate({"expirationTime": -1})


def test_validate_request_code_optional():
    assert ValidateCodeRequest.model_validate({}).code is None
    assert ValidateCodeRequest.model_validate({"code": "123456"}).code == "123456"


def test_validate_request_numeric_code_rejected():
    with pytest.raises(ValidationError):
        ValidateCodeRequest.model_validate({"code": 123456})


class TestResponses:
    """Responses serialize to camelCase."""

    def test_start_session_response(self):
        response = StartSessionResponse.from_started(
            StartedSession(session_id="id-1", code="123456", event_session_id="S1")
        )
        assert response.model_dump(by_alias=True) == {
            "sessionId": "id-1",
            "code": "123456",
            "eventSessionId": "S1",
        }

    def test_validate_code_response(self):
        response = ValidateCodeResponse.from_validated(
            ValidatedSession(event_id="E1", session_id="id-1", event_session_id="S1")
        )
        assert response.model_dump(by_alias=True) == {
            "valid": True,
            "eventId": "E1",
            "sessionId": "id-1",
            "eventSessionId": "S1",
        }

    def test_active_session_response(self):
        session = Session(
            session_id="id-1",
            event_id="E1",
            event_session_id="S1",
            start_time=1700000000000,
            nominal_expiration_seconds=60,
        )
        assert ActiveSessionResponse.from_session(session).model_dump(by_alias=True) == {
            "sessionId": "id-1",
            "eventId": "E1",
            "eventSessionId": "S1",
            "startTime": 1700000000000,
            "expirationTime": 60,
        }
