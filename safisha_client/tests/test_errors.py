from __future__ import annotations

from http import HTTPStatus

import httpx
import pytest
from pydantic import ValidationError as PydanticValidationError

from safisha_client.interfaces.dto import LoginRequestDTO
from safisha_client.shared.errors import (
    AppError,
    MissingRefreshTokenError,
    RequestError,
    ValidationError,
    error_from_response,
    extract_error_message,
    raise_validation_error,
)


@pytest.mark.parametrize(
    ("status", "text", "expected"),
    [
        (400, '{"message": "Email is required", "error": "Bad Request"}', "Email is required"),
        (400, '{"message": ["email must be an email", "password too short"]}',
         "email must be an email, password too short"),
        (404, '{"error": "not found"}', "not found"),
        (502, "Bad gateway", "Bad gateway"),
        (500, "", "HTTP error! status: 500"),
    ],
)
def test_extract_error_message_resolution_order(status, text, expected) -> None:
    message, _ = extract_error_message(status, text)
    assert message == expected


def test_extract_error_message_body() -> None:
    assert extract_error_message(404, '{"error": "x"}')[1] == {"error": "x"}
    assert extract_error_message(502, "Bad gateway")[1] == "Bad gateway"
    assert extract_error_message(500, "")[1] is None


def test_error_from_response_keeps_status_and_body() -> None:
    error = error_from_response(httpx.Response(409, json={"message": "exists"}))

    assert isinstance(error, AppError)
    assert error.status == 409
    assert error.http_status is HTTPStatus.CONFLICT
    assert error.body == {"message": "exists"}
    assert error.to_dict() == {
        "error": "request_failed",
        "message": "exists",
        "context": {"status": 409},
    }


def test_unknown_status_has_no_http_status() -> None:
    assert RequestError("odd", status=599).http_status is None


def test_domain_error_code_from_class() -> None:
    error = MissingRefreshTokenError()

    assert error.code == "refresh_token_missing"
    assert error.message == "refresh_token_missing"


def test_raise_validation_error_lists_fields() -> None:
    with pytest.raises(PydanticValidationError) as exc_info:
        LoginRequestDTO.model_validate({"identifier": "jane"})

    with pytest.raises(ValidationError) as raised:
        raise_validation_error(exc_info.value)

    assert raised.value.message == "invalid password"
    assert raised.value.context["fields"] == ["password"]
    assert raised.value.__cause__ is exc_info.value
