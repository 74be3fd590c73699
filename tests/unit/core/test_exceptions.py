"""Unit tests for application exceptions."""

import pytest

from davinci_cli.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    NetworkError,
    ParseError,
    StorageError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("exc_cls", "code"),
    [
        (AuthenticationError, "AUTH_UNAUTHORIZED"),
        (NetworkError, "NET_TRANSPORT_ERROR"),
        (ParseError, "PARSE_INVALID_JSON"),
        (ValidationError, "VAL_VALIDATION_ERROR"),
        (StorageError, "STORAGE_IO_ERROR"),
    ],
)
def test_error_codes(exc_cls: type[ApplicationError], code: str) -> None:
    error = exc_cls("boom")
    assert isinstance(error, ApplicationError)
    assert error.code == code
    assert error.message == "boom"
    assert str(error) == "boom"


def test_validation_error_details_default() -> None:
    assert ValidationError().details == {}
    assert ValidationError("bad", details={"path": "x"}).details == {"path": "x"}


def test_base_error_default_code() -> None:
    assert ApplicationError("boom").code == "SYS_INTERNAL_ERROR"
