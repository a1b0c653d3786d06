"""Tests for email syntax validation."""

import pytest

from signin_router.validation import is_valid_email


@pytest.mark.parametrize(
    "email",
    [
        "new@x.com",
        "first.last@example.co.uk",
        "user+tag@sub.domain.io",
        "UPPER@EXAMPLE.ORG",
        "a@b-c.museum",
    ],
)
def test_valid_emails(email: str) -> None:
    assert is_valid_email(email) is True


@pytest.mark.parametrize(
    "email",
    [
        "",
        None,
        "plainaddress",
        "@x.com",
        "user@",
        "user@localhost",
        "user@x.c",
        "user@x.com.",
        "user@x_y.com",
    ],
)
def test_invalid_emails(email: str | None) -> None:
    assert is_valid_email(email) is False
