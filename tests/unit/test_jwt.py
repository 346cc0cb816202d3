"""Caller verification tests (JWT sub claim carries the identity id)."""

from datetime import timedelta

import pytest

from app.domain.exceptions import AuthenticationException
from app.infrastructure.security import create_access_token, verify_caller


def test_valid_token_returns_identity() -> None:
    token = create_access_token({"sub": "doc-alice"})
    assert verify_caller(token) == "doc-alice"


def test_missing_token_rejected() -> None:
    with pytest.raises(AuthenticationException, match="Not authenticated"):
        verify_caller(None)


def test_expired_token_rejected() -> None:
    token = create_access_token({"sub": "doc-alice"}, expires_delta=timedelta(seconds=-5))
    with pytest.raises(AuthenticationException, match="Could not validate"):
        verify_caller(token)


def test_tampered_token_rejected() -> None:
    token = create_access_token({"sub": "doc-alice"})
    with pytest.raises(AuthenticationException):
        verify_caller(token[:-4] + "AAAA")


def test_token_without_sub_rejected() -> None:
    token = create_access_token({"name": "no subject"})
    with pytest.raises(AuthenticationException):
        verify_caller(token)
