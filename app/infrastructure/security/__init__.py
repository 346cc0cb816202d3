"""Security: JWT creation and caller verification."""

from app.infrastructure.security.jwt import (
    create_access_token,
    verify_caller,
    verify_token,
)

__all__ = [
    "create_access_token",
    "verify_caller",
    "verify_token",
]
