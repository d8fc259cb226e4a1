"""Login session and user identity."""

from .session import (
    ADMIN_USERNAME,
    Session,
    User,
    is_valid_username,
)

__all__ = [
    "ADMIN_USERNAME",
    "Session",
    "User",
    "is_valid_username",
]
