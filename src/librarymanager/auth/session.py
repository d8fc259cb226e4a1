"""Login session for the command interpreter.

A session holds zero or one user. The interpreter owns its session, so
separate interpreters never share login state.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from ..errors import ArgumentError, SessionError

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"
USERNAME_PATTERN = re.compile(r"[A-Za-z]+")


@dataclass(frozen=True)
class User:
    """A logged-in identity."""

    username: str
    is_admin: bool = False

    @classmethod
    def for_username(cls, username: str) -> "User":
        """Create a user, granting admin rights to the reserved admin name."""
        return cls(username=username, is_admin=username == ADMIN_USERNAME)


def is_valid_username(username: str) -> bool:
    """Check that a username consists of ASCII letters only."""
    return USERNAME_PATTERN.fullmatch(username) is not None


class Session:
    """Tracks the current user."""

    def __init__(self):
        self._current_user: Optional[User] = None

    @property
    def current_user(self) -> Optional[User]:
        """Get the logged-in user."""
        return self._current_user

    @property
    def is_logged_in(self) -> bool:
        """Check if a user is logged in."""
        return self._current_user is not None

    @property
    def is_admin(self) -> bool:
        """Check if the logged-in user has admin rights."""
        return self._current_user is not None and self._current_user.is_admin

    def login(self, username: str) -> User:
        """Log a user in.

        Args:
            username: Letters-only username

        Returns:
            The new current user

        Raises:
            SessionError: If a user is already logged in
            ArgumentError: If the username is not letters only
        """
        if self._current_user is not None:
            raise SessionError("User already logged in")
        if not is_valid_username(username):
            raise ArgumentError("Invalid username format")

        self._current_user = User.for_username(username)
        logger.info("Logged in as %s (admin=%s)", username, self._current_user.is_admin)
        return self._current_user

    def logout(self) -> None:
        """Clear the current user."""
        if self._current_user is not None:
            logger.info("Logged out %s", self._current_user.username)
        self._current_user = None
