"""Pytest configuration and shared fixtures.

This module provides fixtures for testing the library manager, including
a fixed clock, an empty catalog and ready-made interpreters.
"""

import os
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Generator

import pytest

from librarymanager.auth.session import Session
from librarymanager.catalog.manager import Catalog
from librarymanager.config import Config, reset_config
from librarymanager.interpreter.processor import CommandInterpreter

# Fixed "current time" for deterministic due dates
NOW = datetime(2025, 3, 10, 14, 30, tzinfo=timezone.utc)


class FakeClock:
    """Clock returning a settable time."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: float) -> None:
        """Move the clock forward."""
        self.now = self.now + timedelta(days=days)


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_config() -> Generator[None, None, None]:
    """Reset the global config around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def local_timezone() -> Generator[Callable[[str], None], None, None]:
    """Pin the process timezone to UTC; the yielded setter switches zones."""
    original = os.environ.get("TZ")

    def _set(name: str) -> None:
        if not hasattr(time, "tzset"):
            pytest.skip("time.tzset is not available on this platform")
        os.environ["TZ"] = name
        time.tzset()

    if hasattr(time, "tzset"):
        _set("UTC")
    yield _set
    if hasattr(time, "tzset"):
        if original is None:
            os.environ.pop("TZ", None)
        else:
            os.environ["TZ"] = original
        time.tzset()


@pytest.fixture
def config() -> Config:
    """Default configuration, independent of the environment."""
    return Config.defaults()


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at NOW."""
    return FakeClock()


@pytest.fixture
def catalog() -> Catalog:
    """Create an empty catalog."""
    return Catalog()


@pytest.fixture
def session() -> Session:
    """Create a session with nobody logged in."""
    return Session()


@pytest.fixture
def interpreter(catalog: Catalog, session: Session, config: Config, clock: FakeClock) -> CommandInterpreter:
    """Create an interpreter with nobody logged in."""
    return CommandInterpreter(catalog=catalog, session=session, config=config, clock=clock)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def stocked_catalog(catalog: Catalog) -> Catalog:
    """Catalog holding three books with ids 1-3."""
    catalog.add_book(100, "Java", "Gosling", 1995)
    catalog.add_book(200, "Python", "Rossum", 1991)
    catalog.add_book(300, "Lisp", "McCarthy", 1958)
    return catalog


@pytest.fixture
def login(interpreter: CommandInterpreter):
    """Switch the logged-in user without checking the reply."""

    def _login(username: str) -> None:
        if interpreter.session.is_logged_in:
            interpreter.process_line("logout")
        interpreter.process_line(f"log {username}")

    return _login
