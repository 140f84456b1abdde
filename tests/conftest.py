"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A valid registration form and the Registration it maps to
- A Configuration built without touching the filesystem
- SQLite repositories backed by a temporary database file
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from confreg.adapters.repository.sqlite import SqliteRegistrationRepository
from confreg.config.settings import Configuration
from confreg.domain.registration import Meal, Presentation, PriceCategory, Registration, Title


@pytest.fixture
def form_params() -> dict[str, object]:
    """A complete, valid registration form submission."""
    return {
        "last_name": "Smith",
        "first_name": "Bob",
        "email": "bob.smith@example.org",
        "institution": "University of Example",
        "project": "P-42",
        "country": "New Zealand",
        "course": "",
        "price_category": "student",
        "title": "dr",
        "presentation": "poster",
        "meal": "vegetarian",
        "pay_cash": "yes",
        "conference_dinner": "no",
        "more_info": "Arriving late on Monday.",
    }


@pytest.fixture
def registration() -> Registration:
    """The Registration that form_params maps to."""
    return Registration(
        last_name="Smith",
        first_name="Bob",
        email="bob.smith@example.org",
        institution="University of Example",
        project="P-42",
        country="New Zealand",
        course=None,
        price_category=PriceCategory.STUDENT,
        title=Title.DR,
        presentation=Presentation.POSTER,
        meal=Meal.VEGETARIAN,
        pay_cash=True,
        conference_dinner=False,
        more_info="Arriving late on Monday.",
    )


@pytest.fixture
def configuration(tmp_path: Path) -> Configuration:
    """Configuration pointing at a temporary database file."""
    (tmp_path / "templates").mkdir()
    return Configuration(
        host="127.0.0.1",
        port=8080,
        db_filename=str(tmp_path / "registrations.sqlite3"),
        template_folder=str(tmp_path / "templates"),
        email_from="registration@example.org",
        email_server="192.0.2.10",
        email_hello="example.org",
        email_username="registration",
        email_password="secret",
    )


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.sqlite3"


@pytest.fixture
def repository(db_path: Path) -> Generator[SqliteRegistrationRepository, None, None]:
    """Repository with schema, closed after the test."""
    repo = SqliteRegistrationRepository(db_path)
    repo.ensure_schema()
    yield repo
    repo.close()
