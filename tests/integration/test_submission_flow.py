"""
Integration tests for the submission pipeline.

Runs submissions through the real SQLite repository and the real SMTP
adapter (against an address where nothing listens) or the console mailer,
both directly and through the FastAPI application.
"""

import logging
import socket
import sqlite3
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from confreg.adapters.repository.sqlite import SqliteRegistrationRepository
from confreg.adapters.smtp.sender import SmtpConfirmationMailer
from confreg.api.main import create_app
from confreg.config.settings import Configuration
from confreg.domain.exceptions import ConfigurationError, PersistenceError, SmtpError
from confreg.domain.ports import RejectionReason, SubmissionStatus
from confreg.domain.submission import SubmissionService


def unused_port() -> int:
    """A local TCP port with no listener."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def row_count(db_filename: str) -> int:
    conn = sqlite3.connect(db_filename)
    try:
        return conn.execute("SELECT COUNT(*) FROM registration").fetchone()[0]
    finally:
        conn.close()


@pytest.fixture
def unreachable_smtp(configuration: Configuration) -> Configuration:
    """Configuration whose SMTP server refuses connections."""
    return configuration.model_copy(
        update={"email_server": "127.0.0.1", "email_port": unused_port(), "email_timeout": 2.0}
    )


@pytest.fixture
def console_mail(configuration: Configuration) -> Configuration:
    return configuration.model_copy(update={"email_backend": "console"})


class TestMailFailureKeepsRegistration:
    """Mail failure after a successful insert does not roll the row back."""

    def test_row_persists_when_smtp_unreachable(
        self, unreachable_smtp: Configuration, form_params: dict[str, object]
    ) -> None:
        """Orchestrator reports REJECTED(mail) while the row stays stored."""
        repository = SqliteRegistrationRepository(unreachable_smtp.db_filename)
        repository.ensure_schema()
        service = SubmissionService(
            repository=repository,
            mailer=SmtpConfirmationMailer(unreachable_smtp),
        )

        try:
            result = service.submit(form_params)
        finally:
            repository.close()

        assert result.status is SubmissionStatus.REJECTED
        assert result.reason is RejectionReason.MAIL
        assert isinstance(result.error, SmtpError)
        assert result.registration_id == 1
        assert row_count(unreachable_smtp.db_filename) == 1


class TestApplication:
    """End-to-end tests through the FastAPI application."""

    @pytest.fixture
    def client(self, console_mail: Configuration) -> Generator[TestClient, None, None]:
        with TestClient(create_app(console_mail)) as client:
            yield client

    def test_accepted_submission(
        self,
        client: TestClient,
        console_mail: Configuration,
        form_params: dict[str, object],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Valid form is stored and confirmed."""
        with caplog.at_level(logging.INFO):
            response = client.post("/", data=form_params)

        assert response.status_code == 200
        assert response.json()["message"] == "submission succeeded"
        assert row_count(console_mail.db_filename) == 1
        assert "[CONFIRMATION]" in caplog.text
        assert "bob.smith@example.org" in caplog.text

    def test_invalid_submission_stores_nothing(
        self, client: TestClient, console_mail: Configuration, form_params: dict[str, object]
    ) -> None:
        """Rejected yes/no value yields 400 and no row."""
        form_params["conference_dinner"] = "Yes"

        response = client.post("/", data=form_params)

        assert response.status_code == 400
        assert response.json()["message"] == "submission failed"
        assert row_count(console_mail.db_filename) == 0

    def test_health_counts_registrations(
        self, client: TestClient, form_params: dict[str, object]
    ) -> None:
        """Health endpoint reports the stored row count."""
        client.post("/", data=form_params)
        client.post("/", data=form_params)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "registrations": 2}

    def test_schema_survives_restart(
        self, console_mail: Configuration, form_params: dict[str, object]
    ) -> None:
        """A second startup on the same file keeps earlier rows."""
        with TestClient(create_app(console_mail)) as client:
            client.post("/", data=form_params)
        with TestClient(create_app(console_mail)) as client:
            client.post("/", data=form_params)
            assert client.get("/health").json()["registrations"] == 2

    def test_mail_failure_returns_500_but_stores(
        self, unreachable_smtp: Configuration, form_params: dict[str, object]
    ) -> None:
        """Unreachable SMTP fails the request; the row remains."""
        with TestClient(create_app(unreachable_smtp)) as client:
            response = client.post("/", data=form_params)

        assert response.status_code == 500
        assert response.json() == {
            "message": "submission failed",
            "detail": "an error occurred, try again later",
        }
        assert row_count(unreachable_smtp.db_filename) == 1

    def test_unusable_database_is_fatal_at_startup(
        self, configuration: Configuration, tmp_path: Path
    ) -> None:
        """Startup aborts when the store cannot be opened."""
        broken = configuration.model_copy(
            update={"db_filename": str(tmp_path / "missing" / "db.sqlite3")}
        )

        with pytest.raises(PersistenceError), TestClient(create_app(broken)):
            pass

    def test_missing_template_folder_is_fatal_at_startup(
        self, console_mail: Configuration, tmp_path: Path
    ) -> None:
        """Startup aborts before opening the store when templates are missing."""
        broken = console_mail.model_copy(update={"template_folder": str(tmp_path / "nowhere")})

        with pytest.raises(ConfigurationError), TestClient(create_app(broken)):
            pass
        assert not Path(broken.db_filename).exists()
