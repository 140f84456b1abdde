"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting the shared persistence
gateway, the mailer and the submission service into routes. The gateway and
the mailer are created once during application startup and stored on
app.state.
"""

from fastapi import Request

from confreg.adapters.repository.sqlite import SqliteRegistrationRepository
from confreg.adapters.smtp.console import ConsoleConfirmationMailer
from confreg.adapters.smtp.sender import SmtpConfirmationMailer
from confreg.config.settings import Configuration
from confreg.domain.ports import ConfirmationMailer
from confreg.domain.submission import SubmissionService


def build_mailer(configuration: Configuration) -> ConfirmationMailer:
    """Select the mailer adapter named by the [EMail] backend key."""
    if configuration.email_backend == "console":
        return ConsoleConfirmationMailer(configuration.email_from)
    return SmtpConfirmationMailer(configuration)


def get_repository(request: Request) -> SqliteRegistrationRepository:
    """
    Get the process-wide repository from app state.

    The repository owns the single database connection and is created during
    app lifespan startup.
    """
    return request.app.state.repository


def get_mailer(request: Request) -> ConfirmationMailer:
    return request.app.state.mailer


def get_submission_service(request: Request) -> SubmissionService:
    """Wire the shared repository and mailer into the submission service."""
    return SubmissionService(
        repository=get_repository(request),
        mailer=get_mailer(request),
    )


async def get_form_params(request: Request) -> dict[str, object]:
    """
    Read the submitted form as a flat field -> value mapping.

    Values are strings for regular inputs and UploadFile for file parts. A
    field submitted more than once keeps its last value.
    """
    form = await request.form()
    return dict(form)
