"""
Domain layer - Pure submission pipeline logic.

This package contains field extraction, registration mapping, confirmation
rendering, and the submission orchestrator. It defines its own port
interfaces so that storage and mail delivery stay swappable adapters.
"""

from .exceptions import (
    AddressError,
    ConfigurationError,
    InvalidValue,
    LockError,
    MailBuildError,
    MailError,
    MissingField,
    PersistenceError,
    SmtpError,
    SubmissionError,
    ValidationError,
)
from .mapper import map_registration
from .ports import (
    ConfirmationMailer,
    RegistrationRepository,
    RejectionReason,
    SubmissionResult,
    SubmissionStatus,
)
from .registration import Meal, Presentation, PriceCategory, Registration, Title
from .submission import SubmissionService

__all__ = [
    "AddressError",
    "ConfigurationError",
    "ConfirmationMailer",
    "InvalidValue",
    "LockError",
    "MailBuildError",
    "MailError",
    "Meal",
    "MissingField",
    "PersistenceError",
    "Presentation",
    "PriceCategory",
    "Registration",
    "RegistrationRepository",
    "RejectionReason",
    "SmtpError",
    "SubmissionError",
    "SubmissionResult",
    "SubmissionService",
    "SubmissionStatus",
    "Title",
    "map_registration",
]
