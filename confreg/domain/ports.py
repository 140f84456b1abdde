"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the submission pipeline
requires from infrastructure, and the outcome types it reports back to the
HTTP layer. Adapters implement these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .exceptions import SubmissionError
from .registration import Registration

MESSAGE_SUCCEEDED = "submission succeeded"
MESSAGE_FAILED = "submission failed"


class SubmissionStatus(str, Enum):
    """
    Terminal states of one submission.

    A submission always ends in exactly one of these; nothing is retried.
    """

    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class RejectionReason(str, Enum):
    """Pipeline stage at which a rejected submission failed."""

    VALIDATION = "validation"
    PERSISTENCE = "persistence"
    MAIL = "mail"


@dataclass(frozen=True)
class SubmissionResult:
    """
    Outcome of SubmissionService.submit().

    ``registration_id`` is set whenever the row was persisted, including a
    MAIL rejection, so "submission stored" and "mail confirmed" stay
    separately observable.
    """

    status: SubmissionStatus
    reason: RejectionReason | None = None
    error: SubmissionError | None = None
    registration_id: int | None = None

    @property
    def accepted(self) -> bool:
        return self.status is SubmissionStatus.ACCEPTED

    @property
    def message(self) -> str:
        """User-facing message key."""
        return MESSAGE_SUCCEEDED if self.accepted else MESSAGE_FAILED


class RegistrationRepository(Protocol):
    """Port interface for registration persistence."""

    def ensure_schema(self) -> None:
        """
        Create the registration table if it does not exist.

        Idempotent; safe to call at every process start.

        Raises:
            PersistenceError: If the schema cannot be created
        """
        ...

    def insert(self, registration: Registration) -> int:
        """
        Append one registration row under exclusive access.

        Args:
            registration: Validated registration

        Returns:
            Identifier assigned by the store

        Raises:
            PersistenceError: On any store-level failure
            LockError: If the exclusive-access guard was poisoned
        """
        ...


class ConfirmationMailer(Protocol):
    """Port interface for confirmation mail delivery."""

    def send_confirmation(self, registration: Registration) -> None:
        """
        Send one confirmation mail to the registration's contact address.

        Raises:
            MailBuildError: If the message cannot be constructed
            AddressError: If the configured server address is malformed
            SmtpError: On authentication, network, or transmission failure
        """
        ...
