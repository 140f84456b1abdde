"""
Submission service - Orchestrates the submission pipeline.

Pipeline (each stage runs at most once, nothing is retried):

    extract & map  --fail-->  REJECTED(validation)
          |
        insert     --fail-->  REJECTED(persistence)
          |
     send mail     --fail-->  REJECTED(mail)   (row stays persisted)
          |
       ACCEPTED

Every failure is caught here and logged with full detail. Callers only see a
SubmissionResult; the generic user-facing message is derived from it.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from .exceptions import LockError, MailError, PersistenceError, ValidationError
from .mapper import map_registration
from .ports import (
    ConfirmationMailer,
    RegistrationRepository,
    RejectionReason,
    SubmissionResult,
    SubmissionStatus,
)

logger = logging.getLogger(__name__)


@dataclass
class SubmissionService:
    """
    Domain service for registration submissions.

    Holds no per-submission state; one instance is shared by all workers.
    """

    repository: RegistrationRepository
    mailer: ConfirmationMailer

    def submit(self, params: Mapping[str, object]) -> SubmissionResult:
        """
        Run one form submission through the pipeline.

        Args:
            params: Submitted form field name -> value

        Returns:
            ACCEPTED, or REJECTED with the failing stage and its error
        """
        try:
            registration = map_registration(params)
        except ValidationError as e:
            logger.warning("Submission rejected: invalid field %s (%s)", e.field, e.reason)
            return self._rejected(RejectionReason.VALIDATION, e)

        try:
            registration_id = self.repository.insert(registration)
        except LockError as e:
            logger.error("Submission rejected: registration store guard poisoned: %s", e, exc_info=e)
            return self._rejected(RejectionReason.PERSISTENCE, e)
        except PersistenceError as e:
            logger.error(
                "Submission rejected: could not store registration for %s: %s",
                registration.email,
                e,
                exc_info=e,
            )
            return self._rejected(RejectionReason.PERSISTENCE, e)

        logger.info("Registration %d stored for %s", registration_id, registration.email)

        try:
            self.mailer.send_confirmation(registration)
        except MailError as e:
            logger.error(
                "Confirmation mail for registration %d (%s) failed: %s: %s",
                registration_id,
                registration.email,
                type(e).__name__,
                e,
                exc_info=e,
            )
            return self._rejected(RejectionReason.MAIL, e, registration_id)

        logger.info("Confirmation mail sent for registration %d", registration_id)
        return SubmissionResult(
            status=SubmissionStatus.ACCEPTED,
            registration_id=registration_id,
        )

    def _rejected(
        self,
        reason: RejectionReason,
        error: Exception,
        registration_id: int | None = None,
    ) -> SubmissionResult:
        return SubmissionResult(
            status=SubmissionStatus.REJECTED,
            reason=reason,
            error=error,
            registration_id=registration_id,
        )
