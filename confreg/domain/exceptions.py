"""
Domain exceptions - Semantic error types for the submission pipeline.

This module defines one closed hierarchy rooted at SubmissionError. Each
variant names the pipeline stage it originates from so the orchestrator can
translate it into a rejection reason without leaking infrastructure details.
"""


class SubmissionError(Exception):
    """Base class for submission pipeline errors."""

    pass


class ValidationError(SubmissionError):
    """A form field is missing or malformed."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class MissingField(ValidationError):
    """Form field is absent, blank, or not a scalar string."""

    def __init__(self, field: str) -> None:
        super().__init__(field, "missing")


class InvalidValue(ValidationError):
    """Form field is present but holds a value outside its accepted set."""

    def __init__(self, field: str, got: object) -> None:
        super().__init__(field, f"invalid value {got!r}")
        self.got = got


class PersistenceError(SubmissionError):
    """Store-level failure while writing a registration."""

    pass


class LockError(SubmissionError):
    """Exclusive-access guard was poisoned by a previous holder."""

    pass


class MailError(SubmissionError):
    """Base class for confirmation mail failures."""

    pass


class MailBuildError(MailError):
    """Confirmation message could not be constructed."""

    pass


class AddressError(MailError):
    """Configured mail server address is malformed."""

    pass


class SmtpError(MailError):
    """Authentication, network, or transmission failure."""

    pass


class ConfigurationError(Exception):
    """Configuration file is missing, incomplete, or malformed."""

    pass
