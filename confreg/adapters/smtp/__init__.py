"""Mail adapters - Confirmation mail delivery."""

from .console import ConsoleConfirmationMailer
from .sender import SmtpConfirmationMailer

__all__ = ["ConsoleConfirmationMailer", "SmtpConfirmationMailer"]
