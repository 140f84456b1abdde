"""
SMTP mailer adapter - Implements ConfirmationMailer protocol.

Sends one confirmation mail per call over a fresh SMTP session:

    connect email_server:email_port (IPv4 literal, EHLO as email_hello)
      -> STARTTLS (mandatory; certificate checked against email_tls_hostname,
         or against email_server when unset)
      -> AUTH CRAM-MD5 (email_username / email_password)
      -> send one UTF-8 message
      -> QUIT

No connection reuse, no retry, no queuing. Failures surface as
MailBuildError, AddressError or SmtpError.
"""

import logging
import smtplib
import ssl
from collections.abc import Callable
from email.errors import HeaderParseError
from email.headerregistry import Address
from email.message import EmailMessage
from ipaddress import AddressValueError, IPv4Address

from confreg.config.settings import Configuration
from confreg.domain.confirmation import render_confirmation
from confreg.domain.exceptions import AddressError, MailBuildError, SmtpError
from confreg.domain.registration import Registration

logger = logging.getLogger(__name__)


class SmtpConfirmationMailer:
    """
    Implements ConfirmationMailer protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        configuration: Configuration,
        smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP,
    ) -> None:
        """
        Args:
            configuration: Shared, read-only process configuration
            smtp_factory: Session constructor (smtplib.SMTP signature)
        """
        self._configuration = configuration
        self._smtp_factory = smtp_factory

    def send_confirmation(self, registration: Registration) -> None:
        message = self.build_message(registration)
        server = self.server_address()
        self._transmit(server, message)
        logger.info("Confirmation mail sent to %s via %s", registration.email, server)

    def build_message(self, registration: Registration) -> EmailMessage:
        """
        Build the confirmation mail.

        Raises:
            MailBuildError: If an address or header value is unusable
        """
        rendered = render_confirmation(registration, self._configuration.email_from)
        try:
            sender = _parse_address(rendered.sender)
            recipient = _parse_address(rendered.recipient, registration.full_name)

            message = EmailMessage()
            message["From"] = sender
            message["To"] = recipient
            message["Subject"] = rendered.subject
            message.set_content(rendered.body, charset="utf-8")
        except (ValueError, HeaderParseError) as e:
            raise MailBuildError(f"Cannot build confirmation mail: {e}") from e
        return message

    def server_address(self) -> str:
        """
        Resolve the configured mail server.

        Raises:
            AddressError: If email_server is not an IPv4 literal
        """
        server = self._configuration.email_server
        try:
            return str(IPv4Address(server))
        except AddressValueError as e:
            raise AddressError(f"Invalid mail server address {server!r}: {e}") from e

    def _transmit(self, server: str, message: EmailMessage) -> None:
        config = self._configuration
        try:
            with self._smtp_factory(
                server,
                config.email_port,
                local_hostname=config.email_hello,
                timeout=config.email_timeout,
            ) as smtp:
                smtp.ehlo()
                if not smtp.has_extn("starttls"):
                    raise SmtpError(f"Mail server {server} does not offer STARTTLS")
                smtp.starttls(context=_tls_context(config.email_tls_hostname))
                smtp.ehlo()

                smtp.user = config.email_username
                smtp.password = config.email_password.get_secret_value()
                smtp.auth("CRAM-MD5", smtp.auth_cram_md5)

                smtp.send_message(message)
        except (smtplib.SMTPException, OSError, UnicodeError) as e:
            # smtplib sends commands and CRAM-MD5 credentials as ASCII
            raise SmtpError(f"SMTP session with {server} failed: {e}") from e


def _parse_address(addr_spec: str, display_name: str = "") -> Address:
    address = Address(display_name=display_name, addr_spec=addr_spec)
    if not address.username or not address.domain:
        raise ValueError(f"{addr_spec!r} is not a complete mail address")
    return address


class _VerifiedNameContext(ssl.SSLContext):
    """TLS client context that checks the certificate against a fixed name."""

    verified_name: str

    def wrap_socket(self, sock, *args, **kwargs):  # type: ignore[no-untyped-def]
        kwargs["server_hostname"] = self.verified_name
        return super().wrap_socket(sock, *args, **kwargs)


def _tls_context(verified_name: str | None) -> ssl.SSLContext:
    if not verified_name:
        return ssl.create_default_context()
    context = _VerifiedNameContext(ssl.PROTOCOL_TLS_CLIENT)
    context.load_default_certs()
    context.verified_name = verified_name
    return context
