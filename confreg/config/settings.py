"""
Application settings - pydantic-settings configuration.

The configuration is read once from an INI file before serving begins:

    [Basic]                     [EMail]
    host = 127.0.0.1            from = registration@example.org
    port = 8080                 server = 192.0.2.10
    db_filename = reg.sqlite3   hello = example.org
    template_folder = templates username = registration
                                password = secret

Values present in the file win; keys the file leaves out may be supplied as
CONFREG_* environment variables (e.g. CONFREG_EMAIL_PASSWORD). The resulting
Configuration is frozen and shared by reference for the lifetime of the process.
"""

import configparser
import os
from functools import lru_cache
from ipaddress import IPv4Address
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from confreg.domain.exceptions import ConfigurationError

DEFAULT_CONFIG_FILE = "confreg.ini"

# (section, key) -> Configuration field
_INI_KEYS = {
    ("Basic", "host"): "host",
    ("Basic", "port"): "port",
    ("Basic", "db_filename"): "db_filename",
    ("Basic", "template_folder"): "template_folder",
    ("EMail", "from"): "email_from",
    ("EMail", "server"): "email_server",
    ("EMail", "hello"): "email_hello",
    ("EMail", "username"): "email_username",
    ("EMail", "password"): "email_password",
    ("EMail", "port"): "email_port",
    ("EMail", "timeout"): "email_timeout",
    ("EMail", "backend"): "email_backend",
    ("EMail", "tls_hostname"): "email_tls_hostname",
}


class Configuration(BaseSettings):
    """Process-wide, read-only application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CONFREG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    # HTTP bind address
    host: str
    port: int = Field(..., ge=0, le=65535)

    # Storage and rendering
    db_filename: str
    template_folder: str

    # Confirmation mail
    email_from: str
    email_server: str  # IPv4 literal, checked when a session is opened
    email_hello: str
    email_username: str
    email_password: SecretStr
    email_port: int = Field(587, ge=1, le=65535)  # SMTP submission port
    email_timeout: float = Field(30.0, gt=0)  # Seconds per blocking SMTP call
    email_backend: Literal["smtp", "console"] = "smtp"
    # Name the server certificate is checked against; defaults to email_server
    email_tls_hostname: str | None = None

    @field_validator("host")
    @classmethod
    def _host_is_ipv4(cls, value: str) -> str:
        IPv4Address(value)
        return value

    @property
    def socket_addr(self) -> tuple[str, int]:
        return self.host, self.port


def _read_ini(path: Path) -> dict[str, str]:
    parser = configparser.ConfigParser(interpolation=None)
    with path.open(encoding="utf-8") as fh:
        parser.read_file(fh)

    values = {}
    for (section, key), field in _INI_KEYS.items():
        if parser.has_option(section, key):
            values[field] = parser.get(section, key)
    return values


def load_configuration(file_name: str | os.PathLike[str]) -> Configuration:
    """
    Load and validate the configuration file.

    Raises:
        ConfigurationError: If the file cannot be read or parsed, or any
            required key is missing or malformed
    """
    path = Path(file_name)
    try:
        values = _read_ini(path)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except configparser.Error as e:
        raise ConfigurationError(f"Malformed configuration file {path}: {e}") from e

    try:
        return Configuration(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e


@lru_cache
def get_configuration() -> Configuration:
    """Get cached configuration loaded from $CONFREG_CONFIG."""
    return load_configuration(os.environ.get("CONFREG_CONFIG", DEFAULT_CONFIG_FILE))
