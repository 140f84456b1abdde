"""Repository adapters - Database implementations."""

from .sqlite import SqliteRegistrationRepository

__all__ = ["SqliteRegistrationRepository"]
