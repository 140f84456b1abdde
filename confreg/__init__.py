"""confreg - Conference registration submission service."""

__version__ = "0.1.0"
