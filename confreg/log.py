"""Process-wide logging setup for the command-line entry point."""

import logging
import sys


def setup_logging(level: int = logging.INFO) -> None:
    """Configure root logging to stdout."""
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

    # Access lines duplicate the submission log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
