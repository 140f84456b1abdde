"""
Command-line entry point.

    python -m confreg [config.ini]

Loads the configuration before serving; any configuration error aborts
startup.
"""

import argparse
import logging
import sys

import uvicorn

from confreg.api.main import create_app
from confreg.config.settings import DEFAULT_CONFIG_FILE, load_configuration
from confreg.domain.exceptions import ConfigurationError
from confreg.log import setup_logging

logger = logging.getLogger("confreg")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="confreg", description=__doc__.splitlines()[1])
    parser.add_argument("config", nargs="?", default=DEFAULT_CONFIG_FILE)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        configuration = load_configuration(args.config)
    except ConfigurationError as e:
        logger.critical("%s", e)
        return 1

    host, port = configuration.socket_addr
    uvicorn.run(create_app(configuration), host=host, port=port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
