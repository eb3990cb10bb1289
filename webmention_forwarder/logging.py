"""Process-wide logging for the forwarder.

``configure_logging`` applies LoggingConfig (YAML logging.* or env LOGGING_LEVEL,
LOGGING_FORMAT) to the root logger once at startup and returns the package
logger. main.py hands that logger to WebmentionForwarderApp, which gives each
component a child of it.
"""

import logging

from webmention_forwarder.config import LoggingConfig

LOGGER_NAME = "webmention_forwarder"

# Supported levels only (DEBUG, INFO, WARNING, ERROR)
LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# urllib3 logs every connection at DEBUG; only show it when we debug too.
NOISY_LOGGERS = ("urllib3",)


def _resolve_level(level: str) -> int:
    """Map level name to logging constant; unknown names fall back to INFO."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Configure the root logger and return the ``webmention_forwarder`` logger."""
    level = _resolve_level(config.level)
    logging.basicConfig(level=level, format=config.format or DEFAULT_FORMAT, force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if level == logging.DEBUG else logging.WARNING)
    return logging.getLogger(LOGGER_NAME)
