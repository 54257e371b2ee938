"""Logging setup with Rich handler and shared stderr console."""

import logging

from rich.console import Console

stderr_console = Console(stderr=True)

# Loggers configured by setup_logging (module loggers propagate to these)
LOGGER_NAMES = ('app', 'services')


def setup_logging(level='info', log_file=None):
    """Configure the application loggers with RichHandler and optional file output."""
    from rich.logging import RichHandler

    log_level = getattr(logging, str(level).upper(), logging.INFO)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(log_level)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        rich_handler = RichHandler(
            console=stderr_console,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        rich_handler.setLevel(log_level)
        logger.addHandler(rich_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
            )
            logger.addHandler(file_handler)
