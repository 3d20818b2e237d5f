"""Logging setup for the command-line entry point.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
CLI decides where records go and at which level.
"""

import logging

from rich.logging import RichHandler

from monitorctl.utils.formatting import err_console

# Root logger of the package; every module logger is a child of it
PACKAGE_LOGGER = "monitorctl"


def get_log_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level.

    ``--verbose`` wins over ``--quiet`` when both are given.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Route package log records to stderr through Rich.

    Calling this more than once replaces the previous handler.

    Args:
        verbose: Show debug records.
        quiet: Only show errors.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=err_console, show_path=verbose, rich_tracebacks=verbose)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(get_log_level(verbose, quiet))
    logger.propagate = False
    return logger
