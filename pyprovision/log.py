# This file is part of pyprovision. See LICENSE file for license information.
"""Line-prefixed console logging for a provisioning run."""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "pyprovision.run"
LEVEL_TAGS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "STATUS",
    logging.WARNING: "WARNING",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "ERROR",
}


class TagFormatter(logging.Formatter):
    """Prefix every line with its severity tag, e.g. ``[STATUS] ``."""

    def __init__(self):
        """Initialize formatter."""
        super().__init__("[%(tag)s] %(message)s")

    def format(self, record):
        """Attach the tag for the record level before formatting."""
        record.tag = LEVEL_TAGS.get(record.levelno, record.levelname)
        return super().format(record)


class _BelowLevelFilter(logging.Filter):
    def __init__(self, level):
        super().__init__()
        self.level = level

    def filter(self, record):
        return record.levelno < self.level


class TaggedStreamHandler(logging.StreamHandler):
    """Stream handler installed by `setup_logging`."""


def _replace_handlers(logger, handlers):
    for handler in list(logger.handlers):
        if isinstance(handler, TaggedStreamHandler):
            logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False


def setup_logging(
    debug: bool = False,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> logging.Logger:
    """Build the logger handed to the workflow.

    Status and debug lines go to stdout, warnings and errors to stderr.
    Debug lines are dropped unless debug is set. Records of the azure SDK
    loggers go through the same handlers, so every line carries its tag.

    Args:
        debug: bool, emit debug lines
        stdout: stream for status lines, defaults to sys.stdout
        stderr: stream for warning and error lines, defaults to sys.stderr

    Returns:
        A configured, non-propagating logger

    """
    formatter = TagFormatter()

    out_handler = TaggedStreamHandler(stdout or sys.stdout)
    out_handler.setFormatter(formatter)
    out_handler.addFilter(_BelowLevelFilter(logging.WARNING))

    err_handler = TaggedStreamHandler(stderr or sys.stderr)
    err_handler.setFormatter(formatter)
    err_handler.setLevel(logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    _replace_handlers(logger, [out_handler, err_handler])
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    azure_logger = logging.getLogger("azure")
    _replace_handlers(azure_logger, [out_handler, err_handler])
    azure_logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    # Avoid polluting the output with azure request dumps
    logging.getLogger(
        "azure.core.pipeline.policies.http_logging_policy"
    ).setLevel(logging.WARNING)

    return logger
