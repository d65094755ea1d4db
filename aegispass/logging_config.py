"""
Logging setup for the aegispass command-line tool.

stdout carries only the generated password, so every handler here writes
to stderr or to a file. Library modules never log secrets, labels, seeds
or passwords, only algorithm names, lengths and group counts.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

CONSOLE_FORMAT = "aegispass: %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the 'aegispass' logger for one CLI run and return it.

    The console shows warnings only, or everything down to DEBUG with
    ``verbose``. A ``log_file`` always receives the full DEBUG trace.
    Calling this again replaces the handlers of the previous call.
    """
    logger = logging.getLogger("aegispass")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.debug("Writing debug log to %s", log_file)

    return logger
