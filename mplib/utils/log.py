#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
import sys
from typing import IO

# Just for reference, the predefined logging levels:
#
# syslog        Python         added to Python
# --------------------------------------------
# crit   2      CRITICAL 50
# err    3      ERROR    40
# warn   4      WARNING  30                 <= default level in Python
# info   6      INFO     20
#                              VERBOSE  15
# debug  7      DEBUG    10
#
# Plug-ins have three verbosity levels (-v, -vv, -vvv). The first one is
# mapped to INFO, so we need an additional level between INFO and DEBUG.
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger("mplib")


def get_formatter(
    format_str: str = "%(asctime)s [%(levelno)s] [%(name)s %(process)d] %(message)s",
) -> logging.Formatter:
    """Returns a new message formater instance that uses the standard
    log format by default. You can also set another format if you like."""
    return logging.Formatter(format_str)


def clear_console_logging() -> None:
    logger.handlers[:] = []
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.WARNING)


# Set default logging handler to avoid "No handler found" warnings.
clear_console_logging()


def setup_console_logging() -> None:
    """Write all log messages to stderr without date/time and logger name.

    The standard output of a plug-in is reserved for the status line and
    the performance data, so the log never goes there.
    """
    setup_logging_handler(sys.stderr, get_formatter("%(message)s"))


def setup_logging_handler(stream: IO[str], formatter: logging.Formatter | None = None) -> None:
    """Write all log messages to the given stream in the standard log format"""
    if formatter is None:
        formatter = get_formatter("%(asctime)s [%(levelno)s] [%(name)s] %(message)s")

    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(formatter)

    del logger.handlers[:]  # Remove all previously existing handlers
    logger.addHandler(handler)


def verbosity_to_log_level(verbosity: int) -> int:
    """Values for "verbosity":

      0: enables WARNING and above
      1: enables INFO and above
      2: enables VERBOSE and above
      3: enables DEBUG and above (ALL messages)
    """
    if verbosity == 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    if verbosity == 2:
        return VERBOSE
    if verbosity == 3:
        return logging.DEBUG
    raise ValueError()
