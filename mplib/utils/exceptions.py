#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""User-defined exceptions of the plug-in library."""

__all__ = [
    "MPBailOut",
    "MPException",
    "MPGeneralException",
    "MPInvalidKeyCharacter",
    "MPRangeUnparseable",
    "MPStateWriteFailure",
    "MPTerminate",
    "MPThresholdsFormatError",
    "MPWarnWithinCrit",
]


# never used directly in the code. Just some wrapper to make all of our
# exceptions handleable with one call
class MPException(Exception):
    pass


class MPGeneralException(MPException):
    pass


# This exception is raised when the current program execution should be
# terminated. For example it is raised by the SIGINT signal handler to
# propagate the termination up the callstack.
# No stack trace and no error message is printed. The plug-in ends
# with exit code 0.
class MPTerminate(MPException):
    pass


# This is raised to print an error message and then end the program.
# The plug-in runner catches this at top level and exits with code 3
# (UNKNOWN), in order to be compatible with the monitoring plug-in API.
class MPBailOut(MPException):
    pass


class MPRangeUnparseable(MPGeneralException, ValueError):
    """A range expression could not be parsed.

    The caller decides whether this is fatal, the parser never ends the program.
    """


class MPThresholdsFormatError(MPBailOut):
    pass


class MPWarnWithinCrit(MPBailOut):
    """The warning level is a subset of critical and will never be alerted"""


class MPInvalidKeyCharacter(MPBailOut):
    pass


class MPStateWriteFailure(MPBailOut):
    pass
