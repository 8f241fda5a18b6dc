#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Range expressions as given on the command line of the plug-ins

    [@]start:end

The range is alerted if the value is outside of it, or inside of it if
the expression starts with "@". Examples:

    10        alert if < 0 or > 10
    10:       alert if < 10
    ~:10      alert if > 10
    10:20     alert if < 10 or > 20
    @10:20    alert if >= 10 and <= 20
"""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass

from mplib.utils.exceptions import MPRangeUnparseable

__all__ = ["AlertOn", "Range", "is_inside", "parse_range", "should_alert"]

# Everything strtod() would accept as the start of a number (no hex floats)
_NUMBER_PREFIX = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class AlertOn(enum.Enum):
    INSIDE = "inside"
    OUTSIDE = "outside"


@dataclass(frozen=True)
class Range:
    start: float
    end: float
    alert_on: AlertOn
    text: str

    def __post_init__(self) -> None:
        # Written as "not <=" so that NaN bounds are rejected, too
        if not (self.start_infinity or self.end_infinity) and not self.start <= self.end:
            raise MPRangeUnparseable(
                f"Range start {self.start:g} is not lower or equal to its end {self.end:g}"
            )

    @property
    def start_infinity(self) -> bool:
        return self.start == -math.inf

    @property
    def end_infinity(self) -> bool:
        return self.end == math.inf

    def is_inside(self, value: float) -> bool:
        match self.start_infinity, self.end_infinity:
            case False, False:
                return self.start <= value <= self.end
            case False, True:
                return self.start <= value
            case True, False:
                return value <= self.end
        # -inf to inf, so always inside
        return True

    def should_alert(self, value: float) -> bool:
        return self.is_inside(value) == (self.alert_on is AlertOn.INSIDE)


def is_inside(value: float, range_: Range) -> bool:
    return range_.is_inside(value)


def should_alert(value: float, range_: Range) -> bool:
    """Returns True if an alert should be raised based on the range"""
    return range_.should_alert(value)


def _leading_float(text: str) -> float:
    """Interpret the leading numeric part of text, ignore the rest

    >>> _leading_float("12.5kB")
    12.5
    >>> _leading_float("abc")
    0.0
    """
    if (match := _NUMBER_PREFIX.match(text)) is None:
        return 0.0
    return float(match.group())


def parse_range(text: str) -> Range:
    """Parse a range expression

    Raises MPRangeUnparseable if both bounds are finite and the start is
    not lower or equal to the end, which includes NaN bounds.
    """
    alert_on = AlertOn.OUTSIDE
    remainder = text
    if remainder.startswith("@"):
        alert_on = AlertOn.INSIDE
        remainder = remainder[1:]

    start = 0.0
    if ":" in remainder:
        start_str, end_str = remainder.split(":", 1)
        start = -math.inf if remainder.startswith("~") else _leading_float(start_str)
    else:
        end_str = remainder

    end = _leading_float(end_str) if end_str else math.inf

    return Range(start=start, end=end, alert_on=alert_on, text=text)
