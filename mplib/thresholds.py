#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

from dataclasses import dataclass

from mplib.ranges import AlertOn, parse_range, Range
from mplib.status import State
from mplib.utils.exceptions import (
    MPRangeUnparseable,
    MPThresholdsFormatError,
    MPWarnWithinCrit,
)

__all__ = ["Threshold", "classify", "render_thresholds", "set_thresholds"]


@dataclass(frozen=True)
class Threshold:
    warning: Range | None = None
    critical: Range | None = None

    @classmethod
    def parse(cls, warning: str | None, critical: str | None) -> Threshold:
        """Parse the warning and critical range expressions

        A missing expression disables the check for its level. Raises
        MPRangeUnparseable if one of the expressions is invalid.
        """
        return cls(
            warning=None if warning is None else parse_range(warning),
            critical=None if critical is None else parse_range(critical),
        )

    def classify(self, value: float) -> State:
        # The critical range always has precedence: a value alerting both
        # ranges is CRIT.
        if self.critical is not None and self.critical.should_alert(value):
            return State.CRIT
        if self.warning is not None and self.warning.should_alert(value):
            return State.WARN
        return State.OK


def classify(value: float, threshold: Threshold) -> State:
    return threshold.classify(value)


def set_thresholds(warning: str | None, critical: str | None) -> Threshold:
    """Create the thresholds of a check program from its options

    Contrary to Threshold.parse() any problem is fatal here: the plug-in
    can not do anything useful with levels that are wrong.
    """
    try:
        threshold = Threshold.parse(warning, critical)
    except MPRangeUnparseable as e:
        raise MPThresholdsFormatError("Range format incorrect") from e

    if (
        threshold.warning is not None
        and threshold.critical is not None
        and _never_warns(threshold.warning, threshold.critical)
    ):
        raise MPWarnWithinCrit("Warning level is a subset of critical and will not be alerted")

    return threshold


def _contains(outer: Range, inner: Range) -> bool:
    return outer.start <= inner.start and inner.end <= outer.end


def _never_warns(warning: Range, critical: Range) -> bool:
    """Is every value alerting the warning range also alerting the critical one?"""
    match warning.alert_on, critical.alert_on:
        case AlertOn.OUTSIDE, AlertOn.OUTSIDE:
            return _contains(warning, critical)
        case AlertOn.INSIDE, AlertOn.INSIDE:
            return _contains(critical, warning)
        case AlertOn.INSIDE, AlertOn.OUTSIDE:
            return warning.end < critical.start or critical.end < warning.start
    # Warning alerts on (-inf, start) and (end, inf), critical inside its range
    below_covered = warning.start_infinity or (
        critical.start_infinity and warning.start <= critical.end
    )
    above_covered = warning.end_infinity or (critical.end_infinity and critical.start <= warning.end)
    return below_covered and above_covered


def _render_range(title: str, range_: Range | None) -> str:
    if range_ is None:
        return f"{title} not set"
    return f"{title}: start={range_.start:g} end={range_.end:g}"


def render_thresholds(name: str, threshold: Threshold | None) -> str:
    if threshold is None:
        return f"{name} - Threshold not set"
    return "{} - {}; {}".format(
        name,
        _render_range("Warning", threshold.warning),
        _render_range("Critical", threshold.critical),
    )
