#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.


import math

import pytest

from mplib.ranges import AlertOn, is_inside, parse_range, Range, should_alert
from mplib.utils.exceptions import MPRangeUnparseable


@pytest.mark.parametrize(
    "text, start, end, alert_on",
    [
        ("10", 0.0, 10.0, AlertOn.OUTSIDE),
        ("10:", 10.0, math.inf, AlertOn.OUTSIDE),
        ("~:10", -math.inf, 10.0, AlertOn.OUTSIDE),
        ("10:20", 10.0, 20.0, AlertOn.OUTSIDE),
        ("@10:20", 10.0, 20.0, AlertOn.INSIDE),
        ("@10", 0.0, 10.0, AlertOn.INSIDE),
        ("~:", -math.inf, math.inf, AlertOn.OUTSIDE),
        ("", 0.0, math.inf, AlertOn.OUTSIDE),
        (":5", 0.0, 5.0, AlertOn.OUTSIDE),
        ("-5:-1", -5.0, -1.0, AlertOn.OUTSIDE),
        ("1.5:2.5e1", 1.5, 25.0, AlertOn.OUTSIDE),
        ("10kB:20MB", 10.0, 20.0, AlertOn.OUTSIDE),
        ("5:5", 5.0, 5.0, AlertOn.OUTSIDE),
    ],
)
def test_parse_range(text: str, start: float, end: float, alert_on: AlertOn) -> None:
    range_ = parse_range(text)
    assert range_.start == start
    assert range_.end == end
    assert range_.alert_on is alert_on
    assert range_.text == text


def test_parse_range_infinity_flags() -> None:
    range_ = parse_range("~:10")
    assert range_.start_infinity
    assert not range_.end_infinity

    range_ = parse_range("10:")
    assert not range_.start_infinity
    assert range_.end_infinity


@pytest.mark.parametrize(
    "text",
    ["20:10", "@20:10", "0:-1", "nan", "1:nan", "nan:5", "@nan:nan"],
)
def test_parse_range_start_not_below_end(text: str) -> None:
    with pytest.raises(MPRangeUnparseable):
        parse_range(text)


def test_unparseable_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_range("20:10")


def test_range_validated_on_construction() -> None:
    with pytest.raises(MPRangeUnparseable):
        Range(start=3.0, end=1.0, alert_on=AlertOn.OUTSIDE, text="")
    # infinite bounds are never out of order
    Range(start=-math.inf, end=-5.0, alert_on=AlertOn.OUTSIDE, text="~:-5")


@pytest.mark.parametrize(
    "text, value, expected",
    [
        ("10:20", 9.9, False),
        ("10:20", 10.0, True),
        ("10:20", 20.0, True),
        ("10:20", 20.1, False),
        ("10:", 9.0, False),
        ("10:", 10.0, True),
        ("10:", 1e30, True),
        ("~:10", -1e30, True),
        ("~:10", 10.0, True),
        ("~:10", 10.5, False),
        ("~:", -1e30, True),
        ("~:", 1e30, True),
    ],
)
def test_is_inside(text: str, value: float, expected: bool) -> None:
    assert is_inside(value, parse_range(text)) is expected


def test_should_alert_outside() -> None:
    range_ = Range(start=0.0, end=10.0, alert_on=AlertOn.OUTSIDE, text="10")
    assert should_alert(5, range_) is False
    assert should_alert(15, range_) is True
    assert should_alert(-1, range_) is True


def test_should_alert_inside() -> None:
    range_ = parse_range("@10:20")
    assert should_alert(15, range_) is True
    assert should_alert(10, range_) is True
    assert should_alert(25, range_) is False


def test_should_alert_never_for_all_values_outside() -> None:
    range_ = parse_range("~:")
    assert not range_.should_alert(-1e300)
    assert not range_.should_alert(1e300)
