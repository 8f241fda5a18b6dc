#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.


import pytest

from mplib.extract import extract_value

# Parts of a NTP control packet answer
NTP_VARLIST = (
    "version=\"ntpd 4.2.8p15\", processor=\"x86_64\", offset=-0.123, "
    "sys_jitter=0.021,\n clk_jitter= 0.015 , stratum=2"
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("offset", "-0.123"),
        ("sys_jitter", "0.021"),
        ("clk_jitter", "0.015"),
        ("stratum", "2"),
        ("processor", '"x86_64"'),
        ("jitter", None),
        ("missing", None),
    ],
)
def test_extract_ntp_values(name: str, expected: str | None) -> None:
    assert extract_value(NTP_VARLIST, name) == expected


@pytest.mark.parametrize(
    "varlist, name, expected",
    [
        ("foo=bar,bar=foo", "foo", "bar"),
        ("foo=bar,bar=foo", "bar", "foo"),
        ("foo=bar,bar=foo,", "bar", "foo"),
        ("foo = bar ,bar=foo", "foo", "bar"),
        ("  foo  =  bar  ", "foo", "bar"),
        ("foo=bar\n", "foo", "bar"),
        ("foo=,foo=bar", "foo", "bar"),
        ("foo=  ,foo=bar", "foo", "bar"),
        ("foo=bar,foo=baz", "foo", "bar"),
        ("foo=", "foo", None),
        ("foo", "foo", None),
        ("foobar=1", "foo", None),
        ("", "foo", None),
    ],
)
def test_extract_value(varlist: str, name: str, expected: str | None) -> None:
    assert extract_value(varlist, name) == expected


def test_extract_value_separator() -> None:
    perfdata = "time=0.01s;1;2;0 size=1234B;;;0"
    assert extract_value(perfdata, "time", " ") == "0.01s;1;2;0"
    assert extract_value(perfdata, "size", " ") == "1234B;;;0"
    assert extract_value("a=1;b=2", "b", ";") == "2"
