#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Extract values from key/value lists like "offset=0.002, jitter = 1.5"

This is used to parse NTP control packet data and performance data strings.
"""

__all__ = ["extract_value"]


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def extract_value(varlist: str, name: str, separator: str = ",") -> str | None:
    """Return the value of the first non-empty field "name=value"

    >>> extract_value("a=1, b = 2 ,c=3", "b")
    '2'
    >>> extract_value("a=,a=5", "a")
    '5'
    >>> extract_value("a=1", "b") is None
    True
    """
    pos = 0
    while True:
        pos = _skip_spaces(varlist, pos)

        if varlist.startswith(name, pos):
            pos = _skip_spaces(varlist, pos + len(name))
            if pos < len(varlist) and varlist[pos] == "=":
                # We matched the key, the value starts after the leading spaces
                pos = _skip_spaces(varlist, pos + 1)
                end = varlist.find(separator, pos)
                if end == -1:
                    end = len(varlist)
                if end > pos:
                    return varlist[pos:end].rstrip()
                # Empty value: try the next occurrence

        if (next_sep := varlist.find(separator, pos)) == -1:
            return None
        pos = next_sep + 1
