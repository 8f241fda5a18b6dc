#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from typing import Final

_ESCAPES: Final = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\"}


def unescape_string(text: str) -> str:
    r"""Replace the backslash sequences of command line arguments

    Unknown sequences stand for the escaped character itself.

    >>> unescape_string(r"GET / HTTP/1.0\r\n")
    'GET / HTTP/1.0\r\n'
    >>> unescape_string(r"\q")
    'q'
    """
    result: list[str] = []
    chars = iter(text)
    for char in chars:
        if char != "\\":
            result.append(char)
            continue
        escaped = next(chars, "")
        result.append(_ESCAPES.get(escaped, escaped))
    return "".join(result)
