#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

import enum

__all__ = ["State", "state_text", "translate_state"]


class State(enum.IntEnum):
    """States of a plug-in result. The values are the exit codes of the plug-in"""

    OK = 0
    WARN = 1
    CRIT = 2
    UNKNOWN = 3
    DEPENDENT = 4

    @classmethod
    def worst(cls, *states: State) -> State:
        """Return the 'worst' aggregation of all states

        The regular levels are ordered OK < WARN < CRIT. UNKNOWN and DEPENDENT
        are not part of that scale: they only win over OK. That's why this
        function is just not quite `max`.

        Examples:

        >>> State.worst(State.OK, State.WARN)
        <State.WARN: 1>
        >>> State.worst(State.WARN, State.UNKNOWN, State.CRIT)
        <State.CRIT: 2>
        >>> State.worst(State.OK, State.DEPENDENT, State.UNKNOWN)
        <State.UNKNOWN: 3>
        >>> State.worst()
        <State.OK: 0>

        """
        return max(states, key=_BADNESS.__getitem__, default=cls.OK)


_BADNESS = {
    State.OK: 0,
    State.DEPENDENT: 1,
    State.UNKNOWN: 2,
    State.WARN: 3,
    State.CRIT: 4,
}


def state_text(state: int) -> str:
    match state:
        case State.OK:
            return "OK"
        case State.WARN:
            return "WARNING"
        case State.CRIT:
            return "CRITICAL"
        case State.DEPENDENT:
            return "DEPENDENT"
    return "UNKNOWN"


def translate_state(text: str) -> State:
    """Read a state given by name (ok, warning, ...) or by number (0, 1, ...)

    >>> translate_state("Warning")
    <State.WARN: 1>
    >>> translate_state("3")
    <State.UNKNOWN: 3>
    """
    try:
        return _TRANSLATIONS[text.lower()]
    except KeyError:
        raise ValueError(f"Invalid state: {text!r}") from None


_TRANSLATIONS = {
    "ok": State.OK,
    "0": State.OK,
    "warning": State.WARN,
    "1": State.WARN,
    "critical": State.CRIT,
    "2": State.CRIT,
    "unknown": State.UNKNOWN,
    "3": State.UNKNOWN,
}
