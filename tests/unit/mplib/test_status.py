#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.


import pytest

from mplib.status import State, state_text, translate_state


@pytest.mark.parametrize(
    "states, expected",
    [
        ((), State.OK),
        ((State.OK, State.OK), State.OK),
        ((State.OK, State.WARN), State.WARN),
        ((State.WARN, State.CRIT, State.OK), State.CRIT),
        ((State.UNKNOWN, State.CRIT), State.CRIT),
        ((State.UNKNOWN, State.WARN), State.WARN),
        ((State.OK, State.UNKNOWN), State.UNKNOWN),
        ((State.DEPENDENT, State.OK), State.DEPENDENT),
        ((State.DEPENDENT, State.UNKNOWN), State.UNKNOWN),
    ],
)
def test_worst(states: tuple[State, ...], expected: State) -> None:
    assert State.worst(*states) is expected


def test_exit_codes() -> None:
    assert [int(s) for s in State] == [0, 1, 2, 3, 4]


@pytest.mark.parametrize(
    "state, text",
    [
        (State.OK, "OK"),
        (State.WARN, "WARNING"),
        (State.CRIT, "CRITICAL"),
        (State.UNKNOWN, "UNKNOWN"),
        (State.DEPENDENT, "DEPENDENT"),
        (2, "CRITICAL"),
        (42, "UNKNOWN"),
        (-1, "UNKNOWN"),
    ],
)
def test_state_text(state: int, text: str) -> None:
    assert state_text(state) == text


@pytest.mark.parametrize(
    "text, state",
    [
        ("OK", State.OK),
        ("ok", State.OK),
        ("0", State.OK),
        ("Warning", State.WARN),
        ("1", State.WARN),
        ("CRITICAL", State.CRIT),
        ("2", State.CRIT),
        ("unknown", State.UNKNOWN),
        ("3", State.UNKNOWN),
    ],
)
def test_translate_state(text: str, state: State) -> None:
    assert translate_state(text) is state


@pytest.mark.parametrize("text", ["", "4", "warn", "dependent", " ok"])
def test_translate_state_invalid(text: str) -> None:
    with pytest.raises(ValueError):
        translate_state(text)
