#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""The context of one plug-in run

A check program creates exactly one Plugin at startup and passes it to
everything that needs its name, arguments, levels or state:

    def main(argv: Sequence[str]) -> int:
        args = _parse_arguments(argv)
        plugin = Plugin("check_foo", sys.argv)
        threshold = plugin.set_thresholds(args.warning, args.critical)
        store = plugin.enable_state(expected_data_version=1)
        previous = store.read()
        ...
        store.write(payload)
        return plugin.check(value, threshold)

    if __name__ == "__main__":
        sys.exit(run(main))

The Plugin gets the complete command line, program path included, not
the arguments run() passes to main(). Without an explicit key name the
state key is derived from exactly this list, so the same options given
to a plug-in installed at another path use another state file.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Sequence
from typing import NoReturn

from mplib.config import Config, read_config
from mplib.item_state import is_privileged, StateRecord, StateStore
from mplib.status import State, state_text
from mplib.thresholds import set_thresholds, Threshold
from mplib.utils import log
from mplib.utils.exceptions import MPBailOut, MPGeneralException, MPTerminate

__all__ = ["Plugin", "die", "run"]

logger = logging.getLogger("mplib.plugin")


class Plugin:
    """argv is the command line as in sys.argv, see the module documentation"""

    def __init__(self, name: str, argv: Sequence[str], config: Config | None = None) -> None:
        self.name = name
        self.argv = list(argv)
        self.config = read_config(os.environ, is_privileged()) if config is None else config
        self.thresholds: Threshold | None = None
        self.state: StateStore | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, {self.argv!r})"

    def set_args(self, argv: Sequence[str]) -> None:
        """Replace the arguments, e.g. after extra options have been merged in

        Only keys enabled afterwards are derived from the new arguments.
        """
        self.argv = list(argv)

    def setup_logging(self) -> None:
        log.setup_console_logging()
        log.logger.setLevel(log.verbosity_to_log_level(self.config.verbosity))

    def set_thresholds(self, warning: str | None, critical: str | None) -> Threshold:
        self.thresholds = set_thresholds(warning, critical)
        return self.thresholds

    def check(self, value: float, threshold: Threshold | None = None) -> State:
        if threshold is None:
            threshold = self.thresholds
        if threshold is None:
            raise MPGeneralException("No thresholds set for %s" % self.name)
        return threshold.classify(value)

    def enable_state(self, keyname: str | None = None, expected_data_version: int = 0) -> StateStore:
        self.state = StateStore.enable(
            self.name,
            self.argv,
            keyname=keyname,
            expected_data_version=expected_data_version,
            prefix=self.config.state_dir_prefix,
        )
        logger.debug("State of %s is kept in %s", self.name, self.state.key.path)
        return self.state

    def _enabled_state(self) -> StateStore:
        if self.state is None:
            raise MPGeneralException("This requires enable_state() to be called")
        return self.state

    def state_read(self, now: float | None = None) -> StateRecord | None:
        return self._enabled_state().read(now=now)

    def state_write(self, payload: str, timestamp: int | None = None) -> None:
        self._enabled_state().write(payload, timestamp=timestamp)


def die(state: State, message: str) -> NoReturn:
    """Print the message and end the plug-in with the exit code of state"""
    sys.stdout.write("%s\n" % message)
    sys.stdout.flush()
    raise SystemExit(int(state))


def run(
    plugin_main: Callable[[Sequence[str]], int],
    argv: Sequence[str] | None = None,
) -> int:
    """Call the main function of a check program and return its exit code

    Fatal conditions of the library end the plug-in with UNKNOWN.
    """
    try:
        return plugin_main(sys.argv[1:] if argv is None else argv)
    except MPTerminate:
        return 0
    except MPBailOut as e:
        sys.stdout.write("%s - %s\n" % (state_text(State.UNKNOWN), e))
        return State.UNKNOWN
