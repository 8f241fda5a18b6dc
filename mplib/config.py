#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from mplib.item_state import resolve_path_prefix
from mplib.utils import paths


class Config(BaseModel, frozen=True):
    state_dir_prefix: Path = paths.default_state_dir
    verbosity: int = Field(default=0, ge=0, le=3)


DEFAULT_CONFIG = Config()


def read_config(environ: Mapping[str, str], privileged: bool, verbosity: int = 0) -> Config:
    """Settings of one plug-in run, taken from its environment"""
    return Config(
        state_dir_prefix=resolve_path_prefix(environ, privileged),
        verbosity=verbosity,
    )
