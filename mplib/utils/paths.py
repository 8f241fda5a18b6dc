#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""This module serves the locations and the environment variables that
influence them to all components of the plug-in library."""

from pathlib import Path
from typing import Final

# Compiled-in location of the per plug-in state files
default_state_dir: Final = Path("/usr/local/nagios/var")

state_path_env: Final = "MP_STATE_PATH"
# This is the former name, kept for backward-compatibility
legacy_state_path_env: Final = "NAGIOS_PLUGIN_STATE_DIRECTORY"
