#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""
These functions allow plug-ins to keep a memory until the next time
the plug-in is being executed. The most frequent use case is the
computation of rates from two succeeding counter values.

Every plug-in invocation is a new process, so the memory is kept in a
small file per state key:

    <prefix>/<effective uid>/<plug-in name>/<key name>

The key name is either given by the plug-in or derived from all of its
command line arguments, so that differently parametrized invocations of
the same plug-in don't share their state.

The file holds a comment line, the format version, the data version of
the plug-in, the time stamp and one line of free form data:

    # NP State file
    1
    3
    1700000000
    payload

A file that can not be used (missing, other versions, time stamp in the
future, garbage) means "no previous state", never an error. There is no
locking: concurrent writers never corrupt the file, but the last one wins.
"""

from __future__ import annotations

import hashlib
import logging
import os
import re
import string
import time
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Protocol

from mplib.utils import paths, store
from mplib.utils.exceptions import (
    MPGeneralException,
    MPInvalidKeyCharacter,
    MPStateWriteFailure,
)
from mplib.utils.log import VERBOSE

__all__ = [
    "Digest",
    "FORMAT_VERSION",
    "MAX_PAYLOAD_LENGTH",
    "StateKey",
    "StateRecord",
    "StateStore",
    "derive_key",
    "is_privileged",
    "read_state",
    "resolve_path_prefix",
    "sha256_digest",
    "write_state",
]

logger = logging.getLogger("mplib.item_state")

FORMAT_VERSION: Final = 1
MAX_PAYLOAD_LENGTH: Final = 1023  # bytes
STATE_FILE_HEADER: Final = "# NP State file"

# Key names are used as file names
VALID_KEY_CHARACTERS: Final = string.ascii_letters + "_" + string.digits
KEY_DIGEST_LENGTH: Final = 20  # bytes, rendered as 40 hex characters

_LEADING_INT = re.compile(rb"\s*[+-]?\d+")


class Digest(Protocol):
    """A deterministic, collision resistant hash of at least 160 bits"""

    def __call__(self, chunks: Iterable[bytes]) -> bytes: ...


def sha256_digest(chunks: Iterable[bytes]) -> bytes:
    h = hashlib.sha256()
    for chunk in chunks:
        h.update(chunk)
    return h.digest()


def derive_key(
    explicit_name: str | None,
    argv: Sequence[str],
    digest: Digest = sha256_digest,
) -> str:
    """Return the name of the state key of this plug-in invocation

    Without an explicit name, the key is a hash over all arguments. They are
    concatenated without separator: ["ab", "c"] and ["a", "bc"] give the
    same key.
    """
    if explicit_name is not None:
        if not explicit_name:
            raise MPInvalidKeyCharacter("The state key name must not be empty")
        if invalid := "".join(c for c in explicit_name if c not in VALID_KEY_CHARACTERS):
            raise MPInvalidKeyCharacter(
                "Invalid character for keyname - only alphanumerics or '_': %r" % invalid
            )
        return explicit_name

    hashed = digest(os.fsencode(arg) for arg in argv)
    if len(hashed) < KEY_DIGEST_LENGTH:
        raise MPGeneralException(f"Digest too short for a state key: {len(hashed)} bytes")
    return hashed[:KEY_DIGEST_LENGTH].hex()


def is_privileged() -> bool:
    """Is this a setuid or setgid process?"""
    return os.getuid() != os.geteuid() or os.getgid() != os.getegid()


def resolve_path_prefix(
    environ: Mapping[str, str] | None = None,
    privileged: bool | None = None,
) -> Path:
    """Return the directory holding the state files of all users

    The directory can be changed by environment variables, but not for
    setuid plug-ins: they must never write to a location the caller chose.
    """
    if environ is None:
        environ = os.environ
    if privileged is None:
        privileged = is_privileged()

    if not privileged:
        for varname in (paths.state_path_env, paths.legacy_state_path_env):
            if value := environ.get(varname):
                return Path(value)

    return paths.default_state_dir


@dataclass(frozen=True)
class StateKey:
    name: str
    plugin_name: str
    data_version: int
    path: Path

    @classmethod
    def create(
        cls,
        name: str,
        plugin_name: str,
        data_version: int,
        prefix: Path,
        euid: int | None = None,
    ) -> StateKey:
        """The path is determined once, here"""
        if euid is None:
            euid = os.geteuid()
        return cls(
            name=name,
            plugin_name=plugin_name,
            data_version=data_version,
            path=prefix / str(euid) / plugin_name / name,
        )


@dataclass(frozen=True)
class StateRecord:
    format_version: int
    data_version: int
    timestamp: int
    payload: str

    def __post_init__(self) -> None:
        if self.timestamp < 0:
            raise ValueError(f"Invalid time stamp: {self.timestamp}")
        if "\n" in self.payload:
            raise ValueError("The state data must be a single line")
        if self.payload.startswith("#"):
            # Lines starting with "#" are comments in the state file
            raise ValueError("The state data must not start with '#'")
        if (length := len(self.payload.encode("utf-8"))) > MAX_PAYLOAD_LENGTH:
            raise ValueError(
                f"The state data is limited to {MAX_PAYLOAD_LENGTH} bytes, got {length}"
            )

    def serialize(self) -> bytes:
        return (
            "\n".join(
                [
                    STATE_FILE_HEADER,
                    str(self.format_version),
                    str(self.data_version),
                    str(self.timestamp),
                    self.payload,
                ]
            )
            + "\n"
        ).encode("utf-8")


def _leading_int(line: bytes) -> int:
    """Interpret the leading digits like atoi() does, 0 if there are none"""
    if (match := _LEADING_INT.match(line)) is None:
        return 0
    return int(match.group())


def _truncate_payload(line: bytes) -> str:
    payload = line.decode("utf-8")
    if len(line) <= MAX_PAYLOAD_LENGTH:
        return payload
    # Don't cut a multibyte character in half
    return line[:MAX_PAYLOAD_LENGTH].decode("utf-8", errors="ignore")


def _parse_state(content: bytes, data_version: int, now: float) -> StateRecord | None:
    lines = content.split(b"\n")
    if lines[-1] == b"":
        # The newline terminates the last record, it does not start another one
        lines.pop()

    fields = (line for line in lines if not line.startswith(b"#"))

    if (format_version := _leading_int(next(fields, b""))) != FORMAT_VERSION:
        logger.log(VERBOSE, "State file format version %d not supported", format_version)
        return None

    if (found_data_version := _leading_int(next(fields, b""))) != data_version:
        logger.log(
            VERBOSE,
            "State data version %d does not match expected version %d",
            found_data_version,
            data_version,
        )
        return None

    if (timestamp := _leading_int(next(fields, b""))) > now or timestamp < 0:
        logger.log(VERBOSE, "State time stamp %d is invalid or in the future", timestamp)
        return None

    if (payload_line := next(fields, None)) is None:
        logger.log(VERBOSE, "State file has no data")
        return None

    try:
        payload = _truncate_payload(payload_line)
    except UnicodeDecodeError as e:
        logger.log(VERBOSE, "State data is not readable: %s", e)
        return None

    return StateRecord(
        format_version=format_version,
        data_version=data_version,
        timestamp=timestamp,
        payload=payload,
    )


def read_state(key: StateKey, now: float | None = None) -> StateRecord | None:
    """Returns the previous state or None in case there is no usable state"""
    if now is None:
        now = time.time()

    try:
        content = store.load_bytes_from_file(key.path)
    except MPGeneralException as e:
        logger.log(VERBOSE, "%s", e)
        return None

    if not content:
        logger.debug("No previous state in %s", key.path)
        return None

    return _parse_state(content, key.data_version, now)


def write_state(key: StateKey, payload: str, timestamp: int | None = None) -> None:
    """Replace the state of the key

    Any problem is fatal, the plug-in must not go on with half written
    state. The previous state file stays as it is in that case.
    """
    if timestamp is None:
        timestamp = int(time.time())

    record = StateRecord(
        format_version=FORMAT_VERSION,
        data_version=key.data_version,
        timestamp=timestamp,
        payload=payload,
    )

    state_dir = key.path.parent
    try:
        store.makedirs(state_dir, mode=0o700)
    except OSError as e:
        raise MPStateWriteFailure("Cannot create directory: %s (%s)" % (state_dir, e)) from e

    logger.debug("Writing state to %s", key.path)
    try:
        store.save_bytes_to_file(key.path, record.serialize(), mode=0o640)
    except MPGeneralException as e:
        raise MPStateWriteFailure("Cannot write state file: %s" % e) from e


class StateStore:
    """The state of one plug-in invocation"""

    def __init__(self, key: StateKey) -> None:
        self.key: Final = key

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.key!r})"

    @classmethod
    def enable(
        cls,
        plugin_name: str,
        argv: Sequence[str],
        keyname: str | None = None,
        expected_data_version: int = 0,
        prefix: Path | None = None,
    ) -> StateStore:
        return cls(
            StateKey.create(
                name=derive_key(keyname, argv),
                plugin_name=plugin_name,
                data_version=expected_data_version,
                prefix=resolve_path_prefix() if prefix is None else prefix,
            )
        )

    def read(self, now: float | None = None) -> StateRecord | None:
        return read_state(self.key, now=now)

    def write(self, payload: str, timestamp: int | None = None) -> None:
        write_state(self.key, payload, timestamp=timestamp)
