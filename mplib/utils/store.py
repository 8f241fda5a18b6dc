#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""This module cares about the file storage of the plug-ins. Most important
functionality is the atomic publishing of a file realized with the
atomic_publish() context manager: readers see either the complete old or
the complete new content, never a partially written file.

There is no locking. Two processes writing the same file at the same time
both succeed, the last rename wins."""

import errno
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO

from mplib.utils.exceptions import MPGeneralException, MPTerminate

logger = logging.getLogger("mplib.store")


def makedirs(path: Path | str, mode: int = 0o700) -> None:
    """Create the directory and all missing parents, each of them with mode"""
    if not isinstance(path, Path):
        path = Path(path)
    # Path.mkdir(parents=True) would create the parents with the default mode
    missing = [p for p in (path, *path.parents) if not p.exists()]
    for directory in reversed(missing):
        directory.mkdir(mode=mode, exist_ok=True)


@contextmanager
def atomic_publish(path: Path | str, mode: int = 0o640) -> Iterator[IO[bytes]]:
    """Write a file next to the target and rename it onto the target

    The temporary file is created in the directory of the target, so that
    the final rename never crosses a file system. It is synced to disk
    before the rename, otherwise the renamed file may be empty after a
    crash. In case anything fails before the rename has been done, the
    temporary file is removed and the target is left untouched.
    """
    if not isinstance(path, Path):
        path = Path(path)

    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb",
            dir=str(path.parent),
            prefix=".%s.new" % path.name,
            delete=False,
        ) as tmp:
            tmp_path = tmp.name
            os.chmod(tmp_path, mode)
            yield tmp
            tmp.flush()
            os.fsync(tmp.fileno())

        os.rename(tmp_path, str(path))
        logger.debug("Published %s", path)

    except BaseException as e:
        # In case an exception happens during saving cleanup the tempfile created for writing
        try:
            if tmp_path:
                os.unlink(tmp_path)
        except OSError as e2:
            if e2.errno != errno.ENOENT:  # No such file or directory
                raise

        if isinstance(e, (MPTerminate, MPGeneralException)) or not isinstance(e, Exception):
            raise
        raise MPGeneralException('Cannot write file "%s": %s' % (path, e)) from e


def save_bytes_to_file(path: Path | str, content: bytes, mode: int = 0o640) -> None:
    """Replace the file with content, see atomic_publish()"""
    if not isinstance(content, bytes):
        raise TypeError("Expected encoded file content, got %s" % type(content).__name__)
    with atomic_publish(path, mode) as f:
        f.write(content)


def load_bytes_from_file(path: Path | str, default: bytes = b"") -> bytes:
    """Return the file content, or default if the file does not exist"""
    if not isinstance(path, Path):
        path = Path(path)

    try:
        return path.read_bytes()
    except FileNotFoundError:
        return default
    except OSError as e:
        raise MPGeneralException('Cannot read file "%s": %s' % (path, e)) from e
