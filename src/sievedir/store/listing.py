# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Directory enumeration for sieve directories.

Yields regular files and symlinks (with their link targets). Anything else
(directories, FIFOs, sockets, devices) is skipped.
"""

import os
import stat
from dataclasses import dataclass
from typing import Iterator, Optional

from sievedir.store.layout import SCRIPT_SUFFIX, PathLike

# readlink() targets longer than this are truncated
PATH_MAX = 4096


@dataclass(frozen=True)
class DirectoryEntry:
    """One enumerated directory entry."""

    name: str
    stat: os.stat_result
    target: str = ""  # link target, empty unless a readable symlink

    @property
    def is_file(self) -> bool:
        return stat.S_ISREG(self.stat.st_mode)

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.stat.st_mode)


def iter_entries(sieve_dir: PathLike) -> Iterator[DirectoryEntry]:
    """Lazily enumerate a sieve directory.

    Order is whatever the filesystem returns. An unreadable directory
    yields nothing. Breaking out of the loop closes the directory.

    Args:
        sieve_dir: Directory to enumerate.

    Yields:
        DirectoryEntry for each regular file or symlink.
    """
    try:
        scanner = os.scandir(sieve_dir)
    except OSError:
        return

    with scanner:
        for dirent in scanner:
            # scandir never returns "." or "..", but entries can vanish
            # between readdir and lstat
            try:
                st = os.lstat(dirent.path)
            except OSError:
                continue

            target = ""
            if stat.S_ISLNK(st.st_mode):
                try:
                    target = os.readlink(dirent.path)[: PATH_MAX - 1]
                except OSError:
                    target = ""
            elif not stat.S_ISREG(st.st_mode):
                continue

            yield DirectoryEntry(name=dirent.name, stat=st, target=target)


def script_basename(filename: str) -> Optional[str]:
    """Strip the source suffix from `filename`.

    Returns:
        The script name, or None if `filename` is not a source file name.
    """
    if len(filename) > len(SCRIPT_SUFFIX) and filename.endswith(SCRIPT_SUFFIX):
        return filename[: -len(SCRIPT_SUFFIX)]
    return None


def count_scripts(sieve_dir: PathLike, exclude: Optional[str] = None) -> int:
    """Count the scripts in `sieve_dir` other than `exclude`.

    Used to enforce per-account script limits: the script being replaced
    is excluded so overwriting it never inflates the count.

    Args:
        sieve_dir: Directory to scan.
        exclude: Script name to leave out (None or "" counts everything).

    Returns:
        Number of regular `*.script` files whose name differs from `exclude`.
    """
    count = 0
    for entry in iter_entries(sieve_dir):
        if not entry.is_file:
            continue
        name = script_basename(entry.name)
        if name is None:
            continue
        if exclude and name == exclude:
            continue
        count += 1
    return count
