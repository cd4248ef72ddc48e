# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""On-disk naming conventions for a sieve directory.

    <name>.script   - source text (CRLF line endings)
    <name>.bc       - compiled bytecode
    defaultbc       - symlink to the active <name>.bc
    *.NEW           - uncommitted temporary files
"""

import os
from pathlib import Path
from typing import Union

SCRIPT_SUFFIX = ".script"
BYTECODE_SUFFIX = ".bc"
DEFAULTBC_NAME = "defaultbc"
NEW_SUFFIX = ".NEW"

PathLike = Union[str, "os.PathLike[str]"]


def script_path(sieve_dir: PathLike, name: str) -> Path:
    """Path of the source file for script `name`."""
    return Path(sieve_dir) / f"{name}{SCRIPT_SUFFIX}"


def bytecode_path(sieve_dir: PathLike, name: str) -> Path:
    """Path of the bytecode file for script `name`."""
    return Path(sieve_dir) / f"{name}{BYTECODE_SUFFIX}"


def active_path(sieve_dir: PathLike) -> Path:
    """Path of the active-script pointer."""
    return Path(sieve_dir) / DEFAULTBC_NAME


def pending_path(path: Path) -> Path:
    """Temporary sibling used before a file is committed."""
    return path.with_name(path.name + NEW_SUFFIX)
