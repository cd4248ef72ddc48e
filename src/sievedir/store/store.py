# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""ScriptStore - named script/bytecode pairs in a single directory.

Every operation is built from rename, symlink and unlink, so a crash never
corrupts a committed script. Operations return a Status instead of raising.

Known limitation (partial commit): put and rename each perform two
dependent renames. If the second fails, the source half is already
committed and the pair is inconsistent; this is reported as IOERROR and
is not rolled back. Callers needing stronger atomicity must re-put.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from sievedir.compiler import CompileError, Compiler, LineCompiler, ScriptParseError
from sievedir.store import active as pointer
from sievedir.store.commit import (
    commit,
    discard,
    normalize_line_endings,
    open_pending,
    write_pending,
)
from sievedir.store.layout import (
    BYTECODE_SUFFIX,
    PathLike,
    bytecode_path,
    pending_path,
    script_path,
)
from sievedir.store.listing import count_scripts, iter_entries, script_basename
from sievedir.store.names import valid_name
from sievedir.store.status import PutResult, Status

logger = logging.getLogger(__name__)


@dataclass
class ScriptInfo:
    """Listing row for a stored script."""

    name: str
    size: int
    has_bytecode: bool
    active: bool


class ScriptStore:
    """Facade over one sieve directory."""

    def __init__(self, sieve_dir: PathLike, compiler: Optional[Compiler] = None):
        """
        Initialize the store.

        Args:
            sieve_dir: Directory holding the scripts (must already exist)
            compiler: Compiler capability (defaults to LineCompiler)
        """
        self.sieve_dir = Path(sieve_dir)
        self.compiler = compiler if compiler is not None else LineCompiler()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def exists(self, name: str) -> bool:
        """True if the source file for `name` exists."""
        if not valid_name(name):
            return False
        try:
            os.stat(script_path(self.sieve_dir, name))
        except OSError:
            return False
        return True

    def get_active(self) -> Optional[str]:
        return pointer.get_active(self.sieve_dir)

    def is_active(self, name: str) -> bool:
        if not valid_name(name):
            return False
        return pointer.is_active(self.sieve_dir, name)

    def count_others(self, exclude: Optional[str] = None) -> int:
        """Number of stored scripts whose name is not `exclude`."""
        return count_scripts(self.sieve_dir, exclude)

    def read_script(self, filename: str) -> Optional[bytes]:
        """Read a stored file (e.g. "vacation.script") verbatim.

        Returns:
            File contents, or None if it cannot be opened.
        """
        if not valid_name(filename):
            return None
        try:
            return (self.sieve_dir / filename).read_bytes()
        except OSError:
            return None

    def list_scripts(self) -> List[ScriptInfo]:
        """List stored scripts, sorted by name."""
        sources = {}
        bytecodes = set()
        for entry in iter_entries(self.sieve_dir):
            if not entry.is_file:
                continue
            name = script_basename(entry.name)
            if name is not None:
                sources[name] = entry.stat.st_size
            elif entry.name.endswith(BYTECODE_SUFFIX):
                bytecodes.add(entry.name[: -len(BYTECODE_SUFFIX)])

        active_name = self.get_active()
        return [
            ScriptInfo(
                name=name,
                size=sources[name],
                has_bytecode=name in bytecodes,
                active=name == active_name,
            )
            for name in sorted(sources)
        ]

    # -------------------------------------------------------------------------
    # Activation
    # -------------------------------------------------------------------------

    def activate(self, name: str) -> Status:
        """Point the active link at `name` (existence is not checked)."""
        if not valid_name(name):
            return Status.INVALID
        return pointer.set_active(self.sieve_dir, name)

    def deactivate(self) -> Status:
        return pointer.clear_active(self.sieve_dir)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def put(self, name: str, content: str) -> PutResult:
        """Create or replace script `name`.

        Stages: validate -> write source -> generate bytecode -> write
        bytecode -> commit source -> commit bytecode. Temporary files are
        removed on every failure before the first commit.

        Args:
            name: Script name
            content: Script text (line endings are normalized to CRLF)

        Returns:
            PutResult with OK, INVALID (+ diagnostics), FAIL or IOERROR.
        """
        if not valid_name(name):
            return PutResult(Status.INVALID, [f"invalid script name: {name!r}"])

        try:
            parsed = self.compiler.validate(content)
        except ScriptParseError as e:
            return PutResult(Status.INVALID, e.errors)

        try:
            data = normalize_line_endings(content.encode("utf-8"))
        except UnicodeEncodeError as e:
            return PutResult(Status.INVALID, [str(e)])

        final_path = script_path(self.sieve_dir, name)
        new_path = pending_path(final_path)
        if not write_pending(new_path, data):
            return PutResult(Status.IOERROR)

        try:
            blob = self.compiler.generate_bytecode(parsed)
        except CompileError as e:
            logger.error(f"bytecode generation failed for {name}: {e}")
            discard(new_path)
            return PutResult(Status.FAIL, [str(e)])

        final_bcpath = bytecode_path(self.sieve_dir, name)
        new_bcpath = pending_path(final_bcpath)
        try:
            f = open_pending(new_bcpath)
        except OSError as e:
            logger.error(f"IOERROR: open({new_bcpath}): {e}")
            discard(new_path)
            return PutResult(Status.IOERROR)

        try:
            with f:
                self.compiler.emit(f, blob)
        except (CompileError, OSError) as e:
            logger.error(f"bytecode emit failed for {name}: {e}")
            discard(new_path, new_bcpath)
            return PutResult(Status.FAIL, [str(e)])

        if not commit(new_path, final_path):
            return PutResult(Status.IOERROR)

        if not commit(new_bcpath, final_bcpath):
            logger.error(f"IOERROR: partial commit of {name}: source updated, bytecode not")
            return PutResult(Status.IOERROR)

        return PutResult(Status.OK)

    def delete(self, name: str) -> Status:
        """Remove script `name` (source, then bytecode best effort)."""
        if not valid_name(name):
            return Status.INVALID

        path = script_path(self.sieve_dir, name)
        try:
            os.unlink(path)
        except FileNotFoundError:
            return Status.NOTFOUND
        except OSError as e:
            logger.error(f"IOERROR: unlink({path}): {e}")
            return Status.IOERROR

        bcpath = bytecode_path(self.sieve_dir, name)
        try:
            os.unlink(bcpath)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"IOERROR: unlink({bcpath}): {e}")

        return Status.OK

    def rename(self, old_name: str, new_name: str) -> Status:
        """Rename script `old_name` to `new_name`, moving the active link.

        If `old_name` was active, the result of re-pointing the active link
        is returned, even when that masks a successful rename.
        """
        if not valid_name(old_name) or not valid_name(new_name):
            return Status.INVALID

        old_path = script_path(self.sieve_dir, old_name)
        new_path = script_path(self.sieve_dir, new_name)
        try:
            os.replace(old_path, new_path)
        except FileNotFoundError:
            return Status.NOTFOUND
        except OSError as e:
            logger.error(f"IOERROR: rename({old_path}, {new_path}): {e}")
            return Status.IOERROR

        old_bcpath = bytecode_path(self.sieve_dir, old_name)
        new_bcpath = bytecode_path(self.sieve_dir, new_name)
        try:
            os.replace(old_bcpath, new_bcpath)
        except OSError as e:
            logger.error(f"IOERROR: rename({old_bcpath}, {new_bcpath}): {e}")
            return Status.IOERROR

        status = Status.OK
        if pointer.is_active(self.sieve_dir, old_name):
            status = pointer.set_active(self.sieve_dir, new_name)
        return status
