# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Write-then-rename helpers.

Files are written under a `.NEW` sibling name and made visible with a
single rename. A live file is never modified in place.
"""

import logging
import os
import re
from pathlib import Path
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)

# Any CRLF, lone CR, or lone LF
_LINE_BREAK = re.compile(rb"\r\n|\r|\n")


def normalize_line_endings(data: bytes) -> bytes:
    """Rewrite every line break as CRLF.

    Bare LF becomes CRLF, existing CRLF is kept, and a lone CR (including
    one at the very end) gets an LF appended. Keeps notify messages
    SMTP-compatible.
    """
    return _LINE_BREAK.sub(b"\r\n", data)


def open_pending(path: Path, mode: int = 0o600) -> BinaryIO:
    """Create (or truncate) a temporary file for writing.

    Raises:
        OSError: If the file cannot be created.
    """
    fd = os.open(path, os.O_CREAT | os.O_TRUNC | os.O_WRONLY, mode)
    return os.fdopen(fd, "wb")


def write_pending(path: Path, data: bytes) -> bool:
    """Write `data` to a temporary file, leaving nothing behind on failure.

    Returns:
        True if the file was fully written and closed.
    """
    try:
        f = open_pending(path)
    except OSError as e:
        logger.error(f"IOERROR: open({path}): {e}")
        return False

    try:
        with f:
            f.write(data)
            f.flush()
    except OSError as e:
        logger.error(f"IOERROR: write({path}): {e}")
        discard(path)
        return False

    return True


def commit(pending: Path, final: Path) -> bool:
    """Atomically rename `pending` onto `final`.

    Returns:
        True on success. Failures are logged and `pending` is left in place.
    """
    try:
        os.replace(pending, final)
    except OSError as e:
        logger.error(f"IOERROR: rename({pending}, {final}): {e}")
        return False

    logger.debug(f"Committed {final}")
    return True


def discard(*paths: Optional[Path]) -> None:
    """Remove temporary files, best effort."""
    for path in paths:
        if path is None:
            continue
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"unable to remove {path}: {e}")
