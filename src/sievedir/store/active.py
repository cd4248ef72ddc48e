# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Active-script pointer.

The active script is named by a single symlink, `defaultbc`, whose target
is `<name>.bc`. It is replaced atomically: a new link is created beside it
and renamed over it.
"""

import logging
import os
from typing import Optional

from sievedir.store.layout import (
    BYTECODE_SUFFIX,
    PathLike,
    active_path,
    pending_path,
)
from sievedir.store.status import Status

logger = logging.getLogger(__name__)


def get_active(sieve_dir: PathLike) -> Optional[str]:
    """Return the name of the active script.

    Args:
        sieve_dir: Sieve directory.

    Returns:
        Active script name, or None if no script is active or the pointer
        cannot be read.
    """
    link = active_path(sieve_dir)
    try:
        target = os.readlink(link)
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.error(f"IOERROR: readlink({link}): {e}")
        return None

    if len(target) > len(BYTECODE_SUFFIX):
        return target[: -len(BYTECODE_SUFFIX)]
    return None


def is_active(sieve_dir: PathLike, name: Optional[str]) -> bool:
    """Check whether `name` is the active script."""
    if not name:
        return False
    return name == get_active(sieve_dir)


def set_active(sieve_dir: PathLike, name: str) -> Status:
    """Make `name` the active script.

    Does not check that `<name>.bc` exists: activating a missing script
    succeeds and leaves a dangling pointer.

    Returns:
        Status.OK, or Status.IOERROR if the pointer could not be replaced.
    """
    if is_active(sieve_dir, name):
        return Status.OK

    target = f"{name}{BYTECODE_SUFFIX}"
    link = active_path(sieve_dir)
    tmp = pending_path(link)

    try:
        os.symlink(target, tmp)
    except OSError as e:
        logger.error(f"IOERROR: unable to symlink {target} as {tmp}: {e}")
        _discard_link(tmp)
        return Status.IOERROR

    try:
        os.replace(tmp, link)
    except OSError as e:
        logger.error(f"IOERROR: unable to rename {tmp} to {link}: {e}")
        _discard_link(tmp)
        return Status.IOERROR

    logger.debug(f"Activated {name} in {sieve_dir}")
    return Status.OK


def clear_active(sieve_dir: PathLike) -> Status:
    """Deactivate whatever script is active.

    Returns:
        Status.OK (including when nothing was active), or Status.IOERROR.
    """
    link = active_path(sieve_dir)
    try:
        os.unlink(link)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.error(f"IOERROR: unable to unlink {link}: {e}")
        return Status.IOERROR

    return Status.OK


def _discard_link(path) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"unable to remove {path}: {e}")
