# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Status codes returned by every mutating store operation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Status(Enum):
    """Outcome of a store operation.

    OK: Operation completed
    NOTFOUND: Target script is absent (delete, rename)
    IOERROR: A filesystem call failed (open, rename, unlink, symlink, readlink)
    INVALID: Name or content rejected before anything was written
    FAIL: Bytecode generation or emission failed after the source write began
    """

    OK = "ok"
    NOTFOUND = "notfound"
    IOERROR = "ioerror"
    INVALID = "invalid"
    FAIL = "fail"


@dataclass
class PutResult:
    """Result of ScriptStore.put: status plus parse diagnostics."""

    status: Status
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is Status.OK
