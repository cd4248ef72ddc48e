"""Crash-safe storage for named filter scripts.

Each script is a source/bytecode pair; one script per directory may be
marked active. All mutations are rename/symlink/unlink based.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

from sievedir.store.active import clear_active, get_active, is_active, set_active
from sievedir.store.layout import (
    BYTECODE_SUFFIX,
    DEFAULTBC_NAME,
    NEW_SUFFIX,
    SCRIPT_SUFFIX,
)
from sievedir.store.listing import DirectoryEntry, count_scripts, iter_entries
from sievedir.store.names import ScriptNameError, valid_name, validate_name
from sievedir.store.status import PutResult, Status
from sievedir.store.store import ScriptInfo, ScriptStore

__all__ = [
    "BYTECODE_SUFFIX",
    "DEFAULTBC_NAME",
    "NEW_SUFFIX",
    "SCRIPT_SUFFIX",
    "DirectoryEntry",
    "PutResult",
    "ScriptInfo",
    "ScriptNameError",
    "ScriptStore",
    "Status",
    "clear_active",
    "count_scripts",
    "get_active",
    "is_active",
    "iter_entries",
    "set_active",
    "valid_name",
    "validate_name",
]
