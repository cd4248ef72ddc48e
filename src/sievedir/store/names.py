# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Script name validation.

Everything except '/' and NUL is a valid name character.
"""

# Names must be shorter than this many characters
MAX_NAME_LEN = 1013


class ScriptNameError(ValueError):
    """Raised when a script name is invalid."""

    pass


def valid_name(name: str) -> bool:
    """Check a candidate script name.

    Args:
        name: Candidate name (without suffix).

    Returns:
        True if the name is 1..1012 characters with no '/' and no NUL.
    """
    if not name:
        return False

    if "/" in name or "\0" in name:
        return False

    return len(name) < MAX_NAME_LEN


def validate_name(name: str) -> None:
    """Validate a script name, raising on failure.

    Raises:
        ScriptNameError: If name is empty, too long, or contains '/' or NUL.
    """
    if not name:
        raise ScriptNameError("script name cannot be empty")

    if "/" in name:
        raise ScriptNameError(f"path separators not allowed in script name: {name!r}")

    if "\0" in name:
        raise ScriptNameError("NUL bytes not allowed in script name")

    if len(name) >= MAX_NAME_LEN:
        raise ScriptNameError(
            f"script name must be at most {MAX_NAME_LEN - 1} characters, "
            f"got: {len(name)}"
        )
