# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Compiler - validate script text and turn it into bytecode.

The store only depends on the Compiler protocol:
- validate(text) -> parsed form (raises ScriptParseError)
- generate_bytecode(parsed) -> bytes (raises CompileError)
- emit(fileobj, blob) (raises CompileError or OSError)

LineCompiler is the reference implementation used by the CLI. It checks
statement structure only; it does not understand Sieve semantics.
"""

import struct
from typing import Any, BinaryIO, List, Protocol, Tuple


class CompileError(Exception):
    """Raised when bytecode generation or emission fails."""
    pass


class ScriptParseError(CompileError):
    """Raised when script text is rejected, with one message per problem."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "script rejected")


class Compiler(Protocol):
    """Capability the store needs to turn text into bytecode."""

    def validate(self, text: str) -> Any:
        ...

    def generate_bytecode(self, parsed: Any) -> bytes:
        ...

    def emit(self, fileobj: BinaryIO, blob: bytes) -> None:
        ...


# Bytecode header: magic + format version
BYTECODE_MAGIC = b"SVBC"
BYTECODE_VERSION = 1


class LineCompiler:
    """Minimal statement-level compiler.

    A script is a sequence of statements. Each non-blank, non-comment line
    must end in ';', '{' or '}' and braces must balance. '#' starts a
    comment that runs to end of line.

    Bytecode layout (big-endian):
        b"SVBC" | u16 version | u32 count | (u32 len | utf-8 statement)*
    """

    def validate(self, text: str) -> Tuple[str, ...]:
        errors = []
        statements = []
        depth = 0

        if "\0" in text:
            errors.append("script contains a NUL character")

        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue

            depth += line.count("{") - line.count("}")
            if depth < 0:
                errors.append(f"line {lineno}: unexpected '}}'")
                depth = 0
            if not line.endswith((";", "{", "}")):
                errors.append(f"line {lineno}: missing ';' after statement")

            statements.append(line)

        if depth > 0:
            errors.append(f"unclosed block: {depth} '{{' without matching '}}'")
        if not statements and not errors:
            errors.append("script is empty")

        if errors:
            raise ScriptParseError(errors)
        return tuple(statements)

    def generate_bytecode(self, parsed: Tuple[str, ...]) -> bytes:
        parts = [BYTECODE_MAGIC, struct.pack(">HI", BYTECODE_VERSION, len(parsed))]
        for statement in parsed:
            try:
                encoded = statement.encode("utf-8")
            except UnicodeEncodeError as e:
                raise CompileError(f"cannot encode statement: {e}")
            parts.append(struct.pack(">I", len(encoded)))
            parts.append(encoded)
        return b"".join(parts)

    def emit(self, fileobj: BinaryIO, blob: bytes) -> None:
        written = fileobj.write(blob)
        if written is not None and written != len(blob):
            raise CompileError(f"short write: {written} of {len(blob)} bytes")
        fileobj.flush()


def decode_bytecode(blob: bytes) -> Tuple[str, ...]:
    """Decode LineCompiler bytecode back into statements.

    Raises:
        CompileError: If the blob is truncated or has the wrong header.
    """
    header_len = len(BYTECODE_MAGIC) + 6
    if len(blob) < header_len or not blob.startswith(BYTECODE_MAGIC):
        raise CompileError("not a bytecode file")

    version, count = struct.unpack_from(">HI", blob, len(BYTECODE_MAGIC))
    if version != BYTECODE_VERSION:
        raise CompileError(f"unsupported bytecode version: {version}")

    offset = header_len
    statements = []
    for _ in range(count):
        if offset + 4 > len(blob):
            raise CompileError("truncated bytecode")
        (length,) = struct.unpack_from(">I", blob, offset)
        offset += 4
        if offset + length > len(blob):
            raise CompileError("truncated bytecode")
        statements.append(blob[offset:offset + length].decode("utf-8"))
        offset += length
    return tuple(statements)
