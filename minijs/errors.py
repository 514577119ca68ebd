#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Error types shared by every MiniJS compilation stage.
"""

from typing import Optional, Tuple


def line_col(source: str, pos: int) -> Tuple[int, int]:
    """Translate a 0-based offset into a 1-based (line, col) pair."""
    pos = max(0, min(pos, len(source)))
    line = source.count("\n", 0, pos) + 1
    col = pos - (source.rfind("\n", 0, pos) + 1) + 1
    return line, col


class CompileError(Exception):
    """Base class for errors raised while compiling MiniJS source."""

    def __init__(self, message: str, pos: int = 0, source: str = ""):
        self.message = message
        self.pos = pos
        self.source = source
        self.line, self.col = line_col(source, pos)
        super().__init__(self._format())

    def _source_line(self) -> str:
        lines = self.source.splitlines()
        if 1 <= self.line <= len(lines):
            return lines[self.line - 1]
        return ""

    def _format(self) -> str:
        if not self.source:
            return f"error: {self.message}"
        snippet = self._source_line()
        if not snippet.strip():
            return f"{self.line}:{self.col}: error: {self.message}"
        pointer = " " * (self.col - 1) + "^"
        return f"{self.line}:{self.col}: error: {self.message}\n{snippet}\n{pointer}"


class SerializationError(Exception):
    """Base class for wire-format failures."""


class EncodeError(SerializationError):
    """Raised when a value has no faithful wire representation."""


class DecodeError(SerializationError):
    """Raised when wire text cannot be turned back into a value."""

    def __init__(self, message: str, pos: Optional[int] = None):
        self.message = message
        self.pos = pos
        where = f"offset {pos}: " if pos is not None else ""
        super().__init__(f"{where}{message}")
