#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Wire encoding for S-expression values.

Text form: lists are "(" + space separated elements + ")". Numbers,
booleans and null are written as literals and symbols as their bare name.
String atoms carry a sentinel prefix followed by the content length and
the raw content:

    "\\x00STR:" <length> ":" <raw content>

so a string can never be read back as a symbol, and its content may
contain spaces or parentheses.

JSON form: the same tree as nested lists, with string atoms as
"\\x00STR:"-prefixed strings and symbols as plain strings.
"""

import math
import re
from typing import Any, List

from minijs.errors import DecodeError, EncodeError
from minijs.sexpr import SExpr, Symbol

SENTINEL = "\x00"
STRING_TAG = "STR:"
STRING_PREFIX = SENTINEL + STRING_TAG

NUMBER_RE = re.compile(r"-?\d+(\.\d+)?([eE][+-]?\d+)?\Z")
LITERAL_WORDS = {"true": True, "false": False, "null": None}
DELIMITERS = {"(", ")", SENTINEL}


def _check_symbol(name: str) -> None:
    if not name:
        raise EncodeError("cannot encode an empty symbol")
    if name in LITERAL_WORDS or NUMBER_RE.match(name):
        raise EncodeError(f"symbol {name!r} would decode as a literal")
    if any(ch.isspace() or ch in DELIMITERS for ch in name):
        raise EncodeError(f"symbol {name!r} contains a reserved character")


def _encode_number(value: Any) -> str:
    if isinstance(value, float) and not math.isfinite(value):
        raise EncodeError(f"cannot encode non-finite number {value!r}")
    return repr(value)


def serialize(value: SExpr) -> str:
    """Encode a value as wire text; raises EncodeError if it cannot round-trip."""
    try:
        return _serialize(value)
    except RecursionError:
        raise EncodeError("value nested too deeply") from None


def _serialize(value: SExpr) -> str:
    if isinstance(value, list):
        return "(" + " ".join(_serialize(v) for v in value) + ")"
    if isinstance(value, Symbol):
        _check_symbol(value.name)
        return value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return _encode_number(value)
    if isinstance(value, str):
        if SENTINEL in value:
            raise EncodeError("string content contains the sentinel byte")
        return f"{STRING_PREFIX}{len(value)}:{value}"
    raise EncodeError(f"cannot encode value of type {type(value).__name__}")


class _Reader:
    """Single-pass reader over wire text."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.len = len(text)

    def _skip_whitespace(self) -> None:
        while self.pos < self.len and self.text[self.pos].isspace():
            self.pos += 1

    def read_document(self) -> SExpr:
        self._skip_whitespace()
        if self.pos >= self.len:
            raise DecodeError("empty input", self.pos)
        try:
            value = self.read_value()
        except RecursionError:
            raise DecodeError("value nested too deeply", self.pos) from None
        self._skip_whitespace()
        if self.pos < self.len:
            raise DecodeError("trailing content after value", self.pos)
        return value

    def read_value(self) -> SExpr:
        ch = self.text[self.pos]
        if ch == "(":
            return self.read_list()
        if ch == ")":
            raise DecodeError("unexpected ')'", self.pos)
        if ch == SENTINEL:
            return self.read_tagged()
        return self.read_word()

    def read_list(self) -> List[Any]:
        start = self.pos
        self.pos += 1  # skip '('
        items = []
        while True:
            self._skip_whitespace()
            if self.pos >= self.len:
                raise DecodeError("unclosed '('", start)
            if self.text[self.pos] == ")":
                self.pos += 1
                return items
            items.append(self.read_value())

    def read_tagged(self) -> str:
        start = self.pos
        if not self.text.startswith(STRING_PREFIX, self.pos):
            raise DecodeError("unknown sentinel tag", start)
        self.pos += len(STRING_PREFIX)
        colon = self.text.find(":", self.pos)
        digits = self.text[self.pos : colon] if colon != -1 else ""
        if not digits.isdigit():
            raise DecodeError("malformed string length", start)
        length = int(digits)
        content_start = colon + 1
        if content_start + length > self.len:
            raise DecodeError("string content shorter than its length", start)
        self.pos = content_start + length
        return self.text[content_start : self.pos]

    def read_word(self) -> SExpr:
        start = self.pos
        while (
            self.pos < self.len
            and not self.text[self.pos].isspace()
            and self.text[self.pos] not in DELIMITERS
        ):
            self.pos += 1
        word = self.text[start : self.pos]
        if word in LITERAL_WORDS:
            return LITERAL_WORDS[word]
        if NUMBER_RE.match(word):
            if "." in word or "e" in word or "E" in word:
                return float(word)
            return int(word)
        return Symbol(word)


def deserialize(text: str) -> SExpr:
    """Decode wire text produced by serialize(); raises DecodeError."""
    return _Reader(text).read_document()


def to_json(value: SExpr) -> Any:
    """Convert a value into JSON-compatible data for hosts without a Symbol type."""
    try:
        return _to_json(value)
    except RecursionError:
        raise EncodeError("value nested too deeply") from None


def _to_json(value: SExpr) -> Any:
    if isinstance(value, list):
        return [_to_json(v) for v in value]
    if isinstance(value, Symbol):
        if value.name.startswith(SENTINEL):
            raise EncodeError(f"symbol {value.name!r} starts with the sentinel byte")
        return value.name
    if isinstance(value, str):
        if SENTINEL in value:
            raise EncodeError("string content contains the sentinel byte")
        return STRING_PREFIX + value
    if value is None or isinstance(value, (bool, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodeError(f"cannot encode non-finite number {value!r}")
        return value
    raise EncodeError(f"cannot encode value of type {type(value).__name__}")


def from_json(data: Any) -> SExpr:
    """Inverse of to_json()."""
    try:
        return _from_json(data)
    except RecursionError:
        raise DecodeError("value nested too deeply") from None


def _from_json(data: Any) -> SExpr:
    if isinstance(data, list):
        return [_from_json(v) for v in data]
    if isinstance(data, str):
        if data.startswith(STRING_PREFIX):
            return data[len(STRING_PREFIX) :]
        if data.startswith(SENTINEL):
            raise DecodeError(f"unknown sentinel tag in {data!r}")
        return Symbol(data)
    if data is None or isinstance(data, (bool, int, float)):
        return data
    raise DecodeError(f"unsupported JSON value of type {type(data).__name__}")
