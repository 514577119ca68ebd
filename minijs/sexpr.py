#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
S-expression value model.

Atoms are Python numbers, booleans, None, str (string literals) and
Symbol (variable and function references). Lists are Python lists.
A Symbol never equals a str with the same text.
"""

from typing import Any, List, Union


class Symbol:
    """A named reference, distinct from a string literal."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        object.__setattr__(self, "name", name)

    def __setattr__(self, key, value):
        raise AttributeError("Symbol is immutable")

    def __eq__(self, other):
        if isinstance(other, Symbol):
            return self.name == other.name
        return NotImplemented

    def __hash__(self):
        return hash((Symbol, self.name))

    def __repr__(self):
        return f"Symbol({self.name!r})"

    def __str__(self):
        return self.name


Atom = Union[int, float, bool, None, str, Symbol]
SExpr = Union[Atom, List[Any]]


def _quote_string(s: str) -> str:
    escaped = s.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", "\\n").replace("\t", "\\t")
    return f'"{escaped}"'


def to_source(value: SExpr) -> str:
    """Render a value as readable Lisp text; strings are double-quoted."""
    if isinstance(value, list):
        return "(" + " ".join(to_source(v) for v in value) + ")"
    if isinstance(value, Symbol):
        return value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return _quote_string(value)
    if isinstance(value, (int, float)):
        return repr(value)
    raise TypeError(f"not an S-expression value: {value!r}")
