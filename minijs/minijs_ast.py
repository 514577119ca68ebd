#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Abstract Syntax Tree (AST) node definitions for MiniJS.
All nodes store source location (line, col) for error reporting.
Equality is structural and ignores locations.
"""

from enum import Enum
from typing import Any, List, Union


class LiteralKind(Enum):
    NUMBER = "Number"
    STRING = "String"
    BOOL = "Bool"
    NULL = "Null"


class Node:
    """Base class for all AST nodes."""

    __slots__ = ("line", "col")
    _fields: tuple = ()

    def __init__(self, line: int = 0, col: int = 0):
        self.line = line
        self.col = col

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self._fields)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        args = ", ".join(repr(getattr(self, f)) for f in self._fields)
        return f"{self.__class__.__name__}({args})"


class Literal(Node):
    """Number, string, boolean or null literal."""

    __slots__ = ("kind", "value")
    _fields = ("kind", "value")

    def __init__(self, kind: LiteralKind, value: Any, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.kind = kind
        self.value = value

    def __repr__(self):
        return f"Literal({self.kind.value}, {self.value!r})"


class Identifier(Node):
    """Variable reference."""

    __slots__ = ("name",)
    _fields = ("name",)

    def __init__(self, name: str, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.name = name


class Unary(Node):
    """Prefix operation: -x or !x."""

    __slots__ = ("op", "operand")
    _fields = ("op", "operand")

    def __init__(self, op: str, operand: Node, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.op = op
        self.operand = operand


class Binary(Node):
    """Arithmetic or comparison: left op right."""

    __slots__ = ("op", "left", "right")
    _fields = ("op", "left", "right")

    def __init__(self, op: str, left: Node, right: Node, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.op = op
        self.left = left
        self.right = right


class Logical(Node):
    """Short-circuit && or ||."""

    __slots__ = ("op", "left", "right")
    _fields = ("op", "left", "right")

    def __init__(self, op: str, left: Node, right: Node, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.op = op
        self.left = left
        self.right = right


class Ternary(Node):
    """cond ? then : else"""

    __slots__ = ("cond", "then", "else_")
    _fields = ("cond", "then", "else_")

    def __init__(self, cond: Node, then: Node, else_: Node, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.cond = cond
        self.then = then
        self.else_ = else_


class ArrayLiteral(Node):
    """Array literal: [expr, expr, ...] (trailing comma allowed)."""

    __slots__ = ("elements",)
    _fields = ("elements",)

    def __init__(self, elements: List[Node], line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.elements = elements


class Property(Node):
    """Object literal entry, either `key: value` or `key(params) { body }`."""

    __slots__ = ("key", "is_method", "params", "value")
    _fields = ("key", "is_method", "params", "value")

    def __init__(
        self,
        key: str,
        is_method: bool,
        params: List[str],
        value: Node,
        line: int = 0,
        col: int = 0,
    ):
        super().__init__(line, col)
        self.key = key
        self.is_method = is_method
        self.params = params
        self.value = value


class ObjectLiteral(Node):
    """Object literal: { entry, entry, ... }"""

    __slots__ = ("properties",)
    _fields = ("properties",)

    def __init__(self, properties: List[Property], line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.properties = properties


class Assignment(Node):
    """Local binding `name = value`, only valid as a block statement."""

    __slots__ = ("name", "value")
    _fields = ("name", "value")

    def __init__(self, name: str, value: Node, line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.name = name
        self.value = value


class Block(Node):
    """Newline-separated statements inside braces."""

    __slots__ = ("statements",)
    _fields = ("statements",)

    def __init__(self, statements: List[Node], line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.statements = statements


class Arrow(Node):
    """Arrow function: (a, b) => body."""

    __slots__ = ("params", "body")
    _fields = ("params", "body")

    def __init__(
        self, params: List[str], body: Union[Node, Block], line: int = 0, col: int = 0
    ):
        super().__init__(line, col)
        self.params = params
        self.body = body


class Call(Node):
    """Function call: callee(args)."""

    __slots__ = ("callee", "args")
    _fields = ("callee", "args")

    def __init__(self, callee: Node, args: List[Node], line: int = 0, col: int = 0):
        super().__init__(line, col)
        self.callee = callee
        self.args = args


class Member(Node):
    """Property access: obj.name (computed=False) or obj[expr] (computed=True)."""

    __slots__ = ("object", "property", "computed")
    _fields = ("object", "property", "computed")

    def __init__(
        self, object: Node, property: Node, computed: bool, line: int = 0, col: int = 0
    ):
        super().__init__(line, col)
        self.object = object
        self.property = property
        self.computed = computed
