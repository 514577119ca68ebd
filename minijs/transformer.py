#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
MiniJS transformer – lowers the AST to S-expressions for a Lisp-style evaluator.

String literals in value position are emitted as (quote "s") so that the
evaluator does not mistake them for variable lookups. The key after `get`
in a dot access is the only place a bare string atom is emitted.
"""

from typing import List

from minijs.errors import CompileError
from minijs.minijs_ast import (
    Arrow,
    ArrayLiteral,
    Assignment,
    Binary,
    Block,
    Call,
    Identifier,
    Literal,
    LiteralKind,
    Logical,
    Member,
    Node,
    ObjectLiteral,
    Property,
    Ternary,
    Unary,
)
from minijs.sexpr import SExpr, Symbol


class UnsupportedConstructError(CompileError):
    """Raised for AST nodes the transformer has no lowering for."""


# MiniJS operator -> evaluator form
BINARY_FORMS = {
    "+": "+",
    "-": "-",
    "*": "*",
    "/": "/",
    "%": "%",
    "==": "=",
    "!=": "!=",
    "<": "<",
    ">": ">",
    "<=": "<=",
    ">=": ">=",
}
LOGICAL_FORMS = {"&&": "and", "||": "or"}

QUOTE = Symbol("quote")
PROGN = Symbol("progn")
DEFINE = Symbol("define")
LAMBDA = Symbol("lambda")
GET = Symbol("get")


class Transformer:
    """Maps each AST node to an S-expression using a fixed node-to-form table."""

    def transform(self, node: Node) -> SExpr:
        if isinstance(node, Literal):
            return self.transform_literal(node)
        elif isinstance(node, Identifier):
            return Symbol(node.name)
        elif isinstance(node, Unary):
            return self.transform_unary(node)
        elif isinstance(node, Binary):
            if node.op not in BINARY_FORMS:
                raise self._unsupported(node, f"binary operator {node.op!r}")
            return [Symbol(BINARY_FORMS[node.op]), self.transform(node.left), self.transform(node.right)]
        elif isinstance(node, Logical):
            if node.op not in LOGICAL_FORMS:
                raise self._unsupported(node, f"logical operator {node.op!r}")
            return [Symbol(LOGICAL_FORMS[node.op]), self.transform(node.left), self.transform(node.right)]
        elif isinstance(node, Ternary):
            return [
                Symbol("if"),
                self.transform(node.cond),
                self.transform(node.then),
                self.transform(node.else_),
            ]
        elif isinstance(node, ArrayLiteral):
            return [Symbol("list")] + [self.transform(e) for e in node.elements]
        elif isinstance(node, Arrow):
            return [LAMBDA, self._params(node.params), self.transform(node.body)]
        elif isinstance(node, Call):
            return [self.transform(node.callee)] + [self.transform(a) for a in node.args]
        elif isinstance(node, Member):
            return self.transform_member(node)
        elif isinstance(node, Assignment):
            return [DEFINE, Symbol(node.name), self.transform(node.value)]
        elif isinstance(node, Block):
            return self._sequence(node.statements)
        elif isinstance(node, Property):
            return self.transform_property(node)
        elif isinstance(node, ObjectLiteral):
            return self._sequence(node.properties)
        raise self._unsupported(node, type(node).__name__)

    def transform_literal(self, node: Literal) -> SExpr:
        if node.kind == LiteralKind.STRING:
            return [QUOTE, node.value]
        return node.value

    def transform_unary(self, node: Unary) -> SExpr:
        operand = self.transform(node.operand)
        if node.op == "-":
            return [Symbol("-"), 0, operand]
        if node.op == "!":
            return [Symbol("not"), operand]
        raise self._unsupported(node, f"unary operator {node.op!r}")

    def transform_member(self, node: Member) -> SExpr:
        obj = self.transform(node.object)
        if node.computed:
            return [GET, obj, self.transform(node.property)]
        prop = node.property
        if isinstance(prop, Literal) and prop.kind == LiteralKind.STRING:
            key = prop.value
        elif isinstance(prop, Identifier):
            key = prop.name
        else:
            raise self._unsupported(node, "non-name property after '.'")
        return [GET, obj, key]

    def transform_property(self, node: Property) -> SExpr:
        if node.is_method:
            signature = [Symbol(node.key)] + self._params(node.params)
            return [DEFINE, signature, self.transform(node.value)]
        return [DEFINE, Symbol(node.key), self.transform(node.value)]

    def _sequence(self, nodes: List[Node]) -> SExpr:
        """A single node stands alone; anything else is wrapped in progn."""
        if len(nodes) == 1:
            return self.transform(nodes[0])
        return [PROGN] + [self.transform(n) for n in nodes]

    @staticmethod
    def _params(params: List[str]) -> List[Symbol]:
        return [Symbol(p) for p in params]

    @staticmethod
    def _unsupported(node: Node, what: str) -> UnsupportedConstructError:
        return UnsupportedConstructError(
            f"cannot transform {what} at {node.line}:{node.col}"
        )


def transform(ast: Node) -> SExpr:
    """Lower a MiniJS AST to an S-expression value."""
    try:
        return Transformer().transform(ast)
    except RecursionError:
        raise CompileError("Expression nested too deeply") from None
