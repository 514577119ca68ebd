#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
MiniJS parser – recursive descent parser that consumes tokens from the lexer
and produces an AST with source locations.
"""

import math
import re
from typing import List, Optional

from minijs.errors import CompileError
from minijs.lexer import Lexer, Token, TokenType
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

TOKEN_NAMES = {
    TokenType.NUMBER: "number",
    TokenType.STRING: "string",
    TokenType.IDENT: "identifier",
    TokenType.TRUE: "'true'",
    TokenType.FALSE: "'false'",
    TokenType.NULL: "'null'",
    TokenType.NEWLINE: "newline",
    TokenType.EOF: "end of input",
}
TOKEN_NAMES.update({type: f"'{text}'" for text, type in Lexer.OPERATORS.items()})


def describe(token: Token) -> str:
    """Human-readable description of a token for error messages."""
    if token.type in (TokenType.NUMBER, TokenType.STRING, TokenType.IDENT):
        return f"{TOKEN_NAMES[token.type]} {token.raw!r}"
    return TOKEN_NAMES[token.type]


class ParseError(CompileError):
    """Raised when the parser encounters a syntax error."""

    def __init__(
        self,
        message: str,
        token: Token,
        source: str = "",
        expected: Optional[str] = None,
    ):
        self.token = token
        self.found = describe(token)
        self.expected = expected
        super().__init__(message, token.pos, source)


class Parser:
    """Recursive descent parser for MiniJS."""

    # Precedence levels for binary operators (higher = tighter)
    PRECEDENCE = {
        TokenType.OR: 1,
        TokenType.AND: 2,
        TokenType.EQUAL: 3,
        TokenType.NOT_EQUAL: 3,
        TokenType.LESS: 4,
        TokenType.GREATER: 4,
        TokenType.LESS_EQ: 4,
        TokenType.GREATER_EQ: 4,
        TokenType.PLUS: 5,
        TokenType.MINUS: 5,
        TokenType.STAR: 6,
        TokenType.SLASH: 6,
        TokenType.PERCENT: 6,
    }

    LOGICAL = {TokenType.AND, TokenType.OR}

    # string keys become define names, so they must read back as symbols
    KEY_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

    def __init__(self, lexer: Lexer):
        self.source = lexer.source
        self.tokens = list(lexer.tokenize())  # load all tokens for easy lookahead
        self.pos = 0
        self.current = self.tokens[0]

    def _advance(self) -> Token:
        """Move to the next token, returning the one just consumed."""
        token = self.current
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        self.current = self.tokens[self.pos]
        return token

    def peek_token(self, offset: int = 0) -> Token:
        """Peek ahead without consuming; clamps to the trailing EOF."""
        idx = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[idx]

    def _check(self, type: TokenType) -> bool:
        return self.current.type == type

    def _match(self, type: TokenType) -> bool:
        if self.current.type == type:
            self._advance()
            return True
        return False

    def consume(self, expected_type: TokenType, expected: Optional[str] = None) -> Token:
        """If the current token is of the expected type, consume it and return it; otherwise raise ParseError."""
        if self.current.type == expected_type:
            return self._advance()
        expected = expected or TOKEN_NAMES[expected_type]
        if self.current.type == TokenType.ASSIGN:
            raise self._unexpected(expected)
        raise self._error(f"Expected {expected}, found {describe(self.current)}", expected)

    def _error(self, message: str, expected: Optional[str] = None) -> ParseError:
        return ParseError(message, self.current, self.source, expected)

    def _unexpected(self, expected: str) -> ParseError:
        if self.current.type == TokenType.ASSIGN:
            return self._error("Assignment is only allowed as a statement", expected)
        if self.current.type == TokenType.EOF:
            return self._error(f"Unexpected end of input, expected {expected}", expected)
        return self._error(f"Unexpected {describe(self.current)}, expected {expected}", expected)

    def _skip_newlines(self) -> None:
        """Consume all consecutive NEWLINE tokens."""
        while self.current.type == TokenType.NEWLINE:
            self._advance()

    def parse_program(self) -> Node:
        """Parse a whole MiniJS program: exactly one expression."""
        self._skip_newlines()
        try:
            expr = self.parse_expression()
        except RecursionError:
            raise self._error("Expression nested too deeply") from None
        self._skip_newlines()
        if not self._check(TokenType.EOF):
            raise self._unexpected("end of input")
        return expr

    def parse_statement(self) -> Node:
        """Parse a block statement: assignment or bare expression."""
        if self._check(TokenType.IDENT) and self.peek_token(1).type == TokenType.ASSIGN:
            return self.parse_assign()
        return self.parse_expression()

    def parse_assign(self) -> Assignment:
        """Parse 'name = expr'."""
        name_token = self.consume(TokenType.IDENT)
        self.consume(TokenType.ASSIGN)
        value = self.parse_expression()
        return Assignment(name_token.value, value, line=name_token.line, col=name_token.col)

    def parse_block(self) -> Block:
        """Parse '{' statements '}' with newline-separated statements."""
        open_token = self.consume(TokenType.LBRACE)
        statements: List[Node] = []
        self._skip_newlines()
        while not self._check(TokenType.RBRACE):
            statements.append(self.parse_statement())
            if self._check(TokenType.NEWLINE):
                self._skip_newlines()
            elif not self._check(TokenType.RBRACE):
                raise self._unexpected("newline or '}'")
        self.consume(TokenType.RBRACE)
        return Block(statements, line=open_token.line, col=open_token.col)

    def parse_expression(self) -> Node:
        """Parse an expression, starting at the ternary level."""
        cond = self.parse_binary(1)
        if self._check(TokenType.QUESTION):
            self._advance()
            then = self.parse_expression()
            self.consume(TokenType.COLON)
            else_ = self.parse_expression()
            return Ternary(cond, then, else_, line=cond.line, col=cond.col)
        return cond

    def parse_binary(self, min_prec: int) -> Node:
        """Parse binary expressions using precedence climbing."""
        lhs = self.parse_unary()
        while True:
            tok = self.current
            prec = self.PRECEDENCE.get(tok.type)
            if prec is None or prec < min_prec:
                break
            self._advance()
            rhs = self.parse_binary(prec + 1)
            node_type = Logical if tok.type in self.LOGICAL else Binary
            lhs = node_type(tok.value, lhs, rhs, line=lhs.line, col=lhs.col)
        return lhs

    def parse_unary(self) -> Node:
        if self.current.type in (TokenType.NOT, TokenType.MINUS):
            op_token = self._advance()
            operand = self.parse_unary()
            return Unary(op_token.value, operand, line=op_token.line, col=op_token.col)
        return self.parse_postfix()

    def parse_postfix(self) -> Node:
        """Parse member access and calls chained onto a primary expression."""
        expr = self.parse_primary()
        while True:
            if self._check(TokenType.DOT):
                self._advance()
                name = self.consume(TokenType.IDENT, "property name")
                key = Literal(LiteralKind.STRING, name.value, line=name.line, col=name.col)
                expr = Member(expr, key, False, line=expr.line, col=expr.col)
            elif self._check(TokenType.LBRACKET):
                self._advance()
                index = self.parse_expression()
                self.consume(TokenType.RBRACKET)
                expr = Member(expr, index, True, line=expr.line, col=expr.col)
            elif self._check(TokenType.LPAREN):
                args = self.parse_call_args()
                expr = Call(expr, args, line=expr.line, col=expr.col)
            else:
                return expr

    def parse_primary(self) -> Node:
        """Parse a literal, identifier, grouping, array, object or arrow function."""
        token = self.current
        if token.type == TokenType.NUMBER:
            self._advance()
            if "." in token.value:
                value = float(token.value)
                if not math.isfinite(value):
                    raise ParseError("Number literal out of range", token, self.source)
            else:
                value = int(token.value)
            return Literal(LiteralKind.NUMBER, value, line=token.line, col=token.col)
        if token.type == TokenType.STRING:
            self._advance()
            return Literal(LiteralKind.STRING, token.value, line=token.line, col=token.col)
        if token.type in (TokenType.TRUE, TokenType.FALSE):
            self._advance()
            value = token.type == TokenType.TRUE
            return Literal(LiteralKind.BOOL, value, line=token.line, col=token.col)
        if token.type == TokenType.NULL:
            self._advance()
            return Literal(LiteralKind.NULL, None, line=token.line, col=token.col)
        if token.type == TokenType.IDENT:
            if self.peek_token(1).type == TokenType.ARROW:
                self._advance()
                return self.parse_arrow([token.value], token)
            self._advance()
            return Identifier(token.value, line=token.line, col=token.col)
        if token.type == TokenType.LPAREN:
            if self._at_arrow_params():
                params = self.parse_params()
                return self.parse_arrow(params, token)
            self._advance()
            expr = self.parse_expression()
            self.consume(TokenType.RPAREN)
            return expr
        if token.type == TokenType.LBRACKET:
            return self.parse_array()
        if token.type == TokenType.LBRACE:
            return self.parse_object()
        raise self._unexpected("expression")

    def _at_arrow_params(self) -> bool:
        """Look past the matching ')' for '=>' without consuming anything."""
        depth = 0
        idx = self.pos
        while idx < len(self.tokens):
            type = self.tokens[idx].type
            if type == TokenType.LPAREN:
                depth += 1
            elif type == TokenType.RPAREN:
                depth -= 1
                if depth == 0:
                    return idx + 1 < len(self.tokens) and self.tokens[idx + 1].type == TokenType.ARROW
            elif type == TokenType.EOF:
                return False
            idx += 1
        return False

    def parse_params(self) -> List[str]:
        """Parse '(' [name {',' name} [',']] ')'."""
        self.consume(TokenType.LPAREN)
        params = []
        while not self._check(TokenType.RPAREN):
            params.append(self.consume(TokenType.IDENT, "parameter name").value)
            if not self._match(TokenType.COMMA):
                break
        self.consume(TokenType.RPAREN, "',' or ')'")
        return params

    def parse_arrow(self, params: List[str], start: Token) -> Arrow:
        self.consume(TokenType.ARROW)
        self._skip_newlines()
        if self._check(TokenType.LBRACE):
            body = self.parse_block()
        else:
            body = self.parse_expression()
        return Arrow(params, body, line=start.line, col=start.col)

    def parse_array(self) -> ArrayLiteral:
        open_token = self.consume(TokenType.LBRACKET)
        elements = []
        while not self._check(TokenType.RBRACKET):
            elements.append(self.parse_expression())
            if not self._match(TokenType.COMMA):
                break
        self.consume(TokenType.RBRACKET, "',' or ']'")
        return ArrayLiteral(elements, line=open_token.line, col=open_token.col)

    def parse_object(self) -> ObjectLiteral:
        """Parse '{' entries '}' where entries are methods or plain properties."""
        open_token = self.consume(TokenType.LBRACE)
        properties = []
        self._skip_newlines()
        while not self._check(TokenType.RBRACE):
            properties.append(self.parse_property())
            self._skip_newlines()
            if not self._match(TokenType.COMMA):
                break
            self._skip_newlines()
        self.consume(TokenType.RBRACE, "',' or '}'")
        return ObjectLiteral(properties, line=open_token.line, col=open_token.col)

    def parse_property(self) -> Property:
        key_token = self.current
        if key_token.type not in (TokenType.IDENT, TokenType.STRING):
            raise self._unexpected("property name")
        if key_token.type == TokenType.STRING and (
            not self.KEY_RE.match(key_token.value) or key_token.value in Lexer.KEYWORDS
        ):
            raise self._error(f"Invalid property name {key_token.raw}", "property name")
        self._advance()
        if self._check(TokenType.LPAREN):
            params = self.parse_params()
            self._skip_newlines()
            body = self.parse_block()
            return Property(key_token.value, True, params, body, line=key_token.line, col=key_token.col)
        if self._match(TokenType.COLON):
            value = self.parse_expression()
            return Property(key_token.value, False, [], value, line=key_token.line, col=key_token.col)
        raise self._unexpected("'(' or ':' after property name")

    def parse_call_args(self) -> List[Node]:
        """Parse arguments inside parentheses."""
        self.consume(TokenType.LPAREN)
        args = []
        while not self._check(TokenType.RPAREN):
            args.append(self.parse_expression())
            if not self._match(TokenType.COMMA):
                break
        self.consume(TokenType.RPAREN, "',' or ')'")
        return args


def parse(source: str) -> Node:
    """Parse MiniJS source into an AST, raising LexerError or ParseError."""
    return Parser(Lexer(source)).parse_program()
