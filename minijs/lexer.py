#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
MiniJS lexer – converts source text into a stream of tokens.
Handles significant newlines, line continuation, escapes, and error reporting.
"""

from enum import IntEnum, auto
from typing import Generator, List, Optional

from minijs.errors import CompileError


class TokenType(IntEnum):
    """All token kinds produced by the lexer."""

    NUMBER = auto()
    STRING = auto()
    IDENT = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()
    EQUAL = auto()
    NOT_EQUAL = auto()
    LESS = auto()
    GREATER = auto()
    LESS_EQ = auto()
    GREATER_EQ = auto()
    AND = auto()
    OR = auto()
    NOT = auto()
    QUESTION = auto()
    COLON = auto()
    ARROW = auto()
    ASSIGN = auto()
    COMMA = auto()
    DOT = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    NEWLINE = auto()
    EOF = auto()


class Token:
    """A single token with source location."""

    __slots__ = ("type", "value", "pos", "line", "col", "raw")

    def __init__(
        self,
        type: TokenType,
        value: str,
        pos: int,
        line: int,
        col: int,
        raw: Optional[str] = None,
    ):
        self.type = type
        self.value = value  # semantic value (e.g., string contents without quotes)
        self.pos = pos  # 0-based offset of the first character
        self.line = line
        self.col = col
        self.raw = raw if raw is not None else value  # original source text

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.col})"


class LexerError(CompileError):
    """Raised when the lexer encounters an invalid character or malformed literal."""


class Lexer:
    """MiniJS lexer. Produces tokens via the tokenize() generator."""

    KEYWORDS = {
        "true": TokenType.TRUE,
        "false": TokenType.FALSE,
        "null": TokenType.NULL,
    }

    OPERATORS = {
        "==": TokenType.EQUAL,
        "!=": TokenType.NOT_EQUAL,
        "<=": TokenType.LESS_EQ,
        ">=": TokenType.GREATER_EQ,
        "&&": TokenType.AND,
        "||": TokenType.OR,
        "=>": TokenType.ARROW,
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "*": TokenType.STAR,
        "/": TokenType.SLASH,
        "%": TokenType.PERCENT,
        "<": TokenType.LESS,
        ">": TokenType.GREATER,
        "!": TokenType.NOT,
        "?": TokenType.QUESTION,
        ":": TokenType.COLON,
        "=": TokenType.ASSIGN,
        ",": TokenType.COMMA,
        ".": TokenType.DOT,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
        "[": TokenType.LBRACKET,
        "]": TokenType.RBRACKET,
    }
    # longest first so two-character operators win over their prefixes
    OPERATORS_SORTED = sorted(OPERATORS, key=len, reverse=True)

    # A newline directly after one of these does not end the statement.
    CONTINUATION = {
        TokenType.LBRACE,
        TokenType.PLUS,
        TokenType.MINUS,
        TokenType.STAR,
        TokenType.SLASH,
        TokenType.PERCENT,
        TokenType.AND,
        TokenType.OR,
        TokenType.QUESTION,
        TokenType.COLON,
        TokenType.EQUAL,
        TokenType.NOT_EQUAL,
        TokenType.LESS,
        TokenType.GREATER,
        TokenType.LESS_EQ,
        TokenType.GREATER_EQ,
        TokenType.COMMA,
    }

    ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"', "'": "'"}

    DIGITS = "0123456789"

    # Whitespace (skipped except newline)
    WHITESPACE = {" ", "\t", "\r"}

    def __init__(self, source: str):
        self.source = source
        self.pos = 0  # current character index
        self.line = 1  # current line (1-based)
        self.col = 1  # current column (1-based)
        self.len = len(source)

        # Continuation state
        self._bracket_stack: List[TokenType] = []
        self._last_token: Optional[Token] = None

    def _current(self) -> Optional[str]:
        """Return the current character or None if at EOF."""
        if self.pos >= self.len:
            return None
        return self.source[self.pos]

    def _advance(self, n: int = 1) -> None:
        """Advance the position by n characters, updating line/col."""
        for _ in range(n):
            if self.pos >= self.len:
                return
            ch = self.source[self.pos]
            self.pos += 1
            if ch == "\n":
                self.line += 1
                self.col = 1
            else:
                self.col += 1

    def _peek(self, offset: int = 1) -> Optional[str]:
        """Look ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos >= self.len:
            return None
        return self.source[peek_pos]

    def _error(self, message: str, pos: Optional[int] = None) -> LexerError:
        return LexerError(message, self.pos if pos is None else pos, self.source)

    def _token(self, type: TokenType, value: str, start: int, line: int, col: int) -> Token:
        return Token(type, value, start, line, col, raw=self.source[start : self.pos])

    def _skip_whitespace(self) -> None:
        """Skip over spaces, tabs, carriage returns, but not newlines."""
        while (ch := self._current()) is not None and ch in self.WHITESPACE:
            self._advance()

    def _skip_line_comment(self) -> None:
        """Skip from // to the end of the line."""
        self._advance(2)
        while (ch := self._current()) is not None and ch != "\n":
            self._advance()
        # the newline itself is handled by the main loop

    def _continues_line(self) -> bool:
        """True if a newline at the current position must not split statements."""
        if self._bracket_stack and self._bracket_stack[-1] in (
            TokenType.LPAREN,
            TokenType.LBRACKET,
        ):
            return True
        last = self._last_token
        return last is not None and last.type in self.CONTINUATION

    def _read_number(self) -> Token:
        """Read a numeric literal: digits with an optional fractional part."""
        start, line, col = self.pos, self.line, self.col
        while (ch := self._current()) is not None and ch in self.DIGITS:
            self._advance()
        if self._current() == "." and (nxt := self._peek()) is not None and nxt in self.DIGITS:
            self._advance()  # consume '.'
            while (ch := self._current()) is not None and ch in self.DIGITS:
                self._advance()
        value = self.source[start : self.pos]
        return self._token(TokenType.NUMBER, value, start, line, col)

    def _read_string(self, quote_char: str) -> Token:
        """Read a string literal delimited by quote_char."""
        start, line, col = self.pos, self.line, self.col
        self._advance()  # skip opening quote

        content = []
        while True:
            ch = self._current()
            if ch is None or ch == "\n":
                raise self._error("Unterminated string literal", start)
            if ch == quote_char:
                self._advance()  # skip closing quote
                break
            if ch == "\\":
                esc_pos = self.pos
                self._advance()
                esc = self._current()
                if esc is None:
                    raise self._error("Unterminated escape sequence", esc_pos)
                if esc not in self.ESCAPES:
                    raise self._error(f"Unknown escape sequence '\\{esc}'", esc_pos)
                content.append(self.ESCAPES[esc])
                self._advance()
            else:
                content.append(ch)
                self._advance()

        return self._token(TokenType.STRING, "".join(content), start, line, col)

    def _read_identifier_or_keyword(self) -> Token:
        """Read an identifier (or true/false/null)."""
        start, line, col = self.pos, self.line, self.col
        while (ch := self._current()) is not None and (
            ch.isascii() and ch.isalnum() or ch == "_"
        ):
            self._advance()
        value = self.source[start : self.pos]
        token_type = self.KEYWORDS.get(value, TokenType.IDENT)
        return self._token(token_type, value, start, line, col)

    def _read_operator(self) -> Optional[Token]:
        """Read an operator or punctuation (two characters if possible)."""
        start, line, col = self.pos, self.line, self.col
        for op in self.OPERATORS_SORTED:
            if self.source.startswith(op, self.pos):
                self._advance(len(op))
                return self._token(self.OPERATORS[op], op, start, line, col)
        return None

    def _track_brackets(self, token: Token) -> None:
        if token.type in (TokenType.LPAREN, TokenType.LBRACKET, TokenType.LBRACE):
            self._bracket_stack.append(token.type)
        elif token.type in (TokenType.RPAREN, TokenType.RBRACKET, TokenType.RBRACE):
            matching = {
                TokenType.RPAREN: TokenType.LPAREN,
                TokenType.RBRACKET: TokenType.LBRACKET,
                TokenType.RBRACE: TokenType.LBRACE,
            }
            if self._bracket_stack and self._bracket_stack[-1] == matching[token.type]:
                self._bracket_stack.pop()
            # else: mismatched – parser will catch

    def tokenize(self) -> Generator[Token, None, None]:
        """Main lexer entry point: yields tokens until EOF."""
        while True:
            self._skip_whitespace()

            ch = self._current()
            if ch is None:
                break

            if ch == "\n":
                if self._continues_line():
                    self._advance()
                    continue
                start, line, col = self.pos, self.line, self.col
                self._advance()
                yield self._token(TokenType.NEWLINE, "\n", start, line, col)
                continue

            if ch == "/" and self._peek() == "/":
                self._skip_line_comment()
                continue

            if ch in self.DIGITS:
                token = self._read_number()
            elif ch in ('"', "'"):
                token = self._read_string(ch)
            elif ch.isascii() and ch.isalpha() or ch == "_":
                token = self._read_identifier_or_keyword()
            else:
                token = self._read_operator()
                if token is None:
                    raise self._error(f"Invalid character '{ch}'")
                self._track_brackets(token)

            yield token
            self._last_token = token

        yield Token(TokenType.EOF, "", self.pos, self.line, self.col)

    def tokenize_all(self) -> List[Token]:
        """Return a list of all tokens."""
        return list(self.tokenize())


def tokenize(source: str) -> List[Token]:
    """Tokenize MiniJS source, raising LexerError on malformed input."""
    return Lexer(source).tokenize_all()
