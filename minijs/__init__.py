#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
MiniJS – compiles a small JavaScript-like DSL to S-expressions.
"""

from minijs.compiler import compile
from minijs.errors import CompileError, DecodeError, EncodeError, SerializationError
from minijs.lexer import LexerError, Token, TokenType, tokenize
from minijs.parser import ParseError, parse
from minijs.serializer import deserialize, from_json, serialize, to_json
from minijs.sexpr import Symbol, to_source
from minijs.transformer import UnsupportedConstructError, transform

__version__ = "0.1.0"
__all__ = [
    "tokenize", "Token", "TokenType", "LexerError",
    "parse", "ParseError",
    "transform", "UnsupportedConstructError",
    "compile", "CompileError",
    "serialize", "deserialize", "to_json", "from_json",
    "SerializationError", "EncodeError", "DecodeError",
    "Symbol", "to_source",
]
