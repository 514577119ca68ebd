#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
MiniJS compiler – driver that orchestrates lexing, parsing and lowering to
S-expressions, and writes the result in one of several output formats.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from minijs.errors import CompileError, SerializationError
from minijs.lexer import Lexer
from minijs.minijs_ast import Node
from minijs.parser import Parser
from minijs.serializer import serialize, to_json
from minijs.sexpr import SExpr, to_source
from minijs.transformer import transform

logger = logging.getLogger(__name__)

EMIT_FORMATS = ("sexpr", "wire", "json", "tokens", "ast")


def compile(source: str) -> SExpr:
    """Compile MiniJS source to an S-expression value.

    Raises the first CompileError (LexerError, ParseError, ...) encountered; nothing is
    returned on failure.
    """
    lexer = Lexer(source)
    parser = Parser(lexer)
    logger.debug("tokenized %d chars into %d tokens", len(source), len(parser.tokens))
    ast = parser.parse_program()
    logger.debug("parsed %s", type(ast).__name__)
    sexpr = transform(ast)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("lowered to %s", to_source(sexpr))
    return sexpr


def render(source: str, emit: str) -> str:
    """Run the pipeline as far as `emit` requires and format its result."""
    if emit == "tokens":
        return "\n".join(repr(t) for t in Lexer(source).tokenize())
    if emit == "ast":
        ast: Node = Parser(Lexer(source)).parse_program()
        return repr(ast)
    sexpr = compile(source)
    if emit == "wire":
        return serialize(sexpr)
    if emit == "json":
        return json.dumps(to_json(sexpr))
    return to_source(sexpr)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="MiniJS to S-expression compiler")
    parser.add_argument("input", help="Input .minijs file, or - for stdin")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument(
        "--emit",
        choices=EMIT_FORMATS,
        default="sexpr",
        help="What to write: readable S-expression (default), wire text, JSON, tokens or AST",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline stages")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.input == "-":
        source = sys.stdin.read()
    else:
        input_path = Path(args.input)
        if not input_path.exists():
            print(f"Error: input file {input_path} not found", file=sys.stderr)
            return 1
        source = input_path.read_text(encoding="utf-8")

    try:
        output = render(source, args.emit)
    except (CompileError, SerializationError) as e:
        print(str(e), file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        logger.info("wrote %s", args.output)
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
