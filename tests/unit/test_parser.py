#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

import unittest

from minijs.lexer import LexerError
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
    ObjectLiteral,
    Property,
    Ternary,
    Unary,
)
from minijs.parser import ParseError, parse


def num(value):
    return Literal(LiteralKind.NUMBER, value)


def string(value):
    return Literal(LiteralKind.STRING, value)


def ident(name):
    return Identifier(name)


class TestParser(unittest.TestCase):
    def test_number(self):
        self.assertEqual(parse("42"), num(42))
        self.assertIsInstance(parse("42").value, int)
        self.assertEqual(parse("2.5"), num(2.5))

    def test_literals(self):
        self.assertEqual(parse('"hi"'), string("hi"))
        self.assertEqual(parse("true"), Literal(LiteralKind.BOOL, True))
        self.assertEqual(parse("false"), Literal(LiteralKind.BOOL, False))
        self.assertEqual(parse("null"), Literal(LiteralKind.NULL, None))

    def test_number_out_of_range(self):
        with self.assertRaises(ParseError) as cm:
            parse("x + " + "9" * 400 + ".5")
        self.assertIn("Number literal out of range", str(cm.exception))
        self.assertEqual(cm.exception.pos, 4)

    def test_large_integer_is_kept_exact(self):
        self.assertEqual(parse("9" * 400), num(int("9" * 400)))

    def test_identifier(self):
        self.assertEqual(parse("foo"), ident("foo"))

    def test_binary(self):
        self.assertEqual(parse("1 + 2"), Binary("+", num(1), num(2)))

    def test_precedence(self):
        self.assertEqual(
            parse("1 + 2 * 3"),
            Binary("+", num(1), Binary("*", num(2), num(3))),
        )
        self.assertEqual(
            parse("(1 + 2) * 3"),
            Binary("*", Binary("+", num(1), num(2)), num(3)),
        )

    def test_left_associative(self):
        self.assertEqual(
            parse("a - b - c"),
            Binary("-", Binary("-", ident("a"), ident("b")), ident("c")),
        )
        self.assertEqual(
            parse("a / b % c"),
            Binary("%", Binary("/", ident("a"), ident("b")), ident("c")),
        )

    def test_comparison_binds_looser_than_arithmetic(self):
        self.assertEqual(
            parse("a + 1 < b * 2"),
            Binary("<", Binary("+", ident("a"), num(1)), Binary("*", ident("b"), num(2))),
        )
        self.assertEqual(
            parse("a < b == c > d"),
            Binary("==", Binary("<", ident("a"), ident("b")), Binary(">", ident("c"), ident("d"))),
        )

    def test_logical(self):
        self.assertEqual(
            parse("a || b && c"),
            Logical("||", ident("a"), Logical("&&", ident("b"), ident("c"))),
        )
        self.assertEqual(
            parse("a == 1 && b != 2"),
            Logical(
                "&&",
                Binary("==", ident("a"), num(1)),
                Binary("!=", ident("b"), num(2)),
            ),
        )

    def test_unary(self):
        self.assertEqual(parse("-x"), Unary("-", ident("x")))
        self.assertEqual(parse("!!x"), Unary("!", Unary("!", ident("x"))))
        self.assertEqual(
            parse("-a * b"),
            Binary("*", Unary("-", ident("a")), ident("b")),
        )

    def test_ternary(self):
        self.assertEqual(
            parse("a ? b : c"),
            Ternary(ident("a"), ident("b"), ident("c")),
        )

    def test_ternary_is_right_associative(self):
        self.assertEqual(
            parse("a ? b : c ? d : e"),
            Ternary(ident("a"), ident("b"), Ternary(ident("c"), ident("d"), ident("e"))),
        )

    def test_ternary_condition_is_logical_or(self):
        self.assertEqual(
            parse("a || b ? 1 : 2"),
            Ternary(Logical("||", ident("a"), ident("b")), num(1), num(2)),
        )

    def test_array(self):
        self.assertEqual(
            parse('[1, "two", 3]'),
            ArrayLiteral([num(1), string("two"), num(3)]),
        )
        self.assertEqual(parse("[]"), ArrayLiteral([]))
        self.assertEqual(parse("[1, 2,]"), ArrayLiteral([num(1), num(2)]))

    def test_call(self):
        self.assertEqual(
            parse("f(1, x)"),
            Call(ident("f"), [num(1), ident("x")]),
        )
        self.assertEqual(parse("f()"), Call(ident("f"), []))

    def test_member_access(self):
        self.assertEqual(
            parse("a.b"),
            Member(ident("a"), string("b"), False),
        )
        self.assertEqual(
            parse("a[0]"),
            Member(ident("a"), num(0), True),
        )

    def test_postfix_chain(self):
        self.assertEqual(
            parse("a.b(1)[c].d"),
            Member(
                Member(
                    Call(Member(ident("a"), string("b"), False), [num(1)]),
                    ident("c"),
                    True,
                ),
                string("d"),
                False,
            ),
        )
        self.assertEqual(
            parse("f(1)(2)"),
            Call(Call(ident("f"), [num(1)]), [num(2)]),
        )

    def test_arrow_single_param(self):
        self.assertEqual(
            parse("x => x + 1"),
            Arrow(["x"], Binary("+", ident("x"), num(1))),
        )

    def test_arrow_param_list(self):
        self.assertEqual(
            parse("(a, b) => a * b"),
            Arrow(["a", "b"], Binary("*", ident("a"), ident("b"))),
        )
        self.assertEqual(parse("() => 1"), Arrow([], num(1)))

    def test_parenthesized_is_not_arrow(self):
        self.assertEqual(parse("(a)"), ident("a"))
        self.assertEqual(
            parse("(a)(b)"),
            Call(ident("a"), [ident("b")]),
        )

    def test_arrow_block_body(self):
        self.assertEqual(
            parse("x => {\n  y = x * 2\n  y + 1\n}"),
            Arrow(
                ["x"],
                Block(
                    [
                        Assignment("y", Binary("*", ident("x"), num(2))),
                        Binary("+", ident("y"), num(1)),
                    ]
                ),
            ),
        )

    def test_arrow_body_on_next_line(self):
        self.assertEqual(
            parse("x =>\n{ x + 1 }"),
            Arrow(["x"], Block([Binary("+", ident("x"), num(1))])),
        )
        self.assertEqual(parse("(a) =>\n  a"), Arrow(["a"], ident("a")))

    def test_arrow_as_argument(self):
        self.assertEqual(
            parse("map(xs, (x) => x * 2)"),
            Call(ident("map"), [ident("xs"), Arrow(["x"], Binary("*", ident("x"), num(2)))]),
        )

    def test_arrow_params_must_be_names(self):
        with self.assertRaises(ParseError):
            parse("(1, b) => b")

    def test_empty_object(self):
        self.assertEqual(parse("{}"), ObjectLiteral([]))

    def test_object_with_method(self):
        obj = parse("{ add(a, b) { a + b } }")
        self.assertEqual(
            obj,
            ObjectLiteral(
                [Property("add", True, ["a", "b"], Block([Binary("+", ident("a"), ident("b"))]))]
            ),
        )

    def test_object_with_property(self):
        obj = parse("{ version: 1 }")
        self.assertEqual(obj, ObjectLiteral([Property("version", False, [], num(1))]))

    def test_object_with_multiple_methods(self):
        obj = parse("{ add(a, b) { a + b }, sub(a, b) { a - b } }")
        self.assertEqual([p.key for p in obj.properties], ["add", "sub"])
        self.assertTrue(all(p.is_method for p in obj.properties))

    def test_object_trailing_comma(self):
        obj = parse("{ a: 1, b: 2, }")
        self.assertEqual([p.key for p in obj.properties], ["a", "b"])

    def test_object_mixed_entries_keep_order(self):
        obj = parse("{ x: 1, f() { x }, y: 2 }")
        self.assertEqual([(p.key, p.is_method) for p in obj.properties], [("x", False), ("f", True), ("y", False)])

    def test_object_string_key(self):
        obj = parse('{ "a": 1 }')
        self.assertEqual(obj.properties[0].key, "a")

    def test_object_string_key_must_be_a_name(self):
        for src in ['{ "a b": 1 }', '{ "": 1 }', '{ "1x": 1 }', '{ "null": 1 }', '{ "f(x)"() { 1 } }']:
            with self.subTest(src=src):
                with self.assertRaises(ParseError) as cm:
                    parse(src)
                self.assertIn("Invalid property name", str(cm.exception))
                self.assertEqual(cm.exception.pos, 2)

    def test_method_body_on_next_line(self):
        self.assertEqual(
            parse("{ f()\n{ 1 } }"),
            ObjectLiteral([Property("f", True, [], Block([num(1)]))]),
        )

    def test_object_bad_entry(self):
        with self.assertRaises(ParseError) as cm:
            parse("{ a b }")
        self.assertIn("'(' or ':'", str(cm.exception))

    def test_object_missing_comma(self):
        with self.assertRaises(ParseError):
            parse("{ a: 1\n b: 2 }")

    def test_multiline_object(self):
        code = """{
            hasDecimal(s) { strContains(str(s), ".") },
            action_digit() {
                display + str(get(context, "digit"))
            }
        }"""
        obj = parse(code)
        self.assertEqual([p.key for p in obj.properties], ["hasDecimal", "action_digit"])

    def test_multiline_body_is_block(self):
        code = """{
            process(x) {
                a = x + 1
                a * 2
            }
        }"""
        body = parse(code).properties[0].value
        self.assertEqual(
            body,
            Block(
                [
                    Assignment("a", Binary("+", ident("x"), num(1))),
                    Binary("*", ident("a"), num(2)),
                ]
            ),
        )

    def test_continuation_joins_lines(self):
        code = "{ f(a, b) {\n  a +\n  b\n} }"
        body = parse(code).properties[0].value
        self.assertEqual(body, Block([Binary("+", ident("a"), ident("b"))]))

    def test_continuation_after_ternary_colon(self):
        code = "{ f(x) {\n  y = x ? 1 :\n    2\n  y\n} }"
        body = parse(code).properties[0].value
        self.assertEqual(
            body,
            Block([Assignment("y", Ternary(ident("x"), num(1), num(2))), ident("y")]),
        )

    def test_blank_lines_in_body(self):
        code = "{ f() {\n\n  a = 1\n\n\n  a\n\n} }"
        body = parse(code).properties[0].value
        self.assertEqual(len(body.statements), 2)

    def test_empty_method_body(self):
        obj = parse("{ noop() {} }")
        self.assertEqual(obj.properties[0].value, Block([]))

    def test_statements_need_separator(self):
        with self.assertRaises(ParseError):
            parse("{ f() { a = 1 b } }")

    def test_assignment_only_in_statement_position(self):
        with self.assertRaises(ParseError) as cm:
            parse("{ f() { g(x = 1) } }")
        self.assertIn("Assignment is only allowed as a statement", str(cm.exception))
        with self.assertRaises(ParseError):
            parse("x = 1")

    def test_leading_and_trailing_newlines(self):
        self.assertEqual(parse("\n\n1 + 2\n\n"), Binary("+", num(1), num(2)))

    def test_leftover_tokens(self):
        with self.assertRaises(ParseError) as cm:
            parse("1 2")
        self.assertEqual(cm.exception.pos, 2)
        self.assertEqual(cm.exception.expected, "end of input")
        self.assertEqual(cm.exception.found, "number '2'")

    def test_two_top_level_lines(self):
        with self.assertRaises(ParseError):
            parse("a\nb")

    def test_empty_program(self):
        with self.assertRaises(ParseError) as cm:
            parse("")
        self.assertIn("Unexpected end of input", str(cm.exception))

    def test_unclosed_paren(self):
        with self.assertRaises(ParseError) as cm:
            parse("(1 + 2")
        self.assertEqual(cm.exception.found, "end of input")

    def test_stray_operator(self):
        with self.assertRaises(ParseError):
            parse("+")

    def test_missing_colon_in_ternary(self):
        with self.assertRaises(ParseError) as cm:
            parse("a ? b")
        self.assertEqual(cm.exception.expected, "':'")

    def test_deep_nesting_is_a_parse_error(self):
        for src in [
            "(" * 1000 + "1" + ")" * 1000,
            "!" * 1200 + "a",
            "[" * 1000 + "]" * 1000,
        ]:
            with self.subTest(src=src[:10]):
                with self.assertRaises(ParseError) as cm:
                    parse(src)
                self.assertIn("nested too deeply", str(cm.exception))

    def test_moderate_nesting_parses(self):
        node = parse("(" * 50 + "1" + ")" * 50)
        self.assertEqual(node, num(1))
        self.assertEqual(parse("[" * 50 + "]" * 50).elements[0].elements[0].line, 1)

    def test_lexer_errors_propagate(self):
        with self.assertRaises(LexerError):
            parse("'oops")

    def test_node_locations(self):
        node = parse("a +\n  b")
        self.assertEqual((node.line, node.col), (1, 1))
        self.assertEqual((node.right.line, node.right.col), (2, 3))


if __name__ == "__main__":
    unittest.main()
