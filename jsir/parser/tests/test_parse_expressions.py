# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from jsir.parser import LiteralParseError, parse_expression, parse_program


def expr(source):
	return parse_expression(source)


def test_precedence_and_associativity():
	node = expr("a + b * c - d")
	assert node["operator"] == "-"
	assert node["left"]["operator"] == "+"
	assert node["left"]["right"]["operator"] == "*"

	power = expr("a ** b ** c")
	assert power["right"]["operator"] == "**"

	assign = expr("a = b = 1")
	assert assign["right"]["type"] == "AssignmentExpression"


def test_logical_and_conditional():
	node = expr("a || b && c ? d : e")
	assert node["type"] == "ConditionalExpression"
	assert node["test"]["type"] == "LogicalExpression"
	assert node["test"]["operator"] == "||"
	assert expr("a ?? b")["operator"] == "??"


def test_relational_keywords():
	assert expr("a instanceof B")["operator"] == "instanceof"
	assert expr("'k' in o")["operator"] == "in"


def test_unary_and_update():
	assert expr("typeof x")["operator"] == "typeof"
	assert expr("!x")["prefix"] is True
	post = expr("i++")
	assert (post["type"], post["prefix"]) == ("UpdateExpression", False)
	pre = expr("--i")
	assert (pre["type"], pre["prefix"]) == ("UpdateExpression", True)


def test_member_call_and_new():
	node = expr("a.b[c](d)")
	assert node["type"] == "CallExpression"
	assert node["callee"]["computed"] is True
	assert node["callee"]["object"]["property"]["name"] == "b"

	bare = expr("new Foo")
	assert (bare["type"], bare["arguments"]) == ("NewExpression", [])
	with_args = expr("new a.B(1)")
	assert with_args["callee"]["type"] == "MemberExpression"
	assert len(with_args["arguments"]) == 1


def test_sequence_in_parentheses():
	node = expr("(a, b)")
	assert node["type"] == "SequenceExpression"
	assert len(node["expressions"]) == 2


def test_literals():
	assert expr("42")["value"] == 42
	assert expr("0x1F")["value"] == 31
	assert expr("1.5e3")["value"] == 1500.0
	assert expr("'a\\tb'")["value"] == "a\tb"
	assert expr('"\\u0041\\x42\\u{43}"')["value"] == "ABC"
	assert expr("'\\q'")["value"] == "q"
	assert expr("true")["value"] is True
	assert expr("null")["value"] is None
	assert expr("this")["type"] == "ThisExpression"


def test_regex_literal():
	node = expr("/a[/]b\\/c/gi")
	assert node["value"] is None
	assert node["regex"] == {"pattern": "a[/]b\\/c", "flags": "gi"}


def test_division_is_not_regex():
	node = expr("a / b / c")
	assert node["operator"] == "/"
	assert node["left"]["operator"] == "/"


def test_object_literal_property_forms():
	node = expr("{a: 1, 'b': 2, 3: c, [k]: 4, d, m(x) { return x; }, get g() { return 1; }, set s(v) {}}")
	props = node["properties"]
	assert [p["kind"] for p in props] == ["init"] * 6 + ["get", "set"]
	assert props[1]["key"]["value"] == "b"
	assert props[2]["key"]["value"] == 3
	assert props[3]["computed"] is True
	assert props[4]["shorthand"] is True
	assert props[5]["method"] is True
	assert props[7]["value"]["params"][0]["name"] == "v"


def test_get_and_set_as_plain_keys_and_names():
	node = expr("{get: 1, set: 2}")
	assert [p["key"]["name"] for p in node["properties"]] == ["get", "set"]
	call = expr("get(set)")
	assert call["callee"]["name"] == "get"


def test_object_literal_after_return_and_in_arguments():
	ret = parse_program("function f() { return {a: 1}; }")["body"][0]["body"]["body"][0]
	assert ret["argument"]["type"] == "ObjectExpression"
	call = expr("f({}, [1, 2,])")
	assert call["arguments"][0]["type"] == "ObjectExpression"
	assert len(call["arguments"][1]["elements"]) == 2


def test_function_expression_in_statement_and_expression_position():
	decl = parse_program("function f() {}")["body"][0]
	assert decl["type"] == "FunctionDeclaration"
	stmt = parse_program("x = function g(a) {};")["body"][0]
	assert stmt["expression"]["right"]["type"] == "FunctionExpression"
	assert stmt["expression"]["right"]["id"]["name"] == "g"


def test_template_literal_with_holes():
	node = expr("`a${b}c${ {d: 1}.d }e`")
	assert node["type"] == "TemplateLiteral"
	assert [q["value"]["cooked"] for q in node["quasis"]] == ["a", "c", "e"]
	assert [q["tail"] for q in node["quasis"]] == [False, False, True]
	assert node["expressions"][0]["name"] == "b"
	assert node["expressions"][1]["type"] == "MemberExpression"


def test_template_hole_locations_are_absolute():
	stmt = parse_program("x;\n  `ab${cd}`;")["body"][1]
	hole = stmt["expression"]["expressions"][0]
	assert hole["loc"]["start"] == {"line": 2, "column": 7}


def test_tagged_template():
	node = expr("$nonstandard`x${y}`")
	assert node["type"] == "TaggedTemplateExpression"
	assert node["tag"]["name"] == "$nonstandard"
	assert node["quasi"]["quasis"][0]["value"] == {"raw": "x", "cooked": "x"}


def test_invalid_escape_in_tagged_template_cooks_to_none():
	node = expr("tag`\\unicode`")
	assert node["quasi"]["quasis"][0]["value"]["cooked"] is None


def test_invalid_escape_in_untagged_template_raises():
	with pytest.raises(LiteralParseError) as excinfo:
		parse_program("x;\n`\\unicode`;")
	assert excinfo.value.loc["start"]["line"] == 2


def test_unterminated_hole_raises():
	with pytest.raises(LiteralParseError):
		expr("`a${b`")


def test_long_left_associative_chain_builds_without_recursion():
	node = expr(" - ".join(f"a{i}" for i in range(3000)))
	assert node["right"]["name"] == "a2999"
	depth = 0
	while node["type"] == "BinaryExpression":
		depth += 1
		node = node["left"]
	assert depth == 2999
	assert node["name"] == "a0"
