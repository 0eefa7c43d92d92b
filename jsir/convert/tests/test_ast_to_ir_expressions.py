# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
AstToIR expression handling over hand-built ESTree dicts.

No parser involved: each test feeds the converter the exact node shapes an
ESTree producer would emit.
"""

from __future__ import annotations

from types import SimpleNamespace

from jsir.convert import AstToIR, convert_raw_ast
from jsir.estree import JSRegExp
from jsir.ir import nodes as I


def ident(name):
	return {"type": "Identifier", "name": name}


def lit(value):
	return {"type": "Literal", "value": value}


def binary(op, left, right):
	return {"type": "BinaryExpression", "operator": op, "left": left, "right": right}


def test_binary_expression_with_identifier_operands(builder):
	ir = convert_raw_ast(binary("+", ident("a"), ident("b")), builder)
	assert isinstance(ir, I.BinaryExpr)
	assert ir.operator == "+"
	assert ir.left == I.Identifier("a")
	assert ir.right == I.Identifier("b")


def test_logical_and_assignment_keep_operator_tokens(builder):
	logical = convert_raw_ast(
		{"type": "LogicalExpression", "operator": "??", "left": ident("a"), "right": lit(0)},
		builder,
	)
	assert isinstance(logical, I.LogicalExpr)
	assert logical.operator == "??"

	assign = convert_raw_ast(
		{"type": "AssignmentExpression", "operator": "+=", "left": ident("x"), "right": lit(1)},
		builder,
	)
	assert assign == I.Assignment(left=I.Identifier("x"), right=I.Literal(1), operator="+=")


def test_literals_pass_values_through(builder):
	for value in ("s", 1, 2.5, True, False, None):
		assert convert_raw_ast(lit(value), builder) == I.Literal(value)


def test_regex_literal_becomes_jsregexp(builder):
	node = {"type": "Literal", "value": None, "raw": "/ab+c/gi", "regex": {"pattern": "ab+c", "flags": "gi"}}
	ir = convert_raw_ast(node, builder)
	assert isinstance(ir, I.Literal)
	assert ir.value == JSRegExp("ab+c", "gi")


def test_regex_literal_without_flags(builder):
	node = {"type": "Literal", "value": None, "regex": {"pattern": "x", "flags": ""}}
	assert convert_raw_ast(node, builder).value == JSRegExp("x")


def test_array_call_and_new(builder):
	arr = convert_raw_ast({"type": "ArrayExpression", "elements": [lit(1), ident("y")]}, builder)
	assert arr == I.ArrayExpr([I.Literal(1), I.Identifier("y")])

	call = convert_raw_ast({"type": "CallExpression", "callee": ident("f"), "arguments": [lit(1)]}, builder)
	assert call == I.FunctionCall(callee=I.Identifier("f"), args=[I.Literal(1)])

	new = convert_raw_ast({"type": "NewExpression", "callee": ident("Date"), "arguments": []}, builder)
	assert new == I.NewExpr(callee=I.Identifier("Date"), args=[])


def test_new_expression_without_arguments_field(builder):
	ir = convert_raw_ast({"type": "NewExpression", "callee": ident("Foo")}, builder)
	assert ir == I.NewExpr(callee=I.Identifier("Foo"), args=[])


def test_array_hole_rejects(builder):
	assert convert_raw_ast({"type": "ArrayExpression", "elements": [lit(1), None]}, builder) is None


def test_conditional_member_this(builder):
	cond = convert_raw_ast(
		{"type": "ConditionalExpression", "test": ident("a"), "consequent": lit(1), "alternate": lit(2)},
		builder,
	)
	assert cond == I.ConditionalExpr(I.Identifier("a"), I.Literal(1), I.Literal(2))

	member = convert_raw_ast(
		{"type": "MemberExpression", "object": {"type": "ThisExpression"}, "property": ident("x"), "computed": False},
		builder,
	)
	assert member == I.MemberExpr(object=I.This(), property=I.Identifier("x"), computed=False)

	computed = convert_raw_ast(
		{"type": "MemberExpression", "object": ident("a"), "property": lit(0), "computed": True},
		builder,
	)
	assert computed.computed is True


def test_unary_and_update_prefix_flags(builder):
	neg = convert_raw_ast({"type": "UnaryExpression", "operator": "-", "prefix": True, "argument": ident("x")}, builder)
	assert neg == I.UnaryExpr(argument=I.Identifier("x"), operator="-", prefix=True)

	post = convert_raw_ast({"type": "UpdateExpression", "operator": "++", "prefix": False, "argument": ident("i")}, builder)
	assert post == I.UpdateExpr(argument=I.Identifier("i"), operator="++", prefix=False)

	pre = convert_raw_ast({"type": "UpdateExpression", "operator": "--", "prefix": True, "argument": ident("i")}, builder)
	assert pre.prefix is True


def test_function_expression_with_and_without_name(builder):
	body = {"type": "BlockStatement", "body": [{"type": "ReturnStatement", "argument": ident("a")}]}
	named = convert_raw_ast(
		{"type": "FunctionExpression", "id": ident("f"), "params": [ident("a")], "body": body},
		builder,
	)
	assert isinstance(named, I.FunctionDecl)
	assert named.name == I.Identifier("f")
	assert named.params == [I.Identifier("a")]
	assert named.body == [I.Return(I.Identifier("a"))]

	anonymous = convert_raw_ast({"type": "FunctionExpression", "id": None, "params": [], "body": body}, builder)
	assert anonymous.name is None


def test_function_with_rejected_param_rejects(builder):
	node = {
		"type": "FunctionDeclaration",
		"id": ident("f"),
		"params": [{"type": "AssignmentPattern", "left": ident("a"), "right": lit(1)}],
		"body": {"type": "BlockStatement", "body": []},
	}
	assert convert_raw_ast(node, builder) is None


def test_unsupported_kinds_reject(builder):
	for node in (
		{"type": "ArrowFunctionExpression", "params": [], "body": lit(1)},
		{"type": "SequenceExpression", "expressions": [lit(1), lit(2)]},
		{"type": "SpreadElement", "argument": ident("x")},
		{"type": "ThrowStatement", "argument": lit(1)},
	):
		assert convert_raw_ast(node, builder) is None


def test_rejection_propagates_from_deep_child(builder):
	seq = {"type": "SequenceExpression", "expressions": [lit(1), lit(2)]}
	node = binary("+", ident("a"), {"type": "CallExpression", "callee": ident("f"), "arguments": [seq]})
	assert convert_raw_ast(node, builder) is None


def test_missing_or_untyped_node_rejects(builder):
	assert convert_raw_ast(None, builder) is None
	assert convert_raw_ast({"name": "x"}, builder) is None
	assert convert_raw_ast("x", builder) is None


def test_list_conversion_stops_at_first_rejection(recorder):
	nodes = [ident("a"), {"type": "ThrowStatement", "argument": lit(1)}, ident("c")]
	assert convert_raw_ast(nodes, recorder) is None
	assert recorder.calls == [("identifier", "a")]


def test_left_operand_rejection_skips_right(recorder):
	node = binary("+", {"type": "SpreadElement", "argument": ident("x")}, ident("b"))
	assert convert_raw_ast(node, recorder) is None
	assert recorder.calls == []


def test_list_conversion_returns_new_list(builder):
	nodes = [ident("a"), lit(1)]
	out = convert_raw_ast(nodes, builder)
	assert out == [I.Identifier("a"), I.Literal(1)]
	assert out is not nodes


def test_attribute_shaped_nodes_are_accepted(builder):
	node = SimpleNamespace(
		type="BinaryExpression",
		operator="*",
		left=SimpleNamespace(type="Identifier", name="a"),
		right=SimpleNamespace(type="Literal", value=2),
	)
	assert convert_raw_ast(node, builder) == I.BinaryExpr(I.Identifier("a"), "*", I.Literal(2))


def test_input_tree_is_not_mutated(builder):
	node = {
		"type": "ObjectExpression",
		"properties": [{"type": "Property", "kind": "init", "key": ident("a"), "value": lit(1), "computed": False}],
	}
	snapshot = repr(node)
	convert_raw_ast(node, builder)
	assert repr(node) == snapshot


def test_converter_instance_is_reusable(builder):
	conv = AstToIR(builder)
	assert conv.convert({"type": "ThrowStatement"}) is None
	assert conv.convert(ident("a")) == I.Identifier("a")
	assert conv._depth == 0
