# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Raw ESTree → builder IR conversion.

This pass accepts a restricted subset of JavaScript and rejects everything
else. Rejection is signalled by returning None (never by raising) and
propagates unchanged through every enclosing node: a node either converts
completely or not at all.

Dispatch is closed: only kinds listed in `jsir.estree.SUPPORTED_KINDS` reach a
`visit_<Kind>` handler, every other kind is rejected at the origin via
`reject()`. Subclasses can hook `reject()` to learn where and why a tree was
refused (see `trace.py`) without changing results.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional, Sequence, Tuple

from jsir.estree import SUPPORTED_KINDS, JSRegExp, field, node_kind
from jsir.ir.protocol import Builder

NONSTANDARD_TAG = "$nonstandard"
# Interpreter frames one nesting level costs on the traced path
# (RejectionTracer.convert, AstToIR.convert, visit_<Kind>, convert_fields).
FRAMES_PER_LEVEL = 4
# Frames left to callers: driver, test runner, builder calls, list levels.
RESERVED_FRAMES = 200


def recursion_depth_budget() -> int:
	"""Deepest nesting the current interpreter recursion limit can hold."""
	return max(1, (sys.getrecursionlimit() - RESERVED_FRAMES) // FRAMES_PER_LEVEL)


DEFAULT_MAX_DEPTH = recursion_depth_budget()

# Converted value: an IR node, a list of IR nodes (blocks/sequences), or None.
Converted = Any


class AstToIR:
	"""
	ESTree → IR converter bound to one Builder.

	The only state is the current nesting depth, so an instance must not be
	shared between threads mid-conversion; `convert_raw_ast` builds a fresh one
	per call.
	"""

	def __init__(self, builder: Builder, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
		if max_depth < 1:
			raise ValueError(f"max_depth must be positive, got {max_depth}")
		self.builder = builder
		self.max_depth = max_depth
		self._depth = 0

	# --- entry points / combinators ---

	def convert(self, node: Any) -> Converted:
		"""Convert a node or a list of nodes; None means rejected."""
		if isinstance(node, (list, tuple)):
			return self.convert_all(node)
		kind = node_kind(node)
		if kind is None:
			return self.reject(node, "missing or untyped node")
		if kind not in SUPPORTED_KINDS:
			return self.reject(node, "node kind is not supported")
		if self._depth >= self.max_depth:
			return self.reject(node, f"nesting exceeds {self.max_depth} levels")
		self._depth += 1
		try:
			return getattr(self, f"visit_{kind}")(node)
		except RecursionError:
			# max_depth above the budget; only the root turns it into a rejection.
			if self._depth > 1:
				raise
			return self.reject(node, "nesting exceeds the interpreter recursion limit")
		finally:
			self._depth -= 1

	def convert_all(self, nodes: Sequence[Any]) -> Optional[List[Any]]:
		"""Convert siblings left to right; stop at the first rejection."""
		out: List[Any] = []
		for child in nodes:
			converted = self.convert(child)
			if converted is None:
				return None
			out.append(converted)
		return out

	def convert_fields(self, node: Any, *names: str) -> Optional[Tuple[Any, ...]]:
		"""Convert the named children of `node` in order; None on first rejection."""
		out = []
		for name in names:
			converted = self.convert(field(node, name))
			if converted is None:
				return None
			out.append(converted)
		return tuple(out)

	def reject(self, node: Any, reason: str) -> None:
		"""Rejection origin. Always returns None; tracers override to record."""
		return None

	# --- expressions ---

	def visit_ArrayExpression(self, node: Any) -> Converted:
		elements = self.convert(field(node, "elements", []))
		if elements is None:
			return None
		return self.builder.array_expression(elements)

	def visit_AssignmentExpression(self, node: Any) -> Converted:
		parts = self.convert_fields(node, "left", "right")
		if parts is None:
			return None
		left, right = parts
		return self.builder.assignment(left, right, field(node, "operator"))

	def visit_BinaryExpression(self, node: Any) -> Converted:
		parts = self.convert_fields(node, "left", "right")
		if parts is None:
			return None
		left, right = parts
		return self.builder.binary_expression(left, field(node, "operator"), right)

	def visit_LogicalExpression(self, node: Any) -> Converted:
		parts = self.convert_fields(node, "left", "right")
		if parts is None:
			return None
		left, right = parts
		return self.builder.logical_expression(left, field(node, "operator"), right)

	def visit_CallExpression(self, node: Any) -> Converted:
		parts = self.convert_fields(node, "callee", "arguments")
		if parts is None:
			return None
		callee, args = parts
		return self.builder.function_call(callee, args)

	def visit_NewExpression(self, node: Any) -> Converted:
		callee = self.convert(field(node, "callee"))
		if callee is None:
			return None
		# `new Foo` (no parens) may come without an arguments list.
		args = self.convert(field(node, "arguments") or [])
		if args is None:
			return None
		return self.builder.new_expression(callee, args)

	def visit_ConditionalExpression(self, node: Any) -> Converted:
		parts = self.convert_fields(node, "test", "consequent", "alternate")
		if parts is None:
			return None
		return self.builder.conditional_expression(*parts)

	def visit_FunctionDeclaration(self, node: Any) -> Converted:
		name = None
		if field(node, "id") is not None:
			name = self.convert(field(node, "id"))
			if name is None:
				return None
		parts = self.convert_fields(node, "params", "body")
		if parts is None:
			return None
		params, body = parts
		return self.builder.function_declaration(name, params, body)

	visit_FunctionExpression = visit_FunctionDeclaration

	def visit_Identifier(self, node: Any) -> Converted:
		return self.builder.identifier(field(node, "name"))

	def visit_Literal(self, node: Any) -> Converted:
		"""Regex literals are rebuilt from pattern/flags; other values pass through."""
		regex = field(node, "regex")
		if regex is not None:
			value: Any = JSRegExp(pattern=field(regex, "pattern"), flags=field(regex, "flags") or "")
		else:
			value = field(node, "value")
		return self.builder.literal(value)

	def visit_TaggedTemplateExpression(self, node: Any) -> Converted:
		"""
		Only the `$nonstandard` tag is accepted; it marks the template literal
		as nonstandard for the consumer. Member-expression tags never match.
		"""
		tag = field(node, "tag")
		if node_kind(tag) != "Identifier" or field(tag, "name") != NONSTANDARD_TAG:
			return self.reject(node, f"only the {NONSTANDARD_TAG} template tag is supported")
		quasi = field(node, "quasi")
		if node_kind(quasi) != "TemplateLiteral":
			return self.reject(quasi, "tagged template without a template literal")
		return self._template(quasi, nonstandard=True)

	def visit_TemplateLiteral(self, node: Any) -> Converted:
		return self._template(node, nonstandard=False)

	def _template(self, node: Any, *, nonstandard: bool) -> Converted:
		quasis = [field(field(q, "value"), "cooked") for q in field(node, "quasis", [])]
		expressions = self.convert(field(node, "expressions", []))
		if expressions is None:
			return None
		return self.builder.template_literal(quasis, expressions, nonstandard=nonstandard)

	def visit_MemberExpression(self, node: Any) -> Converted:
		parts = self.convert_fields(node, "object", "property")
		if parts is None:
			return None
		obj, prop = parts
		return self.builder.member_expression(obj, prop, field(node, "computed") is True)

	def visit_ObjectExpression(self, node: Any) -> Converted:
		properties = self.convert(field(node, "properties", []))
		if properties is None:
			return None
		return self.builder.object_expression(properties)

	def visit_Property(self, node: Any) -> Converted:
		"""
		Object literal entry.

		Accessors (get/set) are refused outright. A non-computed identifier key
		is re-wrapped as a string literal so `{a: 1}` and `{"a": 1}` produce the
		same key.
		"""
		if field(node, "kind") in ("get", "set"):
			return self.reject(node, f"{field(node, 'kind')}ter properties are not supported")
		computed = field(node, "computed") is True
		key = self.convert(field(node, "key"))
		if key is None:
			return None
		if not computed:
			name = self.builder.identifier_name(key)
			if name is not None:
				key = self.builder.literal(name)
		value = self.convert(field(node, "value"))
		if value is None:
			return None
		return self.builder.property(key, value, computed)

	def visit_ThisExpression(self, node: Any) -> Converted:
		return self.builder.this_expression()

	def visit_UnaryExpression(self, node: Any) -> Converted:
		argument = self.convert(field(node, "argument"))
		if argument is None:
			return None
		return self.builder.unary_expression(argument, field(node, "operator"), field(node, "prefix", True))

	def visit_UpdateExpression(self, node: Any) -> Converted:
		argument = self.convert(field(node, "argument"))
		if argument is None:
			return None
		return self.builder.update_expression(argument, field(node, "operator"), field(node, "prefix", False))

	# --- statements ---

	def visit_Program(self, node: Any) -> Converted:
		"""A single statement is returned as-is; otherwise statements go into a container."""
		body = field(node, "body") or []
		if len(body) == 1:
			return self.convert(body[0])
		container = self.builder.container_node()
		for stmt in body:
			converted = self.convert(stmt)
			if converted is None:
				return None
			container.append_child(converted)
		return container

	def visit_BlockStatement(self, node: Any) -> Converted:
		"""Blocks come back unwrapped (a list); callers own block semantics."""
		return self.convert(field(node, "body", []))

	def visit_ExpressionStatement(self, node: Any) -> Converted:
		return self.convert(field(node, "expression"))

	def visit_ReturnStatement(self, node: Any) -> Converted:
		argument = field(node, "argument")
		if argument is None:
			return self.builder.return_statement(None)
		converted = self.convert(argument)
		if converted is None:
			return None
		return self.builder.return_statement(converted)

	def visit_VariableDeclarator(self, node: Any) -> Converted:
		id_ = self.convert(field(node, "id"))
		if id_ is None:
			return None
		init = None
		if field(node, "init") is not None:
			init = self.convert(field(node, "init"))
			if init is None:
				return None
		return self.builder.variable_declarator(id_, init)

	def visit_VariableDeclaration(self, node: Any) -> Converted:
		declarations = self.convert(field(node, "declarations", []))
		if declarations is None:
			return None
		return self.builder.vars(declarations, field(node, "kind"))

	def visit_IfStatement(self, node: Any) -> Converted:
		"""
		`if` chains come back flat: a lone if-node, or a container holding the
		if-node followed by one else-if node per `else if` and a final else node.
		"""
		parts = self.convert_fields(node, "test", "consequent")
		if parts is None:
			return None
		if_node = self.builder.if_statement(*parts)
		alternate = field(node, "alternate")
		if alternate is None:
			return if_node

		container = self.builder.container_node()
		container.append_child(if_node)
		while alternate is not None:
			if field(alternate, "consequent") is not None:
				else_if = self.convert_fields(alternate, "test", "consequent")
				if else_if is None:
					return None
				container.append_child(self.builder.else_if_statement(*else_if))
				alternate = field(alternate, "alternate")
			else:
				body = self.convert(alternate)
				if body is None:
					return None
				container.append_child(self.builder.else_statement(body))
				alternate = None
		return container

	def visit_ForStatement(self, node: Any) -> Converted:
		# Omitted clauses (`for (;;)`) are missing nodes and therefore rejected.
		parts = self.convert_fields(node, "init", "test", "update", "body")
		if parts is None:
			return None
		return self.builder.for_statement(*parts)

	def visit_WhileStatement(self, node: Any) -> Converted:
		parts = self.convert_fields(node, "test", "body")
		if parts is None:
			return None
		return self.builder.while_statement(*parts)


def convert_raw_ast(ast: Any, builder: Builder, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Converted:
	"""
	Convert an ESTree node (or list of nodes) with `builder`.

	Returns the IR (a node or a list of nodes), or None if the tree uses any
	unsupported construct.
	"""
	return AstToIR(builder, max_depth=max_depth).convert(ast)


__all__ = [
	"AstToIR",
	"convert_raw_ast",
	"recursion_depth_budget",
	"NONSTANDARD_TAG",
	"DEFAULT_MAX_DEPTH",
]
