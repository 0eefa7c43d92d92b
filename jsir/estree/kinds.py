# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
The closed set of ESTree node kinds the converter accepts, plus field access.

Anything whose `type` is not listed in SUPPORTED_KINDS is rejected by the
converter. Adding a kind means adding it here *and* a `visit_<Kind>` handler.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional


SUPPORTED_KINDS = frozenset(
	{
		"ArrayExpression",
		"AssignmentExpression",
		"BinaryExpression",
		"BlockStatement",
		"CallExpression",
		"ConditionalExpression",
		"ExpressionStatement",
		"ForStatement",
		"FunctionDeclaration",
		"FunctionExpression",
		"Identifier",
		"IfStatement",
		"Literal",
		"LogicalExpression",
		"MemberExpression",
		"NewExpression",
		"ObjectExpression",
		"Program",
		"Property",
		"ReturnStatement",
		"TaggedTemplateExpression",
		"TemplateLiteral",
		"ThisExpression",
		"UnaryExpression",
		"UpdateExpression",
		"VariableDeclaration",
		"VariableDeclarator",
		"WhileStatement",
	}
)


def field(node: Any, name: str, default: Any = None) -> Any:
	"""Read a child/leaf from a mapping-shaped or attribute-shaped node."""
	if isinstance(node, Mapping):
		return node.get(name, default)
	return getattr(node, name, default)


def node_kind(node: Any) -> Optional[str]:
	"""Return the ESTree `type` tag, or None for values that are not nodes."""
	if node is None:
		return None
	kind = field(node, "type")
	return kind if isinstance(kind, str) else None


def is_node(value: Any) -> bool:
	return node_kind(value) is not None


__all__ = ["SUPPORTED_KINDS", "field", "node_kind", "is_node"]
