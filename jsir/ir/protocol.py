# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Builder capability consumed by the converter.

The converter treats every IR value as an opaque handle: it only passes
results from one Builder operation into another. The two places where it
needs to look at a result go through this protocol as well:
- `identifier_name` tells whether a converted property key is an identifier;
- `container_node` returns a value supporting `append_child`.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, Sequence


class Container(Protocol):
	"""Mutable, ordered group of IR nodes."""

	def append_child(self, child: Any) -> None:
		...


class Builder(Protocol):
	"""One construction operation per IR kind, plus the identifier-shape query."""

	def array_expression(self, elements: List[Any]) -> Any:
		...

	def assignment(self, left: Any, right: Any, operator: str) -> Any:
		...

	def binary_expression(self, left: Any, operator: str, right: Any) -> Any:
		...

	def logical_expression(self, left: Any, operator: str, right: Any) -> Any:
		...

	def function_call(self, callee: Any, args: List[Any]) -> Any:
		...

	def new_expression(self, callee: Any, args: List[Any]) -> Any:
		...

	def conditional_expression(self, test: Any, consequent: Any, alternate: Any) -> Any:
		...

	def function_declaration(self, name: Optional[Any], params: List[Any], body: Any) -> Any:
		...

	def identifier(self, name: str) -> Any:
		...

	def literal(self, value: Any) -> Any:
		...

	def template_literal(self, quasis: Sequence[Optional[str]], expressions: List[Any], nonstandard: bool = False) -> Any:
		"""`nonstandard` is fixed at construction; IR nodes are never patched afterwards."""
		...

	def member_expression(self, obj: Any, prop: Any, computed: bool) -> Any:
		...

	def container_node(self) -> Container:
		...

	def object_expression(self, properties: List[Any]) -> Any:
		...

	def property(self, key: Any, value: Any, computed: bool) -> Any:
		...

	def return_statement(self, argument: Optional[Any]) -> Any:
		...

	def this_expression(self) -> Any:
		...

	def unary_expression(self, argument: Any, operator: str, prefix: bool) -> Any:
		...

	def update_expression(self, argument: Any, operator: str, prefix: bool) -> Any:
		...

	def variable_declarator(self, id: Any, init: Optional[Any]) -> Any:
		...

	def vars(self, declarations: List[Any], kind: str) -> Any:
		...

	def if_statement(self, test: Any, body: Any) -> Any:
		...

	def else_if_statement(self, test: Any, body: Any) -> Any:
		...

	def else_statement(self, body: Any) -> Any:
		...

	def for_statement(self, init: Any, test: Any, update: Any, body: Any) -> Any:
		...

	def while_statement(self, test: Any, body: Any) -> Any:
		...

	def identifier_name(self, node: Any) -> Optional[str]:
		"""Return the name if `node` is an identifier IR node, else None."""
		...


__all__ = ["Builder", "Container"]
