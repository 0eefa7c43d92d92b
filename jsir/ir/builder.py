# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Reference Builder producing the dataclass IR in `nodes.py`.

Each operation is a thin constructor; lists are copied so the IR never
aliases a list owned by the caller.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from . import nodes as I


class IRBuilder:
	"""Builder implementation backed by `jsir.ir.nodes`."""

	def array_expression(self, elements: List[I.IRNode]) -> I.ArrayExpr:
		return I.ArrayExpr(elements=list(elements))

	def assignment(self, left: I.IRNode, right: I.IRNode, operator: str) -> I.Assignment:
		return I.Assignment(left=left, right=right, operator=operator)

	def binary_expression(self, left: I.IRNode, operator: str, right: I.IRNode) -> I.BinaryExpr:
		return I.BinaryExpr(left=left, operator=operator, right=right)

	def logical_expression(self, left: I.IRNode, operator: str, right: I.IRNode) -> I.LogicalExpr:
		return I.LogicalExpr(left=left, operator=operator, right=right)

	def function_call(self, callee: I.IRNode, args: List[I.IRNode]) -> I.FunctionCall:
		return I.FunctionCall(callee=callee, args=list(args))

	def new_expression(self, callee: I.IRNode, args: List[I.IRNode]) -> I.NewExpr:
		return I.NewExpr(callee=callee, args=list(args))

	def conditional_expression(self, test: I.IRNode, consequent: I.IRNode, alternate: I.IRNode) -> I.ConditionalExpr:
		return I.ConditionalExpr(test=test, consequent=consequent, alternate=alternate)

	def function_declaration(self, name: Optional[I.IRNode], params: List[I.IRNode], body: I.Body) -> I.FunctionDecl:
		return I.FunctionDecl(name=name, params=list(params), body=body)

	def identifier(self, name: str) -> I.Identifier:
		return I.Identifier(name=name)

	def literal(self, value: Any) -> I.Literal:
		return I.Literal(value=value)

	def template_literal(
		self,
		quasis: Sequence[Optional[str]],
		expressions: List[I.IRNode],
		nonstandard: bool = False,
	) -> I.TemplateLiteral:
		return I.TemplateLiteral(quasis=list(quasis), expressions=list(expressions), nonstandard=nonstandard)

	def member_expression(self, obj: I.IRNode, prop: I.IRNode, computed: bool) -> I.MemberExpr:
		return I.MemberExpr(object=obj, property=prop, computed=bool(computed))

	def container_node(self) -> I.Container:
		return I.Container()

	def object_expression(self, properties: List[I.Property]) -> I.ObjectExpr:
		return I.ObjectExpr(properties=list(properties))

	def property(self, key: I.IRNode, value: I.IRNode, computed: bool) -> I.Property:
		return I.Property(key=key, value=value, computed=bool(computed))

	def return_statement(self, argument: Optional[I.IRNode]) -> I.Return:
		return I.Return(argument=argument)

	def this_expression(self) -> I.This:
		return I.This()

	def unary_expression(self, argument: I.IRNode, operator: str, prefix: bool) -> I.UnaryExpr:
		return I.UnaryExpr(argument=argument, operator=operator, prefix=bool(prefix))

	def update_expression(self, argument: I.IRNode, operator: str, prefix: bool) -> I.UpdateExpr:
		return I.UpdateExpr(argument=argument, operator=operator, prefix=bool(prefix))

	def variable_declarator(self, id: I.IRNode, init: Optional[I.IRNode]) -> I.VarDeclarator:
		return I.VarDeclarator(id=id, init=init)

	def vars(self, declarations: List[I.VarDeclarator], kind: str) -> I.Vars:
		return I.Vars(declarations=list(declarations), kind=kind)

	def if_statement(self, test: I.IRNode, body: I.Body) -> I.If:
		return I.If(test=test, body=body)

	def else_if_statement(self, test: I.IRNode, body: I.Body) -> I.ElseIf:
		return I.ElseIf(test=test, body=body)

	def else_statement(self, body: I.Body) -> I.Else:
		return I.Else(body=body)

	def for_statement(self, init: I.IRNode, test: I.IRNode, update: I.IRNode, body: I.Body) -> I.For:
		return I.For(init=init, test=test, update=update, body=body)

	def while_statement(self, test: I.IRNode, body: I.Body) -> I.While:
		return I.While(test=test, body=body)

	def identifier_name(self, node: Any) -> Optional[str]:
		if isinstance(node, I.Identifier):
			return node.name
		return None


__all__ = ["IRBuilder"]
