# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Reference IR node set produced by `IRBuilder`.

Pipeline placement:
  ESTree (input) → convert (jsir/convert) → IR (this file) → consumer

The converter never touches these classes directly; it only talks to a
Builder. They exist so the package is usable (and testable) without an
external code generator.

Guiding rules:
- One node class per Builder operation.
- Bodies are whatever the converter hands over: a list of statements for a
  braced block, or a single node for an unbraced body.
- Optional parts (function name, return argument, declarator init) are None
  when absent in the source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union


class IRNode:
	"""Base class for all IR nodes."""
	pass


class IRExpr(IRNode):
	"""Base class for IR expressions."""
	pass


class IRStmt(IRNode):
	"""Base class for IR statements."""
	pass


Body = Union[IRNode, List[IRNode]]


# Expressions

@dataclass
class Identifier(IRExpr):
	name: str


@dataclass
class Literal(IRExpr):
	"""Literal value: str/int/float/bool/None, or a JSRegExp."""
	value: Any


@dataclass
class This(IRExpr):
	pass


@dataclass
class ArrayExpr(IRExpr):
	elements: List[IRNode]


@dataclass
class ObjectExpr(IRExpr):
	properties: List["Property"]


@dataclass
class Property(IRNode):
	"""Object literal entry. Non-computed identifier keys arrive as Literal."""
	key: IRNode
	value: IRNode
	computed: bool = False


@dataclass
class Assignment(IRExpr):
	left: IRNode
	right: IRNode
	operator: str = "="


@dataclass
class BinaryExpr(IRExpr):
	left: IRNode
	operator: str
	right: IRNode


@dataclass
class LogicalExpr(IRExpr):
	left: IRNode
	operator: str
	right: IRNode


@dataclass
class UnaryExpr(IRExpr):
	argument: IRNode
	operator: str
	prefix: bool = True


@dataclass
class UpdateExpr(IRExpr):
	argument: IRNode
	operator: str
	prefix: bool = False


@dataclass
class ConditionalExpr(IRExpr):
	"""test ? consequent : alternate"""
	test: IRNode
	consequent: IRNode
	alternate: IRNode


@dataclass
class FunctionCall(IRExpr):
	callee: IRNode
	args: List[IRNode]


@dataclass
class NewExpr(IRExpr):
	callee: IRNode
	args: List[IRNode]


@dataclass
class MemberExpr(IRExpr):
	"""`object.property` (computed=False) or `object[property]` (computed=True)."""
	object: IRNode
	property: IRNode
	computed: bool = False


@dataclass
class TemplateLiteral(IRExpr):
	"""
	Template literal: len(quasis) == len(expressions) + 1.

	`nonstandard` marks templates written as $nonstandard`...` in the source.
	"""
	quasis: List[Optional[str]]
	expressions: List[IRNode]
	nonstandard: bool = False


@dataclass
class FunctionDecl(IRExpr):
	"""Function declaration or expression; `name` is None when anonymous."""
	name: Optional[IRNode]
	params: List[IRNode]
	body: Body


# Statements

@dataclass
class Return(IRStmt):
	"""`argument` is None for a bare `return;`."""
	argument: Optional[IRNode] = None


@dataclass
class VarDeclarator(IRNode):
	id: IRNode
	init: Optional[IRNode] = None


@dataclass
class Vars(IRStmt):
	declarations: List[VarDeclarator]
	kind: str = "var"


@dataclass
class If(IRStmt):
	test: IRNode
	body: Body


@dataclass
class ElseIf(IRStmt):
	test: IRNode
	body: Body


@dataclass
class Else(IRStmt):
	body: Body


@dataclass
class For(IRStmt):
	init: IRNode
	test: IRNode
	update: IRNode
	body: Body


@dataclass
class While(IRStmt):
	test: IRNode
	body: Body


@dataclass
class Container(IRNode):
	"""
	Ordered group of sibling nodes (top-level statements, or an if/else-if/else
	chain). The only mutable IR node: the converter fills it via append_child.
	"""
	children: List[IRNode] = field(default_factory=list)

	def append_child(self, child: IRNode) -> None:
		self.children.append(child)
