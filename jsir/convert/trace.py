# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Rejection tracing.

The converter's only failure signal is None, with no location or reason.
This module re-runs a conversion with a tracer that records the first
rejection origin (the innermost offending node, since rejection is reported
where it starts and then only propagated) and turns it into a Diagnostic.
"""

from __future__ import annotations

from typing import Any, Optional

from jsir.core import Diagnostic, Span
from jsir.estree import field, node_kind
from jsir.ir.protocol import Builder

from .ast_to_ir import DEFAULT_MAX_DEPTH, AstToIR, Converted

UNSUPPORTED_CODE = "E-UNSUPPORTED"


class RejectionTracer(AstToIR):
	"""AstToIR that remembers the first rejected node and the reason."""

	def __init__(self, builder: Builder, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
		super().__init__(builder, max_depth=max_depth)
		self.rejected_node: Any = None
		self.reason: Optional[str] = None
		# `loc` of the nearest enclosing located node, for rejections of
		# missing children (e.g. an omitted `for` clause).
		self.rejected_loc: Any = None
		self._locs: list[Any] = []

	def convert(self, node: Any) -> Converted:
		loc = field(node, "loc") if node_kind(node) is not None else None
		if loc is None:
			return super().convert(node)
		self._locs.append(loc)
		try:
			return super().convert(node)
		finally:
			self._locs.pop()

	def reject(self, node: Any, reason: str) -> None:
		if self.reason is None:
			self.rejected_node = node
			self.reason = reason
			if node_kind(node) is not None and field(node, "loc") is not None:
				self.rejected_loc = field(node, "loc")
			elif self._locs:
				self.rejected_loc = self._locs[-1]
		return None


class UnsupportedConstructError(ValueError):
	"""
	Raised by `convert_or_raise` when a tree uses an unsupported construct.

	Carries the traced diagnostic so callers can report a location.
	"""

	def __init__(self, diagnostic: Diagnostic) -> None:
		super().__init__(diagnostic.message)
		self.diagnostic = diagnostic


def _diagnostic_for(tracer: RejectionTracer, file: Optional[str]) -> Diagnostic:
	node = tracer.rejected_node
	kind = node_kind(node) or ("<missing node>" if node is None else type(node).__name__)
	return Diagnostic(
		message=f"unsupported construct {kind}: {tracer.reason}",
		code=UNSUPPORTED_CODE,
		phase="convert",
		span=Span.from_loc(tracer.rejected_loc, file=file),
	)


def explain_rejection(
	ast: Any,
	builder: Builder,
	*,
	file: Optional[str] = None,
	max_depth: int = DEFAULT_MAX_DEPTH,
) -> Optional[Diagnostic]:
	"""
	Convert `ast` and describe why it was rejected.

	Returns None when the tree converts; the IR built along the way is
	discarded.
	"""
	tracer = RejectionTracer(builder, max_depth=max_depth)
	if tracer.convert(ast) is not None:
		return None
	return _diagnostic_for(tracer, file)


def convert_or_raise(
	ast: Any,
	builder: Builder,
	*,
	file: Optional[str] = None,
	max_depth: int = DEFAULT_MAX_DEPTH,
) -> Converted:
	"""Convert `ast`; raise UnsupportedConstructError instead of returning None."""
	tracer = RejectionTracer(builder, max_depth=max_depth)
	result = tracer.convert(ast)
	if result is None:
		raise UnsupportedConstructError(_diagnostic_for(tracer, file))
	return result


__all__ = [
	"RejectionTracer",
	"UnsupportedConstructError",
	"explain_rejection",
	"convert_or_raise",
	"UNSUPPORTED_CODE",
]
