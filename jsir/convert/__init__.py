# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Converter package: raw ESTree → builder IR.

Public API:
  - AstToIR / convert_raw_ast: the converter (None means rejected)
  - RejectionTracer / explain_rejection / convert_or_raise: where and why a
    tree was rejected
"""

from .ast_to_ir import AstToIR, convert_raw_ast, recursion_depth_budget, NONSTANDARD_TAG, DEFAULT_MAX_DEPTH
from .trace import (
	RejectionTracer,
	UnsupportedConstructError,
	explain_rejection,
	convert_or_raise,
	UNSUPPORTED_CODE,
)

__all__ = [
	"AstToIR",
	"convert_raw_ast",
	"recursion_depth_budget",
	"NONSTANDARD_TAG",
	"DEFAULT_MAX_DEPTH",
	"RejectionTracer",
	"UnsupportedConstructError",
	"explain_rejection",
	"convert_or_raise",
	"UNSUPPORTED_CODE",
]
