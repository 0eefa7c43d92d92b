# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
jsir: raw JavaScript AST → builder IR conversion.

Pipeline placement:
  source → parser (ESTree dicts) → convert (builder IR) → consumer

Packages:
  estree:  input-side helpers (kind set, field access, regex values)
  ir:      Builder protocol plus a reference IR node set and builder
  convert: the converter and the rejection tracer
  parser:  lark front end for the supported subset
  core:    diagnostics shared by the converter and the driver
"""

from .convert import AstToIR, convert_raw_ast, convert_or_raise, explain_rejection, UnsupportedConstructError
from .ir import Builder, IRBuilder, dump_ir

__all__ = [
	"AstToIR",
	"convert_raw_ast",
	"convert_or_raise",
	"explain_rejection",
	"UnsupportedConstructError",
	"Builder",
	"IRBuilder",
	"dump_ir",
]
