# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
JavaScript front end: source text → ESTree dicts.

`parse_program` / `parse_expression` raise on bad input (lark
`UnexpectedInput`, or `LiteralParseError` for malformed literals);
`parse_source` folds those, and nesting too deep to build, into diagnostics
for callers that report rather than raise.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from lark.exceptions import UnexpectedInput

from jsir.core import Diagnostic, Span

from .parser import LiteralParseError, StatementBracePostLex, parse_expression, parse_program

PARSE_ERROR_CODE = "E-PARSE"


def parse_source(source: str, *, file: Optional[str] = None) -> Tuple[Optional[dict], List[Diagnostic]]:
	"""
	Parse a whole program, returning (program, diagnostics).

	On failure the program is None and diagnostics holds exactly one error.
	"""
	try:
		return parse_program(source), []
	except LiteralParseError as err:
		span = Span.from_loc(err.loc, file=file)
		message = str(err)
	except UnexpectedInput as err:
		span = Span(
			file=file,
			line=getattr(err, "line", None),
			column=getattr(err, "column", None),
			raw=err,
		)
		message = _first_line(str(err))
	except RecursionError:
		# Deep right-nested or prefix chains (`!!!...x`) outgrow the tree builders.
		span = Span(file=file)
		message = "expression nested too deeply"
	return None, [Diagnostic(message=message, code=PARSE_ERROR_CODE, phase="parser", span=span)]


def _first_line(text: str) -> str:
	# lark messages append a caret excerpt and the expected-token list.
	return text.strip().splitlines()[0] if text.strip() else "syntax error"


__all__ = [
	"LiteralParseError",
	"PARSE_ERROR_CODE",
	"StatementBracePostLex",
	"parse_expression",
	"parse_program",
	"parse_source",
]
