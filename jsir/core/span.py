# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

A Span carries best-effort file/line/column info (1-based line and column)
plus the raw location object it was built from, so renderers can recover
parser-specific details when they need them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus raw loc)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from an ESTree `loc` mapping or a parser location object.

		ESTree locations are `{"start": {"line", "column"}, "end": {...}}` with
		0-based columns; they are shifted to 1-based here. Objects exposing
		`line`/`column` attributes (lark tokens and errors) are taken as-is.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			return loc
		if isinstance(loc, Mapping):
			start = loc.get("start") or {}
			end = loc.get("end") or {}
			return cls(
				file=file or loc.get("source"),
				line=start.get("line"),
				column=_one_based(start.get("column")),
				end_line=end.get("line"),
				end_column=_one_based(end.get("column")),
				raw=loc,
			)
		return cls(
			file=file or getattr(loc, "file", None),
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			raw=loc,
		)

	def render(self) -> str:
		"""`file:line:col` with `?` for unknown parts."""
		line = "?" if self.line is None else str(self.line)
		column = "?" if self.column is None else str(self.column)
		return f"{self.file or '<input>'}:{line}:{column}"


def _one_based(column: Optional[int]) -> Optional[int]:
	return None if column is None else column + 1


__all__ = ["Span"]
