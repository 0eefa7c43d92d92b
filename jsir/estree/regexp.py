# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Regular-expression literal values.

ESTree keeps regex literals as `{"regex": {"pattern", "flags"}}`; the converter
rebuilds a JSRegExp from those parts and hands it to `builder.literal`. Python's
`re` has no notion of the stateful JavaScript flags (`g`, `y`, `d`), so the
value keeps the JavaScript pattern/flags verbatim and only translates on
`compile()`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


# JS flag → `re` flag (0 means accepted but no `re` equivalent).
_FLAG_MAP = {
	"d": 0,
	"g": 0,
	"i": re.IGNORECASE,
	"m": re.MULTILINE,
	"s": re.DOTALL,
	"u": 0,
	"v": 0,
	"y": 0,
}


@dataclass(frozen=True)
class JSRegExp:
	"""A JavaScript regular expression literal: `/pattern/flags`."""

	pattern: str
	flags: str = ""

	def __str__(self) -> str:
		return f"/{self.pattern}/{self.flags}"

	@property
	def global_(self) -> bool:
		return "g" in self.flags

	def re_flags(self) -> int:
		"""
		Translate JS flags into `re` flags.

		Raises ValueError for unknown or repeated flags, which a JavaScript
		engine would also refuse.
		"""
		out = 0
		seen: set[str] = set()
		for flag in self.flags:
			if flag not in _FLAG_MAP:
				raise ValueError(f"invalid regular expression flag {flag!r} in {self}")
			if flag in seen:
				raise ValueError(f"duplicate regular expression flag {flag!r} in {self}")
			seen.add(flag)
			out |= _FLAG_MAP[flag]
		return out

	def compile(self) -> "re.Pattern[str]":
		# Pattern syntax is close enough for the literals templates use; exotic
		# JS-only syntax surfaces as re.error.
		return re.compile(self.pattern, self.re_flags())


__all__ = ["JSRegExp"]
