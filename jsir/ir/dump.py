# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Render IR values into JSON-compatible structures.

Used by the driver's output and by tests that prefer comparing plain data.
Non-finite floats (`1e400`) become `{"number": "Infinity"}` and friends.
Every dataclass node becomes `{"node": <class name>, <field>: ...}`; the
tag is not called "kind" because `Vars.kind` already is.
"""

from __future__ import annotations

import dataclasses
import math
from typing import Any

from jsir.estree.regexp import JSRegExp


def dump_ir(value: Any) -> Any:
	"""Recursively convert IR nodes (and lists of them) into dicts/lists/scalars."""
	if isinstance(value, JSRegExp):
		return {"regex": {"pattern": value.pattern, "flags": value.flags}}
	if isinstance(value, float) and not math.isfinite(value):
		# JSON has no Infinity/NaN; keep the JavaScript spelling.
		if math.isnan(value):
			return {"number": "NaN"}
		return {"number": "Infinity" if value > 0 else "-Infinity"}
	if isinstance(value, list):
		return [dump_ir(v) for v in value]
	if dataclasses.is_dataclass(value) and not isinstance(value, type):
		out: dict[str, Any] = {"node": type(value).__name__}
		for f in dataclasses.fields(value):
			out[f.name] = dump_ir(getattr(value, f.name))
		return out
	return value


__all__ = ["dump_ir"]
