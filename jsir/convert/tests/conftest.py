# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typing import Any, List, Tuple

import pytest

from jsir.ir import IRBuilder


class RecordingBuilder(IRBuilder):
	"""IRBuilder that logs every operation name and its first argument."""

	def __init__(self) -> None:
		self.calls: List[Tuple[str, Any]] = []

	def __getattribute__(self, name: str) -> Any:
		attr = super().__getattribute__(name)
		if name.startswith("_") or name in ("calls", "ops") or not callable(attr):
			return attr
		calls = super().__getattribute__("calls")

		def recorded(*args: Any, **kwargs: Any) -> Any:
			calls.append((name, args[0] if args else None))
			return attr(*args, **kwargs)

		return recorded

	def ops(self) -> List[str]:
		return [name for name, _ in self.calls]


@pytest.fixture
def builder() -> IRBuilder:
	return IRBuilder()


@pytest.fixture
def recorder() -> RecordingBuilder:
	return RecordingBuilder()
