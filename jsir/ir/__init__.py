# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
IR side of the converter: the Builder protocol and a reference implementation.

Public API:
  - Builder / Container protocols (what the converter needs)
  - IRBuilder (reference builder) and its node classes (`jsir.ir.nodes`)
  - dump_ir (JSON-friendly rendering)
"""

from . import nodes
from .builder import IRBuilder
from .dump import dump_ir
from .protocol import Builder, Container

__all__ = ["nodes", "IRBuilder", "dump_ir", "Builder", "Container"]
