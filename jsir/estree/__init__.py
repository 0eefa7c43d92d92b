# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
ESTree input helpers.

The converter accepts ESTree nodes either as plain mappings (JSON output of
most JavaScript parsers, and `jsir.parser`) or as attribute objects; the
helpers here hide that difference.
"""

from .kinds import SUPPORTED_KINDS, node_kind, field, is_node
from .regexp import JSRegExp

__all__ = ["SUPPORTED_KINDS", "node_kind", "field", "is_node", "JSRegExp"]
