# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared diagnostic structures."""

from .diagnostics import Diagnostic
from .span import Span

__all__ = ["Diagnostic", "Span"]
