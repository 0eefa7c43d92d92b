# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line driver: parse a JavaScript file, convert it, print the IR.

Success prints the dumped IR as JSON on stdout and exits 0. Any parse error
or rejected construct exits 1; diagnostics go to stderr as
`file:line:col: error: message`, or to stdout as a JSON payload with --json.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from jsir.convert import DEFAULT_MAX_DEPTH, UnsupportedConstructError, convert_or_raise, recursion_depth_budget
from jsir.core import Diagnostic
from jsir.ir import IRBuilder, dump_ir
from jsir.parser import parse_source

STDIN_NAME = "<stdin>"


def _read_source(source: str) -> tuple[str, str]:
	if source == "-":
		return STDIN_NAME, sys.stdin.read()
	path = Path(source)
	return str(path), path.read_text(encoding="utf-8")


def _report(diagnostics: List[Diagnostic], *, as_json: bool) -> int:
	if as_json:
		payload = {"exit_code": 1, "diagnostics": [d.to_json() for d in diagnostics]}
		print(json.dumps(payload))
	else:
		for diag in diagnostics:
			print(diag.render(), file=sys.stderr)
	return 1


def main(argv: list[str] | None = None) -> int:
	"""
	Parse → convert → print.

	With --json, diagnostics are printed as structured JSON
	(phase/code/message/severity/file/line/column) together with an exit_code.
	"""
	parser = argparse.ArgumentParser(prog="jsir", description="Convert a JavaScript subset to builder IR")
	parser.add_argument("source", help="Path to a JavaScript file, or - to read stdin")
	parser.add_argument(
		"--max-depth",
		type=int,
		default=DEFAULT_MAX_DEPTH,
		help=f"Maximum AST nesting depth before the input is rejected (default: {DEFAULT_MAX_DEPTH})",
	)
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/code/message/severity/file/line/column)",
	)
	args = parser.parse_args(argv)

	budget = recursion_depth_budget()
	if not 1 <= args.max_depth <= budget:
		parser.error(f"--max-depth must be between 1 and {budget}")

	try:
		file, text = _read_source(args.source)
	except OSError as err:
		diag = Diagnostic(message=f"cannot read {args.source}: {err.strerror or err}", phase="driver")
		return _report([diag], as_json=args.json)

	program, diagnostics = parse_source(text, file=file)
	if program is None:
		return _report(diagnostics, as_json=args.json)

	try:
		ir = convert_or_raise(program, IRBuilder(), file=file, max_depth=args.max_depth)
	except UnsupportedConstructError as err:
		return _report([err.diagnostic], as_json=args.json)

	print(json.dumps(dump_ir(ir), indent=2, allow_nan=False))
	return 0


__all__ = ["main"]
