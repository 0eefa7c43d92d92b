# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
JavaScript source → ESTree dicts, via a lark LALR grammar.

The tree shapes follow ESTree closely enough for `jsir.convert`; every node
carries a `loc` with 1-based lines and 0-based columns.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from lark import Lark, Token, Tree

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

Node = Dict[str, Any]


class LiteralParseError(ValueError):
	"""
	Error raised while decoding a string or template literal.

	A `ValueError` subclass carrying a best-effort location (`loc`, an ESTree
	location mapping) so the driver can turn it into a diagnostic.
	"""

	def __init__(self, message: str, *, loc: Optional[Node]) -> None:
		super().__init__(message)
		self.loc = loc


class StatementBracePostLex:
	"""
	Re-type `{` and `function` tokens that start a statement.

	At statement position JavaScript reads `{` as a block and `function` as a
	declaration. LALR cannot make that call from the grammar alone (both forms
	are also valid expression starts), so it is made here from the previous
	token: BLOCK_OPEN / FUNCTION_DECL replace LBRACE / FUNCTION.
	"""

	# The contextual lexer must still produce LBRACE/FUNCTION in states that
	# only accept the re-typed terminals.
	always_accept = ("LBRACE", "FUNCTION")

	RETYPE = {"LBRACE": "BLOCK_OPEN", "FUNCTION": "FUNCTION_DECL"}

	# Tokens after which a new statement starts.
	STATEMENT_BOUNDARY_VALUES = frozenset({";", "}", ")", "else", "do"})

	def __init__(self, *, statement_mode: bool = True) -> None:
		# Expression-only parsers (template holes) never start with a statement.
		self.statement_mode = statement_mode

	def process(self, stream):
		prev: Optional[Token] = None
		for token in stream:
			if token.type in self.RETYPE and self._at_statement_start(prev):
				token = Token.new_borrow_pos(self.RETYPE[token.type], token.value, token)
			yield token
			prev = token

	def _at_statement_start(self, prev: Optional[Token]) -> bool:
		if prev is None:
			return self.statement_mode
		if prev.type == "BLOCK_OPEN":
			return True
		return prev.type != "NAME" and prev.value in self.STATEMENT_BOUNDARY_VALUES


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="contextual",
	start="program",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=StatementBracePostLex(),
)

_EXPR_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="contextual",
	start="expression",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=StatementBracePostLex(statement_mode=False),
)


def parse_program(source: str) -> Node:
	"""Parse JavaScript source into an ESTree `Program` dict."""
	tree = _PARSER.parse(source)
	return _build_program(tree)


def parse_expression(source: str) -> Node:
	"""Parse a single JavaScript expression into an ESTree node dict."""
	tree = _EXPR_PARSER.parse(source)
	return _build_expr(tree)


# --- locations / node construction ---

def _loc(tree: Tree) -> Optional[Node]:
	meta = tree.meta
	if meta.empty:
		return None
	return {
		"start": {"line": meta.line, "column": meta.column - 1},
		"end": {"line": meta.end_line, "column": meta.end_column - 1},
	}


def _loc_from_token(token: Token) -> Node:
	return {
		"start": {"line": token.line, "column": token.column - 1},
		"end": {"line": token.end_line, "column": token.end_column - 1},
	}


def _node(kind: str, loc: Optional[Node], /, **fields: Any) -> Node:
	node: Node = {"type": kind}
	node.update(fields)
	if loc is not None:
		node["loc"] = loc
	return node


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	return node.type


def _subtrees(tree: Tree) -> List[Tree]:
	return [c for c in tree.children if isinstance(c, Tree)]


def _token(tree: Tree, *types: str) -> Optional[Token]:
	return next((c for c in tree.children if isinstance(c, Token) and c.type in types), None)


def _identifier(token: Token) -> Node:
	return _node("Identifier", _loc_from_token(token), name=token.value)


# --- literal decoding ---

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")

_SIMPLE_ESCAPES = {
	"n": "\n",
	"t": "\t",
	"r": "\r",
	"b": "\b",
	"f": "\f",
	"v": "\v",
	"0": "\0",
	"\n": "",
	"\r": "",
	"\r\n": "",
	"\u2028": "",
	"\u2029": "",
}


def _decode_escapes(raw: str) -> str:
	"""
	Apply JavaScript escape rules to the inside of a string/template literal.

	Unknown escapes yield the escaped character itself (`\\q` → `q`); malformed
	`\\x` / `\\u` escapes raise ValueError.
	"""

	def replace(match: "re.Match[str]") -> str:
		body = match.group(1)
		if body in _SIMPLE_ESCAPES:
			return _SIMPLE_ESCAPES[body]
		if body.startswith("u{"):
			code = int(body[2:-1], 16)
			if code > 0x10FFFF:
				raise ValueError(f"code point out of range: \\{body}")
			return chr(code)
		if len(body) > 1 and body[0] in "ux":
			return chr(int(body[1:], 16))
		if body in ("u", "x"):
			raise ValueError(f"malformed \\{body} escape")
		return body

	return _ESCAPE_RE.sub(replace, raw)


def _build_string(token: Token) -> Node:
	try:
		value = _decode_escapes(token.value[1:-1])
	except ValueError as err:
		raise LiteralParseError(str(err), loc=_loc_from_token(token)) from err
	return _node("Literal", _loc_from_token(token), value=value, raw=token.value)


def _build_number(token: Token) -> Node:
	text = token.value
	if text[:2] in ("0x", "0X"):
		value: int | float = int(text, 16)
	elif any(ch in text for ch in ".eE"):
		value = float(text)
	else:
		value = int(text)
	return _node("Literal", _loc_from_token(token), value=value, raw=text)


def _build_regex(token: Token) -> Node:
	text = token.value
	end = text.rindex("/")
	return _node(
		"Literal",
		_loc_from_token(token),
		value=None,
		raw=text,
		regex={"pattern": text[1:end], "flags": text[end + 1:]},
	)


# --- template literals ---

def _split_template(raw: str, loc: Node) -> tuple[List[str], List[tuple[int, str]]]:
	"""
	Split the inside of a template literal into raw text parts and `${...}`
	holes. Returns (parts, holes) with len(parts) == len(holes) + 1; each hole
	is (offset of its source inside `raw`, source).

	Brace depth is tracked through the hole so object literals and nested
	blocks work; quoted strings inside a hole are skipped.
	"""
	parts: List[str] = []
	holes: List[tuple[int, str]] = []
	buf: List[str] = []
	i = 0
	n = len(raw)
	while i < n:
		ch = raw[i]
		if ch == "\\" and i + 1 < n:
			buf.append(raw[i:i + 2])
			i += 2
			continue
		if ch == "$" and raw.startswith("${", i):
			start = i + 2
			depth = 1
			j = start
			while j < n and depth:
				c = raw[j]
				if c in ("'", '"'):
					j += 1
					while j < n and raw[j] != c:
						j += 2 if raw[j] == "\\" else 1
				elif c == "{":
					depth += 1
				elif c == "}":
					depth -= 1
				j += 1
			if depth:
				raise LiteralParseError("unterminated ${ in template literal", loc=loc)
			source = raw[start:j - 1]
			if not source.strip():
				raise LiteralParseError("empty ${} in template literal", loc=loc)
			parts.append("".join(buf))
			buf = []
			holes.append((start, source))
			i = j
			continue
		buf.append(ch)
		i += 1
	parts.append("".join(buf))
	return parts, holes


def _relocate(value: Any, line: int, column: int) -> None:
	"""Shift locations of a hole's ESTree (parsed from line 1, column 0) in place."""
	if isinstance(value, list):
		for item in value:
			_relocate(item, line, column)
		return
	if not isinstance(value, dict):
		return
	loc = value.get("loc")
	if loc is not None:
		for point in (loc["start"], loc["end"]):
			if point["line"] == 1:
				point["column"] += column
			point["line"] += line - 1
	for key, child in value.items():
		if key != "loc":
			_relocate(child, line, column)


def _build_template(token: Token, *, tagged: bool = False) -> Node:
	"""
	Build an ESTree TemplateLiteral from a TEMPLATE token.

	Cooked values follow JavaScript: a malformed escape is an error in an
	untagged template and a `None` cooked value in a tagged one.
	"""
	loc = _loc_from_token(token)
	raw = token.value[1:-1]
	parts, holes = _split_template(raw, loc)

	quasis: List[Node] = []
	for index, part in enumerate(parts):
		try:
			cooked: Optional[str] = _decode_escapes(part)
		except ValueError as err:
			if not tagged:
				raise LiteralParseError(str(err), loc=loc) from err
			cooked = None
		quasis.append(
			_node(
				"TemplateElement",
				None,
				value={"raw": part, "cooked": cooked},
				tail=index == len(parts) - 1,
			)
		)

	expressions: List[Node] = []
	for offset, source in holes:
		# +1 for the opening backtick stripped from `raw`.
		prefix = token.value[:offset + 1]
		newlines = prefix.count("\n")
		if newlines:
			line = token.line + newlines
			column = len(prefix) - prefix.rindex("\n") - 1
		else:
			line = token.line
			column = token.column - 1 + len(prefix)
		expr = parse_expression(source)
		_relocate(expr, line, column)
		expressions.append(expr)

	return _node("TemplateLiteral", loc, quasis=quasis, expressions=expressions)


# --- statements ---

def _build_program(tree: Tree) -> Node:
	body = [_build_stmt(child) for child in _subtrees(tree)]
	return _node("Program", _loc(tree), body=body, sourceType="script")


def _build_block(tree: Tree) -> Node:
	return _node("BlockStatement", _loc(tree), body=[_build_stmt(c) for c in _subtrees(tree)])


def _build_var_decl(tree: Tree) -> Node:
	kind_tree, *declarators = _subtrees(tree)
	return _node(
		"VariableDeclaration",
		_loc(tree),
		kind=kind_tree.children[0].value,
		declarations=[_build_declarator(d) for d in declarators],
	)


def _build_declarator(tree: Tree) -> Node:
	name_tok = _token(tree, "NAME")
	init = next(iter(_subtrees(tree)), None)
	return _node(
		"VariableDeclarator",
		_loc(tree),
		id=_identifier(name_tok),
		init=_build_expr(init) if init is not None else None,
	)


def _build_params(tree: Optional[Tree]) -> List[Node]:
	if tree is None:
		return []
	return [_identifier(tok) for tok in tree.children if isinstance(tok, Token) and tok.type == "NAME"]


def _build_function(tree: Tree, kind: str) -> Node:
	name_tok = _token(tree, "NAME")
	params_tree = next((c for c in _subtrees(tree) if _name(c) == "params"), None)
	body_tree = next(c for c in _subtrees(tree) if _name(c) == "block")
	return _node(
		kind,
		_loc(tree),
		id=_identifier(name_tok) if name_tok is not None else None,
		params=_build_params(params_tree),
		body=_build_block(body_tree),
		generator=False,
		expression=False,
		**{"async": False},
	)


def _build_if_stmt(tree: Tree) -> Node:
	parts = _subtrees(tree)
	if len(parts) not in (2, 3):
		raise ValueError("malformed if statement")
	return _node(
		"IfStatement",
		_loc(tree),
		test=_build_expr(parts[0]),
		consequent=_build_stmt(parts[1]),
		alternate=_build_stmt(parts[2]) if len(parts) == 3 else None,
	)


def _optional_clause(tree: Tree) -> Optional[Node]:
	inner = next(iter(_subtrees(tree)), None)
	if inner is None:
		return None
	if _name(inner) == "var_decl":
		return _build_var_decl(inner)
	return _build_expr(inner)


def _build_for_stmt(tree: Tree) -> Node:
	init, test, update, body = _subtrees(tree)
	return _node(
		"ForStatement",
		_loc(tree),
		init=_optional_clause(init),
		test=_optional_clause(test),
		update=_optional_clause(update),
		body=_build_stmt(body),
	)


def _build_while_stmt(tree: Tree) -> Node:
	test, body = _subtrees(tree)
	return _node("WhileStatement", _loc(tree), test=_build_expr(test), body=_build_stmt(body))


def _build_do_while_stmt(tree: Tree) -> Node:
	body, test = _subtrees(tree)
	return _node("DoWhileStatement", _loc(tree), body=_build_stmt(body), test=_build_expr(test))


def _build_return_stmt(tree: Tree) -> Node:
	value = next(iter(_subtrees(tree)), None)
	return _node("ReturnStatement", _loc(tree), argument=_build_expr(value) if value is not None else None)


def _build_throw_stmt(tree: Tree) -> Node:
	return _node("ThrowStatement", _loc(tree), argument=_build_expr(_subtrees(tree)[0]))


def _build_expr_stmt(tree: Tree) -> Node:
	return _node("ExpressionStatement", _loc(tree), expression=_build_expr(_subtrees(tree)[0]))


_STMT_DISPATCH: Dict[str, Callable[[Tree], Node]] = {
	"block": _build_block,
	"var_stmt": lambda t: _build_var_decl(_subtrees(t)[0]),
	"function_decl": lambda t: _build_function(t, "FunctionDeclaration"),
	"if_stmt": _build_if_stmt,
	"for_stmt": _build_for_stmt,
	"while_stmt": _build_while_stmt,
	"do_while_stmt": _build_do_while_stmt,
	"return_stmt": _build_return_stmt,
	"break_stmt": lambda t: _node("BreakStatement", _loc(t), label=None),
	"continue_stmt": lambda t: _node("ContinueStatement", _loc(t), label=None),
	"throw_stmt": _build_throw_stmt,
	"empty_stmt": lambda t: _node("EmptyStatement", _loc(t)),
	"expr_stmt": _build_expr_stmt,
}


def _build_stmt(tree: Tree) -> Node:
	fn = _STMT_DISPATCH.get(_name(tree))
	if fn is None:
		raise ValueError(f"Unsupported statement node: {_name(tree)}")
	return fn(tree)


# --- expressions ---

def _op(tree: Tree) -> str:
	"""Operator text from a `!`-rule subtree (e.g. add_op)."""
	return tree.children[0].value


def _build_binary_like(tree: Tree, kind: str) -> Node:
	"""
	Build a binary-shaped node. Left-associative chains (`a + b + c ...`) nest
	down the left spine; that spine is walked iteratively so long chains do
	not cost one stack frame per operator.
	"""
	spine = [tree]
	left = tree.children[0]
	while isinstance(left, Tree) and left.data == tree.data:
		spine.append(left)
		left = left.children[0]
	result = _build_expr(left)
	for link in reversed(spine):
		_, op, right = link.children
		result = _node(kind, _loc(link), operator=_op(op), left=result, right=_build_expr(right))
	return result


def _build_arguments(tree: Tree) -> List[Node]:
	return [_build_expr(c) for c in _subtrees(tree)]


def _build_prop_key(tree: Tree) -> tuple[Node, bool]:
	child = tree.children[0]
	if isinstance(child, Tree):
		return _build_expr(child), True
	if child.type == "STRING":
		return _build_string(child), False
	if child.type == "NUMBER":
		return _build_number(child), False
	# NAME, or the contextual `get`/`set` keywords used as plain keys.
	return _identifier(child), False


def _property(tree: Tree, key_tree: Tree, value: Node, **flags: Any) -> Node:
	key, computed = _build_prop_key(key_tree)
	fields: Dict[str, Any] = {"kind": "init", "method": False, "shorthand": False}
	fields.update(flags)
	return _node("Property", _loc(tree), key=key, value=value, computed=computed, **fields)


def _accessor_function(tree: Tree, params: List[Node], body_tree: Tree) -> Node:
	return _node(
		"FunctionExpression",
		_loc(body_tree),
		id=None,
		params=params,
		body=_build_block(body_tree),
		generator=False,
		expression=False,
		**{"async": False},
	)


def _build_property(tree: Tree) -> Node:
	name = _name(tree)
	subs = _subtrees(tree)
	if name == "prop_init":
		return _property(tree, subs[0], _build_expr(subs[1]))
	if name == "prop_shorthand":
		name_tok = tree.children[0]
		return _node(
			"Property",
			_loc(tree),
			key=_identifier(name_tok),
			value=_identifier(name_tok),
			computed=False,
			kind="init",
			method=False,
			shorthand=True,
		)
	if name == "prop_method":
		params_tree = next((c for c in subs if _name(c) == "params"), None)
		value = _accessor_function(tree, _build_params(params_tree), subs[-1])
		return _property(tree, subs[0], value, method=True)
	if name == "prop_get":
		return _property(tree, subs[0], _accessor_function(tree, [], subs[-1]), kind="get")
	if name == "prop_set":
		param = _token(tree, "NAME")
		# The key NAME lives under prop_key; this is the parameter.
		return _property(tree, subs[0], _accessor_function(tree, [_identifier(param)], subs[-1]), kind="set")
	raise ValueError(f"Unsupported property node: {name}")


def _build_expr(node: Tree) -> Node:
	if not isinstance(node, Tree):
		raise TypeError(f"Unexpected node type: {type(node)}")
	name = _name(node)
	loc = _loc(node)

	if name == "sequence":
		return _node("SequenceExpression", loc, expressions=[_build_expr(c) for c in _subtrees(node)])
	if name == "assign":
		return _build_binary_like(node, "AssignmentExpression")
	if name == "conditional_expr":
		test, consequent, alternate = node.children
		return _node(
			"ConditionalExpression",
			loc,
			test=_build_expr(test),
			consequent=_build_expr(consequent),
			alternate=_build_expr(alternate),
		)
	if name == "logical":
		return _build_binary_like(node, "LogicalExpression")
	if name == "binary":
		return _build_binary_like(node, "BinaryExpression")
	if name == "unary_expr":
		op, arg = node.children
		return _node("UnaryExpression", loc, operator=_op(op), prefix=True, argument=_build_expr(arg))
	if name == "prefix_update":
		op, arg = node.children
		return _node("UpdateExpression", loc, operator=_op(op), prefix=True, argument=_build_expr(arg))
	if name == "postfix_update":
		arg, op = node.children
		return _node("UpdateExpression", loc, operator=_op(op), prefix=False, argument=_build_expr(arg))
	if name == "new_bare":
		return _node("NewExpression", loc, callee=_build_expr(node.children[0]), arguments=[])
	if name == "new_expr":
		callee, args = node.children
		return _node("NewExpression", loc, callee=_build_expr(callee), arguments=_build_arguments(args))
	if name == "call_expr":
		callee, args = node.children
		return _node(
			"CallExpression",
			loc,
			callee=_build_expr(callee),
			arguments=_build_arguments(args),
			optional=False,
		)
	if name == "member_dot":
		obj, prop = node.children
		return _node(
			"MemberExpression",
			loc,
			object=_build_expr(obj),
			property=_identifier(prop),
			computed=False,
			optional=False,
		)
	if name == "member_index":
		obj, prop = node.children
		return _node(
			"MemberExpression",
			loc,
			object=_build_expr(obj),
			property=_build_expr(prop),
			computed=True,
			optional=False,
		)
	if name == "tagged_template":
		tag, quasi = node.children
		return _node(
			"TaggedTemplateExpression",
			loc,
			tag=_build_expr(tag),
			quasi=_build_template(quasi, tagged=True),
		)
	if name == "identifier":
		return _identifier(node.children[0])
	if name == "this_expr":
		return _node("ThisExpression", loc)
	if name == "number":
		return _build_number(node.children[0])
	if name == "string":
		return _build_string(node.children[0])
	if name == "true_lit":
		return _node("Literal", loc, value=True, raw="true")
	if name == "false_lit":
		return _node("Literal", loc, value=False, raw="false")
	if name == "null_lit":
		return _node("Literal", loc, value=None, raw="null")
	if name == "regex":
		return _build_regex(node.children[0])
	if name == "template":
		return _build_template(node.children[0])
	if name == "array":
		return _node("ArrayExpression", loc, elements=[_build_expr(c) for c in _subtrees(node)])
	if name == "object":
		return _node("ObjectExpression", loc, properties=[_build_property(c) for c in _subtrees(node)])
	if name == "function_expr":
		return _build_function(node, "FunctionExpression")
	raise ValueError(f"Unsupported expression node: {name}")
