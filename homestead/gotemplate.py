"""A text template engine following the syntax of Go's text/template.

Supported: field and variable access, pipelines, parenthesised commands,
``if``/``else if``/``with``/``range`` with ``else``, variable declaration and
assignment, whitespace trim markers, comments and the common builtin
functions (and, or, not, len, index, eq, ne, lt, le, gt, ge, print, printf,
println).
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


class TemplateError(Exception):
    """Raised when a template cannot be loaded or executed."""


class TemplateSyntaxError(TemplateError):
    """Raised when template text cannot be parsed."""


class _Missing:
    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "<no value>"


MISSING = _Missing()
_NO_ARG = object()

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    | (?P<str>"(?:[^"\\]|\\.)*")
    | (?P<raw>`[^`]*`)
    | (?P<decl>:=)
    | (?P<assign>=)
    | (?P<pipe>\|)
    | (?P<lp>\()
    | (?P<rp>\))
    | (?P<comma>,)
    | (?P<var>\$[A-Za-z0-9_]*(?:\.[A-Za-z0-9_]+)*)
    | (?P<field>(?:\.[A-Za-z0-9_]+)+|\.)
    | (?P<num>-?\d+(?:\.\d+)?)
    | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    """,
    re.X,
)

_SNAKE_RE = re.compile(r"((?<=[a-z0-9])[A-Z]|(?!^)[A-Z](?=[a-z]))")
_VERB_RE = re.compile(r"%([-+# 0]*\d*(?:\.\d+)?)([a-zA-Z%])")


def _format(value: Any) -> str:
    if value is MISSING:
        return "<no value>"
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return _format(value.value)
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    if isinstance(value, Mapping):
        pairs = " ".join(f"{_format(k)}:{_format(v)}" for k, v in sorted(value.items()))
        return f"map[{pairs}]"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format(v) for v in value) + "]"
    return str(value)


def _truthy(value: Any) -> bool:
    if value is MISSING or value is None:
        return False
    try:
        return bool(value)
    except (TypeError, ValueError):
        return True


def _print(*args: Any) -> str:
    parts: list[str] = []
    for i, arg in enumerate(args):
        if i and not isinstance(arg, str) and not isinstance(args[i - 1], str):
            parts.append(" ")
        parts.append(_format(arg))
    return "".join(parts)


def _println(*args: Any) -> str:
    return " ".join(_format(a) for a in args) + "\n"


def _printf(fmt: str, *args: Any) -> str:
    remaining = iter(args)

    def repl(match: re.Match[str]) -> str:
        flags, verb = match.group(1), match.group(2)
        if verb == "%":
            return "%"
        try:
            arg = next(remaining)
        except StopIteration:
            return f"%!{verb}(MISSING)"
        if verb in "vst":
            return ("%" + flags + "s") % _format(arg)
        if verb == "q":
            return json.dumps(_format(arg), ensure_ascii=False)
        return ("%" + flags + verb) % arg

    return _VERB_RE.sub(repl, fmt)


def _and(*args: Any) -> Any:
    for arg in args[:-1]:
        if not _truthy(arg):
            return arg
    return args[-1]


def _or(*args: Any) -> Any:
    for arg in args[:-1]:
        if _truthy(arg):
            return arg
    return args[-1]


def _index(item: Any, *keys: Any) -> Any:
    for key in keys:
        if isinstance(item, Mapping):
            item = item.get(key, MISSING)
        else:
            item = item[key]
    return item


_FUNCS: dict[str, Callable[..., Any]] = {
    "and": _and,
    "or": _or,
    "not": lambda v: not _truthy(v),
    "len": len,
    "index": _index,
    "eq": lambda a, *b: any(a == x for x in b),
    "ne": lambda a, b: a != b,
    "lt": lambda a, b: a < b,
    "le": lambda a, b: a <= b,
    "gt": lambda a, b: a > b,
    "ge": lambda a, b: a >= b,
    "print": _print,
    "println": _println,
    "printf": _printf,
}

_KEYWORDS = {"if", "with", "range", "end", "else"}
_UNSUPPORTED = {"define", "template", "block", "break", "continue"}

Token = tuple[str, str]


@dataclass
class _Pipeline:
    commands: list[list[tuple]]
    decl: list[str] = field(default_factory=list)
    assign: bool = False


@dataclass
class _Text:
    text: str


@dataclass
class _Action:
    pipe: _Pipeline


@dataclass
class _If:
    pipe: _Pipeline
    body: list
    else_body: list
    with_: bool


@dataclass
class _Range:
    pipe: _Pipeline
    body: list
    else_body: list


def _tokenize(name: str, content: str) -> list[Token]:
    tokens: list[Token] = []
    pos = 0
    while pos < len(content):
        match = _TOKEN_RE.match(content, pos)
        if not match:
            raise TemplateSyntaxError(
                f"template: {name}: unexpected {content[pos]!r} in action"
            )
        if match.lastgroup != "ws":
            tokens.append((match.lastgroup, match.group()))
        pos = match.end()
    return tokens


def _split(name: str, text: str) -> list[tuple[str, Any]]:
    items: list[tuple[str, Any]] = []
    pos = 0
    trim_next = False
    while True:
        start = text.find("{{", pos)
        chunk = text[pos:] if start < 0 else text[pos:start]
        if trim_next:
            chunk = chunk.lstrip()
        if start < 0:
            if chunk:
                items.append(("text", chunk))
            return items
        inner = start + 2
        if text[inner:inner + 1] == "-" and text[inner + 1:inner + 2].isspace():
            chunk = chunk.rstrip()
            inner += 1
        if chunk:
            items.append(("text", chunk))
        end = text.find("}}", inner)
        if end < 0:
            raise TemplateSyntaxError(f"template: {name}: unclosed action")
        content = text[inner:end]
        trim_next = False
        if len(content) >= 2 and content.endswith("-") and content[-2].isspace():
            content = content[:-1]
            trim_next = True
        pos = end + 2
        stripped = content.strip()
        if stripped.startswith("/*"):
            if not stripped.endswith("*/"):
                raise TemplateSyntaxError(f"template: {name}: unclosed comment")
            continue
        items.append(("action", _tokenize(name, content)))


class _Parser:
    def __init__(self, name: str, items: list[tuple[str, Any]]):
        self.name = name
        self.items = items
        self.pos = 0

    def error(self, message: str) -> TemplateSyntaxError:
        return TemplateSyntaxError(f"template: {self.name}: {message}")

    def parse(self) -> list:
        nodes, term, _ = self._list()
        if term is not None:
            raise self.error(f"unexpected {{{{{term}}}}}")
        return nodes

    def _list(self) -> tuple[list, str | None, list[Token]]:
        nodes: list = []
        while self.pos < len(self.items):
            kind, value = self.items[self.pos]
            self.pos += 1
            if kind == "text":
                nodes.append(_Text(value))
                continue
            if not value:
                raise self.error("missing value for command")
            head_kind, head = value[0]
            if head_kind == "ident":
                if head in ("end", "else"):
                    return nodes, head, value[1:]
                if head in ("if", "with"):
                    nodes.append(self._if(head, value[1:]))
                    continue
                if head == "range":
                    nodes.append(self._range(value[1:]))
                    continue
                if head in _UNSUPPORTED:
                    raise self.error(f"unsupported action {head!r}")
            nodes.append(_Action(self._pipeline(value)))
        return nodes, None, []

    def _body(self) -> tuple[list, list[Token] | None]:
        body, term, rest = self._list()
        if term is None:
            raise self.error("unexpected EOF")
        if term == "end":
            if rest:
                raise self.error("unexpected tokens in {{end}}")
            return body, None
        return body, rest

    def _closing_else(self) -> list:
        else_body, rest = self._body()
        if rest is not None:
            raise self.error("expected {{end}}, found {{else}}")
        return else_body

    def _if(self, keyword: str, tokens: list[Token]) -> _If:
        pipe = self._pipeline(tokens)
        body, rest = self._body()
        else_body: list = []
        if rest is not None:
            if rest and rest[0] == ("ident", keyword):
                else_body = [self._if(keyword, rest[1:])]
            elif rest:
                raise self.error("unexpected tokens in {{else}}")
            else:
                else_body = self._closing_else()
        return _If(pipe, body, else_body, keyword == "with")

    def _range(self, tokens: list[Token]) -> _Range:
        pipe = self._pipeline(tokens)
        if len(pipe.decl) > 2:
            raise self.error("too many declarations in range")
        body, rest = self._body()
        else_body: list = []
        if rest is not None:
            if rest:
                raise self.error("unexpected tokens in {{else}}")
            else_body = self._closing_else()
        return _Range(pipe, body, else_body)

    def _pipeline(self, tokens: list[Token]) -> _Pipeline:
        decl: list[str] = []
        assign = False
        for k, (kind, _) in enumerate(tokens):
            if kind in ("decl", "assign"):
                prefix = tokens[:k]
                if (
                    len(prefix) % 2 == 0
                    or any(t[0] != "var" or "." in t[1] for t in prefix[::2])
                    or any(t[0] != "comma" for t in prefix[1::2])
                ):
                    raise self.error("bad variable declaration")
                decl = [t[1] for t in prefix[::2]]
                assign = kind == "assign"
                tokens = tokens[k + 1:]
                break
            if kind not in ("var", "comma"):
                break
        if not tokens:
            raise self.error("missing value for command")
        commands: list[list[tuple]] = []
        current: list[Token] = []
        depth = 0
        for token in tokens:
            if token[0] == "lp":
                depth += 1
            elif token[0] == "rp":
                depth -= 1
            if token[0] == "pipe" and depth == 0:
                commands.append(self._command(current))
                current = []
            else:
                current.append(token)
        commands.append(self._command(current))
        return _Pipeline(commands, decl, assign)

    def _command(self, tokens: list[Token]) -> list[tuple]:
        if not tokens:
            raise self.error("missing command")
        operands: list[tuple] = []
        k = 0
        while k < len(tokens):
            kind, text = tokens[k]
            if kind == "lp":
                depth = 0
                for end in range(k, len(tokens)):
                    if tokens[end][0] == "lp":
                        depth += 1
                    elif tokens[end][0] == "rp":
                        depth -= 1
                        if depth == 0:
                            break
                else:
                    raise self.error("unclosed left paren")
                operands.append(("pipe", self._pipeline(tokens[k + 1:end])))
                k = end + 1
                continue
            operands.append(self._operand(kind, text))
            k += 1
        return operands

    def _operand(self, kind: str, text: str) -> tuple:
        if kind == "str":
            try:
                return ("const", json.loads(text))
            except ValueError:
                raise self.error(f"bad string {text}") from None
        if kind == "raw":
            return ("const", text[1:-1])
        if kind == "num":
            return ("const", float(text) if "." in text else int(text))
        if kind == "field":
            return ("field", tuple(p for p in text.split(".") if p))
        if kind == "var":
            head, *rest = text.split(".")
            return ("var", head, tuple(rest))
        if kind == "ident":
            if text in ("true", "false"):
                return ("const", text == "true")
            if text == "nil":
                return ("const", None)
            if text in _FUNCS:
                return ("func", text)
            if text in _KEYWORDS:
                raise self.error(f"unexpected keyword {text!r}")
            raise self.error(f'function "{text}" not defined')
        raise self.error(f"unexpected {text!r} in command")


def _lookup(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, MISSING)
    for attr in (name, _SNAKE_RE.sub(r"_\1", name).lower()):
        if hasattr(obj, attr):
            value = getattr(obj, attr)
            if callable(value) and not isinstance(value, type):
                return value()
            return value
    raise TemplateError(f"can't evaluate field {name} in type {type(obj).__name__}")


def _resolve(obj: Any, names: tuple[str, ...]) -> Any:
    for name in names:
        if obj is MISSING or obj is None:
            raise TemplateError(f"nil pointer evaluating .{name}")
        obj = _lookup(obj, name)
    return obj


def _iterate(value: Any):
    if value is MISSING or value is None:
        return []
    if isinstance(value, Mapping):
        return [(k, value[k]) for k in sorted(value)]
    if isinstance(value, bool):
        raise TemplateError(f"range can't iterate over {_format(value)}")
    if isinstance(value, int):
        return [(i, i) for i in range(value)]
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        raise TemplateError(f"range can't iterate over {_format(value)}")
    return list(enumerate(value))


class _Executor:
    def __init__(self, name: str, data: Any):
        self.name = name
        self.scopes: list[dict[str, Any]] = [{"$": data}]

    def run(self, nodes: list, dot: Any, out: list[str]) -> None:
        for node in nodes:
            if isinstance(node, _Text):
                out.append(node.text)
            elif isinstance(node, _Action):
                value = self.pipeline(node.pipe, dot)
                if not node.pipe.decl:
                    out.append(_format(value))
            elif isinstance(node, _If):
                self.scopes.append({})
                try:
                    value = self.pipeline(node.pipe, dot)
                    if _truthy(value):
                        self.run(node.body, value if node.with_ else dot, out)
                    else:
                        self.run(node.else_body, dot, out)
                finally:
                    self.scopes.pop()
            else:
                self.range(node, dot, out)

    def range(self, node: _Range, dot: Any, out: list[str]) -> None:
        pipe = node.pipe
        value = self.pipeline(_Pipeline(pipe.commands), dot)
        entries = _iterate(value)
        if not entries:
            self.run(node.else_body, dot, out)
            return
        for key, elem in entries:
            scope: dict[str, Any] = {}
            if len(pipe.decl) == 1:
                scope[pipe.decl[0]] = elem
            elif len(pipe.decl) == 2:
                scope[pipe.decl[0]] = key
                scope[pipe.decl[1]] = elem
            self.scopes.append(scope)
            try:
                self.run(node.body, elem, out)
            finally:
                self.scopes.pop()

    def variable(self, name: str) -> Any:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        raise TemplateError(f"undefined variable: {name}")

    def pipeline(self, pipe: _Pipeline, dot: Any) -> Any:
        value: Any = _NO_ARG
        for command in pipe.commands:
            value = self.command(command, dot, value)
        for name in pipe.decl:
            if pipe.assign:
                for scope in reversed(self.scopes):
                    if name in scope:
                        scope[name] = value
                        break
                else:
                    raise TemplateError(f"undefined variable: {name}")
            else:
                self.scopes[-1][name] = value
        return value

    def command(self, operands: list[tuple], dot: Any, final: Any) -> Any:
        first = operands[0]
        if first[0] == "func":
            args = [self.operand(o, dot) for o in operands[1:]]
            if final is not _NO_ARG:
                args.append(final)
            try:
                return _FUNCS[first[1]](*args)
            except TemplateError:
                raise
            except Exception as exc:
                raise TemplateError(f"error calling {first[1]}: {exc}") from exc
        if len(operands) > 1 or final is not _NO_ARG:
            raise TemplateError("can't give argument to non-function")
        return self.operand(first, dot)

    def operand(self, operand: tuple, dot: Any) -> Any:
        kind = operand[0]
        if kind == "const":
            return operand[1]
        if kind == "field":
            return _resolve(dot, operand[1])
        if kind == "var":
            return _resolve(self.variable(operand[1]), operand[2])
        if kind == "pipe":
            return self.pipeline(operand[1], dot)
        raise TemplateError(f"function {operand[1]} used as a value")


class Template:
    """A parsed template that can be rendered against data."""

    def __init__(self, name: str, text: str):
        self.name = name
        self._nodes = _Parser(name, _split(name, text)).parse()

    def render(self, data: Any) -> str:
        """Render the template with ``data`` as the initial dot."""
        out: list[str] = []
        try:
            _Executor(self.name, data).run(self._nodes, data, out)
        except TemplateError as exc:
            raise TemplateError(f"template: {self.name}: {exc}") from exc
        return "".join(out)


def parse_template(name: str, text: str) -> Template:
    """Parse ``text`` into a :class:`Template` called ``name``."""
    return Template(name, text)