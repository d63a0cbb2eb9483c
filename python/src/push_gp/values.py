from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Sequence, Tuple, Union


class ValueKind(str, Enum):
    INT = "INT"
    TEXT = "TEXT"
    SYM = "SYM"
    BLOCK = "BLOCK"


@dataclass(frozen=True)
class Int:
    value: int
    kind: ClassVar[ValueKind] = ValueKind.INT


@dataclass(frozen=True)
class Text:
    value: str
    kind: ClassVar[ValueKind] = ValueKind.TEXT


@dataclass(frozen=True)
class Sym:
    name: str
    kind: ClassVar[ValueKind] = ValueKind.SYM


@dataclass(frozen=True)
class Block:
    items: Tuple["Value", ...]
    kind: ClassVar[ValueKind] = ValueKind.BLOCK


Value = Union[Int, Text, Sym, Block]
Program = Tuple[Value, ...]


def format_value(v: Value) -> str:
    if v.kind == ValueKind.INT:
        return str(v.value)
    if v.kind == ValueKind.TEXT:
        escaped = v.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if v.kind == ValueKind.SYM:
        return v.name
    return format_program(v.items)


def format_program(program: Sequence[Value]) -> str:
    return "(" + " ".join(format_value(v) for v in program) + ")"


def _tokenize(src: str) -> List[Tuple[str, str]]:
    out: List[Tuple[str, str]] = []
    i = 0
    n = len(src)
    while i < n:
        c = src[i]
        if c.isspace():
            i += 1
            continue
        if c in "()":
            out.append(("paren", c))
            i += 1
            continue
        if c == '"':
            j = i + 1
            buf: List[str] = []
            while j < n and src[j] != '"':
                if src[j] == "\\" and j + 1 < n:
                    j += 1
                buf.append(src[j])
                j += 1
            if j >= n:
                raise ValueError(f"unterminated string literal at offset {i}")
            out.append(("text", "".join(buf)))
            i = j + 1
            continue
        j = i
        while j < n and not src[j].isspace() and src[j] not in '()"':
            j += 1
        out.append(("atom", src[i:j]))
        i = j
    return out


def _atom(tok: str) -> Value:
    body = tok[1:] if tok[:1] in "+-" else tok
    if body.isdigit():
        return Int(int(tok))
    return Sym(tok)


def parse_program(src: str) -> Program:
    """Read the parenthesized notation produced by ``format_program``.

    Integers become ``Int``, double-quoted strings ``Text``, bare words
    ``Sym`` and nested parentheses ``Block``.
    """
    tokens = _tokenize(src)
    if not tokens or tokens[0] != ("paren", "("):
        raise ValueError("program must start with '('")

    stack: List[List[Value]] = []
    result: Program | None = None
    for pos, (tag, tok) in enumerate(tokens):
        if result is not None:
            raise ValueError(f"trailing tokens after program at token {pos}")
        if tag == "paren" and tok == "(":
            stack.append([])
        elif tag == "paren":
            if not stack:
                raise ValueError(f"unbalanced ')' at token {pos}")
            items = tuple(stack.pop())
            if stack:
                stack[-1].append(Block(items))
            else:
                result = items
        elif not stack:
            raise ValueError(f"value outside program at token {pos}")
        elif tag == "text":
            stack[-1].append(Text(tok))
        else:
            stack[-1].append(_atom(tok))
    if result is None:
        raise ValueError("unbalanced '(' in program")
    return result
