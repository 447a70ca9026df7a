"""Core object model: numbers, strings, symbols and expression trees."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Iterator


class ObjectType(IntEnum):
    """Major object kinds, numbered as the interpreter numbers them."""

    UI8 = 0
    EXPR = 1
    PRIMITIVE = 2
    STRING = 3
    SYMBOL = 4
    CX = 5
    NODE = 6
    POINTER = 7
    META = 8
    SPACE = 9
    FUN = 10
    FUN_PARAM = 11
    LOCAL = 12
    LINK = 13
    ERR = 14
    SELF = 15
    RETURN = 16
    BC_BLOCK = 17
    STACK_OBJ = 18
    ARRAY = 19
    F64 = 20
    UNKNOWN = 21


class Op(Enum):
    """Expression operators; the value is the printed spelling."""

    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    POW = "^"
    SQRT = "sqrt"
    LN = "ln"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    CSC = "csc"
    SEC = "sec"
    COT = "cot"
    CSCH = "csch"
    SECH = "sech"
    COTH = "coth"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    ASINH = "asinh"
    ACOSH = "acosh"
    ATANH = "atanh"
    ACSC = "acsc"
    ASEC = "asec"
    ACOT = "acot"
    ACSCH = "acsch"
    ASECH = "asech"
    ACOTH = "acoth"
    DIFF = "diff"
    TUPLE = "tuple"


_INFIX = frozenset({Op.PLUS, Op.MINUS, Op.TIMES, Op.DIVIDE, Op.POW})


@dataclass(frozen=True)
class Symbol:
    """A named symbol."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Expr:
    """An operator applied to an ordered list of arguments."""

    op: Op
    args: list = field(default_factory=list)

    def __post_init__(self) -> None:
        self.args = list(self.args)

    def append(self, obj: Any) -> None:
        """Add an argument at the end."""
        self.args.append(obj)

    def __len__(self) -> int:
        return len(self.args)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.args)

    def __getitem__(self, index):
        return self.args[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expr):
            return NotImplemented
        return object_eq(self, other)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return to_string(self)


def object_type(obj: Any) -> ObjectType:
    """Classify a Python value as one of the object kinds."""
    if isinstance(obj, bool):
        return ObjectType.SYMBOL
    if isinstance(obj, (int, float)):
        return ObjectType.F64
    if isinstance(obj, str):
        return ObjectType.STRING
    if isinstance(obj, Symbol):
        return ObjectType.SYMBOL
    if isinstance(obj, Expr):
        return ObjectType.EXPR
    return ObjectType.UNKNOWN


def is_infix(op: Op) -> bool:
    """Whether the operator is written between its operands."""
    return op in _INFIX


def _symbol_name(obj: Any) -> str:
    if isinstance(obj, bool):
        return "true" if obj else "false"
    return obj.name


def object_eq(a: Any, b: Any) -> bool:
    """Structural equality of two objects."""
    kind = object_type(a)
    if kind != object_type(b):
        return False
    if kind is ObjectType.EXPR:
        return (
            a.op is b.op
            and len(a.args) == len(b.args)
            and all(object_eq(x, y) for x, y in zip(a.args, b.args))
        )
    if kind is ObjectType.F64:
        return float(a) == float(b)
    if kind is ObjectType.SYMBOL:
        return _symbol_name(a) == _symbol_name(b)
    return a == b


def _format_number(value: float) -> str:
    f = float(value)
    if math.isfinite(f) and f.is_integer() and abs(f) < 1e16:
        return str(int(f))
    return repr(f)


def _format_string(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _needs_parens(obj: Any) -> bool:
    return isinstance(obj, Expr) and is_infix(obj.op) and len(obj.args) >= 2


def to_string(obj: Any) -> str:
    """Render an object in the language's written form."""
    kind = object_type(obj)
    if kind is ObjectType.F64:
        return _format_number(obj)
    if kind is ObjectType.STRING:
        return _format_string(obj)
    if kind is ObjectType.SYMBOL:
        return _symbol_name(obj)
    if kind is ObjectType.EXPR:
        if obj.op is Op.TUPLE:
            return "[" + ", ".join(to_string(a) for a in obj.args) + "]"
        if is_infix(obj.op) and len(obj.args) >= 2:
            parts = (
                f"({to_string(a)})" if _needs_parens(a) else to_string(a)
                for a in obj.args
            )
            return f" {obj.op.value} ".join(parts)
        return f"{obj.op.value}(" + ", ".join(to_string(a) for a in obj.args) + ")"
    return str(obj)