"""Symbolic differentiation of expression trees."""

from __future__ import annotations

from typing import Any, Callable

from .expr import Expr, ObjectType, Op, object_type
from .simplify import expr_has_num

# Operators whose arguments are searched when looking for a symbol.
_SEARCHED_OPS = frozenset(
    {
        Op.PLUS,
        Op.MINUS,
        Op.TIMES,
        Op.DIVIDE,
        Op.POW,
        Op.SQRT,
        Op.SIN,
        Op.COS,
        Op.TAN,
        Op.SINH,
        Op.COSH,
        Op.TANH,
        Op.CSC,
        Op.SEC,
        Op.COT,
        Op.CSCH,
        Op.SECH,
        Op.COTH,
        Op.ASIN,
        Op.ACOS,
        Op.ATAN,
        Op.ASINH,
        Op.ACOSH,
        Op.ATANH,
        Op.ACSC,
        Op.ASEC,
        Op.ACOT,
        Op.ACSCH,
        Op.ASECH,
        Op.ACOTH,
    }
)


def _name(sym: Any) -> str:
    if isinstance(sym, bool):
        return "true" if sym else "false"
    return sym.name


def symbol_equal(s1: Any, s2: Any) -> bool:
    """Whether two symbols match over the length of the shorter name."""
    a, b = _name(s1), _name(s2)
    n = min(len(a), len(b))
    return a[:n] == b[:n]


def has_symbol(obj: Any, sym: Any) -> bool:
    """Whether the tree obj mentions sym under the searched operators."""
    kind = object_type(obj)
    if kind is ObjectType.EXPR:
        if obj.op not in _SEARCHED_OPS:
            return False
        return any(has_symbol(arg, sym) for arg in obj.args)
    if kind is ObjectType.SYMBOL:
        return symbol_equal(obj, sym)
    return False


def _e(op: Op, *args: Any) -> Expr:
    return Expr(op, list(args))


def _times(*args: Any) -> Expr:
    return Expr(Op.TIMES, list(args))


# Each entry builds the derivative of op(arg) from arg and d(arg).
_UnaryRule = Callable[[Any, Any], Any]

_UNARY_RULES: dict[Op, _UnaryRule] = {
    Op.SIN: lambda a, d: _times(d, _e(Op.COS, a)),
    Op.COS: lambda a, d: _times(d, _times(_e(Op.SIN, a), -1.0)),
    Op.TAN: lambda a, d: _times(d, _e(Op.POW, _e(Op.SEC, a), 2.0)),
    Op.SEC: lambda a, d: _times(_e(Op.TAN, a), d),
    Op.CSC: lambda a, d: _times(d, _times(_e(Op.CSC, a), _e(Op.COT, a), -1.0)),
    Op.COT: lambda a, d: _times(d, _times(-1.0, _e(Op.POW, _e(Op.CSC, a), 2.0))),
    Op.SECH: lambda a, d: _times(d, _times(-1.0, _e(Op.TANH, a), _e(Op.SECH, a))),
    Op.CSCH: lambda a, d: _times(d, _times(-1.0, _e(Op.COTH, a), _e(Op.CSCH, a))),
    Op.COTH: lambda a, d: _times(d, _times(-1.0, _e(Op.POW, _e(Op.CSCH, a), 2.0))),
    Op.SINH: lambda a, d: _times(d, _e(Op.COSH, a)),
    Op.COSH: lambda a, d: _times(d, _times(_e(Op.SINH, a), -1.0)),
    Op.TANH: lambda a, d: _times(d, _e(Op.POW, _e(Op.SECH, a), 2.0)),
    Op.ASIN: lambda a, d: _times(
        d, _e(Op.SQRT, _e(Op.MINUS, 1.0, _e(Op.POW, a, 1.0)))
    ),
    Op.ACOS: lambda a, d: _times(
        d, _times(-1.0, _e(Op.SQRT, _e(Op.MINUS, 1.0, _e(Op.POW, a, 1.0))))
    ),
    Op.ATAN: lambda a, d: _times(
        d, _e(Op.DIVIDE, 1.0, _e(Op.PLUS, 1.0, _e(Op.POW, a, 1.0)))
    ),
    Op.ASINH: lambda a, d: _times(
        d, _e(Op.SQRT, _e(Op.PLUS, _e(Op.POW, a, 2.0), 1.0))
    ),
    Op.ACOSH: lambda a, d: _times(
        d, _e(Op.SQRT, _e(Op.MINUS, _e(Op.POW, a, 2.0), 1.0))
    ),
    Op.ATANH: lambda a, d: _times(
        d, _e(Op.DIVIDE, 1.0, _e(Op.MINUS, 1.0, _e(Op.POW, a, 2.0)))
    ),
    Op.ACSC: lambda a, d: _times(d, _times(_e(Op.COT, a), _e(Op.SEC, a))),
    Op.ASEC: lambda a, d: _times(d, _times(_e(Op.TAN, a), _e(Op.SEC, a))),
    Op.ACOT: lambda a, d: _times(d, _times(-1.0, _e(Op.POW, _e(Op.CSC, a), 2.0))),
    Op.ACSCH: lambda a, d: _times(d, _times(_e(Op.CSCH, a), _e(Op.COTH, a))),
    Op.ASECH: lambda a, d: _times(
        d, _times(-1.0, _e(Op.DIVIDE, 1.0, _e(Op.SEC, a)))
    ),
    Op.ACOTH: lambda a, d: _times(d, _times(-1.0, _e(Op.POW, _e(Op.SEC, a), 2.0))),
}


def _diff_pow(expr: Expr, wrt: Any) -> Any:
    base, exponent = expr.args[0], expr.args[1]
    base_has = has_symbol(base, wrt)
    exponent_has = has_symbol(exponent, wrt)
    if base_has and not exponent_has:
        lowered = _e(Op.POW, base, _e(Op.MINUS, exponent, 1.0))
        outside = _times(exponent, lowered)
        return _times(outside, diff(base, wrt))
    if not base_has and exponent_has:
        outside = _times(_e(Op.LN, base), _e(Op.POW, base, exponent))
        return _times(outside, diff(base, wrt))
    if base_has and exponent_has:
        return _times(
            _e(Op.POW, base, wrt),
            _e(Op.PLUS, _e(Op.DIVIDE, wrt, base), _e(Op.LN, base)),
        )
    return 0.0


def _diff_product(expr: Expr, wrt: Any) -> Any:
    if expr_has_num(expr, 0) or not expr.args:
        return 0.0
    terms = [
        Expr(
            Op.TIMES,
            [diff(arg, wrt) if j == i else arg for j, arg in enumerate(expr.args)],
        )
        for i in range(len(expr.args))
    ]
    return Expr(Op.PLUS, terms)


def _diff_quotient(expr: Expr, wrt: Any) -> Expr:
    a, b = expr.args[0], expr.args[1]
    aprime_b = _times(diff(a, wrt), b)
    bprime_a = _times(diff(b, wrt), a)
    return _e(Op.DIVIDE, _e(Op.MINUS, aprime_b, bprime_a), _e(Op.POW, b, 2.0))


def diff(obj: Any, wrt: Any) -> Any:
    """The derivative of obj with respect to the symbol wrt; 0 where none applies."""
    kind = object_type(obj)
    if kind is ObjectType.SYMBOL:
        return 1.0 if symbol_equal(wrt, obj) else 0.0
    if kind is not ObjectType.EXPR:
        return 0.0
    op = obj.op
    if op is Op.DIFF:
        return diff(diff(obj.args[0], wrt), wrt)
    if op is Op.POW:
        return _diff_pow(obj, wrt)
    if op in (Op.PLUS, Op.MINUS):
        return Expr(op, [diff(arg, wrt) for arg in obj.args])
    if op is Op.TIMES:
        return _diff_product(obj, wrt)
    if op is Op.DIVIDE:
        return _diff_quotient(obj, wrt)
    if op is Op.SQRT:
        return diff(_e(Op.POW, obj.args[0], 0.5), wrt)
    rule = _UNARY_RULES.get(op)
    if rule is None:
        return 0.0
    if not has_symbol(obj, wrt):
        return 0.0
    arg = obj.args[0]
    return rule(arg, diff(arg, wrt))