"""Algebraic simplification of expression trees by repeated rewriting."""

from __future__ import annotations

import math
from typing import Any, Callable

from .expr import Expr, ObjectType, Op, is_infix, object_eq, object_type

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

Rule = Callable[[Any], Any]


def _is_num(obj: Any) -> bool:
    return object_type(obj) is ObjectType.F64


def _is_op(obj: Any, op: Op) -> bool:
    return isinstance(obj, Expr) and obj.op is op


def _rebuild(e: Expr, rule: Rule) -> Expr:
    """A fresh expression with the same operator and the rule applied to every argument."""
    return Expr(e.op, [rule(arg) for arg in e.args])


def expr_has_num(expr: Expr, n: float) -> bool:
    """Whether any direct argument of expr is the number n."""
    return any(_is_num(arg) and float(arg) == n for arg in expr.args)


def expr_rm_num(expr: Expr, to_rm: float) -> Expr:
    """A copy of expr without the direct arguments equal to the number to_rm."""
    return Expr(
        expr.op,
        [arg for arg in expr.args if not (_is_num(arg) and float(arg) == to_rm)],
    )


def _c_pow(base: float, exponent: float) -> float:
    """Power with IEEE results where math.pow would raise."""
    try:
        return math.pow(base, exponent)
    except ZeroDivisionError:
        return math.inf
    except ValueError:
        if base == 0 and exponent < 0:
            return math.inf
        return math.nan
    except OverflowError:
        if base < 0 and exponent.is_integer() and int(exponent) % 2 == 1:
            return -math.inf
        return math.inf


def _zero_products(e: Any) -> Any:
    """A product containing 0 is 0."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.TIMES and expr_has_num(e, 0):
        return 0.0
    return _rebuild(e, _zero_products)


def _drop_empties_and_singles(e: Any) -> Any:
    """Unwrap one-argument infix expressions; empty sums and products become 0 and 1."""
    if not isinstance(e, Expr):
        return e
    if len(e.args) == 1 and is_infix(e.op):
        return e.args[0]
    if not e.args:
        if e.op is Op.TIMES:
            return 1.0
        if e.op is Op.PLUS:
            return 0.0
    return _rebuild(e, _drop_empties_and_singles)


def _empty_products(e: Any) -> Any:
    """An empty product is 1."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.TIMES and not e.args:
        return 1.0
    return _rebuild(e, _empty_products)


def _zero_numerator(e: Any) -> Any:
    """0 divided by anything is 0."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.DIVIDE and len(e.args) == 2:
        first = e.args[0]
        if _is_num(first) and float(first) == 0:
            return 0.0
    return _rebuild(e, _zero_numerator)


def _zero_minus(e: Any) -> Any:
    """0 - a is -a."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.MINUS and len(e.args) == 2:
        first, second = e.args
        if _is_num(first) and float(first) == 0:
            if _is_num(second):
                return -1 * float(second)
            return Expr(Op.TIMES, [-1.0, second])
    return _rebuild(e, _zero_minus)


def _fold_binary_product(e: Any) -> Any:
    """a * b with two numbers is their product."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.TIMES and len(e.args) == 2:
        first, second = e.args
        if _is_num(first) and _is_num(second):
            return float(first) * float(second)
    return _rebuild(e, _fold_binary_product)


def _fold_nested_product(e: Any) -> Any:
    """a * (b * ...) with numbers a and b is ab * (...)."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.TIMES and len(e.args) == 2:
        first, second = e.args
        if _is_num(first) and _is_op(second, Op.TIMES) and second.args:
            leftmost = second.args[0]
            if _is_num(leftmost):
                remainder = Expr(Op.TIMES, second.args[1:])
                return Expr(Op.TIMES, [float(first) * float(leftmost), remainder])
    return _rebuild(e, _fold_nested_product)


def _fold_sum_or_difference(e: Any) -> Any:
    """a + b and a - b with two numbers are folded."""
    if not isinstance(e, Expr):
        return e
    if len(e.args) == 2 and e.op in (Op.PLUS, Op.MINUS):
        first, second = e.args
        if _is_num(first) and _is_num(second):
            if e.op is Op.PLUS:
                return float(first) + float(second)
            return float(first) - float(second)
    return _rebuild(e, _fold_sum_or_difference)


def _trivial_powers(e: Any) -> Any:
    """a ^ 1 is a and a ^ 0 is 1."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.POW and len(e.args) >= 2:
        exponent = e.args[1]
        if _is_num(exponent):
            if float(exponent) == 1:
                return e.args[0]
            if float(exponent) == 0:
                return 1.0
    return _rebuild(e, _trivial_powers)


def _skip_identities(e: Any) -> Any:
    """Drop 0 from sums and subtrahends, 1 from products and divisors."""
    if not isinstance(e, Expr):
        return e
    kept = []
    for i, arg in enumerate(e.args):
        if _is_num(arg):
            value = float(arg)
            if value == 0.0 and (e.op is Op.PLUS or (e.op is Op.MINUS and i > 0)):
                continue
            if value == 1.0 and (e.op is Op.TIMES or (e.op is Op.DIVIDE and i > 0)):
                continue
        kept.append(_skip_identities(arg))
    return Expr(e.op, kept)


def _fold_constant_power(e: Any) -> Any:
    """A number raised to a number is folded."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.POW and len(e.args) >= 2:
        base, exponent = e.args[0], e.args[1]
        if _is_num(base) and _is_num(exponent):
            return _c_pow(float(base), float(exponent))
    return _rebuild(e, _fold_constant_power)


def _as_int32(value: float) -> int | None:
    if value.is_integer() and _INT32_MIN <= value <= _INT32_MAX:
        return int(value)
    return None


def _reduce_fraction(e: Any) -> Any:
    """Reduce a quotient of two integers to lowest terms."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.DIVIDE and len(e.args) >= 2:
        first, second = e.args[0], e.args[1]
        if _is_num(first) and _is_num(second):
            numerator, denominator = float(first), float(second)
            int_num, int_den = _as_int32(numerator), _as_int32(denominator)
            if denominator != 0 and int_num is not None and int_den is not None:
                divisor = math.gcd(int_num, int_den)
                reduced_num = int_num // divisor
                reduced_den = int_den // divisor
                if reduced_den == 1:
                    return float(reduced_num)
                return Expr(Op.DIVIDE, [float(reduced_num), float(reduced_den)])
            return Expr(Op.DIVIDE, [numerator, denominator])
    return _rebuild(e, _reduce_fraction)


def _merge_right_power(e: Any) -> Any:
    """a ^ (b ^ c) is rewritten as a ^ (b * c)."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.POW and len(e.args) >= 2:
        base, exponent = e.args[0], e.args[1]
        if _is_op(exponent, Op.POW) and len(exponent.args) >= 2:
            product = Expr(Op.TIMES, [exponent.args[0], exponent.args[1]])
            return Expr(Op.POW, [base, product])
    return _rebuild(e, _merge_right_power)


def _merge_left_power(e: Any) -> Any:
    """(a ^ b) ^ c is a ^ (b * c)."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.POW and len(e.args) >= 2:
        base, exponent = e.args[0], e.args[1]
        if _is_op(base, Op.POW) and len(base.args) >= 2:
            product = Expr(Op.TIMES, [base.args[1], exponent])
            return Expr(Op.POW, [base.args[0], product])
    return _rebuild(e, _merge_left_power)


def _self_quotient(e: Any) -> Any:
    """a / a is 1."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.DIVIDE and len(e.args) >= 2:
        if object_eq(e.args[0], e.args[1]):
            return 1.0
    return _rebuild(e, _self_quotient)


def _gather_constants(e: Any) -> Any:
    """Combine the numbers of a sum or product into one, placed first."""
    if not isinstance(e, Expr):
        return e
    if e.op in (Op.PLUS, Op.TIMES):
        numbers = [float(arg) for arg in e.args if _is_num(arg)]
        others = [arg for arg in e.args if not _is_num(arg)]
        gathered = []
        if numbers:
            if e.op is Op.PLUS:
                gathered.append(math.fsum(numbers) if False else sum(numbers, 0.0))
            else:
                gathered.append(math.prod(numbers, start=1.0))
        return Expr(e.op, gathered + others)
    return _rebuild(e, _gather_constants)


def _self_difference(e: Any) -> Any:
    """a - a is 0."""
    if not isinstance(e, Expr):
        return e
    if e.op is Op.MINUS and len(e.args) == 2:
        if object_eq(e.args[0], e.args[1]):
            return 0.0
    return _rebuild(e, _self_difference)


def _collapse_product(e: Any) -> Any:
    """Drop 1s from products and move the product of the numbers to the end."""
    if not isinstance(e, Expr):
        return e
    if e.op is not Op.TIMES:
        return _rebuild(e, _collapse_product)
    terms = []
    total = 1.0
    count_numbers = 0
    for arg in e.args:
        if _is_num(arg):
            if float(arg) == 1:
                continue
            total *= float(arg)
            count_numbers += 1
        else:
            terms.append(_collapse_product(arg))
    non_one_terms = len(terms)
    if count_numbers > 0 and total != 1:
        terms.append(total)
    if not terms:
        return 1.0
    if non_one_terms == 1 and count_numbers == 0:
        return terms[0]
    return Expr(Op.TIMES, terms)


_RULES: tuple[Rule, ...] = (
    _zero_products,
    _drop_empties_and_singles,
    _empty_products,
    _zero_numerator,
    _zero_minus,
    _fold_binary_product,
    _fold_nested_product,
    _fold_sum_or_difference,
    _trivial_powers,
    _skip_identities,
    _fold_constant_power,
    _reduce_fraction,
    _merge_right_power,
    _merge_left_power,
    _self_quotient,
    _gather_constants,
    _self_difference,
    _collapse_product,
)


def simplify(obj: Any) -> Any:
    """Apply every rewriting rule in turn until the result stops changing."""
    result = obj
    while True:
        last_result = result
        for rule in _RULES:
            result = rule(result)
        if object_eq(last_result, result):
            return result