import math

import pytest

from smsymbolic.diff import diff, has_symbol, symbol_equal
from smsymbolic.expr import Expr, Op, Symbol, object_eq

X = Symbol("x")
Y = Symbol("y")
A = Symbol("a")


def e(op, *args):
    return Expr(op, list(args))


_UNARY = {
    Op.SQRT: math.sqrt,
    Op.LN: math.log,
    Op.SIN: math.sin,
    Op.COS: math.cos,
    Op.TAN: math.tan,
    Op.SEC: lambda v: 1 / math.cos(v),
    Op.CSC: lambda v: 1 / math.sin(v),
    Op.COT: lambda v: 1 / math.tan(v),
    Op.SINH: math.sinh,
    Op.COSH: math.cosh,
    Op.TANH: math.tanh,
    Op.SECH: lambda v: 1 / math.cosh(v),
    Op.CSCH: lambda v: 1 / math.sinh(v),
    Op.COTH: lambda v: 1 / math.tanh(v),
    Op.ATANH: math.atanh,
}


def evaluate(obj, env):
    if isinstance(obj, Symbol):
        return env[obj.name]
    if isinstance(obj, (int, float)):
        return float(obj)
    values = [evaluate(a, env) for a in obj.args]
    if obj.op is Op.PLUS:
        return sum(values)
    if obj.op is Op.MINUS:
        return values[0] - sum(values[1:])
    if obj.op is Op.TIMES:
        return math.prod(values)
    if obj.op is Op.DIVIDE:
        result = values[0]
        for v in values[1:]:
            result /= v
        return result
    if obj.op is Op.POW:
        return values[0] ** values[1]
    return _UNARY[obj.op](values[0])


def numeric_derivative(expr, point):
    h = 1e-6
    return (evaluate(expr, {"x": point + h}) - evaluate(expr, {"x": point - h})) / (2 * h)


def test_symbol_derivatives():
    assert diff(X, X) == 1.0
    assert diff(Y, X) == 0.0


def test_constant_and_string_derivatives_are_zero():
    assert diff(5.0, X) == 0.0
    assert diff("text", X) == 0.0


def test_symbol_equal_compares_common_prefix():
    assert symbol_equal(Symbol("x"), Symbol("xy")) is True
    assert symbol_equal(Symbol("ab"), Symbol("ac")) is False


def test_has_symbol():
    assert has_symbol(e(Op.SIN, e(Op.TIMES, X, Y)), Y) is True
    assert has_symbol(e(Op.PLUS, A, 2.0), X) is False
    assert has_symbol(2.0, X) is False
    assert has_symbol(X, X) is True


def test_has_symbol_does_not_search_ln():
    assert has_symbol(e(Op.LN, X), X) is False


def test_sin_structure():
    result = diff(e(Op.SIN, X), X)
    assert object_eq(result, e(Op.TIMES, 1.0, e(Op.COS, X)))


def test_unary_without_symbol_is_zero():
    assert diff(e(Op.SIN, Y), X) == 0.0
    assert diff(e(Op.TANH, A), X) == 0.0


def test_product_with_zero_factor_is_zero():
    assert diff(e(Op.TIMES, X, 0.0, Y), X) == 0.0


def test_empty_product_is_zero():
    assert diff(Expr(Op.TIMES, []), X) == 0.0


def test_unknown_operator_is_zero():
    assert diff(e(Op.LN, X), X) == 0.0


def test_plus_keeps_operator_and_arity():
    expr = e(Op.PLUS, X, Y, 3.0)
    result = diff(expr, X)
    assert result.op is Op.PLUS
    assert [float(a) for a in result.args] == [1.0, 0.0, 0.0]


def test_input_is_not_mutated():
    expr = e(Op.TIMES, X, e(Op.SIN, X))
    before = e(Op.TIMES, X, e(Op.SIN, X))
    diff(expr, X)
    assert object_eq(expr, before)


@pytest.mark.parametrize(
    "expr, point",
    [
        (e(Op.PLUS, e(Op.POW, X, 3.0), e(Op.TIMES, 2.0, X)), 0.7),
        (e(Op.MINUS, e(Op.SIN, X), X), 0.7),
        (e(Op.TIMES, X, e(Op.COS, e(Op.TIMES, 2.0, X))), 0.7),
        (e(Op.DIVIDE, e(Op.SIN, X), e(Op.PLUS, X, 1.0)), 0.7),
        (e(Op.SQRT, e(Op.PLUS, X, 1.0)), 0.7),
        (e(Op.POW, X, X), 1.3),
        (e(Op.SIN, e(Op.POW, X, 2.0)), 0.7),
        (e(Op.TAN, X), 0.4),
        (e(Op.CSC, X), 0.9),
        (e(Op.COT, X), 0.9),
        (e(Op.TANH, X), 0.5),
        (e(Op.SECH, X), 0.5),
        (e(Op.CSCH, X), 0.5),
        (e(Op.COTH, X), 0.5),
        (e(Op.SINH, X), 0.5),
        (e(Op.ATANH, X), 0.3),
    ],
)
def test_matches_finite_difference(expr, point):
    derivative = diff(expr, X)
    expected = numeric_derivative(expr, point)
    assert evaluate(derivative, {"x": point}) == pytest.approx(expected, rel=1e-5)


def test_second_derivative_via_diff_expression():
    cube = e(Op.POW, X, 3.0)
    second = diff(e(Op.DIFF, cube), X)
    first = diff(cube, X)
    point = 0.8
    h = 1e-5
    expected = (evaluate(first, {"x": point + h}) - evaluate(first, {"x": point - h})) / (2 * h)
    assert evaluate(second, {"x": point}) == pytest.approx(expected, rel=1e-5)


def test_constant_base_power_evaluates_to_zero():
    result = diff(e(Op.POW, 2.0, X), X)
    assert evaluate(result, {"x": 1.5}) == 0.0


def test_power_without_symbol_is_zero():
    assert diff(e(Op.POW, A, 2.0), X) == 0.0