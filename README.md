# smsymbolic

A small library for symbolic math expressions. You build trees from Python
numbers, `Symbol`s and `Expr` nodes. You can then:

- differentiate them with `smsymbolic.diff.diff`,
- reduce them with `smsymbolic.simplify.simplify`,
- compare and print them with `object_eq` and `to_string`.

The package also has substring helpers and a lookup that finds files in the
working directory or along the `SMS_PATH` search path.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Expressions (`smsymbolic.expr`)

- `Op` lists the operators. Each member's value is its printed spelling:
  `+`, `-`, `*`, `/`, `^`, `sqrt`, `ln`, the trigonometric and hyperbolic
  functions and their inverses, `diff` and `tuple`.
- `Symbol(name)` is a named variable. It is frozen and hashable.
- `Expr(op, args)` applies an operator to a list of arguments.
  - `Expr.append(obj)` adds an argument at the end.
  - An `Expr` supports `len`, iteration and indexing.
  - `==` on two `Expr`s compares their structure.
- `ObjectType` numbers the object kinds. `object_type(obj)` classifies a
  value:
  - `int` and `float` give `F64`,
  - `str` gives `STRING`,
  - `Symbol` and `bool` give `SYMBOL`,
  - `Expr` gives `EXPR`,
  - anything else gives `UNKNOWN`.
- `is_infix(op)` is true for `+`, `-`, `*`, `/` and `^`.
- `object_eq(a, b)` compares two trees structurally. Numbers are compared
  as floats, so `1` equals `1.0`.
- `to_string(obj)` renders a tree:
  - Infix operators are written between their operands. An infix operand
    with two or more arguments is put in parentheses.
  - Tuples are written as `[a, b]`.
  - Other operators are written as `name(args)`.
  - Strings are quoted, and integral numbers print without a decimal point.

```python
from smsymbolic.expr import Expr, Op, Symbol, to_string

x = Symbol("x")
e = Expr(Op.PLUS, [Expr(Op.TIMES, [2.0, x]), 1.0])
to_string(e)   # '(2 * x) + 1'
```

## Differentiation (`smsymbolic.diff`)

`diff(obj, wrt)` returns the derivative of `obj` with respect to the symbol
`wrt`. It handles:

- sums and differences, term by term;
- products, with the product rule;
- quotients, with the quotient rule;
- powers;
- `sqrt`, treated as a power of 0.5;
- the trigonometric, hyperbolic and inverse trigonometric and hyperbolic
  functions, using the chain rule;
- `diff` nodes, which are differentiated twice.

A symbol gives `1.0` when it matches `wrt` and `0.0` otherwise. A number, or
an expression with no rule, gives `0.0`. The result is not simplified, so
pass it to `simplify` for a tidier form.

Two helpers are also available:

- `has_symbol(obj, sym)` tells whether a tree mentions `sym`.
- `symbol_equal(s1, s2)` compares two symbol names over the length of the
  shorter one.

## Simplification (`smsymbolic.simplify`)

`simplify(obj)` applies a fixed sequence of rewrite passes until the tree
stops changing. The passes:

- fold numeric sums, differences, products and powers;
- drop 0 from sums, 1 from products, 1 from divisors and 0 from subtrahends;
- replace products containing 0 with 0, and `0 / a` with 0;
- rewrite `0 - a` as `-1 * a`;
- turn `a ^ 1` into `a` and `a ^ 0` into 1;
- reduce quotients of 32-bit integers to lowest terms;
- merge nested powers into `a ^ (b * c)`;
- turn `a - a` into 0 and `a / a` into 1;
- gather the numbers of a sum or product into a single constant.

Other helpers:

- `expr_has_num(expr, n)` tells whether `n` is a direct argument of `expr`.
- `expr_rm_num(expr, n)` returns a copy of `expr` without those arguments.

## Strings (`smsymbolic.strings`)

- `str_find(haystack, needle)` returns the index of the first match, or
  `None`.
- `str_findr(haystack, needle)` returns the index of the last match, or
  `None`.
- `str_split(haystack, needle)` returns a list of the pieces of
  `haystack`, with each match of `needle` kept as its own element. An empty
  `haystack` or `needle` gives `[haystack]`.

```
str_split("abc123abc123", "c")  ->  ["ab", "c", "123ab", "c", "123"]
```

## Finding source files (`smsymbolic.find_source`)

`path_find(name)` looks for `name` in the current directory first. If it is
not there, it tries each directory listed in the `SMS_PATH` environment
variable, in order. It returns the first path that exists, or `None`.

In `SMS_PATH`, entries are separated by colons, a literal colon is written
as `\:`, and empty entries are skipped. `split_search_path(value)` performs
this split.

## What this package does not do

There is no parser for a written expression language, no evaluator and no
command-line program. Expressions are built in Python from `Expr`,
`Symbol` and numbers, and the results are Python values.