"""Exact arithmetic on Integers and Fractions.

Every function here returns a reduced rational (an Integer whenever the value is whole)
or Undefined. Nothing here ever sees a Float.
"""

import logging
import math
from functools import reduce
from typing import NamedTuple, Tuple, Union

from .expr import CanonicalFormError, Expr, Fraction, Integer, Undefined

logger = logging.getLogger(__name__)

Rational = Union[Integer, Fraction]


def is_exact(u) -> bool:
    return isinstance(u, (Integer, Fraction))


def make_rational(n: int, d: int) -> Expr:
    """n/d in lowest terms with a positive denominator."""
    if d == 0:
        logger.debug("%d/0 is undefined", n)
        return Undefined()
    if n % d == 0:
        return Integer(n // d)

    g = math.gcd(n, d)
    if d < 0:
        n, d = -n, -d
    return Fraction._reduced(n // g, d // g)


def rational_numerator(u: Rational) -> int:
    if isinstance(u, Integer):
        return u.value
    if isinstance(u, Fraction):
        return u.num.value
    raise CanonicalFormError(f"{u!r} is not an Integer or Fraction")


def rational_denominator(u: Rational) -> int:
    if isinstance(u, Integer):
        return 1
    if isinstance(u, Fraction):
        return u.den.value
    raise CanonicalFormError(f"{u!r} is not an Integer or Fraction")


def _parts(v: Rational, w: Rational) -> Tuple[int, int, int, int]:
    return rational_numerator(v), rational_denominator(v), rational_numerator(w), rational_denominator(w)


def evaluate_sum(v: Rational, w: Rational) -> Expr:
    nv, dv, nw, dw = _parts(v, w)
    return make_rational(nv * dw + nw * dv, dv * dw)


def evaluate_difference(v: Rational, w: Rational) -> Expr:
    nv, dv, nw, dw = _parts(v, w)
    return make_rational(nv * dw - nw * dv, dv * dw)


def evaluate_product(v: Rational, w: Rational) -> Expr:
    nv, dv, nw, dw = _parts(v, w)
    return make_rational(nv * nw, dv * dw)


def evaluate_quotient(v: Rational, w: Rational) -> Expr:
    nv, dv, nw, dw = _parts(v, w)
    if nw == 0:
        logger.debug("%r / %r is undefined", v, w)
        return Undefined()
    return make_rational(nv * dw, nw * dv)


def evaluate_power(v: Rational, n: int) -> Expr:
    """v^n for an integer n."""
    nv, dv = rational_numerator(v), rational_denominator(v)
    if nv == 0:
        if n >= 1:
            return Integer(0)
        logger.debug("0^%d is undefined", n)
        return Undefined()

    if n >= 0:
        return make_rational(nv**n, dv**n)
    return evaluate_power(make_rational(dv, nv), -n)


class RationalOp(NamedTuple):
    """An unevaluated operation on exact numbers, ex: RationalOp("sum", (1, Fraction(1, 2))).

    kind is one of "sum", "difference", "product", "quotient", "power". Operands may be
    Integers, Fractions, python ints or further RationalOps. "difference" with one operand
    is negation. The exponent of "power" must evaluate to an Integer.
    """

    kind: str
    operands: Tuple


_BINARY = {
    "sum": evaluate_sum,
    "difference": evaluate_difference,
    "product": evaluate_product,
    "quotient": evaluate_quotient,
}


def evaluate(tree) -> Expr:
    """Evaluate a tree of RationalOps to a single reduced rational or Undefined.

    Operands are evaluated left to right and the first Undefined is returned immediately.
    """
    if isinstance(tree, int) and not isinstance(tree, bool):
        return Integer(tree)
    if is_exact(tree):
        return tree
    if not isinstance(tree, RationalOp):
        raise CanonicalFormError(f"Cannot evaluate {tree!r} as an exact rational")

    values = []
    for operand in tree.operands:
        value = evaluate(operand)
        if isinstance(value, Undefined):
            return value
        values.append(value)

    if tree.kind == "power":
        if len(values) != 2 or not isinstance(values[1], Integer):
            raise CanonicalFormError(f"power needs a base and an Integer exponent, got {values}")
        return evaluate_power(values[0], values[1].value)

    if tree.kind not in _BINARY or len(values) == 0:
        raise CanonicalFormError(f"Cannot evaluate {tree.kind!r} of {values}")

    if len(values) == 1:
        if tree.kind == "difference":
            return evaluate_product(Integer(-1), values[0])
        if tree.kind in ("sum", "product"):
            return values[0]
        raise CanonicalFormError(f"{tree.kind} needs two operands, got {values}")

    if len(values) > 2 and tree.kind not in ("sum", "product"):
        raise CanonicalFormError(f"{tree.kind} needs two operands, got {values}")

    op = _BINARY[tree.kind]

    def step(acc: Expr, value: Expr) -> Expr:
        return acc if isinstance(acc, Undefined) else op(acc, value)

    return reduce(step, values[1:], values[0])
