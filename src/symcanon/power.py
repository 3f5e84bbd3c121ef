"""Canonical form of base^exponent."""

import logging
import math

from .expr import Expr, Float, Integer, MixedNumber, Num, Power, Product, Undefined
from .rational import RationalOp, evaluate, is_exact

logger = logging.getLogger(__name__)


def _float_power(v: Num, w: Num) -> Expr:
    try:
        return Float(math.pow(float(v), float(w)))
    except (ValueError, OverflowError):
        # negative base with a non-integer exponent, 0.0^-1, or too big for a float
        logger.debug("%r^%r has no real float value", v, w)
        return Undefined()


def simplify_power(v: Expr, w: Expr) -> Expr:
    """The canonical form of v^w. v and w must already be canonical.

    - 0^w is 0 for w > 0 and Undefined for w <= 0. 0^x stays as it is.
    - 1^w == 1, v^0 == 1, v^1 == v
    - exact numbers to integer powers are evaluated, floats to any numeric power too
    - (b^e)^n == b^(e*n) and (a*b)^n == a^n * b^n, for an integer n only
    """
    if isinstance(v, MixedNumber):
        v = v.to_fraction()
    if isinstance(w, MixedNumber):
        w = w.to_fraction()

    if isinstance(v, Undefined) or isinstance(w, Undefined):
        return Undefined()

    if v == 0:
        if isinstance(w, Num):
            if float(w) > 0:
                return Integer(0)
            logger.debug("0^%r is undefined", w)
            return Undefined()
        return Power(v, w, skip_checks=True)

    if v == 1:
        return Integer(1)
    if w == 0:
        return Integer(1)
    if w == 1:
        return v

    if is_exact(v) and isinstance(w, Integer):
        return evaluate(RationalOp("power", (v, w)))

    if isinstance(v, Num) and isinstance(w, Num) and (isinstance(v, Float) or isinstance(w, Float)):
        return _float_power(v, w)

    if isinstance(v, Power) and isinstance(w, Integer):
        return Power(v.base, Product([v.exponent, w]))

    if isinstance(v, Product) and isinstance(w, Integer):
        return v.map(lambda factor: Power(factor, w))

    return Power(v, w, skip_checks=True)
