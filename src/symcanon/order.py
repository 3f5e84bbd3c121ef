"""The canonical order of exprs.

compare(u, v) is True when u comes before v. Sums and Products keep their terms sorted
by it, and it has to be a strict total order on canonical exprs or sorting two
permutations of the same terms would give two different Sums.

Rough shape of the order:
- numbers come first, by value
- symbols by name
- sums and products compare their terms from the LAST one backwards, so x*y^2 sorts
  by y^2 before it looks at x
- x, x^2, 2*x all sort next to each other, because a lone expr compares as if it were
  a one-term product, or x^1.
"""

from functools import cmp_to_key
from typing import Optional, Sequence, Tuple

from .expr import (
    CanonicalFormError,
    Expr,
    Function,
    Integer,
    MixedNumber,
    Num,
    Power,
    Product,
    Sum,
    Symbol,
)
from .rational import is_exact, rational_denominator, rational_numerator


def base(u: Expr) -> Expr:
    return u.base if isinstance(u, Power) else u


def exponent(u: Expr) -> Expr:
    return u.exponent if isinstance(u, Power) else Integer(1)


def term(u: Expr) -> Tuple[Expr, ...]:
    """The non-numeric part of u, as a tuple of factors. term(3*x*y) == term(x*y) == (x, y)"""
    if isinstance(u, Product):
        if isinstance(u.terms[0], Num):
            return u.terms[1:]
        return u.terms
    return (u,)


def const(u: Expr) -> Num:
    """The numeric coefficient of u. const(3*x*y) == 3, const(x) == 1"""
    if isinstance(u, Product) and isinstance(u.terms[0], Num):
        return u.terms[0]
    return Integer(1)


def _compare_sequences(us: Sequence[Expr], vs: Sequence[Expr]) -> bool:
    for u, v in zip(us, vs):
        if u != v:
            return compare(u, v)
    return len(us) <= len(vs)


def _compare_numbers(u: Num, v: Num) -> bool:
    if isinstance(u, MixedNumber):
        u = u.to_fraction()
    if isinstance(v, MixedNumber):
        v = v.to_fraction()
    if is_exact(u) and is_exact(v):
        return rational_numerator(u) * rational_denominator(v) < rational_numerator(v) * rational_denominator(u)
    return float(u) < float(v)


def _compare(u: Expr, v: Expr) -> Optional[bool]:
    """The order rules that apply to (u, v) in this direction. None if there aren't any."""
    if isinstance(u, Num) and isinstance(v, Num):
        return _compare_numbers(u, v)

    if isinstance(u, Symbol) and isinstance(v, Symbol):
        return u.name < v.name

    if isinstance(u, Product) and isinstance(v, Product):
        return _compare_sequences(u.terms[::-1], v.terms[::-1])

    if isinstance(u, Sum) and isinstance(v, Sum):
        return _compare_sequences(u.terms[::-1], v.terms[::-1])

    if isinstance(u, Power) and isinstance(v, Power):
        if u.base == v.base:
            return compare(u.exponent, v.exponent)
        return compare(u.base, v.base)

    if isinstance(u, Function) and isinstance(v, Function):
        if u.name == v.name:
            return _compare_sequences(u.args, v.args)
        return u.name < v.name

    if isinstance(u, Num):
        return True

    # A lone v gets compared as the one-factor product (v), v^1, or the one-term sum (v).
    if isinstance(u, Product) and isinstance(v, (Power, Sum, Function, Symbol)):
        return _compare_sequences(u.terms[::-1], (v,))

    if isinstance(u, Power) and isinstance(v, (Sum, Function, Symbol)):
        if u.base == v:
            return compare(u.exponent, Integer(1))
        return compare(u.base, v)

    if isinstance(u, Sum) and isinstance(v, (Function, Symbol)):
        return _compare_sequences(u.terms[::-1], (v,))

    if isinstance(u, Function) and isinstance(v, Symbol):
        if u.name == v.name:
            return False
        return u.name < v.name

    return None


def compare(u: Expr, v: Expr) -> bool:
    """True if u comes strictly before v in canonical order."""
    result = _compare(u, v)
    if result is not None:
        return result

    result = _compare(v, u)
    if result is None:
        raise CanonicalFormError(
            f"No ordering rule for {type(u).__name__} and {type(v).__name__}: {u!r}, {v!r}"
        )
    return not result


def precedes(u: Expr, v: Expr) -> bool:
    return compare(u, v)


def _cmp(u: Expr, v: Expr) -> int:
    if u == v:
        return 0
    return -1 if compare(u, v) else 1


sort_key = cmp_to_key(_cmp)
