"""Putting Sums and Products in canonical form.

A canonical Sum (Product) has at least two terms, none of them a Sum (Product), sorted
by order.compare, with at most one number, which goes first, and no two terms that
could be collected: no 2*x next to 3*x in a Sum, no x^2 next to x^3 in a Product.

Both are built the same way. A "pair" function canonicalizes a list of two terms and
returns 0, 1 or 2 terms (two terms come back in order). Longer lists are folded from the
right, merging each term's elements into the already-canonical rest like the merge step
of merge sort, with the pair function deciding what happens when two heads meet.
"""

import logging
from typing import Callable, List, Sequence, Type

from .expr import (
    Associative,
    CanonicalFormError,
    Expr,
    Float,
    Function,
    Integer,
    MixedNumber,
    Num,
    Power,
    Product,
    Sum,
    Undefined,
    _cast,
)
from .order import base, compare, const, exponent, term
from .rational import RationalOp, evaluate, is_exact

logger = logging.getLogger(__name__)

Pair = Callable[[Expr, Expr], List[Expr]]


def _is_zero(u: Expr) -> bool:
    return isinstance(u, Integer) and u.value == 0


def _is_one(u: Expr) -> bool:
    return isinstance(u, Integer) and u.value == 1


def _elements(u: Expr, kind: Type[Associative]) -> List[Expr]:
    return list(u.terms) if isinstance(u, kind) else [u]


def _in_order(u: Expr, v: Expr, pair: Pair) -> bool:
    res = pair(u, v)
    return len(res) == 2 and res[0] is u and res[1] is v


def _fits_between(r: Expr, merged: List[Expr], nexts: List[Expr], pair: Pair) -> bool:
    """True if r can be emitted right after merged without colliding with or passing anything."""
    if merged and not _in_order(merged[-1], r, pair):
        return False
    return all(_in_order(r, n, pair) for n in nexts)


def _merge(ps: Sequence[Expr], qs: Sequence[Expr], pair: Pair, kind: Type[Associative]) -> List[Expr]:
    """Merge two canonical term lists into one."""
    merged = []
    i = j = 0
    while i < len(ps) and j < len(qs):
        p, q = ps[i], qs[j]
        res = pair(p, q)

        if len(res) == 0:
            i += 1
            j += 1
        elif len(res) == 1:
            r = res[0]
            i += 1
            j += 1
            nexts = [s[k] for s, k in ((ps, i), (qs, j)) if k < len(s)]
            if isinstance(r, kind) or not _fits_between(r, merged, nexts, pair):
                # ex: 2*(x + y) - (x + y) leaves x + y, whose terms belong in this sum, and
                # sqrt(2)*sqrt(2) leaves a 2 that belongs with the other numbers.
                logger.debug("Re-canonicalizing %r inside %s", r, kind.__name__)
                rest = _merge(ps[i:], qs[j:], pair, kind)
                return _merge(merged, _merge(_elements(r, kind), rest, pair, kind), pair, kind)
            merged.append(r)
        elif len(res) == 2 and res[0] is p and res[1] is q:
            merged.append(p)
            i += 1
        elif len(res) == 2 and res[0] is q and res[1] is p:
            merged.append(q)
            j += 1
        else:
            raise CanonicalFormError(f"Merging {p!r} and {q!r} in a {kind.__name__} gave {res!r}")

    merged.extend(ps[i:])
    merged.extend(qs[j:])
    return merged


def _fold(elts: List[Expr], pair: Pair, kind: Type[Associative]) -> List[Expr]:
    acc = pair(elts[-2], elts[-1])
    if len(acc) == 1 and isinstance(acc[0], kind):
        acc = list(acc[0].terms)
    for e in reversed(elts[:-2]):
        acc = _merge(_elements(e, kind), acc, pair, kind)
    return acc


def _ordered(p: Expr, q: Expr) -> List[Expr]:
    return [q, p] if compare(q, p) else [p, q]


def _operands(exprs: Sequence[Expr]) -> List[Expr]:
    """MixedNumbers take part in arithmetic as plain Fractions."""
    return [e.to_fraction() if isinstance(e, MixedNumber) else e for e in exprs]


def _sum_pair(p: Expr, q: Expr) -> List[Expr]:
    if isinstance(p, Sum) or isinstance(q, Sum):
        return _merge(_elements(p, Sum), _elements(q, Sum), _sum_pair, Sum)

    if isinstance(p, Num) and isinstance(q, Num) and (isinstance(p, Float) or isinstance(q, Float)):
        total = Float(float(p) + float(q))
        return [] if total == Float(0.0) else [total]

    if is_exact(p) and is_exact(q):
        total = evaluate(RationalOp("sum", (p, q)))
        return [] if _is_zero(total) else [total]

    if _is_zero(p):
        return [q]
    if _is_zero(q):
        return [p]

    if term(p) == term(q):
        coefficient = simplify_sum([const(p), const(q)])
        collected = simplify_product([coefficient, *term(p)])
        return [] if _is_zero(collected) else [collected]

    return _ordered(p, q)


def _product_pair(p: Expr, q: Expr) -> List[Expr]:
    if isinstance(p, Product) or isinstance(q, Product):
        return _merge(_elements(p, Product), _elements(q, Product), _product_pair, Product)

    if isinstance(p, Num) and isinstance(q, Num) and (isinstance(p, Float) or isinstance(q, Float)):
        product = Float(float(p) * float(q))
        return [] if product == Float(1.0) else [product]

    if is_exact(p) and is_exact(q):
        product = evaluate(RationalOp("product", (p, q)))
        return [] if _is_one(product) else [product]

    if _is_one(p):
        return [q]
    if _is_one(q):
        return [p]

    # 2 * 2^y stays as it is: numbers only combine with numbers.
    if not isinstance(p, Num) and not isinstance(q, Num) and base(p) == base(q):
        combined = Power(base(p), simplify_sum([exponent(p), exponent(q)]))
        return [] if _is_one(combined) else [combined]

    return _ordered(p, q)


def _collapse(res: List[Expr], kind: Type[Associative], identity: Expr) -> Expr:
    if len(res) == 0:
        return identity
    if len(res) == 1:
        return res[0]
    return kind(res, skip_checks=True)


def simplify_sum(terms: Sequence[Expr]) -> Expr:
    """The canonical form of the sum of terms. Each term must already be canonical."""
    terms = _operands(terms)
    if any(isinstance(t, Undefined) for t in terms):
        return Undefined()
    if len(terms) == 0:
        return Integer(0)
    if len(terms) == 1:
        return terms[0]

    return _collapse(_fold(terms, _sum_pair, Sum), Sum, Integer(0))


def simplify_product(factors: Sequence[Expr]) -> Expr:
    """The canonical form of the product of factors. Each factor must already be canonical."""
    factors = _operands(factors)
    if any(isinstance(f, Undefined) for f in factors):
        return Undefined()
    if len(factors) == 0:
        return Integer(1)
    if len(factors) == 1:
        return factors[0]
    if any(_is_zero(f) for f in factors):
        return Integer(0)

    return _collapse(_fold(factors, _product_pair, Product), Product, Integer(1))


def simplify(expr) -> Expr:
    """Re-canonicalize expr from the leaves up.

    Every expr built through the constructors is canonical already, so this only changes
    things built with skip_checks=True.
    """
    expr = _cast(expr)
    if isinstance(expr, Sum):
        return simplify_sum([simplify(t) for t in expr.terms])
    if isinstance(expr, Product):
        return simplify_product([simplify(t) for t in expr.terms])
    if isinstance(expr, Power):
        return Power(simplify(expr.base), simplify(expr.exponent))
    if isinstance(expr, Function):
        return expr.map(simplify)
    return expr
