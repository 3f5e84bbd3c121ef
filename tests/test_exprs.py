import itertools

import pytest

from symcanon.debug.test_utils import *
from symcanon.expr import *
from symcanon.canonical import simplify, simplify_product, simplify_sum

a, b = symbols("a b")


def test_equality():
    assert x == x
    assert x == Symbol("x")  # seperately created symbols with the same name should be the same
    assert not x == y
    assert x != y
    assert not x == 2 * x
    assert (x + 2) == (x + 2)  # seperately created sums should be the same
    assert (x + 2) == (2 + x)
    assert x + 2 == Symbol("x") + 2
    assert x * y == y * x


def test_symbols():
    assert symbols("x") == x
    assert symbols("x y z") == [x, y, z]
    with pytest.raises(ValueError):
        Symbol("")


def test_scenarios():
    assert_eq_strict(Sum([x, x]), Product([Integer(2), x], skip_checks=True))
    assert_eq_strict(Product([Fraction(1, 3), 3]), Integer(1))
    assert_eq_strict(Power(Power(x, 2), 3), Power(x, Integer(6), skip_checks=True))
    assert_eq_strict(Sum([Fraction(1, 2), Fraction(1, 3)]), Fraction(5, 6))
    assert_undefined(Quotient(1, 0))
    assert_eq_strict(Product([Sum([a, b]), 0]), Integer(0))


def test_identities():
    assert_eq_strict(Sum([]), Integer(0))
    assert_eq_strict(Product([]), Integer(1))
    assert_eq_strict(Sum([x]), x)
    assert_eq_strict(Product([x]), x)
    assert_eq_strict(x + 0, x)
    assert_eq_strict(0 + x, x)
    assert_eq_strict(x * 1, x)
    assert_eq_strict(1 * x, x)
    assert_eq_strict(x * 0, Integer(0))
    assert_eq_strict(x - x, Integer(0))
    assert_eq_strict(x / x, Integer(1))


def test_undefined_propagates():
    undefined = Quotient(1, 0)
    assert_undefined(x + undefined)
    assert_undefined(undefined * 0)
    assert_undefined(0 * undefined)
    assert_undefined(undefined**0)
    assert_undefined(x**undefined)
    assert_undefined(f(x, undefined))
    assert_undefined(abs(undefined))
    assert_undefined(x / 0)
    assert_undefined(x * (y + 1 / Integer(0)))


def test_collect_like_terms():
    assert_eq_strict(x + x + x, 3 * x)
    assert_eq_strict(2 * x + 3 * x, 5 * x)
    assert_eq_strict(2 * x * y + x * y, 3 * x * y)
    assert_eq_strict(x * y + y * x, 2 * x * y)
    assert_eq_strict(Fraction(1, 2) * x + Fraction(1, 3) * x, Fraction(5, 6) * x)
    assert_eq_strict(x + 1 + x + 2, 2 * x + 3)
    assert repr(2 * x + 3) == "Sum(3, Product(2, x))"


def test_collect_like_bases():
    assert_eq_strict(x * x, x**2)
    assert_eq_strict(x**2 * x**3, x**5)
    assert_eq_strict(x * x**-1, Integer(1))
    assert_eq_strict(sqrt(x) * sqrt(x), x)
    assert_eq_strict(x**y * x**z, x ** (y + z))
    assert_eq_strict(x**y * x ** (-y), Integer(1))


def test_flattening():
    nested = Sum([x, Sum([y, Sum([z, 1])])])
    assert_eq_strict(nested, Sum([1, x, y, z]))
    assert all(not isinstance(t, Sum) for t in nested.terms)

    nested = Product([x, Product([y, Product([z, 2])])])
    assert_eq_strict(nested, 2 * x * y * z)
    assert all(not isinstance(t, Product) for t in nested.terms)


def test_products_are_not_distributed():
    # only Products to integer powers get expanded; sums stay sums
    assert isinstance(2 * (x + y), Product)
    assert isinstance((x + y) ** 2, Power)


def test_collapsed_results_are_recanonicalized():
    s = x + y
    assert_eq_strict(2 * s - s, s)
    assert_eq_strict(z + 2 * s - s, x + y + z)
    assert_eq_strict(z + 2 * s + 1 - s, Sum([1, x, y, z]))
    assert_eq_strict(5 * sqrt(2) * sqrt(2), Integer(10))
    assert_eq_strict(5 * sqrt(2) * x * sqrt(2), 10 * x)
    assert_eq_strict(sqrt(x * y) * sqrt(x * y), x * y)
    assert_eq_strict(z * sqrt(x * y) * sqrt(x * y), x * y * z)


def test_numbers_come_first():
    assert (x + 3).terms[0] == 3
    assert (x * 3).terms[0] == 3
    assert (x * y * Fraction(1, 2)).terms[0] == Fraction(1, 2)


def test_commutative():
    pool = term_pool()
    for p, q in itertools.product(pool, repeat=2):
        assert_eq_strict(Sum([p, q]), Sum([q, p]))
        assert_eq_strict(Product([p, q]), Product([q, p]))


def test_permutation_stable():
    terms = [Integer(2), x, 2 * x, y, x * y, f(x)]
    expected_sum = Sum(terms)
    expected_product = Product(terms)
    for perm in itertools.permutations(terms):
        assert_eq_strict(Sum(list(perm)), expected_sum)
        assert_eq_strict(Product(list(perm)), expected_product)


def test_numbers_do_not_collect_with_powers_of_themselves():
    assert_eq_strict(2 * 2**y, Product([Integer(2), 2**y], skip_checks=True))
    assert_eq_strict(sqrt(2) * 2, Product([Integer(2), sqrt(2)], skip_checks=True))
    assert_eq_strict(sqrt(2) * sqrt(2), Integer(2))
    assert_eq_strict(sqrt(2) * sqrt(2) * sqrt(2), Product([Integer(2), sqrt(2)], skip_checks=True))

    expected = 6 * 2**y
    for perm in itertools.permutations([Integer(3), 2**y, Integer(2)]):
        assert_eq_strict(Product(list(perm)), expected)


@pytest.mark.parametrize("n", [2, 3])
def test_results_are_canonical(n):
    for combo in itertools.combinations_with_replacement(term_pool(), n):
        assert_canonical(Sum(list(combo)))
        assert_canonical(Product(list(combo)))


def test_pool_is_canonical():
    for expr in expr_pool():
        assert_canonical(expr)


def test_simplify_is_idempotent():
    for expr in expr_pool():
        assert_eq_strict(simplify(expr), expr)
        assert_eq_strict(simplify(simplify(expr)), expr)
        assert_eq_strict(expr.simplify(), expr)


def test_simplify_fixes_hand_built_exprs():
    raw = Sum([x, Sum([x, Integer(0)], skip_checks=True)], skip_checks=True)
    assert_eq_strict(simplify(raw), 2 * x)

    raw = Product([Power(x, Integer(1), skip_checks=True), Integer(2)], skip_checks=True)
    assert_eq_strict(simplify(raw), 2 * x)

    raw = Function("f", [Sum([y, y], skip_checks=True)], skip_checks=True)
    assert_eq_strict(simplify(raw), f(2 * y))


def test_simplify_sum_and_product_directly():
    assert_eq_strict(simplify_sum([x, y, x]), 2 * x + y)
    assert_eq_strict(simplify_product([x, y, x]), x**2 * y)
    assert_eq_strict(simplify_sum([]), Integer(0))
    assert_eq_strict(simplify_product([]), Integer(1))


def test_float_collection():
    assert_eq_strict(Float(0.5) * x + Float(0.25) * x, Float(0.75) * x)
    assert_eq_strict(Float(0.5) * x + x, Float(1.5) * x)
    assert_eq_strict(Float(2.0) * x * Float(0.5), x)


def test_difference_and_quotient():
    assert_eq_strict(Difference(x), Product([-1, x]))
    assert_eq_strict(Difference(x, y), x + Product([-1, y]))
    assert_eq_strict(-(-x), x)
    assert_eq_strict(Quotient(x, y), x * y**-1)
    assert_eq_strict(Quotient(6, 4), Fraction(3, 2))
    assert_eq_strict(1 - x, Sum([1, -x]))
    assert_eq_strict(2 / x, 2 * x**-1)


def test_difference_with_itself():
    for u in expr_pool():
        if not isinstance(u, Sum):
            assert_eq_strict(u - u, Integer(0))

    # a Sum is spliced before its negation can be collected with it
    s = x + y
    assert_eq_strict(s - s, Sum([x, y, Product([Integer(-1), s], skip_checks=True)], skip_checks=True))
    assert_eq_strict(-s + s, s - s)
    assert_canonical(s - s)
    assert_eq_strict(2 * s - 2 * s, Integer(0))


def test_numerator_denominator():
    assert numerator(Fraction(3, 4)) == 3
    assert denominator(Fraction(3, 4)) == 4
    assert denominator(Integer(3)) == 1
    assert numerator(x**-2) == 1
    assert denominator(x**-2) == x**2
    assert numerator(x) == x
    assert denominator(x) == 1

    expr = Fraction(3, 4) * x * y**-1
    assert_eq_strict(numerator(expr), 3 * x)
    assert_eq_strict(denominator(expr), 4 * y)
    assert_eq_strict(expr.numerator, 3 * x)


@pytest.mark.parametrize(
    "expr",
    [
        Fraction(3, 4),
        Integer(5),
        x / y,
        Fraction(-2, 3) * x**2 * y ** Fraction(-1, 2),
        (x + 1) / (x * y),
        MixedNumber(2, 1, 3),
        Fraction(1, 2) * y / sqrt(2),
    ],
)
def test_numerator_over_denominator_round_trip(expr):
    expected = expr.to_fraction() if isinstance(expr, MixedNumber) else expr
    assert_eq_strict(Quotient(numerator(expr), denominator(expr)), expected)


def test_map():
    assert_eq_strict((x * y).map(lambda t: t**2), x**2 * y**2)
    assert_eq_strict((x + y).map(lambda t: t * 0), Integer(0))
    assert_eq_strict(f(x, y).map(lambda t: t + 1), f(x + 1, y + 1))
