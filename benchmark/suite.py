from fractions import Fraction

import symcanon as sc

x, y, z = sc.symbols("x y z")


def f(*args):
    return sc.Function("f", args)


def build_suite():
    """Every expr is rebuilt from scratch on each call, so timing this times the canonicalizer."""
    return [
        -5 * x**4 / (1 - x**2) ** Fraction(5, 2),
        x**2 / sc.sqrt(1 - x**3),
        (Fraction(1, 15) - Fraction(1, 360) * (x - 6)) * (1 - (40 - x) ** 2 / 875),
        sc.Sum([i * x**i for i in range(1, 60)] + [i * x**i for i in range(59, 0, -1)]),
        sc.Product([x ** Fraction(1, i) for i in range(1, 40)]),
        sc.Product([(x + i) ** 2 for i in range(30)]) * sc.Product([(x + i) ** -1 for i in range(30, 0, -1)]),
        sc.Sum([f(x, i) * y**i for i in range(40)]) - sc.Sum([f(x, i) * y**i for i in range(0, 40, 2)]),
        (2 * x * y * z) ** 10 / (x * y) ** 5,
        sc.Sum([sc.Fraction(1, i) for i in range(1, 200)]),
        abs(-3 * x * y) * abs(3 * x * y) ** -1,
        sc.Float(0.5) * x + sc.Float(0.25) * x + x,
    ]
