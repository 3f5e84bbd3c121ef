"""RULES OF EXPRs:

1. Exprs shall NOT be mutated in place after construction.
Subexpressions get shared between lots of parents, so a Sum you got back yesterday has to
be the same Sum today. Sum and Product hold their children in tuples.

2. There is no such thing as an unsimplified Expr outside this package. Sum(...), Product(...),
Power(...) and Function(...) canonicalize in __new__ and can hand back a different class
entirely, ex: Sum([x, -1 * x]) is Integer(0). The only way around it is skip_checks=True,
which the canonicalizer uses to build results it has already put in canonical form.

3. Note on equality: (expr1 == expr2) compares STRUCTURE, not value. Because everything is
canonical, structure is the same thing as value for the algebra this package does, but
Integer(2) == Float(2.0) is False: an exact and an inexact number are different exprs.
Floats compare with the tolerance from symcanon.config.

Division by zero doesn't raise. It gives Undefined, which eats any Sum/Product/Power/Function
it ends up inside.
"""

import fractions
import math
import numbers
import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from .config import get_tolerance, settings


class CanonicalFormError(AssertionError):
    """An expression shape reached a rule set with no case for it.

    This is a bug in the canonicalizer (or a hand-built skip_checks expr), never a property
    of the input.
    """


def _cast(x):
    """Cast x to an Expr if possible."""
    if x is None or isinstance(x, Expr):
        return x

    # bool is an Integral but True + x meaning 1 + x is never what anyone wants.
    if isinstance(x, bool):
        raise NotImplementedError(f"Cannot cast {x} to Expr")
    if isinstance(x, numbers.Integral):
        return Integer(int(x))
    if isinstance(x, fractions.Fraction):
        return Fraction(x.numerator, x.denominator)
    if isinstance(x, numbers.Real):
        return Float(float(x))

    if isinstance(x, tuple):
        return tuple(_cast(v) for v in x)
    if isinstance(x, list):
        return [_cast(v) for v in x]

    raise NotImplementedError(f"Cannot cast {x!r} to Expr")


def cast(func):
    """Decorator to cast all arguments to Expr."""

    def wrapper(*args, **kwargs) -> "Expr":
        return func(*map(_cast, args), **{k: _cast(v) for k, v in kwargs.items()})

    return wrapper


def _coerce(other):
    """Like _cast, but leaves things that aren't numbers alone so == can just say False."""
    if isinstance(other, numbers.Real) and not isinstance(other, bool):
        return _cast(other)
    return other


class Expr(ABC):
    """Base class for all expressions."""

    def simplify(self) -> "Expr":
        from .canonical import simplify

        return simplify(self)

    @cast
    def __add__(self, other) -> "Expr":
        return Sum([self, other])

    @cast
    def __radd__(self, other) -> "Expr":
        return Sum([other, self])

    @cast
    def __sub__(self, other) -> "Expr":
        return Difference(self, other)

    @cast
    def __rsub__(self, other) -> "Expr":
        return Difference(other, self)

    @cast
    def __mul__(self, other) -> "Expr":
        return Product([self, other])

    @cast
    def __rmul__(self, other) -> "Expr":
        return Product([other, self])

    @cast
    def __truediv__(self, other) -> "Expr":
        return Quotient(self, other)

    @cast
    def __rtruediv__(self, other) -> "Expr":
        return Quotient(other, self)

    @cast
    def __pow__(self, other) -> "Expr":
        return Power(self, other)

    @cast
    def __rpow__(self, other) -> "Expr":
        return Power(other, self)

    def __neg__(self) -> "Expr":
        return Difference(self)

    def __abs__(self) -> "Expr":
        return Abs(self)

    @abstractmethod
    def children(self) -> List["Expr"]:
        raise NotImplementedError(f"Cannot get children of {self.__class__.__name__}")

    @abstractmethod
    def __repr__(self) -> str:
        raise NotImplementedError(f"Cannot represent {self.__class__.__name__}")

    @property
    def numerator(self) -> "Expr":
        """The part of the expr that sits above the fraction bar. numerator / denominator == self."""
        return self

    @property
    def denominator(self) -> "Expr":
        return Integer(1)

    def equals(self, other, tolerance: Optional[float] = None) -> bool:
        return equals(self, other, tolerance=tolerance)

    def precedes(self, other: "Expr") -> bool:
        """True if self comes before other in canonical order."""
        from .order import compare

        return compare(self, _cast(other))


def _exact_to_float(n: int, d: int = 1) -> float:
    """n/d as a float, or +-inf when it is too big for one."""
    try:
        return n / d
    except OverflowError:
        return math.copysign(math.inf, n)


class Undefined(Expr):
    """The result of dividing by zero, 0^0 and friends. There's only ever one of these."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def children(self) -> List[Expr]:
        return []

    def __eq__(self, other) -> bool:
        return isinstance(other, Undefined)

    def __hash__(self) -> int:
        return hash("Undefined")

    def __repr__(self) -> str:
        return "Undefined"


class Num(Expr):
    """Base class -- all numbers.

    all subclasses must implement __float__
    """

    def children(self) -> List[Expr]:
        return []

    @abstractmethod
    def __float__(self) -> float:
        pass

    def to_float(self) -> "Float":
        return Float(float(self))

    @property
    def is_negative(self) -> bool:
        return float(self) < 0


class Integer(Num):
    """An arbitrary precision integer."""

    value: int

    def __init__(self, value: int):
        self.value = operator.index(value)

    def __eq__(self, other) -> bool:
        other = _coerce(other)
        return isinstance(other, Integer) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __float__(self) -> float:
        return _exact_to_float(self.value)

    def __index__(self) -> int:
        return self.value

    @property
    def is_negative(self) -> bool:
        return self.value < 0

    def __repr__(self) -> str:
        return str(self.value)


class Fraction(Num):
    """A rational number that isn't an integer, always in lowest terms with den > 0.

    Fraction(n, d) is really a factory: Fraction(4, 2) gives Integer(2), Fraction(1, 0)
    gives Undefined.
    """

    num: Integer
    den: Integer

    def __new__(cls, numerator, denominator=1) -> Expr:
        from .rational import make_rational

        return make_rational(operator.index(numerator), operator.index(denominator))

    def __init__(self, numerator, denominator=1):
        # num and den are set by _reduced. This runs again (with the unreduced args) whenever
        # __new__ hands back a Fraction, so it mustn't touch anything.
        pass

    @classmethod
    def _reduced(cls, n: int, d: int) -> "Fraction":
        """Only for n/d already in lowest terms with d > 1."""
        instance = object.__new__(cls)
        instance.num = Integer(n)
        instance.den = Integer(d)
        return instance

    def __eq__(self, other) -> bool:
        other = _coerce(other)
        return isinstance(other, Fraction) and self.num == other.num and self.den == other.den

    def __hash__(self) -> int:
        return hash((self.num.value, self.den.value))

    def __float__(self) -> float:
        return _exact_to_float(self.num.value, self.den.value)

    @property
    def is_negative(self) -> bool:
        return self.num.value < 0

    @property
    def numerator(self) -> Integer:
        return self.num

    @property
    def denominator(self) -> Integer:
        return self.den

    def as_mixed(self) -> "MixedNumber":
        """7/2 -> 3 + 1/2. -7/2 -> -3 + -1/2 (quotient and remainder share the fraction's sign)."""
        n, d = self.num.value, self.den.value
        quotient = abs(n) // d if n >= 0 else -(abs(n) // d)
        return MixedNumber(quotient, n - quotient * d, d)

    def __repr__(self) -> str:
        return f"{self.num.value}/{self.den.value}"


class MixedNumber(Num):
    """quotient + numerator/denominator. Only exists so printers can show 3 1/2.

    Arithmetic never produces one; feed one into a Sum/Product/Power and it goes in as
    its Fraction.
    """

    def __init__(self, quotient, numerator, denominator):
        self.quotient = Integer(quotient)
        self.num = Integer(numerator)
        self.den = Integer(denominator)
        if self.den.value <= 0:
            raise ValueError(f"MixedNumber denominator must be positive, got {self.den}")

    def to_fraction(self) -> Num:
        return Fraction(self.quotient.value * self.den.value + self.num.value, self.den.value)

    def __float__(self) -> float:
        return float(self.to_fraction())

    @property
    def numerator(self) -> Expr:
        return self.to_fraction().numerator

    @property
    def denominator(self) -> Expr:
        return self.to_fraction().denominator

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, MixedNumber)
            and self.quotient == other.quotient
            and self.num == other.num
            and self.den == other.den
        )

    def __hash__(self) -> int:
        return hash((self.quotient.value, self.num.value, self.den.value))

    def __repr__(self) -> str:
        return f"MixedNumber({self.quotient}, {self.num}, {self.den})"


def _floats_equal(a: float, b: float) -> bool:
    tolerance = get_tolerance()
    if a == b:
        return True
    return tolerance is not None and abs(a - b) < tolerance


class Float(Num):
    """A decimal number. Anything it touches becomes a Float too."""

    value: float

    def __init__(self, value: float):
        self.value = float(value)

    def __eq__(self, other) -> bool:
        other = _coerce(other)
        return isinstance(other, Float) and _floats_equal(self.value, other.value)

    def __hash__(self) -> int:
        # Equal-within-tolerance Floats can hash differently. Don't put Floats in a set
        # and then change the tolerance.
        return hash(self.value)

    def __float__(self) -> float:
        return self.value

    def __repr__(self) -> str:
        return repr(self.value)


def Const(value) -> Num:
    """Wrapper to create a Num object from a python number."""
    const = _cast(value)
    if not isinstance(const, Num):
        raise NotImplementedError(f"{value!r} is not a number")
    return const


@dataclass
class Symbol(Expr):
    """A symbol. A variable."""

    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or len(self.name) == 0:
            raise ValueError(f"Symbol name must be a non-empty string, got {self.name!r}")

    def children(self) -> List[Expr]:
        return []

    def __eq__(self, other) -> bool:
        return isinstance(other, Symbol) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return self.name


Evaluator = Callable[..., Optional[Expr]]


class Function(Expr):
    """A named function applied to some arguments, ex: f(x, y).

    evaluator gets the (already canonical) arguments and either returns the simplified
    value or None if f(args) can't be simplified.
    """

    name: str
    args: Tuple[Expr, ...]
    evaluator: Optional[Evaluator]

    def __new__(cls, name: str, args: Iterable, evaluator: Optional[Evaluator] = None, *, skip_checks=False):
        args = tuple(_cast(list(args)))
        if not skip_checks and any(isinstance(a, Undefined) for a in args):
            return Undefined()

        instance = super().__new__(cls)
        instance.name = name
        instance.args = args
        instance.evaluator = evaluator
        if skip_checks or evaluator is None:
            return instance

        value = evaluator(*args)
        return instance if value is None else value

    def __init__(self, *args, **kwargs):
        # Everything happens in __new__. __init__ is also called on whatever Function the
        # evaluator returned, with our args, so it has to stay empty.
        pass

    def _rebuild(self, args: Iterable) -> Expr:
        return Function(self.name, args, self.evaluator)

    def map(self, fn: Callable[[Expr], Expr]) -> Expr:
        return self._rebuild([fn(a) for a in self.args])

    def children(self) -> List[Expr]:
        return list(self.args)

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.name == other.name and self.args == other.args

    def __hash__(self) -> int:
        return hash((self.name, self.args))

    def __repr__(self) -> str:
        return f"{self.name}({', '.join(map(repr, self.args))})"


def _abs_evaluator(inner: Expr) -> Optional[Expr]:
    if isinstance(inner, Float):
        return Float(abs(inner.value))
    if isinstance(inner, MixedNumber):
        inner = inner.to_fraction()
    if isinstance(inner, Num):
        return Product([Integer(-1), inner]) if inner.is_negative else inner
    if isinstance(inner, Abs):
        return inner
    if isinstance(inner, Product) and isinstance(inner.terms[0], Num) and inner.terms[0].is_negative:
        return Abs(Product([Integer(-1), inner]))
    return None


class Abs(Function):
    """|x|."""

    def __new__(cls, inner) -> Expr:
        return super().__new__(cls, "abs", [inner], _abs_evaluator)

    def _rebuild(self, args: Iterable) -> Expr:
        return Abs(*args)


@dataclass
class Associative:
    """Shared bits of Sum and Product. The children's __new__ must handle sorting & flattening."""

    terms: Tuple[Expr, ...]

    def children(self) -> List[Expr]:
        return list(self.terms)

    def map(self, fn: Callable[[Expr], Expr]) -> Expr:
        """Apply fn to every term and re-canonicalize, ex: (x*y).map(lambda t: t**2) -> x^2*y^2"""
        return self.__class__([fn(t) for t in self.terms])

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.terms == other.terms

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.terms))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(map(repr, self.terms))})"


class Sum(Associative, Expr):
    """A sum expression."""

    def __new__(cls, terms: Iterable, *, skip_checks: bool = False) -> Expr:
        """When a sum is initiated:
        - terms are converted to expr
        - nested sums are spliced in
        - like terms & constants are merged
        - terms are sorted
        """
        if skip_checks:
            return super().__new__(cls)

        from .canonical import simplify_sum

        return simplify_sum(_cast(list(terms)))

    def __init__(self, terms: Iterable, *, skip_checks: bool = False):
        # Without skip_checks, terms are already set by simplify_sum.
        if skip_checks:
            self.terms = tuple(terms)


class Product(Associative, Expr):
    """A product expression."""

    def __new__(cls, terms: Iterable, *, skip_checks: bool = False) -> Expr:
        if skip_checks:
            return super().__new__(cls)

        from .canonical import simplify_product

        return simplify_product(_cast(list(terms)))

    def __init__(self, terms: Iterable, *, skip_checks: bool = False):
        if skip_checks:
            self.terms = tuple(terms)

    @property
    def numerator(self) -> Expr:
        return Product([t.numerator for t in self.terms])

    @property
    def denominator(self) -> Expr:
        return Product([t.denominator for t in self.terms])


@dataclass
class Power(Expr):
    base: Expr
    exponent: Expr

    def __new__(cls, base, exponent, *, skip_checks: bool = False) -> Expr:
        if skip_checks:
            return super().__new__(cls)

        from .power import simplify_power

        return simplify_power(_cast(base), _cast(exponent))

    def __init__(self, base, exponent, *, skip_checks: bool = False):
        if skip_checks:
            self.base = base
            self.exponent = exponent

    def children(self) -> List[Expr]:
        return [self.base, self.exponent]

    @property
    def _has_negative_exponent(self) -> bool:
        return isinstance(self.exponent, (Integer, Fraction)) and self.exponent.is_negative

    @property
    def numerator(self) -> Expr:
        return Integer(1) if self._has_negative_exponent else self

    @property
    def denominator(self) -> Expr:
        return Power(self, -1) if self._has_negative_exponent else Integer(1)

    def __eq__(self, other) -> bool:
        return isinstance(other, Power) and self.base == other.base and self.exponent == other.exponent

    def __hash__(self) -> int:
        return hash((self.base, self.exponent))

    def __repr__(self) -> str:
        return f"Power({self.base!r}, {self.exponent!r})"


@cast
def Difference(u: Expr, v: Optional[Expr] = None) -> Expr:
    """Difference(u) is -u, Difference(u, v) is u - v.

    -1 is never distributed over a Sum, and a Sum's terms are spliced into the result
    before anything is collected, so (x + y) - (x + y) stays x + y - (x + y). Differences
    of anything else that cancels, including 2*(x + y) - 2*(x + y), are 0.
    """
    if v is None:
        return Product([Integer(-1), u])
    return Sum([u, Product([Integer(-1), v])])


@cast
def Quotient(u: Expr, v: Expr) -> Expr:
    return Product([u, Power(v, Integer(-1))])


@cast
def sqrt(x: Expr) -> Expr:
    return Power(x, Fraction(1, 2))


def symbols(symbols: str):
    """Creates symbols from a string of symbol names seperated by spaces."""
    symbols = [Symbol(name=s) for s in symbols.split()]
    return symbols if len(symbols) > 1 else symbols[0]


def numerator(expr) -> Expr:
    return _cast(expr).numerator


def denominator(expr) -> Expr:
    return _cast(expr).denominator


def equals(u, v, tolerance: Optional[float] = None) -> bool:
    """Structural equality. If tolerance is given it overrides the configured one for this call."""
    u, v = _cast(u), _cast(v)
    if tolerance is None:
        return u == v
    with settings(tolerance=tolerance):
        return u == v
