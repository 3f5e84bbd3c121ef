import logging

from .expr import (
    Abs,
    CanonicalFormError,
    Const,
    Difference,
    Expr,
    Float,
    Fraction,
    Function,
    Integer,
    MixedNumber,
    Num,
    Power,
    Product,
    Quotient,
    Sum,
    Symbol,
    Undefined,
    denominator,
    equals,
    numerator,
    sqrt,
    symbols,
)
from .order import compare, precedes, sort_key

logging.getLogger(__name__).addHandler(logging.NullHandler())
