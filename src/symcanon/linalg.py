from typing import Optional

import numpy as np

from .expr import Expr, Float, Integer, Sum, _cast


def _as_matrix(matrix) -> np.ndarray:
    m = np.array(matrix, dtype=object)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {m.shape}")
    if m.size == 0:
        return m
    return np.vectorize(_cast, otypes=[object])(m)


def _minor(m: np.ndarray, row: int, col: int) -> np.ndarray:
    return np.delete(np.delete(m, row, axis=0), col, axis=1)


def _det(m: np.ndarray) -> Expr:
    n = m.shape[0]
    if n == 0:
        return Integer(1)
    if n == 1:
        return m[0, 0]
    if n == 2:
        return m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]
    return Sum([(-1) ** j * m[0, j] * _det(_minor(m, 0, j)) for j in range(n)])


def det(matrix) -> Expr:
    """Determinant of a square matrix of Exprs (or python numbers), by cofactor expansion."""
    return _det(_as_matrix(matrix))


def invert(matrix) -> Optional[np.ndarray]:
    """
    Input: matrix of Exprs, so numpy can't natively invert it >:(
    Output: inverted matrix of Exprs. Returns None if the matrix is singular.
    """
    m = _as_matrix(matrix)
    d = _det(m)
    if d == 0 or d == Float(0.0):
        return None

    n = m.shape[0]
    inverse = np.empty((n, n), dtype=object)
    for i in range(n):
        for j in range(n):
            # adjugate is the transpose of the cofactor matrix
            inverse[i, j] = (-1) ** (i + j) * _det(_minor(m, j, i)) / d
    return inverse
