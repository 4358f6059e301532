"""Element-wise vector arithmetic and norms on arrays of any shape."""

from __future__ import annotations

import math

import numpy as np


def _array(values) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _pair(u, v, name: str) -> tuple[np.ndarray, np.ndarray]:
    first = _array(u)
    second = _array(v)
    if first.shape != second.shape:
        raise ValueError(f"{name}: vector shapes do not match")
    return first, second


def one_norm(u) -> float:
    """Sum of the absolute values of the entries."""
    return float(np.sum(np.abs(_array(u))))


def vector_sum(u, v) -> np.ndarray:
    """Entry-wise ``u + v``."""
    first, second = _pair(u, v, "vector_sum")
    return first + second


def vector_difference(u, v) -> np.ndarray:
    """Entry-wise ``u - v``."""
    first, second = _pair(u, v, "vector_difference")
    return first - second


def vector_product(u, v) -> np.ndarray:
    """Entry-wise ``u * v``."""
    first, second = _pair(u, v, "vector_product")
    return first * second


def linear_combination(a: float, x, b: float, y) -> np.ndarray:
    """The linear combination ``a*x + b*y``."""
    first, second = _pair(x, y, "linear_combination")
    return a * first + b * second


def vector_scale(a: float, x) -> np.ndarray:
    """The scaled vector ``a*x``."""
    return a * _array(x)


def vector_pow(x, e: float) -> np.ndarray:
    """Entry-wise power ``x**e``; the exponent must be non-negative."""
    if e < 0:
        raise ValueError(f"vector_pow requires non-negative exponent, e = {e:g}")
    return np.power(_array(x), e)


def rms_norm(x) -> float:
    """Root-mean-square of the entries."""
    data = _array(x)
    if data.size == 0:
        raise ValueError("rms_norm: empty vector")
    return math.sqrt(float(np.sum(data * data / data.size)))


def inf_norm(x) -> float:
    """Largest absolute entry (0 for an empty vector)."""
    return float(np.abs(_array(x)).max(initial=0.0))


def dot(x, y) -> float:
    """Sum of the products of corresponding entries."""
    first, second = _pair(x, y, "dot")
    return float(np.sum(first * second))