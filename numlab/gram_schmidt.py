"""Modified Gram-Schmidt orthonormalisation of two-dimensional vectors."""

from __future__ import annotations

import math
from typing import Protocol, Sequence

import numpy as np

TOLERANCE = 1e-12


class _Vector(Protocol):
    def values(self) -> np.ndarray: ...

    def linear_sum(self, a: float, y: "_Vector", b: float, z: "_Vector") -> None: ...

    def scale(self, a: float) -> None: ...


class LinearDependenceError(ValueError):
    """Raised when the vectors to orthonormalise are linearly dependent."""


def _dot(x: _Vector, y: _Vector) -> float:
    return float(np.sum(x.values() * y.values()))


def _normalize(x: _Vector, name: str) -> None:
    norm = math.sqrt(_dot(x, x))
    if abs(norm) < TOLERANCE:
        raise LinearDependenceError(f"{name}: vectors are linearly-dependent")
    x.scale(1.0 / norm)


def gram_schmidt(vectors: Sequence[_Vector]) -> None:
    """Orthonormalise ``vectors`` in place, in order.

    Works on any vectors offering ``values``, ``linear_sum`` and ``scale``.
    Raises ``LinearDependenceError`` if a vector's remainder has norm below
    1e-12; vectors before it are left orthonormalised.
    """
    name = "gram_schmidt"
    for i, current in enumerate(vectors):
        for previous in vectors[:i]:
            current.linear_sum(1.0, current, -_dot(current, previous), previous)
        _normalize(current, name)