"""A two-dimensional arithmetic array held in one contiguous row-major buffer."""

from __future__ import annotations

import math
import os
import sys
from typing import IO, Union

import numpy as np

_Target = Union[None, str, "os.PathLike[str]", IO[str]]


class FlatVec2D:
    """A rows x cols array of floats stored flat, initialised to zero.

    Index with an int for the flat position or with ``(i, j)`` for row and
    column. A shape with fewer than one row or column gives an empty array.
    """

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            self.rows = 0
            self.cols = 0
            self._data = np.zeros(0)
        else:
            self.rows = rows
            self.cols = cols
            self._data = np.zeros(rows * cols)

    def _flat_index(self, index) -> int:
        if isinstance(index, tuple):
            i, j = index
            return i * self.cols + j
        return index

    def __getitem__(self, index) -> float:
        return float(self._data[self._flat_index(index)])

    def __setitem__(self, index, value: float) -> None:
        self._data[self._flat_index(index)] = value

    def __len__(self) -> int:
        return self.rows * self.cols

    def __repr__(self) -> str:
        return f"FlatVec2D(rows={self.rows}, cols={self.cols})"

    def values(self) -> np.ndarray:
        """The underlying flat array; changes to it change the vector."""
        return self._data

    def _require_data(self, operation: str) -> None:
        if self._data.size == 0:
            raise ValueError(f"FlatVec2D.{operation}: empty data array")

    def _write_lines(self, stream: IO[str]) -> None:
        for value in self._data:
            stream.write(f"  {value:.17g}\n")
        stream.write("\n")

    def write(self, file: _Target = None) -> None:
        """Write one entry per line to stdout, a text stream, or a file path."""
        self._require_data("write")
        if file is None or hasattr(file, "write"):
            self._write_lines(sys.stdout if file is None else file)
            return
        path = os.fspath(file)
        if not path:
            raise ValueError("FlatVec2D.write: empty outfile")
        with open(path, "w", encoding="utf-8") as handle:
            self._write_lines(handle)

    def _check_shape(self, other: "FlatVec2D", operation: str) -> None:
        if (other.rows, other.cols) != (self.rows, self.cols):
            raise ValueError(f"FlatVec2D.{operation}: vector sizes do not match")

    def linear_sum(self, a: float, y: "FlatVec2D", b: float, z: "FlatVec2D") -> None:
        """Set self = a*y + b*z."""
        self._check_shape(y, "linear_sum")
        self._check_shape(z, "linear_sum")
        self._require_data("linear_sum")
        self._data[:] = a * y.values() + b * z.values()

    def scale(self, a: float) -> None:
        """Multiply every entry by ``a``."""
        self._require_data("scale")
        self._data *= a

    def copy_from(self, y: "FlatVec2D") -> None:
        """Copy the entries of ``y`` into self."""
        self._check_shape(y, "copy_from")
        self._require_data("copy_from")
        self._data[:] = y.values()

    def fill(self, a: float) -> None:
        """Set every entry to ``a``."""
        self._require_data("fill")
        self._data.fill(a)

    def min(self) -> float:
        self._require_data("min")
        return float(self._data.min())

    def max(self) -> float:
        self._require_data("max")
        return float(self._data.max())


def linspace(a: float, b: float, rows: int, cols: int) -> FlatVec2D:
    """A rows x cols vector of evenly spaced values from ``a`` to ``b``."""
    if rows < 1 or cols < 1:
        raise ValueError("linspace: rows and cols must be positive")
    x = FlatVec2D(rows, cols)
    h = (b - a) / (rows * cols - 1)
    x.values()[:] = a + h * np.arange(rows * cols)
    return x


def random(rows: int, cols: int, rng: np.random.Generator | None = None) -> FlatVec2D:
    """A rows x cols vector of uniform random values in [0, 1)."""
    if rows < 1 or cols < 1:
        raise ValueError("random: rows and cols must be positive")
    generator = rng if rng is not None else np.random.default_rng()
    x = FlatVec2D(rows, cols)
    x.values()[:] = generator.random(rows * cols)
    return x


def dot(x: FlatVec2D, y: FlatVec2D) -> float:
    """Sum of the products of corresponding entries."""
    if (x.rows, x.cols) != (y.rows, y.cols):
        raise ValueError("dot: vector sizes do not match")
    return float(np.sum(x.values() * y.values()))


def two_norm(x: FlatVec2D) -> float:
    """Square root of the sum of squared entries."""
    data = x.values()
    return math.sqrt(float(np.sum(data * data)))


def rms_norm(x: FlatVec2D) -> float:
    """Root-mean-square of the entries."""
    if len(x) == 0:
        raise ValueError("rms_norm: empty data array")
    data = x.values()
    return math.sqrt(float(np.sum(data * data)) / len(x))


def max_norm(x: FlatVec2D) -> float:
    """Largest absolute entry (0 for an empty vector)."""
    return float(np.abs(x.values()).max(initial=0.0))