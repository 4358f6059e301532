"""Composite 8-point Gauss quadrature of a fixed integrand over the unit square."""

from __future__ import annotations

import argparse
import math
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import numpy as np

NODES = np.array(
    [
        -0.18343464249564980493,
        0.18343464249564980493,
        -0.52553240991632898581,
        0.52553240991632898581,
        -0.79666647741362673959,
        0.79666647741362673959,
        -0.96028985649753623168,
        0.96028985649753623168,
    ]
)
WEIGHTS = np.array(
    [
        0.36268378337836198296,
        0.36268378337836198296,
        0.31370664587788728733,
        0.31370664587788728733,
        0.22238103445337447054,
        0.22238103445337447054,
        0.10122853629037625915,
        0.10122853629037625915,
    ]
)


def integrand(a, b):
    """``a * exp(3a) * sin(25*pi*b)``, element-wise for arrays."""
    return a * np.exp(3.0 * a) * np.sin(25.0 * math.pi * b)


def exact_integral() -> float:
    """The exact value of the integrand's integral over [0,1]x[0,1]."""
    return 2.0 / 225.0 / math.pi * (2.0 * math.exp(3.0) + 1.0)


def row_ranges(n: int, nprocs: int) -> list[range]:
    """Split ``n`` sub-interval rows into ``nprocs`` blocks; the last takes the rest."""
    if n < 1:
        raise ValueError("row_ranges: n must be positive")
    if nprocs < 1:
        raise ValueError("row_ranges: nprocs must be positive")
    width = int(n / nprocs)
    ranges = [range(width * p, width * (p + 1)) for p in range(nprocs)]
    ranges[-1] = range(width * (nprocs - 1), n)
    return ranges


def _points(h: float, indices: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    centers = h * (indices + 0.5)
    points = (centers[:, None] + 0.5 * h * NODES[None, :]).ravel()
    weights = np.tile(WEIGHTS, len(indices))
    return points, weights


def gauss_quadrature(n: int, rows: range | None = None) -> float:
    """Quadrature over the sub-squares in the given x-rows (all rows by default).

    The square is cut into ``n`` x ``n`` sub-squares of width ``1/n``, with 64
    Gauss points in each.
    """
    if n < 1:
        raise ValueError("gauss_quadrature: n must be positive")
    rows = range(n) if rows is None else rows
    if len(rows) == 0:
        return 0.0
    if rows.start < 0 or rows.stop > n:
        raise ValueError("gauss_quadrature: rows outside 0..n")
    h = 1.0 / n
    a, wa = _points(h, np.arange(rows.start, rows.stop, rows.step, dtype=float))
    b, wb = _points(h, np.arange(n, dtype=float))
    x_part = float(np.sum(wa * a * np.exp(3.0 * a)))
    y_part = float(np.sum(wb * np.sin(25.0 * math.pi * b)))
    return 0.25 * h * h * x_part * y_part


def parallel_quadrature(n: int, nprocs: int) -> float:
    """Sum of the quadrature over ``nprocs`` row blocks computed concurrently."""
    blocks = row_ranges(n, nprocs)
    with ThreadPoolExecutor(max_workers=nprocs) as executor:
        return sum(executor.map(lambda rows: gauss_quadrature(n, rows), blocks))


def main(argv: Sequence[str] | None = None) -> int:
    """Compute the integral and report it against the exact value."""
    parser = argparse.ArgumentParser(
        prog="numlab-quadrature",
        description="Gauss quadrature of a x exp(3a) sin(25 pi b) over the unit square.",
    )
    parser.add_argument("--n", type=int, default=1000, help="sub-intervals per direction")
    parser.add_argument("--procs", type=int, default=1, help="number of row blocks")
    args = parser.parse_args(argv)

    start = time.perf_counter()
    try:
        value = parallel_quadrature(args.n, args.procs)
    except ValueError as exc:
        print(f" error: {exc}", file=sys.stderr)
        return 1
    runtime = time.perf_counter() - start

    exact = exact_integral()
    if args.procs > 1:
        print(f" Running with {args.procs} tasks")
    print(f" computed F = {value:.16g}")
    print(f"     true F = {exact:.16g}")
    print(f"      error = {abs(exact - value):.5g}")
    print(f"    runtime = {runtime:.5g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())