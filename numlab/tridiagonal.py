"""Tridiagonal linear systems: products, residuals and a Jacobi solver."""

from __future__ import annotations

import argparse
import math
import re
import sys
import time
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import numpy as np


@dataclass
class Tridiagonal:
    """A tridiagonal matrix held as its three diagonals.

    Row ``k`` reads ``a[k]*u[k-1] + b[k]*u[k] + c[k]*u[k+1]``; ``a[0]`` and
    ``c[-1]`` fall outside the matrix and do not take part.
    """

    a: np.ndarray
    b: np.ndarray
    c: np.ndarray

    def __post_init__(self) -> None:
        self.a = np.asarray(self.a, dtype=float)
        self.b = np.asarray(self.b, dtype=float)
        self.c = np.asarray(self.c, dtype=float)
        if any(d.ndim != 1 for d in (self.a, self.b, self.c)):
            raise ValueError("Tridiagonal: diagonals must be one-dimensional")
        if not len(self.a) == len(self.b) == len(self.c):
            raise ValueError("Tridiagonal: diagonals must have equal lengths")

    def __len__(self) -> int:
        return len(self.b)


@dataclass
class JacobiResult:
    """Outcome of a Jacobi solve."""

    solution: np.ndarray
    iterations: int
    residual: float
    converged: bool


def _as_vector(values, length: int, name: str) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.shape != (length,):
        raise ValueError(f"{name}: expected a vector of length {length}")
    return array


def _residual(
    a: np.ndarray,
    b: np.ndarray,
    c: np.ndarray,
    u: np.ndarray,
    r: np.ndarray,
    left: float = 0.0,
    right: float = 0.0,
) -> np.ndarray:
    """Row-wise ``a*u[k-1] + b*u[k] + c*u[k+1] - r`` with given outer neighbours."""
    if len(u) < 2:
        raise ValueError("residual: a block needs at least two rows")
    extended = np.concatenate(([left], u, [right]))
    return a * extended[:-2] + b * u + c * extended[2:] - r


def laplace_system(gamma: float, n: int) -> Tridiagonal:
    """The matrix ``I + gamma*L`` for the 1-D Laplace operator ``L`` on ``n`` nodes."""
    if n < 2:
        raise ValueError("laplace_system: n must be at least 2")
    a = np.full(n, -gamma)
    b = np.full(n, 1.0 + 2.0 * gamma)
    c = np.full(n, -gamma)
    a[0] = 0.0
    c[-1] = 0.0
    return Tridiagonal(a, b, c)


def linear_residual(system: Tridiagonal, u, r) -> tuple[np.ndarray, float]:
    """Return the residual ``T*u - r`` and its 2-norm divided by the size."""
    n = len(system)
    u = _as_vector(u, n, "linear_residual")
    r = _as_vector(r, n, "linear_residual")
    res = _residual(system.a, system.b, system.c, u, r)
    return res, math.sqrt(float(np.dot(res, res))) / n


def jacobi_solve(system: Tridiagonal, u, r, delta: float, maxiter: int) -> JacobiResult:
    """Solve ``T*u = r`` by Jacobi iteration from the initial guess ``u``.

    Stops once the averaged residual norm falls below ``delta``; after
    ``maxiter + 1`` updates without that, warns and returns unconverged.
    """
    if maxiter < 0:
        raise ValueError("jacobi_solve: maxiter must be non-negative")
    n = len(system)
    u = np.array(_as_vector(u, n, "jacobi_solve"))
    r = _as_vector(r, n, "jacobi_solve")
    res, resid = linear_residual(system, u, r)
    for iterations in range(maxiter + 1):
        if resid < delta:
            return JacobiResult(u, iterations, resid, True)
        u -= res / system.b
        res, resid = linear_residual(system, u, r)
    warnings.warn(
        "jacobi_solve: reached maximum iteration limit", RuntimeWarning, stacklevel=2
    )
    return JacobiResult(u, maxiter + 1, resid, False)


def tridiag_matvec(system: Tridiagonal, x) -> np.ndarray:
    """Return the product ``T*x``."""
    n = len(system)
    x = _as_vector(x, n, "tridiag_matvec")
    return _residual(system.a, system.b, system.c, x, np.zeros(n))


def _field(text: str, name: str) -> str:
    match = re.search(rf"\b{name}\s*=\s*([^,\s]+)", text)
    if match is None:
        raise ValueError(f"read_problem: missing '{name}'")
    return match.group(1)


def read_problem(text: str) -> tuple[float, float, int]:
    """Parse ``gamma``, ``delta`` and ``global_N`` from an input file's text."""
    try:
        gamma = float(_field(text, "gamma"))
        delta = float(_field(text, "delta"))
        n = int(_field(text, "global_N"))
    except ValueError as exc:
        raise ValueError(f"read_problem: {exc}") from exc
    return gamma, delta, n


def _run_jacobi(input_path: str) -> int:
    try:
        gamma, delta, n = read_problem(Path(input_path).read_text(encoding="utf-8"))
        system = laplace_system(gamma, n)
    except (OSError, ValueError) as exc:
        print(f"iterative test error: {exc}", file=sys.stderr)
        return 1

    print("iterative test")
    print(f"    gamma = {gamma:g}")
    print(f"    linear solver tolerance delta = {delta:g}")
    print(f"    problem size N = {n}")

    u = np.zeros(n)
    r = np.ones(n)
    _, norm = linear_residual(system, u, r)
    print(f" initial residual: ||T*u-r||_2 = {norm:g}")

    start = time.process_time()
    result = jacobi_solve(system, u, r, delta, 10000)
    elapsed = time.process_time() - start
    print(f" converged in {result.iterations} iterations at delta = {delta:g}")
    print(f" solution time: {elapsed:g} seconds")

    _, norm = linear_residual(system, result.solution, r)
    print(f" final residual: ||T*u-r||_2 = {norm:g}")
    return 0


def _run_matvec(size: int, output: str) -> int:
    if size < 2:
        print("matvec error: size must be at least 2", file=sys.stderr)
        return 1
    system = Tridiagonal(np.full(size, -1.0), np.full(size, 2.0), np.full(size, -1.0))
    product = tridiag_matvec(system, np.ones(size))
    print(f" 2-norm of product = {math.sqrt(float(np.dot(product, product))):.12e}")
    with open(output, "w", encoding="utf-8") as handle:
        handle.writelines(f"{value:.12e}\n" for value in product)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Jacobi test problem or the tridiagonal product example."""
    parser = argparse.ArgumentParser(
        prog="numlab-tridiagonal",
        description="Solve (I + gamma*L)u = 1 by Jacobi iteration, or form T*x.",
    )
    parser.add_argument(
        "command", nargs="?", choices=("jacobi", "matvec"), default="jacobi"
    )
    parser.add_argument("--input", default="input.txt", help="problem file for jacobi")
    parser.add_argument("--output", default="r.txt", help="result file for matvec")
    parser.add_argument("--size", type=int, default=1000, help="system size for matvec")
    args = parser.parse_args(argv)
    if args.command == "matvec":
        return _run_matvec(args.size, args.output)
    return _run_jacobi(args.input)


if __name__ == "__main__":
    sys.exit(main())