"""Equilibrium concentrations of a small reaction network, solved point by point."""

from __future__ import annotations

import argparse
import math
import random
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Sequence

INITIAL_U = 0.35
INITIAL_V = 0.1
INITIAL_W = 0.5

DEFAULT_LAMBDA = 1.0e-2
DEFAULT_EPS = 1.0e-10
DEFAULT_MAXIT = 1000000


class ConvergenceError(RuntimeError):
    """Raised when the fixed-point iteration does not reach its tolerance."""


@dataclass(frozen=True)
class RateCoefficients:
    """The four temperature-dependent reaction rates."""

    k1: float
    k2: float
    k3: float
    k4: float


@dataclass(frozen=True)
class ChemResult:
    """Final concentrations, iteration count and max-norm residual."""

    u: float
    v: float
    w: float
    iterations: int
    residual: float


def rate_coefficients(temperature: float) -> RateCoefficients:
    """Rates k1..k4 frozen at the given temperature."""
    shifted = temperature - 0.5
    return RateCoefficients(
        k1=math.exp(-5.0 * temperature),
        k2=math.atan(5.0 * shifted) / 3.0 + 0.5,
        k3=1.0 / math.cosh(5.0 * shifted),
        k4=math.tanh(5.0 * shifted * shifted),
    )


def chem_residual(
    u: float, v: float, w: float, rates: RateCoefficients
) -> tuple[float, float, float]:
    """The equilibrium residuals (fu, fv, fw) at concentrations u, v, w."""
    fu = rates.k2 * v + rates.k1 * u * (u + v + w - 1.0)
    fv = rates.k1 * u * (1.0 - u - v - w) - (rates.k2 + rates.k3) * v + rates.k4 * w
    fw = rates.k3 * v - rates.k4 * w
    return fu, fv, fw


def max_norm(values: Iterable[float]) -> float:
    """Largest absolute value (0 for no values)."""
    return max((abs(value) for value in values), default=0.0)


def chem_solver(
    temperature: float,
    u: float,
    v: float,
    w: float,
    lam: float,
    eps: float,
    maxit: int,
) -> ChemResult:
    """Damped fixed-point iteration ``X <- X + lam*f(X)`` until ``|f|_inf < eps``.

    Performs at most ``maxit + 1`` updates; the result reports the iterations
    used and the final residual whether or not it converged.
    """
    if maxit < 0:
        raise ValueError("chem_solver: maxit must be non-negative")
    rates = rate_coefficients(temperature)
    f = chem_residual(u, v, w, rates)
    res = max_norm(f)
    for iterations in range(maxit + 1):
        if res < eps:
            break
        u += lam * f[0]
        v += lam * f[1]
        w += lam * f[2]
        f = chem_residual(u, v, w, rates)
        res = max_norm(f)
    else:
        iterations = maxit + 1
    return ChemResult(u, v, w, iterations, res)


def solve_field(
    temperatures: Sequence[float],
    lam: float = DEFAULT_LAMBDA,
    eps: float = DEFAULT_EPS,
    maxit: int = DEFAULT_MAXIT,
    workers: int = 1,
) -> list[ChemResult]:
    """Solve every temperature point, handing points out to a pool of workers.

    Each point starts from the guess u=0.35, v=0.1, w=0.5. Results come back
    in the order of ``temperatures``. Raises ``ConvergenceError`` if any point
    fails to reach ``eps``.
    """
    if workers < 1:
        raise ValueError("solve_field: workers must be positive")

    def task(item: tuple[int, float]) -> ChemResult:
        index, temperature = item
        result = chem_solver(
            temperature, INITIAL_U, INITIAL_V, INITIAL_W, lam, eps, maxit
        )
        if result.residual >= eps:
            raise ConvergenceError(
                f"point {index} (T = {temperature:g}): res = {result.residual:g}"
            )
        return result

    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(task, enumerate(temperatures)))


def main(argv: Sequence[str] | None = None) -> int:
    """Solve a random temperature field and report the run time."""
    parser = argparse.ArgumentParser(
        prog="numlab-chemistry",
        description="Equilibrium chemical concentrations over a random temperature field.",
    )
    parser.add_argument("--intervals", type=int, default=None, help="number of points")
    parser.add_argument("--workers", type=int, default=1, help="number of workers")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--lam", type=float, default=DEFAULT_LAMBDA, help="damping")
    parser.add_argument("--eps", type=float, default=DEFAULT_EPS, help="tolerance")
    parser.add_argument("--maxit", type=int, default=DEFAULT_MAXIT, help="iteration cap")
    args = parser.parse_args(argv)

    n = args.intervals
    if n is None:
        print("Enter the number of intervals (0 quits):")
        try:
            n = int(sys.stdin.readline())
        except ValueError:
            return 1
    if n < 1:
        return 1

    generator = random.Random(args.seed)
    temperatures = [generator.random() for _ in range(n)]

    start = time.perf_counter()
    try:
        solve_field(temperatures, args.lam, args.eps, args.maxit, args.workers)
    except (ConvergenceError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    runtime = time.perf_counter() - start
    print(f"     runtime = {runtime:g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())