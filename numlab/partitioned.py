"""A tridiagonal Jacobi solve split over contiguous blocks with halo exchange."""

from __future__ import annotations

import argparse
import math
import sys
import time
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import numpy as np

from numlab.tridiagonal import JacobiResult, _residual, read_problem


@dataclass
class Subdomain:
    """One block of rows: its diagonals, current solution and right-hand side."""

    a: np.ndarray
    b: np.ndarray
    c: np.ndarray
    u: np.ndarray
    r: np.ndarray

    def __post_init__(self) -> None:
        for name in ("a", "b", "c", "u", "r"):
            setattr(self, name, np.array(getattr(self, name), dtype=float))
        if len({len(self.a), len(self.b), len(self.c), len(self.u), len(self.r)}) != 1:
            raise ValueError("Subdomain: arrays must have equal lengths")

    def __len__(self) -> int:
        return len(self.u)


def split_sizes(n: int, nprocs: int) -> list[int]:
    """Block sizes for ``n`` rows over ``nprocs`` blocks; the last takes the remainder."""
    if nprocs < 1:
        raise ValueError("split_sizes: nprocs must be positive")
    local = n // nprocs
    if local < 1:
        raise ValueError("split_sizes: fewer rows than blocks")
    return [local] * (nprocs - 1) + [n - local * (nprocs - 1)]


def build_subdomains(gamma: float, n: int, nprocs: int) -> list[Subdomain]:
    """Blocks of ``(I + gamma*L)u = 1`` with a zero initial guess."""
    subdomains = []
    for size in split_sizes(n, nprocs):
        subdomains.append(
            Subdomain(
                a=np.full(size, -gamma),
                b=np.full(size, 1.0 + 2.0 * gamma),
                c=np.full(size, -gamma),
                u=np.zeros(size),
                r=np.ones(size),
            )
        )
    subdomains[0].a[0] = 0.0
    subdomains[-1].c[-1] = 0.0
    return subdomains


def partitioned_residual(subdomains: Sequence[Subdomain]) -> tuple[list[np.ndarray], float]:
    """Per-block residuals and the global averaged 2-norm.

    Each block takes its outer neighbours from the adjacent blocks (zero at
    the ends). The norm is divided by the first block's size times the
    number of blocks.
    """
    if not subdomains:
        raise ValueError("partitioned_residual: no subdomains")
    residuals = []
    for index, block in enumerate(subdomains):
        left = subdomains[index - 1].u[-1] if index > 0 else 0.0
        right = subdomains[index + 1].u[0] if index < len(subdomains) - 1 else 0.0
        residuals.append(_residual(block.a, block.b, block.c, block.u, block.r, left, right))
    total = np.concatenate(residuals)
    norm = math.sqrt(float(np.dot(total, total))) / len(subdomains[0]) / len(subdomains)
    return residuals, norm


def partitioned_jacobi(
    subdomains: Sequence[Subdomain], delta: float, maxiter: int
) -> JacobiResult:
    """Jacobi iteration on all blocks, updating each block's ``u`` in place.

    Returns the assembled solution. Warns if ``maxiter + 1`` updates do not
    bring the residual norm below ``delta``.
    """
    if maxiter < 0:
        raise ValueError("partitioned_jacobi: maxiter must be non-negative")
    residuals, resid = partitioned_residual(subdomains)
    for iterations in range(maxiter + 1):
        if resid < delta:
            return JacobiResult(
                np.concatenate([block.u for block in subdomains]), iterations, resid, True
            )
        for block, res in zip(subdomains, residuals):
            block.u -= res / block.b
        residuals, resid = partitioned_residual(subdomains)
    warnings.warn(
        "partitioned_jacobi: reached maximum iteration limit", RuntimeWarning, stacklevel=2
    )
    return JacobiResult(
        np.concatenate([block.u for block in subdomains]), maxiter + 1, resid, False
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the block-partitioned Jacobi test problem."""
    parser = argparse.ArgumentParser(
        prog="numlab-partitioned",
        description="Solve (I + gamma*L)u = 1 by Jacobi iteration over blocks.",
    )
    parser.add_argument("--input", default="input.txt", help="problem file")
    parser.add_argument("--procs", type=int, default=1, help="number of blocks")
    args = parser.parse_args(argv)

    try:
        gamma, delta, n = read_problem(Path(args.input).read_text(encoding="utf-8"))
        subdomains = build_subdomains(gamma, n, args.procs)
        _, norm = partitioned_residual(subdomains)
    except (OSError, ValueError) as exc:
        print(f"iterative test error: {exc}", file=sys.stderr)
        return 1

    print(f"iterative test with {args.procs} processors")
    print(f"    gamma = {gamma:g}")
    print(f"    linear solver tolerance delta = {delta:g}")
    print(f"    global problem size N = {n}")
    print(f"    local problem sizes n = {len(subdomains[0])}")
    print(f" initial residual: ||T*u-r||_2 = {norm:g}")

    start = time.perf_counter()
    result = partitioned_jacobi(subdomains, delta, 10000)
    elapsed = time.perf_counter() - start
    print(f" converged in {result.iterations} iterations at delta = {delta:g}")
    print(f" solution time: {elapsed:g} seconds")

    _, norm = partitioned_residual(subdomains)
    print(f" final residual: ||T*u-r||_2 = {norm:g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())