"""Small example programs built on the vector routines."""

from __future__ import annotations

import argparse
import os
import re
import sys
import time
from pathlib import Path
from typing import Sequence

import numpy as np

from numlab.vectors import (
    dot,
    inf_norm,
    linear_combination,
    one_norm,
    rms_norm,
    vector_difference,
    vector_pow,
    vector_product,
    vector_scale,
    vector_sum,
)


def read_vector_length(text: str) -> int:
    """Parse the vector length from text of the form ``n = 10,``."""
    match = re.search(r"\bn\s*=\s*([+-]?\d+)", text)
    if match is None:
        raise ValueError("read_vector_length: missing 'n'")
    return int(match.group(1))


def intro_dot_product(n: int) -> float:
    """Dot product of ``u = 1..n`` with ``v = n..1``."""
    if n < 0:
        raise ValueError("intro_dot_product: n must be non-negative")
    u = np.arange(1, n + 1, dtype=float)
    v = np.arange(n, 0, -1, dtype=float)
    return dot(u, v)


def write_dot_report(path, n: int, total: float) -> None:
    """Write the vector length and dot product to ``path``."""
    with open(os.fspath(path), "w", encoding="utf-8") as handle:
        handle.write(f" n = {n}\n")
        handle.write(f" u dot v = {total:g}\n")


def _format_values(values) -> str:
    return "".join(f"{value:g} " for value in values)


def vector_ops_report() -> str:
    """Text report of the norm, sum, difference and product of two sample vectors."""
    u = np.arange(10, dtype=float)
    v = 10.0 - np.arange(10, dtype=float)
    lines = [
        f"   u = {_format_values(u)}",
        f"   v = {_format_values(v)}",
        f"   one norm of u = {one_norm(u):g}",
        f"   sum = {_format_values(vector_sum(u, v))}",
        f"   difference = {_format_values(vector_difference(u, v))}",
        f"   product = {_format_values(vector_product(u, v))}",
    ]
    return "\n".join(lines) + "\n"


def profiling_run(
    shape: tuple[int, ...] = (100, 100, 100), repeats: int = 100, seed: int | None = None
) -> float:
    """Repeat sum, scale, inf-norm and dot product on random arrays.

    Returns the dot product of the two random arrays from the last repeat.
    """
    if repeats < 1:
        raise ValueError("profiling_run: repeats must be positive")
    rng = np.random.default_rng(seed)
    x = rng.random(shape)
    y = rng.random(shape)
    result = 0.0
    for _ in range(repeats):
        z = vector_sum(x, y)
        z = vector_scale(2.0, x)
        result = inf_norm(z)
        result = dot(x, y)
    return result


def openmp_run(n: int = 10000000, repeats: int = 20) -> float:
    """Chain of vector operations repeated; returns the final rms norm.

    With no repeats the initial scalar -2.0 is returned.
    """
    if n < 1:
        raise ValueError("openmp_run: n must be positive")
    if repeats < 0:
        raise ValueError("openmp_run: repeats must be non-negative")
    index = np.arange(n, dtype=float)
    x = (index + 1.0) / n
    y = (n - index - 1.0) / n
    a = -2.0
    b = 0.2
    for _ in range(repeats):
        z = linear_combination(b, x, a, y)
        y = vector_scale(b, z)
        x = vector_product(y, z)
        y = vector_pow(x, b)
        a = rms_norm(y)
    return a


def distributed_dot(n: int = 10000000, nprocs: int = 1) -> float:
    """Dot product of two ramp vectors, summed block by block over ``nprocs`` blocks."""
    if n < 1:
        raise ValueError("distributed_dot: n must be positive")
    if nprocs < 1:
        raise ValueError("distributed_dot: nprocs must be positive")
    width = n // nprocs
    partials = []
    for rank in range(nprocs):
        start = width * rank + 1
        stop = n if rank == nprocs - 1 else width * (rank + 1)
        g = np.arange(start, stop + 1, dtype=float)
        partials.append(dot(0.001 * g / n, 0.001 * (n - g) / n))
    return float(sum(partials))


def main(argv: Sequence[str] | None = None) -> int:
    """Run one of the example programs."""
    parser = argparse.ArgumentParser(prog="numlab-drivers", description="Vector examples.")
    sub = parser.add_subparsers(dest="command", required=True)
    intro = sub.add_parser("intro", help="dot product of 1..n with n..1")
    intro.add_argument("--input", default="input.txt")
    intro.add_argument("--output", default="output.txt")
    sub.add_parser("ops", help="basic vector operations")
    profile = sub.add_parser("profile", help="repeated operations on random 3-D arrays")
    profile.add_argument("--size", type=int, default=100)
    profile.add_argument("--repeats", type=int, default=100)
    profile.add_argument("--seed", type=int, default=None)
    chain = sub.add_parser("openmp", help="chained vector operations")
    chain.add_argument("--n", type=int, default=10000000)
    chain.add_argument("--repeats", type=int, default=20)
    blocks = sub.add_parser("mpi", help="block-summed dot product")
    blocks.add_argument("--n", type=int, default=10000000)
    blocks.add_argument("--procs", type=int, default=1)
    args = parser.parse_args(argv)

    try:
        if args.command == "intro":
            n = read_vector_length(Path(args.input).read_text(encoding="utf-8"))
            print(f"  vector length = {n}")
            total = intro_dot_product(n)
            print(f"  dot-product = {total:g}")
            write_dot_report(args.output, n, total)
        elif args.command == "ops":
            print(vector_ops_report(), end="")
        elif args.command == "profile":
            start = time.process_time()
            shape = (args.size, args.size, args.size)
            result = profiling_run(shape, args.repeats, args.seed)
            runtime = time.process_time() - start
            print(f" Result from computation = {result:g}")
            print(f" Total run time = {runtime:g}")
        elif args.command == "openmp":
            start = time.perf_counter()
            result = openmp_run(args.n, args.repeats)
            runtime = time.perf_counter() - start
            print(f" Final rms norm = {result:.16g}")
            print(f" Total run time = {runtime:.10g}")
        else:
            print(f" starting with {args.procs} processes")
            start = time.perf_counter()
            result = distributed_dot(args.n, args.procs)
            runtime = time.perf_counter() - start
            print(f" dot-product = {result:.12g}")
            print(f"     runtime = {runtime:.12g}")
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())