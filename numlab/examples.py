"""Worksharing examples: chunked loops, reductions, sections and locks."""

from __future__ import annotations

import argparse
import os
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import numpy as np

PI = 3.1415926535
DELTA = 0.01415926535
DYNAMIC_CHUNK = 10


def _default_threads() -> int:
    return os.cpu_count() or 4


def _check_threads(threads: int, name: str) -> None:
    if threads < 1:
        raise ValueError(f"{name}: threads must be positive")


def chunked_ranges(n: int, chunk: int, threads: int) -> list[list[range]]:
    """Static schedule: chunks of ``chunk`` indices dealt round-robin to threads.

    Returns, for each thread, the index ranges it works on, in order.
    """
    if n < 0:
        raise ValueError("chunked_ranges: n must be non-negative")
    if chunk < 1:
        raise ValueError("chunked_ranges: chunk must be positive")
    _check_threads(threads, "chunked_ranges")
    assignment: list[list[range]] = [[] for _ in range(threads)]
    for number, start in enumerate(range(0, n, chunk)):
        assignment[number % threads].append(range(start, min(start + chunk, n)))
    return assignment


def _block_ranges(n: int, threads: int) -> list[range]:
    """Contiguous near-equal blocks, as a default static schedule gives."""
    base, extra = divmod(n, threads)
    ranges = []
    start = 0
    for t in range(threads):
        size = base + (1 if t < extra else 0)
        ranges.append(range(start, start + size))
        start += size
    return ranges


def matrix_multiply(
    nra: int = 62, nca: int = 15, ncb: int = 7, chunk: int = 10, threads: int | None = None
) -> np.ndarray:
    """Multiply ``a[i][j] = i+j`` (nra x nca) by ``b[i][j] = i*j`` (nca x ncb).

    Rows of the result are shared among threads in static chunks.
    """
    if min(nra, nca, ncb) < 1:
        raise ValueError("matrix_multiply: dimensions must be positive")
    threads = _default_threads() if threads is None else threads
    _check_threads(threads, "matrix_multiply")
    a = np.add.outer(np.arange(nra, dtype=float), np.arange(nca, dtype=float))
    b = np.multiply.outer(np.arange(nca, dtype=float), np.arange(ncb, dtype=float))
    c = np.zeros((nra, ncb))

    def work(ranges: list[range]) -> None:
        for rows in ranges:
            c[rows.start:rows.stop] = a[rows.start:rows.stop] @ b

    with ThreadPoolExecutor(max_workers=threads) as executor:
        list(executor.map(work, chunked_ranges(nra, chunk, threads)))
    return c


def reduction_sum(n: int = 100) -> float:
    """Sum of ``a[i]*b[i]`` with ``a[i] = b[i] = i`` for ``i < n``."""
    if n < 0:
        raise ValueError("reduction_sum: n must be non-negative")
    a = np.arange(n, dtype=np.float32)
    return float(np.sum(a * a, dtype=np.float32))


def orphan_dot(n: int = 100, threads: int | None = None) -> float:
    """Dot product of ``a[i] = b[i] = i`` split over threads and summed."""
    if n < 0:
        raise ValueError("orphan_dot: n must be non-negative")
    threads = _default_threads() if threads is None else threads
    _check_threads(threads, "orphan_dot")
    a = np.arange(n, dtype=np.float32)

    def partial(rows: range) -> float:
        part = a[rows.start:rows.stop]
        return float(np.sum(part * part, dtype=np.float32))

    with ThreadPoolExecutor(max_workers=threads) as executor:
        return float(sum(executor.map(partial, _block_ranges(n, threads))))


def workshare_sections(n: int = 50) -> tuple[np.ndarray, np.ndarray]:
    """Two concurrent sections: ``c = a + b`` and ``d = a * b``.

    Here ``a[i] = 1.5*i`` and ``b[i] = i + 22.35``.
    """
    if n < 0:
        raise ValueError("workshare_sections: n must be non-negative")
    index = np.arange(n, dtype=float)
    a = index * 1.5
    b = index + 22.35
    with ThreadPoolExecutor(max_workers=2) as executor:
        c_future = executor.submit(np.add, a, b)
        d_future = executor.submit(np.multiply, a, b)
        return c_future.result(), d_future.result()


def locked_sections(n: int = 1000000) -> tuple[np.ndarray, np.ndarray]:
    """Two sections sharing arrays ``a`` and ``b``, each guarded by its own lock.

    One section sets ``a[i] = i*DELTA`` then adds ``a`` to ``b``; the other sets
    ``b[i] = i*PI`` then adds ``b`` to ``a``. Each lock is released before the
    other is taken, so the sections cannot deadlock; the final values depend on
    the order in which the sections reach the locks.
    """
    if n < 0:
        raise ValueError("locked_sections: n must be non-negative")
    index = np.arange(n, dtype=float)
    a = np.zeros(n)
    b = np.zeros(n)
    lock_a = threading.Lock()
    lock_b = threading.Lock()

    def first() -> None:
        with lock_a:
            a[:] = index * DELTA
        with lock_b:
            b[:] += a

    def second() -> None:
        with lock_b:
            b[:] = index * PI
        with lock_a:
            a[:] += b

    workers = [threading.Thread(target=first), threading.Thread(target=second)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return a, b


def parallel_total(n: int = 1000000, threads: int | None = None) -> float:
    """Sum of ``0 .. n-1`` with chunks of 10 handed out dynamically to threads."""
    if n < 0:
        raise ValueError("parallel_total: n must be non-negative")
    threads = _default_threads() if threads is None else threads
    _check_threads(threads, "parallel_total")
    chunks = iter(range(0, n, DYNAMIC_CHUNK))
    guard = threading.Lock()

    def worker() -> float:
        total = 0.0
        while True:
            with guard:
                start = next(chunks, None)
            if start is None:
                return total
            total += float(sum(range(start, min(start + DYNAMIC_CHUNK, n))))

    with ThreadPoolExecutor(max_workers=threads) as executor:
        futures = [executor.submit(worker) for _ in range(threads)]
        return float(sum(future.result() for future in futures))


def main(argv: Sequence[str] | None = None) -> int:
    """Run one of the worksharing examples."""
    parser = argparse.ArgumentParser(prog="numlab-examples", description="Worksharing examples.")
    parser.add_argument(
        "example",
        choices=("mm", "reduction", "orphan", "workshare", "sections", "locks", "total"),
    )
    parser.add_argument("--threads", type=int, default=None, help="number of threads")
    args = parser.parse_args(argv)
    threads = _default_threads() if args.threads is None else args.threads

    try:
        if args.example == "mm":
            print(f"Starting matrix multiply example with {threads} threads")
            c = matrix_multiply(threads=threads)
            print("******************************************************")
            print("Result Matrix:")
            for row in c:
                print("".join(f"{value:g}   " for value in row))
            print("******************************************************")
            print("Done.")
        elif args.example == "reduction":
            print(f"   Sum = {reduction_sum():g}")
        elif args.example == "orphan":
            print(f"Sum = {orphan_dot(threads=threads):g}")
        elif args.example == "workshare":
            print(f"Number of threads = {threads}")
            index = np.arange(100, dtype=float)
            c = index + index
            for tid, ranges in enumerate(chunked_ranges(100, 10, threads)):
                for rows in ranges:
                    for i in rows:
                        print(f"Thread {tid}: c[{i}]= {c[i]:g}")
        elif args.example == "sections":
            c, d = workshare_sections()
            for i, value in enumerate(c):
                print(f"c[{i}] = {value:g}")
            for i, value in enumerate(d):
                print(f"d[{i}] = {value:g}")
        elif args.example == "locks":
            a, b = locked_sections()
            print(f"a[last] = {a[-1]:g}, b[last] = {b[-1]:g}")
        else:
            print(f"Number of threads = {threads}")
            print(f"Final Total = {parallel_total(threads=threads):g}")
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())