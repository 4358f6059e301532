"""The inner product ``y^T A x`` of all-ones data, with size checks and timing."""

from __future__ import annotations

import enum
import sys
import time
from dataclasses import dataclass
from typing import NamedTuple, Sequence

import numpy as np

DEFAULT_TOTAL = 2**22
DEFAULT_ROW_LENGTH = 1024
DEFAULT_REPEATS = 100

_HELP = (
    "  y^T*A*x Options:\n"
    "  -Rows (-N) <int>:      exponent num, determines number of rows 2^num (default: 2^12 = 4096)\n"
    "  -Columns (-M) <int>:   exponent num, determines number of columns 2^num (default: 2^10 = 1024)\n"
    "  -Size (-S) <int>:      exponent num, determines total matrix size 2^num (default: 2^22 = 4096*1024 )\n"
    "  -nrepeat <int>:        number of repetitions (default: 100)\n"
    "  -layout <left|right>:  matrix storage order (default: left)\n"
    "  -help (-h):            print this message\n"
)


class SizeError(ValueError):
    """Raised when the requested problem sizes are inconsistent or negative."""


class Layout(enum.Enum):
    """Storage order of the matrix: column-major (left) or row-major (right)."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def order(self) -> str:
        return "F" if self is Layout.LEFT else "C"


@dataclass(frozen=True)
class Sizes:
    """Rows ``n``, columns ``m``, total size ``s`` and number of repeats."""

    n: int
    m: int
    s: int
    nrepeat: int


class _Arguments(NamedTuple):
    n: int | None
    m: int | None
    s: int | None
    nrepeat: int
    layout: Layout
    show_help: bool


class _RunReport(NamedTuple):
    result: float
    seconds: float
    mismatches: int
    problem_gbytes: float

    @property
    def bandwidth(self) -> float:
        """Bytes moved per second over all repeats, in GB/s (inf if no time passed)."""
        return float("inf") if self.seconds <= 0 else self.problem_gbytes * self._repeats / self.seconds

    _repeats: int = 1


def _trunc_div(numerator: int, denominator: int) -> int:
    if denominator == 0:
        raise SizeError("Sizes must be greater than 0.")
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def check_sizes(
    n: int | None = None,
    m: int | None = None,
    s: int | None = None,
    nrepeat: int = DEFAULT_REPEATS,
) -> Sizes:
    """Fill in the undefined sizes (``None``) and check that ``n * m == s``.

    With no total given, it is ``2^22`` (or the larger of ``n`` and ``m``)
    unless both ``n`` and ``m`` are given; with neither ``n`` nor ``m``
    the row length is ``min(s, 1024)``. Raises ``SizeError`` on negative or
    inconsistent sizes.
    """
    if s is None and (n is None or m is None):
        s = DEFAULT_TOTAL
        if n is not None and s < n:
            s = n
        if m is not None and s < m:
            s = m
    if s is None:
        s = n * m
    if n is None and m is None:
        m = DEFAULT_ROW_LENGTH if s > DEFAULT_ROW_LENGTH else s
    if m is None:
        m = _trunc_div(s, n)
    if n is None:
        n = _trunc_div(s, m)
    if s < 0 or n < 0 or m < 0 or nrepeat < 0:
        raise SizeError("Sizes must be greater than 0.")
    if n * m != s:
        raise SizeError("N * M != S")
    return Sizes(n=n, m=m, s=s, nrepeat=nrepeat)


def _option_value(argv: Sequence[str], index: int, flag: str) -> str:
    if index >= len(argv):
        raise ValueError(f"option {flag} needs a value")
    return argv[index]


def parse_args(argv: Sequence[str]) -> _Arguments:
    """Read ``-N/-M/-S`` exponents, ``-nrepeat``, ``-layout`` and ``-h``.

    Unknown arguments are ignored. Sizes not given are ``None``.
    """
    n = m = s = None
    nrepeat = DEFAULT_REPEATS
    layout = Layout.LEFT
    args = list(argv)
    index = 0
    while index < len(args):
        flag = args[index]
        if flag in ("-N", "-Rows"):
            index += 1
            n = int(2 ** int(_option_value(args, index, flag)))
        elif flag in ("-M", "-Columns"):
            index += 1
            m = int(2 ** float(_option_value(args, index, flag)))
        elif flag in ("-S", "-Size"):
            index += 1
            s = int(2 ** float(_option_value(args, index, flag)))
        elif flag == "-nrepeat":
            index += 1
            nrepeat = int(_option_value(args, index, flag))
        elif flag == "-layout":
            index += 1
            layout = Layout(_option_value(args, index, flag).lower())
        elif flag in ("-h", "-help"):
            return _Arguments(n, m, s, nrepeat, layout, True)
        index += 1
    return _Arguments(n, m, s, nrepeat, layout, False)


def compute_yax(y, a, x) -> float:
    """The scalar ``y^T A x``."""
    y = np.asarray(y, dtype=float)
    a = np.asarray(a, dtype=float)
    x = np.asarray(x, dtype=float)
    if a.ndim != 2 or y.shape != (a.shape[0],) or x.shape != (a.shape[1],):
        raise ValueError("compute_yax: shapes do not match")
    return float(y @ (a @ x))


def run(sizes: Sizes, layout: Layout = Layout.LEFT) -> _RunReport:
    """Fill y, x and A with ones and compute ``y^T A x`` ``nrepeat`` times.

    Reports the last result, the elapsed time, the number of repeats whose
    result differed from ``n*m``, and the problem size in GB.
    """
    y = np.ones(sizes.n)
    x = np.ones(sizes.m)
    a = np.ones((sizes.n, sizes.m), order=layout.order)
    solution = float(sizes.n) * float(sizes.m)
    result = 0.0
    mismatches = 0
    start = time.perf_counter()
    for _ in range(sizes.nrepeat):
        result = compute_yax(y, a, x)
        if result != solution:
            mismatches += 1
    seconds = time.perf_counter() - start
    gbytes = 1.0e-9 * 8 * (sizes.m + sizes.m * sizes.n + sizes.n)
    return _RunReport(result, seconds, mismatches, gbytes, max(sizes.nrepeat, 1))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ``y^T A x`` benchmark from command-line options."""
    try:
        args = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as exc:
        print(f"  {exc}", file=sys.stderr)
        return 1
    if args.show_help:
        print(_HELP)
        return 1
    if args.n is not None:
        print(f"  User N is {args.n}")
    if args.m is not None:
        print(f"  User M is {args.m}")
    if args.s is not None:
        print(f"  User S is {args.s}")
    try:
        sizes = check_sizes(args.n, args.m, args.s, args.nrepeat)
    except SizeError as exc:
        print(f"  {exc}")
        return 1
    print(f"  Total size S = {sizes.s} N = {sizes.n} M = {sizes.m}")

    report = run(sizes, args.layout)
    solution = float(sizes.n) * float(sizes.m)
    if sizes.nrepeat > 0:
        print(f"  Computed result for {sizes.n} x {sizes.m} is {report.result:f}")
    if report.mismatches:
        print(f"  Error: result( {report.result:f} ) != solution( {solution:f} )")
    bandwidth = (
        report.problem_gbytes * sizes.nrepeat / report.seconds
        if report.seconds > 0
        else float("inf")
    )
    print(
        f"  N( {sizes.n} ) M( {sizes.m} ) nrepeat ( {sizes.nrepeat} ) "
        f"problem( {report.problem_gbytes * 1000:g} MB ) time( {report.seconds:g} s ) "
        f"bandwidth( {bandwidth:g} GB/s )"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())