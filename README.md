# numlab

Small numerical kernels built on NumPy: two-dimensional vectors,
Gram-Schmidt orthonormalisation, tridiagonal Jacobi solves (whole and split
into blocks), equilibrium chemistry, Gauss quadrature on the unit square,
and a handful of worksharing examples. Each module is usable as a library;
most also have a command.

## Installation

```
pip install .
pip install ".[test]"   # with pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `numlab.vec2d` | `Vec2D(rows, cols)`, zero-initialised and indexed by row (`v[i][j]`); methods `linear_sum`, `scale`, `copy_from`, `fill`, `min`, `max`, `values`, `write`; functions `linspace`, `random`, `dot`, `two_norm`, `rms_norm`, `max_norm` |
| `numlab.vec2d_flat` | `FlatVec2D(rows, cols)`, the same operations over one flat row-major array, indexed by flat position (`v[k]`) or by `(row, col)` (`v[i, j]`) |
| `numlab.gram_schmidt` | `gram_schmidt(vectors)` orthonormalises `Vec2D` or `FlatVec2D` vectors in place; raises `LinearDependenceError` when a remainder's norm is below 1e-12 |
| `numlab.tridiagonal` | `Tridiagonal` (three diagonals), `laplace_system`, `linear_residual`, `jacobi_solve` (returns a `JacobiResult`), `tridiag_matvec`, `read_problem` |
| `numlab.partitioned` | The Jacobi solve over contiguous `Subdomain` blocks that take boundary values from their neighbours: `split_sizes`, `build_subdomains`, `partitioned_residual`, `partitioned_jacobi` |
| `numlab.chemistry` | `rate_coefficients` (a `RateCoefficients`), `chem_residual`, `max_norm`, `chem_solver` (a damped fixed-point iteration returning a `ChemResult`), and `solve_field`, which solves a list of temperatures over a thread pool and raises `ConvergenceError` if any point misses the tolerance |
| `numlab.quadrature` | 8-point Gauss–Legendre quadrature of `a*exp(3a)*sin(25*pi*b)` over the unit square: `integrand`, `exact_integral`, `row_ranges`, `gauss_quadrature`, `parallel_quadrature` |
| `numlab.vectors` | Element-wise kernels: `one_norm`, `vector_sum`, `vector_difference`, `vector_product`, `linear_combination`, `vector_scale`, `vector_pow` (non-negative exponent), `rms_norm`, `inf_norm`, `dot` |
| `numlab.drivers` | Example programs over `numlab.vectors`: `read_vector_length`, `intro_dot_product`, `write_dot_report`, `vector_ops_report`, `profiling_run`, `openmp_run`, `distributed_dot` |
| `numlab.yax` | The `y^T A x` benchmark on all-ones data: `check_sizes` (returns `Sizes`, raises `SizeError`), `parse_args`, `compute_yax`, `run`, and `Layout` (`LEFT` column-major, `RIGHT` row-major) |
| `numlab.examples` | Worksharing examples: `chunked_ranges`, `matrix_multiply`, `reduction_sum`, `orphan_dot`, `workshare_sections`, `locked_sections`, `parallel_total` |

## Library use

```python
from numlab.vec2d import Vec2D, linspace, dot, two_norm
from numlab.gram_schmidt import gram_schmidt, LinearDependenceError

d = linspace(0.0, 19.0, 5, 4)      # 0, 1, ..., 19 in a 5x4 layout
print(d.min(), d.max(), two_norm(d))

a = Vec2D(5, 4)
a.fill(2.0)
print(dot(a, d))
```

```python
import numpy as np
from numlab.tridiagonal import laplace_system, jacobi_solve

system = laplace_system(gamma=0.1, n=100)
result = jacobi_solve(system, np.zeros(100), np.ones(100), delta=1e-8, maxiter=10000)
print(result.converged, result.iterations, result.residual)
```

`jacobi_solve` and `partitioned_jacobi` issue a `RuntimeWarning` and return
an unconverged result when the iteration limit is reached.

## Commands

```
numlab-tridiagonal [jacobi|matvec] [--input FILE] [--output FILE] [--size N]
numlab-partitioned [--input FILE] [--procs P]
numlab-chemistry [--intervals N] [--workers W] [--seed S] [--lam L] [--eps E] [--maxit K]
numlab-quadrature [--n N] [--procs P]
numlab-drivers {intro,ops,profile,openmp,mpi} ...
numlab-yax [-N e] [-M e] [-S e] [-nrepeat k] [-layout left|right] [-h]
numlab-examples {mm,reduction,orphan,workshare,sections,locks,total} [--threads T]
```

`numlab-tridiagonal jacobi` (the default) and `numlab-partitioned` read
their problem from `input.txt` unless `--input` is given, in the form

```
  gamma = 0.1,
  delta = 1e-8,
  global_N = 1000,
```

`numlab-tridiagonal matvec` forms the product of the (-1, 2, -1) matrix with
a vector of ones, prints its 2-norm and writes the entries to `r.txt`.

`numlab-chemistry` asks for the number of points on standard input when
`--intervals` is not given; a value below 1 exits with status 1.

For `numlab-yax`, `-N`, `-M` and `-S` take exponents of two; `-h` prints the
options and exits with status 1.

## What it does not do

Everything runs inside one Python process. The "processes" of
`numlab-partitioned`, `numlab-quadrature --procs` and `numlab-drivers mpi`
are blocks of the data handled in that process, and the workers of
`numlab-chemistry` and `numlab-examples` are threads. There is no
message passing between separate processes or machines, and no GPU
execution; `numlab-yax` runs on the CPU through NumPy.

## Tests

```
pytest
```