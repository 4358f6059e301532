import numpy as np
import pytest

from numlab.partitioned import (
    Subdomain,
    build_subdomains,
    main,
    partitioned_jacobi,
    partitioned_residual,
    split_sizes,
)
from numlab.tridiagonal import jacobi_solve, laplace_system, linear_residual


def test_split_sizes_last_takes_remainder():
    assert split_sizes(10, 3) == [3, 3, 4]


@pytest.mark.parametrize("n,nprocs", [(12, 4), (17, 5), (9, 1), (100, 7)])
def test_split_sizes_cover_all_rows(n, nprocs):
    sizes = split_sizes(n, nprocs)
    assert sum(sizes) == n
    assert len(sizes) == nprocs
    assert all(size == n // nprocs for size in sizes[:-1])


@pytest.mark.parametrize("n,nprocs", [(2, 3), (5, 0)])
def test_split_sizes_errors(n, nprocs):
    with pytest.raises(ValueError):
        split_sizes(n, nprocs)


def test_build_subdomains_boundaries():
    blocks = build_subdomains(0.4, 12, 3)
    assert blocks[0].a[0] == 0.0
    assert blocks[-1].c[-1] == 0.0
    assert blocks[1].a[0] == -0.4
    assert blocks[0].c[-1] == -0.4
    assert all(np.all(block.u == 0.0) for block in blocks)


def test_subdomain_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        Subdomain(a=[0.0, 1.0], b=[1.0, 1.0], c=[1.0, 0.0], u=[0.0], r=[1.0, 1.0])


@pytest.mark.parametrize("nprocs", [1, 2, 3, 4])
def test_residual_matches_serial(nprocs):
    n = 12
    gamma = 0.3
    blocks = build_subdomains(gamma, n, nprocs)
    rng = np.random.default_rng(nprocs)
    for block in blocks:
        block.u[:] = rng.random(len(block))
    u = np.concatenate([block.u for block in blocks])
    residuals, norm = partitioned_residual(blocks)
    serial_res, serial_norm = linear_residual(laplace_system(gamma, n), u, np.ones(n))
    assert np.allclose(np.concatenate(residuals), serial_res)
    assert norm == pytest.approx(serial_norm)


def test_residual_needs_two_rows_per_block():
    blocks = build_subdomains(0.1, 3, 3)
    with pytest.raises(ValueError):
        partitioned_residual(blocks)


def test_jacobi_matches_serial_solve():
    n, gamma, delta = 40, 0.2, 1e-10
    blocks = build_subdomains(gamma, n, 4)
    result = partitioned_jacobi(blocks, delta, 10000)
    serial = jacobi_solve(laplace_system(gamma, n), np.zeros(n), np.ones(n), delta, 10000)
    assert result.converged
    assert result.residual < delta
    assert result.iterations == serial.iterations
    assert np.allclose(result.solution, serial.solution)


def test_jacobi_updates_blocks_in_place():
    blocks = build_subdomains(0.2, 20, 2)
    result = partitioned_jacobi(blocks, 1e-10, 10000)
    assert np.array_equal(np.concatenate([b.u for b in blocks]), result.solution)
    _, norm = partitioned_residual(blocks)
    assert norm < 1e-10


def test_jacobi_warns_when_limit_reached():
    blocks = build_subdomains(5.0, 20, 2)
    with pytest.warns(RuntimeWarning):
        result = partitioned_jacobi(blocks, 1e-14, 2)
    assert not result.converged


def test_main_runs(tmp_path, capsys):
    path = tmp_path / "input.txt"
    path.write_text("  gamma = 0.1,\n  delta = 1e-8,\n  global_N = 40,\n")
    assert main(["--input", str(path), "--procs", "2"]) == 0
    out = capsys.readouterr().out
    assert "with 2 processors" in out
    assert "local problem sizes n = 20" in out
    assert "converged in" in out


def test_main_bad_split(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("  gamma = 0.1,\n  delta = 1e-8,\n  global_N = 2,\n")
    assert main(["--input", str(path), "--procs", "4"]) == 1