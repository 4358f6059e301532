import math

import numpy as np
import pytest

from numlab.tridiagonal import (
    JacobiResult,
    Tridiagonal,
    jacobi_solve,
    laplace_system,
    linear_residual,
    main,
    read_problem,
    tridiag_matvec,
)


def _dense(system):
    return (
        np.diag(system.b)
        + np.diag(system.a[1:], -1)
        + np.diag(system.c[:-1], 1)
    )


def test_laplace_system_boundaries():
    system = laplace_system(0.25, 6)
    assert system.a[0] == 0.0
    assert system.c[-1] == 0.0
    assert np.all(system.a[1:] == -0.25)
    assert np.all(system.c[:-1] == -0.25)
    assert np.all(system.b == 1.0 + 2.0 * 0.25)
    assert len(system) == 6


def test_laplace_system_too_small():
    with pytest.raises(ValueError):
        laplace_system(0.1, 1)


def test_tridiagonal_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        Tridiagonal([0.0, 1.0], [1.0, 1.0, 1.0], [1.0, 0.0])


def test_matvec_second_difference_of_ones():
    n = 10
    system = Tridiagonal(np.full(n, -1.0), np.full(n, 2.0), np.full(n, -1.0))
    product = tridiag_matvec(system, np.ones(n))
    expected = np.zeros(n)
    expected[0] = expected[-1] = 1.0
    assert np.array_equal(product, expected)


def test_matvec_matches_dense_product():
    rng = np.random.default_rng(3)
    n = 8
    system = Tridiagonal(rng.random(n), rng.random(n), rng.random(n))
    x = rng.random(n)
    assert np.allclose(tridiag_matvec(system, x), _dense(system) @ x)


def test_matvec_rejects_wrong_length():
    system = laplace_system(0.1, 5)
    with pytest.raises(ValueError):
        tridiag_matvec(system, np.ones(4))


def test_residual_of_zero_guess_is_minus_rhs():
    n = 16
    system = laplace_system(0.3, n)
    r = np.ones(n)
    res, norm = linear_residual(system, np.zeros(n), r)
    assert np.array_equal(res, -r)
    assert norm * n == pytest.approx(np.linalg.norm(res))


def test_residual_of_exact_solution_is_small():
    n = 20
    system = laplace_system(0.7, n)
    r = np.linspace(1.0, 2.0, n)
    u = np.linalg.solve(_dense(system), r)
    res, norm = linear_residual(system, u, r)
    assert np.max(np.abs(res)) < 1e-12
    assert norm < 1e-12


def test_jacobi_converges_to_direct_solution():
    n = 50
    system = laplace_system(0.1, n)
    r = np.ones(n)
    result = jacobi_solve(system, np.zeros(n), r, 1e-12, 10000)
    assert isinstance(result, JacobiResult)
    assert result.converged
    assert result.residual < 1e-12
    assert result.iterations > 0
    assert np.allclose(result.solution, np.linalg.solve(_dense(system), r), atol=1e-10)


def test_jacobi_leaves_guess_untouched():
    n = 10
    system = laplace_system(0.1, n)
    guess = np.zeros(n)
    jacobi_solve(system, guess, np.ones(n), 1e-8, 1000)
    assert np.array_equal(guess, np.zeros(n))


def test_jacobi_exact_guess_needs_no_iterations():
    n = 12
    system = laplace_system(0.2, n)
    r = np.ones(n)
    exact = np.linalg.solve(_dense(system), r)
    result = jacobi_solve(system, exact, r, 1e-8, 100)
    assert result.iterations == 0
    assert result.converged


def test_jacobi_warns_when_limit_reached():
    n = 30
    system = laplace_system(5.0, n)
    with pytest.warns(RuntimeWarning):
        result = jacobi_solve(system, np.zeros(n), np.ones(n), 1e-14, 3)
    assert not result.converged
    assert result.residual >= 1e-14


def test_jacobi_negative_maxiter():
    system = laplace_system(0.1, 4)
    with pytest.raises(ValueError):
        jacobi_solve(system, np.zeros(4), np.ones(4), 1e-8, -1)


def test_read_problem_parses_input_format():
    text = "  gamma = 0.1,\n  delta = 1e-8,\n  global_N = 1000,\n"
    assert read_problem(text) == (0.1, 1e-8, 1000)


def test_read_problem_missing_field():
    with pytest.raises(ValueError):
        read_problem("  gamma = 0.1,\n  delta = 1e-8,\n")


def test_main_jacobi(tmp_path, capsys):
    path = tmp_path / "input.txt"
    path.write_text("  gamma = 0.1,\n  delta = 1e-8,\n  global_N = 40,\n")
    assert main(["--input", str(path)]) == 0
    out = capsys.readouterr().out
    assert "problem size N = 40" in out
    assert "converged in" in out
    assert "final residual" in out


def test_main_jacobi_missing_file(tmp_path):
    assert main(["--input", str(tmp_path / "nothing.txt")]) == 1


def test_main_matvec_writes_product(tmp_path, capsys):
    path = tmp_path / "r.txt"
    assert main(["matvec", "--size", "10", "--output", str(path)]) == 0
    values = [float(line) for line in path.read_text().splitlines()]
    system = Tridiagonal(np.full(10, -1.0), np.full(10, 2.0), np.full(10, -1.0))
    assert values == pytest.approx(list(tridiag_matvec(system, np.ones(10))))
    reported = float(capsys.readouterr().out.split("=")[1])
    assert reported == pytest.approx(math.sqrt(sum(v * v for v in values)))