import io

import numpy as np
import pytest

from numlab.vec2d import (
    Vec2D,
    dot,
    linspace,
    max_norm,
    random,
    rms_norm,
    two_norm,
)


@pytest.fixture
def vectors():
    a, b, c = Vec2D(5, 4), Vec2D(5, 4), Vec2D(5, 4)
    for i in range(b.rows):
        for j in range(b.cols):
            b[i][j] = 0.1 * (4 * i + j + 1)
    for i in range(c.rows):
        for j in range(c.cols):
            c[i][j] = 4 * i + j + 1
    return a, b, c


def test_new_vector_is_zero(vectors):
    a, _, _ = vectors
    assert np.all(a.values() == 0.0)
    assert a.values().shape == (5, 4)


def test_length(vectors):
    _, b, _ = vectors
    assert len(b) == 20


def test_invalid_shape_gives_empty_vector():
    v = Vec2D(0, 3)
    assert (v.rows, v.cols, len(v)) == (0, 0, 0)
    with pytest.raises(ValueError):
        v.scale(2.0)
    with pytest.raises(ValueError):
        v.min()


def test_data_access_and_file_write(vectors, tmp_path):
    a, _, _ = vectors
    dat = a.values()
    for i, value in enumerate([10.0, 15.0, 20.0, 25.0, 30.0]):
        dat[i, :] = value
    path = tmp_path / "a_data"
    a.write(path)
    lines = path.read_text().split("\n")
    assert lines[0] == "  10  10  10  10"
    assert lines[4] == "  30  30  30  30"
    assert lines[5:] == ["", ""]
    assert [a[i][j] for i in range(5) for j in range(4)][::4] == [10, 15, 20, 25, 30]


def test_update_single_entry(vectors):
    a, _, _ = vectors
    a[4][3] = 31.0
    assert a[4, 3] == 31.0
    assert a.max() == 31.0


def test_write_to_stream():
    v = Vec2D(1, 2)
    v[0][0] = 1.0
    v[0][1] = 0.1
    out = io.StringIO()
    v.write(out)
    assert out.getvalue() == "  1   0.10000000000000001 \n\n"


def test_write_to_stdout(capsys):
    v = Vec2D(2, 1)
    v.fill(2.0)
    v.write()
    assert capsys.readouterr().out == "  2 \n  2 \n\n"


def test_write_errors(tmp_path):
    with pytest.raises(ValueError):
        Vec2D(0, 0).write(tmp_path / "x")
    with pytest.raises(ValueError):
        Vec2D(2, 2).write("")


def test_constant(vectors):
    _, b, _ = vectors
    b.fill(-1.0)
    assert b.values().ravel().tolist() == [-1.0] * 20


def test_copy(vectors):
    a, _, c = vectors
    a.copy_from(c)
    assert a.values().ravel().tolist() == list(range(1, 21))


def test_copy_size_mismatch():
    with pytest.raises(ValueError):
        Vec2D(2, 3).copy_from(Vec2D(3, 2))


def test_scale(vectors):
    _, _, c = vectors
    c.scale(5.0)
    assert c.values().ravel().tolist() == [5.0 * k for k in range(1, 21)]


def test_linear_sum():
    xs = [Vec2D(10, 2) for _ in range(5)]
    for i in range(10):
        for j in range(2):
            xs[0][i][j] = 1.0 * i + j
            xs[1][i][j] = -5.0 + 1.0 * i + 1.0 * j
            xs[2][i][j] = 2.0 + 2.0 * i + 2.0 * j
            xs[3][i][j] = 20.0 - 1.0 * i + j
            xs[4][i][j] = -20.0 + 1.0 * i + j
    xs[0].linear_sum(-2.0, xs[1], 1.0, xs[2])
    assert xs[0].values().ravel().tolist() == [12.0] * 20


def test_linear_sum_mismatch():
    with pytest.raises(ValueError):
        Vec2D(2, 2).linear_sum(1.0, Vec2D(2, 2), 1.0, Vec2D(2, 3))


def test_scalar_routines(vectors):
    a, b, c = vectors
    b.fill(-1.0)
    a.copy_from(c)
    c.scale(5.0)
    assert two_norm(b) == pytest.approx(4.4721359549995796, rel=1e-15)
    assert rms_norm(c) == pytest.approx(59.8957427535547, rel=1e-13)
    assert max_norm(b) == 1.0
    assert a.min() == 1.0
    assert c.max() == 100.0
    assert dot(a, c) == 14350.0


def test_dot_mismatch():
    with pytest.raises(ValueError):
        dot(Vec2D(2, 2), Vec2D(4, 1))


def test_linspace():
    d = linspace(0.0, 19.0, 5, 4)
    assert d.values().shape == (5, 4)
    assert d.values().ravel() == pytest.approx(list(range(20)))


def test_random_range_and_seed():
    f = random(5, 4, np.random.default_rng(3))
    g = random(5, 4, np.random.default_rng(3))
    assert f.values().shape == (5, 4)
    assert np.all((f.values() >= 0.0) & (f.values() <= 1.0))
    assert np.array_equal(f.values(), g.values())