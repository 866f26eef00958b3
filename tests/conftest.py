import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(0)


@pytest.fixture
def T_true():
    return np.array(
        [[1.05, 0.02, 15.0],
         [-0.01, 0.98, -8.0],
         [0.0, 0.0, 1.0]],
        dtype=np.float64,
    )


def apply_T(T, pts):
    """Reference mapping, independent of the package under test."""
    ph = np.hstack([pts, np.ones((pts.shape[0], 1))])
    return (ph @ T.T)[:, :2]


def random_triangle(rng, *, low=-100.0, high=100.0, min_area2=2000.0):
    """Three points whose doubled triangle area is at least min_area2."""
    while True:
        pts = rng.uniform(low, high, size=(3, 2))
        u, v = pts[1] - pts[0], pts[2] - pts[0]
        if abs(u[0] * v[1] - u[1] * v[0]) >= min_area2:
            return pts
