import math

import numpy as np
import pytest

from affinedlt import (
    affine_dlt, affine_dlt3, DLTTolerance, DegenerateInputError, InvalidInputError,
    DEFAULT_COND_EPS, FLOAT32_EPS, FLOAT64_EPS,
)

THIN_TRIANGLE = np.array([[0.0, 0.0], [100.0, 0.0], [0.0, 1.0]])
THIN_RECTANGLE = np.array([[0.0, 0.0], [100.0, 0.0], [0.0, 1.0], [100.0, 1.0]])


def test_default_is_float32_accuracy_bound():
    tol = DLTTolerance()
    assert tol.cond_eps == DEFAULT_COND_EPS
    assert DEFAULT_COND_EPS == pytest.approx(math.sqrt(FLOAT64_EPS / FLOAT32_EPS))
    assert FLOAT32_EPS == pytest.approx(np.finfo(np.float32).eps)


@pytest.mark.parametrize("value", [0.0, -1.0, float("nan"), float("inf")])
def test_rejects_non_positive(value):
    with pytest.raises(InvalidInputError):
        DLTTolerance(cond_eps=value)


def test_from_env(monkeypatch):
    monkeypatch.setenv("AFFINEDLT_COND_EPS", "0.25")
    assert DLTTolerance.from_env().cond_eps == 0.25

    monkeypatch.delenv("AFFINEDLT_COND_EPS")
    assert DLTTolerance.from_env().cond_eps == DEFAULT_COND_EPS


def test_from_env_bad_value_is_invalid_input(monkeypatch):
    monkeypatch.setenv("AFFINEDLT_COND_EPS", "tiny")
    with pytest.raises(InvalidInputError):
        DLTTolerance.from_env()


def test_estimators_ignore_env_after_import(monkeypatch):
    # Tolerances are read once, like AFFINEDLT_DEBUG
    monkeypatch.setenv("AFFINEDLT_COND_EPS", "abc")
    result = np.zeros((3, 3), dtype=np.float32)
    affine_dlt3(result, THIN_TRIANGLE, THIN_TRIANGLE)
    assert np.allclose(result, np.eye(3), atol=1e-5)


@pytest.mark.parametrize("estimator", [affine_dlt3, affine_dlt])
def test_cond_eps_controls_thin_triangles(estimator):
    # sigma_min / sigma_max of the normalized block is about 1e-2 here
    dest = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])

    estimator(np.zeros((3, 3), dtype=np.float32), THIN_TRIANGLE, dest)
    with pytest.raises(DegenerateInputError):
        estimator(np.zeros((3, 3), dtype=np.float32), THIN_TRIANGLE, dest, tolerance=DLTTolerance(cond_eps=0.1))


def test_cond_eps_controls_thin_rectangles():
    # sigma ratio for this 100:1 rectangle is 1e-2
    dest = THIN_RECTANGLE * 2.0

    affine_dlt(np.zeros((3, 3), dtype=np.float32), THIN_RECTANGLE, dest)
    with pytest.raises(DegenerateInputError):
        affine_dlt(np.zeros((3, 3), dtype=np.float32), THIN_RECTANGLE, dest, tolerance=DLTTolerance(cond_eps=0.05))


def test_module_default_tolerance_is_used(monkeypatch):
    monkeypatch.setattr("affinedlt.affine.DEFAULT_TOLERANCE", DLTTolerance(cond_eps=0.5))
    with pytest.raises(DegenerateInputError):
        affine_dlt3(np.zeros((3, 3), dtype=np.float32), THIN_TRIANGLE, THIN_TRIANGLE)
    with pytest.raises(DegenerateInputError):
        affine_dlt(np.zeros((3, 3), dtype=np.float32), THIN_RECTANGLE, THIN_RECTANGLE)
