# Andy Zhao
"""
Apply an estimated transform to points and score it.

These are the quantities the estimators are judged by:

    e_i = || T(src_i) - dest_i ||_2          (residuals_L2)
    RSS = sum_i e_i^2                         (residual_sum_of_squares)

affine_dlt minimizes RSS over all affine T.
"""

from __future__ import annotations

import numpy as np

from .errors import InvalidInputError
from .types import FloatArray, Mat3x3, Points2D, as_homogeneous
from .validation import as_points2d


def apply_affine(T: Mat3x3, pts: Points2D) -> Points2D:
    """
    Apply a 3x3 transform to (N,2) points (or (N,3) homogeneous rows),
    returning (N,2) float64 points.

        [x', y', w']^T = T @ [x, y, 1]^T

    For an affine T, w' is always 1. A general 3x3 is divided through by w'.
    """
    T = np.asarray(T)
    if T.shape != (3, 3):
        raise InvalidInputError(f"Expected T shape (3,3), got {T.shape}")
    p2 = as_points2d(pts, name="pts")

    # Each point is a row, so multiply by T^T
    ph_t = as_homogeneous(p2) @ T.astype(np.float64).T  # (N,3)

    w = ph_t[:, 2:3]
    if np.any(w == 0.0):
        raise InvalidInputError("transform maps a point to infinity (w == 0)")
    return ph_t[:, :2] / w


def residuals_L2(T: Mat3x3, src: Points2D, dest: Points2D) -> FloatArray:
    """
    Per-correspondence reprojection error, shape (N,).
    """
    dest2 = as_points2d(dest, name="dest")
    predicted = apply_affine(T, src)
    if predicted.shape != dest2.shape:
        raise InvalidInputError(f"src and dest must have same number of points, got {predicted.shape[0]} vs {dest2.shape[0]}")
    return np.linalg.norm(predicted - dest2, axis=1)


def residual_sum_of_squares(T: Mat3x3, src: Points2D, dest: Points2D) -> float:
    e = residuals_L2(T, src, dest)
    return float(np.sum(e * e))
