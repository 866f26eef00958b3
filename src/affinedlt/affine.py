# Andy Zhao
"""
Affine estimation by Direct Linear Transform (3x3 homogeneous form).

We estimate an affine transform T such that:

    [x', y', 1]^T  ≈  T @ [x, y, 1]^T

where:

    T = [[a, b, tx],
         [c, d, ty],
         [0, 0,  1]]

Unknowns are 6 parameters: a, b, tx, c, d, ty.

Two entry points, both writing into a caller-allocated (3,3) result:
- affine_dlt3: exactly 3 correspondences, square 6x6 system, direct solve
- affine_dlt:  N >= 3 correspondences, normal equations of the 2N x 6 system

Systems are built and solved in float64 on normalized points, then cast to
the result's dtype (float32 by convention).
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from .config import DEBUG, DEFAULT_TOLERANCE, DLTTolerance
from .errors import DegenerateInputError
from .normalize import denormalize_affine, normalize_points
from .types import FloatArray, Mat3x3, Points2D, as_homogeneous, params_to_mat3x3
from .validation import as_points2d, check_point_sets


# ---------- Linear system ----------
def _build_system(src: Points2D, dest: Points2D) -> tuple[FloatArray, FloatArray]:
    """
    Stack two equations per correspondence (x, y) -> (x', y'):

        x' = a*x + b*y + tx   ->  [x, y, 1, 0, 0, 0] . theta = x'
        y' = c*x + d*y + ty   ->  [0, 0, 0, x, y, 1] . theta = y'

    Returns D (2N x 6) and t (2N,), rows ordered x0', y0', x1', y1', ...
    """
    n = src.shape[0]
    ph = as_homogeneous(src)  # (N,3)

    D = np.zeros((2 * n, 6), dtype=np.float64)
    D[0::2, 0:3] = ph
    D[1::2, 3:6] = ph

    t = dest.reshape(-1).astype(np.float64)
    return D, t


def _store(result: Mat3x3, T: FloatArray) -> Mat3x3:
    """
    Copy a finished float64 estimate into the caller's buffer.
    The buffer is only touched once the estimate is known to be good.
    """
    # Overflow shows up as inf and is reported below
    with np.errstate(over="ignore"):
        out = T.astype(result.dtype)
    if not np.isfinite(out).all():
        raise DegenerateInputError(f"affine solution is not representable as {result.dtype}")
    result[...] = out
    return result


def _singular_value_ratio(src_n: Points2D) -> float:
    """
    sigma_min / sigma_max of the normalized block M = [[x, y, 1], ...].

    D (2N x 6) is block diagonal with two copies of M, so this is also the
    ratio for D. Both solvers gate on it, so for N == 3 they accept and
    reject the same triangles.
    """
    sv = np.linalg.svd(as_homogeneous(src_n), compute_uv=False)
    return float(sv[-1] / sv[0]) if sv[0] > 0.0 else 0.0


# ---------- Exact 3-point solver ----------
def affine_dlt3(
        result: Mat3x3,
        src: Points2D,
        dest: Points2D,
        *,
        tolerance: Optional[DLTTolerance] = None,
) -> Mat3x3:
    """
    Exact affine transform from exactly 3 point correspondences.

    result: (3,3) floating array, overwritten on success only
    src:    (3,2) or (3,3) homogeneous source points (non-collinear)
    dest:   (3,2) or (3,3) homogeneous destination points

    Returns result.

    Raises:
      InvalidInputError if the shapes/counts are wrong,
      DegenerateInputError if the source points are (nearly) collinear.
    """
    src2, dest2 = check_point_sets(result, src, dest, exact_count=3)
    tol = tolerance if tolerance is not None else DEFAULT_TOLERANCE

    src_n, src_norm = normalize_points(src2)
    dest_n, dest_norm = normalize_points(dest2)

    # The 6x6 system is block diagonal with two copies of
    #   M = [[x0, y0, 1], [x1, y1, 1], [x2, y2, 1]]
    # so it is singular exactly when the triangle is flat.
    ratio = _singular_value_ratio(src_n)
    if DEBUG:
        print(f"[DLT3] sigma_min/sigma_max={ratio:.3e} cond_eps={tol.cond_eps:.3e}")
    if not ratio > tol.cond_eps:
        raise DegenerateInputError(
            f"source points are collinear or coincident (sigma ratio={ratio:.3e} <= {tol.cond_eps:.3e})"
        )

    A, b_vec = _build_system(src_n, dest_n)

    # Square system: direct solve, no least squares needed
    try:
        theta = np.linalg.solve(A, b_vec)
    except np.linalg.LinAlgError as exc:
        raise DegenerateInputError(f"3-point system is singular: {exc}") from exc

    T = denormalize_affine(params_to_mat3x3(theta), src_norm, dest_norm)
    return _store(result, T)


# ---------- General N-point least squares ----------
def affine_dlt(
        result: Mat3x3,
        src: Points2D,
        dest: Points2D,
        *,
        tolerance: Optional[DLTTolerance] = None,
) -> Mat3x3:
    """
    Least-squares affine transform from N >= 3 point correspondences.

    Minimizes sum_i || dest_i - T @ src_i ||^2 by solving the normal equations

        (D^T D) theta = D^T t

    where D is the 2N x 6 design matrix and t the stacked destination
    coordinates. D^T D is a fixed 6x6 regardless of N.

    For N == 3 the result matches affine_dlt3 up to floating-point rounding.

    Raises:
      InvalidInputError if the shapes/counts are wrong,
      DegenerateInputError if the design matrix is rank deficient
      (all points collinear, repeated points only, ...).
    """
    src2, dest2 = check_point_sets(result, src, dest)
    tol = tolerance if tolerance is not None else DEFAULT_TOLERANCE

    src_n, src_norm = normalize_points(src2)
    dest_n, dest_norm = normalize_points(dest2)

    ratio = _singular_value_ratio(src_n)
    if DEBUG:
        print(f"[DLT] n={src2.shape[0]} sigma_min/sigma_max={ratio:.3e} cond_eps={tol.cond_eps:.3e}")
    if not ratio > tol.cond_eps:
        raise DegenerateInputError(
            f"design matrix is rank deficient (sigma ratio={ratio:.3e} <= {tol.cond_eps:.3e}); "
            f"are the source points collinear?"
        )

    D, t = _build_system(src_n, dest_n)
    DtD = D.T @ D
    Dtt = D.T @ t

    try:
        theta = np.linalg.solve(DtD, Dtt)
    except np.linalg.LinAlgError as exc:
        raise DegenerateInputError(f"normal equations are singular: {exc}") from exc

    T = denormalize_affine(params_to_mat3x3(theta), src_norm, dest_norm)
    return _store(result, T)


# ---------- Convenience ----------
def estimate_affine(
        src: Points2D,
        dest: Points2D,
        *,
        dtype: Union[np.dtype, type] = np.float32,
        tolerance: Optional[DLTTolerance] = None,
) -> Mat3x3:
    """
    Allocate a (3,3) result of `dtype` and pick the solver from the point count:
    exactly 3 points -> affine_dlt3, otherwise affine_dlt.
    """
    result = np.zeros((3, 3), dtype=dtype)
    n_src = as_points2d(src, name="src").shape[0]
    if n_src == 3:
        return affine_dlt3(result, src, dest, tolerance=tolerance)
    return affine_dlt(result, src, dest, tolerance=tolerance)
