# Andy Zhao
"""
Input checks shared by both estimators.

Everything here runs before any linear algebra, so a bad call never
produces a partial result.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .errors import InvalidInputError
from .types import Mat3x3, Points2D

MIN_POINTS = 3


def check_result_buffer(result: Mat3x3) -> None:
    """
    The caller-owned output must be a writeable (3,3) floating array.
    """
    if not isinstance(result, np.ndarray):
        raise InvalidInputError(f"result must be a numpy array, got {type(result).__name__}")
    if result.shape != (3, 3):
        raise InvalidInputError(f"result must have shape (3,3), got {result.shape}")
    if not np.issubdtype(result.dtype, np.floating):
        raise InvalidInputError(f"result must have a floating dtype, got {result.dtype}")
    if not result.flags.writeable:
        raise InvalidInputError("result buffer is read-only")


def as_points2d(pts: np.ndarray, *, name: str = "pts") -> Points2D:
    """
    Read an (N,2) or homogeneous (N,3) point set as float64 (N,2).

    Homogeneous rows (x, y, w) are divided by w. The input is never modified.
    """
    arr = np.asarray(pts)
    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise InvalidInputError(f"{name} must have shape (N,2) or (N,3), got {arr.shape}")
    if not (np.issubdtype(arr.dtype, np.floating) or np.issubdtype(arr.dtype, np.integer)):
        raise InvalidInputError(f"{name} must be numeric, got dtype {arr.dtype}")

    arr = arr.astype(np.float64, copy=False)
    if not np.isfinite(arr).all():
        raise InvalidInputError(f"{name} contains NaN or Inf")

    if arr.shape[1] == 3:
        w = arr[:, 2]
        if np.any(w == 0.0):
            raise InvalidInputError(f"{name} has a homogeneous row with w == 0")
        # New array; arr may alias the caller's data
        arr = arr[:, :2] / w[:, None]

    return arr


def check_point_sets(
        result: Mat3x3,
        src: np.ndarray,
        dest: np.ndarray,
        *,
        exact_count: Optional[int] = None,
) -> tuple[Points2D, Points2D]:
    """
    Validate (result, src, dest) for an estimator call.

    - result: writeable (3,3) floating array
    - src, dest: matching N, N >= 3
    - exact_count: if given, N must equal it (the 3-point solver passes 3)

    Returns float64 (N,2) views/copies of src and dest.
    """
    check_result_buffer(result)
    src2 = as_points2d(src, name="src")
    dest2 = as_points2d(dest, name="dest")

    n_src, n_dest = src2.shape[0], dest2.shape[0]
    if n_src != n_dest:
        raise InvalidInputError(f"src and dest must have the same number of points, got {n_src} vs {n_dest}")
    if n_src < MIN_POINTS:
        raise InvalidInputError(f"affine estimation needs at least {MIN_POINTS} points, got {n_src}")
    if exact_count is not None and n_src != exact_count:
        raise InvalidInputError(f"expected exactly {exact_count} points, got {n_src}")

    return src2, dest2
