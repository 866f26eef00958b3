# Andy Zhao

"""
Shared typed primitives for affine estimation.

Defines:
- Typed NumPy aliases for geometry
    - Points are (N,2) float arrays, or (N,3) homogeneous rows
    - Transforms are 3x3 homogeneous matrices
- Small helpers to convert points and sanity-check transforms
"""

from __future__ import annotations

from typing import TypeAlias

import numpy as np
import numpy.typing as npt

# ---------- Numpy typing aliases ----------
# - float64 for building and solving the linear systems
# - float32 for the estimated affine matrix handed back to callers

FloatArray: TypeAlias = npt.NDArray[np.float64]
Float32Array: TypeAlias = npt.NDArray[np.float32]

# Points in 2D coordinates.
Points2D: TypeAlias = FloatArray      # shape: (N, 2)

# Homogeneous points [x, y, w].
PointsHomog: TypeAlias = FloatArray   # shape: (N, 3)

# 3x3 homogeneous transform matrix.
# Affine is represented as 3x3 with last row [0,0,1].
Mat3x3: TypeAlias = npt.NDArray[np.floating]   # shape: (3, 3)

# Parameter vector [a, b, tx, c, d, ty]
AffineParams: TypeAlias = FloatArray  # shape: (6,)

AFFINE_BOTTOM_ROW = (0.0, 0.0, 1.0)


# ---------- Helper Functions ----------
def as_homogeneous(pts: Points2D) -> PointsHomog:
    """
    Convert (N,2) points -> (N,3) homogeneous points: [x, y, 1].
    """
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"Expected points shape (N, 2) but got {pts.shape}")

    ones = np.ones((pts.shape[0], 1), dtype=np.float64)
    return np.hstack([pts.astype(np.float64), ones])


def params_to_mat3x3(theta: AffineParams) -> FloatArray:
    """
    Convert parameter vector theta = [a, b, tx, c, d, ty] into a 3x3 affine matrix.
    """
    a, b, tx, c, d, ty = map(float, np.asarray(theta).reshape(-1).tolist())
    return np.array(
        [
            [a, b, tx],
            [c, d, ty],
            list(AFFINE_BOTTOM_ROW),
        ],
        dtype=np.float64,
    )


def is_valid_mat3x3(T: Mat3x3) -> bool:
    """
    Verify a 3x3 transform matrix (right shape, all entries finite).
    """
    return isinstance(T, np.ndarray) and T.shape == (3, 3) and bool(np.isfinite(T).all())


def is_affine_mat3x3(T: Mat3x3) -> bool:
    """
    A valid 3x3 whose bottom row is exactly [0, 0, 1].
    """
    return is_valid_mat3x3(T) and tuple(float(v) for v in T[2]) == AFFINE_BOTTOM_ROW
