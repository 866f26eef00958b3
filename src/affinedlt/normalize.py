# Andy Zhao
"""
Isotropic point normalization for conditioning the DLT systems.

Each point set is moved so that its centroid sits at the origin and its
mean distance to the origin is sqrt(2):

    p_n = s * (p - c)

    N = [[s, 0, -s*cx],
         [0, s, -s*cy],
         [0, 0,     1]]

If A_n maps normalized source points to normalized destination points, the
transform in the original coordinates is

    A = N_dest^-1 @ A_n @ N_src

For the affine model this does not change the least-squares minimizer: the
similarity on the source side is absorbed by the affine parameters, and the
isotropic scale on the destination side multiplies every residual by the
same factor.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .types import FloatArray, Points2D

SQRT2 = float(np.sqrt(2.0))


@dataclass(frozen=True)
class Normalization:
    centroid: FloatArray   # shape (2,)
    scale: float

    def matrix(self) -> FloatArray:
        """3x3 similarity N mapping original -> normalized coordinates."""
        s = self.scale
        cx, cy = float(self.centroid[0]), float(self.centroid[1])
        return np.array(
            [
                [s, 0.0, -s * cx],
                [0.0, s, -s * cy],
                [0.0, 0.0, 1.0],
            ],
            dtype=np.float64,
        )

    def inverse_matrix(self) -> FloatArray:
        """Closed-form N^-1 (normalized -> original)."""
        inv_s = 1.0 / self.scale
        cx, cy = float(self.centroid[0]), float(self.centroid[1])
        return np.array(
            [
                [inv_s, 0.0, cx],
                [0.0, inv_s, cy],
                [0.0, 0.0, 1.0],
            ],
            dtype=np.float64,
        )


def normalize_points(pts: Points2D) -> tuple[Points2D, Normalization]:
    """
    Return (normalized points, Normalization) for an (N,2) float64 point set.

    Coincident points have no spread to normalize; they are only centered
    (scale 1) and the singularity checks downstream decide what that means.
    """
    centroid = pts.mean(axis=0)
    centered = pts - centroid
    mean_dist = float(np.mean(np.linalg.norm(centered, axis=1)))

    # Spread indistinguishable from rounding noise at the points' own magnitude
    floor = np.finfo(np.float64).eps * float(np.max(np.abs(pts)))
    if mean_dist <= floor:
        return centered, Normalization(centroid=centroid, scale=1.0)

    scale = SQRT2 / mean_dist
    return centered * scale, Normalization(centroid=centroid, scale=scale)


def denormalize_affine(A_n: FloatArray, src_norm: Normalization, dest_norm: Normalization) -> FloatArray:
    """
    Undo normalization: A = N_dest^-1 @ A_n @ N_src, bottom row reset to [0,0,1].
    """
    A = dest_norm.inverse_matrix() @ A_n @ src_norm.matrix()
    A[2, :] = (0.0, 0.0, 1.0)
    return A
