# Andy Zhao
"""
affinedlt

Estimate 2D affine transforms from point correspondences by Direct Linear
Transform.

This package provides:
- An exact 3-point solver and an N-point least-squares solver that write
  into a caller-allocated 3x3 matrix
- Shared input validation and error types
- Tolerance configuration for singularity detection
- Helpers to apply a transform and measure reprojection error
"""

from .types import (
    FloatArray, Float32Array, Points2D, PointsHomog, Mat3x3, AffineParams,
    as_homogeneous, params_to_mat3x3, is_valid_mat3x3, is_affine_mat3x3,
)

from .errors import AffineEstimationError, InvalidInputError, DegenerateInputError

from .config import (
    FLOAT32_EPS, FLOAT64_EPS, DEFAULT_COND_EPS, DEFAULT_TOLERANCE, DLTTolerance,
)

from .affine import affine_dlt3, affine_dlt, estimate_affine

from .transform import apply_affine, residuals_L2, residual_sum_of_squares

__version__ = "0.1.0"

__all__ = [
    "FloatArray", "Float32Array", "Points2D", "PointsHomog", "Mat3x3", "AffineParams",
    "as_homogeneous", "params_to_mat3x3", "is_valid_mat3x3", "is_affine_mat3x3",
    "AffineEstimationError", "InvalidInputError", "DegenerateInputError",
    "FLOAT32_EPS", "FLOAT64_EPS", "DEFAULT_COND_EPS", "DEFAULT_TOLERANCE", "DLTTolerance",
    "affine_dlt3", "affine_dlt", "estimate_affine",
    "apply_affine", "residuals_L2", "residual_sum_of_squares",
]
