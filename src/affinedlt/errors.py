# Andy Zhao
"""
Errors raised by the affine estimators.

Both kinds subclass ValueError, so callers that already guard geometry code
with `except ValueError` keep working.
"""

from __future__ import annotations


class AffineEstimationError(ValueError):
    """Base class for every failure of an affine estimation call."""


class InvalidInputError(AffineEstimationError):
    """
    Bad arguments: wrong shapes or dtypes, mismatched point counts, N < 3
    (or N != 3 for the exact solver), non-finite coordinates, a zero
    homogeneous weight, or a result buffer that cannot be written.

    Raised before any linear algebra runs.
    """


class DegenerateInputError(AffineEstimationError):
    """
    The point configuration makes the linear system singular or too badly
    conditioned to trust (collinear or coincident source points).
    """
