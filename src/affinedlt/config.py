# Andy Zhao
"""
Numeric tolerances and debug switches for the affine estimators.

Both solvers measure conditioning the same way: the ratio of the smallest
to the largest singular value of the normalized source block

    M = [[x0, y0, 1], [x1, y1, 1], ...]        (N x 3)

The design matrix D is block diagonal with two copies of M, so this is also
sigma_min(D) / sigma_max(D). Points are normalized first (centroid at the
origin, mean distance sqrt(2)), so the ratio does not depend on the
magnitude of the input coordinates.

Environment (read once, at import):
- AFFINEDLT_DEBUG=1        print one diagnostic line per estimation
- AFFINEDLT_COND_EPS=<f>   override DEFAULT_COND_EPS
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os

import numpy as np

from .errors import InvalidInputError

FLOAT32_EPS: float = float(np.finfo(np.float32).eps)
FLOAT64_EPS: float = float(np.finfo(np.float64).eps)

# The normal equations square the condition number. Solved in float64 they
# keep float32 accuracy while cond(D)^2 * FLOAT64_EPS <= FLOAT32_EPS.
DEFAULT_COND_EPS: float = math.sqrt(FLOAT64_EPS / FLOAT32_EPS)

DEBUG: bool = os.environ.get("AFFINEDLT_DEBUG", "0") == "1"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise InvalidInputError(f"{name} must be a float, got {raw!r}") from None


@dataclass(frozen=True)
class DLTTolerance:
    """
    Singularity threshold shared by both estimators.

    Parameters:
    - cond_eps:
      The system is rejected as degenerate when
      sigma_min(M) / sigma_max(M) <= cond_eps.
        - larger -> reject more nearly-collinear point sets
        - smaller -> accept thinner configurations (less accurate)
      The default (about 4.3e-5) accepts a 10000:1 triangle.
    """
    cond_eps: float = DEFAULT_COND_EPS

    def __post_init__(self) -> None:
        if not math.isfinite(self.cond_eps) or self.cond_eps <= 0.0:
            raise InvalidInputError(f"DLTTolerance.cond_eps must be a positive finite float, got {self.cond_eps}")

    @classmethod
    def from_env(cls) -> "DLTTolerance":
        """
        Build tolerances from AFFINEDLT_COND_EPS, falling back to the default
        when it is unset.
        """
        return cls(cond_eps=_env_float("AFFINEDLT_COND_EPS", DEFAULT_COND_EPS))


DEFAULT_TOLERANCE = DLTTolerance.from_env()
