# utils/linalg.py
from __future__ import annotations
import numpy as np
import scipy.linalg as la

from core.exceptions import SingularMatrixError


def checked_inverse(A: np.ndarray, max_condition: float = 1e12) -> tuple[np.ndarray, float]:
    """
    Dense LAPACK inverse of a small real matrix, refusing singular input.

    Returns ``(inverse, condition_number)``. Raises SingularMatrixError when
    the 2-norm condition number is not finite or exceeds ``max_condition``,
    or when LAPACK reports an exactly singular matrix.
    """
    if not np.all(np.isfinite(A)):
        raise SingularMatrixError("Coefficient matrix contains NaN or inf entries")
    cond = float(np.linalg.cond(A))
    if not np.isfinite(cond) or cond > max_condition:
        raise SingularMatrixError(
            f"Coefficient matrix is singular or ill-conditioned (cond={cond:.3e}, "
            f"limit={max_condition:.1e})"
        )
    try:
        inv = la.inv(A, check_finite=True)
    except (la.LinAlgError, ValueError) as exc:
        raise SingularMatrixError(f"Coefficient matrix inversion failed: {exc}") from exc
    return inv, cond
