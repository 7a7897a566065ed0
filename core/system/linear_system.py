# core/system/linear_system.py
"""
Assemble the fixed coefficient matrix for a known/unknown assignment and
invert it once, so every later solve is a single matrix-vector product.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from core.network.admittance import NodalAdmittanceMatrix
from core.system.unknown_sets import UnknownSet
from utils.linalg import checked_inverse
from utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_CONDITION = 1e12


@dataclass(frozen=True, eq=False)
class LinearSystem:
    """
    Coefficient matrix A and its cached inverse.

    Both arrays are read-only; the lifetime of the inverse is tied to the
    admittance configuration that produced A.
    """
    unknown_set: UnknownSet
    coefficients: np.ndarray
    inverse: np.ndarray
    condition: float

    def apply(self, b: np.ndarray) -> np.ndarray:
        """x = A⁻¹ · b"""
        return self.inverse @ b


def build_linear_system(
    Y: NodalAdmittanceMatrix,
    unknown_set: UnknownSet,
    max_condition: float = DEFAULT_MAX_CONDITION,
) -> LinearSystem:
    """
    Build A for ``unknown_set`` from the nodal admittance matrix and invert it.

    Raises:
        SingularMatrixError: if A is singular or worse conditioned than ``max_condition``.
    """
    A = unknown_set.coefficient_matrix(Y)
    inv, cond = checked_inverse(A, max_condition=max_condition)
    logger.debug("Assembled '%s' coefficient matrix, cond=%.3e", unknown_set.type_name, cond)
    A.setflags(write=False)
    inv.setflags(write=False)
    return LinearSystem(unknown_set=unknown_set, coefficients=A, inverse=inv, condition=cond)
