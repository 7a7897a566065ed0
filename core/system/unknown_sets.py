# core/system/unknown_sets.py
"""
Known/unknown assignments for the three-node radial network.

An assignment fixes which three complex quantities are given and which three
are solved for, and with it the layout of the 6x6 real coefficient matrix and
of the right-hand side. Assignments register with UnknownSetFactory by
``type_name``; the solver only talks to the abstract interface.
"""
from abc import ABC, abstractmethod
from typing import Dict, Sequence, Tuple, Type

import numpy as np

from core.exceptions import FlowError
from core.network.admittance import (
    CONSUMER,
    INTERMEDIATE,
    SOURCE,
    NodalAdmittanceMatrix,
)
from core.numeric.phasor import ComplexPair


class UnknownSet(ABC):
    """
    Abstract known/unknown assignment.

    Subclasses define the coefficient matrix A and the right-hand side b so
    that ``A @ x = b`` holds for the interleaved unknown vector x.
    """
    type_name: str = ""
    knowns: Tuple[str, str, str] = ("", "", "")
    unknowns: Tuple[str, str, str] = ("", "", "")

    @abstractmethod
    def coefficient_matrix(self, Y: NodalAdmittanceMatrix) -> np.ndarray:
        """Return the 6x6 real coefficient matrix for this assignment."""
        pass

    @abstractmethod
    def rhs(self, Y: NodalAdmittanceMatrix, knowns: Sequence[ComplexPair]) -> np.ndarray:
        """Return a freshly allocated right-hand side for the three knowns."""
        pass

    def decode(self, x: np.ndarray) -> Tuple[ComplexPair, ComplexPair, ComplexPair]:
        """Split the interleaved solution vector into three pairs, in ``unknowns`` order."""
        return (
            ComplexPair(float(x[0]), float(x[1])),
            ComplexPair(float(x[2]), float(x[3])),
            ComplexPair(float(x[4]), float(x[5])),
        )


class ConsumerPQUnknown(UnknownSet):
    """
    Consumer real/reactive power unknown.

    Knowns: source voltage V0, intermediate current draw I1, consumer voltage V2.
    Unknowns: source current I0, intermediate voltage V1, consumer current I2.

    Each node obeys I_i = Y_i0 V0 + Y_i1 V1 + Y_i2 V2. Moving the V1 term to
    the left gives three 2x2 row blocks; the intermediate node has no free
    current, so its block only constrains V1.
    """
    type_name = "consumer_pq"
    knowns = ("V0", "I1", "V2")
    unknowns = ("I0", "V1", "I2")

    def coefficient_matrix(self, Y: NodalAdmittanceMatrix) -> np.ndarray:
        A = np.zeros((6, 6))
        A[0:2, 0:2] = np.eye(2)                          # I0
        A[4:6, 4:6] = np.eye(2)                          # I2
        for node in (SOURCE, INTERMEDIATE, CONSUMER):
            A[2 * node:2 * node + 2, 2:4] = -Y.block(node, INTERMEDIATE)
        return A

    def rhs(self, Y: NodalAdmittanceMatrix, knowns: Sequence[ComplexPair]) -> np.ndarray:
        v0, i1, v2 = knowns
        R = Y.real_form
        b = R[:, 0:2] @ np.array([v0.re, v0.im]) + R[:, 4:6] @ np.array([v2.re, v2.im])
        b[2] -= i1.re
        b[3] -= i1.im
        return b


class UnknownSetFactory:
    """
    Registry of known/unknown assignments keyed by ``type_name``.
    """
    _registry: Dict[str, Type[UnknownSet]] = {}

    @classmethod
    def register(cls, set_cls: Type[UnknownSet]) -> None:
        if not (isinstance(set_cls, type) and issubclass(set_cls, UnknownSet)):
            raise FlowError(f"Cannot register non-UnknownSet class: {set_cls}")
        type_name = getattr(set_cls, "type_name", None)
        if not isinstance(type_name, str) or not type_name:
            raise FlowError(f"Unknown-set class {set_cls} lacks a valid `type_name` attribute.")
        cls._registry[type_name.lower()] = set_cls

    @classmethod
    def create(cls, type_name: str) -> UnknownSet:
        set_cls = cls._registry.get(type_name.lower())
        if set_cls is None:
            raise FlowError(
                f"Unknown known/unknown assignment: '{type_name}' "
                f"(available: {', '.join(sorted(cls._registry))})"
            )
        return set_cls()

    @classmethod
    def available(cls) -> Tuple[str, ...]:
        return tuple(sorted(cls._registry))


UnknownSetFactory.register(ConsumerPQUnknown)
