# core/flow/solver.py
"""
Load-flow solver for the three-node radial network.

``configure`` turns a branch admittance table into an immutable SolverState
(Y-bus plus the inverted coefficient matrix); ``solve`` is a pure function of
that state and the three known phasors. FlowSolver wraps the pair for hosts
that keep one configured circuit and call solve once per simulation tick.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence

import numpy as np

from core.exceptions import NotConfiguredError
from core.network.admittance import (
    N_NODES,
    AdmittanceTable,
    NodalAdmittanceMatrix,
    nodal_admittance_from_table,
)
from core.numeric.phasor import ComplexPair, PairLike
from core.system.linear_system import DEFAULT_MAX_CONDITION, LinearSystem, build_linear_system
from core.system.unknown_sets import UnknownSetFactory
from utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class SolverState:
    """Everything solve needs, derived once per admittance configuration."""
    table: AdmittanceTable
    admittance: NodalAdmittanceMatrix
    system: LinearSystem


@dataclass(frozen=True)
class FlowResult:
    """Solved quantities: source current, intermediate voltage, consumer current."""
    i0: ComplexPair
    v1: ComplexPair
    i2: ComplexPair

    def __iter__(self) -> Iterator[ComplexPair]:
        yield self.i0
        yield self.v1
        yield self.i2

    def is_finite(self) -> bool:
        return all(np.isfinite(v) for pair in self for v in pair)


def configure(
    table_re: Sequence[Sequence[float]],
    table_im: Sequence[Sequence[float]],
    unknown_set: str = "consumer_pq",
    max_condition: float = DEFAULT_MAX_CONDITION,
) -> SolverState:
    """
    Build the nodal admittance matrix and the cached inverse.

    Raises:
        ShapeError: if the tables are not 3x3.
        SingularMatrixError: if the coefficient matrix cannot be inverted.
    """
    table = AdmittanceTable.from_tables(table_re, table_im, N_NODES)
    Y = nodal_admittance_from_table(table)
    system = build_linear_system(Y, UnknownSetFactory.create(unknown_set), max_condition)
    return SolverState(table=table, admittance=Y, system=system)


def solve(
    state: Optional[SolverState],
    v0: PairLike,
    i1: PairLike,
    v2: PairLike,
) -> FlowResult:
    """
    Solve for (I0, V1, I2) given V0, I1 and V2.

    Inputs are not range-checked; NaN and inf propagate through the arithmetic.

    Raises:
        NotConfiguredError: if ``state`` is None.
    """
    if state is None:
        raise NotConfiguredError("solve() called before a successful configure()")
    knowns = (ComplexPair.coerce(v0), ComplexPair.coerce(i1), ComplexPair.coerce(v2))
    unknown_set = state.system.unknown_set
    b = unknown_set.rhs(state.admittance, knowns)
    x = state.system.apply(b)
    return FlowResult(*unknown_set.decode(x))


class SolverPhase(Enum):
    UNCONFIGURED = "unconfigured"
    READY = "ready"


class FlowSolver:
    """
    Stateful front for a host that configures once and solves every tick.

    A failed configure leaves any previously configured state in place.
    """
    def __init__(self, max_condition: float = DEFAULT_MAX_CONDITION):
        self.max_condition = max_condition
        self._state: Optional[SolverState] = None

    @property
    def phase(self) -> SolverPhase:
        return SolverPhase.READY if self._state is not None else SolverPhase.UNCONFIGURED

    @property
    def state(self) -> Optional[SolverState]:
        return self._state

    def configure(
        self,
        table_re: Sequence[Sequence[float]],
        table_im: Sequence[Sequence[float]],
        unknown_set: str = "consumer_pq",
    ) -> SolverState:
        state = configure(table_re, table_im, unknown_set, self.max_condition)
        if self._state is not None:
            logger.info("Reconfiguring solver with a new admittance table.")
        self._state = state
        return state

    def reset(self) -> None:
        self._state = None

    def solve(self, v0: PairLike, i1: PairLike, v2: PairLike) -> FlowResult:
        return solve(self._state, v0, i1, v2)
