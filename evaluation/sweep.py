# evaluation/sweep.py
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from core.flow.solver import FlowResult, SolverState, solve
from core.inout.network import OperatingPoint
from core.inout.sweep import SweepConfig
from core.numeric.phasor import ComplexPair


@dataclass
class SweepPoint:
    parameters: Dict[str, float]
    v0: ComplexPair
    i1: ComplexPair
    v2: ComplexPair
    result: FlowResult


@dataclass
class SweepResult:
    points: List[SweepPoint]
    errors: List[str] = field(default_factory=list)
    stats: Dict[str, float] = field(default_factory=dict)

    def to_dataframe(self):
        import pandas as pd
        rows = []
        for p in self.points:
            row = dict(p.parameters)
            for name, pair in (("v0", p.v0), ("i1", p.i1), ("v2", p.v2),
                               ("i0", p.result.i0), ("v1", p.result.v1), ("i2", p.result.i2)):
                row[f"{name}_re"] = pair.re
                row[f"{name}_im"] = pair.im
            rows.append(row)
        return pd.DataFrame(rows)


def _knowns_at(op: OperatingPoint, params: Dict[str, float]) -> Tuple[ComplexPair, ComplexPair, ComplexPair]:
    """Apply swept values on top of the base operating point."""
    def polar(name: str, base: ComplexPair) -> ComplexPair:
        mag, ang = params.get(f"{name}_mag"), params.get(f"{name}_angle")
        if mag is None and ang is None:
            return base
        return ComplexPair.from_polar(base.magnitude if mag is None else mag,
                                      base.angle if ang is None else ang)

    i1 = ComplexPair(params.get("i1_re", op.i1.re), params.get("i1_im", op.i1.im))
    return polar("v0", op.v0), i1, polar("v2", op.v2)


def sweep(state: SolverState, operating_point: OperatingPoint, config: SweepConfig) -> SweepResult:
    """
    Solve once per point of the cartesian product of the sweep entries.

    Points run in order on the calling thread, each one a simulation tick.
    Non-finite solutions are kept and reported in ``errors``.
    """
    keys = [entry.param for entry in config.sweep]
    grids = [entry.grid() for entry in config.sweep]

    points: List[SweepPoint] = []
    errors: List[str] = []
    start_time = time.time()

    for values in itertools.product(*grids):
        params = dict(zip(keys, values))
        v0, i1, v2 = _knowns_at(operating_point, params)
        result = solve(state, v0, i1, v2)
        if not result.is_finite():
            logging.warning(f"Non-finite solution with parameters {params}")
            errors.append(f"Params {params}: non-finite solution {tuple(result)}")
        points.append(SweepPoint(params, v0, i1, v2, result))

    elapsed = time.time() - start_time
    stats = {"points": len(points), "elapsed": elapsed}
    return SweepResult(points, errors, stats)
