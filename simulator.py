# simulator.py
"""
Simulator entry point for the radial three-node load flow.
Handles loading network descriptions, configuring the solver, and solving
operating points or sweeps.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from core.exceptions import FlowError
from core.flow.solver import FlowResult, FlowSolver
from core.inout.network import NetworkConfig, load_network
from core.inout.sweep import SweepConfig
from core.network.defaults import default_network
from core.numeric.phasor import PairLike
from core.system.linear_system import DEFAULT_MAX_CONDITION
from core.validation import check_network_structure
from evaluation.sweep import SweepResult, sweep
from utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


class Simulator:
    def __init__(self, max_condition: float = DEFAULT_MAX_CONDITION):
        self.solver = FlowSolver(max_condition=max_condition)
        self.network: Optional[NetworkConfig] = None

    def load_network(self, path: Optional[Path] = None) -> NetworkConfig:
        """
        Load a network YAML file (or the built-in default) and configure the solver.
        Raises FlowError on validation or configuration errors.
        """
        network = load_network(path) if path is not None else default_network()
        for issue in check_network_structure(network.table_re, network.table_im):
            logger.warning("Network structure: %s", issue)
        self.solver.configure(network.table_re, network.table_im)
        self.network = network
        return network

    def solve(self, v0: Optional[PairLike] = None, i1: Optional[PairLike] = None,
              v2: Optional[PairLike] = None) -> FlowResult:
        """
        Solve one tick; missing knowns come from the network's operating point.
        """
        op = self.network.operating_point if self.network is not None else None
        return self.solver.solve(
            v0 if v0 is not None or op is None else op.v0,
            i1 if i1 is not None or op is None else op.i1,
            v2 if v2 is not None or op is None else op.v2,
        )

    def run_sweep(self, sweep_config: SweepConfig) -> SweepResult:
        if self.network is None:
            self.load_network()
        return sweep(self.solver.state, self.network.operating_point, sweep_config)


def _format(name: str, pair, unit_value: Optional[complex] = None) -> str:
    text = f"{name}: {pair.re:+.6f} {pair.im:+.6f}j pu  (|{name}|={pair.magnitude:.6f}, {pair.angle:+.3f} deg)"
    if unit_value is not None:
        text += f"  = {unit_value.real:+.3f} {unit_value.imag:+.3f}j"
    return text


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Radial three-node load flow")
    parser.add_argument("--network", type=Path, help="Path to network YAML file (default: built-in network)")
    parser.add_argument("--max-condition", type=float, default=DEFAULT_MAX_CONDITION,
                        help="Largest accepted condition number of the coefficient matrix")
    parser.add_argument("--si", action="store_true", help="Also print values in volts/amperes")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    sim = Simulator(max_condition=args.max_condition)
    try:
        network = sim.load_network(args.network)
        result = sim.solve()
    except FlowError as e:
        logger.error("Load flow failed: %s", e)
        return 1

    op = network.operating_point
    base = network.base if args.si else None
    if args.si and base is None:
        logger.warning("Network has no 'base' section; printing per-unit values only.")
    print(_format("V0", op.v0, base.voltage_to_si(op.v0) if base else None))
    print(_format("I1", op.i1, base.current_to_si(op.i1) if base else None))
    print(_format("V2", op.v2, base.voltage_to_si(op.v2) if base else None))
    print(_format("I0", result.i0, base.current_to_si(result.i0) if base else None))
    print(_format("V1", result.v1, base.voltage_to_si(result.v1) if base else None))
    print(_format("I2", result.i2, base.current_to_si(result.i2) if base else None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
