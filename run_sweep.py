#!/usr/bin/env python
import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from core.exceptions import FlowError
from core.inout.sweep import load_sweep_config
from simulator import Simulator
from utils.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def main(argv=None) -> int:
    """
    Run a load-flow sweep over the known quantities.

    Command-line arguments:
      --network: Path to the YAML network file (default: built-in network).
      --sweep: Path to the YAML sweep configuration file.
      --dump: Optional path to dump sweep results (e.g., sweep.npz).
      --summary: Print a summary of the sweep results.
      --verbose: Enable DEBUG logging.
    """
    parser = argparse.ArgumentParser(description="Run a radial load-flow sweep.")
    parser.add_argument("--network", type=Path, help="Path to the YAML network file.", default=None)
    parser.add_argument("--sweep", type=Path, required=True, help="Path to the YAML sweep configuration file.")
    parser.add_argument("--dump", help="Path to dump sweep result (e.g., sweep.npz)", default=None)
    parser.add_argument("--summary", action="store_true", help="Print sweep summary.")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging(level=logging.DEBUG)
        logger.debug("Verbose logging enabled.")
    else:
        setup_logging(level=logging.INFO)

    sim = Simulator()
    try:
        sim.load_network(args.network)
        sweep_config = load_sweep_config(args.sweep)
        result = sim.run_sweep(sweep_config)
    except FlowError as e:
        logger.error("Sweep failed: %s", e)
        return 1
    logger.info("Sweep completed.")

    if result.errors:
        logger.warning("Some points produced non-finite solutions:")
        for err in result.errors:
            logger.warning(err)

    if args.summary:
        print(f"Sweep completed: {result.stats['points']} points in {result.stats['elapsed']:.3f} s")

    if args.dump:
        params = sorted({k for p in result.points for k in p.parameters})
        np.savez(
            args.dump,
            params=np.array(params),
            values=np.array([[p.parameters[k] for k in params] for p in result.points]),
            knowns=np.array([[complex(p.v0), complex(p.i1), complex(p.v2)] for p in result.points]),
            unknowns=np.array([[complex(q) for q in p.result] for p in result.points]),
        )
        print(f"Sweep results dumped to {args.dump}")

    for p in result.points:
        i0, v1, i2 = p.result
        print(f"Point: {p.parameters} -> I0={complex(i0):.6f} V1={complex(v1):.6f} I2={complex(i2):.6f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
