import subprocess
import sys
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parent.parent


def _run(*args):
    proc = subprocess.run([sys.executable, *args], capture_output=True, text=True, cwd=ROOT)
    return proc, proc.stdout + proc.stderr


def test_simulator_default_network():
    proc, output = _run("simulator.py")
    assert proc.returncode == 0, output
    assert "V1: +1.036667" in output


def test_simulator_si_output():
    proc, output = _run("simulator.py", "--network", str(ROOT / "data" / "default_network.yaml"), "--si")
    assert proc.returncode == 0, output
    assert "I0:" in output


def test_simulator_bad_network(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("version: 1.0\nbranches: []\n")
    proc, output = _run("simulator.py", "--network", str(bad))
    assert proc.returncode == 1
    assert "Load flow failed" in output


def test_sweep_cli_smoke(tmp_path):
    sweep_file = tmp_path / "sweep.yml"
    sweep_file.write_text("sweep:\n  - param: v0_angle\n    range: [0, 10]\n    points: 3\n")
    dump = tmp_path / "sweep.npz"
    proc, output = _run("run_sweep.py", "--sweep", str(sweep_file), "--summary", "--dump", str(dump))
    assert proc.returncode == 0, output
    assert "Sweep completed" in output
    with np.load(dump) as data:
        assert data["unknowns"].shape == (3, 3)
