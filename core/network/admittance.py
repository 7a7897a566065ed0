# core/network/admittance.py
"""
Nodal admittance matrix (Y-bus) for the three-node radial network.

The branch admittance table lists, for every node pair, the admittance of the
branch joining them. The nodal matrix is derived from it once per
configuration: off-diagonal entries are the negated branch admittances and
each diagonal entry is the sum of the admittances incident to that node.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from core.exceptions import ShapeError

SOURCE = 0
INTERMEDIATE = 1
CONSUMER = 2
NODE_NAMES = ("source", "intermediate", "consumer")
N_NODES = len(NODE_NAMES)

# Real 2x2 representation of a complex scalar g + jb is g*I + b*J.
_I2 = np.eye(2)
_J2 = np.array([[0.0, -1.0],
                [1.0,  0.0]])


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def _as_square(table: Sequence[Sequence[float]], n_nodes: int, label: str) -> np.ndarray:
    try:
        arr = np.array(table, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ShapeError(f"{label} admittance table is ragged or non-numeric: {exc}") from exc
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ShapeError(f"{label} admittance table must be square, got shape {arr.shape}")
    if arr.shape[0] != n_nodes:
        raise ShapeError(
            f"{label} admittance table is {arr.shape[0]}x{arr.shape[1]}, "
            f"expected {n_nodes}x{n_nodes}"
        )
    return arr


@dataclass(frozen=True, eq=False)
class AdmittanceTable:
    """
    Pairwise branch admittances, split into conductance (re) and susceptance (im).

    Symmetric by convention; diagonal entries act as self-terms and are
    expected to be zero.
    """
    re: np.ndarray
    im: np.ndarray

    @classmethod
    def from_tables(
        cls,
        table_re: Sequence[Sequence[float]],
        table_im: Sequence[Sequence[float]],
        n_nodes: int = N_NODES,
    ) -> AdmittanceTable:
        re = _as_square(table_re, n_nodes, "Conductance")
        im = _as_square(table_im, n_nodes, "Susceptance")
        return cls(_frozen(re), _frozen(im))

    @property
    def n_nodes(self) -> int:
        return self.re.shape[0]


@dataclass(frozen=True, eq=False)
class NodalAdmittanceMatrix:
    """
    Y = G + jB as two real N×N matrices.

    ``real_form`` is the 2N×2N real matrix acting on interleaved
    (re, im) node vectors; every complex product in the solver goes through it.
    """
    G: np.ndarray
    B: np.ndarray
    real_form: np.ndarray

    @classmethod
    def from_parts(cls, G: np.ndarray, B: np.ndarray) -> NodalAdmittanceMatrix:
        real_form = np.kron(G, _I2) + np.kron(B, _J2)
        return cls(_frozen(G), _frozen(B), _frozen(real_form))

    @property
    def n_nodes(self) -> int:
        return self.G.shape[0]

    def block(self, i: int, j: int) -> np.ndarray:
        """2x2 real block for Y[i][j]: [[G, -B], [B, G]]."""
        return self.real_form[2 * i:2 * i + 2, 2 * j:2 * j + 2]


def build_nodal_admittance(
    table_re: Sequence[Sequence[float]],
    table_im: Sequence[Sequence[float]],
    n_nodes: int = N_NODES,
) -> NodalAdmittanceMatrix:
    """
    Convert a branch admittance table into the nodal admittance matrix.

    Raises:
        ShapeError: if either table is not a square ``n_nodes`` × ``n_nodes`` array.
    """
    table = AdmittanceTable.from_tables(table_re, table_im, n_nodes)
    return nodal_admittance_from_table(table)


def nodal_admittance_from_table(table: AdmittanceTable) -> NodalAdmittanceMatrix:
    # Row sums include the self-term, matching the diagonal law of the Y-bus.
    G = -table.re.copy()
    B = -table.im.copy()
    np.fill_diagonal(G, table.re.sum(axis=1))
    np.fill_diagonal(B, table.im.sum(axis=1))
    return NodalAdmittanceMatrix.from_parts(G, B)
