# core/validation.py
"""
Structural diagnostics for a branch admittance table.

The admittance builder accepts any numbers; these checks only report what
looks physically odd (asymmetric branches, self-terms, isolated nodes) so the
caller can log it before configuring.
"""
from typing import List, Sequence

import networkx as nx
import numpy as np

from core.network.admittance import NODE_NAMES


def _label(i: int) -> str:
    return NODE_NAMES[i] if i < len(NODE_NAMES) else str(i)


def check_network_structure(
    table_re: Sequence[Sequence[float]],
    table_im: Sequence[Sequence[float]],
    atol: float = 1e-12,
) -> List[str]:
    """
    Return human-readable diagnostics for the table; an empty list means none.

    Tables are assumed to be square and equally shaped.
    """
    re = np.asarray(table_re, dtype=float)
    im = np.asarray(table_im, dtype=float)
    n = re.shape[0]
    issues: List[str] = []

    # 1) Symmetry and self-terms
    for i in range(n):
        if abs(re[i, i]) > atol or abs(im[i, i]) > atol:
            issues.append(f"Node '{_label(i)}' has a non-zero self-term ({re[i, i]:+g}{im[i, i]:+g}j)")
        for j in range(i + 1, n):
            if abs(re[i, j] - re[j, i]) > atol or abs(im[i, j] - im[j, i]) > atol:
                issues.append(f"Branch '{_label(i)}'-'{_label(j)}' is asymmetric")

    # 2) Connectivity over branches with a non-zero admittance
    graph = nx.Graph()
    graph.add_nodes_from(range(n))
    for i in range(n):
        for j in range(i + 1, n):
            if max(abs(re[i, j]), abs(im[i, j]), abs(re[j, i]), abs(im[j, i])) > atol:
                graph.add_edge(i, j)

    for node in nx.isolates(graph):
        issues.append(f"Node '{_label(node)}' has no branch to any other node")
    if n and not nx.is_connected(graph):
        issues.append("Network is not fully connected; some nodes are isolated.")

    return issues
