# core/inout/network.py
"""
Load and validate YAML network descriptions into a NetworkConfig.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import yaml
from cerberus import Validator

from core.exceptions import ConfigError
from core.network.admittance import N_NODES, NODE_NAMES
from core.network.per_unit import PerUnitBase
from core.numeric.phasor import ComplexPair, ZERO
from utils.logging_config import get_logger

logger = get_logger(__name__)

_PAIR = {
    "type": "list", "minlength": 2, "maxlength": 2,
    "schema": {"type": "number", "coerce": float},
}

NETWORK_SCHEMA: Dict[str, Any] = {
    "version": {"type": "float", "required": True, "allowed": [1.0], "coerce": float},

    "base": {
        "type": "dict", "required": False,
        "schema": {
            "voltage": {"type": ["string", "number"], "required": True},
            "power":   {"type": ["string", "number"], "required": True},
        },
    },

    "branches": {
        "type": "list", "required": True, "minlength": 1,
        "schema": {
            "type": "dict", "schema": {
                "between": {
                    "type": "list", "required": True, "minlength": 2, "maxlength": 2,
                    "schema": {"type": "string", "allowed": list(NODE_NAMES)},
                },
                "conductance": {"type": "number", "required": True, "coerce": float},
                "susceptance": {"type": "number", "required": True, "coerce": float},
                "unit": {"type": "string", "required": False, "allowed": ["pu", "siemens"],
                         "default": "pu"},
            },
        },
    },

    "operating_point": {
        "type": "dict", "required": False,
        "schema": {
            "v0": {**_PAIR, "required": False},
            "i1": {**_PAIR, "required": False},
            "v2": {**_PAIR, "required": False},
        },
    },
}


@dataclass(frozen=True)
class OperatingPoint:
    """The three known quantities fed to solve."""
    v0: ComplexPair = ComplexPair(1.0, 0.0)
    i1: ComplexPair = ZERO
    v2: ComplexPair = ComplexPair(1.0, 0.0)


@dataclass
class NetworkConfig:
    table_re: np.ndarray
    table_im: np.ndarray
    base: Optional[PerUnitBase] = None
    operating_point: OperatingPoint = field(default_factory=OperatingPoint)


def _branch_key(between: List[str]) -> Tuple[int, int]:
    a, b = (NODE_NAMES.index(n) for n in between)
    return (a, b) if a < b else (b, a)


def network_from_dict(raw: Any) -> NetworkConfig:
    """Validate a parsed network document and build the admittance tables."""
    v = Validator(NETWORK_SCHEMA, allow_unknown=False)
    if not isinstance(raw, dict) or not v.validate(raw):
        errors = v.errors if isinstance(raw, dict) else "document is not a mapping"
        logger.error("Network schema validation errors: %s", errors)
        raise ConfigError(f"Network schema violations: {errors}")
    doc = v.document

    base = None
    if doc.get("base"):
        base = PerUnitBase.from_strings(doc["base"]["voltage"], doc["base"]["power"])

    table_re = np.zeros((N_NODES, N_NODES))
    table_im = np.zeros((N_NODES, N_NODES))
    seen = set()
    for br in doc["branches"]:
        a, b = _branch_key(br["between"])
        if a == b:
            raise ConfigError(f"Branch joins node '{NODE_NAMES[a]}' to itself")
        if (a, b) in seen:
            raise ConfigError(f"Duplicate branch between '{NODE_NAMES[a]}' and '{NODE_NAMES[b]}'")
        seen.add((a, b))

        y = complex(br["conductance"], br["susceptance"])
        if br.get("unit", "pu") == "siemens":
            if base is None:
                raise ConfigError("Branch admittances in siemens need a 'base' section")
            y = base.admittance_to_pu(y)
        table_re[a, b] = table_re[b, a] = y.real
        table_im[a, b] = table_im[b, a] = y.imag

    op = doc.get("operating_point") or {}
    defaults = OperatingPoint()
    operating_point = OperatingPoint(
        v0=ComplexPair.coerce(op["v0"]) if "v0" in op else defaults.v0,
        i1=ComplexPair.coerce(op["i1"]) if "i1" in op else defaults.i1,
        v2=ComplexPair.coerce(op["v2"]) if "v2" in op else defaults.v2,
    )
    return NetworkConfig(table_re, table_im, base, operating_point)


def load_network(path: Path) -> NetworkConfig:
    """Read→validate→build a network description."""
    try:
        raw = yaml.safe_load(Path(path).read_text())
    except Exception as exc:
        raise ConfigError(f"Failed to read network YAML '{path}': {exc}")
    return network_from_dict(raw)
