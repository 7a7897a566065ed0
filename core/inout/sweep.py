# core/inout/sweep.py
"""
Load and validate YAML sweep configurations over the known quantities.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import yaml
from cerberus import Validator

from core.exceptions import ConfigError

# Magnitudes in per-unit, angles in degrees.
SWEEP_PARAMS = ("v0_mag", "v0_angle", "v2_mag", "v2_angle", "i1_re", "i1_im")

SWEEP_SCHEMA = {
    'sweep': {
        'type': 'list',
        'required': True,
        'minlength': 1,
        'schema': {
            'type': 'dict',
            'schema': {
                'param': {'type': 'string', 'required': True, 'allowed': list(SWEEP_PARAMS)},
                'range': {
                    'type': 'list',
                    'required': False,
                    'schema': {'type': 'float', 'coerce': float},
                    'minlength': 2,
                    'maxlength': 2,
                    'dependencies': 'points',
                    'excludes': 'values',
                },
                'points': {'type': 'integer', 'required': False, 'coerce': int, 'min': 1},
                'scale': {'type': 'string', 'required': False, 'allowed': ['linear', 'log']},
                'values': {
                    'type': 'list',
                    'required': False,
                    'minlength': 1,
                    'schema': {'type': 'float', 'coerce': float},
                    'excludes': 'range',
                },
            }
        }
    }
}


@dataclass
class SweepEntry:
    param: str
    range: Optional[List[float]] = None
    points: Optional[int] = None
    scale: Optional[str] = None
    values: Optional[List[float]] = None

    def grid(self) -> List[float]:
        """Expand the entry into the list of values it sweeps over."""
        if self.values is not None:
            return list(self.values)
        start, end = self.range
        if self.scale == 'log':
            if start <= 0 or end <= 0:
                raise ConfigError(f"Log sweep of '{self.param}' needs a positive range, got {self.range}")
            return [float(v) for v in np.logspace(np.log10(start), np.log10(end), self.points)]
        return [float(v) for v in np.linspace(start, end, self.points)]


@dataclass
class SweepConfig:
    sweep: List[SweepEntry]


def sweep_from_dict(raw: Any) -> SweepConfig:
    validator = Validator(SWEEP_SCHEMA, allow_unknown=False)
    if not isinstance(raw, dict) or not validator.validate(raw):
        errors = validator.errors if isinstance(raw, dict) else "document is not a mapping"
        raise ConfigError(f"Sweep schema validation errors: {errors}")
    doc: Dict[str, Any] = validator.document

    entries: List[SweepEntry] = []
    seen = set()
    for entry in doc['sweep']:
        if entry['param'] in seen:
            raise ConfigError(f"Parameter '{entry['param']}' swept twice")
        seen.add(entry['param'])
        if entry.get('range') is None and entry.get('values') is None:
            raise ConfigError(f"Sweep of '{entry['param']}' needs 'range' and 'points' or 'values'")
        entries.append(SweepEntry(
            param=entry['param'],
            range=entry.get('range'),
            points=entry.get('points'),
            scale=entry.get('scale'),
            values=entry.get('values'),
        ))
    return SweepConfig(sweep=entries)


def load_sweep_config(path: Path) -> SweepConfig:
    """
    Load a YAML sweep configuration file, validate its schema, and return a SweepConfig.

    Raises:
        ConfigError: If file read fails or schema validation fails.
    """
    try:
        raw = yaml.safe_load(Path(path).read_text())
    except Exception as e:
        raise ConfigError(f"Failed to read sweep YAML '{path}': {e}")
    return sweep_from_dict(raw)
