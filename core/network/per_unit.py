# core/network/per_unit.py
"""
Per-unit bases for a three-phase system.

  V_base  line-to-line voltage (V)
  S_base  three-phase apparent power (VA)
  I_base = S_base / (√3 · V_base)
  Z_base = V_base² / S_base
  Y_base = 1 / Z_base
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Union

import pint

from core.exceptions import ConfigError
from core.numeric.phasor import ComplexPair

ureg = pint.UnitRegistry()

SQRT3 = math.sqrt(3)


def parse_quantity(expr: Union[str, float], unit: str) -> float:
    """
    Parse ``expr`` (e.g. "6.6 kV", "10 MVA") and return its magnitude in ``unit``.

    Bare numbers are taken to be in ``unit`` already.
    """
    if isinstance(expr, (int, float)):
        return float(expr)
    try:
        quantity = ureg.Quantity(expr)
        if quantity.dimensionless:
            return float(quantity.magnitude)
        return float(quantity.to(unit).magnitude)
    except Exception as e:
        raise ConfigError(f"Could not parse '{expr}' as a quantity in {unit}: {e}")


@dataclass(frozen=True)
class PerUnitBase:
    voltage: float   # V, line-to-line
    power: float     # VA, three-phase

    def __post_init__(self):
        if not (self.voltage > 0 and self.power > 0):
            raise ConfigError(
                f"Per-unit bases must be positive (voltage={self.voltage}, power={self.power})"
            )

    @classmethod
    def from_strings(cls, voltage: Union[str, float], power: Union[str, float]) -> PerUnitBase:
        return cls(parse_quantity(voltage, "volt"), parse_quantity(power, "volt_ampere"))

    @property
    def current(self) -> float:
        return self.power / (SQRT3 * self.voltage)

    @property
    def impedance(self) -> float:
        return self.voltage ** 2 / self.power

    @property
    def admittance(self) -> float:
        return self.power / self.voltage ** 2

    # pu → SI
    def voltage_to_si(self, pair: ComplexPair) -> complex:
        return complex(pair) * self.voltage

    def current_to_si(self, pair: ComplexPair) -> complex:
        return complex(pair) * self.current

    # SI → pu
    def admittance_to_pu(self, siemens: complex) -> complex:
        return siemens / self.admittance

    def voltage_to_pu(self, volts: complex) -> ComplexPair:
        return ComplexPair.from_complex(volts / self.voltage)
