# core/numeric/phasor.py
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Union

from core.exceptions import ShapeError

PairLike = Union["ComplexPair", Sequence[float], complex]


@dataclass(frozen=True, slots=True)
class ComplexPair:
    """
    Immutable rectangular phasor in per-unit.

    * (e, f) for a voltage, (d, q) for a current.
    * Iterable → unpacks as ``re, im``.
    * No range checks: NaN and ±inf pass through untouched.
    """
    re: float
    im: float

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_complex(cls, value: complex) -> ComplexPair:
        return cls(float(value.real), float(value.imag))

    @classmethod
    def from_polar(cls, magnitude: float, angle_deg: float) -> ComplexPair:
        theta = math.radians(angle_deg)
        return cls(magnitude * math.cos(theta), magnitude * math.sin(theta))

    @classmethod
    def coerce(cls, value: PairLike) -> ComplexPair:
        """Accept a ComplexPair, a Python complex or any 2-element sequence."""
        if isinstance(value, ComplexPair):
            return value
        if isinstance(value, complex):
            return cls.from_complex(value)
        try:
            re, im = value
        except (TypeError, ValueError) as exc:
            raise ShapeError(f"Expected a (re, im) pair, got {value!r}") from exc
        return cls(float(re), float(im))

    # ------------------------------------------------------------------
    # Arithmetic / views
    # ------------------------------------------------------------------
    def scale(self, k: float) -> ComplexPair:
        return ComplexPair(self.re * k, self.im * k)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.re, self.im)

    @property
    def angle(self) -> float:
        """Angle in degrees, counter-clockwise from the real axis."""
        return math.degrees(math.atan2(self.im, self.re))

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def __iter__(self) -> Iterator[float]:
        yield self.re
        yield self.im


ZERO = ComplexPair(0.0, 0.0)
