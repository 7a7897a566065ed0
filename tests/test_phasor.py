import math

import pytest

from core.exceptions import ShapeError
from core.numeric.phasor import ComplexPair


def test_from_polar():
    p = ComplexPair.from_polar(2.0, 90.0)
    assert p.re == pytest.approx(0.0, abs=1e-15)
    assert p.im == pytest.approx(2.0)
    assert p.magnitude == pytest.approx(2.0)
    assert p.angle == pytest.approx(90.0)


def test_complex_conversion():
    p = ComplexPair.from_complex(3 - 4j)
    assert (p.re, p.im) == (3.0, -4.0)
    assert complex(p) == 3 - 4j
    assert p.magnitude == 5.0


def test_scale_and_unpack():
    re, im = ComplexPair(1.0, -2.0).scale(-3.0)
    assert (re, im) == (-3.0, 6.0)


@pytest.mark.parametrize("value", [(1, 2), [1.0, 2.0], 1 + 2j, ComplexPair(1.0, 2.0)])
def test_coerce_accepts(value):
    assert ComplexPair.coerce(value) == ComplexPair(1.0, 2.0)


@pytest.mark.parametrize("value", [1.0, (1.0,), (1.0, 2.0, 3.0), None])
def test_coerce_rejects(value):
    with pytest.raises(ShapeError):
        ComplexPair.coerce(value)


def test_immutable():
    p = ComplexPair(1.0, 0.0)
    with pytest.raises(AttributeError):
        p.re = 2.0


def test_nan_passes_through():
    p = ComplexPair.coerce((math.nan, math.inf))
    assert math.isnan(p.re) and math.isinf(p.im)
