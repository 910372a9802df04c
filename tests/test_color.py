import math

import numpy as np
import pytest

from floatimg.core.color import (
    FloatColor,
    IntColor,
    IntegerColor,
    IntegerColorAdapter,
    denormalize,
    denormalize_array,
    normalize,
    normalize_array,
)


def test_round_trip_identity_at_8_bits():
    for c in range(256):
        assert denormalize(normalize(c)) == c


def test_quantization_bound():
    for v in np.linspace(0.0, 1.0, 1001):
        assert abs(normalize(denormalize(v)) - v) <= 1.0 / 255.0


def test_denormalize_clamps():
    for v in (-1e9, -1.0, -1e-12):
        assert denormalize(v) == 0
    for v in (1.0 + 1e-12, 2.0, 1e9):
        assert denormalize(v) == 255


def test_denormalize_nan_and_inf():
    assert denormalize(math.nan) == 0
    assert denormalize(-math.inf) == 0
    assert denormalize(math.inf) == 255


def test_denormalize_truncates():
    assert denormalize(0.5) == 127
    assert denormalize(127.9 / 255.0) == 127


def test_normalize_keeps_most_significant_byte():
    assert normalize(0xFFFF, 16) == pytest.approx(1.0)
    assert normalize(0x80FF, 16) == pytest.approx(128 / 255.0)
    assert normalize(0x00FF, 16) == 0.0
    assert normalize(0xFFF, 12) == pytest.approx(1.0)


def test_array_versions_match_scalar():
    ints = np.arange(256, dtype=np.uint8)
    np.testing.assert_allclose(normalize_array(ints), [normalize(c) for c in range(256)], atol=1e-7)

    vals = np.array([-0.5, 0.0, 0.25, 0.5, 1.0, 1.5, np.nan, np.inf, -np.inf])
    assert denormalize_array(vals).tolist() == [denormalize(v) for v in vals]
    assert denormalize_array(normalize_array(ints)).tolist() == ints.tolist()


def test_normalize_array_16_bit():
    deep = np.array([0x0000, 0x80FF, 0xFFFF], dtype=np.uint16)
    np.testing.assert_allclose(normalize_array(deep, 16), [0.0, 128 / 255.0, 1.0], atol=1e-7)


def test_integer_color_adapter():
    c = IntColor(255, 0, 128, 255)
    assert isinstance(c, IntegerColor)
    f = IntegerColorAdapter(c).float_color()
    assert f == FloatColor(1.0, 0.0, 128 / 255.0, 1.0)


def test_integer_color_adapter_16_bit():
    f = IntegerColorAdapter(IntColor(0xFFFF, 0x0000, 0x7F00, 0xFFFF, bit_depth=16)).float_color()
    assert f.rgba() == pytest.approx((1.0, 0.0, 127 / 255.0, 1.0))


def test_float_color_is_not_clamped():
    c = FloatColor(-0.25, 1.5, 0.5, 2.0)
    assert c.rgba() == (-0.25, 1.5, 0.5, 2.0)
