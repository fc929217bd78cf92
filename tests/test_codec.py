from __future__ import annotations

import pytest

from home_automation.devices import codec
from home_automation.models import NO_DATA


def test_integer_packet_tags_and_masks() -> None:
    assert codec.integer_packet(21) == 0xD5
    assert codec.integer_packet(63) == 0xFF
    assert codec.integer_packet(64) == 0xC0


def test_fractional_packet_masks() -> None:
    assert codec.fractional_packet(5) == 0x85
    assert codec.fractional_packet(0x1F, codec.FRACTIONAL_4BIT_MASK) == 0x8F


@pytest.mark.parametrize("digit", range(10))
@pytest.mark.parametrize("integer", range(64))
def test_setpoint_decodes_back(integer: int, digit: int) -> None:
    value = integer + digit / 10
    int_packet, frac_packet = codec.encode_setpoint(value)

    assert codec.decode_packet(int_packet) == (True, integer)
    assert codec.decode_packet(frac_packet) == (False, digit)
    assert codec.combine(integer, digit) == pytest.approx(value)


def test_decode_rejects_untagged_byte() -> None:
    with pytest.raises(ValueError):
        codec.decode_packet(0x05)


def test_encode_climate_setpoint() -> None:
    assert codec.encode_setpoint(21.5) == (0xC0 | 21, 0x80 | 5)
    assert codec.encode_setpoint(18.0) == (0xC0 | 18, 0x80)


def test_encode_carries_rounded_tenths() -> None:
    assert codec.encode_setpoint(21.97) == (0xC0 | 22, 0x80)


def test_encode_shading_setpoint_halves_integer() -> None:
    assert codec.encode_setpoint(100.0, scale=2, frac_mask=codec.FRACTIONAL_4BIT_MASK, max_integer=50) == (
        0xC0 | 50,
        0x80,
    )
    assert codec.encode_setpoint(36.4, scale=2, frac_mask=codec.FRACTIONAL_4BIT_MASK) == (0xC0 | 18, 0x80 | 4)


def test_encode_four_bit_fraction_saturates_at_nine() -> None:
    _, frac = codec.encode_setpoint(37.5, scale=2, frac_mask=codec.FRACTIONAL_4BIT_MASK)
    assert frac == 0x80 | 9


def test_combine_temperature_scenario() -> None:
    assert codec.combine(21, 5) == pytest.approx(21.5)


def test_combine_rejects_partial_reading() -> None:
    assert codec.combine(21, NO_DATA) is None
    assert codec.combine(NO_DATA, 5) is None


def test_clamp_percent() -> None:
    assert codec.clamp_percent(150.0) == 100.0
    assert codec.clamp_percent(-3.0) == 0.0
    assert codec.clamp_percent(42.5) == 42.5
