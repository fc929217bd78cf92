"""
codec.py

Fixed-point packet codec shared by the controller boards.

Every packet is one byte tagged in its top two bits:

    11xxxxxx  integer / primary packet, 6-bit magnitude (0..63)
    10xxxxxx  fractional / secondary packet, tenths digit (0..9)

A setpoint is sent as the integer packet, a settle delay, then the fractional packet.
A reading is two request/response exchanges, fractional digit first, combined as
``integer + fractional / 10``.
"""

import math
from typing import Optional, Tuple

from home_automation.models import NO_DATA

INTEGER_TAG = 0xC0
FRACTIONAL_TAG = 0x80
TAG_MASK = 0xC0
MAGNITUDE_MASK = 0x3F
FRACTIONAL_4BIT_MASK = 0x0F
DECIMAL_FACTOR = 10

# Second packet of the integer-only shorthand.
FRACTIONAL_PLACEHOLDER = FRACTIONAL_TAG


def integer_packet(magnitude: int) -> int:
    return INTEGER_TAG | (magnitude & MAGNITUDE_MASK)


def fractional_packet(digit: int, mask: int = MAGNITUDE_MASK) -> int:
    return FRACTIONAL_TAG | (digit & mask)


def decode_packet(packet: int) -> Tuple[bool, int]:
    """
    Splits a tagged packet.

    Returns:
        (is_integer_packet, magnitude)

    Raises:
        ValueError: If the byte carries neither tag.
    """
    tag = packet & TAG_MASK
    if tag == INTEGER_TAG:
        return True, packet & MAGNITUDE_MASK
    if tag == FRACTIONAL_TAG:
        return False, packet & MAGNITUDE_MASK
    raise ValueError(f"Untagged packet: 0x{packet:02X}")


def encode_setpoint(value: float, scale: int = 1, frac_mask: int = MAGNITUDE_MASK,
                    max_integer: Optional[int] = None) -> Tuple[int, int]:
    """
    Encodes a setpoint into its integer and fractional packets.

    Args:
        value: The requested value.
        scale: Units per integer step. The shading board doubles the integer byte, so it uses 2.
        frac_mask: 0x3F for a 6-bit fractional field, 0x0F for a 4-bit one (clamped to 0..9).
        max_integer: Optional cap on the integer magnitude.

    Returns:
        (integer_packet, fractional_packet)
    """
    integer = math.floor(value / scale)
    fractional = round((value - integer * scale) * DECIMAL_FACTOR)
    if scale == 1 and fractional >= DECIMAL_FACTOR:
        integer += 1
        fractional = 0
    if frac_mask == FRACTIONAL_4BIT_MASK:
        fractional = clamp(fractional, 0, DECIMAL_FACTOR - 1)
    if max_integer is not None:
        integer = min(integer, max_integer)
    return integer_packet(integer), fractional_packet(fractional, frac_mask)


def combine(integer: int, fractional: int) -> Optional[float]:
    """
    Joins the two halves of a reading. A missing half discards the whole reading.
    """
    if integer == NO_DATA or fractional == NO_DATA:
        return None
    return integer + fractional / float(DECIMAL_FACTOR)


def read_pair(transport, fractional_code: int, integer_code: int,
              settle: float = 0.0, gap: float = 0.0) -> Optional[float]:
    """
    Runs the two exchanges of one quantity, fractional digit first.

    Args:
        transport: An open SerialTransport.
        fractional_code: Request code of the tenths digit.
        integer_code: Request code of the integer part.
        settle: Seconds between each request and its read.
        gap: Seconds after each exchange.

    Returns:
        The combined value, or None if either answer is missing.
    """
    fractional = transport.query(fractional_code, settle)
    if gap:
        transport.clock.sleep(gap)
    integer = transport.query(integer_code, settle)
    if gap:
        transport.clock.sleep(gap)
    return combine(integer.value, fractional.value)


def clamp(value, low, high):
    return max(low, min(high, value))


def clamp_percent(value: float) -> float:
    return clamp(value, 0.0, 100.0)
