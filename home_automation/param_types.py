"""
param_types.py

Defines payload types and a data class for channel definitions.
This file standardizes how every command code of the controller boards is described.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class ParamType(Enum):
    """
    Enumeration of payload types carried by a channel.
    """
    UINT8 = "uint8"                  # raw byte answer
    DECIMAL_DIGIT = "decimal_digit"  # tenths digit, 0..9
    FIXED_POINT = "fixed_point"      # integer packet followed by fractional packet
    NONE = "none"                    # bare command byte


@dataclass(frozen=True)
class ChannelDefinition:
    """
    Data class representing one command code of a controller board.

    Attributes:
        code: The byte sent on the wire (for setpoints, the packet tag).
        name: A short name for the channel.
        description: A human-readable description of what the channel carries.
        read: True if the code is a read request answered with one byte.
        write: True if the code changes device state.
        param_type: What the answer or payload holds.
        units: Unit of the physical quantity (e.g., "°C", "hPa").
    """
    code: int
    name: str
    description: str
    read: bool = False
    write: bool = False
    param_type: ParamType = ParamType.UINT8
    units: Optional[str] = None
