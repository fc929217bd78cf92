"""
models.py

Defines core data models shared by the transport, the device sessions and the
console front end. Utilizes dataclasses and enums to keep results explicit.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Returned by byte reads when nothing arrived within the bounded wait.
NO_DATA = -1


class ErrorKind(Enum):
    """
    The three ways a single exchange can fail. All of them are absorbed by the
    transport and reported as data, never raised.
    """
    NOT_OPEN = "transport_unavailable"
    IO_FAILURE = "io_failure"
    TIMEOUT = "timeout"


class SessionState(Enum):
    """
    Lifecycle of a device session.
    """
    IDLE = "idle"
    OPEN = "open"
    POLLING = "polling"
    CLOSED = "closed"


@dataclass
class ByteResponse:
    """
    Outcome of one byte-level transport operation.
    """
    value: int                             # Byte read (0..255), or NO_DATA
    success: bool                          # True if the operation completed
    error: Optional[ErrorKind] = None      # Failure category if any
    error_message: Optional[str] = None    # Platform detail for the log


@dataclass(frozen=True)
class ClimateReading:
    """
    Snapshot of the cached climate board state.
    """
    ambient_temperature: float
    fan_speed: int
    desired_temperature: float


@dataclass(frozen=True)
class ShadingReading:
    """
    Snapshot of the cached shading board state.
    """
    position: float
    light_intensity: float
    outdoor_pressure: float
    outdoor_temperature: float
