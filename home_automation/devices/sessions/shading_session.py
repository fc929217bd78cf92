"""
shading_session.py

Implements the session for the curtain board, protocol revision 2.

One poll reads four quantities, each as a fractional/integer pair:
light intensity (0x07/0x08), outdoor pressure (0x05/0x06, reported without its
leading thousand), outdoor temperature (0x03/0x04) and shade position (0x01/0x02).
The board is not interrupt driven, so every request waits a settle window before its
answer is read and every exchange is followed by a short gap.
"""

import logging
import math
import threading
from typing import Any, Dict, Optional, Union

from home_automation.communicator.serial_transport import SerialTransport
from home_automation.config import DEVICE_PARAMETERS
from home_automation.devices import codec
from home_automation.devices.commands.shading_commands import ShadingCommand
from home_automation.models import SessionState, ShadingReading

# The integer packet is doubled by the firmware; 50 * 2 is the full 100 %.
MAX_POSITION_STEP = 50


class ShadingSession:
    """
    Host-side state and protocol sequence for the shading board.
    """

    device_type = "shading"

    def __init__(self, transport: Optional[SerialTransport] = None,
                 params: Optional[Dict[str, Any]] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initializes an idle session.

        Args:
            transport: The transport this session owns; built from params if omitted.
            params: Timing parameters; defaults to DEVICE_PARAMETERS["shading"].
            logger: Diagnostic sink for this session.
        """
        self.params = params or DEVICE_PARAMETERS[self.device_type]
        self.logger = logger or logging.getLogger(__name__)
        self.transport = transport or SerialTransport.from_params(self.params, logger=self.logger)
        self.state = SessionState.IDLE
        self._lock = threading.RLock()
        self._position = 0.0
        self._requested_position = 0.0
        self._light_intensity = 0.0
        self._outdoor_pressure = 0.0
        self._outdoor_temperature = 0.0

    @property
    def is_open(self) -> bool:
        return self.transport.is_open

    def configure(self, port: Union[int, str], baudrate: int) -> None:
        self.transport.configure(port, baudrate)

    def open(self) -> bool:
        with self._lock:
            if not self.transport.open():
                return False
            self.state = SessionState.OPEN
            return True

    def close(self) -> bool:
        with self._lock:
            closed = self.transport.close()
            self.state = SessionState.CLOSED
            return closed

    def _read(self, fractional: int, integer: int, channel: str) -> Optional[float]:
        value = codec.read_pair(
            self.transport,
            fractional,
            integer,
            settle=self.params["request_settle"],
            gap=self.params["exchange_gap"]
        )
        if value is None:
            self.logger.debug(f"{channel} unchanged (incomplete answer)",
                              extra={"device": self.device_type, "channel": channel})
        return value

    def update(self) -> None:
        """
        Polls light, pressure, outdoor temperature and position in that order.
        Each quantity is replaced only when both of its halves arrived.
        """
        with self._lock:
            if not self.transport.is_open:
                return
            self.state = SessionState.POLLING
            self.transport.discard_input()

            light = self._read(ShadingCommand.LIGHT_FRACTIONAL.code,
                               ShadingCommand.LIGHT_INTEGER.code, "light_intensity")
            if light is not None:
                self._light_intensity = light

            pressure = self._read(ShadingCommand.PRESSURE_FRACTIONAL.code,
                                  ShadingCommand.PRESSURE_INTEGER.code, "outdoor_pressure")
            if pressure is not None:
                self._outdoor_pressure = self.params.get("pressure_offset", 1000) + pressure

            temperature = self._read(ShadingCommand.TEMPERATURE_FRACTIONAL.code,
                                     ShadingCommand.TEMPERATURE_INTEGER.code, "outdoor_temperature")
            if temperature is not None:
                self._outdoor_temperature = temperature

            position = self._read(ShadingCommand.POSITION_FRACTIONAL.code,
                                  ShadingCommand.POSITION_INTEGER.code, "position")
            if position is not None:
                self._position = codec.clamp_percent(position)

    def set_position(self, percent: float, precise: bool = True) -> bool:
        """
        Moves the shade under host control.

        Args:
            percent: Target opening in percent; clamped to [0, 100].
            precise: Send the remainder above twice the integer step, in tenths and
                saturated at 9. When False the fractional packet is the constant
                placeholder (integer-only shorthand).

        Returns:
            True if both packets were written, False otherwise.
        """
        with self._lock:
            if not self.transport.is_open:
                self.logger.warning("Position not sent: line not open",
                                    extra={"device": self.device_type})
                return False
            if not math.isfinite(percent):
                self.logger.warning(f"Position not sent: {percent} is not a percentage",
                                    extra={"device": self.device_type})
                return False

            percent = codec.clamp_percent(float(percent))
            self._requested_position = percent
            if precise:
                int_packet, frac_packet = codec.encode_setpoint(
                    percent,
                    scale=2,
                    frac_mask=codec.FRACTIONAL_4BIT_MASK,
                    max_integer=MAX_POSITION_STEP
                )
            else:
                int_packet = codec.integer_packet(min(math.floor(percent / 2), MAX_POSITION_STEP))
                frac_packet = codec.FRACTIONAL_PLACEHOLDER
            self.logger.debug(f"Position {percent} -> 0x{int_packet:02X} 0x{frac_packet:02X}")

            if not self.transport.send_byte(int_packet):
                return False
            self.transport.clock.sleep(self.params["setpoint_settle"])
            return self.transport.send_byte(frac_packet)

    def set_auto_mode(self) -> bool:
        """
        Hands the shade back to the board's own light-driven control until the next
        set_position(). Sending it again changes nothing.
        """
        with self._lock:
            return self.transport.send_byte(ShadingCommand.AUTO_MODE.code)

    def get_position(self) -> float:
        return self._position

    def get_requested_position(self) -> float:
        return self._requested_position

    def get_light_intensity(self) -> float:
        return self._light_intensity

    def get_outdoor_pressure(self) -> float:
        return self._outdoor_pressure

    def get_outdoor_temperature(self) -> float:
        return self._outdoor_temperature

    def reading(self) -> ShadingReading:
        with self._lock:
            return ShadingReading(
                position=self._position,
                light_intensity=self._light_intensity,
                outdoor_pressure=self._outdoor_pressure,
                outdoor_temperature=self._outdoor_temperature
            )
