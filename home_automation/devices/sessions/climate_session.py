"""
climate_session.py

Implements the session for the air conditioner board: one poll reads the ambient
temperature (paired exchange) and the fan speed (single exchange); one command sends
the desired temperature as a two-packet setpoint.
"""

import logging
import math
import threading
from typing import Any, Dict, Optional, Union

from home_automation.communicator.serial_transport import SerialTransport
from home_automation.config import DEVICE_PARAMETERS
from home_automation.devices import codec
from home_automation.devices.commands.climate_commands import ClimateCommand
from home_automation.models import ClimateReading, SessionState


class ClimateSession:
    """
    Host-side state and protocol sequence for the climate board.
    """

    device_type = "climate"

    def __init__(self, transport: Optional[SerialTransport] = None,
                 params: Optional[Dict[str, Any]] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initializes an idle session.

        Args:
            transport: The transport this session owns; built from params if omitted.
            params: Timing parameters; defaults to DEVICE_PARAMETERS["climate"].
            logger: Diagnostic sink for this session.
        """
        self.params = params or DEVICE_PARAMETERS[self.device_type]
        self.logger = logger or logging.getLogger(__name__)
        self.transport = transport or SerialTransport.from_params(self.params, logger=self.logger)
        self.state = SessionState.IDLE
        self._lock = threading.RLock()
        self._ambient_temperature = 0.0
        self._fan_speed = 0
        self._desired_temperature = 0.0

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

    def update(self) -> None:
        """
        Reads ambient temperature and fan speed. Does nothing while closed;
        a missing answer leaves the previous value in place.
        """
        with self._lock:
            if not self.transport.is_open:
                return
            self.state = SessionState.POLLING
            settle = self.params.get("request_settle", 0.0)
            gap = self.params.get("exchange_gap", 0.0)

            ambient = codec.read_pair(
                self.transport,
                ClimateCommand.TEMPERATURE_FRACTIONAL.code,
                ClimateCommand.TEMPERATURE_INTEGER.code,
                settle=settle,
                gap=gap
            )
            if ambient is not None:
                self._ambient_temperature = ambient
            else:
                self.logger.debug("Ambient temperature unchanged (incomplete answer)",
                                  extra={"device": self.device_type, "channel": "temperature"})

            speed = self.transport.query(ClimateCommand.FAN_SPEED.code, settle)
            if speed.success:
                self._fan_speed = speed.value
            else:
                self.logger.debug("Fan speed unchanged (no answer)",
                                  extra={"device": self.device_type, "channel": "fan_speed"})

    def set_desired_temperature(self, temp: float) -> bool:
        """
        Records the requested temperature and sends it as a two-packet setpoint.
        The value is not range-checked for this board. Nothing is recorded while
        the line is closed or when the value is not a finite number.

        Args:
            temp: Desired temperature in °C.

        Returns:
            True if both packets were written, False otherwise.
        """
        with self._lock:
            if not self.transport.is_open:
                self.logger.warning("Setpoint not sent: line not open",
                                    extra={"device": self.device_type})
                return False
            if not math.isfinite(temp):
                self.logger.warning(f"Setpoint not sent: {temp} is not a temperature",
                                    extra={"device": self.device_type})
                return False

            self._desired_temperature = temp
            int_packet, frac_packet = codec.encode_setpoint(temp)
            self.logger.debug(f"Setpoint {temp} -> 0x{int_packet:02X} 0x{frac_packet:02X} (unclamped)")
            if not self.transport.send_byte(int_packet):
                return False
            self.transport.clock.sleep(self.params["setpoint_settle"])
            return self.transport.send_byte(frac_packet)

    def get_ambient_temperature(self) -> float:
        return self._ambient_temperature

    def get_fan_speed(self) -> int:
        return self._fan_speed

    def get_desired_temperature(self) -> float:
        return self._desired_temperature

    def reading(self) -> ClimateReading:
        with self._lock:
            return ClimateReading(
                ambient_temperature=self._ambient_temperature,
                fan_speed=self._fan_speed,
                desired_temperature=self._desired_temperature
            )
