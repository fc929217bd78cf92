#!/usr/bin/env python3
"""
device_simulator.py

This module emulates the two controller boards for testing without physical hardware.
It replicates the firmware behaviour byte by byte and keeps an internal state so that
setpoint packets affect subsequent reads.

Boards:
  - ClimateBoard answers 0x03/0x04 (ambient temperature tenths/integer) and 0x05 (fan
    speed), and latches 11xxxxxx/10xxxxxx packet pairs into the desired temperature.
  - ShadingBoard answers 0x01..0x08 (position, outdoor temperature, pressure, light),
    latches packet pairs into the shade position (integer doubled by the firmware), and
    returns to onboard control on 0x09.

Fault switches (on every board):
  - respond = False          the board swallows requests (every read times out)
  - drop_codes = {0x04}      no answer to the listed request codes
  - overrides = {0x02: 150}  fixed raw answer for a request code
  - fail_open / fail_write / fail_read   platform errors raised by SimulatedSerial

SimulatedSerial exposes the part of the pyserial API the transport uses, so it can be
plugged in through SerialTransport(serial_factory=...).

Usage Example:
    board = ShadingBoard(light_intensity=45.3)
    transport = SerialTransport(port="SIM", serial_factory=functools.partial(SimulatedSerial, board))
    session = ShadingSession(transport=transport)
    session.open()
    session.update()
"""

import functools
import logging
import math
from typing import Dict, Optional, Set, Tuple

import serial

from home_automation.communicator.serial_transport import SerialTransport
from home_automation.config import DEVICE_PARAMETERS
from home_automation.devices import codec
from home_automation.devices.commands.climate_commands import ClimateCommand
from home_automation.devices.commands.shading_commands import ShadingCommand


def split_decimal(value: float) -> Tuple[int, int]:
    """
    Splits a value into its integer part and tenths digit, as the firmware reports it.
    """
    integer = math.floor(value)
    tenths = round((value - integer) * codec.DECIMAL_FACTOR)
    if tenths >= codec.DECIMAL_FACTOR:
        integer += 1
        tenths = 0
    return integer, tenths


class SimulatedBoard:
    """
    Shared byte handling for the simulated boards.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.received = bytearray()
        self.respond = True
        self.drop_codes: Set[int] = set()
        self.overrides: Dict[int, int] = {}
        self.fail_open = False
        self.fail_write = False
        self.fail_read = False
        self._pending_integer: Optional[int] = None

    def handle(self, byte: int) -> Optional[int]:
        """
        Feeds one received byte to the firmware model.

        Returns:
            The answer byte, or None if the board stays silent.
        """
        self.received.append(byte)
        tag = byte & codec.TAG_MASK
        if tag in (codec.INTEGER_TAG, codec.FRACTIONAL_TAG):
            is_integer, magnitude = codec.decode_packet(byte)
            if is_integer:
                self._pending_integer = magnitude
                self.on_manual()
            elif self._pending_integer is not None:
                self.on_setpoint(self._pending_integer, magnitude)
                self._pending_integer = None
            return None

        if not self.respond or byte in self.drop_codes:
            self.logger.debug(f"Simulated board ignores 0x{byte:02X}")
            return None
        if byte in self.overrides:
            return self.overrides[byte] & 0xFF
        answer = self.answer(byte)
        if answer is not None:
            answer &= 0xFF
        return answer

    def answer(self, code: int) -> Optional[int]:
        return None

    def on_manual(self) -> None:
        pass

    def on_setpoint(self, integer: int, digit: int) -> None:
        pass


class ClimateBoard(SimulatedBoard):
    """
    Firmware model of the air conditioner board.
    """

    def __init__(self, ambient_temperature: float = 21.5, fan_speed: int = 120,
                 logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.ambient_temperature = ambient_temperature
        self.fan_speed = fan_speed
        self.desired_temperature: Optional[float] = None

    def answer(self, code: int) -> Optional[int]:
        integer, tenths = split_decimal(self.ambient_temperature)
        if code == ClimateCommand.TEMPERATURE_FRACTIONAL.code:
            return tenths
        if code == ClimateCommand.TEMPERATURE_INTEGER.code:
            return integer
        if code == ClimateCommand.FAN_SPEED.code:
            return self.fan_speed
        return None

    def on_setpoint(self, integer: int, digit: int) -> None:
        self.desired_temperature = integer + digit / 10.0
        self.logger.debug(f"Simulated desired temperature: {self.desired_temperature:.1f}")


class ShadingBoard(SimulatedBoard):
    """
    Firmware model of the curtain board, protocol revision 2.
    """

    def __init__(self, position: float = 40.0, light_intensity: float = 45.3,
                 outdoor_pressure: float = 1013.2, outdoor_temperature: float = 12.4,
                 logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.position = position
        self.light_intensity = light_intensity
        self.outdoor_pressure = outdoor_pressure
        self.outdoor_temperature = outdoor_temperature
        self.auto_mode = True

    def answer(self, code: int) -> Optional[int]:
        readings = {
            ShadingCommand.POSITION_FRACTIONAL.code: (self.position, 1),
            ShadingCommand.POSITION_INTEGER.code: (self.position, 0),
            ShadingCommand.TEMPERATURE_FRACTIONAL.code: (self.outdoor_temperature, 1),
            ShadingCommand.TEMPERATURE_INTEGER.code: (self.outdoor_temperature, 0),
            ShadingCommand.PRESSURE_FRACTIONAL.code: (self.outdoor_pressure - 1000, 1),
            ShadingCommand.PRESSURE_INTEGER.code: (self.outdoor_pressure - 1000, 0),
            ShadingCommand.LIGHT_FRACTIONAL.code: (self.light_intensity, 1),
            ShadingCommand.LIGHT_INTEGER.code: (self.light_intensity, 0),
        }
        if code == ShadingCommand.AUTO_MODE.code:
            self.auto_mode = True
            return None
        if code not in readings:
            return None
        value, half = readings[code]
        return split_decimal(value)[half]

    def on_manual(self) -> None:
        self.auto_mode = False

    def on_setpoint(self, integer: int, digit: int) -> None:
        self.position = min(integer * 2 + digit / 10.0, 100.0)
        self.logger.debug(f"Simulated shade position: {self.position:.1f}")


class SimulatedSerial:
    """
    Minimal pyserial stand-in wired to a simulated board.
    Answers are queued as soon as a request byte is written.
    """

    def __init__(self, board: SimulatedBoard, port: Optional[str] = None,
                 baudrate: int = 9600, **settings):
        self.board = board
        self.port = port
        self.baudrate = baudrate
        self.settings = settings
        self.is_open = False
        self.input_resets = 0
        self._rx = bytearray()
        if port is not None:
            self.open()

    def open(self) -> None:
        if self.board.fail_open:
            raise serial.SerialException(f"could not open port {self.port}")
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    @property
    def in_waiting(self) -> int:
        self._check_open()
        if self.board.fail_read:
            raise serial.SerialException("device reports readiness to read but returned no data")
        return len(self._rx)

    def read(self, size: int = 1) -> bytes:
        self._check_open()
        if self.board.fail_read:
            raise serial.SerialException("read failed")
        data = bytes(self._rx[:size])
        del self._rx[:size]
        return data

    def write(self, data: bytes) -> int:
        self._check_open()
        if self.board.fail_write:
            raise serial.SerialTimeoutException("Write timeout")
        for byte in data:
            answer = self.board.handle(byte)
            if answer is not None:
                self._rx.append(answer)
        return len(data)

    def flush(self) -> None:
        pass

    def inject(self, data: bytes) -> None:
        """Queues unsolicited bytes, as line noise or a late answer would."""
        self._rx.extend(data)

    def reset_input_buffer(self) -> None:
        self.input_resets += 1
        self._rx.clear()

    def reset_output_buffer(self) -> None:
        pass

    def _check_open(self) -> None:
        if not self.is_open:
            raise serial.SerialException("Attempting to use a port that is not open")


BOARD_CLASSES = {
    "climate": ClimateBoard,
    "shading": ShadingBoard,
}


def create_simulated_transport(device_type: str, board: Optional[SimulatedBoard] = None,
                               port: str = "SIM", **kwargs) -> SerialTransport:
    """
    Builds a transport whose line is a simulated board of the given type.

    Raises:
        ValueError: If the device type is unsupported.
    """
    if device_type not in BOARD_CLASSES:
        raise ValueError("Unsupported device type. Use 'climate' or 'shading'.")
    board = board or BOARD_CLASSES[device_type]()
    return SerialTransport.from_params(
        DEVICE_PARAMETERS[device_type],
        port=port,
        serial_factory=functools.partial(SimulatedSerial, board),
        **kwargs
    )
