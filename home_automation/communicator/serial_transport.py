"""
serial_transport.py

Implements the SerialTransport class that owns one serial line to a controller board.
Handles line setup, single-byte writes, bounded single-byte reads, and absorbs every
platform error so callers only ever see booleans, the NO_DATA sentinel, or a ByteResponse.
"""

import logging
import os
import time
from typing import Optional, Dict, Any, List, Union, Callable

import serial
from serial.tools import list_ports

from home_automation.config import SERIAL_DEFAULTS
from home_automation.models import ByteResponse, ErrorKind, NO_DATA


class SystemClock:
    """
    Wall clock used for polling and settle delays. Tests swap in a fake.
    """

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)

    def monotonic(self) -> float:
        return time.monotonic()


def port_name(port: Union[int, str], platform: str = os.name) -> str:
    """
    Maps a port number to the platform device name; names pass through unchanged.

    Args:
        port: A port number (3) or a device name ("COM3", "/dev/ttyUSB0").
        platform: The os.name value to map for.

    Returns:
        The device name handed to pyserial.
    """
    if isinstance(port, int):
        return f"COM{port}" if platform == "nt" else f"/dev/ttyS{port}"
    return str(port)


class SerialTransport:
    """
    Byte-level transport over one serial line.
    Never performs I/O while closed and never raises on I/O failure or timeout.
    """

    def __init__(self, port: Optional[Union[int, str]] = None, baudrate: int = 9600,
                 read_timeout: float = 0.5, poll_step: float = 0.01,
                 settings: Optional[Dict[str, Any]] = None,
                 serial_factory: Optional[Callable[..., Any]] = None,
                 clock: Optional[Any] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initializes the transport without opening the line.

        Args:
            port: Port number or device name; may be set later with configure().
            baudrate: Line speed.
            read_timeout: Upper bound in seconds for read_byte().
            poll_step: Interval in seconds between input checks while reading.
            settings: Overrides for SERIAL_DEFAULTS (bytesize, parity, ...).
            serial_factory: Callable building an opened serial object; defaults to serial.Serial.
            clock: Object with sleep() and monotonic(); defaults to SystemClock.
            logger: Optional logger instance.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock or SystemClock()
        self.serial_factory = serial_factory or serial.Serial
        self.current_settings = dict(SERIAL_DEFAULTS)
        if settings:
            self.current_settings.update(settings)
        self.read_timeout = read_timeout
        self.poll_step = poll_step
        self.ser = None
        self.port: Optional[str] = None
        self.baudrate = baudrate
        self.last_error: Optional[ErrorKind] = None
        if port is not None:
            self.configure(port, baudrate)

    @classmethod
    def from_params(cls, params: Dict[str, Any], port: Optional[Union[int, str]] = None,
                    **kwargs) -> "SerialTransport":
        """
        Builds a transport from a DEVICE_PARAMETERS entry.
        """
        return cls(
            port=port,
            baudrate=params.get("baudrate", 9600),
            read_timeout=params.get("read_timeout", 0.5),
            poll_step=params.get("poll_step", 0.01),
            **kwargs
        )

    @property
    def is_open(self) -> bool:
        return self.ser is not None and self.ser.is_open

    def configure(self, port: Union[int, str], baudrate: int) -> None:
        """
        Records the line identity. Does not touch the line and never fails;
        an unusable port simply fails later in open().
        """
        self.port = port_name(port)
        self.baudrate = baudrate
        if self.is_open:
            self.logger.warning(f"Line is open; {self.port} @ {baudrate} applies after reopening")

    def open(self) -> bool:
        """
        Opens the serial line if it is not open yet and discards stale buffers.

        Returns:
            True if the line is open afterwards, False otherwise.
        """
        if self.is_open:
            return True
        if not self.port:
            self.last_error = ErrorKind.IO_FAILURE
            self.logger.error("Open failed: no port configured")
            return False
        settings = dict(self.current_settings, baudrate=self.baudrate)
        ser = None
        try:
            ser = self.serial_factory(port=self.port, **settings)
            ser.reset_input_buffer()
            ser.reset_output_buffer()
        except (serial.SerialException, OSError, ValueError) as e:
            # Release a half-opened port
            if ser is not None and ser.is_open:
                try:
                    ser.close()
                except (serial.SerialException, OSError) as close_error:
                    self.logger.warning(f"Close after failed open on {self.port}: {close_error}")
            self.ser = None
            self.last_error = ErrorKind.IO_FAILURE
            self.logger.error(f"Open error on {self.port}: {e}",
                              extra={"port": self.port, "error_kind": ErrorKind.IO_FAILURE.value})
            return False
        self.ser = ser
        self.last_error = None
        self.logger.info(f"Opened {self.port} @ {self.baudrate} baud")
        return True

    def close(self) -> bool:
        """
        Closes the serial line. Closing a closed line is a successful no-op.

        Returns:
            True unless the platform reported an error while closing.
        """
        if not self.is_open:
            self.ser = None
            return True
        try:
            self.ser.close()
            self.logger.info(f"Closed {self.port}")
            return True
        except (serial.SerialException, OSError) as e:
            self.last_error = ErrorKind.IO_FAILURE
            self.logger.error(f"Close error on {self.port}: {e}",
                              extra={"port": self.port, "error_kind": ErrorKind.IO_FAILURE.value})
            return False
        finally:
            self.ser = None

    def send_byte(self, value: int) -> bool:
        """
        Writes one byte if the line is open.

        Returns:
            True if the byte was handed to the driver, False otherwise.
        """
        return self.write(value).success

    def read_byte(self) -> int:
        """
        Waits up to read_timeout for one byte.

        Returns:
            The byte value (0..255), or NO_DATA on timeout, closed line or read failure.
        """
        return self.read().value

    def write(self, value: int) -> ByteResponse:
        """
        Writes one byte and reports the outcome.

        Raises:
            ValueError: If value does not fit in one byte.
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Not a byte value: {value}")
        if not self.is_open:
            return self._fail(ErrorKind.NOT_OPEN, "Line not open")
        try:
            self.ser.write(bytes([value]))
            self.ser.flush()
        except (serial.SerialException, OSError) as e:
            self.logger.error(f"SendByte error: {e}",
                              extra={"port": self.port, "error_kind": ErrorKind.IO_FAILURE.value})
            return self._fail(ErrorKind.IO_FAILURE, str(e))
        self.logger.debug(f"Sent 0x{value:02X}")
        self.last_error = None
        return ByteResponse(value=value, success=True)

    def read(self) -> ByteResponse:
        """
        Polls the input buffer every poll_step until a byte arrives or read_timeout elapses.
        """
        if not self.is_open:
            return self._fail(ErrorKind.NOT_OPEN, "Line not open")
        try:
            deadline = self.clock.monotonic() + self.read_timeout
            while not self.ser.in_waiting:
                if self.clock.monotonic() >= deadline:
                    self.logger.debug(f"No answer within {self.read_timeout:.3f} s")
                    return self._fail(ErrorKind.TIMEOUT, "No data")
                self.clock.sleep(self.poll_step)
            data = self.ser.read(1)
        except (serial.SerialException, OSError) as e:
            self.logger.error(f"ReadByte error: {e}",
                              extra={"port": self.port, "error_kind": ErrorKind.IO_FAILURE.value})
            return self._fail(ErrorKind.IO_FAILURE, str(e))
        if not data:
            return self._fail(ErrorKind.TIMEOUT, "No data")
        self.logger.debug(f"Received 0x{data[0]:02X}")
        self.last_error = None
        return ByteResponse(value=data[0], success=True)

    def query(self, code: int, settle: float = 0.0) -> ByteResponse:
        """
        Sends a one-byte request and reads the one-byte answer.

        Args:
            code: The request code.
            settle: Seconds to wait between the request and the read.

        Returns:
            The ByteResponse of the read, or of the failed write.
        """
        sent = self.write(code)
        if not sent.success:
            return ByteResponse(value=NO_DATA, success=False, error=sent.error,
                                error_message=sent.error_message)
        if settle:
            self.clock.sleep(settle)
        return self.read()

    def discard_input(self) -> None:
        """
        Drops any bytes waiting in the input buffer.
        """
        if not self.is_open:
            return
        try:
            if self.ser.in_waiting:
                self.ser.reset_input_buffer()
        except (serial.SerialException, OSError) as e:
            self.last_error = ErrorKind.IO_FAILURE
            self.logger.warning(f"Discard error: {e}",
                                extra={"port": self.port, "error_kind": ErrorKind.IO_FAILURE.value})

    @staticmethod
    def list_ports() -> List[str]:
        """
        Lists available serial ports.

        Returns:
            A list of available port names.
        """
        return [p.device for p in list_ports.comports()]

    def _fail(self, kind: ErrorKind, message: str) -> ByteResponse:
        self.last_error = kind
        return ByteResponse(value=NO_DATA, success=False, error=kind, error_message=message)
