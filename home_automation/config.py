import logging
from typing import Dict, Any

import serial

# Line settings shared by both controller boards. The firmware expects 9600 8N1
# with no flow control; both ends must agree.
SERIAL_DEFAULTS: Dict[str, Any] = {
    "baudrate": 9600,
    "bytesize": serial.EIGHTBITS,
    "parity": serial.PARITY_NONE,
    "stopbits": serial.STOPBITS_ONE,
    "xonxoff": False,
    "rtscts": False,
    "timeout": 0,
    "write_timeout": 1.0
}

# Per-board protocol timing. All delays are in seconds.
DEVICE_PARAMETERS: Dict[str, Dict[str, Any]] = {
    "climate": {
        "baudrate": 9600,
        "read_timeout": 0.5,       # 50 polls of 10 ms
        "poll_step": 0.01,
        "request_settle": 0.0,     # climate board answers without a settle window
        "exchange_gap": 0.0,
        "setpoint_settle": 0.04,   # between integer and fractional setpoint packets
        "poll_interval": 0.7,
        "description": "Air conditioner board (ambient temperature, fan speed, setpoint)"
    },
    "shading": {
        "baudrate": 9600,
        "read_timeout": 0.5,
        "poll_step": 0.01,
        "request_settle": 0.03,    # after each request byte, before reading the answer
        "exchange_gap": 0.02,      # after each request/response pair
        "setpoint_settle": 0.02,
        "poll_interval": 0.9,
        "pressure_offset": 1000,   # board reports only the last two digits of hPa
        "protocol_revision": 2,
        "description": "Curtain board (light, pressure, outdoor temperature, shade position)"
    }
}

# A global list of typical baud rates
BAUD_RATES = [9600, 19200, 38400, 57600, 115200]


def setup_logging(name: str, level: int = logging.DEBUG) -> logging.Logger:
    """
    Configures logging for the application.
    Child loggers (home_automation.*) propagate into the handler installed here.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)

    # Removes old handlers if any
    if logger.hasHandlers():
        logger.handlers.clear()
    logger.addHandler(console_handler)

    return logger
