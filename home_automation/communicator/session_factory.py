"""
session_factory.py

Provides a factory function to instantiate the appropriate board session
based on the given device type. Each session gets its own transport.
"""

import logging
from typing import Optional, Union

from home_automation.communicator.serial_transport import SerialTransport
from home_automation.config import DEVICE_PARAMETERS
from home_automation.devices.sessions.climate_session import ClimateSession
from home_automation.devices.sessions.device_session import DeviceSession
from home_automation.devices.sessions.shading_session import ShadingSession

SESSION_CLASSES = {
    "climate": ClimateSession,
    "shading": ShadingSession,
}


def get_session(device_type: str, port: Optional[Union[int, str]] = None,
                baudrate: Optional[int] = None,
                transport: Optional[SerialTransport] = None,
                logger: Optional[logging.Logger] = None) -> DeviceSession:
    """
    Returns an idle session for the given device type.

    Args:
        device_type: "climate" or "shading".
        port: Port number or device name to configure.
        baudrate: Line speed; defaults to the board's configured rate.
        transport: A ready-made transport to hand over (e.g., a simulated one).
        logger: Diagnostic sink for the session and its transport.

    Returns:
        A ClimateSession or ShadingSession.

    Raises:
        ValueError: If the device type is unsupported.
    """
    if device_type not in SESSION_CLASSES:
        raise ValueError(f"Unsupported device type: {device_type}")
    params = DEVICE_PARAMETERS[device_type]
    logger = logger or logging.getLogger(f"home_automation.{device_type}")
    if transport is None:
        transport = SerialTransport.from_params(params, logger=logger)
    if port is not None:
        transport.configure(port, baudrate or params["baudrate"])
    return SESSION_CLASSES[device_type](transport=transport, params=params, logger=logger)
