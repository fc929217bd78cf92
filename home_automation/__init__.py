# home_automation/__init__.py
from home_automation.communicator.serial_transport import SerialTransport
from home_automation.communicator.session_factory import get_session
from home_automation.devices.sessions.climate_session import ClimateSession
from home_automation.devices.sessions.shading_session import ShadingSession
from home_automation.models import NO_DATA, ErrorKind, SessionState

__all__ = [
    "SerialTransport",
    "get_session",
    "ClimateSession",
    "ShadingSession",
    "NO_DATA",
    "ErrorKind",
    "SessionState",
]
