# home_automation/devices/sessions/__init__.py
from home_automation.devices.sessions.climate_session import ClimateSession
from home_automation.devices.sessions.shading_session import ShadingSession
