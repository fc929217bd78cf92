# home_automation/devices/commands/__init__.py
from home_automation.devices.commands.climate_commands import ClimateCommand
from home_automation.devices.commands.shading_commands import ShadingCommand
