"""
climate_commands.py

Defines the command codes understood by the air conditioner board.
"""

from home_automation.param_types import ChannelDefinition, ParamType


class ClimateCommand:
    """
    Contains channel definitions for the climate board.
    """
    TEMPERATURE_FRACTIONAL = ChannelDefinition(
        code=0x03,
        name="temperature_fractional",
        description="Read ambient temperature, tenths digit",
        read=True,
        param_type=ParamType.DECIMAL_DIGIT,
        units="°C"
    )

    TEMPERATURE_INTEGER = ChannelDefinition(
        code=0x04,
        name="temperature_integer",
        description="Read ambient temperature, integer part",
        read=True,
        units="°C"
    )

    FAN_SPEED = ChannelDefinition(
        code=0x05,
        name="fan_speed",
        description="Read fan speed",
        read=True,
        units="rpm"
    )

    SETPOINT = ChannelDefinition(
        code=0xC0,
        name="setpoint",
        description="Set desired temperature (integer packet, then fractional packet)",
        write=True,
        param_type=ParamType.FIXED_POINT,
        units="°C"
    )
