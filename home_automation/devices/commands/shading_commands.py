"""
shading_commands.py

Defines the command codes understood by the curtain board, protocol revision 2.
In this revision 0x05 carries the pressure tenths digit and 0x03/0x04 the outdoor
temperature; shade position is read as a fractional/integer pair.
"""

from home_automation.param_types import ChannelDefinition, ParamType


class ShadingCommand:
    """
    Contains channel definitions for the shading board.
    """
    POSITION_FRACTIONAL = ChannelDefinition(
        code=0x01,
        name="position_fractional",
        description="Read shade position, tenths digit",
        read=True,
        param_type=ParamType.DECIMAL_DIGIT,
        units="%"
    )

    POSITION_INTEGER = ChannelDefinition(
        code=0x02,
        name="position_integer",
        description="Read shade position, integer part",
        read=True,
        units="%"
    )

    TEMPERATURE_FRACTIONAL = ChannelDefinition(
        code=0x03,
        name="temperature_fractional",
        description="Read outdoor temperature, tenths digit",
        read=True,
        param_type=ParamType.DECIMAL_DIGIT,
        units="°C"
    )

    TEMPERATURE_INTEGER = ChannelDefinition(
        code=0x04,
        name="temperature_integer",
        description="Read outdoor temperature, integer part",
        read=True,
        units="°C"
    )

    PRESSURE_FRACTIONAL = ChannelDefinition(
        code=0x05,
        name="pressure_fractional",
        description="Read outdoor pressure, tenths digit",
        read=True,
        param_type=ParamType.DECIMAL_DIGIT,
        units="hPa"
    )

    PRESSURE_INTEGER = ChannelDefinition(
        code=0x06,
        name="pressure_integer",
        description="Read outdoor pressure, last two digits (add 1000)",
        read=True,
        units="hPa"
    )

    LIGHT_FRACTIONAL = ChannelDefinition(
        code=0x07,
        name="light_fractional",
        description="Read light intensity, tenths digit",
        read=True,
        param_type=ParamType.DECIMAL_DIGIT,
        units="lux"
    )

    LIGHT_INTEGER = ChannelDefinition(
        code=0x08,
        name="light_integer",
        description="Read light intensity, integer part",
        read=True,
        units="lux"
    )

    AUTO_MODE = ChannelDefinition(
        code=0x09,
        name="auto_mode",
        description="Return the shade to onboard sensor control",
        write=True,
        param_type=ParamType.NONE
    )

    POSITION = ChannelDefinition(
        code=0xC0,
        name="position",
        description="Set shade position (halved integer packet, then 4-bit fractional packet)",
        write=True,
        param_type=ParamType.FIXED_POINT,
        units="%"
    )
