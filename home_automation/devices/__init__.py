"""
__init__.py

Initializes the devices package by importing the board command definitions and
creating a mapping from device types to their corresponding command classes.
"""

from typing import List

from home_automation.devices.commands.climate_commands import ClimateCommand
from home_automation.devices.commands.shading_commands import ShadingCommand
from home_automation.param_types import ChannelDefinition

__all__ = [
    'ClimateCommand',
    'ShadingCommand'
]

DEVICE_COMMAND_MAP = {
    'climate': ClimateCommand,
    'shading': ShadingCommand,
}


def get_command_class(device_type: str):
    """
    Retrieves the command class for a specific device type.

    Args:
        device_type: The type of board ("climate" or "shading").

    Returns:
        The corresponding command class.

    Raises:
        ValueError: If the device type is unknown.
    """
    if device_type not in DEVICE_COMMAND_MAP:
        raise ValueError(f"Unknown device type: {device_type}")
    return DEVICE_COMMAND_MAP[device_type]


def list_channels(device_type: str) -> List[ChannelDefinition]:
    """
    Returns the channel definitions of a device type, ordered by code.
    """
    command_class = get_command_class(device_type)
    channels = [value for value in vars(command_class).values() if isinstance(value, ChannelDefinition)]
    return sorted(channels, key=lambda channel: channel.code)
