"""
device_session.py

Defines the capability interface every board session offers to its caller.
Sessions are selected at construction (see communicator/session_factory.py) and each
one owns its SerialTransport exclusively; there is no shared connection base class.
"""

from typing import Protocol, Union

from home_automation.models import SessionState


class DeviceSession(Protocol):
    """
    What a poller or front end may rely on, whatever the board.
    """

    device_type: str
    state: SessionState

    @property
    def is_open(self) -> bool:
        ...

    def configure(self, port: Union[int, str], baudrate: int) -> None:
        """Sets the line identity without opening it."""

    def open(self) -> bool:
        """Opens the owned transport."""

    def close(self) -> bool:
        """Releases the owned transport."""

    def update(self) -> None:
        """Runs one poll sequence; failed reads keep the previous values."""

    def reading(self):
        """Returns a snapshot of the cached values."""
