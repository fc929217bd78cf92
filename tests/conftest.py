from __future__ import annotations

import functools

import pytest

from home_automation.communicator.serial_transport import SerialTransport
from home_automation.device_simulator import ClimateBoard, ShadingBoard, SimulatedSerial
from home_automation.devices.sessions.climate_session import ClimateSession
from home_automation.devices.sessions.shading_session import ShadingSession


class FakeClock:
    """Advances time on sleep() instead of waiting."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def make_transport(board, clock: FakeClock, port: str = "COM3") -> SerialTransport:
    return SerialTransport(
        port=port,
        serial_factory=functools.partial(SimulatedSerial, board),
        clock=clock,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def climate_board() -> ClimateBoard:
    return ClimateBoard(ambient_temperature=21.5, fan_speed=120)


@pytest.fixture
def shading_board() -> ShadingBoard:
    return ShadingBoard(position=40.0, light_intensity=45.3, outdoor_pressure=1013.2, outdoor_temperature=12.4)


@pytest.fixture
def climate(climate_board: ClimateBoard, clock: FakeClock) -> ClimateSession:
    session = ClimateSession(transport=make_transport(climate_board, clock))
    assert session.open()
    return session


@pytest.fixture
def shading(shading_board: ShadingBoard, clock: FakeClock) -> ShadingSession:
    session = ShadingSession(transport=make_transport(shading_board, clock))
    assert session.open()
    return session
