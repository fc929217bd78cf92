from __future__ import annotations

import pytest

from home_automation.device_simulator import ShadingBoard
from home_automation.devices.sessions.shading_session import ShadingSession
from home_automation.models import ShadingReading

from conftest import FakeClock, make_transport


def test_update_polls_all_channels_in_order(shading: ShadingSession, shading_board: ShadingBoard) -> None:
    shading.update()

    assert list(shading_board.received) == [0x07, 0x08, 0x05, 0x06, 0x03, 0x04, 0x01, 0x02]
    assert shading.reading() == ShadingReading(
        position=pytest.approx(40.0),
        light_intensity=pytest.approx(45.3),
        outdoor_pressure=pytest.approx(1013.2),
        outdoor_temperature=pytest.approx(12.4),
    )


def test_pressure_scenario(shading: ShadingSession, shading_board: ShadingBoard) -> None:
    shading_board.overrides = {0x06: 13, 0x05: 2}
    shading.update()
    assert shading.get_outdoor_pressure() == pytest.approx(1013.2)


def test_update_waits_settle_and_gap_delays(shading: ShadingSession, clock: FakeClock) -> None:
    shading.update()
    assert clock.sleeps.count(0.03) == 8
    assert clock.sleeps.count(0.02) == 8


def test_update_discards_stale_input(shading: ShadingSession) -> None:
    shading.transport.ser.inject(b"\x63")
    shading.update()
    assert shading.get_light_intensity() == pytest.approx(45.3)


def test_decoded_position_is_clamped(shading: ShadingSession, shading_board: ShadingBoard) -> None:
    shading_board.overrides = {0x02: 150, 0x01: 7}
    shading.update()
    assert shading.get_position() == 100.0


def test_missing_position_half_keeps_previous(shading: ShadingSession, shading_board: ShadingBoard) -> None:
    shading.update()
    shading_board.position = 80.0
    shading_board.drop_codes = {0x01}

    shading.update()

    assert shading.get_position() == pytest.approx(40.0)
    assert shading.get_light_intensity() == pytest.approx(45.3)


def test_update_is_noop_when_closed(shading_board: ShadingBoard, clock: FakeClock) -> None:
    session = ShadingSession(transport=make_transport(shading_board, clock))
    session.update()
    assert shading_board.received == bytearray()


def test_set_position_clamps_and_halves(
    shading: ShadingSession, shading_board: ShadingBoard, clock: FakeClock
) -> None:
    assert shading.set_position(150) is True

    assert list(shading_board.received) == [0xC0 | 50, 0x80 | 0]
    assert clock.sleeps == [0.02]
    assert shading.get_requested_position() == 100.0
    assert shading_board.position == 100.0
    assert shading_board.auto_mode is False


def test_set_position_sends_tenths_of_remainder(shading: ShadingSession, shading_board: ShadingBoard) -> None:
    shading.set_position(36.4)
    assert list(shading_board.received) == [0xC0 | 18, 0x80 | 4]
    assert shading_board.position == pytest.approx(36.4)


def test_set_position_negative_clamps_to_zero(shading: ShadingSession, shading_board: ShadingBoard) -> None:
    shading.set_position(-20)
    assert list(shading_board.received) == [0xC0, 0x80]
    assert shading.get_requested_position() == 0.0


def test_coarse_position_uses_placeholder(shading: ShadingSession, shading_board: ShadingBoard) -> None:
    shading.set_position(37, precise=False)
    assert list(shading_board.received) == [0xC0 | 18, 0x80]


def test_set_position_when_closed(shading_board: ShadingBoard, clock: FakeClock) -> None:
    session = ShadingSession(transport=make_transport(shading_board, clock))
    assert session.set_position(50) is False
    assert shading_board.received == bytearray()


def test_position_round_trip_through_board(shading: ShadingSession) -> None:
    shading.set_position(64.2)
    shading.update()
    assert shading.get_position() == pytest.approx(64.2)


def test_auto_mode_is_idempotent(shading: ShadingSession, shading_board: ShadingBoard) -> None:
    shading.set_position(20)
    assert shading.set_auto_mode() is True
    assert shading_board.auto_mode is True
    assert shading.set_auto_mode() is True
    assert shading_board.auto_mode is True
    assert list(shading_board.received)[-2:] == [0x09, 0x09]


def test_auto_mode_when_closed(shading_board: ShadingBoard, clock: FakeClock) -> None:
    session = ShadingSession(transport=make_transport(shading_board, clock))
    assert session.set_auto_mode() is False


@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_non_finite_position_is_rejected(shading: ShadingSession, shading_board: ShadingBoard, value: float) -> None:
    assert shading.set_position(value) is False
    assert shading.get_requested_position() == 0.0
    assert shading_board.received == bytearray()


def test_odd_percent_saturates_fractional_digit(shading: ShadingSession, shading_board: ShadingBoard) -> None:
    shading.set_position(37)
    assert list(shading_board.received) == [0xC0 | 18, 0x80 | 9]
