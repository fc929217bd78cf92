from __future__ import annotations

import pytest
import serial

from home_automation.communicator.serial_transport import SerialTransport, port_name
from home_automation.device_simulator import ClimateBoard, SimulatedSerial
from home_automation.models import NO_DATA, ErrorKind

from conftest import FakeClock, make_transport


def test_port_number_maps_to_platform_name() -> None:
    assert port_name(3, platform="nt") == "COM3"
    assert port_name(0, platform="posix") == "/dev/ttyS0"
    assert port_name("/dev/ttyUSB0") == "/dev/ttyUSB0"


def test_configure_does_not_open(climate_board: ClimateBoard, clock: FakeClock) -> None:
    transport = make_transport(climate_board, clock)
    transport.configure("COM7", 19200)
    assert transport.port == "COM7"
    assert transport.baudrate == 19200
    assert not transport.is_open


def test_open_without_port_fails_cleanly() -> None:
    transport = SerialTransport()
    assert transport.open() is False
    assert transport.last_error is ErrorKind.IO_FAILURE


def test_open_discards_stale_buffers(climate_board: ClimateBoard, clock: FakeClock) -> None:
    transport = make_transport(climate_board, clock)
    assert transport.open()
    assert transport.ser.input_resets == 1
    assert transport.ser.baudrate == 9600
    assert transport.open()
    assert transport.ser.input_resets == 1


def test_failed_open_can_be_retried(climate_board: ClimateBoard, clock: FakeClock) -> None:
    transport = make_transport(climate_board, clock)
    climate_board.fail_open = True
    assert transport.open() is False
    assert not transport.is_open
    assert transport.last_error is ErrorKind.IO_FAILURE

    climate_board.fail_open = False
    assert transport.open() is True
    assert transport.is_open


def test_close_is_idempotent(climate_board: ClimateBoard, clock: FakeClock) -> None:
    transport = make_transport(climate_board, clock)
    assert transport.close() is True
    transport.open()
    assert transport.close() is True
    assert transport.close() is True
    assert not transport.is_open


def test_no_io_while_closed(climate_board: ClimateBoard, clock: FakeClock) -> None:
    transport = make_transport(climate_board, clock)
    assert transport.send_byte(0x03) is False
    assert transport.last_error is ErrorKind.NOT_OPEN
    assert transport.read_byte() == NO_DATA
    assert climate_board.received == bytearray()
    assert clock.sleeps == []


def test_query_reads_answer(climate_board: ClimateBoard, clock: FakeClock) -> None:
    transport = make_transport(climate_board, clock)
    transport.open()
    response = transport.query(0x04)
    assert response.success
    assert response.value == 21
    assert transport.last_error is None


def test_read_times_out_with_sentinel(climate_board: ClimateBoard, clock: FakeClock) -> None:
    transport = make_transport(climate_board, clock)
    transport.open()
    climate_board.respond = False

    assert transport.send_byte(0x04) is True
    assert transport.read_byte() == NO_DATA
    assert transport.last_error is ErrorKind.TIMEOUT
    assert clock.now == pytest.approx(0.5, abs=0.011)
    assert all(step == 0.01 for step in clock.sleeps)


def test_write_failure_is_swallowed(climate_board: ClimateBoard, clock: FakeClock) -> None:
    transport = make_transport(climate_board, clock)
    transport.open()
    climate_board.fail_write = True

    assert transport.send_byte(0x04) is False
    assert transport.last_error is ErrorKind.IO_FAILURE
    response = transport.query(0x04)
    assert response.value == NO_DATA
    assert response.error is ErrorKind.IO_FAILURE


def test_read_failure_returns_sentinel(climate_board: ClimateBoard, clock: FakeClock) -> None:
    transport = make_transport(climate_board, clock)
    transport.open()
    climate_board.fail_read = True

    assert transport.read_byte() == NO_DATA
    assert transport.last_error is ErrorKind.IO_FAILURE


def test_send_byte_rejects_out_of_range_values(climate_board: ClimateBoard, clock: FakeClock) -> None:
    transport = make_transport(climate_board, clock)
    transport.open()
    with pytest.raises(ValueError):
        transport.send_byte(0x100)


def test_discard_input_drops_late_answers(climate_board: ClimateBoard, clock: FakeClock) -> None:
    transport = make_transport(climate_board, clock)
    transport.open()
    transport.ser.inject(b"\x2a")
    transport.discard_input()
    assert transport.ser.in_waiting == 0


def test_list_ports(monkeypatch: pytest.MonkeyPatch) -> None:
    class _Port:
        device = "/dev/ttyUSB0"

    monkeypatch.setattr(
        "home_automation.communicator.serial_transport.list_ports.comports", lambda: [_Port()]
    )
    assert SerialTransport.list_ports() == ["/dev/ttyUSB0"]


def test_failed_buffer_reset_releases_port(climate_board: ClimateBoard, clock: FakeClock) -> None:
    created = []

    class _ResetFailingSerial(SimulatedSerial):
        def reset_input_buffer(self) -> None:
            raise serial.SerialException("reset failed")

    def factory(**kwargs):
        port = _ResetFailingSerial(climate_board, **kwargs)
        created.append(port)
        return port

    transport = SerialTransport(port="COM3", serial_factory=factory, clock=clock)

    assert transport.open() is False
    assert transport.ser is None
    assert transport.last_error is ErrorKind.IO_FAILURE
    assert created and not any(port.is_open for port in created)
