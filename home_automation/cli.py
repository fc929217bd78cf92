"""Typer console front end for the climate and shading boards."""

import logging
import time
from typing import List, Optional

import typer

from home_automation.communicator.serial_transport import SerialTransport
from home_automation.communicator.session_factory import get_session
from home_automation.config import DEVICE_PARAMETERS, setup_logging
from home_automation.device_simulator import create_simulated_transport
from home_automation.devices import list_channels
from home_automation.devices.sessions.device_session import DeviceSession
from home_automation.models import ClimateReading
from home_automation.param_types import ParamType
from home_automation.poller import Poller

app = typer.Typer(help="Console control for the climate and shading controller boards")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every byte on the line")) -> None:
    setup_logging("home_automation", logging.DEBUG if verbose else logging.WARNING)


def _open_session(device_type: str, port: Optional[str], baudrate: Optional[int],
                  simulate: bool) -> DeviceSession:
    transport = create_simulated_transport(device_type) if simulate else None
    session = get_session(device_type, port=port, baudrate=baudrate, transport=transport)
    if not session.open():
        typer.echo(f"Error: Could not open {device_type} port {port}", err=True)
        raise typer.Exit(code=1)
    return session


def _describe(session: DeviceSession) -> str:
    reading = session.reading()
    if isinstance(reading, ClimateReading):
        return (
            f"climate: ambient={reading.ambient_temperature:.1f} °C "
            f"fan={reading.fan_speed} rpm desired={reading.desired_temperature:.1f} °C"
        )
    return (
        f"shading: light={reading.light_intensity:.1f} lux "
        f"pressure={reading.outdoor_pressure:.1f} hPa "
        f"outdoor={reading.outdoor_temperature:.1f} °C position={reading.position:.1f} %"
    )


@app.command("ports")
def list_ports() -> None:
    """List serial ports present on this machine."""
    ports = SerialTransport.list_ports()
    if not ports:
        typer.echo("No serial ports found")
        return
    for port in ports:
        typer.echo(port)


@app.command("channels")
def channels(device: str = typer.Argument(..., help="climate or shading")) -> None:
    """List the command codes of a board."""
    try:
        definitions = list_channels(device)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    for channel in definitions:
        direction = "write" if channel.write else "read"
        # Setpoint entries carry the packet tag, not a request code
        label = "tag" if channel.param_type is ParamType.FIXED_POINT else "code"
        typer.echo(
            f"{label} 0x{channel.code:02X} {channel.name} ({direction}, {channel.param_type.value}): "
            f"{channel.description}"
        )


@app.command("monitor")
def monitor(
    climate: Optional[str] = typer.Option(None, "--climate", help="Climate board port"),
    shading: Optional[str] = typer.Option(None, "--shading", help="Shading board port"),
    count: int = typer.Option(1, "--count", min=1, help="Number of poll cycles"),
    interval: Optional[float] = typer.Option(None, "--interval", help="Seconds between cycles"),
    baudrate: Optional[int] = typer.Option(None, "--baudrate"),
    simulate: bool = typer.Option(False, "--simulate", help="Use simulated boards"),
) -> None:
    """Poll the boards and print their readings."""
    targets = [(name, port) for name, port in (("climate", climate), ("shading", shading))
               if port or simulate]
    if not targets:
        typer.echo("Error: Give --climate and/or --shading, or use --simulate", err=True)
        raise typer.Exit(code=1)

    pollers: List[Poller] = []
    try:
        for device_type, port in targets:
            session = _open_session(device_type, port, baudrate, simulate)
            period = interval if interval is not None else DEVICE_PARAMETERS[device_type]["poll_interval"]
            pollers.append(Poller(session, period, callback=lambda s: typer.echo(_describe(s))))
        for cycle in range(count):
            for poller in pollers:
                poller.poll_once()
            if cycle < count - 1:
                time.sleep(min(poller.interval for poller in pollers))
    finally:
        for poller in pollers:
            poller.session.close()


@app.command("set-temp")
def set_temp(
    port: str,
    value: float,
    baudrate: Optional[int] = typer.Option(None, "--baudrate"),
    simulate: bool = typer.Option(False, "--simulate"),
) -> None:
    """Send a desired temperature to the climate board."""
    session = _open_session("climate", port, baudrate, simulate)
    try:
        if not session.set_desired_temperature(value):
            typer.echo("Error: Setpoint was not sent", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Sent desired temperature {value:.1f} °C to {port}")
    finally:
        session.close()


@app.command("set-shade")
def set_shade(
    port: str,
    percent: float,
    coarse: bool = typer.Option(False, "--coarse", help="Send the integer packet only"),
    baudrate: Optional[int] = typer.Option(None, "--baudrate"),
    simulate: bool = typer.Option(False, "--simulate"),
) -> None:
    """Move the shade to a position under host control."""
    session = _open_session("shading", port, baudrate, simulate)
    try:
        if not session.set_position(percent, precise=not coarse):
            typer.echo("Error: Position was not sent", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Sent shade position {session.get_requested_position():.1f} % to {port}")
    finally:
        session.close()


@app.command("auto")
def auto(
    port: str,
    baudrate: Optional[int] = typer.Option(None, "--baudrate"),
    simulate: bool = typer.Option(False, "--simulate"),
) -> None:
    """Return the shade to the board's own sensor control."""
    session = _open_session("shading", port, baudrate, simulate)
    try:
        if not session.set_auto_mode():
            typer.echo("Error: Auto mode command was not sent", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Shade on {port} returned to auto mode")
    finally:
        session.close()


def run() -> None:
    app()


if __name__ == "__main__":
    run()
