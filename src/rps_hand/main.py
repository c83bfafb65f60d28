from __future__ import annotations

import logging
import time
import typer
from rich.console import Console
from rich.table import Table
import serial.tools.list_ports

from .config import load_settings, Settings
from .adapters.hand_output import HandOutput
from .adapters.transport import LoopbackTransport, SerialTransport
from .demo_suite import run_demo_suite
from .errors import HandError
from .obs.metrics import start_metrics_server

app = typer.Typer(add_completion=False)
console = Console()

def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(levelname)s: %(message)s'
    )

def _settings(port: str | None, baud_rate: int | None, mode: str | None) -> Settings:
    try:
        return load_settings(port=port, baud_rate=baud_rate, mode=mode)
    except (RuntimeError, ValueError) as e:
        console.print(f"[red]Config error:[/red] {e}")
        raise typer.Exit(1)

def _make_hand(settings: Settings) -> HandOutput:
    if settings.hand_mode == "sim":
        transport = LoopbackTransport()
    else:
        transport = SerialTransport(settings.serial_port, settings.baud_rate)
    if settings.metrics_enabled:
        start_metrics_server(settings.metrics_host, settings.metrics_port)
        console.print(f"[green]Hand metrics:[/green] http://{settings.metrics_host}:{settings.metrics_port}/metrics")
    return HandOutput(
        transport,
        settle_delay_s=settings.settle_delay_s,
        idle_interval_s=settings.idle_interval_s,
        animation_interval_s=settings.animation_interval_s,
    )

PortOpt = typer.Option(None, "--port", "-p", help="Override HAND_SERIAL_PORT")
BaudOpt = typer.Option(None, "--baud-rate", "-b", help="Override HAND_BAUD_RATE")
ModeOpt = typer.Option(None, "--mode", help="Override HAND_MODE (serial|sim)")
LogOpt = typer.Option("INFO", "--log-level", help="DEBUG shows every command byte")

@app.command()
def run(
    port: str = PortOpt,
    baud_rate: int = BaudOpt,
    mode: str = ModeOpt,
    log_level: str = LogOpt,
):
    """Connect and play idle animations until Ctrl-C."""
    _configure_logging(log_level)
    hand = _make_hand(_settings(port, baud_rate, mode))
    try:
        hand.initialize_connection()
    except HandError as e:
        console.print(f"[red]✗ Could not connect:[/red] {e}")
        raise typer.Exit(1)
    console.print("[green]✓ Hand connected, idling. Press Ctrl-C to stop.[/green]")
    try:
        hand.enter_idle()
        while True:
            time.sleep(0.5)
    except KeyboardInterrupt:
        console.print("\n[cyan]Stopping...[/cyan]")
    except HandError as e:
        console.print(f"[red]✗ Hand error:[/red] {e}")
        raise typer.Exit(1)
    finally:
        try:
            hand.teardown_connection()
        except HandError as e:
            console.print(f"[red]✗ Teardown failed:[/red] {e}")
            raise typer.Exit(1)

@app.command()
def demo(
    port: str = PortOpt,
    baud_rate: int = BaudOpt,
    mode: str = ModeOpt,
    log_level: str = LogOpt,
    pause: float = typer.Option(1.0, "--pause", help="Seconds between game events"),
    idle: float = typer.Option(0.0, "--idle", help="Seconds to idle before and after the game"),
):
    """Play the scripted demo rounds on the hand."""
    _configure_logging(log_level)
    hand = _make_hand(_settings(port, baud_rate, mode))
    try:
        hand.initialize_connection()
        try:
            robot, human = run_demo_suite(hand, pause_s=pause, idle_s=idle)
        finally:
            hand.teardown_connection()
    except HandError as e:
        console.print(f"[red]✗ Demo failed:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]✓ Demo complete[/green] (robot {robot} - human {human})")

@app.command()
def send(
    command: int = typer.Argument(..., help="Raw command code (0-2 moves, 4 wrist, 5-14 fingers)"),
    port: str = PortOpt,
    baud_rate: int = BaudOpt,
    mode: str = ModeOpt,
    log_level: str = LogOpt,
):
    """Send one raw command byte, for calibration and wiring checks."""
    _configure_logging(log_level)
    hand = _make_hand(_settings(port, baud_rate, mode))
    try:
        hand.initialize_connection()
        try:
            hand.send(command)
        finally:
            hand.teardown_connection()
    except ValueError as e:
        console.print(f"[red]Invalid command:[/red] {e}")
        raise typer.Exit(1)
    except HandError as e:
        console.print(f"[red]✗ Send failed:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]✓ Sent {command}[/green]")

@app.command()
def ports():
    """List serial ports that could host the hand."""
    table = Table(title="Serial Ports", show_header=True, header_style="bold cyan")
    table.add_column("Device", style="yellow")
    table.add_column("Description", style="green")
    table.add_column("HWID")
    found = list(serial.tools.list_ports.comports())
    for p in found:
        table.add_row(p.device, p.description or "", p.hwid or "")
    if not found:
        console.print("[yellow]No serial ports found.[/yellow]")
        return
    console.print(table)

if __name__ == "__main__":
    app()
