"""
CLI interface for the gas usage calculator.

Provides command-line access to entry validation and daily usage.
"""

import logging
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from gas_usage.config.loader import CalendarConfig, ModeConfig, Settings, load_settings
from gas_usage.core.export import format_number, format_usage_line, generate_usage_text
from gas_usage.core.timestamps import format_timestamp
from gas_usage.storage.entry_store import EntryStore

app = typer.Typer()
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _resolve_settings(
    config_path: Optional[str],
    fraction: bool,
    no_ambient: bool
) -> Settings:
    """Settings file values, with mode flags from the command line on top."""
    settings = load_settings(config_path) if config_path else Settings()
    modes = ModeConfig(
        fraction_mode=fraction or settings.modes.fraction_mode,
        no_ambient_mode=no_ambient or settings.modes.no_ambient_mode
    )
    return Settings(modes=modes, calendar=settings.calendar)


def _split_entry(entry: str) -> List[str]:
    """Split "TIME,FLOW[,FIO2]" into three fields."""
    parts = [part.strip() for part in entry.split(",")]
    if len(parts) > 3:
        raise ValueError("expected TIME,FLOW[,FIO2]")
    return parts + [""] * (3 - len(parts))


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Gas usage calculator CLI."""
    if ctx.invoked_subcommand is None:
        console.print("Gas Usage Calculator - Use --help to see available commands")


@app.command()
def status(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to YAML settings file"
    )
):
    """Show the active accounting mode and reference calendar."""
    try:
        settings = load_settings(config) if config else Settings()
    except (OSError, ValueError) as e:
        console.print(f"[red]Error loading settings:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    cal: CalendarConfig = settings.calendar
    console.print("[green]✓[/] Gas usage calculator is ready")
    console.print(f"Mode: {settings.modes.gas_mode.value}")
    console.print(f"Calendar: {cal.year}-{cal.month:02d} ({cal.days_in_month} days)")


@app.command()
def calculate(
    entries: List[str] = typer.Argument(
        ...,
        help="Entries as TIME,FLOW[,FIO2], e.g. 010900,2 or 1200,3,40"
    ),
    fraction: bool = typer.Option(
        False,
        "--fraction",
        "-f",
        help="Read FiO2 from each entry and count oxygen above room air"
    ),
    no_ambient: bool = typer.Option(
        False,
        "--no-ambient",
        "-n",
        help="Gas is an oxygen/nitrogen mix with no room air (requires --fraction)"
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to YAML settings file"
    ),
    export: bool = typer.Option(
        False,
        "--export",
        "-e",
        help="Print billing text for each day"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging"
    )
):
    """
    Calculate daily gas usage from flow-change entries.

    Each entry applies from its time until the next entry. The last
    entry applies until midnight. TIME is DDHHMM, or HHMM to reuse the
    previous entry's day.
    """
    _configure_logging(verbose)

    try:
        settings = _resolve_settings(config, fraction, no_ambient)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error loading settings:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    modes = settings.modes
    store = EntryStore(year=settings.calendar.year, month=settings.calendar.month)

    for entry in entries:
        try:
            timestamp_text, flow_text, fraction_text = _split_entry(entry)
        except ValueError as e:
            console.print(f"[red]Rejected entry[/] {entry!r}: {e}")
            sys.exit(EXIT_CODE_FAIL)
        result = store.add(timestamp_text, flow_text, fraction_text, modes.fraction_mode)
        if not result.success:
            console.print(f"[red]Rejected entry[/] {entry!r}: {result.error.message}")
            sys.exit(EXIT_CODE_FAIL)

    _display_entries(store, modes.fraction_mode)

    usage = store.compute_usage(modes.fraction_mode, modes.no_ambient_mode)
    _display_usage(usage, modes.no_ambient_mode)

    if export:
        for day, amounts in usage.items():
            console.print(f"\n[bold]{format_usage_line(day, amounts, modes.no_ambient_mode)}[/bold]")
            console.print(
                generate_usage_text(amounts.oxygen_liters, amounts.diluent_liters, modes.no_ambient_mode),
                markup=False,
                highlight=False
            )

    sys.exit(EXIT_CODE_PASS)


def _display_entries(store: EntryStore, fraction_mode: bool) -> None:
    """List accepted entries in time order."""
    console.print("\n[bold]Entries[/bold]")
    for index, record in enumerate(store.snapshot()):
        line = f"{index}. {format_timestamp(record.timestamp)} {format_number(record.flow_rate)}L/min"
        if fraction_mode:
            line += f" FiO2:{record.inspired_fraction}%"
        console.print(line, highlight=False)


def _display_usage(usage, no_ambient_mode: bool) -> None:
    """Render daily usage as a table."""
    table = Table(title="Daily Gas Usage")
    table.add_column("Day", justify="right")
    table.add_column("Oxygen (L)", justify="right")
    if no_ambient_mode:
        table.add_column("Nitrogen (L)", justify="right")

    for day, amounts in usage.items():
        row = [str(day), format_number(amounts.oxygen_liters)]
        if no_ambient_mode:
            row.append(format_number(amounts.diluent_liters))
        table.add_row(*row)

    console.print(table)


if __name__ == "__main__":
    app()
