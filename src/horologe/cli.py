"""Command-line interface for horologe."""

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from horologe.config import FormatterConfig, load_config
from horologe.errors import HorologeError
from horologe.formatter import TimeFormatter

app = typer.Typer(
    name="horologe",
    help="Locale-aware time and date formatting with TR35 patterns",
    add_completion=False,
)

console = Console()

KINDS = ("time", "date", "datetime")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Locale-aware time and date formatting."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def parse_value(text: str) -> time | date | datetime:
    """Parse an ISO 8601 time, date or datetime.

    Raises:
        ValueError: If the text is none of them
    """
    text = text.strip()
    if "T" in text or " " in text:
        return datetime.fromisoformat(text)
    if ":" in text:
        return time.fromisoformat(text)
    return date.fromisoformat(text)


def _kind(value: Any) -> str:
    if isinstance(value, datetime):
        return "datetime"
    if isinstance(value, date):
        return "date"
    return "time"


def _formatter(config_file: Optional[Path]) -> TimeFormatter:
    config = load_config(config_file) if config_file else FormatterConfig.from_env()
    return TimeFormatter(config)


@app.command(name="format")
def format_cmd(
    value: Annotated[str, typer.Argument(help="ISO 8601 time, date or datetime")],
    locale: Annotated[
        Optional[str],
        typer.Option("--locale", "-l", help="Locale tag, e.g. en-AU or fr-u-hc-h12"),
    ] = None,
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Style (short, medium, long, full) or pattern"),
    ] = None,
    kind: Annotated[
        Optional[str],
        typer.Option("--kind", "-k", help="time, date or datetime (default: from VALUE)"),
    ] = None,
    number_system: Annotated[
        Optional[str],
        typer.Option("--number-system", "-n", help="Number system, e.g. arab or native"),
    ] = None,
    era_variant: Annotated[
        bool,
        typer.Option("--era-variant", help="Use the variant era names (CE/BCE)"),
    ] = False,
    period_variant: Annotated[
        bool,
        typer.Option("--period-variant", help="Use the variant day period names"),
    ] = False,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file (YAML, JSON or TOML)"),
    ] = None,
) -> None:
    """Format a time, date or datetime."""
    try:
        parsed = parse_value(value)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    kind = kind or _kind(parsed)
    if kind not in KINDS:
        typer.echo(f"Error: --kind must be one of {', '.join(KINDS)}", err=True)
        raise typer.Exit(1)

    try:
        formatter = _formatter(config_file)
        method = getattr(formatter, f"format_{kind}")
        result = method(
            parsed,
            locale,
            format,
            number_system=number_system,
            era="variant" if era_variant else None,
            period="variant" if period_variant else None,
        )
    except HorologeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(result.formatted)


@app.command(name="hour-cycle")
def hour_cycle_cmd(
    locale: Annotated[str, typer.Argument(help="Locale tag, e.g. en-AU")],
) -> None:
    """Show the preferred hour cycle of a locale."""
    try:
        cycle = TimeFormatter().hour_format(locale)
    except HorologeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"{cycle.value} ({cycle.symbol})")


@app.command(name="locales")
def locales_cmd(
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file (YAML, JSON or TOML)"),
    ] = None,
) -> None:
    """List the known locales."""
    try:
        formatter = _formatter(config_file)
    except HorologeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    repository = formatter.repository
    table = Table(title="Locales", show_header=True, header_style="bold magenta")
    table.add_column("Locale", style="cyan", no_wrap=True)
    table.add_column("Short time", no_wrap=True)
    table.add_column("Medium time", no_wrap=True)
    table.add_column("Hour cycle", justify="center")
    table.add_column("Numbers", justify="center")

    for name in repository.known_locale_names():
        data = repository.get(name)
        calendar = data.calendar()
        table.add_row(
            name,
            calendar.style_pattern("time", "short"),
            calendar.style_pattern("time", "medium"),
            formatter.hour_format(name).value,
            data.default_number_system,
        )

    console.print(table)


if __name__ == "__main__":
    app()
