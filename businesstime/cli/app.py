"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional, Tuple

import pendulum
import typer
from pendulum import Date, DateTime, Duration
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import BusinessTimeConfig, get_default_config_path
from ..domain.exceptions import BusinessTimeError
from ..services.business_calendar import BusinessCalendar

app = typer.Typer(
    name="businesstime",
    help="Business day and business hour arithmetic",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)


ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./businesstime.yaml")
]
HolidayOption = Annotated[
    Optional[List[str]],
    typer.Option("--holiday", help="Extra holiday for this call (YYYY-MM-DD). Repeatable.")
]


def _load_calendar(config_file: Optional[Path]) -> Tuple[BusinessCalendar, str]:
    """
    Build a calendar from the config file, or from built-in defaults when
    no file was given and none exists at the default location.
    """
    config_path = config_file or get_default_config_path()

    if config_file is None and not config_path.exists():
        logger.debug("No config file at %s, using default calendar rules", config_path)
        config = BusinessTimeConfig()
    else:
        config = BusinessTimeConfig.load_from_yaml(config_path)

    settings = config.business_time
    return BusinessCalendar(rules=settings.to_rules()), settings.timezone


def _parse_instant(value: str, tz: str):
    """Parse "YYYY-MM-DD" as a date and "YYYY-MM-DD HH:mm" as a datetime."""
    try:
        parsed = pendulum.parse(value, tz=tz, exact=True)
    except ValueError as e:
        raise typer.BadParameter(f"Cannot parse {value!r}: {e}")

    if not isinstance(parsed, (Date, DateTime)):
        raise typer.BadParameter(f"Expected a date or datetime, got {value!r}")
    return parsed


def _format_instant(value) -> str:
    if isinstance(value, DateTime):
        return value.format("ddd, YYYY-MM-DD HH:mm:ss")
    return value.format("ddd, YYYY-MM-DD")


def _format_duration(duration: Duration) -> str:
    total = int(duration.total_seconds())
    sign = "-" if total < 0 else ""
    hours, rest = divmod(abs(total), 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{sign}{hours}h {minutes:02d}m {seconds:02d}s"


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Business calendar arithmetic on the command line.

    Negative counts need a "--" separator, e.g. add-days -- 2023-01-09 -3
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@app.command("add-days")
def add_days(
    start: Annotated[str, typer.Argument(help="Start date or datetime (YYYY-MM-DD[ HH:mm])")],
    days: Annotated[int, typer.Argument(help="Business days to add; negative subtracts")],
    config_file: ConfigOption = None,
    holiday: HolidayOption = None,
):
    """
    Add whole business days to a date or datetime.

    Examples:

        businesstime add-days "2023-01-06 10:00" 1
        businesstime add-days 2023-01-06 5 --holiday 2023-01-09
    """
    try:
        calendar, tz = _load_calendar(config_file)
        result = calendar.add_business_days(_parse_instant(start, tz), days, holiday)
        console.print(_format_instant(result))

    except BusinessTimeError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command("add-hours")
def add_hours(
    start: Annotated[str, typer.Argument(help="Start datetime (YYYY-MM-DD HH:mm)")],
    hours: Annotated[int, typer.Argument(help="Business hours to add; negative subtracts")],
    config_file: ConfigOption = None,
    holiday: HolidayOption = None,
):
    """
    Add whole business hours to a datetime.
    """
    try:
        calendar, tz = _load_calendar(config_file)
        result = calendar.add_business_hours(_parse_instant(start, tz), hours, holiday)
        console.print(_format_instant(result))

    except BusinessTimeError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def until(
    start: Annotated[str, typer.Argument(help="Start date or datetime")],
    end: Annotated[str, typer.Argument(help="End date or datetime")],
    config_file: ConfigOption = None,
    holiday: HolidayOption = None,
):
    """
    Show the business time elapsed between two instants.
    """
    try:
        calendar, tz = _load_calendar(config_file)
        duration = calendar.business_time_until(
            _parse_instant(start, tz),
            _parse_instant(end, tz),
            holiday
        )
        console.print(_format_duration(duration))

    except BusinessTimeError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def check(
    instant: Annotated[str, typer.Argument(help="Date or datetime to inspect")],
    config_file: ConfigOption = None,
    holiday: HolidayOption = None,
):
    """
    Show how the business calendar sees a date or datetime.
    """
    try:
        calendar, tz = _load_calendar(config_file)
        value = _parse_instant(instant, tz)

        table = Table(
            title=_format_instant(value),
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Check", style="bold yellow")
        table.add_column("Result")

        table.add_row("Workday", _yes_no(calendar.is_workday(value, holiday)))
        table.add_row("During business hours", _yes_no(calendar.is_during_business_hours(value, holiday)))
        table.add_row("Work hours that day", _format_duration(calendar.work_hours_total(value, holiday)))
        table.add_row("Roll forward", _format_instant(calendar.roll_forward(value, holiday)))
        table.add_row("Roll backward", _format_instant(calendar.roll_backward(value, holiday)))

        console.print()
        console.print(table)
        console.print()

    except BusinessTimeError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def holidays(
    config_file: ConfigOption = None,
):
    """
    List all configured holidays.
    """
    try:
        calendar, _ = _load_calendar(config_file)

        if not calendar.rules.holidays:
            console.print("[yellow]No holidays configured.[/yellow]")
            return

        table = Table(
            title="Configured holidays",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Date", style="bold yellow")
        table.add_column("Weekday", style="dim")

        for day in sorted(calendar.rules.holidays):
            table.add_row(day.isoformat(), day.strftime("%A"))

        console.print()
        console.print(table)
        console.print()

    except BusinessTimeError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]businesstime[/bold cyan] version [bold]{__version__}[/bold]\n")


def _yes_no(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


if __name__ == "__main__":
    app()
