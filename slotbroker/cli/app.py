"""
Main CLI application using Typer.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any, Dict, NoReturn, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..adapters.calendly_client import CalendlyClient
from ..adapters.mock_calendly_client import MockCalendlyClient
from ..adapters.timezone_lookup import lookup_timezone
from ..config import AppConfig, load_config
from ..domain.exceptions import ConfigurationError, InputValidationError, ProviderQueryError, SchedulingError
from ..domain.time_context import resolve_time_context
from ..logging_utils import configure_logging, mask_phone_number
from ..notifications import send_booking_notice
from ..services.scheduling import DaySlotsResult, SchedulingService, WeekSummaryResult

app = typer.Typer(
    name="slotbroker",
    help="Resolve bookable Calendly availability for voice callers",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
MockOption = Annotated[bool, typer.Option("--mock", help="Use synthesized availability instead of the Calendly API.")]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the raw JSON payload.")]
PhoneOption = Annotated[Optional[str], typer.Option("--phone", "-p", help="Caller phone number used to detect the timezone.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    try:
        return load_config(config_file)
    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    except ConfigurationError as e:
        _fail(e)


def _build_client(config: AppConfig, mock: bool):
    if mock:
        console.print("[yellow]⚠  MOCK MODE: using synthesized availability[/yellow]\n")
        return MockCalendlyClient(
            timezone=config.default_timezone,
            open_hour=config.scheduling.workday_start_hour,
            close_hour=config.scheduling.workday_end_hour,
        )
    return CalendlyClient.from_config(config.calendly)


def _fail(error: SchedulingError) -> NoReturn:
    """Print a structured failure and exit non-zero."""
    if isinstance(error, InputValidationError):
        label = "Invalid input"
    elif isinstance(error, ConfigurationError):
        label = "Configuration error"
    elif isinstance(error, ProviderQueryError):
        label = "Calendly API error"
    else:
        label = "Error"

    console.print(f"[bold red]{label}:[/bold red] {error}")
    raise typer.Exit(1)


def _print_json(payload: Dict[str, Any]) -> None:
    console.print_json(json.dumps(payload))


def _render_week(result: WeekSummaryResult) -> None:
    described = result.date_range.describe()
    console.print(
        f"[bold cyan]📅 {described['start_readable']} – {described['end_readable']}[/bold cyan]"
        f"  [dim](now: {result.current_time.date}, {result.current_time.time} {result.current_time.timezone})[/dim]\n"
    )

    if not result.availability:
        console.print("[yellow]⚠ No availability in this window.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Day", style="bold yellow")
    table.add_column("Date", style="dim")
    table.add_column("Morning")
    table.add_column("Afternoon")

    for day_name, summary in result.availability.items():
        table.add_row(
            day_name,
            summary.date,
            "[green]YES[/green]" if summary.morning_available else "[red]NO[/red]",
            "[green]YES[/green]" if summary.afternoon_available else "[red]NO[/red]",
        )

    console.print(table)


def _render_slots(result: DaySlotsResult) -> None:
    described = result.date_range.describe()
    console.print(
        f"[bold cyan]🕘 {described['start_readable']} ({result.period.value})[/bold cyan]"
        f"  [dim](now: {result.current_time.time} {result.current_time.timezone})[/dim]\n"
    )

    if not result.availability:
        console.print(
            "[yellow]⚠ No bookable slots found.[/yellow]\n"
            "Try the other half of the day or another date."
        )
        return

    console.print(f"[bold green]✓ {len(result.availability)} slot(s) available:[/bold green]\n")
    for slot in result.availability:
        console.print(f"  {slot.display_time}  [dim]{slot.scheduling_url}[/dim]")


@app.command()
def now(
    phone: PhoneOption = None,
    config_file: ConfigOption = None,
    as_json: JsonOption = False,
    verbose: VerboseOption = False,
):
    """
    Show the current date and time in the caller's timezone.
    """
    configure_logging(verbose)
    config = _load_config(config_file)
    context = resolve_time_context(
        phone,
        default_timezone=config.default_timezone,
        lookup=lookup_timezone,
    )

    if as_json:
        _print_json(context.to_dict())
        return

    console.print(f"\n{context.date}, {context.time} [dim]({context.timezone})[/dim]\n")


@app.command()
def summary(
    event_type: Annotated[str, typer.Argument(help="Calendly event type URI")],
    week_offset: Annotated[int, typer.Option("--week-offset", "-w", help="0 = this week, 1 = next week, ...")] = 0,
    phone: PhoneOption = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    as_json: JsonOption = False,
    verbose: VerboseOption = False,
):
    """
    Show which days of a week have morning/afternoon openings.

    Examples:

        slotbroker summary https://api.calendly.com/event_types/ABC

        slotbroker summary https://api.calendly.com/event_types/ABC --week-offset 1
    """
    configure_logging(verbose)
    config = _load_config(config_file)

    try:
        service = SchedulingService.from_config(_build_client(config, mock), config)
        result = asyncio.run(
            service.resolve_week_summary(event_type, week_offset=week_offset, caller_id=phone)
        )
    except SchedulingError as e:
        _fail(e)

    if as_json:
        _print_json(result.to_dict())
    else:
        _render_week(result)


@app.command()
def slots(
    event_type: Annotated[str, typer.Argument(help="Calendly event type URI")],
    date: Annotated[str, typer.Argument(help="Day to inspect (YYYY-MM-DD)")],
    period: Annotated[str, typer.Option("--period", help="morning or afternoon")] = "morning",
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Event duration in minutes")] = None,
    phone: PhoneOption = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    as_json: JsonOption = False,
    verbose: VerboseOption = False,
):
    """
    List bookable start times for one day and half-day period.

    Examples:

        slotbroker slots https://api.calendly.com/event_types/ABC 2026-10-20 --period afternoon
    """
    configure_logging(verbose)
    config = _load_config(config_file)

    try:
        service = SchedulingService.from_config(_build_client(config, mock), config)
        result = asyncio.run(
            service.resolve_day_slots(
                event_type,
                date,
                period=period,
                caller_id=phone,
                event_duration_minutes=duration,
            )
        )
    except SchedulingError as e:
        _fail(e)

    if as_json:
        _print_json(result.to_dict())
    else:
        _render_slots(result)


@app.command()
def events(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    as_json: JsonOption = False,
    verbose: VerboseOption = False,
):
    """
    List the event types of the configured Calendly account.
    """
    configure_logging(verbose)
    config = _load_config(config_file)

    try:
        event_types = _build_client(config, mock).get_event_types()
    except SchedulingError as e:
        _fail(e)

    if as_json:
        _print_json({"success": True, "events": [event.to_dict() for event in event_types]})
        return

    if not event_types:
        console.print("[yellow]No event types found for this account.[/yellow]")
        return

    table = Table(
        title="Calendly event types",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name", style="bold yellow")
    table.add_column("Duration")
    table.add_column("URI", style="dim")

    for event in event_types:
        table.add_row(event.name, f"{event.duration} min", event.uri)

    console.print()
    console.print(table)
    console.print()


@app.command()
def test_auth(
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Test the Calendly API token.
    """
    configure_logging(verbose)
    config = _load_config(config_file)

    try:
        client = CalendlyClient.from_config(config.calendly)
        user_info = client.test_connection()
    except SchedulingError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}\n")
        raise typer.Exit(1)

    console.print(Panel.fit(
        f"[bold green]✓ Authentication successful![/bold green]\n\n"
        f"[bold]User:[/bold] {user_info.get('name', 'N/A')}\n"
        f"[bold]E-mail:[/bold] {user_info.get('email', 'N/A')}",
        title="✓ Connection test"
    ))
    console.print()


class _PreviewDispatcher:
    """Hands the text message back for display instead of an SMS gateway."""

    def send(self, phone_number: str, body: str) -> Dict[str, Any]:
        return {"success": True, "to": mask_phone_number(phone_number), "body": body, "delivered": False}


@app.command()
def notify(
    phone_number: Annotated[str, typer.Argument(help="Caller phone number in E.164 form")],
    name: Annotated[str, typer.Option("--name", help="Caller name")],
    event_time: Annotated[str, typer.Option("--time", help="Chosen slot, as read back to the caller")],
    scheduling_url: Annotated[str, typer.Option("--url", help="Calendly scheduling link for the slot")],
    duration: Annotated[int, typer.Option("--duration", "-d", help="Event duration in minutes")] = 30,
    as_json: JsonOption = False,
    verbose: VerboseOption = False,
):
    """
    Preview the booking text message sent after a caller picks a slot.

    Examples:

        slotbroker notify +16502530000 --name Dana --time "Tuesday 9:30 AM" --url https://calendly.com/acme/30min
    """
    configure_logging(verbose)

    try:
        outcome = send_booking_notice(
            _PreviewDispatcher(),
            phone_number,
            {
                "name": name,
                "event_time": event_time,
                "event_duration": duration,
                "scheduling_url": scheduling_url,
            },
        )
    except SchedulingError as e:
        _fail(e)

    if as_json:
        _print_json(outcome)
        return

    console.print(Panel.fit(outcome["body"], title=f"✉ To {outcome['to']} (not sent)"))


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotbroker[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
