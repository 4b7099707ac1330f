"""
CLI interface for the date calculator.
"""

import logging
import sys
from datetime import date, datetime
from typing import Optional, Sequence

import click

from date_calculator.config.manager import ConfigManager, build_calculator, holiday_provider_for
from date_calculator.core.calendar_system import CalendarSystem
from date_calculator.core.date_calculator import DateCalculator
from date_calculator.core.periods import PeriodCalculator
from date_calculator.data.schemas import Config
from date_calculator.output.exporter import ResultExporter
from date_calculator.output.formatter import ConsoleFormatter

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_date(date_str: str) -> datetime:
    """Parse a date or date-time string in various formats."""
    formats = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M", "%d.%m.%Y", "%d/%m/%Y"]
    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            continue
    raise ValueError(
        f"Invalid date format: {date_str}. Use YYYY-MM-DD, YYYY-MM-DDTHH:MM:SS, DD.MM.YYYY, or DD/MM/YYYY"
    )


def load_config(
    config_path: Optional[str],
    country: Optional[str] = None,
    subdivision: Optional[str] = None,
    weekend: Optional[str] = None,
    timezone: Optional[str] = None,
) -> Config:
    """Load configuration and apply command-line overrides on top."""
    cfg = ConfigManager(config_path).load_config()
    overrides = {
        "country": country,
        "subdivision": subdivision,
        "weekend_days": weekend,
        "timezone": timezone,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if not overrides:
        return cfg
    return Config(**{**cfg.model_dump(), **overrides})


CALENDAR_OPTIONS = [
    click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file (optional)"),
    click.option("--country", help="Country code for public holidays (e.g. US, DE)"),
    click.option("--subdivision", help="Subdivision code for public holidays (e.g. CA, BY)"),
    click.option("--weekend", "-w", help="Weekend days, e.g. 'sat,sun' or 'fri,sat'"),
    click.option("--timezone", "-t", help="IANA timezone (default: naive local time)"),
    click.option("--holiday", "extra_holidays", multiple=True, help="Additional holiday date (repeatable)"),
    click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging"),
]


def calendar_options(func):
    """Options shared by every command that builds a business calendar."""
    for option in reversed(CALENDAR_OPTIONS):
        func = option(func)
    return func


def run_command(verbose: bool, body) -> None:
    """Run a command body, turning errors into a red message and exit code 1."""
    formatter = ConsoleFormatter()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        body(formatter)
    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)
    except Exception as e:
        formatter.print_error(f"Unexpected error: {e}")
        if verbose:
            logger.exception("Detailed error:")
        sys.exit(1)


def _calculator_for(options: dict, dates: Sequence[datetime]):
    cfg = load_config(
        options["config"],
        country=options["country"],
        subdivision=options["subdivision"],
        weekend=options["weekend"],
        timezone=options["timezone"],
    )
    extra = [parse_date(value) for value in options["extra_holidays"]]
    span = (min(d.date() for d in dates), max(d.date() for d in dates))
    return cfg, build_calculator(cfg, span=span, extra_holidays=extra)


@click.group()
@click.version_option(version="0.1.0", prog_name="datecalc")
def main():
    """Date Calculator - business days, holidays and period boundaries."""
    pass


@main.command()
@click.option("--start", "-s", required=True, help="Start date (YYYY-MM-DD, DD.MM.YYYY, or DD/MM/YYYY)")
@click.option("--end", "-e", required=True, help="End date (YYYY-MM-DD, DD.MM.YYYY, or DD/MM/YYYY)")
@click.option("--output", "-o", type=click.Path(), help="Output file path (optional)")
@click.option(
    "--format", "-f",
    type=click.Choice(["json", "csv", "both", "console"]),
    default=None,
    help="Output format (default: from config, console)",
)
@calendar_options
def count(start, end, output, format, verbose, **options):
    """Count business days between two dates (both included)."""

    def body(formatter: ConsoleFormatter) -> None:
        start_date = parse_date(start)
        end_date = parse_date(end)
        cfg, calculator = _calculator_for(options, [start_date, end_date])
        if not calculator.holidays:
            formatter.print_warning("No holidays configured, only weekend days are excluded")
        report = calculator.summarize(start_date, end_date)

        output_format = format or cfg.output_format
        if output_format in ("console", "both"):
            formatter.print_report(report)

        if output_format in ("json", "csv", "both"):
            exporter = ResultExporter(output_directory=cfg.output_directory)
            if output_format == "json":
                formatter.print_success(f"Result saved to {exporter.export_json(report, output)}")
            elif output_format == "csv":
                formatter.print_success(f"Result saved to {exporter.export_csv(report, output)}")
            else:
                json_path, csv_path = exporter.export_both(report)
                formatter.print_success(f"Results saved to:\n  - {json_path}\n  - {csv_path}")

    run_command(verbose, body)


@main.command()
@click.option("--date", "-d", "date_str", required=True, help="Starting date")
@click.option("--days", "-n", type=int, required=True, help="Business days to add (negative to subtract)")
@calendar_options
def add(date_str, days, verbose, **options):
    """Add (or subtract) business days to a date."""

    def body(formatter: ConsoleFormatter) -> None:
        start = parse_date(date_str)
        _, calculator = _calculator_for(options, [start])
        result = calculator.add_business_days(days, start)
        if result is None:
            raise ValueError(
                f"No date reachable by moving {days} business days within the search limit; "
                f"check the weekend and holiday configuration"
            )
        formatter.print_dates("Business Day Arithmetic", {"Start": start, f"{days:+d} business days": result})

    run_command(verbose, body)


def _navigate(direction: str, date_str: str, verbose: bool, options: dict) -> None:
    def body(formatter: ConsoleFormatter) -> None:
        start = parse_date(date_str)
        _, calculator = _calculator_for(options, [start])
        finder = {
            "next": calculator.next_business_day,
            "previous": calculator.previous_business_day,
            "closest": calculator.closest_business_day,
        }[direction]
        result = finder(start)
        if result is None:
            raise ValueError(f"No {direction} business day reachable within the search limit")
        formatter.print_dates("Business Day", {"Date": start, f"{direction.capitalize()} business day": result})

    run_command(verbose, body)


@main.command(name="next")
@click.option("--date", "-d", "date_str", required=True, help="Reference date")
@calendar_options
def next_(date_str, verbose, **options):
    """Show the next business day after a date."""
    _navigate("next", date_str, verbose, options)


@main.command()
@click.option("--date", "-d", "date_str", required=True, help="Reference date")
@calendar_options
def previous(date_str, verbose, **options):
    """Show the previous business day before a date."""
    _navigate("previous", date_str, verbose, options)


@main.command()
@click.option("--date", "-d", "date_str", required=True, help="Reference date")
@calendar_options
def closest(date_str, verbose, **options):
    """Show the date itself if it is a business day, otherwise the next one."""
    _navigate("closest", date_str, verbose, options)


@main.command()
@click.option("--date", "-d", "date_str", default=None, help="Reference date (default: now)")
@click.option("--first-weekday", help="First day of the week (e.g. monday)")
@click.option("--timezone", "-t", help="IANA timezone (default: naive local time)")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file (optional)")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def period(date_str, first_weekday, timezone, config, verbose):
    """Show day, hour, week, month and year boundaries of a date."""

    def body(formatter: ConsoleFormatter) -> None:
        cfg = load_config(config, timezone=timezone)
        calendar = CalendarSystem(
            timezone=cfg.timezone,
            first_weekday=first_weekday or cfg.first_weekday,
        )
        dates = DateCalculator(calendar)
        periods = PeriodCalculator(calendar)
        reference = parse_date(date_str) if date_str else calendar.now()
        reference = calendar.localize(reference)

        formatter.print_dates(
            "Period Boundaries",
            {
                "Date": reference,
                "Start of hour": dates.start_of_hour(reference),
                "Start of day": dates.start_of_day(reference),
                "End of day": dates.end_of_day(reference),
                "Start of week": periods.start_of_week(reference),
                "End of week": periods.end_of_week(reference),
                "Start of month": periods.start_of_month(reference),
                "End of month": periods.end_of_month(reference),
                "Start of year": periods.start_of_year(reference),
                "End of year": periods.end_of_year(reference),
            },
        )
        leap = "yes" if periods.is_leap_year(reference.year) else "no"
        formatter.console.print(
            f"Days in month: {periods.days_in_month(reference.month, reference.year)}, leap year: {leap}"
        )

    run_command(verbose, body)


@main.command()
@click.option("--year", "-y", type=int, default=None, help="Year to show holidays for (default: current year)")
@click.option("--country", help="Country code (default: from config)")
@click.option("--subdivision", help="Subdivision code (optional)")
@click.option("--output", "-o", type=click.Path(), help="Output CSV file path (optional)")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file (optional)")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def holidays(year, country, subdivision, output, config, verbose):
    """List public holidays for a year and country."""

    def body(formatter: ConsoleFormatter) -> None:
        cfg = load_config(config, country=country, subdivision=subdivision)
        provider = holiday_provider_for(cfg)
        if provider is None:
            raise ValueError("Please provide a country: --country or holidays.country in the config file")

        target_year = year or date.today().year
        holiday_list = provider.get_holidays_for_year(target_year)
        region = f"{provider.country}-{provider.subdivision}" if provider.subdivision else provider.country
        formatter.print_holidays(f"Holidays {target_year} - {region}", holiday_list)

        if output:
            exporter = ResultExporter(output_directory=cfg.output_directory)
            path = exporter.export_holidays_csv(holiday_list, output)
            formatter.print_success(f"Holidays saved to {path}")

    run_command(verbose, body)


if __name__ == "__main__":
    main()
