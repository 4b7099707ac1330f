"""
Console output formatting using Rich.
"""

from datetime import datetime
from typing import Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from date_calculator.data.schemas import BusinessDaysReport, Holiday, Weekday

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class ConsoleFormatter:
    """Formats output for console display using Rich."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the console formatter."""
        self.console = console or Console()

    def print_report(self, report: BusinessDaysReport) -> None:
        """
        Print a business-day report.

        Args:
            report: BusinessDaysReport to display.
        """
        self.console.print()
        self.console.rule("[bold blue]Business Day Calculation[/bold blue]")
        self.console.print()

        calc_table = Table(show_header=False, box=None)
        calc_table.add_column("Label", style="cyan", width=22)
        calc_table.add_column("Value", style="white", justify="right", width=16)

        calc_table.add_row(
            "Period:",
            f"{report.start_date.strftime(DATE_FORMAT)} - {report.end_date.strftime(DATE_FORMAT)}",
        )
        calc_table.add_row("Calendar Days:", str(report.calendar_days))
        detail = ", ".join(
            f"{count} {name[:3].capitalize()}" for name, count in sorted(report.weekend_detail.items())
        )
        calc_table.add_row("Weekend Days:", f"- {report.weekend_days}" + (f" ({detail})" if detail else ""))
        calc_table.add_row("Holidays (on weekdays):", f"- {report.holidays_count}")
        calc_table.add_row("", "─" * 15)
        calc_table.add_row(
            Text("Business Days:", style="bold green"),
            Text(str(report.business_days), style="bold green"),
        )

        self.console.print(Panel(calc_table, title="[bold]Calculation[/bold]"))

        if report.holidays:
            table = Table(title="[bold]Holidays in Period[/bold]")
            table.add_column("Date", style="cyan", width=12)
            table.add_column("Day", style="dim", width=12)
            for day in report.holidays:
                table.add_row(day.strftime(DATE_FORMAT), Weekday.from_date(day).name.capitalize())
            self.console.print(table)

        self.console.print()

    def print_holidays(self, title: str, holidays: List[Holiday]) -> None:
        """
        Print a table of holidays.

        Args:
            title: Heading shown above the table.
            holidays: List of holidays to display.
        """
        self.console.print()
        self.console.rule(f"[bold blue]{title}[/bold blue]")
        self.console.print()

        if not holidays:
            self.console.print("[dim]No holidays found for this period.[/dim]")
            self.console.print()
            return

        table = Table()
        table.add_column("Date", style="cyan", width=12)
        table.add_column("Day", style="dim", width=12)
        table.add_column("Name", style="white")

        for holiday in holidays:
            table.add_row(
                holiday.holiday_date.strftime(DATE_FORMAT),
                Weekday.from_date(holiday.holiday_date).name.capitalize(),
                holiday.name,
            )

        self.console.print(table)
        self.console.print()

    def print_dates(self, title: str, rows: Dict[str, Optional[datetime]]) -> None:
        """
        Print labelled dates; a missing date is shown as unavailable.

        Args:
            title: Panel title.
            rows: Mapping of label to date (or None).
        """
        table = Table(show_header=False, box=None)
        table.add_column("Label", style="cyan", width=22)
        table.add_column("Value", style="white")

        for label, value in rows.items():
            if value is None:
                table.add_row(f"{label}:", Text("unavailable", style="yellow"))
            else:
                table.add_row(f"{label}:", f"{value.strftime(DATETIME_FORMAT)} ({value.strftime('%A')})")

        self.console.print(Panel(table, title=f"[bold]{title}[/bold]"))

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[bold green]Success:[/bold green] {message}")
