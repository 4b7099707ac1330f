"""
Week, month and year boundaries plus month-length facts.

Every end boundary is derived as "start of the next period minus one second",
so ``end + 1 second == start of next period`` for each granularity.
"""

from datetime import datetime
from typing import Optional

from date_calculator.core.calendar_system import CalendarSystem


class PeriodCalculator:
    """Derives period boundaries from a calendar system."""

    def __init__(self, calendar: Optional[CalendarSystem] = None):
        self._calendar = calendar or CalendarSystem()

    @property
    def calendar(self) -> CalendarSystem:
        return self._calendar

    # ── month facts ──────────────────────────────────────────────────────

    def days_in_month(self, month: int, year: int) -> Optional[int]:
        """
        Return the number of days in a month.

        Args:
            month: Month number, 1-12.
            year: Year.

        Returns:
            Day count, or None for a month outside 1-12 or an unsupported year.
        """
        return self._calendar.days_in_month(month, year)

    def is_leap_year(self, year: int) -> bool:
        """A year is a leap year when its second month has 29 days."""
        return self.days_in_month(2, year) == 29

    # ── weeks ────────────────────────────────────────────────────────────

    def start_of_week(self, date: datetime) -> Optional[datetime]:
        """Midnight of the first day of the week containing ``date``."""
        day = self._calendar.truncate_to_day(date)
        offset = (self._calendar.weekday_index(day) - self._calendar.first_weekday) % 7
        return self._calendar.try_add_delta(day, days=-offset)

    def end_of_week(self, date: datetime) -> Optional[datetime]:
        start = self.start_of_week(date)
        if start is None:
            return None
        return self._calendar.try_add_delta(start, days=7, seconds=-1)

    # ── months ───────────────────────────────────────────────────────────

    def start_of_month(self, date: datetime) -> Optional[datetime]:
        local = self._calendar.localize(date)
        return self._calendar.date_from_components(local.year, local.month)

    def end_of_month(self, date: datetime) -> Optional[datetime]:
        local = self._calendar.localize(date)
        if local.month == 12:
            next_start = self._calendar.date_from_components(local.year + 1, 1)
        else:
            next_start = self._calendar.date_from_components(local.year, local.month + 1)
        return self._last_second_before(next_start)

    # ── years ────────────────────────────────────────────────────────────

    def start_of_year(self, date: datetime) -> Optional[datetime]:
        return self._calendar.date_from_components(self._calendar.localize(date).year)

    def end_of_year(self, date: datetime) -> Optional[datetime]:
        next_start = self._calendar.date_from_components(self._calendar.localize(date).year + 1)
        return self._last_second_before(next_start)

    def _last_second_before(self, boundary: Optional[datetime]) -> Optional[datetime]:
        if boundary is None:
            return None
        return self._calendar.try_add_delta(boundary, seconds=-1)
