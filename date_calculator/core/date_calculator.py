"""
Date arithmetic: signed deltas, day/hour boundaries and day counting.
"""

from datetime import datetime
from typing import Callable, Optional

from date_calculator.core.calendar_system import CalendarSystem

Clock = Callable[[], datetime]


class DateCalculator:
    """Performs date arithmetic through a single calendar system."""

    def __init__(self, calendar: Optional[CalendarSystem] = None, clock: Optional[Clock] = None):
        """
        Initialize the date calculator.

        Args:
            calendar: Calendar system to use. Defaults to naive Gregorian.
            clock: Callable returning "now" for the relative helpers.
                Defaults to the calendar's current time.
        """
        self._calendar = calendar or CalendarSystem()
        self._clock = clock or self._calendar.now

    @property
    def calendar(self) -> CalendarSystem:
        return self._calendar

    # ── arithmetic ───────────────────────────────────────────────────────

    def add(
        self,
        date: datetime,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
    ) -> datetime:
        """
        Add a composite time delta to a date.

        The components are applied in one calendar operation. If the result
        would leave the supported date range, the original date is returned.

        Args:
            date: The base date.
            days: Calendar days to add (can be negative).
            hours: Hours to add (can be negative).
            minutes: Minutes to add (can be negative).
            seconds: Seconds to add (can be negative).

        Returns:
            The shifted date, or ``date`` itself on overflow.
        """
        return self._calendar.add_delta(date, days=days, hours=hours, minutes=minutes, seconds=seconds)

    def subtract(
        self,
        date: datetime,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
    ) -> datetime:
        """Subtract a composite time delta; the mirror image of ``add``."""
        return self.add(date, days=-days, hours=-hours, minutes=-minutes, seconds=-seconds)

    # ── boundaries ───────────────────────────────────────────────────────

    def start_of_day(self, date: datetime) -> datetime:
        return self._calendar.truncate_to_day(date)

    def end_of_day(self, date: datetime) -> datetime:
        """Last second of the date's day (23:59:59)."""
        start_of_next_day = self.add(self.start_of_day(date), days=1)
        return self.subtract(start_of_next_day, seconds=1)

    def start_of_hour(self, date: datetime) -> datetime:
        return self._calendar.truncate_to_hour(date)

    # ── comparisons ──────────────────────────────────────────────────────

    def days_between(self, start_date: datetime, end_date: datetime) -> int:
        """
        Count calendar days between two dates, including both endpoints.

        The order of the arguments does not matter; Jan 1 to Jan 3 is 3 days.
        """
        start = self._calendar.day_index(self.start_of_day(start_date))
        end = self._calendar.day_index(self.start_of_day(end_date))
        return abs(end - start) + 1

    def are_same_day(self, date1: datetime, date2: datetime) -> bool:
        return self.start_of_day(date1) == self.start_of_day(date2)

    def time_interval(self, start_date: datetime, end_date: datetime) -> float:
        """Elapsed seconds from ``start_date`` to ``end_date`` (negative if reversed)."""
        start = self._calendar.localize(start_date)
        end = self._calendar.localize(end_date)
        return (end - start).total_seconds()

    # ── relative to now ──────────────────────────────────────────────────

    def start_of_current_hour(self) -> datetime:
        return self.start_of_hour(self._clock())

    def start_of_today(self) -> datetime:
        return self.start_of_day(self._clock())

    def end_of_today(self) -> datetime:
        return self.end_of_day(self._clock())

    def day_earlier_same_time(self) -> datetime:
        """Yesterday at the current wall-clock time."""
        return self.subtract(self._clock(), days=1)

    def start_of_yesterday(self) -> datetime:
        return self.start_of_day(self.day_earlier_same_time())

    def start_of_tomorrow(self) -> datetime:
        return self.add(self.start_of_today(), days=1)
