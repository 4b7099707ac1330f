"""
Business-day calendar: weekends, holidays, navigation and counting.

A BusinessDateCalculator is an immutable value. Reconfiguration through
``adding_holidays``, ``with_weekend_days`` or ``with_limits`` builds a new
instance and leaves the original untouched.

Example::

    calc = BusinessDateCalculator().adding_holidays([datetime(2024, 7, 4)])
    calc.add_business_days(5, datetime(2024, 6, 17))        # 2024-06-24
    calc.business_days_between(datetime(2024, 7, 1), datetime(2024, 7, 5))  # 4

Navigation and arithmetic are bounded searches. When the bound runs out, the
result is ``None``; the full outcome is available from ``search``.
"""

import logging
from collections import Counter
from datetime import datetime
from typing import FrozenSet, Iterable, Optional

from date_calculator.core.calendar_system import CalendarSystem
from date_calculator.data.schemas import (
    BusinessDaySearch,
    BusinessDaysReport,
    SearchLimits,
    Weekday,
    parse_weekdays,
)

logger = logging.getLogger(__name__)

DEFAULT_WEEKEND_DAYS: FrozenSet[Weekday] = frozenset({Weekday.SUNDAY, Weekday.SATURDAY})


class BusinessDateCalculator:
    """Calculates business days considering weekends and holidays."""

    __slots__ = ("_calendar", "_holidays", "_weekend_days", "_limits")

    def __init__(
        self,
        calendar: Optional[CalendarSystem] = None,
        holidays: Iterable[datetime] = (),
        weekend_days: Iterable = DEFAULT_WEEKEND_DAYS,
        limits: Optional[SearchLimits] = None,
    ):
        """
        Initialize the business date calculator.

        Args:
            calendar: Calendar system for day stepping and truncation.
            holidays: Holiday instants; each is truncated to its day.
            weekend_days: Weekdays treated as non-business days.
            limits: Iteration bounds for the bounded searches.

        Raises:
            ValueError: If the weekend-day set is empty or names an invalid weekday.
        """
        self._calendar = calendar or CalendarSystem()
        self._holidays: FrozenSet[datetime] = frozenset(
            self._calendar.truncate_to_day(h) for h in holidays
        )
        self._weekend_days: FrozenSet[Weekday] = parse_weekdays(weekend_days)
        if not self._weekend_days:
            raise ValueError("weekend_days must contain at least one weekday")
        self._limits = limits or SearchLimits()

    # ── configuration ────────────────────────────────────────────────────

    @property
    def calendar(self) -> CalendarSystem:
        return self._calendar

    @property
    def holidays(self) -> FrozenSet[datetime]:
        return self._holidays

    @property
    def weekend_days(self) -> FrozenSet[Weekday]:
        return self._weekend_days

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    def adding_holidays(self, additional_holidays: Iterable[datetime]) -> "BusinessDateCalculator":
        """Return a new calculator whose holidays also include ``additional_holidays``."""
        return BusinessDateCalculator(
            calendar=self._calendar,
            holidays=self._holidays.union(additional_holidays),
            weekend_days=self._weekend_days,
            limits=self._limits,
        )

    def with_weekend_days(self, weekend_days: Iterable) -> "BusinessDateCalculator":
        """
        Return a new calculator with a different weekend.

        Example::

            # Friday-Saturday weekend
            calc.with_weekend_days({Weekday.FRIDAY, Weekday.SATURDAY})
        """
        return BusinessDateCalculator(
            calendar=self._calendar,
            holidays=self._holidays,
            weekend_days=weekend_days,
            limits=self._limits,
        )

    def with_limits(self, limits: SearchLimits) -> "BusinessDateCalculator":
        """Return a new calculator with different search bounds."""
        return BusinessDateCalculator(
            calendar=self._calendar,
            holidays=self._holidays,
            weekend_days=self._weekend_days,
            limits=limits,
        )

    # ── detection ────────────────────────────────────────────────────────

    def is_weekend(self, date: datetime) -> bool:
        return self._calendar.weekday_index(date) in self._weekend_days

    def is_holiday(self, date: datetime) -> bool:
        return self._calendar.truncate_to_day(date) in self._holidays

    def is_business_day(self, date: datetime) -> bool:
        """A business day is neither a weekend day nor a holiday."""
        return not self.is_weekend(date) and not self.is_holiday(date)

    # ── bounded search ───────────────────────────────────────────────────

    def search(self, start: datetime, business_days: int, direction: int, limit: int) -> BusinessDaySearch:
        """
        Step one calendar day at a time until ``business_days`` business days are reached.

        Only days landed on count; ``start`` itself never does. The walk stops
        after ``limit`` calendar-day steps.

        Args:
            start: Instant to walk from; its time of day is kept.
            business_days: Number of business days to reach (>= 1).
            direction: 1 to walk forward, -1 to walk backward.
            limit: Maximum number of calendar-day steps.

        Returns:
            BusinessDaySearch; ``result`` is None when the bound was exhausted
            or the walk left the supported date range.
        """
        start = self._calendar.localize(start)
        current = start
        reached = 0
        steps = 0

        while reached < business_days and steps < limit:
            following = self._calendar.try_add_delta(current, days=direction)
            if following is None:
                break
            current = following
            steps += 1
            if self.is_business_day(current):
                reached += 1

        outcome = BusinessDaySearch(
            start=start,
            direction=direction,
            business_days=business_days,
            result=current if reached == business_days else None,
            steps=steps,
            limit=limit,
        )
        if outcome.exhausted:
            logger.warning(
                f"No business day reachable from {start.isoformat()} within {limit} steps "
                f"(direction={direction}, needed={business_days}, reached={reached}, "
                f"weekend={sorted(d.name for d in self._weekend_days)}, holidays={len(self._holidays)})"
            )
        return outcome

    # ── navigation ───────────────────────────────────────────────────────

    def next_business_day(self, date: datetime) -> Optional[datetime]:
        """
        Return the first business day after ``date``.

        A business day ``date`` is skipped too: Monday gives Tuesday, Friday
        gives the following Monday. None when the search bound is exhausted.
        """
        return self.search(date, 1, 1, self._limits.max_search_steps).result

    def previous_business_day(self, date: datetime) -> Optional[datetime]:
        """Return the last business day before ``date``, or None when the bound is exhausted."""
        return self.search(date, 1, -1, self._limits.max_search_steps).result

    def closest_business_day(self, date: datetime) -> Optional[datetime]:
        """Return ``date`` if it is a business day, otherwise the next one."""
        if self.is_business_day(date):
            return self._calendar.localize(date)
        return self.next_business_day(date)

    # ── arithmetic ───────────────────────────────────────────────────────

    def add_business_days(self, business_days: int, date: datetime) -> Optional[datetime]:
        """
        Add (or, when negative, subtract) business days to a date.

        Weekends and holidays are skipped. Adding 0 returns the same instant,
        even when it is not a business day.

        Args:
            business_days: Number of business days to move.
            date: Starting date.

        Returns:
            The resulting date, or None if the bound of
            ``|business_days| * steps_per_business_day`` steps was exhausted.
        """
        if business_days == 0:
            return self._calendar.localize(date)

        direction = 1 if business_days > 0 else -1
        count = abs(business_days)
        limit = count * self._limits.steps_per_business_day
        return self.search(date, count, direction, limit).result

    def subtract_business_days(self, business_days: int, date: datetime) -> Optional[datetime]:
        return self.add_business_days(-business_days, date)

    # ── counting ─────────────────────────────────────────────────────────

    def business_days_between(self, start_date: datetime, end_date: datetime) -> int:
        """
        Count business days between two dates, both endpoints included.

        The order of the arguments does not matter.
        """
        return sum(1 for day in self._days_in_range(start_date, end_date) if self.is_business_day(day))

    def summarize(self, start_date: datetime, end_date: datetime) -> BusinessDaysReport:
        """
        Break an inclusive date range down into weekend days, holidays and business days.

        Holidays that fall on a weekend day are counted as weekend days only.

        Args:
            start_date: One end of the range.
            end_date: The other end of the range.

        Returns:
            BusinessDaysReport for the range.
        """
        calendar_days = 0
        weekend_days: Counter = Counter()
        holidays_on_weekdays = 0
        holidays_in_range = []

        for day in self._days_in_range(start_date, end_date):
            calendar_days += 1
            if self.is_holiday(day):
                holidays_in_range.append(self._calendar.localize(day).date())
            if self.is_weekend(day):
                weekend_days[self._calendar.weekday_index(day).name.lower()] += 1
            elif self.is_holiday(day):
                holidays_on_weekdays += 1

        first, last = self._ordered_days(start_date, end_date)
        weekend_total = sum(weekend_days.values())
        return BusinessDaysReport(
            start_date=self._calendar.localize(first).date(),
            end_date=self._calendar.localize(last).date(),
            calendar_days=calendar_days,
            weekend_days=weekend_total,
            holidays_count=holidays_on_weekdays,
            business_days=calendar_days - weekend_total - holidays_on_weekdays,
            holidays=holidays_in_range,
            weekend_detail=dict(weekend_days),
        )

    def _ordered_days(self, start_date: datetime, end_date: datetime):
        start = self._calendar.truncate_to_day(start_date)
        end = self._calendar.truncate_to_day(end_date)
        return (start, end) if start <= end else (end, start)

    def _days_in_range(self, start_date: datetime, end_date: datetime):
        """Yield each day from the earlier to the later date, inclusive."""
        current, last = self._ordered_days(start_date, end_date)
        last_index = self._calendar.day_index(last)
        while self._calendar.day_index(current) <= last_index:
            yield current
            following = self._calendar.try_add_delta(current, days=1)
            if following is None:
                break
            # a midnight skipped by DST resolves to 01:00; re-truncate each day
            current = self._calendar.truncate_to_day(following)

    # ── value semantics ──────────────────────────────────────────────────

    def __eq__(self, other) -> bool:
        if not isinstance(other, BusinessDateCalculator):
            return NotImplemented
        return (
            self._calendar == other._calendar
            and self._holidays == other._holidays
            and self._weekend_days == other._weekend_days
            and self._limits == other._limits
        )

    def __hash__(self) -> int:
        return hash((self._calendar, self._holidays, self._weekend_days, self._limits))

    def __repr__(self) -> str:
        weekend = ", ".join(d.name for d in sorted(self._weekend_days))
        return (
            f"BusinessDateCalculator(calendar={self._calendar!r}, "
            f"holidays={len(self._holidays)}, weekend_days=[{weekend}], "
            f"limits={self._limits!r})"
        )
