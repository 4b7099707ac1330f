"""
Gregorian calendar system with an optional IANA timezone.

All higher-level calculators reach dates only through this class: delta
application, truncation, weekday lookup and month-length queries.
"""

import calendar as _calendar
import logging
from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta, timezone as _utc_zone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from date_calculator.data.schemas import Weekday

logger = logging.getLogger(__name__)

UTC = _utc_zone.utc


class CalendarSystem:
    """Gregorian day numbering, evaluated in one timezone."""

    def __init__(
        self,
        timezone: Optional[str] = None,
        first_weekday: Weekday = Weekday.SUNDAY,
    ):
        """
        Initialize the calendar system.

        Args:
            timezone: IANA timezone name. None keeps naive wall-clock datetimes
                (and leaves aware datetimes in their own zone).
            first_weekday: Weekday on which weeks start.

        Raises:
            ValueError: If the timezone name is unknown.
        """
        self._timezone_name = timezone
        self._tz: Optional[ZoneInfo] = None
        if timezone:
            try:
                self._tz = ZoneInfo(timezone)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"Unknown timezone: {timezone}") from e
        self._first_weekday = Weekday.parse(first_weekday)

    @classmethod
    def gregorian(cls, timezone: Optional[str] = None) -> "CalendarSystem":
        """Gregorian calendar with Sunday-first weeks."""
        return cls(timezone=timezone, first_weekday=Weekday.SUNDAY)

    @classmethod
    def iso8601(cls, timezone: Optional[str] = None) -> "CalendarSystem":
        """ISO 8601 calendar with Monday-first weeks."""
        return cls(timezone=timezone, first_weekday=Weekday.MONDAY)

    @property
    def timezone(self) -> Optional[str]:
        return self._timezone_name

    @property
    def first_weekday(self) -> Weekday:
        return self._first_weekday

    # ── timezone handling ────────────────────────────────────────────────

    def localize(self, instant: datetime) -> datetime:
        """
        Express an instant as wall-clock time of this calendar.

        Naive instants given to a timezone-aware calendar are read as
        wall-clock times of that timezone. Plain dates are read as midnight.
        """
        if not isinstance(instant, datetime) and isinstance(instant, date):
            instant = datetime.combine(instant, time())
        if self._tz is None:
            return instant
        if instant.tzinfo is None:
            return instant.replace(tzinfo=self._tz)
        return instant.astimezone(self._tz)

    def _resolve(self, local: datetime) -> datetime:
        """Map a wall-clock time onto a real instant (skips DST gaps)."""
        if self._tz is None:
            return local
        return local.astimezone(UTC).astimezone(self._tz)

    def now(self) -> datetime:
        """Current time in this calendar."""
        return datetime.now(self._tz) if self._tz else datetime.now()

    # ── delta application ────────────────────────────────────────────────

    def try_add_delta(
        self,
        instant: datetime,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
    ) -> Optional[datetime]:
        """
        Apply a composite delta, or return None when it leaves the supported range.

        Days move the wall-clock date, so a day step across a DST change keeps
        the time of day. Hours, minutes and seconds are elapsed time.
        """
        elapsed = timedelta(hours=hours, minutes=minutes, seconds=seconds)
        try:
            shifted = self._resolve(self.localize(instant) + timedelta(days=days))
            if self._tz is None:
                return shifted + elapsed
            return (shifted.astimezone(UTC) + elapsed).astimezone(self._tz)
        except OverflowError:
            logger.debug(
                f"Delta days={days} hours={hours} minutes={minutes} seconds={seconds} "
                f"overflows from {instant.isoformat()}"
            )
            return None

    def add_delta(
        self,
        instant: datetime,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
    ) -> datetime:
        """Apply a composite delta; on overflow the instant is returned unchanged."""
        result = self.try_add_delta(instant, days=days, hours=hours, minutes=minutes, seconds=seconds)
        return instant if result is None else result

    # ── truncation ───────────────────────────────────────────────────────

    def truncate_to_day(self, instant: datetime) -> datetime:
        """Midnight of the instant's calendar day."""
        local = self.localize(instant)
        return self._resolve(local.replace(hour=0, minute=0, second=0, microsecond=0, fold=0))

    def truncate_to_hour(self, instant: datetime) -> datetime:
        """Start of the instant's hour."""
        local = self.localize(instant)
        return self._resolve(local.replace(minute=0, second=0, microsecond=0))

    # ── component queries ────────────────────────────────────────────────

    def day_index(self, instant: datetime) -> int:
        """Proleptic ordinal of the instant's calendar day."""
        return self.localize(instant).toordinal()

    def weekday_index(self, instant: datetime) -> Weekday:
        """Weekday of the instant (1 = Sunday ... 7 = Saturday)."""
        return Weekday.from_date(self.localize(instant))

    def day_range_in_month(self, month: int, year: int) -> Optional[range]:
        """Valid day numbers of a month, or None for an invalid month/year."""
        if not 1 <= month <= 12 or not MINYEAR <= year <= MAXYEAR:
            return None
        _, length = _calendar.monthrange(year, month)
        return range(1, length + 1)

    def days_in_month(self, month: int, year: int) -> Optional[int]:
        """Number of days in a month, or None for an invalid month/year."""
        days = self.day_range_in_month(month, year)
        return None if days is None else len(days)

    def date_from_components(
        self, year: int, month: int = 1, day: int = 1, hour: int = 0
    ) -> Optional[datetime]:
        """Build the instant for a wall-clock date, or None if it does not exist."""
        try:
            local = datetime(year, month, day, hour)
        except ValueError:
            return None
        if self._tz is None:
            return local
        try:
            return self._resolve(local.replace(tzinfo=self._tz))
        except OverflowError:
            return None

    # ── value semantics ──────────────────────────────────────────────────

    def __eq__(self, other) -> bool:
        if not isinstance(other, CalendarSystem):
            return NotImplemented
        return (self._timezone_name, self._first_weekday) == (
            other._timezone_name,
            other._first_weekday,
        )

    def __hash__(self) -> int:
        return hash((self._timezone_name, self._first_weekday))

    def __repr__(self) -> str:
        return (
            f"CalendarSystem(timezone={self._timezone_name!r}, "
            f"first_weekday={self._first_weekday.name})"
        )

