"""
Data models for the date calculator using Pydantic.
"""

from datetime import date, datetime
from enum import IntEnum
from typing import FrozenSet, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Weekday(IntEnum):
    """Weekday indices, 1 = Sunday through 7 = Saturday."""

    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        """Map a date's ISO weekday (Monday = 1) onto the Sunday-first index."""
        return cls(value.isoweekday() % 7 + 1)

    @classmethod
    def parse(cls, value) -> "Weekday":
        """
        Parse a weekday from an index, a full name or a three-letter abbreviation.

        Args:
            value: Weekday, int, or string such as "7", "saturday" or "Sat".

        Returns:
            The matching Weekday.

        Raises:
            ValueError: If the value names no weekday.
        """
        if isinstance(value, Weekday):
            return value
        if isinstance(value, int):
            return cls(value)

        text = str(value).strip()
        if text.isdigit():
            return cls(int(text))
        for weekday in cls:
            if weekday.name.lower() == text.lower() or weekday.name[:3].lower() == text.lower():
                return weekday
        raise ValueError(f"Unknown weekday: {value!r}")


def parse_weekdays(values: Iterable) -> FrozenSet[Weekday]:
    """Parse an iterable (or comma-separated string) of weekdays into a frozenset."""
    if isinstance(values, str):
        values = [part for part in values.split(",") if part.strip()]
    return frozenset(Weekday.parse(v) for v in values)


class Holiday(BaseModel):
    """Represents a public holiday."""

    holiday_date: date = Field(..., description="Date of the holiday")
    name: str = Field(..., description="Name of the holiday")
    country: Optional[str] = Field(default=None, description="ISO country code of the source table")
    subdivision: Optional[str] = Field(default=None, description="Subdivision code, if any")


class SearchLimits(BaseModel):
    """
    Iteration bounds for the business-day searches.

    ``max_search_steps`` caps the single-step search performed by
    ``next_business_day``/``previous_business_day``; it must be at least the
    longest run of consecutive non-business days plus one. ``steps_per_business_day``
    multiplies ``|n|`` for ``add_business_days``; it must be at least that same
    run length plus one.
    """

    model_config = ConfigDict(frozen=True)

    max_search_steps: int = Field(default=10, ge=1, description="Bound for single business-day search")
    steps_per_business_day: int = Field(
        default=3, ge=1, description="Calendar days allowed per business day in arithmetic"
    )

    @classmethod
    def recommended(cls, weekend_days: Iterable, max_holiday_run: int = 0) -> "SearchLimits":
        """
        Derive the smallest safe limits for a weekend/holiday configuration.

        The longest non-business run is bounded by the weekend days plus the
        longest run of holidays adjacent to them.

        Args:
            weekend_days: The weekend-day set in use.
            max_holiday_run: Longest run of consecutive weekday holidays.

        Returns:
            SearchLimits that cannot exhaust for that configuration.
        """
        run = len(parse_weekdays(weekend_days)) + max(max_holiday_run, 0)
        return cls(max_search_steps=run + 1, steps_per_business_day=run + 1)


class BusinessDaySearch(BaseModel):
    """Outcome of one bounded business-day walk."""

    model_config = ConfigDict(frozen=True)

    start: datetime = Field(..., description="Instant the walk started from")
    direction: int = Field(..., description="+1 for forward, -1 for backward")
    business_days: int = Field(..., ge=0, description="Business days that had to be reached")
    result: Optional[datetime] = Field(default=None, description="Reached instant, None when exhausted")
    steps: int = Field(default=0, ge=0, description="Calendar days stepped")
    limit: int = Field(..., ge=0, description="Maximum calendar days allowed")

    @field_validator("direction")
    @classmethod
    def validate_direction(cls, v: int) -> int:
        """Only unit steps are meaningful."""
        if v not in (1, -1):
            raise ValueError("direction must be 1 or -1")
        return v

    @property
    def exhausted(self) -> bool:
        """Whether the bound ran out before the target was reached."""
        return self.result is None


class BusinessDaysReport(BaseModel):
    """Breakdown of an inclusive date range into business and non-business days."""

    start_date: date = Field(..., description="Earlier day of the range")
    end_date: date = Field(..., description="Later day of the range")
    calendar_days: int = Field(..., ge=1, description="Total calendar days in range")
    weekend_days: int = Field(..., ge=0, description="Days falling on a weekend day")
    holidays_count: int = Field(..., ge=0, description="Holidays falling on non-weekend days")
    business_days: int = Field(..., ge=0, description="Business days in range")
    holidays: List[date] = Field(default_factory=list, description="Configured holidays inside the range")
    weekend_detail: dict = Field(default_factory=dict, description="Weekend day counts by weekday name")
    calculation_timestamp: datetime = Field(
        default_factory=datetime.now, description="When the calculation was performed"
    )


class Config(BaseModel):
    """Configuration for the date calculator."""

    timezone: Optional[str] = Field(default=None, description="IANA timezone, None for naive local time")
    first_weekday: Weekday = Field(default=Weekday.SUNDAY, description="First day of the week")
    weekend_days: List[Weekday] = Field(
        default_factory=lambda: [Weekday.SUNDAY, Weekday.SATURDAY],
        description="Weekdays treated as non-business days",
    )
    holidays: List[date] = Field(default_factory=list, description="Additional fixed holiday dates")
    country: Optional[str] = Field(default=None, description="Country code for the holiday table")
    subdivision: Optional[str] = Field(default=None, description="Subdivision code for the holiday table")
    holiday_language: Optional[str] = Field(default=None, description="Language for holiday names")
    max_search_steps: int = Field(default=10, ge=1, description="Single-step business-day search bound")
    steps_per_business_day: int = Field(default=3, ge=1, description="Arithmetic bound factor")
    output_format: str = Field(default="console", description="Default output format")
    output_directory: str = Field(default="results", description="Directory for output files")

    @field_validator("first_weekday", mode="before")
    @classmethod
    def validate_first_weekday(cls, v):
        """Accept weekday names as well as indices."""
        return Weekday.parse(v)

    @field_validator("weekend_days", mode="before")
    @classmethod
    def validate_weekend_days(cls, v):
        """Accept names, indices, or a comma-separated string; reject an empty set."""
        days = sorted(parse_weekdays(v))
        if not days:
            raise ValueError("weekend_days must not be empty")
        return days

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Restrict to the formats the CLI can produce."""
        if v not in ("console", "json", "csv", "both"):
            raise ValueError("output_format must be console, json, csv or both")
        return v

    @property
    def limits(self) -> SearchLimits:
        """Search limits described by this configuration."""
        return SearchLimits(
            max_search_steps=self.max_search_steps,
            steps_per_business_day=self.steps_per_business_day,
        )
