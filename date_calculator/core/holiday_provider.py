"""
Holiday provider using the holidays library.

Turns a country (and optional subdivision) holiday table into plain dates
that can be fed to ``BusinessDateCalculator.adding_holidays``.
"""

import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Set

import holidays

from date_calculator.data.schemas import Holiday

logger = logging.getLogger(__name__)


class HolidayProvider:
    """Provides public holidays for a country or subdivision."""

    def __init__(
        self,
        country: str = "US",
        subdivision: Optional[str] = None,
        language: Optional[str] = None,
    ):
        """
        Initialize the holiday provider.

        Args:
            country: ISO 3166-1 alpha-2 country code (e.g. 'US', 'DE').
            subdivision: Optional subdivision code (e.g. 'CA', 'BY').
            language: Optional language for holiday names.

        Raises:
            ValueError: If the country or subdivision is not supported.
        """
        self.country = country.upper()
        self.subdivision = subdivision.upper() if subdivision else None
        self.language = language
        self._cache: Dict[tuple, List[Holiday]] = {}

        # Fail early on unknown codes rather than on first lookup
        self._table(set())

    def _table(self, years: Set[int]) -> holidays.HolidayBase:
        try:
            return holidays.country_holidays(
                self.country,
                subdiv=self.subdivision,
                years=years,
                language=self.language,
            )
        except NotImplementedError as e:
            region = f"{self.country}-{self.subdivision}" if self.subdivision else self.country
            raise ValueError(f"Unsupported holiday region: {region}") from e

    def get_holidays_for_range(self, start: date, end: date) -> List[Holiday]:
        """
        Get all holidays within a date range (inclusive).

        Args:
            start: Start date of the range.
            end: End date of the range.

        Returns:
            List of Holiday objects within the range, in date order.
        """
        if end < start:
            start, end = end, start

        cache_key = (start, end)
        if cache_key in self._cache:
            return self._cache[cache_key]

        table = self._table(set(range(start.year, end.year + 1)))

        result = []
        current = start
        while current <= end:
            if current in table:
                result.append(
                    Holiday(
                        holiday_date=current,
                        name=table.get(current),
                        country=self.country,
                        subdivision=self.subdivision,
                    )
                )
            current += timedelta(days=1)

        logger.debug(
            f"Found {len(result)} holidays for {self.country}"
            f"{'-' + self.subdivision if self.subdivision else ''} between {start} and {end}"
        )
        self._cache[cache_key] = result
        return result

    def get_holiday_dates(self, start: date, end: date) -> Set[date]:
        """Get the set of holiday dates within a range."""
        return {h.holiday_date for h in self.get_holidays_for_range(start, end)}

    def get_holidays_for_year(self, year: int) -> List[Holiday]:
        return self.get_holidays_for_range(date(year, 1, 1), date(year, 12, 31))

    def is_holiday(self, check_date: date) -> bool:
        return len(self.get_holidays_for_range(check_date, check_date)) > 0

    def clear_cache(self) -> None:
        """Clear the holiday cache."""
        self._cache.clear()
