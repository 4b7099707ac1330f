"""
Date Calculator - calendar arithmetic and business-day calculations.

Basic usage::

    from datetime import datetime
    from date_calculator import BusinessDateCalculator

    calc = BusinessDateCalculator().adding_holidays([datetime(2024, 7, 4)])
    calc.business_days_between(datetime(2024, 7, 1), datetime(2024, 7, 5))  # 4
"""

__version__ = "0.1.0"

from date_calculator.core.business_calendar import DEFAULT_WEEKEND_DAYS, BusinessDateCalculator
from date_calculator.core.calendar_system import CalendarSystem
from date_calculator.core.date_calculator import DateCalculator
from date_calculator.core.holiday_provider import HolidayProvider
from date_calculator.core.periods import PeriodCalculator
from date_calculator.data.schemas import (
    BusinessDaySearch,
    BusinessDaysReport,
    Holiday,
    SearchLimits,
    Weekday,
)

__all__ = [
    "DEFAULT_WEEKEND_DAYS",
    "BusinessDateCalculator",
    "BusinessDaySearch",
    "BusinessDaysReport",
    "CalendarSystem",
    "DateCalculator",
    "Holiday",
    "HolidayProvider",
    "PeriodCalculator",
    "SearchLimits",
    "Weekday",
]
