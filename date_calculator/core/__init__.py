"""
Core calendar arithmetic and business-day logic.
"""

from date_calculator.core.business_calendar import DEFAULT_WEEKEND_DAYS, BusinessDateCalculator
from date_calculator.core.calendar_system import CalendarSystem
from date_calculator.core.date_calculator import DateCalculator
from date_calculator.core.holiday_provider import HolidayProvider
from date_calculator.core.periods import PeriodCalculator

__all__ = [
    "DEFAULT_WEEKEND_DAYS",
    "BusinessDateCalculator",
    "CalendarSystem",
    "DateCalculator",
    "HolidayProvider",
    "PeriodCalculator",
]
