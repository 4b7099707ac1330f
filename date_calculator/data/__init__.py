"""
Data models and schemas for the date calculator.
"""

from date_calculator.data.schemas import (
    BusinessDaySearch,
    BusinessDaysReport,
    Config,
    Holiday,
    SearchLimits,
    Weekday,
    parse_weekdays,
)

__all__ = [
    "BusinessDaySearch",
    "BusinessDaysReport",
    "Config",
    "Holiday",
    "SearchLimits",
    "Weekday",
    "parse_weekdays",
]
