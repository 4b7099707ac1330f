"""
Tests for the business date calculator.
"""

from datetime import date, datetime, timezone

import pytest

from date_calculator.core.business_calendar import DEFAULT_WEEKEND_DAYS, BusinessDateCalculator
from date_calculator.core.calendar_system import CalendarSystem
from date_calculator.core.date_calculator import DateCalculator
from date_calculator.data.schemas import SearchLimits, Weekday

# June 2024, at 9am like the dates callers usually pass in
MONDAY = datetime(2024, 6, 17, 9)
TUESDAY = datetime(2024, 6, 18, 9)
WEDNESDAY = datetime(2024, 6, 19, 9)
THURSDAY = datetime(2024, 6, 20, 9)
FRIDAY = datetime(2024, 6, 21, 9)
SATURDAY = datetime(2024, 6, 22, 9)
SUNDAY = datetime(2024, 6, 23, 9)
NEXT_MONDAY = datetime(2024, 6, 24, 9)
PREVIOUS_FRIDAY = datetime(2024, 6, 14, 9)

JULY_4 = datetime(2024, 7, 4, 9)


@pytest.fixture
def calculator():
    """Default calculator: Saturday/Sunday weekend, no holidays."""
    return BusinessDateCalculator(calendar=CalendarSystem.gregorian())


@pytest.fixture
def july_calculator(calculator):
    """Calculator with Independence Day 2024 as a holiday."""
    return calculator.adding_holidays([JULY_4])


class TestDetection:
    """Tests for weekend, holiday and business-day predicates."""

    def test_weekdays_are_business_days(self, calculator):
        """Monday through Friday are business days by default."""
        for day in (MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY):
            assert calculator.is_business_day(day) is True

    def test_weekend_is_not_business(self, calculator):
        """Saturday and Sunday are weekend days."""
        assert calculator.is_weekend(SATURDAY) is True
        assert calculator.is_weekend(SUNDAY) is True
        assert calculator.is_weekend(MONDAY) is False
        assert calculator.is_business_day(SATURDAY) is False
        assert calculator.is_business_day(SUNDAY) is False

    def test_holiday_exclusion(self, calculator, july_calculator):
        """A holiday stops being a business day only in the calculator that has it."""
        assert calculator.is_business_day(JULY_4) is True
        assert july_calculator.is_business_day(JULY_4) is False
        assert july_calculator.is_business_day(datetime(2024, 7, 3, 9)) is True

    def test_is_holiday(self, calculator, july_calculator):
        """is_holiday only reports configured days."""
        assert calculator.is_holiday(JULY_4) is False
        assert july_calculator.is_holiday(JULY_4) is True
        assert july_calculator.is_holiday(MONDAY) is False

    def test_holiday_matches_any_time_of_day(self, july_calculator):
        """A holiday added at 9am also covers 2pm and midnight of that day."""
        assert july_calculator.is_holiday(datetime(2024, 7, 4, 14, 30)) is True
        assert july_calculator.is_holiday(datetime(2024, 7, 4)) is True
        assert july_calculator.is_holiday(datetime(2024, 7, 5, 0, 0, 1)) is False

    def test_holidays_are_stored_truncated(self, july_calculator):
        """Stored holidays are midnight instants."""
        assert july_calculator.holidays == frozenset({datetime(2024, 7, 4)})

    def test_plain_dates_accepted(self, calculator):
        """date objects work for holidays and probes."""
        calc = calculator.adding_holidays([date(2024, 7, 4)])
        assert calc.is_holiday(date(2024, 7, 4)) is True
        assert calc.is_holiday(JULY_4) is True


class TestWeekendConfiguration:
    """Tests for custom weekend-day sets."""

    def test_default_weekend(self, calculator):
        """Default weekend is Saturday and Sunday."""
        assert calculator.weekend_days == DEFAULT_WEEKEND_DAYS
        assert calculator.weekend_days == {Weekday.SATURDAY, Weekday.SUNDAY}

    def test_friday_saturday_weekend(self, calculator):
        """A Friday/Saturday weekend flips Friday and Sunday."""
        gulf = calculator.with_weekend_days({Weekday.FRIDAY, Weekday.SATURDAY})

        assert gulf.is_business_day(SUNDAY) is True
        assert gulf.is_business_day(FRIDAY) is False
        assert gulf.is_business_day(SATURDAY) is False

        assert calculator.is_business_day(SUNDAY) is False
        assert calculator.is_business_day(FRIDAY) is True
        assert calculator.is_business_day(SATURDAY) is False

    def test_weekend_accepts_indices_and_names(self, calculator):
        """Weekend days can be given as 1..7 indices or names."""
        assert calculator.with_weekend_days([6, 7]).weekend_days == {Weekday.FRIDAY, Weekday.SATURDAY}
        assert calculator.with_weekend_days(["fri", "Saturday"]).weekend_days == {
            Weekday.FRIDAY,
            Weekday.SATURDAY,
        }

    def test_empty_weekend_rejected(self):
        """An empty weekend-day set is invalid."""
        with pytest.raises(ValueError, match="weekend_days"):
            BusinessDateCalculator(weekend_days=set())

    def test_out_of_range_weekday_rejected(self):
        """Weekday indices outside 1..7 are invalid."""
        with pytest.raises(ValueError):
            BusinessDateCalculator(weekend_days={0, 7})


class TestImmutability:
    """Reconfiguration builds new calculators."""

    def test_adding_holidays_leaves_original(self, calculator):
        """The source calculator keeps its empty holiday set."""
        derived = calculator.adding_holidays([JULY_4])

        assert calculator.holidays == frozenset()
        assert len(derived.holidays) == 1
        assert derived is not calculator

    def test_siblings_do_not_share_configuration(self, calculator):
        """Two calculators derived from one ancestor never see each other's changes."""
        first = calculator.adding_holidays([JULY_4])
        second = calculator.adding_holidays([datetime(2024, 12, 25)]).with_weekend_days([Weekday.SUNDAY])

        assert first.is_holiday(JULY_4) is True
        assert second.is_holiday(JULY_4) is False
        assert first.is_holiday(datetime(2024, 12, 25)) is False
        assert first.weekend_days == DEFAULT_WEEKEND_DAYS
        assert second.weekend_days == {Weekday.SUNDAY}

    def test_adding_holidays_is_a_union(self, july_calculator):
        """New holidays are added to the existing ones."""
        calc = july_calculator.adding_holidays([datetime(2024, 12, 25, 18)])
        assert calc.holidays == frozenset({datetime(2024, 7, 4), datetime(2024, 12, 25)})

    def test_with_weekend_days_keeps_holidays_and_limits(self, july_calculator):
        """Replacing the weekend copies everything else."""
        limits = SearchLimits(max_search_steps=20, steps_per_business_day=5)
        calc = july_calculator.with_limits(limits).with_weekend_days([Weekday.FRIDAY])

        assert calc.holidays == july_calculator.holidays
        assert calc.limits == limits
        assert calc.calendar == july_calculator.calendar

    def test_value_equality(self, calculator):
        """Calculators with the same configuration are equal and hash alike."""
        a = calculator.adding_holidays([JULY_4])
        b = calculator.adding_holidays([datetime(2024, 7, 4, 17)])
        assert a == b
        assert hash(a) == hash(b)
        assert a != calculator


class TestNavigation:
    """Tests for next/previous/closest business day."""

    def test_next_from_weekday(self, calculator):
        """Monday is followed by Tuesday."""
        assert calculator.next_business_day(MONDAY) == TUESDAY

    def test_next_from_friday(self, calculator):
        """Friday is followed by the next Monday."""
        assert calculator.next_business_day(FRIDAY) == NEXT_MONDAY

    def test_next_from_saturday(self, calculator):
        """Saturday is followed by Monday."""
        assert calculator.next_business_day(SATURDAY) == NEXT_MONDAY

    def test_next_skips_holiday(self, july_calculator):
        """Wednesday before Independence Day is followed by Friday."""
        assert july_calculator.next_business_day(datetime(2024, 7, 3, 9)) == datetime(2024, 7, 5, 9)

    def test_previous_from_tuesday(self, calculator):
        """Tuesday is preceded by Monday."""
        assert calculator.previous_business_day(TUESDAY) == MONDAY

    def test_previous_from_monday(self, calculator):
        """Monday is preceded by the previous Friday."""
        assert calculator.previous_business_day(MONDAY) == PREVIOUS_FRIDAY

    def test_closest_on_business_day(self, calculator):
        """A business day is its own closest business day."""
        assert calculator.closest_business_day(TUESDAY) == TUESDAY

    def test_closest_on_weekend(self, calculator):
        """The closest business day to Saturday is Monday."""
        assert calculator.closest_business_day(SATURDAY) == NEXT_MONDAY

    def test_time_of_day_preserved(self, calculator):
        """Navigation keeps the time of day of the input."""
        result = calculator.next_business_day(datetime(2024, 6, 21, 16, 45))
        assert result == datetime(2024, 6, 24, 16, 45)


class TestArithmetic:
    """Tests for adding and subtracting business days."""

    def test_add_within_week(self, calculator):
        """Monday + 3 business days is Thursday."""
        assert calculator.add_business_days(3, MONDAY) == THURSDAY

    def test_add_over_weekend(self, calculator):
        """Monday 2024-06-17 + 5 business days is Monday 2024-06-24."""
        assert calculator.add_business_days(5, MONDAY) == NEXT_MONDAY

    def test_add_zero_is_identity(self, calculator):
        """Adding zero returns the input, even on a weekend."""
        assert calculator.add_business_days(0, TUESDAY) == TUESDAY
        assert calculator.add_business_days(0, SATURDAY) == SATURDAY

    def test_add_negative(self, calculator):
        """Wednesday - 2 business days is Monday."""
        assert calculator.add_business_days(-2, WEDNESDAY) == MONDAY

    def test_subtract(self, calculator):
        """Tuesday - 1 business day is Monday."""
        assert calculator.subtract_business_days(1, TUESDAY) == MONDAY

    def test_add_skips_holiday(self, july_calculator):
        """Wednesday July 3 + 2 business days skips the holiday and lands on Friday."""
        assert july_calculator.add_business_days(2, datetime(2024, 7, 3, 9)) == datetime(2024, 7, 5, 9)

    def test_add_one_from_friday(self, calculator):
        """One business day after Friday is Monday, three calendar steps away."""
        assert calculator.add_business_days(1, FRIDAY) == NEXT_MONDAY

    @pytest.mark.parametrize("n", [1, 2, 3, 5, 8, 13, 20])
    def test_round_trip(self, calculator, n):
        """Subtracting what was added returns to the starting business day."""
        for start in (MONDAY, WEDNESDAY, FRIDAY):
            moved = calculator.add_business_days(n, start)
            assert calculator.subtract_business_days(n, moved) == start

    def test_large_span(self, calculator):
        """260 business days from the first Monday of 2024 land 52 weeks later."""
        start = datetime(2024, 1, 1)
        assert calculator.add_business_days(260, start) == datetime(2024, 12, 30)


class TestBoundedSearch:
    """Tests for search bounds and exhaustion."""

    @pytest.fixture
    def monday_only(self):
        """Pathological calendar: only Mondays are workdays, and next Monday is a holiday."""
        weekend = set(Weekday) - {Weekday.MONDAY}
        return BusinessDateCalculator(weekend_days=weekend, holidays=[NEXT_MONDAY])

    def test_next_exhausts(self, monday_only):
        """Thirteen non-business days in a row exceed the default bound of 10."""
        assert monday_only.next_business_day(MONDAY) is None

    def test_previous_exhausts(self, monday_only):
        """Walking back from Sunday June 30 also needs thirteen steps."""
        assert monday_only.previous_business_day(datetime(2024, 6, 30, 9)) is None

    def test_closest_exhausts(self, monday_only):
        """closest_business_day reports exhaustion through next_business_day."""
        assert monday_only.closest_business_day(TUESDAY) is None

    def test_add_exhausts(self, monday_only):
        """Arithmetic reports exhaustion instead of a partial date."""
        assert monday_only.add_business_days(1, MONDAY) is None

    def test_exhaustion_logged(self, monday_only, caplog):
        """Exhaustion is logged as a warning."""
        with caplog.at_level("WARNING"):
            monday_only.next_business_day(MONDAY)
        assert "No business day reachable" in caplog.text

    def test_raised_limits_succeed(self, monday_only):
        """Raising the bounds lets the same search finish."""
        relaxed = monday_only.with_limits(SearchLimits(max_search_steps=14, steps_per_business_day=14))
        assert relaxed.next_business_day(MONDAY) == datetime(2024, 7, 1, 9)
        assert relaxed.add_business_days(1, MONDAY) == datetime(2024, 7, 1, 9)

    def test_search_result_details(self, calculator):
        """search exposes steps and limit for a successful walk."""
        outcome = calculator.search(FRIDAY, 1, 1, 10)
        assert outcome.exhausted is False
        assert outcome.result == NEXT_MONDAY
        assert outcome.steps == 3
        assert outcome.limit == 10

    def test_search_exhausted_details(self, calculator):
        """A bound of two steps cannot get from Friday to Monday."""
        outcome = calculator.search(FRIDAY, 1, 1, 2)
        assert outcome.exhausted is True
        assert outcome.result is None
        assert outcome.steps == 2

    def test_tight_limits(self, calculator):
        """A single-step bound of 2 fails on Friday but not mid-week."""
        tight = calculator.with_limits(SearchLimits(max_search_steps=2))
        assert tight.next_business_day(FRIDAY) is None
        assert tight.next_business_day(TUESDAY) == WEDNESDAY

    def test_recommended_limits(self, calculator):
        """Recommended limits are just large enough for the configuration."""
        limits = SearchLimits.recommended(DEFAULT_WEEKEND_DAYS)
        assert limits.max_search_steps == 3
        assert limits.steps_per_business_day == 3

        tight = calculator.with_limits(limits)
        assert tight.next_business_day(FRIDAY) == NEXT_MONDAY
        assert tight.add_business_days(10, FRIDAY) == datetime(2024, 7, 5, 9)

    def test_recommended_limits_with_holidays(self):
        """A holiday run adjacent to the weekend widens the recommended limits."""
        limits = SearchLimits.recommended([Weekday.FRIDAY, Weekday.SATURDAY], max_holiday_run=2)
        assert limits.max_search_steps == 5

    def test_limits_must_be_positive(self):
        """Zero or negative bounds are rejected."""
        with pytest.raises(ValueError):
            SearchLimits(max_search_steps=0)


class TestCounting:
    """Tests for business_days_between and summarize."""

    def test_same_week(self, calculator):
        """Monday to Friday is 5 business days."""
        assert calculator.business_days_between(MONDAY, FRIDAY) == 5

    def test_symmetric(self, calculator):
        """Argument order does not matter."""
        assert calculator.business_days_between(FRIDAY, MONDAY) == 5

    def test_with_holiday(self, july_calculator):
        """July 1-5, 2024 with Independence Day is 4 business days."""
        assert july_calculator.business_days_between(datetime(2024, 7, 1), datetime(2024, 7, 5)) == 4

    def test_weekend_only(self, calculator):
        """A weekend has no business days."""
        assert calculator.business_days_between(SATURDAY, SUNDAY) == 0

    def test_single_day(self, calculator):
        """A single business day counts once; a single weekend day not at all."""
        assert calculator.business_days_between(MONDAY, MONDAY) == 1
        assert calculator.business_days_between(SATURDAY, datetime(2024, 6, 22, 23)) == 0

    def test_endpoints_inclusive_regardless_of_time(self, calculator):
        """Late-evening end and early-morning start still include both days."""
        assert calculator.business_days_between(datetime(2024, 6, 17, 23, 59), datetime(2024, 6, 18, 0, 1)) == 2

    def test_full_year(self, calculator):
        """2024 has 262 weekdays."""
        assert calculator.business_days_between(datetime(2024, 1, 1), datetime(2024, 12, 31)) == 262

    def test_summarize_week(self, july_calculator):
        """Summary of the Independence Day week."""
        report = july_calculator.summarize(datetime(2024, 7, 7), datetime(2024, 7, 1))

        assert report.start_date.isoformat() == "2024-07-01"
        assert report.end_date.isoformat() == "2024-07-07"
        assert report.calendar_days == 7
        assert report.weekend_days == 2
        assert report.weekend_detail == {"saturday": 1, "sunday": 1}
        assert report.holidays_count == 1
        assert report.business_days == 4
        assert [d.isoformat() for d in report.holidays] == ["2024-07-04"]

    def test_summarize_weekend_holiday(self, july_calculator):
        """A holiday on a weekend is listed but only counted as a weekend day."""
        calc = july_calculator.adding_holidays([datetime(2024, 7, 6)])
        report = calc.summarize(datetime(2024, 7, 1), datetime(2024, 7, 7))

        assert report.holidays_count == 1
        assert len(report.holidays) == 2
        assert report.business_days == calc.business_days_between(datetime(2024, 7, 1), datetime(2024, 7, 7))


class TestTimezoneAwareCalendar:
    """Business days on a calendar with an explicit timezone."""

    @pytest.fixture
    def new_york(self):
        """Calculator in America/New_York with Independence Day."""
        calendar = CalendarSystem(timezone="America/New_York")
        return BusinessDateCalculator(calendar=calendar, holidays=[datetime(2024, 7, 4)])

    def test_utc_probe_uses_calendar_day(self, new_york):
        """02:00 UTC on July 5 is still July 4 in New York."""
        probe = datetime(2024, 7, 5, 2, 0, tzinfo=timezone.utc)
        assert new_york.is_holiday(probe) is True
        assert new_york.is_business_day(probe) is False

    def test_navigation_across_dst(self, new_york):
        """Stepping over the March DST change keeps 9am wall-clock time."""
        result = new_york.next_business_day(datetime(2024, 3, 8, 9))
        assert result.date().isoformat() == "2024-03-11"
        assert result.hour == 9

    def test_count_across_dst(self, new_york):
        """Counting over the DST weekend is unaffected."""
        assert new_york.business_days_between(datetime(2024, 3, 4), datetime(2024, 3, 15)) == 10

    def test_identity_results_are_localized(self, new_york):
        """Results keep the calendar timezone whether or not the search moved."""
        same_day = new_york.closest_business_day(TUESDAY)
        moved = new_york.closest_business_day(SATURDAY)
        unchanged = new_york.add_business_days(0, SATURDAY)

        assert same_day.tzinfo is not None
        assert unchanged.tzinfo is not None
        assert (same_day.day, same_day.hour) == (18, 9)
        assert sorted([moved, same_day, unchanged]) == [same_day, unchanged, moved]


class TestMidnightSkippedByDst:
    """America/Santiago has no 2024-09-08 00:00; clocks jump straight to 01:00."""

    @pytest.fixture
    def santiago(self):
        return BusinessDateCalculator(calendar=CalendarSystem(timezone="America/Santiago"))

    def test_count_includes_last_day(self, santiago):
        """Saturday to Tuesday holds Monday and Tuesday."""
        assert santiago.business_days_between(datetime(2024, 9, 7), datetime(2024, 9, 10)) == 2

    def test_summary_matches_calendar_day_count(self, santiago):
        report = santiago.summarize(datetime(2024, 9, 7), datetime(2024, 9, 10))
        span = DateCalculator(santiago.calendar).days_between(datetime(2024, 9, 7), datetime(2024, 9, 10))

        assert report.calendar_days == span == 4
        assert report.weekend_detail == {"saturday": 1, "sunday": 1}
        assert report.business_days == 2
