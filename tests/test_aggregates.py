"""Tests for totals, net balance and the daily trend series."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from mibolsillo.models.movement import Movement, MovementType
from mibolsillo.queries.aggregates import (
    DAY_LABELS,
    daily_series,
    day_label,
    net_balance,
    summarize,
    total_by_type,
)


INCOME = MovementType.INCOME
EXPENSE = MovementType.EXPENSE


class TestTotals:
    def test_scenario_income_and_expense(self, make_movement):
        movements = [
            make_movement(EXPENSE, "2500.50", "Super chino"),
            make_movement(INCOME, "3000", "Sueldo"),
        ]

        assert total_by_type(movements, INCOME) == Decimal("3000.00")
        assert total_by_type(movements, EXPENSE) == Decimal("2500.50")
        assert net_balance(movements) == Decimal("499.50")

    def test_empty_collection(self):
        assert total_by_type([], INCOME) == Decimal("0")
        assert net_balance([]) == Decimal("0")
        summary = summarize([])
        assert summary.count == 0
        assert summary.net == Decimal("0")

    def test_net_equals_income_minus_expense(self, make_movement):
        movements = [
            make_movement(INCOME, "0.10"),
            make_movement(INCOME, "0.20"),
            make_movement(EXPENSE, "0.30"),
            make_movement(EXPENSE, "12.34"),
            make_movement(INCOME, "99.99"),
        ]

        assert net_balance(movements) == (
            total_by_type(movements, INCOME) - total_by_type(movements, EXPENSE)
        )
        assert net_balance(movements) == Decimal("87.65")

    def test_summarize_matches_individual_totals(self, make_movement):
        movements = [
            make_movement(INCOME, "3000"),
            make_movement(EXPENSE, "2500.50"),
            make_movement(EXPENSE, "100"),
        ]

        summary = summarize(movements)

        assert summary.income == total_by_type(movements, INCOME)
        assert summary.expense == Decimal("2600.50")
        assert summary.net == net_balance(movements)
        assert summary.count == 3

    def test_totals_accept_generators(self, make_movement):
        movements = [make_movement(INCOME, "5"), make_movement(EXPENSE, "2")]
        assert net_balance(m for m in movements) == Decimal("3")


class TestDayLabels:
    def test_known_days(self):
        assert day_label(date(2026, 10, 18)) == "Dom"
        assert day_label(date(2026, 10, 19)) == "Lun"
        assert day_label(date(2026, 10, 24)) == "Sáb"

    def test_seven_labels(self):
        assert len(DAY_LABELS) == 7


class TestDailySeries:
    def test_always_seven_entries_even_when_empty(self, now):
        series = daily_series([], now=now)

        assert len(series) == 7
        assert series[-1].day == now.date()
        assert series[0].day == now.date() - timedelta(days=6)
        assert all(d.income == 0 and d.expense == 0 for d in series)

    def test_oldest_first(self, now):
        days = [d.day for d in daily_series([], now=now)]
        assert days == sorted(days)

    def test_labels_follow_weekdays(self, now):
        labels = [d.label for d in daily_series([], now=now)]
        # 2026-10-13 is a Tuesday, 2026-10-19 a Monday
        assert labels == ["Mar", "Mié", "Jue", "Vie", "Sáb", "Dom", "Lun"]

    def test_bucketing(self, now, make_movement):
        movements = [
            make_movement(INCOME, "3000", days_ago=0),
            make_movement(EXPENSE, "2500.50", days_ago=0),
            make_movement(EXPENSE, "100", days_ago=0.1),
            make_movement(EXPENSE, "40", days_ago=2),
            make_movement(INCOME, "999", days_ago=10),
        ]

        series = daily_series(movements, now=now)

        today = series[-1]
        assert today.income == Decimal("3000")
        assert today.expense == Decimal("2600.50")
        assert series[-3].expense == Decimal("40")
        assert series[-3].income == Decimal("0")
        assert sum(d.income for d in series) == Decimal("3000")

    def test_local_calendar_day(self, make_movement):
        buenos_aires = timezone(timedelta(hours=-3))
        now = datetime(2026, 10, 19, 10, 0, tzinfo=buenos_aires)
        # 02:00 UTC on the 19th is 23:00 on the 18th in Buenos Aires
        late_night = Movement(
            type=EXPENSE,
            description="Delivery",
            amount=Decimal("50"),
            timestamp=datetime(2026, 10, 19, 2, 0, tzinfo=timezone.utc),
        )

        series = daily_series([late_night], now=now)

        assert series[-1].expense == Decimal("0")
        assert series[-2].day == date(2026, 10, 18)
        assert series[-2].expense == Decimal("50")

    def test_movement_without_timestamp_is_not_bucketed(self, now):
        undated = Movement(
            type=INCOME,
            description="Legacy",
            amount=Decimal("10"),
            timestamp="garbage",
        )

        series = daily_series([undated], now=now)

        assert all(d.income == 0 for d in series)
        assert total_by_type([undated], INCOME) == Decimal("10")

    def test_custom_window(self, now):
        assert len(daily_series([], days=14, now=now)) == 14

    def test_invalid_window(self, now):
        with pytest.raises(ValueError):
            daily_series([], days=0, now=now)
