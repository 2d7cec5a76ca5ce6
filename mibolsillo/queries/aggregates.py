"""
Aggregations over the movement collection.

Pure functions, recomputed on every read. Totals use Decimal so the
dashboard never shows float artefacts like 499.4999999.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from mibolsillo.models.movement import (
    DailyTotals,
    Movement,
    MovementSummary,
    MovementType,
)


# Indexed by Python weekday() (Monday == 0)
DAY_LABELS: tuple[str, ...] = ("Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom")


def total_by_type(movements: Iterable[Movement], movement_type: MovementType) -> Decimal:
    """Sum of amounts for one movement type."""
    return sum(
        (m.amount for m in movements if m.type is movement_type),
        Decimal("0"),
    )


def net_balance(movements: Iterable[Movement]) -> Decimal:
    """Total income minus total expense."""
    movements = list(movements)
    return (
        total_by_type(movements, MovementType.INCOME)
        - total_by_type(movements, MovementType.EXPENSE)
    )


def summarize(movements: Iterable[Movement]) -> MovementSummary:
    """Income, expense, net and count in one pass over the data."""
    income = Decimal("0")
    expense = Decimal("0")
    count = 0
    for m in movements:
        count += 1
        if m.type is MovementType.INCOME:
            income += m.amount
        else:
            expense += m.amount

    return MovementSummary(
        income=income,
        expense=expense,
        net=income - expense,
        count=count,
    )


def day_label(day) -> str:
    """Short Spanish weekday name for a date."""
    return DAY_LABELS[day.weekday()]


def daily_series(
    movements: Iterable[Movement],
    days: int = 7,
    now: Optional[datetime] = None,
) -> list[DailyTotals]:
    """
    Per-day income and expense totals for the last `days` calendar days.

    Args:
        movements: Collection to bucket
        days: Window length; the last bucket is today
        now: Reference instant. Its timezone defines the calendar day;
             defaults to the local time of the machine.

    Returns:
        Exactly `days` entries, oldest first. Movements without a
        timestamp are left out of every bucket.
    """
    if days < 1:
        raise ValueError("days must be at least 1")

    now = now or datetime.now().astimezone()
    tz = now.tzinfo
    today = now.date()

    buckets = {}
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        buckets[day] = DailyTotals(day=day, label=day_label(day))

    for m in movements:
        day = m.local_date(tz)
        bucket = buckets.get(day) if day is not None else None
        if bucket is None:
            continue
        if m.type is MovementType.INCOME:
            bucket.income += m.amount
        else:
            bucket.expense += m.amount

    return list(buckets.values())
