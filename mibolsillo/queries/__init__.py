"""Derived views over the movement collection: aggregates and filters."""

from mibolsillo.queries.aggregates import (
    DAY_LABELS,
    daily_series,
    day_label,
    net_balance,
    summarize,
    total_by_type,
)
from mibolsillo.queries.filters import (
    apply_filter,
    available_categories,
    elapsed_days,
    matches_text,
)

__all__ = [
    "DAY_LABELS",
    "apply_filter",
    "available_categories",
    "daily_series",
    "day_label",
    "elapsed_days",
    "matches_text",
    "net_balance",
    "summarize",
    "total_by_type",
]
