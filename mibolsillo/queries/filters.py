"""
Filter engine for the movement list.

`apply_filter` is pure and keeps the original (newest first) order.
All active predicates must hold for a movement to be kept.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from mibolsillo.models.movement import (
    Movement,
    MovementFilter,
    MovementType,
    suggested_categories,
)


_ONE_DAY = timedelta(days=1)


def elapsed_days(timestamp: datetime, now: datetime) -> int:
    """Whole days between two instants, regardless of direction."""
    return int(abs(now - timestamp) // _ONE_DAY)


def matches_text(movement: Movement, text: str) -> bool:
    """Case-insensitive substring match over description and note."""
    needle = text.strip().lower()
    if not needle:
        return True
    haystack = f"{movement.description} {movement.note or ''}".lower()
    return needle in haystack


def matches(movement: Movement, spec: MovementFilter, now: datetime) -> bool:
    """Check one movement against every active predicate."""
    if not spec.type.matches(movement.type):
        return False

    if spec.category and (movement.category or "") != spec.category:
        return False

    if spec.text and not matches_text(movement, spec.text):
        return False

    if spec.days is not None:
        if movement.timestamp is None:
            return False
        if elapsed_days(movement.timestamp, now) > spec.days:
            return False

    return True


def apply_filter(
    movements: Iterable[Movement],
    spec: Optional[MovementFilter] = None,
    now: Optional[datetime] = None,
) -> list[Movement]:
    """
    Keep the movements matching `spec`, preserving order.

    Args:
        movements: Full collection
        spec: Filter specification; None or an empty filter keeps everything
        now: Reference instant for the day range (aware; defaults to now)
    """
    movements = list(movements)
    if spec is None or spec.is_empty:
        return movements

    now = now or datetime.now().astimezone()
    if now.tzinfo is None:
        now = now.astimezone()
    return [m for m in movements if matches(m, spec, now)]


def available_categories(
    movements: Iterable[Movement],
    movement_type: Optional[MovementType] = None,
) -> list[str]:
    """
    Categories to offer in the filter selector.

    Categories already used in the data come first (in order of
    appearance), followed by the suggested list. With no type, the
    suggestions of both types are included.
    """
    seen: dict[str, None] = {}
    for m in movements:
        if m.category:
            seen.setdefault(m.category, None)

    if movement_type is None:
        suggestions = (
            suggested_categories(MovementType.EXPENSE)
            + suggested_categories(MovementType.INCOME)
        )
    else:
        suggestions = suggested_categories(movement_type)

    for category in suggestions:
        seen.setdefault(category, None)

    return list(seen)
