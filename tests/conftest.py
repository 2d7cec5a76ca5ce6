"""Shared fixtures for MiBolsillo tests."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from mibolsillo.models.movement import Movement, MovementType
from mibolsillo.services.storage import InMemoryStorage


# Monday 2026-10-19, noon UTC
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def make_movement():
    """Build a Movement `days_ago` days before NOW."""

    def _make(
        movement_type: MovementType = MovementType.EXPENSE,
        amount: str = "100",
        description: str = "Movimiento",
        category=None,
        note=None,
        days_ago: float = 0,
    ) -> Movement:
        return Movement(
            type=movement_type,
            amount=Decimal(amount),
            description=description,
            category=category,
            note=note,
            timestamp=NOW - timedelta(days=days_ago),
        )

    return _make
