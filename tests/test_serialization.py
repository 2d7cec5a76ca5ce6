"""Tests for the versioned state envelope and its migrations."""

import json
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from mibolsillo.models.movement import MovementType
from mibolsillo.store.serialization import (
    MIGRATIONS,
    SCHEMA_VERSION,
    SchemaVersionError,
    StateDecodeError,
    dump_state,
    load_state,
)


LEGACY_ID = "9b2f6b4e-2f0a-4c57-8d3e-0b1f0c7a9e11"


def legacy_envelope(**overrides) -> str:
    item = {
        "id": LEGACY_ID,
        "tipo": "INGRESO",
        "categoria": "Sueldo",
        "descripcion": "Sueldo octubre",
        "nota": "banco",
        "monto": 3000,
        "fecha": "2026-10-01T10:00:00.000Z",
    }
    item.update(overrides)
    return json.dumps({"state": {"movimientos": [item]}, "version": 0})


class TestDumpState:
    def test_envelope_layout(self, make_movement):
        movement = make_movement(category="Alimentos", description="Super chino", amount="2500.50")

        envelope = json.loads(dump_state([movement]))

        assert envelope["version"] == SCHEMA_VERSION
        record = envelope["state"]["movements"][0]
        assert set(record) == {"id", "type", "category", "description", "note", "amount", "timestamp"}
        assert record["type"] == "EXPENSE"
        assert record["timestamp"].endswith("Z")

    def test_dump_then_load_preserves_movements(self, make_movement):
        movements = [
            make_movement(MovementType.INCOME, "3000", "Sueldo", days_ago=1),
            make_movement(MovementType.EXPENSE, "2500.50", "Super chino", note="efectivo"),
        ]

        loaded = load_state(dump_state(movements))

        assert loaded.movements == movements
        assert loaded.version == SCHEMA_VERSION
        assert not loaded.migrated


class TestLoadState:
    def test_invalid_json(self):
        with pytest.raises(StateDecodeError):
            load_state("{")

    def test_not_an_object(self):
        with pytest.raises(StateDecodeError):
            load_state("[]")

    def test_missing_state(self):
        with pytest.raises(StateDecodeError):
            load_state(json.dumps({"version": 1}))

    def test_invalid_version(self):
        with pytest.raises(StateDecodeError):
            load_state(json.dumps({"version": "1", "state": {}}))

    def test_newer_version(self):
        with pytest.raises(SchemaVersionError) as exc_info:
            load_state(json.dumps({"version": SCHEMA_VERSION + 1, "state": {}}))
        assert exc_info.value.version == SCHEMA_VERSION + 1

    def test_unknown_type_is_rejected(self):
        raw = json.dumps({
            "version": 1,
            "state": {"movements": [{"type": "TRANSFER", "description": "x", "amount": "1"}]},
        })
        with pytest.raises(StateDecodeError):
            load_state(raw)

    def test_empty_state(self):
        loaded = load_state(json.dumps({"version": 1, "state": {}}))
        assert loaded.movements == []


class TestLegacyMigration:
    def test_every_older_version_has_a_migration(self):
        assert set(MIGRATIONS) == set(range(SCHEMA_VERSION))

    def test_v0_fields_are_mapped(self):
        loaded = load_state(legacy_envelope())

        assert loaded.version == 0
        assert loaded.migrated
        movement = loaded.movements[0]
        assert movement.id == UUID(LEGACY_ID)
        assert movement.type is MovementType.INCOME
        assert movement.category == "Sueldo"
        assert movement.description == "Sueldo octubre"
        assert movement.note == "banco"
        assert movement.amount == Decimal("3000")
        assert movement.timestamp == datetime(2026, 10, 1, 10, 0, tzinfo=timezone.utc)

    def test_v0_expense_with_float_amount(self):
        loaded = load_state(legacy_envelope(tipo="EGRESO", monto=2500.5))
        movement = loaded.movements[0]
        assert movement.type is MovementType.EXPENSE
        assert movement.amount == Decimal("2500.50")

    def test_v0_without_optional_fields(self):
        raw = json.dumps({
            "state": {"movimientos": [{
                "id": LEGACY_ID,
                "tipo": "EGRESO",
                "descripcion": "Taxi",
                "monto": 1200,
                "fecha": "2026-10-01T10:00:00.000Z",
            }]},
            "version": 0,
        })
        movement = load_state(raw).movements[0]
        assert movement.category is None
        assert movement.note is None

    def test_v0_unparseable_date_keeps_movement(self):
        movement = load_state(legacy_envelope(fecha="not-a-date")).movements[0]
        assert movement.timestamp is None
        assert movement.amount == Decimal("3000")

    def test_unversioned_envelope_is_treated_as_v0(self):
        raw = json.dumps({"state": {"movimientos": []}})
        loaded = load_state(raw)
        assert loaded.version == 0
        assert loaded.movements == []

    def test_v0_with_malformed_item(self):
        raw = json.dumps({"state": {"movimientos": ["oops"]}, "version": 0})
        with pytest.raises(StateDecodeError):
            load_state(raw)
