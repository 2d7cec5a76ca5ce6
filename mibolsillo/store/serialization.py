"""
Persisted State Serialization

The store writes its whole state as one JSON document:

    {"version": 1, "state": {"movements": [ ...flat movement records... ]}}

Every change to this layout must bump SCHEMA_VERSION and register a
migration from the previous version in MIGRATIONS. Loading walks the
migrations one version at a time until the current layout is reached.

Version 0 is the layout written by the original browser application
(Spanish field names, INGRESO/EGRESO types).
"""

import json
from typing import Callable, NamedTuple

from pydantic import BaseModel, Field, ValidationError

from mibolsillo.models.movement import Movement


SCHEMA_VERSION = 1


class StateDecodeError(Exception):
    """Stored state could not be decoded into movements."""
    pass


class SchemaVersionError(StateDecodeError):
    """Stored state was written by a newer, unknown schema version."""

    def __init__(self, version: int):
        self.version = version
        super().__init__(
            f"Stored state has schema version {version}, "
            f"newest supported is {SCHEMA_VERSION}"
        )


class PersistedState(BaseModel):
    """The `state` object of the current schema version."""

    movements: list[Movement] = Field(default_factory=list)


class LoadedState(NamedTuple):
    movements: list[Movement]
    version: int

    @property
    def migrated(self) -> bool:
        return self.version < SCHEMA_VERSION


# =============================================================================
# MIGRATIONS
# =============================================================================

_LEGACY_TYPES = {
    "INGRESO": "INCOME",
    "EGRESO": "EXPENSE",
}


def _migrate_v0_to_v1(state: dict) -> dict:
    legacy = state.get("movimientos") or []
    if not isinstance(legacy, list):
        raise StateDecodeError("Legacy state: 'movimientos' is not a list")

    movements = []
    for item in legacy:
        if not isinstance(item, dict):
            raise StateDecodeError("Legacy state: movement is not an object")
        tipo = item.get("tipo")
        movements.append({
            "id": item.get("id"),
            "type": _LEGACY_TYPES.get(tipo, tipo),
            "category": item.get("categoria"),
            "description": item.get("descripcion"),
            "note": item.get("nota"),
            "amount": item.get("monto"),
            "timestamp": item.get("fecha"),
        })
    return {"movements": movements}


MIGRATIONS: dict[int, Callable[[dict], dict]] = {
    0: _migrate_v0_to_v1,
}


# =============================================================================
# ENCODE / DECODE
# =============================================================================

def dump_state(movements: list[Movement]) -> str:
    """Serialize movements into the current versioned envelope."""
    envelope = {
        "version": SCHEMA_VERSION,
        "state": {
            "movements": [m.model_dump(mode="json") for m in movements],
        },
    }
    return json.dumps(envelope, ensure_ascii=False)


def load_state(raw: str) -> LoadedState:
    """
    Decode a stored envelope, migrating it to the current version.

    Args:
        raw: The stored JSON text

    Returns:
        LoadedState with the movements and the version found in storage

    Raises:
        SchemaVersionError: If the envelope is newer than this code
        StateDecodeError: If the envelope or any movement is malformed
    """
    try:
        envelope = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StateDecodeError(f"Stored state is not valid JSON: {e}") from e

    if not isinstance(envelope, dict):
        raise StateDecodeError("Stored state is not an object")

    # Envelopes without a version tag predate versioning
    version = envelope.get("version", 0)
    if isinstance(version, bool) or not isinstance(version, int) or version < 0:
        raise StateDecodeError(f"Invalid schema version: {version!r}")
    if version > SCHEMA_VERSION:
        raise SchemaVersionError(version)

    state = envelope.get("state")
    if not isinstance(state, dict):
        raise StateDecodeError("Stored state has no 'state' object")

    found_version = version
    while version < SCHEMA_VERSION:
        state = MIGRATIONS[version](state)
        version += 1

    try:
        persisted = PersistedState.model_validate(state)
    except ValidationError as e:
        raise StateDecodeError(f"Stored movements are invalid: {e}") from e

    return LoadedState(movements=persisted.movements, version=found_version)
