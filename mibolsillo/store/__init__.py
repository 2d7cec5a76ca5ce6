"""Movement store package: the persisted collection and its on-disk format."""

from mibolsillo.store.movement_store import MovementStore
from mibolsillo.store.serialization import (
    SCHEMA_VERSION,
    LoadedState,
    SchemaVersionError,
    StateDecodeError,
    dump_state,
    load_state,
)

__all__ = [
    "SCHEMA_VERSION",
    "LoadedState",
    "MovementStore",
    "SchemaVersionError",
    "StateDecodeError",
    "dump_state",
    "load_state",
]
