"""
Movement Store

The single owner of the movement collection.

LIFECYCLE:
1. Hydrate: read the fixed key from storage, migrate if needed
2. Mutate: add / clear_all change the in-memory list
3. Flush: every mutation writes the whole state back under the same key

The store never rejects well-typed input and never raises on storage
problems. Unreadable state hydrates as empty, and its raw text is copied
under `backup_key` first so the next flush cannot destroy it. Failed
writes are logged and the in-memory collection stays authoritative for
the session.
"""

from typing import Callable, Optional

from mibolsillo.audit import AuditLogger
from mibolsillo.config import DEFAULT_STORAGE_KEY
from mibolsillo.models.movement import Movement, MovementInput, utc_now
from mibolsillo.services.storage import KeyValueStorageInterface, StorageError
from mibolsillo.store.serialization import (
    SCHEMA_VERSION,
    StateDecodeError,
    dump_state,
    load_state,
)


class MovementStore:
    """
    Persisted collection of movements, newest first.

    Consumers receive the store explicitly and read `movements`;
    all derivations (totals, filters, series) happen outside it.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: str = DEFAULT_STORAGE_KEY,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable = utc_now,
        hydrate: bool = True,
    ):
        """
        Initialize the store.

        Args:
            storage: Key-value backend holding the persisted state
            key: Fixed key the state is stored under
            audit_logger: Where mutations and failures are logged
            clock: Returns the current aware datetime (overridable in tests)
            hydrate: Load the persisted state right away
        """
        self._storage = storage
        self._key = key
        self._audit_logger = audit_logger or AuditLogger()
        self._clock = clock
        self._movements: list[Movement] = []

        if hydrate:
            self.hydrate()

    @property
    def key(self) -> str:
        return self._key

    @property
    def backup_key(self) -> str:
        """Where undecodable state is copied before it can be overwritten."""
        return f"{self._key}.unreadable"

    @property
    def movements(self) -> tuple[Movement, ...]:
        """Current collection, newest first."""
        return tuple(self._movements)

    def __len__(self) -> int:
        return len(self._movements)

    def hydrate(self) -> int:
        """
        Replace the in-memory collection with the persisted one.

        Returns the number of movements loaded. Any read or decode
        problem results in an empty collection.
        """
        self._movements = []

        try:
            raw = self._storage.get_item(self._key)
        except StorageError as e:
            self._audit_logger.log_hydration_failed(self._key, str(e))
            return 0

        if raw is None:
            self._audit_logger.log_store_hydrated(self._key, 0, None)
            return 0

        try:
            loaded = load_state(raw)
        except StateDecodeError as e:
            self._audit_logger.log_hydration_failed(self._key, str(e))
            self._keep_unreadable(raw)
            return 0

        self._movements = list(loaded.movements)

        if loaded.migrated:
            self._audit_logger.log_store_migrated(self._key, loaded.version, SCHEMA_VERSION)
            self._flush()

        self._audit_logger.log_store_hydrated(self._key, len(self._movements), loaded.version)
        return len(self._movements)

    def add(self, movement_input: MovementInput) -> Movement:
        """
        Record a new movement and put it first.

        Assigns a fresh id and the current time; trims the description.
        """
        movement = Movement(
            type=movement_input.type,
            category=movement_input.category,
            description=movement_input.description.strip(),
            note=movement_input.note,
            amount=movement_input.amount,
            timestamp=self._clock(),
        )
        self._movements.insert(0, movement)
        self._flush()

        self._audit_logger.log_movement_added(
            movement_id=movement.id,
            movement_type=movement.type.value,
            amount=str(movement.amount),
            category=movement.category,
        )
        return movement

    def clear_all(self) -> int:
        """Remove every movement. Returns how many were removed."""
        removed = len(self._movements)
        self._movements = []
        self._flush()

        self._audit_logger.log_movements_cleared(removed)
        return removed

    def _keep_unreadable(self, raw: str) -> None:
        try:
            self._storage.set_item(self.backup_key, raw)
        except StorageError as e:
            self._audit_logger.log_persist_failed(self.backup_key, str(e))

    def _flush(self) -> None:
        try:
            self._storage.set_item(self._key, dump_state(self._movements))
        except StorageError as e:
            self._audit_logger.log_persist_failed(self._key, str(e))
