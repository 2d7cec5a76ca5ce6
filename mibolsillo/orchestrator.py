"""
Main Orchestrator for MiBolsillo

This module ties together all the components and defines the flows the
screens use:
1. Movements (form → validate → store → persist; list with filters)
2. Dashboard (totals and the daily trend series)

The store is created once here and passed explicitly to every flow.
No screen reaches for global state.

The orchestrator enforces the boundaries:
- Nothing reaches the store without passing form validation
- Every rejected submission is audited
"""

from datetime import datetime
from typing import Optional

from mibolsillo.audit import AuditLogger, configure_logging
from mibolsillo.config import get_settings
from mibolsillo.models.movement import (
    DailyTotals,
    FormValidationResult,
    Movement,
    MovementFilter,
    MovementForm,
    MovementSummary,
    MovementType,
)
from mibolsillo.queries import (
    apply_filter,
    available_categories,
    daily_series,
    summarize,
)
from mibolsillo.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
)
from mibolsillo.store import MovementStore
from mibolsillo.validation import MovementFormValidator


class MovementFlow:
    """
    Orchestrates the movements screen.

    Flow:
    1. Submit → validate the raw form
    2. Reject → audit, collection unchanged
    3. Accept → store.add (assigns id and time, persists)
    """

    def __init__(
        self,
        store: MovementStore,
        validator: Optional[MovementFormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._validator = validator or MovementFormValidator()
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def store(self) -> MovementStore:
        return self._store

    def submit(self, form: MovementForm) -> tuple[Optional[Movement], FormValidationResult]:
        """
        Validate a submitted form and record the movement if valid.

        Returns:
            (movement, validation); movement is None when rejected
        """
        validation = self._validator.validate(form)

        if not validation.is_valid:
            self._audit_logger.log_form_rejected(
                [issue.model_dump() for issue in validation.issues]
            )
            return None, validation

        movement = self._store.add(validation.movement_input)
        return movement, validation

    def clear_all(self) -> int:
        """Delete every movement. Returns how many were removed."""
        return self._store.clear_all()

    def list_movements(
        self,
        spec: Optional[MovementFilter] = None,
        now: Optional[datetime] = None,
    ) -> list[Movement]:
        """Movements matching the filter, newest first."""
        return apply_filter(self._store.movements, spec, now=now)

    def summary(self) -> MovementSummary:
        """Totals over the whole collection (filters do not apply)."""
        return summarize(self._store.movements)

    def categories(self, movement_type: Optional[MovementType] = None) -> list[str]:
        """Categories to offer in the filter selector."""
        return available_categories(self._store.movements, movement_type)

    def validation_summary(self, validation: FormValidationResult) -> str:
        return self._validator.get_user_friendly_summary(validation)


class DashboardFlow:
    """
    Orchestrates the dashboard screen: totals plus the daily trend.
    """

    def __init__(self, store: MovementStore, trend_days: Optional[int] = None):
        self._store = store
        self._trend_days = trend_days or get_settings().app.trend_days

    @property
    def trend_days(self) -> int:
        return self._trend_days

    def summary(self) -> MovementSummary:
        return summarize(self._store.movements)

    def weekly_series(self, now: Optional[datetime] = None) -> list[DailyTotals]:
        """Income/expense per day, oldest first, ending today."""
        return daily_series(self._store.movements, days=self._trend_days, now=now)


def create_storage(use_storage: bool = True) -> KeyValueStorageInterface:
    """
    Build the key-value backend.

    Falls back to in-memory storage when the file location is unusable.
    """
    if not use_storage:
        return InMemoryStorage()

    storage_settings = get_settings().storage
    try:
        storage_settings.path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        AuditLogger().log_error(
            error_type="storage_unavailable",
            error_message=str(e),
            details={"path": str(storage_settings.path)},
        )
        return InMemoryStorage()

    return JsonFileStorage(storage_settings.path)


def create_app_components(
    use_storage: bool = True,
) -> tuple[MovementFlow, DashboardFlow, MovementStore]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to persist to the JSON file.
                    Set to False for testing without disk access.

    Returns:
        (movement_flow, dashboard_flow, store)
    """
    settings = get_settings()
    configure_logging(settings.app.effective_log_level)

    audit_logger = AuditLogger()
    storage = create_storage(use_storage)

    store = MovementStore(
        storage=storage,
        key=settings.storage.key,
        audit_logger=audit_logger,
    )

    movement_flow = MovementFlow(
        store=store,
        validator=MovementFormValidator(settings.app.strict_categories),
        audit_logger=audit_logger,
    )
    dashboard_flow = DashboardFlow(
        store=store,
        trend_days=settings.app.trend_days,
    )

    return movement_flow, dashboard_flow, store
