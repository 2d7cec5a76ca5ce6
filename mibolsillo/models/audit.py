"""
Audit Models for MiBolsillo

Every mutation of the movement store, every rejected form submission and
every persistence hiccup is described by an AuditEvent before it reaches
the structured log. The store swallows storage errors, so these records
are the only place such problems become visible.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """What happened."""
    # User actions
    MOVEMENT_ADDED = "movement_added"
    MOVEMENTS_CLEARED = "movements_cleared"
    FORM_VALIDATION_FAILED = "form_validation_failed"

    # Persistence
    STORE_HYDRATED = "store_hydrated"
    STORE_MIGRATED = "store_migrated"
    STORE_HYDRATION_FAILED = "store_hydration_failed"
    STORE_PERSIST_FAILED = "store_persist_failed"

    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """One structured log record about the user's money data."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # "movement", "store" or "form"
    entity_type: Optional[str] = None
    entity_id: Optional[UUID] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Flatten into JSON-friendly keyword arguments for structlog."""
        log_dict = self.model_dump(mode="json")
        if self.error_message is None:
            log_dict.pop("error_message")
        return log_dict


def _store_event(
    event_type: AuditEventType,
    key: str,
    description: str,
    severity: AuditSeverity = AuditSeverity.INFO,
    error_message: Optional[str] = None,
    **details: Any,
) -> AuditEvent:
    return AuditEvent(
        event_type=event_type,
        severity=severity,
        entity_type="store",
        description=description,
        error_message=error_message,
        details={"key": key, **details},
    )


class AuditEventBuilder:
    """
    Factory methods for the events the app emits.

    Usage:
        event = AuditEventBuilder.movement_added(movement_id, "EXPENSE", "2500.50")
        event = AuditEventBuilder.store_persist_failed(key, "disk full")
    """

    @staticmethod
    def movement_added(
        movement_id: UUID,
        movement_type: str,
        amount: str,
        category: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MOVEMENT_ADDED,
            entity_type="movement",
            entity_id=movement_id,
            description=f"{movement_type.capitalize()} of {amount} recorded",
            details={"type": movement_type, "amount": amount, "category": category},
            is_user_action=True,
        )

    @staticmethod
    def movements_cleared(removed: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MOVEMENTS_CLEARED,
            severity=AuditSeverity.WARNING,
            entity_type="store",
            description=f"All movements cleared ({removed} removed)",
            details={"removed": removed},
            is_user_action=True,
        )

    @staticmethod
    def form_validation_failed(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FORM_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="form",
            description=f"Movement form rejected ({len(issues)} issues)",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def store_hydrated(key: str, count: int, version: Optional[int]) -> AuditEvent:
        return _store_event(
            AuditEventType.STORE_HYDRATED,
            key,
            f"Loaded {count} movements",
            severity=AuditSeverity.DEBUG,
            count=count,
            version=version,
        )

    @staticmethod
    def store_migrated(key: str, from_version: int, to_version: int) -> AuditEvent:
        return _store_event(
            AuditEventType.STORE_MIGRATED,
            key,
            f"Stored state upgraded v{from_version} -> v{to_version}",
            from_version=from_version,
            to_version=to_version,
        )

    @staticmethod
    def store_hydration_failed(key: str, error_message: str) -> AuditEvent:
        return _store_event(
            AuditEventType.STORE_HYDRATION_FAILED,
            key,
            "Stored state unreadable, starting empty",
            severity=AuditSeverity.WARNING,
            error_message=error_message,
        )

    @staticmethod
    def store_persist_failed(key: str, error_message: str) -> AuditEvent:
        return _store_event(
            AuditEventType.STORE_PERSIST_FAILED,
            key,
            "Could not write movement state",
            severity=AuditSeverity.ERROR,
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
