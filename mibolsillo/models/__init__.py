"""
Data Models Package

This package contains all Pydantic models used in MiBolsillo.
All data flowing through the system must conform to these schemas.
"""

from mibolsillo.models.movement import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    DailyTotals,
    FormValidationResult,
    Movement,
    MovementFilter,
    MovementForm,
    MovementInput,
    MovementSummary,
    MovementType,
    TypeFilter,
    ValidationIssue,
    suggested_categories,
    utc_now,
)
from mibolsillo.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Movement models
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "DailyTotals",
    "FormValidationResult",
    "Movement",
    "MovementFilter",
    "MovementForm",
    "MovementInput",
    "MovementSummary",
    "MovementType",
    "TypeFilter",
    "ValidationIssue",
    "suggested_categories",
    "utc_now",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
