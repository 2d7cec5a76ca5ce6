"""
Core Data Models for MiBolsillo

These models define the schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Be serializable for local persistence and logging
3. Keep the sign of an amount out of the number (direction lives in `type`)

A Movement is immutable once created. The only way to remove one is to
clear the whole collection.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class MovementType(str, Enum):
    """Direction of a movement. Amounts are always positive."""
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"

    @property
    def label(self) -> str:
        return "Ingreso" if self is MovementType.INCOME else "Egreso"


class TypeFilter(str, Enum):
    """Type selector of the movement filter."""
    ALL = "ALL"
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"

    @property
    def label(self) -> str:
        return {
            TypeFilter.ALL: "Todos",
            TypeFilter.INCOME: "Ingreso",
            TypeFilter.EXPENSE: "Egreso",
        }[self]

    def matches(self, movement_type: MovementType) -> bool:
        return self is TypeFilter.ALL or self.value == movement_type.value


# Suggested categories per type. The list is a suggestion: categories found
# in stored movements are offered too, and unknown values are accepted
# unless strict categories are enabled.
EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Alimentos",
    "Transporte",
    "Vivienda",
    "Servicios",
    "Salud",
    "Educación",
    "Ocio",
    "Otros",
)

INCOME_CATEGORIES: tuple[str, ...] = (
    "Sueldo",
    "Ventas",
    "Inversiones",
    "Devoluciones",
    "Otros",
)


def suggested_categories(movement_type: MovementType) -> tuple[str, ...]:
    """Suggested category list for a movement type."""
    if movement_type is MovementType.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


# =============================================================================
# CORE MOVEMENT MODEL
# =============================================================================

class MovementInput(BaseModel):
    """
    Data needed to record a new movement.

    The store turns this into a Movement by assigning id and timestamp.
    It does not run business validation; that is the form's job.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    type: MovementType
    description: str = Field(
        ...,
        min_length=1,
        description="What the movement was"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Positive amount in ARS"
    )
    category: Optional[str] = None
    note: Optional[str] = None

    @field_validator('category', 'note', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return _blank_to_none(v)


class Movement(BaseModel):
    """
    A single recorded income or expense entry.

    `timestamp` is always stored in UTC. It can only be None for legacy
    records whose stored date could not be parsed; such movements still
    count in totals but never land in a day bucket.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique movement ID"
    )
    type: MovementType
    category: Optional[str] = None
    description: str = Field(
        ...,
        min_length=1,
    )
    note: Optional[str] = None
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Positive amount; direction is carried by type"
    )
    timestamp: Optional[datetime] = Field(
        default_factory=utc_now,
        description="When the movement was recorded (UTC)"
    )

    @field_validator('category', 'note', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    @field_validator('timestamp', mode='before')
    @classmethod
    def parse_timestamp(cls, v):
        """Unparseable textual timestamps become None instead of failing the record."""
        if isinstance(v, str):
            text = v.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                return datetime.fromisoformat(text)
            except ValueError:
                return None
        return v

    @field_validator('timestamp')
    @classmethod
    def normalize_timestamp(cls, v: Optional[datetime]) -> Optional[datetime]:
        # Naive values are taken as UTC
        if v is None:
            return None
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_serializer('timestamp')
    def serialize_timestamp(self, v: Optional[datetime]) -> Optional[str]:
        return v.strftime(TIMESTAMP_FORMAT) if v is not None else None

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by the type."""
        return self.amount if self.type is MovementType.INCOME else -self.amount

    def local_date(self, tz=None) -> Optional[date]:
        """Calendar day of the movement in `tz` (local zone if None)."""
        if self.timestamp is None:
            return None
        return self.timestamp.astimezone(tz).date()


# =============================================================================
# DERIVED VIEW MODELS
# =============================================================================

class MovementFilter(BaseModel):
    """
    Filter criteria for the movement list.

    Every predicate is optional; the default filter keeps everything.
    """

    type: TypeFilter = TypeFilter.ALL
    category: Optional[str] = Field(
        default=None,
        description="Exact category match"
    )
    text: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring over description and note"
    )
    days: Optional[int] = Field(
        default=None,
        ge=0,
        description="Keep movements at most this many days old (None = all)"
    )

    @field_validator('category', 'text', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    @property
    def is_empty(self) -> bool:
        return (
            self.type is TypeFilter.ALL
            and self.category is None
            and self.text is None
            and self.days is None
        )


class MovementSummary(BaseModel):
    """Totals over a collection of movements."""

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    net: Decimal = Decimal("0")
    count: int = Field(default=0, ge=0)


class DailyTotals(BaseModel):
    """One day bucket of the trend series."""

    day: date
    label: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


# =============================================================================
# FORM & VALIDATION MODELS
# =============================================================================

class MovementForm(BaseModel):
    """Raw values as typed into the add-movement form."""

    type: MovementType = MovementType.EXPENSE
    category: str = ""
    description: str = ""
    amount: str = ""
    note: str = ""


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="User-facing description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class FormValidationResult(BaseModel):
    """
    Result of validating the add-movement form.

    When valid, `movement_input` holds the typed input for the store.
    """

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)
    movement_input: Optional[MovementInput] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def first_error(self) -> Optional[str]:
        """Message of the first blocking issue, shown as the alert."""
        for issue in self.issues:
            if issue.severity == "error":
                return issue.message
        return None
