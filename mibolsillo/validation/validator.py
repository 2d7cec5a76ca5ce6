"""
Add-Movement Form Validation

Validation happens only here, at the form boundary. The store accepts
any well-typed MovementInput, so everything a user can get wrong must be
caught before the store is called.

Checks run in a fixed order and the first error is what the user sees
as the blocking alert:
1. Category chosen
2. Description not blank
3. Amount parseable and positive

Amounts are typed the Argentine way: "." groups thousands and "," is
the decimal separator ("2.500,50").
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import ValidationError

from mibolsillo.config import get_settings
from mibolsillo.models.movement import (
    FormValidationResult,
    MovementForm,
    MovementInput,
    ValidationIssue,
    suggested_categories,
)


AMOUNT_HINT = "Monto inválido. Ej: 2500 o 2.500,50"


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse an es-AR formatted amount.

    Returns None if the text is not a finite number.
    """
    if text is None:
        return None
    cleaned = text.strip().replace(" ", "").replace(".", "").replace(",", ".")
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


class MovementFormValidator:
    """
    Validates the add-movement form and builds the store input.
    """

    def __init__(self, strict_categories: Optional[bool] = None):
        """
        Initialize validator.

        Args:
            strict_categories: Reject categories outside the suggested
                list. None reads the application setting.
        """
        if strict_categories is None:
            strict_categories = get_settings().app.strict_categories
        self._strict_categories = strict_categories

    def _check_fields(self, form: MovementForm) -> tuple[list[ValidationIssue], Optional[Decimal]]:
        issues = []

        category = form.category.strip()
        if not category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Elegí una categoría",
            ))
        elif self._strict_categories and category not in suggested_categories(form.type):
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message=f"Categoría desconocida para {form.type.label.lower()}: {category}",
            ))

        if not form.description.strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Falta la descripción",
            ))

        amount = parse_amount(form.amount)
        if amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_format" if form.amount.strip() else "missing",
                message=AMOUNT_HINT,
            ))
        elif amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message=AMOUNT_HINT,
            ))
            amount = None

        return issues, amount

    def validate(self, form: MovementForm) -> FormValidationResult:
        """
        Validate a submitted form.

        Returns:
            FormValidationResult; when valid it carries the MovementInput
        """
        issues, amount = self._check_fields(form)

        if issues:
            return FormValidationResult(is_valid=False, issues=issues)

        try:
            movement_input = MovementInput(
                type=form.type,
                category=form.category,
                description=form.description,
                amount=amount,
                note=form.note,
            )
        except ValidationError as e:
            # Type errors the field checks above do not cover
            for error in e.errors():
                field = ".".join(str(loc) for loc in error.get("loc", ())) or "form"
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="invalid_value",
                    message=f"{field}: {error.get('msg', 'valor inválido')}",
                ))
            return FormValidationResult(is_valid=False, issues=issues)

        return FormValidationResult(is_valid=True, movement_input=movement_input)

    def get_user_friendly_summary(self, result: FormValidationResult) -> str:
        """All blocking messages, one per line."""
        if result.is_valid:
            return "Movimiento listo para guardar."
        return "\n".join(f"• {issue.message}" for issue in result.issues)
