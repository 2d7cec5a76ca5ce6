"""Form validation package."""

from mibolsillo.validation.validator import (
    AMOUNT_HINT,
    MovementFormValidator,
    parse_amount,
)

__all__ = ["AMOUNT_HINT", "MovementFormValidator", "parse_amount"]
