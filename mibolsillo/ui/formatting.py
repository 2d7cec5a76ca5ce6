"""Text formatting for the Streamlit screens (es-AR conventions)."""

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from mibolsillo.models.movement import Movement, MovementType


Number = Union[Decimal, float, int]


def format_money(value: Number, symbol: str = "$") -> str:
    """
    Format an amount as "$ 1.234,56".

    Negative values are prefixed with "-".
    """
    value = Decimal(str(value))
    text = f"{abs(value):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    if value < 0:
        return f"-{symbol} {text}"
    return f"{symbol} {text}"


def format_timestamp(timestamp: Optional[datetime]) -> str:
    """Local date and time as dd/mm/yyyy, HH:MM:SS."""
    if timestamp is None:
        return "Fecha desconocida"
    return timestamp.astimezone().strftime("%d/%m/%Y, %H:%M:%S")


def movement_headline(movement: Movement, symbol: str = "$") -> str:
    """One-line summary: sign, amount, description and category."""
    sign = "−" if movement.type is MovementType.EXPENSE else "+"
    category = movement.category or "Sin categoría"
    return (
        f"{sign} {format_money(movement.amount, symbol)} • "
        f"{movement.description} [{category}]"
    )


def movement_detail(movement: Movement) -> str:
    """Secondary line: timestamp and note, if any."""
    detail = format_timestamp(movement.timestamp)
    if movement.note:
        detail += f" • {movement.note}"
    return detail


def range_label(days: Optional[int]) -> str:
    if days is None:
        return "Todos"
    return f"Últimos {days} días"
