"""Console formatting for expense listings."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Final

from .schemas import ExpenseRecord

SEPARATOR: Final[str] = "-" * 50
COLUMN_JOINER: Final[str] = " | "


def count_line(count: int) -> str:
    if count == 0:
        return "There are no expenses"
    if count == 1:
        return "There is 1 expense."
    return f"There are {count} expenses."


def format_amount(amount: Decimal) -> str:
    return f"{amount:.2f}"


def format_row(expense: ExpenseRecord) -> str:
    columns = [
        str(expense.id).rjust(3),
        expense.created_on.isoformat().rjust(10),
        format_amount(expense.amount).rjust(12),
        expense.memo,
    ]
    return COLUMN_JOINER.join(columns)


def total_line(expenses: Sequence[ExpenseRecord]) -> str:
    total = sum((expense.amount for expense in expenses), Decimal("0"))
    return "Total " + format_amount(total).rjust(25)


def expense_lines(expenses: Sequence[ExpenseRecord]) -> list[str]:
    """Rows followed by the separator and the total of the given expenses."""

    lines = [format_row(expense) for expense in expenses]
    lines.append(SEPARATOR)
    lines.append(total_line(expenses))
    return lines


def listing_lines(expenses: Sequence[ExpenseRecord]) -> list[str]:
    """Count line, then the rows and total when there is at least one expense."""

    lines = [count_line(len(expenses))]
    if expenses:
        lines.extend(expense_lines(expenses))
    return lines


__all__ = [
    "SEPARATOR",
    "count_line",
    "expense_lines",
    "format_row",
    "listing_lines",
    "total_line",
]
