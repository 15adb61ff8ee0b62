"""Exception hierarchy shared by the store and the command interpreter."""

from __future__ import annotations


class ExpenseTrackerError(RuntimeError):
    """Base class for expense tracker failures."""


class ConnectionFailure(ExpenseTrackerError):
    """Raised when the database cannot be reached or bootstrapped."""


class ConstraintViolation(ExpenseTrackerError):
    """Raised when a write breaks a rule on amount or memo."""


__all__ = [
    "ConnectionFailure",
    "ConstraintViolation",
    "ExpenseTrackerError",
]
