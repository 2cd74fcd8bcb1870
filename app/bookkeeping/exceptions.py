"""
Bookkeeping-specific exceptions.

This module provides the exceptions raised by the posting engine,
inheriting from the core exception base class for API consistency.

Exception Hierarchy:
    BookkeepingError (base)
    ├── InsufficientBalance - Apply would drive a balance below zero
    └── InvalidTransfer - Source and destination account are the same

Not-found and validation failures use core.exceptions.NotFoundError and
core.exceptions.ValidationError directly, with the error codes below.

Usage:
    from bookkeeping.exceptions import InsufficientBalance

    if account.balance < amount:
        raise InsufficientBalance(account.id, required=amount, available=account.balance)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import BaseApplicationError

if TYPE_CHECKING:
    import uuid
    from decimal import Decimal
    from typing import Any

MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"
ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"
TRANSFER_NOT_FOUND = "TRANSFER_NOT_FOUND"


class BookkeepingError(BaseApplicationError):
    """
    Base exception for posting engine failures.

    Any BookkeepingError raised inside a service's atomic block rolls the
    whole operation back.
    """

    default_error_code: str = "BOOKKEEPING_ERROR"


class InsufficientBalance(BookkeepingError):
    """
    Raised when applying an expense or a transfer would make a balance negative.

    Never raised by reversals: undoing an earlier apply must always succeed.

    Attributes:
        account_id: The UUID of the account with insufficient funds
        required: The amount that was required
        available: The balance that was available

    Example:
        if account.balance < amount:
            raise InsufficientBalance(
                account.id,
                required=amount,
                available=account.balance,
            )
    """

    default_error_code: str = "INSUFFICIENT_BALANCE"

    def __init__(
        self,
        account_id: uuid.UUID,
        required: Decimal,
        available: Decimal,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.account_id = account_id
        self.required = required
        self.available = available

        full_details = {
            "account_id": str(account_id),
            "required": str(required),
            "available": str(available),
        }
        if details:
            full_details.update(details)

        super().__init__(
            message="Insufficient account balance",
            error_code=error_code,
            details=full_details,
        )


class InvalidTransfer(BookkeepingError):
    """Raised when a transfer's source and destination account are identical."""

    default_error_code: str = "INVALID_TRANSFER"
