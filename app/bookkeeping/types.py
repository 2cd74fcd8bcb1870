"""
Data types for bookkeeping operations.

This module defines the typed payloads passed from views to the posting
services. Views never hand the services a raw request dict.

Types:
    Direction: Apply or reverse a monetary effect
    UNSET: Marker for "field not provided" in partial updates
    TransactionParams: Fields for posting a new transaction
    TransactionChanges: Partial update of an existing transaction
    TransferParams: Fields for posting a new transfer

Usage:
    from bookkeeping.types import TransactionChanges, TransactionParams, UNSET

    params = TransactionParams(
        member_id=member.id,
        account_id=account.id,
        category_id=category.id,
        amount=Decimal("150.00"),
        date="2024-05-01",
        type="expense",
    )

    # Only the description changes; an empty string clears it
    changes = TransactionChanges(description="")
    assert changes.amount is UNSET
"""

from __future__ import annotations

import datetime
import enum
import uuid
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any

from core.exceptions import ValidationError

from .models import MONEY_DECIMAL_PLACES, MONEY_MAX_DIGITS, TransactionType

DATE_FORMAT = "%Y-%m-%d"

# Smallest representable step and first value too wide for the money columns
MONEY_QUANTUM = Decimal(1).scaleb(-MONEY_DECIMAL_PLACES)
MONEY_LIMIT = Decimal(10) ** (MONEY_MAX_DIGITS - MONEY_DECIMAL_PLACES)


class Direction(enum.Enum):
    """Whether a monetary effect is being added to or removed from a balance."""

    APPLY = "apply"
    REVERSE = "reverse"


class _Unset:
    """Type of the UNSET marker."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def parse_date(value: datetime.date | str, field_name: str = "date") -> datetime.date:
    """
    Parse an ISO calendar date (YYYY-MM-DD).

    Raises:
        ValidationError: If the value is not a date in that exact format
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.datetime.strptime(str(value), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(
            "Invalid date format. Use YYYY-MM-DD",
            details={field_name: str(value)},
        )


def parse_amount(
    value: Decimal | int | str,
    field_name: str = "amount",
    allow_zero: bool = False,
) -> Decimal:
    """
    Parse a monetary amount, check its sign and fit it to the money columns.

    The result is quantized to MONEY_DECIMAL_PLACES, so what the caller
    holds is exactly what the database stores.

    Args:
        value: Amount as Decimal, int or numeric string
        field_name: Name reported in the error details
        allow_zero: Accept 0 (fees) instead of requiring > 0

    Raises:
        ValidationError: If the value is not numeric, has the wrong sign,
            has more than MONEY_DECIMAL_PLACES decimals or does not fit in
            MONEY_MAX_DIGITS digits
    """
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(
            f"{field_name} must be a number",
            details={field_name: str(value)},
        )
    if not amount.is_finite():
        raise ValidationError(
            f"{field_name} must be a number",
            details={field_name: str(value)},
        )
    if amount < 0 or (amount == 0 and not allow_zero):
        qualifier = "zero or greater" if allow_zero else "greater than zero"
        raise ValidationError(
            f"{field_name} must be {qualifier}",
            details={field_name: str(value)},
        )
    if amount >= MONEY_LIMIT:
        raise ValidationError(
            f"{field_name} must be less than {MONEY_LIMIT}",
            details={field_name: str(value)},
        )
    if amount != amount.quantize(MONEY_QUANTUM):
        raise ValidationError(
            f"{field_name} must have at most {MONEY_DECIMAL_PLACES} decimal places",
            details={field_name: str(value)},
        )
    return amount.quantize(MONEY_QUANTUM)


def parse_transaction_type(value: str) -> str:
    """
    Check a transaction type against TransactionType.

    Raises:
        ValidationError: If the value is not income or expense
    """
    if value not in TransactionType.values:
        raise ValidationError(
            f"Unknown transaction type: {value}",
            details={"type": str(value), "allowed": list(TransactionType.values)},
        )
    return value


@dataclass
class TransactionParams:
    """
    Parameters for posting a new transaction.

    Required Attributes:
        member_id: Member the transaction is posted for
        account_id: Account whose balance is affected (must belong to member)
        category_id: Category (must belong to the requesting user)
        amount: Positive amount
        date: Calendar date (date object or YYYY-MM-DD string)
        type: "income" or "expense"

    Optional Attributes:
        description: Free text (default empty)
    """

    member_id: uuid.UUID
    account_id: uuid.UUID
    category_id: uuid.UUID
    amount: Decimal
    date: datetime.date
    type: str
    description: str = ""

    def __post_init__(self) -> None:
        """Normalize and validate after initialization."""
        self.amount = parse_amount(self.amount)
        self.date = parse_date(self.date)
        self.type = parse_transaction_type(self.type)
        self.description = self.description or ""


@dataclass
class TransactionChanges:
    """
    Partial update of a transaction.

    Every field defaults to UNSET, meaning "keep the current value".
    A provided value always replaces the current one: an empty description
    clears it, and a non-positive amount is rejected rather than ignored.
    """

    member_id: uuid.UUID = UNSET
    account_id: uuid.UUID = UNSET
    category_id: uuid.UUID = UNSET
    amount: Decimal = UNSET
    date: datetime.date = UNSET
    type: str = UNSET
    description: str = UNSET

    def __post_init__(self) -> None:
        """Validate provided fields only."""
        if self.amount is not UNSET:
            self.amount = parse_amount(self.amount)
        if self.date is not UNSET:
            self.date = parse_date(self.date)
        if self.type is not UNSET:
            self.type = parse_transaction_type(self.type)
        if self.description is not UNSET and self.description is None:
            self.description = ""

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> TransactionChanges:
        """
        Build from validated serializer data.

        Keys absent from data stay UNSET. Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def provided(self) -> dict[str, Any]:
        """Return only the fields that were provided."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def resolve(self, current: Any) -> dict[str, Any]:
        """
        Merge with the current values of a transaction.

        Args:
            current: Object exposing the transaction's field attributes

        Returns:
            Dict with every field, taking provided values over current ones
        """
        return {
            f.name: (
                getattr(self, f.name)
                if getattr(self, f.name) is not UNSET
                else getattr(current, f.name)
            )
            for f in fields(self)
        }


@dataclass
class TransferParams:
    """
    Parameters for posting a new transfer.

    Required Attributes:
        member_id: Member owning both accounts
        from_account_id: Source account (debited amount + fee)
        to_account_id: Destination account (credited amount)
        amount: Positive amount

    Optional Attributes:
        fee: Non-negative fee consumed by the transfer (default 0)
        date: Calendar date (default today)
        description: Free text
    """

    member_id: uuid.UUID
    from_account_id: uuid.UUID
    to_account_id: uuid.UUID
    amount: Decimal
    fee: Decimal = Decimal("0")
    date: datetime.date | None = None
    description: str = ""

    def __post_init__(self) -> None:
        """Normalize and validate after initialization."""
        self.amount = parse_amount(self.amount)
        self.fee = parse_amount(
            self.fee if self.fee is not None else Decimal("0"),
            field_name="fee",
            allow_zero=True,
        )
        if self.date is not None:
            self.date = parse_date(self.date)
        self.description = self.description or ""

    @property
    def total_debit(self) -> Decimal:
        """Amount taken from the source account."""
        return self.amount + self.fee
