"""
Balance adjustment engine.

Every change to Account.balance goes through BalanceService.adjust(). The
engine never opens its own transaction: it must run inside the caller's
atomic block so that a later failure in the same operation rolls the
balance change back together with the ledger row.

Effect table:

    kind     direction   balance delta
    income   apply       +amount
    income   reverse     -amount
    expense  apply       -amount
    expense  reverse     +amount

Rules:
    - An expense apply that would leave a negative balance raises
      InsufficientBalance and writes nothing.
    - A reversal may leave a negative balance. Undoing an effect that was
      applied earlier must always succeed, or updates and deletes could get
      stuck.
    - Every adjustment appends a BalanceAdjustment audit row.

Usage:
    with transaction.atomic():
        BalanceService.lock_accounts([account.id])
        BalanceService.adjust(
            account.id,
            TransactionType.EXPENSE,
            Decimal("25.00"),
            Direction.APPLY,
            transaction_id=txn.id,
        )
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from core.exceptions import NotFoundError
from core.services import BaseService

from bookkeeping.exceptions import ACCOUNT_NOT_FOUND, InsufficientBalance
from bookkeeping.models import (
    Account,
    AdjustmentReason,
    BalanceAdjustment,
    TransactionType,
)
from bookkeeping.types import Direction

if TYPE_CHECKING:
    import uuid
    from collections.abc import Iterable


def balance_delta(kind: str, amount: Decimal, direction: Direction) -> Decimal:
    """
    Signed change that a movement makes to a balance.

    Args:
        kind: TransactionType value ("income" or "expense")
        amount: Positive amount of the movement
        direction: APPLY or REVERSE

    Raises:
        ValueError: For an unknown kind or direction. Input validation
            should make this unreachable, so it is a programming error.
    """
    if kind == TransactionType.INCOME:
        sign = 1
    elif kind == TransactionType.EXPENSE:
        sign = -1
    else:
        raise ValueError(f"invalid transaction type: {kind!r}")

    if direction is Direction.REVERSE:
        sign = -sign
    elif direction is not Direction.APPLY:
        raise ValueError(f"invalid direction: {direction!r}")

    return amount * sign


class BalanceService(BaseService):
    """
    Applies and reverses monetary effects on account balances.

    All methods are class methods - no instance state is maintained.
    """

    @classmethod
    def _require_atomic(cls) -> None:
        if not cls.in_atomic_block():
            raise RuntimeError(
                "Balance adjustments must run inside transaction.atomic()"
            )

    @classmethod
    def lock_accounts(cls, account_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, Account]:
        """
        Lock account rows for the rest of the current transaction.

        Rows are locked in primary-key order so that two operations touching
        the same accounts always acquire their locks in the same order and
        cannot deadlock.

        Args:
            account_ids: Accounts the operation will adjust (duplicates ok)

        Returns:
            Locked accounts keyed by id
        """
        cls._require_atomic()
        return {
            account.id: account
            for account in Account.objects.filter(id__in=set(account_ids))
            .select_for_update()
            .order_by("id")
        }

    @classmethod
    def adjust(
        cls,
        account_id: uuid.UUID,
        kind: str,
        amount: Decimal,
        direction: Direction,
        *,
        reason: str | None = None,
        transaction_id: uuid.UUID | None = None,
        transfer_id: uuid.UUID | None = None,
    ) -> Account:
        """
        Apply or reverse one movement on one account balance.

        Reads the account with a row lock inside the caller's transaction,
        so concurrent adjustments of the same account serialize.

        Args:
            account_id: Account to adjust
            kind: "income" or "expense"
            amount: Positive amount of the movement
            direction: APPLY or REVERSE
            reason: AdjustmentReason recorded in the audit row (defaults to
                transaction apply/reverse)
            transaction_id: Transaction causing the change, if any
            transfer_id: Transfer causing the change, if any

        Returns:
            The updated Account

        Raises:
            RuntimeError: If called outside transaction.atomic()
            ValueError: For an unknown kind or direction
            NotFoundError: If the account no longer exists
            InsufficientBalance: If an expense apply would go below zero
        """
        cls._require_atomic()
        delta = balance_delta(kind, amount, direction)

        try:
            account = Account.objects.select_for_update().get(id=account_id)
        except Account.DoesNotExist:
            raise NotFoundError(
                "Account not found",
                error_code=ACCOUNT_NOT_FOUND,
                details={"account_id": str(account_id)},
            )

        new_balance = account.balance + delta
        if direction is Direction.APPLY and kind == TransactionType.EXPENSE and new_balance < 0:
            raise InsufficientBalance(
                account_id=account.id,
                required=amount,
                available=account.balance,
            )

        account.balance = new_balance
        account.save(update_fields=["balance", "updated_at"])

        if reason is None:
            reason = (
                AdjustmentReason.TRANSACTION_APPLY
                if direction is Direction.APPLY
                else AdjustmentReason.TRANSACTION_REVERSE
            )
        BalanceAdjustment.objects.create(
            account=account,
            delta=delta,
            balance_after=new_balance,
            reason=reason,
            transaction_id=transaction_id,
            transfer_id=transfer_id,
        )

        cls.get_logger().debug(
            f"Adjusted account {account.id} by {delta} ({reason}), balance now {new_balance}"
        )
        return account
