"""
Transfer posting service.

Moves money between two accounts of one member:

    from_account.balance -= amount + fee
    to_account.balance   += amount

Transfers are immutable once posted. To correct one, delete it (which
reverses both legs) and post a new one.

Usage:
    from bookkeeping.services import TransferService
    from bookkeeping.types import TransferParams

    transfer = TransferService.create(
        user,
        TransferParams(
            member_id=member.id,
            from_account_id=bank.id,
            to_account_id=wallet.id,
            amount=Decimal("40"),
            fee=Decimal("5"),
        ),
    )
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from django.db.models import QuerySet
from django.utils import timezone

from core.exceptions import NotFoundError
from core.services import BaseService

from bookkeeping.exceptions import (
    TRANSFER_NOT_FOUND,
    InsufficientBalance,
    InvalidTransfer,
)
from bookkeeping.models import AdjustmentReason, Transfer, TransactionType
from bookkeeping.types import Direction, TransferParams

from .balance import BalanceService
from .ownership import OwnershipValidator

if TYPE_CHECKING:
    from authentication.models import User


class TransferService(BaseService):
    """
    Service for the transfer lifecycle: create, get, list, delete.

    Both legs go through BalanceService in one unit of work. The source leg
    is an expense apply of amount + fee, so it is rejected when the source
    balance cannot cover it; the destination leg is an income apply.
    """

    @classmethod
    def list_for_user(cls, user: User) -> QuerySet[Transfer]:
        """Transfers owned by user, with their references preloaded."""
        return Transfer.objects.filter(user=user).select_related(
            "member", "from_account", "to_account"
        )

    @classmethod
    def get(cls, user: User, transfer_id: uuid.UUID) -> Transfer:
        """
        Get a transfer owned by user.

        Raises:
            NotFoundError: TRANSFER_NOT_FOUND
        """
        transfer = cls.list_for_user(user).filter(id=transfer_id).first()
        if transfer is None:
            raise cls._not_found(transfer_id)
        return transfer

    @staticmethod
    def _not_found(transfer_id: uuid.UUID) -> NotFoundError:
        return NotFoundError(
            "Transfer not found",
            error_code=TRANSFER_NOT_FOUND,
            details={"transfer_id": str(transfer_id)},
        )

    @classmethod
    def create(cls, user: User, params: TransferParams) -> Transfer:
        """
        Post a transfer and move the money.

        Args:
            user: Requesting user
            params: Validated transfer fields

        Returns:
            The stored Transfer

        Raises:
            InvalidTransfer: If source and destination are the same account
            NotFoundError: If the member or either account is not the user's
            InsufficientBalance: If the source cannot cover amount + fee
        """
        logger = cls.get_logger()

        if params.from_account_id == params.to_account_id:
            logger.warning(f"Rejected self-transfer on account {params.from_account_id}")
            raise InvalidTransfer(
                "Cannot transfer to the same account",
                details={"account_id": str(params.from_account_id)},
            )

        try:
            member, from_account, to_account = OwnershipValidator.validate_transfer_refs(
                user, params.member_id, params.from_account_id, params.to_account_id
            )
        except NotFoundError as e:
            logger.warning(f"Rejected transfer for user {user.pk}: {e.error_code}")
            raise

        transfer_id = uuid.uuid4()
        try:
            with cls.atomic():
                BalanceService.lock_accounts([from_account.id, to_account.id])
                BalanceService.adjust(
                    from_account.id,
                    TransactionType.EXPENSE,
                    params.total_debit,
                    Direction.APPLY,
                    reason=AdjustmentReason.TRANSFER_APPLY,
                    transfer_id=transfer_id,
                )
                BalanceService.adjust(
                    to_account.id,
                    TransactionType.INCOME,
                    params.amount,
                    Direction.APPLY,
                    reason=AdjustmentReason.TRANSFER_APPLY,
                    transfer_id=transfer_id,
                )
                transfer = Transfer.objects.create(
                    id=transfer_id,
                    user=user,
                    member=member,
                    from_account=from_account,
                    to_account=to_account,
                    amount=params.amount,
                    fee=params.fee,
                    date=params.date or timezone.localdate(),
                    description=params.description,
                )
        except InsufficientBalance as e:
            logger.warning(
                f"Rejected transfer of {params.amount} (+{params.fee} fee) "
                f"from account {from_account.id}: available {e.available}"
            )
            raise

        logger.info(
            f"User {user.pk} posted transfer {transfer.id}: "
            f"{transfer.amount} (+{transfer.fee} fee) "
            f"from {from_account.id} to {to_account.id}"
        )
        return transfer

    @classmethod
    def delete(cls, user: User, transfer_id: uuid.UUID) -> None:
        """
        Remove a transfer and reverse both legs.

        Raises:
            NotFoundError: TRANSFER_NOT_FOUND
        """
        with cls.atomic():
            transfer = (
                Transfer.objects.select_for_update()
                .filter(id=transfer_id, user=user)
                .first()
            )
            if transfer is None:
                cls.get_logger().warning(
                    f"Rejected delete of transfer {transfer_id} for user {user.pk}"
                )
                raise cls._not_found(transfer_id)

            BalanceService.lock_accounts(
                [transfer.from_account_id, transfer.to_account_id]
            )
            BalanceService.adjust(
                transfer.from_account_id,
                TransactionType.EXPENSE,
                transfer.total_debit,
                Direction.REVERSE,
                reason=AdjustmentReason.TRANSFER_REVERSE,
                transfer_id=transfer.id,
            )
            BalanceService.adjust(
                transfer.to_account_id,
                TransactionType.INCOME,
                transfer.amount,
                Direction.REVERSE,
                reason=AdjustmentReason.TRANSFER_REVERSE,
                transfer_id=transfer.id,
            )
            transfer.delete()

        cls.get_logger().info(
            f"User {user.pk} deleted transfer {transfer_id}, "
            f"restored {transfer.total_debit} "
            f"to {transfer.from_account_id}"
        )
