"""
Lifecycle helpers for the plain bookkeeping records.

Members, categories and accounts are simple owned rows, but two things
about them touch the posting engine:

- Opening an account with a starting balance goes through BalanceService,
  so the opening amount is audited like every other balance change.
- Rows referenced by transactions or transfers are protected. Deleting
  one is refused with ConflictError instead of cascading history away.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from django.db.models import ProtectedError

from core.exceptions import ConflictError
from core.services import BaseService

from bookkeeping.models import (
    Account,
    AdjustmentReason,
    Transaction,
    TransactionType,
    Transfer,
)
from bookkeeping.types import Direction, parse_amount

from .balance import BalanceService
from .ownership import OwnershipValidator

if TYPE_CHECKING:
    import uuid

    from django.db.models import Model

    from authentication.models import User


class AccountService(BaseService):
    """Opens accounts for a user's members."""

    @classmethod
    def open(
        cls,
        user: User,
        member_id: uuid.UUID,
        name: str,
        type: str,
        currency: str | None = None,
        opening_balance: Decimal | str | int = Decimal("0"),
    ) -> Account:
        """
        Create an account, optionally with an opening balance.

        The account starts at zero and the opening balance is posted as an
        income apply with reason "opening".

        Raises:
            NotFoundError: If the member is not the user's
            ValidationError: If the opening balance is negative or not whole cents
        """
        member = OwnershipValidator.get_member(user, member_id)
        opening_balance = parse_amount(
            opening_balance, field_name="opening_balance", allow_zero=True
        )

        fields = {"member": member, "name": name, "type": type}
        if currency:
            fields["currency"] = currency

        with cls.atomic():
            account = Account.objects.create(**fields)
            if opening_balance > 0:
                account = BalanceService.adjust(
                    account.id,
                    TransactionType.INCOME,
                    opening_balance,
                    Direction.APPLY,
                    reason=AdjustmentReason.OPENING,
                )

        cls.get_logger().info(
            f"Opened account {account.id} for member {member.id} "
            f"with balance {account.balance}"
        )
        return account


class RecordService(BaseService):
    """Deletion rules shared by members, categories and accounts."""

    @classmethod
    def delete(cls, instance: Model) -> None:
        """
        Delete a record unless bookkeeping history still points at it.

        Raises:
            ConflictError: RECORD_IN_USE, when a protected reference exists
        """
        label = instance._meta.verbose_name.capitalize()
        try:
            with cls.atomic():
                instance.delete()
        except ProtectedError as e:
            cls.get_logger().warning(
                f"Refused to delete {instance._meta.model_name} {instance.pk}: "
                f"{len(e.protected_objects)} dependent rows"
            )
            raise ConflictError(
                f"{label} is still referenced and cannot be deleted",
                error_code="RECORD_IN_USE",
                details={
                    "id": str(instance.pk),
                    "referenced_by": sorted(
                        {obj._meta.model_name for obj in e.protected_objects}
                    ),
                },
            )

    @classmethod
    def purge_user_data(cls, user: User) -> None:
        """
        Remove every bookkeeping row owned by user.

        Deletes in dependency order (postings, then accounts) so protected
        references never block the cascade from the user row. Balances are
        not reversed: the accounts themselves are going away.
        """
        with cls.atomic():
            transactions, _ = Transaction.objects.filter(user=user).delete()
            transfers, _ = Transfer.objects.filter(user=user).delete()
            Account.objects.filter(member__user=user).delete()

        cls.get_logger().info(
            f"Purged bookkeeping data of user {user.pk}: "
            f"{transactions} transaction rows, {transfers} transfer rows"
        )
