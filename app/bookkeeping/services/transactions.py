"""
Transaction posting service.

Creates, edits and removes income/expense transactions while keeping
account balances equal to the net effect of the transactions and
transfers posted against them.

Each write runs as one unit of work:

    create:  validate refs -> lock account -> insert row -> apply
    update:  lock row -> merge changes -> validate refs -> lock accounts
             -> reverse old effect -> save row -> apply new effect
    delete:  lock row -> lock account -> reverse effect -> delete row

Any failure inside the unit of work (InsufficientBalance, NotFoundError,
database errors) rolls back every balance change and row write made so far.

Usage:
    from bookkeeping.services import TransactionService
    from bookkeeping.types import TransactionParams

    txn = TransactionService.create(user, TransactionParams(...))
    txn = TransactionService.update(user, txn.id, TransactionChanges(amount="20"))
    TransactionService.delete(user, txn.id)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db.models import QuerySet

from core.exceptions import NotFoundError
from core.services import BaseService

from bookkeeping.exceptions import TRANSACTION_NOT_FOUND, InsufficientBalance
from bookkeeping.models import Transaction
from bookkeeping.types import Direction, TransactionChanges, TransactionParams

from .balance import BalanceService
from .ownership import OwnershipValidator

if TYPE_CHECKING:
    import uuid

    from authentication.models import User


class TransactionService(BaseService):
    """
    Service for the transaction lifecycle.

    All methods are class methods and scope every lookup to the requesting
    user: another user's transaction is reported as not found.
    """

    @classmethod
    def list_for_user(cls, user: User) -> QuerySet[Transaction]:
        """Transactions owned by user, with their references preloaded."""
        return Transaction.objects.filter(user=user).select_related(
            "member", "account", "category"
        )

    @classmethod
    def get(cls, user: User, transaction_id: uuid.UUID) -> Transaction:
        """
        Get a transaction owned by user.

        Raises:
            NotFoundError: TRANSACTION_NOT_FOUND
        """
        txn = cls.list_for_user(user).filter(id=transaction_id).first()
        if txn is None:
            raise cls._not_found(transaction_id)
        return txn

    @classmethod
    def _get_for_update(cls, user: User, transaction_id: uuid.UUID) -> Transaction:
        txn = (
            Transaction.objects.select_for_update()
            .filter(id=transaction_id, user=user)
            .first()
        )
        if txn is None:
            raise cls._not_found(transaction_id)
        return txn

    @staticmethod
    def _not_found(transaction_id: uuid.UUID) -> NotFoundError:
        return NotFoundError(
            "Transaction not found",
            error_code=TRANSACTION_NOT_FOUND,
            details={"transaction_id": str(transaction_id)},
        )

    @classmethod
    def create(cls, user: User, params: TransactionParams) -> Transaction:
        """
        Post a new transaction and apply it to its account.

        Args:
            user: Requesting user
            params: Validated transaction fields

        Returns:
            The stored Transaction

        Raises:
            NotFoundError: If member, account or category is not the user's
            InsufficientBalance: If an expense exceeds the account balance
        """
        logger = cls.get_logger()
        try:
            member, account, category = OwnershipValidator.validate_transaction_refs(
                user, params.member_id, params.account_id, params.category_id
            )
        except NotFoundError as e:
            logger.warning(f"Rejected transaction for user {user.pk}: {e.error_code}")
            raise

        try:
            with cls.atomic():
                BalanceService.lock_accounts([account.id])
                txn = Transaction.objects.create(
                    user=user,
                    member=member,
                    account=account,
                    category=category,
                    amount=params.amount,
                    date=params.date,
                    type=params.type,
                    description=params.description,
                )
                BalanceService.adjust(
                    account.id,
                    txn.type,
                    txn.amount,
                    Direction.APPLY,
                    transaction_id=txn.id,
                )
        except InsufficientBalance as e:
            logger.warning(
                f"Rejected {params.type} of {params.amount} on account {account.id}: "
                f"available {e.available}"
            )
            raise

        logger.info(
            f"User {user.pk} posted {txn.type} transaction {txn.id} of {txn.amount} "
            f"on account {account.id}"
        )
        return txn

    @classmethod
    def update(
        cls,
        user: User,
        transaction_id: uuid.UUID,
        changes: TransactionChanges,
    ) -> Transaction:
        """
        Edit a transaction, moving its balance effect as needed.

        The old effect is reversed on the old account and the new effect is
        applied on the (possibly different) new account. If the new effect
        does not fit, nothing changes: the row keeps its old values and both
        balances are left as they were.

        Args:
            user: Requesting user
            transaction_id: Transaction to edit
            changes: Fields to replace; UNSET fields keep their value

        Returns:
            The updated Transaction

        Raises:
            NotFoundError: If the transaction, or a new reference, is not the user's
            InsufficientBalance: If the new effect exceeds the new account balance
        """
        logger = cls.get_logger()

        try:
            with cls.atomic():
                txn = cls._get_for_update(user, transaction_id)
                merged = changes.resolve(txn)
                member, account, category = OwnershipValidator.validate_transaction_refs(
                    user, merged["member_id"], merged["account_id"], merged["category_id"]
                )

                old_account_id, old_type, old_amount = txn.account_id, txn.type, txn.amount
                BalanceService.lock_accounts([old_account_id, account.id])
                BalanceService.adjust(
                    old_account_id,
                    old_type,
                    old_amount,
                    Direction.REVERSE,
                    transaction_id=txn.id,
                )

                txn.member = member
                txn.account = account
                txn.category = category
                txn.amount = merged["amount"]
                txn.date = merged["date"]
                txn.type = merged["type"]
                txn.description = merged["description"]
                txn.save()

                BalanceService.adjust(
                    account.id,
                    txn.type,
                    txn.amount,
                    Direction.APPLY,
                    transaction_id=txn.id,
                )
        except InsufficientBalance as e:
            logger.warning(
                f"Rejected update of transaction {transaction_id}: "
                f"account {e.account_id} has {e.available}, needs {e.required}"
            )
            raise
        except NotFoundError as e:
            logger.warning(
                f"Rejected update of transaction {transaction_id} "
                f"for user {user.pk}: {e.error_code}"
            )
            raise

        logger.info(
            f"User {user.pk} updated transaction {txn.id}: {txn.type} of {txn.amount} "
            f"on account {txn.account_id}"
        )
        return cls.get(user, txn.id)

    @classmethod
    def delete(cls, user: User, transaction_id: uuid.UUID) -> None:
        """
        Remove a transaction and reverse its effect.

        Raises:
            NotFoundError: TRANSACTION_NOT_FOUND
        """
        with cls.atomic():
            try:
                txn = cls._get_for_update(user, transaction_id)
            except NotFoundError:
                cls.get_logger().warning(
                    f"Rejected delete of transaction {transaction_id} for user {user.pk}"
                )
                raise
            BalanceService.lock_accounts([txn.account_id])
            BalanceService.adjust(
                txn.account_id,
                txn.type,
                txn.amount,
                Direction.REVERSE,
                transaction_id=txn.id,
            )
            txn.delete()

        cls.get_logger().info(
            f"User {user.pk} deleted transaction {transaction_id}, reversed {txn.amount} "
            f"on account {txn.account_id}"
        )
