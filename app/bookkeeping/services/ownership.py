"""
Ownership validation for bookkeeping references.

Every record a request points at must be reachable from the requesting
user through the ownership chain:

    User -> Member -> Account
    User -> Category

Lookups that fail raise NotFoundError with the same message whether the
row does not exist or belongs to someone else, so callers cannot probe
other households' ids.

Usage:
    from bookkeeping.services import OwnershipValidator

    member, account, category = OwnershipValidator.validate_transaction_refs(
        user, member_id, account_id, category_id
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import NotFoundError
from core.services import BaseService

from bookkeeping.exceptions import (
    ACCOUNT_NOT_FOUND,
    CATEGORY_NOT_FOUND,
    MEMBER_NOT_FOUND,
)
from bookkeeping.models import Account, Category, Member

if TYPE_CHECKING:
    import uuid

    from authentication.models import User


class OwnershipValidator(BaseService):
    """
    Confirms that referenced members, accounts and categories belong to a user.

    Validation only reads; it never writes, so a failure leaves no side
    effects. Services call it before any balance change or row write, using
    the values the operation will store (for updates, the post-update ids).
    """

    @classmethod
    def get_member(cls, user: User, member_id: uuid.UUID) -> Member:
        """
        Get a member owned by user.

        Raises:
            NotFoundError: MEMBER_NOT_FOUND
        """
        member = Member.objects.filter(id=member_id, user=user).first()
        if member is None:
            raise NotFoundError(
                "Member not found",
                error_code=MEMBER_NOT_FOUND,
                details={"member_id": str(member_id)},
            )
        return member

    @classmethod
    def get_account(
        cls,
        member: Member,
        account_id: uuid.UUID,
        label: str = "Account",
    ) -> Account:
        """
        Get an account held by member.

        Args:
            member: Member that must own the account
            account_id: Account to look up
            label: Name used in the error message ("From account", ...)

        Raises:
            NotFoundError: ACCOUNT_NOT_FOUND
        """
        account = Account.objects.filter(id=account_id, member=member).first()
        if account is None:
            raise NotFoundError(
                f"{label} not found",
                error_code=ACCOUNT_NOT_FOUND,
                details={"account_id": str(account_id)},
            )
        return account

    @classmethod
    def get_user_account(cls, user: User, account_id: uuid.UUID) -> Account:
        """
        Get an account held by any member of user.

        Raises:
            NotFoundError: ACCOUNT_NOT_FOUND
        """
        account = (
            Account.objects.select_related("member")
            .filter(id=account_id, member__user=user)
            .first()
        )
        if account is None:
            raise NotFoundError(
                "Account not found",
                error_code=ACCOUNT_NOT_FOUND,
                details={"account_id": str(account_id)},
            )
        return account

    @classmethod
    def get_category(cls, user: User, category_id: uuid.UUID) -> Category:
        """
        Get a category owned by user.

        Raises:
            NotFoundError: CATEGORY_NOT_FOUND
        """
        category = Category.objects.filter(id=category_id, user=user).first()
        if category is None:
            raise NotFoundError(
                "Category not found",
                error_code=CATEGORY_NOT_FOUND,
                details={"category_id": str(category_id)},
            )
        return category

    @classmethod
    def validate_transaction_refs(
        cls,
        user: User,
        member_id: uuid.UUID,
        account_id: uuid.UUID,
        category_id: uuid.UUID,
    ) -> tuple[Member, Account, Category]:
        """
        Check a transaction's (member, account, category) triple.

        Checks, in order:
        1. Member exists and is owned by user
        2. Account exists and belongs to that member
        3. Category exists and is owned by user

        Returns:
            The resolved (member, account, category)

        Raises:
            NotFoundError: Naming the first entity that failed
        """
        member = cls.get_member(user, member_id)
        account = cls.get_account(member, account_id)
        category = cls.get_category(user, category_id)
        return member, account, category

    @classmethod
    def validate_transfer_refs(
        cls,
        user: User,
        member_id: uuid.UUID,
        from_account_id: uuid.UUID,
        to_account_id: uuid.UUID,
    ) -> tuple[Member, Account, Account]:
        """
        Check a transfer's member and both of its accounts.

        Both accounts must belong to the transfer's member.

        Returns:
            The resolved (member, from_account, to_account)

        Raises:
            NotFoundError: Naming the first entity that failed
        """
        member = cls.get_member(user, member_id)
        from_account = cls.get_account(member, from_account_id, label="From account")
        to_account = cls.get_account(member, to_account_id, label="To account")
        return member, from_account, to_account
