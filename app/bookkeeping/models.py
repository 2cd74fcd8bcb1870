"""
Bookkeeping models for household finances.

This module defines the records a user keeps about their household:
- Member: A household participant who owns accounts
- Account: Holds a running balance (bank, e-wallet, cash)
- Category: User-defined income/expense classification
- Transaction: An income or expense posted against one account
- Transfer: Money moved between two accounts of one member, with optional fee
- BalanceAdjustment: Append-only audit trail of every balance change

Ownership chain:
    User -> Member -> Account
    User -> Category

Account.balance is a denormalized running total. It is only ever changed
through bookkeeping.services.balance.BalanceService, which also writes the
matching BalanceAdjustment row in the same database transaction.

Usage:
    from bookkeeping.models import Account, AccountType, Member

    member = Member.objects.create(user=user, name="Alice")
    account = Account.objects.create(
        member=member,
        name="Main bank",
        type=AccountType.BANK,
    )
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

MONEY_MAX_DIGITS = 18
MONEY_DECIMAL_PLACES = 2


def default_currency() -> str:
    """Currency for new accounts, from the DEFAULT_CURRENCY setting."""
    return getattr(settings, "DEFAULT_CURRENCY", "IDR")


class AccountType(models.TextChoices):
    """Kinds of accounts a member can hold."""

    BANK = "bank", "Bank"
    E_WALLET = "e-wallet", "E-Wallet"
    CASH = "cash", "Cash"


class TransactionType(models.TextChoices):
    """
    Direction of a transaction's effect on its account.

    Values:
        INCOME: Increases the account balance when applied
        EXPENSE: Decreases the account balance when applied
    """

    INCOME = "income", "Income"
    EXPENSE = "expense", "Expense"


class AdjustmentReason(models.TextChoices):
    """Why an account balance changed."""

    OPENING = "opening", "Opening Balance"
    TRANSACTION_APPLY = "transaction_apply", "Transaction Applied"
    TRANSACTION_REVERSE = "transaction_reverse", "Transaction Reversed"
    TRANSFER_APPLY = "transfer_apply", "Transfer Applied"
    TRANSFER_REVERSE = "transfer_reverse", "Transfer Reversed"


class Member(UUIDPrimaryKeyMixin, BaseModel):
    """
    A household participant.

    Members belong to exactly one user and own that user's accounts.
    Transactions and transfers are always posted on behalf of a member.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="members",
        help_text="User who keeps the books for this member",
    )
    name = models.CharField(
        max_length=100,
        help_text="Display name of the member",
    )

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Category(UUIDPrimaryKeyMixin, BaseModel):
    """A user-defined income or expense category."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="categories",
        help_text="User who owns this category",
    )
    name = models.CharField(max_length=100)
    type = models.CharField(
        max_length=10,
        choices=TransactionType.choices,
        help_text="Whether this category classifies income or expenses",
    )

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return f"{self.name} ({self.type})"


class Account(UUIDPrimaryKeyMixin, BaseModel):
    """
    An account holding a running balance.

    Fields:
        member: Owning member (and through it, the owning user)
        name: Display name
        type: bank, e-wallet or cash
        balance: Current balance; may be negative only after a reversal
        currency: ISO 4217 code

    Note:
        Never assign to balance directly. Use BalanceService.adjust() so the
        change is locked, validated and recorded in BalanceAdjustment.
    """

    member = models.ForeignKey(
        Member,
        on_delete=models.PROTECT,
        related_name="accounts",
        help_text="Member who owns this account",
    )
    name = models.CharField(max_length=100)
    type = models.CharField(
        max_length=20,
        choices=AccountType.choices,
    )
    balance = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
        default=Decimal("0.00"),
        help_text="Running balance maintained by the posting engine",
    )
    currency = models.CharField(
        max_length=3,
        default=default_currency,
        help_text="ISO 4217 currency code",
    )

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["member", "type"], name="bk_account_member_type_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.get_type_display()})"


class Transaction(UUIDPrimaryKeyMixin, BaseModel):
    """
    An income or expense posted against one account.

    The amount is always stored positive; the sign of its effect on the
    account balance comes from type.

    Lifecycle:
        posted -> posted (edited)* -> removed
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="transactions",
    )
    member = models.ForeignKey(
        Member,
        on_delete=models.PROTECT,
        related_name="transactions",
    )
    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="transactions",
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="transactions",
    )
    amount = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
        help_text="Amount (always positive)",
    )
    date = models.DateField(db_index=True)
    description = models.TextField(blank=True, default="")
    type = models.CharField(
        max_length=10,
        choices=TransactionType.choices,
    )

    class Meta:
        ordering = ["-date", "-created_at"]
        indexes = [
            models.Index(fields=["user", "date"], name="bk_txn_user_date_idx"),
            models.Index(fields=["account", "date"], name="bk_txn_account_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="transaction_amount_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.get_type_display()}: {self.amount} on {self.date}"


class Transfer(UUIDPrimaryKeyMixin, BaseModel):
    """
    Money moved between two accounts of the same member.

    Effect:
        from_account.balance -= amount + fee
        to_account.balance   += amount

    The fee is consumed; it is not credited anywhere.

    Lifecycle:
        posted -> removed (no in-place update)
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="transfers",
    )
    member = models.ForeignKey(
        Member,
        on_delete=models.PROTECT,
        related_name="transfers",
    )
    from_account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="outgoing_transfers",
    )
    to_account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="incoming_transfers",
    )
    amount = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
    )
    fee = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
        default=Decimal("0.00"),
    )
    date = models.DateField(db_index=True)
    description = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["-date", "-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="transfer_amount_positive",
            ),
            models.CheckConstraint(
                condition=Q(fee__gte=0),
                name="transfer_fee_not_negative",
            ),
            models.CheckConstraint(
                condition=~Q(from_account=F("to_account")),
                name="transfer_accounts_differ",
            ),
        ]

    def __str__(self) -> str:
        return f"Transfer {self.amount} (+{self.fee} fee) on {self.date}"

    @property
    def total_debit(self) -> Decimal:
        """Amount taken from the source account (amount plus fee)."""
        return self.amount + self.fee


class BalanceAdjustment(UUIDPrimaryKeyMixin, models.Model):
    """
    One change to one account balance.

    Append-only audit trail used to investigate balance drift. Rows are
    written by BalanceService in the same database transaction as the
    balance change, so a rolled-back operation leaves no trace here either.

    The reference ids are plain UUIDs rather than foreign keys: a deleted
    transaction keeps its apply/reverse history.
    """

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    account = models.ForeignKey(
        Account,
        on_delete=models.CASCADE,
        related_name="adjustments",
    )
    delta = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
        help_text="Signed change applied to the balance",
    )
    balance_after = models.DecimalField(
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
    )
    reason = models.CharField(
        max_length=30,
        choices=AdjustmentReason.choices,
    )
    transaction_id = models.UUIDField(null=True, blank=True, db_index=True)
    transfer_id = models.UUIDField(null=True, blank=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.get_reason_display()}: {self.delta:+} -> {self.balance_after}"
