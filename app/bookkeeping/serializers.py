"""
Serializers for bookkeeping.

Read serializers embed a compact view of each referenced member, account
and category next to its id. Write serializers for transactions and
transfers only validate the payload shape; they hand typed params to the
posting services instead of saving models themselves.

Related files:
    - types.py: TransactionParams, TransactionChanges, TransferParams
    - services/: Posting engine called by the views
"""

from decimal import Decimal

from rest_framework import serializers

from bookkeeping.models import (
    MONEY_DECIMAL_PLACES,
    MONEY_MAX_DIGITS,
    Account,
    AccountType,
    BalanceAdjustment,
    Category,
    Member,
    Transaction,
    TransactionType,
    Transfer,
)
from bookkeeping.types import TransactionChanges, TransactionParams, TransferParams

DATE_INPUT_FORMATS = ["%Y-%m-%d"]


def money_field(**kwargs):
    return serializers.DecimalField(
        max_digits=MONEY_MAX_DIGITS,
        decimal_places=MONEY_DECIMAL_PLACES,
        **kwargs,
    )


def _positive(value, field_name="amount"):
    if value <= 0:
        raise serializers.ValidationError(f"{field_name} must be greater than zero.")
    return value


# -----------------------------------------------------------------------------
# Compact views
# -----------------------------------------------------------------------------


class MemberSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Member
        fields = ["id", "name"]
        read_only_fields = fields


class AccountSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Account
        fields = ["id", "name", "type", "balance", "currency"]
        read_only_fields = fields


class CategorySummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "type"]
        read_only_fields = fields


# -----------------------------------------------------------------------------
# Members and categories
# -----------------------------------------------------------------------------


class MemberSerializer(serializers.ModelSerializer):
    """Serializer for Member create/read/update."""

    class Meta:
        model = Member
        fields = ["id", "name", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank.")
        return value


class CategorySerializer(serializers.ModelSerializer):
    """Serializer for Category create/read/update."""

    class Meta:
        model = Category
        fields = ["id", "name", "type", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank.")
        return value


# -----------------------------------------------------------------------------
# Accounts
# -----------------------------------------------------------------------------


class AccountSerializer(serializers.ModelSerializer):
    """Serializer for Account (read operations)."""

    member_id = serializers.UUIDField(read_only=True)
    member = MemberSummarySerializer(read_only=True)

    class Meta:
        model = Account
        fields = [
            "id",
            "member_id",
            "member",
            "name",
            "type",
            "balance",
            "currency",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AccountCreateSerializer(serializers.Serializer):
    """
    Serializer for opening an account.

    The balance is never writable; opening_balance is posted through the
    balance engine and shows up as the account's first adjustment.
    """

    member_id = serializers.UUIDField()
    name = serializers.CharField(max_length=100)
    type = serializers.ChoiceField(choices=AccountType.choices)
    currency = serializers.CharField(min_length=3, max_length=3, required=False)
    opening_balance = money_field(
        required=False,
        default=Decimal("0"),
        min_value=Decimal("0"),
    )

    def validate_currency(self, value):
        return value.upper()


class AccountUpdateSerializer(serializers.ModelSerializer):
    """Serializer for editing account name, type and currency."""

    class Meta:
        model = Account
        fields = ["name", "type", "currency"]
        extra_kwargs = {
            "name": {"required": False},
            "type": {"required": False},
            "currency": {"required": False, "min_length": 3},
        }

    def validate_currency(self, value):
        return value.upper()


class BalanceAdjustmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = BalanceAdjustment
        fields = [
            "id",
            "delta",
            "balance_after",
            "reason",
            "transaction_id",
            "transfer_id",
            "created_at",
        ]
        read_only_fields = fields


# -----------------------------------------------------------------------------
# Transactions
# -----------------------------------------------------------------------------


class TransactionSerializer(serializers.ModelSerializer):
    """Serializer for Transaction (read operations)."""

    member_id = serializers.UUIDField(read_only=True)
    account_id = serializers.UUIDField(read_only=True)
    category_id = serializers.UUIDField(read_only=True)
    member = MemberSummarySerializer(read_only=True)
    account = AccountSummarySerializer(read_only=True)
    category = CategorySummarySerializer(read_only=True)

    class Meta:
        model = Transaction
        fields = [
            "id",
            "member_id",
            "account_id",
            "category_id",
            "member",
            "account",
            "category",
            "amount",
            "date",
            "description",
            "type",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class TransactionCreateSerializer(serializers.Serializer):
    """
    Serializer for posting a transaction.

    Request body:
        {
            "member_id": "...",
            "account_id": "...",
            "category_id": "...",
            "amount": "150.00",
            "date": "2024-05-01",
            "type": "expense",
            "description": "Groceries"   // Optional
        }
    """

    member_id = serializers.UUIDField()
    account_id = serializers.UUIDField()
    category_id = serializers.UUIDField()
    amount = money_field()
    date = serializers.DateField(input_formats=DATE_INPUT_FORMATS)
    type = serializers.ChoiceField(choices=TransactionType.choices)
    description = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_amount(self, value):
        return _positive(value)

    def to_params(self) -> TransactionParams:
        return TransactionParams(**self.validated_data)


class TransactionUpdateSerializer(serializers.Serializer):
    """
    Serializer for editing a transaction.

    Every field is optional. Omitted fields keep their value; a provided
    empty description clears it.
    """

    member_id = serializers.UUIDField(required=False)
    account_id = serializers.UUIDField(required=False)
    category_id = serializers.UUIDField(required=False)
    amount = money_field(required=False)
    date = serializers.DateField(required=False, input_formats=DATE_INPUT_FORMATS)
    type = serializers.ChoiceField(choices=TransactionType.choices, required=False)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_amount(self, value):
        return _positive(value)

    def to_changes(self) -> TransactionChanges:
        return TransactionChanges.from_mapping(self.validated_data)


# -----------------------------------------------------------------------------
# Transfers
# -----------------------------------------------------------------------------


class TransferSerializer(serializers.ModelSerializer):
    """Serializer for Transfer (read operations)."""

    member_id = serializers.UUIDField(read_only=True)
    from_account_id = serializers.UUIDField(read_only=True)
    to_account_id = serializers.UUIDField(read_only=True)
    member = MemberSummarySerializer(read_only=True)
    from_account = AccountSummarySerializer(read_only=True)
    to_account = AccountSummarySerializer(read_only=True)
    total_debit = money_field(read_only=True)

    class Meta:
        model = Transfer
        fields = [
            "id",
            "member_id",
            "from_account_id",
            "to_account_id",
            "member",
            "from_account",
            "to_account",
            "amount",
            "fee",
            "total_debit",
            "date",
            "description",
            "created_at",
        ]
        read_only_fields = fields


class TransferCreateSerializer(serializers.Serializer):
    """
    Serializer for posting a transfer.

    Request body:
        {
            "member_id": "...",
            "from_account_id": "...",
            "to_account_id": "...",
            "amount": "40.00",
            "fee": "5.00",               // Optional, default 0
            "date": "2024-05-01",        // Optional, default today
            "description": "Top up"      // Optional
        }
    """

    member_id = serializers.UUIDField()
    from_account_id = serializers.UUIDField()
    to_account_id = serializers.UUIDField()
    amount = money_field()
    fee = money_field(required=False, default=Decimal("0"), min_value=Decimal("0"))
    date = serializers.DateField(required=False, input_formats=DATE_INPUT_FORMATS)
    description = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_amount(self, value):
        return _positive(value)

    def to_params(self) -> TransferParams:
        return TransferParams(**self.validated_data)
