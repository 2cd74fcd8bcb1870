# Generated manually - Initial bookkeeping schema

import uuid
from decimal import Decimal

import bookkeeping.models
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def _uuid_pk():
    return (
        "id",
        models.UUIDField(
            default=uuid.uuid4,
            editable=False,
            help_text="Unique identifier for this record",
            primary_key=True,
            serialize=False,
        ),
    )


def _timestamps():
    return [
        (
            "created_at",
            models.DateTimeField(
                auto_now_add=True,
                db_index=True,
                help_text="Timestamp when this record was created",
            ),
        ),
        (
            "updated_at",
            models.DateTimeField(
                auto_now=True,
                help_text="Timestamp when this record was last modified",
            ),
        ),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Member",
            fields=[
                _uuid_pk(),
                *_timestamps(),
                (
                    "name",
                    models.CharField(
                        help_text="Display name of the member",
                        max_length=100,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="User who keeps the books for this member",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="members",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Category",
            fields=[
                _uuid_pk(),
                *_timestamps(),
                ("name", models.CharField(max_length=100)),
                (
                    "type",
                    models.CharField(
                        choices=[("income", "Income"), ("expense", "Expense")],
                        help_text="Whether this category classifies income or expenses",
                        max_length=10,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="User who owns this category",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="categories",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "categories",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Account",
            fields=[
                _uuid_pk(),
                *_timestamps(),
                ("name", models.CharField(max_length=100)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("bank", "Bank"),
                            ("e-wallet", "E-Wallet"),
                            ("cash", "Cash"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "balance",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Running balance maintained by the posting engine",
                        max_digits=18,
                    ),
                ),
                (
                    "currency",
                    models.CharField(
                        default=bookkeeping.models.default_currency,
                        help_text="ISO 4217 currency code",
                        max_length=3,
                    ),
                ),
                (
                    "member",
                    models.ForeignKey(
                        help_text="Member who owns this account",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accounts",
                        to="bookkeeping.member",
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
                "indexes": [
                    models.Index(
                        fields=["member", "type"],
                        name="bk_account_member_type_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Transaction",
            fields=[
                _uuid_pk(),
                *_timestamps(),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Amount (always positive)",
                        max_digits=18,
                    ),
                ),
                ("date", models.DateField(db_index=True)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "type",
                    models.CharField(
                        choices=[("income", "Income"), ("expense", "Expense")],
                        max_length=10,
                    ),
                ),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transactions",
                        to="bookkeeping.account",
                    ),
                ),
                (
                    "category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transactions",
                        to="bookkeeping.category",
                    ),
                ),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transactions",
                        to="bookkeeping.member",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transactions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-date", "-created_at"],
                "indexes": [
                    models.Index(fields=["user", "date"], name="bk_txn_user_date_idx"),
                    models.Index(
                        fields=["account", "date"],
                        name="bk_txn_account_date_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(amount__gt=0),
                        name="transaction_amount_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Transfer",
            fields=[
                _uuid_pk(),
                *_timestamps(),
                (
                    "amount",
                    models.DecimalField(decimal_places=2, max_digits=18),
                ),
                (
                    "fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=18,
                    ),
                ),
                ("date", models.DateField(db_index=True)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "from_account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="outgoing_transfers",
                        to="bookkeeping.account",
                    ),
                ),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transfers",
                        to="bookkeeping.member",
                    ),
                ),
                (
                    "to_account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="incoming_transfers",
                        to="bookkeeping.account",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transfers",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-date", "-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(amount__gt=0),
                        name="transfer_amount_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(fee__gte=0),
                        name="transfer_fee_not_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            from_account=models.F("to_account"), _negated=True
                        ),
                        name="transfer_accounts_differ",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="BalanceAdjustment",
            fields=[
                _uuid_pk(),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "delta",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Signed change applied to the balance",
                        max_digits=18,
                    ),
                ),
                (
                    "balance_after",
                    models.DecimalField(decimal_places=2, max_digits=18),
                ),
                (
                    "reason",
                    models.CharField(
                        choices=[
                            ("opening", "Opening Balance"),
                            ("transaction_apply", "Transaction Applied"),
                            ("transaction_reverse", "Transaction Reversed"),
                            ("transfer_apply", "Transfer Applied"),
                            ("transfer_reverse", "Transfer Reversed"),
                        ],
                        max_length=30,
                    ),
                ),
                (
                    "transaction_id",
                    models.UUIDField(blank=True, db_index=True, null=True),
                ),
                (
                    "transfer_id",
                    models.UUIDField(blank=True, db_index=True, null=True),
                ),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="adjustments",
                        to="bookkeeping.account",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
