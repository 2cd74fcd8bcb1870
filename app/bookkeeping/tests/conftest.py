"""
Test configuration and fixtures for bookkeeping tests.

This module provides:
- A user with one member, categories and two accounts
- Helpers that post through the services so balances follow
- API clients authenticated with a JWT for that user

Usage:
    def test_example(authenticated_client, bank_account):
        response = authenticated_client.get(f"/api/v1/accounts/{bank_account.id}/")
        assert response.data["balance"] == "100.00"
"""

import datetime
import logging
from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from bookkeeping.models import AccountType, TransactionType
from bookkeeping.services import AccountService, TransactionService, TransferService
from bookkeeping.tests.factories import CategoryFactory, MemberFactory
from bookkeeping.types import TransactionParams, TransferParams

POSTING_DATE = datetime.date(2024, 5, 1)


# =============================================================================
# Ownership Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    return UserFactory()


@pytest.fixture
def other_user(db):
    """A second user whose records must stay invisible to `user`."""
    return UserFactory()


@pytest.fixture
def member(user):
    return MemberFactory(user=user, name="Alice")


@pytest.fixture
def other_member(user):
    """Another member of the same household."""
    return MemberFactory(user=user, name="Bob")


@pytest.fixture
def expense_category(user):
    return CategoryFactory(user=user, name="Groceries", type=TransactionType.EXPENSE)


@pytest.fixture
def income_category(user):
    return CategoryFactory(user=user, name="Salary", type=TransactionType.INCOME)


# =============================================================================
# Account Fixtures
# =============================================================================


@pytest.fixture
def bank_account(user, member):
    """Bank account opened with 100.00, recorded as an opening adjustment."""
    return AccountService.open(
        user,
        member.id,
        name="Main bank",
        type=AccountType.BANK,
        opening_balance=Decimal("100.00"),
    )


@pytest.fixture
def wallet_account(user, member):
    """E-wallet opened with 10.00."""
    return AccountService.open(
        user,
        member.id,
        name="Wallet",
        type=AccountType.E_WALLET,
        opening_balance=Decimal("10.00"),
    )


# =============================================================================
# Posting Helpers
# =============================================================================


@pytest.fixture
def post_transaction(user, member, expense_category, income_category):
    """
    Post a transaction through TransactionService.

    Usage:
        txn = post_transaction(bank_account, "25.00")
        txn = post_transaction(bank_account, "50", type=TransactionType.INCOME)
    """

    def _post(account, amount, type=TransactionType.EXPENSE, **overrides):
        category = income_category if type == TransactionType.INCOME else expense_category
        fields = {
            "member_id": account.member_id,
            "account_id": account.id,
            "category_id": category.id,
            "amount": Decimal(str(amount)),
            "date": POSTING_DATE,
            "type": type,
        }
        fields.update(overrides)
        return TransactionService.create(user, TransactionParams(**fields))

    return _post


@pytest.fixture
def post_transfer(user):
    """
    Post a transfer through TransferService.

    Usage:
        transfer = post_transfer(bank_account, wallet_account, "40", fee="5")
    """

    def _post(from_account, to_account, amount, fee="0", **overrides):
        fields = {
            "member_id": from_account.member_id,
            "from_account_id": from_account.id,
            "to_account_id": to_account.id,
            "amount": Decimal(str(amount)),
            "fee": Decimal(str(fee)),
            "date": POSTING_DATE,
        }
        fields.update(overrides)
        return TransferService.create(user, TransferParams(**fields))

    return _post


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """API client authenticated with a JWT for `user`."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def other_client(other_user):
    """API client authenticated as `other_user`."""
    client = APIClient()
    refresh = RefreshToken.for_user(other_user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def bookkeeping_logs(caplog, monkeypatch):
    """
    Capture records from the bookkeeping loggers.

    The bookkeeping logger does not propagate in settings, so it is
    re-attached to the root logger where caplog listens.
    """
    monkeypatch.setattr(logging.getLogger("bookkeeping"), "propagate", True)
    caplog.set_level(logging.INFO, logger="bookkeeping")
    return caplog
