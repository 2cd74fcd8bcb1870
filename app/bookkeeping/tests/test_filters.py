"""
Tests for the transaction and transfer list filters.

Rows are created with factories, so balances are not involved here.
"""

import datetime
from decimal import Decimal

import pytest
from rest_framework import status

from bookkeeping.models import TransactionType
from bookkeeping.tests.factories import (
    AccountFactory,
    CategoryFactory,
    TransactionFactory,
    TransferFactory,
)

TRANSACTIONS_URL = "/api/v1/transactions/"
TRANSFERS_URL = "/api/v1/transfers/"


@pytest.fixture
def account(member):
    return AccountFactory(member=member)


@pytest.fixture
def ledger(account, expense_category, income_category):
    """Three transactions in May 2024 on one account."""
    return {
        "rent": TransactionFactory(
            account=account,
            category=expense_category,
            amount=Decimal("500.00"),
            date=datetime.date(2024, 5, 1),
            description="Monthly RENT",
        ),
        "salary": TransactionFactory(
            account=account,
            category=income_category,
            type=TransactionType.INCOME,
            amount=Decimal("1000.00"),
            date=datetime.date(2024, 5, 25),
        ),
        "coffee": TransactionFactory(
            account=account,
            category=expense_category,
            amount=Decimal("4.50"),
            date=datetime.date(2024, 5, 10),
            description="coffee",
        ),
    }


def _ids(response):
    return [row["id"] for row in response.data["results"]]


class TestTransactionFilters:
    """Tests for TransactionFilter on GET /api/v1/transactions/."""

    def test_default_order_is_newest_date_first(self, authenticated_client, ledger):
        """Without sort parameters the list is ordered by date, newest first."""
        response = authenticated_client.get(TRANSACTIONS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert _ids(response) == [
            str(ledger["salary"].id),
            str(ledger["coffee"].id),
            str(ledger["rent"].id),
        ]

    def test_filter_by_type(self, authenticated_client, ledger):
        """?type=income returns only income postings."""
        response = authenticated_client.get(TRANSACTIONS_URL, {"type": "income"})

        assert _ids(response) == [str(ledger["salary"].id)]

    def test_filter_by_category(self, authenticated_client, ledger, income_category):
        """?category_id= narrows to that category."""
        response = authenticated_client.get(
            TRANSACTIONS_URL, {"category_id": str(income_category.id)}
        )

        assert response.data["count"] == 1

    def test_filter_by_account_excludes_other_accounts(
        self, authenticated_client, ledger, member, account
    ):
        """?account_id= leaves out postings on the member's other accounts."""
        TransactionFactory(account=AccountFactory(member=member))

        response = authenticated_client.get(TRANSACTIONS_URL, {"account_id": str(account.id)})

        assert response.data["count"] == 3

    def test_date_range_is_inclusive(self, authenticated_client, ledger):
        """Both ends of start_date..end_date are included."""
        response = authenticated_client.get(
            TRANSACTIONS_URL, {"start_date": "2024-05-01", "end_date": "2024-05-10"}
        )

        assert set(_ids(response)) == {str(ledger["rent"].id), str(ledger["coffee"].id)}

    def test_half_open_range_is_ignored(self, authenticated_client, ledger):
        """A start_date without end_date does not filter at all."""
        response = authenticated_client.get(TRANSACTIONS_URL, {"start_date": "2024-05-20"})

        assert response.data["count"] == 3

    def test_amount_bounds(self, authenticated_client, ledger):
        """min_amount and max_amount are inclusive bounds."""
        response = authenticated_client.get(
            TRANSACTIONS_URL, {"min_amount": "4.50", "max_amount": "500"}
        )

        assert set(_ids(response)) == {str(ledger["rent"].id), str(ledger["coffee"].id)}

    def test_description_is_case_insensitive_substring(self, authenticated_client, ledger):
        """?description= matches any part of the text, ignoring case."""
        response = authenticated_client.get(TRANSACTIONS_URL, {"description": "rent"})

        assert _ids(response) == [str(ledger["rent"].id)]

    def test_sort_by_amount_ascending(self, authenticated_client, ledger):
        """sort_by=amount with sort_order=asc orders smallest first."""
        response = authenticated_client.get(
            TRANSACTIONS_URL, {"sort_by": "amount", "sort_order": "asc"}
        )

        assert [row["amount"] for row in response.data["results"]] == [
            "4.50",
            "500.00",
            "1000.00",
        ]

    def test_unknown_sort_field_falls_back_to_date(self, authenticated_client, ledger):
        """Unknown sort_by and sort_order values fall back to date descending."""
        response = authenticated_client.get(
            TRANSACTIONS_URL, {"sort_by": "balance", "sort_order": "sideways"}
        )

        assert _ids(response)[0] == str(ledger["salary"].id)

    def test_other_users_rows_are_never_listed(self, other_client, ledger):
        """Another user sees none of these postings."""
        response = other_client.get(TRANSACTIONS_URL)

        assert response.data["count"] == 0

    def test_pagination_with_limit(self, authenticated_client, ledger):
        """page and limit select the slice and are echoed back."""
        response = authenticated_client.get(TRANSACTIONS_URL, {"limit": 2, "page": 2})

        assert response.data["count"] == 3
        assert response.data["page"] == 2
        assert response.data["limit"] == 2
        assert _ids(response) == [str(ledger["rent"].id)]
        assert response.data["next"] is None

    def test_limit_is_capped(self, authenticated_client, ledger):
        """A limit above the maximum is clamped to 100."""
        response = authenticated_client.get(TRANSACTIONS_URL, {"limit": 1000})

        assert response.data["limit"] == 100


class TestTransferFilters:
    """Tests for TransferFilter on GET /api/v1/transfers/."""

    def test_account_filter_matches_either_side(self, authenticated_client, member):
        """?account_id= matches transfers from or to the account."""
        shared = AccountFactory(member=member)
        outgoing = TransferFactory(from_account=shared)
        incoming = TransferFactory(
            from_account=AccountFactory(member=member), to_account=shared
        )
        TransferFactory(from_account=AccountFactory(member=member))

        response = authenticated_client.get(TRANSFERS_URL, {"account_id": str(shared.id)})

        assert set(_ids(response)) == {str(outgoing.id), str(incoming.id)}

    def test_member_filter(self, authenticated_client, member, other_member):
        """?member_id= returns only that member's transfers."""
        mine = TransferFactory(from_account=AccountFactory(member=member))
        TransferFactory(from_account=AccountFactory(member=other_member))

        response = authenticated_client.get(TRANSFERS_URL, {"member_id": str(member.id)})

        assert _ids(response) == [str(mine.id)]


class TestCategoryFilter:
    """Tests for CategoryFilter on GET /api/v1/categories/."""

    def test_filter_by_type(self, authenticated_client, expense_category, income_category):
        """?type=expense returns the user's expense categories only."""
        CategoryFactory()  # Another user's category

        response = authenticated_client.get("/api/v1/categories/", {"type": "expense"})

        assert [row["id"] for row in response.data] == [str(expense_category.id)]
