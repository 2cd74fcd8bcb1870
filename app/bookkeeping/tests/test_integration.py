"""
End-to-end ledger scenarios through the API.

These tests follow one household through a sequence of postings and
check, after every step, that each balance equals its opening amount
plus the net effect of the transactions and transfers still stored.
"""

from decimal import Decimal

from django.db.models import Sum
from rest_framework import status

from bookkeeping.models import Account, BalanceAdjustment, Transaction, TransactionType, Transfer

TRANSACTIONS_URL = "/api/v1/transactions/"
TRANSFERS_URL = "/api/v1/transfers/"


def _expected_balance(account, opening):
    """Opening amount plus the net effect of every stored posting."""
    def total(queryset, field="amount"):
        return queryset.aggregate(total=Sum(field))["total"] or Decimal("0")

    income = total(Transaction.objects.filter(account=account, type=TransactionType.INCOME))
    expense = total(Transaction.objects.filter(account=account, type=TransactionType.EXPENSE))
    transfers_out = Transfer.objects.filter(from_account=account)
    sent = total(transfers_out) + total(transfers_out, "fee")
    received = total(Transfer.objects.filter(to_account=account))
    return opening + income - expense - sent + received


def _assert_conserved(*accounts_with_opening):
    for account, opening in accounts_with_opening:
        stored = Account.objects.get(id=account.id).balance
        assert stored == _expected_balance(account, opening)
        audited = BalanceAdjustment.objects.filter(account=account).aggregate(
            total=Sum("delta")
        )["total"]
        assert stored == audited


class TestLedgerJourney:
    """End-to-end postings through the API with balances checked after every step."""

    def test_postings_edits_and_deletes_conserve_balances(
        self,
        authenticated_client,
        member,
        bank_account,
        wallet_account,
        expense_category,
        income_category,
    ):
        """Every balance equals opening amount plus what is still posted at each step."""
        opening = ((bank_account, Decimal("100")), (wallet_account, Decimal("10")))

        # Income of 50 on the bank account
        response = authenticated_client.post(
            TRANSACTIONS_URL,
            {
                "member_id": str(member.id),
                "account_id": str(bank_account.id),
                "category_id": str(income_category.id),
                "amount": "50",
                "date": "2024-05-01",
                "type": "income",
            },
            format="json",
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["account"]["balance"] == "150.00"
        income_id = response.data["id"]
        _assert_conserved(*opening)

        # Expense of 30 from the wallet is refused, nothing changes
        response = authenticated_client.post(
            TRANSACTIONS_URL,
            {
                "member_id": str(member.id),
                "account_id": str(wallet_account.id),
                "category_id": str(expense_category.id),
                "amount": "30",
                "date": "2024-05-02",
                "type": "expense",
            },
            format="json",
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        _assert_conserved(*opening)

        # Transfer 40 + 5 fee from bank to wallet
        response = authenticated_client.post(
            TRANSFERS_URL,
            {
                "member_id": str(member.id),
                "from_account_id": str(bank_account.id),
                "to_account_id": str(wallet_account.id),
                "amount": "40",
                "fee": "5",
                "date": "2024-05-03",
            },
            format="json",
        )
        assert response.status_code == status.HTTP_201_CREATED
        transfer_id = response.data["id"]
        assert response.data["from_account"]["balance"] == "105.00"
        assert response.data["to_account"]["balance"] == "50.00"
        _assert_conserved(*opening)

        # Now the wallet can pay 30
        response = authenticated_client.post(
            TRANSACTIONS_URL,
            {
                "member_id": str(member.id),
                "account_id": str(wallet_account.id),
                "category_id": str(expense_category.id),
                "amount": "30",
                "date": "2024-05-04",
                "type": "expense",
            },
            format="json",
        )
        assert response.status_code == status.HTTP_201_CREATED
        expense_id = response.data["id"]
        _assert_conserved(*opening)

        # Move the expense to the bank account and raise it to 60
        response = authenticated_client.patch(
            f"{TRANSACTIONS_URL}{expense_id}/",
            {"account_id": str(bank_account.id), "amount": "60"},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK
        _assert_conserved(*opening)

        # Deleting the income pushes the bank account negative; reversals always succeed
        response = authenticated_client.delete(f"{TRANSACTIONS_URL}{income_id}/")
        assert response.status_code == status.HTTP_204_NO_CONTENT
        _assert_conserved(*opening)

        # Deleting the transfer restores both legs
        response = authenticated_client.delete(f"{TRANSFERS_URL}{transfer_id}/")
        assert response.status_code == status.HTTP_204_NO_CONTENT
        _assert_conserved(*opening)

        bank_account.refresh_from_db()
        wallet_account.refresh_from_db()
        assert bank_account.balance == Decimal("40.00")
        assert wallet_account.balance == Decimal("10.00")

    def test_spend_then_refund_returns_to_start(
        self, authenticated_client, member, bank_account, expense_category
    ):
        """Posting and deleting an expense returns the account to where it began."""
        payload = {
            "member_id": str(member.id),
            "account_id": str(bank_account.id),
            "category_id": str(expense_category.id),
            "amount": "100",
            "date": "2024-05-01",
            "type": "expense",
        }

        first = authenticated_client.post(TRANSACTIONS_URL, payload, format="json")
        second = authenticated_client.post(TRANSACTIONS_URL, payload, format="json")

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert second.data["error_code"] == "INSUFFICIENT_BALANCE"

        authenticated_client.delete(f"{TRANSACTIONS_URL}{first.data['id']}/")

        bank_account.refresh_from_db()
        assert bank_account.balance == Decimal("100.00")
        _assert_conserved((bank_account, Decimal("100")))
