"""
Bookkeeping services.

Posting engine:
    BalanceService: Applies/reverses effects on account balances
    OwnershipValidator: Confirms references belong to the requesting user
    TransactionService: Transaction create/update/delete
    TransferService: Transfer create/delete

Records:
    AccountService: Opens accounts (with an audited opening balance)
    RecordService: Protected deletes and per-user purge
"""

from .balance import BalanceService, balance_delta
from .ownership import OwnershipValidator
from .records import AccountService, RecordService
from .transactions import TransactionService
from .transfers import TransferService

__all__ = [
    "AccountService",
    "BalanceService",
    "OwnershipValidator",
    "RecordService",
    "TransactionService",
    "TransferService",
    "balance_delta",
]
