"""
Bookkeeping application.

Household finance records and the posting engine that keeps account
balances consistent with the transactions and transfers posted against them.

Key components:
    - models: Member, Account, Category, Transaction, Transfer, BalanceAdjustment
    - services: Posting engine (see bookkeeping.services)
    - views: REST endpoints under /api/v1/

Usage:
    from bookkeeping.services import TransactionService
    from bookkeeping.types import TransactionParams
"""
