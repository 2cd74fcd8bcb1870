"""
Tests for bookkeeping app.

This package contains test modules for:
- test_models.py: Model defaults, properties and database constraints
- test_types.py: Typed payloads and value parsing
- test_balance.py: Balance adjustment engine
- test_ownership.py: Ownership validation
- test_transaction_service.py: Transaction lifecycle
- test_transfer_service.py: Transfer lifecycle
- test_services.py: Account opening and record deletion rules
- test_filters.py: Transaction and transfer list filters
- test_views.py: API endpoint tests
- test_integration.py: Multi-step ledger scenarios

Usage:
    pytest bookkeeping/tests/
    pytest bookkeeping/tests/test_balance.py
"""
