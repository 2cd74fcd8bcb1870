"""
Base service layer patterns for business logic encapsulation.

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

    Services raise core.exceptions subclasses for expected failures
    (validation, ownership, business rules). Raising is what makes the
    surrounding transaction.atomic() block roll back, so bookkeeping
    services never swallow a failure to return a value instead.

Usage:
    from core.services import BaseService

    class MemberService(BaseService):
        @classmethod
        def create(cls, user, name: str) -> Member:
            with cls.atomic():
                member = Member.objects.create(user=user, name=name)

            cls.get_logger().info(f"Created member {member.id}")
            return member

Related:
    - core.exceptions: Exception hierarchy raised by services
    - core.exception_handlers: Converts those exceptions to API responses
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Raise core.exceptions subclasses for expected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.

        Example:
            class TransferService(BaseService):
                @classmethod
                def create(cls, ...):
                    cls.get_logger().info(f"Posting transfer of {amount}")
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation raises, all
        changes are rolled back.

        Example:
            with cls.atomic():
                txn = Transaction.objects.create(...)
                BalanceService.adjust(...)
                # If the adjustment raises, the insert is rolled back too

        Note:
            This is a thin wrapper around Django's transaction.atomic().
            Use it to make transaction boundaries explicit in service code.
        """
        with transaction.atomic():
            yield

    @staticmethod
    def in_atomic_block() -> bool:
        """Return True when called inside an open transaction.atomic() block."""
        return transaction.get_connection().in_atomic_block
