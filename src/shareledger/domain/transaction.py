"""Transaction domain service."""

from typing import Optional
from datetime import datetime
from decimal import Decimal
from shareledger.database.base import Database
from shareledger.domain.entities import LogType, Transaction as TransactionEntity
from shareledger.domain.errors import (
    NotFoundOrUnauthorizedError,
    ValidationError,
    owner_not_found,
    transaction_not_found,
)
from shareledger.logging_config import get_logger
from shareledger.utils.money import quantize

logger = get_logger(__name__)


class TransactionService:
    """Service for recording and viewing an owner's transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_transaction(
        self,
        owner_id: int,
        amount: Decimal,
        log_type: LogType = LogType.CREDIT,
        pay_later: bool = False,
        created_at: Optional[datetime] = None,
        commission_amount: Optional[Decimal] = None,
        collection_amount: Optional[Decimal] = None,
    ) -> int:
        """Record a transaction.

        Amounts are rounded to the minor unit before anything is stored. A
        pay-later transaction starts with its whole amount due, and the
        owner's aggregate due balance grows by the same amount.

        Args:
            owner_id: Owner (caller) ID
            amount: Transaction amount, positive
            log_type: CREDIT or DEBIT
            pay_later: Defer payment of the amount
            created_at: Optional creation time (defaults to now)
            commission_amount: Optional agent commission
            collection_amount: Optional operator collection

        Returns:
            Transaction ID

        Raises:
            ValidationError: If amounts are invalid
            NotFoundOrUnauthorizedError: If the owner doesn't exist
        """
        amount = quantize(amount)
        if commission_amount is not None:
            commission_amount = quantize(commission_amount)
        if collection_amount is not None:
            collection_amount = quantize(collection_amount)

        if amount <= 0:
            raise ValidationError("Transaction amount must be greater than zero")
        for label, value in (("Commission", commission_amount), ("Collection", collection_amount)):
            if value is not None and value < 0:
                raise ValidationError(f"{label} amount must not be negative")

        if self.db.get_owner(owner_id) is None:
            raise NotFoundOrUnauthorizedError(owner_not_found(owner_id))

        transaction_id = self.db.create_transaction(
            owner_id=owner_id,
            amount=amount,
            log_type=LogType(log_type),
            pay_later=pay_later,
            created_at=created_at,
            commission_amount=commission_amount,
            collection_amount=collection_amount,
        )
        logger.info(
            "Recorded transaction",
            extra={"owner_id": owner_id, "transaction_id": transaction_id, "pay_later": pay_later},
        )
        return transaction_id

    def get_transaction(self, owner_id: int, transaction_id: int) -> TransactionEntity:
        """Get one of the owner's transactions.

        Raises:
            NotFoundOrUnauthorizedError: If missing or owned by someone else
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None or txn.owner_id != owner_id:
            raise NotFoundOrUnauthorizedError(transaction_not_found())
        return txn

    def list_transactions(
        self,
        owner_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        outstanding_only: bool = False,
    ) -> list[TransactionEntity]:
        """List the owner's transactions, newest first.

        Args:
            owner_id: Owner (caller) ID
            start: Optional inclusive start
            end: Optional exclusive end
            outstanding_only: Only deferred transactions that still have a due amount
        """
        return self.db.list_transactions(
            owner_id=owner_id, start=start, end=end, outstanding_only=outstanding_only
        )
