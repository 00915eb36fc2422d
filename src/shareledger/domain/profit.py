"""Profit aggregation over a time window."""

from datetime import datetime
from decimal import Decimal

from shareledger.database.base import Database
from shareledger.domain.entities import LogType, Transaction
from shareledger.domain.errors import StoreFailure, ValidationError
from shareledger.logging_config import get_logger
from shareledger.utils.money import ZERO, quantize

logger = get_logger(__name__)


def counts_toward_profit(txn: Transaction) -> bool:
    """Whether a transaction is recognized as profit.

    Only credits that were never deferred, or whose deferred amount has been
    paid off completely, are recognized.
    """
    if txn.log_type != LogType.CREDIT:
        return False
    return not txn.pay_later or txn.due_amount == 0


class ProfitAggregator:
    """Computes net profit for an owner over a half-open time window."""

    def __init__(self, db: Database):
        """Initialize profit aggregator.

        Args:
            db: Database instance
        """
        self.db = db

    def compute_profit(self, owner_id: int, start: datetime, end: datetime) -> Decimal:
        """Sum (amount - commission - collection) over recognized transactions.

        Args:
            owner_id: Owner whose transactions are aggregated
            start: Inclusive window start
            end: Exclusive window end

        Returns:
            Net profit, Decimal("0.00") when nothing matches

        Raises:
            ValidationError: If the window is empty or inverted
            StoreFailure: If transactions cannot be fetched
        """
        if start >= end:
            raise ValidationError(f"Window start {start} must be before end {end}")

        try:
            transactions = self.db.find_transactions_in_window(owner_id, start, end)
        except StoreFailure:
            logger.error(
                "Could not fetch transactions for profit",
                extra={"owner_id": owner_id, "start": start, "end": end},
            )
            raise

        total = sum(
            (txn.profit for txn in transactions if counts_toward_profit(txn)),
            ZERO,
        )
        return quantize(total)
