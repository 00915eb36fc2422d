"""Abstract ledger store interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from shareledger.domain.entities import (
    CompanyShareDetails,
    DistributionLine,
    DistributionReport,
    LogType,
    Owner,
    PaymentState,
    Shareholder,
    ShareholderInput,
    Transaction,
)


class Database(ABC):
    """Abstract ledger store for shareledger.

    Every method is its own unit of work: it either applies all of its writes
    or none of them, and reports persistence problems as ``StoreFailure``.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Owner operations
    @abstractmethod
    def create_owner(self, name: str) -> int:
        """Create an owner with a zero due balance. Returns owner ID."""
        pass

    @abstractmethod
    def get_owner(self, owner_id: int) -> Optional[Owner]:
        """Get owner by ID."""
        pass

    @abstractmethod
    def get_owner_aggregate_due(self, owner_id: int) -> Optional[Decimal]:
        """Get the owner's aggregate due balance, or None for unknown owners."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        owner_id: int,
        amount: Decimal,
        log_type: LogType,
        pay_later: bool,
        created_at: Optional[datetime] = None,
        commission_amount: Optional[Decimal] = None,
        collection_amount: Optional[Decimal] = None,
    ) -> int:
        """Create a transaction with its commission/collection sub-records.

        Deferred transactions start with the full amount due, and the owner's
        aggregate due balance is increased by the same amount in the same
        unit of work. Returns transaction ID.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def find_transactions_in_window(
        self, owner_id: int, start: datetime, end: datetime
    ) -> list[Transaction]:
        """Get the owner's transactions created in the half-open window [start, end).

        Commission and collection amounts are attached to each transaction.
        """
        pass

    @abstractmethod
    def list_transactions(
        self,
        owner_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        outstanding_only: bool = False,
    ) -> list[Transaction]:
        """List the owner's transactions, newest first.

        Args:
            owner_id: Owner ID
            start: Optional inclusive lower bound on creation time
            end: Optional exclusive upper bound on creation time
            outstanding_only: If True, only deferred transactions with due > 0
        """
        pass

    @abstractmethod
    def apply_settlement(
        self,
        transaction_id: int,
        owner_id: int,
        expected_due: Decimal,
        expected_state: PaymentState,
        new_due: Decimal,
        new_state: PaymentState,
        settled_amount: Decimal,
    ) -> bool:
        """Apply a settlement as one compare-and-swap unit of work.

        The transaction is updated only if its due amount and payment state
        still equal the expected values; the owner's aggregate due balance is
        decremented by ``settled_amount`` atomically in the same unit.

        Returns:
            True if applied, False if the transaction changed concurrently
            (nothing is written in that case)

        Raises:
            BalanceInconsistencyError: If the owner's due balance is lower than
                ``settled_amount``; nothing is written
            StoreFailure: On persistence errors; nothing is written
        """
        pass

    # Company and shareholder operations
    @abstractmethod
    def create_company(
        self,
        owner_id: int,
        business_name: str,
        business_category: Optional[str],
        business_type: str,
        shareholders: Sequence[ShareholderInput],
    ) -> int:
        """Create company share details and its shareholders. Returns company ID."""
        pass

    @abstractmethod
    def get_company(self, owner_id: int) -> Optional[CompanyShareDetails]:
        """Get the owner's company share details."""
        pass

    @abstractmethod
    def get_shareholder_roster(self, owner_id: int) -> Optional[list[Shareholder]]:
        """Get the owner's shareholders in creation order.

        Returns None when the owner has no company share details.
        """
        pass

    @abstractmethod
    def get_shareholder(self, shareholder_id: int) -> Optional[Shareholder]:
        """Get shareholder by ID."""
        pass

    @abstractmethod
    def update_shareholder_finance(self, shareholder_id: int, finance: Decimal) -> None:
        """Set a shareholder's finance liability."""
        pass

    # Distribution operations
    @abstractmethod
    def record_distribution(
        self,
        owner_id: int,
        period: str,
        total_profit: Decimal,
        lines: Sequence[DistributionLine],
        replace: bool = False,
    ) -> int:
        """Persist a distribution run and apply it to shareholders.

        Inserts the run and its line items and adds each line's final profit to
        the shareholder's cumulative share profit, all in one unit of work.
        With ``replace``, an existing run for the period is reversed and
        removed first.

        Returns:
            Run ID

        Raises:
            AlreadyDistributedError: If a run exists and ``replace`` is False
            StoreFailure: On persistence errors; nothing is written
        """
        pass

    @abstractmethod
    def get_distribution_run(self, owner_id: int, period: str) -> Optional[DistributionReport]:
        """Get the stored distribution run for an owner and period."""
        pass

    @abstractmethod
    def list_distribution_runs(self, owner_id: int) -> list[DistributionReport]:
        """List the owner's distribution runs, most recent period first."""
        pass
