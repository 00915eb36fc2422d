"""Domain model entities for shareledger.

These are pure data classes representing business concepts, independent of
database schema. The services only ever see these, never ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class LogType(str, Enum):
    """Direction of a recorded transaction."""

    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


class PaymentType(str, Enum):
    """Settlement mode requested by the caller."""

    FULL = "FULL"
    PARTIAL = "PARTIAL"


class PaymentState(str, Enum):
    """Settlement state of a deferred transaction."""

    NONE = "NONE"
    PARTIAL = "PARTIAL"
    FULL = "FULL"


@dataclass(frozen=True)
class Owner:
    """Owner (business) with its aggregate due balance."""

    id: int
    name: str
    due_balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    owner_id: int
    amount: Decimal
    log_type: LogType
    created_at: datetime
    pay_later: bool
    due_amount: Decimal
    payment_state: PaymentState
    commission_amount: Optional[Decimal] = None
    collection_amount: Optional[Decimal] = None

    @property
    def is_settled(self) -> bool:
        """True when nothing remains due on the transaction."""
        return not self.pay_later or self.due_amount == 0

    @property
    def profit(self) -> Decimal:
        """Amount left after agent commission and operator collection."""
        return (
            self.amount
            - (self.commission_amount or Decimal("0"))
            - (self.collection_amount or Decimal("0"))
        )


@dataclass(frozen=True)
class CompanyShareDetails:
    """Company registration of an owner."""

    id: int
    owner_id: int
    business_name: str
    business_category: Optional[str]
    business_type: str
    number_of_shareholders: int


@dataclass(frozen=True)
class Shareholder:
    """Shareholder domain entity."""

    id: int
    owner_id: int
    name: str
    share_percentage: Decimal
    finance: Decimal
    share_profit: Decimal


@dataclass(frozen=True)
class ShareholderInput:
    """Shareholder data supplied when registering a company."""

    name: str
    share_percentage: Decimal


@dataclass(frozen=True)
class DistributionLine:
    """One shareholder's slice of a period's profit."""

    shareholder_id: int
    shareholder: str
    percentage: Decimal
    original_profit: Decimal
    finance_deducted: Decimal
    final_profit: Decimal

    def to_payload(self) -> dict:
        """Render the line in the response shape of the request layer."""
        return {
            "shareholder": self.shareholder,
            "percentage": str(self.percentage),
            "originalProfit": str(self.original_profit),
            "financeDeducted": str(self.finance_deducted),
            "finalProfit": str(self.final_profit),
        }


@dataclass(frozen=True)
class DistributionReport:
    """Result of distributing one period's profit."""

    month: str
    total_profit: Decimal
    lines: tuple[DistributionLine, ...]
    run_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_payload(self) -> dict:
        """Render the report in the response shape of the request layer."""
        return {
            "month": self.month,
            "totalProfit": str(self.total_profit),
            "shareDistribution": [line.to_payload() for line in self.lines],
        }


@dataclass(frozen=True)
class SettlementResult:
    """Outcome of a settlement against a deferred transaction."""

    transaction_id: int
    payment_type: PaymentType
    settled_amount: Decimal
    remaining_due: Decimal
    payment_state: PaymentState
    message: str = field(default="")

    def to_payload(self) -> dict:
        """Render the result in the response shape of the request layer."""
        payload = {"message": self.message}
        if self.payment_type == PaymentType.PARTIAL:
            payload["remainingDue"] = str(self.remaining_due)
        return payload
