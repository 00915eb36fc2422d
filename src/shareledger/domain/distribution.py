"""Profit distribution across shareholders."""

from decimal import Decimal
from typing import Optional

from shareledger.database.base import Database
from shareledger.domain.entities import DistributionLine, DistributionReport, Shareholder
from shareledger.domain.errors import (
    AlreadyDistributedError,
    ValidationError,
    bad_period_format,
    company_shares_not_found,
    period_already_distributed,
    period_out_of_range,
)
from shareledger.domain.profit import ProfitAggregator
from shareledger.logging_config import get_logger
from shareledger.utils.money import ZERO, quantize
from shareledger.utils.period import PeriodOutOfRangeError, month_window

logger = get_logger(__name__)

HUNDRED = Decimal("100")


def build_line(shareholder: Shareholder, total_profit: Decimal) -> DistributionLine:
    """Compute one shareholder's gross share, finance deduction and net share."""
    gross = quantize(total_profit * shareholder.share_percentage / HUNDRED)
    finance = quantize(shareholder.finance or ZERO)
    return DistributionLine(
        shareholder_id=shareholder.id,
        shareholder=shareholder.name,
        percentage=shareholder.share_percentage,
        original_profit=gross,
        finance_deducted=finance,
        final_profit=gross - finance,
    )


class DistributionService:
    """Service for distributing monthly profit to shareholders."""

    def __init__(self, db: Database, profit_aggregator: Optional[ProfitAggregator] = None):
        """Initialize distribution service.

        Args:
            db: Database instance
            profit_aggregator: Optional aggregator; one over ``db`` by default
        """
        self.db = db
        self.profit_aggregator = profit_aggregator or ProfitAggregator(db)

    def distribute(self, owner_id: int, period: str, rerun: bool = False) -> DistributionReport:
        """Distribute a month's profit across the owner's shareholders.

        Each shareholder's cumulative share profit grows by its net share.
        The run, its line items and all cumulative updates are stored as one
        unit; a period is applied at most once unless ``rerun`` replaces the
        earlier run.

        Args:
            owner_id: Owner (caller) ID
            period: Month label in YYYY-MM form
            rerun: Replace an existing distribution for the period

        Returns:
            DistributionReport with one line per shareholder in roster order

        Raises:
            ValidationError: If the owner has no roster or the period is malformed
            AlreadyDistributedError: If the period was distributed and rerun is False
            StoreFailure: If profit cannot be computed or the run cannot be stored
        """
        roster = self.db.get_shareholder_roster(owner_id)
        if not roster:
            raise ValidationError(company_shares_not_found())

        try:
            start, end = month_window(period)
        except PeriodOutOfRangeError:
            raise ValidationError(period_out_of_range(period))
        except ValueError:
            raise ValidationError(bad_period_format(period))

        if not rerun and self.db.get_distribution_run(owner_id, period) is not None:
            logger.warning(
                "Distribution rejected, period already applied",
                extra={"owner_id": owner_id, "period": period},
            )
            raise AlreadyDistributedError(period_already_distributed(period))

        total_profit = self.profit_aggregator.compute_profit(owner_id, start, end)
        lines = tuple(build_line(shareholder, total_profit) for shareholder in roster)

        run_id = self.db.record_distribution(
            owner_id=owner_id,
            period=period,
            total_profit=total_profit,
            lines=lines,
            replace=rerun,
        )
        logger.info(
            "Distributed profit",
            extra={
                "owner_id": owner_id,
                "period": period,
                "total_profit": total_profit,
                "shareholders": len(lines),
                "run_id": run_id,
            },
        )
        return DistributionReport(month=period, total_profit=total_profit, lines=lines, run_id=run_id)

    def get_report(self, owner_id: int, period: str) -> Optional[DistributionReport]:
        """Get a previously stored distribution.

        Raises:
            ValidationError: If the period is malformed
        """
        try:
            month_window(period)
        except PeriodOutOfRangeError:
            raise ValidationError(period_out_of_range(period))
        except ValueError:
            raise ValidationError(bad_period_format(period))
        return self.db.get_distribution_run(owner_id, period)

    def list_runs(self, owner_id: int) -> list[DistributionReport]:
        """List the owner's stored distributions, most recent first."""
        return self.db.list_distribution_runs(owner_id)
