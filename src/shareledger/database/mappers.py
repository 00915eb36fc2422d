"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic so services never hold ORM rows
outside of the session that loaded them.
"""

from shareledger.domain import entities as domain
from shareledger.database.models import (
    Owner as ORMOwner,
    Transaction as ORMTransaction,
    CompanyShareDetails as ORMCompanyShareDetails,
    Shareholder as ORMShareholder,
    DistributionRun as ORMDistributionRun,
    DistributionLine as ORMDistributionLine,
)
from shareledger.utils.money import to_decimal


def owner_to_domain(orm_owner: ORMOwner) -> domain.Owner:
    """Convert SQLAlchemy Owner model to domain Owner entity."""
    return domain.Owner(
        id=orm_owner.id,
        name=orm_owner.name,
        due_balance=to_decimal(orm_owner.due_balance),
        created_at=orm_owner.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    commission = orm_transaction.commission
    collection = orm_transaction.collection
    return domain.Transaction(
        id=orm_transaction.id,
        owner_id=orm_transaction.owner_id,
        amount=to_decimal(orm_transaction.amount),
        log_type=domain.LogType(orm_transaction.log_type),
        created_at=orm_transaction.created_at,
        pay_later=orm_transaction.pay_later,
        due_amount=to_decimal(orm_transaction.due_amount),
        payment_state=domain.PaymentState(orm_transaction.payment_state),
        commission_amount=to_decimal(commission.amount) if commission is not None else None,
        collection_amount=to_decimal(collection.amount) if collection is not None else None,
    )


def company_to_domain(orm_company: ORMCompanyShareDetails) -> domain.CompanyShareDetails:
    """Convert SQLAlchemy CompanyShareDetails model to domain entity."""
    return domain.CompanyShareDetails(
        id=orm_company.id,
        owner_id=orm_company.owner_id,
        business_name=orm_company.business_name,
        business_category=orm_company.business_category,
        business_type=orm_company.business_type,
        number_of_shareholders=orm_company.number_of_shareholders,
    )


def shareholder_to_domain(orm_shareholder: ORMShareholder) -> domain.Shareholder:
    """Convert SQLAlchemy Shareholder model to domain Shareholder entity."""
    return domain.Shareholder(
        id=orm_shareholder.id,
        owner_id=orm_shareholder.owner_id,
        name=orm_shareholder.name,
        share_percentage=to_decimal(orm_shareholder.share_percentage),
        finance=to_decimal(orm_shareholder.finance),
        share_profit=to_decimal(orm_shareholder.share_profit),
    )


def distribution_line_to_domain(orm_line: ORMDistributionLine) -> domain.DistributionLine:
    """Convert SQLAlchemy DistributionLine model to domain entity."""
    return domain.DistributionLine(
        shareholder_id=orm_line.shareholder_id,
        shareholder=orm_line.shareholder_name,
        percentage=to_decimal(orm_line.percentage),
        original_profit=to_decimal(orm_line.gross_share),
        finance_deducted=to_decimal(orm_line.finance_deducted),
        final_profit=to_decimal(orm_line.net_share),
    )


def distribution_run_to_domain(orm_run: ORMDistributionRun) -> domain.DistributionReport:
    """Convert SQLAlchemy DistributionRun model to a domain DistributionReport."""
    return domain.DistributionReport(
        month=orm_run.period,
        total_profit=to_decimal(orm_run.total_profit),
        lines=tuple(distribution_line_to_domain(line) for line in orm_run.lines),
        run_id=orm_run.id,
        created_at=orm_run.created_at,
    )
