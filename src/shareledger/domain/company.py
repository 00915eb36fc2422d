"""Company share registration and shareholder domain service."""

from decimal import Decimal
from typing import Optional, Sequence

from shareledger.database.base import Database
from shareledger.domain.entities import CompanyShareDetails, Shareholder, ShareholderInput
from shareledger.domain.errors import (
    ConflictError,
    NotFoundOrUnauthorizedError,
    ValidationError,
    company_shares_not_found,
    owner_not_found,
    shareholder_not_found,
)
from shareledger.logging_config import get_logger
from shareledger.utils.money import quantize

logger = get_logger(__name__)

# Business types that cannot have shareholders
SINGLE_OWNER_TYPES = ("Sole Proprietorship", "OPC")

HUNDRED = Decimal("100")


class CompanyService:
    """Service for company share details and shareholders."""

    def __init__(self, db: Database):
        """Initialize company service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_company_shares(
        self,
        owner_id: int,
        business_name: str,
        business_type: str,
        number_of_shareholders: int,
        shareholders: Sequence[ShareholderInput],
        business_category: Optional[str] = None,
    ) -> int:
        """Register the owner's company and its shareholder roster.

        Args:
            owner_id: Owner (caller) ID
            business_name: Business name
            business_type: Business type, e.g. "Partnership" or "OPC"
            number_of_shareholders: Declared number of shareholders
            shareholders: Shareholder names and percentages
            business_category: Optional business category

        Returns:
            Company ID

        Raises:
            ValidationError: If the roster does not match the declared count or
                business type, or percentages are out of range
            NotFoundOrUnauthorizedError: If the owner doesn't exist
            ConflictError: If the owner already registered a company
        """
        if not business_name or not business_name.strip():
            raise ValidationError("Business name is required")

        if business_type in SINGLE_OWNER_TYPES and number_of_shareholders > 0:
            raise ValidationError(
                "No shareholders required for Sole Proprietorship or OPC business type"
            )

        if len(shareholders) != number_of_shareholders:
            raise ValidationError(
                f"Expected {number_of_shareholders} shareholders, but got {len(shareholders)}"
            )

        total = Decimal("0")
        for shareholder in shareholders:
            if not shareholder.name.strip():
                raise ValidationError("Shareholder name is required")
            if not Decimal("0") <= shareholder.share_percentage <= HUNDRED:
                raise ValidationError(
                    f"Share percentage for '{shareholder.name}' must be between 0 and 100"
                )
            total += shareholder.share_percentage
        if total > HUNDRED:
            raise ValidationError(f"Share percentages add up to {total}, more than 100")

        if self.db.get_owner(owner_id) is None:
            raise NotFoundOrUnauthorizedError(owner_not_found(owner_id))
        if self.db.get_company(owner_id) is not None:
            raise ConflictError(f"Company share details already exist for owner {owner_id}")

        company_id = self.db.create_company(
            owner_id=owner_id,
            business_name=business_name.strip(),
            business_category=business_category,
            business_type=business_type,
            shareholders=[
                ShareholderInput(name=sh.name.strip(), share_percentage=sh.share_percentage)
                for sh in shareholders
            ],
        )
        logger.info(
            "Registered company shares",
            extra={"owner_id": owner_id, "company_id": company_id, "shareholders": len(shareholders)},
        )
        return company_id

    def get_company(self, owner_id: int) -> Optional[CompanyShareDetails]:
        """Get the owner's company share details."""
        return self.db.get_company(owner_id)

    def list_shareholders(self, owner_id: int) -> list[Shareholder]:
        """List the owner's shareholders in roster order.

        Raises:
            ValidationError: If the owner has no company share details
        """
        roster = self.db.get_shareholder_roster(owner_id)
        if roster is None:
            raise ValidationError(company_shares_not_found())
        return roster

    def set_finance(self, owner_id: int, shareholder_id: int, amount: Decimal) -> Shareholder:
        """Set the finance liability deducted from a shareholder's payouts.

        Raises:
            NotFoundOrUnauthorizedError: If the shareholder is missing or not the owner's
            ValidationError: If the amount is negative
        """
        shareholder = self.db.get_shareholder(shareholder_id)
        if shareholder is None or shareholder.owner_id != owner_id:
            raise NotFoundOrUnauthorizedError(shareholder_not_found())
        if amount < 0:
            raise ValidationError("Finance amount must not be negative")

        self.db.update_shareholder_finance(shareholder_id, quantize(amount))
        return self.db.get_shareholder(shareholder_id)
