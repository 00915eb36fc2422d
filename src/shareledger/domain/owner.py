"""Owner domain service."""

from typing import Optional
from shareledger.database.base import Database
from shareledger.domain.entities import Owner as OwnerEntity
from shareledger.domain.errors import NotFoundOrUnauthorizedError, ValidationError, owner_not_found


class OwnerService:
    """Service for managing owners and their aggregate due balance."""

    def __init__(self, db: Database):
        """Initialize owner service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_owner(self, name: str) -> int:
        """Create a new owner.

        Args:
            name: Owner (business) name

        Returns:
            Owner ID

        Raises:
            ValidationError: If the name is blank
        """
        name = name.strip()
        if not name:
            raise ValidationError("Owner name is required")
        return self.db.create_owner(name)

    def get_owner(self, owner_id: int) -> Optional[OwnerEntity]:
        """Get owner by ID."""
        return self.db.get_owner(owner_id)

    def require_owner(self, owner_id: int) -> OwnerEntity:
        """Get owner by ID or raise NotFoundOrUnauthorizedError."""
        owner = self.db.get_owner(owner_id)
        if owner is None:
            raise NotFoundOrUnauthorizedError(owner_not_found(owner_id))
        return owner
