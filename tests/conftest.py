"""Shared pytest fixtures for shareledger tests."""

import tempfile
import os
from datetime import datetime
from decimal import Decimal
import pytest

from shareledger.database.factories import create_sqlite_database
from shareledger.domain.company import CompanyService
from shareledger.domain.distribution import DistributionService
from shareledger.domain.entities import ShareholderInput
from shareledger.domain.owner import OwnerService
from shareledger.domain.profit import ProfitAggregator
from shareledger.domain.settlement import SettlementService
from shareledger.domain.transaction import TransactionService
from shareledger.logging_config import reset_logging


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo logging configuration done by CLI invocations."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def owner_service(temp_db):
    """Create an OwnerService with a temporary database."""
    return OwnerService(temp_db)


@pytest.fixture
def company_service(temp_db):
    """Create a CompanyService with a temporary database."""
    return CompanyService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def settlement_service(temp_db):
    """Create a SettlementService with a temporary database."""
    return SettlementService(temp_db)


@pytest.fixture
def profit_aggregator(temp_db):
    """Create a ProfitAggregator with a temporary database."""
    return ProfitAggregator(temp_db)


@pytest.fixture
def distribution_service(temp_db):
    """Create a DistributionService with a temporary database."""
    return DistributionService(temp_db)


@pytest.fixture
def sample_owner(owner_service):
    """Create a sample owner for testing."""
    owner_id = owner_service.create_owner("City Bus Co")
    return owner_service.get_owner(owner_id)


@pytest.fixture
def other_owner(owner_service):
    """Create a second owner whose records the sample owner must not see."""
    owner_id = owner_service.create_owner("Rival Travels")
    return owner_service.get_owner(owner_id)


@pytest.fixture
def sample_company(company_service, sample_owner):
    """Register a partnership with two shareholders (60/40)."""
    company_service.create_company_shares(
        owner_id=sample_owner.id,
        business_name="City Bus Co",
        business_type="Partnership",
        number_of_shareholders=2,
        shareholders=[
            ShareholderInput(name="Asha", share_percentage=Decimal("60")),
            ShareholderInput(name="Ravi", share_percentage=Decimal("40")),
        ],
        business_category="Transport",
    )
    return company_service.list_shareholders(sample_owner.id)


@pytest.fixture
def jan():
    """Return a helper building January 2024 timestamps."""

    def make(day: int, hour: int = 12) -> datetime:
        return datetime(2024, 1, day, hour, 0)

    return make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
