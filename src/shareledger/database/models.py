"""SQLAlchemy models for the shareledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    UniqueConstraint,
    CheckConstraint,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

# Money columns: 12 integer digits, 2 decimal places
Money = Numeric(14, 2)


class Owner(Base):
    """Owner (business user) model holding the aggregate due balance."""

    __tablename__ = "owners"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    due_balance = Column(Money, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    transactions = relationship("Transaction", back_populates="owner")
    company = relationship("CompanyShareDetails", back_populates="owner", uselist=False)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("owners.id"), nullable=False, index=True)
    amount = Column(Money, nullable=False)
    log_type = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False, index=True)
    pay_later = Column(Boolean, default=False, nullable=False)
    due_amount = Column(Money, default=0, nullable=False)
    payment_state = Column(String, default="NONE", nullable=False)

    __table_args__ = (
        CheckConstraint("due_amount >= 0", name="ck_transaction_due_non_negative"),
    )

    owner = relationship("Owner", back_populates="transactions")
    commission = relationship(
        "Commission", back_populates="transaction", uselist=False, cascade="all, delete-orphan"
    )
    collection = relationship(
        "Collection", back_populates="transaction", uselist=False, cascade="all, delete-orphan"
    )


class Commission(Base):
    """Agent-side disbursement attached to a transaction."""

    __tablename__ = "commissions"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), unique=True, nullable=False)
    amount = Column(Money, nullable=False)

    transaction = relationship("Transaction", back_populates="commission")


class Collection(Base):
    """Operator-side disbursement attached to a transaction."""

    __tablename__ = "collections"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), unique=True, nullable=False)
    amount = Column(Money, nullable=False)

    transaction = relationship("Transaction", back_populates="collection")


class CompanyShareDetails(Base):
    """Company registration, one per owner."""

    __tablename__ = "company_share_details"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("owners.id"), unique=True, nullable=False)
    business_name = Column(String, nullable=False)
    business_category = Column(String, nullable=True)
    business_type = Column(String, nullable=False)
    number_of_shareholders = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    owner = relationship("Owner", back_populates="company")
    shareholders = relationship(
        "Shareholder",
        back_populates="company",
        cascade="all, delete-orphan",
        order_by="Shareholder.id",
    )


class Shareholder(Base):
    """Shareholder model."""

    __tablename__ = "shareholders"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("company_share_details.id"), nullable=False)
    owner_id = Column(Integer, ForeignKey("owners.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    share_percentage = Column(Numeric(5, 2), nullable=False)
    finance = Column(Money, default=0, nullable=False)
    share_profit = Column(Money, default=0, nullable=False)

    company = relationship("CompanyShareDetails", back_populates="shareholders")


class DistributionRun(Base):
    """One applied profit distribution for an owner and month."""

    __tablename__ = "distribution_runs"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("owners.id"), nullable=False)
    period = Column(String(7), nullable=False)
    total_profit = Column(Money, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("owner_id", "period", name="uq_owner_period"),)

    lines = relationship(
        "DistributionLine",
        back_populates="run",
        cascade="all, delete-orphan",
        order_by="DistributionLine.id",
    )


class DistributionLine(Base):
    """Per-shareholder line item of a distribution run."""

    __tablename__ = "distribution_lines"

    id = Column(Integer, primary_key=True)
    run_id = Column(Integer, ForeignKey("distribution_runs.id"), nullable=False)
    shareholder_id = Column(Integer, ForeignKey("shareholders.id"), nullable=False)
    shareholder_name = Column(String, nullable=False)
    percentage = Column(Numeric(5, 2), nullable=False)
    gross_share = Column(Money, nullable=False)
    finance_deducted = Column(Money, nullable=False)
    net_share = Column(Money, nullable=False)

    run = relationship("DistributionRun", back_populates="lines")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Concurrent writers wait on the file lock instead of failing
        connect_args = {"timeout": 30, "check_same_thread": False}
    engine = create_engine(database_url, echo=False, connect_args=connect_args)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
