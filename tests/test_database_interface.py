"""Tests for the ledger store interface returning domain models."""

import pytest
from datetime import datetime
from decimal import Decimal

from sqlalchemy import text

from shareledger.database.factories import create_database, create_sqlite_database
from shareledger.domain import entities
from shareledger.domain.errors import (
    AlreadyDistributedError,
    ConflictError,
    NotFoundOrUnauthorizedError,
    StoreFailure,
)


def _line(shareholder, net):
    return entities.DistributionLine(
        shareholder_id=shareholder.id,
        shareholder=shareholder.name,
        percentage=shareholder.share_percentage,
        original_profit=Decimal(net),
        finance_deducted=Decimal("0.00"),
        final_profit=Decimal(net),
    )


class TestDatabaseInterface:
    """Tests to verify the store returns domain models."""

    def test_get_owner_returns_domain_model(self, temp_db):
        owner_id = temp_db.create_owner("Depot Lines")

        owner = temp_db.get_owner(owner_id)

        assert isinstance(owner, entities.Owner)
        assert owner.id == owner_id
        assert owner.name == "Depot Lines"
        assert isinstance(owner.due_balance, Decimal)
        assert isinstance(owner.created_at, datetime)
        assert temp_db.get_owner(owner_id + 100) is None
        assert temp_db.get_owner_aggregate_due(owner_id + 100) is None

    def test_get_transaction_returns_domain_model(self, temp_db, sample_owner):
        txn_id = temp_db.create_transaction(
            owner_id=sample_owner.id,
            amount=Decimal("120.50"),
            log_type=entities.LogType.CREDIT,
            pay_later=True,
            created_at=datetime(2024, 1, 15, 9, 0),
            commission_amount=Decimal("10"),
        )

        txn = temp_db.get_transaction(txn_id)

        assert isinstance(txn, entities.Transaction)
        assert isinstance(txn.log_type, entities.LogType)
        assert isinstance(txn.payment_state, entities.PaymentState)
        assert txn.amount == Decimal("120.50")
        assert txn.due_amount == Decimal("120.50")
        assert txn.commission_amount == Decimal("10.00")
        assert txn.collection_amount is None
        assert temp_db.get_owner_aggregate_due(sample_owner.id) == Decimal("120.50")
        assert temp_db.get_transaction(txn_id + 100) is None

    def test_find_transactions_in_window(self, temp_db, sample_owner, other_owner):
        inside = temp_db.create_transaction(
            owner_id=sample_owner.id,
            amount=Decimal("5"),
            log_type=entities.LogType.CREDIT,
            pay_later=False,
            created_at=datetime(2024, 1, 1),
        )
        temp_db.create_transaction(
            owner_id=sample_owner.id,
            amount=Decimal("5"),
            log_type=entities.LogType.CREDIT,
            pay_later=False,
            created_at=datetime(2024, 2, 1),
        )
        temp_db.create_transaction(
            owner_id=other_owner.id,
            amount=Decimal("5"),
            log_type=entities.LogType.CREDIT,
            pay_later=False,
            created_at=datetime(2024, 1, 10),
        )

        found = temp_db.find_transactions_in_window(
            sample_owner.id, datetime(2024, 1, 1), datetime(2024, 2, 1)
        )

        assert [t.id for t in found] == [inside]

    def test_roster_returns_domain_models(self, temp_db, sample_owner, sample_company):
        roster = temp_db.get_shareholder_roster(sample_owner.id)

        assert all(isinstance(sh, entities.Shareholder) for sh in roster)
        assert [sh.name for sh in roster] == ["Asha", "Ravi"]
        assert isinstance(temp_db.get_company(sample_owner.id), entities.CompanyShareDetails)
        assert temp_db.get_shareholder_roster(sample_owner.id + 100) is None

    def test_create_company_twice_conflicts(self, temp_db, sample_owner, sample_company):
        with pytest.raises(ConflictError):
            temp_db.create_company(
                owner_id=sample_owner.id,
                business_name="Again",
                business_category=None,
                business_type="Partnership",
                shareholders=[],
            )

    def test_update_missing_shareholder_finance(self, temp_db):
        with pytest.raises(NotFoundOrUnauthorizedError, match="Shareholder not found"):
            temp_db.update_shareholder_finance(12345, Decimal("1"))


class TestApplySettlement:
    """Compare-and-swap behaviour of settlement writes."""

    def test_stale_expectation_is_not_applied(self, temp_db, sample_owner):
        txn_id = temp_db.create_transaction(
            owner_id=sample_owner.id,
            amount=Decimal("300"),
            log_type=entities.LogType.CREDIT,
            pay_later=True,
        )

        applied = temp_db.apply_settlement(
            transaction_id=txn_id,
            owner_id=sample_owner.id,
            expected_due=Decimal("250.00"),
            expected_state=entities.PaymentState.NONE,
            new_due=Decimal("0.00"),
            new_state=entities.PaymentState.FULL,
            settled_amount=Decimal("250.00"),
        )

        assert applied is False
        assert temp_db.get_transaction(txn_id).due_amount == Decimal("300.00")
        assert temp_db.get_owner_aggregate_due(sample_owner.id) == Decimal("300.00")

    def test_foreign_owner_is_not_applied(self, temp_db, sample_owner, other_owner):
        txn_id = temp_db.create_transaction(
            owner_id=sample_owner.id,
            amount=Decimal("300"),
            log_type=entities.LogType.CREDIT,
            pay_later=True,
        )

        applied = temp_db.apply_settlement(
            transaction_id=txn_id,
            owner_id=other_owner.id,
            expected_due=Decimal("300.00"),
            expected_state=entities.PaymentState.NONE,
            new_due=Decimal("0.00"),
            new_state=entities.PaymentState.FULL,
            settled_amount=Decimal("300.00"),
        )

        assert applied is False

    def test_matching_expectation_is_applied(self, temp_db, sample_owner):
        txn_id = temp_db.create_transaction(
            owner_id=sample_owner.id,
            amount=Decimal("300"),
            log_type=entities.LogType.CREDIT,
            pay_later=True,
        )

        applied = temp_db.apply_settlement(
            transaction_id=txn_id,
            owner_id=sample_owner.id,
            expected_due=Decimal("300.00"),
            expected_state=entities.PaymentState.NONE,
            new_due=Decimal("120.00"),
            new_state=entities.PaymentState.PARTIAL,
            settled_amount=Decimal("180.00"),
        )

        assert applied is True
        txn = temp_db.get_transaction(txn_id)
        assert txn.due_amount == Decimal("120.00")
        assert txn.payment_state == entities.PaymentState.PARTIAL
        assert temp_db.get_owner_aggregate_due(sample_owner.id) == Decimal("120.00")


class TestRecordDistribution:
    """Distribution runs are stored atomically and once per period."""

    def test_run_is_stored_with_lines(self, temp_db, sample_owner, sample_company):
        asha, ravi = sample_company
        run_id = temp_db.record_distribution(
            sample_owner.id, "2024-01", Decimal("100.00"), [_line(asha, "60.00"), _line(ravi, "40.00")]
        )

        report = temp_db.get_distribution_run(sample_owner.id, "2024-01")

        assert isinstance(report, entities.DistributionReport)
        assert report.run_id == run_id
        assert report.total_profit == Decimal("100.00")
        assert [line.shareholder for line in report.lines] == ["Asha", "Ravi"]
        assert [line.final_profit for line in report.lines] == [Decimal("60.00"), Decimal("40.00")]
        assert isinstance(report.created_at, datetime)

    def test_duplicate_period_rejected(self, temp_db, sample_owner, sample_company):
        asha, ravi = sample_company
        temp_db.record_distribution(sample_owner.id, "2024-01", Decimal("10.00"), [_line(asha, "6.00")])

        with pytest.raises(AlreadyDistributedError):
            temp_db.record_distribution(sample_owner.id, "2024-01", Decimal("10.00"), [_line(asha, "6.00")])

        assert temp_db.get_shareholder(asha.id).share_profit == Decimal("6.00")

    def test_replace_reverses_previous_run(self, temp_db, sample_owner, sample_company):
        asha, ravi = sample_company
        temp_db.record_distribution(sample_owner.id, "2024-01", Decimal("10.00"), [_line(asha, "6.00")])

        temp_db.record_distribution(
            sample_owner.id, "2024-01", Decimal("20.00"), [_line(ravi, "8.00")], replace=True
        )

        assert temp_db.get_shareholder(asha.id).share_profit == Decimal("0")
        assert temp_db.get_shareholder(ravi.id).share_profit == Decimal("8.00")
        assert len(temp_db.list_distribution_runs(sample_owner.id)) == 1

    def test_runs_for_different_periods_accumulate(self, temp_db, sample_owner, sample_company):
        asha, ravi = sample_company
        temp_db.record_distribution(sample_owner.id, "2024-01", Decimal("10.00"), [_line(asha, "6.00")])
        temp_db.record_distribution(sample_owner.id, "2024-02", Decimal("5.00"), [_line(asha, "3.00")])

        temp_db.record_distribution(
            sample_owner.id, "2024-01", Decimal("20.00"), [_line(asha, "12.00")], replace=True
        )

        assert temp_db.get_shareholder(asha.id).share_profit == Decimal("15.00")
        assert len(temp_db.list_distribution_runs(sample_owner.id)) == 2

    def test_foreign_shareholder_rejected(self, temp_db, company_service, sample_owner, other_owner, sample_company):
        company_service.create_company_shares(
            owner_id=other_owner.id,
            business_name="Rival Travels",
            business_type="Partnership",
            number_of_shareholders=1,
            shareholders=[entities.ShareholderInput(name="Zed", share_percentage=Decimal("100"))],
        )
        zed = company_service.list_shareholders(other_owner.id)[0]

        with pytest.raises(ConflictError):
            temp_db.record_distribution(
                sample_owner.id, "2024-01", Decimal("10.00"),
                [_line(sample_company[0], "6.00"), _line(zed, "4.00")],
            )

        assert temp_db.get_shareholder(zed.id).share_profit == Decimal("0")
        assert temp_db.get_shareholder(sample_company[0].id).share_profit == Decimal("0")
        assert temp_db.list_distribution_runs(sample_owner.id) == []


class TestStoreFailures:
    """Persistence problems surface as StoreFailure."""

    def test_missing_table_reported_as_store_failure(self, temp_db, sample_owner):
        engine = temp_db.session_factory.kw["bind"]
        with engine.begin() as conn:
            conn.execute(text("DROP TABLE distribution_runs"))

        with pytest.raises(StoreFailure) as excinfo:
            temp_db.list_distribution_runs(sample_owner.id)
        assert excinfo.value.status_code == 500


class TestFactories:
    """Tests for store factory functions."""

    def test_create_sqlite_database_uses_env(self, tmp_path, monkeypatch):
        db_file = tmp_path / "env.db"
        monkeypatch.setenv("SHARELEDGER_DB_PATH", str(db_file))

        db = create_sqlite_database()
        try:
            assert db.database_url == f"sqlite:///{db_file}"
            db.create_owner("Env Owner")
        finally:
            db.disconnect()
        assert db_file.exists()

    def test_create_database_uses_url_env(self, tmp_path, monkeypatch):
        db_file = tmp_path / "url.db"
        monkeypatch.setenv("SHARELEDGER_DATABASE_URL", f"sqlite:///{db_file}")

        db = create_database()
        try:
            assert db.database_url == f"sqlite:///{db_file}"
        finally:
            db.disconnect()
