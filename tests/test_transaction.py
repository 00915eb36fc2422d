"""Tests for owners and transaction recording."""

from datetime import datetime, timezone, timedelta
from decimal import Decimal

import pytest

from shareledger.domain.entities import LogType, PaymentState, PaymentType
from shareledger.domain.errors import NotFoundOrUnauthorizedError, ValidationError


def test_create_owner(owner_service):
    """New owners start with nothing due."""
    owner_id = owner_service.create_owner("  Hill Coaches ")

    owner = owner_service.get_owner(owner_id)
    assert owner.name == "Hill Coaches"
    assert owner.due_balance == Decimal("0")
    assert owner.created_at is not None


def test_create_owner_requires_name(owner_service):
    with pytest.raises(ValidationError):
        owner_service.create_owner("   ")


def test_require_owner(owner_service, sample_owner):
    assert owner_service.require_owner(sample_owner.id).name == "City Bus Co"
    with pytest.raises(NotFoundOrUnauthorizedError):
        owner_service.require_owner(424242)
    assert owner_service.get_owner(424242) is None


def test_record_cash_transaction(transaction_service, owner_service, sample_owner, jan):
    """A transaction paid up front has nothing due."""
    txn_id = transaction_service.record_transaction(
        owner_id=sample_owner.id,
        amount=Decimal("1000"),
        commission_amount=Decimal("100"),
        collection_amount=Decimal("50"),
        created_at=jan(5),
    )

    txn = transaction_service.get_transaction(sample_owner.id, txn_id)
    assert txn.amount == Decimal("1000.00")
    assert txn.log_type == LogType.CREDIT
    assert not txn.pay_later
    assert txn.due_amount == Decimal("0")
    assert txn.payment_state == PaymentState.NONE
    assert txn.commission_amount == Decimal("100.00")
    assert txn.collection_amount == Decimal("50.00")
    assert txn.profit == Decimal("850.00")
    assert txn.is_settled
    assert txn.created_at == jan(5)
    assert owner_service.get_owner(sample_owner.id).due_balance == Decimal("0")


def test_record_pay_later_transaction(transaction_service, owner_service, sample_owner, jan):
    """A deferred transaction starts fully due and raises the owner's due."""
    txn_id = transaction_service.record_transaction(
        owner_id=sample_owner.id, amount=Decimal("500"), pay_later=True, created_at=jan(6)
    )
    transaction_service.record_transaction(
        owner_id=sample_owner.id, amount=Decimal("250.25"), pay_later=True, created_at=jan(7)
    )

    txn = transaction_service.get_transaction(sample_owner.id, txn_id)
    assert txn.due_amount == Decimal("500.00")
    assert not txn.is_settled
    assert txn.commission_amount is None
    assert owner_service.get_owner(sample_owner.id).due_balance == Decimal("750.25")


def test_aware_timestamps_stored_as_utc(transaction_service, sample_owner):
    """Timezone-aware times are converted to UTC before storing."""
    ist = timezone(timedelta(hours=5, minutes=30))
    txn_id = transaction_service.record_transaction(
        owner_id=sample_owner.id,
        amount=Decimal("10"),
        created_at=datetime(2024, 2, 1, 3, 0, tzinfo=ist),
    )

    txn = transaction_service.get_transaction(sample_owner.id, txn_id)
    assert txn.created_at == datetime(2024, 1, 31, 21, 30)


def test_amounts_rounded_to_minor_unit(transaction_service, owner_service, sample_owner, jan):
    """Sub-cent input is rounded half up before it reaches the ledger."""
    txn_id = transaction_service.record_transaction(
        owner_id=sample_owner.id,
        amount=Decimal("10.005"),
        commission_amount=Decimal("1.234"),
        collection_amount=Decimal("0.555"),
        pay_later=True,
        created_at=jan(8),
    )

    txn = transaction_service.get_transaction(sample_owner.id, txn_id)
    assert txn.amount == Decimal("10.01")
    assert txn.due_amount == Decimal("10.01")
    assert txn.commission_amount == Decimal("1.23")
    assert txn.collection_amount == Decimal("0.56")
    assert owner_service.get_owner(sample_owner.id).due_balance == Decimal("10.01")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"amount": Decimal("0")},
        {"amount": Decimal("-5")},
        {"amount": Decimal("5"), "commission_amount": Decimal("-1")},
        {"amount": Decimal("5"), "collection_amount": Decimal("-1")},
    ],
)
def test_record_transaction_validation(transaction_service, sample_owner, kwargs):
    with pytest.raises(ValidationError):
        transaction_service.record_transaction(owner_id=sample_owner.id, **kwargs)


def test_record_transaction_unknown_owner(transaction_service):
    with pytest.raises(NotFoundOrUnauthorizedError):
        transaction_service.record_transaction(owner_id=424242, amount=Decimal("5"))


def test_get_transaction_is_owner_scoped(transaction_service, sample_owner, other_owner, jan):
    txn_id = transaction_service.record_transaction(
        owner_id=sample_owner.id, amount=Decimal("5"), created_at=jan(1)
    )

    with pytest.raises(NotFoundOrUnauthorizedError, match="not found or unauthorized"):
        transaction_service.get_transaction(other_owner.id, txn_id)


def test_list_transactions_filters(transaction_service, settlement_service, sample_owner, other_owner, jan):
    """Listing is newest first and supports window and outstanding filters."""
    early = transaction_service.record_transaction(
        owner_id=sample_owner.id, amount=Decimal("10"), created_at=jan(2)
    )
    deferred = transaction_service.record_transaction(
        owner_id=sample_owner.id, amount=Decimal("20"), pay_later=True, created_at=jan(10)
    )
    late = transaction_service.record_transaction(
        owner_id=sample_owner.id, amount=Decimal("30"), pay_later=True, created_at=jan(20)
    )
    transaction_service.record_transaction(owner_id=other_owner.id, amount=Decimal("40"), created_at=jan(10))

    assert [t.id for t in transaction_service.list_transactions(sample_owner.id)] == [late, deferred, early]
    assert [
        t.id for t in transaction_service.list_transactions(sample_owner.id, start=jan(5), end=jan(15))
    ] == [deferred]

    settlement_service.settle(late, sample_owner.id, PaymentType.FULL)
    assert [
        t.id for t in transaction_service.list_transactions(sample_owner.id, outstanding_only=True)
    ] == [deferred]
