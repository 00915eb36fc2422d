"""Deferred ("pay later") payment settlement."""

from decimal import Decimal
from typing import Optional

from shareledger.database.base import Database
from shareledger.domain.entities import (
    PaymentState,
    PaymentType,
    SettlementResult,
    Transaction,
)
from shareledger.domain.errors import (
    AlreadySettledError,
    ExceedsDueError,
    NotFoundOrUnauthorizedError,
    StoreFailure,
    ValidationError,
    partial_exceeds_due,
    transaction_not_found,
)
from shareledger.logging_config import get_logger
from shareledger.utils.money import ZERO, quantize

logger = get_logger(__name__)

MAX_SETTLEMENT_ATTEMPTS = 5

PARTIAL_MESSAGE = "Partial payment recorded successfully."
FULL_MESSAGE = "Full payment recorded successfully."


class SettlementService:
    """Service for settling deferred transactions.

    Payment state moves NONE -> PARTIAL -> FULL; FULL is terminal. A partial
    payment that brings the due amount to zero moves straight to FULL.
    """

    def __init__(self, db: Database, max_attempts: int = MAX_SETTLEMENT_ATTEMPTS):
        """Initialize settlement service.

        Args:
            db: Database instance
            max_attempts: Times a settlement is retried after losing a race
        """
        self.db = db
        self.max_attempts = max_attempts

    def settle(
        self,
        transaction_id: int,
        caller_id: int,
        payment_type: PaymentType,
        operator_amount: Optional[Decimal] = None,
        agent_amount: Optional[Decimal] = None,
    ) -> SettlementResult:
        """Settle a deferred transaction partially or in full.

        Args:
            transaction_id: Transaction to settle
            caller_id: Owner making the request
            payment_type: FULL or PARTIAL
            operator_amount: Operator share of a partial payment
            agent_amount: Agent share of a partial payment

        Returns:
            SettlementResult with the amount settled and the remaining due

        Raises:
            NotFoundOrUnauthorizedError: If the transaction is missing or not the caller's
            ValidationError: If partial amounts are missing or invalid
            AlreadySettledError: If the transaction is not deferred or is already fully paid
            ExceedsDueError: If a partial payment is larger than the remaining due
            StoreFailure: If the store fails or the transaction keeps changing underneath
        """
        payment_type = PaymentType(payment_type)
        partial_total = None
        if payment_type == PaymentType.PARTIAL:
            partial_total = self._partial_total(operator_amount, agent_amount)

        for attempt in range(1, self.max_attempts + 1):
            txn = self._get_owned_transaction(transaction_id, caller_id)
            self._check_settleable(txn)

            if payment_type == PaymentType.PARTIAL:
                if partial_total > txn.due_amount:
                    logger.warning(
                        "Partial payment exceeds due",
                        extra={"transaction_id": txn.id, "amount": partial_total, "due": txn.due_amount},
                    )
                    raise ExceedsDueError(partial_exceeds_due(partial_total, txn.due_amount))
                settled = partial_total
                new_due = txn.due_amount - settled
                new_state = PaymentState.FULL if new_due == 0 else PaymentState.PARTIAL
            else:
                settled = txn.due_amount
                new_due = ZERO
                new_state = PaymentState.FULL

            applied = self.db.apply_settlement(
                transaction_id=txn.id,
                owner_id=caller_id,
                expected_due=txn.due_amount,
                expected_state=txn.payment_state,
                new_due=new_due,
                new_state=new_state,
                settled_amount=settled,
            )
            if applied:
                logger.info(
                    "Settled transaction",
                    extra={
                        "transaction_id": txn.id,
                        "owner_id": caller_id,
                        "payment_type": payment_type.value,
                        "settled": settled,
                        "remaining_due": new_due,
                    },
                )
                return SettlementResult(
                    transaction_id=txn.id,
                    payment_type=payment_type,
                    settled_amount=settled,
                    remaining_due=new_due,
                    payment_state=new_state,
                    message=FULL_MESSAGE if payment_type == PaymentType.FULL else PARTIAL_MESSAGE,
                )

            logger.warning(
                "Transaction changed during settlement, retrying",
                extra={"transaction_id": txn.id, "attempt": attempt},
            )

        raise StoreFailure(
            f"Transaction {transaction_id} kept changing; settlement abandoned after "
            f"{self.max_attempts} attempts"
        )

    def _partial_total(
        self, operator_amount: Optional[Decimal], agent_amount: Optional[Decimal]
    ) -> Decimal:
        if operator_amount is None or agent_amount is None:
            raise ValidationError("Operator and agent amounts are required for partial payment.")
        if operator_amount < 0 or agent_amount < 0:
            raise ValidationError("Operator and agent amounts must not be negative.")
        total = quantize(operator_amount + agent_amount)
        if total == 0:
            raise ValidationError("Partial payment must be greater than zero.")
        return total

    def _get_owned_transaction(self, transaction_id: int, caller_id: int) -> Transaction:
        txn = self.db.get_transaction(transaction_id)
        if txn is None or txn.owner_id != caller_id:
            raise NotFoundOrUnauthorizedError(transaction_not_found())
        return txn

    def _check_settleable(self, txn: Transaction) -> None:
        if not txn.pay_later:
            # Paid at creation, nothing remains to settle
            raise AlreadySettledError(
                f"Transaction {txn.id} is not a pay-later transaction and is already settled."
            )
        if txn.payment_state == PaymentState.FULL or txn.due_amount == 0:
            raise AlreadySettledError(f"Transaction {txn.id} is already fully settled.")
