"""Request schemas validated before they reach the domain services.

The request layer hands over loosely-typed payloads (query strings, JSON
bodies, CLI options). These classes turn them into well-typed values or
raise ValidationError, so the services only ever see checked arguments.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from shareledger.domain.entities import PaymentType
from shareledger.domain.errors import ValidationError, bad_period_format, period_out_of_range
from shareledger.utils.money import parse_non_negative_amount
from shareledger.utils.period import PeriodOutOfRangeError, parse_period


@dataclass(frozen=True)
class DistributionRequest:
    """Query for ``GET /distribution?period=YYYY-MM``."""

    period: str
    rerun: bool = False

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DistributionRequest":
        period = payload.get("period", payload.get("date"))
        if not isinstance(period, str):
            raise ValidationError(bad_period_format(str(period)))
        try:
            parse_period(period)
        except PeriodOutOfRangeError:
            raise ValidationError(period_out_of_range(period))
        except ValueError:
            raise ValidationError(bad_period_format(period))
        return cls(period=period, rerun=_parse_flag(payload.get("rerun"), "rerun"))


@dataclass(frozen=True)
class SettlementRequest:
    """Body of ``POST /transactions/{id}/settle``."""

    transaction_id: int
    payment_type: PaymentType
    operator_amount: Optional[Decimal] = None
    agent_amount: Optional[Decimal] = None

    @classmethod
    def from_payload(cls, transaction_id: Any, payload: Mapping[str, Any]) -> "SettlementRequest":
        if transaction_id is None or str(transaction_id).strip() == "":
            raise ValidationError("Transaction ID is required.")
        try:
            txn_id = int(transaction_id)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid transaction ID '{transaction_id}'.")

        raw_type = payload.get("paymentType")
        try:
            payment_type = PaymentType(str(raw_type).upper())
        except ValueError:
            raise ValidationError("Invalid payment type. Must be FULL or PARTIAL.")

        operator_amount = _optional_amount(payload.get("operatorAmount"), "operatorAmount")
        agent_amount = _optional_amount(payload.get("agentAmount"), "agentAmount")

        if payment_type == PaymentType.PARTIAL and (operator_amount is None or agent_amount is None):
            raise ValidationError("Operator and agent amounts are required for partial payment.")

        return cls(
            transaction_id=txn_id,
            payment_type=payment_type,
            operator_amount=operator_amount,
            agent_amount=agent_amount,
        )


def _optional_amount(value: Any, field_name: str) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, float):
        value = repr(value)
    try:
        return parse_non_negative_amount(str(value))
    except ValueError as e:
        raise ValidationError(f"Invalid {field_name}: {e}")


_TRUE_VALUES = ("true", "1", "yes")
_FALSE_VALUES = ("false", "0", "no", "")


def _parse_flag(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValidationError(f"Invalid {field_name} flag '{value}'. Use true or false.")
