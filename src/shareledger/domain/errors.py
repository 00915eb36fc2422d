"""Shared domain error messages and error types."""

from shareledger.utils.period import MAX_PERIOD_YEAR


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``status_code`` is the
    HTTP-equivalent code a request layer should answer with.
    """

    status_code = 400


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundOrUnauthorizedError(DomainError):
    """Entity does not exist or is not owned by the caller.

    The two cases are reported identically so callers cannot probe for
    records that belong to other owners.
    """

    status_code = 404


class ExceedsDueError(DomainError):
    """Settlement amount is larger than the remaining due amount."""


class AlreadySettledError(DomainError):
    """Settlement attempted on a fully paid transaction."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""

    status_code = 409


class AlreadyDistributedError(ConflictError):
    """Profit for the period has already been distributed."""


class StoreFailure(DomainError):
    """The ledger store is unreachable or failed to apply a write."""

    status_code = 500


class BalanceInconsistencyError(StoreFailure):
    """An owner's aggregate due balance would go negative."""


def owner_not_found(owner_id: int) -> str:
    """Return message for missing owner."""
    return f"Owner {owner_id} not found"


def transaction_not_found() -> str:
    """Return message for a missing or foreign transaction."""
    return "Transaction not found or unauthorized."


def shareholder_not_found() -> str:
    """Return message for a missing or foreign shareholder."""
    return "Shareholder not found or unauthorized."


def company_shares_not_found() -> str:
    """Return message when the owner has no shareholder roster."""
    return "Company share details not found"


def bad_period_format(period: str) -> str:
    """Return message for a malformed distribution period."""
    return f"Provide date in YYYY-MM format (got '{period}')"


def period_out_of_range(period: str) -> str:
    """Return message for a period past the last supported month."""
    return f"Period '{period}' is out of range; the latest supported period is {MAX_PERIOD_YEAR}-12"


def period_already_distributed(period: str) -> str:
    """Return message when a period was distributed before."""
    return (
        f"Profit for {period} has already been distributed. "
        "Use rerun to replace the previous distribution."
    )


def partial_exceeds_due(amount, due) -> str:
    """Return message when a partial payment is larger than the due."""
    return f"Partial payment {amount} exceeds the due amount {due}."


def negative_owner_balance(owner_id: int, amount) -> str:
    """Return message when settling would drive an owner's due negative."""
    return (
        f"Owner {owner_id} due balance is lower than settled amount {amount}; "
        "ledger is inconsistent"
    )
