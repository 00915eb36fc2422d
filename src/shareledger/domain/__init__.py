"""Domain layer for shareledger."""

__all__ = [
    "ProfitAggregator",
    "DistributionService",
    "SettlementService",
    "CompanyService",
    "OwnerService",
    "TransactionService",
]

_SERVICES = {
    "ProfitAggregator": "shareledger.domain.profit",
    "DistributionService": "shareledger.domain.distribution",
    "SettlementService": "shareledger.domain.settlement",
    "CompanyService": "shareledger.domain.company",
    "OwnerService": "shareledger.domain.owner",
    "TransactionService": "shareledger.domain.transaction",
}


# Services are imported lazily: the database layer imports domain.entities,
# and the services import the database layer.
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
