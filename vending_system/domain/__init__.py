"""
Domain layer - Business logic and domain models.

Contains:
- Product catalog
- Transaction ledger
- Vending state machine
"""

from .catalog import Catalog, default_catalog
from .ledger import TransactionLedger
from .state_machine import (
    VendingStateMachine,
    TransactionPhase,
    TransactionState,
)


__all__ = [
    # Catalog
    "Catalog",
    "default_catalog",
    # Ledger
    "TransactionLedger",
    # Vending State
    "VendingStateMachine",
    "TransactionPhase",
    "TransactionState",
]
