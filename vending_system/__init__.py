"""
Vending machine controller modelled as a transactional state machine.
"""

from vending_system.application import (
    AsyncVendingMachine,
    CommandHandler,
    VendingMachine,
)
from vending_system.core import (
    ActionRejectedError,
    Coin,
    InvalidDenominationError,
    Item,
    SelectionResult,
    SelectionStatus,
    UnknownProductCodeError,
    VendingMachineError,
)
from vending_system.domain import Catalog, TransactionPhase, default_catalog


__version__ = "0.1.0"

__all__ = [
    "AsyncVendingMachine",
    "CommandHandler",
    "VendingMachine",
    "ActionRejectedError",
    "Coin",
    "InvalidDenominationError",
    "Item",
    "SelectionResult",
    "SelectionStatus",
    "UnknownProductCodeError",
    "VendingMachineError",
    "Catalog",
    "TransactionPhase",
    "default_catalog",
]
