"""
Core module - Foundation layer with no external dependencies.

Contains:
- Exceptions
- Value Objects
"""

from .exceptions import (
    VendingMachineError,
    ActionRejectedError,
    CatalogError,
    UnknownProductCodeError,
    InvalidDenominationError,
)
from .value_objects import (
    ACCEPTED_DENOMINATIONS,
    Coin,
    Item,
    SelectionResult,
    SelectionStatus,
)


__all__ = [
    # Exceptions
    "VendingMachineError",
    "ActionRejectedError",
    "CatalogError",
    "UnknownProductCodeError",
    "InvalidDenominationError",
    # Value Objects
    "ACCEPTED_DENOMINATIONS",
    "Coin",
    "Item",
    "SelectionResult",
    "SelectionStatus",
]
