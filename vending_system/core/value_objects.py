"""
Value Objects for the vending machine.

Immutable objects that represent values in the domain.
Value objects are compared by value, not by identity.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Final, Optional

from .exceptions import CatalogError, InvalidDenominationError


ACCEPTED_DENOMINATIONS: Final[tuple[int, ...]] = (1, 5, 10)


# =============================================================================
# Enums
# =============================================================================


class SelectionStatus(Enum):
    """Outcome of a product selection."""

    INSUFFICIENT_FUNDS = auto()
    DISPENSING = auto()


# =============================================================================
# Currency
# =============================================================================


@dataclass(frozen=True)
class Coin:
    """
    Immutable coin accepted by the machine.

    Attributes:
        denomination: Coin value in rupees.
    """

    denomination: int

    def __post_init__(self) -> None:
        """Validate the denomination."""
        if (
            isinstance(self.denomination, bool)
            or not isinstance(self.denomination, int)
            or self.denomination not in ACCEPTED_DENOMINATIONS
        ):
            raise InvalidDenominationError(
                self.denomination, accepted=ACCEPTED_DENOMINATIONS
            )

    @classmethod
    def one(cls) -> "Coin":
        """Create a one rupee coin."""
        return cls(1)

    @classmethod
    def five(cls) -> "Coin":
        """Create a five rupee coin."""
        return cls(5)

    @classmethod
    def ten(cls) -> "Coin":
        """Create a ten rupee coin."""
        return cls(10)

    def __str__(self) -> str:
        return f"{self.denomination} INR"


# =============================================================================
# Catalog Entry
# =============================================================================


@dataclass(frozen=True)
class Item:
    """
    Immutable catalog entry.

    Attributes:
        name: Product name.
        price: Price in rupees.
    """

    name: str
    price: int

    def __post_init__(self) -> None:
        """Validate the price."""
        if isinstance(self.price, bool) or not isinstance(self.price, int) or self.price <= 0:
            raise CatalogError(
                f"Item price must be a positive integer: {self.name}={self.price!r}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"name": self.name, "price": self.price}


# =============================================================================
# Selection Result
# =============================================================================


@dataclass(frozen=True)
class SelectionResult:
    """
    Result of a product selection.

    Attributes:
        status: Whether the machine moved to dispensing or refunded.
        product_code: Selected product code.
        price: Price of the selected item.
        paid: Total value of the coins in the ledger at selection time.
        change: Change due to the customer (dispensing only).
        refund: Coins handed back to the customer (insufficient funds only).
        item: Selected item (dispensing only).
        message: Human-readable message.
    """

    status: SelectionStatus
    product_code: int
    price: int
    paid: int
    change: int = 0
    refund: tuple[Coin, ...] = field(default_factory=tuple)
    item: Optional[Item] = None
    message: str = ""

    @classmethod
    def insufficient_funds(
        cls,
        product_code: int,
        price: int,
        refund: tuple[Coin, ...],
    ) -> "SelectionResult":
        """Create a result for an underpaid selection."""
        paid = sum(coin.denomination for coin in refund)
        return cls(
            status=SelectionStatus.INSUFFICIENT_FUNDS,
            product_code=product_code,
            price=price,
            paid=paid,
            refund=tuple(refund),
            message=f"Insufficient Money: paid {paid}, price {price}. Refunding coins",
        )

    @classmethod
    def dispensing(
        cls,
        product_code: int,
        item: Item,
        paid: int,
    ) -> "SelectionResult":
        """Create a result for a paid selection."""
        change = paid - item.price
        message = f"Dispensing {item.name}"
        if change > 0:
            message += f". Amount of extra change returned is: {change}"
        return cls(
            status=SelectionStatus.DISPENSING,
            product_code=product_code,
            price=item.price,
            paid=paid,
            change=change,
            item=item,
            message=message,
        )

    @property
    def is_dispensing(self) -> bool:
        """Check if the selection was paid for."""
        return self.status == SelectionStatus.DISPENSING

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        result: dict[str, Any] = {
            "status": self.status.name.lower(),
            "product_code": self.product_code,
            "price": self.price,
            "paid": self.paid,
            "message": self.message,
        }
        if self.is_dispensing:
            result["change"] = self.change
        else:
            result["refund"] = [coin.denomination for coin in self.refund]
        return result
