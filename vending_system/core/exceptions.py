"""
Custom exceptions for the vending machine.

Provides a hierarchy of typed exceptions so callers can tell a rejected
action apart from a catalog or currency defect.
"""

from typing import Any, Optional


class VendingMachineError(Exception):
    """Base exception for all vending machine errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            code: Optional error code for programmatic handling.
            details: Optional additional error details.
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# Transaction Errors
# =============================================================================


class ActionRejectedError(VendingMachineError):
    """Action is not supported in the current state. Nothing was changed."""

    def __init__(self, action: str, phase: str, **kwargs: Any) -> None:
        super().__init__(
            f"Method not supported: '{action}' in state {phase}",
            **kwargs,
        )
        self.action = action
        self.phase = phase
        self.details["action"] = action
        self.details["state"] = phase


# =============================================================================
# Catalog / Currency Errors
# =============================================================================


class CatalogError(VendingMachineError):
    """Invalid catalog configuration."""

    pass


class UnknownProductCodeError(CatalogError):
    """Product code is not present in the catalog."""

    def __init__(self, product_code: int, **kwargs: Any) -> None:
        super().__init__(f"Unknown product code: {product_code}", **kwargs)
        self.product_code = product_code
        self.details["product_code"] = product_code


class InvalidDenominationError(VendingMachineError):
    """Coin denomination is not accepted by the machine."""

    def __init__(
        self,
        denomination: Any,
        accepted: tuple[int, ...] = (),
        **kwargs: Any,
    ) -> None:
        super().__init__(f"Invalid coin denomination: {denomination}", **kwargs)
        self.denomination = denomination
        self.details["denomination"] = denomination
        if accepted:
            self.details["accepted"] = list(accepted)
