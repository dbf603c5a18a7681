"""
Vending Machine - Public controller for one machine.

Owns the catalog, the transaction ledger and the state machine, and
exposes the customer actions.
"""

from typing import Any, Optional, Union

from vending_system.core.value_objects import Coin, Item, SelectionResult
from vending_system.domain.catalog import Catalog, default_catalog
from vending_system.domain.ledger import TransactionLedger
from vending_system.domain.state_machine import (
    TransactionPhase,
    TransactionState,
    VendingStateMachine,
)
from vending_system.infrastructure.settings import get_settings


class VendingMachine:
    """
    Controller for a single vending machine.

    Each action either completes its transition or raises
    ActionRejectedError without changing anything.
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        accepted_denominations: Optional[tuple[int, ...]] = None,
    ) -> None:
        """
        Initialize the vending machine.

        Args:
            catalog: Product catalog (defaults to the Coke/Soda catalog).
            accepted_denominations: Coins this machine takes
                (defaults to the configured denominations).
        """
        self._catalog = catalog if catalog is not None else default_catalog()
        self._accepted = tuple(
            accepted_denominations
            if accepted_denominations is not None
            else get_settings().machine.accepted_denominations
        )
        self._ledger = TransactionLedger()
        self._state_machine = VendingStateMachine(self._catalog, self._ledger)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def accepted_denominations(self) -> tuple[int, ...]:
        return self._accepted

    @property
    def state(self) -> TransactionState:
        """Get the active state."""
        return self._state_machine.state

    @property
    def phase(self) -> TransactionPhase:
        """Get the active phase."""
        return self._state_machine.phase

    @property
    def ledger_total(self) -> int:
        """Get the value inserted in the current transaction."""
        return self._ledger.total

    @property
    def inserted_coins(self) -> tuple[Coin, ...]:
        """Get the coins inserted in the current transaction."""
        return self._ledger.coins

    # =========================================================================
    # Customer Actions
    # =========================================================================

    def press_insert_coin_button(self) -> None:
        self._state_machine.press_insert_coin_button()

    def insert_coin(self, coin: Union[Coin, int]) -> None:
        """
        Insert a coin.

        Args:
            coin: Coin or bare denomination.

        Raises:
            ActionRejectedError: If not accepting coins.
            InvalidDenominationError: If this machine does not take the coin.
        """
        self._state_machine.insert_coin(coin, self._accepted)

    def press_select_product_button(self) -> None:
        self._state_machine.press_select_product_button()

    def select_product(self, code: int) -> SelectionResult:
        """Select a product by code. See VendingStateMachine.select_product."""
        return self._state_machine.select_product(code)

    def collect_product(self) -> Item:
        """Collect the item paid for at selection time."""
        return self._state_machine.collect_product()

    def cancel_request(self) -> tuple[Coin, ...]:
        """Cancel the transaction and get the inserted coins back."""
        return self._state_machine.cancel_request()

    # =========================================================================
    # Status
    # =========================================================================

    def status(self) -> dict[str, Any]:
        """Get a snapshot of the machine for API responses."""
        state = self.state
        return {
            "state": state.phase.name,
            "product_code": state.product_code,
            "ledger_total": self.ledger_total,
            "inserted_coins": [coin.denomination for coin in self.inserted_coins],
        }

    def __repr__(self) -> str:
        return f"VendingMachine(state={self.state}, ledger_total={self.ledger_total})"
