"""
Vending State Machine - Manages the transaction lifecycle.

IDLE -> ACCEPTING_COIN -> PRODUCT_SELECTION -> DISPENSING -> IDLE

ACCEPTING_COIN and PRODUCT_SELECTION can be cancelled back to IDLE,
which returns the inserted coins. Underpaying a selection does the same.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from vending_system.core.exceptions import ActionRejectedError, InvalidDenominationError
from vending_system.core.value_objects import (
    ACCEPTED_DENOMINATIONS,
    Coin,
    Item,
    SelectionResult,
)
from vending_system.domain.catalog import Catalog
from vending_system.domain.ledger import TransactionLedger
from vending_system.loggers import logger


# =============================================================================
# Transaction Phases
# =============================================================================


class TransactionPhase(Enum):
    """Phases of a vending transaction."""

    IDLE = auto()               # Waiting for a customer
    ACCEPTING_COIN = auto()     # Collecting coins
    PRODUCT_SELECTION = auto()  # Waiting for a product code
    DISPENSING = auto()         # Paid item waiting to be collected


@dataclass(frozen=True)
class TransactionState:
    """
    Active state of the machine.

    Only DISPENSING carries a product code: the item paid for at selection
    time, so collection cannot hand out a different one.
    """

    phase: TransactionPhase
    product_code: Optional[int] = None

    @classmethod
    def idle(cls) -> TransactionState:
        return cls(TransactionPhase.IDLE)

    @classmethod
    def accepting_coin(cls) -> TransactionState:
        return cls(TransactionPhase.ACCEPTING_COIN)

    @classmethod
    def product_selection(cls) -> TransactionState:
        return cls(TransactionPhase.PRODUCT_SELECTION)

    @classmethod
    def dispensing(cls, product_code: int) -> TransactionState:
        return cls(TransactionPhase.DISPENSING, product_code)

    @property
    def is_open(self) -> bool:
        """Check if the customer still has coins in the machine."""
        return self.phase in (
            TransactionPhase.ACCEPTING_COIN,
            TransactionPhase.PRODUCT_SELECTION,
        )

    def __str__(self) -> str:
        name = "".join(part.capitalize() for part in self.phase.name.split("_")) + "State"
        if self.product_code is not None:
            return f"{name}(product_code={self.product_code})"
        return name


# =============================================================================
# Vending State Machine
# =============================================================================


class VendingStateMachine:
    """
    State machine for vending transactions.

    Checks every action against the active phase, mutates the ledger and
    installs the next state. An action the phase does not accept raises
    ActionRejectedError before anything is touched.
    """

    def __init__(self, catalog: Catalog, ledger: TransactionLedger) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._state = TransactionState.idle()
        logger.info(f"Vending Machine is in {self._state}")

    @property
    def state(self) -> TransactionState:
        """Get the active state."""
        return self._state

    @property
    def phase(self) -> TransactionPhase:
        """Get the active phase."""
        return self._state.phase

    def _require(self, action: str, *phases: TransactionPhase) -> None:
        if self._state.phase not in phases:
            logger.warning(f"Method not supported: {action} in {self._state}")
            raise ActionRejectedError(action, self._state.phase.name)

    def _install(self, state: TransactionState) -> None:
        self._state = state
        logger.info(f"Vending Machine is in {state}")

    # =========================================================================
    # Actions
    # =========================================================================

    def press_insert_coin_button(self) -> None:
        """Open a transaction."""
        self._require("press_insert_coin_button", TransactionPhase.IDLE)
        self._install(TransactionState.accepting_coin())

    def insert_coin(
        self,
        coin: Union[Coin, int],
        accepted: tuple[int, ...] = ACCEPTED_DENOMINATIONS,
    ) -> None:
        """
        Add a coin to the ledger.

        The phase is checked before the coin, so any coin offered outside
        ACCEPTING_COIN is an ActionRejectedError.

        Args:
            coin: Coin or bare denomination.
            accepted: Denominations this machine takes.

        Raises:
            ActionRejectedError: If not accepting coins.
            InvalidDenominationError: If the coin is not accepted.
        """
        self._require("insert_coin", TransactionPhase.ACCEPTING_COIN)
        if not isinstance(coin, Coin):
            coin = Coin(coin)
        if coin.denomination not in accepted:
            logger.warning(f"Rejected coin of denomination {coin.denomination}")
            raise InvalidDenominationError(coin.denomination, accepted=accepted)
        self._ledger.add(coin)
        logger.info(f"Accepting Coin {coin.denomination}. Total: {self._ledger.total}")

    def press_select_product_button(self) -> None:
        """Stop accepting coins and wait for a product code."""
        self._require("press_select_product_button", TransactionPhase.ACCEPTING_COIN)
        self._install(TransactionState.product_selection())

    def select_product(self, code: int) -> SelectionResult:
        """
        Select a product and settle the ledger against its price.

        Args:
            code: Product code.

        Returns:
            SelectionResult with status DISPENSING (and the change due) or
            INSUFFICIENT_FUNDS (and the refunded coins).

        Raises:
            ActionRejectedError: If not in PRODUCT_SELECTION.
            UnknownProductCodeError: If the code is not in the catalog.
                The machine stays in PRODUCT_SELECTION.
        """
        self._require("select_product", TransactionPhase.PRODUCT_SELECTION)
        item = self._catalog.get_item(code)
        paid = self._ledger.total

        if paid < item.price:
            refund = self._ledger.drain()
            self._install(TransactionState.idle())
            result = SelectionResult.insufficient_funds(code, item.price, refund)
            logger.info(result.message)
            return result

        self._ledger.drain()
        result = SelectionResult.dispensing(code, item, paid)
        if result.change > 0:
            logger.info(f"Amount of extra change returned is: {result.change}")
        self._install(TransactionState.dispensing(code))
        return result

    def collect_product(self) -> Item:
        """Hand out the item bound at selection time and close the transaction."""
        self._require("collect_product", TransactionPhase.DISPENSING)
        item = self._catalog.get_item(self._state.product_code)
        logger.info(f"Collecting Item: {item.name}")
        self._install(TransactionState.idle())
        return item

    def cancel_request(self) -> tuple[Coin, ...]:
        """Abort the transaction and return the inserted coins."""
        self._require(
            "cancel_request",
            TransactionPhase.ACCEPTING_COIN,
            TransactionPhase.PRODUCT_SELECTION,
        )
        coins = self._ledger.drain()
        logger.info(
            f"Cancel Request and Returning the money: "
            f"{[coin.denomination for coin in coins]}"
        )
        self._install(TransactionState.idle())
        return coins
