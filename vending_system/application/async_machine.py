"""
Async Vending Machine - Serialised access for networked callers.

Runs every action under one lock and cancels transactions that are left
open longer than the configured timeout.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional, Union

from vending_system.application.vending_machine import VendingMachine
from vending_system.core.value_objects import Coin, Item, SelectionResult
from vending_system.domain.state_machine import TransactionPhase
from vending_system.infrastructure.settings import get_settings
from vending_system.loggers import logger


TimeoutCallback = Callable[[tuple[Coin, ...]], Awaitable[None]]


class AsyncVendingMachine:
    """
    Async wrapper around a VendingMachine.

    At most one action runs against the machine at a time. While a
    transaction is open (ACCEPTING_COIN or PRODUCT_SELECTION) a watchdog
    task is re-armed after every accepted action; when it fires, the
    transaction is cancelled as if the customer pressed cancel and the
    refunded coins are passed to the timeout callback.
    """

    def __init__(
        self,
        machine: Optional[VendingMachine] = None,
        transaction_timeout: Optional[float] = None,
    ) -> None:
        """
        Initialize the async machine.

        Args:
            machine: Wrapped controller (a new one is created if omitted).
            transaction_timeout: Seconds an open transaction may stay idle.
                Zero or less disables the watchdog.
        """
        self._machine = machine if machine is not None else VendingMachine()
        self._timeout = (
            transaction_timeout
            if transaction_timeout is not None
            else get_settings().machine.transaction_timeout
        )
        self._lock = asyncio.Lock()
        self._watchdog: Optional[asyncio.Task] = None
        self._on_timeout_callback: Optional[TimeoutCallback] = None

    @property
    def machine(self) -> VendingMachine:
        return self._machine

    @property
    def phase(self) -> TransactionPhase:
        return self._machine.phase

    @property
    def transaction_timeout(self) -> float:
        return self._timeout

    def set_on_timeout(self, callback: TimeoutCallback) -> None:
        """Set callback receiving the coins refunded by a timeout."""
        self._on_timeout_callback = callback

    # =========================================================================
    # Watchdog
    # =========================================================================

    def _disarm(self) -> None:
        if self._watchdog is not None:
            self._watchdog.cancel()
            self._watchdog = None

    def _rearm(self) -> None:
        self._disarm()
        if self._timeout > 0 and self._machine.state.is_open:
            self._watchdog = asyncio.create_task(self._expire())

    async def _expire(self) -> None:
        await asyncio.sleep(self._timeout)

        async with self._lock:
            if not self._machine.state.is_open:
                return
            self._watchdog = None
            logger.warning(
                f"Transaction timed out after {self._timeout}s in {self._machine.state}"
            )
            coins = self._machine.cancel_request()

        if self._on_timeout_callback:
            try:
                await self._on_timeout_callback(coins)
            except Exception as e:
                logger.error(f"Timeout callback error: {e}")

    async def _run(self, action: Callable[..., Any], *args: Any) -> Any:
        async with self._lock:
            result = action(*args)
            self._rearm()
            return result

    # =========================================================================
    # Customer Actions
    # =========================================================================

    async def press_insert_coin_button(self) -> None:
        await self._run(self._machine.press_insert_coin_button)

    async def insert_coin(self, coin: Union[Coin, int]) -> None:
        await self._run(self._machine.insert_coin, coin)

    async def press_select_product_button(self) -> None:
        await self._run(self._machine.press_select_product_button)

    async def select_product(self, code: int) -> SelectionResult:
        return await self._run(self._machine.select_product, code)

    async def collect_product(self) -> Item:
        return await self._run(self._machine.collect_product)

    async def cancel_request(self) -> tuple[Coin, ...]:
        return await self._run(self._machine.cancel_request)

    async def status(self) -> dict[str, Any]:
        async with self._lock:
            return self._machine.status()

    async def close(self) -> None:
        """Stop the watchdog."""
        watchdog = self._watchdog
        self._watchdog = None
        if watchdog is not None:
            watchdog.cancel()
            try:
                await watchdog
            except asyncio.CancelledError:
                pass
