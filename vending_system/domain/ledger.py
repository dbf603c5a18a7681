"""
Transaction Ledger - Coins inserted during the current transaction.
"""

from vending_system.core.value_objects import Coin


class TransactionLedger:
    """
    Ordered record of the coins inserted in one transaction.

    The ledger is only ever emptied as a whole through :meth:`drain`.
    """

    def __init__(self) -> None:
        self._coins: list[Coin] = []

    @property
    def coins(self) -> tuple[Coin, ...]:
        """Snapshot of the inserted coins in insertion order."""
        return tuple(self._coins)

    @property
    def total(self) -> int:
        """Sum of inserted denominations."""
        return sum(coin.denomination for coin in self._coins)

    @property
    def is_empty(self) -> bool:
        return not self._coins

    def add(self, coin: Coin) -> None:
        """Append a coin."""
        self._coins.append(coin)

    def drain(self) -> tuple[Coin, ...]:
        """Return every coin and clear the ledger."""
        coins = tuple(self._coins)
        self._coins = []
        return coins

    def __len__(self) -> int:
        return len(self._coins)

    def __repr__(self) -> str:
        return f"TransactionLedger(total={self.total}, coins={len(self._coins)})"
