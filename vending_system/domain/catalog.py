"""
Catalog - Fixed mapping from product code to item.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator

from vending_system.core.exceptions import CatalogError, UnknownProductCodeError
from vending_system.core.value_objects import Item


class Catalog(Mapping):
    """
    Read-only product catalog.

    Built once from a ``{code: Item}`` mapping; later changes to the source
    mapping are not visible.
    """

    def __init__(self, items: Mapping[int, Item]) -> None:
        if not items:
            raise CatalogError("Catalog must contain at least one item")

        for code, item in items.items():
            if isinstance(code, bool) or not isinstance(code, int):
                raise CatalogError(f"Product code must be an integer: {code!r}")
            if not isinstance(item, Item):
                raise CatalogError(f"Catalog entry for {code} is not an Item: {item!r}")

        self._items = MappingProxyType(dict(items))

    def __getitem__(self, code: int) -> Item:
        return self._items[code]

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, code: int) -> Item:
        """
        Look up an item by product code.

        Raises:
            UnknownProductCodeError: If the code is not in the catalog.
        """
        # 3.0 and True hash like 3 and 1
        if isinstance(code, bool) or not isinstance(code, int):
            raise UnknownProductCodeError(code)
        try:
            return self._items[code]
        except (KeyError, TypeError):
            raise UnknownProductCodeError(code) from None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary keyed by product code."""
        return {str(code): item.to_dict() for code, item in self._items.items()}

    def __repr__(self) -> str:
        return f"Catalog({dict(self._items)!r})"


def default_catalog() -> Catalog:
    """Codes 0-2 hold Coke (5), codes 3-5 hold Soda (10)."""
    coke = Item(name="Coke", price=5)
    soda = Item(name="Soda", price=10)
    return Catalog({code: coke if code < 3 else soda for code in range(6)})
