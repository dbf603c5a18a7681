"""
Unit tests for the core layer: value objects and exceptions.
"""

import pytest

from vending_system.core.exceptions import (
    ActionRejectedError,
    CatalogError,
    InvalidDenominationError,
    UnknownProductCodeError,
    VendingMachineError,
)
from vending_system.core.value_objects import (
    Coin,
    Item,
    SelectionResult,
    SelectionStatus,
)


# =============================================================================
# Value Objects Tests
# =============================================================================


class TestCoin:
    """Tests for Coin value object."""

    def test_coin_factories(self):
        """Test the named coin constructors."""
        assert Coin.one().denomination == 1
        assert Coin.five().denomination == 5
        assert Coin.ten().denomination == 10

    def test_coins_compare_by_value(self):
        """Two coins of the same denomination are equal."""
        assert Coin(5) == Coin.five()
        assert hash(Coin(5)) == hash(Coin.five())

    @pytest.mark.parametrize("denomination", [0, -5, 2, 100, "5", 5.0, True])
    def test_invalid_denomination_raises(self, denomination):
        """Test that unaccepted denominations are refused."""
        with pytest.raises(InvalidDenominationError) as exc_info:
            Coin(denomination)
        assert exc_info.value.details["denomination"] == denomination

    def test_coin_is_immutable(self):
        """Test that a coin cannot be changed."""
        coin = Coin.ten()
        with pytest.raises(AttributeError):
            coin.denomination = 1


class TestItem:
    """Tests for Item value object."""

    def test_item_creation(self):
        item = Item(name="Coke", price=5)
        assert item.name == "Coke"
        assert item.price == 5
        assert item.to_dict() == {"name": "Coke", "price": 5}

    @pytest.mark.parametrize("price", [0, -1, 2.5])
    def test_non_positive_price_raises(self, price):
        """Test that an item needs a positive integer price."""
        with pytest.raises(CatalogError):
            Item(name="Broken", price=price)


class TestSelectionResult:
    """Tests for SelectionResult value object."""

    def test_insufficient_funds(self):
        """Test creating an underpaid selection result."""
        result = SelectionResult.insufficient_funds(3, 10, (Coin.five(),))
        assert result.status == SelectionStatus.INSUFFICIENT_FUNDS
        assert not result.is_dispensing
        assert result.paid == 5
        assert result.refund == (Coin.five(),)
        assert result.change == 0
        assert "Insufficient" in result.message

    def test_dispensing_with_change(self):
        """Test creating a paid selection result with change."""
        coke = Item(name="Coke", price=5)
        result = SelectionResult.dispensing(0, coke, 10)
        assert result.is_dispensing
        assert result.change == 5
        assert result.item == coke
        assert "change" in result.message

    def test_dispensing_exact(self):
        """Test that exact payment gives zero change."""
        result = SelectionResult.dispensing(0, Item(name="Coke", price=5), 5)
        assert result.change == 0
        assert "change" not in result.message

    def test_to_dict(self):
        """Test converting results to dicts."""
        paid = SelectionResult.dispensing(0, Item(name="Coke", price=5), 10).to_dict()
        assert paid["status"] == "dispensing"
        assert paid["change"] == 5
        assert "refund" not in paid

        refused = SelectionResult.insufficient_funds(3, 10, (Coin.one(), Coin.five())).to_dict()
        assert refused["status"] == "insufficient_funds"
        assert refused["refund"] == [1, 5]
        assert "change" not in refused


# =============================================================================
# Exception Tests
# =============================================================================


class TestExceptions:
    """Tests for custom exceptions."""

    def test_vending_machine_error(self):
        """Test VendingMachineError creation and to_dict."""
        error = VendingMachineError("Test error", code="TEST_001")
        assert error.message == "Test error"
        assert error.code == "TEST_001"

        d = error.to_dict()
        assert d["error"] == "TEST_001"
        assert d["message"] == "Test error"

    def test_default_code_is_class_name(self):
        error = UnknownProductCodeError(42)
        assert error.code == "UnknownProductCodeError"
        assert error.product_code == 42
        assert error.details["product_code"] == 42

    def test_action_rejected_error(self):
        """Test ActionRejectedError names the action and state."""
        error = ActionRejectedError("collect_product", "IDLE")
        assert isinstance(error, VendingMachineError)
        assert error.action == "collect_product"
        assert error.details == {"action": "collect_product", "state": "IDLE"}
        assert "Method not supported" in error.message

    def test_unknown_product_code_is_catalog_error(self):
        assert isinstance(UnknownProductCodeError(7), CatalogError)

    def test_invalid_denomination_lists_accepted(self):
        error = InvalidDenominationError(3, accepted=(1, 5, 10))
        assert error.details["accepted"] == [1, 5, 10]
