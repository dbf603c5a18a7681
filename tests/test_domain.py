"""
Unit tests for the domain layer: catalog, ledger and state machine.
"""

import pytest

from vending_system.core.exceptions import (
    ActionRejectedError,
    CatalogError,
    UnknownProductCodeError,
)
from vending_system.core.value_objects import Coin, Item, SelectionStatus
from vending_system.domain.catalog import Catalog, default_catalog
from vending_system.domain.ledger import TransactionLedger
from vending_system.domain.state_machine import (
    TransactionPhase,
    TransactionState,
    VendingStateMachine,
)


# =============================================================================
# Catalog Tests
# =============================================================================


class TestCatalog:
    """Tests for Catalog."""

    def test_default_catalog(self):
        """Codes 0-2 are Coke, 3-5 are Soda."""
        catalog = default_catalog()
        assert len(catalog) == 6
        assert all(catalog.get_item(code).name == "Coke" for code in range(3))
        assert all(catalog.get_item(code).name == "Soda" for code in range(3, 6))
        assert catalog.get_item(0).price == 5
        assert catalog.get_item(3).price == 10

    def test_unknown_code_raises(self):
        with pytest.raises(UnknownProductCodeError):
            default_catalog().get_item(99)

    @pytest.mark.parametrize("code", [3.0, 3.7, True, "3", None])
    def test_non_integer_code_raises(self, code):
        """Test codes that only compare equal to an integer key are refused."""
        with pytest.raises(UnknownProductCodeError):
            default_catalog().get_item(code)

    def test_catalog_is_read_only(self):
        """Test the catalog ignores later changes to its source."""
        source = {1: Item(name="Water", price=3)}
        catalog = Catalog(source)
        source[2] = Item(name="Juice", price=7)
        assert 2 not in catalog
        with pytest.raises(TypeError):
            catalog[2] = Item(name="Juice", price=7)

    def test_empty_catalog_raises(self):
        with pytest.raises(CatalogError):
            Catalog({})

    def test_non_item_entry_raises(self):
        with pytest.raises(CatalogError):
            Catalog({1: ("Water", 3)})

    def test_to_dict(self):
        catalog = Catalog({1: Item(name="Water", price=3)})
        assert catalog.to_dict() == {"1": {"name": "Water", "price": 3}}


# =============================================================================
# Ledger Tests
# =============================================================================


class TestTransactionLedger:
    """Tests for TransactionLedger."""

    def test_empty_ledger(self):
        ledger = TransactionLedger()
        assert ledger.is_empty
        assert ledger.total == 0
        assert ledger.coins == ()

    def test_total_and_order(self):
        """Test the total is the sum of coins in insertion order."""
        ledger = TransactionLedger()
        for coin in (Coin.ten(), Coin.one(), Coin.five(), Coin.one()):
            ledger.add(coin)
        assert ledger.total == 17
        assert [c.denomination for c in ledger.coins] == [10, 1, 5, 1]
        assert len(ledger) == 4

    def test_drain_clears(self):
        """Test drain returns everything and empties the ledger."""
        ledger = TransactionLedger()
        ledger.add(Coin.five())
        ledger.add(Coin.five())
        assert ledger.drain() == (Coin.five(), Coin.five())
        assert ledger.is_empty
        assert ledger.drain() == ()

    def test_coins_snapshot_is_detached(self):
        ledger = TransactionLedger()
        ledger.add(Coin.one())
        snapshot = ledger.coins
        ledger.add(Coin.ten())
        assert snapshot == (Coin.one(),)


# =============================================================================
# State Machine Tests
# =============================================================================


class TestTransactionState:
    """Tests for TransactionState."""

    def test_only_dispensing_binds_code(self):
        assert TransactionState.idle().product_code is None
        assert TransactionState.dispensing(4).product_code == 4

    def test_is_open(self):
        assert TransactionState.accepting_coin().is_open
        assert TransactionState.product_selection().is_open
        assert not TransactionState.idle().is_open
        assert not TransactionState.dispensing(0).is_open

    def test_str(self):
        assert str(TransactionState.idle()) == "IdleState"
        assert str(TransactionState.dispensing(2)) == "DispensingState(product_code=2)"


class TestVendingStateMachine:
    """Tests for VendingStateMachine."""

    @pytest.fixture
    def ledger(self):
        return TransactionLedger()

    @pytest.fixture
    def state_machine(self, ledger):
        """Create a fresh state machine for each test."""
        return VendingStateMachine(default_catalog(), ledger)

    def test_initial_state(self, state_machine):
        """Test initial state is IDLE."""
        assert state_machine.phase == TransactionPhase.IDLE
        assert state_machine.state == TransactionState.idle()

    def test_transitions_replace_state(self, state_machine):
        """Test each transition installs a new state object."""
        before = state_machine.state
        state_machine.press_insert_coin_button()
        assert state_machine.state is not before
        assert before.phase == TransactionPhase.IDLE

    def test_insert_coin_stays_accepting(self, state_machine, ledger):
        state_machine.press_insert_coin_button()
        state_machine.insert_coin(Coin.ten())
        assert state_machine.phase == TransactionPhase.ACCEPTING_COIN
        assert ledger.total == 10

    def test_select_binds_code_into_dispensing(self, state_machine, ledger):
        """Test the selected code is carried by the dispensing state."""
        state_machine.press_insert_coin_button()
        state_machine.insert_coin(Coin.ten())
        state_machine.press_select_product_button()
        result = state_machine.select_product(4)
        assert result.status == SelectionStatus.DISPENSING
        assert state_machine.state == TransactionState.dispensing(4)
        assert ledger.is_empty
        assert state_machine.collect_product().name == "Soda"

    def test_unknown_code_leaves_selection_open(self, state_machine, ledger):
        """Test an unknown code changes nothing."""
        state_machine.press_insert_coin_button()
        state_machine.insert_coin(Coin.five())
        state_machine.press_select_product_button()
        with pytest.raises(UnknownProductCodeError):
            state_machine.select_product(42)
        assert state_machine.phase == TransactionPhase.PRODUCT_SELECTION
        assert ledger.coins == (Coin.five(),)

    def test_rejection_raises(self, state_machine):
        with pytest.raises(ActionRejectedError) as exc_info:
            state_machine.select_product(0)
        assert exc_info.value.action == "select_product"
        assert exc_info.value.phase == "IDLE"
