"""
Pytest configuration for vending machine tests.

Adds the repository root to sys.path so the tests run from a checkout,
and provides machine fixtures.
"""

import sys
from pathlib import Path

import pytest


# Add the repository root to sys.path for proper imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))


from vending_system.application.vending_machine import VendingMachine  # noqa: E402
from vending_system.core.value_objects import Coin  # noqa: E402
from vending_system.domain.state_machine import TransactionPhase  # noqa: E402


@pytest.fixture
def machine():
    """Fresh machine with the default Coke/Soda catalog."""
    return VendingMachine(accepted_denominations=(1, 5, 10))


@pytest.fixture
def drive_to():
    """Return a function that walks a machine into the requested phase."""

    def _drive(machine: VendingMachine, phase: TransactionPhase) -> VendingMachine:
        if phase == TransactionPhase.IDLE:
            return machine
        machine.press_insert_coin_button()
        machine.insert_coin(Coin.five())
        if phase == TransactionPhase.ACCEPTING_COIN:
            return machine
        machine.press_select_product_button()
        if phase == TransactionPhase.PRODUCT_SELECTION:
            return machine
        machine.select_product(0)
        return machine

    return _drive
