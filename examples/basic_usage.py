"""
Basic usage of the vending machine controller.

Buys a Coke (price 5) with two five rupee coins, then shows an
underpaid Soda selection and a rejected action.
"""

from vending_system import (
    ActionRejectedError,
    Coin,
    VendingMachine,
)


def main() -> None:
    machine = VendingMachine()

    # Overpay for a Coke
    machine.press_insert_coin_button()
    machine.insert_coin(Coin.five())
    machine.insert_coin(Coin.five())
    machine.press_select_product_button()
    result = machine.select_product(0)
    print(f"{result.message} (change: {result.change})")
    item = machine.collect_product()
    print(f"Got {item.name}")

    # Underpay for a Soda
    machine.press_insert_coin_button()
    machine.insert_coin(Coin.five())
    machine.press_select_product_button()
    result = machine.select_product(3)
    print(f"{result.message} (refund: {[c.denomination for c in result.refund]})")

    # Collecting without paying is rejected
    try:
        machine.collect_product()
    except ActionRejectedError as e:
        print(e.message)


if __name__ == "__main__":
    main()
