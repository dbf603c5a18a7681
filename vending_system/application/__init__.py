"""
Application layer - Controllers and command routing.

Contains:
- Vending machine controller
- Async controller with transaction timeout
- Command handler
"""

from .vending_machine import VendingMachine
from .async_machine import AsyncVendingMachine
from .command_handler import CommandHandler, CommandResponse


__all__ = [
    "VendingMachine",
    "AsyncVendingMachine",
    "CommandHandler",
    "CommandResponse",
]
