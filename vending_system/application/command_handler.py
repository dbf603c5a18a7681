"""
Command Handler - Routes command messages to vending machine actions.

Provides command routing with argument validation and error handling.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from vending_system.application.async_machine import AsyncVendingMachine
from vending_system.core.exceptions import VendingMachineError
from vending_system.loggers import logger


# Type alias for command handlers
CommandHandlerFunc = Callable[..., Awaitable[dict[str, Any]]]


def _whole_number(value: Any) -> Any:
    """Convert digit strings to int; anything else is passed on for validation."""
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return value


@dataclass
class CommandResponse:
    """
    Standardized response for command execution.

    Attributes:
        command_id: The ID of the executed command.
        success: Whether the command succeeded.
        message: Human-readable message.
        data: Optional response data.
    """

    command_id: Optional[int] = None
    success: bool = False
    message: Optional[str] = None
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the response to a dictionary."""
        return {
            "command_id": self.command_id,
            "success": self.success,
            "message": self.message,
            "data": self.data,
        }


@dataclass
class CommandDefinition:
    """
    Definition of a command.

    Attributes:
        name: Command name.
        handler: Handler function.
        required_args: List of required argument names.
        description: Human-readable description.
    """

    name: str
    handler: CommandHandlerFunc
    required_args: list[str]
    description: str = ""


class CommandHandler:
    """
    Routes commands to their handlers.

    Commands arrive as ``{"command": ..., "command_id": ..., "data": {...}}``
    and every call returns a ``CommandResponse`` dictionary. Vending errors
    come back with ``success`` false and the error in ``data``; an underpaid
    selection is a successful command whose data says ``insufficient_funds``.
    """

    def __init__(self, machine: AsyncVendingMachine) -> None:
        """
        Initialize the command handler.

        Args:
            machine: The machine commands are applied to.
        """
        self._machine = machine
        self._commands: dict[str, CommandDefinition] = {}
        self._register_default_commands()

    def _register_default_commands(self) -> None:
        """Register all default command handlers."""
        # Transaction flow
        self.register(
            "press_insert_coin_button",
            self._press_insert_coin_button,
            [],
            "Start a transaction",
        )
        self.register(
            "insert_coin",
            self._insert_coin,
            ["denomination"],
            "Insert a coin of the given denomination",
        )
        self.register(
            "press_select_product_button",
            self._press_select_product_button,
            [],
            "Stop inserting coins and choose a product",
        )
        self.register(
            "select_product",
            self._select_product,
            ["code"],
            "Select a product by code",
        )
        self.register(
            "collect_product",
            self._collect_product,
            [],
            "Collect the dispensed product",
        )
        self.register(
            "cancel_request",
            self._cancel_request,
            [],
            "Cancel the transaction and return the coins",
        )

        # Inspection
        self.register(
            "status",
            self._status,
            [],
            "Get the machine state and ledger",
        )
        self.register(
            "catalog",
            self._catalog,
            [],
            "List the products",
        )

    def register(
        self,
        command_name: str,
        handler: CommandHandlerFunc,
        required_args: list[str],
        description: str = "",
    ) -> None:
        """
        Register a command handler.

        Args:
            command_name: The name of the command.
            handler: The async handler function.
            required_args: List of required argument names.
            description: Human-readable description.
        """
        self._commands[command_name] = CommandDefinition(
            name=command_name,
            handler=handler,
            required_args=required_args,
            description=description,
        )

    def get_available_commands(self) -> list[dict[str, Any]]:
        """Get list of available commands with their descriptions."""
        return [
            {
                "name": cmd.name,
                "required_args": cmd.required_args,
                "description": cmd.description,
            }
            for cmd in self._commands.values()
        ]

    async def execute(self, command_data: dict[str, Any]) -> dict[str, Any]:
        """
        Execute a command based on command data.

        Args:
            command_data: Dictionary containing 'command', 'command_id', and 'data'.

        Returns:
            Response dictionary with execution result.
        """
        command = command_data.get("command")
        command_id = command_data.get("command_id")
        data = command_data.get("data", {}) or {}

        response = CommandResponse(command_id=command_id)

        if command not in self._commands:
            logger.warning(f"Unknown command: {command}")
            response.message = f"Unknown command: {command}"
            return response.to_dict()

        definition = self._commands[command]

        kwargs = {arg: data.get(arg) for arg in definition.required_args}
        missing = [arg for arg in definition.required_args if kwargs.get(arg) is None]
        if missing:
            response.message = f"Missing required arguments: {missing}"
            return response.to_dict()

        try:
            result = await definition.handler(**kwargs)
            response.success = result.get("success", False)
            response.message = result.get("message")
            response.data = result.get("data")

        except VendingMachineError as e:
            logger.warning(f"Command '{command}' refused: {e.message}")
            response.message = e.message
            response.data = e.to_dict()

        except Exception as e:
            logger.error(f"Error executing command '{command}': {e}")
            response.message = f"Error: {e}"

        return response.to_dict()

    # =========================================================================
    # Handlers
    # =========================================================================

    async def _press_insert_coin_button(self) -> dict[str, Any]:
        await self._machine.press_insert_coin_button()
        return {"success": True, "message": "Accepting coins", "data": await self._machine.status()}

    async def _insert_coin(self, denomination: Any) -> dict[str, Any]:
        await self._machine.insert_coin(_whole_number(denomination))
        return {
            "success": True,
            "message": f"Accepted coin {denomination}",
            "data": await self._machine.status(),
        }

    async def _press_select_product_button(self) -> dict[str, Any]:
        await self._machine.press_select_product_button()
        return {"success": True, "message": "Select a product", "data": await self._machine.status()}

    async def _select_product(self, code: Any) -> dict[str, Any]:
        result = await self._machine.select_product(_whole_number(code))
        return {"success": True, "message": result.message, "data": result.to_dict()}

    async def _collect_product(self) -> dict[str, Any]:
        item = await self._machine.collect_product()
        return {"success": True, "message": f"Collected {item.name}", "data": item.to_dict()}

    async def _cancel_request(self) -> dict[str, Any]:
        coins = await self._machine.cancel_request()
        return {
            "success": True,
            "message": "Request cancelled, returning coins",
            "data": {"refund": [coin.denomination for coin in coins]},
        }

    async def _status(self) -> dict[str, Any]:
        return {"success": True, "message": None, "data": await self._machine.status()}

    async def _catalog(self) -> dict[str, Any]:
        return {"success": True, "message": None, "data": self._machine.machine.catalog.to_dict()}
