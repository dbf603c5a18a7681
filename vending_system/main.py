"""
Vending Machine Service - Main entry point.

Serves one machine over Redis pub/sub: JSON commands arrive on the
command channel, JSON responses go out on the response channel.
"""

import asyncio
import json
from typing import Any, Optional

from redis.asyncio import Redis

from vending_system.application.async_machine import AsyncVendingMachine
from vending_system.application.command_handler import CommandHandler
from vending_system.core.value_objects import Coin
from vending_system.infrastructure.settings import Settings, get_settings
from vending_system.loggers import logger


# =============================================================================
# Message Processing
# =============================================================================


async def handle_message(raw_data: Any, handler: CommandHandler) -> Optional[dict[str, Any]]:
    """
    Decode a raw pub/sub payload and execute it.

    Args:
        raw_data: Message payload.
        handler: Command handler to execute the command with.

    Returns:
        Response dictionary, or None for pings and undecodable payloads.
    """
    if raw_data == "ping":
        return None

    try:
        command = json.loads(raw_data)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"Command parsing error: {e}")
        return None

    if not isinstance(command, dict):
        logger.error(f"Command must be a JSON object: {command!r}")
        return None

    logger.info(f"Received command: {command}")
    return await handler.execute(command)


# =============================================================================
# Redis Command Listener
# =============================================================================


async def listen_to_redis(
    redis: Redis,
    handler: CommandHandler,
    settings: Settings,
) -> None:
    """
    Listen for commands on Redis pub/sub and publish the responses.

    Args:
        redis: Redis client instance.
        handler: Command handler bound to the machine.
        settings: Application settings.
    """
    command_channel = settings.machine.command_channel
    response_channel = settings.machine.response_channel

    pubsub = redis.pubsub()
    await pubsub.subscribe(command_channel)
    logger.info(f"Listening for commands on channel: {command_channel}")

    async for message in pubsub.listen():
        if message.get("type") != "message":
            continue

        response = await handle_message(message.get("data"), handler)
        if response is None:
            continue

        await redis.publish(response_channel, json.dumps(response))
        logger.info(f"Response sent to {response_channel}: {response}")


# =============================================================================
# Main Entry Point
# =============================================================================


async def main() -> None:
    """
    Main entry point for the vending machine service.

    Connects to Redis, builds the machine and starts the command listener.
    """
    settings = get_settings()

    redis = Redis(
        host=settings.redis.host,
        port=settings.redis.port,
        decode_responses=settings.redis.decode_responses,
    )

    machine = AsyncVendingMachine(
        transaction_timeout=settings.machine.transaction_timeout,
    )

    async def publish_timeout(coins: tuple[Coin, ...]) -> None:
        notice = {
            "command_id": None,
            "success": True,
            "message": "Transaction timed out, returning coins",
            "data": {"refund": [coin.denomination for coin in coins]},
        }
        await redis.publish(settings.machine.response_channel, json.dumps(notice))

    machine.set_on_timeout(publish_timeout)

    try:
        await listen_to_redis(redis, CommandHandler(machine), settings)
    finally:
        await machine.close()
        await redis.aclose()


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Application stopped by user")


if __name__ == "__main__":
    run()
