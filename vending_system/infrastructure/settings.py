"""
Application settings.

Provides typed configuration sections with environment variable support.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Final, Optional

from vending_system.core.value_objects import ACCEPTED_DENOMINATIONS


ENV_PREFIX: Final[str] = "VENDING_"


# =============================================================================
# Configuration Classes
# =============================================================================


@dataclass(frozen=True)
class RedisSettings:
    """Redis connection settings."""

    host: str = "localhost"
    port: int = 6379
    decode_responses: bool = True


@dataclass(frozen=True)
class LoggingSettings:
    """Logging configuration."""

    level: int = logging.DEBUG
    log_file: Optional[str] = None
    loki_url: Optional[str] = None
    app: str = "vending_machine"


@dataclass(frozen=True)
class MachineSettings:
    """Vending machine settings."""

    accepted_denominations: tuple[int, ...] = ACCEPTED_DENOMINATIONS
    transaction_timeout: float = 30.0
    command_channel: str = "vending_machine_commands"

    @property
    def response_channel(self) -> str:
        """Get response channel name."""
        return f"{self.command_channel}_response"


# =============================================================================
# Main Settings
# =============================================================================


@dataclass
class Settings:
    """
    Main application settings.

    Aggregates all configuration sections.
    """

    redis: RedisSettings = field(default_factory=RedisSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    machine: MachineSettings = field(default_factory=MachineSettings)

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "Settings":
        """
        Build settings from ``VENDING_*`` environment variables.

        Missing variables fall back to the section defaults.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``).

        Returns:
            Settings instance.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            return value if value else None

        redis_defaults = RedisSettings()
        redis = RedisSettings(
            host=get("REDIS_HOST") or redis_defaults.host,
            port=int(get("REDIS_PORT") or redis_defaults.port),
        )

        level_name = get("LOG_LEVEL")
        log_level = logging.getLevelName(level_name.upper()) if level_name else logging.DEBUG
        if not isinstance(log_level, int):
            raise ValueError(f"Unknown log level: {level_name}")

        logging_settings = LoggingSettings(
            level=log_level,
            log_file=get("LOG_FILE"),
            loki_url=get("LOKI_URL"),
        )

        machine_defaults = MachineSettings()
        denominations_value = get("ACCEPTED_DENOMINATIONS")
        denominations = (
            tuple(int(value) for value in denominations_value.split(","))
            if denominations_value
            else machine_defaults.accepted_denominations
        )
        unsupported = [value for value in denominations if value not in ACCEPTED_DENOMINATIONS]
        if unsupported:
            raise ValueError(
                f"Unsupported coin denominations: {unsupported}. "
                f"Allowed: {list(ACCEPTED_DENOMINATIONS)}"
            )

        machine = MachineSettings(
            accepted_denominations=denominations,
            transaction_timeout=float(
                get("TRANSACTION_TIMEOUT") or machine_defaults.transaction_timeout
            ),
            command_channel=get("COMMAND_CHANNEL") or machine_defaults.command_channel,
        )

        return cls(redis=redis, logging=logging_settings, machine=machine)


# =============================================================================
# Settings Singleton
# =============================================================================


_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
