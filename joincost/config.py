# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - CostConfig (dataclass)
#     memory_size: int      (default 10000)  → buffer blocks available to a join
#     index_fan_out: int    (default 10)     → child pointers per index node
#
# - AppConfig (dataclass)
#     cost: CostConfig
#     http_timeout_seconds: float (default 10.0) → for URL schema sources
#     log_level: str              (default "WARNING")
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (tests change the environment between calls).
#
# USAGE:
# ------
#   from joincost.config import get_config
#   config = get_config()
#   print(config.cost.memory_size)
#
# ==============================================

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from joincost.errors import ConfigError


DEFAULT_MEMORY_SIZE = 10_000
DEFAULT_INDEX_FAN_OUT = 10


@dataclass(frozen=True)
class CostConfig:
    """Parameters shared by every cost formula."""
    memory_size: int = DEFAULT_MEMORY_SIZE
    index_fan_out: int = DEFAULT_INDEX_FAN_OUT

    def __post_init__(self):
        if self.memory_size < 1:
            raise ConfigError(f"Memory size must be a positive number of blocks, got {self.memory_size}")
        # Height is computed in base fan_out // 2, which must be at least 2
        if self.index_fan_out < 4:
            raise ConfigError(f"Index fan-out must be at least 4, got {self.index_fan_out}")


@dataclass
class AppConfig:
    """Main application configuration."""
    cost: CostConfig = field(default_factory=CostConfig)
    http_timeout_seconds: float = 10.0
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} should be a whole number, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} should be a number, got {raw!r}") from None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    cost_config = CostConfig(
        memory_size=_env_int("JOINCOST_MEMORY_SIZE", DEFAULT_MEMORY_SIZE),
        index_fan_out=_env_int("JOINCOST_INDEX_FAN_OUT", DEFAULT_INDEX_FAN_OUT),
    )

    log_level = os.getenv("JOINCOST_LOG_LEVEL", "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"JOINCOST_LOG_LEVEL is not a logging level: {log_level!r}")

    _config_instance = AppConfig(
        cost=cost_config,
        http_timeout_seconds=_env_float("JOINCOST_HTTP_TIMEOUT", 10.0),
        log_level=log_level,
    )

    return _config_instance


def reset_config() -> None:
    """Reset the module-level config instance (primarily for test isolation)."""
    global _config_instance
    _config_instance = None
