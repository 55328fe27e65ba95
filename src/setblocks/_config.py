"""Environment-driven switches.

``SETBLOCKS_CONTRACTS``  enable postcondition checks on every operation
``SETBLOCKS_LOG_LEVEL``  default level used by the CLI logger
"""

from __future__ import annotations

import os

CONTRACTS_ENV = "SETBLOCKS_CONTRACTS"
LOG_LEVEL_ENV = "SETBLOCKS_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_CONTRACTS: bool | None = None


def contracts_enabled() -> bool:
    if _CONTRACTS is not None:
        return _CONTRACTS
    return os.environ.get(CONTRACTS_ENV, "").strip().lower() in _TRUTHY


def force_contracts(enabled: bool | None) -> None:
    """Override the environment in-process; ``None`` defers to it again."""
    global _CONTRACTS
    _CONTRACTS = enabled


def default_log_level() -> str:
    return valid_log_level(os.environ.get(LOG_LEVEL_ENV, ""))


def valid_log_level(name: str) -> str:
    """Normalise a level name; anything unrecognised becomes WARNING."""
    level = name.strip().upper()
    return level if level in LOG_LEVELS else "WARNING"
