"""
Game and engine configuration.

GameSettings travels with each GameState (it is part of the saved snapshot).
EngineSettings is process-level configuration read from the environment.
"""

import logging
from dataclasses import dataclass, fields
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_CAMEL_CASE_OPTIONS = {
    "startingCash": "starting_cash",
    "passGoAmount": "pass_go_amount",
    "jailFine": "jail_fine",
    "mortgageInterestRate": "mortgage_interest_rate",
    "freeParkingPot": "free_parking_pot",
    "enforceEvenBuilding": "enforce_even_building",
    "auctionOnSkip": "auction_on_skip",
}


@dataclass
class GameSettings:
    """Rule settings for a single game."""

    starting_cash: int = 1500
    pass_go_amount: int = 200
    jail_fine: int = 50
    mortgage_interest_rate: float = 0.10

    free_parking_pot: bool = False
    enforce_even_building: bool = False
    # Reserved: declined purchases are never auctioned by the engine.
    auction_on_skip: bool = False

    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "GameSettings":
        """
        Build settings from a mapping of options.

        Accepts both the snake_case field names and the camelCase names used
        by saved games from other clients. Unrecognized keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in options.items():
            name = _CAMEL_CASE_OPTIONS.get(key, key)
            if name in known:
                values[name] = value
        return cls(**values)


class EngineSettings(BaseSettings):
    """
    Process-level engine configuration.

    Environment variables (prefix: MONOPOLY_ENGINE_):
        MONOPOLY_ENGINE_HISTORY_LIMIT - Undo snapshots kept per game (default: 50)
        MONOPOLY_ENGINE_LOG_LIMIT     - Transactions kept per game (default: 500)
        MONOPOLY_ENGINE_LOG_LEVEL     - Logging level for the engine (default: INFO)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="MONOPOLY_ENGINE_",
    )

    history_limit: int = Field(default=50, ge=1, description="Maximum undo snapshots kept.")
    log_limit: int = Field(default=500, ge=1, description="Maximum transactions kept in the log.")
    log_level: str = Field(default="INFO", description="Logging level for engine loggers.")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept lower-case level names."""
        value = value.upper()
        if value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}:
            raise ValueError(f"Unknown log level: {value}")
        return value


@lru_cache
def get_engine_settings() -> EngineSettings:
    """Return cached engine settings instance."""
    return EngineSettings()


def configure_logging(settings: Optional[EngineSettings] = None) -> None:
    """Apply the configured log level to the engine's loggers."""
    settings = settings or get_engine_settings()
    logging.getLogger("monopoly_ledger").setLevel(settings.log_level)
