"""
Clackers - Application Settings

Loads configuration from environment variables (prefix ``CLACKERS_``) or a
``.env`` file using Pydantic Settings, and sets up logging.
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clackers.engine.base import CombinationMode, GameConfig, MarkingMode
from clackers.engine.validators import validate_die_sides

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Game
    dice: list[int] = Field(default_factory=lambda: [6, 6])
    marking_mode: MarkingMode = MarkingMode.REMOVE
    combination_mode: CombinationMode = CombinationMode.ALL_OR_ONE
    seed: int | None = None

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CLACKERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("dice")
    @classmethod
    def _check_dice(cls, value: list[int]) -> list[int]:
        return list(validate_die_sides(value))

    @field_validator("marking_mode", mode="before")
    @classmethod
    def _parse_marking_mode(cls, value):
        return MarkingMode.parse(value)

    @field_validator("combination_mode", mode="before")
    @classmethod
    def _parse_combination_mode(cls, value):
        return CombinationMode.parse(value)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {value!r}")
        return level

    def to_game_config(self) -> GameConfig:
        """Game configuration described by these settings."""
        return GameConfig(
            die_sides=tuple(self.dice),
            marking_mode=self.marking_mode,
            combination_mode=self.combination_mode,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings (DEBUG when ``debug`` is set)."""
    if settings is None:
        settings = get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
