"""
Settings Management with Pydantic

Provides type-safe configuration management with:
- Environment variable support (TRIALS_ prefix)
- Validation
- Per-trial options as supplied by the experiment timeline
"""

from typing import Optional
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClockConfig(BaseSettings):
    """Countdown defaults."""
    model_config = SettingsConfigDict(
        env_prefix="TRIALS_CLOCK_",
        extra="ignore"
    )

    time_limit_seconds: int = Field(default=240, ge=0)
    tick_interval_seconds: float = Field(default=1.0, gt=0)
    allow_graceful_extension: bool = True


class GameConfig(BaseSettings):
    """Game parameters shared by the trial controllers."""
    model_config = SettingsConfigDict(
        env_prefix="TRIALS_GAME_",
        extra="ignore"
    )

    # Number game
    max_expression_tokens: int = Field(default=15, ge=1)
    result_decimal_places: int = 2

    # Word game
    min_word_length: int = Field(default=4, ge=1)
    max_word_length: int = 20

    # Sports game
    sports_initial_hand: int = 5
    sports_max_hand: int = 6

    # Dating game
    dating_hand_size: int = 5
    news_recent_couples: int = 5


class TrialConfig(BaseModel):
    """
    Options for a single trial.

    Accepts the timeline's camelCase keys as well as the field names.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    time_limit_seconds: int = Field(default=240, ge=0, alias="timeLimitSeconds")
    allow_graceful_extension: bool = Field(default=False, alias="allowGracefulExtension")
    show_correctness_markers: bool = Field(default=False, alias="showCorrectnessMarkers")
    seed: Optional[int] = None

    @classmethod
    def from_settings(cls, settings: Optional["Settings"] = None, **overrides) -> "TrialConfig":
        """Build trial options from the environment defaults."""
        settings = settings or get_settings()
        values = {
            "time_limit_seconds": settings.clock.time_limit_seconds,
            "allow_graceful_extension": settings.clock.allow_graceful_extension,
            "seed": settings.random_seed,
        }
        values.update(overrides)
        return cls(**values)


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_prefix="TRIALS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Application
    app_name: str = "Timed Trial Engine"
    debug: bool = False
    log_level: str = "INFO"

    # Reproducibility
    random_seed: Optional[int] = None

    # Optional newline-separated dictionary for the word game
    word_list_path: Optional[str] = None

    # Sub-configurations
    clock: ClockConfig = Field(default_factory=ClockConfig)
    game: GameConfig = Field(default_factory=GameConfig)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            clock=ClockConfig(),
            game=GameConfig()
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
