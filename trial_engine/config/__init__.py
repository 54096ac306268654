"""
Configuration Management

Centralized configuration for:
- Clock defaults (time limit, tick interval, graceful extension)
- Game parameters (hand sizes, term length, word length)
- Per-trial options handed in by the experiment timeline
"""

from .settings import (
    Settings,
    ClockConfig,
    GameConfig,
    TrialConfig,
    get_settings
)

__all__ = [
    "Settings",
    "ClockConfig",
    "GameConfig",
    "TrialConfig",
    "get_settings"
]
