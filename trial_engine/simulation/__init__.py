"""
Simulation Module

Generated entities and the algorithms that judge them:
- PlayerGenerator / PersonGenerator with per-trial id allocation
- MatchSimulator: lineup -> scoreline and commentary timeline
- CompatibilityJudge: pair of persons -> 0-100 score and news messages
"""

from .entities import (
    CoreTraits,
    EntityGenerator,
    Gender,
    LookingFor,
    MiscPreferences,
    Person,
    PersonGenerator,
    Player,
    PlayerGenerator,
    PlayerStats,
    PlayerType,
    PreferenceValue,
    STAR_VALUES
)
from .match import (
    MatchRecord,
    MatchResult,
    MatchSimulator,
    Side,
    TeamPosition,
    TeamSetup,
    TickerEvent,
    TickerEventType,
    Winner,
    position_fitness
)
from .compatibility import CompatibilityJudge, CoupleRecord

__all__ = [
    # Entities
    "CoreTraits",
    "EntityGenerator",
    "Gender",
    "LookingFor",
    "MiscPreferences",
    "Person",
    "PersonGenerator",
    "Player",
    "PlayerGenerator",
    "PlayerStats",
    "PlayerType",
    "PreferenceValue",
    "STAR_VALUES",
    # Match
    "MatchRecord",
    "MatchResult",
    "MatchSimulator",
    "Side",
    "TeamPosition",
    "TeamSetup",
    "TickerEvent",
    "TickerEventType",
    "Winner",
    "position_fitness",
    # Compatibility
    "CompatibilityJudge",
    "CoupleRecord"
]
