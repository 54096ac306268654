"""
Simulation Entities

Defines the generated entities consumed by the games:
- Players with star-rated stats (sports game)
- Persons with personality traits and preferences (dating game)

Each generator owns a private id counter and an injected random source.
Every entity it produces stays in its database, because match and couple
records refer to entities by id.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional
import random

from .catalog import (
    FEMALE_NAMES,
    MALE_NAMES,
    MEN_IMAGES,
    MISC_DISPLAY_WORDS,
    SURNAMES,
    TRAIT_DISPLAY_WORDS,
    WOMEN_IMAGES
)

STAR_VALUES = (0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0)
MAX_STAR_RATING = max(STAR_VALUES)

# specialty stats lean towards the top of the scale
SPECIALTY_WEIGHTS = (1, 1, 2, 2, 3, 3, 4, 4, 5, 5)


class PlayerType(Enum):
    """Field specialty of a player."""
    DEFENSE = "defense"
    MID = "mid"
    ATTACK = "attack"


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"


class LookingFor(Enum):
    """Which gender a person is attracted to."""
    MALE = "male"
    FEMALE = "female"
    BOTH = "both"


class PreferenceValue(Enum):
    """Stance on a preference axis."""
    NEUTRAL = "neutral"
    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class PlayerStats:
    """Star ratings on the half-star scale 0.5 to 5.0."""
    defense: float
    passing: float
    shooting: float
    stamina: float

    def to_dict(self) -> dict:
        return {
            "defense": self.defense,
            "passing": self.passing,
            "shooting": self.shooting,
            "stamina": self.stamina
        }


@dataclass(frozen=True)
class Player:
    """A generated football player."""
    id: int
    name: str
    image: str
    player_type: PlayerType
    stats: PlayerStats

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "player_type": self.player_type.value,
            "stats": self.stats.to_dict()
        }


@dataclass(frozen=True)
class CoreTraits:
    """Personality scales from 0 to 10, 5 being average."""
    openness: int      # 0=traditional, 10=very open to new experiences
    sportiness: int    # 0=sedentary, 10=very athletic
    social: int        # 0=introverted, 10=very social
    natural: int       # 0=glamorous, 10=natural/low-maintenance

    def items(self) -> list[tuple[str, int]]:
        return [(f.name, getattr(self, f.name)) for f in fields(self)]

    def to_dict(self) -> dict:
        return dict(self.items())


@dataclass(frozen=True)
class MiscPreferences:
    """Ten binary preference axes, each possibly neutral."""
    cats: PreferenceValue = PreferenceValue.NEUTRAL
    dogs: PreferenceValue = PreferenceValue.NEUTRAL
    smoking: PreferenceValue = PreferenceValue.NEUTRAL
    drinking: PreferenceValue = PreferenceValue.NEUTRAL
    travel: PreferenceValue = PreferenceValue.NEUTRAL
    cooking: PreferenceValue = PreferenceValue.NEUTRAL
    reading: PreferenceValue = PreferenceValue.NEUTRAL
    music: PreferenceValue = PreferenceValue.NEUTRAL
    movies: PreferenceValue = PreferenceValue.NEUTRAL
    outdoors: PreferenceValue = PreferenceValue.NEUTRAL

    @classmethod
    def axes(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def items(self) -> list[tuple[str, PreferenceValue]]:
        return [(name, getattr(self, name)) for name in self.axes()]

    def non_neutral(self) -> list[tuple[str, PreferenceValue]]:
        return [(name, value) for name, value in self.items() if value is not PreferenceValue.NEUTRAL]

    def to_dict(self) -> dict:
        return {name: value.value for name, value in self.items()}


@dataclass(frozen=True)
class Person:
    """A generated dating-game character."""
    id: int
    name: str
    image: str
    gender: Gender
    looking_for: LookingFor
    core_traits: CoreTraits
    misc_preferences: MiscPreferences
    display_traits: tuple = ()

    def is_attracted_to(self, other: "Person") -> bool:
        return (
            self.looking_for is LookingFor.BOTH
            or self.looking_for.value == other.gender.value
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "gender": self.gender.value,
            "looking_for": self.looking_for.value,
            "core_traits": self.core_traits.to_dict(),
            "misc_preferences": self.misc_preferences.to_dict(),
            "display_traits": list(self.display_traits)
        }


class EntityGenerator(ABC):
    """
    Id allocator and entity database for one trial.

    Ids start at 0 and increase by one per generated entity; they are
    never reused, and every entity stays retrievable by id.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._next_id = 0
        self._database: list = []
        self._by_id: dict = {}

    def _allocate_id(self) -> int:
        entity_id = self._next_id
        self._next_id += 1
        return entity_id

    def _register(self, entity):
        self._database.append(entity)
        self._by_id[entity.id] = entity
        return entity

    @abstractmethod
    def generate(self):
        """Create, register and return the next entity."""
        pass

    def generate_many(self, count: int) -> list:
        return [self.generate() for _ in range(count)]

    def get(self, entity_id: int):
        return self._by_id.get(entity_id)

    def __contains__(self, entity_id: int) -> bool:
        return entity_id in self._by_id

    def __len__(self) -> int:
        return len(self._database)

    @property
    def database(self) -> list:
        """Every entity generated so far, in id order."""
        return list(self._database)

    def to_list(self) -> list[dict]:
        return [e.to_dict() for e in self._database]


class PlayerGenerator(EntityGenerator):
    """Produces players with a random specialty and star-rated stats."""

    def _stat_value(self) -> float:
        return self.rng.choice(STAR_VALUES)

    def _specialty_value(self) -> float:
        return self.rng.choices(STAR_VALUES, weights=SPECIALTY_WEIGHTS, k=1)[0]

    def generate(self) -> Player:
        player_type = self.rng.choice(list(PlayerType))
        name = self.rng.choice(SURNAMES)
        image = self.rng.choice(MEN_IMAGES)

        stats = PlayerStats(
            defense=self._specialty_value() if player_type is PlayerType.DEFENSE else self._stat_value(),
            passing=self._specialty_value() if player_type is PlayerType.MID else self._stat_value(),
            shooting=self._specialty_value() if player_type is PlayerType.ATTACK else self._stat_value(),
            stamina=self._stat_value()
        )

        return self._register(Player(
            id=self._allocate_id(),
            name=name,
            image=image,
            player_type=player_type,
            stats=stats
        ))


def trait_level(value: int) -> str:
    """Bucket a 0-10 trait value into one of five display levels."""
    if value <= 2:
        return "very_low"
    if value <= 4:
        return "low"
    if value <= 6:
        return "medium"
    if value <= 8:
        return "high"
    return "very_high"


class PersonGenerator(EntityGenerator):
    """
    Produces persons with traits, preferences and display words.

    Orientation split: 75% straight, 5% gay, 20% bi.
    One or two preference axes are non-neutral, each 50/50 positive/negative.
    """

    def _core_traits(self) -> CoreTraits:
        return CoreTraits(
            openness=self.rng.randint(0, 10),
            sportiness=self.rng.randint(0, 10),
            social=self.rng.randint(0, 10),
            natural=self.rng.randint(0, 10)
        )

    def _misc_preferences(self) -> MiscPreferences:
        count = 1 if self.rng.random() < 0.5 else 2
        selected = self.rng.sample(MiscPreferences.axes(), count)
        values = {
            axis: PreferenceValue.POSITIVE if self.rng.random() < 0.5 else PreferenceValue.NEGATIVE
            for axis in selected
        }
        return MiscPreferences(**values)

    def _display_traits(self, traits: CoreTraits, preferences: MiscPreferences) -> tuple:
        words = []
        for name, value in traits.items():
            words.append(self.rng.choice(TRAIT_DISPLAY_WORDS[name][trait_level(value)]))
        for name, value in preferences.non_neutral():
            words.append(self.rng.choice(MISC_DISPLAY_WORDS[name][value.value]))

        # longest first for card layout
        words.sort(key=len, reverse=True)
        return tuple(words)

    def _looking_for(self, gender: Gender) -> LookingFor:
        r = self.rng.random()
        if r < 0.75:
            return LookingFor.FEMALE if gender is Gender.MALE else LookingFor.MALE
        elif r < 0.8:
            return LookingFor(gender.value)
        return LookingFor.BOTH

    def generate(self) -> Person:
        gender = Gender.MALE if self.rng.random() < 0.5 else Gender.FEMALE
        if gender is Gender.MALE:
            name = self.rng.choice(MALE_NAMES)
            image = self.rng.choice(MEN_IMAGES)
        else:
            name = self.rng.choice(FEMALE_NAMES)
            image = self.rng.choice(WOMEN_IMAGES)

        looking_for = self._looking_for(gender)
        core_traits = self._core_traits()
        misc_preferences = self._misc_preferences()

        return self._register(Person(
            id=self._allocate_id(),
            name=name,
            image=image,
            gender=gender,
            looking_for=looking_for,
            core_traits=core_traits,
            misc_preferences=misc_preferences,
            display_traits=self._display_traits(core_traits, misc_preferences)
        ))
