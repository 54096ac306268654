"""
Compatibility Judge

Scores a pair of persons from 0 to 100:
- Core traits: up to 25 points each, decaying with the trait difference
- Preferences: +20 per shared stance, -20 per conflicting stance
  (only axes where both persons hold a non-neutral view)
- The sum is clamped to [0, 100]
- Pairs without mutual attraction lose a further 100 points afterwards,
  so their score ends up negative

Also selects the couple news message shown in the ticker.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import random

from .catalog import COUPLE_MESSAGES
from .entities import Person, PreferenceValue

logger = logging.getLogger(__name__)

# points by absolute trait difference; 7 and above score nothing
TRAIT_POINTS = {0: 25, 1: 25, 2: 18, 3: 12, 4: 7, 5: 3, 6: 1}

PREFERENCE_POINTS = 20
NO_ATTRACTION_PENALTY = 100

NEWS_NOISE_RANGE = 40

# (lower bound, message bucket), checked top down
NEWS_BUCKETS = (
    (80, "very_positive"),
    (60, "positive"),
    (40, "neutral"),
    (20, "negative"),
)


@dataclass(frozen=True)
class CoupleRecord:
    """Append-only record of a matched couple."""
    match_index: int
    round_index: int
    person1_id: int
    person2_id: int
    score: int
    mutual_attraction: bool
    timestamp: float

    def to_dict(self) -> dict:
        return {
            "match_index": self.match_index,
            "round_index": self.round_index,
            "person1_id": self.person1_id,
            "person2_id": self.person2_id,
            "score": self.score,
            "mutual_attraction": self.mutual_attraction,
            "timestamp": self.timestamp
        }


def trait_points(diff: int) -> int:
    return TRAIT_POINTS.get(abs(diff), 0)


class CompatibilityJudge:
    """Pairwise scoring plus news selection with an injected random source."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    @staticmethod
    def are_romantically_compatible(person1: Person, person2: Person) -> bool:
        return person1.is_attracted_to(person2) and person2.is_attracted_to(person1)

    def score(self, person1: Person, person2: Person) -> int:
        total = 0
        for (name, value1), (_, value2) in zip(
            person1.core_traits.items(), person2.core_traits.items()
        ):
            total += trait_points(value1 - value2)

        for (axis, pref1), (_, pref2) in zip(
            person1.misc_preferences.items(), person2.misc_preferences.items()
        ):
            if pref1 is PreferenceValue.NEUTRAL or pref2 is PreferenceValue.NEUTRAL:
                continue
            total += PREFERENCE_POINTS if pref1 is pref2 else -PREFERENCE_POINTS

        total = max(0, min(100, total))

        if not self.are_romantically_compatible(person1, person2):
            total -= NO_ATTRACTION_PENALTY

        logger.debug("compatibility %d/%d: %d", person1.id, person2.id, total)
        return total

    @staticmethod
    def news_bucket(noisy_score: float) -> str:
        for lower_bound, bucket in NEWS_BUCKETS:
            if noisy_score >= lower_bound:
                return bucket
        return "very_negative"

    def news_message(self, couples: list[tuple[Person, Person, int]], max_recent: int = 5) -> str:
        """
        Pick one of the most recent couples and describe how it is going.

        Noise of up to ±20 points lets good couples have awkward moments
        and bad ones have some fun. Returns "" when there are no couples.
        """
        if not couples:
            return ""

        recent = couples[-max_recent:]
        person1, person2, score = self.rng.choice(recent)
        noisy_score = score + (self.rng.random() - 0.5) * NEWS_NOISE_RANGE

        template = self.rng.choice(COUPLE_MESSAGES[self.news_bucket(noisy_score)])
        return template.replace("{person1}", person1.name).replace("{person2}", person2.name)
