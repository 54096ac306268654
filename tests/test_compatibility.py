"""
Unit tests for couple scoring and news message selection.
"""

import random

import pytest

from trial_engine.simulation import (
    CompatibilityJudge,
    CoreTraits,
    Gender,
    LookingFor,
    MiscPreferences,
    Person,
    PreferenceValue
)
from trial_engine.simulation.catalog import COUPLE_MESSAGES
from trial_engine.simulation.compatibility import trait_points


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_person(person_id, gender=Gender.FEMALE, looking_for=LookingFor.MALE,
                traits=(5, 5, 5, 5), name=None, **preferences):
    return Person(
        id=person_id,
        name=name or f"Person{person_id}",
        image="",
        gender=gender,
        looking_for=looking_for,
        core_traits=CoreTraits(*traits),
        misc_preferences=MiscPreferences(**preferences)
    )


def straight_pair(traits_1=(5, 5, 5, 5), traits_2=(5, 5, 5, 5), prefs_1=None, prefs_2=None):
    woman = make_person(0, Gender.FEMALE, LookingFor.MALE, traits_1, **(prefs_1 or {}))
    man = make_person(1, Gender.MALE, LookingFor.FEMALE, traits_2, **(prefs_2 or {}))
    return woman, man


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("diff, points", [
    (0, 25), (1, 25), (-1, 25), (2, 18), (3, 12), (4, 7), (5, 3), (6, 1), (7, 0), (10, 0)
])
def test_trait_points(diff, points):
    assert trait_points(diff) == points


def test_identical_traits_with_mutual_attraction_score_100():
    judge = CompatibilityJudge(random.Random(0))
    assert judge.score(*straight_pair()) == 100


def test_score_is_clamped_to_100():
    judge = CompatibilityJudge(random.Random(0))
    pair = straight_pair(
        prefs_1={"cats": PreferenceValue.POSITIVE},
        prefs_2={"cats": PreferenceValue.POSITIVE}
    )
    assert judge.score(*pair) == 100


def test_opposite_traits_score_0():
    judge = CompatibilityJudge(random.Random(0))
    pair = straight_pair(traits_1=(0, 0, 0, 0), traits_2=(10, 10, 10, 10))
    assert judge.score(*pair) == 0


def test_conflicting_preferences_clamp_at_0():
    judge = CompatibilityJudge(random.Random(0))
    pair = straight_pair(
        traits_1=(0, 0, 0, 0),
        traits_2=(10, 10, 10, 10),
        prefs_1={"smoking": PreferenceValue.POSITIVE},
        prefs_2={"smoking": PreferenceValue.NEGATIVE}
    )
    assert judge.score(*pair) == 0


def test_preferences_add_and_subtract_twenty():
    judge = CompatibilityJudge(random.Random(0))
    base = straight_pair(traits_1=(2, 2, 2, 2), traits_2=(5, 5, 5, 5))
    assert judge.score(*base) == 48

    shared = straight_pair(
        traits_1=(2, 2, 2, 2),
        traits_2=(5, 5, 5, 5),
        prefs_1={"dogs": PreferenceValue.POSITIVE, "travel": PreferenceValue.NEGATIVE},
        prefs_2={"dogs": PreferenceValue.POSITIVE, "travel": PreferenceValue.POSITIVE}
    )
    assert judge.score(*shared) == 48

    neutral = straight_pair(
        traits_1=(2, 2, 2, 2),
        traits_2=(5, 5, 5, 5),
        prefs_1={"music": PreferenceValue.POSITIVE}
    )
    assert judge.score(*neutral) == 48


def test_missing_attraction_subtracts_after_clamping():
    judge = CompatibilityJudge(random.Random(0))
    woman = make_person(0, Gender.FEMALE, LookingFor.MALE)
    other_woman = make_person(1, Gender.FEMALE, LookingFor.MALE)
    assert judge.score(woman, other_woman) == 0

    apart = make_person(2, Gender.FEMALE, LookingFor.MALE, traits=(10, 10, 10, 10))
    lonely = make_person(3, Gender.FEMALE, LookingFor.FEMALE, traits=(0, 0, 0, 0))
    assert judge.score(apart, lonely) == -100


def test_romantic_compatibility_needs_both_directions():
    judge = CompatibilityJudge()
    bi = make_person(0, Gender.FEMALE, LookingFor.BOTH)
    gay = make_person(1, Gender.FEMALE, LookingFor.FEMALE)
    straight = make_person(2, Gender.MALE, LookingFor.FEMALE)
    straight_woman = make_person(3, Gender.FEMALE, LookingFor.MALE)

    assert judge.are_romantically_compatible(bi, gay)
    assert judge.are_romantically_compatible(bi, straight)
    assert not judge.are_romantically_compatible(gay, straight)
    assert not judge.are_romantically_compatible(straight_woman, bi)


# ---------------------------------------------------------------------------
# News
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("noisy_score, bucket", [
    (95, "very_positive"),
    (80, "very_positive"),
    (79.9, "positive"),
    (60, "positive"),
    (45, "neutral"),
    (20, "negative"),
    (19.9, "very_negative"),
    (-100, "very_negative"),
])
def test_news_bucket_boundaries(noisy_score, bucket):
    assert CompatibilityJudge.news_bucket(noisy_score) == bucket


def test_news_message_is_empty_without_couples():
    assert CompatibilityJudge(random.Random(0)).news_message([]) == ""


def test_news_message_names_a_recent_couple():
    judge = CompatibilityJudge(random.Random(9))
    couples = [
        (make_person(i, name=f"Old{i}"), make_person(i + 100, name=f"Partner{i}"), 50)
        for i in range(10)
    ]
    for _ in range(30):
        message = judge.news_message(couples, max_recent=5)
        assert "{person" not in message
        assert any(f"Old{i} " in message or message.startswith(f"Old{i}") for i in range(5, 10))
        assert not any(f"Old{i} " in message for i in range(5))


def test_news_noise_stays_within_twenty_points():
    judge = CompatibilityJudge(random.Random(4))
    woman, man = straight_pair()
    very_positive = {m.replace("{person1}", "Person0").replace("{person2}", "Person1")
                     for m in COUPLE_MESSAGES["very_positive"] + COUPLE_MESSAGES["positive"]}
    for _ in range(50):
        assert judge.news_message([(woman, man, 100)]) in very_positive
