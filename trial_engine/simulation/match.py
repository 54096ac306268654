"""
Match Simulator

Turns a lineup of eight players into a scoreline and a live commentary
timeline.

Scoring:
- Position fitness = primary stat × 2 + stamina
  (defense for defenders, passing for midfielders, shooting for attackers)
- Team fitness = mean over filled positions
- Goal difference = clamp(round(Δfitness / 3), ±5) + noise, re-clamped to ±4
- Both teams share a baseline of 0-2 goals; the leading side adds the difference

Timeline:
- Kickoff, one event per goal (equalizer text when a goal levels the score),
  1-2 build-up events between goals, full-time commentary by category
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import math
import random

from .catalog import CLUB_NAME_PARTS, LIVE_TICKER_EVENTS, MATCH_COMMENTARY
from .entities import Player


class Side(Enum):
    A = "A"
    B = "B"


class Winner(Enum):
    A = "A"
    B = "B"
    TIE = "tie"


class TeamPosition(Enum):
    """The eight lineup slots, four per team."""
    DEFENSE_A = "defenseA"
    MID_A1 = "midA1"
    MID_A2 = "midA2"
    OFFENSE_A = "offenseA"
    OFFENSE_B = "offenseB"
    MID_B1 = "midB1"
    MID_B2 = "midB2"
    DEFENSE_B = "defenseB"

    @property
    def side(self) -> Side:
        return Side.A if "A" in self.value else Side.B

    @property
    def primary_stat(self) -> str:
        if self in (TeamPosition.DEFENSE_A, TeamPosition.DEFENSE_B):
            return "defense"
        if self in (TeamPosition.OFFENSE_A, TeamPosition.OFFENSE_B):
            return "shooting"
        return "passing"

    @property
    def can_score(self) -> bool:
        return self.primary_stat != "defense"


TEAM_A_POSITIONS = (
    TeamPosition.DEFENSE_A,
    TeamPosition.MID_A1,
    TeamPosition.MID_A2,
    TeamPosition.OFFENSE_A,
)
TEAM_B_POSITIONS = (
    TeamPosition.DEFENSE_B,
    TeamPosition.MID_B1,
    TeamPosition.MID_B2,
    TeamPosition.OFFENSE_B,
)

# 50% no noise, 1/6 each for ±1, 1/12 each for ±2
NOISE_OPTIONS = (0, 0, 0, 0, 0, 0, 1, 1, -1, -1, 2, -2)

MAX_RAW_GOAL_DIFF = 5
MAX_GOAL_DIFF = 4


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def position_fitness(player: Optional[Player], position: TeamPosition) -> float:
    """Fitness contribution of a player in a position; 0 for an empty slot."""
    if player is None:
        return 0
    return getattr(player.stats, position.primary_stat) * 2 + player.stats.stamina


@dataclass
class TeamSetup:
    """
    Current lineup: every position mapped to a player or None.

    Mutable while the participant arranges players; the simulator works on
    a snapshot taken with copy().
    """
    slots: dict = field(default_factory=lambda: {p: None for p in TeamPosition})

    def __getitem__(self, position: TeamPosition) -> Optional[Player]:
        return self.slots[position]

    def __setitem__(self, position: TeamPosition, player: Optional[Player]) -> None:
        self.slots[position] = player

    def position_of(self, player_id: int) -> Optional[TeamPosition]:
        for position, player in self.slots.items():
            if player is not None and player.id == player_id:
                return position
        return None

    def players(self) -> list[Player]:
        return [p for p in self.slots.values() if p is not None]

    def team(self, side: Side) -> list[tuple[TeamPosition, Optional[Player]]]:
        positions = TEAM_A_POSITIONS if side is Side.A else TEAM_B_POSITIONS
        return [(p, self.slots[p]) for p in positions]

    @property
    def all_filled(self) -> bool:
        return all(p is not None for p in self.slots.values())

    @property
    def is_empty(self) -> bool:
        return all(p is None for p in self.slots.values())

    def clear(self) -> list[Player]:
        removed = self.players()
        self.slots = {p: None for p in TeamPosition}
        return removed

    def copy(self) -> "TeamSetup":
        return TeamSetup(slots=dict(self.slots))

    def player_ids(self) -> dict:
        return {p.value: (pl.id if pl is not None else None) for p, pl in self.slots.items()}

    def to_dict(self) -> dict:
        return self.player_ids()


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one simulated match."""
    team_a_score: int
    team_b_score: int
    team_a_fitness: float
    team_b_fitness: float
    winner: Winner
    goal_difference: int = 0
    noise: int = 0
    losing_team_goals: int = 0

    @property
    def total_goals(self) -> int:
        return self.team_a_score + self.team_b_score

    def to_dict(self) -> dict:
        return {
            "team_a_score": self.team_a_score,
            "team_b_score": self.team_b_score,
            "team_a_fitness": self.team_a_fitness,
            "team_b_fitness": self.team_b_fitness,
            "winner": self.winner.value,
            "goal_difference": self.goal_difference,
            "noise": self.noise,
            "losing_team_goals": self.losing_team_goals
        }


class TickerEventType(Enum):
    KICKOFF = "kickoff"
    EVENT = "event"
    GOAL = "goal"
    FULLTIME = "fulltime"


@dataclass(frozen=True)
class TickerEvent:
    """
    One line of live commentary.

    delay_ms only paces the presentation.
    """
    type: TickerEventType
    message: str
    score_a: int
    score_b: int
    delay_ms: float

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "message": self.message,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "delay_ms": self.delay_ms
        }


@dataclass(frozen=True)
class MatchRecord:
    """Append-only record of a simulated match, referencing players by id."""
    match_index: int
    round_index: int
    team_a_name: str
    team_b_name: str
    player_ids: dict
    position_fitness: dict
    result: MatchResult
    timestamp: float

    def to_dict(self) -> dict:
        return {
            "match_index": self.match_index,
            "round_index": self.round_index,
            "team_a_name": self.team_a_name,
            "team_b_name": self.team_b_name,
            "player_ids": dict(self.player_ids),
            "position_fitness": dict(self.position_fitness),
            **self.result.to_dict(),
            "timestamp": self.timestamp
        }


class MatchSimulator:
    """
    Deterministic match engine given an injected random source.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    # Scoring

    @staticmethod
    def team_fitness(setup: TeamSetup, side: Side) -> float:
        """Mean fitness over the filled positions of one team."""
        scores = [
            position_fitness(player, position)
            for position, player in setup.team(side)
            if player is not None
        ]
        return sum(scores) / len(scores) if scores else 0

    def simulate(self, setup: TeamSetup) -> MatchResult:
        team_a_fitness = self.team_fitness(setup, Side.A)
        team_b_fitness = self.team_fitness(setup, Side.B)

        raw = clamp(
            round_half_up((team_a_fitness - team_b_fitness) / 3),
            -MAX_RAW_GOAL_DIFF,
            MAX_RAW_GOAL_DIFF
        )
        noise = self.rng.choice(NOISE_OPTIONS)
        goal_diff = int(clamp(raw + noise, -MAX_GOAL_DIFF, MAX_GOAL_DIFF))

        losing_team_goals = self.rng.randint(0, 2)
        team_a_score = losing_team_goals + max(0, goal_diff)
        team_b_score = losing_team_goals + max(0, -goal_diff)

        if team_a_score > team_b_score:
            winner = Winner.A
        elif team_b_score > team_a_score:
            winner = Winner.B
        else:
            winner = Winner.TIE

        return MatchResult(
            team_a_score=team_a_score,
            team_b_score=team_b_score,
            team_a_fitness=team_a_fitness,
            team_b_fitness=team_b_fitness,
            winner=winner,
            goal_difference=goal_diff,
            noise=noise,
            losing_team_goals=losing_team_goals
        )

    # Presentation

    def team_name(self) -> str:
        first = self.rng.choice(CLUB_NAME_PARTS["first"])
        second = self.rng.choice(CLUB_NAME_PARTS["second"])
        suffix = self.rng.choice(CLUB_NAME_PARTS["suffix"])
        return f"{first} {second} {suffix}"

    def team_names(self) -> tuple[str, str]:
        """Two distinct club names."""
        team_a_name = self.team_name()
        team_b_name = self.team_name()
        while team_b_name == team_a_name:
            team_b_name = self.team_name()
        return team_a_name, team_b_name

    @staticmethod
    def commentary_category(score_a: int, score_b: int) -> str:
        total = score_a + score_b
        if score_a == score_b:
            return "tie"
        if abs(score_a - score_b) >= 3:
            return "blowout"
        if total >= 6:
            return "high_score"
        if total <= 2:
            return "low_score"
        return "regular"

    def _scorer(self, setup: TeamSetup, side: Side) -> str:
        candidates = [p for pos, p in setup.team(side) if p is not None and pos.can_score]
        if not candidates:
            return "Unknown"
        return self.rng.choice(candidates).name

    def ticker_events(
        self,
        result: MatchResult,
        team_a_name: str,
        team_b_name: str,
        setup: TeamSetup
    ) -> list[TickerEvent]:
        """Build the chronological commentary for a match result."""
        goals = [(Side.A, self._scorer(setup, Side.A)) for _ in range(result.team_a_score)]
        goals += [(Side.B, self._scorer(setup, Side.B)) for _ in range(result.team_b_score)]
        self.rng.shuffle(goals)

        names = {Side.A: team_a_name, Side.B: team_b_name}
        timeline: list[tuple[float, TickerEvent]] = [(0, TickerEvent(
            type=TickerEventType.KICKOFF,
            message=self.rng.choice(LIVE_TICKER_EVENTS["kickoff"]),
            score_a=0,
            score_b=0,
            delay_ms=1000
        ))]

        score_a = 0
        score_b = 0
        for index, (side, scorer) in enumerate(goals):
            if side is Side.A:
                score_a += 1
            else:
                score_b += 1

            kind = "equalizer" if score_a == score_b and score_a > 0 else "goal"
            message = (
                self.rng.choice(LIVE_TICKER_EVENTS[kind])
                .replace("{scorer}", scorer)
                .replace("{team}", names[side])
            )
            # goals sit at 10, 20, 30... leaving room for build-up events
            timeline.append(((index + 1) * 10, TickerEvent(
                type=TickerEventType.GOAL,
                message=message,
                score_a=score_a,
                score_b=score_b,
                delay_ms=1800 + self.rng.random() * 500
            )))

        build_up_count = self.rng.randint(1, 2)
        for _ in range(build_up_count):
            kind = "chance" if self.rng.random() < 0.6 else "defense"
            team = team_a_name if self.rng.random() < 0.5 else team_b_name
            order = self.rng.random() * len(goals) * 10 + 1

            goals_before = goals[:int(order // 10)]
            timeline.append((order, TickerEvent(
                type=TickerEventType.EVENT,
                message=self.rng.choice(LIVE_TICKER_EVENTS[kind]).replace("{team}", team),
                score_a=sum(1 for s, _ in goals_before if s is Side.A),
                score_b=sum(1 for s, _ in goals_before if s is Side.B),
                delay_ms=1800 + self.rng.random() * 500
            )))

        timeline.sort(key=lambda entry: entry[0])
        events = [event for _, event in timeline]

        category = self.commentary_category(score_a, score_b)
        events.append(TickerEvent(
            type=TickerEventType.FULLTIME,
            message=self.rng.choice(MATCH_COMMENTARY[category]),
            score_a=score_a,
            score_b=score_b,
            delay_ms=2000
        ))
        return events

    def build_record(
        self,
        setup: TeamSetup,
        result: MatchResult,
        match_index: int,
        round_index: int,
        team_names: tuple[str, str],
        timestamp: float
    ) -> MatchRecord:
        return MatchRecord(
            match_index=match_index,
            round_index=round_index,
            team_a_name=team_names[0],
            team_b_name=team_names[1],
            player_ids=setup.player_ids(),
            position_fitness={p.value: position_fitness(setup[p], p) for p in TeamPosition},
            result=result,
            timestamp=timestamp
        )
