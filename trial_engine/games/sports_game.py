"""
Sports Game

Participants build two four-player teams from a hand of generated players
and let the match simulator play them against each other.

Play:
- DRAFT_PLAYER / DISCARD_PLAYER: grow or shrink the hand
- PLACE_SLOT: put a player into an empty position
- MOVE_SLOT: drop a player onto an occupied position (swap)
- RETURN_TO_HAND / DISMISS_FROM_SLOT: take a player off the field; the
  player is dismissed when the hand is full
- CLEAR_FIELD: return every fielded player (excess players vanish)
- SIMULATE_MATCH: play the match once every position is filled

Placing, moving and returning players sets up a match. During the grace
period these steps stay open; drafting, discarding, clearing the field or
simulating completes the one extra move.

One round per match: the match record is committed to the round that was
set up for it, and closing the match report opens the next round.
"""

from dataclasses import dataclass
from typing import Optional, Union
import logging

from ..core import Advisory, RejectionReason
from ..simulation import (
    MatchRecord,
    MatchSimulator,
    Player,
    PlayerGenerator,
    TeamPosition,
    TeamSetup,
    TickerEvent
)
from ..simulation.match import MatchResult
from .base import TrialController

logger = logging.getLogger(__name__)

HAND = "hand"


class SportsAction:
    INITIAL_HAND = "INITIAL_HAND"
    DRAFT_PLAYER = "DRAFT_PLAYER"
    DISCARD_PLAYER = "DISCARD_PLAYER"
    PLACE_SLOT = "PLACE_SLOT"
    MOVE_SLOT = "MOVE_SLOT"
    RETURN_TO_HAND = "RETURN_TO_HAND"
    DISMISS_FROM_SLOT = "DISMISS_FROM_SLOT"
    CLEAR_FIELD = "CLEAR_FIELD"
    SIMULATE_MATCH = "SIMULATE_MATCH"


# Modal state: at most one overlay is open at a time

@dataclass(frozen=True)
class HelpModal:
    kind: str = "help"


@dataclass(frozen=True)
class MatchModal:
    result: MatchResult
    ticker_events: tuple
    kind: str = "match"


@dataclass(frozen=True)
class EnlargedModal:
    player: Player
    kind: str = "enlarged"


Modal = Union[HelpModal, MatchModal, EnlargedModal]


class SportsGame(TrialController):
    """Controller for the sports game."""

    game_name = "sports_game"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        game = self.settings.game
        self.initial_hand_size = game.sports_initial_hand
        self.max_hand_size = game.sports_max_hand

        self.players = PlayerGenerator(self.rng)
        self.simulator = MatchSimulator(self.rng)
        self.setup = TeamSetup()
        self.matches: list[MatchRecord] = []
        self.modal: Optional[Modal] = None

        self.team_names = self.simulator.team_names()
        self._open_round(self._round_config())

        self.hand: list[Player] = self.players.generate_many(self.initial_hand_size)
        self.recorder.record(
            SportsAction.INITIAL_HAND,
            involved_player_ids=[p.id for p in self.hand]
        )

    # State

    def _round_config(self) -> dict:
        return {"team_a_name": self.team_names[0], "team_b_name": self.team_names[1]}

    @property
    def match_in_progress(self) -> bool:
        return isinstance(self.modal, MatchModal)

    @property
    def ready(self) -> bool:
        return not self.match_in_progress and self.setup.all_filled

    @property
    def hand_full(self) -> bool:
        return len(self.hand) >= self.max_hand_size

    def _hand_player(self, player_id: int) -> Optional[Player]:
        for player in self.hand:
            if player.id == player_id:
                return player
        return None

    def _guard(self) -> Optional[Advisory]:
        blocked = super()._guard()
        if blocked is not None:
            return blocked
        if self.match_in_progress:
            return self._reject(RejectionReason.INPUT_LOCKED, "Close the match report first")
        return None

    # Hand

    def draft_player(self) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked
        if self.hand_full:
            return self._reject(RejectionReason.HAND_FULL, "Your hand is full")

        player = self.players.generate()
        self.hand.append(player)
        self.recorder.record(SportsAction.DRAFT_PLAYER, involved_player_ids=[player.id])
        self._complete_move()
        return Advisory.ok(f"Drafted {player.name}", payload=player)

    def discard_player(self, player_id: int) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked
        player = self._hand_player(player_id)
        if player is None:
            return self._reject(RejectionReason.UNKNOWN_ENTITY, f"Player {player_id} is not in your hand")

        self.hand.remove(player)
        self.recorder.record(SportsAction.DISCARD_PLAYER, involved_player_ids=[player_id])
        self._complete_move()
        return Advisory.ok(f"Discarded {player.name}")

    # Field

    def place(self, player_id: int, position: TeamPosition) -> Advisory:
        """Drop a player from the hand or another slot onto a position."""
        blocked = self._guard()
        if blocked is not None:
            return blocked

        from_position = self.setup.position_of(player_id)
        if from_position is not None:
            player = self.setup[from_position]
        else:
            player = self._hand_player(player_id)
        if player is None:
            return self._reject(RejectionReason.UNKNOWN_ENTITY, f"Unknown player {player_id}")
        if from_position is position:
            return self._reject(RejectionReason.NO_SLOT, "The player is already there")

        source = from_position.value if from_position is not None else HAND
        existing = self.setup[position]

        if existing is None:
            self.setup[position] = player
            if from_position is not None:
                self.setup[from_position] = None
            else:
                self.hand.remove(player)
            self.recorder.record(
                SportsAction.PLACE_SLOT,
                involved_player_ids=[player.id],
                from_position=source,
                to_position=position.value
            )
            return Advisory.ok(f"{player.name} plays {position.value}")

        self.setup[position] = player
        if from_position is not None:
            self.setup[from_position] = existing
        else:
            self.hand.remove(player)
            # a displaced player only returns when there is room
            if len(self.hand) < self.max_hand_size:
                self.hand.append(existing)
        self.recorder.record(
            SportsAction.MOVE_SLOT,
            involved_player_ids=[player.id, existing.id],
            from_position=source,
            to_position=position.value
        )
        return Advisory.ok(f"{player.name} swapped with {existing.name}")

    def return_to_hand(self, player_id: int) -> Advisory:
        """Take a player off the field; dismissed when the hand is full."""
        blocked = self._guard()
        if blocked is not None:
            return blocked
        position = self.setup.position_of(player_id)
        if position is None:
            return self._reject(RejectionReason.UNKNOWN_ENTITY, f"Player {player_id} is not fielded")

        player = self.setup[position]
        self.setup[position] = None
        if not self.hand_full:
            self.hand.append(player)
            self.recorder.record(
                SportsAction.RETURN_TO_HAND,
                involved_player_ids=[player_id],
                from_position=position.value,
                to_position=HAND
            )
            return Advisory.ok(f"{player.name} is back in your hand")

        self.recorder.record(
            SportsAction.DISMISS_FROM_SLOT,
            involved_player_ids=[player_id],
            from_position=position.value
        )
        return Advisory.ok(f"{player.name} was dismissed")

    def clear_field(self) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked
        if self.setup.is_empty:
            return self._reject(RejectionReason.NOT_READY, "The field is already empty")

        fielded = self.setup.clear()
        self.recorder.record(
            SportsAction.CLEAR_FIELD,
            involved_player_ids=[p.id for p in fielded]
        )
        self.hand = (self.hand + fielded)[:self.max_hand_size]
        self._complete_move()
        return Advisory.ok("Field cleared")

    # Match

    def simulate_match(self) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked
        if not self.setup.all_filled:
            return self._reject(RejectionReason.NOT_READY, "Fill every position first")

        result = self.simulator.simulate(self.setup)
        ticker = self.simulator.ticker_events(
            result, self.team_names[0], self.team_names[1], self.setup
        )
        self.recorder.record(
            SportsAction.SIMULATE_MATCH,
            involved_player_ids=[p.id for p in self.setup.players()]
        )

        record = self.simulator.build_record(
            self.setup,
            result,
            match_index=len(self.matches),
            round_index=self.ledger.current_round.round_index,
            team_names=self.team_names,
            timestamp=self.recorder.now()
        )
        self.ledger.commit_item(record)
        self.matches.append(record)
        self.modal = MatchModal(result=result, ticker_events=tuple(ticker))
        logger.info(
            "match %d: %s %d - %d %s",
            record.match_index, self.team_names[0],
            result.team_a_score, result.team_b_score, self.team_names[1]
        )
        self._complete_move()
        return Advisory.ok(f"{result.team_a_score} - {result.team_b_score}", payload=record)

    def close_match(self) -> Advisory:
        """Dismiss the match report and set up the next match."""
        if self.finished or self.clock.torn_down:
            return self._locked()
        if not self.match_in_progress:
            return self._reject(RejectionReason.NOT_READY, "No match to close")

        # fielded players leave with the match
        self.setup = TeamSetup()
        self.modal = None
        self.team_names = self.simulator.team_names()
        self._open_round(self._round_config())
        return Advisory.ok("Next match")

    @property
    def ticker_events(self) -> list[TickerEvent]:
        if isinstance(self.modal, MatchModal):
            return list(self.modal.ticker_events)
        return []

    # Overlays

    def help(self) -> Advisory:
        advisory = super().help()
        if advisory:
            self.modal = HelpModal()
        return advisory

    def enlarge(self, player_id: int) -> Advisory:
        if self.finished or self.clock.torn_down or self.match_in_progress:
            return self._locked()
        position = self.setup.position_of(player_id)
        player = self.setup[position] if position is not None else self._hand_player(player_id)
        if player is None:
            return self._reject(RejectionReason.UNKNOWN_ENTITY, f"Unknown player {player_id}")
        self.modal = EnlargedModal(player=player)
        return Advisory.ok(player.name)

    def close_modal(self) -> None:
        """Close help or an enlarged card; the match report has its own control."""
        if not self.match_in_progress:
            self.modal = None

    # Result

    def _databases(self) -> dict:
        return {"players": self.players.database}

    def _records(self) -> dict:
        return {"matches": list(self.matches)}

    def summary(self) -> dict:
        return {
            "matches_played": len(self.matches),
            "players_generated": len(self.players)
        }
