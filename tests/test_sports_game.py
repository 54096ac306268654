"""
Tests for the sports game controller.
"""

import pytest

from trial_engine.config import TrialConfig
from trial_engine.core import RejectionReason
from trial_engine.games import EnlargedModal, HelpModal, MatchModal, SportsGame
from trial_engine.simulation import MatchRecord, TeamPosition


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def fill_field(game):
    for position in TeamPosition:
        if not game.hand:
            game.draft_player()
        game.place(game.hand[0].id, position)


def labels(game):
    return [a.label for a in game.recorder.actions]


@pytest.fixture
def game(make_game):
    return make_game(SportsGame)


# ---------------------------------------------------------------------------
# Hand
# ---------------------------------------------------------------------------

def test_initial_hand_is_logged(game):
    assert [p.id for p in game.hand] == [0, 1, 2, 3, 4]
    first = game.recorder.actions[0]
    assert first.label == "INITIAL_HAND"
    assert first.details == {"involved_player_ids": [0, 1, 2, 3, 4]}
    assert len(game.players) == 5


def test_draft_until_the_hand_is_full(game):
    assert game.draft_player().accepted
    assert len(game.hand) == 6
    advisory = game.draft_player()
    assert advisory.reason is RejectionReason.HAND_FULL
    assert len(game.players) == 6


def test_discard_keeps_the_player_in_the_database(game):
    game.discard_player(2)
    assert 2 not in [p.id for p in game.hand]
    assert game.players.get(2) is not None
    assert game.discard_player(2).reason is RejectionReason.UNKNOWN_ENTITY


# ---------------------------------------------------------------------------
# Field
# ---------------------------------------------------------------------------

def test_place_into_empty_slot(game):
    game.place(0, TeamPosition.DEFENSE_A)
    assert game.setup[TeamPosition.DEFENSE_A].id == 0
    assert 0 not in [p.id for p in game.hand]
    action = game.recorder.actions[-1]
    assert action.label == "PLACE_SLOT"
    assert action.details["from_position"] == "hand"
    assert action.details["to_position"] == "defenseA"


def test_hand_to_occupied_slot_swaps_back_into_hand(game):
    game.place(0, TeamPosition.MID_A1)
    game.place(1, TeamPosition.MID_A1)

    assert game.setup[TeamPosition.MID_A1].id == 1
    assert game.hand[-1].id == 0
    action = game.recorder.actions[-1]
    assert action.label == "MOVE_SLOT"
    assert action.details["involved_player_ids"] == [1, 0]


def test_slot_to_slot_swap(game):
    game.place(0, TeamPosition.MID_A1)
    game.place(1, TeamPosition.MID_B1)
    game.place(0, TeamPosition.MID_B1)

    assert game.setup[TeamPosition.MID_B1].id == 0
    assert game.setup[TeamPosition.MID_A1].id == 1
    assert game.recorder.actions[-1].details["from_position"] == "midA1"


def test_slot_to_empty_slot_moves(game):
    game.place(0, TeamPosition.MID_A1)
    game.place(0, TeamPosition.OFFENSE_A)
    assert game.setup[TeamPosition.MID_A1] is None
    assert game.setup[TeamPosition.OFFENSE_A].id == 0
    assert game.place(0, TeamPosition.OFFENSE_A).reason is RejectionReason.NO_SLOT


def test_return_to_hand_or_dismiss(game):
    game.place(0, TeamPosition.DEFENSE_A)
    game.return_to_hand(0)
    assert labels(game)[-1] == "RETURN_TO_HAND"
    assert game.hand[-1].id == 0

    game.place(0, TeamPosition.DEFENSE_A)
    game.draft_player()
    game.draft_player()
    assert game.hand_full
    game.return_to_hand(0)
    assert labels(game)[-1] == "DISMISS_FROM_SLOT"
    assert 0 not in [p.id for p in game.hand]
    assert game.setup.is_empty


def test_clear_field_drops_excess_players(game):
    game.place(0, TeamPosition.DEFENSE_A)
    game.place(1, TeamPosition.DEFENSE_B)
    game.draft_player()
    game.draft_player()
    game.draft_player()
    game.clear_field()

    assert game.setup.is_empty
    assert len(game.hand) == 6
    assert game.recorder.actions[-1].details["involved_player_ids"] == [0, 1]
    assert game.clear_field().reason is RejectionReason.NOT_READY


# ---------------------------------------------------------------------------
# Match
# ---------------------------------------------------------------------------

def test_match_needs_a_full_field(game):
    game.place(0, TeamPosition.DEFENSE_A)
    assert game.simulate_match().reason is RejectionReason.NOT_READY


def test_simulated_match_is_committed_to_its_round(game):
    fill_field(game)
    assert game.ready
    advisory = game.simulate_match()

    record = advisory.payload
    assert isinstance(record, MatchRecord)
    assert record.round_index == 0
    assert record.match_index == 0
    item = game.ledger.current_round.items[0]
    assert item.payload is record
    assert item.actions[0].label == "INITIAL_HAND"
    assert item.actions[-1].label == "SIMULATE_MATCH"
    assert isinstance(game.modal, MatchModal)
    assert game.ticker_events[0].type.value == "kickoff"


def test_match_report_locks_play_until_closed(game):
    fill_field(game)
    game.simulate_match()
    assert game.draft_player().reason is RejectionReason.INPUT_LOCKED

    game.close_match()
    assert game.modal is None
    assert game.setup.is_empty
    assert game.ledger.rounds[0].closed
    assert game.ledger.current_round.round_index == 1
    assert game.ledger.current_round.config == {
        "team_a_name": game.team_names[0],
        "team_b_name": game.team_names[1],
    }
    assert len(game.ledger.rounds[0].items) == 1
    assert game.close_match().reason is RejectionReason.NOT_READY


def test_overlays(game):
    game.help()
    assert isinstance(game.modal, HelpModal)
    assert labels(game)[-1] == "HELP"

    count = len(game.recorder)
    game.enlarge(3)
    assert isinstance(game.modal, EnlargedModal)
    assert game.modal.player.id == 3
    assert len(game.recorder) == count
    game.close_modal()
    assert game.modal is None
    assert game.enlarge(99).reason is RejectionReason.UNKNOWN_ENTITY


def test_result_holds_databases_and_matches(game):
    fill_field(game)
    game.simulate_match()
    game.close_match()
    game.draft_player()
    result = game.end()

    ids = [p.id for p in result.databases["players"]]
    assert ids == sorted(ids) == list(range(len(ids)))
    assert len(result.records["matches"]) == 1
    assert result.summary["matches_played"] == 1
    last_round = result.rounds[-1]
    assert [a.label for a in last_round.items[-1].actions] == ["DRAFT_PLAYER", "GAME_END"]

    exported = result.to_dict()
    assert exported["records"]["matches"][0]["match_index"] == 0
    assert exported["databases"]["players"][0]["id"] == 0


# ---------------------------------------------------------------------------
# Grace period
# ---------------------------------------------------------------------------

@pytest.fixture
def grace_game(make_game):
    config = TrialConfig(timeLimitSeconds=1, allowGracefulExtension=True)
    game = make_game(SportsGame, config)
    game.tick()
    game.choose_continue()
    return game


def test_field_moves_keep_the_grace_move_open(grace_game):
    assert grace_game.place(0, TeamPosition.DEFENSE_A).accepted
    assert grace_game.place(0, TeamPosition.MID_A1).accepted
    assert grace_game.return_to_hand(0).accepted
    assert grace_game.clock.is_grace_period


@pytest.mark.parametrize("label, move", [
    ("DRAFT_PLAYER", lambda g: g.draft_player()),
    ("DISCARD_PLAYER", lambda g: g.discard_player(0)),
    ("CLEAR_FIELD", lambda g: (g.place(0, TeamPosition.DEFENSE_A), g.clear_field())[-1]),
])
def test_standalone_action_ends_the_grace_move(grace_game, label, move):
    assert move(grace_game).accepted
    assert grace_game.clock.is_ended
    assert grace_game.draft_player().reason is RejectionReason.INPUT_LOCKED
    assert not grace_game.finished

    result = grace_game.end()
    assert [a.label for a in result.actions][-2:] == [label, "GAME_END"]