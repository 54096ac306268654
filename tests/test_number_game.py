"""
Tests for the number game controller, including the graceful timeout flow.
"""

import pytest

from trial_engine.config import TrialConfig
from trial_engine.core import InvariantViolation, RejectionReason
from trial_engine.games import NUMBER_SETS, NumberGame

SINGLE_SET = (((3, 4, 1, 7), 21),)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def type_term(game, *keys):
    """Tile indices as ints, operators as strings."""
    for key in keys:
        if isinstance(key, int):
            game.press_number(key)
        else:
            game.press_operator(key)


@pytest.fixture
def game(make_game):
    return make_game(NumberGame, number_sets=SINGLE_SET)


# ---------------------------------------------------------------------------
# Puzzle setup
# ---------------------------------------------------------------------------

def test_builtin_sets_have_four_numbers():
    assert len(NUMBER_SETS) == 61
    assert all(len(numbers) == 4 for numbers, _ in NUMBER_SETS)


def test_first_round_holds_the_number_set(game):
    current = game.ledger.current_round
    assert current.round_index == 0
    assert current.config == {"set_index": 0, "numbers": [3, 4, 1, 7], "target": 21}


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

def test_accepted_term_is_committed(game):
    type_term(game, 0, "×", 3)
    advisory = game.submit()

    assert advisory.accepted
    item = game.ledger.current_round.items[0]
    assert item.payload.expression == "3*7"
    assert item.payload.result == 21
    assert [a.label for a in item.actions] == ["NUMBER", "OPERATOR", "NUMBER", "ENTER"]
    assert game.tokens == []


def test_duplicate_term_is_rejected_without_logging(game):
    type_term(game, 0, "*", 3)
    game.submit()
    type_term(game, 0, "*", 3)
    before = len(game.recorder)

    advisory = game.submit()
    assert advisory.reason is RejectionReason.DUPLICATE
    assert len(game.recorder) == before
    assert len(game.ledger.current_round.items) == 1


def test_same_value_by_another_term_is_accepted(game):
    type_term(game, 0, "*", 3)
    game.submit()
    type_term(game, 3, "*", 0)
    assert game.submit().accepted


def test_left_to_right_evaluation_is_used(game):
    # (3 + 4) × 7 = 49, not 31
    type_term(game, 0, "+", 1, "*", 3)
    assert game.preview == 49
    assert game.submit().reason is RejectionReason.OFF_TARGET


def test_trailing_operator_blocks_submission(game):
    type_term(game, 0, "*", 3, "+")
    assert game.submit().reason is RejectionReason.TRAILING_OPERATOR


def test_tiles_are_used_once(game):
    type_term(game, 0, "+")
    advisory = game.press_number(0)
    assert advisory.reason is RejectionReason.INVALID_TOKEN


def test_token_order_is_enforced(game):
    assert game.press_operator("+").reason is RejectionReason.INVALID_TOKEN
    game.press_number(0)
    assert game.press_number(1).reason is RejectionReason.INVALID_TOKEN
    assert game.press_operator("%").reason is RejectionReason.INVALID_TOKEN
    assert game.press_number(9).reason is RejectionReason.INVALID_TOKEN


def test_delete_frees_the_tile(game):
    type_term(game, 0, "+", 1)
    game.delete()
    assert game.display == "3 +"
    assert game.press_number(1).accepted
    assert game.recorder.actions[-2].label == "DELETE"


def test_clear_and_delete_need_input(game):
    assert game.clear().reason is RejectionReason.NOT_READY
    assert game.delete().reason is RejectionReason.NOT_READY


def test_new_set_closes_the_round(game):
    type_term(game, 0, "+")
    game.new_set()

    first, second = game.ledger.rounds
    assert first.closed
    assert first.items[-1].is_sentinel
    assert [a.label for a in first.items[-1].actions] == ["NUMBER", "OPERATOR", "NEW_SET"]
    assert second.round_index == 1
    assert game.tokens == []


# ---------------------------------------------------------------------------
# Finishing
# ---------------------------------------------------------------------------

def test_end_delivers_the_full_log(make_game):
    results = []
    game = make_game(NumberGame, number_sets=SINGLE_SET, on_finish=results.append)
    type_term(game, 0, "*", 3)
    game.submit()
    game.new_set()
    game.press_number(1)

    result = game.end()
    assert results == [result]
    assert game.end() is result
    assert game.finish() is result

    stream = [a for r in result.rounds for a in r.actions]
    assert stream == result.actions
    assert [a.action_index for a in stream] == list(range(len(stream)))
    assert result.actions[-1].label == "GAME_END"
    assert result.rounds[-1].items[-1].is_sentinel
    assert all(r.closed for r in result.rounds)
    assert result.summary == {"found_count": 1, "rounds_played": 2}


def test_input_after_finish_is_locked(game):
    game.end()
    assert game.press_number(0).reason is RejectionReason.INPUT_LOCKED
    assert game.help().reason is RejectionReason.INPUT_LOCKED
    with pytest.raises(InvariantViolation):
        game._open_round({})


def test_time_up_locks_until_the_participant_ends(make_game):
    results = []
    config = TrialConfig(timeLimitSeconds=2, allowGracefulExtension=False)
    game = make_game(NumberGame, config, number_sets=SINGLE_SET, on_finish=results.append)
    game.press_number(0)
    game.tick()
    game.tick()

    assert game.clock.is_ended
    assert results == []
    assert not game.finished
    assert not game.ledger.is_closed
    assert [a.label for a in game.recorder.actions] == ["NUMBER"]
    assert game.press_number(1).reason is RejectionReason.INPUT_LOCKED

    result = game.end()
    assert results == [result]
    assert result.time_left == 0
    assert [a.label for a in result.actions] == ["NUMBER", "GAME_END"]
    assert result.actions[-1].timestamp > result.actions[0].timestamp


def test_graceful_extension_allows_one_move(make_game):
    results = []
    config = TrialConfig(timeLimitSeconds=1, allowGracefulExtension=True)
    game = make_game(NumberGame, config, number_sets=SINGLE_SET, on_finish=results.append)
    game.tick()

    assert game.clock.show_popup
    assert game.press_number(0).reason is RejectionReason.INPUT_LOCKED

    game.choose_continue()
    type_term(game, 0, "*", 3)
    assert game.submit().accepted

    assert game.clock.is_ended
    assert not game.finished
    assert game.press_number(1).reason is RejectionReason.INPUT_LOCKED

    result = game.end()
    assert results == [result]
    assert result.found_items[0].payload.expression == "3*7"


def test_declining_the_extension_waits_for_end(make_game):
    results = []
    config = TrialConfig(timeLimitSeconds=1, allowGracefulExtension=True)
    game = make_game(NumberGame, config, number_sets=SINGLE_SET, on_finish=results.append)
    game.tick()
    game.choose_end()

    assert game.clock.is_ended
    assert not game.finished
    assert results == []
    assert game.press_number(0).reason is RejectionReason.INPUT_LOCKED

    result = game.finish()
    assert results == [result]
    assert result.end_state == "ended"
    assert result.actions[-1].label == "GAME_END"


def test_teardown_ignores_everything(make_game):
    results = []
    game = make_game(NumberGame, number_sets=SINGLE_SET, on_finish=results.append)
    game.teardown()

    assert game.press_number(0).reason is RejectionReason.INPUT_LOCKED
    assert game.end() is None
    game.tick()
    assert results == []


def test_result_exports_plain_values(game):
    type_term(game, 0, "*", 3)
    game.submit()
    exported = game.end().to_dict()

    assert exported["game"] == "number_game"
    assert exported["config"]["time_limit_seconds"] == 60
    payload = exported["rounds"][0]["items"][0]["payload"]
    assert payload == {"expression": "3*7", "display": "3 × 7", "result": 21, "target": 21}
