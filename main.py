#!/usr/bin/env python3
"""
Timed Trial Engine - Main Demo

Plays a short scripted, seeded session of every game and prints what the
export collaborator would receive:
1. Number game (left-to-right terms)
2. Word game (center-letter words)
3. Sports game (match simulation with live ticker)
4. Dating game (couple scoring with news ticker)
5. Graceful timeout (ask to continue, one grace move, end)
"""

from itertools import permutations, product
import logging

from trial_engine.config import TrialConfig, get_settings
from trial_engine.core import ExpressionEvaluator
from trial_engine.games import DatingGame, NumberGame, SportsGame, WordGame
from trial_engine.simulation import TeamPosition

SEED = 42

logger = logging.getLogger(__name__)


def find_terms(numbers, target, limit=3):
    """Search small left-to-right terms that hit the target."""
    evaluator = ExpressionEvaluator()
    found = []
    for size in (2, 3, 4):
        for tiles in permutations(range(len(numbers)), size):
            for operators in product("+-*/", repeat=size - 1):
                tokens = [numbers[tiles[0]]]
                for operator, tile in zip(operators, tiles[1:]):
                    tokens += [operator, numbers[tile]]
                if evaluator.evaluate(tokens) == target:
                    found.append((tiles, operators))
                    if len(found) >= limit:
                        return found
    return found


def print_header(title):
    print("=" * 60)
    print(title)
    print("=" * 60)


def print_result(result):
    print(f"  Rounds: {len(result.rounds)}")
    print(f"  Actions: {len(result.actions)}")
    print(f"  Found items: {sum(len(r.resolved_items) for r in result.rounds)}")
    for key, value in result.summary.items():
        print(f"  {key}: {value}")
    print()


def run_number_demo(config):
    print_header("NUMBER GAME")
    game = NumberGame(config)
    print(f"Numbers: {game.current_set.numbers}  Target: {game.current_set.target}")

    for tiles, operators in find_terms(game.current_set.numbers, game.current_set.target):
        game.press_number(tiles[0])
        for operator, tile in zip(operators, tiles[1:]):
            game.press_operator(operator)
            game.press_number(tile)
        advisory = game.submit()
        print(f"  {'[x]' if advisory else '[ ]'} {advisory.message}")

    game.new_set()
    print(f"Next numbers: {game.current_set.numbers}  Target: {game.current_set.target}")
    game.press_number(0)
    print(f"  Abandoned: {game.display}")
    print_result(game.end())


def run_word_demo(config):
    print_header("WORD GAME")
    game = WordGame(config.model_copy(update={"show_correctness_markers": True}))
    print(f"Letters: {game.letters}  Center: {game.center_letter}")

    candidates = sorted(w for w in game.dictionary if game.check_word(w))[:4]
    for word in candidates + [game.center_letter * 4]:
        for letter in word:
            game.press_letter(letter)
        advisory = game.submit()
        print(f"  {word.upper():<10} {advisory.message}")

    game.shuffle()
    print(f"Shuffled: {''.join(game.outer_letters)}")
    print_result(game.end())


def run_sports_demo(config):
    print_header("SPORTS GAME")
    game = SportsGame(config)
    print(f"{game.team_names[0]} vs {game.team_names[1]}")

    for position in TeamPosition:
        if not game.hand:
            game.draft_player()
        game.place(game.hand[0].id, position)

    advisory = game.simulate_match()
    for event in game.ticker_events:
        print(f"  [{event.score_a}-{event.score_b}] {event.message}")
    print(f"Final score: {advisory.message}")
    game.close_match()
    print_result(game.end())


def run_dating_demo(config):
    print_header("DATING GAME")
    game = DatingGame(config)

    for _ in range(3):
        game.place(game.hand[0].id, 1)
        game.place(game.hand[0].id, 2)
        advisory = game.match()
        print(f"  {advisory.message}: {advisory.payload.score}")

    print(f"News: {game.news()}")
    print_result(game.end())


def run_timeout_demo(config):
    print_header("GRACEFUL TIMEOUT")
    game = NumberGame(config.model_copy(update={
        "time_limit_seconds": 3,
        "allow_graceful_extension": True
    }))
    for _ in range(3):
        game.tick()
    print(f"  Time left: {game.clock.display()}  Popup: {game.clock.show_popup}")

    game.choose_continue()
    print(f"  Grace period: {game.clock.is_grace_period}")
    game.press_number(0)
    game.clear()
    print(f"  Armed end: {game.clock.is_ended}  Finished: {game.finished}")

    print_result(game.end())


def main():
    """Main entry point."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    config = TrialConfig.from_settings(settings, seed=SEED)
    logger.info("%s demo with seed %d", settings.app_name, SEED)

    print()
    print("+" + "=" * 58 + "+")
    print("|             TIMED TRIAL ENGINE DEMONSTRATION             |")
    print("+" + "=" * 58 + "+")
    print()

    run_number_demo(config)
    run_word_demo(config)
    run_sports_demo(config)
    run_dating_demo(config)
    run_timeout_demo(config)

    print("=" * 60)
    print("DEMONSTRATION COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
