"""
Trial Controllers

One controller per game type, each owning its clock, action recorder,
round ledger and random source:
- NumberGame: hit a target with four numbers and left-to-right arithmetic
- WordGame: form words around a required center letter
- SportsGame: field two teams and simulate the match
- DatingGame: pair up generated persons and score the couples
"""

from .base import TrialController, TrialResult
from .number_game import NumberGame, NUMBER_SETS
from .word_game import WordGame, LETTER_SETS, load_word_list
from .sports_game import SportsGame, HelpModal, MatchModal, EnlargedModal
from .dating_game import DatingGame

GAMES = {
    NumberGame.game_name: NumberGame,
    WordGame.game_name: WordGame,
    SportsGame.game_name: SportsGame,
    DatingGame.game_name: DatingGame,
}

__all__ = [
    "TrialController",
    "TrialResult",
    "NumberGame",
    "NUMBER_SETS",
    "WordGame",
    "LETTER_SETS",
    "load_word_list",
    "SportsGame",
    "HelpModal",
    "MatchModal",
    "EnlargedModal",
    "DatingGame",
    "GAMES"
]
