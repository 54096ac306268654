"""
Word Game

Seven letters per set; the first one is the center letter and must appear
in every word. Letters may be reused within a word.

Play:
- LETTER: type a letter from the set
- DELETE / CLEAR: edit or abandon the current word
- SHUFFLE: rearrange the outer letters
- NEW_SET: move on to another letter set (opens a new round)
- ENTER: submit; every well-formed word is committed, marked correct when
  it is in the dictionary. Whether the participant sees that mark depends
  on the trial's showCorrectnessMarkers option.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional
import logging

from ..core import Advisory, RejectionReason
from .base import TrialController

logger = logging.getLogger(__name__)

# center letter first
LETTER_SETS = (
    "AELMNPT",
    "OBDELRU",
    "IAGNRST",
    "ECHOPRS",
    "UBEGLNT",
)

BUILTIN_WORDS = frozenset("""
ample amen ante apple lamp late lane lean leap mane mantle mate meat metal name nape
neat pale palm panel pant pate peal penal petal plan plane planet plant plate tale
tame tape team
blood bode bold bolder boor bore bored boulder double doubler dole door droll
lobe lode loud louder older odor robe rode rodeo role rood roll lore doer brood
airing gain giant grain grains grin grit rain rating ring saint satin sing stain
stair staring sting strain string taint train trains
cheer chore cohere creep epoch here hero hoes hope horse hose peer perch pose
poser press prose rope score scope seer sheep shoe shore sphere spore
blue bulge bugle blunt bunt glue glut lute lune lung tube tune
""".split())


def load_word_list(path: str) -> frozenset:
    """Read a newline separated word list; blank lines are skipped."""
    with open(Path(path), encoding="utf-8") as handle:
        return frozenset(line.strip().lower() for line in handle if line.strip())


class WordAction:
    LETTER = "LETTER"
    DELETE = "DELETE"
    CLEAR = "CLEAR"
    SHUFFLE = "SHUFFLE"
    NEW_SET = "NEW_SET"
    ENTER = "ENTER"


@dataclass(frozen=True)
class WordSubmission:
    """Payload of a committed word."""
    word: str
    is_correct: bool

    def to_dict(self) -> dict:
        return {"word": self.word, "is_correct": self.is_correct}


class WordGame(TrialController):
    """Controller for the word game."""

    game_name = "word_game"

    def __init__(
        self,
        *args,
        letter_sets: Optional[Iterable[str]] = None,
        dictionary: Optional[Iterable[str]] = None,
        **kwargs
    ):
        super().__init__(*args, **kwargs)
        game = self.settings.game
        self.min_length = game.min_word_length
        self.max_length = game.max_word_length

        self.letter_sets = tuple(s.upper() for s in (letter_sets or LETTER_SETS))
        for letters in self.letter_sets:
            if len(set(letters)) != len(letters):
                raise ValueError(f"Letter set {letters!r} repeats a letter")

        if dictionary is not None:
            self.dictionary = frozenset(w.lower() for w in dictionary)
        elif self.settings.word_list_path:
            self.dictionary = load_word_list(self.settings.word_list_path)
        else:
            self.dictionary = BUILTIN_WORDS

        self.current = ""
        self.submissions: list[WordSubmission] = []
        self._set_index = self.rng.randrange(len(self.letter_sets))
        self.outer_letters = list(self.letters[1:])
        self._open_round(self._round_config())

    # Puzzle state

    @property
    def letters(self) -> str:
        return self.letter_sets[self._set_index]

    @property
    def center_letter(self) -> str:
        return self.letters[0]

    def _round_config(self) -> dict:
        return {
            "set_index": self._set_index,
            "letters": self.letters,
            "center_letter": self.center_letter
        }

    def found_in_round(self) -> list[str]:
        current = self.ledger.current_round
        if current is None:
            return []
        return [item.payload.word for item in current.resolved_items]

    def check_word(self, word: str) -> Advisory:
        """Judge a word without touching any state."""
        word = word.upper()
        if not word:
            return Advisory.reject(RejectionReason.NOT_READY, "Type a word first")
        if len(word) < self.min_length:
            return Advisory.reject(
                RejectionReason.TOO_SHORT, f"Words need at least {self.min_length} letters"
            )
        if len(word) > self.max_length:
            return Advisory.reject(RejectionReason.TOO_LONG, "That word is too long")
        if any(ch not in self.letters for ch in word):
            return Advisory.reject(RejectionReason.INVALID_LETTERS, "Use only the given letters")
        if self.center_letter not in word:
            return Advisory.reject(
                RejectionReason.INVALID_LETTERS, f"Words must contain {self.center_letter}"
            )
        if word in self.found_in_round():
            return Advisory.reject(RejectionReason.DUPLICATE, f"{word} was already found")
        return Advisory.ok(payload=word.lower() in self.dictionary)

    # Play

    def press_letter(self, letter: str) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked
        letter = letter.upper()
        if len(letter) != 1 or letter not in self.letters:
            return self._reject(RejectionReason.INVALID_LETTERS, f"{letter!r} is not in this set")
        if len(self.current) >= self.max_length:
            return self._reject(RejectionReason.TOO_LONG, "That word is too long")

        self.current += letter
        self.recorder.record(WordAction.LETTER, token=letter)
        return Advisory.ok(self.current)

    def delete(self) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked
        if not self.current:
            return self._reject(RejectionReason.NOT_READY, "Nothing to delete")

        removed = self.current[-1]
        self.current = self.current[:-1]
        self.recorder.record(WordAction.DELETE, token=removed)
        return Advisory.ok(self.current)

    def clear(self) -> Advisory:
        """Abandon the current word."""
        blocked = self._guard()
        if blocked is not None:
            return blocked
        if not self.current:
            return self._reject(RejectionReason.NOT_READY, "Nothing to clear")

        self.recorder.record(WordAction.CLEAR, word=self.current)
        self.current = ""
        self._complete_move()
        return Advisory.ok("Cleared")

    def shuffle(self) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked

        self.rng.shuffle(self.outer_letters)
        self.recorder.record(WordAction.SHUFFLE, order="".join(self.outer_letters))
        return Advisory.ok("".join(self.outer_letters))

    def new_set(self) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked

        self.recorder.record(WordAction.NEW_SET, word=self.current or None)
        self.current = ""
        if len(self.letter_sets) > 1:
            choices = [i for i in range(len(self.letter_sets)) if i != self._set_index]
            self._set_index = self.rng.choice(choices)
        self.outer_letters = list(self.letters[1:])
        self._open_round(self._round_config())
        self._complete_move()
        return Advisory.ok(self.letters)

    def submit(self) -> Advisory:
        """ENTER: commit a well-formed word with its correctness."""
        blocked = self._guard()
        if blocked is not None:
            return blocked

        check = self.check_word(self.current)
        if not check:
            logger.debug("word rejected: %s", check.message)
            return check

        submission = WordSubmission(word=self.current, is_correct=check.payload)
        self.recorder.record(WordAction.ENTER, word=submission.word)
        self.ledger.commit_item(submission)
        self.submissions.append(submission)
        self.current = ""
        self._complete_move()

        if self.config.show_correctness_markers:
            message = "Correct!" if submission.is_correct else "Not in the word list"
            return Advisory.ok(message, payload=submission.to_dict())
        return Advisory.ok("Submitted", payload={"word": submission.word})

    # Result

    def summary(self) -> dict:
        return {
            "submitted": len(self.submissions),
            "correct": sum(1 for s in self.submissions if s.is_correct),
            "rounds_played": len(self.ledger.rounds)
        }
