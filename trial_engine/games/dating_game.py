"""
Dating Game

Participants pair up generated persons from a hand of five cards. Every
couple is scored by the compatibility judge and committed as a found item;
a news ticker reports how recent couples are getting along.

Play:
- PLACE_SLOT1 / PLACE_SLOT2: move a person from the hand into a match slot
- REMOVE_SLOT1 / REMOVE_SLOT2: send the person back to the hand
- EXCHANGE: swap one card for a newly generated person
- GENERATE_NEW: replace the whole hand
- MATCH: pair the two slotted persons
- CLEAR_SLOTS: send both slotted persons back to the hand

Placing and removing persons sets up a match. During the grace period
these steps stay open; exchanging, dealing a new hand, clearing the
slots or matching completes the one extra move.
"""

from typing import Optional
import logging

from ..core import Advisory, RejectionReason
from ..simulation import CompatibilityJudge, CoupleRecord, Person, PersonGenerator
from .base import TrialController

logger = logging.getLogger(__name__)

SLOTS = (1, 2)


class DatingAction:
    INITIAL_HAND = "INITIAL_HAND"
    PLACE_SLOT1 = "PLACE_SLOT1"
    PLACE_SLOT2 = "PLACE_SLOT2"
    REMOVE_SLOT1 = "REMOVE_SLOT1"
    REMOVE_SLOT2 = "REMOVE_SLOT2"
    EXCHANGE = "EXCHANGE"
    GENERATE_NEW = "GENERATE_NEW"
    MATCH = "MATCH"
    CLEAR_SLOTS = "CLEAR_SLOTS"


class DatingGame(TrialController):
    """Controller for the dating game."""

    game_name = "dating_game"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        game = self.settings.game
        self.hand_size = game.dating_hand_size
        self.news_window = game.news_recent_couples

        self.people = PersonGenerator(self.rng)
        self.judge = CompatibilityJudge(self.rng)
        self.slots: dict[int, Optional[Person]] = {slot: None for slot in SLOTS}
        self.couples: list[CoupleRecord] = []
        self._open_round({"hand_size": self.hand_size})

        self.hand: list[Person] = self.people.generate_many(self.hand_size)
        self.recorder.record(
            DatingAction.INITIAL_HAND,
            person_ids=[p.id for p in self.hand]
        )

    # State

    def _hand_person(self, person_id: int) -> Optional[Person]:
        for person in self.hand:
            if person.id == person_id:
                return person
        return None

    @staticmethod
    def _check_slot(slot: int) -> None:
        if slot not in SLOTS:
            raise ValueError(f"Unknown match slot: {slot}")

    @property
    def slotted(self) -> list[Person]:
        return [p for p in self.slots.values() if p is not None]

    @property
    def ready(self) -> bool:
        return all(p is not None for p in self.slots.values())

    # Play

    def place(self, person_id: int, slot: int) -> Advisory:
        """Move a person from the hand into an empty match slot."""
        self._check_slot(slot)
        blocked = self._guard()
        if blocked is not None:
            return blocked
        person = self._hand_person(person_id)
        if person is None:
            return self._reject(RejectionReason.UNKNOWN_ENTITY, f"Person {person_id} is not in your hand")
        if self.slots[slot] is not None:
            return self._reject(RejectionReason.NO_SLOT, f"Slot {slot} is taken")

        self.slots[slot] = person
        self.hand.remove(person)
        self.recorder.record(getattr(DatingAction, f"PLACE_SLOT{slot}"), person_id=person_id)
        return Advisory.ok(person.name)

    def remove(self, slot: int) -> Advisory:
        """Send the person in a slot back to the hand."""
        self._check_slot(slot)
        blocked = self._guard()
        if blocked is not None:
            return blocked
        person = self.slots[slot]
        if person is None:
            return self._reject(RejectionReason.NOT_READY, f"Slot {slot} is empty")

        self.recorder.record(getattr(DatingAction, f"REMOVE_SLOT{slot}"), person_id=person.id)
        self.slots[slot] = None
        self.hand.append(person)
        return Advisory.ok(person.name)

    def exchange(self, person_id: int) -> Advisory:
        """Replace one card; the new person goes to the end of the hand."""
        blocked = self._guard()
        if blocked is not None:
            return blocked
        person = self._hand_person(person_id)
        if person is None:
            return self._reject(RejectionReason.UNKNOWN_ENTITY, f"Person {person_id} is not in your hand")

        replacement = self.people.generate()
        self.hand.remove(person)
        self.hand.append(replacement)
        self.recorder.record(
            DatingAction.EXCHANGE,
            person_id=person_id,
            new_person_id=replacement.id
        )
        self._complete_move()
        return Advisory.ok(replacement.name, payload=replacement)

    def generate_new(self) -> Advisory:
        """Deal a fresh hand, leaving room for the slotted persons."""
        blocked = self._guard()
        if blocked is not None:
            return blocked

        self.hand = self.people.generate_many(self.hand_size - len(self.slotted))
        self.recorder.record(
            DatingAction.GENERATE_NEW,
            person_ids=[p.id for p in self.hand]
        )
        self._complete_move()
        return Advisory.ok("New hand")

    def match(self) -> Advisory:
        """Pair the two slotted persons and commit the couple."""
        blocked = self._guard()
        if blocked is not None:
            return blocked
        if not self.ready:
            return self._reject(RejectionReason.NOT_READY, "Fill both slots first")

        person1, person2 = self.slots[1], self.slots[2]
        self.recorder.record(DatingAction.MATCH, person_ids=[person1.id, person2.id])

        score = self.judge.score(person1, person2)
        couple = CoupleRecord(
            match_index=len(self.couples),
            round_index=self.ledger.current_round.round_index,
            person1_id=person1.id,
            person2_id=person2.id,
            score=score,
            mutual_attraction=self.judge.are_romantically_compatible(person1, person2),
            timestamp=self.recorder.now()
        )
        self.ledger.commit_item(couple)
        self.couples.append(couple)
        logger.info("couple %d: %s + %s scored %d", couple.match_index, person1.name, person2.name, score)

        self.hand = (self.hand + self.people.generate_many(2))[:self.hand_size]
        self.slots = {slot: None for slot in SLOTS}
        self._complete_move()
        return Advisory.ok(f"{person1.name} & {person2.name}", payload=couple)

    def clear_slots(self) -> Advisory:
        blocked = self._guard()
        if blocked is not None:
            return blocked
        if not self.slotted:
            return self._reject(RejectionReason.NOT_READY, "Both slots are empty")

        self.recorder.record(DatingAction.CLEAR_SLOTS)
        self.hand.extend(self.slotted)
        self.slots = {slot: None for slot in SLOTS}
        self._complete_move()
        return Advisory.ok("Slots cleared")

    # News

    def news(self) -> str:
        """Ticker line about one of the most recent couples."""
        couples = [
            (self.people.get(c.person1_id), self.people.get(c.person2_id), c.score)
            for c in self.couples
        ]
        return self.judge.news_message(couples, max_recent=self.news_window)

    # Result

    def _databases(self) -> dict:
        return {"people": self.people.database}

    def _records(self) -> dict:
        return {"couples": list(self.couples)}

    def summary(self) -> dict:
        scores = [c.score for c in self.couples]
        return {
            "couples": len(self.couples),
            "mean_score": sum(scores) / len(scores) if scores else None,
            "people_generated": len(self.people)
        }
