"""
Quiz logic - word-order and comprehension checks.

Provides:
- WordOrderQuiz: fill the verse's slots strictly left to right
- Smart word bank: the next few correct words plus one distractor
- ComprehensionCheck: single-select answer against the designated option
"""

import logging
import random
from typing import Optional

from versetrail.config import SMART_BANK_WINDOW
from versetrail.schemas import (
    ComprehensionQuizDefinition,
    PlacementFeedback,
    PlacementResult,
)


logger = logging.getLogger(__name__)


class WordOrderQuiz:
    """
    Rebuild a verse one word at a time.

    Only the active slot can be filled. A word equal to that slot's
    canonical word locks the slot and moves the pointer one step right;
    anything else changes nothing and asks the learner to try again.
    """

    def __init__(
        self,
        words: list[str],
        distractor_pool: Optional[list[str]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            words: Canonical word sequence of the verse
            distractor_pool: Extra words (e.g. from other verses) to draw a
                distractor from once the verse itself has none left
            rng: Random source for bank selection and shuffling
        """
        if not words:
            raise ValueError("word-order quiz needs at least one word")
        self.words = list(words)
        self.distractor_pool = list(distractor_pool or [])
        self.rng = rng or random.Random()
        self.slots: list[Optional[str]] = [None] * len(self.words)
        self.active_slot = 0

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def is_solved(self) -> bool:
        return self.active_slot >= len(self.words)

    @property
    def placed_words(self) -> list[str]:
        """Words locked so far, in slot order."""
        return [w for w in self.slots if w is not None]

    def place(self, word: str) -> PlacementResult:
        """Try to drop a word on the active slot."""
        if self.is_solved:
            return PlacementResult(
                accepted=False,
                solved=True,
                active_slot=self.active_slot,
                feedback=PlacementFeedback.SOLVED,
            )

        if word != self.words[self.active_slot]:
            logger.debug(f"Rejected {word!r} for slot {self.active_slot}")
            return PlacementResult(
                accepted=False,
                solved=False,
                active_slot=self.active_slot,
                feedback=PlacementFeedback.TRY_AGAIN,
            )

        self.slots[self.active_slot] = word
        self.active_slot += 1
        return PlacementResult(
            accepted=True,
            solved=self.is_solved,
            active_slot=self.active_slot,
            feedback=PlacementFeedback.SOLVED if self.is_solved else PlacementFeedback.CORRECT,
        )

    def word_bank(self, window: int = SMART_BANK_WINDOW) -> list[str]:
        """
        Words currently offered to the learner, in random order.

        Contains the correct word for each of the next `window` open slots
        plus one distractor that is not already placed. The distractor comes
        from the verse's later slots first, then from the distractor pool.
        """
        if self.is_solved:
            return []

        upcoming_end = min(self.active_slot + window, len(self.words))
        bank = self.words[self.active_slot:upcoming_end]

        distractor = self._pick_distractor(upcoming_end, set(bank))
        if distractor is not None:
            bank.append(distractor)

        self.rng.shuffle(bank)
        return bank

    def _pick_distractor(self, upcoming_end: int, offered: set[str]) -> Optional[str]:
        placed = set(self.placed_words)
        later = [w for w in self.words[upcoming_end:] if w not in offered]
        if later:
            return self.rng.choice(later)
        pool = [w for w in self.distractor_pool if w not in offered and w not in placed]
        if pool:
            return self.rng.choice(pool)
        return None

    def reset(self):
        self.slots = [None] * len(self.words)
        self.active_slot = 0


class ComprehensionCheck:
    """
    Single-select comprehension question.

    A wrong selection is cleared straight away so the learner can pick
    again; a right one is kept.
    """

    def __init__(self, definition: ComprehensionQuizDefinition):
        self.definition = definition
        self.selected: Optional[str] = None
        self.correct = False
        self.attempts = 0

    @property
    def options(self) -> list[str]:
        return list(self.definition.options)

    def submit(self, selected: str) -> bool:
        self.attempts += 1
        self.correct = self.definition.is_correct(selected)
        self.selected = selected if self.correct else None
        return self.correct

    def reset(self):
        self.selected = None
        self.correct = False
        self.attempts = 0
