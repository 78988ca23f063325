"""
Lesson flow schemas for VerseTrail.

Defines the six lesson steps, the navigation events between them and the
small result records handed back to the UI.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LessonStep(str, Enum):
    EXPLANATION = "explanation"
    RECITATION = "recitation"
    RECORDING = "recording"
    WORD_ORDER_QUIZ = "word_order_quiz"
    COMPREHENSION_QUIZ = "comprehension_quiz"
    CELEBRATION = "celebration"

    @property
    def number(self) -> int:
        """1-based step number for progress display."""
        return list(LessonStep).index(self) + 1

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    LessonStep.EXPLANATION: "Explanation",
    LessonStep.RECITATION: "Recitation",
    LessonStep.RECORDING: "Recording",
    LessonStep.WORD_ORDER_QUIZ: "Quiz 1",
    LessonStep.COMPREHENSION_QUIZ: "Quiz 2",
    LessonStep.CELEBRATION: "Celebration",
}

TOTAL_STEPS = len(LessonStep)


class StepEvent(str, Enum):
    NEXT = "next"
    BACK = "back"


class PlacementFeedback(str, Enum):
    CORRECT = "correct"
    TRY_AGAIN = "try_again"
    SOLVED = "solved"


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of dropping one word on the active slot."""
    accepted: bool
    solved: bool
    active_slot: int
    feedback: PlacementFeedback


@dataclass(frozen=True)
class CompletionResult:
    """What completing a verse produced, for the UI to route on."""
    stars: int
    chapter_now_complete: bool
    chapter_total_stars: Optional[int] = None
