"""
LessonSession - six-step lesson flow for one verse.

Provides:
- Step navigation through an explicit transition table
- Per-step gates (quizzes must be solved before moving on)
- Quiz and recording submission
- Star computation and completion recording
"""

import logging
import random
from typing import TYPE_CHECKING, Callable, Optional

from versetrail.config import PERFECT_PRONUNCIATION_SCORE
from versetrail.schemas import (
    CompletionResult,
    LessonStep,
    PlacementFeedback,
    PlacementResult,
    StepEvent,
    TOTAL_STEPS,
    Verse,
)

from .completion import ChapterComplete, CompletionRouter
from .progress import ProgressStore
from .quiz import ComprehensionCheck, WordOrderQuiz

if TYPE_CHECKING:
    from .loader import ContentRepository


logger = logging.getLogger(__name__)


# (current step, event) -> next step. Missing pairs are not allowed.
TRANSITIONS: dict[tuple[LessonStep, StepEvent], LessonStep] = {
    (LessonStep.EXPLANATION, StepEvent.NEXT): LessonStep.RECITATION,
    (LessonStep.RECITATION, StepEvent.NEXT): LessonStep.RECORDING,
    (LessonStep.RECITATION, StepEvent.BACK): LessonStep.EXPLANATION,
    (LessonStep.RECORDING, StepEvent.NEXT): LessonStep.WORD_ORDER_QUIZ,
    (LessonStep.RECORDING, StepEvent.BACK): LessonStep.RECITATION,
    (LessonStep.WORD_ORDER_QUIZ, StepEvent.NEXT): LessonStep.COMPREHENSION_QUIZ,
    (LessonStep.WORD_ORDER_QUIZ, StepEvent.BACK): LessonStep.RECORDING,
    (LessonStep.COMPREHENSION_QUIZ, StepEvent.NEXT): LessonStep.CELEBRATION,
    (LessonStep.COMPREHENSION_QUIZ, StepEvent.BACK): LessonStep.WORD_ORDER_QUIZ,
    (LessonStep.CELEBRATION, StepEvent.BACK): LessonStep.COMPREHENSION_QUIZ,
}


def compute_stars(
    word_order_correct: bool,
    comprehension_correct: bool,
    pronunciation_score: Optional[int],
) -> int:
    """
    Stars for a finished verse.

    1 for finishing, +1 when both quizzes were solved, +1 for a
    pronunciation score of 90 or more.
    """
    stars = 1
    if word_order_correct and comprehension_correct:
        stars += 1
    if pronunciation_score is not None and pronunciation_score >= PERFECT_PRONUNCIATION_SCORE:
        stars += 1
    return stars


class LessonSession:
    """
    State of one verse lesson while its screen is open.

    Nothing here is persisted until complete() succeeds; leaving the
    screen simply drops the session.
    """

    def __init__(
        self,
        chapter_id: int,
        verse_id: int,
        progress: ProgressStore,
        router: CompletionRouter,
        verse: Optional[Verse] = None,
        total_verses: Optional[int] = None,
        recording_required: bool = False,
        distractor_pool: Optional[list[str]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a session.

        Args:
            chapter_id: Chapter number
            verse_id: Verse number within the chapter
            progress: Store that receives the completion
            router: Decides where to go once the verse is saved
            verse: Verse content, if already loaded (see load())
            total_verses: Chapter size from the content record
            recording_required: Close the Recording gate until a recording exists
            distractor_pool: Words from other verses for the word bank
            rng: Random source for the word bank
        """
        self.chapter_id = chapter_id
        self.verse_id = verse_id
        self.progress = progress
        self.router = router
        self.total_verses = total_verses
        self.recording_required = recording_required
        self._distractor_pool = list(distractor_pool or [])
        self._rng = rng or random.Random()

        self.verse: Optional[Verse] = None
        self.word_order: Optional[WordOrderQuiz] = None
        self.comprehension: Optional[ComprehensionCheck] = None
        self._reset_state()

        if verse is not None:
            self._set_verse(verse)

        self._gates: dict[LessonStep, Callable[[], bool]] = {
            LessonStep.EXPLANATION: lambda: True,
            LessonStep.RECITATION: lambda: True,
            LessonStep.RECORDING: lambda: self.has_recorded or not self.recording_required,
            LessonStep.WORD_ORDER_QUIZ: lambda: self.word_order_correct,
            LessonStep.COMPREHENSION_QUIZ: lambda: self.comprehension_correct,
            LessonStep.CELEBRATION: lambda: True,
        }

    def __repr__(self) -> str:
        return f"LessonSession(chapter {self.chapter_id}, verse {self.verse_id}, step {self.current_step.number})"

    def _reset_state(self):
        self.current_step = LessonStep.EXPLANATION
        self.has_recorded = False
        self.recording_ref: Optional[str] = None
        self.pronunciation_score: Optional[int] = None
        self.stars = 0
        self.completed = False
        self.saved = False
        self.completion_result: Optional[CompletionResult] = None
        self.destination = None

    def _set_verse(self, verse: Verse):
        if verse.verse_number != self.verse_id:
            raise ValueError(f"verse {verse.verse_number} given for session on verse {self.verse_id}")
        self.verse = verse
        self.word_order = WordOrderQuiz(verse.word_texts, self._distractor_pool, self._rng)
        self.comprehension = ComprehensionCheck(verse.quiz2)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self.verse is not None

    def load(self, repository: "ContentRepository") -> Verse:
        """
        Pull the verse and chapter size from the content repository.

        Raises:
            ContentLoadError: content missing or malformed; session stays unloaded
        """
        chapter = repository.load_chapter(self.chapter_id)
        verse = repository.get_verse(self.chapter_id, self.verse_id)
        self.total_verses = chapter.total_verses
        if not self._distractor_pool:
            self._distractor_pool = [
                w.text for v in chapter.verses if v.verse_number != self.verse_id for w in v.words
            ]
        self._set_verse(verse)
        return verse

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @property
    def can_advance(self) -> bool:
        """Whether the current step's gate is open."""
        if not self.is_loaded:
            return False
        return self._gates[self.current_step]()

    @property
    def can_retreat(self) -> bool:
        return (self.current_step, StepEvent.BACK) in TRANSITIONS

    @property
    def progress_fraction(self) -> float:
        return self.current_step.number / TOTAL_STEPS

    def advance(self) -> bool:
        """
        Move to the next step if the gate allows it.

        On the Celebration step this completes the lesson instead. A closed
        gate is not an error: nothing happens and False is returned.
        """
        if not self.can_advance:
            return False
        if self.current_step == LessonStep.CELEBRATION:
            self.complete()
            return True
        self.current_step = TRANSITIONS[(self.current_step, StepEvent.NEXT)]
        return True

    def retreat(self) -> bool:
        """Go back one step; False on the first step."""
        target = TRANSITIONS.get((self.current_step, StepEvent.BACK))
        if target is None:
            return False
        self.current_step = target
        return True

    def go_to_step(self, step: LessonStep):
        """Jump straight to a step, ignoring gates (debug and resume)."""
        self.current_step = step

    # -------------------------------------------------------------------------
    # Step 3: recording
    # -------------------------------------------------------------------------

    def submit_recording(self, recording_ref: str, pronunciation_score: Optional[int] = None):
        """Keep the learner's recording and its (optional) 0-100 score."""
        if not self.is_loaded:
            return
        if pronunciation_score is not None and not 0 <= pronunciation_score <= 100:
            raise ValueError(f"pronunciation score must be 0-100, got {pronunciation_score}")
        self.has_recorded = True
        self.recording_ref = recording_ref
        self.pronunciation_score = pronunciation_score

    def clear_recording(self):
        """Drop the recording so the learner can try again."""
        self.has_recorded = False
        self.recording_ref = None
        self.pronunciation_score = None

    # -------------------------------------------------------------------------
    # Step 4: word-order quiz
    # -------------------------------------------------------------------------

    @property
    def word_order_correct(self) -> bool:
        return self.word_order is not None and self.word_order.is_solved

    @property
    def word_order_answer(self) -> list[str]:
        return self.word_order.placed_words if self.word_order else []

    def word_bank(self) -> list[str]:
        """Words to offer for the active slot onward."""
        if self.word_order is None:
            return []
        return self.word_order.word_bank()

    def place_word(self, word: str) -> PlacementResult:
        if self.word_order is None:
            return PlacementResult(
                accepted=False, solved=False, active_slot=0, feedback=PlacementFeedback.TRY_AGAIN
            )
        return self.word_order.place(word)

    def submit_word_order(self, tokens: list[str]) -> bool:
        """
        Place tokens one at a time, stopping at the first rejected one.

        Returns:
            True once every slot is filled
        """
        if self.word_order is None:
            return False
        for token in tokens:
            if self.word_order.is_solved:
                break
            if not self.word_order.place(token).accepted:
                break
        return self.word_order.is_solved

    # -------------------------------------------------------------------------
    # Step 5: comprehension quiz
    # -------------------------------------------------------------------------

    @property
    def comprehension_correct(self) -> bool:
        return self.comprehension is not None and self.comprehension.correct

    @property
    def comprehension_selected(self) -> Optional[str]:
        return self.comprehension.selected if self.comprehension else None

    def submit_comprehension(self, selected: str) -> bool:
        if self.comprehension is None:
            return False
        return self.comprehension.submit(selected)

    # -------------------------------------------------------------------------
    # Step 6: completion
    # -------------------------------------------------------------------------

    def complete(self) -> CompletionResult:
        """
        Finalize stars, save the verse and decide where to go next.

        Only allowed on the Celebration step. Stars are fixed the first
        time this runs. If saving or the follow-up read fails the
        PersistenceError propagates, and calling complete() again retries
        whatever did not finish, with the same stars.

        Raises:
            RuntimeError: verse content was never loaded, or the lesson
                has not reached the Celebration step
            PersistenceError: progress could not be saved or read back
        """
        if not self.is_loaded or self.total_verses is None:
            raise RuntimeError(f"{self!r} has no content loaded")
        if self.current_step != LessonStep.CELEBRATION:
            raise RuntimeError(f"{self!r} cannot complete before the Celebration step")

        if self.completion_result is not None:
            return self.completion_result

        if not self.completed:
            self.stars = compute_stars(
                self.word_order_correct,
                self.comprehension_correct,
                self.pronunciation_score,
            )
            self.completed = True

        if not self.saved:
            self.progress.record_completion(
                self.chapter_id,
                self.verse_id,
                self.stars,
                self.total_verses,
            )
            self.saved = True

        # record_completion has committed by now; the router reads fresh state
        self.destination = self.router.route(self.chapter_id, self.total_verses)
        if isinstance(self.destination, ChapterComplete):
            self.completion_result = CompletionResult(
                stars=self.stars,
                chapter_now_complete=True,
                chapter_total_stars=self.destination.total_stars,
            )
        else:
            self.completion_result = CompletionResult(stars=self.stars, chapter_now_complete=False)
        return self.completion_result

    def reset(self):
        """Start the verse over, keeping the loaded content."""
        self._reset_state()
        if self.word_order is not None:
            self.word_order.reset()
        if self.comprehension is not None:
            self.comprehension.reset()
