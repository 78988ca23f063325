"""
Navigator - verse trail and chapter map with availability.

Provides:
- Verse availability inside a chapter (the verse trail)
- Chapter availability across the curriculum (the chapter map)
- Recommended next verse
- Progress summary for display
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from versetrail.schemas import Chapter, LearnerProgress

from .loader import ContentRepository
from .progress import ProgressStore
from .unlock import is_chapter_unlocked, is_verse_unlocked


class VerseAvailability(str, Enum):
    """Availability status for UI display."""
    LOCKED = "locked"           # previous verse/chapter not completed
    AVAILABLE = "available"     # can start
    COMPLETED = "completed"     # finished at least once


@dataclass
class NavigationVerse:
    """Verse with trail metadata."""
    verse_number: int
    availability: VerseAvailability
    stars: int
    has_content: bool           # False while the verse is not authored yet


@dataclass
class NavigationChapter:
    """Chapter with map metadata."""
    chapter: Chapter
    availability: VerseAvailability
    completed_count: int
    total_count: int
    total_stars: int


class Navigator:
    """
    Navigate chapters and verses with unlock checking.

    Combines ContentRepository (content) with ProgressStore (learner state).
    Every method reads progress fresh from the store.
    """

    def __init__(self, repository: ContentRepository, progress: ProgressStore):
        self.repository = repository
        self.progress = progress

    # -------------------------------------------------------------------------
    # Availability
    # -------------------------------------------------------------------------

    def _verse_availability(
        self, learner: LearnerProgress, chapter_id: int, verse_number: int
    ) -> VerseAvailability:
        chapter = learner.get_chapter(chapter_id)
        if chapter is not None and chapter.is_verse_completed(verse_number):
            return VerseAvailability.COMPLETED
        if is_verse_unlocked(learner, chapter_id, verse_number):
            return VerseAvailability.AVAILABLE
        return VerseAvailability.LOCKED

    def _chapter_availability(self, learner: LearnerProgress, chapter_id: int) -> VerseAvailability:
        chapter = learner.get_chapter(chapter_id)
        if chapter is not None and chapter.is_completed:
            return VerseAvailability.COMPLETED
        if is_chapter_unlocked(learner, chapter_id, self.repository.chapter_order()):
            return VerseAvailability.AVAILABLE
        return VerseAvailability.LOCKED

    def is_verse_available(self, chapter_id: int, verse_number: int) -> bool:
        """Whether the verse (and its chapter) can be opened."""
        learner = self.progress.read_progress()
        if not is_chapter_unlocked(learner, chapter_id, self.repository.chapter_order()):
            return False
        return is_verse_unlocked(learner, chapter_id, verse_number)

    def is_chapter_available(self, chapter_id: int) -> bool:
        learner = self.progress.read_progress()
        return is_chapter_unlocked(learner, chapter_id, self.repository.chapter_order())

    # -------------------------------------------------------------------------
    # Verse trail
    # -------------------------------------------------------------------------

    def get_verse_trail(self, chapter_id: int) -> list[NavigationVerse]:
        """All verses of a chapter in order, with availability and stars."""
        chapter = self.repository.load_chapter(chapter_id)
        learner = self.progress.read_progress()
        chapter_progress = learner.get_chapter(chapter_id)

        trail = []
        for verse_number in range(1, chapter.total_verses + 1):
            trail.append(NavigationVerse(
                verse_number=verse_number,
                availability=self._verse_availability(learner, chapter_id, verse_number),
                stars=chapter_progress.get_verse_stars(verse_number) if chapter_progress else 0,
                has_content=chapter.get_verse(verse_number) is not None,
            ))
        return trail

    def get_recommended_verse(self, chapter_id: int) -> Optional[int]:
        """
        First open verse not yet completed, or None when the chapter is done.
        """
        for item in self.get_verse_trail(chapter_id):
            if item.availability == VerseAvailability.AVAILABLE and item.has_content:
                return item.verse_number
        return None

    def get_status_indicator(self, chapter_id: int, verse_number: int) -> str:
        """
        Get status indicator for trail display.

        Returns:
            ★ for completed
            ○ for available
            ◌ for locked
        """
        learner = self.progress.read_progress()
        availability = self._verse_availability(learner, chapter_id, verse_number)
        if availability == VerseAvailability.COMPLETED:
            return "★"
        elif availability == VerseAvailability.AVAILABLE:
            return "○"
        else:
            return "◌"

    # -------------------------------------------------------------------------
    # Chapter map
    # -------------------------------------------------------------------------

    def get_chapter_map(self) -> list[NavigationChapter]:
        """Every curriculum chapter in learning order with availability."""
        learner = self.progress.read_progress()
        result = []
        for chapter in self.repository.load_all_chapters():
            chapter_progress = learner.get_chapter(chapter.number)
            result.append(NavigationChapter(
                chapter=chapter,
                availability=self._chapter_availability(learner, chapter.number),
                completed_count=len(chapter_progress.completed_verses) if chapter_progress else 0,
                total_count=chapter.total_verses,
                total_stars=chapter_progress.total_stars if chapter_progress else 0,
            ))
        return result

    # -------------------------------------------------------------------------
    # Progress summary
    # -------------------------------------------------------------------------

    def get_progress_summary(self) -> dict:
        """Get progress summary for display."""
        totals = {
            chapter_id: self.repository.total_verses(chapter_id)
            for chapter_id in self.repository.chapter_order()
        }
        stats = self.progress.get_completion_stats(totals)
        return {
            **stats,
            "unlocked_chapters": [
                nav.chapter.number for nav in self.get_chapter_map()
                if nav.availability != VerseAvailability.LOCKED
            ],
        }
