"""
CompletionRouter - where to send the learner after a verse is saved.

A finished chapter gets its own celebration carrying the chapter's star
total; otherwise the learner goes back to the verse list.
"""

from dataclasses import dataclass
from typing import Optional, Union

from versetrail.config import MAX_STARS_PER_VERSE

from .progress import ProgressStore


@dataclass(frozen=True)
class ChapterComplete:
    chapter_id: int
    total_stars: int
    max_stars: Optional[int] = None


@dataclass(frozen=True)
class ReturnToVerseList:
    chapter_id: int


CompletionEvent = Union[ChapterComplete, ReturnToVerseList]


class CompletionRouter:
    """Decide the next destination from freshly read progress."""

    def __init__(self, progress: ProgressStore):
        self.progress = progress

    def route(self, chapter_id: int, total_verses: Optional[int] = None) -> CompletionEvent:
        """
        Pick the destination after a verse completion.

        Must be called after the completion write has returned; it reads
        the store again instead of trusting any earlier copy.

        Args:
            chapter_id: Chapter the learner just advanced in
            total_verses: Chapter size, used only to report max_stars

        Returns:
            ChapterComplete with the summed stars, or ReturnToVerseList
        """
        chapter = self.progress.get_chapter_progress(chapter_id)
        if chapter is None or not chapter.is_completed:
            return ReturnToVerseList(chapter_id=chapter_id)

        return ChapterComplete(
            chapter_id=chapter_id,
            total_stars=sum(chapter.verse_stars.values()),
            max_stars=total_verses * MAX_STARS_PER_VERSE if total_verses else None,
        )
