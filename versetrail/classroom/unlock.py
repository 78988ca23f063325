"""
Unlock policy - which verses and chapters a learner may open.

Pure functions over LearnerProgress; nothing here reads or writes storage.
"""

from versetrail.schemas import LearnerProgress


def is_verse_unlocked(progress: LearnerProgress, chapter_id: int, verse_number: int) -> bool:
    """Verse 1 is always open; verse N opens once verse N-1 is completed."""
    if verse_number == 1:
        return True
    chapter = progress.get_chapter(chapter_id)
    return chapter is not None and chapter.is_verse_completed(verse_number - 1)


def is_chapter_unlocked(progress: LearnerProgress, chapter_id: int, chapter_order: list[int]) -> bool:
    """
    The first chapter in the order is always open; any other chapter opens
    once the chapter before it is completed. Chapters outside the order stay
    locked.
    """
    if chapter_id not in chapter_order:
        return False
    index = chapter_order.index(chapter_id)
    if index == 0:
        return True
    previous = progress.get_chapter(chapter_order[index - 1])
    return previous is not None and previous.is_completed


def unlocked_verses(progress: LearnerProgress, chapter_id: int, total_verses: int) -> list[int]:
    """All verse numbers currently open in a chapter."""
    return [n for n in range(1, total_verses + 1) if is_verse_unlocked(progress, chapter_id, n)]
