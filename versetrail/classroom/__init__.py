"""
VerseTrail Classroom - runtime components for playing verse lessons.

This module provides:
- ContentRepository: Load chapter content files
- ProgressStore: Persist learner progress
- LessonSession: Six-step lesson state machine
- CompletionRouter: Where to go after a verse is saved
- Navigator: Verse trail and chapter map with unlocking
- LessonPlayer: Wires everything together
"""

from .loader import (
    ChapterCache,
    ContentRepository,
)

from .progress import ProgressStore

from .quiz import (
    WordOrderQuiz,
    ComprehensionCheck,
)

from .completion import (
    CompletionRouter,
    CompletionEvent,
    ChapterComplete,
    ReturnToVerseList,
)

from .session import (
    LessonSession,
    TRANSITIONS,
    compute_stars,
)

from .unlock import (
    is_verse_unlocked,
    is_chapter_unlocked,
    unlocked_verses,
)

from .navigator import (
    Navigator,
    VerseAvailability,
    NavigationVerse,
    NavigationChapter,
)

from .player import LessonPlayer

__all__ = [
    # Loader
    "ChapterCache",
    "ContentRepository",
    # Progress
    "ProgressStore",
    # Quiz
    "WordOrderQuiz",
    "ComprehensionCheck",
    # Completion
    "CompletionRouter",
    "CompletionEvent",
    "ChapterComplete",
    "ReturnToVerseList",
    # Session
    "LessonSession",
    "TRANSITIONS",
    "compute_stars",
    # Unlock policy
    "is_verse_unlocked",
    "is_chapter_unlocked",
    "unlocked_verses",
    # Navigator
    "Navigator",
    "VerseAvailability",
    "NavigationVerse",
    "NavigationChapter",
    # Player
    "LessonPlayer",
]
