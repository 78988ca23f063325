"""
LessonPlayer - wires content, progress and lesson sessions together.

One player per app run. It owns the chapter cache, the progress store
and the completion router, and hands out a LessonSession per verse.
"""

import logging
import random
from typing import Optional

from versetrail.config import Settings
from versetrail.utils import load_curriculum

from .completion import CompletionRouter
from .loader import ChapterCache, ContentRepository
from .navigator import Navigator
from .progress import ProgressStore
from .session import LessonSession


logger = logging.getLogger(__name__)


class LessonPlayer:
    """Entry point used by the screens."""

    def __init__(
        self,
        repository: ContentRepository,
        progress: ProgressStore,
        recording_required: bool = False,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            repository: Content source
            progress: Learner progress store
            recording_required: Require a recording before the word-order quiz
            rng: Random source shared by the sessions' word banks
        """
        self.repository = repository
        self.progress = progress
        self.recording_required = recording_required
        self.rng = rng
        self.router = CompletionRouter(progress)
        self.navigator = Navigator(repository, progress)

    @classmethod
    def from_settings(cls, settings: Settings) -> "LessonPlayer":
        """Build a player from Settings (curriculum, content dir, database)."""
        curriculum = load_curriculum(settings.curriculum_path)
        repository = ContentRepository(settings.content_dir, curriculum, cache=ChapterCache())
        progress = ProgressStore(settings.progress_db, learner_id=settings.learner_id)
        return cls(repository, progress, recording_required=settings.recording_required)

    def open_session(self, chapter_id: int, verse_id: int) -> LessonSession:
        """
        Start a lesson for one verse.

        Raises:
            ContentLoadError: verse content missing or malformed; no session is created
        """
        session = LessonSession(
            chapter_id,
            verse_id,
            progress=self.progress,
            router=self.router,
            recording_required=self.recording_required,
            rng=self.rng,
        )
        session.load(self.repository)
        logger.debug(f"Opened {session!r}")
        return session

    def close(self):
        """Drop cached content."""
        self.repository.clear_cache()
