"""
ProgressStore - Persist learner progress in ~/.versetrail/progress.db.

The whole LearnerProgress record is stored as one JSON blob per learner:
- Completed verses per chapter
- Stars per verse
- Chapter completion flags and timestamps

record_completion() is the only operation that changes a chapter record.
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from versetrail.config import DEFAULT_PROGRESS_DB, DEFAULT_LEARNER_ID, MAX_STARS_PER_VERSE
from versetrail.errors import PersistenceError
from versetrail.schemas import ChapterProgress, LearnerProgress


logger = logging.getLogger(__name__)


class ProgressStore:
    """
    Store learner progress in a SQLite database.

    Progress lives apart from content so that content files can be replaced
    without losing what a learner has done.
    """

    def __init__(self, db_path: Optional[Path] = None, learner_id: str = DEFAULT_LEARNER_ID):
        """
        Initialize progress store.

        Args:
            db_path: Path to progress.db (default: ~/.versetrail/progress.db)
            learner_id: Learner identifier; one record per learner
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self.learner_id = learner_id
        self._ensure_database()

    def _ensure_database(self):
        """
        Create database and table if they don't exist.

        Raises:
            PersistenceError: the database location cannot be created or opened
        """
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            conn = sqlite3.connect(str(self.db_path))
            try:
                conn.executescript("""
                    CREATE TABLE IF NOT EXISTS learner_progress (
                        learner_id TEXT PRIMARY KEY,
                        payload TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    );
                """)
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Could not open progress database {self.db_path}: {e}")
            raise PersistenceError(f"Failed to open progress database: {e}", operation="read") from e

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def _empty_progress(self) -> LearnerProgress:
        return LearnerProgress(learner_id=self.learner_id)

    # -------------------------------------------------------------------------
    # Whole-record access
    # -------------------------------------------------------------------------

    def read_progress(self) -> LearnerProgress:
        """
        Load the learner's progress record.

        A missing record is an empty one. A record that cannot be parsed is
        logged and replaced by an empty one.

        Raises:
            PersistenceError: the database itself could not be read
        """
        try:
            conn = self._get_connection()
            try:
                row = conn.execute(
                    "SELECT payload FROM learner_progress WHERE learner_id = ?",
                    (self.learner_id,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Could not read progress for {self.learner_id}: {e}")
            raise PersistenceError(f"Failed to read progress: {e}", operation="read") from e

        if not row:
            return self._empty_progress()

        try:
            return LearnerProgress.model_validate_json(row["payload"])
        except ValidationError as e:
            logger.warning(
                f"Discarding unreadable progress record for {self.learner_id}; "
                f"starting from empty progress ({e.error_count()} errors)"
            )
            return self._empty_progress()

    def write_progress(self, progress: LearnerProgress):
        """
        Persist the learner's progress record as a unit.

        Returns only after the transaction has committed.

        Raises:
            PersistenceError: the write failed; nothing was saved
        """
        payload = progress.model_dump_json(by_alias=True)
        now = datetime.now().isoformat()
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    """INSERT INTO learner_progress (learner_id, payload, updated_at)
                       VALUES (?, ?, ?)
                       ON CONFLICT(learner_id) DO UPDATE SET
                         payload = excluded.payload,
                         updated_at = excluded.updated_at""",
                    (self.learner_id, payload, now)
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error(f"Could not save progress for {self.learner_id}: {e}")
            raise PersistenceError(f"Failed to save progress: {e}", operation="write") from e

    # -------------------------------------------------------------------------
    # Verse completion
    # -------------------------------------------------------------------------

    def record_completion(
        self,
        chapter_id: int,
        verse_id: int,
        stars: int,
        total_verses: int,
    ) -> ChapterProgress:
        """
        Record a finished verse.

        Adding a verse that is already completed does not duplicate it, but
        the stored stars are always replaced by the new value, even when it
        is lower than before.

        Args:
            chapter_id: Chapter number
            verse_id: Verse number within the chapter
            stars: Stars earned (1-3)
            total_verses: Chapter size from the content record

        Returns:
            The chapter record as written

        Raises:
            ValueError: stars or verse number out of range
            PersistenceError: the record could not be read or saved
        """
        if not 1 <= stars <= MAX_STARS_PER_VERSE:
            raise ValueError(f"stars must be between 1 and {MAX_STARS_PER_VERSE}, got {stars}")
        if not 1 <= verse_id <= total_verses:
            raise ValueError(f"verse {verse_id} outside chapter {chapter_id} (1..{total_verses})")

        progress = self.read_progress()
        now = datetime.now()

        chapter = progress.chapters.get(chapter_id)
        if chapter is None:
            chapter = ChapterProgress(chapter_id=chapter_id, started_at=now)

        completed = list(chapter.completed_verses)
        if verse_id not in completed:
            completed.append(verse_id)

        verse_stars = dict(chapter.verse_stars)
        verse_stars[verse_id] = stars

        is_completed = len(completed) == total_verses
        completed_at = chapter.completed_at
        if is_completed and completed_at is None:
            completed_at = now

        updated = chapter.model_copy(update={
            "completed_verses": completed,
            "verse_stars": verse_stars,
            "is_completed": is_completed,
            "completed_at": completed_at,
        })
        progress = progress.model_copy(update={
            "chapters": {**progress.chapters, chapter_id: updated},
        })

        self.write_progress(progress)
        logger.info(f"Saved verse {chapter_id}:{verse_id} with {stars} stars")
        if is_completed and not chapter.is_completed:
            logger.info(f"Chapter {chapter_id} completed ({updated.total_stars} stars)")
        return updated

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_chapter_progress(self, chapter_id: int) -> Optional[ChapterProgress]:
        """Get the record for one chapter, or None if nothing was completed yet."""
        return self.read_progress().get_chapter(chapter_id)

    def is_verse_completed(self, chapter_id: int, verse_id: int) -> bool:
        chapter = self.get_chapter_progress(chapter_id)
        return chapter is not None and chapter.is_verse_completed(verse_id)

    def get_verse_stars(self, chapter_id: int, verse_id: int) -> int:
        chapter = self.get_chapter_progress(chapter_id)
        return chapter.get_verse_stars(verse_id) if chapter else 0

    def is_chapter_completed(self, chapter_id: int) -> bool:
        chapter = self.get_chapter_progress(chapter_id)
        return chapter is not None and chapter.is_completed

    def chapter_total_stars(self, chapter_id: int) -> int:
        """Sum of all stored per-verse stars for a chapter."""
        chapter = self.get_chapter_progress(chapter_id)
        return chapter.total_stars if chapter else 0

    def total_verses_completed(self) -> int:
        return self.read_progress().total_verses_completed

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_completion_stats(self, total_verses_by_chapter: dict[int, int]) -> dict:
        """
        Get completion statistics.

        Args:
            total_verses_by_chapter: Chapter number -> chapter size

        Returns:
            Dictionary with overall and per-chapter stats
        """
        progress = self.read_progress()
        total_verses = sum(total_verses_by_chapter.values())
        completed = 0
        chapters = []

        for chapter_id, chapter_total in total_verses_by_chapter.items():
            chapter = progress.get_chapter(chapter_id) or ChapterProgress(chapter_id=chapter_id)
            completed += len(chapter.completed_verses)
            chapters.append({
                "chapter_id": chapter_id,
                "completed": len(chapter.completed_verses),
                "total": chapter_total,
                "stars": chapter.total_stars,
                "is_completed": chapter.is_completed,
                "completion_percent": chapter.completion_percent(chapter_total),
            })

        return {
            "total_verses": total_verses,
            "completed": completed,
            "completion_percent": round(completed / total_verses * 100, 1) if total_verses > 0 else 0,
            "total_stars": sum(c["stars"] for c in chapters),
            "chapters": chapters,
        }

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    def reset_chapter_progress(self, chapter_id: int):
        """Forget everything recorded for one chapter."""
        progress = self.read_progress()
        if chapter_id not in progress.chapters:
            return
        chapters = {cid: c for cid, c in progress.chapters.items() if cid != chapter_id}
        self.write_progress(progress.model_copy(update={"chapters": chapters}))
        logger.info(f"Reset progress for chapter {chapter_id}")

    def reset_all_progress(self):
        """Delete the learner's whole progress record."""
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    "DELETE FROM learner_progress WHERE learner_id = ?",
                    (self.learner_id,)
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to reset progress: {e}", operation="write") from e
        logger.info(f"Cleared all progress for {self.learner_id}")
