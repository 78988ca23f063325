"""
ContentRepository - Load chapter content from JSON files.

Provides read-only access to:
- Chapters and their verses
- Chapter order (from the curriculum file)
- Total verse count per chapter (the only place completion checks get it)

Loaded chapters are kept in a ChapterCache owned by the caller.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from versetrail.errors import ContentLoadError
from versetrail.schemas import Chapter, Verse
from versetrail.utils import CurriculumEntry, chapter_order


logger = logging.getLogger(__name__)


class ChapterCache:
    """In-memory chapter cache keyed by chapter number."""

    def __init__(self):
        self._chapters: dict[int, Chapter] = {}

    def get(self, chapter_id: int) -> Optional[Chapter]:
        return self._chapters.get(chapter_id)

    def put(self, chapter: Chapter):
        self._chapters[chapter.number] = chapter

    def clear(self):
        self._chapters.clear()

    def __contains__(self, chapter_id: int) -> bool:
        return chapter_id in self._chapters

    def __len__(self) -> int:
        return len(self._chapters)


class ContentRepository:
    """
    Load chapters listed in the curriculum from a content directory.

    Each method raises ContentLoadError rather than returning partial data.
    """

    def __init__(
        self,
        content_dir: str | Path,
        curriculum: list[CurriculumEntry],
        cache: Optional[ChapterCache] = None,
    ):
        """
        Initialize repository.

        Args:
            content_dir: Directory holding the chapter JSON files
            curriculum: Chapter entries in learning order
            cache: Chapter cache to use (default: a fresh private cache)
        """
        self.content_dir = Path(content_dir)
        self.curriculum = list(curriculum)
        self.cache = cache if cache is not None else ChapterCache()
        self._files = {entry.number: entry.file for entry in self.curriculum}

    # -------------------------------------------------------------------------
    # Chapters
    # -------------------------------------------------------------------------

    def chapter_order(self) -> list[int]:
        """Chapter numbers in learning order."""
        return chapter_order(self.curriculum)

    def has_chapter(self, chapter_id: int) -> bool:
        return chapter_id in self._files

    def load_chapter(self, chapter_id: int) -> Chapter:
        """
        Load a chapter, using the cache when possible.

        Raises:
            ContentLoadError: chapter not in curriculum, file missing,
                invalid JSON, or record does not match the schema
        """
        cached = self.cache.get(chapter_id)
        if cached is not None:
            return cached

        file_name = self._files.get(chapter_id)
        if file_name is None:
            raise ContentLoadError(f"Chapter {chapter_id} is not in the curriculum", chapter_id)

        path = self.content_dir / file_name
        logger.debug(f"Loading chapter {chapter_id} from {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ContentLoadError(f"Content file not found for chapter {chapter_id}: {path}", chapter_id) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ContentLoadError(f"Invalid JSON in {path}: {e}", chapter_id) from e
        except OSError as e:
            raise ContentLoadError(f"Cannot read content file for chapter {chapter_id}: {e}", chapter_id) from e

        try:
            chapter = Chapter.model_validate(data)
        except ValidationError as e:
            raise ContentLoadError(f"Malformed chapter record in {path}: {e}", chapter_id) from e

        if chapter.number != chapter_id:
            raise ContentLoadError(
                f"{path} holds chapter {chapter.number}, expected {chapter_id}", chapter_id
            )

        self.cache.put(chapter)
        logger.info(f"Loaded chapter {chapter_id} ({chapter.name_localized}, {len(chapter.verses)} verses)")
        return chapter

    def load_all_chapters(self) -> list[Chapter]:
        """Load every curriculum chapter in learning order."""
        return [self.load_chapter(chapter_id) for chapter_id in self.chapter_order()]

    def total_verses(self, chapter_id: int) -> int:
        """Total verse count for a chapter, as declared by its content record."""
        return self.load_chapter(chapter_id).total_verses

    # -------------------------------------------------------------------------
    # Verses
    # -------------------------------------------------------------------------

    def get_verse(self, chapter_id: int, verse_id: int) -> Verse:
        """
        Get one verse.

        Raises:
            ContentLoadError: chapter cannot be loaded or has no such verse
        """
        chapter = self.load_chapter(chapter_id)
        verse = chapter.get_verse(verse_id)
        if verse is None:
            raise ContentLoadError(f"Verse {chapter_id}:{verse_id} not found", chapter_id, verse_id)
        return verse

    def clear_cache(self):
        """Drop cached chapters so the next load re-reads the files."""
        self.cache.clear()
