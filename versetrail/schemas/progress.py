"""
Progress tracking schemas for VerseTrail.

Defines Pydantic models for persisted learner progress:
- Per-chapter completion (completed verse set, per-verse stars)
- Learner-level root aggregate stored as a single blob
"""

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class ProgressModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChapterProgress(ProgressModel):
    """
    Completion record for one chapter.

    completed_verses behaves as a set (no duplicates) but keeps the order in
    which verses were first completed. verse_stars holds the latest star
    count recorded for each verse.
    """
    chapter_id: int = 0           # filled from the LearnerProgress key when absent
    completed_verses: list[int] = []
    verse_stars: dict[int, int] = {}
    is_completed: bool = False
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @field_validator('completed_verses')
    @classmethod
    def dedupe_verses(cls, v):
        return list(dict.fromkeys(v))

    def is_verse_completed(self, verse_number: int) -> bool:
        return verse_number in self.completed_verses

    def get_verse_stars(self, verse_number: int) -> int:
        return self.verse_stars.get(verse_number, 0)

    @property
    def total_stars(self) -> int:
        return sum(self.verse_stars.values())

    @property
    def average_stars(self) -> float:
        if not self.verse_stars:
            return 0.0
        return self.total_stars / len(self.verse_stars)

    def completion_percent(self, total_verses: int) -> float:
        if total_verses <= 0:
            return 0.0
        return round(len(self.completed_verses) / total_verses * 100, 1)


class LearnerProgress(ProgressModel):
    """
    Root aggregate persisted by the progress store.

    streak, badges and total_study_minutes are carried through untouched;
    nothing in this package computes them.
    """
    learner_id: str = "default"   # single-user mode
    chapters: dict[int, ChapterProgress] = {}
    streak: int = 0
    badges: list[str] = []
    total_study_minutes: int = 0

    @model_validator(mode='after')
    def sync_chapter_ids(self):
        for chapter_id, chapter in self.chapters.items():
            chapter.chapter_id = chapter_id
        return self

    def get_chapter(self, chapter_id: int) -> Optional[ChapterProgress]:
        return self.chapters.get(chapter_id)

    @property
    def total_verses_completed(self) -> int:
        return sum(len(c.completed_verses) for c in self.chapters.values())
