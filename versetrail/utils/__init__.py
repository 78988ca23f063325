"""VerseTrail utilities."""

from .curriculum_loader import CurriculumEntry, load_curriculum, chapter_order

__all__ = [
    "CurriculumEntry",
    "load_curriculum",
    "chapter_order",
]
