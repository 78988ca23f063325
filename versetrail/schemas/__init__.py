"""
VerseTrail Schemas - models for the verse lesson player.

This module exports all schema classes for:
- Content: chapters, verses, words, quiz definitions
- Lesson: lesson steps, navigation events, result records
- Progress: persisted learner and chapter progress
"""

# Content schemas
from .content import (
    Word,
    WordOrderQuizDefinition,
    ComprehensionQuizDefinition,
    Verse,
    Chapter,
)

# Lesson schemas
from .lesson import (
    LessonStep,
    StepEvent,
    TOTAL_STEPS,
    PlacementFeedback,
    PlacementResult,
    CompletionResult,
)

# Progress schemas
from .progress import (
    ChapterProgress,
    LearnerProgress,
)

__all__ = [
    # Content
    'Word',
    'WordOrderQuizDefinition',
    'ComprehensionQuizDefinition',
    'Verse',
    'Chapter',
    # Lesson
    'LessonStep',
    'StepEvent',
    'TOTAL_STEPS',
    'PlacementFeedback',
    'PlacementResult',
    'CompletionResult',
    # Progress
    'ChapterProgress',
    'LearnerProgress',
]
