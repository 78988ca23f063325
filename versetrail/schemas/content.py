"""
Content schemas for VerseTrail.

Defines Pydantic models for the read-only content records:
- Words of a verse (canonical order = word-order quiz target)
- The two quiz definitions attached to every verse
- Verses and chapters

JSON files use camelCase keys; Python code uses snake_case attributes.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional

from versetrail.config import MAX_STARS_PER_VERSE


class ContentModel(BaseModel):
    """Base for content records: camelCase on the wire, snake_case in code."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------------------------------------------------------
# Words and quizzes
# -----------------------------------------------------------------------------

class Word(ContentModel):
    text: str = Field(..., min_length=1)  # native script
    transliteration: str
    meaning: str
    position: Optional[int] = Field(default=None, ge=1)  # 1-based position in verse


class WordOrderQuizDefinition(ContentModel):
    """Quiz 1: rebuild the verse from its words. The target comes from Verse.words."""
    instruction: str
    hint: Optional[str] = None


class ComprehensionQuizDefinition(ContentModel):
    """Quiz 2: single-select multiple choice about the verse meaning."""
    question: str
    options: list[str] = Field(..., min_length=2)
    correct_option_index: int = Field(..., ge=0)
    explanation: str
    hint: Optional[str] = None

    @model_validator(mode='after')
    def correct_index_in_range(self):
        if self.correct_option_index >= len(self.options):
            raise ValueError(
                f'correctOptionIndex {self.correct_option_index} out of range '
                f'for {len(self.options)} options'
            )
        return self

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_option_index]

    def is_correct(self, selected: str) -> bool:
        """Exact equality with the designated option; no partial credit."""
        return selected == self.correct_option


# -----------------------------------------------------------------------------
# Verses and chapters
# -----------------------------------------------------------------------------

class Verse(ContentModel):
    verse_number: int = Field(..., ge=1)
    arabic_text: str
    transliteration: str
    translation: str
    explanation: str              # child-friendly explanation (step 1)
    audio_url: str                # expert recitation (step 2)
    words: list[Word] = Field(..., min_length=1)
    quiz1: WordOrderQuizDefinition
    quiz2: ComprehensionQuizDefinition

    @field_validator('words')
    @classmethod
    def words_in_position_order(cls, v):
        positions = [w.position for w in v if w.position is not None]
        if positions != sorted(positions):
            raise ValueError('words must be listed in canonical (position) order')
        return v

    @property
    def word_texts(self) -> list[str]:
        """Canonical word sequence (the word-order quiz target)."""
        return [w.text for w in self.words]

    @property
    def word_count(self) -> int:
        return len(self.words)


class Chapter(ContentModel):
    """
    A chapter of verses.

    total_verses is the chapter's real size and the only source used for
    completion checks; `verses` may hold fewer entries while content is
    still being authored.
    """
    number: int = Field(..., ge=1)
    name_native: str
    name_localized: str
    meaning: str
    total_verses: int = Field(..., ge=1)
    verses: list[Verse] = []

    @model_validator(mode='after')
    def verses_fit_chapter(self):
        numbers = [v.verse_number for v in self.verses]
        if len(numbers) != len(set(numbers)):
            raise ValueError(f'chapter {self.number} has duplicate verse numbers')
        too_high = [n for n in numbers if n > self.total_verses]
        if too_high:
            raise ValueError(
                f'chapter {self.number} has verses beyond totalVerses={self.total_verses}: {too_high}'
            )
        return self

    def get_verse(self, verse_number: int) -> Optional[Verse]:
        for verse in self.verses:
            if verse.verse_number == verse_number:
                return verse
        return None

    @property
    def max_stars(self) -> int:
        return self.total_verses * MAX_STARS_PER_VERSE
