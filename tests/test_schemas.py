"""
Schema validation tests for VerseTrail.

Tests the Pydantic content and progress models and the lesson step enum.
"""

import pytest
from pydantic import ValidationError

from versetrail.schemas import (
    # Content
    Word,
    ComprehensionQuizDefinition,
    Verse,
    Chapter,
    # Lesson
    LessonStep,
    TOTAL_STEPS,
    # Progress
    ChapterProgress,
    LearnerProgress,
)

from conftest import make_chapter, make_verse


class TestContentSchemas:
    """Test content record schemas."""

    def test_word_from_camel_case_json(self):
        word = Word.model_validate({"text": "قُلْ", "transliteration": "Qul", "meaning": "Say", "position": 1})
        assert word.text == "قُلْ"
        assert word.position == 1

    def test_word_position_optional(self):
        word = Word(text="a", transliteration="a", meaning="a")
        assert word.position is None

    def test_word_empty_text_rejected(self):
        with pytest.raises(ValidationError):
            Word(text="", transliteration="a", meaning="a")

    def test_comprehension_correct_option(self):
        quiz = ComprehensionQuizDefinition(
            question="Q?",
            options=["a", "b", "c"],
            correct_option_index=2,
            explanation="c is right",
        )
        assert quiz.correct_option == "c"
        assert quiz.is_correct("c")
        assert not quiz.is_correct("C")
        assert not quiz.is_correct("a")

    def test_comprehension_index_out_of_range(self):
        with pytest.raises(ValidationError):
            ComprehensionQuizDefinition(
                question="Q?",
                options=["a", "b"],
                correct_option_index=2,
                explanation="",
            )

    def test_verse_from_json(self):
        verse = Verse.model_validate(make_verse(3))
        assert verse.verse_number == 3
        assert verse.word_texts == ["w3_0", "w3_1", "w3_2", "w3_3"]
        assert verse.word_count == 4
        assert verse.quiz2.correct_option == "right answer"
        assert verse.audio_url == "audio/003.mp3"

    def test_verse_words_out_of_order_rejected(self):
        data = make_verse(1)
        data["words"].reverse()
        with pytest.raises(ValidationError):
            Verse.model_validate(data)

    def test_verse_needs_words(self):
        data = make_verse(1)
        data["words"] = []
        with pytest.raises(ValidationError):
            Verse.model_validate(data)

    def test_chapter_from_json(self):
        chapter = Chapter.model_validate(make_chapter(1, 7))
        assert chapter.total_verses == 7
        assert chapter.name_localized == "Chapter 1"
        assert chapter.get_verse(7).verse_number == 7
        assert chapter.get_verse(8) is None
        assert chapter.max_stars == 21

    def test_chapter_duplicate_verses_rejected(self):
        data = make_chapter(1, 3)
        data["verses"].append(make_verse(2))
        with pytest.raises(ValidationError):
            Chapter.model_validate(data)

    def test_chapter_verse_beyond_total_rejected(self):
        data = make_chapter(1, 3)
        data["totalVerses"] = 2
        with pytest.raises(ValidationError):
            Chapter.model_validate(data)

    def test_chapter_may_hold_fewer_verses_than_total(self):
        data = make_chapter(1, 3)
        data["totalVerses"] = 7
        chapter = Chapter.model_validate(data)
        assert len(chapter.verses) == 3
        assert chapter.total_verses == 7


class TestLessonSchemas:
    """Test lesson step enum."""

    def test_step_numbers(self):
        assert [step.number for step in LessonStep] == [1, 2, 3, 4, 5, 6]
        assert TOTAL_STEPS == 6

    def test_display_names(self):
        assert LessonStep.WORD_ORDER_QUIZ.display_name == "Quiz 1"
        assert LessonStep.CELEBRATION.display_name == "Celebration"


class TestProgressSchemas:
    """Test persisted progress schemas."""

    def test_chapter_progress_defaults(self):
        progress = ChapterProgress(chapter_id=1)
        assert progress.completed_verses == []
        assert progress.total_stars == 0
        assert progress.average_stars == 0.0
        assert not progress.is_completed

    def test_completed_verses_deduplicated(self):
        progress = ChapterProgress(chapter_id=1, completed_verses=[2, 1, 2, 3, 1])
        assert progress.completed_verses == [2, 1, 3]

    def test_star_helpers(self):
        progress = ChapterProgress(chapter_id=1, completed_verses=[1, 2], verse_stars={1: 3, 2: 2})
        assert progress.total_stars == 5
        assert progress.average_stars == 2.5
        assert progress.get_verse_stars(1) == 3
        assert progress.get_verse_stars(9) == 0
        assert progress.completion_percent(4) == 50.0
        assert progress.completion_percent(0) == 0.0

    def test_learner_progress_json_shape(self):
        learner = LearnerProgress(
            learner_id="amina",
            chapters={1: ChapterProgress(completed_verses=[1], verse_stars={1: 3})},
            streak=4,
            badges=["first_verse"],
            total_study_minutes=30,
        )
        data = learner.model_dump(mode="json", by_alias=True)
        assert data["learnerId"] == "amina"
        assert data["chapters"]["1"]["completedVerses"] == [1]
        assert data["chapters"]["1"]["verseStars"] == {"1": 3}
        assert data["chapters"]["1"]["isCompleted"] is False
        assert data["totalStudyMinutes"] == 30

    def test_learner_progress_from_stored_json(self):
        raw = (
            '{"learnerId": "amina", "chapters": {"112": {"completedVerses": [1, 2],'
            ' "verseStars": {"1": 3, "2": 1}, "isCompleted": false}},'
            ' "streak": 2, "badges": ["a"], "totalStudyMinutes": 5}'
        )
        learner = LearnerProgress.model_validate_json(raw)
        chapter = learner.get_chapter(112)
        assert chapter.chapter_id == 112
        assert chapter.verse_stars == {1: 3, 2: 1}
        assert learner.total_verses_completed == 2
        assert learner.streak == 2
        assert learner.badges == ["a"]
