"""
Quiz tests: word-order placement, the smart word bank, comprehension.
"""

import random

import pytest

from versetrail.classroom import ComprehensionCheck, WordOrderQuiz
from versetrail.schemas import ComprehensionQuizDefinition, PlacementFeedback


WORDS = ["bismi", "allahi", "alrrahmani", "alrraheemi", "one", "two"]


@pytest.fixture
def quiz() -> WordOrderQuiz:
    return WordOrderQuiz(WORDS, distractor_pool=["pool_a", "pool_b"], rng=random.Random(3))


class TestWordOrderPlacement:
    """Test strict left-to-right slot filling."""

    def test_starts_empty(self, quiz):
        assert quiz.active_slot == 0
        assert quiz.placed_words == []
        assert not quiz.is_solved
        assert quiz.word_count == 6

    def test_correct_word_advances_one_slot(self, quiz):
        result = quiz.place("bismi")
        assert result.accepted
        assert result.feedback == PlacementFeedback.CORRECT
        assert result.active_slot == 1
        assert quiz.slots[0] == "bismi"

    def test_wrong_word_changes_nothing(self, quiz):
        quiz.place("bismi")
        before = list(quiz.slots)

        result = quiz.place("alrrahmani")

        assert not result.accepted
        assert result.feedback == PlacementFeedback.TRY_AGAIN
        assert quiz.active_slot == 1
        assert quiz.slots == before

    def test_each_correct_token_advances_exactly_once(self, quiz):
        for index, word in enumerate(WORDS):
            quiz.place("not a word")
            assert quiz.active_slot == index
            quiz.place(word)
            assert quiz.active_slot == index + 1

    def test_solved_after_last_word(self, quiz):
        results = [quiz.place(word) for word in WORDS]
        assert quiz.is_solved
        assert results[-1].solved
        assert results[-1].feedback == PlacementFeedback.SOLVED
        assert quiz.placed_words == WORDS

    def test_place_after_solved_is_refused(self, quiz):
        for word in WORDS:
            quiz.place(word)
        result = quiz.place("bismi")
        assert not result.accepted
        assert result.feedback == PlacementFeedback.SOLVED
        assert quiz.active_slot == len(WORDS)

    def test_repeated_word_fills_its_own_slot(self):
        quiz = WordOrderQuiz(["a", "b", "a"])
        for word in ["a", "b", "a"]:
            assert quiz.place(word).accepted
        assert quiz.is_solved

    def test_matching_is_exact(self, quiz):
        assert not quiz.place("Bismi").accepted
        assert not quiz.place("bismi ").accepted

    def test_reset(self, quiz):
        quiz.place("bismi")
        quiz.reset()
        assert quiz.active_slot == 0
        assert quiz.placed_words == []

    def test_empty_word_list_rejected(self):
        with pytest.raises(ValueError):
            WordOrderQuiz([])


class TestWordBank:
    """Test the smart word bank."""

    def test_window_plus_one_distractor(self, quiz):
        bank = quiz.word_bank()
        assert len(bank) == 5
        assert set(WORDS[:4]) <= set(bank)
        distractor = (set(bank) - set(WORDS[:4])).pop()
        assert distractor in WORDS[4:]

    def test_bank_follows_active_slot(self, quiz):
        quiz.place("bismi")
        quiz.place("allahi")
        bank = quiz.word_bank()
        assert set(WORDS[2:6]) <= set(bank)
        assert "bismi" not in bank
        assert "allahi" not in bank

    def test_distractor_from_pool_near_the_end(self, quiz):
        for word in WORDS[:3]:
            quiz.place(word)
        bank = quiz.word_bank()
        assert len(bank) == 4
        assert set(WORDS[3:]) <= set(bank)
        assert (set(bank) - set(WORDS[3:])) <= {"pool_a", "pool_b"}

    def test_no_distractor_without_pool(self):
        quiz = WordOrderQuiz(["a", "b"], rng=random.Random(1))
        assert sorted(quiz.word_bank()) == ["a", "b"]

    def test_pool_skips_offered_and_placed_words(self):
        quiz = WordOrderQuiz(["a", "b"], distractor_pool=["a", "b"], rng=random.Random(1))
        quiz.place("a")
        assert quiz.word_bank() == ["b"]

    def test_custom_window(self, quiz):
        bank = quiz.word_bank(window=2)
        assert len(bank) == 3
        assert {"bismi", "allahi"} <= set(bank)

    def test_empty_when_solved(self, quiz):
        for word in WORDS:
            quiz.place(word)
        assert quiz.word_bank() == []

    def test_same_seed_same_bank(self):
        first = WordOrderQuiz(WORDS, rng=random.Random(11)).word_bank()
        second = WordOrderQuiz(WORDS, rng=random.Random(11)).word_bank()
        assert first == second


class TestComprehensionCheck:
    """Test single-select comprehension."""

    @pytest.fixture
    def check(self) -> ComprehensionCheck:
        return ComprehensionCheck(ComprehensionQuizDefinition(
            question="Who is praised?",
            options=["Allah", "The people", "The sun"],
            correct_option_index=0,
            explanation="All praise is for Allah.",
        ))

    def test_options(self, check):
        assert check.options == ["Allah", "The people", "The sun"]

    def test_correct_answer(self, check):
        assert check.submit("Allah")
        assert check.correct
        assert check.selected == "Allah"

    def test_wrong_answer_clears_selection(self, check):
        assert not check.submit("The sun")
        assert not check.correct
        assert check.selected is None

    def test_latest_submission_wins(self, check):
        check.submit("Allah")
        check.submit("The people")
        assert not check.correct
        check.submit("Allah")
        assert check.correct
        assert check.attempts == 3

    def test_reset(self, check):
        check.submit("Allah")
        check.reset()
        assert not check.correct
        assert check.selected is None
        assert check.attempts == 0
