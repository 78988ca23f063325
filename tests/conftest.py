"""
Shared fixtures: a small curriculum written to tmp_path.

Chapter 1 has 7 verses of 4 words each, chapter 2 has 4 verses.
Words are named w<verse>_<index> so tests can build answers by hand.
"""

import json
import random
from pathlib import Path

import pytest

from versetrail.classroom import (
    ChapterCache,
    ContentRepository,
    LessonPlayer,
    ProgressStore,
)
from versetrail.utils import load_curriculum


def make_verse(verse_number: int, word_count: int = 4) -> dict:
    words = [
        {
            "text": f"w{verse_number}_{i}",
            "transliteration": f"t{verse_number}_{i}",
            "meaning": f"m{verse_number}_{i}",
            "position": i + 1,
        }
        for i in range(word_count)
    ]
    return {
        "verseNumber": verse_number,
        "arabicText": " ".join(w["text"] for w in words),
        "transliteration": " ".join(w["transliteration"] for w in words),
        "translation": f"Translation of verse {verse_number}",
        "explanation": f"Explanation of verse {verse_number}",
        "audioUrl": f"audio/{verse_number:03d}.mp3",
        "words": words,
        "quiz1": {"instruction": "Put the words in order"},
        "quiz2": {
            "question": f"What is verse {verse_number} about?",
            "options": ["right answer", "wrong answer", "other answer"],
            "correctOptionIndex": 0,
            "explanation": "Because.",
        },
    }


def make_chapter(number: int, total_verses: int) -> dict:
    return {
        "number": number,
        "nameNative": f"native {number}",
        "nameLocalized": f"Chapter {number}",
        "meaning": f"Meaning {number}",
        "totalVerses": total_verses,
        "verses": [make_verse(n) for n in range(1, total_verses + 1)],
    }


def verse_words(verse_number: int, word_count: int = 4) -> list[str]:
    return [f"w{verse_number}_{i}" for i in range(word_count)]


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "content"
    directory.mkdir()
    (directory / "chapter_1.json").write_text(json.dumps(make_chapter(1, 7)), encoding="utf-8")
    (directory / "chapter_2.json").write_text(json.dumps(make_chapter(2, 4)), encoding="utf-8")
    return directory


@pytest.fixture
def curriculum_path(tmp_path: Path) -> Path:
    path = tmp_path / "curriculum.yaml"
    path.write_text(
        "chapters:\n"
        "  - number: 1\n"
        "    file: chapter_1.json\n"
        "  - number: 2\n"
        "    file: chapter_2.json\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def repository(content_dir: Path, curriculum_path: Path) -> ContentRepository:
    return ContentRepository(content_dir, load_curriculum(curriculum_path), cache=ChapterCache())


@pytest.fixture
def store(tmp_path: Path) -> ProgressStore:
    return ProgressStore(tmp_path / "progress" / "progress.db", learner_id="tester")


@pytest.fixture
def player(repository: ContentRepository, store: ProgressStore) -> LessonPlayer:
    return LessonPlayer(repository, store, rng=random.Random(7))
