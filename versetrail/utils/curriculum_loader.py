"""
Curriculum loader utility for VerseTrail.

Loads the YAML curriculum file that fixes chapter order and maps each
chapter number to its content file.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import yaml

from versetrail.errors import ContentLoadError


@dataclass(frozen=True)
class CurriculumEntry:
    """One chapter slot in the learning sequence."""
    number: int
    file: str


def load_curriculum(path: Path) -> list[CurriculumEntry]:
    """
    Load the chapter sequence from a curriculum YAML file.

    Expected shape:

        chapters:
          - number: 1
            file: chapter_001.json
          - number: 112
            file: chapter_112.json

    Args:
        path: Path to the curriculum YAML file

    Returns:
        Chapter entries in learning order

    Raises:
        FileNotFoundError: If the curriculum file doesn't exist
        ContentLoadError: If the YAML is malformed or an entry is incomplete
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Curriculum file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ContentLoadError(f"Malformed curriculum file {path}: {e}", chapter_id=0) from e

    if not isinstance(data, dict) or not isinstance(data.get("chapters"), list):
        raise ContentLoadError(f"Curriculum file {path} has no 'chapters' list", chapter_id=0)

    entries = []
    seen = set()
    for raw in data["chapters"]:
        try:
            entry = CurriculumEntry(number=int(raw["number"]), file=str(raw["file"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ContentLoadError(f"Bad curriculum entry {raw!r} in {path}", chapter_id=0) from e
        if entry.number in seen:
            raise ContentLoadError(f"Chapter {entry.number} listed twice in {path}", chapter_id=entry.number)
        seen.add(entry.number)
        entries.append(entry)
    return entries


def chapter_order(entries: list[CurriculumEntry]) -> list[int]:
    """Chapter numbers in learning order."""
    return [entry.number for entry in entries]
