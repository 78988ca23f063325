"""
Runtime settings for VerseTrail.

Values come from the environment (optionally seeded from a .env file):

    VERSETRAIL_CONTENT_DIR         directory holding chapter JSON files
    VERSETRAIL_CURRICULUM          YAML file with chapter order
    VERSETRAIL_PROGRESS_DB         SQLite progress database
    VERSETRAIL_LEARNER_ID          learner identifier (single-user mode)
    VERSETRAIL_RECORDING_REQUIRED  require a recording before leaving step 3
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_CONTENT_DIR = PROJECT_ROOT / "data" / "content"
DEFAULT_CURRICULUM = PROJECT_ROOT / "data" / "curriculum.yaml"
DEFAULT_PROGRESS_DIR = Path.home() / ".versetrail"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"
DEFAULT_LEARNER_ID = "default"

# Star policy
PERFECT_PRONUNCIATION_SCORE = 90
MAX_STARS_PER_VERSE = 3

# Word-order quiz: how many upcoming slots get their correct word in the bank
SMART_BANK_WINDOW = 4

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    content_dir: Path = DEFAULT_CONTENT_DIR
    curriculum_path: Path = DEFAULT_CURRICULUM
    progress_db: Path = DEFAULT_PROGRESS_DB
    learner_id: str = DEFAULT_LEARNER_ID
    recording_required: bool = False


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_file: Optional .env file to load first (default: project .env).
            Existing environment variables are not overridden.

    Returns:
        Frozen Settings instance
    """
    load_dotenv(env_file or PROJECT_ROOT / ".env")

    return Settings(
        content_dir=Path(os.environ.get("VERSETRAIL_CONTENT_DIR", str(DEFAULT_CONTENT_DIR))),
        curriculum_path=Path(os.environ.get("VERSETRAIL_CURRICULUM", str(DEFAULT_CURRICULUM))),
        progress_db=Path(os.environ.get("VERSETRAIL_PROGRESS_DB", str(DEFAULT_PROGRESS_DB))).expanduser(),
        learner_id=os.environ.get("VERSETRAIL_LEARNER_ID", DEFAULT_LEARNER_ID),
        recording_required=_env_flag("VERSETRAIL_RECORDING_REQUIRED"),
    )
