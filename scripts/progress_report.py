#!/usr/bin/env python3
"""
progress_report.py - Show or reset a learner's verse progress.

Reads settings from the environment / .env (see versetrail.config).

Usage:
  python scripts/progress_report.py
  python scripts/progress_report.py --learner-id amina
  python scripts/progress_report.py --reset-chapter 1
  python scripts/progress_report.py --reset-all
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Project root for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from versetrail.classroom import LessonPlayer
from versetrail.config import load_settings
from versetrail.errors import VersetrailError

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def format_report(summary: dict, chapter_names: dict[int, str]) -> str:
    """Render a progress summary as plain text lines."""
    lines = [
        f"Verses completed: {summary['completed']}/{summary['total_verses']} "
        f"({summary['completion_percent']}%)",
        f"Total stars: {summary['total_stars']}",
        "",
    ]
    for chapter in summary["chapters"]:
        name = chapter_names.get(chapter["chapter_id"], f"Chapter {chapter['chapter_id']}")
        if chapter["is_completed"]:
            status = "done"
        elif chapter["chapter_id"] in summary["unlocked_chapters"]:
            status = "open"
        else:
            status = "locked"
        lines.append(
            f"  [{status:>6}] {name}: {chapter['completed']}/{chapter['total']} verses, "
            f"{chapter['stars']} stars"
        )
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(
        description="Show or reset learner progress",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--learner-id",
        type=str,
        default=None,
        help="Learner to report on (default: VERSETRAIL_LEARNER_ID or 'default')"
    )
    parser.add_argument(
        "--reset-chapter",
        type=int,
        default=None,
        metavar="N",
        help="Forget all progress for chapter N"
    )
    parser.add_argument(
        "--reset-all",
        action="store_true",
        help="Forget all progress for the learner"
    )

    args = parser.parse_args()

    settings = load_settings()
    if args.learner_id:
        settings = replace(settings, learner_id=args.learner_id)

    try:
        player = LessonPlayer.from_settings(settings)

        if args.reset_all:
            player.progress.reset_all_progress()
        elif args.reset_chapter is not None:
            player.progress.reset_chapter_progress(args.reset_chapter)

        summary = player.navigator.get_progress_summary()
        names = {c.number: c.name_localized for c in player.repository.load_all_chapters()}
    except (VersetrailError, FileNotFoundError) as e:
        logger.error(f"Failed: {e}")
        sys.exit(1)

    print(format_report(summary, names))


if __name__ == "__main__":
    main()
