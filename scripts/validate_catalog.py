#!/usr/bin/env python3
"""
Validate question catalog files.

Loads every *.yaml subject file through the same validation the app
uses and prints a per-lesson breakdown by question kind.

Usage:
    python scripts/validate_catalog.py
    python scripts/validate_catalog.py --catalog-dir path/to/content
"""

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from questionbank.classroom import CatalogError, CatalogLoader
from questionbank.config import load_settings
from questionbank.schemas import Catalog
from questionbank.utils import setup_logging

logger = logging.getLogger(__name__)


def summarize(catalog: Catalog) -> list[str]:
    """One line per lesson: path, question count and kinds."""
    lines = []
    for subject_id, subject in catalog.subjects.items():
        for semester_id, semester in subject.semesters.items():
            for unit_id, unit in semester.units.items():
                for lesson_id, lesson in unit.lessons.items():
                    kinds = Counter(q.kind for q in lesson.questions)
                    breakdown = ", ".join(f"{kind}={n}" for kind, n in sorted(kinds.items()))
                    lines.append(
                        f"{subject_id}/{semester_id}/{unit_id}/{lesson_id}: "
                        f"{len(lesson.questions)} questions ({breakdown})"
                    )
    return lines


def main() -> int:
    settings = load_settings()
    parser = argparse.ArgumentParser(
        description="Validate QuestionBank catalog files.",
    )
    parser.add_argument(
        "--catalog-dir",
        type=Path,
        default=settings.catalog_dir,
        help=f"Directory of subject YAML files (default: {settings.catalog_dir})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print one line per lesson",
    )
    args = parser.parse_args()

    setup_logging(settings.log_level)

    try:
        catalog = CatalogLoader(args.catalog_dir).get_catalog()
    except CatalogError as e:
        logger.error(str(e))
        return 1

    counts = catalog.count_questions()
    for subject_id, count in counts.items():
        print(f"{subject_id}: {count} questions")
    if args.verbose:
        for line in summarize(catalog):
            print(f"  {line}")

    print(f"OK: {len(counts)} subjects, {sum(counts.values())} questions")
    return 0


if __name__ == "__main__":
    sys.exit(main())
