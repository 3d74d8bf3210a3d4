"""
CatalogLoader - Load the question catalog from YAML files.

One file per subject. Each file is validated into the Catalog schema
at load time, so downstream code never sees a malformed question:
- Legacy question tags ("multiple", "short") are normalized
- Legacy camelCase field names are normalized
- Lesson display names default to their key
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from questionbank.config import DEFAULT_CATALOG_DIR
from questionbank.schemas import Catalog, Subject

from .errors import CatalogError


logger = logging.getLogger(__name__)

KIND_ALIASES = {
    "multiple": "multiple-choice",
    "mcq": "multiple-choice",
    "tf": "true-false",
    "short": "short-answer",
}

FIELD_ALIASES = {
    "type": "kind",
    "question": "prompt",
    "correctAnswer": "correct_answer",
    "sampleAnswer": "sample_answer",
}


def normalize_question(raw: dict[str, Any]) -> dict[str, Any]:
    """Map legacy field names and kind tags onto the schema names."""
    result = {}
    for key, value in raw.items():
        result[FIELD_ALIASES.get(key, key)] = value
    kind = result.get("kind")
    if isinstance(kind, str):
        result["kind"] = KIND_ALIASES.get(kind, kind)
    return result


def _normalize_subject(raw: dict[str, Any]) -> dict[str, Any]:
    semesters = {}
    for semester_key, semester in (raw.get("semesters") or {}).items():
        semester = semester or {}
        units = {}
        for unit_key, unit in (semester.get("units") or {}).items():
            unit = unit or {}
            lessons = {}
            for lesson_key, lesson in (unit.get("lessons") or {}).items():
                lesson = lesson or {}
                lessons[str(lesson_key)] = {
                    "name": lesson.get("name", str(lesson_key)),
                    "questions": [normalize_question(q) for q in lesson.get("questions") or []],
                }
            units[str(unit_key)] = {"name": unit.get("name", str(unit_key)), "lessons": lessons}
        semesters[str(semester_key)] = {
            "name": semester.get("name", str(semester_key)),
            "units": units,
        }
    return {"name": raw.get("name", ""), "semesters": semesters}


class CatalogLoader:
    """
    Load catalog YAML files from a directory.

    The loaded Catalog is cached; call reload() after editing content.
    """

    def __init__(self, catalog_dir: Optional[Path] = None):
        """
        Initialize loader.

        Args:
            catalog_dir: Directory of *.yaml subject files
                (default: the bundled questionbank/content)
        """
        self.catalog_dir = Path(catalog_dir or DEFAULT_CATALOG_DIR)
        if not self.catalog_dir.is_dir():
            raise CatalogError(f"Catalog directory not found: {self.catalog_dir}")
        self._catalog: Optional[Catalog] = None

    def get_catalog(self) -> Catalog:
        if self._catalog is None:
            self._catalog = self.reload()
        return self._catalog

    def reload(self) -> Catalog:
        subjects = {}
        for path in sorted(self.catalog_dir.glob("*.yaml")):
            subject_id, subject = load_subject_file(path)
            if subject_id in subjects:
                raise CatalogError(f"Duplicate subject id '{subject_id}' in {path.name}")
            subjects[subject_id] = subject

        catalog = Catalog(subjects=subjects)
        counts = catalog.count_questions()
        logger.info(
            f"Loaded {len(subjects)} subjects ({sum(counts.values())} questions) "
            f"from {self.catalog_dir}"
        )
        self._catalog = catalog
        return catalog


def load_subject_file(path: Path) -> tuple[str, Subject]:
    """
    Parse and validate one subject file.

    Returns:
        Tuple of (subject id, Subject). The id defaults to the file stem.

    Raises:
        CatalogError: If the YAML is unreadable or fails validation
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Could not read {path.name}: {e}") from e

    if not isinstance(raw, dict):
        raise CatalogError(f"{path.name}: expected a mapping at the top level")

    subject_id = str(raw.get("id") or path.stem)
    try:
        data = _normalize_subject(raw)
    except (AttributeError, TypeError) as e:
        raise CatalogError(f"{path.name}: malformed catalog structure: {e}") from e
    if not data["name"]:
        data["name"] = subject_id.capitalize()

    try:
        return subject_id, Subject.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"{path.name}: invalid catalog content\n{e}") from e


def load_catalog(catalog_dir: Optional[Path] = None) -> Catalog:
    """Load the catalog from a directory (default: bundled content)."""
    return CatalogLoader(catalog_dir).get_catalog()
