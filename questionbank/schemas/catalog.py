"""
Catalog schemas for QuestionBank.

Defines Pydantic models for the static question catalog:
- Subject -> Semester -> Unit -> Lesson -> questions
- Selection: the four-part key identifying one lesson

The catalog is read-only once loaded; validation happens at the
loading boundary (see questionbank.classroom.loader).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .question import Question


# -----------------------------------------------------------------------------
# Selection
# -----------------------------------------------------------------------------

SELECTION_FIELDS = ("subject", "semester", "unit", "lesson")


class Selection(BaseModel):
    """Cascading dropdown state: subject -> semester -> unit -> lesson."""
    model_config = ConfigDict(frozen=True)

    subject: str = ""
    semester: str = ""
    unit: str = ""
    lesson: str = ""

    @property
    def is_filled(self) -> bool:
        """All four fields are non-empty (resolution is checked by the catalog)."""
        return all(getattr(self, name) for name in SELECTION_FIELDS)

    def as_tuple(self) -> tuple[str, str, str, str]:
        return (self.subject, self.semester, self.unit, self.lesson)

    def __str__(self) -> str:
        return " / ".join(part for part in self.as_tuple() if part) or "<empty>"


# -----------------------------------------------------------------------------
# Catalog tree
# -----------------------------------------------------------------------------

class Lesson(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    questions: list[Question] = Field(..., min_length=1)


class Unit(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    lessons: dict[str, Lesson]


class Semester(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    units: dict[str, Unit]


class Subject(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    semesters: dict[str, Semester]


class Catalog(BaseModel):
    """Read-only question repository keyed by subject/semester/unit/lesson."""
    model_config = ConfigDict(frozen=True)

    subjects: dict[str, Subject] = {}

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_lesson(self, selection: Selection) -> Optional[Lesson]:
        """Resolve a selection to its lesson, or None if any key is missing."""
        if not selection.is_filled:
            return None
        subject = self.subjects.get(selection.subject)
        if subject is None:
            return None
        semester = subject.semesters.get(selection.semester)
        if semester is None:
            return None
        unit = semester.units.get(selection.unit)
        if unit is None:
            return None
        return unit.lessons.get(selection.lesson)

    def resolves(self, selection: Selection) -> bool:
        return self.get_lesson(selection) is not None

    def get_questions(self, selection: Selection) -> Optional[list[Question]]:
        lesson = self.get_lesson(selection)
        return list(lesson.questions) if lesson else None

    # -------------------------------------------------------------------------
    # Dropdown options as (key, display name) pairs
    # -------------------------------------------------------------------------

    def subject_options(self) -> list[tuple[str, str]]:
        return [(key, subject.name) for key, subject in self.subjects.items()]

    def semester_options(self, subject: str) -> list[tuple[str, str]]:
        entry = self.subjects.get(subject)
        if entry is None:
            return []
        return [(key, semester.name) for key, semester in entry.semesters.items()]

    def unit_options(self, subject: str, semester: str) -> list[tuple[str, str]]:
        entry = self.subjects.get(subject)
        semester_entry = entry.semesters.get(semester) if entry else None
        if semester_entry is None:
            return []
        return [(key, unit.name) for key, unit in semester_entry.units.items()]

    def lesson_options(self, subject: str, semester: str, unit: str) -> list[tuple[str, str]]:
        entry = self.subjects.get(subject)
        semester_entry = entry.semesters.get(semester) if entry else None
        unit_entry = semester_entry.units.get(unit) if semester_entry else None
        if unit_entry is None:
            return []
        return [(key, lesson.name) for key, lesson in unit_entry.lessons.items()]

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def count_questions(self) -> dict[str, int]:
        """Question count per subject."""
        counts = {}
        for key, subject in self.subjects.items():
            counts[key] = sum(
                len(lesson.questions)
                for semester in subject.semesters.values()
                for unit in semester.units.values()
                for lesson in unit.lessons.values()
            )
        return counts
