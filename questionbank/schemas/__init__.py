"""
QuestionBank Schemas - Pydantic models for the quiz application.

This module exports all schema classes for:
- Question: tagged union over the three question kinds, verdicts
- Catalog: subject/semester/unit/lesson tree and selection
- Session: live attempt, persisted snapshot, score summary
"""

# Question schemas
from .question import (
    QuestionKind,
    Verdict,
    MultipleChoiceQuestion,
    TrueFalseQuestion,
    ShortAnswerQuestion,
    Question,
    GradeResult,
)

# Catalog schemas
from .catalog import (
    SELECTION_FIELDS,
    Selection,
    Lesson,
    Unit,
    Semester,
    Subject,
    Catalog,
)

# Session schemas
from .session import (
    QuizPhase,
    Session,
    AdvanceResult,
    Snapshot,
    ScoreSummary,
)

__all__ = [
    # Question
    'QuestionKind',
    'Verdict',
    'MultipleChoiceQuestion',
    'TrueFalseQuestion',
    'ShortAnswerQuestion',
    'Question',
    'GradeResult',
    # Catalog
    'SELECTION_FIELDS',
    'Selection',
    'Lesson',
    'Unit',
    'Semester',
    'Subject',
    'Catalog',
    # Session
    'QuizPhase',
    'Session',
    'AdvanceResult',
    'Snapshot',
    'ScoreSummary',
]
