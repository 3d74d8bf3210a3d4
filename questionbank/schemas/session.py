"""
Session schemas for QuestionBank.

Defines Pydantic models for quiz attempt state:
- Session: the single live attempt (mutable)
- Snapshot: its durable JSON form
- ScoreSummary: the results panel shown on completion
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .catalog import Selection
from .question import Question


class QuizPhase(str, Enum):
    NO_SELECTION = "no_selection"
    SELECTION_INCOMPLETE = "selection_incomplete"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class Session(BaseModel):
    """
    One quiz attempt for one lesson.

    working_questions is a shuffled copy of the catalog list; position
    equal to its length means the attempt is complete. answered marks
    that the current question has already been graded.
    """
    selection: Selection
    working_questions: list[Question] = Field(..., min_length=1)
    position: int = Field(default=0, ge=0)
    score: int = Field(default=0, ge=0)
    started_at: datetime
    answered: bool = False

    @model_validator(mode="after")
    def counters_in_range(self):
        total = len(self.working_questions)
        if self.position > total:
            raise ValueError(f"position {self.position} exceeds {total} questions")
        if self.score > total:
            raise ValueError(f"score {self.score} exceeds {total} questions")
        return self

    @property
    def total(self) -> int:
        return len(self.working_questions)

    @property
    def is_complete(self) -> bool:
        return self.position >= self.total

    @property
    def phase(self) -> QuizPhase:
        return QuizPhase.COMPLETE if self.is_complete else QuizPhase.IN_PROGRESS

    @property
    def current_question(self) -> Optional[Question]:
        if self.is_complete:
            return None
        return self.working_questions[self.position]


@dataclass
class AdvanceResult:
    """Result of moving to the next question."""
    phase: QuizPhase
    question: Optional[Question] = None


# -----------------------------------------------------------------------------
# Snapshot (persisted form)
# -----------------------------------------------------------------------------

class Snapshot(BaseModel):
    subject: str
    semester: str
    unit: str
    lesson: str
    question_index: int = Field(..., ge=0)
    score: int = Field(..., ge=0)
    start_time: str  # ISO-8601
    answered: bool = False
    questions: list[Question] = Field(..., min_length=1)

    @field_validator("start_time")
    @classmethod
    def start_time_iso(cls, v):
        parsed = datetime.fromisoformat(v)
        if parsed.utcoffset() is not None:
            raise ValueError("start_time must be a local time without a UTC offset")
        return v

    @model_validator(mode="after")
    def counters_in_range(self):
        total = len(self.questions)
        if self.question_index > total or self.score > total:
            raise ValueError("question_index and score must not exceed the question count")
        return self

    @property
    def selection(self) -> Selection:
        return Selection(
            subject=self.subject,
            semester=self.semester,
            unit=self.unit,
            lesson=self.lesson,
        )

    @classmethod
    def from_session(cls, session: Session) -> "Snapshot":
        return cls(
            subject=session.selection.subject,
            semester=session.selection.semester,
            unit=session.selection.unit,
            lesson=session.selection.lesson,
            question_index=session.position,
            score=session.score,
            start_time=session.started_at.isoformat(),
            answered=session.answered,
            questions=list(session.working_questions),
        )

    def to_session(self) -> Session:
        return Session(
            selection=self.selection,
            working_questions=list(self.questions),
            position=self.question_index,
            score=self.score,
            started_at=datetime.fromisoformat(self.start_time),
            answered=self.answered,
        )


# -----------------------------------------------------------------------------
# Results
# -----------------------------------------------------------------------------

class ScoreSummary(BaseModel):
    correct: int
    incorrect: int
    total: int
    percent: int
    seconds_spent: int

    @property
    def time_spent(self) -> str:
        """Elapsed time as m:ss."""
        minutes, seconds = divmod(self.seconds_spent, 60)
        return f"{minutes}:{seconds:02d}"

    @classmethod
    def from_session(cls, session: Session, finished_at: datetime) -> "ScoreSummary":
        """
        Summarize a finished attempt.

        Short-answer questions count toward the total but can never be
        correct, so they appear under incorrect, as in the results panel.
        """
        total = session.total
        # Halves round up
        percent = (200 * session.score + total) // (2 * total) if total else 0
        elapsed = max(0, int((finished_at - session.started_at).total_seconds()))
        return cls(
            correct=session.score,
            incorrect=total - session.score,
            total=total,
            percent=percent,
            seconds_spent=elapsed,
        )
