"""
Question schemas for QuestionBank.

Defines Pydantic models for the three question kinds:
- Multiple-choice (options + correct index)
- True/false (boolean answer)
- Short-answer (self-assessed against a sample answer)

Questions form a tagged union on ``kind`` so each kind carries only
the fields it needs.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class QuestionKind(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"


class Verdict(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNGRADED = "ungraded"


# -----------------------------------------------------------------------------
# Question kinds
# -----------------------------------------------------------------------------

class QuestionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    id: Optional[int] = None
    prompt: str = Field(..., min_length=1)


class MultipleChoiceQuestion(QuestionBase):
    kind: Literal["multiple-choice"] = "multiple-choice"
    options: list[str] = Field(..., min_length=2)
    correct_answer: int = Field(..., ge=0)
    explanation: str = ""

    @model_validator(mode="after")
    def correct_answer_in_range(self):
        if self.correct_answer >= len(self.options):
            raise ValueError(
                f"correct_answer {self.correct_answer} is out of range "
                f"for {len(self.options)} options"
            )
        return self


class TrueFalseQuestion(QuestionBase):
    kind: Literal["true-false"] = "true-false"
    correct_answer: bool
    explanation: str = ""


class ShortAnswerQuestion(QuestionBase):
    """Self-assessed question: the learner compares against sample_answer."""
    kind: Literal["short-answer"] = "short-answer"
    sample_answer: str = Field(..., min_length=1)
    explanation: str = ""


Question = Annotated[
    Union[MultipleChoiceQuestion, TrueFalseQuestion, ShortAnswerQuestion],
    Field(discriminator="kind"),
]


class GradeResult(BaseModel):
    """Outcome of grading one submitted answer."""
    verdict: Verdict
    feedback: str
    raw_answer: str

    @property
    def is_correct(self) -> bool:
        return self.verdict == Verdict.CORRECT
