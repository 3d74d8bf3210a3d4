"""
Grader - Evaluate a submitted answer against a question.

Raw answers arrive as strings from the presentation layer:
- multiple-choice: the option index ("0", "1", ...)
- true-false: "true" or "false"
- short-answer: free text, never machine-graded
"""

import logging
from typing import Optional

from questionbank.schemas import (
    GradeResult,
    MultipleChoiceQuestion,
    Question,
    ShortAnswerQuestion,
    TrueFalseQuestion,
    Verdict,
)

from .errors import NoAnswerProvided


logger = logging.getLogger(__name__)


def _parse_index(raw_answer: str) -> Optional[int]:
    text = raw_answer.strip()
    if not text.isdecimal():
        return None
    try:
        return int(text)
    except ValueError:
        # Beyond the int conversion digit limit
        return None


def grade(question: Question, raw_answer: Optional[str]) -> GradeResult:
    """
    Grade one answer.

    Raises:
        NoAnswerProvided: If the answer is missing or blank; nothing is
            graded and the question stays current
    """
    if raw_answer is None or not str(raw_answer).strip():
        raise NoAnswerProvided()
    raw_answer = str(raw_answer)

    if isinstance(question, ShortAnswerQuestion):
        return GradeResult(
            verdict=Verdict.UNGRADED,
            feedback=question.sample_answer,
            raw_answer=raw_answer.strip(),
        )

    if isinstance(question, MultipleChoiceQuestion):
        correct = _parse_index(raw_answer) == question.correct_answer
    elif isinstance(question, TrueFalseQuestion):
        # case-sensitive token comparison
        correct = raw_answer.strip() == str(question.correct_answer).lower()
    else:
        raise TypeError(f"Unsupported question kind: {question.kind}")

    verdict = Verdict.CORRECT if correct else Verdict.INCORRECT
    logger.debug(f"Graded {question.kind} answer {raw_answer!r}: {verdict.value}")
    return GradeResult(verdict=verdict, feedback=question.explanation, raw_answer=raw_answer.strip())
