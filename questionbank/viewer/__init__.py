"""
QuestionBank Viewer - Rendering components for quiz display.

This module provides:
- Question card and answer choices
- Grading feedback
- Final score panel
"""

from .quiz import (
    get_quiz_css,
    answer_choices,
    render_question_card,
    render_feedback,
    render_quiz_score,
    question_kind_label,
    FEEDBACK_TITLES,
)

__all__ = [
    "get_quiz_css",
    "answer_choices",
    "render_question_card",
    "render_feedback",
    "render_quiz_score",
    "question_kind_label",
    "FEEDBACK_TITLES",
]
