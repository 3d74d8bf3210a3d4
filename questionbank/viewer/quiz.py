"""
Quiz renderer - Question card, feedback and results display.

Provides:
- Answer choices for each question kind
- Question card rendering
- Feedback rendering per verdict
- Final score panel
"""

import html
from typing import Optional

from questionbank.schemas import (
    GradeResult,
    MultipleChoiceQuestion,
    Question,
    ScoreSummary,
    ShortAnswerQuestion,
    TrueFalseQuestion,
    Verdict,
)


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .question-card {
        background: #e3f2fd;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1em 0;
        border-left: 4px solid #1976D2;
    }
    .question-counter {
        font-weight: 600;
        color: #1565C0;
        font-size: 0.95em;
        margin-bottom: 0.5em;
    }
    .question-text {
        font-size: 1.1em;
        color: #333;
        line-height: 1.6;
    }
    .feedback {
        border-radius: 8px;
        padding: 0.8em 1em;
        margin-top: 1em;
        line-height: 1.6;
    }
    .feedback.correct {
        background: #e8f5e9;
        border-left: 4px solid #388E3C;
    }
    .feedback.incorrect {
        background: #ffebee;
        border-left: 4px solid #D32F2F;
    }
    .feedback.ungraded {
        background: #fff3e0;
        border-left: 4px solid #e65100;
    }
    .feedback-title {
        font-weight: 600;
        margin-bottom: 0.3em;
    }
    .quiz-score-box {
        background: #e8f5e9;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #388E3C;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    </style>
    """


def answer_choices(question: Question) -> list[tuple[str, str]]:
    """
    Choices to offer for a question as (raw answer value, label) pairs.

    Short-answer questions return an empty list (free text input).
    """
    if isinstance(question, MultipleChoiceQuestion):
        return [(str(index), option) for index, option in enumerate(question.options)]
    if isinstance(question, TrueFalseQuestion):
        return [("true", "True"), ("false", "False")]
    return []


def render_question_card(question: Question, number: int, total: int) -> str:
    """
    Render the question header and prompt.

    Args:
        question: Current question
        number: 1-based question number
        total: Number of questions in the session

    Returns:
        HTML string for the card
    """
    parts = ['<div class="question-card">']
    parts.append(f'<div class="question-counter">Question {number} of {total}</div>')
    parts.append(f'<p class="question-text">{html.escape(question.prompt)}</p>')
    parts.append('</div>')
    return ''.join(parts)


FEEDBACK_TITLES = {
    Verdict.CORRECT: "Correct!",
    Verdict.INCORRECT: "Incorrect.",
    Verdict.UNGRADED: "Sample Answer:",
}


def render_feedback(result: GradeResult, question: Optional[Question] = None) -> str:
    """Render grading feedback; short answers show the sample for self-comparison."""
    css_class = result.verdict.value
    parts = [f'<div class="feedback {css_class}">']
    parts.append(f'<div class="feedback-title">{FEEDBACK_TITLES[result.verdict]}</div>')
    if result.feedback:
        parts.append(f'<p>{html.escape(result.feedback)}</p>')
    if result.verdict == Verdict.UNGRADED:
        parts.append('<p>Compare your answer with the sample answer above.</p>')
    elif (
        result.verdict == Verdict.INCORRECT
        and isinstance(question, MultipleChoiceQuestion)
    ):
        right = question.options[question.correct_answer]
        parts.append(f'<p>Correct answer: {html.escape(right)}</p>')
    parts.append('</div>')
    return ''.join(parts)


def render_quiz_score(summary: ScoreSummary) -> str:
    """Render final score display."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{summary.percent}%</div>
        <div class="quiz-score-label">{summary.correct} of {summary.total} correct
        &middot; {summary.incorrect} incorrect &middot; time {summary.time_spent}</div>
    </div>
    """


def question_kind_label(question: Question) -> str:
    if isinstance(question, ShortAnswerQuestion):
        return "Short answer"
    if isinstance(question, TrueFalseQuestion):
        return "True / False"
    return "Multiple choice"
