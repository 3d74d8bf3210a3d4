"""Tests for quiz HTML rendering."""

from questionbank.schemas import GradeResult, ScoreSummary, TrueFalseQuestion, Verdict
from questionbank.viewer import (
    answer_choices,
    question_kind_label,
    render_feedback,
    render_question_card,
    render_quiz_score,
)

from conftest import mc, short, tf


class TestAnswerChoices:
    def test_multiple_choice_values_are_indices(self):
        assert answer_choices(mc(1, options=3)) == [
            ("0", "Option 0"), ("1", "Option 1"), ("2", "Option 2"),
        ]

    def test_true_false(self):
        assert answer_choices(tf(1)) == [("true", "True"), ("false", "False")]

    def test_short_answer_has_no_choices(self):
        assert answer_choices(short(1)) == []


class TestRendering:
    def test_question_card_escapes_prompt(self):
        question = TrueFalseQuestion(prompt="Is <b> bold?", correct_answer=True)
        html = render_question_card(question, 2, 5)
        assert "Question 2 of 5" in html
        assert "&lt;b&gt;" in html
        assert "<b>" not in html

    def test_correct_feedback(self):
        result = GradeResult(verdict=Verdict.CORRECT, feedback="Because.", raw_answer="0")
        html = render_feedback(result, mc(1))
        assert "feedback correct" in html
        assert "Correct!" in html
        assert "Because." in html

    def test_incorrect_multiple_choice_shows_right_option(self):
        result = GradeResult(verdict=Verdict.INCORRECT, feedback="Nope.", raw_answer="0")
        html = render_feedback(result, mc(1, correct=2))
        assert "Incorrect." in html
        assert "Correct answer: Option 2" in html

    def test_ungraded_feedback(self):
        result = GradeResult(verdict=Verdict.UNGRADED, feedback="Sample answer 1", raw_answer="mine")
        html = render_feedback(result, short(1))
        assert "Sample Answer:" in html
        assert "Compare your answer" in html

    def test_score_panel(self):
        summary = ScoreSummary(correct=3, incorrect=1, total=4, percent=75, seconds_spent=65)
        html = render_quiz_score(summary)
        assert "75%" in html
        assert "3 of 4 correct" in html
        assert "1:05" in html

    def test_kind_labels(self):
        assert question_kind_label(mc(1)) == "Multiple choice"
        assert question_kind_label(tf(1)) == "True / False"
        assert question_kind_label(short(1)) == "Short answer"
