"""Tests for answer grading."""

import pytest

from questionbank.classroom import NoAnswerProvided, grade
from questionbank.schemas import Verdict

from conftest import mc, short, tf


class TestMultipleChoice:
    def test_correct_index(self):
        result = grade(mc(1, correct=0), "0")
        assert result.verdict == Verdict.CORRECT
        assert result.feedback == "Explanation 1"

    def test_wrong_index(self):
        result = grade(mc(1, correct=0), "2")
        assert result.verdict == Verdict.INCORRECT
        assert result.feedback == "Explanation 1"

    def test_surrounding_whitespace(self):
        assert grade(mc(1, correct=1), " 1 ").verdict == Verdict.CORRECT

    @pytest.mark.parametrize("raw", ["one", "-1", "1.0", "0x1"])
    def test_non_index_is_incorrect(self, raw):
        assert grade(mc(1, correct=1), raw).verdict == Verdict.INCORRECT

    def test_oversized_index_is_incorrect(self):
        assert grade(mc(1, correct=1), "1" * 5000).verdict == Verdict.INCORRECT


class TestTrueFalse:
    def test_correct_true(self):
        assert grade(tf(1, True), "true").verdict == Verdict.CORRECT

    def test_correct_false(self):
        assert grade(tf(1, False), "false").verdict == Verdict.CORRECT

    def test_incorrect_keeps_explanation(self):
        question = tf(1, True)
        result = grade(question, "false")
        assert result.verdict == Verdict.INCORRECT
        assert result.feedback == question.explanation

    def test_case_sensitive(self):
        assert grade(tf(1, True), "True").verdict == Verdict.INCORRECT


class TestShortAnswer:
    def test_always_ungraded(self):
        question = short(1)
        result = grade(question, "My own explanation")
        assert result.verdict == Verdict.UNGRADED
        assert result.feedback == "Sample answer 1"

    def test_answer_trimmed(self):
        assert grade(short(1), "  text \n").raw_answer == "text"


class TestNoAnswer:
    @pytest.mark.parametrize("raw", [None, "", "   ", "\n"])
    def test_blank_answers(self, raw):
        for question in (mc(1), tf(2), short(3)):
            with pytest.raises(NoAnswerProvided):
                grade(question, raw)
