"""Unit tests for answer grading."""

from types import SimpleNamespace

import pytest

from quizserver.db.models import QuestionTypeEnum
from quizserver.services.grading import Evaluation, evaluate, grade_answer


def _question(question_type, correct_answer, marks: int = 1):
    return SimpleNamespace(
        question_type=question_type, correct_answer=correct_answer, marks=marks
    )


# ── Choice questions ──────────────────────────────────────────────────────────


class TestChoiceQuestions:
    def test_mcq_case_insensitive_awards_marks(self):
        q = _question(QuestionTypeEnum.MCQ, "B", marks=2)
        assert evaluate(q, "b") == Evaluation(is_correct=True, marks_awarded=2)

    def test_mcq_wrong_option(self):
        q = _question(QuestionTypeEnum.MCQ, "B", marks=2)
        assert evaluate(q, "C") == Evaluation(is_correct=False, marks_awarded=0)

    def test_mcq_trims_both_sides(self):
        q = _question(QuestionTypeEnum.MCQ, "  Paris ")
        assert evaluate(q, " paris\n").is_correct

    def test_true_false_accepts_boolean(self):
        q = _question(QuestionTypeEnum.TRUE_FALSE, "True")
        assert evaluate(q, True).is_correct
        assert not evaluate(q, False).is_correct

    def test_true_false_boolean_correct_answer(self):
        q = _question(QuestionTypeEnum.TRUE_FALSE, False)
        assert evaluate(q, "false").is_correct

    def test_choice_compares_string_form_of_numbers(self):
        q = _question(QuestionTypeEnum.MCQ, "2")
        assert evaluate(q, 2).is_correct
        assert evaluate(q, 2.0).is_correct

    def test_choice_list_answer_uses_joined_form(self):
        q = _question(QuestionTypeEnum.MCQ, ["a", "b"])
        assert evaluate(q, "A,B").is_correct

    def test_type_given_as_plain_string(self):
        q = _question("mcq", "B")
        assert evaluate(q, "b").is_correct


# ── Text questions ────────────────────────────────────────────────────────────


class TestTextQuestions:
    @pytest.mark.parametrize(
        "question_type", [QuestionTypeEnum.FILL_IN_BLANK, QuestionTypeEnum.IMAGE]
    )
    def test_trimmed_case_insensitive_match(self, question_type):
        q = _question(question_type, "Paris", marks=3)
        assert evaluate(q, " Paris ") == evaluate(q, "paris")
        assert evaluate(q, "PARIS") == Evaluation(is_correct=True, marks_awarded=3)

    def test_non_text_answer_is_not_coerced(self):
        q = _question(QuestionTypeEnum.FILL_IN_BLANK, "42")
        assert evaluate(q, 42) == Evaluation(is_correct=False, marks_awarded=0)

    def test_number_against_word(self):
        q = _question(QuestionTypeEnum.FILL_IN_BLANK, "Paris")
        assert evaluate(q, 42) == Evaluation(is_correct=False, marks_awarded=0)

    def test_non_text_correct_answer_never_matches(self):
        q = _question(QuestionTypeEnum.IMAGE, ["cat"])
        assert not evaluate(q, "cat").is_correct

    def test_inner_whitespace_is_significant(self):
        q = _question(QuestionTypeEnum.FILL_IN_BLANK, "New York")
        assert not evaluate(q, "NewYork").is_correct


# ── Degenerate input ──────────────────────────────────────────────────────────


class TestDegenerateInput:
    def test_missing_question(self):
        assert evaluate(None, "A") == Evaluation(is_correct=False, marks_awarded=0)

    def test_none_answer(self):
        q = _question(QuestionTypeEnum.MCQ, "A", marks=5)
        assert evaluate(q, None) == Evaluation(is_correct=False, marks_awarded=0)

    def test_missing_correct_answer(self):
        q = _question(QuestionTypeEnum.MCQ, None)
        assert evaluate(q, "A") == Evaluation(is_correct=False, marks_awarded=0)

    def test_unknown_question_type(self):
        q = _question("essay", "A")
        assert evaluate(q, "A") == Evaluation(is_correct=False, marks_awarded=0)

    def test_grade_answer_direct(self):
        assert grade_answer("tf", "TRUE ", True)
        assert not grade_answer("fitb", 1, "1")


def test_every_question_type_is_gradable():
    for question_type in QuestionTypeEnum:
        q = _question(question_type, "yes")
        assert evaluate(q, "YES").is_correct, question_type


def test_evaluate_is_pure():
    q = _question(QuestionTypeEnum.MCQ, "B", marks=2)
    results = {evaluate(q, " b ") for _ in range(5)}
    assert results == {Evaluation(is_correct=True, marks_awarded=2)}
    assert q.correct_answer == "B"
