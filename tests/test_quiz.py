"""
Tests for skill quizzes.
"""

import pytest

from inclusive_jobs.learning.quiz import QuizLevel, build_quiz, question_bank


class TestQuestionBanks:
    """Bank selection by skill name."""

    def test_web_skills_share_bank(self):
        assert question_bank("Web Development") is question_bank("JavaScript")

    def test_design_bank(self):
        assert question_bank("Graphic Design")[2].prompt == "Which format is vector?"

    def test_seo_bank(self):
        assert question_bank("Digital Marketing")[0].prompt == "What does SEO stand for?"

    def test_generic_bank_mentions_skill(self):
        bank = question_bank("Accounting")

        assert len(bank) == 4
        assert "Accounting" in bank[0].prompt


class TestLevels:
    """Level parsing and rules."""

    @pytest.mark.parametrize("name,level", [
        ("beginner", QuizLevel.BEGINNER),
        ("basic", QuizLevel.BEGINNER),
        (" Intermediate ", QuizLevel.INTERMEDIATE),
        ("expert", QuizLevel.EXPERT),
    ])
    def test_parse(self, name, level):
        assert QuizLevel.parse(name) is level

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            QuizLevel.parse("master")

    def test_points(self):
        assert [level.points for level in QuizLevel] == [15, 25, 35]


class TestQuiz:
    """Building and grading."""

    def test_beginner_takes_three_questions(self):
        quiz = build_quiz("Web Development", QuizLevel.BEGINNER)

        assert len(quiz.questions) == 3
        assert quiz.required_score == 2

    def test_expert_limited_by_bank_size(self):
        quiz = build_quiz("SEO", QuizLevel.EXPERT)

        assert len(quiz.questions) == 6
        assert quiz.required_score == 5

    def test_all_correct_passes(self):
        quiz = build_quiz("Web Development")
        answers = {i: q.correct for i, q in enumerate(quiz.questions)}

        outcome = quiz.grade(answers)

        assert outcome.score == 3
        assert outcome.passed

    def test_unanswered_counts_wrong(self):
        quiz = build_quiz("Web Development")
        outcome = quiz.grade({0: quiz.questions[0].correct})

        assert outcome.score == 1
        assert not outcome.passed

    def test_intermediate_threshold(self):
        quiz = build_quiz("Typing", QuizLevel.INTERMEDIATE)
        answers = {i: q.correct for i, q in enumerate(quiz.questions)}
        answers[0] = None

        outcome = quiz.grade(answers)

        assert outcome.total == 4
        assert outcome.required == 3
        assert outcome.passed
