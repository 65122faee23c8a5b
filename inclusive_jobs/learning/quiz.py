"""
Skill Quizzes - Short multiple-choice quizzes per skill and level.

Question banks are picked by matching the skill name against a few
categories; each level takes a prefix of the bank and has its own pass
ratio and point award.

Example:
    quiz = build_quiz("Web Development", QuizLevel.BEGINNER)
    outcome = quiz.grade({0: 1, 1: 1, 2: 1})
    outcome.passed  # True
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional


@dataclass(frozen=True)
class QuizQuestion:
    """One question and the index of its correct option."""
    prompt: str
    options: tuple[str, ...]
    correct: int


@dataclass(frozen=True)
class LevelSpec:
    """Per-level quiz rules.

    Attributes:
        quiz_id: Id the result is recorded under
        label: Display name
        question_count: How many questions from the bank
        pass_ratio: Share of correct answers needed
        points: Points awarded on the first pass
    """
    quiz_id: str
    label: str
    question_count: int
    pass_ratio: float
    points: int


class QuizLevel(Enum):
    """Quiz difficulty."""
    BEGINNER = LevelSpec("basic", "Beginner", 3, 0.66, 15)
    INTERMEDIATE = LevelSpec("intermediate", "Intermediate", 5, 0.7, 25)
    EXPERT = LevelSpec("expert", "Expert", 7, 0.8, 35)

    @property
    def quiz_id(self) -> str:
        return self.value.quiz_id

    @property
    def points(self) -> int:
        return self.value.points

    @classmethod
    def parse(cls, name: str) -> "QuizLevel":
        """Look a level up by name or quiz id ("beginner", "basic", ...).

        Raises:
            ValueError: If no level matches
        """
        key = name.strip().lower()
        for level in cls:
            if key in (level.name.lower(), level.value.quiz_id):
                return level
        raise ValueError(
            f"Unknown quiz level '{name}'. "
            f"Expected one of: {', '.join(level.name.lower() for level in cls)}"
        )


def _q(prompt: str, options: tuple[str, ...], correct: int) -> QuizQuestion:
    return QuizQuestion(prompt, options, correct)


_WEB_BANK = (
    _q("What does HTML provide?", ("Styling", "Structure", "Database"), 1),
    _q("Which CSS property changes text color?", ("font-style", "color", "display"), 1),
    _q("Where should alt text be placed?", ("<video>", "<img>", "<div>"), 1),
    _q("What does aria-label help with?", ("Accessibility", "Fonts", "Caching"), 0),
    _q("CSS Flexbox main axis is controlled by?", ("justify-content", "align-items", "z-index"), 0),
    _q("Semantic tag for navigation?", ("<div>", "<nav>", "<span>"), 1),
)

_SEO_BANK = (
    _q("What does SEO stand for?",
       ("Search Engine Optimization", "Social Engagement Outreach", "Site Email Output"), 0),
    _q("Which is a ranking factor?", ("Keyword stuffing", "Helpful content", "Hidden text"), 1),
    _q("What is meta description?", ("A page summary", "A CSS file", "A backlink"), 0),
    _q("Which helps accessibility & SEO?", ("Descriptive alt text", "Invisible text", "Link farms"), 0),
    _q("Core web vital?", ("LCP", "FTP", "CRT"), 0),
    _q("Robots.txt controls?", ("Crawling", "CSS colors", "Screen size"), 0),
)

_DESIGN_BANK = (
    _q("What improves readability?", ("Low contrast", "Good hierarchy", "Tiny text"), 1),
    _q("What is a wireframe?", ("High-fidelity design", "Basic layout", "Code snippet"), 1),
    _q("Which format is vector?", ("SVG", "JPG", "PNG"), 0),
    _q("Which grid aids layout?", ("8pt grid", "Random", "No grid"), 0),
    _q("What is spacing between letters?", ("Kerning", "Leading", "Tracking"), 2),
)

_TYPING_BANK = (
    _q("Which fingers rest on home row keys?", ("Thumbs only", "Index to pinky", "No fixed position"), 1),
    _q("What helps speed?", ("Looking at keyboard", "Proper posture", "Randomly pressing keys"), 1),
    _q("Best measure of typing skill?", ("Words per minute & accuracy", "Total keys", "Keyboard color"), 0),
    _q("Which is a home row key?", ("F", "P", ";"), 0),
)

# First matching pattern wins
_CATEGORIES = (
    (re.compile(r"web|frontend|html|css|javascript|ui|ux|development"), _WEB_BANK),
    (re.compile(r"seo|marketing|digital|social"), _SEO_BANK),
    (re.compile(r"graphic|design|figma|ui"), _DESIGN_BANK),
    (re.compile(r"typing"), _TYPING_BANK),
)


def _generic_bank(skill: str) -> tuple[QuizQuestion, ...]:
    return (
        _q(f"What is {skill} mainly about?",
           ("Time travel", "Core concepts and practice", "Only memorization"), 1),
        _q(f"How to begin learning {skill}?",
           ("Ignore basics", "Follow beginner guide & practice", "Buy expensive gear first"), 1),
        _q(f"Best way to progress in {skill}?",
           ("Consistent practice", "Never get feedback", "Avoid projects"), 0),
        _q("What helps accessibility?", ("Meaningful labels", "Hidden controls", "Tiny text"), 0),
    )


def question_bank(skill: str) -> tuple[QuizQuestion, ...]:
    """All questions available for a skill."""
    name = skill.lower()
    for pattern, bank in _CATEGORIES:
        if pattern.search(name):
            return bank
    return _generic_bank(skill)


@dataclass(frozen=True)
class QuizOutcome:
    """A graded quiz."""
    score: int
    total: int
    required: int

    @property
    def passed(self) -> bool:
        return self.score >= self.required


@dataclass(frozen=True)
class Quiz:
    """The questions for one skill at one level."""
    skill: str
    level: QuizLevel
    questions: tuple[QuizQuestion, ...]

    @property
    def required_score(self) -> int:
        return math.ceil(len(self.questions) * self.level.value.pass_ratio)

    def grade(self, answers: Mapping[int, Optional[int]]) -> QuizOutcome:
        """Score answers given as question index -> chosen option index.

        Unanswered questions count as wrong.
        """
        score = sum(
            1 for i, question in enumerate(self.questions)
            if answers.get(i) == question.correct
        )
        return QuizOutcome(score=score, total=len(self.questions), required=self.required_score)


def build_quiz(skill: str, level: QuizLevel = QuizLevel.BEGINNER) -> Quiz:
    """Questions for a skill at a level (a prefix of the skill's bank)."""
    bank = question_bank(skill)
    return Quiz(skill=skill, level=level, questions=bank[: level.value.question_count])
