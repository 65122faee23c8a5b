"""
Skills learning for Inclusive Jobs.

Modules:
    progress     - Persisted points, completions, quiz results and badges
    quiz         - Level quizzes per skill
    typing_test  - Timed typing test with WPM and accuracy
    resources    - Curated links, selected skills and point awards

Example:
    from inclusive_jobs.learning import ProgressTracker, ResourcesHub

    tracker = ProgressTracker(storage)
    hub = ResourcesHub(tracker, storage)
    hub.record_quiz_pass("SEO", "beginner")   # +15 pts
"""

from inclusive_jobs.learning.progress import (
    Badge,
    LearningState,
    ProgressTracker,
    QuizResult,
    SkillProgress,
    ThresholdProgress,
    badge_for_points,
    next_threshold,
)
from inclusive_jobs.learning.quiz import Quiz, QuizLevel, QuizOutcome, QuizQuestion, build_quiz
from inclusive_jobs.learning.resources import (
    ALL_SKILLS,
    ResourceItem,
    ResourceLinks,
    ResourcesHub,
    resource_links,
)
from inclusive_jobs.learning.typing_test import (
    TypingLevel,
    TypingStats,
    TypingTest,
    compute_stats,
)

__all__ = [
    # Progress
    "Badge",
    "LearningState",
    "ProgressTracker",
    "QuizResult",
    "SkillProgress",
    "ThresholdProgress",
    "badge_for_points",
    "next_threshold",
    # Quizzes
    "Quiz",
    "QuizLevel",
    "QuizOutcome",
    "QuizQuestion",
    "build_quiz",
    # Typing
    "TypingLevel",
    "TypingStats",
    "TypingTest",
    "compute_stats",
    # Resources
    "ALL_SKILLS",
    "ResourceItem",
    "ResourceLinks",
    "ResourcesHub",
    "resource_links",
]
