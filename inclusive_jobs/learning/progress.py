"""
Learning Progress - Per-skill points, completions and quiz results.

The tracker keeps one persisted ``LearningState`` and tells every
subscribed view when it changes, so badges and summaries rendered in
different places never disagree.

Invariants:
    - total_points always equals the sum of every skill's points
    - a quiz's ``passed`` flag never goes back to False
    - a quiz's ``attempts`` counter only grows

Example:
    tracker = ProgressTracker(storage)
    tracker.subscribe(lambda state: print(state.total_points))

    tracker.add_points("Web Development", 15)          # prints 15
    tracker.mark_quiz_passed("Web Development", "basic", True)
    tracker.highest_level("Web Development")           # Badge.BEGINNER
"""

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from inclusive_jobs.monitoring.logging import get_logger
from inclusive_jobs.storage import LEARNING_STATE_KEY, KeyValueStorage, StorageEvent

logger = logging.getLogger(__name__)


class Badge(Enum):
    """Coarse skill level derived from points."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    EXPERT = "Expert"


# (minimum points, badge), highest first
BADGE_THRESHOLDS: tuple[tuple[int, Badge], ...] = (
    (120, Badge.EXPERT),
    (60, Badge.INTERMEDIATE),
    (20, Badge.BEGINNER),
)

# Quiz id -> badge, highest level first, per track
QUIZ_LEVELS = (
    ("expert", Badge.EXPERT),
    ("intermediate", Badge.INTERMEDIATE),
    ("basic", Badge.BEGINNER),
)
TYPING_LEVELS = (
    ("typing-expert", Badge.EXPERT),
    ("typing-intermediate", Badge.INTERMEDIATE),
    ("typing-beginner", Badge.BEGINNER),
)


def badge_for_points(points: int) -> Optional[Badge]:
    """Badge earned by a point total, or None below the first threshold."""
    for minimum, badge in BADGE_THRESHOLDS:
        if points >= minimum:
            return badge
    return None


@dataclass(frozen=True)
class ThresholdProgress:
    """Progress toward the next badge threshold.

    Attributes:
        current: Points so far
        next: The threshold being approached (the top one once passed)
        percent: 0-100, rounded
    """
    current: int
    next: int
    percent: int


def next_threshold(points: int) -> ThresholdProgress:
    """Progress toward the next of the 20/60/120 thresholds."""
    thresholds = sorted(minimum for minimum, _ in BADGE_THRESHOLDS)
    for threshold in thresholds:
        if points < threshold:
            percent = min(100, int(points / threshold * 100 + 0.5))
            return ThresholdProgress(points, threshold, percent)
    return ThresholdProgress(points, thresholds[-1], 100)


@dataclass
class QuizResult:
    """Outcome history of one quiz or typing test.

    Attributes:
        passed: Whether any attempt passed
        attempts: Number of recorded attempts
        last_attempt: Epoch seconds of the latest attempt
    """
    passed: bool = False
    attempts: int = 0
    last_attempt: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "attempts": self.attempts,
            "last_attempt": self.last_attempt,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuizResult":
        return cls(
            passed=bool(data.get("passed", False)),
            attempts=max(0, int(data.get("attempts", 0))),
            last_attempt=float(data.get("last_attempt", 0.0)),
        )


@dataclass
class SkillProgress:
    """Progress within one skill."""
    points: int = 0
    completed_resources: dict[str, bool] = field(default_factory=dict)
    quiz_results: dict[str, QuizResult] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": self.points,
            "completed_resources": dict(self.completed_resources),
            "quiz_results": {k: v.to_dict() for k, v in self.quiz_results.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SkillProgress":
        return cls(
            points=max(0, int(data.get("points", 0))),
            completed_resources={
                str(url): bool(done)
                for url, done in (data.get("completed_resources") or {}).items()
            },
            quiz_results={
                str(quiz_id): QuizResult.from_dict(result)
                for quiz_id, result in (data.get("quiz_results") or {}).items()
            },
        )


@dataclass
class LearningState:
    """All learning progress.

    ``total_points`` is derived from the skills on load, so a state read
    back from storage always satisfies the sum invariant.
    """
    total_points: int = 0
    skills: dict[str, SkillProgress] = field(default_factory=dict)

    def skill(self, name: str) -> SkillProgress:
        """The skill's progress, created at zero points if absent."""
        if name not in self.skills:
            self.skills[name] = SkillProgress()
        return self.skills[name]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_points": self.total_points,
            "skills": {name: sp.to_dict() for name, sp in self.skills.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LearningState":
        skills = {
            str(name): SkillProgress.from_dict(sp)
            for name, sp in (data.get("skills") or {}).items()
        }
        return cls(
            total_points=sum(sp.points for sp in skills.values()),
            skills=skills,
        )


LearningListener = Callable[[LearningState], None]


def parse_state(raw: Optional[str]) -> LearningState:
    """Parse a persisted state; absent or unusable data is the empty state."""
    if raw is None:
        return LearningState()
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("learning state is not an object")
        return LearningState.from_dict(data)
    except (ValueError, TypeError, AttributeError, OverflowError) as e:
        logger.warning(f"Ignoring unreadable learning state: {e}")
        return LearningState()


class ProgressTracker:
    """Persisted learning progress with change broadcast.

    Every mutation re-reads the stored state, applies the change, writes
    it back and notifies all subscribers with the new state. A change to
    the stored state made by another writer (another view sharing the
    same storage) is also re-broadcast.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the tracker.

        Args:
            storage: Where the state is persisted
            clock: Returns the current time in epoch seconds
        """
        self._storage = storage
        self._clock = clock
        self._lock = threading.RLock()
        self._listeners: list[LearningListener] = []
        self._unsubscribe_storage = storage.subscribe(self._on_storage_event)

    def close(self) -> None:
        """Stop following external storage changes."""
        self._unsubscribe_storage()

    # State

    def get_state(self) -> LearningState:
        """Current persisted state (empty if absent or unreadable)."""
        return parse_state(self._storage.get_item(LEARNING_STATE_KEY))

    def _save(self, state: LearningState) -> None:
        self._storage.set_item(LEARNING_STATE_KEY, json.dumps(state.to_dict()))
        self._broadcast(state)

    def _broadcast(self, state: LearningState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Learning progress listener failed")

    def subscribe(self, listener: LearningListener) -> Callable[[], None]:
        """Receive the new state after every change.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _on_storage_event(self, event: StorageEvent) -> None:
        if event.key in (LEARNING_STATE_KEY, None):
            self._broadcast(parse_state(event.new_value))

    # Mutations

    def add_points(self, skill: str, amount: int) -> LearningState:
        """Add points to a skill and to the total.

        Raises:
            TypeError: If ``amount`` is not an integer
            ValueError: If ``amount`` is negative
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise TypeError(f"Points must be an integer, got {amount!r}")
        if amount < 0:
            raise ValueError(f"Cannot award negative points ({amount})")

        with self._lock:
            state = self.get_state()
            progress = state.skill(skill)
            progress.points += amount
            state.total_points += amount
            self._save(state)

        get_logger().points_awarded(skill, amount, total=state.total_points)
        return state

    def set_resource_completed(self, skill: str, resource_url: str, done: bool) -> LearningState:
        """Flag a resource as done or not. Never awards points."""
        with self._lock:
            state = self.get_state()
            state.skill(skill).completed_resources[resource_url] = bool(done)
            self._save(state)
        return state

    def mark_quiz_passed(self, skill: str, quiz_id: str, passed: bool) -> QuizResult:
        """Record a quiz or typing test attempt.

        The attempt counter and timestamp always update; ``passed`` only
        ever moves from False to True.
        """
        with self._lock:
            state = self.get_state()
            results = state.skill(skill).quiz_results
            result = results.get(quiz_id) or QuizResult()
            result.attempts += 1
            result.last_attempt = self._clock()
            result.passed = result.passed or bool(passed)
            results[quiz_id] = result
            self._save(state)

        get_logger().quiz_attempt(skill, quiz_id, passed=result.passed, attempts=result.attempts)
        return result

    def reset_all(self) -> LearningState:
        """Clear every bit of progress and broadcast the empty state."""
        with self._lock:
            self._storage.remove_item(LEARNING_STATE_KEY)
            state = self.get_state()
            self._save(state)

        get_logger().progress_reset()
        return state

    # Queries

    def is_completed(self, skill: str, resource_url: str) -> bool:
        progress = self.get_state().skills.get(skill)
        return bool(progress and progress.completed_resources.get(resource_url))

    def quiz_passed(self, skill: str, quiz_id: str) -> bool:
        progress = self.get_state().skills.get(skill)
        if progress is None:
            return False
        result = progress.quiz_results.get(quiz_id)
        return bool(result and result.passed)

    def highest_level(self, skill: str) -> Optional[Badge]:
        """Display level for a skill.

        The highest explicitly passed level wins (typing tests for the
        Typing skill, quizzes otherwise); failing that, the points badge.
        """
        levels = TYPING_LEVELS if skill.lower() == "typing" else QUIZ_LEVELS
        for quiz_id, badge in levels:
            if self.quiz_passed(skill, quiz_id):
                return badge

        progress = self.get_state().skills.get(skill)
        return badge_for_points(progress.points if progress else 0)

    def export_json(self) -> str:
        """The full state as indented JSON."""
        return json.dumps(self.get_state().to_dict(), indent=2, sort_keys=True)
