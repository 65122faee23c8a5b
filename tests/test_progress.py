"""
Tests for learning progress tracking.
"""

import json

import pytest

from inclusive_jobs.learning.progress import (
    Badge,
    LearningState,
    ProgressTracker,
    badge_for_points,
    next_threshold,
    parse_state,
)
from inclusive_jobs.storage import LEARNING_STATE_KEY, JSONFileStorage, MemoryStorage


@pytest.fixture
def tracker(storage):
    t = ProgressTracker(storage, clock=lambda: 1700000000.0)
    yield t
    t.close()


class TestPoints:
    """Point awards and the total."""

    def test_add_points(self, tracker):
        state = tracker.add_points("Web Development", 15)

        assert state.total_points == 15
        assert state.skills["Web Development"].points == 15

    def test_total_is_sum_of_skills(self, tracker):
        tracker.add_points("Web Development", 15)
        tracker.add_points("SEO", 25)
        tracker.add_points("Web Development", 5)
        state = tracker.get_state()

        assert state.total_points == 45
        assert state.total_points == sum(s.points for s in state.skills.values())

    def test_zero_points_creates_skill(self, tracker):
        state = tracker.add_points("Design", 0)
        assert state.skills["Design"].points == 0

    def test_negative_rejected(self, tracker):
        with pytest.raises(ValueError):
            tracker.add_points("SEO", -5)
        assert tracker.get_state().total_points == 0

    def test_non_integer_rejected(self, tracker):
        with pytest.raises(TypeError):
            tracker.add_points("SEO", 2.5)
        with pytest.raises(TypeError):
            tracker.add_points("SEO", True)

    def test_persisted_as_json(self, tracker, storage):
        tracker.add_points("SEO", 10)
        data = json.loads(storage.get_item(LEARNING_STATE_KEY))

        assert data["total_points"] == 10
        assert data["skills"]["SEO"]["points"] == 10

    def test_award_logged(self, tracker, quiet_structured_logger):
        tracker.add_points("SEO", 10)

        events = [json.loads(l)["event"] for l in quiet_structured_logger.getvalue().splitlines()]
        assert "points_awarded" in events


class TestResourcesAndQuizzes:
    """Completion flags and quiz results."""

    def test_resource_completion_awards_nothing(self, tracker):
        state = tracker.set_resource_completed("SEO", "https://example.com/seo", True)

        assert state.total_points == 0
        assert tracker.is_completed("SEO", "https://example.com/seo")

    def test_resource_uncompleted(self, tracker):
        tracker.set_resource_completed("SEO", "u", True)
        tracker.set_resource_completed("SEO", "u", False)

        assert not tracker.is_completed("SEO", "u")

    def test_quiz_attempts_counted(self, tracker):
        tracker.mark_quiz_passed("SEO", "basic", False)
        result = tracker.mark_quiz_passed("SEO", "basic", False)

        assert result.attempts == 2
        assert result.passed is False
        assert result.last_attempt == 1700000000.0

    def test_passed_never_reverts(self, tracker):
        tracker.mark_quiz_passed("SEO", "basic", True)
        result = tracker.mark_quiz_passed("SEO", "basic", False)

        assert result.passed is True
        assert result.attempts == 2
        assert tracker.quiz_passed("SEO", "basic")

    def test_quiz_passed_unknown(self, tracker):
        assert not tracker.quiz_passed("SEO", "expert")


class TestLevels:
    """Badges and highest level."""

    @pytest.mark.parametrize("points,badge", [
        (0, None),
        (19, None),
        (20, Badge.BEGINNER),
        (59, Badge.BEGINNER),
        (60, Badge.INTERMEDIATE),
        (119, Badge.INTERMEDIATE),
        (120, Badge.EXPERT),
        (500, Badge.EXPERT),
    ])
    def test_badge_for_points(self, points, badge):
        assert badge_for_points(points) is badge

    def test_badge_progression(self, tracker):
        tracker.add_points("Web Development", 19)
        assert tracker.highest_level("Web Development") is None

        tracker.add_points("Web Development", 1)
        assert tracker.highest_level("Web Development") is Badge.BEGINNER

        tracker.add_points("Web Development", 99)
        assert tracker.highest_level("Web Development") is Badge.INTERMEDIATE

        tracker.add_points("Web Development", 1)
        assert tracker.highest_level("Web Development") is Badge.EXPERT

    def test_passed_quiz_beats_points(self, tracker):
        tracker.add_points("SEO", 5)
        tracker.mark_quiz_passed("SEO", "intermediate", True)

        assert tracker.highest_level("SEO") is Badge.INTERMEDIATE

    def test_typing_uses_typing_track(self, tracker):
        tracker.mark_quiz_passed("Typing", "basic", True)
        assert tracker.highest_level("Typing") is None

        tracker.mark_quiz_passed("Typing", "typing-expert", True)
        assert tracker.highest_level("Typing") is Badge.EXPERT

    def test_unknown_skill(self, tracker):
        assert tracker.highest_level("Cooking") is None

    @pytest.mark.parametrize("points,expected", [
        (0, (0, 20, 0)),
        (10, (10, 20, 50)),
        (20, (20, 60, 33)),
        (45, (45, 60, 75)),
        (90, (90, 120, 75)),
        (119, (119, 120, 99)),
        (150, (150, 120, 100)),
    ])
    def test_next_threshold(self, points, expected):
        progress = next_threshold(points)
        assert (progress.current, progress.next, progress.percent) == expected


class TestBroadcast:
    """Subscribers and reset."""

    def test_subscribers_see_every_change(self, tracker):
        totals = []
        tracker.subscribe(lambda s: totals.append(s.total_points))

        tracker.add_points("SEO", 5)
        tracker.add_points("Design", 10)

        assert totals == [5, 15]

    def test_unsubscribe(self, tracker):
        totals = []
        unsubscribe = tracker.subscribe(lambda s: totals.append(s.total_points))
        unsubscribe()

        tracker.add_points("SEO", 5)

        assert totals == []

    def test_reset_broadcasts_empty_state(self, tracker, storage):
        tracker.add_points("SEO", 40)
        tracker.mark_quiz_passed("SEO", "basic", True)
        received = []
        tracker.subscribe(received.append)

        state = tracker.reset_all()

        assert state.total_points == 0
        assert state.skills == {}
        assert received[-1].total_points == 0
        assert not tracker.quiz_passed("SEO", "basic")

    def test_two_views_share_memory_storage(self, storage):
        """Trackers over one storage agree after each mutation."""
        a = ProgressTracker(storage)
        b = ProgressTracker(storage)

        a.add_points("SEO", 5)

        assert b.get_state().total_points == 5

    def test_external_write_rebroadcast(self, tmp_path):
        path = tmp_path / "storage.json"
        mine = JSONFileStorage(path)
        tracker = ProgressTracker(mine)
        received = []
        tracker.subscribe(received.append)

        ProgressTracker(JSONFileStorage(path)).add_points("Design", 30)
        mine.refresh()

        assert len(received) == 1
        assert received[0].skills["Design"].points == 30

    def test_unrelated_external_key_ignored(self, tmp_path):
        path = tmp_path / "storage.json"
        mine = JSONFileStorage(path)
        tracker = ProgressTracker(mine)
        received = []
        tracker.subscribe(received.append)

        JSONFileStorage(path).set_item("saved_jobs_ids", "[]")
        mine.refresh()

        assert received == []


class TestStateSerialization:
    """Parsing stored state."""

    def test_total_recomputed_on_load(self):
        raw = json.dumps({
            "total_points": 999,
            "skills": {"SEO": {"points": 10}, "Design": {"points": 5}},
        })
        assert parse_state(raw).total_points == 15

    @pytest.mark.parametrize("raw", [
        None,
        "",
        "{bad",
        "[]",
        '{"skills": {"SEO": 3}}',
        '{"skills": {"SEO": {"points": Infinity}}}',
        '{"skills": {"SEO": {"quiz_results": {"basic": {"attempts": -Infinity}}}}}',
    ])
    def test_unusable_state_is_empty(self, raw):
        assert parse_state(raw) == LearningState()

    def test_export_json(self, tracker):
        tracker.mark_quiz_passed("SEO", "basic", True)
        data = json.loads(tracker.export_json())

        assert data["skills"]["SEO"]["quiz_results"]["basic"]["passed"] is True

    def test_existing_state_loaded(self):
        storage = MemoryStorage({
            LEARNING_STATE_KEY: json.dumps({"skills": {"SEO": {"points": 60}}}),
        })
        assert ProgressTracker(storage).highest_level("SEO") is Badge.INTERMEDIATE

    def test_overflowing_stored_state_recovers(self):
        """Stored infinities read as empty state and the tracker keeps working."""
        storage = MemoryStorage({
            LEARNING_STATE_KEY: '{"skills": {"SEO": {"quiz_results": {"basic": {"attempts": Infinity}}}}}',
        })
        tracker = ProgressTracker(storage)

        assert tracker.get_state() == LearningState()
        assert tracker.add_points("SEO", 5).total_points == 5
        assert tracker.mark_quiz_passed("SEO", "basic", True).attempts == 1
