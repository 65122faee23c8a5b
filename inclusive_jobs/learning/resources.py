"""
Resources Hub - Curated learning links, selected skills and awards.

The hub decides *whether* a learning event is worth points (only the
first completion of a resource, only the first pass of a quiz level) and
leaves the bookkeeping to the progress tracker.

Example:
    hub = ResourcesHub(tracker, storage)
    hub.set_selected("SEO", True)

    links = resource_links("SEO")
    hub.toggle_resource("SEO", links.videos[0].url, True)   # 5
    hub.toggle_resource("SEO", links.videos[0].url, True)   # 0, already done
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Sequence, Union
from urllib.parse import quote

from inclusive_jobs.learning.progress import ProgressTracker
from inclusive_jobs.learning.quiz import QuizLevel
from inclusive_jobs.learning.typing_test import TypingLevel
from inclusive_jobs.storage import SELECTED_SKILLS_KEY, KeyValueStorage

if TYPE_CHECKING:
    from inclusive_jobs.accessibility.announcer import AnnouncementChannel

logger = logging.getLogger(__name__)

RESOURCE_POINTS = 5

ALL_SKILLS = (
    "Accounting",
    "Communication",
    "Customer Support",
    "Data Entry",
    "Digital Marketing",
    "Excel",
    "Figma",
    "Graphic Design",
    "HTML & CSS",
    "JavaScript",
    "Project Management",
    "Python",
    "SEO",
    "Social Media",
    "Typing",
    "UI/UX Design",
    "Web Development",
)


@dataclass(frozen=True)
class ResourceItem:
    title: str
    url: str
    source: str


@dataclass(frozen=True)
class ResourceLinks:
    """Links for one skill, grouped the way they are displayed."""
    videos: tuple[ResourceItem, ...]
    articles: tuple[ResourceItem, ...]
    guides: tuple[ResourceItem, ...]

    def all(self) -> tuple[ResourceItem, ...]:
        return self.videos + self.articles + self.guides


def _encode(text: str) -> str:
    return quote(text, safe="-_.!~*'()")


# (pattern, extra guides) appended after the generic guides; {q} in a URL
# is replaced by the encoded skill name
_EXTRAS: tuple[tuple[re.Pattern, tuple[ResourceItem, ...]], ...] = (
    (re.compile(r"web|frontend|javascript|html|css|ui"), (
        ResourceItem("MDN Web Docs • Learn web development",
                     "https://developer.mozilla.org/en-US/docs/Learn", "MDN"),
    )),
    (re.compile(r"seo|digital|marketing|social"), (
        ResourceItem("Google • SEO Starter Guide",
                     "https://developers.google.com/search/docs/fundamentals/seo-starter-guide",
                     "Google"),
        ResourceItem("HubSpot Academy • Digital marketing",
                     "https://academy.hubspot.com/courses?query={q}", "HubSpot"),
    )),
    (re.compile(r"graphic|design|ui|ux|figma"), (
        ResourceItem("Figma • Get started",
                     "https://help.figma.com/hc/en-us/sections/360002034613-Get-started", "Figma"),
        ResourceItem("Canva Design School • Basics", "https://www.canva.com/learn/design/", "Canva"),
    )),
    (re.compile(r"typing"), (
        ResourceItem("Typing.com • Lessons", "https://www.typing.com/student/lessons", "Typing.com"),
    )),
    (re.compile(r"accounting|finance"), (
        ResourceItem(
            "Khan Academy • Accounting and financial statements",
            "https://www.khanacademy.org/economics-finance-domain/core-finance/"
            "accounting-and-financial-statements",
            "Khan Academy",
        ),
    )),
    (re.compile(r"project management|project-management|project"), (
        ResourceItem("Atlassian • Agile and project management guides",
                     "https://www.atlassian.com/agile", "Atlassian"),
    )),
    (re.compile(r"customer support|customer-service|support"), (
        ResourceItem("Zendesk • Customer service training",
                     "https://www.zendesk.com/learn/customer-service-training/", "Zendesk"),
    )),
)


def resource_links(skill: str) -> ResourceLinks:
    """Beginner videos, articles and guides for a skill."""
    q = skill.strip()
    lower = q.lower()

    videos = (
        ResourceItem(f"YouTube • {q} for beginners",
                     f"https://www.youtube.com/results?search_query={_encode(f'beginner {q} tutorial')}",
                     "YouTube"),
        ResourceItem(f"YouTube • {q} crash course",
                     f"https://www.youtube.com/results?search_query={_encode(f'{q} crash course')}",
                     "YouTube"),
    )
    articles = (
        ResourceItem(f"freeCodeCamp • {q} for beginners",
                     f"https://www.google.com/search?q={_encode(f'site:freecodecamp.org beginner {q}')}",
                     "freeCodeCamp"),
        ResourceItem(f"GCFGlobal • Intro to {q}",
                     f"https://edu.gcfglobal.org/en/search/?q={_encode(q)}", "GCFGlobal"),
    )
    guides = [
        ResourceItem(f"free courses • {q} (Coursera search)",
                     f"https://www.coursera.org/search?query={_encode(f'{q} beginner')}", "Coursera"),
        ResourceItem(f"Khan Academy • {q} (search)",
                     f"https://www.khanacademy.org/search?page_search_query={_encode(q)}",
                     "Khan Academy"),
    ]

    for pattern, extras in _EXTRAS:
        if pattern.search(lower):
            guides.extend(
                ResourceItem(item.title, item.url.format(q=_encode(q)), item.source)
                for item in extras
            )

    return ResourceLinks(videos=videos, articles=articles, guides=tuple(guides))


Level = Union[QuizLevel, TypingLevel]


def is_typing_skill(skill: str) -> bool:
    return skill.strip().lower() == "typing"


class ResourcesHub:
    """Selected skills plus the rules for awarding learning points."""

    def __init__(
        self,
        tracker: ProgressTracker,
        storage: KeyValueStorage,
        status: Optional["AnnouncementChannel"] = None,
        skills: Sequence[str] = ALL_SKILLS,
    ) -> None:
        """Initialize the hub.

        Args:
            tracker: Progress tracker that records awards
            storage: Where the selected skills are persisted
            status: Polite announcement channel for award messages
            skills: Skills offered for selection
        """
        self.tracker = tracker
        self.storage = storage
        self.status = status
        self.skills = tuple(skills)

    # Selection

    def selected(self) -> list[str]:
        raw = self.storage.get_item(SELECTED_SKILLS_KEY)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt selected skills list")
            return []
        if not isinstance(data, list):
            return []
        return [s for s in data if isinstance(s, str)]

    def _store_selected(self, skills: Iterable[str]) -> None:
        unique = list(dict.fromkeys(skills))
        self.storage.set_item(SELECTED_SKILLS_KEY, json.dumps(unique))

    def set_selected(self, skill: str, checked: bool) -> list[str]:
        current = self.selected()
        if checked and skill not in current:
            current.append(skill)
        elif not checked:
            current = [s for s in current if s != skill]
        self._store_selected(current)
        return current

    def select_from_query(self, value: Optional[str]) -> list[str]:
        """Replace the selection from a comma-separated list, if it has any."""
        skills = [s.strip() for s in (value or "").split(",") if s.strip()]
        if skills:
            self._store_selected(skills)
        return self.selected()

    def filter_skills(self, query: str) -> list[str]:
        """Offered skills containing ``query`` (case-insensitive)."""
        q = query.strip().lower()
        if not q:
            return list(self.skills)
        return [s for s in self.skills if q in s.lower()]

    # Awards

    def _notify(self, message: str) -> None:
        if self.status is not None:
            self.status.send(message)

    def toggle_resource(self, skill: str, url: str, done: bool) -> int:
        """Mark a resource done or not.

        Returns:
            Points awarded (only for a new completion)
        """
        was_done = self.tracker.is_completed(skill, url)
        self.tracker.set_resource_completed(skill, url, done)

        if done and not was_done:
            self.tracker.add_points(skill, RESOURCE_POINTS)
            self._notify(f"+{RESOURCE_POINTS} pts for completing a resource in {skill}")
            return RESOURCE_POINTS
        return 0

    def record_quiz_pass(self, skill: str, level: Union[QuizLevel, str]) -> int:
        """Record a passed quiz.

        Returns:
            Points awarded (only on the level's first pass)
        """
        if isinstance(level, str):
            level = QuizLevel.parse(level)

        if self.tracker.quiz_passed(skill, level.quiz_id):
            return 0

        self.tracker.mark_quiz_passed(skill, level.quiz_id, True)
        self.tracker.add_points(skill, level.points)
        self._notify(f"{level.value.label} quiz passed! +{level.points} pts in {skill}")
        return level.points

    def record_typing_pass(self, skill: str, level: Union[TypingLevel, str], wpm: int) -> int:
        """Record a passed typing test.

        Returns:
            Points awarded (only on the level's first pass)
        """
        if isinstance(level, str):
            level = TypingLevel.parse(level)

        if self.tracker.quiz_passed(skill, level.quiz_id):
            return 0

        self.tracker.mark_quiz_passed(skill, level.quiz_id, True)
        self.tracker.add_points(skill, level.points)
        self._notify(
            f"{level.value.label} typing test passed ({wpm} WPM)! "
            f"+{level.points} pts in {skill}"
        )
        return level.points

    def unlocked_levels(self, skill: str) -> list[Level]:
        """Levels currently available: the first, plus each whose predecessor is passed."""
        levels: Sequence[Level] = list(TypingLevel) if is_typing_skill(skill) else list(QuizLevel)

        unlocked: list[Level] = [levels[0]]
        for previous, level in zip(levels, levels[1:]):
            if not self.tracker.quiz_passed(skill, previous.quiz_id):
                break
            unlocked.append(level)
        return unlocked
