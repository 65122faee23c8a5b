"""
Job Listing - Postings and client-side filtering.

Postings come from the remote data store as plain records; this module
turns them into ``JobPosting`` objects and filters, sorts and pages them
locally. Without a configured backend, ``SAMPLE_JOBS`` is shown instead.

Example:
    jobs = [JobPosting.from_dict(row) for row in rows]
    matches = filter_jobs(jobs, JobFilter(query="design", max_yoe=2))
    results_message(len(matches))   # "1 jobs match your filters"
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Iterable, Optional, Union

JobId = Union[int, str]

PAGE_SIZE = 10

SORT_ORDERS = ("new", "yoe_asc", "yoe_desc")


@dataclass(frozen=True)
class JobPosting:
    """A job as stored in the jobs collection."""
    id: JobId
    company_name: str
    role_title: str
    job_description: str = ""
    location: str = ""
    yoe_required: int = 0
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    required_skills: tuple[str, ...] = ()
    disability_types: tuple[str, ...] = ()
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> "JobPosting":
        """Build from a data-store record; unknown columns are ignored.

        Raises:
            KeyError: If id, company_name or role_title is missing
        """
        known = {f.name for f in fields(cls)}
        data = {k: v for k, v in row.items() if k in known and v is not None}
        for required in ("id", "company_name", "role_title"):
            if required not in data:
                raise KeyError(required)
        data["required_skills"] = tuple(data.get("required_skills") or ())
        data["disability_types"] = tuple(data.get("disability_types") or ())
        return cls(**data)

    @property
    def headline(self) -> str:
        return f"{self.role_title} at {self.company_name}"


SAMPLE_JOBS = (
    JobPosting(
        id="1",
        company_name="Inclusive Tech",
        role_title="Customer Support Associate",
        job_description="Assist users via chat and email.",
        location="Remote",
        yoe_required=0,
    ),
    JobPosting(
        id="2",
        company_name="Bright Design",
        role_title="Junior Graphic Designer",
        job_description="Create social graphics.",
        location="Delhi (Hybrid)",
        yoe_required=1,
    ),
)


@dataclass
class JobFilter:
    """Filter criteria; the defaults match every posting.

    Attributes:
        query: Substring of "company role" (case-insensitive)
        skills: Skills a posting must all require
        location: Substring of the location
        min_yoe: Lowest years of experience required
        max_yoe: Highest years of experience required
        disability_types: A posting must list at least one of these
        sort: "new", "yoe_asc" or "yoe_desc"
    """
    query: str = ""
    skills: frozenset[str] = field(default_factory=frozenset)
    location: str = ""
    min_yoe: int = 0
    max_yoe: int = 20
    disability_types: frozenset[str] = field(default_factory=frozenset)
    sort: str = "new"

    def matches(self, job: JobPosting) -> bool:
        text = self.query.strip().lower()
        if text and text not in f"{job.company_name} {job.role_title}".lower():
            return False

        place = self.location.strip().lower()
        if place and place not in job.location.lower():
            return False

        if not self.min_yoe <= job.yoe_required <= self.max_yoe:
            return False

        if self.skills:
            required = {s.lower() for s in job.required_skills}
            if not all(s.lower() in required for s in self.skills):
                return False

        if self.disability_types:
            supported = {d.lower() for d in job.disability_types}
            if not any(d.lower() in supported for d in self.disability_types):
                return False

        return True


def filter_jobs(jobs: Iterable[JobPosting], criteria: Optional[JobFilter] = None) -> list[JobPosting]:
    """Matching postings in the requested order.

    "new" keeps newest first by ``created_at`` when present and the
    incoming order otherwise.

    Raises:
        ValueError: If the sort order is unknown
    """
    criteria = criteria or JobFilter()
    if criteria.sort not in SORT_ORDERS:
        raise ValueError(
            f"Unknown sort order '{criteria.sort}'. Expected one of: {', '.join(SORT_ORDERS)}"
        )

    matches = [job for job in jobs if criteria.matches(job)]

    if criteria.sort == "yoe_asc":
        matches.sort(key=lambda job: job.yoe_required)
    elif criteria.sort == "yoe_desc":
        matches.sort(key=lambda job: job.yoe_required, reverse=True)
    elif any(job.created_at for job in matches):
        matches.sort(key=lambda job: job.created_at or "", reverse=True)

    return matches


def paginate(jobs: list[JobPosting], page: int, page_size: int = PAGE_SIZE) -> list[JobPosting]:
    """Postings shown after ``page`` rounds of "load more".

    Raises:
        ValueError: If page or page_size is below 1
    """
    if page < 1 or page_size < 1:
        raise ValueError("page and page_size must be at least 1")
    return jobs[: page * page_size]


def results_message(count: int) -> str:
    return f"{count} jobs match your filters"
