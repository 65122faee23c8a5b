"""
Tests for job listing, filtering and saved jobs.
"""

import pytest

from inclusive_jobs.jobs import SavedJobs
from inclusive_jobs.jobs.listing import (
    SAMPLE_JOBS,
    JobFilter,
    JobPosting,
    filter_jobs,
    paginate,
    results_message,
)
from inclusive_jobs.storage import SAVED_JOBS_KEY


def _job(job_id, **kwargs):
    defaults = {"company_name": "Acme", "role_title": "Tester"}
    defaults.update(kwargs)
    return JobPosting(id=job_id, **defaults)


class TestJobPosting:
    """Record conversion."""

    def test_from_dict(self):
        job = JobPosting.from_dict({
            "id": 7,
            "company_name": "Acme",
            "role_title": "Data Entry Clerk",
            "required_skills": ["Excel", "Typing"],
            "min_age": None,
            "extra_column": "ignored",
        })

        assert job.required_skills == ("Excel", "Typing")
        assert job.min_age is None
        assert job.headline == "Data Entry Clerk at Acme"

    def test_missing_required_field(self):
        with pytest.raises(KeyError):
            JobPosting.from_dict({"id": 1, "company_name": "Acme"})


class TestFilterJobs:
    """Filtering and sorting."""

    def test_default_filter_matches_all(self):
        assert filter_jobs(SAMPLE_JOBS) == list(SAMPLE_JOBS)

    def test_query_searches_company_and_role(self):
        assert [j.id for j in filter_jobs(SAMPLE_JOBS, JobFilter(query="bright"))] == ["2"]
        assert [j.id for j in filter_jobs(SAMPLE_JOBS, JobFilter(query="SUPPORT"))] == ["1"]

    def test_location(self):
        matches = filter_jobs(SAMPLE_JOBS, JobFilter(location="delhi"))
        assert [j.id for j in matches] == ["2"]

    def test_yoe_range(self):
        matches = filter_jobs(SAMPLE_JOBS, JobFilter(min_yoe=1, max_yoe=3))
        assert [j.id for j in matches] == ["2"]

    def test_skills_must_all_match(self):
        jobs = [
            _job(1, required_skills=("Excel", "Typing")),
            _job(2, required_skills=("Excel",)),
        ]
        matches = filter_jobs(jobs, JobFilter(skills=frozenset({"excel", "typing"})))

        assert [j.id for j in matches] == [1]

    def test_disability_types_any_overlap(self):
        jobs = [
            _job(1, disability_types=("Visual",)),
            _job(2, disability_types=("Hearing",)),
            _job(3),
        ]
        criteria = JobFilter(disability_types=frozenset({"visual", "mobility"}))

        assert [j.id for j in filter_jobs(jobs, criteria)] == [1]

    def test_sort_by_experience(self):
        jobs = [_job(1, yoe_required=3), _job(2, yoe_required=0), _job(3, yoe_required=5)]

        assert [j.id for j in filter_jobs(jobs, JobFilter(sort="yoe_asc"))] == [2, 1, 3]
        assert [j.id for j in filter_jobs(jobs, JobFilter(sort="yoe_desc"))] == [3, 1, 2]

    def test_newest_first(self):
        jobs = [
            _job(1, created_at="2024-01-01T00:00:00Z"),
            _job(2, created_at="2024-03-01T00:00:00Z"),
        ]
        assert [j.id for j in filter_jobs(jobs)] == [2, 1]

    def test_unknown_sort(self):
        with pytest.raises(ValueError):
            filter_jobs(SAMPLE_JOBS, JobFilter(sort="salary"))


class TestPaging:
    """Load-more paging and messages."""

    def test_load_more(self):
        jobs = [_job(i) for i in range(25)]

        assert len(paginate(jobs, 1)) == 10
        assert len(paginate(jobs, 2)) == 20
        assert len(paginate(jobs, 3)) == 25

    def test_invalid_page(self):
        with pytest.raises(ValueError):
            paginate([], 0)

    def test_results_message(self):
        assert results_message(3) == "3 jobs match your filters"


class TestSavedJobs:
    """Bookmarked jobs."""

    def test_toggle(self, storage):
        saved = SavedJobs(storage)

        assert saved.toggle("2") is True
        assert saved.is_saved("2")
        assert saved.toggle("2") is False
        assert saved.saved() == []

    def test_order_preserved(self, storage):
        saved = SavedJobs(storage)
        saved.toggle(3)
        saved.toggle("1")
        saved.toggle(2)

        assert saved.saved() == [3, "1", 2]

    def test_int_and_str_ids_distinct(self, storage):
        saved = SavedJobs(storage)
        saved.toggle(1)

        assert not saved.is_saved("1")

    def test_corrupt_storage(self, storage):
        storage.set_item(SAVED_JOBS_KEY, "{")
        assert SavedJobs(storage).saved() == []
