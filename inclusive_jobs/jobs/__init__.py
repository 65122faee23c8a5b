"""
Job board data for Inclusive Jobs.

Modules:
    listing - Postings, filtering, paging
    saved   - Saved job ids
"""

from inclusive_jobs.jobs.listing import (
    PAGE_SIZE,
    SAMPLE_JOBS,
    JobFilter,
    JobPosting,
    filter_jobs,
    paginate,
    results_message,
)
from inclusive_jobs.jobs.saved import SavedJobs

__all__ = [
    "PAGE_SIZE",
    "SAMPLE_JOBS",
    "JobFilter",
    "JobPosting",
    "SavedJobs",
    "filter_jobs",
    "paginate",
    "results_message",
]
