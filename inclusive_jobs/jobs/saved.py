"""Saved jobs - the ids a seeker bookmarked, in the order they were saved."""

from __future__ import annotations

import json
import logging

from inclusive_jobs.jobs.listing import JobId
from inclusive_jobs.storage import SAVED_JOBS_KEY, KeyValueStorage

logger = logging.getLogger(__name__)


class SavedJobs:
    """Order-preserving set of saved job ids.

    Example:
        saved = SavedJobs(storage)
        saved.toggle("2")   # True, now saved
        saved.toggle("2")   # False, removed
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self.storage = storage

    def saved(self) -> list[JobId]:
        raw = self.storage.get_item(SAVED_JOBS_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt saved jobs list")
            return []
        if not isinstance(data, list):
            return []
        return [i for i in data if isinstance(i, (int, str)) and not isinstance(i, bool)]

    def is_saved(self, job_id: JobId) -> bool:
        return job_id in self.saved()

    def toggle(self, job_id: JobId) -> bool:
        """Save or unsave a job.

        Returns:
            Whether the job is saved afterwards
        """
        ids = self.saved()
        if job_id in ids:
            ids.remove(job_id)
            now_saved = False
        else:
            ids.append(job_id)
            now_saved = True

        self.storage.set_item(SAVED_JOBS_KEY, json.dumps(ids))
        return now_saved
