# File: grepr/features/search/service/job_handler.py
import logging
from typing import Optional

from grepr.core.jobs.domain.models import Job
from ..domain.interfaces import ITargetSearcher
from ..domain.models import SearchRequest
from ..domain.results import MatchCollection
from ..data.target_searcher import LocalTargetSearcher

logger = logging.getLogger(__name__)

class SearchHandler:
    """
    Executes search Jobs.
    The search runs outside the lock; only the merge is a critical section.
    """

    def __init__(self, searcher: Optional[ITargetSearcher] = None):
        self.searcher = searcher or LocalTargetSearcher()

    def __call__(self, job: Job, results: MatchCollection) -> Optional[int]:
        return self.handle(job, results)

    def handle(self, job: Job, results: MatchCollection) -> Optional[int]:
        request: SearchRequest = job.payload

        matches = self.searcher.search(request.target, request.query, request.recursive)
        if matches is None:
            logger.debug(f"Target unreadable, skipped: {request.target}")
            return None

        results.merge(job.sequence, matches)
        return len(matches)
