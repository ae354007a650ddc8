import logging
from threading import Event
from typing import List, Optional
from uuid import UUID, uuid4

from grepr.core.common.enums import ExecutionMode
from grepr.core.config.settings import settings
from grepr.core.jobs.domain.interfaces import IJobRepository
from grepr.core.jobs.domain.models import Job
from grepr.core.jobs.service.pool import WorkerPool, execute_job

from ..domain.interfaces import ITargetSearcher
from ..domain.models import ConfigError, Match, SearchConfig, SearchRequest
from ..domain.results import MatchCollection
from .job_handler import SearchHandler

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """
    Drives a whole search run.

    One Job per top-level target, numbered files first then directories.
    Results are read back in that order once every Job is done, so pooled and
    sequential runs print the same thing. Only directory results are sorted
    by path, and only within their own directory.
    """

    def __init__(self,
                 searcher: Optional[ITargetSearcher] = None,
                 mode: Optional[str] = None,
                 workers: Optional[int] = None,
                 queue_depth: Optional[int] = None,
                 record_history: Optional[bool] = None,
                 repository: Optional[IJobRepository] = None):
        try:
            self.mode = ExecutionMode(mode or settings.EXECUTION_MODE)
        except ValueError:
            raise ConfigError(f"Unknown execution mode: {mode or settings.EXECUTION_MODE}")

        self.handler = SearchHandler(searcher)

        try:
            self.workers = workers if workers is not None else settings.WORKER_COUNT
            self.queue_depth = queue_depth if queue_depth is not None else settings.QUEUE_DEPTH
            self.poll_interval = settings.POLL_INTERVAL_SECONDS
        except ValueError as e:
            raise ConfigError(f"Invalid worker pool setting: {e}")

        if self.workers < 1:
            raise ConfigError(f"Worker count must be at least 1, got {self.workers}")
        if self.queue_depth < 0:
            raise ConfigError(f"Queue depth must not be negative, got {self.queue_depth}")
        if self.poll_interval <= 0:
            raise ConfigError(f"Poll interval must be positive, got {self.poll_interval}")

        self.record_history = settings.RECORD_HISTORY if record_history is None else record_history
        self.repository = repository

        self.cancel_event = Event()
        self.last_run_id: Optional[UUID] = None
        self.last_jobs: List[Job] = []

    def cancel(self) -> None:
        """Stops Jobs that haven't started yet. Running Jobs finish normally."""
        self.cancel_event.set()

    def run(self, config: SearchConfig) -> List[Match]:
        run_id = uuid4()
        jobs = self._build_jobs(config)
        results = MatchCollection()

        logger.info(f"Run {run_id}: {len(jobs)} targets, mode={self.mode.value}, recursive={config.recursive}")

        if self.mode == ExecutionMode.POOLED:
            self._run_pooled(jobs, results)
        else:
            self._run_sequential(jobs, results)

        # Every worker has been joined at this point
        results.seal()

        self.last_run_id = run_id
        self.last_jobs = jobs

        if self.record_history:
            try:
                self._record(run_id, jobs)
            except Exception as e:
                # History is optional; the matches still go out
                logger.exception(f"Failed to record run {run_id}: {e}")

        matches = results.ordered()
        logger.info(f"Run {run_id}: {len(matches)} matches")
        return matches

    @staticmethod
    def _build_jobs(config: SearchConfig) -> List[Job]:
        return [
            Job(
                payload=SearchRequest(target=target, query=config.query, recursive=config.recursive),
                label=str(target),
                sequence=sequence
            )
            for sequence, target in enumerate(config.targets)
        ]

    def _run_pooled(self, jobs: List[Job], results: MatchCollection) -> None:
        with WorkerPool(
            self.workers,
            results,
            self.handler,
            queue_depth=self.queue_depth,
            cancel_event=self.cancel_event,
            poll_interval=self.poll_interval
        ) as pool:
            for job in jobs:
                pool.submit(job)

    def _run_sequential(self, jobs: List[Job], results: MatchCollection) -> None:
        for job in jobs:
            execute_job(job, self.handler, results, self.cancel_event)

    def _record(self, run_id: UUID, jobs: List[Job]) -> None:
        if self.repository is None:
            # Lazy import: the engine is only built when history is wanted
            from grepr.core.database.connection import init_db
            from grepr.core.jobs.data.repository import SqlJobRepository
            init_db()
            self.repository = SqlJobRepository()

        self.repository.record_run(run_id, jobs)
