# File: grepr/core/jobs/service/pool.py

import logging
import queue
from threading import Event, Lock, Thread
from typing import Any, Callable, List, Optional

from grepr.core.common.enums import WorkerState
from grepr.core.config.settings import settings
from ..domain.models import Job

logger = logging.getLogger(__name__)

# handler(job, results) -> number of merged results, or None if the job's source was unreadable
JobHandler = Callable[[Job, Any], Optional[int]]

# Queued once per worker on shutdown
_CLOSE = object()


def execute_job(job: Job, handler: JobHandler, results: Any, cancel_event: Event) -> None:
    """
    Runs one Job through its status transitions.
    Handler errors mark the Job FAILED and never propagate.
    """
    if cancel_event.is_set():
        job.mark_cancelled()
        logger.debug(f"Dropped cancelled job: {job.label}")
        return

    job.mark_processing()
    try:
        count = handler(job, results)
        if count is None:
            job.mark_skipped()
        else:
            job.mark_completed(count)
    except Exception as e:
        job.mark_failed(e)
        logger.exception(f"Job {job.label} failed: {e}")


class Worker(Thread):
    """
    Long-lived thread that pulls Jobs off the shared queue until it sees the close marker.
    IDLE -> EXECUTING -> IDLE ... -> STOPPED
    """

    def __init__(self, worker_id: int, pool: "WorkerPool", jobs: queue.Queue):
        super().__init__(name=f"grepr-worker-{worker_id}", daemon=True)
        self._worker_id = worker_id
        self._pool = pool
        self._jobs = jobs
        self._state = WorkerState.IDLE
        self._jobs_executed = 0

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def jobs_executed(self) -> int:
        return self._jobs_executed

    def run(self) -> None:
        logger.debug(f"Worker {self._worker_id} started")
        try:
            while True:
                try:
                    job = self._jobs.get(timeout=self._pool.poll_interval)
                except queue.Empty:
                    # Nothing yet; only the close marker ends the loop
                    continue

                if job is _CLOSE:
                    break

                self._execute_job(job)
        finally:
            self._state = WorkerState.STOPPED
            logger.debug(f"Worker {self._worker_id} stopped after {self._jobs_executed} jobs")

    def _execute_job(self, job: Job) -> None:
        self._state = WorkerState.EXECUTING
        try:
            execute_job(job, self._pool.handler, self._pool.results, self._pool.cancel_event)
        finally:
            self._jobs_executed += 1
            self._state = WorkerState.IDLE


class WorkerPool:
    """
    Fixed-size pool of workers competing for Jobs on one FIFO queue.
    All workers write into the same results collection, which must do its own locking.

    Usage:
        with WorkerPool(4, results, handler) as pool:
            pool.submit(job)
        # every worker has been joined here
    """

    def __init__(self,
                 size: int,
                 results: Any,
                 handler: JobHandler,
                 queue_depth: int = 0,
                 cancel_event: Optional[Event] = None,
                 poll_interval: Optional[float] = None):
        if size < 1:
            raise ValueError(f"Worker pool needs at least one worker, got {size}")

        self.results = results
        self.handler = handler
        self.cancel_event = cancel_event or Event()
        self.poll_interval = settings.POLL_INTERVAL_SECONDS if poll_interval is None else poll_interval

        self._queue: queue.Queue = queue.Queue(maxsize=queue_depth)
        self._lock = Lock()
        self._closed = False

        self._workers: List[Worker] = [Worker(i, self, self._queue) for i in range(size)]
        for worker in self._workers:
            worker.start()

        logger.debug(f"Worker pool started with {size} workers (queue depth {queue_depth or 'unbounded'})")

    @property
    def size(self) -> int:
        return len(self._workers)

    @property
    def workers(self) -> List[Worker]:
        return list(self._workers)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def submit(self, job: Job) -> None:
        """Queues a Job. Blocks only when a bounded queue is full."""
        with self._lock:
            if self._closed:
                raise RuntimeError("Cannot submit to a worker pool that has been shut down")
            self._queue.put(job)

    def cancel(self) -> None:
        """Jobs that have not started yet will be marked CANCELLED instead of run."""
        self.cancel_event.set()

    def shutdown(self) -> None:
        """
        Closes the queue and blocks until every worker has exited.
        Queued Jobs ahead of the close markers are still executed.
        """
        with self._lock:
            if not self._closed:
                self._closed = True
                for _ in self._workers:
                    self._queue.put(_CLOSE)

        for worker in self._workers:
            worker.join()

        logger.debug("Worker pool shut down")

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
