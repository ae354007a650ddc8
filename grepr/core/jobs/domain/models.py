from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

from grepr.core.common.enums import JobStatus


def utc_now():
    return datetime.now(timezone.utc)


@dataclass
class Job:
    """
    A deferred unit of work handed to the worker pool.
    The pool never inspects the payload; the handler does.
    """
    payload: Any
    label: str
    sequence: int = 0
    id: UUID = field(default_factory=uuid4)
    status: JobStatus = JobStatus.PENDING
    result_count: int = 0
    error_message: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def mark_processing(self) -> None:
        self.status = JobStatus.PROCESSING
        self.started_at = utc_now()

    def mark_completed(self, result_count: int) -> None:
        self.status = JobStatus.COMPLETED
        self.result_count = result_count
        self.finished_at = utc_now()

    def mark_skipped(self) -> None:
        """The target was unreadable; nothing was merged."""
        self.status = JobStatus.SKIPPED
        self.finished_at = utc_now()

    def mark_failed(self, error: Exception) -> None:
        self.status = JobStatus.FAILED
        self.error_message = str(error)
        self.finished_at = utc_now()

    def mark_cancelled(self) -> None:
        self.status = JobStatus.CANCELLED
        self.finished_at = utc_now()

    @property
    def is_finished(self) -> bool:
        return self.status not in (JobStatus.PENDING, JobStatus.PROCESSING)
