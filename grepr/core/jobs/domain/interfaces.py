from abc import ABC, abstractmethod
from typing import Any, Dict, List
from uuid import UUID

from .models import Job

class IJobRepository(ABC):
    """
    Contract for Job history persistence.
    """

    @abstractmethod
    def record_run(self, run_id: UUID, jobs: List[Job]) -> int:
        """
        Persists every Job of a finished run in one transaction.
        Returns the number of records written.
        """
        pass

    @abstractmethod
    def list_run(self, run_id: UUID) -> List[Dict[str, Any]]:
        """
        Returns the recorded Jobs of a run as plain dicts, ordered by sequence.
        """
        pass
