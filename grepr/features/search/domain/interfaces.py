from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Match, SearchTarget

class ITargetSearcher(ABC):
    """
    Contract for running a query against a File or Directory.
    """
    @abstractmethod
    def search(self, target: SearchTarget, query: str, recursive: bool) -> Optional[List[Match]]:
        """
        Returns every line of the target containing the query.
        Returns None when the target itself cannot be read; callers skip it.
        """
        pass
