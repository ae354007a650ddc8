from typing import List, Sequence

from ..domain.models import Match
from .config_loader import build_config
from .orchestrator import SearchOrchestrator


def run_search(query: str, paths: Sequence[str], **orchestrator_options) -> List[Match]:
    """
    Standalone API: searches paths for query and returns the ordered matches.
    Paths follow the command-line rules, so "-r" among them turns on recursion.

    Raises:
        ConfigError: empty query, or none of the paths exist.
    """
    config = build_config(["grepr", query, *paths])
    return SearchOrchestrator(**orchestrator_options).run(config)
