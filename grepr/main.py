# File: grepr/main.py

import logging
import sys
from typing import List, Optional

from grepr.core.config.settings import settings
from grepr.features.search.domain.models import ConfigError
from grepr.features.search.service.config_loader import build_config
from grepr.features.search.service.orchestrator import SearchOrchestrator
from grepr.features.search.service.printer import print_matches


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    """Diagnostics go to stderr so stdout carries only matches."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    grepr <query> <path> [<path> ...] [-r]

    Returns the process exit code.
    """
    argv = sys.argv if argv is None else argv

    try:
        config = build_config(argv)
        orchestrator = SearchOrchestrator()
    except ConfigError as e:
        print(e, file=sys.stderr)
        return 1

    matches = orchestrator.run(config)
    print_matches(matches)
    return 0


def run_cli() -> None:
    configure_logging()
    sys.exit(main())
