import logging
from typing import Sequence

from grepr.core.config.settings import settings
from ..domain.models import ConfigError, SearchConfig
from ..data.path_classifier import classify_paths

logger = logging.getLogger(__name__)


def build_config(argv: Sequence[str]) -> SearchConfig:
    """
    Turns `program <query> <path> [<path> ...] [-r]` into a SearchConfig.

    Raises:
        ConfigError: missing query, missing paths, or no path that exists.
    """
    args = list(argv[1:])

    if not args:
        raise ConfigError("Not enough arguments supplied")

    query, paths = args[0], args[1:]

    if not query:
        raise ConfigError("Query must not be empty")
    if not paths:
        raise ConfigError("Not enough arguments supplied")

    classified = classify_paths(paths, recursive_flag=settings.RECURSIVE_FLAG)
    if classified.is_empty:
        raise ConfigError("No valid paths supplied")

    config = SearchConfig(
        query=query,
        files=classified.files,
        directories=classified.directories,
        recursive=classified.recursive
    )

    for target in config.targets:
        logger.debug(str(target))
    logger.debug(f"Query: {query!r}, recursive: {config.recursive}")

    return config
