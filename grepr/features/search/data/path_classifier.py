import logging
import os
import stat
from dataclasses import dataclass, field
from typing import Iterable, List

from grepr.core.config.settings import settings
from ..domain.models import SearchTarget

logger = logging.getLogger(__name__)


@dataclass
class ClassifiedPaths:
    files: List[SearchTarget] = field(default_factory=list)
    directories: List[SearchTarget] = field(default_factory=list)
    recursive: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.files and not self.directories


def classify_paths(raw_paths: Iterable[str], recursive_flag: str = settings.RECURSIVE_FLAG) -> ClassifiedPaths:
    """
    Buckets path arguments into files and directories, in input order.
    Paths that can't be stat'ed, and anything that is neither a regular file
    nor a directory, are dropped without an error.
    """
    classified = ClassifiedPaths()

    for path in raw_paths:
        if path == recursive_flag:
            classified.recursive = True

        try:
            mode = os.stat(path).st_mode
        except OSError as e:
            if path != recursive_flag:
                logger.debug(f"Ignoring path {path!r}: {e}")
            continue

        if stat.S_ISDIR(mode):
            classified.directories.append(SearchTarget.directory(path))
        elif stat.S_ISREG(mode):
            classified.files.append(SearchTarget.file(path))
        else:
            logger.debug(f"Ignoring path {path!r}: not a regular file or directory")

    return classified
