import logging
import os
from typing import List, Optional

from grepr.core.common.enums import TargetKind
from ..domain.interfaces import ITargetSearcher
from ..domain.models import Match, SearchTarget

logger = logging.getLogger(__name__)


def split_lines(contents: str) -> List[str]:
    """
    Splits on "\\n" only. A "\\r" right before a "\\n" belongs to the line
    ending; a lone "\\r" at the very end is kept as text.
    A final newline does not produce an extra empty line.
    """
    if not contents:
        return []
    lines = contents.split("\n")
    if lines[-1] == "":
        lines.pop()
    for i in range(len(lines) - 1):
        if lines[i].endswith("\r"):
            lines[i] = lines[i][:-1]
    if contents.endswith("\r\n"):
        lines[-1] = lines[-1][:-1]
    return lines


class LocalTargetSearcher(ITargetSearcher):
    """
    Searches targets on the local filesystem.
    """

    def search(self, target: SearchTarget, query: str, recursive: bool) -> Optional[List[Match]]:
        if target.kind == TargetKind.FILE:
            return self._search_file(target, query)
        if target.kind == TargetKind.DIRECTORY:
            return self._search_directory(target, query, recursive)
        raise ValueError(f"Unknown target kind: {target.kind}")

    def _search_file(self, target: SearchTarget, query: str) -> Optional[List[Match]]:
        try:
            with open(target.pathname, "r", encoding="utf-8", newline="") as f:
                contents = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping unreadable file {target.pathname}: {e}")
            return None

        return [
            Match.from_index(target.pathname, index, line)
            for index, line in enumerate(split_lines(contents))
            if query in line
        ]

    def _search_directory(self, target: SearchTarget, query: str, recursive: bool) -> Optional[List[Match]]:
        matches: List[Match] = []

        try:
            listing = os.scandir(target.pathname)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {target.pathname}: {e}")
            return None

        with listing:
            while True:
                try:
                    entry = next(listing)
                except StopIteration:
                    break
                except OSError as e:
                    # A broken listing can't be resumed; keep what was found so far
                    logger.debug(f"Listing of {target.pathname} stopped early: {e}")
                    break

                # Symlinks are neither files nor directories here
                try:
                    is_file = entry.is_file(follow_symlinks=False)
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError as e:
                    logger.debug(f"Skipping unreadable entry {entry.path}: {e}")
                    continue

                if is_file:
                    child = SearchTarget.file(target.child_path(entry.name))
                    results = self._search_file(child, query)
                elif is_dir and recursive:
                    child = SearchTarget.directory(target.child_path(entry.name))
                    results = self._search_directory(child, query, recursive)
                else:
                    continue

                if results is not None:
                    matches.extend(results)

        # Stable: lines of one file stay in file order
        matches.sort(key=lambda m: m.path)
        return matches
