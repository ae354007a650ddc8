import sys
from typing import Iterable, Optional, TextIO

from ..domain.models import Match


def format_match(match: Match) -> str:
    """Renders "<line_number>:<path> | <text>"."""
    return str(match)


def print_matches(matches: Iterable[Match], stream: Optional[TextIO] = None) -> int:
    """Writes one line per match. Returns how many lines were written."""
    out = stream or sys.stdout
    count = 0
    for match in matches:
        out.write(format_match(match) + "\n")
        count += 1
    return count
