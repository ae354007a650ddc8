from dataclasses import dataclass, field
from typing import List

from grepr.core.common.enums import TargetKind


class ConfigError(ValueError):
    """Raised when the command line cannot be turned into a SearchConfig."""


@dataclass(frozen=True)
class Match:
    """
    One line containing the query.
    line_number is 1-based.
    """
    path: str
    line_number: int
    text: str

    def __post_init__(self):
        if self.line_number < 1:
            raise ValueError(f"Line numbers start at 1, got {self.line_number}")

    @classmethod
    def from_index(cls, path: str, index: int, text: str) -> "Match":
        """Builds a Match from a 0-based line index."""
        return cls(path=path, line_number=index + 1, text=text)

    def __str__(self) -> str:
        return f"{self.line_number}:{self.path} | {self.text}"


@dataclass(frozen=True)
class SearchTarget:
    """
    A File or a Directory. The kind is decided once, from filesystem metadata,
    and never re-checked.
    """
    pathname: str
    kind: TargetKind

    @classmethod
    def file(cls, pathname: str) -> "SearchTarget":
        return cls(pathname=pathname, kind=TargetKind.FILE)

    @classmethod
    def directory(cls, pathname: str) -> "SearchTarget":
        # "src/" -> "src", but "/" stays "/"
        return cls(pathname=pathname.rstrip("/") or "/", kind=TargetKind.DIRECTORY)

    @property
    def is_directory(self) -> bool:
        return self.kind == TargetKind.DIRECTORY

    def child_path(self, name: str) -> str:
        if self.pathname == "/":
            return f"/{name}"
        return f"{self.pathname}/{name}"

    def __str__(self) -> str:
        prefix = "Directory" if self.is_directory else "File"
        return f"{prefix}: {self.pathname}"


@dataclass(frozen=True)
class SearchRequest:
    """Payload of a single search Job."""
    target: SearchTarget
    query: str
    recursive: bool = False


@dataclass(frozen=True)
class SearchConfig:
    """
    Validated command line.
    Files and directories keep the order they were given in.
    """
    query: str
    files: List[SearchTarget] = field(default_factory=list)
    directories: List[SearchTarget] = field(default_factory=list)
    recursive: bool = False

    @property
    def targets(self) -> List[SearchTarget]:
        """Files first, then directories."""
        return [*self.files, *self.directories]
