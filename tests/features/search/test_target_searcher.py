import os
import pytest

from grepr.features.search.data.target_searcher import LocalTargetSearcher, split_lines
from grepr.features.search.domain.models import Match, SearchTarget


@pytest.fixture
def searcher():
    return LocalTargetSearcher()


# --- FILES ---

def test_file_search_returns_one_match_per_matching_line(tmp_path, searcher):
    path = tmp_path / "notes.txt"
    path.write_text("alpha foo\nbeta\nfoo gamma\nfoofoo\n")

    matches = searcher.search(SearchTarget.file(str(path)), "foo", False)

    assert [m.line_number for m in matches] == [1, 3, 4]
    assert [m.text for m in matches] == ["alpha foo", "foo gamma", "foofoo"]
    assert all(m.path == str(path) for m in matches)


def test_file_search_is_case_sensitive(tmp_path, searcher):
    path = tmp_path / "case.txt"
    path.write_text("Foo\nfoo\nFOO\n")

    matches = searcher.search(SearchTarget.file(str(path)), "foo", False)

    assert matches == [Match(str(path), 2, "foo")]


def test_empty_file_returns_empty_list(tmp_path, searcher):
    path = tmp_path / "empty.txt"
    path.write_text("")

    assert searcher.search(SearchTarget.file(str(path)), "foo", False) == []


def test_missing_file_returns_none(tmp_path, searcher):
    missing = SearchTarget.file(str(tmp_path / "nope.txt"))

    assert searcher.search(missing, "foo", False) is None


def test_invalid_utf8_file_returns_none(tmp_path, searcher):
    path = tmp_path / "binary.bin"
    path.write_bytes(b"foo\n\xff\xfe\xfa foo\n")

    assert searcher.search(SearchTarget.file(str(path)), "foo", False) is None


def test_crlf_line_endings_are_stripped(tmp_path, searcher):
    path = tmp_path / "windows.txt"
    path.write_bytes(b"one foo\r\ntwo\r\nthree foo")

    matches = searcher.search(SearchTarget.file(str(path)), "foo", False)

    assert matches == [
        Match(str(path), 1, "one foo"),
        Match(str(path), 3, "three foo"),
    ]


def test_split_lines():
    assert split_lines("") == []
    assert split_lines("a\nb\n") == ["a", "b"]
    assert split_lines("a\n\nb") == ["a", "", "b"]
    assert split_lines("\n") == [""]


def test_split_lines_only_strips_carriage_return_before_newline():
    assert split_lines("a\r\nb\r") == ["a", "b\r"]
    assert split_lines("a\r\n\r\n") == ["a", ""]
    assert split_lines("x\r\r\n") == ["x\r"]
    assert split_lines("mid\rdle\n") == ["mid\rdle"]


# --- DIRECTORIES ---

def test_directory_search_only_reports_matching_files(tmp_path, searcher):
    (tmp_path / "a.txt").write_text("nothing here\n")
    (tmp_path / "b.txt").write_text("has foo\n")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.txt").write_text("foo in subdirectory\n")

    matches = searcher.search(SearchTarget.directory(str(tmp_path)), "foo", False)

    assert matches == [Match(f"{tmp_path}/b.txt", 1, "has foo")]


def test_recursive_directory_search_descends(tmp_path, searcher):
    nested = tmp_path / "x" / "y"
    nested.mkdir(parents=True)
    (nested / "deep.txt").write_text("skip\nfoo deep\n")

    target = SearchTarget.directory(str(tmp_path))

    assert searcher.search(target, "foo", False) == []
    assert searcher.search(target, "foo", True) == [Match(f"{tmp_path}/x/y/deep.txt", 2, "foo deep")]


def test_directory_results_are_sorted_by_path(tmp_path, searcher):
    (tmp_path / "x.txt").write_text("foo x\n")
    (tmp_path / "a.txt").write_text("foo a 1\nfoo a 2\n")
    (tmp_path / "m.txt").write_text("foo m\n")

    matches = searcher.search(SearchTarget.directory(str(tmp_path)), "foo", False)

    assert [m.path for m in matches] == [
        f"{tmp_path}/a.txt",
        f"{tmp_path}/a.txt",
        f"{tmp_path}/m.txt",
        f"{tmp_path}/x.txt",
    ]
    # Lines of one file keep their order
    assert [m.line_number for m in matches[:2]] == [1, 2]


def test_missing_directory_returns_none(tmp_path, searcher):
    assert searcher.search(SearchTarget.directory(str(tmp_path / "gone")), "foo", True) is None


def test_directory_with_no_matches_returns_empty_list(tmp_path, searcher):
    (tmp_path / "a.txt").write_text("bar\n")

    assert searcher.search(SearchTarget.directory(str(tmp_path)), "foo", True) == []


def test_unreadable_children_are_skipped(tmp_path, searcher):
    (tmp_path / "bad.bin").write_bytes(b"\xff\xfe foo")
    (tmp_path / "good.txt").write_text("foo\n")

    matches = searcher.search(SearchTarget.directory(str(tmp_path)), "foo", False)

    assert matches == [Match(f"{tmp_path}/good.txt", 1, "foo")]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_symlinked_entries_are_not_followed(tmp_path, searcher):
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "target.txt").write_text("foo\n")

    root = tmp_path / "root"
    root.mkdir()
    os.symlink(outside / "target.txt", root / "link.txt")
    os.symlink(outside, root / "linkdir")

    assert searcher.search(SearchTarget.directory(str(root)), "foo", True) == []


def test_trailing_slash_does_not_double_separators(tmp_path, searcher):
    (tmp_path / "a.txt").write_text("foo\n")

    matches = searcher.search(SearchTarget.directory(f"{tmp_path}/"), "foo", False)

    assert matches[0].path == f"{tmp_path}/a.txt"


def test_concrete_scenario(sample_tree, monkeypatch, searcher):
    monkeypatch.chdir(sample_tree.parent)
    target = SearchTarget.directory("d")

    assert searcher.search(target, "foo", False) == [Match("d/one.txt", 1, "foo bar")]
    assert searcher.search(target, "foo", True) == [
        Match("d/one.txt", 1, "foo bar"),
        Match("d/sub/two.txt", 2, "foo again"),
    ]


class _FakeEntry:
    def __init__(self, directory, name):
        self.name = name
        self.path = f"{directory}/{name}"

    def is_file(self, follow_symlinks=True):
        return True

    def is_dir(self, follow_symlinks=True):
        return False


class _BrokenListing:
    """Yields the given entries, then fails like a directory read error."""

    def __init__(self, entries):
        self._entries = iter(entries)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def __iter__(self):
        return self

    def __next__(self):
        try:
            return next(self._entries)
        except StopIteration:
            raise OSError("Input/output error")


def test_listing_error_keeps_matches_already_found(tmp_path, monkeypatch, searcher):
    (tmp_path / "a.txt").write_text("foo a\n")
    (tmp_path / "b.txt").write_text("foo b\n")

    from grepr.features.search.data import target_searcher
    monkeypatch.setattr(
        target_searcher.os, "scandir",
        lambda path: _BrokenListing([_FakeEntry(path, "b.txt"), _FakeEntry(path, "a.txt")])
    )

    matches = searcher.search(SearchTarget.directory(str(tmp_path)), "foo", False)

    assert matches == [
        Match(f"{tmp_path}/a.txt", 1, "foo a"),
        Match(f"{tmp_path}/b.txt", 1, "foo b"),
    ]
