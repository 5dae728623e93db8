"""Tests for grep, head, tail and line counting on single files."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Any, List

import pytest

from Xfile.core.lines import grep, head, line_count, line_count_or_raise, tail
from Xfile.utils import file_loader

A_TXT = "support/a.txt"
B = "support/b"


@pytest.fixture
def opened_files(monkeypatch: pytest.MonkeyPatch) -> List[Any]:
    """Record every file handle the line reader opens."""
    handles: List[Any] = []
    real_open = open

    def tracking_open(*args: Any, **kwargs: Any) -> Any:
        f = real_open(*args, **kwargs)
        handles.append(f)
        return f

    monkeypatch.setattr(file_loader, "open", tracking_open, raising=False)
    return handles


def test_grep_matches_lines_using_string(support: str) -> None:
    """Test substring grep."""
    assert list(grep("duck", B)) == ["1 duck\n", "2 duck\n", "4 duck\n"]


def test_grep_matches_lines_using_regex(support: str) -> None:
    """Test regex grep."""
    assert list(grep(re.compile(r"duck"), B)) == ["1 duck\n", "2 duck\n", "4 duck\n"]


def test_grep_matches_lines_using_function(support: str) -> None:
    """Test grep with a predicate over each line."""
    def over_two(line: str) -> bool:
        num, _ = line.split(" ")
        return int(num) > 2

    assert list(grep(over_two, B)) == ["3 goose\n", "4 duck\n"]


def test_grep_matches_lines_using_substring_set(support: str) -> None:
    """Test grep with several alternative substrings."""
    assert list(grep(["goose", "1 "], B)) == ["1 duck\n", "3 goose\n"]


def test_grep_single_match(support: str) -> None:
    """Test the documented single-file scenario."""
    assert list(grep("xyz", A_TXT)) == ["xyz\n"]


def test_grep_no_match(support: str) -> None:
    """Test that grep yields nothing when nothing matches."""
    assert list(grep("swan", B)) == []


def test_grep_is_repeatable(support: str) -> None:
    """Test that two grep calls on an unchanged file agree."""
    assert list(grep("duck", B)) == list(grep("duck", B))


def test_grep_missing_file_raises_when_consumed(tmp_path: Path) -> None:
    """Test that I/O failures surface from the sequence."""
    matches = grep("x", tmp_path / "missing.txt")

    with pytest.raises(FileNotFoundError):
        next(matches)


def test_grep_rejects_bad_pattern_immediately(support: str) -> None:
    """Test that pattern shapes are validated when grep is called."""
    with pytest.raises(TypeError):
        grep(42, B)  # type: ignore[arg-type]


def test_grep_abandoned_releases_handle(support: str, opened_files: List[Any]) -> None:
    """Test that closing a half-read grep closes the file."""
    matches = grep("duck", B)
    assert next(matches) == "1 duck\n"
    assert len(opened_files) == 1
    assert not opened_files[0].closed

    matches.close()

    assert opened_files[0].closed


def test_head_returns_the_top_n_lines(support: str) -> None:
    """Test head on the documented scenario."""
    assert list(head(A_TXT, 2)) == ["this\n", "has\n"]


def test_head_more_than_available(support: str) -> None:
    """Test that head stops at end of file."""
    assert list(head(A_TXT, 100)) == ["this\n", "has\n", "some\n", "text\n", "xyz\n"]


def test_head_releases_handle(support: str, opened_files: List[Any]) -> None:
    """Test that head closes the file once it has n lines."""
    assert list(head(A_TXT, 1)) == ["this\n"]

    assert opened_files
    assert all(f.closed for f in opened_files)


@pytest.mark.parametrize("bad", [0, -1, 1.5, "2", True])
def test_head_rejects_non_positive_n(support: str, bad: Any) -> None:
    """Test that head validates n before touching the file."""
    with pytest.raises(ValueError):
        head(A_TXT, bad)


def test_head_validates_before_io(tmp_path: Path) -> None:
    """Test that a bad n wins over a missing file."""
    with pytest.raises(ValueError):
        head(tmp_path / "missing.txt", 0)


def test_tail_returns_the_last_n_lines(support: str) -> None:
    """Test tail on the documented scenario."""
    assert list(tail(A_TXT, 2)) == ["text\n", "xyz\n"]


def test_tail_more_than_available(support: str) -> None:
    """Test that tail returns the whole file when n exceeds its length."""
    assert list(tail(A_TXT, 5)) == list(head(A_TXT, 5))
    assert list(tail(A_TXT, 50)) == ["this\n", "has\n", "some\n", "text\n", "xyz\n"]


def test_tail_unterminated_last_line(tmp_path: Path) -> None:
    """Test that a final line without newline is returned as-is."""
    path = tmp_path / "log.txt"
    path.write_bytes(b"one\ntwo\nthree")

    assert list(tail(path, 2)) == ["two\n", "three"]


def test_tail_releases_handles(support: str, opened_files: List[Any]) -> None:
    """Test that both tail passes close their files."""
    list(tail(A_TXT, 1))

    assert all(f.closed for f in opened_files)


@pytest.mark.parametrize("bad", [0, -3])
def test_tail_rejects_non_positive_n(support: str, bad: int) -> None:
    """Test that tail validates n."""
    with pytest.raises(ValueError):
        tail(A_TXT, bad)


def test_lines_keep_carriage_returns(tmp_path: Path) -> None:
    """Test that lines are split on newline only."""
    path = tmp_path / "dos.txt"
    path.write_bytes(b"a\r\nb\r\n")

    assert list(head(path, 5)) == ["a\r\n", "b\r\n"]


def test_undecodable_bytes_are_replaced(tmp_path: Path) -> None:
    """Test the default decoding error handler."""
    path = tmp_path / "latin.txt"
    path.write_bytes(b"caf\xe9\n")

    assert list(head(path, 1)) == ["caf\ufffd\n"]
    assert list(head(path, 1, encoding="latin-1")) == ["caf\xe9\n"]


def test_line_count_ok(support: str) -> None:
    """Test counting lines of a regular file."""
    result = line_count(A_TXT)

    assert result.ok
    assert result.value == 5


def test_line_count_error_on_directory(support: str) -> None:
    """Test that directories are reported as failures."""
    result = line_count(support)

    assert not result.ok
    assert "directory" in result.error


def test_line_count_unterminated_last_line(tmp_path: Path) -> None:
    """Test the off-by-one boundary: an unterminated last line still counts."""
    path = tmp_path / "partial.txt"
    path.write_bytes(b"a\nb")

    assert line_count(path).value == 2


def test_line_count_empty_file(tmp_path: Path) -> None:
    """Test counting an empty file."""
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")

    assert line_count_or_raise(path) == 0


def test_line_count_or_raise_ok(support: str) -> None:
    """Test the raising variant on a regular file."""
    assert line_count_or_raise(A_TXT) == 5


def test_line_count_or_raise_raises_error_on_directory(support: str) -> None:
    """Test that the raising variant propagates the OS error."""
    with pytest.raises(OSError):
        line_count_or_raise(support)


def test_line_count_or_raise_missing_file(tmp_path: Path) -> None:
    """Test that missing files propagate."""
    with pytest.raises(FileNotFoundError):
        line_count_or_raise(tmp_path / "missing.txt")
