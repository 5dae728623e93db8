"""
Line-oriented scans over a single file: grep, head, tail and line counting.

Every function streams the file; nothing holds more than one line in memory.
Argument checks run when the function is called, file access happens when the
returned generator is first pulled.
"""
from __future__ import annotations

import os
from contextlib import closing
from itertools import islice
from typing import Iterator

from Xfile.core.filters import FilterLike, PathFilter
from Xfile.core.result import Result
from Xfile.utils.file_loader import DEFAULT_ENCODING, DEFAULT_ERRORS, PathLike, iter_lines

DEFAULT_LINES = 10


def _check_count(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValueError(f"n must be a positive integer, got {n!r}")
    if n <= 0:
        raise ValueError(f"n must be a positive integer, got {n}")


def grep(
    pattern: FilterLike,
    file: PathLike,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ERRORS,
) -> Iterator[str]:
    """
    Return the lines of ``file`` that match ``pattern``, lazily.

    The pattern can be a substring, a collection of substrings (any may
    match), a compiled regex (searched anywhere in the line), or a function
    that receives each line and returns a bool.

    Args:
        pattern: Line filter
        file: File to search
        encoding: Codec used to decode lines
        errors: Codec error handler

    Returns:
        Generator of matching lines, terminators included

    Example:
        >>> list(grep("build", ".gitignore"))
        ['build/\\n', '*.egg-info/build\\n']
    """
    line_filter = PathFilter.coerce(pattern)
    return iter_matching_lines(line_filter, file, encoding, errors)


def iter_matching_lines(
    line_filter: PathFilter,
    file: PathLike,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ERRORS,
) -> Iterator[str]:
    """Generator behind grep(), for callers that already hold a PathFilter."""
    with closing(iter_lines(file, encoding, errors)) as lines:
        for line in lines:
            if line_filter.matches(line):
                yield line


def head(
    file: PathLike,
    n: int,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ERRORS,
) -> Iterator[str]:
    """
    Return the first ``n`` lines of ``file``; the rest is never read.

    Raises:
        ValueError: If ``n`` is not a positive integer
    """
    _check_count(n)
    return _head(file, n, encoding, errors)


def _head(file: PathLike, n: int, encoding: str, errors: str) -> Iterator[str]:
    with closing(iter_lines(file, encoding, errors)) as lines:
        yield from islice(lines, n)


def tail(
    file: PathLike,
    n: int,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ERRORS,
) -> Iterator[str]:
    """
    Return the last ``n`` lines of ``file``.

    The file is read twice: once to count its lines, then again to emit the
    ones past ``count - n``. Memory use does not depend on file size.

    Raises:
        ValueError: If ``n`` is not a positive integer
    """
    _check_count(n)
    return _tail(file, n, encoding, errors)


def _tail(file: PathLike, n: int, encoding: str, errors: str) -> Iterator[str]:
    start = line_count_or_raise(file) - n
    with closing(iter_lines(file, encoding, errors)) as lines:
        yield from islice(lines, max(start, 0), None)


def line_count_or_raise(file: PathLike) -> int:
    """
    Count the lines in ``file``, like ``wc -l``.

    This counts line segments, so a final line without a trailing newline is
    still counted once.

    Raises:
        OSError: If the file cannot be read (IsADirectoryError for directories)
    """
    with open(file, "rb") as f:
        return sum(1 for _ in f)


def line_count(file: PathLike) -> Result[int]:
    """
    Count the lines in ``file``; directories are reported, not raised.

    Returns:
        Result with the line count, or a failure if ``file`` is a directory

    Example:
        >>> line_count("README.md")
        Result(ok=True, value=27, error=None)
        >>> line_count("/tmp").ok
        False
    """
    if os.path.isdir(file):
        return Result.failure(f"{os.fspath(file)} is a directory")
    return Result.success(line_count_or_raise(file))


__all__ = ["DEFAULT_LINES", "grep", "head", "iter_matching_lines", "line_count", "line_count_or_raise", "tail"]
