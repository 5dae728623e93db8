from __future__ import annotations

import logging
import os
from contextlib import closing
from typing import Iterator, Union

from Xfile.core.filters import FilterLike, PathFilter
from Xfile.core.lines import iter_matching_lines
from Xfile.core.result import ErrorPolicy
from Xfile.core.traversal import Recursive, ls_or_raise
from Xfile.utils.file_loader import DEFAULT_ENCODING, DEFAULT_ERRORS, PathLike, looks_binary

logger = logging.getLogger(__name__)


def _has_match(line_filter: PathFilter, file: str, encoding: str, errors: str) -> bool:
    # Stop at the first hit; closing() releases the handle right away
    with closing(iter_matching_lines(line_filter, file, encoding, errors)) as matches:
        return next(matches, None) is not None


def grep_rl(
    pattern: FilterLike,
    directory: PathLike,
    recursive: Recursive = True,
    filter: FilterLike = None,
    show_dirs: bool = False,
    on_error: Union[ErrorPolicy, str] = ErrorPolicy.WARN,
    skip_binary: bool = False,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ERRORS,
) -> Iterator[str]:
    """
    Find files under ``directory`` whose content matches ``pattern``.

    Mimics ``grep -rl``: each file is listed at most once, as soon as its
    first matching line is found. Listing options are forwarded to
    ls_or_raise(), so candidates can be narrowed by name before their content
    is read.

    Args:
        pattern: Line filter (substring, substrings, compiled regex or function)
        directory: Root directory
        recursive: Depth option forwarded to ls_or_raise()
        filter: Path filter forwarded to ls_or_raise()
        show_dirs: Forwarded to ls_or_raise(); directories are never grepped
        on_error: Forwarded to ls_or_raise()
        skip_binary: Skip files whose first bytes look binary
        encoding: Codec used to decode lines
        errors: Codec error handler

    Returns:
        Generator of matching file paths

    Raises:
        InvalidRootError: If ``directory`` is not a directory

    Example:
        >>> list(grep_rl("[error]", "tmp/logs", filter=glob_filter("*.log")))
        ['tmp/logs/cache.log', 'tmp/logs/server.1.log']
    """
    line_filter = PathFilter.coerce(pattern)
    candidates = ls_or_raise(directory, recursive, filter, show_dirs, on_error)
    return _grep_rl(line_filter, candidates, skip_binary, encoding, errors)


def _grep_rl(
    line_filter: PathFilter,
    candidates: Iterator[str],
    skip_binary: bool,
    encoding: str,
    errors: str,
) -> Iterator[str]:
    for path in candidates:
        # show_dirs may emit directories; FIFOs and dangling links would block or fail
        if not os.path.isfile(path):
            logger.debug("Not a regular file, skipping %s", path)
            continue
        if skip_binary and looks_binary(path):
            logger.debug("Skipping binary file %s", path)
            continue
        if _has_match(line_filter, path, encoding, errors):
            yield path


__all__ = ["grep_rl"]
