from __future__ import annotations

import fnmatch
import os
import posixpath
from typing import Iterable, Union

from Xfile.core.filters import FilterKind, PathFilter


def _glob_matches(path: str, pattern: str) -> bool:
    """
    Minimal shell-glob matching against a path string.

    Semantics:
      - A pattern without '/' is matched against the last path segment only,
        so '*.log' matches 'logs/app/server.log'.
      - A pattern containing '/' is matched against the whole posix-style path,
        with an implied '**/' prefix so 'd1/*.txt' matches 'root/d1/b1.txt'.
      - Matching is case-sensitive on every platform.
    """
    target = path.replace(os.sep, "/") if os.sep != "/" else path
    if "/" not in pattern:
        return fnmatch.fnmatchcase(posixpath.basename(target), pattern)
    if fnmatch.fnmatchcase(target, pattern):
        return True
    return fnmatch.fnmatchcase(target, f"*/{pattern.lstrip('/')}")


def glob_filter(patterns: Union[str, Iterable[str]]) -> PathFilter:
    """
    Build a predicate filter from one or more shell globs.

    The result can be passed anywhere a filter is accepted, e.g.
    ``ls("logs", filter=glob_filter("*.log"))``.

    Args:
        patterns: A glob or a collection of globs; a path matching any of
            them is included

    Returns:
        PathFilter of kind PREDICATE
    """
    if isinstance(patterns, str):
        globs = (patterns,)
    else:
        globs = tuple(patterns)

    def _match(path: str) -> bool:
        return any(_glob_matches(path, g) for g in globs)

    return PathFilter(kind=FilterKind.PREDICATE, predicate=_match)


__all__ = ["glob_filter"]
