"""
Xfile core package.

Filter predicates, the directory traversal engine and line scans.
"""
from __future__ import annotations

from Xfile.core.filters import FilterKind, PathFilter
from Xfile.core.lines import grep, head, line_count, line_count_or_raise, tail
from Xfile.core.result import EntryKind, ErrorPolicy, InvalidRootError, Result, XfileError
from Xfile.core.search import grep_rl
from Xfile.core.traversal import TraversalConfig, ls, ls_or_raise, walk

__all__ = [
    "EntryKind",
    "ErrorPolicy",
    "FilterKind",
    "InvalidRootError",
    "PathFilter",
    "Result",
    "TraversalConfig",
    "XfileError",
    "grep",
    "grep_rl",
    "head",
    "line_count",
    "line_count_or_raise",
    "ls",
    "ls_or_raise",
    "tail",
    "walk",
]
