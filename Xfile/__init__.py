"""
Xfile - augmentations of the standard file API.

Lazy recursive directory listing with depth limits and filters, grep,
grep -rl, head, tail and line counting.
"""
from __future__ import annotations

__version__ = "0.1.0"

from Xfile.core.filters import FilterKind, PathFilter
from Xfile.core.lines import grep, head, line_count, line_count_or_raise, tail
from Xfile.core.result import EntryKind, ErrorPolicy, InvalidRootError, Result, XfileError
from Xfile.core.search import grep_rl
from Xfile.core.traversal import TraversalConfig, ls, ls_or_raise
from Xfile.utils.path_filters import glob_filter

__all__ = [
    "__version__",
    "EntryKind",
    "ErrorPolicy",
    "FilterKind",
    "InvalidRootError",
    "PathFilter",
    "Result",
    "TraversalConfig",
    "XfileError",
    "glob_filter",
    "grep",
    "grep_rl",
    "head",
    "line_count",
    "line_count_or_raise",
    "ls",
    "ls_or_raise",
    "tail",
]
