"""
Recursive directory listing.

ls() checks its root eagerly and hands back a generator; the tree itself is
only read as the caller pulls paths out of it, so taking the first few results
of a huge tree costs a few directory reads.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

from Xfile.core.filters import FilterLike, PathFilter
from Xfile.core.result import EntryKind, ErrorPolicy, InvalidRootError, Result
from Xfile.utils.file_loader import PathLike

logger = logging.getLogger(__name__)

Recursive = Union[bool, int, None]


def _max_depth(recursive: Recursive) -> Optional[int]:
    """
    Translate the caller's ``recursive`` option into a depth bound.

    True/None mean unbounded, False means 0 (direct children only) and a
    non-negative int is used as-is.
    """
    if recursive is None or recursive is True:
        return None
    if recursive is False:
        return 0
    if isinstance(recursive, int):
        if recursive < 0:
            raise ValueError(f"recursive depth must be >= 0, got {recursive}")
        return recursive
    raise TypeError(f"recursive must be a bool or a non-negative int, got {recursive!r}")


@dataclass(frozen=True)
class TraversalConfig:
    """
    Options for one listing call.

    Attributes:
        max_depth: Directory levels to descend below the root (None = no limit)
        path_filter: Inclusion test applied to leaf paths
        include_dirs: Emit directories found at the depth bound when they match
        on_error: How to react when a subdirectory cannot be listed
    """
    max_depth: Optional[int] = None
    path_filter: PathFilter = field(default_factory=PathFilter)
    include_dirs: bool = False
    on_error: ErrorPolicy = ErrorPolicy.WARN

    @classmethod
    def from_options(
        cls,
        recursive: Recursive = True,
        filter: FilterLike = None,
        show_dirs: bool = False,
        on_error: Union[ErrorPolicy, str] = ErrorPolicy.WARN,
    ) -> "TraversalConfig":
        """
        Validate caller options and freeze them.

        Raises:
            ValueError: Negative depth or unknown error policy
            TypeError: Unsupported ``recursive`` or ``filter`` shape
        """
        return cls(
            max_depth=_max_depth(recursive),
            path_filter=PathFilter.coerce(filter),
            include_dirs=bool(show_dirs),
            on_error=ErrorPolicy(on_error),
        )

    def descends(self, depth: int) -> bool:
        """True if directories found at ``depth`` are expanded."""
        return self.max_depth is None or depth < self.max_depth


def _entry_kind(entry: os.DirEntry) -> EntryKind:
    # is_dir()/is_file() follow symlinks; a dangling link is neither
    try:
        if entry.is_dir():
            return EntryKind.DIRECTORY
        if entry.is_file():
            return EntryKind.FILE
    except OSError as e:
        logger.debug("Cannot stat %s: %s", entry.path, e)
    return EntryKind.OTHER


def list_entries(directory: str) -> List[Tuple[str, EntryKind]]:
    """
    List one directory, classifying each entry.

    Args:
        directory: Directory to list

    Returns:
        (path, kind) pairs sorted by entry name

    Raises:
        OSError: If the directory cannot be opened
    """
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)
    return [(e.path, _entry_kind(e)) for e in entries]


def _walk(entries: List[Tuple[str, EntryKind]], config: TraversalConfig) -> Iterator[str]:
    """
    Depth-first walk driven by an explicit stack of (entries, depth) pairs.

    Tree depth is bounded by the filesystem, not by the interpreter's
    recursion limit.
    """
    stack: List[Tuple[Iterator[Tuple[str, EntryKind]], int]] = [(iter(entries), 0)]
    while stack:
        children, depth = stack[-1]
        for path, kind in children:
            if kind is not EntryKind.DIRECTORY:
                if config.path_filter.matches(path):
                    yield path
                continue

            if not config.descends(depth):
                if config.include_dirs and config.path_filter.matches(path):
                    yield path
                continue

            try:
                nested = list_entries(path)
            except OSError as e:
                if config.on_error is ErrorPolicy.RAISE:
                    raise
                if config.on_error is ErrorPolicy.LEAF:
                    logger.debug("Cannot list %s, treating it as a file: %s", path, e)
                    if config.path_filter.matches(path):
                        yield path
                else:
                    logger.warning("Skipping directory %s: %s", path, e)
                continue

            # Finish the subdirectory before its next sibling
            stack.append((iter(nested), depth + 1))
            break
        else:
            stack.pop()


def walk(root: PathLike, config: TraversalConfig) -> Iterator[str]:
    """
    Lazily yield the paths under ``root`` selected by ``config``.

    Children of each directory are visited in name order and a directory's
    contents are flattened into the stream before its next sibling. No
    filesystem access happens until the first path is requested.

    Args:
        root: Directory to walk (not re-checked here)
        config: Frozen traversal options

    Yields:
        str: Paths joined onto ``root``
    """
    top = os.fspath(root)
    logger.debug("Walking %s (max_depth=%s)", top, config.max_depth)
    yield from _walk(list_entries(top), config)


def ls(
    directory: PathLike,
    recursive: Recursive = True,
    filter: FilterLike = None,
    show_dirs: bool = False,
    on_error: Union[ErrorPolicy, str] = ErrorPolicy.WARN,
) -> Result[Iterator[str]]:
    """
    List the files under a directory, recursively by default.

    Unlike os.listdir() this returns full paths (relative or absolute, like the
    argument) and a lazy sequence; consume it with list() when needed.

    Args:
        directory: Root directory
        recursive: True for no depth limit, False (or 0) for direct children
            only, N to descend N directory levels below the root
        filter: Substring, collection of substrings, compiled regex, or a
            function of the full path returning a bool
        show_dirs: Also emit directories found at the depth limit
        on_error: What to do when a subdirectory cannot be listed
            ("warn" skips it with a warning, "leaf" treats it as a file,
            "raise" propagates the OSError)

    Returns:
        Result wrapping the path generator, or a failure if ``directory`` is
        not a directory

    Example:
        >>> result = ls("logs", filter=re.compile(r"\\.log$"))
        >>> if result.ok:
        ...     for path in result.value:
        ...         print(path)
    """
    config = TraversalConfig.from_options(recursive, filter, show_dirs, on_error)
    root = os.fspath(directory)

    if not os.path.isdir(root):
        return Result.failure(f"{root} is not a directory")

    return Result.success(walk(root, config))


def ls_or_raise(
    directory: PathLike,
    recursive: Recursive = True,
    filter: FilterLike = None,
    show_dirs: bool = False,
    on_error: Union[ErrorPolicy, str] = ErrorPolicy.WARN,
) -> Iterator[str]:
    """
    As ls(), but returns the generator directly.

    Raises:
        InvalidRootError: If ``directory`` is not a directory
    """
    return ls(directory, recursive, filter, show_dirs, on_error).unwrap(InvalidRootError)


__all__ = ["TraversalConfig", "list_entries", "ls", "ls_or_raise", "walk"]
