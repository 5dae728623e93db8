"""
Filter predicates shared by directory listing and line grep.

A filter is one of a closed set of kinds. Callers hand over whatever shape is
convenient (None, a string, several strings, a compiled regex or a function)
and PathFilter.coerce() turns it into a tagged value once, before any
filesystem work starts.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Pattern, Tuple, Union

Predicate = Callable[[str], Any]
FilterLike = Union[None, str, Iterable[str], Pattern[str], Predicate]


class FilterKind(Enum):
    """Kind of test a PathFilter applies."""
    ANY = "any"
    SUBSTRING = "substring"
    PATTERN = "pattern"
    PREDICATE = "predicate"


@dataclass(frozen=True)
class PathFilter:
    """
    Inclusion test for a candidate path or line.

    Attributes:
        kind: Which test to apply
        substrings: Needles for SUBSTRING filters (match if any is contained)
        pattern: Compiled regex for PATTERN filters (unanchored search)
        predicate: Function for PREDICATE filters (truthy result means include)
    """
    kind: FilterKind = FilterKind.ANY
    substrings: Tuple[str, ...] = ()
    pattern: Optional[Pattern[str]] = None
    predicate: Optional[Predicate] = None

    @classmethod
    def coerce(cls, value: Union[FilterLike, "PathFilter"]) -> "PathFilter":
        """
        Build a PathFilter from any supported filter shape.

        Args:
            value: None, a substring, an iterable of substrings, a compiled
                regex, a one-argument callable, or an existing PathFilter

        Returns:
            PathFilter

        Raises:
            TypeError: If value is none of the supported shapes
        """
        if value is None:
            return cls()
        if isinstance(value, PathFilter):
            return value
        if isinstance(value, str):
            return cls(kind=FilterKind.SUBSTRING, substrings=(value,))
        if isinstance(value, re.Pattern):
            if not isinstance(value.pattern, str):
                raise TypeError("byte patterns are not supported; compile a str pattern")
            return cls(kind=FilterKind.PATTERN, pattern=value)
        if callable(value):
            return cls(kind=FilterKind.PREDICATE, predicate=value)
        if isinstance(value, (list, tuple, set, frozenset)):
            needles = tuple(value)
            if not all(isinstance(n, str) for n in needles):
                raise TypeError("substring filters must contain only strings")
            return cls(kind=FilterKind.SUBSTRING, substrings=needles)

        raise TypeError(
            f"unsupported filter {value!r}: expected None, str, a collection of str, "
            "a compiled regex or a one-argument callable"
        )

    def matches(self, candidate: str) -> bool:
        """
        Decide whether candidate is included.

        Exceptions raised by a PREDICATE filter propagate to the caller.
        """
        if self.kind is FilterKind.ANY:
            return True
        if self.kind is FilterKind.SUBSTRING:
            return any(needle in candidate for needle in self.substrings)
        if self.kind is FilterKind.PATTERN:
            return self.pattern.search(candidate) is not None  # type: ignore[union-attr]
        return bool(self.predicate(candidate))  # type: ignore[misc]

    def __call__(self, candidate: str) -> bool:
        return self.matches(candidate)


__all__ = ["FilterKind", "FilterLike", "PathFilter", "Predicate"]
