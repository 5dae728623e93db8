from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class XfileError(Exception):
    """Base exception for failures reported by Xfile operations."""

    pass


class InvalidRootError(XfileError):
    """Raised when a listing root is not a directory."""

    pass


class EntryKind(Enum):
    """Type of a directory entry, as reported by stat."""
    DIRECTORY = "directory"
    FILE = "file"
    OTHER = "other"


class ErrorPolicy(Enum):
    """What the traversal does when a subdirectory cannot be listed."""
    WARN = "warn"
    LEAF = "leaf"
    RAISE = "raise"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of an operation that can fail without raising.

    Attributes:
        ok: True on success
        value: The payload (a lazy sequence, a count, ...) on success
        error: Human readable reason on failure
    """
    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str) -> "Result[Any]":
        return cls(ok=False, error=reason)

    def unwrap(self, exc_type: type[XfileError] = XfileError) -> T:
        """
        Return the value on success, raise on failure.

        Args:
            exc_type: XfileError subclass to raise with the failure reason

        Returns:
            The wrapped value
        """
        if not self.ok:
            raise exc_type(self.error or "operation failed")
        return self.value  # type: ignore[return-value]

    def __bool__(self) -> bool:
        return self.ok

    def __str__(self) -> str:
        if self.ok:
            return f"ok: {self.value!r}"
        return f"error: {self.error}"


__all__ = [
    "EntryKind",
    "ErrorPolicy",
    "InvalidRootError",
    "Result",
    "XfileError",
]
