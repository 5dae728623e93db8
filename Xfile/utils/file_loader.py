"""
This version:
- Streams a file one line at a time (split on b"\\n" only)
- Keeps line terminators
- Releases the handle when the generator finishes or is closed
- Offers a binary-file heuristic for content searches
"""

from __future__ import annotations

import os
from typing import Iterator, Union

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_ENCODING = "utf-8"
DEFAULT_ERRORS = "replace"
BINARY_PROBE_BYTES = 1024


def _looks_binary(sample: bytes) -> bool:
    """
    Heuristic check for binary content.
    Args:
        sample (bytes): A sample of the file content.

    Returns:
        bool: True if the sample looks binary, False otherwise.
    """
    if not sample:
        return False

    if b"\x00" in sample:
        return True

    nontext = 0
    for byte in sample:
        if byte in b"\t\n\r\f\b":
            continue

        if byte < 32 or byte == 127:
            nontext += 1

    return nontext / len(sample) > 0.3


def looks_binary(path: PathLike, probe_bytes: int = BINARY_PROBE_BYTES) -> bool:
    """
    Probe the head of a file and report whether it looks binary.

    Args:
        path: File to probe
        probe_bytes: How many leading bytes to inspect

    Returns:
        bool: True if the probe looks binary
    """
    with open(path, "rb") as f:
        return _looks_binary(f.read(probe_bytes))


def iter_lines(
    path: PathLike,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ERRORS,
) -> Iterator[str]:
    """
    Lazily iterate over the lines of a file.

    Lines are split on "\\n" only and keep their terminator; a final line
    without a trailing newline is yielded as-is. The file is opened on the
    first pull, not when this function is called.

    Args:
        path: The file to read.
        encoding: Codec used to decode each line.
        errors: Codec error handler.

    Yields:
        str: One decoded line at a time
    """
    with open(path, "rb") as f:
        for raw in f:
            yield raw.decode(encoding, errors)


__all__ = [
    "BINARY_PROBE_BYTES",
    "DEFAULT_ENCODING",
    "DEFAULT_ERRORS",
    "PathLike",
    "iter_lines",
    "looks_binary",
]
