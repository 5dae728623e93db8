"""
Xfile utilities package.

Provides line streaming, binary detection and glob path filters.
"""
from __future__ import annotations

from Xfile.utils.file_loader import iter_lines, looks_binary
from Xfile.utils.log import setup_logging

__all__ = [
    "iter_lines",
    "looks_binary",
    "setup_logging",
]
