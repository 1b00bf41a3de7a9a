"""
Exception types raised by loiwatch.

Parsing errors are fatal for a sync run: they abort before anything is
published or written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from loiwatch.model import ChangeEvent


class LoiWatchError(Exception):
    """Base class for all loiwatch errors."""


class StructureError(LoiWatchError):
    """The page does not contain the expected content region."""


class HeaderResolutionError(LoiWatchError):
    """A required column could not be found in a table header."""

    def __init__(self, role: str, headers: List[str]) -> None:
        super().__init__(f"Cannot find column for {role!r} in header {headers!r}")
        self.role = role
        self.headers = headers


class SnapshotError(LoiWatchError):
    """The stored snapshot exists but cannot be read as an index."""


class PublishError(LoiWatchError):
    """One or more change events could not be published."""

    def __init__(self, failures: List[Tuple["ChangeEvent", BaseException]]) -> None:
        first = failures[0][1] if failures else None
        super().__init__(f"{len(failures)} change event(s) failed to publish (first error: {first!r})")
        self.failures = failures
