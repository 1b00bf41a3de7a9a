"""
Change detection between two indexes.

A path is (group, location, composite key). Every path in either index ends
up as exactly one of: unchanged, added, updated or removed.

Emission order: all added/updated events in current-index order, then all
removed events in baseline-index order.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from loiwatch.model import ChangeEvent, ChangeType, Index, LocationRecord


def _paths(index: Index) -> Iterator[Tuple[str, str, str, LocationRecord]]:
    for group, locations in index.items():
        for name, instances in locations.items():
            for key, record in instances.items():
                yield group, name, key, record


def _lookup(index: Index, group: str, name: str, key: str) -> LocationRecord | None:
    # a missing group or location is just an empty level
    return index.get(group, {}).get(name, {}).get(key)


def diff_indexes(baseline: Index, current: Index) -> List[ChangeEvent]:
    """
    Compare baseline against current and return the change events.

    Pure and total: empty indexes are fine (empty baseline => everything added).
    """
    changes: List[ChangeEvent] = []

    for group, name, key, record in _paths(current):
        previous = _lookup(baseline, group, name, key)
        if previous is None:
            changes.append(ChangeEvent(ChangeType.ADDED, group, record))
        elif previous != record:
            changes.append(ChangeEvent(ChangeType.UPDATED, group, record))

    for group, name, key, record in _paths(baseline):
        if _lookup(current, group, name, key) is None:
            changes.append(ChangeEvent(ChangeType.REMOVED, group, record))

    return changes
