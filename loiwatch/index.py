"""
Composite indexing.

Builds the nested lookup used for diffing and for the stored snapshot:

    group -> location name -> composite schedule key -> record

The composite key joins day and times, turns "." into ":" and drops all
whitespace, so "9.00am - 5.00pm" and "9:00am-5:00pm" produce the same key.
Schedules that differ only in that punctuation are therefore treated as the
same visit.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping

from loiwatch.model import Index, LocationRecord

_WHITESPACE = re.compile(r"\s")


def composite_key(day: str, times: str) -> str:
    return _WHITESPACE.sub("", f"{day} - {times}".replace(".", ":"))


def index_records(records: Iterable[LocationRecord]) -> Dict[str, Dict[str, LocationRecord]]:
    """
    Group records by location name, then key them by composite schedule key.

    A later record with the same (location, key) replaces the earlier one.
    """
    indexed: Dict[str, Dict[str, LocationRecord]] = {}
    for record in records:
        instances = indexed.setdefault(record.location, {})
        instances[composite_key(record.day, record.times)] = record
    return indexed


def build_index(groups: Mapping[str, Iterable[LocationRecord]]) -> Index:
    return {group: index_records(records) for group, records in groups.items()}
