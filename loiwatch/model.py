"""
Central data model definitions used across the project.

This module defines the canonical structure of LocationRecord and ChangeEvent
objects so that:
- parsing, indexing, diffing and publishing share the same field names
- the persisted snapshot and published messages keep a stable JSON shape

JSON uses camelCase keys ("dateAdded", "changeType") because that is the
format stored snapshots and downstream consumers already expect.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LocationRecord:
    """
    One published location of interest (site + schedule).

    Optional fields use None for "absent"; an empty string is a present value.
    """

    location: str
    address: str
    day: str
    times: str
    instructions: Optional[str] = None
    date_added: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        data = {
            "location": self.location,
            "address": self.address,
            "day": self.day,
            "times": self.times,
        }
        # absent optional fields are left out so they stay distinct from ""
        if self.instructions is not None:
            data["instructions"] = self.instructions
        if self.date_added is not None:
            data["dateAdded"] = self.date_added
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LocationRecord":
        return cls(
            location=str(data.get("location", "")),
            address=str(data.get("address", "")),
            day=str(data.get("day", "")),
            times=str(data.get("times", "")),
            instructions=_optional_str(data.get("instructions")),
            date_added=_optional_str(data.get("dateAdded")),
        )


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class ChangeType(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    UPDATED = "updated"


@dataclass(frozen=True)
class ChangeEvent:
    """
    One classified difference between the baseline and the current index.
    """

    change_type: ChangeType
    group: str
    location: LocationRecord

    def to_dict(self) -> Dict[str, Any]:
        return {
            "changeType": self.change_type.value,
            "group": self.group,
            "location": self.location.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChangeEvent":
        return cls(
            change_type=ChangeType(data["changeType"]),
            group=str(data.get("group", "")),
            location=LocationRecord.from_dict(data.get("location") or {}),
        )


# group -> location name -> composite schedule key -> record
Index = Dict[str, Dict[str, Dict[str, LocationRecord]]]


def index_to_dict(index: Index) -> Dict[str, Dict[str, Dict[str, Dict[str, str]]]]:
    """
    Convert an Index into plain JSON-serializable dictionaries.
    """
    return {
        group: {
            name: {key: record.to_dict() for key, record in instances.items()}
            for name, instances in locations.items()
        }
        for group, locations in index.items()
    }


def index_from_dict(data: Dict[str, Any]) -> Index:
    """
    Rebuild an Index from its JSON form.

    Raises ValueError/TypeError if any level is not a JSON object.
    """
    if not isinstance(data, dict):
        raise TypeError(f"Index must be a JSON object, got {type(data).__name__}")

    index: Index = {}
    for group, locations in data.items():
        if not isinstance(locations, dict):
            raise TypeError(f"Group {group!r} must map location names to schedules")
        index[group] = {}
        for name, instances in locations.items():
            if not isinstance(instances, dict):
                raise TypeError(f"Location {name!r} in group {group!r} must map keys to records")
            index[group][name] = {}
            for key, record in instances.items():
                if not isinstance(record, dict):
                    raise TypeError(f"Record {key!r} of {name!r} must be a JSON object")
                index[group][name][key] = LocationRecord.from_dict(record)
    return index
