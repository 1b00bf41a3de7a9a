"""
Unit tests for the snapshot store.

Storage contract:
- Missing file -> empty index (first run)
- Corrupt / wrong-shaped file -> SnapshotError
- JSON schema: {group: {location: {key: record}}}, absent optional fields omitted
"""

import json
import tempfile
import unittest
from pathlib import Path

from loiwatch.errors import SnapshotError
from loiwatch.index import build_index
from loiwatch.model import LocationRecord
from loiwatch.storage import load_snapshot, save_snapshot


class TestStorage(unittest.TestCase):
    def test_load_missing_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "missing.json"
            self.assertEqual(load_snapshot(p), {})

    def test_save_and_load(self) -> None:
        index = build_index({
            "Testing Sites": [
                LocationRecord("Test Site", "123 Main St", "Monday", "9am-5pm", "Bring ID"),
                LocationRecord("Test Site", "123 Main St", "Tuesday", "9am-5pm", ""),
            ]
        })
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "nested" / "snapshot.json"
            save_snapshot(index, p)
            self.assertEqual(load_snapshot(p), index)

            data = json.loads(p.read_text(encoding="utf-8"))
            monday = data["Testing Sites"]["Test Site"]["Monday-9am-5pm"]
            self.assertEqual(monday["instructions"], "Bring ID")
            self.assertNotIn("dateAdded", monday)

            # no temp files left behind
            self.assertEqual([x.name for x in p.parent.iterdir()], ["snapshot.json"])

    def test_save_overwrites_whole_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "snapshot.json"
            save_snapshot(build_index({"G": [LocationRecord("A", "x", "Mon", "1pm")]}), p)
            save_snapshot({}, p)
            self.assertEqual(load_snapshot(p), {})

    def test_corrupt_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "snapshot.json"
            p.write_text("{not json", encoding="utf-8")
            with self.assertRaises(SnapshotError):
                load_snapshot(p)

    def test_flat_array_format_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "snapshot.json"
            p.write_text(json.dumps({"G": [{"location": "A"}]}), encoding="utf-8")
            with self.assertRaises(SnapshotError):
                load_snapshot(p)


if __name__ == "__main__":
    unittest.main()
