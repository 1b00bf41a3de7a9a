import unittest

from loiwatch.message import format_change_message
from loiwatch.model import ChangeEvent, ChangeType, LocationRecord

LINK = "https://example.org/loi"
RECORD = LocationRecord("Test Site", "123 Main St", "Monday", "9am-5pm", "Bring ID")


class TestFormatChangeMessage(unittest.TestCase):
    def test_added_message(self) -> None:
        text = format_change_message(ChangeEvent(ChangeType.ADDED, "Testing Sites", RECORD), link=LINK)
        self.assertEqual(
            text,
            "New location of interest (Testing Sites): Test Site, 123 Main St\n"
            "Monday 9am-5pm\n"
            "Bring ID\n"
            "https://example.org/loi",
        )

    def test_removed_message_has_no_instructions(self) -> None:
        text = format_change_message(ChangeEvent(ChangeType.REMOVED, "", RECORD), link=LINK)
        self.assertTrue(text.startswith("Removed location of interest: Test Site"))
        self.assertNotIn("Bring ID", text)

    def test_long_message_is_truncated(self) -> None:
        long_record = LocationRecord("Test Site", "123 Main St", "Monday", "9am-5pm", "x" * 500)
        text = format_change_message(ChangeEvent(ChangeType.UPDATED, "G", long_record), link=LINK, max_length=100)

        self.assertEqual(len(text), 100)
        self.assertTrue(text.endswith("…\n" + LINK))

    def test_link_that_leaves_no_room_raises(self) -> None:
        event = ChangeEvent(ChangeType.ADDED, "G", RECORD)
        with self.assertRaises(ValueError):
            format_change_message(event, link=LINK, max_length=len(LINK))
        with self.assertRaises(ValueError):
            format_change_message(event, link=LINK, max_length=len(LINK) + 1)

    def test_smallest_fitting_limit(self) -> None:
        event = ChangeEvent(ChangeType.ADDED, "G", RECORD)
        text = format_change_message(event, link=LINK, max_length=len(LINK) + 2)
        self.assertEqual(text, "…\n" + LINK)


if __name__ == "__main__":
    unittest.main()
