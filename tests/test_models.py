"""Tests for message records, ids and timestamps."""

from __future__ import annotations

from datetime import datetime
import unittest

from pydantic import ValidationError

from aichat.models import Message, Sender, generate_timestamp, new_message_id


class MessageModelTests(unittest.TestCase):
    def test_ids_are_unique_within_a_burst(self) -> None:
        ids = {new_message_id() for _ in range(5000)}
        self.assertEqual(len(ids), 5000)

    def test_factories_set_sender(self) -> None:
        self.assertEqual(Message.from_user("hi").sender, Sender.USER)
        self.assertEqual(Message.from_bot("hi").sender, Sender.BOT)
        self.assertTrue(Message.from_user("hi").is_user)

    def test_records_are_immutable(self) -> None:
        record = Message.from_user("hi")
        with self.assertRaises(ValidationError):
            record.text = "changed"  # type: ignore[misc]

    def test_explicit_timestamp_is_kept(self) -> None:
        self.assertEqual(Message.from_bot("x", timestamp="1:02 PM").timestamp, "1:02 PM")

    def test_timestamp_format(self) -> None:
        self.assertEqual(generate_timestamp(datetime(2024, 1, 1, 0, 5)), "12:05 AM")
        self.assertEqual(generate_timestamp(datetime(2024, 1, 1, 9, 30)), "9:30 AM")
        self.assertEqual(generate_timestamp(datetime(2024, 1, 1, 12, 0)), "12:00 PM")
        self.assertEqual(generate_timestamp(datetime(2024, 1, 1, 23, 59)), "11:59 PM")


if __name__ == "__main__":
    unittest.main()
