import datetime
import unittest

from notes.model import TimeNote, deserialize_notes, note_key, serialize_notes


class TestNoteKey(unittest.TestCase):
    def test_hour_is_not_zero_padded(self) -> None:
        day = datetime.date(2024, 1, 1)
        self.assertEqual(note_key(5, day), "2024-01-01-5")
        self.assertEqual(note_key(0, day), "2024-01-01-0")
        self.assertEqual(note_key(23, day), "2024-01-01-23")

    def test_defaults_to_today(self) -> None:
        today = datetime.date.today().strftime("%Y-%m-%d")
        self.assertEqual(note_key(7), f"{today}-7")

    def test_out_of_range_hour(self) -> None:
        for bad in (-1, 24, 99):
            with self.subTest(hour=bad):
                with self.assertRaises(ValueError):
                    note_key(bad, datetime.date(2024, 1, 1))


class TestSerialization(unittest.TestCase):
    def test_serialize_shape(self) -> None:
        out = serialize_notes({"2024-01-01-5": TimeNote("hi")})
        self.assertEqual(out, {"2024-01-01-5": {"content": "hi", "is_locked": False}})

    def test_deserialize_rejects_non_object(self) -> None:
        for bad in ([], "x", 3, None):
            with self.subTest(obj=bad):
                with self.assertRaises(ValueError):
                    deserialize_notes(bad)

    def test_deserialize_empty_object(self) -> None:
        self.assertEqual(deserialize_notes({}), {})

    def test_record_defaults_unlocked(self) -> None:
        self.assertFalse(TimeNote("x").is_locked)


if __name__ == "__main__":
    unittest.main()
