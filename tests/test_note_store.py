import json
import os
import tempfile
import unittest
from pathlib import Path

from notes.model import TimeNote
from notes.store import NoteStore


class TestNoteStoreLoad(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.dir = Path(self._td.name)
        self.path = self.dir / "chronos_notes.json"

    def tearDown(self) -> None:
        self._td.cleanup()

    def test_missing_file_is_empty(self) -> None:
        store = NoteStore(str(self.path))
        self.assertEqual(store.load(), {})
        self.assertEqual(len(store), 0)
        self.assertFalse(self.path.exists())

    def test_invalid_json_is_empty(self) -> None:
        self.path.write_text("not json", encoding="utf-8")
        store = NoteStore.open(str(self.path))
        self.assertEqual(len(store), 0)
        self.assertEqual(store.load(), {})

    def test_deeply_nested_json_is_empty(self) -> None:
        self.path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
        store = NoteStore(str(self.path))
        with self.assertLogs("notes.store", level="WARNING"):
            self.assertEqual(store.load(), {})
        self.assertEqual(len(store), 0)

    def test_structurally_different_content_is_empty(self) -> None:
        bad_payloads = [
            [1, 2, 3],
            {"2024-01-01-5": "just a string"},
            {"2024-01-01-5": {"content": "x"}},
            {"2024-01-01-5": {"content": 7, "is_locked": False}},
            {"2024-01-01-5": {"content": "x", "is_locked": "no"}},
            {"ok-1": {"content": "a", "is_locked": False}, "bad-2": {"is_locked": False}},
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                self.path.write_text(json.dumps(payload), encoding="utf-8")
                self.assertEqual(NoteStore(str(self.path)).load(), {})

    def test_extra_fields_are_ignored(self) -> None:
        payload = {"2024-01-01-5": {"content": "x", "is_locked": False, "mood": "calm"}}
        self.path.write_text(json.dumps(payload), encoding="utf-8")
        store = NoteStore.open(str(self.path))
        self.assertEqual(store.get("2024-01-01-5"), TimeNote("x", False))

    def test_locked_flag_survives_round_trip(self) -> None:
        payload = {"2023-12-31-23": {"content": "old", "is_locked": True}}
        self.path.write_text(json.dumps(payload), encoding="utf-8")
        store = NoteStore.open(str(self.path))
        self.assertTrue(store.persist())
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), payload)

    def test_load_replaces_in_memory_state(self) -> None:
        store = NoteStore(str(self.path))
        store.put("2024-01-01-1", "one")
        self.path.write_text("{}", encoding="utf-8")
        self.assertEqual(store.load(), {})
        self.assertIsNone(store.get("2024-01-01-1"))


class TestNoteStoreWrite(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.path = Path(self._td.name) / "chronos_notes.json"
        self.store = NoteStore(str(self.path))

    def tearDown(self) -> None:
        self._td.cleanup()

    def test_round_trip(self) -> None:
        notes = {
            "2024-01-01-0": TimeNote("# Dawn\n- tea", False),
            "2024-01-01-11": TimeNote("", False),
            "2024-02-29-23": TimeNote("ünïcødé ✓", True),
        }
        self.store.notes = dict(notes)
        self.assertTrue(self.store.persist())
        self.assertEqual(NoteStore(str(self.path)).load(), notes)

    def test_morning_reflection_scenario(self) -> None:
        self.store.put("2024-01-01-5", "Morning reflection")
        self.assertTrue(self.store.persist())
        loaded = NoteStore(str(self.path)).load()
        self.assertEqual(loaded, {"2024-01-01-5": TimeNote("Morning reflection", False)})
        self.assertFalse(loaded["2024-01-01-5"].is_locked)

    def test_put_persists_immediately(self) -> None:
        self.store.put("2024-01-01-5", "draft")
        on_disk = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(on_disk, {"2024-01-01-5": {"content": "draft", "is_locked": False}})

    def test_file_is_pretty_printed(self) -> None:
        self.store.put("2024-01-01-5", "x")
        text = self.path.read_text(encoding="utf-8")
        self.assertIn('\n  "2024-01-01-5": {\n    "content": "x",', text)

    def test_empty_content_keeps_key(self) -> None:
        self.store.put("2024-01-01-5", "typed")
        self.store.put("2024-01-01-5", "")
        note = self.store.get("2024-01-01-5")
        self.assertIsNotNone(note)
        self.assertEqual(note.content, "")
        self.assertTrue(self.store.has_note("2024-01-01-5"))
        self.assertIn("2024-01-01-5", self.store)

    def test_overwrite_touches_only_that_key(self) -> None:
        self.store.put("2024-01-01-5", "five")
        self.store.put("2024-01-01-6", "six")
        self.store.put("2024-01-01-5", "five again")
        self.assertEqual(self.store.get("2024-01-01-5").content, "five again")
        self.assertEqual(self.store.get("2024-01-01-6").content, "six")
        self.assertEqual(len(self.store), 2)

    def test_latest_put_wins(self) -> None:
        self.store.put("2024-01-01-5", "first")
        self.store.put("2024-01-01-5", "second")
        self.assertEqual(self.store.get("2024-01-01-5").content, "second")
        reloaded = NoteStore.open(str(self.path))
        self.assertEqual(reloaded.get("2024-01-01-5").content, "second")

    def test_get_absent_key(self) -> None:
        self.assertIsNone(self.store.get("2024-01-01-5"))
        self.assertFalse(self.store.has_note("2024-01-01-5"))

    def test_persist_overwrites_whole_file(self) -> None:
        self.path.write_text(json.dumps({"stale-1": {"content": "old", "is_locked": False}}), encoding="utf-8")
        self.store.put("2024-01-01-5", "new")
        on_disk = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(list(on_disk), ["2024-01-01-5"])

    def test_write_failure_is_swallowed(self) -> None:
        # 目錄當作檔案寫入一定失敗
        blocked = Path(self._td.name) / "a_directory"
        os.mkdir(blocked)
        store = NoteStore(str(blocked))
        with self.assertLogs("notes.store", level="WARNING"):
            store.put("2024-01-01-5", "lost")
            self.assertFalse(store.persist())
        self.assertEqual(store.get("2024-01-01-5").content, "lost")


if __name__ == "__main__":
    unittest.main()
