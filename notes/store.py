# notes/store.py
import json, logging
from typing import Dict, Optional
from notes.model import TimeNote, serialize_notes, deserialize_notes

log = logging.getLogger(__name__)

class NoteStore:
    """
    每小時筆記的 key-value 儲存，背後是一個 JSON 檔：
    - load()：檔案不存在或內容壞掉 -> 空 mapping（不報錯）
    - put()：新增/覆寫後立即 persist()
    - persist()：整份覆寫；寫入失敗只記 log，不往外丟
    """
    def __init__(self, path: str):
        self.path = path
        self.notes: Dict[str, TimeNote] = {}

    @classmethod
    def open(cls, path: str) -> "NoteStore":
        store = cls(path)
        store.load()
        return store

    # ---------- 讀取 ----------
    def load(self) -> Dict[str, TimeNote]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                obj = json.load(f)
            notes = deserialize_notes(obj)
        except FileNotFoundError:
            log.info("No notes file at %s, starting fresh", self.path)
            notes = {}
        except (OSError, ValueError, RecursionError) as e:
            # JSONDecodeError 是 ValueError 的子類；巢狀過深會是 RecursionError
            log.warning("Discarding unreadable notes file %s: %s", self.path, e)
            notes = {}
        self.notes = notes
        log.debug("Loaded %d note(s) from %s", len(notes), self.path)
        return dict(notes)

    def get(self, key: str) -> Optional[TimeNote]:
        return self.notes.get(key)

    def has_note(self, key: str) -> bool:
        return key in self.notes

    def __contains__(self, key: object) -> bool:
        return key in self.notes

    def __len__(self) -> int:
        return len(self.notes)

    # ---------- 寫入 ----------
    def put(self, key: str, content: str):
        # 空字串也照存，key 不會因此被移除
        self.notes[key] = TimeNote(content=content, is_locked=False)
        self.persist()

    def persist(self) -> bool:
        try:
            data = json.dumps(serialize_notes(self.notes), ensure_ascii=False, indent=2)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(data)
            return True
        except (OSError, TypeError, ValueError) as e:
            log.warning("Failed to write notes to %s: %s", self.path, e)
            return False
