# notes/model.py
import datetime
from dataclasses import dataclass
from typing import Dict, Optional

@dataclass(frozen=True)
class TimeNote:
    content: str
    is_locked: bool = False  # 保留欄位：目前永遠為 False，不參與任何邏輯

def note_key(hour: int, today: Optional[datetime.date] = None) -> str:
    """'YYYY-MM-DD-H'，H 不補零。日期一律取「現在」這一刻的日期。"""
    if not 0 <= int(hour) <= 23:
        raise ValueError(f"hour out of range: {hour!r}")
    day = today if today is not None else datetime.date.today()
    return f"{day.strftime('%Y-%m-%d')}-{int(hour)}"

def serialize_notes(notes: Dict[str, TimeNote]) -> dict:
    return {k: {"content": n.content, "is_locked": n.is_locked} for k, n in notes.items()}

def deserialize_notes(obj) -> Dict[str, TimeNote]:
    """Strict inverse of serialize_notes; any structural mismatch raises ValueError."""
    if not isinstance(obj, dict):
        raise ValueError(f"expected an object at top level, got {type(obj).__name__}")
    out: Dict[str, TimeNote] = {}
    for key, rec in obj.items():
        if not isinstance(rec, dict):
            raise ValueError(f"note {key!r}: expected an object")
        content = rec.get("content")
        locked = rec.get("is_locked")
        if not isinstance(content, str):
            raise ValueError(f"note {key!r}: 'content' must be a string")
        if not isinstance(locked, bool):
            raise ValueError(f"note {key!r}: 'is_locked' must be a boolean")
        out[str(key)] = TimeNote(content=content, is_locked=locked)
    return out
