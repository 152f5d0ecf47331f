# ========================= config.py =========================
from dataclasses import dataclass, field

@dataclass
class RenderConfig:
    window_w: int = 1200
    window_h: int = 960
    face_scale: float = 1.3   # original face is laid out on an 800x800 grid
    fps: int = 60             # ~16ms per time sample

@dataclass
class StoreConfig:
    notes_path: str = "chronos_notes.json"
    confirm_seconds: float = 2.0  # "TIME VAULT SECURED" toast

@dataclass
class AppConfig:
    render: RenderConfig = field(default_factory=RenderConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
