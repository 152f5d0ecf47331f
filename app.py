# app.py
import datetime, logging
import pygame
from typing import List, Optional
from config import AppConfig
from notes.model import note_key
from notes.store import NoteStore
from render.renderer import Renderer, SAVE_LABEL, TOAST_TEXT
from ui.note_editor import NoteEditor

class App:
    def __init__(self, cfg: AppConfig, store: NoteStore):
        self.cfg = cfg
        self.store = store
        self.renderer = Renderer(cfg.render)

        # 狀態
        self.now = datetime.datetime.now()
        self.editor: Optional[NoteEditor] = None

        # UI 訊息（toast）
        self._msg = ""
        self._msg_timers: List[float] = []  # 每次存檔各自一個倒數，互不取消

    # ---------- UI 訊息 ----------
    def _toast(self, msg: str, secs: float):
        self._msg = msg
        self._msg_timers.append(secs)

    @property
    def _msg_time(self) -> float:
        """Seconds until the toast is next hidden (0 when no countdown is pending)."""
        return min(self._msg_timers, default=0.0)

    def _tick_toast(self, dt: float):
        # 任何一個倒數到期就隱藏；較早的存檔不會被後來的存檔延長
        if not self._msg_timers:
            return
        remaining = [t - dt for t in self._msg_timers]
        if any(t <= 0 for t in remaining):
            self._msg = ""
        self._msg_timers = [t for t in remaining if t > 0]

    # ---------- Notes ----------
    def has_note(self, hour: int) -> bool:
        return self.store.has_note(note_key(hour))

    def open_editor(self, hour: int):
        self.editor = NoteEditor((self.cfg.render.window_w, self.cfg.render.window_h), self.store, hour)
        pygame.key.start_text_input()
        logging.debug("Editing note %s", self.editor.key())

    def close_editor(self):
        self.editor = None
        pygame.key.stop_text_input()

    def secure_state(self):
        ok = self.store.persist()
        logging.info("Secure state: %d note(s) -> %s (%s)", len(self.store), self.store.path,
                     "ok" if ok else "failed")
        self._toast(TOAST_TEXT, self.cfg.store.confirm_seconds)

    # ---------- Main loop ----------
    def run(self):
        pygame.key.stop_text_input()
        running = True
        while running:
            dt = self.renderer.tick(self.cfg.render.fps)
            self.now = datetime.datetime.now()
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    running = False; break

                # Ctrl+S 在任何畫面都能存
                if e.type == pygame.KEYDOWN and e.key == pygame.K_s and (e.mod & pygame.KMOD_CTRL):
                    self.secure_state(); continue

                # 編輯器事件先處理
                if self.editor and self.editor.active:
                    self.editor.handle_event(e)
                    continue

                if e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE:
                    running = False; break

                if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    mx, my = e.pos
                    rect = self.renderer.button_rects.get(SAVE_LABEL)
                    if rect and rect.collidepoint(mx, my):
                        self.secure_state(); continue
                    for h, rect in self.renderer.marker_rects.items():
                        if rect.collidepoint(mx, my):
                            self.open_editor(h); break

            if not running: break

            # ===== 訊息倒數（toast） =====
            self._tick_toast(dt)

            if self.editor:
                self.editor.update(dt)
                if self.editor.finished:
                    self.close_editor()

            # ----- Render -----
            self.renderer.begin_frame()
            self.renderer.draw_clock(self.now, self.has_note)
            if self.editor and self.editor.active:
                self.editor.draw(self.renderer.screen)
            if self._msg:
                self.renderer.draw_toast(self._msg)
            self.renderer.end_frame()

        pygame.quit()
