# ui/note_editor.py
import datetime, logging
import pygame
from typing import Callable, List, Tuple
from clock.face import marker_label
from notes.model import note_key
from notes.store import NoteStore

GOLD = (212, 175, 55)
GOLD_LIGHT = (252, 246, 186)
TEXT = (204, 204, 204)
PLACEHOLDER = "Commit the essence of this temporal anchor to memory..."

def preview_blocks(text: str) -> List[Tuple[str, str]]:
    """把筆記拆成 (kind, text)：h1/h2/h3 標題、bullet、p、blank。"""
    out: List[Tuple[str, str]] = []
    for raw in text.split("\n"):
        line = raw.rstrip()
        stripped = line.lstrip()
        if not stripped:
            out.append(("blank", ""))
            continue
        hashes = len(stripped) - len(stripped.lstrip("#"))
        if 1 <= hashes <= 3 and stripped[hashes:hashes + 1] == " ":
            out.append((f"h{hashes}", stripped[hashes + 1:].strip()))
        elif stripped[:2] in ("- ", "* "):
            out.append(("bullet", stripped[2:].strip()))
        else:
            out.append(("p", stripped))
    return out

def wrap_text(text: str, width: int, measure: Callable[[str], int]) -> List[str]:
    """Greedy word wrap; a single word wider than width is hard-split."""
    lines: List[str] = []
    for para in text.split("\n"):
        cur = ""
        for word in para.split(" "):
            cand = word if not cur else cur + " " + word
            if measure(cand) <= width:
                cur = cand
                continue
            if cur:
                lines.append(cur)
            cur = word
            while cur and measure(cur) > width:
                cut = len(cur)
                while cut > 1 and measure(cur[:cut]) > width:
                    cut -= 1
                lines.append(cur[:cut]); cur = cur[cut:]
        lines.append(cur)
    return lines

class NoteEditor:
    """單一時標的筆記編輯器（Modal）：每次輸入都直接寫回 store。"""
    def __init__(self, screen_size: Tuple[int, int], store: NoteStore, hour: int,
                 today: Callable[[], datetime.date] = datetime.date.today):
        self.w, self.h = screen_size
        self.store = store
        self.hour = hour
        self.today = today

        self.active = True
        self.finished = False

        self.text = ""
        self._sync()

        self.panel_w = min(850, int(self.w * 0.9))
        self.panel_h = int(self.h * 0.85)
        self.panel = pygame.Rect((self.w - self.panel_w) // 2, (self.h - self.panel_h) // 2,
                                 self.panel_w, self.panel_h)
        pad = 50
        self.btn_lock = pygame.Rect(self.panel.right - pad - 150, self.panel.y + pad, 150, 40)
        self.input_rect = pygame.Rect(self.panel.x + pad, self.panel.y + pad + 110,
                                      self.panel_w - pad * 2, 200)
        self.preview_rect = pygame.Rect(self.panel.x + pad, self.input_rect.bottom + 30,
                                        self.panel_w - pad * 2,
                                        self.panel.bottom - pad - self.input_rect.bottom - 30)

        self._fonts = None
        self._caret_t = 0.0

    def key(self) -> str:
        # 每次都以「現在」的日期重新組 key
        return note_key(self.hour, self.today())

    def _sync(self):
        # 緩衝區永遠跟著目前 key 的內容；跨過午夜就換成新一天（通常是空的）
        existing = self.store.get(self.key())
        self.text = existing.content if existing is not None else ""

    @property
    def title(self) -> str:
        return f"HOUR {marker_label(self.hour)}"

    # ---- 事件 ----
    def close(self):
        self.active = False
        self.finished = True

    def _commit(self, text: str):
        if text == self.text:
            return
        self.text = text
        self.store.put(self.key(), self.text)

    def handle_event(self, e: pygame.event.Event):
        if not self.active:
            return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            if self.btn_lock.collidepoint(e.pos) or not self.panel.collidepoint(e.pos):
                self.close()
            return
        if e.type in (pygame.TEXTINPUT, pygame.KEYDOWN):
            self._sync()
        if e.type == pygame.TEXTINPUT:
            self._commit(self.text + e.text)
            return
        if e.type == pygame.KEYDOWN:
            if e.key == pygame.K_ESCAPE:
                self.close()
            elif e.key == pygame.K_BACKSPACE:
                self._commit(self.text[:-1])
            elif e.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self._commit(self.text + "\n")

    def update(self, dt: float):
        self._sync()
        self._caret_t = (self._caret_t + dt) % 1.0

    # ---- 繪製 ----
    def _ensure_fonts(self):
        if self._fonts is None:
            self._fonts = {
                "title": pygame.font.SysFont("georgia", 44, bold=True),
                "sub": pygame.font.SysFont("georgia", 13),
                "btn": pygame.font.SysFont("georgia", 14, bold=True),
                "text": pygame.font.SysFont("georgia", 20),
                "h1": pygame.font.SysFont("georgia", 30, bold=True),
                "h2": pygame.font.SysFont("georgia", 25, bold=True),
                "h3": pygame.font.SysFont("georgia", 21, bold=True),
                "p": pygame.font.SysFont("georgia", 17),
            }
        return self._fonts

    def draw(self, surface: pygame.Surface):
        fonts = self._ensure_fonts()
        mask = pygame.Surface((self.w, self.h), pygame.SRCALPHA)
        mask.fill((0, 0, 0, 245))
        surface.blit(mask, (0, 0))

        pygame.draw.rect(surface, (8, 8, 8), self.panel, border_radius=2)
        pygame.draw.rect(surface, (26, 26, 26), self.panel, 1, border_radius=2)

        surface.blit(fonts["title"].render(self.title, True, GOLD), (self.input_rect.x, self.panel.y + 40))
        surface.blit(fonts["sub"].render("TEMPORAL OBSERVATION NODE", True, (68, 68, 68)),
                     (self.input_rect.x, self.panel.y + 98))

        pygame.draw.rect(surface, GOLD, self.btn_lock, border_radius=20)
        t = fonts["btn"].render("LOCK NODE", True, (0, 0, 0))
        surface.blit(t, t.get_rect(center=self.btn_lock.center))

        self._draw_input(surface, fonts["text"])
        self._draw_preview(surface, fonts)

    def _draw_input(self, surface: pygame.Surface, font: pygame.font.Font):
        r = self.input_rect
        pygame.draw.rect(surface, (0, 0, 0), r)
        pygame.draw.rect(surface, (26, 26, 26), r, 1)
        inner = r.inflate(-40, -30)
        if not self.text:
            surface.blit(font.render(PLACEHOLDER, True, (90, 86, 60)), inner.topleft)
            lines = [""]
        else:
            lines = wrap_text(self.text, inner.width, lambda s: font.size(s)[0])
        line_h = font.get_linesize()
        # 只顯示最後幾行，游標固定在尾端
        visible = max(1, inner.height // line_h)
        shown = lines[-visible:]
        y = inner.y
        for ln in shown:
            if ln:
                surface.blit(font.render(ln, True, GOLD_LIGHT), (inner.x, y))
            y += line_h
        if self._caret_t < 0.5:
            cx = inner.x + font.size(shown[-1])[0] + 1
            cy = inner.y + (len(shown) - 1) * line_h
            pygame.draw.line(surface, GOLD_LIGHT, (cx, cy + 2), (cx, cy + line_h - 2), 2)

    def _draw_preview(self, surface: pygame.Surface, fonts: dict):
        r = self.preview_rect
        if r.height <= 0:
            return
        pygame.draw.rect(surface, (10, 10, 10), r)
        pygame.draw.rect(surface, (40, 34, 14), r, 1)
        inner = r.inflate(-60, -50)
        clip_prev = surface.get_clip()
        surface.set_clip(r)
        y = inner.y
        try:
            for kind, text in preview_blocks(self.text):
                if kind == "blank":
                    y += fonts["p"].get_linesize() // 2
                    continue
                font = fonts.get(kind, fonts["p"])
                color = GOLD if kind.startswith("h") else TEXT
                prefix = "•  " if kind == "bullet" else ""
                for ln in wrap_text(prefix + text, inner.width, lambda s: font.size(s)[0]):
                    surface.blit(font.render(ln, True, color), (inner.x, y))
                    y += font.get_linesize()
                if kind.startswith("h"):
                    pygame.draw.line(surface, (60, 50, 20), (inner.x, y + 2), (inner.right, y + 2), 2)
                    y += 10
                if y > r.bottom:
                    break
        except pygame.error:
            logging.exception("預覽繪製失敗")
        finally:
            surface.set_clip(clip_prev)
