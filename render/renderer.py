# render/renderer.py
import pygame, logging, datetime
from typing import Callable, Dict
from config import RenderConfig
from clock import face

GOLD = (212, 175, 55)
GOLD_LIGHT = (252, 246, 186)
GOLD_DARK = (170, 119, 28)
BG = (2, 2, 2)
DIAL = (14, 14, 14)
DIM = (58, 50, 30)
GREY = (85, 85, 85)

SAVE_LABEL = "SECURE STATE"
TOAST_TEXT = "TIME VAULT SECURED"

class Renderer:
    def __init__(self, cfg: RenderConfig):
        pygame.init()
        self.cfg = cfg
        self.screen = pygame.display.set_mode((cfg.window_w, cfg.window_h))
        pygame.display.set_caption("Chronos Aeternum Plantacerium")
        self.font_title = pygame.font.SysFont("georgia", 30, bold=True)
        self.font = pygame.font.SysFont("georgia", 18, bold=True)
        self.font_small = pygame.font.SysFont("georgia", 12)
        self.font_big = pygame.font.SysFont("georgia", 40, bold=True)
        self._marker_fonts: Dict[int, pygame.font.Font] = {}
        self.clock = pygame.time.Clock()

        # 點擊判定用
        self.button_rects: Dict[str, pygame.Rect] = {}
        self.marker_rects: Dict[int, pygame.Rect] = {}

        self.scale = cfg.face_scale
        self.cx = cfg.window_w / 2.0
        self.cy = cfg.window_h / 2.0 + 10
        self._start_ms = pygame.time.get_ticks()

    # 800 格座標 -> 螢幕座標
    def _pt(self, x: float, y: float):
        return (self.cx + (x - face.FACE_CENTER) * self.scale,
                self.cy + (y - face.FACE_CENTER) * self.scale)

    def _polar(self, r: float, deg: float):
        x, y = face.polar(face.FACE_CENTER, face.FACE_CENTER, r, deg)
        return self._pt(x, y)

    def _marker_font(self, size: int) -> pygame.font.Font:
        f = self._marker_fonts.get(size)
        if f is None:
            f = pygame.font.SysFont("georgia", int(size * self.scale * 0.8), bold=size >= 18)
            self._marker_fonts[size] = f
        return f

    def tick(self, fps=60) -> float:
        return self.clock.tick(fps) / 1000.0

    def begin_frame(self):
        self.screen.fill(BG)

    def end_frame(self):
        pygame.display.flip()

    def _blit_center(self, surf: pygame.Surface, x: float, y: float):
        self.screen.blit(surf, (x - surf.get_width() / 2, y - surf.get_height() / 2))

    # ------- background -------
    def draw_header(self):
        w = self.cfg.window_w
        title = self.font_title.render("C H R O N O S   P L A N T A C E R I U M", True, GOLD)
        self._blit_center(title, w / 2, self.cfg.window_h * 0.05)
        sub = self.font_small.render("A E T E R N U M   P R E C I S I O N   A R C H I V E", True, GOLD_DARK)
        self._blit_center(sub, w / 2, self.cfg.window_h * 0.05 + 32)

    def draw_mandala(self):
        elapsed = (pygame.time.get_ticks() - self._start_ms) / 1000.0
        rot = face.mandala_rotation(elapsed)
        layer = pygame.Surface((self.cfg.window_w, self.cfg.window_h), pygame.SRCALPHA)
        s = self.scale
        for i in range(face.MANDALA_PETALS):
            deg = rot + i * (360.0 / face.MANDALA_PETALS)
            pts = face.petal_outline(self.cx, self.cy, deg, 330 * s, 75 * s, 22 * s)
            pygame.draw.polygon(layer, (*GOLD, 22), pts, 1)
        self.screen.blit(layer, (0, 0))

    # ------- face -------
    def draw_face(self, now: datetime.datetime):
        s = self.scale
        center = (self.cx, self.cy)
        pygame.draw.circle(self.screen, DIAL, center, int(250 * s))
        pygame.draw.circle(self.screen, GOLD_DARK, center, int(250 * s), 2)
        pygame.draw.circle(self.screen, (40, 34, 18), center, int(face.SPIRIT_DOT_R * s), 1)

        # 今日進度弧
        start, stop = face.arc_span(face.day_progress(now))
        r = 258 * s
        rect = pygame.Rect(0, 0, int(r * 2), int(r * 2)); rect.center = (int(self.cx), int(self.cy))
        if stop - start > 1e-3:
            pygame.draw.arc(self.screen, GOLD, rect, start, stop, 3)

        for i in range(60):
            deg = i * 6.0
            passed = face.tick_passed(i, now.minute)
            color = GOLD if passed else DIM
            width = 3 if i % 5 == 0 else 1
            pygame.draw.line(self.screen, color,
                             self._polar(face.tick_inner_radius(i), deg),
                             self._polar(face.TICK_OUTER_R, deg), width)

        for i in range(12):
            m = i * 5
            color = GOLD_LIGHT if face.numeral_is_current(i, now.minute) else GREY
            surf = self.font_small.render(f"{m:02}", True, color)
            self._blit_center(surf, *self._polar(face.NUMERAL_R, face.numeral_angle(i)))

        dot = self._polar(face.SPIRIT_DOT_R, face.minute_progress(now) * 360.0)
        pygame.draw.circle(self.screen, GOLD_LIGHT, dot, max(2, int(4 * s)))

    def draw_markers(self, now: datetime.datetime, has_note: Callable[[int], bool]):
        self.marker_rects.clear()
        active_h = face.active_marker(now)
        for h in range(12):
            try:
                x, y = self._polar(face.MARKER_R, h * 30.0)
                active = h == active_h
                r = int(face.marker_radius(h, active) * self.scale)
                color = GOLD_LIGHT if active else GOLD
                pygame.draw.circle(self.screen, color, (x, y), r)
                if has_note(h):
                    pygame.draw.circle(self.screen, GOLD_LIGHT, (x, y), r + 6, 1)
                label = self._marker_font(face.marker_text_size(h, active)).render(
                    str(face.marker_label(h)), True, color)
                self._blit_center(label, x, y - 30 * self.scale)
                hit = pygame.Rect(0, 0, 44, 44); hit.center = (int(x), int(y))
                self.marker_rects[h] = hit
            except Exception:
                logging.exception("繪製時標失敗 h=%d", h)

    def draw_hands(self, now: datetime.datetime):
        s = self.scale
        a = face.hand_angles(now)
        c = (self.cx, self.cy)
        pygame.draw.line(self.screen, GOLD_DARK, c, self._polar(120, a.hour), max(2, int(7 * s)))
        pygame.draw.line(self.screen, GOLD, c, self._polar(170, a.minute), max(2, int(4 * s)))
        pygame.draw.line(self.screen, GOLD_LIGHT, self._polar(-30, a.second),
                         self._polar(205, a.second), max(1, int(1.5 * s)))
        pygame.draw.circle(self.screen, GOLD, c, int(22 * s))
        pygame.draw.circle(self.screen, BG, c, int(8 * s))
        pygame.draw.circle(self.screen, GOLD_LIGHT, c, int(3 * s))

    # ------- panels -------
    def draw_experience(self, now: datetime.datetime):
        h = self.cfg.window_h
        box = pygame.Rect(int(self.cfg.window_w * 0.04), int(h * 0.86), 280, 96)
        pygame.draw.rect(self.screen, (5, 5, 5), box, border_radius=24)
        pygame.draw.rect(self.screen, (60, 50, 20), box, 1, border_radius=24)
        cap = self.font_small.render("UNITS OF EXPERIENCE", True, GREY)
        self.screen.blit(cap, (box.x + 30, box.y + 14))
        val = self.font_big.render(str(face.experience_units(now)), True, GOLD)
        self.screen.blit(val, (box.x + 30, box.y + 34))

    def draw_save_button(self):
        self.button_rects.clear()
        w, h = self.cfg.window_w, self.cfg.window_h
        box = pygame.Rect(0, 0, 280, 50)
        box.bottomright = (int(w * 0.96), int(h * 0.86) + 96)
        hover = box.collidepoint(pygame.mouse.get_pos())
        pygame.draw.rect(self.screen, GOLD_LIGHT if hover else GOLD, box, border_radius=24)
        label = self.font.render(SAVE_LABEL, True, (0, 0, 0))
        self._blit_center(label, *box.center)
        self.button_rects[SAVE_LABEL] = box

    def draw_footer(self):
        surf = self.font_small.render("LIFE BANK EXPERIENCE V1 • TIME ANCHOR SYSTEM", True, (70, 62, 30))
        self._blit_center(surf, self.cfg.window_w / 2, self.cfg.window_h * 0.975)

    def draw_toast(self, text: str = TOAST_TEXT):
        surf = self.font.render(text, True, GOLD_LIGHT)
        box = pygame.Rect(0, 0, surf.get_width() + 70, surf.get_height() + 36)
        box.topright = (self.cfg.window_w - 30, 30)
        pygame.draw.rect(self.screen, (10, 10, 10), box, border_radius=4)
        pygame.draw.rect(self.screen, GOLD_DARK, box, 1, border_radius=4)
        self._blit_center(surf, *box.center)

    def draw_clock(self, now: datetime.datetime, has_note: Callable[[int], bool]):
        self.draw_mandala()
        self.draw_face(now)
        self.draw_markers(now, has_note)
        self.draw_hands(now)
        self.draw_header()
        self.draw_experience(now)
        self.draw_save_button()
        self.draw_footer()
