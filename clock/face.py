# clock/face.py
"""Clock-face geometry on the original 800x800 layout (center 400, 400).

Angles are degrees clockwise from 12 o'clock. Everything here is pure so the
renderer only has to scale and draw.
"""
import math
import datetime
from dataclasses import dataclass
from typing import List, Tuple

FACE_SIZE = 800
FACE_CENTER = 400.0

# radii on the 800 grid
TICK_OUTER_R = 242.0
NUMERAL_R = 225.0
SPIRIT_DOT_R = 230.0
MARKER_R = 195.0

MANDALA_PETALS = 32
MANDALA_PERIOD_S = 600.0  # one counter-clockwise turn

@dataclass(frozen=True)
class HandAngles:
    hour: float
    minute: float
    second: float

def hand_angles(t: datetime.datetime) -> HandAngles:
    sub_second = t.microsecond / 1_000_000.0
    return HandAngles(
        hour=(t.hour % 12) * 30.0 + t.minute / 2.0,
        minute=(t.minute + t.second / 60.0) * 6.0,
        second=(t.second + sub_second) * 6.0,
    )

def experience_units(t: datetime.datetime) -> int:
    """Whole seconds lived since local midnight."""
    return t.hour * 3600 + t.minute * 60 + t.second

def day_progress(t: datetime.datetime) -> float:
    return (experience_units(t) + t.microsecond / 1_000_000.0) / 86400.0

def minute_progress(t: datetime.datetime) -> float:
    return (t.minute + t.second / 60.0) / 60.0

def polar(cx: float, cy: float, r: float, deg: float) -> Tuple[float, float]:
    a = math.radians(deg)
    return cx + r * math.sin(a), cy - r * math.cos(a)

# ---- ticks ----
def tick_inner_radius(i: int) -> float:
    if i in (0, 15, 30, 45):
        return 205.0
    if i % 5 == 0:
        return 218.0
    return 235.0

def tick_passed(i: int, minute: int) -> bool:
    return i <= minute

def numeral_angle(i: int) -> float:
    """Angle of numeral i (00, 05 ... 55); it shares the angle of hour marker i."""
    return i * 5 * 6.0

def numeral_is_current(i: int, minute: int) -> bool:
    """i indexes the 12 numerals 00, 05 ... 55."""
    return minute // 5 == i

# ---- hour markers ----
def marker_label(h: int) -> int:
    return 12 if h == 0 else h

def active_marker(t: datetime.datetime) -> int:
    return t.hour % 12

def marker_radius(h: int, active: bool) -> int:
    if active: return 12
    if h % 3 == 0: return 8
    return 4

def marker_text_size(h: int, active: bool) -> int:
    if active: return 26
    if h % 3 == 0: return 18
    return 14

# ---- mandala ----
def mandala_rotation(elapsed_s: float) -> float:
    return -360.0 * ((elapsed_s % MANDALA_PERIOD_S) / MANDALA_PERIOD_S)

def petal_outline(cx: float, cy: float, deg: float, distance: float,
                  length: float, width: float, steps: int = 20) -> List[Tuple[float, float]]:
    """Ellipse petal whose long axis points away from (cx, cy) at angle deg."""
    a = math.radians(deg)
    sin_a, cos_a = math.sin(a), math.cos(a)
    pts = []
    for k in range(steps):
        t = 2.0 * math.pi * k / steps
        lx = width * math.cos(t)               # across the petal
        ly = distance + length * math.sin(t)   # along the radius
        pts.append((cx + lx * cos_a + ly * sin_a, cy + lx * sin_a - ly * cos_a))
    return pts

def arc_span(progress: float) -> Tuple[float, float]:
    """pygame.draw.arc (start, stop) for a clockwise arc from 12 o'clock."""
    progress = min(max(progress, 0.0), 1.0)
    top = math.pi / 2.0
    return top - progress * 2.0 * math.pi, top
