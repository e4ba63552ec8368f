"""Geometry of box drawing, block element and braille glyphs.

Shapes are turned into filled rectangles so that they line up exactly
across neighbouring cells, independent of any font.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .boxdraw_data import (
    BBD, BBL, BBQ, BBR, BBS, BBU, BDA, BDB, BDL, BL, BOXDATA, BR, BRL,
    DD, DL, DR, DU, LD, LL, LR, LU, TL, TR,
)

Color = tuple[int, int, int]

_BLOCK_CATEGORIES = (BBD, BBU, BBL, BBR, BBQ)


@dataclass(frozen=True)
class Rect:
    """A filled rectangle in pixels."""

    x: int
    y: int
    w: int
    h: int


def _div(n: int, d: int) -> int:
    """Rounded division n / d, truncating toward zero like integer C division."""
    num = n + d // 2
    quotient = abs(num) // d
    return quotient if num >= 0 else -quotient


def is_boxdraw(u: int, boxdraw: bool = True, braille: bool = False) -> bool:
    """Whether codepoint ``u`` is drawn from the shape table instead of the font."""
    block = u & ~0xFF
    return bool(
        (boxdraw and block == 0x2500 and BOXDATA[u & 0xFF])
        or (braille and block == 0x2800)
    )


def boxdraw_index(u: int, bold: bool = False, boxdraw_bold: bool = False,
                  braille: bool = False) -> int:
    """The complete shape value for codepoint ``u``."""
    if braille and (u & ~0xFF) == 0x2800:
        return BRL | (u & 0xFF)
    if boxdraw_bold and bold:
        return BDB | BOXDATA[u & 0xFF]
    return BOXDATA[u & 0xFF]


def _is_shade(bd: int) -> bool:
    category = bd & ~(BDB | 0xFF)
    return (not bd & (BDL | BDA)
            and category not in _BLOCK_CATEGORIES
            and bool(bd & BBS))


def shade_color(fg: Color, bg: Color, level: int) -> Color:
    """Blend ``fg`` over ``bg`` at ``level`` quarters of opacity (0 to 4)."""
    if not 0 <= level <= 4:
        raise ValueError(f"shade level out of range: {level}")
    return tuple(_div(f * level + b * (4 - level), 4) for f, b in zip(fg, bg))


def _line_rects(x: int, y: int, w: int, h: int, bd: int) -> list[Rect]:
    # s is the stem thickness; width/8 roughly matches underscore thickness.
    # Bold is 1.5 times the normal stem and at least 1px thicker.
    mwh = min(w, h)
    base_s = max(1, _div(mwh, 8))
    bold = bool(bd & BDB) and mwh >= 6
    s = max(base_s + 1, _div(3 * base_s, 2)) if bold else base_s
    w2 = _div(w - s, 2)
    h2 = _div(h - s, 2)

    light = bd & (LL | LU | LR | LD)
    double = bd & (DL | DU | DR | DD)
    rects: list[Rect] = []

    if light:
        arc = bd & BDA
        multi_light = light & (light - 1)
        multi_double = double & (double - 1)
        # light crosses double only at DH+LV and DV+LH
        d = -s if arc or (multi_double and not multi_light) else 0

        if bd & LL:
            rects.append(Rect(x, y + h2, w2 + s + d, s))
        if bd & LU:
            rects.append(Rect(x + w2, y, s, h2 + s + d))
        if bd & LR:
            rects.append(Rect(x + w2 - d, y + h2, w - w2 + d, s))
        if bd & LD:
            rects.append(Rect(x + w2, y + h2 - d, s, h - h2 + d))

    if double:
        # Clockwise per double ray: p adjusts the stroke nearer the previous
        # direction, n the one nearer the next.
        dl, du, dr, dd = bd & DL, bd & DU, bd & DR, bd & DD
        if dl:
            p = -s if dd else 0
            n = -s if du else (s if dd else 0)
            rects.append(Rect(x, y + h2 + s, w2 + s + p, s))
            rects.append(Rect(x, y + h2 - s, w2 + s + n, s))
        if du:
            p = -s if dl else 0
            n = -s if dr else (s if dl else 0)
            rects.append(Rect(x + w2 - s, y, s, h2 + s + p))
            rects.append(Rect(x + w2 + s, y, s, h2 + s + n))
        if dr:
            p = -s if du else 0
            n = -s if dd else (s if du else 0)
            rects.append(Rect(x + w2 - p, y + h2 - s, w - w2 + p, s))
            rects.append(Rect(x + w2 - n, y + h2 + s, w - w2 + n, s))
        if dd:
            p = -s if dr else 0
            n = -s if dl else (s if dr else 0)
            rects.append(Rect(x + w2 + s, y + h2 - p, s, h - h2 + p))
            rects.append(Rect(x + w2 - s, y + h2 - n, s, h - h2 + n))

    return rects


def box_rects(x: int, y: int, w: int, h: int, bd: int) -> list[Rect]:
    """Rectangles that make up shape ``bd`` in the cell at (x, y) of size w by h.

    A shade yields the whole cell; its colour comes from :func:`shade_color`.
    """
    category = bd & ~(BDB | 0xFF)
    data = bd & 0xFF

    if bd & (BDL | BDA):
        return _line_rects(x, y, w, h, bd)

    if category == BBD:
        d = _div(data * h, 8)
        return [Rect(x, y + d, w, h - d)]

    if category == BBU:
        return [Rect(x, y, w, _div(data * h, 8))]

    if category == BBL:
        return [Rect(x, y, _div(data * w, 8), h)]

    if category == BBR:
        d = _div(data * w, 8)
        return [Rect(x + d, y, w - d, h)]

    if category == BBQ:
        w2, h2 = _div(w, 2), _div(h, 2)
        rects = []
        if bd & TL:
            rects.append(Rect(x, y, w2, h2))
        if bd & TR:
            rects.append(Rect(x + w2, y, w - w2, h2))
        if bd & BL:
            rects.append(Rect(x, y + h2, w2, h - h2))
        if bd & BR:
            rects.append(Rect(x + w2, y + h2, w - w2, h - h2))
        return rects

    if bd & BBS:
        return [Rect(x, y, w, h)]

    if category == BRL:
        # each data bit is one dot of a 2x4 grid
        w1 = _div(w, 2)
        h1, h2, h3 = _div(h, 4), _div(h, 2), _div(3 * h, 4)
        dots = (
            (1, Rect(x, y, w1, h1)),
            (2, Rect(x, y + h1, w1, h2 - h1)),
            (4, Rect(x, y + h2, w1, h3 - h2)),
            (8, Rect(x + w1, y, w - w1, h1)),
            (16, Rect(x + w1, y + h1, w - w1, h2 - h1)),
            (32, Rect(x + w1, y + h2, w - w1, h3 - h2)),
            (64, Rect(x, y + h3, w1, h - h3)),
            (128, Rect(x + w1, y + h3, w - w1, h - h3)),
        )
        return [rect for bit, rect in dots if bd & bit]

    return []


def draw_boxes(x: int, y: int, cw: int, ch: int, indices: Iterable[int],
               fg: Color, bg: Color) -> list[tuple[Rect, Color]]:
    """Coloured rectangles for a run of shapes laid out left to right."""
    result: list[tuple[Rect, Color]] = []
    for offset, bd in enumerate(indices):
        cell_x = x + offset * cw
        color = shade_color(fg, bg, bd & 0xFF) if _is_shade(bd) else fg
        result.extend((rect, color) for rect in box_rects(cell_x, y, cw, ch, bd))
    return result