import pytest

from slstatus.boxdraw import (
    Rect, box_rects, boxdraw_index, draw_boxes, is_boxdraw, shade_color,
)
from slstatus.boxdraw_data import BDB, BOXDATA, BRL, shape_for

BLACK = (0, 0, 0)
WHITE = (0xFFFF, 0xFFFF, 0xFFFF)


def _area(rects):
    return sum(r.w * r.h for r in rects)


def test_is_boxdraw():
    assert is_boxdraw(0x2500, True, False) is True
    assert is_boxdraw(0x2504, True, False) is False
    assert is_boxdraw(0x2500, False, False) is False
    assert is_boxdraw(0x2800, True, False) is False
    assert is_boxdraw(0x2800, False, True) is True
    assert is_boxdraw(ord("A"), True, True) is False


def test_boxdraw_index_braille():
    assert boxdraw_index(0x2841, False, False, True) == BRL | 0x41


def test_boxdraw_index_bold():
    assert boxdraw_index(0x2500, True, True, False) == BDB | shape_for(0x2500)
    assert boxdraw_index(0x2500, True, False, False) == shape_for(0x2500)


def test_full_block_fills_cell():
    assert box_rects(3, 5, 8, 16, shape_for(0x2588)) == [Rect(3, 5, 8, 16)]


@pytest.mark.parametrize("w, h", [(8, 16), (7, 13), (9, 17)])
def test_upper_and_lower_halves_tile_cell(w, h):
    upper = box_rects(0, 0, w, h, shape_for(0x2580))
    lower = box_rects(0, 0, w, h, shape_for(0x2584))
    assert upper[0].y == 0
    assert upper[0].h == lower[0].y
    assert upper[0].h + lower[0].h == h


@pytest.mark.parametrize("w, h", [(8, 16), (7, 13)])
def test_quadrants_tile_cell(w, h):
    rects = []
    for cp in (0x2596, 0x2597, 0x2598, 0x259D):
        rects.extend(box_rects(0, 0, w, h, shape_for(cp)))
    assert len(rects) == 4
    assert _area(rects) == w * h


@pytest.mark.parametrize("w, h", [(8, 16), (7, 13)])
def test_braille_all_dots_tile_cell(w, h):
    rects = box_rects(0, 0, w, h, boxdraw_index(0x28FF, braille=True))
    assert len(rects) == 8
    assert _area(rects) == w * h


def test_braille_blank_is_empty():
    assert box_rects(0, 0, 8, 16, boxdraw_index(0x2800, braille=True)) == []


def test_light_horizontal_spans_width():
    rects = box_rects(0, 0, 8, 16, shape_for(0x2500))
    assert min(r.x for r in rects) == 0
    assert max(r.x + r.w for r in rects) == 8
    assert len({(r.y, r.h) for r in rects}) == 1


def test_bold_is_thicker():
    normal = box_rects(0, 0, 16, 16, shape_for(0x2500))
    bold = box_rects(0, 0, 16, 16, BDB | shape_for(0x2500))
    assert bold[0].h > normal[0].h


@pytest.mark.parametrize("bold", [0, BDB])
def test_all_shapes_stay_inside_cell(bold):
    w, h = 10, 20
    for value in BOXDATA:
        if not value:
            continue
        rects = box_rects(0, 0, w, h, value | bold)
        assert rects
        for r in rects:
            assert r.w > 0 and r.h > 0
            assert r.x >= 0 and r.y >= 0
            assert r.x + r.w <= w and r.y + r.h <= h


def test_shade_color_extremes_and_identity():
    assert shade_color(WHITE, BLACK, 4) == WHITE
    assert shade_color(WHITE, BLACK, 0) == BLACK
    colour = (100, 2000, 30000)
    assert shade_color(colour, colour, 2) == colour


def test_shade_color_is_monotonic():
    levels = [shade_color(WHITE, BLACK, d)[0] for d in range(5)]
    assert levels == sorted(levels)


def test_shade_color_rejects_bad_level():
    with pytest.raises(ValueError):
        shade_color(WHITE, BLACK, 5)


def test_draw_boxes_advances_by_cell_width():
    bd = shape_for(0x253C)
    drawn = draw_boxes(2, 4, 8, 16, [bd, bd], WHITE, BLACK)
    half = len(drawn) // 2
    first, second = drawn[:half], drawn[half:]
    assert len(first) == len(second)
    for (a, ca), (b, cb) in zip(first, second):
        assert b == Rect(a.x + 8, a.y, a.w, a.h)
        assert ca == cb == WHITE


def test_draw_boxes_uses_shade_color():
    drawn = draw_boxes(0, 0, 8, 16, [shape_for(0x2592)], WHITE, BLACK)
    assert drawn == [(Rect(0, 0, 8, 16), shade_color(WHITE, BLACK, 2))]