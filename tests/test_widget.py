from __future__ import annotations

from collections import Counter

import pytest

from digital_rain.engine import (
    BLACK,
    FRAME_PERIOD,
    GREEN,
    NAMED_BLACK,
    RGB,
    WHITE,
    Buffer,
    Gradient,
    MatrixWidget,
    RandomSource,
    Rect,
)

ALPHABET = "8=ｱｲｳｷｸｵﾔﾃﾂﾕ"
CLASSIC = [(0.0, BLACK), (0.8, GREEN), (1.0, WHITE)]


class NoFlicker(RandomSource):
    """Never mutates at random; every uniform range draw returns its lower bound."""

    def gen_bool(self, p: float) -> bool:
        return False

    def gen_range(self, lo: int, hi: int) -> int:
        return lo


def make_widget(tail=2, rng=None, gradient=CLASSIC, alphabet=ALPHABET):
    return MatrixWidget(tail, alphabet, gradient, rng=rng or RandomSource(42))


def test_first_render_builds_one_stream_per_column():
    area = Rect(0, 0, 3, 4)
    buf = Buffer(area)
    w = make_widget(tail=2)
    w.render(area, buf)

    assert w.area == area
    assert len(w.streams) == 3
    for d in w.streams:
        # spawned in [-(height + tail) + 1, 0]; the first render already advances
        # speed-1 streams (frame 1), so a head at row 1 is expected
        assert -(4 + 2) <= d.pos <= 1
        assert d.speed in (1, 2, 3)
    assert all(sym in ALPHABET for sym in buf.symbols())


def test_six_ticks_advance_by_speed_small_screen():
    area = Rect(0, 0, 3, 4)
    buf = Buffer(area)
    w = make_widget(tail=2)
    w.render(area, buf)
    before = [(d.pos, d.speed) for d in w.streams]

    for _ in range(6):
        w.render(area, buf)

    for (pos, speed), d in zip(before, w.streams):
        expected = 6 // speed
        # a wrap on this tiny screen subtracts 2 * height
        assert (d.pos - pos - expected) % (2 * area.height) == 0
        assert d.pos - pos in (expected, expected - 2 * area.height)


def test_six_ticks_advance_by_speed_exactly():
    area = Rect(0, 0, 40, 60)
    buf = Buffer(area)
    w = make_widget(tail=2)
    w.render(area, buf)
    before = [(d.pos, d.speed) for d in w.streams]

    for _ in range(6):
        w.render(area, buf)

    advanced = {1: 6, 2: 3, 3: 2}
    for (pos, speed), d in zip(before, w.streams):
        assert d.pos - pos == advanced[speed]


def test_frame_counter_wraps():
    area = Rect(0, 0, 5, 5)
    buf = Buffer(area)
    w = make_widget()
    seen = set()
    for _ in range(20):
        w.render(area, buf)
        seen.add(w.frame)
    assert w.frame == 20 % FRAME_PERIOD
    assert seen == set(range(FRAME_PERIOD))


def test_same_area_does_not_reinitialise():
    area = Rect(0, 0, 10, 80)
    buf = Buffer(area)
    w = make_widget(tail=3)
    w.render(area, buf)
    streams = w.streams
    before = [(d.pos, d.speed) for d in streams]

    w.render(area, buf)
    assert w.streams is streams
    frame = w.frame
    for (pos, speed), d in zip(before, w.streams):
        assert d.pos == (pos + 1 if frame % speed == 0 else pos)


def test_new_area_reinitialises():
    a = Rect(0, 0, 10, 5)
    b = Rect(0, 0, 12, 5)
    buf = Buffer(b)
    w = make_widget()
    w.render(a, buf)
    first = w.streams
    assert len(first) == 10

    w.render(b, buf)
    assert w.area == b
    assert len(w.streams) == 12
    assert w.streams is not first


def test_swaps_preserve_glyph_multiset():
    area = Rect(0, 0, 30, 20)
    buf = Buffer(area)
    w = make_widget(tail=6)
    w.render(area, buf)
    for _ in range(10):
        before = Counter(buf.symbols())
        w.render(area, buf)
        assert Counter(buf.symbols()) == before


def test_glyphs_actually_move():
    area = Rect(0, 0, 30, 20)
    buf = Buffer(area)
    w = make_widget(tail=6)
    w.render(area, buf)
    before = buf.symbols()
    w.render(area, buf)
    assert buf.symbols() != before


def test_tail_colour_follows_gradient():
    area = Rect(0, 0, 4, 10)
    buf = Buffer(area)
    grad = Gradient(CLASSIC)
    w = make_widget(tail=2, gradient=grad)
    w.render(area, buf)

    for d in w.streams:
        d.pos, d.speed = -100, 1
    # column 1 head lands on row 5 after the next advance
    w.streams[1].pos = 4
    w.render(area, buf)

    assert buf[1, 5].fg == grad.sample(1.0) == WHITE
    assert buf[1, 4].fg == grad.sample(0.5)
    assert buf[1, 3].fg == grad.sample(0.0) == BLACK
    assert buf[1, 2].fg == NAMED_BLACK
    assert buf[1, 6].fg == NAMED_BLACK
    # streams far above the viewport paint black everywhere
    assert all(buf[0, y].fg == NAMED_BLACK for y in range(10))


def test_stream_below_viewport_paints_black():
    area = Rect(0, 0, 2, 6)
    buf = Buffer(area)
    w = make_widget(tail=3)
    w.render(area, buf)
    w.streams[0].pos, w.streams[0].speed = 8, 1
    w.streams[1].pos, w.streams[1].speed = -50, 1
    w.render(area, buf)
    # head on row 9 (not yet wrapped), tail rows 6..9 all below the area
    assert [buf[0, y].fg for y in range(6)] == [NAMED_BLACK] * 6


def test_head_swaps_with_random_cell():
    area = Rect(0, 0, 2, 3)
    buf = Buffer(area)
    w = make_widget(rng=NoFlicker(0))
    w.render(area, buf)

    for cell, sym in zip(buf.content, "abcdef"):
        cell.symbol = sym
    w.streams[0].pos, w.streams[0].speed = -50, 1
    w.streams[1].pos, w.streams[1].speed = 0, 1
    w.render(area, buf)

    # head of column 1 is now on row 1 and traded glyphs with (0, 0)
    assert buf[0, 0].symbol == "d"
    assert buf[1, 1].symbol == "a"
    assert [buf[x, y].symbol for y in range(3) for x in range(2) if (x, y) not in ((0, 0), (1, 1))] == [
        "b",
        "c",
        "e",
        "f",
    ]


def test_render_respects_area_origin():
    full = Rect(0, 0, 10, 10)
    area = Rect(2, 3, 4, 4)
    buf = Buffer(full)
    w = make_widget(tail=3)
    for _ in range(5):
        w.render(area, buf)

    assert len(w.streams) == 4
    for y in range(10):
        for x in range(10):
            inside = 2 <= x < 6 and 3 <= y < 7
            cell = buf[x, y]
            if inside:
                assert cell.symbol in ALPHABET
            else:
                assert cell.symbol == " " and cell.fg == NAMED_BLACK


def test_initial_fill_uses_first_stop_colour():
    area = Rect(0, 0, 3, 3)
    buf = Buffer(area)
    start = RGB(0.1, 0.2, 0.3)
    w = make_widget(gradient=[(0.0, start), (1.0, WHITE)])
    w._init(area, buf)
    assert all(c.fg == start for c in buf.content)


def test_alphabet_split_into_code_points():
    w = make_widget(alphabet="ｱｲ8")
    assert w.alphabet == ["ｱ", "ｲ", "8"]


def test_empty_gradient_paints_black_in_tail():
    area = Rect(0, 0, 1, 5)
    buf = Buffer(area)
    w = make_widget(tail=4, gradient=[])
    w.render(area, buf)
    w.streams[0].pos, w.streams[0].speed = 3, 1
    w.render(area, buf)
    assert all(buf[0, y].fg in (BLACK, NAMED_BLACK) for y in range(5))
    assert buf[0, 4].fg == BLACK


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_seeded_widgets_are_reproducible(seed):
    area = Rect(0, 0, 8, 6)
    b1, b2 = Buffer(area), Buffer(area)
    w1 = make_widget(rng=RandomSource(seed))
    w2 = make_widget(rng=RandomSource(seed))
    for _ in range(4):
        w1.render(area, b1)
        w2.render(area, b2)
    assert b1.symbols() == b2.symbols()
    assert [c.fg for c in b1.content] == [c.fg for c in b2.content]
