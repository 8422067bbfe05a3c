import pytest

from facit_tape import TapeGeometry, TapeModel
from facit_viewport import (
    BIT_MASKS,
    MIN_THUMB_LENGTH,
    ROWS_PER_COLUMN,
    ScrollBounds,
    Viewport,
    VisibleRect,
    generate_holes,
)

WIDE = VisibleRect(10_000, 200)


def _columns(holes):
    columns = {}
    for hole in holes:
        columns.setdefault(hole.x, []).append(hole)
    return columns


def test_three_byte_tape_end_to_end() -> None:
    model = TapeModel(bytes([0xFF, 0x00, 0x80]))

    holes = generate_holes(model, 0, WIDE)

    assert len(holes) == 27
    col0, col1, col2 = holes[0:9], holes[9:18], holes[18:27]
    for column in (col0, col1, col2):
        assert column[5].sprocket
        assert column[5].filled
    assert all(h.filled for h in col0)
    assert [h.filled for h in col1 if not h.sprocket] == [False] * 8
    assert [h.filled for h in col2 if not h.sprocket] == [True] + [False] * 7


def test_a5_fill_pattern_top_to_bottom() -> None:
    model = TapeModel(bytes([0xA5]))

    holes = generate_holes(model, 0, WIDE)
    data_rows = [int(h.filled) for h in holes if not h.sprocket]

    assert data_rows == [1, 0, 1, 0, 0, 1, 0, 1]


def test_row_positions_and_sprocket_after_0x08() -> None:
    geometry = TapeGeometry()
    model = TapeModel(bytes([0x08]), geometry)

    holes = generate_holes(model, 0, WIDE)

    assert len(holes) == ROWS_PER_COLUMN
    assert [h.y for h in holes] == [geometry.edge_margin + row * 15 for row in range(9)]
    assert [h.sprocket for h in holes] == [False] * 5 + [True] + [False] * 3
    # the 0x08 hole is the one directly above the sprocket
    assert holes[4].filled
    assert [h.filled for i, h in enumerate(holes) if i not in (4, 5)] == [False] * 7
    assert {h.radius for h in holes if not h.sprocket} == {geometry.hole_radius}
    assert holes[5].radius == geometry.sprocket_radius
    assert BIT_MASKS == (0x80, 0x40, 0x20, 0x10, 0x08, 0x04, 0x02, 0x01)


def test_columns_are_emitted_in_byte_order() -> None:
    model = TapeModel(bytes(5))
    holes = generate_holes(model, 0, WIDE)
    xs = [h.x for h in holes[::9]]
    assert xs == [50 + i * 15 for i in range(5)]


@pytest.mark.parametrize("scroll_offset, width", [
    (0, 100),
    (30, 100),
    (65, 65),
    (500, 300),
    (52, 0),
])
def test_culling_is_per_column(scroll_offset: int, width: int) -> None:
    model = TapeModel(bytes(range(64)))

    holes = generate_holes(model, scroll_offset, VisibleRect(width, 140))

    expected = [
        50 - scroll_offset + i * 15
        for i in range(64)
        if 0 <= 50 - scroll_offset + i * 15 <= width
    ]
    columns = _columns(holes)
    assert sorted(columns) == expected
    assert all(len(column) == 9 for column in columns.values())


def test_column_exactly_on_edges_is_included() -> None:
    model = TapeModel(bytes(3))
    # column 0 at x=0, column 2 at x=30
    holes = generate_holes(model, 50, VisibleRect(30, 140))
    assert sorted(_columns(holes)) == [0, 15, 30]


def test_generate_holes_is_pure() -> None:
    model = TapeModel(bytes([0x12, 0x34]))
    assert generate_holes(model, 10, WIDE) == generate_holes(model, 10, WIDE)


@pytest.mark.parametrize("requested", [-100, -1, 0, 50, 199, 200, 201, 10_000])
def test_on_scroll_clamps_into_range(requested: int) -> None:
    model = TapeModel(bytes(60))          # tape width 1000
    viewport = Viewport(model, visible_width=800, visible_height=140)

    viewport.on_scroll(requested)

    assert 0 <= viewport.scroll_offset <= 200
    assert viewport.scroll_offset == min(max(requested, 0), 200)


def test_on_scroll_requests_redraw() -> None:
    calls = []
    viewport = Viewport(TapeModel(bytes(60)), 800, 140, on_redraw=lambda: calls.append(1))

    viewport.on_scroll(20)
    viewport.scroll_by(-5)

    assert calls == [1, 1]
    assert viewport.scroll_offset == 15


def test_initial_offset_is_zero() -> None:
    viewport = Viewport(TapeModel(bytes(60)), 800, 140)
    assert viewport.scroll_offset == 0
    assert viewport.bounds() == ScrollBounds(0, 200, 0.10)


def test_resize_shrink_keeps_end_of_tape_in_view() -> None:
    model = TapeModel(bytes(60))
    assert model.tape_width == 1000
    viewport = Viewport(model, visible_width=800, visible_height=140)
    viewport.on_scroll(200)

    viewport.on_resize(500, 140)

    assert viewport.scroll_offset == 500
    assert viewport.max_offset == 500


def test_resize_grow_pulls_offset_back() -> None:
    viewport = Viewport(TapeModel(bytes(60)), 500, 140)
    viewport.on_scroll(400)

    viewport.on_resize(800, 140)

    assert viewport.scroll_offset == 200


def test_resize_leaves_offset_inside_range_alone() -> None:
    viewport = Viewport(TapeModel(bytes(60)), 800, 140)
    viewport.on_scroll(100)

    viewport.on_resize(500, 140)

    assert viewport.scroll_offset == 100


def test_resize_reports_bounds_before_redraw() -> None:
    events = []
    viewport = Viewport(
        TapeModel(bytes(60)), 800, 140, thumb_fraction=0.25,
        on_redraw=lambda: events.append("redraw"),
        on_bounds=lambda bounds: events.append(bounds),
    )

    viewport.on_resize(600, 120)

    assert events == [ScrollBounds(0, 400, 0.25), "redraw"]
    assert viewport.visible_rect == VisibleRect(600, 120)


def test_short_tape_collapses_scroll_range() -> None:
    model = TapeModel(bytes(3))           # tape width 145
    viewport = Viewport(model, visible_width=1200, visible_height=140)

    viewport.on_scroll(80)

    assert viewport.bounds() == ScrollBounds(0, 0, 0.10)
    assert viewport.scroll_offset == 0
    assert [h.x for h in viewport.holes()[::9]] == [50, 65, 80]


def test_resize_from_collapsed_range_starts_at_beginning() -> None:
    viewport = Viewport(TapeModel(bytes(60)), 1200, 140)

    viewport.on_resize(400, 140)

    assert viewport.scroll_offset == 0
    assert viewport.max_offset == 600


@pytest.mark.parametrize("track_length, expected", [
    (1200, 120),
    (500, 50),
    (85, 8),
    (40, MIN_THUMB_LENGTH),
    (0, MIN_THUMB_LENGTH),
])
def test_thumb_length_is_fraction_of_track(track_length: int, expected: int) -> None:
    bounds = ScrollBounds(0, 400, 0.10)
    assert bounds.thumb_length(track_length) == expected


def test_thumb_length_follows_resize_bounds() -> None:
    reported = []
    viewport = Viewport(TapeModel(bytes(60)), 800, 140, thumb_fraction=0.25,
                        on_bounds=reported.append)

    viewport.on_resize(600, 140)

    assert reported[0].thumb_length(viewport.visible_width) == 150
    assert reported[0].thumb_length(20, min_length=12) == 12
