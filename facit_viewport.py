#!/usr/bin/env python3

"""Hole layout and scroll/resize handling for the Facit N4000 tape viewer.

    TAPE
    ___________________

       O O O O O O O       <- 0x80
       O O O O O O O       <- 0x40
       O O O O O O O       <- 0x20
       O O O O O O O       <- 0x10
       O O O O O O O       <- 0x08
       . . . . . . .       <- sprockets
       O O O O O O O       <- 0x04
       O O O O O O O       <- 0x02
       O O O O O O O       <- 0x01
    ___________________
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from facit_config import THUMB_FRACTION
from facit_tape import TapeModel

# Data rows top to bottom
BIT_MASKS = (0x80, 0x40, 0x20, 0x10, 0x08, 0x04, 0x02, 0x01)

# The sprocket row follows this data row
SPROCKET_AFTER_MASK = 0x08

ROWS_PER_COLUMN = len(BIT_MASKS) + 1

MIN_THUMB_LENGTH = 8    # pixels


@dataclass(frozen=True)
class HoleCommand:
    """One circle to draw, centered at (x, y)."""

    x: int
    y: int
    radius: int
    filled: bool
    sprocket: bool = False


@dataclass(frozen=True)
class VisibleRect:
    """Pixel size of the drawing surface."""

    width: int
    height: int


@dataclass(frozen=True)
class ScrollBounds:
    """Range and thumb size handed to the scroll control."""

    minimum: int
    maximum: int
    thumb_fraction: float

    def thumb_length(self, track_length: int,
                     min_length: int = MIN_THUMB_LENGTH) -> int:
        "Thumb size in pixels for a scroll control track_length pixels long"
        return max(min_length, int(track_length * self.thumb_fraction))


def generate_holes(model: TapeModel, scroll_offset: int,
                   visible_rect: VisibleRect) -> List[HoleCommand]:
    """Return the holes of every tape column whose center lies in view.

    Culling is per column: a column is drawn when its x position is within
    [0, visible_rect.width], and then all nine of its holes are emitted.
    Output is column-major, top row first.
    """
    geometry = model.geometry
    pitch = geometry.hole_pitch
    start_x = geometry.lead_margin - scroll_offset
    start_y = geometry.edge_margin

    holes = []
    px = start_x
    for byte in model.data:
        if 0 <= px <= visible_rect.width:
            py = start_y
            for mask in BIT_MASKS:
                holes.append(HoleCommand(px, py, geometry.hole_radius,
                                         bool(byte & mask)))
                py += pitch
                if mask == SPROCKET_AFTER_MASK:
                    holes.append(HoleCommand(px, py, geometry.sprocket_radius,
                                             True, sprocket=True))
                    py += pitch
        px += pitch
    return holes


class Viewport:
    """Scroll offset and visible size of the tape view.

    The offset only changes through on_scroll() and on_resize(), and is kept
    within [0, max(0, tape_width - visible_width)].
    """

    def __init__(
            self,
            model: TapeModel,
            visible_width: int = 0,
            visible_height: int = 0,
            thumb_fraction: float = THUMB_FRACTION,
            on_redraw: Optional[Callable[[], None]] = None,
            on_bounds: Optional[Callable[[ScrollBounds], None]] = None,
    ) -> None:
        self.model = model
        self.visible_width = visible_width
        self.visible_height = visible_height
        self.thumb_fraction = thumb_fraction
        self.on_redraw = on_redraw
        self.on_bounds = on_bounds
        self.scroll_offset = 0

    @property
    def max_offset(self) -> int:
        "Largest offset that still keeps the tape end inside the view"
        return max(0, self.model.tape_width - self.visible_width)

    @property
    def visible_rect(self) -> VisibleRect:
        return VisibleRect(self.visible_width, self.visible_height)

    def bounds(self) -> ScrollBounds:
        return ScrollBounds(0, self.max_offset, self.thumb_fraction)

    def _clamp(self, offset: int) -> int:
        return min(max(0, int(offset)), self.max_offset)

    def on_scroll(self, new_offset: int) -> None:
        "Move the view to new_offset (clamped) and request a redraw"
        self.scroll_offset = self._clamp(new_offset)
        self._request_redraw()

    def scroll_by(self, delta: int) -> None:
        "Move the view delta pixels along the tape"
        self.on_scroll(self.scroll_offset + delta)

    def on_resize(self, width: int, height: int) -> None:
        """Apply a new drawing surface size.

        An offset sitting at the end of the tape stays at the end; any other
        offset is only pulled back if it now exceeds the maximum.
        """
        old_max = self.max_offset
        pinned_to_end = old_max > 0 and self.scroll_offset >= old_max

        self.visible_width = width
        self.visible_height = height

        if pinned_to_end:
            self.scroll_offset = self.max_offset
        else:
            self.scroll_offset = self._clamp(self.scroll_offset)

        if self.on_bounds is not None:
            self.on_bounds(self.bounds())
        self._request_redraw()

    def holes(self) -> List[HoleCommand]:
        "Hole commands for the current view"
        return generate_holes(self.model, self.scroll_offset, self.visible_rect)

    def _request_redraw(self) -> None:
        if self.on_redraw is not None:
            self.on_redraw()
