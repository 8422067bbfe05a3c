#!/usr/bin/env python3

"""Drawing of the tape view onto a drawing surface."""

from typing import Protocol

from PIL import Image, ImageDraw

from facit_config import TAPE_COLOR, GHOST_COLOR, PUNCH_COLOR, ConfigSection
from facit_tape import TapeModel
from facit_viewport import Viewport


class DrawingSurface(Protocol):
    """Primitives the renderer needs from a pixel target."""

    def fill_rect(self, x: int, y: int, w: int, h: int, color: str) -> None:
        ...

    def fill_circle(self, x: int, y: int, r: int, color: str) -> None:
        ...

    def stroke_circle(self, x: int, y: int, r: int, color: str) -> None:
        ...


class Drawable(Protocol):
    """A component the host window draws and resizes."""

    def render(self, surface: DrawingSurface) -> None:
        ...

    def on_resize(self, width: int, height: int) -> None:
        ...


class PilImageSurface:
    """DrawingSurface backed by a Pillow RGB image."""

    def __init__(self, width: int, height: int, background: str = TAPE_COLOR) -> None:
        self.image = Image.new("RGB", (max(1, width), max(1, height)), background)
        self._draw = ImageDraw.Draw(self.image)

    def fill_rect(self, x: int, y: int, w: int, h: int, color: str) -> None:
        if w <= 0 or h <= 0:
            return
        self._draw.rectangle((x, y, x + w - 1, y + h - 1), fill=color)

    def fill_circle(self, x: int, y: int, r: int, color: str) -> None:
        self._draw.ellipse((x - r, y - r, x + r, y + r), fill=color, outline=color)

    def stroke_circle(self, x: int, y: int, r: int, color: str) -> None:
        self._draw.ellipse((x - r, y - r, x + r, y + r), outline=color, width=1)


class TapeRenderer:
    """Draws the visible part of the tape for a viewport; a Drawable."""

    def __init__(self, model: TapeModel, viewport: Viewport,
                 config: ConfigSection | None = None) -> None:
        config = config if config is not None else ConfigSection()
        self.model = model
        self.viewport = viewport
        self.tape_color = config.get("tape_color", default=TAPE_COLOR)
        self.ghost_color = config.get("ghost_color", default=GHOST_COLOR)
        self.punch_color = config.get("punch_color", default=PUNCH_COLOR)

    def render(self, surface: DrawingSurface) -> None:
        "Paint the tape background and every visible hole"
        surface.fill_rect(0, 0, self.viewport.visible_width,
                          self.viewport.visible_height, self.tape_color)
        for hole in self.viewport.holes():
            if hole.filled:
                surface.fill_circle(hole.x, hole.y, hole.radius, self.punch_color)
            else:
                surface.stroke_circle(hole.x, hole.y, hole.radius, self.ghost_color)

    def on_resize(self, width: int, height: int) -> None:
        self.viewport.on_resize(width, height)
