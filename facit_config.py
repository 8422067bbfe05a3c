#!/usr/bin/env python3

"""Configuration defaults and lookup for the Facit N4000 tape viewer."""

from typing import Any, Mapping

# --- Default Configuration Constants ---

# Tape geometry (pixels)
HOLE_SIZE = 12          # diameter of punch holes
HOLE_SPACING = 3        # gap between neighbouring holes
SPROCKET_SIZE = 5       # diameter of sprocket holes
LEAD_MARGIN = 50        # blank tape before the first and after the last column
EDGE_MARGIN = 10        # blank tape above the top row and below the bottom row

# Colors
TAPE_COLOR = "#00cdff"      # light blue tape
GHOST_COLOR = "#00addf"     # unpunched hole outline, slightly darker than tape
PUNCH_COLOR = "#000000"

# Window and slider
WINDOW_WIDTH = 1200
WINDOW_TITLE = "Facit N4000 Punch Simulator"
SLIDER_HEIGHT = 14          # height of horizontal slider
THUMB_FRACTION = 0.10       # slider thumb size as a fraction of the slider
WHEEL_STEP_HOLES = 3        # columns scrolled per mouse wheel notch

DEFAULTS = {
    "hole_size": HOLE_SIZE,
    "hole_spacing": HOLE_SPACING,
    "sprocket_size": SPROCKET_SIZE,
    "lead_margin": LEAD_MARGIN,
    "edge_margin": EDGE_MARGIN,
    "tape_color": TAPE_COLOR,
    "ghost_color": GHOST_COLOR,
    "punch_color": PUNCH_COLOR,
    "window_width": WINDOW_WIDTH,
    "window_title": WINDOW_TITLE,
    "slider_height": SLIDER_HEIGHT,
    "thumb_fraction": THUMB_FRACTION,
    "wheel_step_holes": WHEEL_STEP_HOLES,
}


class ConfigSection:
    """Read-only view over a configuration mapping.

    Values are looked up with ``get(key, default=...)``.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        "Return the value for key, or default when it is not set"
        return self._values.get(key, default)


def default_config() -> ConfigSection:
    "Return a configuration section holding the built-in defaults"
    return ConfigSection(DEFAULTS)
