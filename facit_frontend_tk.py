#!/usr/bin/env python3

"""Facit N4000 punch tape viewer using Tkinter.

Shows a raw binary file as an 8-channel paper tape, one byte per column.

Usage: python3 facit_frontend_tk.py <tape_file>

Controls:
- Slider: scroll through the tape
- Left/Right arrows: scroll one column
- Page Up/Down: scroll one window width
- Home/End: jump to beginning/end
- Mouse wheel: scroll a few columns
"""

import os
import sys
import tkinter as tk
from PIL import ImageTk

from facit_config import (
    SLIDER_HEIGHT,
    TAPE_COLOR,
    THUMB_FRACTION,
    WHEEL_STEP_HOLES,
    WINDOW_TITLE,
    WINDOW_WIDTH,
    ConfigSection,
    default_config,
)
from facit_render import Drawable, PilImageSurface, TapeRenderer
from facit_tape import InvalidInputError, TapeGeometry, TapeModel, load_tape_file
from facit_viewport import ScrollBounds, Viewport


class TapeViewer(tk.Toplevel):
    """Window with the tape canvas and a horizontal scroll slider."""
    # pylint: disable=too-many-instance-attributes
    def __init__(self, master, model: TapeModel, config: ConfigSection) -> None:
        super().__init__(master)
        self._master = master
        self.model = model
        self.slider_height = config.get("slider_height", default=SLIDER_HEIGHT)
        self.wheel_step_holes = config.get("wheel_step_holes", default=WHEEL_STEP_HOLES)
        self.tape_color = config.get("tape_color", default=TAPE_COLOR)
        self.title(config.get("window_title", default=WINDOW_TITLE))
        self.protocol("WM_DELETE_WINDOW", self._handle_close_event)

        width = config.get("window_width", default=WINDOW_WIDTH)
        height = model.tape_height

        self.viewport = Viewport(
            model,
            visible_width=width,
            visible_height=height,
            thumb_fraction=config.get("thumb_fraction", default=THUMB_FRACTION),
            on_redraw=self.request_redraw,
            on_bounds=self._update_slider_bounds,
        )
        self.renderer: Drawable = TapeRenderer(model, self.viewport, config)
        self._redraw_pending = False
        self._photo = None

        self._setup_ui(width, height)
        self.geometry(f"{width}x{height + self.slider_height}")
        self._update_slider_bounds(self.viewport.bounds())
        self.request_redraw()

    def _setup_ui(self, width: int, height: int) -> None:
        """Sets up the tape canvas, slider and key bindings."""
        self.tape_canvas = tk.Canvas(
            self,
            bg=self.tape_color,
            width=width,
            height=height,
            bd=0,
            relief=tk.FLAT,
            highlightthickness=0
        )
        self.slider = tk.Scale(
            self,
            orient=tk.HORIZONTAL,
            from_=0,
            to=self.viewport.max_offset,
            resolution=1,
            showvalue=False,
            width=self.slider_height,
            bd=0,
            highlightthickness=0,
            command=self._on_slider
        )
        # Canvas takes all extra space on resize, slider keeps its height
        self.slider.pack(side="bottom", fill="x")
        self.tape_canvas.pack(side="top", fill="both", expand=True)

        self.image_id = self.tape_canvas.create_image(0, 0, anchor="nw")
        self.tape_canvas.bind("<Configure>", self._on_canvas_configure)

        # Mouse wheel, cross-platform
        # - Windows/macOS: '<MouseWheel>' with event.delta
        # - X11 (Linux): '<Button-4>' (wheel up) and '<Button-5>' (wheel down)
        self.tape_canvas.bind("<MouseWheel>", self._mousewheel_handler)
        self.tape_canvas.bind("<Button-4>", self._mousewheel_handler)
        self.tape_canvas.bind("<Button-5>", self._mousewheel_handler)

        pitch = self.model.geometry.hole_pitch
        self.bind("<Left>", lambda e: self.viewport.scroll_by(-pitch))
        self.bind("<Right>", lambda e: self.viewport.scroll_by(pitch))
        self.bind("<Prior>", lambda e: self.viewport.scroll_by(-self.viewport.visible_width))
        self.bind("<Next>", lambda e: self.viewport.scroll_by(self.viewport.visible_width))
        self.bind("<Home>", lambda e: self.viewport.on_scroll(0))
        self.bind("<End>", lambda e: self.viewport.on_scroll(self.viewport.max_offset))

    def _on_canvas_configure(self, event) -> None:
        """Handle canvas resizes from the window manager."""
        if (event.width, event.height) == (self.viewport.visible_width,
                                           self.viewport.visible_height):
            return
        self.renderer.on_resize(event.width, event.height)

    def _on_slider(self, value) -> None:
        """Handle slider (scrollbar) movement."""
        offset = int(float(value))
        if offset != self.viewport.scroll_offset:
            self.viewport.on_scroll(offset)

    def _mousewheel_handler(self, event) -> None:
        """Handle mouse wheel scrolling (cross-platform).

        Accept both X11 Button-4/5 events (event.num) and
        Windows/macOS '<MouseWheel>' events (event.delta).
        """
        num = getattr(event, 'num', None)
        if num in (4, 5):
            direction = -1 if num == 4 else 1
        else:
            delta = getattr(event, 'delta', 0)
            direction = -1 if delta > 0 else 1
        step = self.wheel_step_holes * self.model.geometry.hole_pitch
        self.viewport.scroll_by(direction * step)

    def _update_slider_bounds(self, bounds: ScrollBounds) -> None:
        """Give the slider the new scroll range and thumb size."""
        if not hasattr(self, "slider"):
            return
        self.slider.configure(from_=bounds.minimum, to=bounds.maximum,
                              sliderlength=bounds.thumb_length(self.viewport.visible_width))
        self.slider.set(self.viewport.scroll_offset)

    def request_redraw(self) -> None:
        """Mark the tape view stale; redraw once the event queue is idle."""
        if self._redraw_pending:
            return
        self._redraw_pending = True
        self.after_idle(self._redraw)

    def _redraw(self) -> None:
        self._redraw_pending = False
        if not self.tape_canvas.winfo_exists():
            return
        surface = PilImageSurface(self.viewport.visible_width,
                                  self.viewport.visible_height,
                                  background=self.tape_color)
        self.renderer.render(surface)
        self._photo = ImageTk.PhotoImage(surface.image)
        self.tape_canvas.itemconfig(self.image_id, image=self._photo)
        if int(float(self.slider.get())) != self.viewport.scroll_offset:
            self.slider.set(self.viewport.scroll_offset)

    def _handle_close_event(self) -> None:
        if self._master is not None:
            self._master.quit()

# End of TapeViewer class


def run_viewer(model: TapeModel, config: ConfigSection) -> None:
    """Open the viewer window and run the Tk main loop until it is closed."""
    root = tk.Tk()
    root.withdraw()  # hide blank root window
    viewer = TapeViewer(root, model, config)
    viewer.focus_force()
    root.mainloop()
    root.destroy()


def usage(prog: str) -> str:
    return f"usage: {prog} punchdata.bin   - raw binary data to send to a Facit N4000"


def main(argv=None) -> int:
    """Command line entry point. Returns the process exit status."""
    argv = sys.argv if argv is None else argv
    if len(argv) != 2:
        print(usage(os.path.basename(argv[0]) if argv else "facit-tape"))
        return 0

    config = default_config()
    try:
        model = load_tape_file(argv[1], TapeGeometry.from_config(config))
    except (OSError, InvalidInputError) as e:
        print(f"Could not load tape file: {e}")
        return 1

    run_viewer(model, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
