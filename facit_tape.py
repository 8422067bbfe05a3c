#!/usr/bin/env python3

"""Raw tape data model for the Facit N4000 tape viewer.

One input byte is one tape column. The model keeps the bytes read at load
time and the tape dimensions derived from them.
"""

import os
from dataclasses import dataclass

from facit_config import (
    HOLE_SIZE,
    HOLE_SPACING,
    SPROCKET_SIZE,
    LEAD_MARGIN,
    EDGE_MARGIN,
    ConfigSection,
)

CHANNELS = 8    # data bit rows per column


class TapeError(Exception):
    """Base class for tape model errors."""


class InvalidInputError(TapeError, ValueError):
    """Tape data is empty or could not be read in full."""


class TapeIndexError(TapeError, IndexError):
    """A column outside the tape was requested."""


@dataclass(frozen=True)
class TapeGeometry:
    """Pixel dimensions of holes and margins."""

    hole_size: int = HOLE_SIZE
    hole_spacing: int = HOLE_SPACING
    sprocket_size: int = SPROCKET_SIZE
    lead_margin: int = LEAD_MARGIN
    edge_margin: int = EDGE_MARGIN

    @classmethod
    def from_config(cls, config: ConfigSection) -> "TapeGeometry":
        "Build the geometry from configuration values, defaulting each field"
        return cls(
            hole_size=config.get("hole_size", default=HOLE_SIZE),
            hole_spacing=config.get("hole_spacing", default=HOLE_SPACING),
            sprocket_size=config.get("sprocket_size", default=SPROCKET_SIZE),
            lead_margin=config.get("lead_margin", default=LEAD_MARGIN),
            edge_margin=config.get("edge_margin", default=EDGE_MARGIN),
        )

    @property
    def hole_pitch(self) -> int:
        "Center to center distance between neighbouring holes"
        return self.hole_size + self.hole_spacing

    @property
    def hole_radius(self) -> int:
        return self.hole_size // 2

    @property
    def sprocket_radius(self) -> int:
        return self.sprocket_size // 2


DEFAULT_GEOMETRY = TapeGeometry()


class TapeModel:
    """Read-only view over raw tape bytes plus the derived tape size."""

    def __init__(self, data: bytes, geometry: TapeGeometry | None = None) -> None:
        if not data:
            raise InvalidInputError("tape data is empty")
        self._data = bytes(data)
        self.geometry = geometry if geometry is not None else DEFAULT_GEOMETRY

        pitch = self.geometry.hole_pitch
        self._tape_width = len(self._data) * pitch + 2 * self.geometry.lead_margin
        self._tape_height = (
            CHANNELS * self.geometry.hole_size
            + CHANNELS * self.geometry.hole_spacing
            + 2 * self.geometry.edge_margin
        )

    def __len__(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def byte_count(self) -> int:
        return len(self._data)

    @property
    def tape_width(self) -> int:
        "Length of the tape in pixels, including both lead margins"
        return self._tape_width

    @property
    def tape_height(self) -> int:
        "Height of the tape in pixels, including top and bottom edges"
        return self._tape_height

    def byte_at(self, index: int) -> int:
        "Return the data byte for tape column index"
        if not 0 <= index < len(self._data):
            raise TapeIndexError(
                f"column {index} outside tape of {len(self._data)} bytes"
            )
        return self._data[index]


def load_tape_file(name_path: str, geometry: TapeGeometry | None = None) -> TapeModel:
    """Read a whole tape file into a TapeModel.

    OS errors from stat/open/read propagate to the caller. An empty file or a
    short read raises InvalidInputError.
    """
    expected = os.stat(name_path).st_size
    with open(name_path, 'br') as f:
        tape_data = f.read()
    if len(tape_data) < expected:
        raise InvalidInputError(
            f"{name_path}: read {len(tape_data)} of {expected} bytes"
        )
    if not tape_data:
        raise InvalidInputError(f"{name_path}: tape file is empty")
    return TapeModel(tape_data, geometry)
