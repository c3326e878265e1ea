"""Difference images between framebuffers and waveform lookups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .types import DrawError, DrawFailure, DrawMode, Rect, Waveform

_MODE_MASK = 0x3F


@dataclass
class DifferenceResult:
    """Outcome of comparing two 4-bit framebuffers.

    ``interlaced`` holds one byte per pixel: the upper nibble is the "to"
    colour, the lower nibble the "from" colour. Pixels outside the crop are 0.
    ``changed`` is the smallest rectangle containing every changed pixel.
    """

    interlaced: bytearray
    dirty_lines: list[bool]
    changed: Rect
    previously_white: bool
    previously_black: bool


def difference_image(
    to,
    from_,
    crop_to: Optional[Rect] = None,
    fb_width: int = 1600,
    fb_height: int = 1200,
) -> DifferenceResult:
    """Build a one-pixel-per-byte difference image from two packed 4-bit images.

    Only the part of the images inside ``crop_to`` (default: everything) is
    considered. The lower nibble of each byte holds the even pixel.
    """
    if fb_width <= 0 or fb_height <= 0:
        raise ValueError("framebuffer dimensions must be positive")
    if crop_to is None:
        crop_to = Rect(0, 0, fb_width, fb_height)
    if crop_to.x < 0 or crop_to.y < 0 or crop_to.width < 0 or crop_to.height < 0:
        raise ValueError(f"invalid crop area: {crop_to}")
    needed = fb_width * fb_height // 2
    if len(to) < needed or len(from_) < needed:
        raise ValueError(f"framebuffers must hold at least {needed} bytes")

    from_or = 0x00
    from_and = 0x0F
    interlaced = bytearray(fb_width * fb_height)
    dirty_lines = [False] * fb_height
    dirty_cols = [0] * fb_width

    x_end = min(fb_width, crop_to.x + crop_to.width)
    y_end = min(fb_height, crop_to.y + crop_to.height)

    for y in range(crop_to.y, y_end):
        dirty = 0
        row = y * fb_width
        for x in range(crop_to.x, x_end):
            index = row // 2 + x // 2
            t = to[index]
            f = from_[index]
            if x % 2:
                t, f = t >> 4, f >> 4
            else:
                t, f = t & 0x0F, f & 0x0F
            from_or |= f
            from_and &= f
            changed = t ^ f
            dirty |= changed
            dirty_cols[x] |= changed
            interlaced[row + x] = (t << 4) | f
        dirty_lines[y] = dirty > 0

    columns = range(crop_to.x, x_end)
    rows = range(crop_to.y, y_end)
    min_x = next((x for x in columns if dirty_cols[x]), x_end)
    max_x = next((x for x in reversed(columns) if dirty_cols[x]), crop_to.x - 1)
    min_y = next((y for y in rows if dirty_lines[y]), y_end)
    max_y = next((y for y in reversed(rows) if dirty_lines[y]), crop_to.y - 1)

    changed_rect = Rect(
        x=min_x,
        y=min_y,
        width=max(max_x - min_x + 1, 0),
        height=max(max_y - min_y + 1, 0),
    )
    return DifferenceResult(
        interlaced=interlaced,
        dirty_lines=dirty_lines,
        changed=changed_rect,
        previously_white=from_and == 0x0F,
        previously_black=from_or == 0x00,
    )


def waveform_temp_range_index(waveform: Waveform, temperature: int) -> int:
    """Index of the temperature range to use for ``temperature`` in °C.

    If no range fits, the closest one is chosen. Raises ``DrawFailure`` with
    ``NO_PHASES_AVAILABLE`` when the waveform has no temperature ranges.
    """
    intervals = waveform.temp_intervals
    if not intervals:
        raise DrawFailure(DrawError.NO_PHASES_AVAILABLE)
    idx = 0
    while idx < len(intervals) - 1 and intervals[idx].min < temperature:
        idx += 1
    return idx


def waveform_mode_index(waveform: Waveform, mode: DrawMode | int) -> int:
    """Index into ``waveform.mode_data`` of the mode selected by ``mode``.

    Raises ``DrawFailure`` with ``MODE_NOT_FOUND`` if the waveform lacks it.
    """
    wanted = int(mode) & _MODE_MASK
    for index, mode_data in enumerate(waveform.mode_data):
        if mode_data.type == wanted:
            return index
    raise DrawFailure(DrawError.MODE_NOT_FOUND)