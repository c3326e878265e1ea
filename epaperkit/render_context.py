"""Layout of the input framebuffer for a draw: stride, start offset and line range."""

from __future__ import annotations

from dataclasses import dataclass

from .types import DrawError, DrawFailure, DrawMode, Rect


@dataclass(frozen=True)
class BufferParams:
    """Where a draw reads its lines from in the input buffer.

    ``start_offset`` is the byte offset of the first line to draw. Line ``l``
    of the display starts at ``start_offset + bytes_per_line * (l - min_y)``.
    Lines ``min_y`` up to (not including) ``max_y`` carry image data.
    """

    bytes_per_line: int
    start_offset: int
    min_y: int
    max_y: int
    pixels_per_byte: int


def buffer_params(area: Rect, crop_to: Rect, mode: DrawMode | int) -> BufferParams:
    """Work out the buffer layout for drawing ``area`` cropped to ``crop_to``.

    The packing is taken from ``mode``; a one-pixel-per-byte difference image
    wins over 2 pixels per byte, which wins over 8 pixels per byte. Raises
    ``DrawFailure`` with ``INVALID_PACKING_MODE`` if no packing is given.
    """
    flags = int(mode)
    horizontally_cropped = not (crop_to.x == 0 and crop_to.width == area.width)
    vertically_cropped = not (crop_to.y == 0 and crop_to.height == area.height)

    if flags & DrawMode.PACKING_1PPB_DIFFERENCE:
        bytes_per_line = area.width
        pixels_per_byte = 1
    elif flags & DrawMode.PACKING_2PPB:
        bytes_per_line = area.width // 2 + area.width % 2
        pixels_per_byte = 2
    elif flags & DrawMode.PACKING_8PPB:
        bytes_per_line = area.width // 8 + (area.width % 8 > 0)
        pixels_per_byte = 8
    else:
        raise DrawFailure(DrawError.INVALID_PACKING_MODE)

    crop_x = crop_to.x if horizontally_cropped else 0
    crop_y = crop_to.y if vertically_cropped else 0
    crop_h = crop_to.height if vertically_cropped else 0

    start = 0
    # Negative start coordinates skip into the buffer.
    if area.x - crop_x < 0:
        start += -(area.x - crop_x) // pixels_per_byte
    if area.y - crop_y < 0:
        start += -(area.y - crop_y) * bytes_per_line

    min_y = area.y + crop_y
    max_y = min(min_y + (crop_h if vertically_cropped else area.height), area.height)
    return BufferParams(
        bytes_per_line=bytes_per_line,
        start_offset=start,
        min_y=min_y,
        max_y=max_y,
        pixels_per_byte=pixels_per_byte,
    )