"""Generation of the per-line drive data sent to the display for one frame."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterator, Optional, Sequence

from .render_context import buffer_params
from .types import DrawMode, Rect
from .waveform import CLEAR_BYTE, DARK_BYTE, FRAMES, CustomWaveform

_STRIPE_BYTE = 0b01011010
_SWEEP_BYTES_PER_LINE = 800
_SWEEP_ELEMENT_SIZE = 400


class PushColor(IntEnum):
    """Direction in which a push cycle drives all pixels."""

    BLACK = 0
    WHITE = 1
    NOOP = 2


def fill_line(color: PushColor | int, display_width: int = 1600) -> bytes:
    """One line of drive data pushing every pixel darker, lighter, or not at all.

    Any colour other than black or white drives nothing.
    """
    length = display_width // 4
    value = int(color)
    if value == PushColor.BLACK:
        return bytes([DARK_BYTE]) * length
    if value == PushColor.WHITE:
        return bytes([CLEAR_BYTE]) * length
    return bytes(length)


def stripe_line(display_width: int = 1600) -> bytes:
    """One line of drive data alternating dark and light pixel pairs."""
    return bytes([_STRIPE_BYTE]) * (display_width // 4)


def _check_frame(frame: int) -> None:
    if not 0 <= frame < FRAMES:
        raise ValueError(f"frame must be in 0..{FRAMES - 1}, got {frame}")


def frame_lines(
    data,
    area: Rect,
    crop_to: Rect,
    mode: DrawMode | int,
    waveform: CustomWaveform,
    frame: int,
    lines_total: Optional[int] = None,
) -> Iterator[bytes]:
    """Drive data of every display line for one frame of an update.

    Each output line holds ``area.width // 4`` bytes, converted from the
    ``area.width // 2`` input bytes at the line's position in ``data``. Lines
    whose input lies outside ``data`` are sent as all-zero (no drive).
    Errors in the arguments are raised before any line is produced.
    """
    if area.x != 0:
        raise ValueError("frames must start at the left edge of the display")
    params = buffer_params(area, crop_to, mode)
    _check_frame(frame)
    total = area.height if lines_total is None else lines_total
    if total < 0:
        raise ValueError("lines_total must not be negative")
    source = memoryview(bytes(data))
    out_len = area.width // 4
    in_len = out_len * 2

    def lines() -> Iterator[bytes]:
        for line in range(total):
            offset = params.start_offset + params.bytes_per_line * (line - params.min_y)
            if offset < 0 or offset + in_len > len(source):
                yield bytes(out_len)
            else:
                yield waveform.convert_line(source[offset : offset + in_len], frame)

    return lines()


def sweep_lines(
    data,
    waveform: CustomWaveform,
    min_y: int,
    max_y: int,
    lines_total: int = 1200,
    drawn_lines: Optional[Sequence[bool]] = None,
) -> Iterator[bytes]:
    """Drive data for a sweep, where each drawn line uses the next frame.

    Lines outside ``min_y``..``max_y`` or marked false in ``drawn_lines`` are
    sent as all-zero and do not advance the frame. Input lines are 800 bytes,
    starting at ``data[0]`` for line ``min_y``. A sweep can draw at most
    ``FRAMES`` lines; the next one raises ``ValueError``.
    """
    if lines_total < 0:
        raise ValueError("lines_total must not be negative")
    if drawn_lines is not None and len(drawn_lines) < lines_total:
        raise ValueError("drawn_lines must cover every line")
    source = memoryview(bytes(data))

    def lines() -> Iterator[bytes]:
        frame = 0
        for line in range(lines_total):
            skipped = (
                line < min_y
                or line >= max_y
                or (drawn_lines is not None and not drawn_lines[line])
            )
            if skipped:
                yield bytes(_SWEEP_ELEMENT_SIZE)
                continue
            offset = _SWEEP_BYTES_PER_LINE * (line - min_y)
            chunk = source[offset : offset + _SWEEP_BYTES_PER_LINE]
            if len(chunk) != _SWEEP_BYTES_PER_LINE:
                raise ValueError(f"no input data for line {line}")
            yield waveform.convert_line(chunk, frame)
            frame += 1

    return lines()