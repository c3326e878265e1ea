"""The custom per-shade waveform table and the line conversion it drives."""

from __future__ import annotations

from typing import BinaryIO, Sequence

SHADES = 16
FRAMES = 30
WAVEFORM_SIZE = SHADES * FRAMES
WAVEFORM_OFFSET = 0x45E000
SECTOR_SIZE = 4096

# A block of four pixels made lighter / darker.
CLEAR_BYTE = 0b10101010
DARK_BYTE = 0b01010101

_DEFAULT_TABLE = (
    (2, 0, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 0),
    (2, 0, 1, 1, 1, 1, 1, 1, 1, 0, 2, 0, 1, 1, 1, 1, 1, 0),
    (2, 0, 1, 1, 1, 1, 0, 1, 1, 1, 1, 0, 2, 0, 1, 1, 1, 0),
    (2, 0, 1, 1, 1, 0, 1, 1, 1, 1, 1, 0, 1, 1, 0, 2, 1, 0),
    (2, 0, 1, 1, 0, 1, 1, 1, 0, 1, 1, 1, 1, 1, 1, 0, 2, 0),
    (2, 2, 2, 2, 0, 1, 1, 1, 0, 1, 1, 1, 1, 1, 1, 0, 2, 0),
    (2, 2, 2, 2, 0, 0, 1, 1, 1, 1, 1, 1, 1, 1, 1, 0, 2, 0),
    (2, 2, 2, 2, 0, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 0, 2, 0),
    (2, 2, 2, 2, 0, 0, 1, 1, 1, 1, 1, 1, 1, 1, 0, 0, 2, 0),
    (2, 2, 2, 2, 0, 1, 1, 1, 1, 1, 1, 1, 1, 0, 2, 0, 2, 0),
    (2, 0, 2, 2, 2, 0, 1, 1, 1, 1, 1, 1, 1, 1, 0, 2, 2, 0),
    (2, 2, 2, 2, 0, 1, 1, 1, 0, 1, 1, 1, 1, 1, 0, 2, 2, 0),
    (2, 2, 2, 2, 2, 0, 1, 1, 1, 1, 1, 1, 0, 2, 2, 0, 2, 0),
    (2, 0, 2, 0, 2, 2, 2, 0, 1, 1, 1, 0, 0, 2, 2, 0, 2, 0),
    (2, 0, 2, 2, 2, 2, 2, 2, 0, 1, 1, 0, 2, 2, 0, 2, 2, 0),
    (2, 0, 2, 2, 2, 2, 2, 2, 2, 2, 0, 2, 2, 2, 2, 2, 2, 0),
)


class CustomWaveform:
    """Per-frame pixel operations for each of the 16 gray shades.

    Each entry is the 2-bit drive operation for a pixel of that shade in that
    frame. Rows shorter than ``FRAMES`` are padded with zeros.
    """

    def __init__(self, table: Sequence[Sequence[int]]) -> None:
        rows = [tuple(row) for row in table]
        if len(rows) != SHADES:
            raise ValueError(f"waveform table needs {SHADES} rows, got {len(rows)}")
        padded = []
        for shade, row in enumerate(rows):
            if len(row) > FRAMES:
                raise ValueError(f"row {shade} has more than {FRAMES} frames")
            if any(not 0 <= value <= 0xFF for value in row):
                raise ValueError(f"row {shade} holds values outside 0-255")
            padded.append(row + (0,) * (FRAMES - len(row)))
        self.table: tuple[tuple[int, ...], ...] = tuple(padded)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CustomWaveform):
            return NotImplemented
        return self.table == other.table

    def __repr__(self) -> str:
        return f"CustomWaveform({self.table!r})"

    @staticmethod
    def default() -> CustomWaveform:
        """The built-in waveform table."""
        return CustomWaveform(_DEFAULT_TABLE)

    def _check_frame(self, frame: int) -> None:
        if not 0 <= frame < FRAMES:
            raise ValueError(f"frame must be in 0..{FRAMES - 1}, got {frame}")

    def operation(self, shade: int, frame: int) -> int:
        """Drive operation for a pixel of ``shade`` in ``frame``."""
        if not 0 <= shade < SHADES:
            raise ValueError(f"shade must be in 0..{SHADES - 1}, got {shade}")
        self._check_frame(frame)
        return self.table[shade][frame]

    def _frame_ops(self, frame: int) -> list[int]:
        self._check_frame(frame)
        return [row[frame] for row in self.table]

    def convert_line(self, line, frame: int) -> bytes:
        """Turn a line of 4-bit pixels into 2-bit drive operations.

        The line is read as little-endian 16-bit words of four pixels; each
        word becomes one output byte, lowest nibble in the lowest two bits.
        """
        data = bytes(line)
        if len(data) % 2:
            raise ValueError("line length must be a whole number of 16-bit words")
        ops = self._frame_ops(frame)
        out = bytearray(len(data) // 2)
        for j in range(len(out)):
            word = data[2 * j] | (data[2 * j + 1] << 8)
            out[j] = (
                (ops[(word >> 12) & 0xF] << 6)
                | (ops[(word >> 8) & 0xF] << 4)
                | (ops[(word >> 4) & 0xF] << 2)
                | ops[word & 0xF]
            ) & 0xFF
        return bytes(out)

    def conversion_lut(self, frame: int) -> bytes:
        """A 65536-entry table mapping each 16-bit pixel word to its output byte."""
        ops = self._frame_ops(frame)
        high = [(op << 6) & 0xFF for op in ops]
        upper = [(op << 4) & 0xFF for op in ops]
        lower = [(op << 2) & 0xFF for op in ops]
        return bytes(
            (a | b | c | d) & 0xFF
            for a in high
            for b in upper
            for c in lower
            for d in ops
        )

    def to_bytes(self) -> bytes:
        """The table as ``WAVEFORM_SIZE`` bytes, one row per shade."""
        return bytes(value for row in self.table for value in row)

    @staticmethod
    def from_bytes(data) -> CustomWaveform:
        """Rebuild a waveform from ``WAVEFORM_SIZE`` bytes."""
        raw = bytes(data)
        if len(raw) != WAVEFORM_SIZE:
            raise ValueError(f"waveform data must be {WAVEFORM_SIZE} bytes, got {len(raw)}")
        return CustomWaveform([raw[i : i + FRAMES] for i in range(0, WAVEFORM_SIZE, FRAMES)])

    def save(self, stream: BinaryIO, offset: int = WAVEFORM_OFFSET) -> None:
        """Erase the sector at ``offset`` (fill with 0xFF) and write the table there."""
        stream.seek(offset)
        stream.write(self.to_bytes() + b"\xff" * (SECTOR_SIZE - WAVEFORM_SIZE))

    @staticmethod
    def load(stream: BinaryIO, offset: int = WAVEFORM_OFFSET) -> CustomWaveform:
        """Read a table previously written with :meth:`save`."""
        stream.seek(offset)
        data = stream.read(WAVEFORM_SIZE)
        if len(data) != WAVEFORM_SIZE:
            raise ValueError("not enough waveform data at the given offset")
        return CustomWaveform.from_bytes(data)