"""Core value types for the e-paper drawing library: geometry, modes, errors, waveforms and fonts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag
from typing import Optional


@dataclass(frozen=True)
class Rect:
    """An area on the display, in pixels."""

    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        """Whether the pixel (x, y) lies inside this area."""
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


class InitOptions(IntFlag):
    """Global driver options."""

    DEFAULT = 0
    LUT_1K = 1
    LUT_64K = 2
    FEED_QUEUE_8 = 4
    FEED_QUEUE_32 = 8


class DrawMode(IntFlag):
    """Waveform mode in the low six bits, framebuffer packing and previous state above."""

    INIT = 0x0
    DU = 0x1
    GC16 = 0x2
    GC16_FAST = 0x3
    A2 = 0x4
    GL16 = 0x5
    GL16_FAST = 0x6
    DU4 = 0x7
    GL4 = 0xA
    GL16_INV = 0xB
    EPDIY_WHITE_TO_GL16 = 0x10
    EPDIY_BLACK_TO_GL16 = 0x11
    EPDIY_MONOCHROME = 0x20
    UNKNOWN_WAVEFORM = 0x3F

    PACKING_8PPB = 0x40
    PACKING_2PPB = 0x80
    PACKING_1PPB_DIFFERENCE = 0x100

    PREVIOUSLY_WHITE = 0x200
    PREVIOUSLY_BLACK = 0x400

    # Non-flashing refresh on a previously white screen.
    DEFAULT = 0x205


class Rotation(IntEnum):
    """Software rotation applied by the drawing functions."""

    LANDSCAPE = 0
    PORTRAIT = 1
    INVERTED_LANDSCAPE = 2
    INVERTED_PORTRAIT = 3


class DrawError(IntFlag):
    """Failure flags a draw operation can report."""

    SUCCESS = 0x0
    INVALID_PACKING_MODE = 0x1
    LOOKUP_NOT_IMPLEMENTED = 0x2
    STRING_INVALID = 0x4
    NO_DRAWABLE_CHARACTERS = 0x8
    FAILED_ALLOC = 0x10
    GLYPH_FALLBACK_FAILED = 0x20
    INVALID_CROP = 0x40
    MODE_NOT_FOUND = 0x80
    NO_PHASES_AVAILABLE = 0x100
    INVALID_FONT_FLAGS = 0x200
    EMPTY_LINE_QUEUE = 0x400


class DrawFailure(Exception):
    """Raised when a draw operation fails; carries the combined error flags."""

    def __init__(self, error: DrawError | int) -> None:
        flags = DrawError(error)
        if flags == DrawError.SUCCESS:
            raise ValueError("a draw failure needs at least one error flag")
        super().__init__(f"draw failed: {flags!r}")
        self.error = flags


class FontFlags(IntFlag):
    """Font drawing flags."""

    DRAW_BACKGROUND = 0x1
    ALIGN_LEFT = 0x2
    ALIGN_RIGHT = 0x4
    ALIGN_CENTER = 0x8


@dataclass(frozen=True)
class FontProperties:
    """Colours, fallback glyph and flags used when drawing text."""

    fg_color: int = 0
    bg_color: int = 15
    fallback_glyph: int = 0
    flags: FontFlags = FontFlags.ALIGN_LEFT

    def __post_init__(self) -> None:
        for name in ("fg_color", "bg_color"):
            value = getattr(self, name)
            if not 0 <= value <= 0xF:
                raise ValueError(f"{name} must fit in 4 bits, got {value}")
        if self.fallback_glyph < 0:
            raise ValueError("fallback_glyph must be a non-negative code point")
        object.__setattr__(self, "flags", FontFlags(self.flags))

    @staticmethod
    def default() -> FontProperties:
        """The default font properties."""
        return FontProperties()


@dataclass(frozen=True)
class WaveformPhases:
    """Lookup data for one mode at one temperature range."""

    phases: int
    luts: bytes
    phase_times: Optional[tuple[int, ...]] = None


@dataclass(frozen=True)
class WaveformMode:
    """Phase data of one waveform mode, one entry per temperature range."""

    type: int
    range_data: tuple[WaveformPhases, ...] = ()

    @property
    def temp_ranges(self) -> int:
        return len(self.range_data)


@dataclass(frozen=True)
class TempInterval:
    """A temperature interval in °C."""

    min: int
    max: int


@dataclass(frozen=True)
class Waveform:
    """A full waveform: its modes and the temperature intervals they cover."""

    mode_data: tuple[WaveformMode, ...] = ()
    temp_intervals: tuple[TempInterval, ...] = ()

    @property
    def num_modes(self) -> int:
        return len(self.mode_data)

    @property
    def num_temp_ranges(self) -> int:
        return len(self.temp_intervals)


@dataclass(frozen=True)
class Glyph:
    """Metrics and bitmap location of a single glyph."""

    width: int
    height: int
    advance_x: int
    left: int
    top: int
    compressed_size: int
    data_offset: int


@dataclass(frozen=True)
class UnicodeInterval:
    """A run of code points whose glyphs start at ``offset`` in the glyph table."""

    first: int
    last: int
    offset: int

    def __contains__(self, code_point: object) -> bool:
        return isinstance(code_point, int) and self.first <= code_point <= self.last


@dataclass(frozen=True)
class Font:
    """A bitmap font: concatenated bitmaps, glyph table and code point intervals."""

    bitmap: bytes
    glyph: tuple[Glyph, ...]
    intervals: tuple[UnicodeInterval, ...]
    compressed: bool
    advance_y: int
    ascender: int
    descender: int

    @property
    def interval_count(self) -> int:
        return len(self.intervals)


class DisplayType(Enum):
    """Compatibility class of a display, grouping the workarounds it needs."""

    GENERIC = 0
    ED097TC2 = 1


@dataclass(frozen=True)
class Display:
    """Physical display description."""

    width: int
    height: int
    bus_width: int
    bus_speed: int
    default_waveform: Optional[Waveform] = None
    display_type: DisplayType = field(default=DisplayType.GENERIC)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("display dimensions must be positive")
        if not 0 < self.bus_width <= 0xFF:
            raise ValueError("bus_width must be between 1 and 255 bits")