import dataclasses

import pytest

from epaperkit.types import (
    Display,
    DisplayType,
    DrawError,
    DrawFailure,
    DrawMode,
    Font,
    FontFlags,
    FontProperties,
    Glyph,
    InitOptions,
    Rect,
    Rotation,
    TempInterval,
    UnicodeInterval,
    Waveform,
    WaveformMode,
    WaveformPhases,
)


def test_rect_contains_corners_and_edges():
    r = Rect(10, 20, 5, 3)
    assert r.contains(10, 20)
    assert r.contains(14, 22)
    assert not r.contains(15, 20)
    assert not r.contains(10, 23)
    assert not r.contains(9, 20)


def test_empty_rect_contains_nothing():
    r = Rect(0, 0, 0, 0)
    assert not any(r.contains(x, y) for x in range(-1, 2) for y in range(-1, 2))


def test_rect_is_immutable():
    r = Rect(1, 2, 3, 4)
    with pytest.raises(dataclasses.FrozenInstanceError):
        r.x = 5  # type: ignore[misc]
    assert r.x == 1
    assert r == Rect(1, 2, 3, 4)


def test_draw_mode_documented_values():
    assert DrawMode(0x2) is DrawMode.GC16
    assert DrawMode(0x80) is DrawMode.PACKING_2PPB
    assert DrawMode(0x205) == DrawMode.GL16 | DrawMode.PREVIOUSLY_WHITE
    assert DrawMode(0x205) == DrawMode.DEFAULT


def test_draw_mode_waveform_bits_extracted():
    mode = DrawMode(0x80 | 0x200 | 0x2)
    assert DrawMode(mode & 0x3F) is DrawMode.GC16
    assert mode & DrawMode.PACKING_2PPB
    assert not mode & DrawMode.PACKING_8PPB


def test_init_options_combine():
    opts = InitOptions(2 | 8)
    assert opts == InitOptions.LUT_64K | InitOptions.FEED_QUEUE_32
    assert opts & InitOptions.LUT_64K
    assert not opts & InitOptions.LUT_1K


def test_rotation_from_int():
    assert Rotation(3) is Rotation.INVERTED_PORTRAIT
    with pytest.raises(ValueError):
        Rotation(4)


def test_draw_failure_carries_flags():
    err = DrawError.INVALID_CROP | DrawError.MODE_NOT_FOUND
    with pytest.raises(DrawFailure) as info:
        raise DrawFailure(err)
    assert info.value.error == err
    assert info.value.error & DrawError.INVALID_CROP


def test_draw_failure_accepts_int():
    failure = DrawFailure(int(DrawError.EMPTY_LINE_QUEUE))
    assert failure.error is DrawError.EMPTY_LINE_QUEUE


def test_draw_failure_rejects_success():
    with pytest.raises(ValueError):
        DrawFailure(DrawError.SUCCESS)


def test_font_properties_default_is_stable():
    props = FontProperties.default()
    assert props == FontProperties.default()
    assert props.flags == FontFlags.ALIGN_LEFT
    assert 0 <= props.fg_color <= 15 and 0 <= props.bg_color <= 15


@pytest.mark.parametrize("kwargs", [{"fg_color": 16}, {"bg_color": -1}, {"fallback_glyph": -5}])
def test_font_properties_rejects_out_of_range(kwargs):
    with pytest.raises(ValueError):
        FontProperties(**kwargs)


def test_font_properties_flags_coerced():
    props = FontProperties(flags=0x1 | 0x8)
    assert props.flags == FontFlags.DRAW_BACKGROUND | FontFlags.ALIGN_CENTER


def test_waveform_counts_follow_data():
    phases = WaveformPhases(phases=2, luts=b"\x00\x01", phase_times=(10, 20))
    mode = WaveformMode(type=int(DrawMode.GC16), range_data=(phases, phases))
    wf = Waveform(mode_data=(mode,), temp_intervals=(TempInterval(0, 10), TempInterval(10, 20)))
    assert mode.temp_ranges == 2
    assert wf.num_modes == 1
    assert wf.num_temp_ranges == 2
    assert wf.mode_data[0].range_data[1].phase_times == (10, 20)


def test_empty_waveform():
    wf = Waveform()
    assert wf.num_modes == 0
    assert wf.num_temp_ranges == 0


def test_unicode_interval_membership():
    iv = UnicodeInterval(first=0x41, last=0x5A, offset=3)
    assert 0x41 in iv
    assert 0x5A in iv
    assert 0x5B not in iv
    assert "A" not in iv


def test_font_interval_count():
    glyph = Glyph(width=2, height=3, advance_x=4, left=0, top=3, compressed_size=0, data_offset=0)
    font = Font(
        bitmap=b"\xff\xff\xff",
        glyph=(glyph,),
        intervals=(UnicodeInterval(32, 32, 0), UnicodeInterval(65, 65, 1)),
        compressed=False,
        advance_y=10,
        ascender=8,
        descender=-2,
    )
    assert font.interval_count == 2
    assert font.glyph[0].advance_x == 4


def test_display_defaults_and_validation():
    d = Display(width=1600, height=1200, bus_width=16, bus_speed=20)
    assert d.display_type is DisplayType.GENERIC
    assert d.default_waveform is None
    with pytest.raises(ValueError):
        Display(width=0, height=1200, bus_width=16, bus_speed=20)
    with pytest.raises(ValueError):
        Display(width=1600, height=1200, bus_width=256, bus_speed=20)