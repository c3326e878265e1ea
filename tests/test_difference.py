import pytest

from epaperkit.difference import (
    difference_image,
    waveform_mode_index,
    waveform_temp_range_index,
)
from epaperkit.types import (
    DrawError,
    DrawFailure,
    DrawMode,
    Rect,
    TempInterval,
    Waveform,
    WaveformMode,
)

W, H = 8, 4


def _image(fill):
    return bytearray([fill]) * (W * H // 2)


def _set(buf, x, y, value):
    index = y * W // 2 + x // 2
    if x % 2:
        buf[index] = (buf[index] & 0x0F) | (value << 4)
    else:
        buf[index] = (buf[index] & 0xF0) | value


def test_identical_images_have_no_changes():
    img = _image(0xFF)
    result = difference_image(img, img, None, W, H)
    assert result.changed.width == 0
    assert result.changed.height == 0
    assert not any(result.dirty_lines)
    assert all(b == 0xFF for b in result.interlaced)


def test_single_pixel_change():
    before = _image(0xFF)
    after = _image(0xFF)
    _set(after, 3, 1, 0x0)
    result = difference_image(after, before, None, W, H)
    assert result.changed == Rect(3, 1, 1, 1)
    assert result.dirty_lines == [False, True, False, False]
    assert result.interlaced[1 * W + 3] == 0x0F
    assert result.interlaced[1 * W + 2] == 0xFF


def test_interlaced_packs_to_and_from_nibbles():
    before = _image(0x00)
    after = _image(0x00)
    _set(before, 0, 0, 0x3)
    _set(after, 0, 0, 0xA)
    result = difference_image(after, before, None, W, H)
    assert result.interlaced[0] == (0xA << 4) | 0x3


def test_previously_white_and_black():
    white = _image(0xFF)
    black = _image(0x00)
    result = difference_image(black, white, None, W, H)
    assert result.previously_white
    assert not result.previously_black
    result = difference_image(white, black, None, W, H)
    assert result.previously_black
    assert not result.previously_white
    assert result.changed == Rect(0, 0, W, H)


def test_crop_excludes_changes_outside():
    before = _image(0xFF)
    after = _image(0xFF)
    _set(after, 7, 3, 0x0)
    result = difference_image(after, before, Rect(0, 0, 4, 2), W, H)
    assert result.changed.width == 0
    assert result.changed.height == 0
    assert result.interlaced[3 * W + 7] == 0
    assert result.interlaced[0] == 0xFF


def test_crop_covering_multiple_changes():
    before = _image(0xFF)
    after = _image(0xFF)
    _set(after, 2, 0, 0x5)
    _set(after, 5, 2, 0x5)
    result = difference_image(after, before, Rect(1, 0, 6, 4), W, H)
    assert result.changed == Rect(2, 0, 4, 3)
    assert result.dirty_lines == [True, False, True, False]


def test_too_small_buffer_rejected():
    with pytest.raises(ValueError):
        difference_image(bytearray(2), _image(0), None, W, H)


def test_negative_crop_rejected():
    img = _image(0)
    with pytest.raises(ValueError):
        difference_image(img, img, Rect(-1, 0, 2, 2), W, H)


def _waveform():
    return Waveform(
        mode_data=(WaveformMode(type=int(DrawMode.GC16)), WaveformMode(type=int(DrawMode.GL16))),
        temp_intervals=(TempInterval(0, 10), TempInterval(10, 20), TempInterval(20, 30)),
    )


def test_temp_range_clamps_to_ends():
    wf = _waveform()
    assert waveform_temp_range_index(wf, -20) == 0
    assert waveform_temp_range_index(wf, 500) == len(wf.temp_intervals) - 1


def test_temp_range_without_intervals_fails():
    with pytest.raises(DrawFailure) as info:
        waveform_temp_range_index(Waveform(), 20)
    assert info.value.error == DrawError.NO_PHASES_AVAILABLE


def test_mode_index_ignores_packing_bits():
    wf = _waveform()
    assert waveform_mode_index(wf, DrawMode.GL16 | DrawMode.PACKING_2PPB | DrawMode.PREVIOUSLY_WHITE) == 1
    assert waveform_mode_index(wf, DrawMode.GC16) == 0


def test_mode_index_missing_mode_fails():
    with pytest.raises(DrawFailure) as info:
        waveform_mode_index(_waveform(), DrawMode.A2)
    assert info.value.error == DrawError.MODE_NOT_FOUND