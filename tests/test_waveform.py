import io

import pytest

from epaperkit.waveform import (
    CLEAR_BYTE,
    FRAMES,
    SECTOR_SIZE,
    SHADES,
    WAVEFORM_SIZE,
    CustomWaveform,
)


def test_default_table_values():
    wf = CustomWaveform.default()
    assert wf.operation(0, 0) == 2
    assert wf.operation(5, 1) == 2
    assert wf.operation(0, 1) == 0
    assert wf.operation(15, FRAMES - 1) == 0


def test_to_bytes_round_trip():
    wf = CustomWaveform.default()
    data = wf.to_bytes()
    assert len(data) == WAVEFORM_SIZE
    assert CustomWaveform.from_bytes(data) == wf


def test_from_bytes_wrong_size():
    with pytest.raises(ValueError):
        CustomWaveform.from_bytes(b"\x00" * (WAVEFORM_SIZE - 1))


def test_table_validation():
    with pytest.raises(ValueError):
        CustomWaveform([[0]] * (SHADES - 1))
    with pytest.raises(ValueError):
        CustomWaveform([[0] * (FRAMES + 1)] * SHADES)
    with pytest.raises(ValueError):
        CustomWaveform([[256]] * SHADES)


def test_operation_rejects_bad_frame():
    with pytest.raises(ValueError):
        CustomWaveform.default().operation(0, FRAMES)


def test_black_line_first_frame_is_clear_bytes():
    wf = CustomWaveform.default()
    out = wf.convert_line(bytes(800), 0)
    assert len(out) == 400
    assert all(b == CLEAR_BYTE for b in out)


def test_convert_line_matches_lut():
    wf = CustomWaveform.default()
    frame = 9
    lut = wf.conversion_lut(frame)
    assert len(lut) == 65536
    words = [0x0000, 0x1234, 0xFEDC, 0xA5A5, 0xFFFF, 0x0F0F]
    line = b"".join(w.to_bytes(2, "little") for w in words)
    out = wf.convert_line(line, frame)
    assert list(out) == [lut[w] for w in words]


def test_convert_line_uses_nibble_positions():
    table = [[0] * FRAMES for _ in range(SHADES)]
    table[1][0] = 1
    wf = CustomWaveform(table)
    assert wf.convert_line((0x0001).to_bytes(2, "little"), 0) == bytes([0x01])
    assert wf.convert_line((0x1000).to_bytes(2, "little"), 0) == bytes([0x40])


def test_convert_line_odd_length():
    with pytest.raises(ValueError):
        CustomWaveform.default().convert_line(b"\x00\x00\x00", 0)


def test_save_and_load_round_trip():
    wf = CustomWaveform.default()
    stream = io.BytesIO()
    wf.save(stream, 64)
    raw = stream.getvalue()
    assert len(raw) == 64 + SECTOR_SIZE
    assert raw[64 + WAVEFORM_SIZE:] == b"\xff" * (SECTOR_SIZE - WAVEFORM_SIZE)
    assert CustomWaveform.load(stream, 64) == wf


def test_load_short_stream_fails():
    with pytest.raises(ValueError):
        CustomWaveform.load(io.BytesIO(b"\x00" * 10), 0)