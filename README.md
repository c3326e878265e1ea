# epaperkit

Tools for preparing images for 16-shade e-paper panels: drawing into
packed 4-bit framebuffers, computing difference images between two
frames, and turning pixel data into per-frame drive data with a custom
waveform table. Pure Python, no dependencies.

## Installation

    pip install epaperkit

With the test suite's requirements:

    pip install "epaperkit[test]"

## Framebuffers and colours

A framebuffer is a `bytearray` with two pixels per byte. The lower
nibble holds the even (left) pixel, the upper nibble the odd (right)
one. Drawing functions take a colour as a byte and use only its upper
four bits: `0xF0` is white, `0x80` middle grey, `0x00` black.

## Drawing

`epaperkit.graphics.Canvas` owns a framebuffer (`canvas.framebuffer`)
that starts out all white. Its width must be even.

```python
from epaperkit.graphics import Canvas, get_pixel
from epaperkit.types import Rect, Rotation

canvas = Canvas(1600, 1200, Rotation.LANDSCAPE)
canvas.fill_rect(Rect(100, 100, 200, 50), 0x00)
canvas.draw_circle(800, 600, 120, 0x80)
canvas.fill_circle(300, 900, 40, 0x40)
canvas.draw_line(0, 0, 1599, 1199, 0x00)
canvas.fill_triangle(10, 10, 60, 90, 120, 20, 0x40)

print(get_pixel(150, 120, 1600, 1200, canvas.framebuffer))  # 0
```

Other primitives: `draw_pixel`, `draw_hline`, `draw_vline`,
`draw_rect`, `draw_triangle` and `fill_circle_helper` (which fills the
right and/or left half of a circle). Pixels that fall outside the
canvas are ignored.

`canvas.rotation` decides how drawing coordinates map onto the panel;
`rotated_width()` and `rotated_height()` give the size in the rotated
frame, and `full_screen()` the rectangle of the whole canvas.

Packed 4-bit images are placed with:

- `copy_to_framebuffer(area, data)` – copies directly, ignoring
  rotation; rows of odd width carry one padding nibble.
- `draw_rotated_image(area, data)` – honours the rotation (copies
  directly in landscape).
- `draw_rotated_transparent_image(area, data, key)` – draws pixel by
  pixel and skips pixels of colour `key`.

`get_pixel(x, y, width, height, buffer)` reads one pixel of a packed
image as a colour byte, or 0 outside the image.

## Difference images

```python
from epaperkit.difference import difference_image
from epaperkit.types import Rect

result = difference_image(new_fb, old_fb, Rect(0, 0, 1600, 1200), 1600, 1200)
result.interlaced        # one byte per pixel: "to" nibble high, "from" nibble low
result.dirty_lines       # one bool per row
result.changed           # smallest Rect holding every changed pixel
result.previously_white  # old image all white inside the crop
result.previously_black  # old image all black inside the crop
```

The crop defaults to the whole buffer; a negative crop or buffers too
small for the given size raise `ValueError`.

`waveform_temp_range_index(waveform, temperature)` picks the
temperature range of a `types.Waveform`, falling back to the closest
one. `waveform_mode_index(waveform, mode)` finds the entry for a
`DrawMode`. Both raise `types.DrawFailure` (with
`DrawError.NO_PHASES_AVAILABLE` or `DrawError.MODE_NOT_FOUND`) when
there is nothing to pick.

## Waveforms

`epaperkit.waveform.CustomWaveform` holds a 16 × 30 table of 2-bit
drive operations indexed by shade and frame; shorter rows are padded
with zeros. `CustomWaveform.default()` gives the built-in table.

```python
from epaperkit.waveform import CustomWaveform

wave = CustomWaveform.default()
wave.operation(15, 2)              # operation for white in frame 2
wave.convert_line(line_bytes, 0)   # 4-bit pixels -> one byte per 4 pixels
lut = wave.conversion_lut(0)       # 65536-entry lookup table for frame 0

with open("flash.bin", "r+b") as stream:
    wave.save(stream)              # writes a 4096-byte sector at WAVEFORM_OFFSET
    same = CustomWaveform.load(stream)
```

`to_bytes()` / `from_bytes()` convert the table to and from 480 bytes.

## Frames

`epaperkit.frames` produces the lines sent to the panel:

- `frame_lines(data, area, crop_to, mode, waveform, frame)` – drive
  data for every line of one frame of an update; lines with no input
  data come out all zero.
- `sweep_lines(data, waveform, min_y, max_y)` – a sweep where each
  drawn line uses the next frame.
- `fill_line(PushColor.BLACK | WHITE | NOOP)` and `stripe_line()` –
  whole-line darken, lighten, no-op and stripe patterns.

`epaperkit.render_context.buffer_params(area, crop_to, mode)` works out
bytes per line, start offset, vertical range and pixels per byte for a
packing mode, raising `DrawFailure` when no packing is set.

`epaperkit.line_queue.LineQueue` is a thread-safe fixed-size ring of
line buffers: fill `current()`, publish with `commit()`, take lines out
with `read()` (which raises `LineQueueEmpty` when empty).

## What it does not do

epaperkit only computes data. It does not talk to any display, board,
power supply or temperature sensor, and it does not time or send
frames. `types.Font` and `types.FontProperties` describe fonts, but
there is no text drawing.