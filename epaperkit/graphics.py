"""Drawing primitives on a 4-bit-per-pixel framebuffer with software rotation."""

from __future__ import annotations

from typing import Optional

from .types import Rect, Rotation

_WHITE = 0xFF


def _u16(value: int) -> int:
    """Coordinates pass through 16-bit unsigned storage during rotation."""
    return value & 0xFFFF


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def get_pixel(x: int, y: int, fb_width: int, fb_height: int, framebuffer) -> int:
    """Colour (0-255, upper nibble) of pixel (x, y) in a packed 4-bit image.

    Rows take ``ceil(fb_width / 2)`` bytes; the lower nibble holds the even pixel.
    Pixels outside the image read as 0.
    """
    if not 0 <= x < fb_width or not 0 <= y < fb_height:
        return 0
    row_bytes = fb_width // 2 + fb_width % 2
    value = framebuffer[y * row_bytes + x // 2]
    nibble = (value & 0xF0) >> 4 if x % 2 else value & 0x0F
    return nibble << 4


class Canvas:
    """A 4-bit grayscale framebuffer, two pixels per byte, with drawing operations.

    Colours are bytes whose upper nibble is the gray level: 0x00 black to 0xF0 white.
    """

    def __init__(
        self,
        width: int = 1600,
        height: int = 1200,
        rotation: Rotation = Rotation.LANDSCAPE,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas dimensions must be positive")
        if width % 2:
            raise ValueError("canvas width must be even")
        self.width = width
        self.height = height
        self.rotation = Rotation(rotation)
        self.framebuffer = bytearray([_WHITE]) * (width // 2 * height)

    def full_screen(self) -> Rect:
        """The rectangle covering the whole canvas."""
        return Rect(0, 0, self.width, self.height)

    def rotated_width(self) -> int:
        """Width seen by drawing calls under the current rotation."""
        if self.rotation in (Rotation.PORTRAIT, Rotation.INVERTED_PORTRAIT):
            return self.height
        return self.width

    def rotated_height(self) -> int:
        """Height seen by drawing calls under the current rotation."""
        if self.rotation in (Rotation.PORTRAIT, Rotation.INVERTED_PORTRAIT):
            return self.width
        return self.height

    def _rotate(self, x: int, y: int) -> tuple[int, int]:
        x, y = _u16(x), _u16(y)
        if self.rotation is Rotation.PORTRAIT:
            x, y = y, x
            x = _u16(self.width - x - 1)
        elif self.rotation is Rotation.INVERTED_LANDSCAPE:
            x = _u16(self.width - x - 1)
            y = _u16(self.height - y - 1)
        elif self.rotation is Rotation.INVERTED_PORTRAIT:
            x, y = y, x
            y = _u16(self.height - y - 1)
        return x, y

    def draw_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates outside the canvas are ignored."""
        x, y = self._rotate(x, y)
        if x >= self.width or y >= self.height:
            return
        color &= 0xFF
        index = y * self.width // 2 + x // 2
        old = self.framebuffer[index]
        if x % 2:
            self.framebuffer[index] = (old & 0x0F) | (color & 0xF0)
        else:
            self.framebuffer[index] = (old & 0xF0) | (color >> 4)

    def draw_hline(self, x: int, y: int, length: int, color: int) -> None:
        for xx in range(x, x + length):
            self.draw_pixel(xx, y, color)

    def draw_vline(self, x: int, y: int, length: int, color: int) -> None:
        for yy in range(y, y + length):
            self.draw_pixel(x, yy, color)

    def draw_circle(self, x0: int, y0: int, r: int, color: int) -> None:
        """Outline of a circle centred at (x0, y0)."""
        f = 1 - r
        ddf_x = 1
        ddf_y = -2 * r
        x, y = 0, r

        self.draw_pixel(x0, y0 + r, color)
        self.draw_pixel(x0, y0 - r, color)
        self.draw_pixel(x0 + r, y0, color)
        self.draw_pixel(x0 - r, y0, color)

        while x < y:
            if f >= 0:
                y -= 1
                ddf_y += 2
                f += ddf_y
            x += 1
            ddf_x += 2
            f += ddf_x
            for px, py in (
                (x0 + x, y0 + y), (x0 - x, y0 + y), (x0 + x, y0 - y), (x0 - x, y0 - y),
                (x0 + y, y0 + x), (x0 - y, y0 + x), (x0 + y, y0 - x), (x0 - y, y0 - x),
            ):
                self.draw_pixel(px, py, color)

    def fill_circle(self, x0: int, y0: int, r: int, color: int) -> None:
        """Filled circle centred at (x0, y0)."""
        self.draw_vline(x0, y0 - r, 2 * r + 1, color)
        self.fill_circle_helper(x0, y0, r, 3, 0, color)

    def fill_circle_helper(
        self, x0: int, y0: int, r: int, corners: int, delta: int, color: int
    ) -> None:
        """Fill the right (bit 0) and/or left (bit 1) halves of a circle."""
        f = 1 - r
        ddf_x = 1
        ddf_y = -2 * r
        x, y = 0, r
        px, py = x, y
        delta += 1

        while x < y:
            if f >= 0:
                y -= 1
                ddf_y += 2
                f += ddf_y
            x += 1
            ddf_x += 2
            f += ddf_x
            if x < y + 1:
                if corners & 1:
                    self.draw_vline(x0 + x, y0 - y, 2 * y + delta, color)
                if corners & 2:
                    self.draw_vline(x0 - x, y0 - y, 2 * y + delta, color)
            if y != py:
                if corners & 1:
                    self.draw_vline(x0 + py, y0 - px, 2 * px + delta, color)
                if corners & 2:
                    self.draw_vline(x0 - py, y0 - px, 2 * px + delta, color)
                py = y
            px = x

    def draw_rect(self, rect: Rect, color: int) -> None:
        """Outline of a rectangle."""
        x, y, w, h = rect.x, rect.y, rect.width, rect.height
        self.draw_hline(x, y, w, color)
        self.draw_hline(x, y + h - 1, w, color)
        self.draw_vline(x, y, h, color)
        self.draw_vline(x + w - 1, y, h, color)

    def fill_rect(self, rect: Rect, color: int) -> None:
        """Filled rectangle."""
        for row in range(rect.y, rect.y + rect.height):
            self.draw_hline(rect.x, row, rect.width, color)

    def _write_line(self, x0: int, y0: int, x1: int, y1: int, color: int) -> None:
        steep = abs(y1 - y0) > abs(x1 - x0)
        if steep:
            x0, y0 = y0, x0
            x1, y1 = y1, x1
        if x0 > x1:
            x0, x1 = x1, x0
            y0, y1 = y1, y0

        dx = x1 - x0
        dy = abs(y1 - y0)
        err = dx // 2
        ystep = 1 if y0 < y1 else -1

        for x in range(x0, x1 + 1):
            if steep:
                self.draw_pixel(y0, x, color)
            else:
                self.draw_pixel(x, y0, color)
            err -= dy
            if err < 0:
                y0 += ystep
                err += dx

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: int) -> None:
        """Straight line between two points, both ends included."""
        if x0 == x1:
            if y0 > y1:
                y0, y1 = y1, y0
            self.draw_vline(x0, y0, y1 - y0 + 1, color)
        elif y0 == y1:
            if x0 > x1:
                x0, x1 = x1, x0
            self.draw_hline(x0, y0, x1 - x0 + 1, color)
        else:
            self._write_line(x0, y0, x1, y1, color)

    def draw_triangle(
        self, x0: int, y0: int, x1: int, y1: int, x2: int, y2: int, color: int
    ) -> None:
        """Outline of a triangle."""
        self.draw_line(x0, y0, x1, y1, color)
        self.draw_line(x1, y1, x2, y2, color)
        self.draw_line(x2, y2, x0, y0, color)

    def fill_triangle(
        self, x0: int, y0: int, x1: int, y1: int, x2: int, y2: int, color: int
    ) -> None:
        """Filled triangle, drawn as horizontal scanlines."""
        if y0 > y1:
            y0, y1 = y1, y0
            x0, x1 = x1, x0
        if y1 > y2:
            y2, y1 = y1, y2
            x2, x1 = x1, x2
        if y0 > y1:
            y0, y1 = y1, y0
            x0, x1 = x1, x0

        if y0 == y2:
            a = min(x0, x1, x2)
            b = max(x0, x1, x2)
            self.draw_hline(a, y0, b - a + 1, color)
            return

        dx01, dy01 = x1 - x0, y1 - y0
        dx02, dy02 = x2 - x0, y2 - y0
        dx12, dy12 = x2 - x1, y2 - y1
        sa = sb = 0

        last = y1 if y1 == y2 else y1 - 1

        y = y0
        while y <= last:
            a = x0 + _tdiv(sa, dy01)
            b = x0 + _tdiv(sb, dy02)
            sa += dx01
            sb += dx02
            if a > b:
                a, b = b, a
            self.draw_hline(a, y, b - a + 1, color)
            y += 1

        sa = dx12 * (y - y1)
        sb = dx02 * (y - y0)
        while y <= y2:
            a = x1 + _tdiv(sa, dy12)
            b = x0 + _tdiv(sb, dy02)
            sa += dx12
            sb += dx02
            if a > b:
                a, b = b, a
            self.draw_hline(a, y, b - a + 1, color)
            y += 1

    def copy_to_framebuffer(self, image_area: Rect, image_data) -> None:
        """Copy a packed 4-bit image into the canvas, ignoring rotation.

        Rows of odd width carry one padding nibble.
        """
        width, height = image_area.width, image_area.height
        for i in range(width * height):
            value_index = i + (i // width if width % 2 else 0)
            byte = image_data[value_index // 2]
            value = (byte & 0xF0) >> 4 if value_index % 2 else byte & 0x0F

            xx = image_area.x + i % width
            if not 0 <= xx < self.width:
                continue
            yy = image_area.y + i // width
            if not 0 <= yy < self.height:
                continue
            index = yy * self.width // 2 + xx // 2
            old = self.framebuffer[index]
            if xx % 2:
                self.framebuffer[index] = (old & 0x0F) | (value << 4)
            else:
                self.framebuffer[index] = (old & 0xF0) | value

    def _draw_rotated(
        self, image_area: Rect, image_buffer, transparent_color: Optional[int]
    ) -> None:
        max_x = self.rotated_width()
        max_y = self.rotated_height()
        for y in range(image_area.height):
            y_offset = _u16(image_area.y + y)
            if y_offset >= max_y:
                continue
            for x in range(image_area.width):
                x_offset = _u16(image_area.x + x)
                if x_offset >= max_x:
                    continue
                color = get_pixel(x, y, image_area.width, image_area.height, image_buffer)
                if transparent_color is None or color != transparent_color:
                    self.draw_pixel(x_offset, y_offset, color)

    def draw_rotated_image(self, image_area: Rect, image_buffer) -> None:
        """Draw a packed 4-bit image, honouring the current rotation."""
        if self.rotation is not Rotation.LANDSCAPE:
            self._draw_rotated(image_area, image_buffer, None)
        else:
            self.copy_to_framebuffer(image_area, image_buffer)

    def draw_rotated_transparent_image(
        self, image_area: Rect, image_buffer, transparent_color: int
    ) -> None:
        """Draw an image pixel by pixel, skipping pixels of ``transparent_color``."""
        self._draw_rotated(image_area, image_buffer, transparent_color & 0xFF)