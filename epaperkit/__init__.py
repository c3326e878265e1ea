"""Framebuffer drawing, difference images and waveform frame generation for 16-shade e-paper displays."""

__version__ = "0.1.0"

__all__ = [
    "types",
    "graphics",
    "difference",
    "line_queue",
    "waveform",
    "render_context",
    "frames",
]