[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "epaperkit"
version = "0.1.0"
description = "Framebuffer drawing, difference images and waveform frame generation for 16-shade e-paper displays"
requires-python = ">=3.10"
dependencies = []
keywords = ["e-paper", "epd", "framebuffer", "waveform", "grayscale", "display"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["epaperkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
