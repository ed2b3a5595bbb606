"""Rendering of character grids into grayscale glyph images."""

from __future__ import annotations

import math
from functools import cached_property
from typing import Iterable, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

FONT_NAME = "DejaVuSansMono.ttf"
FONT_SIZE = 12
DEBUG_SCALE = 3
LINE_SPACING = 1.2
FIRST_CODE = 0x20
LAST_CODE = 0x7F

Chars = Union[str, bytes, bytearray, Iterable[int]]


def _load_font(size: int) -> ImageFont.ImageFont:
    """Load the monospace font at ``size``, falling back to Pillow's default font."""
    try:
        return ImageFont.truetype(FONT_NAME, size)
    except OSError:
        pass
    try:
        return ImageFont.load_default(size=size)
    except TypeError:
        return ImageFont.load_default()


def _codes(chars: Chars) -> list[int]:
    """Normalise a character sequence to a list of byte codes."""
    if isinstance(chars, str):
        return [ord(c) for c in chars]
    return [int(c) for c in chars]


def _draw_glyph(draw, left, top, baseline, ch, font, fill) -> None:
    """Draw ``ch`` with its baseline ``baseline`` pixels below ``top``."""
    if isinstance(font, ImageFont.FreeTypeFont):
        draw.text((left, top + baseline), ch, fill=fill, font=font, anchor="ls")
    else:
        draw.text((left, top), ch, fill=fill, font=font)


class AsciiGenerator:
    """Renders character grids into grayscale images using a cached glyph set."""

    def __init__(self):
        self._font = _load_font(FONT_SIZE)
        advance = self._font.getlength("M")
        self.char_width = max(1, math.ceil(advance))
        self.char_height = math.ceil(FONT_SIZE * LINE_SPACING)
        print(
            f"Font scale: {FONT_SIZE:g}, advance_width: {advance:g}, "
            f"calculated char_width: {self.char_width}, char_height: {self.char_height}"
        )
        self._char_cache: dict[int, np.ndarray] = {
            code: np.asarray(self.render_char(chr(code)), dtype=np.uint8)
            for code in range(FIRST_CODE, LAST_CODE + 1)
        }

    def render_char(self, ch: Union[str, int]) -> Image.Image:
        """Render one character, white on black, clipped to a single cell."""
        if isinstance(ch, int):
            ch = chr(ch)
        tile = Image.new("L", (self.char_width, self.char_height), 0)
        _draw_glyph(ImageDraw.Draw(tile), 0, 0, FONT_SIZE, ch, self._font, 255)
        return tile

    def generate_ascii_image(self, chars: Chars, width: int, height: int) -> Image.Image:
        """Render ``chars`` as a ``width`` x ``height`` grid on a black background."""
        return self.generate_ascii_image_with_background(chars, width, height, False)

    def generate_ascii_image_with_background(
        self, chars: Chars, width: int, height: int, white_background: bool
    ) -> Image.Image:
        """Render ``chars`` as a grid; with a white background the glyphs are inverted."""
        self._check_grid(width, height)
        background = 255 if white_background else 0
        cw, ch = self.char_width, self.char_height
        canvas = np.full((height * ch, width * cw), background, dtype=np.uint8)

        for index, code in enumerate(_codes(chars)[: width * height]):
            glyph = self._char_cache.get(code)
            if glyph is None:
                continue
            row, col = divmod(index, width)
            canvas[row * ch : (row + 1) * ch, col * cw : (col + 1) * cw] = (
                255 - glyph if white_background else glyph
            )

        return Image.fromarray(canvas)

    def individual_to_string(self, individual, width: int) -> str:
        """Lay out an individual's characters as lines of ``width`` characters."""
        if width <= 0:
            raise ValueError("width must be positive")
        codes = _codes(individual.chars)
        return "\n".join(
            "".join(map(chr, codes[start : start + width]))
            for start in range(0, len(codes), width)
        )

    def char_dimensions(self) -> tuple[int, int]:
        """Width and height of one character cell in pixels."""
        return self.char_width, self.char_height

    @cached_property
    def _debug_font(self) -> ImageFont.ImageFont:
        return _load_font(FONT_SIZE * DEBUG_SCALE)

    def generate_debug_ascii_image_with_background(
        self, chars: Chars, width: int, height: int, white_background: bool
    ) -> Image.Image:
        """Render ``chars`` at three times the normal size for inspection."""
        self._check_grid(width, height)
        cell_w = self.char_width * DEBUG_SCALE
        cell_h = self.char_height * DEBUG_SCALE
        background = 255 if white_background else 0
        ink = 0 if white_background else 255
        image = Image.new("L", (width * cell_w, height * cell_h), background)
        draw = ImageDraw.Draw(image)
        font = self._debug_font

        for index, code in enumerate(_codes(chars)[: width * height]):
            ch = chr(code)
            left, top, right, bottom = font.getbbox(ch)
            if right <= left or bottom <= top:
                continue
            row, col = divmod(index, width)
            _draw_glyph(
                draw, col * cell_w, row * cell_h, FONT_SIZE * DEBUG_SCALE, ch, font, ink
            )

        return image

    @staticmethod
    def _check_grid(width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("grid width and height must be positive")