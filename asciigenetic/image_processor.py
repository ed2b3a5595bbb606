"""Loading and preparing target images."""

from __future__ import annotations

from os import PathLike
from typing import Union

import numpy as np
from PIL import Image

_LUMA_WEIGHTS = np.array([2126, 7152, 722], dtype=np.uint32)
_LUMA_DIVISOR = 10000


class ImageProcessor:
    """Loads images and turns them into grayscale targets of a given size."""

    def load_image(self, path: Union[str, PathLike]) -> Image.Image:
        """Open and decode the image at ``path``."""
        with Image.open(path) as img:
            img.load()
            return img.copy()

    def prepare_target_image(
        self, img: Image.Image, target_width: int, target_height: int
    ) -> Image.Image:
        """Resize ``img`` and convert it to grayscale."""
        return self.convert_to_grayscale(self.resize_image(img, target_width, target_height))

    def resize_image(
        self, img: Image.Image, target_width: int, target_height: int
    ) -> Image.Image:
        """Resize to the given dimensions as RGB with Lanczos filtering."""
        if target_width <= 0 or target_height <= 0:
            raise ValueError("target dimensions must be positive")
        return img.convert("RGB").resize(
            (target_width, target_height), Image.Resampling.LANCZOS
        )

    def convert_to_grayscale(self, img: Image.Image) -> Image.Image:
        """Convert to 8-bit luma using Rec. 709 weights, ignoring alpha."""
        rgb = np.asarray(img.convert("RGB"), dtype=np.uint32)
        luma = (rgb @ _LUMA_WEIGHTS) // _LUMA_DIVISOR
        return Image.fromarray(luma.astype(np.uint8))