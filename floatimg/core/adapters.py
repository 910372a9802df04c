from __future__ import annotations

import numpy as np

from floatimg.core.color import (
    FloatColor,
    IntColor,
    IntegerColorAdapter,
    denormalize,
    denormalize_array,
    normalize_array,
)
from floatimg.core.image import RGBA, Bounds, ColorModel, FloatImageSource, IntegerImageSource


class DecodedImageAdapter:
    """
    Float view over an integer-channel image.
    Each lookup normalizes the wrapped pixel on the fly; nothing is cached.
    """
    def __init__(self, src: IntegerImageSource) -> None:
        self.src = src

    def bounds(self) -> Bounds:
        return self.src.bounds()

    def color_model(self) -> ColorModel:
        return self.src.color_model()

    def at(self, x: int, y: int) -> FloatColor:
        return IntegerColorAdapter(self.src.at(x, y)).float_color()

    def as_array(self) -> np.ndarray:
        """
        Whole image as (H,W,4) float32, same values as calling `at` per pixel.
        """
        return normalize_array(read_int_array(self.src), self.src.color_model().bit_depth)


class IntegerImageAdapter:
    """
    8-bit RGBA view over a FloatImageSource, clamping each component on lookup.
    The wrapped source's own color model is not reported.
    """
    def __init__(self, src: FloatImageSource) -> None:
        self.src = src

    def bounds(self) -> Bounds:
        return self.src.bounds()

    def color_model(self) -> ColorModel:
        return RGBA

    def at(self, x: int, y: int) -> IntColor:
        c = self.src.at(x, y)
        return IntColor(denormalize(c.r), denormalize(c.g), denormalize(c.b), denormalize(c.a))

    def as_array(self) -> np.ndarray:
        return denormalize_array(read_float_array(self.src))


def to_float_image(src: IntegerImageSource) -> FloatImageSource:
    return DecodedImageAdapter(src)


def to_integer_image(src: FloatImageSource) -> IntegerImageSource:
    return IntegerImageAdapter(src)


def read_float_array(src: FloatImageSource) -> np.ndarray:
    """
    Read a float source into an (H,W,4) float array.
    Uses the source's bulk `as_array` when it has one, else walks the pixels.
    """
    bulk = getattr(src, "as_array", None)
    if bulk is not None:
        return bulk()

    b = src.bounds()
    out = np.zeros((b.height, b.width, 4), dtype=np.float32)
    for y in range(b.min_y, b.max_y):
        for x in range(b.min_x, b.max_x):
            c = src.at(x, y)
            out[y - b.min_y, x - b.min_x] = (c.r, c.g, c.b, c.a)
    return out


def read_int_array(img: IntegerImageSource) -> np.ndarray:
    """
    Read an integer image into an (H,W,4) array: uint16 for sources deeper
    than 8 bits, uint8 otherwise.
    """
    bulk = getattr(img, "as_array", None)
    if bulk is not None:
        return bulk()

    b = img.bounds()
    dtype = np.uint16 if img.color_model().bit_depth > 8 else np.uint8
    out = np.zeros((b.height, b.width, 4), dtype=dtype)
    for y in range(b.min_y, b.max_y):
        for x in range(b.min_x, b.max_x):
            out[y - b.min_y, x - b.min_x] = img.at(x, y).rgba()
    return out


def materialize(img: IntegerImageSource) -> np.ndarray:
    """
    Pixel data of an integer image as an (H,W,4) uint8 array, ready for an encoder.
    Sources deeper than 8 bits keep their most significant byte.
    """
    arr = read_int_array(img)
    depth = img.color_model().bit_depth
    if depth > 8:
        arr = arr >> (depth - 8)
    arr = arr.astype(np.uint8)
    return np.ascontiguousarray(arr)
