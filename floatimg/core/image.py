from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np

from floatimg.core.color import FloatColor, IntColor, IntegerColor


@dataclass(frozen=True)
class Bounds:
    """
    Half-open pixel rectangle: min is inclusive, max is exclusive.
    """
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def from_size(cls, width: int, height: int) -> "Bounds":
        return cls(0, 0, int(width), int(height))

    @property
    def width(self) -> int:
        return max(self.max_x - self.min_x, 0)

    @property
    def height(self) -> int:
        return max(self.max_y - self.min_y, 0)

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y


@dataclass(frozen=True)
class ColorModel:
    name: str
    bit_depth: int


RGBA = ColorModel("RGBA", 8)
RGBA64 = ColorModel("RGBA64", 16)
FLOAT_RGBA = ColorModel("FloatRGBA", 32)


@runtime_checkable
class IntegerImageSource(Protocol):
    """
    Integer-channel image: what decoders produce and encoders consume.
    """
    def bounds(self) -> Bounds: ...

    def color_model(self) -> ColorModel: ...

    def at(self, x: int, y: int) -> IntegerColor: ...


@runtime_checkable
class FloatImageSource(Protocol):
    """
    Image whose pixels read as FloatColor.
    """
    def bounds(self) -> Bounds: ...

    def color_model(self) -> ColorModel: ...

    def at(self, x: int, y: int) -> FloatColor: ...


_MODELS = {
    np.dtype(np.uint8): RGBA,
    np.dtype(np.uint16): RGBA64,
}


class ArrayImage:
    """
    Integer-channel image over an (H,W,4) uint8 or uint16 array.
    Pixels outside the bounds read as the zero color.
    """
    def __init__(self, pixels: np.ndarray, min_x: int = 0, min_y: int = 0) -> None:
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected (H,W,4) pixel array, got shape {pixels.shape}.")
        if pixels.dtype not in _MODELS:
            raise ValueError(f"Unsupported pixel dtype {pixels.dtype}; use uint8 or uint16.")
        self.pixels = pixels
        self._model = _MODELS[pixels.dtype]
        h, w, _ = pixels.shape
        self._bounds = Bounds(min_x, min_y, min_x + w, min_y + h)

    def bounds(self) -> Bounds:
        return self._bounds

    def color_model(self) -> ColorModel:
        return self._model

    def at(self, x: int, y: int) -> IntColor:
        depth = self._model.bit_depth
        if not self._bounds.contains(x, y):
            return IntColor(0, 0, 0, 0, depth)
        r, g, b, a = (int(v) for v in self.pixels[y - self._bounds.min_y, x - self._bounds.min_x])
        return IntColor(r, g, b, a, depth)

    def as_array(self) -> np.ndarray:
        return self.pixels
