from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, Tuple, runtime_checkable

import numpy as np


MAX_U8 = 255.0
# values this close below an 8-bit level truncate onto it (float32 error included)
_TRUNC_EPS = 1e-4


@dataclass(frozen=True)
class FloatColor:
    """
    RGBA color with float components, nominally in [0,1].
    Nothing is clamped here; out-of-range values are clamped by `denormalize`.
    """
    r: float
    g: float
    b: float
    a: float

    def rgba(self) -> Tuple[float, float, float, float]:
        return self.r, self.g, self.b, self.a


@runtime_checkable
class IntegerColor(Protocol):
    """
    Anything exposing four unsigned integer channels of a given bit depth.
    """
    bit_depth: int

    def rgba(self) -> Tuple[int, int, int, int]: ...


@dataclass(frozen=True)
class IntColor:
    r: int
    g: int
    b: int
    a: int
    bit_depth: int = 8

    def rgba(self) -> Tuple[int, int, int, int]:
        return self.r, self.g, self.b, self.a


def normalize(channel: int, bit_depth: int = 8) -> float:
    """
    Map an integer channel to [0,1]. Depths above 8 bits keep only the most
    significant byte, so the result always sits on the 1/255 grid.
    """
    channel = int(channel)
    if bit_depth > 8:
        channel >>= bit_depth - 8
    return channel / MAX_U8


def denormalize(value: float) -> int:
    """
    Clamp to [0,1], scale to 8 bits and truncate.
    NaN maps to 0, -inf to 0 and +inf to 255.
    """
    value = float(value)
    if math.isnan(value) or value < 0.0:
        value = 0.0
    elif value > 1.0:
        value = 1.0
    return int(value * MAX_U8 + _TRUNC_EPS)


def normalize_array(arr: np.ndarray, bit_depth: int = 8) -> np.ndarray:
    """
    Vectorised `normalize`: integer array -> float32 array in [0,1].
    """
    a = np.asarray(arr).astype(np.uint32)
    if bit_depth > 8:
        a = a >> (bit_depth - 8)
    return a.astype(np.float32) / np.float32(MAX_U8)


def denormalize_array(arr: np.ndarray) -> np.ndarray:
    """
    Vectorised `denormalize`: float array -> uint8 array, same NaN/inf policy.
    """
    a = np.nan_to_num(np.asarray(arr, dtype=np.float64), nan=0.0, posinf=1.0, neginf=0.0)
    a = np.clip(a, 0.0, 1.0)
    return np.floor(a * MAX_U8 + _TRUNC_EPS).astype(np.uint8)


class IntegerColorAdapter:
    """
    Read an integer-channel color as a FloatColor.
    """
    def __init__(self, c: IntegerColor) -> None:
        self.c = c

    def rgba(self) -> Tuple[float, float, float, float]:
        depth = self.c.bit_depth
        r, g, b, a = self.c.rgba()
        return normalize(r, depth), normalize(g, depth), normalize(b, depth), normalize(a, depth)

    def float_color(self) -> FloatColor:
        return FloatColor(*self.rgba())
