from __future__ import annotations

import numpy as np
import torch

from floatimg.core.adapters import read_float_array
from floatimg.core.color import FloatColor
from floatimg.core.image import FLOAT_RGBA, Bounds, ColorModel, FloatImageSource


class TensorImage:
    """
    FloatImageSource over a (C,H,W) float tensor, C in {3, 4}.
    Without an alpha plane every pixel reads as opaque.
    Pixels outside the bounds read as FloatColor(0, 0, 0, 0).
    """
    def __init__(self, t: torch.Tensor, min_x: int = 0, min_y: int = 0) -> None:
        if t.ndim != 3 or t.shape[0] not in (3, 4):
            raise ValueError(f"Expected (C,H,W) tensor with C in {{3, 4}}, got shape {tuple(t.shape)}.")
        self.t = t.detach().float().cpu()
        _, h, w = self.t.shape
        self._bounds = Bounds(min_x, min_y, min_x + w, min_y + h)

    def bounds(self) -> Bounds:
        return self._bounds

    def color_model(self) -> ColorModel:
        return FLOAT_RGBA

    def at(self, x: int, y: int) -> FloatColor:
        if not self._bounds.contains(x, y):
            return FloatColor(0.0, 0.0, 0.0, 0.0)
        vals = self.t[:, y - self._bounds.min_y, x - self._bounds.min_x].tolist()
        if len(vals) == 3:
            vals.append(1.0)
        return FloatColor(*vals)

    def as_array(self) -> np.ndarray:
        arr = self.t.permute(1, 2, 0).numpy()
        if arr.shape[2] == 3:
            alpha = np.ones(arr.shape[:2] + (1,), dtype=arr.dtype)
            arr = np.concatenate([arr, alpha], axis=2)
        return arr


def to_tensor(src: FloatImageSource) -> torch.Tensor:
    """
    Read any FloatImageSource into a (4,H,W) float32 tensor.
    """
    arr = np.ascontiguousarray(read_float_array(src), dtype=np.float32)
    return torch.from_numpy(arr).permute(2, 0, 1).contiguous()
