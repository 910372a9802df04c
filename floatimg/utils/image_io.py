from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import torch

from floatimg.core.adapters import to_float_image, to_integer_image
from floatimg.core.image import FloatImageSource
from floatimg.data.tensor_image import TensorImage, to_tensor
from floatimg.utils.codecs import EncodeConfig, decode, encode, parse_format


def load(path: str | Path) -> FloatImageSource:
    """
    Decode an image file and expose it with float RGBA pixels in [0,1].
    Missing or unreadable files raise OSError; undecodable content raises DecodeError.
    """
    with open(path, "rb") as fp:
        src, _ = decode(fp)
    return to_float_image(src)


def save(
    source: FloatImageSource,
    path: str | Path,
    fmt: Union[int, str],
    cfg: Optional[EncodeConfig] = None,
) -> None:
    """
    Encode a float image as PNG or JPEG, clamping components to [0,1] on the way out.
    The format is checked before the file is created, so an unknown selector
    raises UnsupportedFormatError and leaves nothing on disk.
    """
    view = to_integer_image(source)
    fmt = parse_format(fmt)
    with open(path, "wb") as fp:
        encode(fp, view, fmt, cfg)


def load_tensor(path: str | Path) -> torch.Tensor:
    """
    Load an image as float tensor in [0,1] with shape (4,H,W).
    """
    return to_tensor(load(path))


def save_tensor(
    t: torch.Tensor,
    path: str | Path,
    fmt: Union[int, str],
    cfg: Optional[EncodeConfig] = None,
) -> None:
    """
    Save a (3,H,W) or (4,H,W) float tensor in [0,1] to disk.
    """
    save(TensorImage(t), path, fmt, cfg)
