from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO, Callable, Dict, Optional, Tuple, Union

import numpy as np
from PIL import Image

from floatimg.core.adapters import materialize
from floatimg.core.image import ArrayImage, IntegerImageSource
from floatimg.utils.errors import DecodeError, EncodeError, UnsupportedFormatError


class ImageFormat(IntEnum):
    PNG = 1
    JPEG = 2


PNG = ImageFormat.PNG
JPEG = ImageFormat.JPEG

_FORMAT_NAMES = {"png": PNG, "jpeg": JPEG, "jpg": JPEG}

# Pillow modes that carry 16-bit single-channel data
_DEEP_MODES = {"I;16", "I;16L", "I;16B", "I;16N", "I"}


@dataclass(frozen=True)
class EncodeConfig:
    """
    Encoder options. Defaults match the usual library defaults, spelled out.
    jpeg_subsampling: 0 = 4:4:4, 1 = 4:2:2, 2 = 4:2:0.
    """
    jpeg_quality: int = 75
    jpeg_subsampling: int = 2
    png_compress_level: int = 6

    def __post_init__(self) -> None:
        if not 1 <= self.jpeg_quality <= 100:
            raise ValueError(f"jpeg_quality must be in [1, 100], got {self.jpeg_quality}.")
        if self.jpeg_subsampling not in (0, 1, 2):
            raise ValueError(f"jpeg_subsampling must be 0, 1 or 2, got {self.jpeg_subsampling}.")
        if not 0 <= self.png_compress_level <= 9:
            raise ValueError(f"png_compress_level must be in [0, 9], got {self.png_compress_level}.")


def parse_format(fmt: Union[int, str]) -> ImageFormat:
    """
    Accepts the numeric selector (1/2) or a name ("png", "jpeg", "jpg").
    """
    if isinstance(fmt, str):
        key = fmt.strip().lower().lstrip(".")
        if key in _FORMAT_NAMES:
            return _FORMAT_NAMES[key]
        raise UnsupportedFormatError(f"Unknown image format: {fmt!r}")
    if isinstance(fmt, bool) or not isinstance(fmt, numbers.Integral):
        raise UnsupportedFormatError(f"Unknown image format: {fmt!r}")
    try:
        return ImageFormat(int(fmt))
    except ValueError as exc:
        raise UnsupportedFormatError(f"Unknown image format: {fmt!r}") from exc


def _to_array(img: Image.Image) -> np.ndarray:
    if img.mode in _DEEP_MODES:
        grey = np.clip(np.asarray(img), 0, 65535).astype(np.uint16)
        alpha = np.full_like(grey, 65535)
        return np.stack([grey, grey, grey, alpha], axis=-1)
    return np.array(img.convert("RGBA"), dtype=np.uint8)


def decode(stream: BinaryIO) -> Tuple[ArrayImage, str]:
    """
    Decode any format Pillow recognizes. Returns the image and the format name.
    """
    try:
        img = Image.open(stream)
        img.load()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Cannot decode image: {exc}") from exc
    return ArrayImage(_to_array(img)), img.format or ""


def encode_png(stream: BinaryIO, img: IntegerImageSource, cfg: EncodeConfig) -> None:
    pil = Image.fromarray(materialize(img))
    try:
        pil.save(stream, format="PNG", compress_level=cfg.png_compress_level)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"PNG encoding failed: {exc}") from exc


def encode_jpeg(stream: BinaryIO, img: IntegerImageSource, cfg: EncodeConfig) -> None:
    # JPEG has no alpha plane; alpha is dropped
    pil = Image.fromarray(np.ascontiguousarray(materialize(img)[..., :3]))
    try:
        pil.save(stream, format="JPEG", quality=cfg.jpeg_quality, subsampling=cfg.jpeg_subsampling)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"JPEG encoding failed: {exc}") from exc


ENCODERS: Dict[ImageFormat, Callable[[BinaryIO, IntegerImageSource, EncodeConfig], None]] = {
    PNG: encode_png,
    JPEG: encode_jpeg,
}


def encode(
    stream: BinaryIO,
    img: IntegerImageSource,
    fmt: Union[int, str],
    cfg: Optional[EncodeConfig] = None,
) -> None:
    encoder = ENCODERS[parse_format(fmt)]
    encoder(stream, img, cfg or EncodeConfig())
