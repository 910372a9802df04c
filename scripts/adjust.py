from __future__ import annotations

import argparse
import json
from pathlib import Path

import torch
from tqdm import tqdm

from floatimg.data.tensor_image import TensorImage
from floatimg.utils.codecs import EncodeConfig, ImageFormat, parse_format
from floatimg.utils.image_io import load_tensor, save


IMG_EXTS = {".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".webp", ".gif"}
OUT_EXTS = {ImageFormat.PNG: ".png", ImageFormat.JPEG: ".jpg"}


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser("Exposure / gamma adjustment in float RGBA space.")
    p.add_argument("--input", type=str, required=True, help="Input image path or folder.")
    p.add_argument("--output", type=str, required=True, help="Output image path or folder.")
    p.add_argument("--format", type=str, default="png", help="png | jpeg")
    p.add_argument("--exposure", type=float, default=0.0, help="Exposure shift in stops.")
    p.add_argument("--gamma", type=float, default=1.0, help="gamma > 1 brightens; gamma < 1 darkens.")
    p.add_argument("--jpeg-quality", type=int, default=75)
    p.add_argument("--png-compress-level", type=int, default=6)
    p.add_argument("--config", type=str, default="", help="Optional JSON encoder config (overrides flags).")
    return p.parse_args()


def build_encode_config(args: argparse.Namespace) -> EncodeConfig:
    cfg = EncodeConfig(jpeg_quality=args.jpeg_quality, png_compress_level=args.png_compress_level)
    if args.config:
        data = json.loads(Path(args.config).read_text(encoding="utf-8"))
        cfg = EncodeConfig(**{**cfg.__dict__, **data})
    return cfg


def adjust(t: torch.Tensor, exposure: float = 0.0, gamma: float = 1.0) -> torch.Tensor:
    """
    Apply exposure then gamma to the color planes of a (4,H,W) tensor; alpha is kept.
    Results are not clamped here, clamping happens when the image is saved.
    """
    out = t.clone()
    rgb = out[:3] * (2.0 ** exposure)
    rgb = rgb.clamp_min(0.0).pow(1.0 / max(gamma, 1e-6))
    out[:3] = rgb
    return out


def main() -> None:
    args = parse_args()
    fmt = parse_format(args.format)
    cfg = build_encode_config(args)

    in_path = Path(args.input)
    out_path = Path(args.output)

    def run_one(img_path: Path, save_path: Path) -> None:
        t = adjust(load_tensor(img_path), exposure=args.exposure, gamma=args.gamma)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        save(TensorImage(t), save_path, fmt, cfg)

    if in_path.is_dir():
        out_path.mkdir(parents=True, exist_ok=True)
        files = [p for p in sorted(in_path.rglob("*")) if p.suffix.lower() in IMG_EXTS]
        for p in tqdm(files, desc="Adjusting"):
            rel = p.relative_to(in_path).with_suffix(OUT_EXTS[fmt])
            run_one(p, out_path / rel)
        print(f"Done. {len(files)} image(s) written to {out_path}")
    else:
        if out_path.is_dir():
            out_path = out_path / in_path.with_suffix(OUT_EXTS[fmt]).name
        run_one(in_path, out_path)
        print(f"Done. Wrote {out_path}")


if __name__ == "__main__":
    main()
