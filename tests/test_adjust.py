import json
from pathlib import Path
from types import SimpleNamespace

import torch

from scripts.adjust import adjust, build_encode_config


def test_exposure_doubles_color_keeps_alpha():
    t = torch.full((4, 2, 2), 0.25)
    out = adjust(t, exposure=1.0)
    assert torch.allclose(out[:3], torch.full((3, 2, 2), 0.5))
    assert torch.equal(out[3], t[3])
    assert torch.equal(t, torch.full((4, 2, 2), 0.25))


def test_gamma_brightens():
    t = torch.full((4, 1, 1), 0.25)
    out = adjust(t, gamma=2.0)
    assert torch.allclose(out[:3], torch.full((3, 1, 1), 0.5))


def test_adjust_leaves_out_of_range_values():
    out = adjust(torch.full((4, 1, 1), 0.75), exposure=1.0)
    assert out[0, 0, 0].item() == 1.5


def test_build_encode_config_json_override(tmp_path: Path):
    cfg_path = tmp_path / "enc.json"
    cfg_path.write_text(json.dumps({"jpeg_quality": 90}), encoding="utf-8")
    args = SimpleNamespace(jpeg_quality=60, png_compress_level=3, config=str(cfg_path))
    cfg = build_encode_config(args)
    assert cfg.jpeg_quality == 90
    assert cfg.png_compress_level == 3

    args = SimpleNamespace(jpeg_quality=60, png_compress_level=3, config="")
    assert build_encode_config(args).jpeg_quality == 60
