"""Tests for Vibrant-style swatch extraction from images."""

import json

import numpy as np
import pytest
from click.testing import CliRunner
from PIL import Image

from extract_swatches import (
    PaletteExtractionError,
    extract_palette,
    extract_swatches,
    load_image_colors,
    quantize_colors,
)


def make_image(path, blocks):
    """Vertical stripes, one (rgb, width) per block, 20px high."""
    width = sum(w for _, w in blocks)
    arr = np.zeros((20, width, 3), dtype=np.uint8)
    x = 0
    for rgb, w in blocks:
        arr[:, x : x + w] = rgb
        x += w
    Image.fromarray(arr).save(path)
    return path


@pytest.fixture
def striped_png(tmp_path):
    return make_image(
        tmp_path / "stripes.png",
        [((255, 0, 0), 30), ((0, 0, 100), 20), ((200, 200, 200), 10)],
    )


def test_quantize_counts_buckets():
    rgb = np.array([[255, 0, 0], [250, 1, 2], [0, 0, 100]], dtype=np.uint8)
    pool = quantize_colors(rgb, quant=8)
    assert sorted(pool["hex"]) == ["#000060", "#f80000"]
    assert int(pool[pool["hex"] == "#f80000"].population.iloc[0]) == 2


def test_extract_palette_assigns_roles(striped_png):
    palette = extract_palette(striped_png)
    assert palette.hex("Vibrant") == "#f80000"
    assert palette.hex("DarkVibrant") == "#000060"
    assert palette.hex("LightMuted") == "#c8c8c8"
    assert palette.get("LightVibrant") is None
    assert palette.get("Muted") is None
    assert palette.get("DarkMuted") is None
    assert palette.vibrant.population == 600


def test_load_downscales_to_max_dimension(striped_png):
    rgb = load_image_colors(striped_png, max_dimension=30)
    assert len(rgb) <= 30 * 30


def test_max_pixels_sampling_is_deterministic(striped_png):
    a = load_image_colors(striped_png, max_pixels=50)
    b = load_image_colors(striped_png, max_pixels=50)
    assert len(a) == 50
    assert np.array_equal(a, b)


def test_unreadable_image_raises(tmp_path):
    bogus = tmp_path / "broken.png"
    bogus.write_text("not an image")
    with pytest.raises(PaletteExtractionError):
        extract_palette(bogus)


def test_oversized_image_raises(tmp_path, monkeypatch):
    path = make_image(tmp_path / "big.png", [((255, 0, 0), 20)])
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(PaletteExtractionError):
        load_image_colors(path)


def test_cli_writes_palette(tmp_path, striped_png):
    out = tmp_path / "palette.json"
    result = CliRunner().invoke(extract_swatches, [str(striped_png), "--out-json", str(out)])
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text())
    assert data["Vibrant"]["hex"] == "#f80000"
    assert data["Muted"] is None
