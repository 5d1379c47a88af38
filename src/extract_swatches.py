import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import click
import numpy as np
import pandas as pd
from PIL import Image, UnidentifiedImageError
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from color_convert import rgb_to_hex
from swatches import SOURCE_ROLES, Palette


class PaletteExtractionError(Exception):
    """Raised when an image cannot be turned into a palette."""


# ------------------------------------------------------------
# Swatch targets (lightness / saturation windows)
# ------------------------------------------------------------


@dataclass(frozen=True)
class SwatchTarget:
    role: str
    target_lightness: float
    min_lightness: float
    max_lightness: float
    target_saturation: float
    min_saturation: float
    max_saturation: float


DARK_LIGHTNESS = dict(target_lightness=0.26, min_lightness=0.0, max_lightness=0.45)
NORMAL_LIGHTNESS = dict(target_lightness=0.5, min_lightness=0.3, max_lightness=0.7)
LIGHT_LIGHTNESS = dict(target_lightness=0.74, min_lightness=0.55, max_lightness=1.0)

VIBRANT_SATURATION = dict(target_saturation=1.0, min_saturation=0.35, max_saturation=1.0)
MUTED_SATURATION = dict(target_saturation=0.3, min_saturation=0.0, max_saturation=0.4)

# generation order; each target skips colors already taken
TARGETS = [
    SwatchTarget("Vibrant", **NORMAL_LIGHTNESS, **VIBRANT_SATURATION),
    SwatchTarget("LightVibrant", **LIGHT_LIGHTNESS, **VIBRANT_SATURATION),
    SwatchTarget("DarkVibrant", **DARK_LIGHTNESS, **VIBRANT_SATURATION),
    SwatchTarget("Muted", **NORMAL_LIGHTNESS, **MUTED_SATURATION),
    SwatchTarget("LightMuted", **LIGHT_LIGHTNESS, **MUTED_SATURATION),
    SwatchTarget("DarkMuted", **DARK_LIGHTNESS, **MUTED_SATURATION),
]

WEIGHT_SATURATION = 3.0
WEIGHT_LIGHTNESS = 6.5
WEIGHT_POPULATION = 0.5

# ------------------------------------------------------------
# Image sampling
# ------------------------------------------------------------


def load_image_colors(
    path: Path, max_dimension: int = 512, max_pixels: Optional[int] = None
) -> np.ndarray:
    try:
        with Image.open(path) as img:
            img = img.convert("RGB")
            img.thumbnail((max_dimension, max_dimension))
            rgb = np.asarray(img).reshape(-1, 3)
    except (
        OSError,
        UnidentifiedImageError,
        ValueError,
        Image.DecompressionBombError,
    ) as e:
        raise PaletteExtractionError(f"Cannot read {path}: {e}") from e

    if rgb.size == 0:
        raise PaletteExtractionError(f"{path} has no pixels")

    if max_pixels and len(rgb) > max_pixels:
        rng = np.random.default_rng(0)
        idx = rng.choice(len(rgb), max_pixels, replace=False)
        rgb = rgb[idx]

    return rgb


def quantize_colors(rgb: np.ndarray, quant: int = 8) -> pd.DataFrame:
    q = ((rgb // quant) * quant).astype(np.uint8)
    uniq, counts = np.unique(q, axis=0, return_counts=True)

    df = pd.DataFrame(
        {
            "R": uniq[:, 0].astype(int),
            "G": uniq[:, 1].astype(int),
            "B": uniq[:, 2].astype(int),
            "population": counts.astype(int),
        }
    )

    # vectorized HSL
    norm = uniq.astype(float) / 255.0
    cmax = norm.max(axis=1)
    cmin = norm.min(axis=1)
    light = (cmax + cmin) / 2.0
    delta = cmax - cmin
    denom = np.where(light > 0.5, 2.0 - cmax - cmin, cmax + cmin)
    sat = np.where(delta > 0, delta / np.where(denom > 0, denom, 1.0), 0.0)

    df["lightness"] = light
    df["saturation"] = sat
    df["hex"] = [rgb_to_hex(c) for c in uniq]
    return df


# ------------------------------------------------------------
# Swatch selection
# ------------------------------------------------------------


def invert_diff(value, target):
    return 1.0 - np.abs(value - target)


def score_pool(pool: pd.DataFrame, target: SwatchTarget, max_population: int):
    return (
        invert_diff(pool.saturation, target.target_saturation) * WEIGHT_SATURATION
        + invert_diff(pool.lightness, target.target_lightness) * WEIGHT_LIGHTNESS
        + (pool.population / max_population) * WEIGHT_POPULATION
    )


def select_swatches(pool: pd.DataFrame) -> Palette:
    if pool.empty:
        return Palette()

    max_population = int(pool.population.max())
    used: set[str] = set()
    chosen: Dict[str, Optional[dict]] = {role: None for role in SOURCE_ROLES}

    for target in TARGETS:
        sub = pool[
            ~pool["hex"].isin(used)
            & pool.lightness.between(target.min_lightness, target.max_lightness)
            & pool.saturation.between(target.min_saturation, target.max_saturation)
        ]
        if sub.empty:
            continue

        best = sub.loc[score_pool(sub, target, max_population).idxmax()]
        used.add(best["hex"])
        chosen[target.role] = {"hex": best["hex"], "population": int(best["population"])}

    return Palette.from_dict(chosen)


def extract_palette(
    path: Path,
    max_dimension: int = 512,
    quant: int = 8,
    max_pixels: Optional[int] = None,
) -> Palette:
    rgb = load_image_colors(path, max_dimension, max_pixels)
    return select_swatches(quantize_colors(rgb, quant))


# ------------------------------------------------------------
# Rich display
# ------------------------------------------------------------


def render_palette(palette: Palette, title: str):
    console = Console()
    table = Table(title=title, show_header=True, header_style="bold")

    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Hex")
    table.add_column("Population", justify="right")
    table.add_column("Swatch")

    for role, sw in palette.items():
        if sw is None:
            table.add_row(role, "-", "-", "")
            continue
        table.add_row(
            role,
            sw.hex,
            str(int(sw.population)),
            Text(" " * 12, style=Style(bgcolor=sw.hex)),
        )

    console.print(table)


# ------------------------------------------------------------
# CLI
# ------------------------------------------------------------


@click.command()
@click.argument("image_path", type=click.Path(exists=True, path_type=Path))
@click.option("--max-dimension", default=512, show_default=True)
@click.option("--max-pixels", default=None, type=int)
@click.option("--quant", default=8, show_default=True)
@click.option(
    "--out-json",
    default="palette.json",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
)
def extract_swatches(image_path, max_dimension, max_pixels, quant, out_json):
    """
    Extract Vibrant-style named swatches from an image.
    """
    try:
        palette = extract_palette(image_path, max_dimension, quant, max_pixels)
    except PaletteExtractionError as e:
        raise click.ClickException(str(e))

    render_palette(palette, image_path.stem)

    out_json.parent.mkdir(parents=True, exist_ok=True)
    out_json.write_text(json.dumps(palette.to_dict(), indent=2))
    click.echo(f"✓ Wrote {out_json}")


if __name__ == "__main__":
    extract_swatches()
