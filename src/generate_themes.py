import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Tuple

import click
from rich.console import Console

from assign_theme import BLACK_THEME, DEFAULT_THEME, Theme, derive_theme, render_themes
from extract_swatches import PaletteExtractionError, extract_palette

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".webp"}
PREVIEW_MARKER = "-preview"

# id of the image-less solid black background
BLACK_ID = "black"

console = Console()

# ------------------------------------------------------------
# Image discovery
# ------------------------------------------------------------


def discover_images(backgrounds_dir: Path) -> List[Path]:
    """
    Background images in a directory, previews excluded, sorted by name.
    """
    return sorted(
        p
        for p in backgrounds_dir.iterdir()
        if p.is_file()
        and p.suffix.lower() in IMAGE_SUFFIXES
        and PREVIEW_MARKER not in p.name
    )


# ------------------------------------------------------------
# Per-image derivation
# ------------------------------------------------------------


def theme_for_image(
    path: Path, max_dimension: int = 512, quant: int = 8
) -> Tuple[str, Theme]:
    image_id = path.stem
    try:
        palette = extract_palette(path, max_dimension=max_dimension, quant=quant)
    except PaletteExtractionError as e:
        console.print(f"[yellow]⚠ {image_id}: {e}; using default theme[/yellow]")
        return image_id, DEFAULT_THEME
    return image_id, derive_theme(palette)


def build_themes(
    images: List[Path], jobs: int = 1, max_dimension: int = 512, quant: int = 8
) -> Dict[str, Theme]:
    """
    Derive one theme per image, then add the fixed black theme.
    Images are independent; results are merged in input order.
    """

    def job(path: Path) -> Tuple[str, Theme]:
        console.print(f"  Processing: {path.stem}...")
        return theme_for_image(path, max_dimension=max_dimension, quant=quant)

    with ThreadPoolExecutor(max_workers=max(1, jobs)) as pool:
        results = list(pool.map(job, images))

    themes: Dict[str, Theme] = {}
    for image_id, theme in results:
        themes[image_id] = theme

    themes[BLACK_ID] = BLACK_THEME
    return themes


# ------------------------------------------------------------
# Manual overrides
# ------------------------------------------------------------


def load_overrides(path: Path) -> Dict[str, Theme]:
    data = json.loads(path.read_text())
    if not isinstance(data, dict):
        raise ValueError("overrides must be a JSON object keyed by image id")
    return {image_id: Theme.from_dict(theme) for image_id, theme in data.items()}


def merge_overrides(
    themes: Dict[str, Theme], overrides: Dict[str, Theme]
) -> Dict[str, Theme]:
    """Key-wise overwrite; overrides win."""
    merged = dict(themes)
    merged.update(overrides)
    return merged


def write_themes(themes: Dict[str, Theme], out: Path):
    out.parent.mkdir(parents=True, exist_ok=True)
    data = {image_id: theme.to_dict() for image_id, theme in themes.items()}
    out.write_text(json.dumps(data, indent=2))


# ------------------------------------------------------------
# CLI
# ------------------------------------------------------------


@click.command()
@click.option(
    "--backgrounds-dir",
    default="public/backgrounds",
    show_default=True,
    type=click.Path(path_type=Path),
)
@click.option(
    "--out",
    default="src/lib/themes.generated.json",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--manual",
    default="themes.manual.json",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional overrides, applied last",
)
@click.option("--jobs", default=1, show_default=True, type=click.IntRange(1))
@click.option("--max-dimension", default=512, show_default=True)
@click.option("--quant", default=8, show_default=True)
def generate_themes(backgrounds_dir, out, manual, jobs, max_dimension, quant):
    """
    Generate table themes for every background image.
    """
    console.print("🎨 Generating themes from background images...")

    try:
        images = discover_images(backgrounds_dir)
    except OSError as e:
        raise click.ClickException(f"Cannot list {backgrounds_dir}: {e}")

    if not images:
        console.print(f"[yellow]⚠ No background images found in {backgrounds_dir}[/yellow]")
        return

    console.print(f"📸 Found {len(images)} background image(s)")

    themes = build_themes(images, jobs=jobs, max_dimension=max_dimension, quant=quant)

    if manual.exists():
        console.print("📝 Merging manual overrides...")
        try:
            overrides = load_overrides(manual)
        except (OSError, ValueError, AttributeError, TypeError) as e:
            raise click.ClickException(f"Bad overrides in {manual}: {e}")
        themes = merge_overrides(themes, overrides)

    render_themes(themes, title="Generated themes")

    try:
        write_themes(themes, out)
    except OSError as e:
        raise click.ClickException(f"Cannot write {out}: {e}")

    click.echo(f"✓ Wrote {out} ({len(themes)} themes)")


if __name__ == "__main__":
    generate_themes()
