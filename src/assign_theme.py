"""
assign_theme.py

Derive a leaderboard theme (header / total / wins colors plus their text
colors) from a Vibrant-style palette of six named swatches.

The derivation is one ordered fallback chain:
  1. empty palette -> DEFAULT_THEME
  2. monochrome palette -> backdrop header with fixed gold / red columns
  3. accent short-circuit (most saturated, most populous swatch + complement),
     taken only when that accent stands apart from the backdrop
  4. header   : DarkVibrant / DarkMuted, contrast-adjusted
  5. total    : light swatch, else brightest distinct swatch, else synthesized
  6. wins     : distinct swatch, else rotated header, else fixed red;
                hue-bucket override when it collides with total
  7. text     : white on dark backdrops, black otherwise

Every step has a terminal default, so a Theme always comes out.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

import click
import pandas as pd
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from color_convert import hex_to_hsl, hex_to_rgb, hsl_to_hex, rgb_to_hex
from color_metrics import AA_CONTRAST, delta_e, is_distinct
from contrast_resolve import (
    BLACK,
    WHITE,
    adjust_for_contrast,
    best_foreground,
    complementary,
)
from swatches import Palette, analyze_swatches, background_swatch, is_monochrome

# ============================================================
# Theme structure
# ============================================================

THEME_KEYS = (
    "headerBg",
    "headerText",
    "totalBg",
    "totalFg",
    "winsBg",
    "winsFg",
    "text",
)

GOLD = "#FFD700"
RED = "#E63946"
BLUE = "#146aae"
ORANGE = "#FF6B35"


@dataclass(frozen=True)
class Theme:
    header_bg: str
    header_text: str
    total_bg: str
    total_fg: str
    wins_bg: str
    wins_fg: str
    text: str

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "Theme":
        missing = [k for k in THEME_KEYS if k not in data]
        if missing:
            raise ValueError(f"Theme is missing {', '.join(missing)}")
        return cls(*(str(data[k]) for k in THEME_KEYS))

    def to_dict(self) -> Dict[str, str]:
        return {k: getattr(self, f.name) for f, k in zip(fields(self), THEME_KEYS)}

    def pairs(self):
        return [
            ("header", self.header_bg, self.header_text),
            ("total", self.total_bg, self.total_fg),
            ("wins", self.wins_bg, self.wins_fg),
        ]


DEFAULT_THEME = Theme(
    header_bg="#333333",
    header_text=WHITE,
    total_bg=GOLD,
    total_fg=BLACK,
    wins_bg=RED,
    wins_fg=WHITE,
    text=WHITE,
)

# theme for the image-less "black" background
BLACK_THEME = Theme(
    header_bg=BLACK,
    header_text=WHITE,
    total_bg=GOLD,
    total_fg=BLACK,
    wins_bg=RED,
    wins_fg=WHITE,
    text=WHITE,
)

# ============================================================
# Tunables
# ============================================================

DARK_BACKDROP_LUMINANCE = 0.2
HEADER_BACKDROP_DELTA_E = 10.0
TEXT_LUMINANCE_SPLIT = 0.5

TOTAL_LIGHTNESS_BOOST = 0.3
TOTAL_LIGHTNESS_CAP = 0.9
TOTAL_SATURATION_BOOST = 0.2

WINS_HUE_SHIFT = 150.0
WINS_SATURATION_FLOOR = 0.5


# ============================================================
# Helpers
# ============================================================


def role_hex(swatches: pd.DataFrame, role: str) -> Optional[str]:
    sub = swatches[swatches.role == role]
    if sub.empty:
        return None
    return sub.iloc[0]["hex"]


def first_match(hexes: Iterable[str], pred: Callable[[str], bool]) -> Optional[str]:
    for h in hexes:
        if pred(h):
            return h
    return None


def hue_bucket_accent(header_hex: str) -> str:
    """Fixed accent guaranteed to sit far from the header's hue."""
    hsl = hex_to_hsl(header_hex)
    if hsl is None:
        return RED
    h = hsl[0]
    if 60.0 <= h <= 180.0:
        return RED
    if h < 60.0 or h >= 300.0:
        return BLUE
    return ORANGE


# ============================================================
# Fallback chain steps
# ============================================================


def accent_theme(swatches: pd.DataFrame, backdrop_hex: str) -> Optional[Theme]:
    scores = swatches.population * swatches.saturation
    accent = swatches.loc[scores.idxmax()]["hex"]

    # an "accent" that is the backdrop itself carries no accent information.
    # A single-color palette (#102030) must fall through so its total gets
    # synthesized; monochrome palettes never reach this step.
    if not is_distinct(accent, backdrop_hex):
        return None

    highlight = adjust_for_contrast(complementary(accent))
    if not is_distinct(accent, highlight):
        return None

    header = adjust_for_contrast(accent)
    return Theme(
        header_bg=header,
        header_text=best_foreground(header),
        total_bg=highlight,
        total_fg=best_foreground(highlight),
        wins_bg=header,
        wins_fg=best_foreground(header),
        text=best_foreground(backdrop_hex or accent),
    )


def monochrome_theme(backdrop_hex: str) -> Theme:
    header_text = best_foreground(backdrop_hex)
    return Theme(
        header_bg=backdrop_hex,
        header_text=header_text,
        total_bg=GOLD,
        total_fg=best_foreground(GOLD),
        wins_bg=RED,
        wins_fg=best_foreground(RED),
        text=header_text,
    )


def pick_header(
    swatches: pd.DataFrame, backdrop_hex: str, backdrop_luminance: float
) -> str:
    header = role_hex(swatches, "DarkVibrant") or role_hex(swatches, "DarkMuted")

    # a header that melts into a very dark backdrop is useless
    if (
        backdrop_luminance < DARK_BACKDROP_LUMINANCE
        and delta_e(header, backdrop_hex) < HEADER_BACKDROP_DELTA_E
    ):
        header = role_hex(swatches, "Vibrant") or role_hex(swatches, "Muted") or header

    if not header:
        header = backdrop_hex

    return adjust_for_contrast(header, AA_CONTRAST)


def pick_total(swatches: pd.DataFrame, header: str) -> str:
    light = role_hex(swatches, "LightVibrant") or role_hex(swatches, "LightMuted")
    if light and is_distinct(light, header):
        return light

    by_brightness = swatches.sort_values("luminance", ascending=False, kind="stable")
    found = first_match(by_brightness["hex"], lambda h: is_distinct(h, header))
    if found:
        return found

    h, s, l = hex_to_hsl(header)  # noqa: E741
    return hsl_to_hex(
        h,
        min(s + TOTAL_SATURATION_BOOST, 1.0),
        min(l + TOTAL_LIGHTNESS_BOOST, TOTAL_LIGHTNESS_CAP),
    )


def rotated_wins(header: str) -> str:
    h, s, l = hex_to_hsl(header)  # noqa: E741
    return hsl_to_hex(
        h + WINS_HUE_SHIFT,
        max(s, WINS_SATURATION_FLOOR),
        0.6 if l < 0.5 else 0.4,
    )


def pick_wins(swatches: pd.DataFrame, header: str, total: str) -> str:
    hexes = list(swatches["hex"])

    wins = first_match(
        hexes, lambda h: is_distinct(h, header) and is_distinct(h, total)
    )
    if wins is None:
        wins = first_match(hexes, lambda h: is_distinct(h, header))
    if wins is None:
        rotated = rotated_wins(header)
        wins = rotated if is_distinct(rotated, header) else RED

    if not is_distinct(wins, total):
        wins = hue_bucket_accent(header)

    return wins


# ============================================================
# Entry point
# ============================================================


def derive_theme(
    palette: Palette, background_luminance: Optional[float] = None
) -> Theme:
    """
    Map a palette onto the fixed theme slots. Never raises on color content.

    `background_luminance` overrides the darkest swatch's luminance when the
    caller knows more about the backdrop than the palette does.
    """
    swatches = analyze_swatches(palette)
    if swatches.empty:
        return DEFAULT_THEME

    backdrop = background_swatch(swatches)
    backdrop_hex = backdrop["hex"]
    backdrop_luminance = (
        float(backdrop["luminance"])
        if background_luminance is None
        else float(background_luminance)
    )

    if is_monochrome(swatches):
        return monochrome_theme(backdrop_hex)

    theme = accent_theme(swatches, backdrop_hex)
    if theme is not None:
        return theme

    header = pick_header(swatches, backdrop_hex, backdrop_luminance)
    total = pick_total(swatches, header)
    wins = pick_wins(swatches, header, total)

    return Theme(
        header_bg=header,
        header_text=best_foreground(header),
        total_bg=total,
        total_fg=best_foreground(total),
        wins_bg=wins,
        wins_fg=best_foreground(wins),
        text=WHITE if backdrop_luminance < TEXT_LUMINANCE_SPLIT else BLACK,
    )


# ============================================================
# Rich display
# ============================================================


def rich_color(hex_color: str) -> Optional[str]:
    rgb = hex_to_rgb(hex_color)
    return rgb_to_hex(rgb) if rgb is not None else None


def theme_strip(theme: Theme) -> Text:
    strip = Text()
    for label, bg, fg in theme.pairs():
        strip.append(
            f" {label} ", style=Style(color=rich_color(fg), bgcolor=rich_color(bg))
        )
    return strip


def render_themes(themes: Dict[str, Theme], title: str = "Themes"):
    console = Console()
    table = Table(title=title, show_header=True, header_style="bold")

    table.add_column("Theme", style="cyan", no_wrap=True)
    table.add_column("Preview")
    table.add_column("Text", no_wrap=True)

    for name, theme in themes.items():
        table.add_row(name, theme_strip(theme), theme.text)

    console.print(table)


# ============================================================
# CLI
# ============================================================


@click.command()
@click.argument("palette_json", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--out-json",
    default="theme.json",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--background-luminance",
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help="Override the backdrop luminance used for header and text choices",
)
def assign_theme(palette_json: Path, out_json: Path, background_luminance):
    """
    Derive a theme from a palette JSON written by extract_swatches.py.
    """
    try:
        palette = Palette.from_dict(json.loads(palette_json.read_text()))
    except (ValueError, AttributeError, TypeError) as e:
        raise click.ClickException(f"Unreadable palette {palette_json}: {e}")

    theme = derive_theme(palette, background_luminance)
    render_themes({palette_json.stem: theme})

    out_json.parent.mkdir(parents=True, exist_ok=True)
    out_json.write_text(json.dumps(theme.to_dict(), indent=2))
    click.echo(f"✓ Wrote {out_json}")


if __name__ == "__main__":
    assign_theme()
