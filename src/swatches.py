from dataclasses import dataclass, fields
from typing import Any, Dict, Iterator, Optional, Tuple

import pandas as pd

from color_convert import hex_to_rgb, rgb_to_hex, rgb_to_hsl, rgb_to_lab
from color_metrics import luminance

# ============================================================
# Source roles (fixed enumeration order)
# ============================================================

SOURCE_ROLES = (
    "Vibrant",
    "DarkVibrant",
    "LightVibrant",
    "Muted",
    "DarkMuted",
    "LightMuted",
)

MONOCHROME_SATURATION = 0.15

SWATCH_COLUMNS = [
    "role",
    "hex",
    "population",
    "R",
    "G",
    "B",
    "L",
    "a",
    "b",
    "hue",
    "saturation",
    "lightness",
    "luminance",
]


@dataclass(frozen=True)
class Swatch:
    hex: str
    population: float = 0.0

    @classmethod
    def from_value(cls, value: Any) -> Optional["Swatch"]:
        """
        Accept {"hex": ..., "population": ...}, a bare hex string, or None.
        """
        if value is None:
            return None
        if isinstance(value, str):
            return cls(hex=value)
        if isinstance(value, dict) and value.get("hex"):
            return cls(
                hex=str(value["hex"]),
                population=max(0.0, float(value.get("population") or 0.0)),
            )
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"hex": self.hex, "population": self.population}


@dataclass(frozen=True)
class Palette:
    vibrant: Optional[Swatch] = None
    dark_vibrant: Optional[Swatch] = None
    light_vibrant: Optional[Swatch] = None
    muted: Optional[Swatch] = None
    dark_muted: Optional[Swatch] = None
    light_muted: Optional[Swatch] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Palette":
        kwargs = {
            f.name: Swatch.from_value(data.get(role))
            for f, role in zip(fields(cls), SOURCE_ROLES)
        }
        return cls(**kwargs)

    def items(self) -> Iterator[Tuple[str, Optional[Swatch]]]:
        for f, role in zip(fields(self), SOURCE_ROLES):
            yield role, getattr(self, f.name)

    def get(self, role: str) -> Optional[Swatch]:
        return dict(self.items()).get(role)

    def hex(self, role: str) -> Optional[str]:
        sw = self.get(role)
        return sw.hex if sw is not None else None

    def to_dict(self) -> Dict[str, Any]:
        return {role: sw.to_dict() if sw else None for role, sw in self.items()}


# ============================================================
# Swatch analysis
# ============================================================


def analyze_swatches(palette: Palette) -> pd.DataFrame:
    """
    One row per present, parseable swatch in SOURCE_ROLES order.
    Unparseable swatches are dropped, i.e. treated as absent; the rest are
    normalized to lowercase #rrggbb.
    """
    rows = []
    for role, sw in palette.items():
        if sw is None:
            continue
        rgb = hex_to_rgb(sw.hex)
        if rgb is None:
            continue

        hex_color = rgb_to_hex(rgb)
        L, a, b = rgb_to_lab(*rgb)
        h, s, l = rgb_to_hsl(*rgb)  # noqa: E741
        rows.append(
            {
                "role": role,
                "hex": hex_color,
                "population": float(sw.population),
                "R": rgb[0],
                "G": rgb[1],
                "B": rgb[2],
                "L": L,
                "a": a,
                "b": b,
                "hue": h,
                "saturation": s,
                "lightness": l,
                "luminance": luminance(hex_color),
            }
        )

    return pd.DataFrame(rows, columns=SWATCH_COLUMNS)


def is_monochrome(swatches: pd.DataFrame) -> bool:
    if swatches.empty:
        return True
    return float(swatches.saturation.mean()) < MONOCHROME_SATURATION


def background_swatch(swatches: pd.DataFrame) -> Optional[pd.Series]:
    """Darkest swatch by WCAG luminance; first in role order on ties."""
    if swatches.empty:
        return None
    return swatches.loc[swatches.luminance.idxmin()]
