import colorsys
import re
from typing import Optional, Tuple

import numpy as np
from skimage.color import rgb2xyz, xyz2lab

# ============================================================
# Hex parsing
# ============================================================

HEX_RE = re.compile(r"^[0-9a-fA-F]{6}$")

RGB = Tuple[int, int, int]


def hex_to_rgb(hex_color) -> Optional[RGB]:
    """
    Parse "#rrggbb" (leading # optional) into byte channels.
    Returns None for anything that is not six hex digits.
    """
    if not isinstance(hex_color, str):
        return None
    h = hex_color.strip()
    if h.startswith("#"):
        h = h[1:]
    if not HEX_RE.match(h):
        return None
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def rgb_to_hex(rgb) -> str:
    r, g, b = (int(clamp(int(c), 0, 255)) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


# ============================================================
# sRGB -> XYZ -> Lab (D65)
# ============================================================


def rgb_to_xyz(r: int, g: int, b: int) -> Tuple[float, float, float]:
    # rgb2xyz expects shape (...,3) with channels in [0,1]; returns Y in [0,1]
    rgb = np.array([[[r, g, b]]], dtype=float) / 255.0
    xyz = rgb2xyz(rgb)[0, 0, :] * 100.0
    return (float(xyz[0]), float(xyz[1]), float(xyz[2]))


def xyz_to_lab(x: float, y: float, z: float) -> Tuple[float, float, float]:
    xyz = np.array([[[x, y, z]]], dtype=float) / 100.0
    lab = xyz2lab(xyz, illuminant="D65")[0, 0, :]
    return (float(lab[0]), float(lab[1]), float(lab[2]))


def rgb_to_lab(r: int, g: int, b: int) -> Tuple[float, float, float]:
    return xyz_to_lab(*rgb_to_xyz(r, g, b))


def hex_to_lab(hex_color: str) -> Optional[Tuple[float, float, float]]:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    return rgb_to_lab(*rgb)


# ============================================================
# HSL (hue in degrees, s/l in [0,1])
# ============================================================


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)  # noqa: E741
    return (h * 360.0, s, l)


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:  # noqa: E741
    r, g, b = colorsys.hls_to_rgb(
        (h % 360.0) / 360.0, clamp(l, 0.0, 1.0), clamp(s, 0.0, 1.0)
    )
    return tuple(int(c * 255.0 + 0.5) for c in (r, g, b))


def hex_to_hsl(hex_color: str) -> Optional[Tuple[float, float, float]]:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    return rgb_to_hsl(*rgb)


def hsl_to_hex(h: float, s: float, l: float) -> str:  # noqa: E741
    return rgb_to_hex(hsl_to_rgb(h, s, l))
