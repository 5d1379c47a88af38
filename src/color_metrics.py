import math

import numpy as np

from color_convert import hex_to_lab, hex_to_rgb

# ============================================================
# Thresholds
# ============================================================

MAX_DELTA_E = 100.0  # unparseable colors count as maximally different
DISTINCT_DELTA_E = 15.0
AA_CONTRAST = 4.5
AA_LARGE_CONTRAST = 3.0
NEUTRAL_LUMINANCE = 0.5

LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])

# ============================================================
# Perceptual distance (CIE76)
# ============================================================


def delta_e(hex1, hex2) -> float:
    lab1 = hex_to_lab(hex1)
    lab2 = hex_to_lab(hex2)
    if lab1 is None or lab2 is None:
        return MAX_DELTA_E
    return float(np.linalg.norm(np.array(lab1) - np.array(lab2)))


def is_distinct(hex1, hex2) -> bool:
    """Absent colors are vacuously distinct."""
    if not hex1 or not hex2:
        return True
    return delta_e(hex1, hex2) > DISTINCT_DELTA_E


# ============================================================
# WCAG luminance / contrast
# ============================================================


def srgb_chan(c: float) -> float:
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def luminance(hex_color) -> float:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return NEUTRAL_LUMINANCE
    linear = np.array([srgb_chan(c / 255.0) for c in rgb])
    return float(math.fsum(LUMA_WEIGHTS * linear))


def contrast_ratio(hex1, hex2) -> float:
    la = luminance(hex1)
    lb = luminance(hex2)
    return (max(la, lb) + 0.05) / (min(la, lb) + 0.05)
