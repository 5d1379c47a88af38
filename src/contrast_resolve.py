from color_convert import clamp, hex_to_hsl, hsl_to_hex
from color_metrics import AA_CONTRAST, contrast_ratio

WHITE = "#FFFFFF"
BLACK = "#000000"

MAX_ADJUST_ATTEMPTS = 20
LIGHTNESS_STEP = 0.05

COMPLEMENT_HUE_SHIFT = 150.0
COMPLEMENT_LIGHTNESS_NUDGE = 0.1


def best_foreground(bg: str) -> str:
    """
    Pick white or black text for a background.
    White wins ties when both pass AA; if neither passes, the higher ratio wins.
    """
    white = contrast_ratio(bg, WHITE)
    black = contrast_ratio(bg, BLACK)

    if white >= AA_CONTRAST and white >= black:
        return WHITE
    if black >= AA_CONTRAST:
        return BLACK
    return WHITE if white >= black else BLACK


def meets_contrast(hex_color: str, target: float) -> bool:
    return (
        contrast_ratio(hex_color, WHITE) >= target
        or contrast_ratio(hex_color, BLACK) >= target
    )


def adjust_for_contrast(bg: str, target: float = AA_CONTRAST) -> str:
    """
    Step HSL lightness until the color reaches `target` against white or
    black. The direction is fixed by the starting lightness (down when above
    0.5, up otherwise). Gives up after MAX_ADJUST_ATTEMPTS and returns `bg`
    untouched.
    """
    hsl = hex_to_hsl(bg)
    if hsl is None:
        return bg
    h, s, l = hsl  # noqa: E741
    step = -LIGHTNESS_STEP if l > 0.5 else LIGHTNESS_STEP

    for _ in range(MAX_ADJUST_ATTEMPTS):
        candidate = hsl_to_hex(h, s, l)
        if meets_contrast(candidate, target):
            return candidate
        l = clamp(l + step, 0.0, 1.0)  # noqa: E741

    return bg


def complementary(hex_color: str) -> str:
    """Hue +150 degrees, lightness nudged away from the midpoint."""
    hsl = hex_to_hsl(hex_color)
    if hsl is None:
        return hex_color
    h, s, l = hsl  # noqa: E741
    if l > 0.5:
        l -= COMPLEMENT_LIGHTNESS_NUDGE  # noqa: E741
    else:
        l += COMPLEMENT_LIGHTNESS_NUDGE  # noqa: E741
    return hsl_to_hex(h + COMPLEMENT_HUE_SHIFT, s, clamp(l, 0.0, 1.0))
