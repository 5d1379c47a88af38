"""Shared palettes for theme derivation tests."""

import pytest

from color_convert import hsl_to_hex
from swatches import Palette, Swatch


@pytest.fixture
def monochrome_palette():
    """Low-saturation swatches over a near-black DarkMuted backdrop."""
    return Palette(
        vibrant=Swatch(hsl_to_hex(30, 0.05, 0.5), 400),
        dark_vibrant=Swatch(hsl_to_hex(30, 0.05, 0.35), 200),
        light_vibrant=Swatch(hsl_to_hex(30, 0.05, 0.75), 100),
        muted=Swatch(hsl_to_hex(30, 0.05, 0.45), 100),
        dark_muted=Swatch("#202020", 300),
        light_muted=Swatch(hsl_to_hex(30, 0.05, 0.65), 50),
    )


@pytest.fixture
def single_color_palette():
    return Palette(
        vibrant=Swatch("#102030", 50),
        dark_vibrant=Swatch("#102030", 100),
    )


@pytest.fixture
def vivid_palette():
    return Palette(
        vibrant=Swatch("#e63946", 500),
        dark_vibrant=Swatch("#1d3557", 300),
        light_vibrant=Swatch("#f1fa8c", 120),
        muted=Swatch("#457b9d", 200),
        dark_muted=Swatch("#2b2d42", 100),
        light_muted=Swatch("#a8dadc", 80),
    )
