import json
from pathlib import Path
from typing import Dict, Optional

import click

from assign_theme import RED, GOLD, ORANGE, Theme, render_themes
from contrast_resolve import BLACK, WHITE

DEFAULT_TEMPLATE_ID = "template1"

# used when the generated file has neither the requested nor the default template
FALLBACK_THEME = Theme(
    header_bg=ORANGE,
    header_text=WHITE,
    total_bg=GOLD,
    total_fg=BLACK,
    wins_bg=RED,
    wins_fg=WHITE,
    text=BLACK,
)

CSS_VARIABLES = [
    ("--tbl-header-bg", "header_bg"),
    ("--tbl-header-fg", "header_text"),
    ("--tbl-total-bg", "total_bg"),
    ("--tbl-total-fg", "total_fg"),
    ("--tbl-wins-bg", "wins_bg"),
    ("--tbl-wins-fg", "wins_fg"),
    ("--tbl-text", "text"),
]


def load_themes(path: Path) -> Dict[str, Theme]:
    data = json.loads(Path(path).read_text())
    return {name: Theme.from_dict(theme) for name, theme in data.items()}


def get_theme(themes: Dict[str, Theme], template_id: Optional[str]) -> Theme:
    if template_id and template_id in themes:
        return themes[template_id]
    return themes.get(DEFAULT_TEMPLATE_ID, FALLBACK_THEME)


def css_variables(theme: Theme) -> Dict[str, str]:
    """Custom properties for a theme; empty values fall back per variable."""
    return {
        var: getattr(theme, attr) or getattr(FALLBACK_THEME, attr)
        for var, attr in CSS_VARIABLES
    }


def css_block(theme: Theme, selector: str = ":root") -> str:
    body = "\n".join(f"  {k}: {v};" for k, v in css_variables(theme).items())
    return f"{selector} {{\n{body}\n}}\n"


# ------------------------------------------------------------
# CLI
# ------------------------------------------------------------


@click.command()
@click.argument("themes_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("template_id", required=False)
@click.option("--css", is_flag=True, help="Print CSS custom properties instead")
def theme_lookup(themes_json: Path, template_id, css):
    """
    Resolve the theme a background template would use.
    """
    try:
        themes = load_themes(themes_json)
    except (ValueError, AttributeError, TypeError) as e:
        raise click.ClickException(f"Unreadable themes file {themes_json}: {e}")

    theme = get_theme(themes, template_id)
    if css:
        click.echo(css_block(theme), nl=False)
    else:
        render_themes({template_id or DEFAULT_TEMPLATE_ID: theme})


if __name__ == "__main__":
    theme_lookup()
