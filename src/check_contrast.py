# WCAG contrast report for generated themes
# Run with: python check_contrast.py ../src/lib/themes.generated.json

import itertools
import sys
from pathlib import Path
from typing import Dict, List

import click
import pandas as pd
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from assign_theme import Theme, rich_color
from color_metrics import AA_CONTRAST, AA_LARGE_CONTRAST, contrast_ratio, is_distinct
from theme_lookup import load_themes


def contrast_report(themes: Dict[str, Theme]) -> pd.DataFrame:
    """
    One row per theme per bg/fg pair.
    """
    rows = []
    for name, theme in themes.items():
        for label, bg, fg in theme.pairs():
            cr = contrast_ratio(bg, fg)
            rows.append(
                {
                    "theme": name,
                    "pair": label,
                    "bg": bg,
                    "fg": fg,
                    "contrast": cr,
                    "aa_normal": cr >= AA_CONTRAST,
                    "aa_large": cr >= AA_LARGE_CONTRAST,
                }
            )
    return pd.DataFrame(
        rows, columns=["theme", "pair", "bg", "fg", "contrast", "aa_normal", "aa_large"]
    )


def collisions(theme: Theme) -> List[str]:
    """Background pairs that are not perceptually distinct."""
    bgs = [(label, bg) for label, bg, _ in theme.pairs()]
    return [
        f"{a}/{b}"
        for (a, ha), (b, hb) in itertools.combinations(bgs, 2)
        if not is_distinct(ha, hb)
    ]


def verdict(ok: bool) -> Text:
    return Text("PASS", style="green") if ok else Text("FAIL", style="bold red")


def render_report(report: pd.DataFrame, themes: Dict[str, Theme]):
    console = Console()
    table = Table(title="WCAG contrast report", show_header=True, header_style="bold")

    table.add_column("Theme", style="cyan", no_wrap=True)
    table.add_column("Pair")
    table.add_column("Sample")
    table.add_column("Contrast", justify="right")
    table.add_column("AA normal")
    table.add_column("AA large")
    table.add_column("Collisions")

    for name, sub in report.groupby("theme", sort=False):
        clash = ", ".join(collisions(themes[name])) or "-"
        for i, r in enumerate(sub.itertuples()):
            sample = Text(
                " Aa ", style=Style(color=rich_color(r.fg), bgcolor=rich_color(r.bg))
            )
            table.add_row(
                name if i == 0 else "",
                r.pair,
                sample,
                f"{r.contrast:.2f}",
                verdict(r.aa_normal),
                verdict(r.aa_large),
                clash if i == 0 else "",
            )

    console.print(table)


@click.command()
@click.argument("themes_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, help="Exit 1 if any pair fails AA normal")
def check_contrast(themes_json: Path, strict: bool):
    """
    Report WCAG contrast and color collisions for every theme in a themes JSON.
    """
    try:
        themes = load_themes(themes_json)
    except (ValueError, AttributeError, TypeError) as e:
        raise click.ClickException(f"Unreadable themes file {themes_json}: {e}")

    report = contrast_report(themes)
    render_report(report, themes)

    failing = report[~report.aa_normal.astype(bool)]
    click.echo(f"{len(failing)} of {len(report)} pairs below {AA_CONTRAST}:1")
    if strict and not failing.empty:
        sys.exit(1)


if __name__ == "__main__":
    check_contrast()
