"""Tests for the WCAG contrast report."""

import json

from click.testing import CliRunner

from assign_theme import DEFAULT_THEME, Theme
from check_contrast import check_contrast, collisions, contrast_report

GOOD = Theme("#000000", "#FFFFFF", "#FFD700", "#000000", "#146aae", "#FFFFFF", "#FFFFFF")


def test_report_rows():
    report = contrast_report({"default": DEFAULT_THEME, "good": GOOD})
    assert len(report) == 6
    assert report[report.theme == "good"].aa_normal.all()

    wins = report[(report.theme == "default") & (report.pair == "wins")].iloc[0]
    # white on #E63946 only passes for large text
    assert not wins.aa_normal
    assert wins.aa_large


def test_collisions():
    assert collisions(GOOD) == []
    same = Theme("#e63946", "#000000", "#FFD700", "#000000", "#e63946", "#000000", "#FFFFFF")
    assert collisions(same) == ["header/wins"]


def test_strict_mode_exit_codes(tmp_path):
    good = tmp_path / "good.json"
    good.write_text(json.dumps({"good": GOOD.to_dict()}))
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"default": DEFAULT_THEME.to_dict()}))

    runner = CliRunner()
    assert runner.invoke(check_contrast, [str(good), "--strict"]).exit_code == 0
    assert runner.invoke(check_contrast, [str(bad), "--strict"]).exit_code == 1
    assert runner.invoke(check_contrast, [str(bad)]).exit_code == 0


def test_help_describes_command():
    result = CliRunner().invoke(check_contrast, ["--help"])
    assert result.exit_code == 0
    assert "Report WCAG contrast" in result.output
