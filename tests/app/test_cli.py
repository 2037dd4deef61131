from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from app.cli import app

runner = CliRunner()


@pytest.fixture
def overlapping_grid(tmp_path: Path) -> Path:
    path = tmp_path / "tight_grid.json"
    path.write_text(
        json.dumps({"type": "grid", "rows": 2, "cols": 2, "cellSize": 20, "gap": 0}),
        encoding="utf-8",
    )
    return path


def test_generate_prints_summary(examples_dir: Path) -> None:
    result = runner.invoke(app, ["generate", str(examples_dir / "conference_sections.json")])

    assert result.exit_code == 0, result.output
    assert "sections layout" in result.output
    assert "176" in result.output
    assert "center, left, right" in result.output


def test_generate_writes_output_file(examples_dir: Path, tmp_path: Path) -> None:
    target = tmp_path / "export" / "theater.json"

    result = runner.invoke(
        app, ["generate", str(examples_dir / "theater_grid.json"), "--output", str(target)]
    )

    assert result.exit_code == 0, result.output
    assert "Wrote 120 cells" in result.output
    payload = json.loads(target.read_text(encoding="utf-8"))
    assert payload["type"] == "grid"
    assert len(payload["cells"]) == 120
    assert payload["objects"][0]["label"] == "Stage"


def test_validate_reports_layout_type(examples_dir: Path) -> None:
    result = runner.invoke(app, ["validate", str(examples_dir / "amphitheater_arc.json")])

    assert result.exit_code == 0, result.output
    assert "Valid arc layout config" in result.output


def test_validate_rejects_bad_configs(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text('{"type": "arc", "radius": 10}', encoding="utf-8")

    missing = runner.invoke(app, ["validate", str(tmp_path / "absent.json")])
    invalid = runner.invoke(app, ["validate", str(broken)])

    assert missing.exit_code == 1
    assert "File not found" in missing.output
    assert invalid.exit_code == 1
    assert "Invalid layout config" in invalid.output


def test_overlaps_passes_for_spaced_grid(examples_dir: Path) -> None:
    result = runner.invoke(app, ["overlaps", str(examples_dir / "theater_grid.json")])

    assert result.exit_code == 0, result.output
    assert "No overlaps" in result.output


def test_overlaps_fails_and_lists_pairs(examples_dir: Path) -> None:
    result = runner.invoke(app, ["overlaps", str(examples_dir / "round_table_circle.json")])

    assert result.exit_code == 1
    assert "overlapping pair(s)" in result.output
    assert "T1" in result.output


def test_overlaps_respects_min_spacing_option(overlapping_grid: Path) -> None:
    strict = runner.invoke(app, ["overlaps", str(overlapping_grid)])
    lenient = runner.invoke(app, ["overlaps", str(overlapping_grid), "--min-spacing", "0"])

    assert strict.exit_code == 1
    assert lenient.exit_code == 0, lenient.output


def test_forced_overlap_prevention_from_env(overlapping_grid: Path) -> None:
    result = runner.invoke(
        app,
        ["overlaps", str(overlapping_grid)],
        env={"VENUE_LAYOUT__FORCE_AUTO_PREVENT_OVERLAP": "true"},
    )

    assert result.exit_code == 0, result.output
    assert "No overlaps" in result.output


def test_fit_prints_zoom_for_viewport(examples_dir: Path) -> None:
    result = runner.invoke(
        app,
        [
            "fit",
            str(examples_dir / "theater_grid.json"),
            "--viewport-width",
            "800",
            "--viewport-height",
            "600",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "zoom=1.4689" in result.output


def test_fit_uses_viewport_settings(examples_dir: Path, tmp_path: Path) -> None:
    settings = tmp_path / "venue.yaml"
    settings.write_text("viewport:\n  max_zoom: 1.2\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "--settings",
            str(settings),
            "fit",
            str(examples_dir / "theater_grid.json"),
            "--viewport-width",
            "800",
            "--viewport-height",
            "600",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "zoom=1.2000" in result.output


def test_missing_settings_file_exits(examples_dir: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        [
            "--settings",
            str(tmp_path / "absent.yaml"),
            "validate",
            str(examples_dir / "theater_grid.json"),
        ],
    )

    assert result.exit_code == 1
    assert "Invalid settings" in result.output
