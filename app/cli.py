from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.filesystem.layout_repository import (
    FileSystemLayoutConfigRepository,
    FileSystemLayoutExportRepository,
)
from adapters.layout.registry import build_layout
from app.config import AppSettings, configure_logging, load_settings
from domain.models import LayoutConfig, LayoutResult
from domain.services.collision import OverlapDetectionConfig, detect_overlaps
from domain.services.content_bounds import calculate_content_bounds
from domain.services.zoom_pan import ZoomPanController

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    settings_path: Optional[Path] = typer.Option(
        None, "--settings", help="YAML settings file (defaults to VENUE_CONFIG_PATH).",
    ),
) -> None:
    try:
        settings = load_settings(settings_path)
    except (FileNotFoundError, ValidationError) as exc:
        console.print(f"[red]Invalid settings:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    configure_logging(settings)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> AppSettings:
    return ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()


def _load_config(ctx: typer.Context, config_path: Path) -> LayoutConfig:
    try:
        config = FileSystemLayoutConfigRepository().load_by_path(config_path)
    except FileNotFoundError as exc:
        console.print(f"[red]File not found:[/] {config_path}")
        raise typer.Exit(code=1) from exc
    except ValidationError as exc:
        console.print(f"[red]Invalid layout config:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    return _settings(ctx).layout.apply(config)


def _summary_table(result: LayoutResult) -> Table:
    bounds = calculate_content_bounds(result.cells, result.objects)
    table = Table(title=f"{result.layout_type} layout")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("cells", str(len(result.cells)))
    table.add_row("objects", str(len(result.objects)))
    table.add_row("width", f"{bounds.width:.1f}")
    table.add_row("height", f"{bounds.height:.1f}")
    sections = sorted({cell.id.section_id for cell in result.cells if cell.id.section_id})
    if sections:
        table.add_row("sections", ", ".join(sections))
    return table


@app.command("generate")
def generate(
    ctx: typer.Context,
    config_path: Path = typer.Argument(..., help="Layout config JSON file."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write generated cells and objects as JSON.",
    ),
) -> None:
    result = build_layout(_load_config(ctx, config_path))
    if output is None:
        console.print(_summary_table(result))
        return
    FileSystemLayoutExportRepository().save(result, output)
    console.print(f"[green]Wrote[/] {len(result.cells)} cells to {output}")


@app.command("validate")
def validate(
    ctx: typer.Context,
    config_path: Path = typer.Argument(..., help="Layout config JSON file."),
) -> None:
    config = _load_config(ctx, config_path)
    console.print(f"[green]Valid {config.type} layout config:[/] {config_path}")


@app.command("overlaps")
def overlaps(
    ctx: typer.Context,
    config_path: Path = typer.Argument(..., help="Layout config JSON file."),
    min_spacing: Optional[float] = typer.Option(
        None, help="Minimum spacing between cells (defaults to the layout's min spacing).",
    ),
) -> None:
    config = _load_config(ctx, config_path)
    result = build_layout(config)
    spacing = config.min_spacing if min_spacing is None else min_spacing
    report = detect_overlaps(result.cells, OverlapDetectionConfig(min_spacing=spacing))
    if not report.has_overlaps:
        console.print(
            f"[green]No overlaps[/] among {len(result.cells)} cells ({spacing}px spacing)"
        )
        return

    table = Table(title=f"{report.overlap_count} overlapping pair(s)")
    table.add_column("First")
    table.add_column("Second")
    for first, second in report.overlapping_pairs:
        table.add_row(first.label or "?", second.label or "?")
    console.print(table)
    raise typer.Exit(code=1)


@app.command("fit")
def fit(
    ctx: typer.Context,
    config_path: Path = typer.Argument(..., help="Layout config JSON file."),
    viewport_width: float = typer.Option(..., help="Viewport width in px."),
    viewport_height: float = typer.Option(..., help="Viewport height in px."),
    padding: Optional[float] = typer.Option(None, help="Viewport padding in px."),
) -> None:
    settings = _settings(ctx)
    result = build_layout(_load_config(ctx, config_path))
    bounds = calculate_content_bounds(result.cells, result.objects)
    controller = ZoomPanController(settings.viewport.to_zoom_pan_config())
    controller.fit_to_view(
        bounds.width,
        bounds.height,
        viewport_width,
        viewport_height,
        settings.viewport.fit_padding if padding is None else padding,
    )
    console.print(f"zoom={controller.zoom:.4f}")


if __name__ == "__main__":
    app()
