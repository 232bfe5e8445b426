# -*- coding: utf-8 -*-
"""CLI commands for media editing, export and permission status."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from socialstudio.config import load_config, save_config
from socialstudio.constants import APP_NAME
from socialstudio.core.capabilities import CapabilityAggregator
from socialstudio.errors import SocialStudioError, describe_error
from socialstudio.models.edit_context import CropRect, FilterKind, FilterSelection
from socialstudio.pipeline.audio_merger import AudioMerger
from socialstudio.pipeline.media_probe import MediaProbe
from socialstudio.pipeline.render import render
from socialstudio.pipeline.video_trimmer import VideoTrimmer
from socialstudio.utils.image_utils import load_image
from socialstudio.utils.logger import setup_session_logging

app = typer.Typer(help="Media editing and export commands")
logger = logging.getLogger(__name__)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
    log_dir: Path = typer.Option(None, help="Also write a per-run log file under LOG_DIR/logs"),
) -> None:
    setup_session_logging(log_dir, APP_NAME, logging.DEBUG if verbose else logging.INFO)


def _parse_crop(value: str | None) -> CropRect | None:
    if not value:
        return None
    try:
        x, y, width, height = (float(part) for part in value.split(","))
    except ValueError as exc:
        raise typer.BadParameter("crop must be x,y,width,height") from exc
    return CropRect(x, y, width, height)


@app.command("render")
def render_image(
    input_path: Path = typer.Argument(..., help="Source image"),
    output_path: Path = typer.Argument(..., help="Where to write the edited image"),
    rotate: float = typer.Option(0.0, help="Clockwise rotation in degrees"),
    filters: list[str] = typer.Option([], "--filter", help="Filter to apply, repeatable, in order"),
    intensity: float = typer.Option(None, help="Intensity 0..1 for every filter (default per filter)"),
    crop: str = typer.Option(None, help="Crop rectangle x,y,width,height after rotation"),
) -> None:
    """Rotate, filter and crop an image."""
    try:
        kinds = [FilterKind(name) for name in filters]
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    entries = [FilterSelection(kind, intensity) if intensity is not None else kind for kind in kinds]

    result = render(load_image(input_path), rotate, entries, _parse_crop(crop))
    output_path.parent.mkdir(parents=True, exist_ok=True)
    result.save(output_path)
    typer.echo(f"Wrote {result.width}x{result.height} image to {output_path}")


@app.command()
def probe(video_path: Path = typer.Argument(..., help="Media file to inspect")) -> None:
    """Print duration and track layout."""
    try:
        info = MediaProbe().probe(video_path)
    except SocialStudioError as e:
        typer.echo(describe_error(e), err=True)
        raise typer.Exit(1)
    typer.echo(f"Duration: {info.duration:.2f}s")
    typer.echo(f"Video: {'yes' if info.has_video else 'no'} ({info.width}x{info.height})")
    typer.echo(f"Audio: {'yes' if info.has_audio else 'no'}")


@app.command()
def trim(
    video_path: Path = typer.Argument(..., help="Source video"),
    start: float = typer.Option(..., help="Start time in seconds"),
    end: float = typer.Option(..., help="End time in seconds"),
    output: Path = typer.Option(None, help="Output file (default: temp trimmed.mov)"),
    settings: Path = typer.Option(None, help="Settings file with media.temp_dir and output names"),
) -> None:
    """Cut a time range out of a video."""
    trimmer = VideoTrimmer.from_config(load_config(settings))
    try:
        result = trimmer.trim(video_path, start, end, output).result()
    except SocialStudioError as e:
        typer.echo(describe_error(e), err=True)
        raise typer.Exit(1)
    finally:
        trimmer.exporter.runner.shutdown()
    typer.echo(f"Trimmed video saved to: {result}")


@app.command()
def merge(
    video_path: Path = typer.Argument(..., help="Source video"),
    audio_path: Path = typer.Argument(..., help="Audio track to add"),
    output: Path = typer.Option(None, help="Output file (default: temp merged.mov)"),
    settings: Path = typer.Option(None, help="Settings file with media.temp_dir and output names"),
) -> None:
    """Add an audio track to a video, keeping its original sound."""
    merger = AudioMerger.from_config(load_config(settings))
    try:
        result = merger.merge(video_path, audio_path, output).result()
    except SocialStudioError as e:
        typer.echo(describe_error(e), err=True)
        raise typer.Exit(1)
    finally:
        merger.exporter.runner.shutdown()
    typer.echo(f"Merged video saved to: {result}")


@app.command()
def permissions(
    statuses_json: Path = typer.Argument(..., help="JSON object of capability -> raw platform status"),
    settings: Path = typer.Option(None, help="Settings file to store the normalized statuses in"),
) -> None:
    """Normalize raw capability answers into the permission dashboard."""
    try:
        raw = json.loads(statuses_json.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        typer.echo(f"Failed to load statuses: {e}", err=True)
        raise typer.Exit(1)
    if not isinstance(raw, dict):
        typer.echo("Statuses file must contain a JSON object", err=True)
        raise typer.Exit(1)

    try:
        aggregator = CapabilityAggregator({name: (lambda value=value: value) for name, value in raw.items()})
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    for capability, entry in aggregator.refresh().items():
        typer.echo(f"{capability.value:<14} {entry.status.value}")

    if settings is not None:
        config = aggregator.apply_to_config(load_config(settings))
        save_config(config, settings)
        typer.echo(f"Saved statuses to {settings}")


if __name__ == "__main__":
    app()
