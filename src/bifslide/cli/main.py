"""bifslide CLI - inspect Ventana BigTIFF slides.

Command-line interface for recognizing Ventana slides and printing their
pyramid, properties and associated images.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from bifslide import __version__
from bifslide.container import ContainerError, TifffileContainer
from bifslide.utils.logging import configure_logging, get_logger
from bifslide.ventana import (
    FormatNotSupportedError,
    VentanaError,
    VentanaSlide,
    associated_image_slot,
    open_slide,
    parse_description,
)

app = typer.Typer(
    name="bifslide",
    help="bifslide: inspect Ventana BigTIFF whole-slide images",
    add_completion=False,
)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show version information."""
    if json_output:
        typer.echo(json.dumps({"version": __version__}))
    else:
        typer.echo(f"bifslide {__version__}")


@app.command()
def detect(
    slide_path: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to a BigTIFF slide (.bif, .tif)",
        ),
    ],
    directories: Annotated[
        bool,
        typer.Option("--directories", "-d", help="Also list every directory"),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity (-v, -vv)"
        ),
    ] = 0,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Recognize a Ventana slide and print its pyramid and metadata."""
    _configure_logging(verbose)
    logger = get_logger(__name__)

    try:
        slide = open_slide(slide_path)
    except FormatNotSupportedError as e:
        _echo_failure("not-ventana", e.message, json_output)
        raise typer.Exit(1) from None
    except (VentanaError, ContainerError) as e:
        logger.debug("Slide inspection failed", error=str(e))
        _echo_failure("error", e.message, json_output)
        raise typer.Exit(1) from None

    data = _slide_to_dict(slide)
    if directories:
        data["directories"] = _list_directories(slide_path)

    if json_output:
        typer.echo(json.dumps(data, indent=2))
    else:
        _echo_slide(data)
    raise typer.Exit(0)


# =============================================================================
# Helpers
# =============================================================================


def _configure_logging(verbose: int) -> None:
    """Configure logging based on verbosity level."""
    if verbose == 0:
        level = "WARNING"
    elif verbose == 1:
        level = "INFO"
    else:  # verbose >= 2
        level = "DEBUG"

    configure_logging(level=level)


def _echo_failure(status: str, message: str, json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps({"status": status, "error": message}))
    else:
        typer.echo(f"Error: {message}", err=True)


def _slide_to_dict(slide: VentanaSlide) -> dict[str, Any]:
    levels: list[dict[str, Any]] = []
    if slide.pyramid is not None:
        levels = [
            {
                "directory": level.directory,
                "width": level.width,
                "height": level.height,
                "downsample": level.downsample,
            }
            for level in slide.pyramid.levels
        ]
    return {
        "status": "ventana",
        "path": str(slide.path),
        "levels": levels,
        "properties": dict(sorted(slide.properties.items())),
        "associated_images": {
            name: {
                "directory": image.directory,
                "width": image.width,
                "height": image.height,
            }
            for name, image in sorted(slide.associated_images.items())
        },
    }


def _list_directories(slide_path: Path) -> list[dict[str, Any]]:
    entries: list[dict[str, Any]] = []
    with TifffileContainer(slide_path) as container:
        while True:
            description = container.image_description()
            entries.append(
                {
                    "directory": container.current_directory(),
                    "tiled": container.is_tiled(),
                    "width": container.image_width(),
                    "height": container.image_length(),
                    "slot": associated_image_slot(container.current_directory()),
                    "annotations": parse_description(description or ""),
                }
            )
            if not container.read_directory():
                break
    return entries


def _echo_slide(data: dict[str, Any]) -> None:
    typer.echo(f"Ventana slide: {data['path']}")
    typer.echo("Levels:")
    for index, level in enumerate(data["levels"]):
        typer.echo(
            f"  [{index}] directory {level['directory']}: "
            f"{level['width']}x{level['height']} (downsample {level['downsample']:g})"
        )
    if data["associated_images"]:
        typer.echo("Associated images:")
        for name, image in data["associated_images"].items():
            typer.echo(
                f"  {name}: directory {image['directory']}, "
                f"{image['width']}x{image['height']}"
            )
    typer.echo("Properties:")
    for key, value in data["properties"].items():
        typer.echo(f"  {key} = {value}")
    if "directories" in data:
        typer.echo("Directories:")
    for entry in data.get("directories", []):
        slot = f" ({entry['slot']})" if entry["slot"] else ""
        annotations = " ".join(f"{k}={v}" for k, v in entry["annotations"].items())
        typer.echo(
            f"  dir {entry['directory']}{slot}: tiled={entry['tiled']} "
            f"{entry['width']}x{entry['height']} {annotations}".rstrip()
        )


if __name__ == "__main__":
    app()
