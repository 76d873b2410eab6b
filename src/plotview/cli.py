from pathlib import Path

import typer

from .config import Settings
from .logging import get_logger
from .image.extraction import EmptyCropError
from .image.source import ImageLoadError, SourceImage, fit_ratio
from .output.manifest import build_manifest, write_manifest_json
from .output.writer import CropSaveError, save_crops
from .pdf.images import EncryptedPdfError, NoRasterError, PdfOpenError, RasterConversionError, load_source_image
from .ui.session import CropSession
from .ui.viewer import run_viewer

app = typer.Typer(help="plotview: mark regions on a scanned plot and export color-keyed crops", no_args_is_help=True)


def acquire_source(input_path: Path) -> SourceImage:
    """Load the source raster from a PDF's first embedded image or a raster file."""
    if input_path.suffix.lower() == ".pdf":
        return load_source_image(input_path)
    return SourceImage.open(input_path)


@app.command()
def crop(
    input_path: Path = typer.Argument(..., exists=True, readable=True, help="PDF (first embedded image is used) or raster image"),
    out_dir: Path = typer.Option(Path("out"), "--out-dir", "-o", help="Output directory for the crops (cleared first)"),
    max_width: int = typer.Option(1920, min=1, help="Maximum preview width in pixels"),
    max_height: int = typer.Option(1080, min=1, help="Maximum preview height in pixels"),
    write_manifest: bool = typer.Option(True, "--write-manifest/--no-write-manifest", help="Write JSON manifest file"),
) -> None:
    """
    Open an image, let the user mark regions, then save one color-keyed PNG per region.

    Left click starts and finishes a rectangle. Right click on an outline
    selects it and opens the color picker; left click closes the picker.
    Close the window (or press Esc / q) to export.
    """
    logger = get_logger(__name__)
    settings = Settings(
        output_dir=out_dir,
        max_preview_width=max_width,
        max_preview_height=max_height,
    )

    try:
        logger.info(f"Loading source image from {input_path}")
        source = acquire_source(input_path)
    except EncryptedPdfError as exc:
        logger.error(f"Cannot process encrypted PDF: {exc}")
        raise typer.Exit(code=2) from exc
    except (PdfOpenError, NoRasterError, RasterConversionError, ImageLoadError) as exc:
        logger.error(f"Failed to load source image: {exc}")
        raise typer.Exit(code=1) from exc

    width, height = source.dimensions
    ratio = fit_ratio(width, height, settings.max_preview_width, settings.max_preview_height)
    logger.info(f"Source is {width}x{height}, preview ratio {ratio}")

    session = CropSession(source, ratio, settings)
    try:
        crops = run_viewer(session, settings)
    except EmptyCropError as exc:
        logger.error(f"Failed to extract regions: {exc}")
        raise typer.Exit(code=1) from exc

    try:
        paths = save_crops(crops, settings.output_dir)
    except CropSaveError as exc:
        logger.error(f"Failed to save crops: {exc}")
        raise typer.Exit(code=1) from exc

    if write_manifest:
        manifest = build_manifest(input_path, ratio, crops)
        write_manifest_json(manifest, settings.output_dir)

    typer.echo("\nCropping complete!")
    typer.echo(f"Source: {input_path} ({width}x{height}, preview ratio {ratio})")
    typer.echo(f"Regions exported: {len(paths)}")
    for path in paths:
        typer.echo(f"   {path.name}")
    typer.echo(f"Output directory: {settings.output_dir}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
