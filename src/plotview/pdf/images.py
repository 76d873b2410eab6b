"""
Source raster acquisition from PDF files.

Scanned plots usually arrive as a PDF wrapping one embedded image. The
document is opened only for as long as it takes to pull that image out as a
Pillow image; nothing downstream holds a PyMuPDF handle.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import fitz  # type: ignore[import]
from PIL import Image

from ..image.source import SourceImage
from ..logging import get_logger

logger = get_logger(__name__)


class PdfOpenError(Exception):
    """Raised when a PDF cannot be opened."""


class EncryptedPdfError(PdfOpenError):
    """Raised when a PDF needs a password."""


class NoRasterError(Exception):
    """Raised when a PDF carries no usable embedded raster."""


class RasterConversionError(Exception):
    """Raised when a PDF raster cannot be turned into an RGB(A) image."""


@dataclass
class PdfRaster:
    raster_id: str
    page_index: int
    width: int
    height: int
    pixmap: fitz.Pixmap


def open_pdf(path: Path | str) -> fitz.Document:
    """
    Open ``path`` with PyMuPDF, rejecting missing, corrupt and encrypted files.

    The caller owns the returned document; use it as a context manager.
    """
    path = Path(path)
    if not path.exists():
        raise PdfOpenError(f"PDF file does not exist: {path}")

    try:
        doc = fitz.open(path)
    except Exception as exc:
        raise PdfOpenError(f"Failed to open PDF: {path}") from exc

    if doc.needs_pass:
        doc.close()
        raise EncryptedPdfError(f"PDF is encrypted: {path}")

    logger.debug(f"Opened {path} ({doc.page_count} pages)")
    return doc


def extract_rasters(
    doc: fitz.Document,
    min_width: int = 1,
    min_height: int = 1,
) -> list[PdfRaster]:
    """Extract embedded raster images from an open document in page order."""
    rasters: list[PdfRaster] = []
    total_found = 0

    for page_index, page in enumerate(doc):
        img_refs = page.get_images(full=True)
        total_found += len(img_refs)

        for local_idx, img in enumerate(img_refs):
            try:
                pix = fitz.Pixmap(doc, img[0])
            except Exception as exc:
                logger.warning(f"Page {page_index}, image {local_idx}: failed to extract - {exc}")
                continue

            if pix.width < min_width or pix.height < min_height:
                logger.debug(
                    f"Page {page_index}, image {local_idx}: "
                    f"skipped ({pix.width}x{pix.height} < {min_width}x{min_height})"
                )
                continue

            rasters.append(
                PdfRaster(
                    raster_id=f"p{page_index}_img{local_idx}",
                    page_index=page_index,
                    width=pix.width,
                    height=pix.height,
                    pixmap=pix,
                )
            )

    logger.info(f"Found {total_found} embedded images, kept {len(rasters)}")
    return rasters


def pixmap_to_pil(pixmap: fitz.Pixmap) -> Image.Image:
    """
    Convert a PyMuPDF pixmap to a Pillow RGB or RGBA image.

    Gray, CMYK and other non-RGB colorspaces are converted through PyMuPDF
    first so Pillow always receives interleaved RGB samples.
    """
    color_components = pixmap.n - pixmap.alpha
    if color_components != 3:
        try:
            pixmap = fitz.Pixmap(fitz.csRGB, pixmap)
        except Exception as exc:
            raise RasterConversionError(
                f"Cannot convert {color_components}-component pixmap to RGB"
            ) from exc

    mode = "RGBA" if pixmap.alpha else "RGB"
    return Image.frombytes(mode, (pixmap.width, pixmap.height), pixmap.samples)


def load_source_image(pdf_path: Path | str) -> SourceImage:
    """
    Turn the first embedded raster of the PDF at ``pdf_path`` into a source image.

    The source path is ``<pdf dir>/<pdf stem>.png``, so crops are named after
    the PDF they come from.
    """
    pdf_path = Path(pdf_path)
    with open_pdf(pdf_path) as doc:
        rasters = extract_rasters(doc)
        if not rasters:
            raise NoRasterError(f"PDF has no embedded images: {pdf_path}")

        if len(rasters) > 1:
            logger.info(f"PDF has {len(rasters)} embedded images, using {rasters[0].raster_id}")
        image = pixmap_to_pil(rasters[0].pixmap)

    return SourceImage.from_pil(image, pdf_path.with_suffix(".png"))
