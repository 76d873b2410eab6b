"""Embedded raster acquisition from PDF files."""

from .images import (
    EncryptedPdfError,
    NoRasterError,
    PdfOpenError,
    PdfRaster,
    RasterConversionError,
    extract_rasters,
    load_source_image,
    open_pdf,
    pixmap_to_pil,
)

__all__ = [
    "EncryptedPdfError",
    "NoRasterError",
    "PdfOpenError",
    "PdfRaster",
    "RasterConversionError",
    "extract_rasters",
    "load_source_image",
    "open_pdf",
    "pixmap_to_pil",
]
