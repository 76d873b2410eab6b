"""
JSON manifest describing the crops written for one session.
"""

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..image.extraction import ExtractedImage
from ..logging import get_logger

logger = get_logger(__name__)

MANIFEST_VERSION = "1.0.0"


@dataclass(frozen=True)
class ManifestItem:
    """Single crop in the manifest."""
    file_name: str                  # Output file name
    sequence: int                   # Zero-based export number
    box: Dict[str, int]             # Source-space crop rectangle
    color: List[int]                # RGBA tag applied to the foreground
    dimensions: Dict[str, int]      # Crop width and height

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Manifest:
    version: str
    source: str
    extraction_timestamp: str
    scale_ratio: float
    total_items: int
    items: List[ManifestItem]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "source": self.source,
            "extraction_timestamp": self.extraction_timestamp,
            "scale_ratio": self.scale_ratio,
            "total_items": self.total_items,
            "items": [item.to_dict() for item in self.items],
        }


def build_manifest(source: Path, ratio: float, crops: Sequence[ExtractedImage]) -> Manifest:
    items = []
    for crop in crops:
        width, height = crop.dimensions
        items.append(
            ManifestItem(
                file_name=crop.file_name,
                sequence=crop.sequence,
                box=crop.box.to_dict(),
                color=list(crop.color.to_tuple()),
                dimensions={"width": width, "height": height},
            )
        )

    manifest = Manifest(
        version=MANIFEST_VERSION,
        source=str(source),
        extraction_timestamp=datetime.now().isoformat(),
        scale_ratio=ratio,
        total_items=len(items),
        items=items,
    )

    logger.info(f"Built manifest with {len(items)} items")
    return manifest


def write_manifest_json(manifest: Manifest, output_dir: Path) -> Path:
    """
    Write manifest to ``manifest.json`` in the output directory.

    Returns:
        Path to the written manifest file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = output_dir / "manifest.json"

    try:
        with open(manifest_path, 'w', encoding='utf-8') as f:
            json.dump(manifest.to_dict(), f, indent=2, ensure_ascii=False)
    except OSError as exc:
        logger.error(f"Failed to write manifest to {manifest_path}: {exc}")
        raise

    logger.info(f"Wrote manifest to {manifest_path}")
    return manifest_path
