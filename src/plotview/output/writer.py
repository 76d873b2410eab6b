"""
Persistence of extracted crops.
"""

import shutil
from pathlib import Path
from typing import List, Sequence

from ..image.extraction import ExtractedImage
from ..logging import get_logger

logger = get_logger(__name__)


class CropSaveError(Exception):
    """Raised when a crop cannot be written to disk."""


def prepare_output_dir(output_dir: Path, clear: bool = True) -> Path:
    """Create ``output_dir``, removing any previous contents when ``clear``."""
    if clear and output_dir.exists():
        logger.info(f"Clearing previous output in {output_dir}")
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def save_crop(crop: ExtractedImage, output_dir: Path) -> Path:
    """Write one crop as PNG through a temp file and an atomic rename."""
    path = output_dir / crop.file_name
    temp_path = path.with_suffix(".tmp")

    try:
        crop.image.save(temp_path, format="PNG")
        if temp_path.stat().st_size == 0:
            raise CropSaveError(f"Temp file is empty (0 bytes): {temp_path}")
        temp_path.replace(path)
    except (OSError, ValueError, CropSaveError) as exc:
        if temp_path.exists():
            temp_path.unlink()
        raise CropSaveError(f"Failed to save {crop.file_name}: {exc}") from exc

    logger.debug(f"Saved {crop.file_name} ({crop.dimensions[0]}x{crop.dimensions[1]})")
    return path


def save_crops(crops: Sequence[ExtractedImage], output_dir: Path, clear: bool = True) -> List[Path]:
    """
    Write every crop into ``output_dir``.

    The directory is emptied first when ``clear`` is set, so it only ever
    holds the crops of the latest session.
    """
    prepare_output_dir(output_dir, clear=clear)
    paths = [save_crop(crop, output_dir) for crop in crops]
    logger.info(f"Saved {len(paths)} crops to {output_dir}")
    return paths
