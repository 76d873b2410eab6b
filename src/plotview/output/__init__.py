"""Crop persistence and session manifests."""

from .manifest import Manifest, ManifestItem, build_manifest, write_manifest_json
from .writer import CropSaveError, prepare_output_dir, save_crop, save_crops

__all__ = [
    "Manifest",
    "ManifestItem",
    "build_manifest",
    "write_manifest_json",
    "CropSaveError",
    "prepare_output_dir",
    "save_crop",
    "save_crops",
]
