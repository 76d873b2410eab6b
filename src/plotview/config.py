from dataclasses import dataclass
from pathlib import Path


@dataclass
class Settings:
    output_dir: Path = Path("out")
    max_preview_width: int = 1920
    max_preview_height: int = 1080
    hit_margin: float = 4.0
    stroke_width: int = 4
    foreground_margin: int = 200
    window_title: str = "Image Cropper"
