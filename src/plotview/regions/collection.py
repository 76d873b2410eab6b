"""
Ordered collection of regions with a single optional selection.

Insertion order is creation order, which is also the order used for
hit-testing and for export numbering. Selection is kept as an index into the
owned list; the list never shrinks, so the index stays valid.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence

from ..image import extraction
from ..logging import get_logger
from .model import DEFAULT_HIT_MARGIN, Color, Region, RegionStateError

if TYPE_CHECKING:
    from ..image.extraction import ExtractedImage
    from ..image.source import SourceImage

logger = get_logger(__name__)


class Regions:
    def __init__(self, hit_margin: float = DEFAULT_HIT_MARGIN) -> None:
        self._regions: List[Region] = []
        self._selected: Optional[int] = None
        self.hit_margin = hit_margin

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[Region]:
        return iter(self._regions)

    @property
    def regions(self) -> Sequence[Region]:
        """Read-only view handed to the rendering sink."""
        return tuple(self._regions)

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected

    @property
    def selected(self) -> Optional[Region]:
        if self._selected is None:
            return None
        return self._regions[self._selected]

    def start(self, x1: float, y1: float) -> None:
        self._regions.append(Region.start(x1, y1))
        logger.debug(f"Started region {len(self._regions) - 1} at ({x1}, {y1})")

    def finish(self, x2: float, y2: float) -> None:
        if not self._regions:
            raise RegionStateError("Can't finish regions because there is no region in regions")

        self._regions[-1].finish(x2, y2)
        logger.debug(f"Finished region {len(self._regions) - 1}: {self._regions[-1].path()}")

    def is_finished(self) -> bool:
        """True when empty or when the last region is complete."""
        if not self._regions:
            return True
        return self._regions[-1].is_complete

    def select_collided_region(self, px: float, py: float) -> bool:
        """
        Try to select the first region found that is collided by the pointer.

        Earlier regions win over later ones when outlines overlap. Returns
        whether any region was selected; on a miss the selection is unchanged.
        """
        for idx, region in enumerate(self._regions):
            if region.collides(px, py, self.hit_margin):
                self._selected = idx
                logger.debug(f"Selected region {idx} at ({px}, {py})")
                return True

        return False

    def update_selected_color(self, color: Color) -> None:
        if self._selected is not None:
            self._regions[self._selected].update_color(color)

    def deselect(self) -> None:
        if self._selected is None:
            raise RegionStateError("Can't deselect because no region is selected")
        self._selected = None

    def export(
        self,
        ratio: float,
        source: SourceImage,
        foreground_margin: Optional[int] = None,
    ) -> List[ExtractedImage]:
        """
        Extract every complete region from the full-resolution source.

        Regions are numbered from zero in creation order. A trailing region
        that is still being drawn is skipped. Either every crop is returned
        or the first failure propagates.
        """
        margin = extraction.FOREGROUND_MARGIN if foreground_margin is None else foreground_margin
        crops = []
        for region in self._regions:
            if not region.is_complete:
                logger.warning(f"Skipping unfinished region {region!r} on export")
                continue
            crops.append(
                extraction.extract_region(
                    source, region, len(crops), ratio, margin=margin
                )
            )

        logger.info(f"Exported {len(crops)} region crops")
        return crops
