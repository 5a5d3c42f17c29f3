"""
Sheet composition: rasterize, rotate, fit and place every assigned page.

The composer owns no document state. The rendering and writing
collaborators are passed to compose() and every side of a sheet is
written through its own scoped handle from the writer.
"""

import itertools
import logging
from typing import Callable, ContextManager, Dict, Iterable, Iterator, List, Protocol, Tuple

from PIL import Image

from .errors import DegenerateGeometryError, DocumentIOError
from .geometry import GeometryFitter
from .models import BlankSheetPolicy, FitTransform, ProgressEvent, SheetAssignment, Side, Slot, Viewport
from .rotation import PageRotator

logger = logging.getLogger(__name__)

Rasterizer = Callable[[int], Image.Image]
PlaceImage = Callable[[Image.Image, Viewport, FitTransform], None]


class SheetWriter(Protocol):
    """Output collaborator: hands out one scoped drawing handle per sheet side."""

    def begin_side(self, sheet: int, side: Side) -> ContextManager[PlaceImage]:
        ...


def half_sheet_viewports(page_size: Tuple[float, float]) -> Dict[Slot, Viewport]:
    """Top and bottom halves of a portrait output page."""
    width, height = page_size
    half_height = height / 2
    return {
        Slot.TOP: Viewport(width=width, height=half_height, x=0.0, y=half_height),
        Slot.BOTTOM: Viewport(width=width, height=half_height, x=0.0, y=0.0),
    }


class SheetComposer:
    """
    Places up to two page images on each side of every output sheet.

    Each page is turned a quarter turn (clockwise on rotated sides,
    anti-clockwise otherwise) so its long edge runs along the half-sheet,
    then scaled to fit and centered. Pages that cannot be rendered or have
    no area are left blank and reported in ``skipped_pages``.
    """

    def __init__(
        self,
        page_size: Tuple[float, float],
        blank_sheets: BlankSheetPolicy = BlankSheetPolicy.EMIT
    ):
        self.viewports = half_sheet_viewports(page_size)
        self.blank_sheets = blank_sheets
        self.placed_pages = 0
        self.sheets_written = 0
        self.skipped_pages: List[int] = []
        self.warnings: List[str] = []

    def compose(
        self,
        assignments: Iterable[SheetAssignment],
        rasterize: Rasterizer,
        writer: SheetWriter
    ) -> Iterator[ProgressEvent]:
        """
        Compose all sheets, yielding a ProgressEvent after each physical sheet.

        Both sides of a sheet are fully written before its event is yielded,
        so a caller that stops iterating never leaves a half-written sheet.

        Args:
            assignments: Plan from SignatureSequencer.sequence()
            rasterize: Returns the image of a source page (0-based index)
            writer: Output collaborator providing begin_side()

        Yields:
            ProgressEvent with the pages handled so far
        """
        assignments = list(assignments)
        total_pages = sum(1 for a in assignments if not a.is_absent)
        completed = 0

        for sheet, group in itertools.groupby(assignments, key=lambda a: a.destination_sheet):
            sheet_assignments = list(group)

            if all(a.is_absent for a in sheet_assignments):
                if self.blank_sheets is BlankSheetPolicy.SKIP:
                    logger.info("Skipping blank sheet %d", sheet + 1)
                    continue
                logger.debug("Emitting blank sheet %d", sheet + 1)

            for side in (Side.FRONT, Side.BACK):
                with writer.begin_side(sheet, side) as place:
                    for assignment in sheet_assignments:
                        if assignment.side is not side or assignment.is_absent:
                            continue
                        self._place_assignment(assignment, rasterize, place)
                        completed += 1

            self.sheets_written += 1
            yield ProgressEvent(sheet=sheet, completed_pages=completed, total_pages=total_pages)

    def _place_assignment(
        self,
        assignment: SheetAssignment,
        rasterize: Rasterizer,
        place: PlaceImage
    ):
        page_index = assignment.source_page_index

        try:
            image = rasterize(page_index)
        except DocumentIOError as e:
            self._skip(page_index, f"Page {page_index + 1} could not be rendered, leaving it blank: {e}")
            return

        image = PageRotator.rotate(image, clockwise=assignment.rotate)
        viewport = self.viewports[assignment.slot]

        try:
            transform = GeometryFitter.fit_to(image.width, image.height, viewport)
        except DegenerateGeometryError as e:
            self._skip(page_index, f"Page {page_index + 1} has no area, leaving it blank: {e}")
            return

        place(image, viewport, transform)
        self.placed_pages += 1

    def _skip(self, page_index: int, message: str):
        logger.warning(message)
        self.skipped_pages.append(page_index)
        self.warnings.append(message)
