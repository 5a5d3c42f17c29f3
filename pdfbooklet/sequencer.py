"""
Saddle-stitch signature sequencing.

Maps a page range onto physical sheets so that, printed duplex and folded,
the pages read in order.
"""

import logging
from typing import List

from .config import PAGES_PER_SHEET
from .errors import InvalidConfigurationError
from .models import PageRange, SheetAssignment, Side, Slot

logger = logging.getLogger(__name__)


class SignatureSequencer:
    """Builds the ordered list of sheet assignments for a booklet."""

    @staticmethod
    def pages_per_signature(sheets_per_signature: int) -> int:
        """Number of source pages one signature holds."""
        if sheets_per_signature < 1:
            raise InvalidConfigurationError(
                f"sheets_per_signature must be >= 1, got {sheets_per_signature}"
            )
        return sheets_per_signature * PAGES_PER_SHEET

    @staticmethod
    def signature_count(page_range: PageRange, sheets_per_signature: int) -> int:
        """Number of signatures needed for the range (the last one may be short)."""
        per_signature = SignatureSequencer.pages_per_signature(sheets_per_signature)
        return -(-page_range.page_count // per_signature)

    @staticmethod
    def sequence(
        page_range: PageRange,
        sheets_per_signature: int,
        rotate_back: bool = True
    ) -> List[SheetAssignment]:
        """
        Calculate the imposition plan for a page range.

        The range is split into signatures of 4 x sheets_per_signature pages.
        Within a signature of n pages, sheet i (0 = outermost) carries:

            Front: top = n - 1 - 2*i, bottom = 2*i
            Back:  top = 2*i + 1,     bottom = n - 2 - 2*i

        so a single-sheet signature of pages 1-4 prints (4, 1) on the front and
        (2, 3) on the back. Positions past the end of the range are returned
        as absent assignments; they are never padded with blank pages.

        Args:
            page_range: Pages to impose (0-based, last exclusive)
            sheets_per_signature: Sheets folded together per signature
            rotate_back: Turn back sides clockwise (True) or like the front (False)

        Returns:
            Assignments ordered by sheet, front before back, top before bottom

        Raises:
            InvalidConfigurationError: If sheets_per_signature < 1
        """
        n = SignatureSequencer.pages_per_signature(sheets_per_signature)
        assignments: List[SheetAssignment] = []

        sheet = 0
        for start in range(page_range.first, page_range.last, n):
            for i in range(sheets_per_signature):
                placements = (
                    (Side.FRONT, Slot.TOP, n - 1 - 2 * i, False),
                    (Side.FRONT, Slot.BOTTOM, 2 * i, False),
                    (Side.BACK, Slot.TOP, 2 * i + 1, rotate_back),
                    (Side.BACK, Slot.BOTTOM, n - 2 - 2 * i, rotate_back),
                )
                for side, slot, position, rotate in placements:
                    index = start + position
                    assignments.append(SheetAssignment(
                        source_page_index=index if index < page_range.last else None,
                        destination_sheet=sheet,
                        slot=slot,
                        side=side,
                        rotate=rotate
                    ))
                sheet += 1

        logger.debug(
            "Sequenced pages %d-%d into %d sheet(s), %d page(s) per signature",
            page_range.first, page_range.last, sheet, n
        )
        return assignments
