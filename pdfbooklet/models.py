"""
Data models for the booklet maker.

This module defines the typed records that flow through one imposition run:
the page range being printed, the per-slot sheet assignments, the geometry
of a half-sheet viewport and the transform fitting a page image into it.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_DPI, DEFAULT_PAGE_SIZE, DEFAULT_SHEETS_PER_SIGNATURE, PAGE_SIZES
from .errors import InvalidConfigurationError


class Slot(Enum):
    """Half of one side of an output sheet."""
    TOP = "top"
    BOTTOM = "bottom"


class Side(Enum):
    """Side of a physical output sheet."""
    FRONT = "front"
    BACK = "back"


class ColorMode(Enum):
    """Color mode used when rasterizing source pages."""
    GRAY = "gray"      # 8-bit grayscale, smallest output
    COLOR = "color"    # 24-bit RGB


class BlankSheetPolicy(Enum):
    """What to do with a sheet whose four slots are all absent."""
    EMIT = "emit"  # Keep the physical sheet count predictable
    SKIP = "skip"


@dataclass
class PageRange:
    """
    Pages of the source document to impose.

    ``first`` is inclusive and ``last`` exclusive, both 0-based, so the range
    holds ``last - first`` pages. The range can only be changed through
    set_first() and set_last(), which clamp to the document and keep
    ``first <= last``.
    """
    first: int
    last: int
    total_pages: int

    def __post_init__(self):
        """Validate bounds."""
        if self.total_pages < 0:
            raise InvalidConfigurationError(
                f"total_pages must be >= 0, got {self.total_pages}"
            )
        if not 0 <= self.first <= self.last <= self.total_pages:
            raise InvalidConfigurationError(
                f"Invalid page range [{self.first}, {self.last}) "
                f"for a document of {self.total_pages} pages"
            )

    @classmethod
    def full(cls, total_pages: int) -> 'PageRange':
        """Range covering the whole document."""
        return cls(first=0, last=total_pages, total_pages=total_pages)

    def set_first(self, page: int):
        """Move the first page, clamping to the document and pushing ``last`` if needed."""
        if page < 0:
            self.first = 0
            return

        page = min(page, self.total_pages)
        if page > self.last:
            self.last = page
        self.first = page

    def set_last(self, page: int):
        """Move the last (exclusive) page, clamping to the document and pulling ``first`` if needed."""
        if page > self.total_pages:
            self.last = self.total_pages
            return

        page = max(page, 0)
        if page < self.first:
            self.first = page
        self.last = page

    @property
    def page_count(self) -> int:
        return self.last - self.first

    def is_empty(self) -> bool:
        return self.first == self.last


@dataclass(frozen=True)
class SheetAssignment:
    """
    One source page placed in one half of one side of an output sheet.

    ``source_page_index`` is None when the slot has no page (the final
    signature is short); such slots stay blank. ``rotate`` marks the sides
    that are turned clockwise so they read upright after the duplex flip.
    """
    source_page_index: Optional[int]
    destination_sheet: int
    slot: Slot
    side: Side
    rotate: bool

    @property
    def is_absent(self) -> bool:
        return self.source_page_index is None

    def __repr__(self):
        page = "-" if self.is_absent else self.source_page_index
        return (f"SheetAssignment(sheet={self.destination_sheet}, {self.side.value}/"
                f"{self.slot.value}, page={page}, rotate={self.rotate})")


@dataclass(frozen=True)
class Viewport:
    """
    Rectangular half-sheet region that a page image is fitted into.

    ``x`` and ``y`` locate the region's lower-left corner on the output
    page, in points with the PDF bottom-left origin.
    """
    width: float
    height: float
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class FitTransform:
    """Uniform scale and centering offsets placing an image inside a Viewport."""
    scale: float
    offset_x: float
    offset_y: float

    def scaled_size(self, image_width: float, image_height: float):
        """Size of the image once scaled, as (width, height)."""
        return image_width * self.scale, image_height * self.scale


@dataclass(frozen=True)
class ProgressEvent:
    """Progress notification emitted after each completed physical sheet."""
    sheet: int
    completed_pages: int
    total_pages: int

    @property
    def fraction(self) -> float:
        if self.total_pages == 0:
            return 1.0
        return self.completed_pages / self.total_pages


@dataclass
class BookletOptions:
    """
    Configuration for booklet generation.

    ``first_page`` and ``last_page`` are 1-indexed and inclusive, as a user
    types them; None means the document's own first/last page.
    """
    dpi: int = DEFAULT_DPI
    page_size: str = DEFAULT_PAGE_SIZE
    color_mode: ColorMode = ColorMode.GRAY
    sheets_per_signature: int = DEFAULT_SHEETS_PER_SIGNATURE
    first_page: Optional[int] = None
    last_page: Optional[int] = None
    rotate_back: bool = True
    blank_sheets: BlankSheetPolicy = BlankSheetPolicy.EMIT

    def __post_init__(self):
        """Validate options."""
        if self.sheets_per_signature < 1:
            raise InvalidConfigurationError("sheets_per_signature must be >= 1")
        if self.dpi < 1:
            raise InvalidConfigurationError("dpi must be >= 1")
        if self.page_size not in PAGE_SIZES:
            valid = ", ".join(PAGE_SIZES)
            raise InvalidConfigurationError(
                f"Unknown page size '{self.page_size}', expected one of: {valid}"
            )
        if not isinstance(self.color_mode, ColorMode):
            raise InvalidConfigurationError(f"Unknown color mode: {self.color_mode!r}")
        if not isinstance(self.blank_sheets, BlankSheetPolicy):
            raise InvalidConfigurationError(f"Unknown blank sheet policy: {self.blank_sheets!r}")
        for name in ('first_page', 'last_page'):
            value = getattr(self, name)
            if value is not None and value < 1:
                raise InvalidConfigurationError(f"{name} must be >= 1, got {value}")
        if (self.first_page is not None and self.last_page is not None
                and self.first_page > self.last_page):
            raise InvalidConfigurationError(
                f"Inverted page range: first page {self.first_page} > last page {self.last_page}"
            )

    @property
    def sheet_size(self):
        """Output page size in points, as (width, height)."""
        return PAGE_SIZES[self.page_size]

    def page_range(self, total_pages: int) -> PageRange:
        """Build the PageRange for a document, clamping the bounds to it."""
        page_range = PageRange.full(total_pages)
        if self.first_page is not None:
            page_range.set_first(self.first_page - 1)
        if self.last_page is not None:
            page_range.set_last(self.last_page)
        return page_range


@dataclass
class ValidationResult:
    """
    Problems found while checking options against a source document.

    Errors block the run; warnings are passed on to the caller and logged.
    """
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str):
        """Record a blocking problem."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        self.warnings.append(message)

    def raise_for_errors(self):
        """
        Raise if any blocking problem was recorded.

        Raises:
            InvalidConfigurationError: Listing every error, separated by "; "
        """
        if not self.is_valid:
            raise InvalidConfigurationError("; ".join(self.errors))


@dataclass
class ImpositionResult:
    """Outcome of a completed booklet run."""
    output_path: Path
    sheet_count: int
    page_count: int                  # Pages in the output document (two per sheet)
    placed_pages: int
    skipped_pages: List[int] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
