"""
Document Service - Source rendering and output writing.

Wraps PyMuPDF for opening and rasterizing source documents and ReportLab for
writing the imposed sheets, behind the small interfaces the composer needs.
"""

import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Tuple, Union

import fitz  # PyMuPDF
from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..composer import PlaceImage
from ..errors import DocumentIOError
from ..models import ColorMode, FitTransform, Side, Viewport

logger = logging.getLogger(__name__)


class SourceDocument:
    """
    An open source document that can render its pages to PIL Images.

    Anything PyMuPDF opens is accepted (PDF, CBZ, XPS, EPUB...). Use as a
    context manager so the decoder state is released when the run ends.
    """

    def __init__(self, doc: "fitz.Document", path: Path):
        self._doc = doc
        self.path = path

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'SourceDocument':
        """
        Open a source document.

        Raises:
            DocumentIOError: If the file is missing, unreadable or encrypted
        """
        path = Path(path)
        if not path.exists():
            raise DocumentIOError(f"Source file not found: {path}")

        try:
            doc = fitz.open(str(path))
        except (RuntimeError, OSError, ValueError) as e:
            raise DocumentIOError(f"Failed to open {path}: {e}") from e

        if doc.needs_pass:
            doc.close()
            raise DocumentIOError(f"Source document is encrypted: {path}")

        logger.info("Opened %s (%d pages)", path.name, doc.page_count)
        return cls(doc, path)

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def rasterize(self, page_index: int, dpi: int, color_mode: ColorMode) -> Image.Image:
        """
        Render one page to a PIL Image.

        Args:
            page_index: 0-based page index
            dpi: Rendering resolution in dots per inch
            color_mode: ColorMode.GRAY renders 8-bit grayscale, COLOR renders RGB

        Returns:
            PIL Image in mode 'L' or 'RGB'

        Raises:
            DocumentIOError: If the page cannot be rendered
        """
        gray = color_mode is ColorMode.GRAY
        colorspace = fitz.csGRAY if gray else fitz.csRGB
        mode = 'L' if gray else 'RGB'

        try:
            page = self._doc.load_page(page_index)
            pixmap = page.get_pixmap(dpi=dpi, colorspace=colorspace, alpha=False)
        except (RuntimeError, ValueError, IndexError) as e:
            raise DocumentIOError(f"Failed to render page {page_index + 1}: {e}") from e

        size = (pixmap.width, pixmap.height)
        if pixmap.width == 0 or pixmap.height == 0:
            return Image.new(mode, size)
        return Image.frombytes(mode, size, pixmap.samples)

    def close(self):
        self._doc.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class OutputDocument:
    """
    The imposed document being written, one output page per sheet side.

    The canvas runs in ReportLab's invariant mode (fixed timestamps and
    document ID) and renders to memory before the bytes are written, so
    identical input always produces identical output files.
    """

    def __init__(self, path: Union[str, Path], page_size: Tuple[float, float]):
        self.path = Path(path)
        self.page_size = page_size
        self.page_count = 0
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=page_size, invariant=1)
        self._side_open = False

    @contextmanager
    def begin_side(self, sheet: int, side: Side) -> Iterator[PlaceImage]:
        """
        Start a new output page for one side of a sheet.

        Yields a place(image, viewport, transform) callable that draws on
        this page only. The page is closed when the block exits, even on
        error.
        """
        if self._side_open:
            raise RuntimeError("A sheet side is already open")

        self._side_open = True
        logger.debug("Sheet %d %s side", sheet + 1, side.value)
        try:
            yield self._draw_image
        finally:
            self._canvas.showPage()
            self.page_count += 1
            self._side_open = False

    def _draw_image(self, image: Image.Image, viewport: Viewport, transform: FitTransform):
        if not self._side_open:
            raise RuntimeError("No sheet side is open")

        width, height = transform.scaled_size(image.width, image.height)
        self._canvas.drawImage(
            ImageReader(image),
            viewport.x + transform.offset_x,
            viewport.y + transform.offset_y,
            width=width,
            height=height,
            mask=None,
            preserveAspectRatio=False,
            anchor='sw',
        )

    def save(self):
        """
        Write the document to disk.

        Raises:
            DocumentIOError: If the file cannot be written
        """
        self._canvas.save()
        try:
            self.path.write_bytes(self._buffer.getvalue())
        except OSError as e:
            raise DocumentIOError(f"Failed to write {self.path}: {e}") from e
