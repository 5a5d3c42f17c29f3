"""
Pytest configuration and fixtures.
"""

import pytest
from contextlib import contextmanager

import fitz  # PyMuPDF
from PIL import Image


@pytest.fixture
def make_pdf(tmp_path):
    """Factory creating a source PDF with numbered letter-size pages."""
    def _make(page_count, name="source.pdf", width=612, height=792):
        path = tmp_path / name
        doc = fitz.open()
        for i in range(page_count):
            page = doc.new_page(width=width, height=height)
            page.insert_text((72, 72), f"Page {i + 1}", fontsize=36)
            page.draw_rect(fitz.Rect(72, 144, width - 72, height - 72), color=(0, 0, 0), width=2)
        doc.save(str(path))
        doc.close()
        return path
    return _make


@pytest.fixture
def output_path(tmp_path):
    """Booklet output path in a directory that does not exist yet."""
    return tmp_path / "out" / "booklet.pdf"


class RecordingWriter:
    """In-memory SheetWriter recording what is placed on each side."""

    def __init__(self):
        self.sides = []

    @contextmanager
    def begin_side(self, sheet, side):
        placed = []
        self.sides.append((sheet, side, placed))
        yield lambda image, viewport, transform: placed.append((image, viewport, transform))


@pytest.fixture
def writer():
    return RecordingWriter()


@pytest.fixture
def page_images():
    """Rasterizer returning a uniform portrait image whose gray level is the page index."""
    def _rasterize(page_index):
        return Image.new('L', (85, 110), color=page_index)
    return _rasterize
