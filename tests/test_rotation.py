"""
Tests for the page rotator.
"""

import pytest
from PIL import Image
from pdfbooklet.rotation import PageRotator


@pytest.fixture
def marked_image():
    """3x2 grayscale image with a distinct value in every pixel."""
    image = Image.new('L', (3, 2))
    image.putdata([10, 20, 30, 40, 50, 60])
    return image


class TestPageRotator:
    """Tests for PageRotator."""

    def test_clockwise_swaps_size(self, marked_image):
        """Test that a quarter turn swaps width and height."""
        assert PageRotator.rotate(marked_image, clockwise=True).size == (2, 3)
        assert PageRotator.rotate(marked_image, clockwise=False).size == (2, 3)

    def test_clockwise_moves_top_left_to_top_right(self, marked_image):
        """Test the direction of a clockwise turn."""
        rotated = PageRotator.rotate(marked_image, clockwise=True)

        assert rotated.getpixel((1, 0)) == 10
        assert rotated.getpixel((0, 0)) == 40
        assert rotated.getpixel((1, 2)) == 30

    def test_anticlockwise_moves_top_left_to_bottom_left(self, marked_image):
        """Test the direction of an anti-clockwise turn."""
        rotated = PageRotator.rotate(marked_image, clockwise=False)

        assert rotated.getpixel((0, 2)) == 10
        assert rotated.getpixel((0, 0)) == 30
        assert rotated.getpixel((1, 0)) == 60

    @pytest.mark.parametrize("first", [True, False])
    def test_opposite_turns_restore_image(self, marked_image, first):
        """Test that turning one way then the other restores the original pixels."""
        restored = PageRotator.rotate(PageRotator.rotate(marked_image, first), not first)

        assert restored.size == marked_image.size
        assert list(restored.getdata()) == list(marked_image.getdata())

    def test_mode_preserved(self):
        """Test that RGB images stay RGB."""
        image = Image.new('RGB', (4, 7), color=(255, 0, 0))

        rotated = PageRotator.rotate(image, clockwise=True)

        assert rotated.mode == 'RGB'
        assert rotated.getpixel((0, 0)) == (255, 0, 0)

    def test_zero_size_image(self):
        """Test that a zero-size image produces a zero-size image with swapped dimensions."""
        rotated = PageRotator.rotate(Image.new('L', (0, 5)), clockwise=True)

        assert rotated.size == (5, 0)
