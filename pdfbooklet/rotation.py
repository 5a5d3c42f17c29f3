"""
Quarter-turn rotation of rasterized pages.
"""

from PIL import Image


class PageRotator:
    """Rotates page images by 90 degrees so their long edge follows the viewport's."""

    @staticmethod
    def rotate(image: Image.Image, clockwise: bool) -> Image.Image:
        """
        Rotate a PIL Image a quarter turn.

        Uses Image.transpose, which moves pixels without resampling, so the
        rotation is lossless and the result has width and height swapped.

        Args:
            image: PIL Image to rotate
            clockwise: True to turn clockwise, False for anti-clockwise

        Returns:
            Rotated PIL Image

        Example:
            >>> img = Image.new('L', (100, 50))
            >>> PageRotator.rotate(img, clockwise=True).size
            (50, 100)
        """
        width, height = image.size
        if width == 0 or height == 0:
            return Image.new(image.mode, (height, width))

        # Pillow's ROTATE_* constants turn anti-clockwise
        method = Image.Transpose.ROTATE_270 if clockwise else Image.Transpose.ROTATE_90
        return image.transpose(method)
