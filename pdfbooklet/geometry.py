"""
Fit-and-center geometry for placing page images in half-sheet viewports.
"""

from .errors import DegenerateGeometryError
from .models import FitTransform, Viewport


class GeometryFitter:
    """Computes the uniform scale and centering offsets of an image in a viewport."""

    @staticmethod
    def fit(
        image_width: float,
        image_height: float,
        viewport_width: float,
        viewport_height: float
    ) -> FitTransform:
        """
        Fit an image entirely inside a viewport without distortion.

        The image is scaled by a single factor until it touches the viewport
        on the limiting axis and is centered on the other axis.

        Args:
            image_width: Source image width in pixels
            image_height: Source image height in pixels
            viewport_width: Viewport width in output units (points)
            viewport_height: Viewport height in output units (points)

        Returns:
            FitTransform with the scale and the offsets relative to the
            viewport's lower-left corner

        Raises:
            DegenerateGeometryError: If the image or the viewport has no area

        Example:
            >>> GeometryFitter.fit(800, 600, 600, 800)
            FitTransform(scale=0.75, offset_x=0.0, offset_y=175.0)
        """
        if image_width <= 0 or image_height <= 0:
            raise DegenerateGeometryError(
                f"Cannot fit a {image_width}x{image_height} image: zero area"
            )
        if viewport_width <= 0 or viewport_height <= 0:
            raise DegenerateGeometryError(
                f"Cannot fit into a {viewport_width}x{viewport_height} viewport: zero area"
            )

        image_aspect = image_width / image_height
        viewport_aspect = viewport_width / viewport_height

        if image_aspect < viewport_aspect:
            # Taller than the viewport: height limits, center horizontally
            scale = viewport_height / image_height
            offset_x = (viewport_width - image_width * scale) / 2
            offset_y = 0.0
        else:
            # Wider than (or same shape as) the viewport: width limits, center vertically
            scale = viewport_width / image_width
            offset_x = 0.0
            offset_y = (viewport_height - image_height * scale) / 2

        return FitTransform(scale=scale, offset_x=offset_x, offset_y=offset_y)

    @classmethod
    def fit_to(cls, image_width: float, image_height: float, viewport: Viewport) -> FitTransform:
        """Fit an image inside a Viewport record."""
        return cls.fit(image_width, image_height, viewport.width, viewport.height)
