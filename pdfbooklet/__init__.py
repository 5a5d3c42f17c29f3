"""
PDF booklet imposition.

This package turns a linear document into a rasterized saddle-stitch booklet:
pages are sequenced into signatures, turned a quarter turn and scaled into
the top and bottom halves of duplex output sheets.
"""

__version__ = "1.0.0"
