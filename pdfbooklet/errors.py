"""
Exception hierarchy for booklet generation.

Every error raised on purpose by this package derives from BookletError, so
callers (the CLI, the background task) can catch one type. The concrete
classes also derive from the matching builtin so existing ``except ValueError``
or ``except OSError`` handlers keep working.
"""


class BookletError(Exception):
    """Base class for booklet generation errors."""


class InvalidConfigurationError(BookletError, ValueError):
    """Options that cannot produce a booklet (bad signature size, inverted range...)."""


class DegenerateGeometryError(BookletError, ValueError):
    """An image or viewport with zero area."""


class DocumentIOError(BookletError, OSError):
    """Reading the source document or writing the output document failed."""


class ImpositionCancelled(BookletError):
    """The run was cancelled between two sheets."""
