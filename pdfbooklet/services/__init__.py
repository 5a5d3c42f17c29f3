"""
Service layer for the booklet maker.

Services coordinate high-level operations and manage resources like
documents and temp files, providing a clean interface between the CLI and
the imposition core.
"""

from .booklet_service import BookletService
from .config_service import ConfigService
from .document_service import OutputDocument, SourceDocument
from .task_service import ImpositionTask

__all__ = ['BookletService', 'ConfigService', 'ImpositionTask', 'OutputDocument', 'SourceDocument']
