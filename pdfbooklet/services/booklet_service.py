"""
Booklet Service - High-level booklet generation operations.

This service opens the source document, validates the options against it,
plans the imposition and composes the sheets into a temporary file that is
only moved into place once it has been written and verified.
"""

import logging
import os
import queue
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from ..composer import SheetComposer
from ..errors import DocumentIOError, ImpositionCancelled
from ..models import BookletOptions, ImpositionResult, SheetAssignment, ValidationResult
from ..sequencer import SignatureSequencer
from ..validators import OptionsValidator
from .document_service import OutputDocument, SourceDocument

logger = logging.getLogger(__name__)


class BookletService:
    """
    High-level service for booklet operations.

    Handles validation, temp file cleanup and error translation, and
    coordinates the sequencer and composer with the document collaborators.
    """

    def __init__(self):
        self._temp_files: List[Path] = []

    def validate(self, total_pages: int, options: BookletOptions) -> ValidationResult:
        """
        Check the options against a document of total_pages pages.

        Returns:
            ValidationResult holding the non-blocking warnings

        Raises:
            InvalidConfigurationError: If any check failed
        """
        validation = OptionsValidator.validate_booklet_options(options, total_pages)
        validation.raise_for_errors()
        return validation

    def plan(self, total_pages: int, options: BookletOptions) -> List[SheetAssignment]:
        """
        Compute the sheet assignments for a document without rendering anything.

        The options are validated first, so a plan is only returned for a run
        that generate() would accept.

        Args:
            total_pages: Number of pages in the source document
            options: Generation options (page bounds, signature size, rotation)

        Returns:
            Ordered list of SheetAssignment

        Raises:
            InvalidConfigurationError: If the options do not fit the document
        """
        self.validate(total_pages, options)
        return self._sequence(total_pages, options)

    @staticmethod
    def _sequence(total_pages: int, options: BookletOptions) -> List[SheetAssignment]:
        page_range = options.page_range(total_pages)
        return SignatureSequencer.sequence(
            page_range,
            options.sheets_per_signature,
            rotate_back=options.rotate_back
        )

    def generate(
        self,
        source_path: Union[str, Path],
        output_path: Union[str, Path],
        options: BookletOptions,
        progress: Optional[queue.Queue] = None,
        cancel_event: Optional[threading.Event] = None
    ) -> ImpositionResult:
        """
        Generate the booklet PDF.

        Args:
            source_path: Path to the source document
            output_path: Path of the booklet PDF to create
            options: Generation options
            progress: Optional queue receiving a ProgressEvent after each sheet
            cancel_event: Optional event checked between sheets

        Returns:
            ImpositionResult describing the written booklet

        Raises:
            InvalidConfigurationError: If the options do not fit the document
            DocumentIOError: If the source cannot be opened or the output written
            ImpositionCancelled: If cancel_event was set during the run
        """
        source_path = Path(source_path)
        output_path = Path(output_path)

        with SourceDocument.load(source_path) as source:
            total_pages = source.page_count

            validation = self.validate(total_pages, options)
            for warning in validation.warnings:
                logger.warning(warning)

            assignments = self._sequence(total_pages, options)
            page_range = options.page_range(total_pages)
            logger.info(
                "Imposing pages %d to %d on %s paper, %d signature(s) of %d sheet(s)",
                page_range.first + 1, page_range.last, options.page_size,
                SignatureSequencer.signature_count(page_range, options.sheets_per_signature),
                options.sheets_per_signature
            )
            spans = self._sheet_spans(assignments)

            composer = SheetComposer(options.sheet_size, options.blank_sheets)
            temp_path = self._create_temp_output(output_path)

            try:
                output = OutputDocument(temp_path, options.sheet_size)

                def rasterize(page_index: int):
                    return source.rasterize(page_index, options.dpi, options.color_mode)

                self._check_cancelled(cancel_event, "before the first sheet")
                for event in composer.compose(assignments, rasterize, output):
                    if event.sheet in spans:
                        logger.info("Pages %d to %d", *spans[event.sheet])
                    else:
                        logger.info("Sheet %d left blank", event.sheet + 1)
                    if progress is not None:
                        progress.put(event)
                    self._check_cancelled(cancel_event, f"after sheet {event.sheet + 1}")

                output.save()
                self._verify_output(temp_path, output.page_count)
                self._publish(temp_path, output_path)
            finally:
                self.cleanup()

        logger.info("File created in: %s", output_path)
        return ImpositionResult(
            output_path=output_path,
            sheet_count=composer.sheets_written,
            page_count=output.page_count,
            placed_pages=composer.placed_pages,
            skipped_pages=list(composer.skipped_pages),
            warnings=validation.warnings + composer.warnings
        )

    @staticmethod
    def _sheet_spans(assignments: List[SheetAssignment]) -> Dict[int, Tuple[int, int]]:
        """Lowest and highest 1-indexed source page on each sheet that holds any."""
        spans: Dict[int, Tuple[int, int]] = {}
        for assignment in assignments:
            if assignment.is_absent:
                continue
            page = assignment.source_page_index + 1
            low, high = spans.get(assignment.destination_sheet, (page, page))
            spans[assignment.destination_sheet] = (min(low, page), max(high, page))
        return spans

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event], where: str):
        if cancel_event is not None and cancel_event.is_set():
            raise ImpositionCancelled(f"Booklet generation cancelled {where}")

    def _create_temp_output(self, output_path: Path) -> Path:
        """
        Create a temp file beside the output and track it for cleanup.

        Raises:
            DocumentIOError: If the output directory cannot be written
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                suffix='.pdf', prefix=f'.{output_path.stem}_', dir=str(output_path.parent)
            )
            os.close(fd)
        except OSError as e:
            raise DocumentIOError(f"Cannot write to {output_path.parent}: {e}") from e

        temp_path = Path(temp_name)
        self._temp_files.append(temp_path)
        return temp_path

    @staticmethod
    def _verify_output(path: Path, expected_pages: int):
        """Re-read the written PDF and check its page count."""
        try:
            page_count = len(PdfReader(str(path)).pages)
        except (PyPdfError, OSError) as e:
            raise DocumentIOError(f"Written booklet is unreadable: {e}") from e

        if page_count != expected_pages:
            raise DocumentIOError(
                f"Written booklet has {page_count} pages, expected {expected_pages}"
            )

    @staticmethod
    def _publish(temp_path: Path, output_path: Path):
        try:
            os.replace(temp_path, output_path)
        except OSError as e:
            raise DocumentIOError(f"Failed to write {output_path}: {e}") from e

    def cleanup(self):
        """
        Clean up temporary files created during operations.

        Called at the end of every run, so a failed or cancelled run never
        leaves a partial booklet behind.
        """
        for temp_file in self._temp_files:
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError as e:
                # Log but don't raise - cleanup is best-effort
                logger.warning("Failed to delete temp file %s: %s", temp_file, e)

        self._temp_files.clear()

    def get_temp_files(self) -> List[Path]:
        """
        Get list of temporary files being managed.

        Returns:
            List of temporary file paths
        """
        return self._temp_files.copy()
