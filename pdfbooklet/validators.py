"""
Business logic validators for booklet generation.

These checks run against the opened source document before any page is
rendered, so a run either starts with a consistent configuration or does
not start at all. Errors block the run; warnings are reported to the user.
"""

from .config import MAX_RECOMMENDED_DPI, MAX_RECOMMENDED_SHEETS_PER_SIGNATURE
from .models import BookletOptions, ValidationResult
from .sequencer import SignatureSequencer


class OptionsValidator:
    """Validates booklet options against a source document."""

    @staticmethod
    def validate_page_bounds(options: BookletOptions, total_pages: int) -> ValidationResult:
        """
        Validate the requested first/last pages against the document length.

        Args:
            options: Booklet options with 1-indexed first_page/last_page
            total_pages: Number of pages in the source document

        Returns:
            ValidationResult with any errors or warnings

        Example:
            >>> result = OptionsValidator.validate_page_bounds(BookletOptions(last_page=40), 32)
            >>> result.is_valid, len(result.warnings)
            (True, 1)
        """
        result = ValidationResult(is_valid=True)

        if total_pages == 0:
            result.add_error("Source document has no pages")
            return result

        if options.first_page is not None and options.first_page > total_pages:
            result.add_warning(
                f"First page {options.first_page} is past the end of the document (1-{total_pages})"
            )
        if options.last_page is not None and options.last_page > total_pages:
            result.add_warning(
                f"Last page {options.last_page} adjusted to fit within 1-{total_pages}"
            )

        if options.page_range(total_pages).is_empty():
            result.add_error("No pages selected (page range is empty)")

        return result

    @staticmethod
    def validate_booklet_options(options: BookletOptions, total_pages: int) -> ValidationResult:
        """
        Validate booklet generation options.

        Args:
            options: Booklet options to check
            total_pages: Number of pages in the source document

        Returns:
            ValidationResult with any errors or warnings
        """
        result = OptionsValidator.validate_page_bounds(options, total_pages)
        if not result.is_valid:
            return result

        if options.dpi > MAX_RECOMMENDED_DPI:
            result.add_warning(
                f"Resolution of {options.dpi} dpi will produce a very large output file"
            )

        sheets = options.sheets_per_signature
        if sheets > MAX_RECOMMENDED_SHEETS_PER_SIGNATURE:
            result.add_warning(
                f"Signatures of {sheets} sheets may be too thick to fold cleanly"
            )

        # Warn about blank slots in a short final signature
        page_range = options.page_range(total_pages)
        per_signature = SignatureSequencer.pages_per_signature(sheets)
        short_by = -page_range.page_count % per_signature
        if short_by:
            result.add_warning(
                f"Final signature is short: {short_by} slot(s) will be left blank"
            )

        return result
