#!/usr/bin/env python3
"""
PDF Booklet Maker

Converts a document into a print-ready saddle-stitch booklet. Pages are
rasterized, turned a quarter turn and placed two per side on portrait sheets
so that the output, printed duplex (flip on short edge) and folded, reads in
order. Supports multi-sheet signatures, page bounds and grayscale or color
rendering.
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pdfbooklet.config import PAGE_SIZES
from pdfbooklet.errors import BookletError
from pdfbooklet.models import BlankSheetPolicy, BookletOptions, ColorMode
from pdfbooklet.services import BookletService, ConfigService, SourceDocument

logger = logging.getLogger("pdf_booklet")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a PDF (or CBZ/XPS/EPUB) into a print-ready booklet.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s comic.pdf comic_booklet.pdf
  %(prog)s comic.pdf booklet.pdf --sheets 4            # 16-page signatures
  %(prog)s comic.pdf booklet.pdf --first-page 3 --last-page 34
  %(prog)s comic.pdf booklet.pdf --color --dpi 150 --page-size a4
  %(prog)s comic.pdf booklet.pdf --dry-run             # Print the imposition only
        """
    )

    parser.add_argument('source', help='Source document')
    parser.add_argument('output', help='Booklet PDF to create')
    parser.add_argument('--dpi', type=int,
                        help='Rendering resolution in dots per inch (default: 300)')
    parser.add_argument('--page-size', choices=list(PAGE_SIZES.keys()),
                        help=f'Output paper size: {", ".join(PAGE_SIZES.keys())} (default: letter)')
    parser.add_argument('--color', dest='color_mode', action='store_const', const=ColorMode.COLOR,
                        help='Render pages in color (default: grayscale)')
    parser.add_argument('--sheets', dest='sheets_per_signature', type=int,
                        help='Sheets per signature (default: 1)')
    parser.add_argument('--first-page', type=int,
                        help='First page to include, 1-indexed (default: first page)')
    parser.add_argument('--last-page', type=int,
                        help='Last page to include, 1-indexed (default: last page)')
    parser.add_argument('--no-rotate', dest='rotate_back', action='store_const', const=False,
                        help='Do not flip the back side of each sheet')
    parser.add_argument('--skip-blank-sheets', dest='blank_sheets', action='store_const',
                        const=BlankSheetPolicy.SKIP,
                        help='Leave out sheets that would carry no page at all')
    parser.add_argument('--config', type=Path,
                        help='JSON file with default options')
    parser.add_argument('--save-config', action='store_true',
                        help='Save the effective options to the --config file')
    parser.add_argument('--dry-run', action='store_true',
                        help='Print the sheet layout without rendering')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def resolve_options(args: argparse.Namespace) -> BookletOptions:
    """Merge the config file defaults with the options given on the command line."""
    base = ConfigService(args.config).load() if args.config else BookletOptions()

    overrides = {}
    for field in ('dpi', 'page_size', 'color_mode', 'sheets_per_signature',
                  'first_page', 'last_page', 'rotate_back', 'blank_sheets'):
        value = getattr(args, field)
        if value is not None:
            overrides[field] = value

    return dataclasses.replace(base, **overrides)


def print_plan(service: BookletService, source_path: str, options: BookletOptions):
    with SourceDocument.load(source_path) as source:
        total_pages = source.page_count

    assignments = service.plan(total_pages, options)
    print(f"{total_pages} source pages, {len(assignments) // 4} sheet(s)\n")

    for assignment in assignments:
        page = "blank" if assignment.is_absent else assignment.source_page_index + 1
        turn = "cw" if assignment.rotate else "ccw"
        print(f"  Sheet {assignment.destination_sheet + 1:>3} {assignment.side.value:<5} "
              f"{assignment.slot.value:<6} page {page} ({turn})")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    service = BookletService()
    try:
        options = resolve_options(args)
        if args.save_config:
            if not args.config:
                logger.error("--save-config requires --config")
                return 2
            ConfigService(args.config).save(options)

        if args.dry_run:
            print_plan(service, args.source, options)
            return 0

        result = service.generate(args.source, args.output, options)
    except BookletError as e:
        logger.error("%s", e)
        return 1
    finally:
        service.cleanup()

    print("\nBooklet generation complete!")
    print(f"Sheets: {result.sheet_count} ({result.page_count} pages)")
    if result.skipped_pages:
        skipped = ", ".join(str(p + 1) for p in result.skipped_pages)
        print(f"Pages left blank: {skipped}")
    print(f"Output: {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
