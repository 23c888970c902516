"""
Validate the booster data.

Checks every booster file's structure, reconciles index.json with the
files on disk, and optionally checks source links and Scryfall card
counts. Exits 1 if any error was found; warnings never fail the run.

Usage:
    python -m boostercheck.jobs.validate [--check-urls] [--check-scryfall] [-v]
"""

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Any

from boostercheck.config import settings
from boostercheck.models.report import Finding, ValidationReport
from boostercheck.parsers.booster_files import list_booster_files
from boostercheck.services.index_reconciler import DocumentKey, load_index, reconcile_index
from boostercheck.services.schema_validator import validate_file
from boostercheck.services.scryfall_client import ScryfallClient, create_http_client
from boostercheck.services.source_checks import (
    NamedDocument,
    check_scryfall_card_counts,
    check_source_urls,
)

logger = logging.getLogger(__name__)


def _document_key(file_name: str) -> DocumentKey:
    set_code, _, booster_type = file_name.removesuffix(".json").rpartition("-")
    return set_code, booster_type


async def run_validation(
    data_dir: Path,
    *,
    check_urls: bool = False,
    check_scryfall: bool = False,
) -> ValidationReport:
    """
    Run every validation pass over a booster data directory.

    Args:
        data_dir: Directory containing index.json and boosters/
        check_urls: Also check each document's source link
        check_scryfall: Also compare max collector numbers with Scryfall

    Returns:
        Merged report from all passes
    """
    boosters_dir = data_dir / "boosters"
    report = ValidationReport()

    files = list_booster_files(boosters_dir)
    logger.info("Validating %d booster files in %s", len(files), boosters_dir)

    named: list[NamedDocument] = []
    documents: dict[DocumentKey, dict[str, Any]] = {}
    for path in files:
        document, file_report = validate_file(path)
        report.merge(file_report)
        if document is None:
            continue
        named.append((path.name, document))
        documents[_document_key(path.name)] = document

    index, index_report = load_index(data_dir / "index.json")
    report.merge(index_report)
    if index is not None:
        report.merge(
            reconcile_index(
                index,
                documents,
                [p.name for p in files],
                basic_land_range=(settings.basic_land_min, settings.basic_land_max),
            )
        )

    if check_urls:
        logger.info("Checking source URLs (this may take a while)...")
        async with create_http_client(timeout=settings.url_timeout) as client:
            report.merge(await check_source_urls(named, client))

    if check_scryfall:
        logger.info("Checking CN ranges against Scryfall (this may take a while)...")
        async with create_http_client() as client:
            report.merge(await check_scryfall_card_counts(named, ScryfallClient(client)))

    return report


def _print_section(title: str, findings: list[Finding]) -> None:
    print(f"{title} ({len(findings)}):")
    for finding in findings:
        print(f"  - {finding}")
    print()


def print_report(report: ValidationReport, verbose: bool = False) -> None:
    """Print errors and warnings, plus infos when verbose."""
    errors, warnings = report.errors, report.warnings

    if not errors and not warnings:
        print("All validations passed!")
    else:
        if errors:
            _print_section("ERRORS", errors)
        if warnings:
            _print_section("WARNINGS", warnings)

    if verbose and report.infos:
        _print_section("INFO", report.infos)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate booster data files")
    parser.add_argument(
        "--check-urls",
        action="store_true",
        help="Check that every source URL is reachable",
    )
    parser.add_argument(
        "--check-scryfall",
        action="store_true",
        help="Compare max collector numbers with Scryfall card counts",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Include informational findings",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=settings.data_dir,
        help="Directory containing index.json and boosters/ (default: %(default)s)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("Validating booster-data...")
    if args.check_urls:
        print("  --check-urls enabled")
    if args.check_scryfall:
        print("  --check-scryfall enabled")
    print()

    report = asyncio.run(
        run_validation(
            args.data_dir,
            check_urls=args.check_urls,
            check_scryfall=args.check_scryfall,
        )
    )
    print_report(report, verbose=args.verbose)
    return report.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
