"""
Audit play and draft booster ranges against Scryfall.

Finds cards Scryfall says are in boosters but our ranges exclude,
filtering out known collector-exclusive treatments, and writes the
remaining suspects to audit-results.json for review.

Usage:
    python -m boostercheck.jobs.audit_ranges [--sets dsk blb] [--output PATH]
"""

import argparse
import asyncio
import logging
from pathlib import Path

from boostercheck.config import settings
from boostercheck.models.card import AuditIssue
from boostercheck.parsers.booster_files import list_booster_files
from boostercheck.services.external_audit import (
    AuditSummary,
    audit_file_paths,
    run_audit,
    write_audit_results,
)
from boostercheck.services.scryfall_client import ScryfallClient, create_http_client

logger = logging.getLogger(__name__)


async def run_range_audit(
    boosters_dir: Path,
    sets: list[str] | None = None,
) -> AuditSummary:
    """
    Audit every play/draft booster file, optionally limited to some sets.

    Args:
        boosters_dir: Directory of booster JSON files
        sets: Set codes to audit; all sets when None
    """
    files = audit_file_paths(list_booster_files(boosters_dir))
    if sets:
        wanted = {s.lower() for s in sets}
        files = [p for p in files if p.name.rpartition("-")[0].lower() in wanted]

    logger.info("Auditing %d booster files...", len(files))

    async with create_http_client() as client:
        return await run_audit(files, ScryfallClient(client))


def print_issue(issue: AuditIssue) -> None:
    print(
        f"{issue.set} ({issue.name}) - {len(issue.cards)} SUSPICIOUS "
        f"({issue.filtered_count} filtered) [ranges: {', '.join(issue.ranges)}]:"
    )
    for card in issue.cards:
        tags = f" [{card.tags}]" if card.tags else ""
        print(f"  CN {card.cn} {card.name} ({card.rarity}){tags}")
    print()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for the range audit."""
    parser = argparse.ArgumentParser(description="Audit booster CN ranges against Scryfall")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=settings.data_dir,
        help="Directory containing boosters/ (default: %(default)s)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write results (default: <data-dir>/audit-results.json)",
    )
    parser.add_argument(
        "--sets",
        nargs="+",
        default=None,
        help="Only audit these set codes (e.g., dsk blb)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("Filtering out known collector-exclusive treatments\n")
    summary = asyncio.run(run_range_audit(args.data_dir / "boosters", args.sets))

    for issue in summary.issues:
        print_issue(issue)
    for finding in summary.report.errors:
        print(f"ERROR {finding}")

    print("\nDone.")
    print(f"{summary.total_suspicious} suspicious cards outside ranges (need review)")
    print(f"{summary.total_filtered} cards filtered as likely collector-exclusive")

    output = args.output or args.data_dir / "audit-results.json"
    write_audit_results(summary.issues, output)
    print(f"\nDetailed results written to {output}")
    return summary.report.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
