"""
Range audit against Scryfall.

Scryfall flags every printing that can be opened in a booster. Any such
card outside a limited booster's declared ranges is either a
collector-exclusive treatment (filtered by tag) or a gap in our data
(suspicious, reported for manual review).

The exclusion tables are hand-curated. New promo types and frame effects
appear with most releases, so an unknown treatment shows up here as
suspicious until it is added.
"""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from boostercheck.models.card import AuditIssue, ScryfallCard, SuspiciousCard
from boostercheck.models.collector_range import collector_number_value, range_contains
from boostercheck.models.report import ValidationReport
from boostercheck.parsers.booster_files import DocumentLoadError, load_json
from boostercheck.services.pool_membership import unique_ranges
from boostercheck.services.scryfall_client import ScryfallClient, ScryfallError

logger = logging.getLogger(__name__)

# Promo types never found in play or draft boosters
EXCLUDED_PROMO_TYPES = frozenset({
    "fracturefoil", "texturedfoil", "ripplefoil", "halofoil",
    "confettifoil", "galaxyfoil", "surgefoil", "raisedfoil",
    "headliner", "serialized", "buyabox", "bundle",
    "planeswalkerdeck", "starterdeck", "prerelease",
    "datestamped", "playerrewards", "gameday", "release",
    "promostamped", "startercollection", "beginnerbox",
    "promopack", "themepack", "brawldeck", "playtest",
    "manafoil", "invisibleink",
})  # fmt: skip

# Frame effects that only appear in collector boosters
EXCLUDED_FRAME_EFFECTS = frozenset({"extendedart", "inverted", "etched"})

AUDITED_SUFFIXES = ("-play.json", "-draft.json")


def is_likely_collector_exclusive(
    card: ScryfallCard,
    promo_types: frozenset[str] = EXCLUDED_PROMO_TYPES,
    frame_effects: frozenset[str] = EXCLUDED_FRAME_EFFECTS,
) -> bool:
    """Check if a card carries a tag known to be collector-booster only."""
    if any(p in promo_types for p in card.promo_types):
        return True
    return any(f in frame_effects for f in card.frame_effects)


def is_outside_ranges(card: ScryfallCard, ranges: Iterable[str]) -> bool:
    """
    Check if a card falls outside every range.

    Cards without a numeric collector number are never outside.
    """
    if collector_number_value(card.collector_number) is None:
        return False
    return not any(range_contains(r, card.collector_number) for r in ranges)


@dataclass
class AuditOutcome:
    """Cards outside the declared ranges, split by exclusion tag."""

    suspicious: list[ScryfallCard] = field(default_factory=list)
    filtered: list[ScryfallCard] = field(default_factory=list)

    def to_issue(self, set_code: str, set_name: str, ranges: list[str]) -> AuditIssue | None:
        """Issue record for the results file, or None when nothing is suspicious."""
        if not self.suspicious:
            return None
        return AuditIssue(
            set=set_code.upper(),
            name=set_name,
            ranges=ranges,
            cards=[SuspiciousCard.from_card(c) for c in self.suspicious],
            filtered_count=len(self.filtered),
        )


def partition_cards(cards: Iterable[ScryfallCard], ranges: list[str]) -> AuditOutcome:
    """Split Scryfall booster cards into ignored, filtered and suspicious."""
    outcome = AuditOutcome()
    for card in cards:
        if not is_outside_ranges(card, ranges):
            continue
        if is_likely_collector_exclusive(card):
            outcome.filtered.append(card)
        else:
            outcome.suspicious.append(card)
    return outcome


@dataclass
class AuditSummary:
    """Result of auditing many booster files."""

    issues: list[AuditIssue] = field(default_factory=list)
    report: ValidationReport = field(default_factory=ValidationReport)
    total_suspicious: int = 0
    total_filtered: int = 0
    audited: int = 0


async def audit_document(
    document: dict[str, Any], scryfall: ScryfallClient
) -> tuple[AuditOutcome, list[str]] | None:
    """
    Audit one booster document.

    Returns:
        (outcome, declared ranges), or None when the document declares no
        ranges or Scryfall has no booster cards for the set

    Raises:
        ScryfallError: If fetching the set's cards fails
    """
    ranges = unique_ranges(document)
    if not ranges:
        return None

    cards = await scryfall.search_booster_cards(str(document.get("set", "")))
    if not cards:
        return None

    return partition_cards(cards, ranges), ranges


async def run_audit(files: Iterable[Path], scryfall: ScryfallClient) -> AuditSummary:
    """
    Audit booster files one after another.

    A file that cannot be read or a set whose fetch fails is recorded as
    an error and skipped; the rest of the run continues.
    """
    summary = AuditSummary()

    for path in files:
        try:
            document = load_json(path)
        except DocumentLoadError as e:
            summary.report.error(path.name, f"Invalid JSON - {e.reason}")
            continue
        if not isinstance(document, dict):
            summary.report.error(path.name, "Top-level value should be an object")
            continue

        set_code = str(document.get("set", ""))
        await scryfall.pause()
        try:
            result = await audit_document(document, scryfall)
        except ScryfallError as e:
            logger.error("%s: error fetching Scryfall cards - %s", set_code, e)
            summary.report.error(set_code or path.name, f"Error fetching Scryfall cards - {e}")
            continue

        summary.audited += 1
        if result is None:
            continue

        outcome, ranges = result
        summary.total_filtered += len(outcome.filtered)
        issue = outcome.to_issue(set_code, str(document.get("setName", "")), ranges)
        if issue is not None:
            summary.total_suspicious += len(issue.cards)
            summary.issues.append(issue)

    return summary


def audit_file_paths(files: Iterable[Path]) -> list[Path]:
    """Keep only play and draft booster files."""
    return [p for p in files if p.name.endswith(AUDITED_SUFFIXES)]


def write_audit_results(issues: list[AuditIssue], output_path: Path) -> Path:
    """Write issues as a JSON array."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump([issue.to_json() for issue in issues], f, indent=2)
    return output_path
