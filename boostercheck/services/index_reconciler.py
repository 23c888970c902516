"""
Index reconciliation.

Cross-checks the index manifest against the booster files on disk and
the booster documents against each other:

1. Every indexed (set, type) has a file; every file is indexed.
2. A set's collector booster covers everything its limited booster can
   open (bonus sheets and the basic-land window excluded).
3. Sets from the collector-booster era list a collector booster, and a
   collector booster never stands alone.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from boostercheck.config import COLLECTOR_ERA_SETS, LIMITED_BOOSTER_TYPES, settings
from boostercheck.models.report import ValidationReport
from boostercheck.parsers.booster_files import DocumentLoadError, booster_file_name, load_json
from boostercheck.services.pool_membership import main_set_numbers

logger = logging.getLogger(__name__)

INDEX_FILE_NAME = "index.json"

DocumentKey = tuple[str, str]


def load_index(index_path: Path) -> tuple[dict[str, list[Any]] | None, ValidationReport]:
    """
    Load the manifest's set -> booster types mapping.

    Returns:
        (boosters mapping or None, report with any load errors)
    """
    report = ValidationReport()
    try:
        data = load_json(index_path)
    except DocumentLoadError as e:
        report.error(INDEX_FILE_NAME, f"Invalid JSON - {e.reason}")
        return None, report

    boosters = data.get("boosters") if isinstance(data, Mapping) else None
    if not isinstance(boosters, Mapping):
        report.error(INDEX_FILE_NAME, 'Missing or invalid "boosters" object')
        return None, report

    return dict(boosters), report


def _typed_entries(index: Mapping[str, Any]) -> Iterable[tuple[str, list[Any]]]:
    for set_code, types in index.items():
        if isinstance(types, list):
            yield set_code, types


def check_index_files(index: Mapping[str, Any], present_files: Iterable[str]) -> ValidationReport:
    """
    Check the manifest and the file listing agree.

    An indexed file that does not exist is an error; a file the index
    does not list is only a warning.
    """
    report = ValidationReport()
    present = set(present_files)
    indexed: set[str] = set()

    for set_code, types in index.items():
        if not isinstance(types, list):
            report.error(INDEX_FILE_NAME, f'"{set_code}" should have an array of types')
            continue
        for booster_type in types:
            file_name = booster_file_name(set_code, booster_type)
            indexed.add(file_name)
            if file_name not in present:
                report.error(
                    INDEX_FILE_NAME, f'References "{file_name}" but file doesn\'t exist'
                )

    for file_name in sorted(present - indexed):
        report.warning(file_name, f"Not listed in {INDEX_FILE_NAME}")

    return report


def pick_limited_type(types: Iterable[Any]) -> str | None:
    """The limited-pool booster type to compare against, by priority."""
    available = set(t for t in types if isinstance(t, str))
    for booster_type in LIMITED_BOOSTER_TYPES:
        if booster_type in available:
            return booster_type
    return None


def find_missing_numbers(limited: Any, collector: Any) -> set[int]:
    """Main-set collector numbers the limited booster has and the collector booster lacks."""
    return main_set_numbers(limited) - main_set_numbers(collector)


def check_collector_superset(
    set_code: str,
    limited_type: str,
    limited: Any,
    collector: Any,
    basic_land_range: tuple[int, int] | None = None,
) -> ValidationReport:
    """
    Check one set's collector booster is a superset of its limited booster.

    Args:
        set_code: Set being checked
        limited_type: Booster type of `limited` (draft, play or set)
        limited: Limited-pool booster document
        collector: Collector booster document
        basic_land_range: Inclusive window; a gap that lies entirely inside
            it is assumed to be basic lands and not reported

    Returns:
        Report with at most one warning for the set
    """
    report = ValidationReport()
    if basic_land_range is None:
        basic_land_range = (settings.basic_land_min, settings.basic_land_max)

    missing = find_missing_numbers(limited, collector)
    if not missing:
        return report

    low, high = min(missing), max(missing)
    if basic_land_range[0] <= low and high <= basic_land_range[1]:
        logger.debug("%s: ignoring missing CNs %d-%d as basic lands", set_code, low, high)
        return report

    report.warning(
        set_code, f"{limited_type.capitalize()} CNs {low}-{high} not in collector booster"
    )
    return report


def check_collector_supersets(
    index: Mapping[str, Any],
    documents: Mapping[DocumentKey, Any],
    basic_land_range: tuple[int, int] | None = None,
) -> ValidationReport:
    """
    Run the superset check for every set with a collector and a limited booster.

    Args:
        index: Manifest mapping set code -> booster types
        documents: Loaded documents keyed by (set code, booster type).
            Pairs without a loaded document on both sides are skipped.
    """
    report = ValidationReport()

    for set_code, types in _typed_entries(index):
        if "collector" not in types:
            continue
        limited_type = pick_limited_type(types)
        if limited_type is None:
            continue

        collector = documents.get((set_code, "collector"))
        limited = documents.get((set_code, limited_type))
        if collector is None or limited is None:
            continue

        report.merge(
            check_collector_superset(set_code, limited_type, limited, collector, basic_land_range)
        )

    return report


def check_booster_type_coverage(
    index: Mapping[str, Any],
    collector_era_sets: Iterable[str] = COLLECTOR_ERA_SETS,
) -> ValidationReport:
    """Warn about collector-era sets without a collector booster, and lone collector boosters."""
    report = ValidationReport()
    typed = dict(_typed_entries(index))

    for set_code in collector_era_sets:
        types = typed.get(set_code)
        if types is not None and "collector" not in types:
            report.warning(set_code, "Modern set missing collector booster file")

    for set_code, types in typed.items():
        if "collector" in types and pick_limited_type(types) is None:
            report.warning(set_code, "Has collector booster but no draft/play/set booster")

    return report


def reconcile_index(
    index: Mapping[str, Any],
    documents: Mapping[DocumentKey, Any],
    present_files: Iterable[str],
    basic_land_range: tuple[int, int] | None = None,
) -> ValidationReport:
    """Run all three index checks and merge their findings."""
    report = check_index_files(index, present_files)
    report.merge(check_collector_supersets(index, documents, basic_land_range))
    report.merge(check_booster_type_coverage(index))
    return report
