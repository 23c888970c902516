"""
Structural validation of a single booster document.

Checks accumulate: one bad range or slot never hides the next one.
The only early exits are a document that is not an object and a
missing "slots" array, since nothing below them can be checked.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from boostercheck.config import VALID_RARITIES
from boostercheck.models.collector_range import RangeErrorKind, RangeParseError, parse_range
from boostercheck.models.report import ValidationReport
from boostercheck.parsers.booster_files import DocumentLoadError, booster_file_name, load_json

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("set", "setName", "boosterType")

_RANGE_MESSAGES = {
    RangeErrorKind.INVALID_FORMAT: 'invalid range format: "{text}"',
    RangeErrorKind.INVERTED: 'range "{text}" has start > end',
    RangeErrorKind.BELOW_MINIMUM: 'range "{text}" starts below 1',
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_probability(value: Any) -> bool:
    return _is_number(value) and 0 <= value <= 1


def validate_document(data: Any, file_name: str) -> ValidationReport:
    """
    Validate a parsed booster document.

    Args:
        data: Parsed JSON content
        file_name: Name of the file it was read from

    Returns:
        Report with every structural error and warning found
    """
    report = ValidationReport()

    if not isinstance(data, Mapping):
        report.error(file_name, "Top-level value should be an object")
        return report

    # Missing identity fields are reported, but checking continues
    for field_name in REQUIRED_FIELDS:
        if not data.get(field_name):
            report.error(file_name, f'Missing "{field_name}" field')

    slots = data.get("slots")
    if not isinstance(slots, list):
        report.error(file_name, 'Missing or invalid "slots" array')
        return report

    if not data.get("source"):
        report.warning(file_name, 'Missing "source" field')

    expected = booster_file_name(str(data.get("set")), str(data.get("boosterType")))
    if file_name != expected:
        report.error(file_name, f"Filename doesn't match content (expected {expected})")

    seen_names: set[str] = set()
    for i, slot in enumerate(slots):
        _validate_slot(slot, i, file_name, seen_names, report)

    return report


def _validate_slot(
    slot: Any,
    index: int,
    file_name: str,
    seen_names: set[str],
    report: ValidationReport,
) -> None:
    if not isinstance(slot, Mapping):
        report.error(file_name, f"Slot {index} should be an object")
        return

    name = slot.get("name")
    if not isinstance(name, str) or not name:
        name = None
        report.error(file_name, f'Slot {index} missing "name"')
    else:
        if name in seen_names:
            report.warning(file_name, f'Duplicate slot name "{name}"')
        seen_names.add(name)

    label = name or index

    if "count" not in slot:
        report.error(file_name, f'Slot "{label}" missing "count"')
    elif not _is_number(slot["count"]) or slot["count"] < 0:
        report.error(file_name, f'Slot "{label}" count should be a non-negative number')

    pool = slot.get("pool")
    if pool is None:
        report.error(file_name, f'Slot "{label}" missing "pool"')
        return
    if not isinstance(pool, Mapping):
        report.error(file_name, f'Slot "{label}" pool should be an object')
        return

    for treatment, ranges in pool.items():
        if not isinstance(ranges, list):
            report.error(file_name, f'Slot "{label}" pool.{treatment} should be an array')
            continue
        for text in ranges:
            try:
                parse_range(text)
            except RangeParseError as e:
                message = _RANGE_MESSAGES[e.kind].format(text=text)
                report.error(file_name, f'Slot "{label}" {message}')

    rarities = slot.get("rarities")
    if rarities is not None:
        if not isinstance(rarities, list):
            report.error(file_name, f'Slot "{label}" rarities should be an array')
            rarities = None
        else:
            for rarity in rarities:
                if not isinstance(rarity, str) or rarity not in VALID_RARITIES:
                    report.warning(file_name, f'Slot "{label}" unknown rarity "{rarity}"')

    if "mythicRate" in slot:
        if not _is_probability(slot["mythicRate"]):
            report.error(file_name, f'Slot "{label}" mythicRate should be between 0 and 1')
        if not rarities or "mythic" not in rarities:
            report.warning(file_name, f'Slot "{label}" has mythicRate but no mythic rarity')

    if "pullRate" in slot and not _is_probability(slot["pullRate"]):
        report.error(file_name, f'Slot "{label}" pullRate should be between 0 and 1')

    bonus_set = slot.get("bonusSet")
    if bonus_set is not None and not isinstance(bonus_set, str):
        report.error(file_name, f'Slot "{label}" bonusSet should be a string')


def validate_file(path: Path) -> tuple[dict[str, Any] | None, ValidationReport]:
    """
    Load and validate one booster file.

    Returns:
        (document, report). The document is None when the file is not
        valid JSON; that failure is the only finding in the report.
    """
    try:
        data = load_json(path)
    except DocumentLoadError as e:
        report = ValidationReport()
        report.error(path.name, f"Invalid JSON - {e.reason}")
        return None, report

    logger.debug("Validating %s", path.name)
    report = validate_document(data, path.name)
    return (data if isinstance(data, dict) else None), report
