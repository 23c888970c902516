"""
Collector number ranges.

A range is an inclusive interval of collector numbers written either as
"N" (a single card) or "N-M". Pools list ranges per treatment, so every
membership question in the validator eventually lands here.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

_RANGE_PATTERN = re.compile(r"([0-9]+)(?:-([0-9]+))?")

# Scryfall collector numbers can carry suffixes ("123a", "280★")
_LEADING_NUMBER = re.compile(r"\s*([0-9]+)")

MIN_COLLECTOR_NUMBER = 1


class RangeErrorKind(str, Enum):
    """Classification of range defects."""

    INVALID_FORMAT = "invalid_format"
    INVERTED = "inverted"
    BELOW_MINIMUM = "below_minimum"


class RangeParseError(ValueError):
    """Raised when a range string is not a valid collector number range."""

    def __init__(self, text: Any, kind: RangeErrorKind, reason: str) -> None:
        self.text = text
        self.kind = kind
        self.reason = reason
        super().__init__(f"Invalid range {text!r}: {reason}")


@dataclass(frozen=True)
class CollectorRange:
    """An inclusive interval of collector numbers."""

    start: int
    end: int

    def __str__(self) -> str:
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}-{self.end}"

    def __len__(self) -> int:
        return max(0, self.end - self.start + 1)

    def contains(self, collector_number: Any) -> bool:
        """Check membership. Malformed collector numbers are never members."""
        value = collector_number_value(collector_number)
        if value is None:
            return False
        return self.start <= value <= self.end

    def __contains__(self, collector_number: Any) -> bool:
        return self.contains(collector_number)

    def numbers(self) -> range:
        return range(self.start, self.end + 1)


def collector_number_value(collector_number: Any) -> int | None:
    """
    Extract the integer part of a collector number.

    Args:
        collector_number: An int, or a string such as "42", "123a" or "280★"

    Returns:
        The leading integer, or None if there is none
    """
    if isinstance(collector_number, bool):
        return None
    if isinstance(collector_number, int):
        return collector_number
    if isinstance(collector_number, float):
        return int(collector_number) if collector_number.is_integer() else None
    if not isinstance(collector_number, str):
        return None

    match = _LEADING_NUMBER.match(collector_number)
    if not match:
        return None
    return int(match.group(1))


def parse_range(text: Any) -> CollectorRange:
    """
    Parse a range string.

    Args:
        text: "N" or "N-M", decimal digits only

    Returns:
        The parsed CollectorRange

    Raises:
        RangeParseError: With kind INVALID_FORMAT for unparseable text,
            INVERTED when start > end, BELOW_MINIMUM when start < 1
    """
    if not isinstance(text, str):
        raise RangeParseError(text, RangeErrorKind.INVALID_FORMAT, "not a string")

    match = _RANGE_PATTERN.fullmatch(text)
    if not match:
        raise RangeParseError(text, RangeErrorKind.INVALID_FORMAT, "expected 'N' or 'N-M'")

    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) is not None else start

    if start > end:
        raise RangeParseError(text, RangeErrorKind.INVERTED, "start > end")
    if start < MIN_COLLECTOR_NUMBER:
        raise RangeParseError(text, RangeErrorKind.BELOW_MINIMUM, "starts below 1")

    return CollectorRange(start=start, end=end)


def try_parse_range(text: Any) -> CollectorRange | None:
    """Parse a range string, returning None instead of raising."""
    try:
        return parse_range(text)
    except RangeParseError:
        return None


def range_contains(text: Any, collector_number: Any) -> bool:
    """Check whether a range string contains a collector number."""
    parsed = try_parse_range(text)
    if parsed is None:
        return False
    return parsed.contains(collector_number)


def expand_ranges(ranges: Iterable[str | CollectorRange]) -> set[int]:
    """
    Enumerate every collector number covered by a group of ranges.

    Only for superset comparisons; membership tests should use
    CollectorRange.contains, which does not enumerate.
    Unparseable ranges contribute nothing.
    """
    numbers: set[int] = set()
    for item in ranges:
        parsed = item if isinstance(item, CollectorRange) else try_parse_range(item)
        if parsed is not None:
            numbers.update(parsed.numbers())
    return numbers
