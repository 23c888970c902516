"""Booster data models."""

from boostercheck.models.card import AuditIssue, ScryfallCard, ScryfallSet, SuspiciousCard
from boostercheck.models.collector_range import (
    CollectorRange,
    RangeErrorKind,
    RangeParseError,
    collector_number_value,
    expand_ranges,
    parse_range,
    range_contains,
    try_parse_range,
)
from boostercheck.models.report import Finding, Severity, ValidationReport

__all__ = [
    "AuditIssue",
    "CollectorRange",
    "Finding",
    "RangeErrorKind",
    "RangeParseError",
    "ScryfallCard",
    "ScryfallSet",
    "Severity",
    "SuspiciousCard",
    "ValidationReport",
    "collector_number_value",
    "expand_ranges",
    "parse_range",
    "range_contains",
    "try_parse_range",
]
