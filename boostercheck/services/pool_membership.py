"""
Pool membership.

Answers "can this collector number come out of this booster?" for
arbitrary, possibly malformed documents. Missing or empty structures
mean "not found", never an exception: callers ask about card numbers
that may not exist in the dataset at all.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from boostercheck.models.collector_range import expand_ranges, range_contains, try_parse_range


def _slots(document: Any) -> list[Any]:
    if not isinstance(document, Mapping):
        return []
    slots = document.get("slots")
    return slots if isinstance(slots, list) else []


def iter_pool_ranges(document: Any, include_bonus: bool = True) -> Iterator[Any]:
    """
    Yield every range string declared in a document's pools.

    Args:
        document: Booster document (any shape)
        include_bonus: If False, slots tagged with bonusSet are skipped
    """
    for slot in _slots(document):
        if not isinstance(slot, Mapping):
            continue
        if not include_bonus and slot.get("bonusSet"):
            continue
        pool = slot.get("pool")
        if not isinstance(pool, Mapping):
            continue
        for ranges in pool.values():
            if isinstance(ranges, list):
                yield from ranges


def is_in_any_pool(document: Any, collector_number: Any) -> bool:
    """Check if a collector number appears in any slot's pool."""
    return any(range_contains(r, collector_number) for r in iter_pool_ranges(document))


def unique_ranges(document: Any) -> list[str]:
    """Deduplicated range strings, in first-seen order."""
    seen: dict[str, None] = {}
    for r in iter_pool_ranges(document):
        if isinstance(r, str):
            seen.setdefault(r, None)
    return list(seen)


def main_set_numbers(document: Any) -> set[int]:
    """Every collector number in the document's non-bonus pools."""
    return expand_ranges(iter_pool_ranges(document, include_bonus=False))


def max_collector_number(document: Any) -> int:
    """Highest collector number in the non-bonus pools, 0 if none."""
    highest = 0
    for r in iter_pool_ranges(document, include_bonus=False):
        parsed = try_parse_range(r)
        if parsed is not None and parsed.end > highest:
            highest = parsed.end
    return highest
