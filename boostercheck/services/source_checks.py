"""
Optional network checks run by the validator.

Both passes cache per run: source links are checked once per URL, and
Scryfall set metadata is fetched once per set code.
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

import httpx

from boostercheck.config import settings
from boostercheck.models.card import ScryfallSet
from boostercheck.models.report import ValidationReport
from boostercheck.services.pool_membership import max_collector_number
from boostercheck.services.scryfall_client import (
    ScryfallClient,
    ScryfallError,
    UrlCheckResult,
    check_url,
)

logger = logging.getLogger(__name__)

NamedDocument = tuple[str, dict[str, Any]]


async def check_source_urls(
    documents: Iterable[NamedDocument],
    client: httpx.AsyncClient,
    timeout: float | None = None,
    request_delay: float | None = None,
) -> ValidationReport:
    """
    Check every document's source link is reachable.

    Args:
        documents: (file name, document) pairs
        client: HTTP client for HEAD requests
        timeout: Per-request timeout, defaults to settings.url_timeout
        request_delay: Pause between requests, defaults to settings.request_delay

    Returns:
        Warnings for unreachable sources, infos for reachable ones
    """
    report = ValidationReport()
    delay = settings.request_delay if request_delay is None else request_delay
    cache: dict[str, UrlCheckResult] = {}

    for file_name, document in documents:
        source = document.get("source")
        if not source or not isinstance(source, str):
            continue

        result = cache.get(source)
        if result is None:
            if cache and delay > 0:
                await asyncio.sleep(delay)
            result = await check_url(client, source, timeout)
            cache[source] = result

        if result.ok:
            report.info(file_name, "Source URL OK")
        else:
            logger.warning("%s: source %s unreachable (%s)", file_name, source, result.status_label)
            report.warning(file_name, f"Source URL unreachable ({result.status_label})")

    return report


async def check_scryfall_card_counts(
    documents: Iterable[NamedDocument], scryfall: ScryfallClient
) -> ValidationReport:
    """
    Check no document's highest collector number exceeds Scryfall's card count.

    A set Scryfall cannot provide is a warning for that file only.
    """
    report = ValidationReport()
    cache: dict[str, ScryfallSet] = {}

    for file_name, document in documents:
        set_code = str(document.get("set") or "")
        if not set_code:
            # Missing set code is already reported by the schema check
            continue

        set_data = cache.get(set_code)
        if set_data is None:
            await scryfall.pause()
            try:
                set_data = await scryfall.get_set(set_code)
            except ScryfallError as e:
                logger.warning("Could not fetch Scryfall set %s: %s", set_code, e)
                set_data = None
            if set_data is None:
                report.warning(file_name, f"Could not fetch Scryfall data for set {set_code}")
                continue
            cache[set_code] = set_data

        max_cn = max_collector_number(document)
        if max_cn > set_data.card_count:
            report.error(
                file_name, f"Max CN {max_cn} exceeds Scryfall card_count {set_data.card_count}"
            )
        else:
            report.info(file_name, f"Max CN {max_cn} within Scryfall count {set_data.card_count}")

    return report
