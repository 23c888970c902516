"""
Scryfall API access.

All requests go through ScryfallClient.fetch_json, which applies one
retry policy everywhere: rate-limit responses (HTTP 429) are retried
after a pause, 404 means "nothing there" and yields None, and any other
failure raises ScryfallError for the caller to record against the set
or file it was working on.

Requests are issued one at a time with a fixed pause between them.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from boostercheck.config import settings
from boostercheck.models.card import ScryfallCard, ScryfallSet

logger = logging.getLogger(__name__)


class ScryfallError(Exception):
    """Raised when a Scryfall request fails for a reason other than 404."""

    pass


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry for rate-limited requests."""

    max_attempts: int = 3
    delay: float = 1.0

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(max_attempts=settings.retry_attempts, delay=settings.retry_delay)


@dataclass(frozen=True)
class UrlCheckResult:
    """Outcome of a reachability check. status is 0 when no response arrived."""

    url: str
    status: int
    ok: bool
    reason: str = ""

    @property
    def status_label(self) -> str:
        return str(self.status) if self.status else (self.reason or "timeout")


def create_http_client(timeout: float | None = None) -> httpx.AsyncClient:
    """HTTP client configured for Scryfall and source-link checks."""
    return httpx.AsyncClient(
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        follow_redirects=True,
        timeout=timeout if timeout is not None else settings.api_timeout,
    )


class ScryfallClient:
    """Sequential, rate-limited Scryfall client."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str | None = None,
        retry: RetryPolicy | None = None,
        request_delay: float | None = None,
    ) -> None:
        self.client = client
        self.base_url = (base_url or settings.scryfall_api).rstrip("/")
        self.retry = retry or RetryPolicy.from_settings()
        self.request_delay = settings.request_delay if request_delay is None else request_delay

    async def pause(self) -> None:
        """Wait between successive requests."""
        if self.request_delay > 0:
            await asyncio.sleep(self.request_delay)

    async def fetch_json(self, url: str, params: dict[str, str] | None = None) -> Any | None:
        """
        GET a JSON resource.

        Args:
            url: Absolute URL
            params: Optional query parameters

        Returns:
            Parsed JSON body, or None on 404

        Raises:
            ScryfallError: On transport errors, non-success responses,
                or when every attempt was rate limited
        """
        for attempt in range(1, self.retry.max_attempts + 1):
            try:
                response = await self.client.get(url, params=params)
            except httpx.RequestError as e:
                raise ScryfallError(f"Request to {url} failed: {e}") from e

            if response.status_code == 429:
                logger.warning(
                    "Rate limited by Scryfall (attempt %d/%d)", attempt, self.retry.max_attempts
                )
                if attempt < self.retry.max_attempts and self.retry.delay > 0:
                    await asyncio.sleep(self.retry.delay)
                continue

            if response.status_code == 404:
                return None

            try:
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise ScryfallError(f"HTTP {e.response.status_code}") from e

            try:
                return response.json()
            except ValueError as e:
                raise ScryfallError(f"Invalid JSON from {url}: {e}") from e

        raise ScryfallError(f"Rate limited after {self.retry.max_attempts} attempts")

    async def search_booster_cards(self, set_code: str) -> list[ScryfallCard]:
        """
        Fetch every English printing Scryfall flags as appearing in boosters.

        Args:
            set_code: Set code, e.g. "dsk"

        Returns:
            Cards across all result pages; empty if Scryfall finds none

        Raises:
            ScryfallError: If any page fails
        """
        query = f"set:{set_code} booster:true lang:en"
        data = await self.fetch_json(
            f"{self.base_url}/cards/search", params={"q": query, "unique": "prints"}
        )

        cards: list[ScryfallCard] = []
        while data:
            cards.extend(_parse_cards(data.get("data", [])))
            next_page = data.get("next_page")
            if not (data.get("has_more") and next_page):
                break
            await self.pause()
            # Next page URL includes the query
            data = await self.fetch_json(next_page)

        logger.debug("Scryfall returned %d booster cards for %s", len(cards), set_code)
        return cards

    async def get_set(self, set_code: str) -> ScryfallSet | None:
        """Fetch set metadata, or None if Scryfall does not know the set."""
        data = await self.fetch_json(f"{self.base_url}/sets/{set_code}")
        if data is None:
            return None
        try:
            return ScryfallSet.model_validate(data)
        except ValidationError as e:
            raise ScryfallError(f"Unexpected set data for {set_code}: {e}") from e


def _parse_cards(items: list[dict[str, Any]]) -> list[ScryfallCard]:
    cards: list[ScryfallCard] = []
    for item in items:
        try:
            cards.append(ScryfallCard.from_api(item))
        except ValidationError:
            logger.warning("Skipping malformed card record: %s", item.get("id", "<no id>"))
    return cards


async def check_url(
    client: httpx.AsyncClient, url: str, timeout: float | None = None
) -> UrlCheckResult:
    """
    HEAD a URL. 2xx and 3xx responses count as reachable.

    Never raises for network problems; they come back as status 0.
    """
    try:
        response = await client.head(
            url,
            timeout=timeout if timeout is not None else settings.url_timeout,
            follow_redirects=False,
        )
    except httpx.TimeoutException:
        return UrlCheckResult(url=url, status=0, ok=False, reason="timeout")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug("HEAD %s failed: %s", url, e)
        return UrlCheckResult(url=url, status=0, ok=False, reason="error")

    status = response.status_code
    return UrlCheckResult(url=url, status=status, ok=200 <= status < 400)
