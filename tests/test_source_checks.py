import httpx
import pytest
import respx

from boostercheck.services.scryfall_client import RetryPolicy, ScryfallClient
from boostercheck.services.source_checks import check_scryfall_card_counts, check_source_urls


def _doc(set_code: str, source: str | None = None, ranges: tuple[str, ...] = ("1-100",)) -> dict:
    document = {"set": set_code, "slots": [{"pool": {"nonfoil": list(ranges)}}]}
    if source:
        document["source"] = source
    return document


class TestCheckSourceUrls:
    @pytest.mark.asyncio
    @respx.mock
    async def test_caches_by_url(self) -> None:
        ok = respx.head("https://example.com/ok").mock(return_value=httpx.Response(200))
        bad = respx.head("https://example.com/bad").mock(return_value=httpx.Response(404))
        documents = [
            ("a-play.json", _doc("a", "https://example.com/ok")),
            ("a-collector.json", _doc("a", "https://example.com/ok")),
            ("b-play.json", _doc("b", "https://example.com/bad")),
            ("c-play.json", _doc("c")),
        ]

        async with httpx.AsyncClient() as http:
            report = await check_source_urls(documents, http, request_delay=0)

        assert ok.call_count == 1
        assert bad.call_count == 1
        assert [f.subject for f in report.infos] == ["a-play.json", "a-collector.json"]
        assert [str(f) for f in report.warnings] == [
            "b-play.json: Source URL unreachable (404)"
        ]
        assert not report.has_errors

    @pytest.mark.asyncio
    async def test_malformed_source_is_warning(self) -> None:
        documents = [("dsk-play.json", _doc("dsk", "https://exa mple.com:abc/x"))]

        async with httpx.AsyncClient() as http:
            report = await check_source_urls(documents, http, request_delay=0)

        assert [str(f) for f in report.warnings] == [
            "dsk-play.json: Source URL unreachable (error)"
        ]


class TestCheckScryfallCardCounts:
    @pytest.mark.asyncio
    @respx.mock
    async def test_max_cn_against_card_count(self) -> None:
        route = respx.get("https://api.scryfall.com/sets/dsk").mock(
            return_value=httpx.Response(200, json={"code": "dsk", "card_count": 286})
        )
        respx.get("https://api.scryfall.com/sets/zzz").mock(return_value=httpx.Response(404))
        documents = [
            ("dsk-play.json", _doc("dsk", ranges=("1-271",))),
            ("dsk-collector.json", _doc("dsk", ranges=("1-400",))),
            ("zzz-play.json", _doc("zzz")),
        ]

        async with httpx.AsyncClient() as http:
            scryfall = ScryfallClient(http, retry=RetryPolicy(delay=0), request_delay=0)
            report = await check_scryfall_card_counts(documents, scryfall)

        assert route.call_count == 1
        assert [str(f) for f in report.errors] == [
            "dsk-collector.json: Max CN 400 exceeds Scryfall card_count 286"
        ]
        assert [f.subject for f in report.warnings] == ["zzz-play.json"]
        assert [f.subject for f in report.infos] == ["dsk-play.json"]


class TestCardCountFailures:
    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_set_response_is_warning(self) -> None:
        respx.get("https://api.scryfall.com/sets/dsk").mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        async with httpx.AsyncClient() as http:
            scryfall = ScryfallClient(http, retry=RetryPolicy(delay=0), request_delay=0)
            report = await check_scryfall_card_counts([("dsk-play.json", _doc("dsk"))], scryfall)

        assert not report.has_errors
        assert [f.subject for f in report.warnings] == ["dsk-play.json"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_document_without_set_code_is_skipped(self) -> None:
        route = respx.get(url__startswith="https://api.scryfall.com/sets").mock(
            return_value=httpx.Response(200, json={"object": "list", "data": []})
        )
        document = {"slots": [{"pool": {"nonfoil": ["1-100"]}}]}

        async with httpx.AsyncClient() as http:
            scryfall = ScryfallClient(http, retry=RetryPolicy(delay=0), request_delay=0)
            report = await check_scryfall_card_counts([("x-play.json", document)], scryfall)

        assert route.call_count == 0
        assert report.findings == []
