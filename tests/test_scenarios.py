"""
End-to-end scenarios for the estimation pipeline:
payload size formatting, request validation, fetch timeouts, tier
boundaries and repeatability.
"""
import asyncio
from unittest.mock import AsyncMock, patch

import httpx
from sitecarbon.estimation.classifier import EfficiencyTier, classify
from sitecarbon.fetch.base import FetchResult
from sitecarbon.fetch.fetcher import HttpxFetcher
from sitecarbon.services.report import build_report, render_report


class TestScenarios:

    def test_half_megabyte_reports_500_kb(self, stub_fetcher):
        """512000 bytes render as 500.00 KB"""
        report = asyncio.run(build_report("https://example.com", fetcher=stub_fetcher(512000)))
        assert render_report(report).resource_size == "500.00 KB"

    def test_missing_url_parameter(self, client):
        response = client.get("/co2")
        assert response.status_code == 400
        assert response.json() == {"error": "Missing URL parameter."}

    def test_fetch_timeout_leaks_no_report_fields(self, client):
        """A network layer that always times out yields a bare 500 error body"""
        def always_timeout(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        real_init = HttpxFetcher.__init__

        def init_with_timeout_transport(self, **kwargs):
            real_init(self, transport=httpx.MockTransport(always_timeout))

        with patch.object(HttpxFetcher, "__init__", init_with_timeout_transport):
            response = client.get("/co2", params={"url": "https://slow.example.com"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to fetch the website or calculate CO2."
        assert "Timeout" in body["details"]
        assert set(body) == {"error", "details"}

    def test_tier_boundary(self):
        assert classify(0.49) is EfficiencyTier.TIER_1
        assert classify(0.5) is EfficiencyTier.TIER_2

    def test_repeat_requests_match_except_load_time(self, client):
        responses = []
        for elapsed in (120.0, 980.0):
            fetch = AsyncMock(return_value=_result(elapsed))
            with patch.object(HttpxFetcher, "fetch", new=fetch):
                responses.append(client.get("/co2", params={"url": "https://example.com"}).json())

        first, second = responses
        assert first.pop("pageLoadTime") == "0.12 sec"
        assert second.pop("pageLoadTime") == "0.98 sec"
        assert first == second


def _result(elapsed_millis):
    return FetchResult(url="https://example.com", byte_length=734_003, elapsed_millis=elapsed_millis)
