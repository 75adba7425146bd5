"""
Tests for per-client rate limiting on booking
"""

import pytest
from fastapi import HTTPException

from globaledge.core.config import Settings, settings
from globaledge.core.rate_limit import check_rate_limit


class TestRateLimiting:

    def test_rate_limit_defaults(self):
        assert Settings.model_fields["RATE_LIMIT"].default == 100
        assert Settings.model_fields["RATE_LIMIT_WINDOW"].default == 600  # 10 minutes

    @pytest.mark.asyncio
    @pytest.mark.rate_limit
    async def test_first_request_opens_window(self, fake_redis):
        await check_rate_limit("10.0.0.1")
        assert fake_redis.store["rl:10.0.0.1"] == b"1"
        assert fake_redis.expiry["rl:10.0.0.1"] == settings.RATE_LIMIT_WINDOW

    @pytest.mark.asyncio
    @pytest.mark.rate_limit
    async def test_limit_exceeded(self, fake_redis, monkeypatch):
        monkeypatch.setattr(settings, "RATE_LIMIT", 3)
        for _ in range(3):
            await check_rate_limit("10.0.0.2")

        with pytest.raises(HTTPException) as exc_info:
            await check_rate_limit("10.0.0.2")
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    @pytest.mark.rate_limit
    async def test_limits_are_per_client(self, fake_redis, monkeypatch):
        monkeypatch.setattr(settings, "RATE_LIMIT", 1)
        await check_rate_limit("10.0.0.3")
        await check_rate_limit("10.0.0.4")

        with pytest.raises(HTTPException):
            await check_rate_limit("10.0.0.3")

    @pytest.mark.asyncio
    @pytest.mark.rate_limit
    @pytest.mark.integration
    async def test_booking_endpoint_is_rate_limited(self, test_client, fake_redis, monkeypatch):
        monkeypatch.setattr(settings, "RATE_LIMIT", 1)

        first = await test_client.post("/drafts/missing/book", json={})
        assert first.status_code == 404

        second = await test_client.post("/drafts/missing/book", json={})
        assert second.status_code == 429
        assert second.json()["detail"] == "Rate limit exceeded"
