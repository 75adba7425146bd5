import inspect
import pytest
from httpx import AsyncClient, ASGITransport

from globaledge.main import app
from globaledge.core import redis as redis_module


class InMemoryRedis:
    """Async stand-in for the handful of redis.asyncio calls the service makes."""

    def __init__(self):
        self.store = {}
        self.expiry = {}

    @staticmethod
    def _encode(value):
        if isinstance(value, bytes):
            return value
        return str(value).encode()

    async def ping(self):
        return True

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = self._encode(value)
        if ex is not None:
            self.expiry[key] = ex
        return True

    async def incr(self, key):
        value = int(self.store.get(key, b"0")) + 1
        self.store[key] = self._encode(value)
        return value

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if key in self.store:
                del self.store[key]
                self.expiry.pop(key, None)
                removed += 1
        return removed

    async def close(self):
        pass


class BrokenRedis(InMemoryRedis):

    async def get(self, key):
        raise ConnectionError("redis went away")

    async def set(self, key, value, ex=None):
        raise ConnectionError("redis went away")


@pytest.fixture
def fake_redis(monkeypatch):
    fake = InMemoryRedis()
    monkeypatch.setattr(redis_module, "redis", fake)
    return fake


@pytest.fixture
def broken_redis(monkeypatch):
    broken = BrokenRedis()
    monkeypatch.setattr(redis_module, "redis", broken)
    return broken


@pytest.fixture
def no_redis(monkeypatch):
    monkeypatch.setattr(redis_module, "redis", None)


@pytest.fixture
async def test_client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def parcel_request_data():
    return {
        "service_type": "parcel",
        "route": {"from": "Brussels, Belgium", "to": "London, United Kingdom"},
        "parcel": {
            "weight_kg": 2.5,
            "length_cm": 20,
            "width_cm": 15,
            "height_cm": 10,
            "level": "express",
        },
    }


@pytest.fixture
def freight_request_data():
    return {
        "service_type": "freight",
        "route": {"from": "Rotterdam, Netherlands", "to": "Lagos, Nigeria"},
        "freight": {
            "mode": "air",
            "pallets": 2,
            "weight_kg_per_pallet": 100,
            "length_cm": 100,
            "width_cm": 100,
            "height_cm": 100,
        },
    }


@pytest.fixture
def valid_draft_data(parcel_request_data):
    return {
        "shipment": parcel_request_data,
        "recipient_email": "ada@example.com",
        "recipient_address": "10 Downing Street, London",
        "contact": {
            "shipper_name": "Jan Peeters",
            "shipper_email": "jan@example.be",
            "shipper_phone": "+32 2 555 0101",
            "recipient_name": "Ada Lovelace",
            "recipient_phone": "+44 20 7946 0000",
        },
        "contents": "Documents",
        "declared_value": 40,
    }


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "drafts: marks tests related to booking drafts and receipts"
    )
    config.addinivalue_line(
        "markers", "rate_limit: marks tests related to rate limiting"
    )
    config.addinivalue_line(
        "markers", "idempotency: marks tests related to idempotency"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to handle asyncio tests
    """
    for item in items:
        if inspect.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)
