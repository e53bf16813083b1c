"""Pytest configuration for django-fxmoney tests."""

import datetime
from decimal import Decimal

import httpx
import pytest

from django_fxmoney.providers import OpenERApiProvider
from django_fxmoney.rates import RateSnapshot
from django_fxmoney.services import clear_rate_cache

# 1 EUR = 1.1 USD, 1 TRY = 0.03 USD
EUR_PER_USD = Decimal(1) / Decimal("1.1")
TRY_PER_USD = Decimal(1) / Decimal("0.03")


@pytest.fixture(autouse=True)
def empty_rate_cache():
    """Every test starts without cached snapshots."""
    clear_rate_cache()
    yield
    clear_rate_cache()


@pytest.fixture
def rates():
    """A USD-based snapshot covering every supported currency."""
    return RateSnapshot(
        base="USD",
        date=datetime.date(2025, 1, 15),
        rates={
            "USD": 1,
            "EUR": EUR_PER_USD,
            "TRY": TRY_PER_USD,
            "SAR": "3.75",
            "EGP": "49.5",
            "AED": "3.6725",
        },
        fetched_at=datetime.datetime(2025, 1, 15, 8, 0, tzinfo=datetime.timezone.utc),
        source="test",
    )


def open_er_api_payload(**overrides):
    """A successful open.er-api.com response body."""
    payload = {
        "result": "success",
        "base_code": "USD",
        "time_last_update_unix": 1736899200,  # 2025-01-15 00:00 UTC
        "rates": {
            "USD": 1,
            "EUR": 0.9091,
            "TRY": 33.3333,
            "SAR": 3.75,
            "EGP": 49.5,
            "AED": 3.6725,
            "GBP": 0.79,
        },
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def er_api_payload():
    """Builder for provider response bodies."""
    return open_er_api_payload


@pytest.fixture
def make_provider():
    """Build an OpenERApiProvider answering from a canned response."""
    def _make(payload=None, status_code=200):
        requests = []

        def handler(request):
            requests.append(request)
            body = open_er_api_payload() if payload is None else payload
            return httpx.Response(status_code, json=body)

        provider = OpenERApiProvider(transport=httpx.MockTransport(handler))
        provider.requests = requests
        return provider

    return _make
