"""Exchange rate providers for django-fxmoney."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

import httpx

from .currencies import SUPPORTED_CURRENCIES, validate_currency
from .exceptions import RateProviderError
from .rates import RateSnapshot

logger = logging.getLogger(__name__)


class RateProvider(ABC):
    """Abstract base class for exchange rate sources."""

    @abstractmethod
    def fetch(self, base: str) -> RateSnapshot:
        """Fetch the current rate table quoted against base."""
        pass


class OpenERApiProvider(RateProvider):
    """
    open.er-api.com provider (free, no API key).

    Payload shape:
        {"result": "success", "base_code": "USD",
         "time_last_update_unix": 1736899200, "rates": {"EUR": 0.91, ...}}
    """

    DEFAULT_URL = "https://open.er-api.com/v6/latest/{base}"

    def __init__(
        self,
        url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.url = url or self.DEFAULT_URL
        self.client = httpx.Client(timeout=timeout, transport=transport)

    def fetch(self, base: str) -> RateSnapshot:
        base = validate_currency(base)
        url = self.url.format(base=base)
        try:
            response = self.client.get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.warning("Exchange rate request to %s failed: %s", url, e)
            raise RateProviderError(f"Rate request failed: {e}") from e
        except ValueError as e:
            raise RateProviderError(f"Rate response is not JSON: {e}") from e

        return self._parse_response(data, base, url)

    def _parse_response(self, data: dict, base: str, url: str) -> RateSnapshot:
        if not isinstance(data, dict) or data.get("result") != "success":
            error = data.get("error-type", "unknown") if isinstance(data, dict) else "malformed"
            raise RateProviderError(f"Rate provider returned an error: {error}")

        raw_rates = data.get("rates")
        if not isinstance(raw_rates, dict):
            raise RateProviderError("Rate provider response has no rates table")

        # Only supported currencies are kept; the base is always exactly 1.
        rates = {
            code: raw_rates[code]
            for code in SUPPORTED_CURRENCIES
            if code in raw_rates and code != base
        }
        rates[base] = 1

        updated = data.get("time_last_update_unix")
        fetched_at = datetime.now(timezone.utc)
        as_of = datetime.fromtimestamp(updated, timezone.utc) if updated else fetched_at

        try:
            return RateSnapshot(
                base=base,
                date=as_of.date(),
                rates=rates,
                fetched_at=fetched_at,
                source=url,
            )
        except ValueError as e:
            raise RateProviderError(str(e)) from e
