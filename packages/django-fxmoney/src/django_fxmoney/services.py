"""Service functions for django-fxmoney.

Provides:
- get_rates: The current rate snapshot (memory cache, database, provider)
- refresh_rates: Fetch a snapshot from the provider and store it
- clear_rate_cache: Drop the in-process snapshot cache
- convert_amount / convert: Change the currency of an amount

Rates are never invented: when no snapshot can be found, conversions
between different currencies raise RatesUnavailable.
"""

import logging
import threading
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

from django.utils import timezone

from . import conf
from .currencies import validate_currency
from .exceptions import RateProviderError, RatesUnavailable
from .models import ExchangeRateSnapshot
from .money import Money
from .providers import OpenERApiProvider, RateProvider
from .rates import RateSnapshot

logger = logging.getLogger(__name__)


# base currency -> snapshot
_rate_cache = {}
_rate_cache_lock = threading.Lock()


def clear_rate_cache() -> None:
    """Forget every cached snapshot; the next get_rates() reads the database."""
    with _rate_cache_lock:
        _rate_cache.clear()


def _is_fresh(fetched_at) -> bool:
    return timezone.now() - fetched_at < timedelta(seconds=conf.cache_seconds())


def _cache_get(base: str) -> Optional[RateSnapshot]:
    with _rate_cache_lock:
        snapshot = _rate_cache.get(base)
    # Age counts from the provider fetch, not from when the entry was cached.
    if snapshot is None or not _is_fresh(snapshot.fetched_at):
        return None
    return snapshot


def _cache_put(snapshot: RateSnapshot) -> None:
    with _rate_cache_lock:
        _rate_cache[snapshot.base] = snapshot


def default_provider() -> RateProvider:
    return OpenERApiProvider(url=conf.rates_url(), timeout=conf.http_timeout())


def refresh_rates(provider: Optional[RateProvider] = None, base: Optional[str] = None) -> RateSnapshot:
    """
    Fetch the current rates and store them as the (base, date) snapshot.

    Args:
        provider: Rate source (defaults to the configured OpenERApiProvider)
        base: Base currency (defaults to FXMONEY_BASE_CURRENCY)

    Returns:
        The freshly fetched RateSnapshot

    Raises:
        RateProviderError: If the provider fails
    """
    base = validate_currency(base or conf.base_currency())
    provider = provider or default_provider()

    snapshot = provider.fetch(base)
    ExchangeRateSnapshot.objects.update_or_create(
        base=snapshot.base,
        date=snapshot.date,
        defaults={
            "rates": {code: str(value) for code, value in snapshot.rates.items()},
            "fetched_at": snapshot.fetched_at,
            "source": snapshot.source,
        },
    )
    _cache_put(snapshot)
    logger.info(
        "Stored %s exchange rates for %s (%d currencies)",
        snapshot.base, snapshot.date, len(snapshot.rates),
    )
    return snapshot


def get_rates(base: Optional[str] = None) -> RateSnapshot:
    """
    Return the current rate snapshot for a base currency.

    Lookup order: in-process cache, a fresh database snapshot, the provider
    (when FXMONEY_AUTO_REFRESH is on), then the latest database snapshot
    even if stale (marked stale=True).

    Raises:
        RatesUnavailable: If no snapshot exists anywhere
    """
    base = validate_currency(base or conf.base_currency())

    cached = _cache_get(base)
    if cached is not None:
        return cached

    row = ExchangeRateSnapshot.objects.for_base(base).latest_first().first()
    if row is not None and _is_fresh(row.fetched_at):
        snapshot = row.to_snapshot()
        _cache_put(snapshot)
        return snapshot

    if conf.auto_refresh():
        try:
            return refresh_rates(base=base)
        except RateProviderError as e:
            logger.warning("Automatic exchange rate refresh failed: %s", e)

    if row is not None:
        logger.warning(
            "Using stale %s exchange rates from %s (fetched %s)",
            base, row.date, row.fetched_at.isoformat(),
        )
        return row.to_snapshot().as_stale()

    raise RatesUnavailable(f"No {base} exchange rate snapshot is available")


def to_decimal(value) -> Decimal:
    """
    Coerce a number or numeric string to Decimal (floats go through str).

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Not an amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Not an amount: {value!r}")
    return amount


def convert_amount(
    amount,
    from_currency: str,
    to_currency: str,
    rates: Optional[RateSnapshot] = None,
) -> Decimal:
    """
    Convert an amount between two supported currencies.

    Same-currency conversion returns the amount unchanged without looking
    at any snapshot. Otherwise the result is amount * rates[to] /
    rates[from] at full Decimal precision; round with Money.quantized().

    Raises:
        UnknownCurrency: If either code is not supported
        RatesUnavailable: If no snapshot (or no rate for a code) exists
    """
    from_currency = validate_currency(from_currency)
    to_currency = validate_currency(to_currency)
    amount = to_decimal(amount)

    if from_currency == to_currency:
        return amount

    if rates is None:
        rates = get_rates()
    return amount * rates.factor(from_currency, to_currency)


def convert(money: Money, to_currency: str, rates: Optional[RateSnapshot] = None) -> Money:
    """Convert a Money value into another currency (unrounded)."""
    amount = convert_amount(money.amount, money.currency, to_currency, rates=rates)
    return Money(amount, to_currency)
