"""Summing amounts held in mixed currencies."""

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Iterable, Optional

from . import conf
from .currencies import is_supported, validate_currency
from .exceptions import UnknownCurrency
from .money import Money
from .rates import RateSnapshot
from .services import convert_amount, get_rates, to_decimal

logger = logging.getLogger(__name__)


def _amount_and_currency(item):
    """Read (amount, currency) from a Money, a pair, a dict or a record."""
    if isinstance(item, Money):
        return item.amount, item.currency
    if isinstance(item, (tuple, list)):
        if len(item) != 2:
            raise ValueError(f"Expected an (amount, currency) pair, got {item!r}")
        amount, currency = item
    elif isinstance(item, Mapping):
        amount = item.get("amount", item.get("price"))
        currency = item.get("currency")
    else:
        amount = getattr(item, "amount", None)
        if amount is None:
            amount = getattr(item, "price", None)
        currency = getattr(item, "currency", None)

    if amount is None:
        raise ValueError(f"Item has no amount: {item!r}")
    # Records saved without a currency are in the default currency.
    return amount, currency or conf.default_currency()


def _supported_items(items: Iterable, on_unknown: Optional[str]):
    policy = on_unknown or conf.unknown_currency_policy()
    for item in items:
        amount, currency = _amount_and_currency(item)
        if not is_supported(currency):
            if policy == "skip":
                logger.warning("Skipping amount %s in unsupported currency %r", amount, currency)
                continue
            raise UnknownCurrency(currency)
        yield amount, str(currency)


def aggregate(
    items: Iterable,
    display_currency: str,
    rates: Optional[RateSnapshot] = None,
    on_unknown: Optional[str] = None,
) -> Money:
    """
    Convert every item to the display currency, then sum.

    Each item is converted on its own before summing. The snapshot is only
    loaded when some item is in a different currency. The result is
    quantized to the display currency's decimals.

    Args:
        items: Money values, (amount, currency) pairs, dicts or records with
            amount/price and currency
        display_currency: Currency of the result
        rates: Snapshot to use (defaults to get_rates())
        on_unknown: "raise" or "skip"; defaults to FXMONEY_UNKNOWN_CURRENCY_POLICY

    Raises:
        UnknownCurrency: For an unsupported item currency under the raise policy
        RatesUnavailable: If a conversion is needed and no snapshot exists
    """
    display_currency = validate_currency(display_currency)
    total = Decimal("0")
    for amount, currency in _supported_items(items, on_unknown):
        if currency != display_currency and rates is None:
            rates = get_rates()
        total += convert_amount(amount, currency, display_currency, rates=rates)
    return Money(total, display_currency).quantized()


def totals_by_currency(items: Iterable, on_unknown: Optional[str] = None) -> dict:
    """Unconverted sums per currency, as {code: Money}."""
    totals = {}
    for amount, currency in _supported_items(items, on_unknown):
        totals[currency] = totals.get(currency, Money.zero(currency)) + Money(to_decimal(amount), currency)
    return totals
