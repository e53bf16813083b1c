"""Django FxMoney - Currency conversion and aggregation over dated rate snapshots."""

__version__ = "0.1.0"

from django_fxmoney.currencies import Currency, SUPPORTED_CURRENCIES
from django_fxmoney.exceptions import (
    CurrencyMismatchError,
    FxMoneyError,
    RateProviderError,
    RatesUnavailable,
    UnknownCurrency,
)
from django_fxmoney.money import Money
from django_fxmoney.rates import RateSnapshot

__all__ = [
    "Currency",
    "SUPPORTED_CURRENCIES",
    "Money",
    "RateSnapshot",
    "ExchangeRateSnapshot",
    "convert_amount",
    "convert",
    "get_rates",
    "aggregate",
    "format_currency",
    "FxMoneyError",
    "UnknownCurrency",
    "RatesUnavailable",
    "RateProviderError",
    "CurrencyMismatchError",
]


def __getattr__(name):
    """Lazy import the ORM-backed parts to avoid AppRegistryNotReady errors."""
    if name == "ExchangeRateSnapshot":
        from django_fxmoney.models import ExchangeRateSnapshot
        return ExchangeRateSnapshot
    if name in ("convert_amount", "convert", "get_rates"):
        from django_fxmoney import services
        return getattr(services, name)
    if name == "aggregate":
        from django_fxmoney.aggregation import aggregate
        return aggregate
    if name == "format_currency":
        from django_fxmoney.formatting import format_currency
        return format_currency
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
