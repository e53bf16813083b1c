"""Supported currencies and their display metadata."""

from typing import NamedTuple

from django.db import models

from .exceptions import UnknownCurrency


class Currency(models.TextChoices):
    USD = "USD", "US Dollar"
    TRY = "TRY", "Turkish Lira"
    SAR = "SAR", "Saudi Riyal"
    EGP = "EGP", "Egyptian Pound"
    EUR = "EUR", "Euro"
    AED = "AED", "UAE Dirham"


class CurrencyInfo(NamedTuple):
    code: str
    symbol: str
    name: str
    locale: str
    decimals: int


CURRENCY_INFO = {
    "USD": CurrencyInfo("USD", "$", "US Dollar", "en-US", 2),
    "TRY": CurrencyInfo("TRY", "₺", "Turkish Lira", "tr-TR", 2),
    "SAR": CurrencyInfo("SAR", "﷼", "Saudi Riyal", "ar-SA", 2),
    "EGP": CurrencyInfo("EGP", "E£", "Egyptian Pound", "ar-EG", 2),
    "EUR": CurrencyInfo("EUR", "€", "Euro", "de-DE", 2),
    "AED": CurrencyInfo("AED", "د.إ", "UAE Dirham", "ar-AE", 2),
}

SUPPORTED_CURRENCIES = tuple(CURRENCY_INFO)


def is_supported(code) -> bool:
    return isinstance(code, str) and code in CURRENCY_INFO


def validate_currency(code) -> str:
    """
    Return the code if it is a supported currency.

    Codes are matched exactly (upper case ISO 4217).

    Raises:
        UnknownCurrency: If the code is not supported
    """
    if not is_supported(code):
        raise UnknownCurrency(code)
    return str(code)


def currency_info(code) -> CurrencyInfo:
    return CURRENCY_INFO[validate_currency(code)]


def currency_decimals(code) -> int:
    """Minor-unit digits for a code; 2 for codes outside the supported set."""
    return CURRENCY_INFO[code].decimals if is_supported(code) else 2
