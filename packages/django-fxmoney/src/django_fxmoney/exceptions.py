"""Custom exceptions for django-fxmoney."""


class FxMoneyError(Exception):
    """Base exception for currency errors."""
    pass


class UnknownCurrency(FxMoneyError, ValueError):
    """Raised when a currency code is outside the supported set."""

    def __init__(self, code):
        self.code = code
        super().__init__(f"Unsupported currency: {code!r}")


class RatesUnavailable(FxMoneyError):
    """Raised when no usable rate snapshot exists for a conversion."""
    pass


class RateProviderError(FxMoneyError):
    """Raised when the exchange rate provider cannot be reached or answers badly."""
    pass


class CurrencyMismatchError(FxMoneyError, ValueError):
    """Raised when attempting operations between different currencies."""
    pass
