"""Per-request viewing context passed explicitly to reporting code."""

from dataclasses import dataclass

from django_fxmoney import conf as fxmoney_conf
from django_fxmoney.currencies import currency_info, validate_currency


def parse_currency(value) -> str:
    """
    Normalize a currency code from request input (query, header or body).

    Raises:
        UnknownCurrency: If the code is not supported
    """
    if isinstance(value, str):
        value = value.strip().upper()
    return validate_currency(value)


@dataclass(frozen=True)
class RequestContext:
    """Who is looking, and in which currency amounts should be shown."""

    user: object
    display_currency: str
    locale: str

    @classmethod
    def from_request(cls, request) -> "RequestContext":
        """
        Build the context for a request.

        The display currency comes from ?currency=, then the
        X-Display-Currency header, then FXMONEY_DEFAULT_CURRENCY.

        Raises:
            UnknownCurrency: If the requested currency is not supported
        """
        requested = (
            request.GET.get("currency")
            or request.headers.get("X-Display-Currency")
            or fxmoney_conf.default_currency()
        )
        currency = parse_currency(requested)
        return cls(
            user=getattr(request, "user", None),
            display_currency=currency,
            locale=currency_info(currency).locale,
        )
