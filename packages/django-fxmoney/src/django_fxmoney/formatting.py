"""Human-readable currency strings."""

from decimal import Decimal, ROUND_HALF_UP

from .currencies import currency_info

# locale -> (group separator, decimal separator, symbol before amount)
LOCALE_FORMATS = {
    "en-US": (",", ".", True),
    "tr-TR": (".", ",", True),
    "de-DE": (".", ",", False),
    "ar-SA": (",", ".", False),
    "ar-AE": (",", ".", False),
    "ar-EG": (",", ".", False),
}


def format_currency(amount, currency: str, max_fraction_digits: int = 2) -> str:
    """
    Format an amount with the currency's symbol and locale separators.

    Shows between 0 and max_fraction_digits fraction digits (trailing
    zeros are dropped), e.g. "$1,234.5", "₺1.234,5", "1.234,5 €".

    Raises:
        UnknownCurrency: If the currency is not supported
    """
    info = currency_info(currency)
    group, point, symbol_first = LOCALE_FORMATS.get(info.locale, (",", ".", True))

    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    value = value.quantize(Decimal(10) ** -max_fraction_digits, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""

    whole, _, fraction = f"{abs(value):f}".partition(".")
    fraction = fraction.rstrip("0")
    grouped = f"{int(whole):,}".replace(",", group)
    number = f"{grouped}{point}{fraction}" if fraction else grouped

    if symbol_first:
        return f"{sign}{info.symbol}{number}"
    return f"{sign}{number} {info.symbol}"
