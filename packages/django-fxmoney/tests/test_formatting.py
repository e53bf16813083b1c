"""Tests for currency formatting."""

from decimal import Decimal

import pytest

from django_fxmoney.exceptions import UnknownCurrency
from django_fxmoney.formatting import format_currency


class TestFormatCurrency:
    """Symbol, grouping and 0-2 fraction digits per currency locale."""

    @pytest.mark.parametrize("amount,currency,expected", [
        (Decimal("1234.5"), "USD", "$1,234.5"),
        (Decimal("1234.56"), "USD", "$1,234.56"),
        (Decimal("1234"), "USD", "$1,234"),
        (Decimal("1234.50"), "TRY", "₺1.234,5"),
        (Decimal("1234567.891"), "EUR", "1.234.567,89 €"),
        (Decimal("99.999"), "USD", "$100"),
        (Decimal("0"), "SAR", "0 ﷼"),
        (Decimal("-15.25"), "USD", "-$15.25"),
    ])
    def test_format(self, amount, currency, expected):
        assert format_currency(amount, currency) == expected

    def test_accepts_floats(self):
        assert format_currency(19.99, "USD") == "$19.99"

    def test_unknown_currency_rejected(self):
        with pytest.raises(UnknownCurrency):
            format_currency(1, "GBP")
