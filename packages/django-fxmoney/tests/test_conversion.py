"""Tests for currency conversion."""

import datetime
from decimal import Decimal

import pytest

from django_fxmoney import Currency, Money
from django_fxmoney.exceptions import RatesUnavailable, UnknownCurrency
from django_fxmoney.rates import RateSnapshot
from django_fxmoney.services import convert, convert_amount


class TestIdentityConversion:
    """Same-currency conversion never needs a snapshot."""

    @pytest.mark.parametrize("currency", Currency.values)
    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-42.17"), Decimal("1234.5678")])
    def test_identity_returns_amount_unchanged(self, currency, amount):
        """No rates and no database: identity must not look anything up."""
        assert convert_amount(amount, currency, currency) == amount

    def test_identity_does_not_round(self):
        assert convert_amount("0.123456789", "EUR", "EUR") == Decimal("0.123456789")

    def test_identity_accepts_plain_numbers(self):
        assert convert_amount(-5, "TRY", "TRY") == Decimal("-5")


class TestConvertAmount:
    """Tests for cross-currency conversion against a snapshot."""

    def test_base_to_other(self, rates):
        assert convert_amount(100, "USD", "SAR", rates=rates) == Decimal("375.00")

    def test_other_to_base(self, rates):
        result = convert_amount(50, "EUR", "USD", rates=rates)
        assert Money(result, "USD").quantized().amount == Decimal("55.00")

    def test_cross_rate_goes_through_base(self, rates):
        """EUR -> TRY multiplies by rates[TRY] / rates[EUR]."""
        result = convert_amount(1, "EUR", "TRY", rates=rates)
        assert Money(result, "TRY").quantized().amount == Decimal("36.67")

    def test_result_keeps_full_precision(self, rates):
        result = convert_amount(1, "TRY", "EUR", rates=rates)
        assert result != result.quantize(Decimal("0.01"))

    @pytest.mark.parametrize("pair", [("USD", "EUR"), ("EUR", "TRY"), ("SAR", "AED"), ("EGP", "USD")])
    @pytest.mark.parametrize("amount", [Decimal("0.01"), Decimal("123.45"), Decimal("-9876.5")])
    def test_round_trip_returns_original(self, rates, pair, amount):
        a, b = pair
        there = convert_amount(amount, a, b, rates=rates)
        back = convert_amount(there, b, a, rates=rates)
        assert abs(back - amount) < Decimal("1e-20")

    def test_convert_money(self, rates):
        converted = convert(Money("200", "TRY"), "USD", rates=rates)
        assert converted.currency == "USD"
        assert converted.quantized().amount == Decimal("6.00")

    def test_snapshot_based_on_other_currency(self):
        """Factors are ratios, so any base gives the same cross rates."""
        eur_based = RateSnapshot(
            base="EUR",
            date=datetime.date(2025, 1, 15),
            rates={"EUR": 1, "USD": "1.1"},
            fetched_at=datetime.datetime(2025, 1, 15, tzinfo=datetime.timezone.utc),
        )
        assert convert_amount(50, "EUR", "USD", rates=eur_based) == Decimal("55.0")


class TestConversionErrors:
    """Tests for unsupported currencies and missing rates."""

    @pytest.mark.parametrize("from_currency,to_currency", [
        ("XYZ", "USD"),
        ("USD", "XYZ"),
        ("XYZ", "XYZ"),
        ("usd", "USD"),
        (None, "USD"),
    ])
    def test_unknown_currency_rejected(self, from_currency, to_currency):
        with pytest.raises(UnknownCurrency):
            convert_amount(10, from_currency, to_currency)

    def test_unknown_currency_is_value_error(self):
        with pytest.raises(ValueError):
            convert_amount(10, "XYZ", "USD")

    def test_missing_rate_in_snapshot(self):
        partial = RateSnapshot(
            base="USD",
            date=datetime.date(2025, 1, 15),
            rates={"USD": 1, "EUR": "0.91"},
            fetched_at=datetime.datetime(2025, 1, 15, tzinfo=datetime.timezone.utc),
        )
        with pytest.raises(RatesUnavailable):
            convert_amount(10, "USD", "SAR", rates=partial)

    @pytest.mark.django_db
    def test_no_snapshot_anywhere(self, settings):
        """Without stored rates there is no fabricated fallback."""
        settings.FXMONEY_AUTO_REFRESH = False
        with pytest.raises(RatesUnavailable):
            convert_amount(10, "USD", "EUR")

    @pytest.mark.parametrize("amount", ["abc", "NaN", "Infinity", True])
    def test_invalid_amount_rejected(self, amount):
        with pytest.raises(ValueError):
            convert_amount(amount, "USD", "USD")


class TestRateSnapshot:
    """Tests for RateSnapshot validation."""

    def test_rates_are_decimals(self, rates):
        assert all(isinstance(value, Decimal) for value in rates.rates.values())

    def test_rates_are_read_only(self, rates):
        with pytest.raises(TypeError):
            rates.rates["USD"] = Decimal("2")

    @pytest.mark.parametrize("value", [0, -1, "abc"])
    def test_non_positive_rate_rejected(self, value):
        with pytest.raises(ValueError):
            RateSnapshot(
                base="USD",
                date=datetime.date(2025, 1, 15),
                rates={"USD": 1, "EUR": value},
                fetched_at=datetime.datetime(2025, 1, 15, tzinfo=datetime.timezone.utc),
            )

    def test_to_dict(self, rates):
        data = rates.to_dict()
        assert data["base"] == "USD"
        assert data["date"] == "2025-01-15"
        assert data["rates"]["SAR"] == "3.75"
        assert data["stale"] is False
