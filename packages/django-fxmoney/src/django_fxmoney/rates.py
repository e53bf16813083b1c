"""Rate snapshots: dated tables of multipliers against a base currency."""

import datetime
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Mapping

from .currencies import validate_currency
from .exceptions import RatesUnavailable


@dataclass(frozen=True)
class RateSnapshot:
    """
    Immutable exchange rate table.

    rates[X] is the number of units of X per 1 unit of base, so the base
    currency's own rate is 1 and converting A -> B multiplies by
    rates[B] / rates[A].
    """
    base: str
    date: datetime.date
    rates: Mapping[str, Decimal]
    fetched_at: datetime.datetime
    source: str = ""
    # Set when the snapshot is served past its freshness window
    stale: bool = field(default=False, compare=False)

    def __post_init__(self):
        normalized = {str(code): _to_rate(code, value) for code, value in self.rates.items()}
        object.__setattr__(self, 'rates', MappingProxyType(normalized))

    def rate(self, code: str) -> Decimal:
        """
        Units of code per 1 unit of base.

        Raises:
            UnknownCurrency: If code is not a supported currency
            RatesUnavailable: If the snapshot has no rate for code
        """
        code = validate_currency(code)
        try:
            return self.rates[code]
        except KeyError:
            raise RatesUnavailable(f"No {code} rate in the {self.base} snapshot of {self.date}")

    def factor(self, from_currency: str, to_currency: str) -> Decimal:
        """Multiplier that converts an amount in from_currency to to_currency."""
        return self.rate(to_currency) / self.rate(from_currency)

    def as_stale(self) -> 'RateSnapshot':
        return RateSnapshot(
            base=self.base,
            date=self.date,
            rates=self.rates,
            fetched_at=self.fetched_at,
            source=self.source,
            stale=True,
        )

    def to_dict(self) -> dict:
        return {
            "base": self.base,
            "date": self.date.isoformat(),
            "rates": {code: str(value) for code, value in sorted(self.rates.items())},
            "fetchedAt": self.fetched_at.isoformat(),
            "source": self.source,
            "stale": self.stale,
        }


def _to_rate(code, value) -> Decimal:
    try:
        rate = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Rate for {code} is not a number: {value!r}")
    if not rate.is_finite() or rate <= 0:
        raise ValueError(f"Rate for {code} must be positive, got {value!r}")
    return rate
