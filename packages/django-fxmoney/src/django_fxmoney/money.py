"""An amount tied to one of the dashboard currencies."""

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Union

from .currencies import currency_decimals
from .exceptions import CurrencyMismatchError

Number = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class Money:
    """
    Immutable (amount, currency) pair.

    Amounts are stored as Decimal at full precision. Money only combines
    with Money of the same currency; convert first with services.convert().

    Usage:
        fee = Money("250.00", "EUR")
        total = fee + Money("49.90", "EUR")
        total.quantized()  # rounded to EUR decimals
    """
    amount: Decimal
    currency: str

    def __post_init__(self):
        amount = self.amount
        if not isinstance(amount, Decimal):
            # floats keep their printed value
            amount = Decimal(str(amount))
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", str(self.currency))

    @classmethod
    def zero(cls, currency: str) -> "Money":
        return cls(Decimal("0"), currency)

    def _same_currency(self, other: "Money", verb: str) -> None:
        if other.currency != self.currency:
            raise CurrencyMismatchError(
                f"Cannot {verb} {self.currency} and {other.currency} amounts"
            )

    def _with_amount(self, amount: Decimal) -> "Money":
        return Money(amount, self.currency)

    def quantized(self) -> "Money":
        """
        Round half-to-even to the currency's decimal places.

        Codes outside the supported set use 2 places.
        """
        step = Decimal(1).scaleb(-currency_decimals(self.currency))
        return self._with_amount(self.amount.quantize(step, rounding=ROUND_HALF_EVEN))

    def __add__(self, other: "Money") -> "Money":
        self._same_currency(other, "add")
        return self._with_amount(self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        self._same_currency(other, "subtract")
        return self._with_amount(self.amount - other.amount)

    def __mul__(self, factor: Number) -> "Money":
        if not isinstance(factor, Decimal):
            factor = Decimal(str(factor))
        return self._with_amount(self.amount * factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Money":
        return self._with_amount(-self.amount)

    def __abs__(self) -> "Money":
        return self._with_amount(abs(self.amount))

    def __lt__(self, other: "Money") -> bool:
        self._same_currency(other, "compare")
        return self.amount < other.amount

    def is_zero(self) -> bool:
        return not self.amount

    def to_dict(self) -> dict:
        """JSON-friendly form; the amount is a string to keep precision."""
        return {"amount": str(self.amount), "currency": self.currency}
