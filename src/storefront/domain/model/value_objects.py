"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError

# Number of decimal places in one major unit; anything not listed uses 2.
MINOR_UNIT_EXPONENTS = {"JPY": 0, "KRW": 0, "BHD": 3, "KWD": 3}

_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


def minor_unit_exponent(currency: str) -> int:
    return MINOR_UNIT_EXPONENTS.get(currency, 2)


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Arithmetic that must be
    exact across many items goes through ``minor_units`` (integer cents).
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Minor units ----------------------------------------------------------

    @property
    def minor_units(self) -> int:
        """Amount in the currency's smallest unit, rounded half-even."""
        scaled = self.amount.scaleb(minor_unit_exponent(self.currency))
        return int(scaled.to_integral_value(rounding=ROUND_HALF_EVEN))

    def quantize(self) -> Money:
        """Round to the currency's minor unit (half-even)."""
        return Money.from_minor_units(self.minor_units, self.currency)

    @staticmethod
    def from_minor_units(units: int, currency: str = "USD") -> Money:
        if not isinstance(units, int) or isinstance(units, bool):
            raise ValidationError(f"Minor units must be an integer, got {units!r}")
        return Money(Decimal(units).scaleb(-minor_unit_exponent(currency)), currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        places = minor_unit_exponent(self.currency)
        symbol = _SYMBOLS.get(self.currency)
        if symbol:
            return f"{symbol}{self.amount:.{places}f}"
        return f"{self.amount:.{places}f} {self.currency}"

    def to_plain_string(self) -> str:
        """Fixed-point string with exactly the minor-unit precision, e.g. '19.98'."""
        return f"{self.quantize().amount:.{minor_unit_exponent(self.currency)}f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
