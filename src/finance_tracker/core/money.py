"""Minor-unit helpers.

Balances and amounts are stored as integers in minor units (cents). Every
currency uses the same scale of two implied decimal places.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from finance_tracker.core.exceptions import InvalidAmountError

MINOR_UNITS_PER_MAJOR = 100
_CENT = Decimal("0.01")

# Largest amount or balance accepted, in minor units. Any sum of two such
# values still fits a signed 64-bit column.
MAX_MINOR_UNITS = 10**15


def to_cents(amount: Union[Decimal, int, float, str]) -> int:
    """Convert a major-unit amount (e.g. ``10.50``) to integer minor units."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Not a monetary amount: {amount!r}") from exc
    if not value.is_finite():
        raise ValueError(f"Not a monetary amount: {amount!r}")
    try:
        cents = (value * MINOR_UNITS_PER_MAJOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Amount out of range: {amount!r}") from exc
    return int(cents)


def from_cents(cents: int) -> Decimal:
    """Convert integer minor units back to a major-unit Decimal with two places."""
    return (Decimal(cents) / MINOR_UNITS_PER_MAJOR).quantize(_CENT)


def format_cents(cents: int, currency: str) -> str:
    """Human-readable amount, e.g. ``50.00 USD``."""
    return f"{from_cents(cents)} {currency}"


def normalize_currency(code: str) -> str:
    """Upper-case and validate an ISO 4217 style three-letter code."""
    normalized = (code or "").strip().upper()
    if len(normalized) != 3 or not normalized.isalpha():
        raise ValueError(f"Currency must be a 3-letter code: {code!r}")
    return normalized


def to_cents_exact(amount: Union[Decimal, int, float, str]) -> int:
    """Like ``to_cents`` but refuse amounts finer than one minor unit."""
    cents = to_cents(amount)
    if not within_limit(cents):
        raise ValueError(f"Amount out of range: {amount!r}")
    if Decimal(cents) != Decimal(str(amount)) * MINOR_UNITS_PER_MAJOR:
        raise ValueError(f"Amount has more than two decimal places: {amount!r}")
    return cents


def within_limit(cents: int) -> bool:
    """Return True if ``cents`` is inside the supported amount range."""
    return -MAX_MINOR_UNITS <= cents <= MAX_MINOR_UNITS


def require_amount(amount: object, allow_zero: bool = False) -> int:
    """
    Validate a service-level amount in minor units and return it.

    Raises InvalidAmountError unless ``amount`` is an int (not a bool) that is
    positive, or zero with ``allow_zero``, and at most ``MAX_MINOR_UNITS``.
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(amount)
    if amount < 0 or (amount == 0 and not allow_zero):
        raise InvalidAmountError(amount)
    if amount > MAX_MINOR_UNITS:
        raise InvalidAmountError(amount, "exceeds the supported range")
    return amount
