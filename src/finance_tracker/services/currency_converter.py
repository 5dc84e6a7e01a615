"""Currency conversion over an exchange-rate snapshot.

Rates are quoted against a common base currency (units of the currency per
one unit of base). Converting goes through the base:

    result = round(amount / rate[from] * rate[to])

The arithmetic runs in ``Decimal`` and is rounded exactly once, half away
from zero, to a whole number of minor units. Functions here are pure: they
read the mapping they are given and nothing else.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Mapping, Union

from finance_tracker.core.exceptions import RateUnavailableError

RateValue = Union[Decimal, int, float, str]

_PRECISION = 40


def _rate_of(currency: str, rates: Mapping[str, RateValue]) -> Decimal:
    code = currency.upper()
    raw = rates.get(code)
    if raw is None:
        raise RateUnavailableError(f"Exchange rate not available for {code}")
    rate = Decimal(str(raw))
    if not rate.is_finite() or rate <= 0:
        raise RateUnavailableError(f"Exchange rate for {code} is not usable: {raw}")
    return rate


def convert(
    amount: int,
    from_currency: str,
    to_currency: str,
    rates: Mapping[str, RateValue],
) -> int:
    """
    Convert ``amount`` minor units from one currency to another.

    Same-currency conversion (case-insensitive) returns ``amount`` untouched.
    Raises RateUnavailableError if either currency has no usable rate; there
    is no fallback to the unconverted amount.
    """
    if from_currency.upper() == to_currency.upper():
        return amount

    from_rate = _rate_of(from_currency, rates)
    to_rate = _rate_of(to_currency, rates)

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        amount_in_base = Decimal(amount) / from_rate
        converted = amount_in_base * to_rate
        return int(converted.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def conversion_rate(
    from_currency: str,
    to_currency: str,
    rates: Mapping[str, RateValue],
) -> Decimal:
    """Units of ``to_currency`` per one unit of ``from_currency``."""
    if from_currency.upper() == to_currency.upper():
        return Decimal("1")

    from_rate = _rate_of(from_currency, rates)
    to_rate = _rate_of(to_currency, rates)
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return to_rate / from_rate
