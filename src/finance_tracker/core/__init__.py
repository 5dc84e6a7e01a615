"""Core utilities and shared functionality."""

from finance_tracker.core.timezone import (
    now_utc,
    to_utc,
    parse_datetime_utc,
    month_bounds,
    previous_month,
    week_bounds,
    year_bounds,
    UTC,
)
from finance_tracker.core.money import (
    to_cents,
    to_cents_exact,
    from_cents,
    format_cents,
    normalize_currency,
    within_limit,
    require_amount,
    MAX_MINOR_UNITS,
)
from finance_tracker.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    AccountNotFoundError,
    InvalidTransferError,
    InvalidAmountError,
    InsufficientFundsError,
    RateUnavailableError,
    PersistenceError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "parse_datetime_utc",
    "month_bounds",
    "previous_month",
    "week_bounds",
    "year_bounds",
    "UTC",
    "to_cents",
    "to_cents_exact",
    "from_cents",
    "format_cents",
    "normalize_currency",
    "within_limit",
    "require_amount",
    "MAX_MINOR_UNITS",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "AccountNotFoundError",
    "InvalidTransferError",
    "InvalidAmountError",
    "InsufficientFundsError",
    "RateUnavailableError",
    "PersistenceError",
]
