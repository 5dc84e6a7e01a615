"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: object, code: str = "NOT_FOUND"):
        super().__init__(f"{resource} not found: {identifier}", code=code)


class AccountNotFoundError(NotFoundError):
    """Raised when an account is missing or belongs to another user."""

    def __init__(self, account_id: object):
        super().__init__("Account", account_id, code="ACCOUNT_NOT_FOUND")


class InvalidTransferError(AppError):
    """Raised when a transfer request is structurally invalid."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_TRANSFER")


class InvalidAmountError(AppError):
    """Raised when an amount is zero, negative or not a whole number of minor units."""

    def __init__(self, amount: object, reason: Optional[str] = None):
        message = f"Invalid amount: {amount}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, code="INVALID_AMOUNT")


class InsufficientFundsError(AppError):
    """Raised when a debit would take a funds-checked account below zero."""

    status_code = 409

    def __init__(self, account_id: object, requested: str, available: str):
        super().__init__(
            f"Insufficient funds in account {account_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )


class RateUnavailableError(AppError):
    """Raised when an exchange rate needed for a conversion is missing."""

    status_code = 424

    def __init__(self, message: str):
        super().__init__(message, code="RATE_UNAVAILABLE")


class PersistenceError(AppError):
    """Raised when the database rejects or fails a unit of work."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="PERSISTENCE_FAILURE")
