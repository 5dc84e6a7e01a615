"""Money transfers between two accounts of one user."""

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from finance_tracker.core.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidTransferError,
)
from finance_tracker.core.money import MAX_MINOR_UNITS, format_cents, within_limit
from finance_tracker.core.timezone import now_utc
from finance_tracker.domain.models import (
    Account,
    AccountKind,
    ExchangeRateSnapshot,
    Transaction,
    TransactionType,
)
from finance_tracker.domain.views import TransferResult
from finance_tracker.repositories.protocols import AccountRepository, TransactionRepository
from finance_tracker.repositories.sqlalchemy.database import atomic
from finance_tracker.services.currency_converter import conversion_rate, convert
from finance_tracker.services.exchange_rate_service import ExchangeRateService

logger = logging.getLogger(__name__)


class _RatesRequired(Exception):
    """The locked accounts need a conversion the first read did not foresee."""


@dataclass(frozen=True)
class FundsPolicy:
    """
    Decides which source accounts must cover a transfer.

    With ``enforce`` off, every account may go negative. Otherwise only the
    kinds in ``overdraft_kinds`` may.
    """

    enforce: bool = True
    overdraft_kinds: frozenset[AccountKind] = field(
        default_factory=lambda: frozenset({AccountKind.CREDIT})
    )

    @classmethod
    def from_config(cls, enforce: bool, overdraft_kinds: Iterable[str]) -> "FundsPolicy":
        """Build a policy from settings values such as ``["credit"]``."""
        return cls(
            enforce=enforce,
            overdraft_kinds=frozenset(AccountKind(k.lower()) for k in overdraft_kinds),
        )

    def requires_funds(self, account: Account) -> bool:
        """Return True if the account may not be overdrawn."""
        return self.enforce and account.kind not in self.overdraft_kinds


class TransferService:
    """
    Moves money between two of a user's accounts.

    A transfer debits the source by ``amount`` (source currency), credits the
    destination by the converted amount (destination currency) and records an
    expense and an income entry sharing one transfer ID. All four writes
    commit together or not at all.
    """

    def __init__(
        self,
        db: Session,
        account_repo: AccountRepository,
        transaction_repo: TransactionRepository,
        exchange_rates: ExchangeRateService,
        funds_policy: Optional[FundsPolicy] = None,
    ):
        self._db = db
        self._account_repo = account_repo
        self._transaction_repo = transaction_repo
        self._exchange_rates = exchange_rates
        self._funds_policy = funds_policy or FundsPolicy()

    def transfer(
        self,
        user_id: int,
        from_account_id: int,
        to_account_id: int,
        amount: int,
        description: Optional[str] = None,
    ) -> TransferResult:
        """
        Transfer ``amount`` minor units of the source currency.

        Raises:
            InvalidTransferError: source and destination are the same account
            InvalidAmountError: amount is not a positive integer, is out of range,
                converts to zero, or would push a balance out of range
            AccountNotFoundError: an account is missing or owned by someone else
            InsufficientFundsError: the funds policy forbids overdrawing the source
            RateUnavailableError: the currencies differ and no rate is available
            PersistenceError: the database failed; nothing was written
        """
        if from_account_id == to_account_id:
            raise InvalidTransferError("Cannot transfer to the same account")
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmountError(amount)
        if amount > MAX_MINOR_UNITS:
            raise InvalidAmountError(amount, "exceeds the supported range")

        source, destination = self._load_pair(user_id, from_account_id, to_account_id)

        # Rates are resolved outside the write transaction: a refresh may
        # reach the provider and commits on its own.
        snapshot: Optional[ExchangeRateSnapshot] = None
        if source.currency != destination.currency:
            snapshot = self._exchange_rates.get_snapshot()

        try:
            return self._execute(
                user_id, from_account_id, to_account_id, amount, description, snapshot
            )
        except _RatesRequired:
            # An empty account changed currency since the first read
            logger.info("Currencies changed during transfer; retrying with exchange rates")
            snapshot = self._exchange_rates.get_snapshot()
            return self._execute(
                user_id, from_account_id, to_account_id, amount, description, snapshot
            )

    def _execute(
        self,
        user_id: int,
        from_account_id: int,
        to_account_id: int,
        amount: int,
        description: Optional[str],
        snapshot: Optional[ExchangeRateSnapshot],
    ) -> TransferResult:
        with atomic(self._db):
            locked = self._account_repo.get_many_for_update(
                [from_account_id, to_account_id], user_id
            )
            source = self._require(locked, from_account_id)
            destination = self._require(locked, to_account_id)

            if source.currency == destination.currency:
                credited, rate = amount, Decimal("1")
            elif snapshot is None:
                raise _RatesRequired()
            else:
                credited = convert(amount, source.currency, destination.currency, snapshot.rates)
                rate = conversion_rate(source.currency, destination.currency, snapshot.rates)
            if credited <= 0:
                raise InvalidAmountError(amount)
            if not within_limit(source.balance - amount):
                raise InvalidAmountError(
                    amount,
                    f"balance of account {source.account_id} would leave the supported range",
                )
            if not within_limit(destination.balance + credited):
                raise InvalidAmountError(
                    amount,
                    f"balance of account {destination.account_id} would leave the supported range",
                )

            requires_funds = self._funds_policy.requires_funds(source)
            if requires_funds and source.balance < amount:
                raise self._insufficient(source, amount)
            if not self._account_repo.apply_balance_delta(
                source.account_id, -amount, require_funds=requires_funds
            ):
                # Balance moved under us between the locked read and the update
                raise self._insufficient(source, amount)
            self._account_repo.apply_balance_delta(destination.account_id, credited)

            transfer_id = str(uuid.uuid4())
            created_at = now_utc()
            debit = self._transaction_repo.create(
                Transaction(
                    txn_id=None,
                    user_id=user_id,
                    account_id=source.account_id,
                    amount=amount,
                    txn_type=TransactionType.EXPENSE,
                    description=description
                    or f"Transfer to {destination.name} ({destination.currency})",
                    transfer_id=transfer_id,
                    created_at=created_at,
                )
            )
            credit = self._transaction_repo.create(
                Transaction(
                    txn_id=None,
                    user_id=user_id,
                    account_id=destination.account_id,
                    amount=credited,
                    txn_type=TransactionType.INCOME,
                    description=description
                    or self._credit_description(source, destination, rate),
                    transfer_id=transfer_id,
                    created_at=created_at,
                )
            )

            source_after = self._account_repo.get_by_id(source.account_id)
            destination_after = self._account_repo.get_by_id(destination.account_id)

        logger.info(
            "Transfer %s: %s from account %s to account %s as %s",
            transfer_id,
            format_cents(amount, source.currency),
            source.account_id,
            destination.account_id,
            format_cents(credited, destination.currency),
        )
        return TransferResult(
            transfer_id=transfer_id,
            debit_transaction_id=debit.txn_id,
            credit_transaction_id=credit.txn_id,
            from_account_id=source.account_id,
            to_account_id=destination.account_id,
            debited_amount=amount,
            credited_amount=credited,
            from_currency=source.currency,
            to_currency=destination.currency,
            rate=rate,
            from_balance=source_after.balance,
            to_balance=destination_after.balance,
        )

    def _load_pair(
        self,
        user_id: int,
        from_account_id: int,
        to_account_id: int,
    ) -> tuple[Account, Account]:
        source = self._account_repo.get_by_id(from_account_id, user_id=user_id)
        if not source:
            raise AccountNotFoundError(from_account_id)
        destination = self._account_repo.get_by_id(to_account_id, user_id=user_id)
        if not destination:
            raise AccountNotFoundError(to_account_id)
        return source, destination

    @staticmethod
    def _require(accounts: dict[int, Account], account_id: int) -> Account:
        account = accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    @staticmethod
    def _insufficient(account: Account, amount: int) -> InsufficientFundsError:
        return InsufficientFundsError(
            account.account_id,
            requested=format_cents(amount, account.currency),
            available=format_cents(account.balance, account.currency),
        )

    @staticmethod
    def _credit_description(source: Account, destination: Account, rate: Decimal) -> str:
        text = f"Transfer from {source.name} ({source.currency})"
        if source.currency != destination.currency:
            text += f" @ {rate:.4f}"
        return text
