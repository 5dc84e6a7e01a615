"""Ledger service for accounts and income/expense transactions."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.exceptions import (
    AccountNotFoundError,
    InvalidAmountError,
    NotFoundError,
    ValidationError,
)
from finance_tracker.core.money import normalize_currency, require_amount, within_limit
from finance_tracker.core.timezone import now_utc
from finance_tracker.domain.models import (
    Account,
    AccountKind,
    Transaction,
    TransactionType,
)
from finance_tracker.repositories.protocols import (
    AccountRepository,
    CategoryRepository,
    RecurringTransactionRepository,
    TransactionRepository,
    UserRepository,
)
from finance_tracker.repositories.sqlalchemy.database import atomic

logger = logging.getLogger(__name__)


@dataclass
class AccountUpdate:
    """Partial update data for editing an account."""

    name: Optional[str] = None
    kind: Optional[AccountKind] = None
    currency: Optional[str] = None
    color: Optional[str] = None


@dataclass
class TransactionCreate:
    """Input data for recording income or an expense."""

    account_id: int
    amount: int
    txn_type: TransactionType
    description: str = ""
    category_id: Optional[int] = None
    created_at: Optional[datetime] = None


def _require_balance_in_range(account: Account, delta: int) -> None:
    if not within_limit(account.balance + delta):
        raise InvalidAmountError(
            abs(delta), f"balance of account {account.account_id} would leave the supported range"
        )


class LedgerService:
    """
    Service for managing accounts and their ledger.

    Every balance change and the transaction row that explains it are written
    in the same database transaction.
    """

    def __init__(
        self,
        db: Session,
        user_repo: UserRepository,
        account_repo: AccountRepository,
        transaction_repo: TransactionRepository,
        category_repo: CategoryRepository,
        recurring_repo: RecurringTransactionRepository,
    ):
        self._db = db
        self._user_repo = user_repo
        self._account_repo = account_repo
        self._transaction_repo = transaction_repo
        self._category_repo = category_repo
        self._recurring_repo = recurring_repo

    # Accounts

    def create_account(
        self,
        user_id: int,
        name: str,
        currency: Optional[str] = None,
        balance: int = 0,
        kind: AccountKind = AccountKind.NORMAL,
        color: Optional[str] = None,
    ) -> Account:
        """
        Create an account.

        Args:
            user_id: Owner
            name: Display name
            currency: ISO code; defaults to the owner's display currency
            balance: Opening balance in minor units (may be negative for credit accounts)
            kind: Account kind
            color: UI color tag

        Returns:
            Created Account instance
        """
        user = self._user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        if not name.strip():
            raise ValidationError("Account name is required")
        if isinstance(balance, bool) or not isinstance(balance, int):
            raise InvalidAmountError(balance)
        if not within_limit(balance):
            raise InvalidAmountError(balance, "exceeds the supported range")

        account = Account(
            account_id=None,
            user_id=user_id,
            name=name.strip(),
            currency=self._currency(currency or user.currency),
            balance=balance,
            kind=AccountKind(kind),
            color=color or "bg-primary",
            created_at=now_utc(),
        )
        with atomic(self._db):
            return self._account_repo.create(account)

    def get_account(self, user_id: int, account_id: int) -> Account:
        """Get one of the user's accounts."""
        account = self._account_repo.get_by_id(account_id, user_id=user_id)
        if not account:
            raise AccountNotFoundError(account_id)
        return account

    def list_accounts(self, user_id: int) -> list[Account]:
        """List the user's accounts."""
        return self._account_repo.list_by_user(user_id)

    def update_account(self, user_id: int, account_id: int, patch: AccountUpdate) -> Account:
        """
        Edit an account.

        The currency can only change while the account is empty: a balance is
        never relabelled into another currency.
        """
        account = self.get_account(user_id, account_id)

        if patch.name is not None:
            if not patch.name.strip():
                raise ValidationError("Account name is required")
            account.name = patch.name.strip()
        if patch.kind is not None:
            account.kind = AccountKind(patch.kind)
        if patch.color is not None:
            account.color = patch.color
        if patch.currency is not None:
            currency = self._currency(patch.currency)
            if currency != account.currency:
                if account.balance != 0 or self._transaction_repo.count_by_account(account_id):
                    raise ValidationError(
                        "Currency can only be changed on an account with no balance "
                        "and no transactions"
                    )
                account.currency = currency

        with atomic(self._db):
            return self._account_repo.update(account)

    def delete_account(self, user_id: int, account_id: int) -> None:
        """
        Delete an account together with its transactions and recurring definitions.

        Accounts that took part in transfers are kept, since deleting them
        would leave the partner account with half a transfer.
        """
        self.get_account(user_id, account_id)
        transfer_legs = self._transaction_repo.count_by_account(account_id, transfers_only=True)
        if transfer_legs:
            raise ValidationError(
                f"Account has {transfer_legs} transfer transaction(s); delete them first"
            )

        with atomic(self._db):
            self._recurring_repo.delete_by_account(account_id)
            self._transaction_repo.delete_by_account(account_id)
            self._account_repo.delete(account_id)
        logger.info("Deleted account %s of user %s", account_id, user_id)

    # Transactions

    def check_category(
        self,
        user_id: int,
        category_id: Optional[int],
        txn_type: TransactionType,
    ) -> None:
        """Ensure an optional category belongs to the user and matches the entry type."""
        if category_id is None:
            return
        category = self._category_repo.get_by_id(category_id, user_id=user_id)
        if not category:
            raise NotFoundError("Category", category_id)
        if category.category_type.value != txn_type.value:
            raise ValidationError(
                f"Category '{category.name}' is for {category.category_type.value}, "
                f"not {txn_type.value}"
            )

    def add_transaction(self, user_id: int, data: TransactionCreate) -> Transaction:
        """
        Record income or an expense and apply it to the account balance.

        Expenses are not checked against the balance: they record spending
        that already happened.
        """
        amount = require_amount(data.amount)
        account = self.get_account(user_id, data.account_id)
        self.check_category(user_id, data.category_id, data.txn_type)

        transaction = Transaction(
            txn_id=None,
            user_id=user_id,
            account_id=data.account_id,
            amount=amount,
            txn_type=data.txn_type,
            description=data.description,
            category_id=data.category_id,
            created_at=data.created_at or now_utc(),
        )
        _require_balance_in_range(account, transaction.signed_amount)
        with atomic(self._db):
            created = self._transaction_repo.create(transaction)
            self._account_repo.apply_balance_delta(data.account_id, created.signed_amount)
        return created

    def get_transaction(self, user_id: int, txn_id: int) -> Transaction:
        """Get one of the user's transactions."""
        transaction = self._transaction_repo.get_by_id(txn_id, user_id=user_id)
        if not transaction:
            raise NotFoundError("Transaction", txn_id)
        return transaction

    def query_transactions(
        self,
        user_id: int,
        account_id: Optional[int] = None,
        txn_types: Optional[list[TransactionType]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Transaction]:
        """Query the user's transactions, newest first."""
        if account_id is not None:
            self.get_account(user_id, account_id)
        return self._transaction_repo.query(
            user_id=user_id,
            account_ids=[account_id] if account_id is not None else None,
            txn_types=txn_types,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=offset,
        )

    def delete_transaction(self, user_id: int, txn_id: int) -> list[int]:
        """
        Delete a transaction and reverse its balance effect.

        Deleting either leg of a transfer removes both legs, so the pair is
        never split. Returns the IDs of the deleted transactions.
        """
        transaction = self.get_transaction(user_id, txn_id)
        if transaction.transfer_id:
            entries = self._transaction_repo.list_by_transfer(transaction.transfer_id)
        else:
            entries = [transaction]

        for entry in entries:
            account = self._account_repo.get_by_id(entry.account_id)
            if account:
                _require_balance_in_range(account, -entry.signed_amount)

        with atomic(self._db):
            for entry in entries:
                self._account_repo.apply_balance_delta(entry.account_id, -entry.signed_amount)
                self._transaction_repo.delete(entry.txn_id)
        return [entry.txn_id for entry in entries]

    @staticmethod
    def _currency(code: str) -> str:
        try:
            return normalize_currency(code)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
