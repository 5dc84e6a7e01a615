"""
Unit tests for LedgerService.

Tests cover:
- Account creation, editing and deletion
- Recording income and expenses with balance updates
- Category checks on transactions
- Querying and deleting transactions
"""

import pytest

from finance_tracker.services import LedgerService, AccountUpdate, TransactionCreate
from finance_tracker.domain.models import AccountKind, CategoryType, TransactionType
from finance_tracker.core.exceptions import (
    AccountNotFoundError,
    InvalidAmountError,
    NotFoundError,
    ValidationError,
)

from finance_tracker.core.money import MAX_MINOR_UNITS

from tests.conftest import balance_of, utc_datetime


# =============================================================================
# ACCOUNT TESTS
# =============================================================================


class TestCreateAccount:
    """Tests for account creation."""

    def test_create_account_persists_fields(
        self,
        ledger_service: LedgerService,
        sample_user,
    ):
        """
        GIVEN a user
        WHEN I create a savings account in GBP with 12.34 opening balance
        THEN the account is persisted with those fields
        """
        account = ledger_service.create_account(
            sample_user.user_id,
            name="  Rainy Day  ",
            currency="gbp",
            balance=1234,
            kind=AccountKind.SAVINGS,
        )

        assert account.account_id is not None
        assert account.name == "Rainy Day"
        assert account.currency == "GBP"
        assert account.balance == 1234
        assert account.kind == AccountKind.SAVINGS
        assert account.color == "bg-primary"
        assert account.created_at is not None
        assert account.created_at.tzinfo is not None

    def test_currency_defaults_to_user_currency(
        self,
        ledger_service: LedgerService,
        user_factory,
    ):
        user = user_factory(currency="EUR")

        account = ledger_service.create_account(user.user_id, name="Girokonto")

        assert account.currency == "EUR"

    def test_invalid_currency_rejected(self, ledger_service: LedgerService, sample_user):
        with pytest.raises(ValidationError):
            ledger_service.create_account(sample_user.user_id, name="Bad", currency="DOLLARS")

    def test_blank_name_rejected(self, ledger_service: LedgerService, sample_user):
        with pytest.raises(ValidationError):
            ledger_service.create_account(sample_user.user_id, name="   ")

    def test_opening_balance_over_limit_rejected(
        self, ledger_service: LedgerService, sample_user
    ):
        with pytest.raises(InvalidAmountError):
            ledger_service.create_account(
                sample_user.user_id, name="Too much", balance=MAX_MINOR_UNITS + 1
            )

    def test_unknown_user_rejected(self, ledger_service: LedgerService):
        with pytest.raises(NotFoundError):
            ledger_service.create_account(404, name="Nobody's")


class TestGetAccount:
    """Tests for account lookup and ownership."""

    def test_other_users_account_is_not_found(
        self,
        ledger_service: LedgerService,
        user_factory,
        usd_account,
    ):
        other = user_factory()

        with pytest.raises(AccountNotFoundError):
            ledger_service.get_account(other.user_id, usd_account.account_id)

    def test_list_accounts_only_returns_own(
        self,
        ledger_service: LedgerService,
        user_factory,
        account_factory,
        sample_user,
        usd_account,
        eur_account,
    ):
        other = user_factory()
        account_factory(other, name="Theirs")

        names = [a.name for a in ledger_service.list_accounts(sample_user.user_id)]

        assert names == ["Checking", "Euro Savings"]


class TestUpdateAccount:
    """Tests for account editing."""

    def test_rename_and_change_kind(
        self,
        ledger_service: LedgerService,
        sample_user,
        usd_account,
    ):
        updated = ledger_service.update_account(
            sample_user.user_id,
            usd_account.account_id,
            AccountUpdate(name="Main", kind=AccountKind.BANK, color="bg-success"),
        )

        assert updated.name == "Main"
        assert updated.kind == AccountKind.BANK
        assert updated.color == "bg-success"
        assert updated.balance == 10000

    def test_currency_change_allowed_when_empty(
        self,
        ledger_service: LedgerService,
        sample_user,
        eur_account,
    ):
        updated = ledger_service.update_account(
            sample_user.user_id,
            eur_account.account_id,
            AccountUpdate(currency="gbp"),
        )

        assert updated.currency == "GBP"

    def test_currency_change_refused_with_balance(
        self,
        ledger_service: LedgerService,
        sample_user,
        usd_account,
    ):
        """
        GIVEN an account holding money
        WHEN its currency is changed
        THEN ValidationError is raised, since the balance would be relabelled
        """
        with pytest.raises(ValidationError):
            ledger_service.update_account(
                sample_user.user_id,
                usd_account.account_id,
                AccountUpdate(currency="EUR"),
            )

        account = ledger_service.get_account(sample_user.user_id, usd_account.account_id)
        assert account.currency == "USD"

    def test_currency_change_refused_with_history(
        self,
        ledger_service: LedgerService,
        transaction_factory,
        sample_user,
        eur_account,
    ):
        """
        GIVEN an account whose income and expense cancel out to zero
        WHEN its currency is changed
        THEN ValidationError is raised because transactions exist
        """
        transaction_factory(sample_user, eur_account, 500, TransactionType.INCOME)
        transaction_factory(sample_user, eur_account, 500, TransactionType.EXPENSE)

        with pytest.raises(ValidationError):
            ledger_service.update_account(
                sample_user.user_id,
                eur_account.account_id,
                AccountUpdate(currency="USD"),
            )


class TestDeleteAccount:
    """Tests for account deletion."""

    def test_delete_removes_transactions(
        self,
        ledger_service: LedgerService,
        transaction_repo,
        transaction_factory,
        sample_user,
        usd_account,
    ):
        transaction_factory(sample_user, usd_account, 700)

        ledger_service.delete_account(sample_user.user_id, usd_account.account_id)

        with pytest.raises(AccountNotFoundError):
            ledger_service.get_account(sample_user.user_id, usd_account.account_id)
        assert transaction_repo.count_by_account(usd_account.account_id) == 0

    def test_delete_refused_with_transfer_legs(
        self,
        ledger_service: LedgerService,
        transfer_service,
        sample_user,
        usd_account,
        eur_account,
    ):
        """
        GIVEN an account that took part in a transfer
        WHEN it is deleted
        THEN ValidationError is raised and the account remains
        """
        transfer_service.transfer(
            sample_user.user_id, usd_account.account_id, eur_account.account_id, 100
        )

        with pytest.raises(ValidationError):
            ledger_service.delete_account(sample_user.user_id, eur_account.account_id)

        assert ledger_service.get_account(sample_user.user_id, eur_account.account_id)


# =============================================================================
# TRANSACTION TESTS
# =============================================================================


class TestAddTransaction:
    """Tests for recording income and expenses."""

    def test_income_increases_balance(
        self,
        ledger_service: LedgerService,
        transaction_factory,
        sample_user,
        usd_account,
    ):
        txn = transaction_factory(
            sample_user, usd_account, 2550, TransactionType.INCOME, description="Salary"
        )

        assert txn.txn_id is not None
        assert txn.amount == 2550
        assert txn.signed_amount == 2550
        assert not txn.is_transfer
        assert balance_of(ledger_service, usd_account) == 12550

    def test_expense_decreases_balance(
        self,
        ledger_service: LedgerService,
        transaction_factory,
        sample_user,
        usd_account,
    ):
        txn = transaction_factory(sample_user, usd_account, 1999)

        assert txn.signed_amount == -1999
        assert balance_of(ledger_service, usd_account) == 8001

    def test_expense_may_exceed_balance(
        self,
        ledger_service: LedgerService,
        transaction_factory,
        sample_user,
        eur_account,
    ):
        """
        GIVEN an empty account
        WHEN an expense is recorded
        THEN it is accepted and the balance goes negative
        """
        transaction_factory(sample_user, eur_account, 300)

        assert balance_of(ledger_service, eur_account) == -300

    @pytest.mark.parametrize("amount", [0, -100, 1.5])
    def test_invalid_amount_rejected(
        self,
        ledger_service: LedgerService,
        sample_user,
        usd_account,
        amount,
    ):
        with pytest.raises(InvalidAmountError):
            ledger_service.add_transaction(
                sample_user.user_id,
                TransactionCreate(
                    account_id=usd_account.account_id,
                    amount=amount,
                    txn_type=TransactionType.EXPENSE,
                ),
            )

        assert balance_of(ledger_service, usd_account) == 10000

    def test_amount_over_limit_rejected(
        self,
        ledger_service: LedgerService,
        sample_user,
        usd_account,
    ):
        with pytest.raises(InvalidAmountError):
            ledger_service.add_transaction(
                sample_user.user_id,
                TransactionCreate(
                    account_id=usd_account.account_id,
                    amount=MAX_MINOR_UNITS + 1,
                    txn_type=TransactionType.INCOME,
                ),
            )

        assert balance_of(ledger_service, usd_account) == 10000

    def test_income_pushing_balance_over_limit_rejected(
        self,
        ledger_service: LedgerService,
        transaction_factory,
        sample_user,
        usd_account,
    ):
        """
        GIVEN an account holding 100.00
        WHEN income of the largest accepted amount is recorded
        THEN InvalidAmountError is raised because the balance would leave the range
        """
        with pytest.raises(InvalidAmountError):
            transaction_factory(
                sample_user, usd_account, MAX_MINOR_UNITS, TransactionType.INCOME
            )

        assert balance_of(ledger_service, usd_account) == 10000

    def test_category_type_must_match(
        self,
        ledger_service: LedgerService,
        category_service,
        sample_user,
        usd_account,
    ):
        salary = category_service.create_category(
            sample_user.user_id, "Salary", CategoryType.INCOME
        )

        with pytest.raises(ValidationError):
            ledger_service.add_transaction(
                sample_user.user_id,
                TransactionCreate(
                    account_id=usd_account.account_id,
                    amount=100,
                    txn_type=TransactionType.EXPENSE,
                    category_id=salary.category_id,
                ),
            )

    def test_other_users_category_is_not_found(
        self,
        ledger_service: LedgerService,
        category_service,
        user_factory,
        sample_user,
        usd_account,
    ):
        other = user_factory()
        theirs = category_service.create_category(other.user_id, "Food", CategoryType.EXPENSE)

        with pytest.raises(NotFoundError):
            ledger_service.add_transaction(
                sample_user.user_id,
                TransactionCreate(
                    account_id=usd_account.account_id,
                    amount=100,
                    txn_type=TransactionType.EXPENSE,
                    category_id=theirs.category_id,
                ),
            )


class TestQueryTransactions:
    """Tests for transaction queries."""

    def test_newest_first_with_filters(
        self,
        ledger_service: LedgerService,
        transaction_factory,
        sample_user,
        usd_account,
        eur_account,
    ):
        """
        GIVEN transactions on two accounts over three days
        WHEN querying with account, date range and pagination filters
        THEN matching rows are returned newest first
        """
        first = transaction_factory(
            sample_user, usd_account, 100, created_at=utc_datetime(2024, 6, 1)
        )
        second = transaction_factory(
            sample_user, usd_account, 200, created_at=utc_datetime(2024, 6, 2)
        )
        third = transaction_factory(
            sample_user, usd_account, 300, created_at=utc_datetime(2024, 6, 3)
        )
        transaction_factory(sample_user, eur_account, 400, created_at=utc_datetime(2024, 6, 2))

        all_usd = ledger_service.query_transactions(
            sample_user.user_id, account_id=usd_account.account_id
        )
        assert [t.txn_id for t in all_usd] == [third.txn_id, second.txn_id, first.txn_id]

        # End date is exclusive
        ranged = ledger_service.query_transactions(
            sample_user.user_id,
            account_id=usd_account.account_id,
            start_date=utc_datetime(2024, 6, 2),
            end_date=utc_datetime(2024, 6, 3),
        )
        assert [t.txn_id for t in ranged] == [second.txn_id]

        page = ledger_service.query_transactions(sample_user.user_id, limit=2, offset=1)
        assert len(page) == 2

        incomes = ledger_service.query_transactions(
            sample_user.user_id, txn_types=[TransactionType.INCOME]
        )
        assert incomes == []

    def test_query_other_users_account_rejected(
        self,
        ledger_service: LedgerService,
        user_factory,
        usd_account,
    ):
        other = user_factory()

        with pytest.raises(AccountNotFoundError):
            ledger_service.query_transactions(other.user_id, account_id=usd_account.account_id)


class TestDeleteTransaction:
    """Tests for deleting transactions."""

    def test_delete_reverses_balance(
        self,
        ledger_service: LedgerService,
        transaction_factory,
        sample_user,
        usd_account,
    ):
        txn = transaction_factory(sample_user, usd_account, 2500)

        deleted = ledger_service.delete_transaction(sample_user.user_id, txn.txn_id)

        assert deleted == [txn.txn_id]
        assert balance_of(ledger_service, usd_account) == 10000
        with pytest.raises(NotFoundError):
            ledger_service.get_transaction(sample_user.user_id, txn.txn_id)

    def test_cannot_delete_other_users_transaction(
        self,
        ledger_service: LedgerService,
        transaction_factory,
        user_factory,
        sample_user,
        usd_account,
    ):
        txn = transaction_factory(sample_user, usd_account, 2500)
        other = user_factory()

        with pytest.raises(NotFoundError):
            ledger_service.delete_transaction(other.user_id, txn.txn_id)

        assert balance_of(ledger_service, usd_account) == 7500
