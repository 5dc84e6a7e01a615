"""
Unit tests for TransferService.

Tests cover:
- Cross-currency transfer (USD -> EUR at 0.90)
- Same-currency transfers preserve the total exactly
- Validation: self-transfer, bad amounts, foreign and missing accounts
- Funds policy: insufficient funds, overdraft kinds, disabled enforcement
- Missing exchange rates leave balances untouched
- Amount and balance range limits
- A failed write rolls back every earlier write
- Currency changes between the first read and the locked read
- Deleting a transfer leg reverses both legs
"""

import dataclasses
import pytest
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from finance_tracker.services import (
    ExchangeRateService,
    FundsPolicy,
    LedgerService,
    TransferService,
)
from finance_tracker.domain.models import AccountKind, TransactionType
from finance_tracker.core.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidTransferError,
    PersistenceError,
    RateUnavailableError,
)
from finance_tracker.core.money import MAX_MINOR_UNITS

from tests.conftest import balance_of


def _service_with(test_session, account_repo, transaction_repo, exchange_rates, policy=None):
    return TransferService(
        db=test_session,
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        exchange_rates=exchange_rates,
        funds_policy=policy,
    )


# =============================================================================
# SUCCESSFUL TRANSFERS
# =============================================================================


class TestTransfer:
    """Tests for successful transfers."""

    def test_cross_currency_worked_example(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        transaction_repo,
        sample_user,
        usd_account,
        eur_account,
    ):
        """
        GIVEN a USD account holding 100.00 and an empty EUR account, EUR=0.90
        WHEN 50.00 USD is transferred to the EUR account
        THEN USD drops to 50.00, EUR rises to 45.00 and two linked rows exist
        """
        result = transfer_service.transfer(
            sample_user.user_id,
            usd_account.account_id,
            eur_account.account_id,
            5000,
        )

        assert result.debited_amount == 5000
        assert result.credited_amount == 4500
        assert result.from_balance == 5000
        assert result.to_balance == 4500
        assert result.from_currency == "USD"
        assert result.to_currency == "EUR"
        assert result.rate == Decimal("0.9")
        assert balance_of(ledger_service, usd_account) == 5000
        assert balance_of(ledger_service, eur_account) == 4500

        legs = transaction_repo.list_by_transfer(result.transfer_id)
        assert [leg.txn_id for leg in legs] == [
            result.debit_transaction_id,
            result.credit_transaction_id,
        ]
        debit, credit = legs
        assert debit.txn_type == TransactionType.EXPENSE
        assert debit.account_id == usd_account.account_id
        assert debit.amount == 5000
        assert debit.description == "Transfer to Euro Savings (EUR)"
        assert credit.txn_type == TransactionType.INCOME
        assert credit.account_id == eur_account.account_id
        assert credit.amount == 4500
        assert credit.description == "Transfer from Checking (USD) @ 0.9000"

    def test_same_currency_preserves_total_exactly(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        rate_provider,
        sample_user,
        usd_account,
        account_factory,
    ):
        """
        GIVEN two USD accounts
        WHEN an odd amount is transferred between them
        THEN the credited amount equals the debited amount and no rates are fetched
        """
        savings = account_factory(sample_user, name="Savings", currency="USD", balance=250)

        result = transfer_service.transfer(
            sample_user.user_id,
            usd_account.account_id,
            savings.account_id,
            3333,
        )

        assert result.credited_amount == 3333
        assert result.rate == Decimal("1")
        assert balance_of(ledger_service, usd_account) + balance_of(ledger_service, savings) == (
            10000 + 250
        )
        assert rate_provider.calls == 0

    def test_same_currency_description_has_no_rate(
        self,
        transfer_service: TransferService,
        transaction_repo,
        sample_user,
        usd_account,
        account_factory,
    ):
        savings = account_factory(sample_user, name="Savings", currency="USD")

        result = transfer_service.transfer(
            sample_user.user_id, usd_account.account_id, savings.account_id, 100
        )

        credit = transaction_repo.get_by_id(result.credit_transaction_id)
        assert credit.description == "Transfer from Checking (USD)"

    def test_custom_description_is_used_on_both_legs(
        self,
        transfer_service: TransferService,
        transaction_repo,
        sample_user,
        usd_account,
        eur_account,
    ):
        result = transfer_service.transfer(
            sample_user.user_id,
            usd_account.account_id,
            eur_account.account_id,
            1000,
            description="Holiday fund",
        )

        legs = transaction_repo.list_by_transfer(result.transfer_id)
        assert {leg.description for leg in legs} == {"Holiday fund"}

    def test_transfer_ids_are_unique(
        self,
        transfer_service: TransferService,
        sample_user,
        usd_account,
        eur_account,
    ):
        first = transfer_service.transfer(
            sample_user.user_id, usd_account.account_id, eur_account.account_id, 100
        )
        second = transfer_service.transfer(
            sample_user.user_id, usd_account.account_id, eur_account.account_id, 100
        )

        assert first.transfer_id != second.transfer_id

    def test_exact_balance_can_be_transferred(
        self,
        transfer_service: TransferService,
        sample_user,
        usd_account,
        eur_account,
    ):
        """
        GIVEN a USD account holding exactly 100.00
        WHEN 100.00 is transferred out
        THEN the source ends at zero
        """
        result = transfer_service.transfer(
            sample_user.user_id, usd_account.account_id, eur_account.account_id, 10000
        )

        assert result.from_balance == 0
        assert result.to_balance == 9000


# =============================================================================
# VALIDATION
# =============================================================================


class TestTransferValidation:
    """Tests for rejected transfers."""

    def test_self_transfer_rejected_without_writes(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        transaction_repo,
        sample_user,
        usd_account,
    ):
        """
        GIVEN an account
        WHEN transferring from it to itself
        THEN InvalidTransferError is raised and nothing is written
        """
        with pytest.raises(InvalidTransferError):
            transfer_service.transfer(
                sample_user.user_id, usd_account.account_id, usd_account.account_id, 100
            )

        assert transaction_repo.query(user_id=sample_user.user_id) == []
        assert balance_of(ledger_service, usd_account) == 10000

    def test_self_transfer_checked_before_lookup(
        self,
        transfer_service: TransferService,
        sample_user,
    ):
        """
        GIVEN an account ID that does not exist
        WHEN it is used as both source and destination
        THEN the same-account error wins over not-found
        """
        with pytest.raises(InvalidTransferError):
            transfer_service.transfer(sample_user.user_id, 999, 999, 100)

    @pytest.mark.parametrize("amount", [0, -500, 12.5, True, "100"])
    def test_invalid_amount_rejected(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        sample_user,
        usd_account,
        eur_account,
        amount,
    ):
        with pytest.raises(InvalidAmountError):
            transfer_service.transfer(
                sample_user.user_id, usd_account.account_id, eur_account.account_id, amount
            )

        assert balance_of(ledger_service, usd_account) == 10000

    def test_missing_account_rejected(
        self,
        transfer_service: TransferService,
        sample_user,
        usd_account,
    ):
        with pytest.raises(AccountNotFoundError) as exc_info:
            transfer_service.transfer(sample_user.user_id, usd_account.account_id, 9999, 100)

        assert exc_info.value.code == "ACCOUNT_NOT_FOUND"

    def test_other_users_account_rejected(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        user_factory,
        account_factory,
        sample_user,
        usd_account,
    ):
        """
        GIVEN an account owned by another user
        WHEN it is used as the destination
        THEN AccountNotFoundError is raised and no money moves
        """
        other = user_factory(username="mallory")
        foreign = account_factory(other, name="Foreign", currency="USD")

        with pytest.raises(AccountNotFoundError):
            transfer_service.transfer(
                sample_user.user_id, usd_account.account_id, foreign.account_id, 100
            )
        with pytest.raises(AccountNotFoundError):
            transfer_service.transfer(
                sample_user.user_id, foreign.account_id, usd_account.account_id, 100
            )

        assert balance_of(ledger_service, usd_account) == 10000
        assert balance_of(ledger_service, foreign) == 0

    def test_amount_converting_to_zero_rejected(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        sample_user,
        account_factory,
        usd_account,
    ):
        """
        GIVEN a JPY account (150 JPY per USD)
        WHEN one JPY minor unit is sent to a USD account
        THEN the converted amount rounds to zero and the transfer is refused
        """
        yen = account_factory(sample_user, name="Yen", currency="JPY", balance=1000)

        with pytest.raises(InvalidAmountError):
            transfer_service.transfer(
                sample_user.user_id, yen.account_id, usd_account.account_id, 1
            )

        assert balance_of(ledger_service, yen) == 1000
        assert balance_of(ledger_service, usd_account) == 10000


# =============================================================================
# FUNDS POLICY
# =============================================================================


class TestFundsPolicy:
    """Tests for insufficient-funds handling."""

    def test_insufficient_funds_leaves_state_unchanged(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        transaction_repo,
        sample_user,
        usd_account,
        eur_account,
    ):
        """
        GIVEN a USD account holding 100.00
        WHEN 100.01 is transferred out
        THEN InsufficientFundsError is raised and nothing changes
        """
        with pytest.raises(InsufficientFundsError) as exc_info:
            transfer_service.transfer(
                sample_user.user_id, usd_account.account_id, eur_account.account_id, 10001
            )

        assert exc_info.value.status_code == 409
        assert "100.01 USD" in exc_info.value.message
        assert balance_of(ledger_service, usd_account) == 10000
        assert balance_of(ledger_service, eur_account) == 0
        assert transaction_repo.query(user_id=sample_user.user_id) == []

    def test_credit_account_may_go_negative(
        self,
        transfer_service: TransferService,
        sample_user,
        account_factory,
        usd_account,
    ):
        """
        GIVEN an empty credit account
        WHEN 20.00 is transferred out of it
        THEN the transfer succeeds and the credit balance is -20.00
        """
        card = account_factory(sample_user, name="Card", currency="USD", kind=AccountKind.CREDIT)

        result = transfer_service.transfer(
            sample_user.user_id, card.account_id, usd_account.account_id, 2000
        )

        assert result.from_balance == -2000
        assert result.to_balance == 12000

    def test_disabled_policy_allows_overdraft(
        self,
        test_session,
        account_repo,
        transaction_repo,
        exchange_rate_service: ExchangeRateService,
        sample_user,
        usd_account,
        eur_account,
    ):
        service = _service_with(
            test_session,
            account_repo,
            transaction_repo,
            exchange_rate_service,
            FundsPolicy(enforce=False),
        )

        result = service.transfer(
            sample_user.user_id, usd_account.account_id, eur_account.account_id, 15000
        )

        assert result.from_balance == -5000
        assert result.to_balance == 13500

    def test_policy_from_config(self):
        policy = FundsPolicy.from_config(True, ["credit", "SAVINGS"])

        assert policy.overdraft_kinds == frozenset({AccountKind.CREDIT, AccountKind.SAVINGS})

    def test_policy_requires_funds(self, sample_user, account_factory):
        checking = account_factory(sample_user, kind=AccountKind.BANK)
        card = account_factory(sample_user, kind=AccountKind.CREDIT)

        assert FundsPolicy().requires_funds(checking)
        assert not FundsPolicy().requires_funds(card)
        assert not FundsPolicy(enforce=False).requires_funds(checking)


# =============================================================================
# EXCHANGE RATE FAILURES
# =============================================================================


class TestRateUnavailable:
    """Transfers needing a missing rate abort without side effects."""

    def test_no_rates_at_all(
        self,
        test_session,
        account_repo,
        transaction_repo,
        rate_repo,
        failing_rate_provider,
        ledger_service: LedgerService,
        sample_user,
        usd_account,
        eur_account,
    ):
        """
        GIVEN no stored rates and an unreachable provider
        WHEN a USD -> EUR transfer is attempted
        THEN RateUnavailableError is raised and balances are unchanged
        """
        rates = ExchangeRateService(test_session, rate_repo, failing_rate_provider)
        service = _service_with(test_session, account_repo, transaction_repo, rates)

        with pytest.raises(RateUnavailableError):
            service.transfer(
                sample_user.user_id, usd_account.account_id, eur_account.account_id, 5000
            )

        assert balance_of(ledger_service, usd_account) == 10000
        assert balance_of(ledger_service, eur_account) == 0
        assert transaction_repo.query(user_id=sample_user.user_id) == []

    def test_currency_missing_from_snapshot(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        transaction_repo,
        sample_user,
        account_factory,
        usd_account,
    ):
        """
        GIVEN a snapshot that does not quote CHF
        WHEN transferring into a CHF account
        THEN RateUnavailableError is raised and nothing is written
        """
        franc = account_factory(sample_user, name="Franc", currency="CHF")

        with pytest.raises(RateUnavailableError):
            transfer_service.transfer(
                sample_user.user_id, usd_account.account_id, franc.account_id, 5000
            )

        assert balance_of(ledger_service, usd_account) == 10000
        assert balance_of(ledger_service, franc) == 0
        assert transaction_repo.query(user_id=sample_user.user_id) == []


# =============================================================================
# REVERSAL
# =============================================================================


class TestTransferReversal:
    """Deleting one leg of a transfer removes the whole transfer."""

    def test_delete_either_leg_reverses_both(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        transaction_repo,
        sample_user,
        usd_account,
        eur_account,
    ):
        result = transfer_service.transfer(
            sample_user.user_id, usd_account.account_id, eur_account.account_id, 5000
        )

        deleted = ledger_service.delete_transaction(
            sample_user.user_id, result.credit_transaction_id
        )

        assert sorted(deleted) == sorted(
            [result.debit_transaction_id, result.credit_transaction_id]
        )
        assert transaction_repo.list_by_transfer(result.transfer_id) == []
        assert balance_of(ledger_service, usd_account) == 10000
        assert balance_of(ledger_service, eur_account) == 0


# =============================================================================
# RANGE LIMITS
# =============================================================================


class TestAmountLimits:
    """Amounts and resulting balances must stay inside the supported range."""

    def test_huge_amount_from_credit_account_rejected(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        transaction_repo,
        sample_user,
        account_factory,
        usd_account,
    ):
        """
        GIVEN a credit account, which is exempt from the funds check
        WHEN 10**25 minor units are transferred out of it
        THEN InvalidAmountError is raised and nothing is written
        """
        card = account_factory(sample_user, name="Card", currency="USD", kind=AccountKind.CREDIT)

        with pytest.raises(InvalidAmountError):
            transfer_service.transfer(
                sample_user.user_id, card.account_id, usd_account.account_id, 10**25
            )

        assert balance_of(ledger_service, card) == 0
        assert balance_of(ledger_service, usd_account) == 10000
        assert transaction_repo.query(user_id=sample_user.user_id) == []

    def test_destination_balance_may_reach_but_not_pass_limit(
        self,
        transfer_service: TransferService,
        sample_user,
        account_factory,
    ):
        card = account_factory(sample_user, name="Card", currency="USD", kind=AccountKind.CREDIT)
        vault = account_factory(
            sample_user, name="Vault", currency="USD", balance=MAX_MINOR_UNITS - 100
        )

        with pytest.raises(InvalidAmountError):
            transfer_service.transfer(
                sample_user.user_id, card.account_id, vault.account_id, 101
            )

        result = transfer_service.transfer(
            sample_user.user_id, card.account_id, vault.account_id, 100
        )
        assert result.to_balance == MAX_MINOR_UNITS

    def test_converted_amount_over_limit_rejected(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        sample_user,
        account_factory,
    ):
        """
        GIVEN an amount inside the limit that grows 150x when converted to JPY
        WHEN it is transferred
        THEN InvalidAmountError is raised because the credit would overflow the range
        """
        card = account_factory(sample_user, name="Card", currency="USD", kind=AccountKind.CREDIT)
        yen = account_factory(sample_user, name="Yen", currency="JPY")

        with pytest.raises(InvalidAmountError):
            transfer_service.transfer(
                sample_user.user_id, card.account_id, yen.account_id, 10**14
            )

        assert balance_of(ledger_service, yen) == 0


# =============================================================================
# ATOMICITY
# =============================================================================


class TestPartialFailure:
    """A failure after some writes leaves no trace of the transfer."""

    def test_failed_second_insert_rolls_back_everything(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        transaction_repo,
        sample_user,
        usd_account,
        eur_account,
        monkeypatch,
    ):
        """
        GIVEN the database fails on the credit leg insert, after both balance
              updates and the debit insert
        WHEN a transfer runs
        THEN PersistenceError is raised, both balances are unchanged and no
             transaction rows exist
        """
        original_create = transaction_repo.create
        calls = []

        def create_then_fail(transaction):
            calls.append(transaction)
            if len(calls) == 2:
                raise OperationalError("INSERT INTO transactions", {}, Exception("disk I/O error"))
            return original_create(transaction)

        monkeypatch.setattr(transaction_repo, "create", create_then_fail)

        with pytest.raises(PersistenceError):
            transfer_service.transfer(
                sample_user.user_id, usd_account.account_id, eur_account.account_id, 5000
            )

        assert len(calls) == 2
        assert balance_of(ledger_service, usd_account) == 10000
        assert balance_of(ledger_service, eur_account) == 0
        assert transaction_repo.query(user_id=sample_user.user_id) == []


class TestCurrencyChangedDuringTransfer:
    """The locked read decides the currencies, not the first read."""

    def test_rates_fetched_when_locked_accounts_differ(
        self,
        transfer_service: TransferService,
        ledger_service: LedgerService,
        rate_provider,
        sample_user,
        usd_account,
        eur_account,
        monkeypatch,
    ):
        """
        GIVEN the first read sees two USD accounts but the destination is EUR
              by the time the rows are locked
        WHEN the transfer runs
        THEN rates are fetched outside the lock and the credit is converted
        """
        real_load_pair = transfer_service._load_pair

        def load_before_currency_change(user_id, from_account_id, to_account_id):
            source, destination = real_load_pair(user_id, from_account_id, to_account_id)
            return source, dataclasses.replace(destination, currency=source.currency)

        monkeypatch.setattr(transfer_service, "_load_pair", load_before_currency_change)

        result = transfer_service.transfer(
            sample_user.user_id, usd_account.account_id, eur_account.account_id, 5000
        )

        assert rate_provider.calls == 1
        assert result.to_currency == "EUR"
        assert result.credited_amount == 4500
        assert balance_of(ledger_service, usd_account) == 5000
        assert balance_of(ledger_service, eur_account) == 4500
