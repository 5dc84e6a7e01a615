"""
Pytest configuration and fixtures for finance tracker tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic and failing exchange rate providers
- Repository and service fixtures
- Factory helpers for users, accounts and transactions
- A FastAPI test client bound to the test database
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from finance_tracker.main import app
from finance_tracker.api.deps import get_rate_provider
from finance_tracker.config.settings import Settings, set_settings, reset_settings
from finance_tracker.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from finance_tracker.repositories.sqlalchemy import orm_models  # noqa: F401
from finance_tracker.repositories.sqlalchemy import (
    SqlAlchemyUserRepository,
    SqlAlchemyAccountRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyCategoryRepository,
    SqlAlchemyExchangeRateRepository,
    SqlAlchemyBudgetRepository,
    SqlAlchemyGoalRepository,
    SqlAlchemyRecurringTransactionRepository,
)
from finance_tracker.providers import RateProviderError, StaticRateProvider
from finance_tracker.services import (
    UserService,
    LedgerService,
    CategoryService,
    ExchangeRateService,
    TransferService,
    ReportService,
    BudgetService,
    GoalService,
    RecurringService,
)
from finance_tracker.services.ledger_service import TransactionCreate
from finance_tracker.domain.models import (
    Account,
    AccountKind,
    ExchangeRateSnapshot,
    Transaction,
    TransactionType,
    User,
)
from finance_tracker.core.timezone import UTC


# Units per 1 USD. EUR at 0.90 gives round numbers: 50.00 USD -> 45.00 EUR.
TEST_RATES = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.90"),
    "GBP": Decimal("0.80"),
    "CAD": Decimal("1.35"),
    "MAD": Decimal("10"),
    "JPY": Decimal("150"),
}


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 12,
    minute: int = 0,
) -> datetime:
    """Create an aware UTC datetime."""
    return UTC.localize(datetime(year, month, day, hour, minute))


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def user_repo(test_session) -> SqlAlchemyUserRepository:
    """Provide test UserRepository."""
    return SqlAlchemyUserRepository(test_session)


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def category_repo(test_session) -> SqlAlchemyCategoryRepository:
    """Provide test CategoryRepository."""
    return SqlAlchemyCategoryRepository(test_session)


@pytest.fixture
def rate_repo(test_session) -> SqlAlchemyExchangeRateRepository:
    """Provide test ExchangeRateRepository."""
    return SqlAlchemyExchangeRateRepository(test_session)


@pytest.fixture
def budget_repo(test_session) -> SqlAlchemyBudgetRepository:
    """Provide test BudgetRepository."""
    return SqlAlchemyBudgetRepository(test_session)


@pytest.fixture
def goal_repo(test_session) -> SqlAlchemyGoalRepository:
    """Provide test GoalRepository."""
    return SqlAlchemyGoalRepository(test_session)


@pytest.fixture
def recurring_repo(test_session) -> SqlAlchemyRecurringTransactionRepository:
    """Provide test RecurringTransactionRepository."""
    return SqlAlchemyRecurringTransactionRepository(test_session)


# =============================================================================
# EXCHANGE RATE PROVIDER FIXTURES
# =============================================================================


class CountingRateProvider:
    """Static provider that records how often it was asked."""

    def __init__(self, rates: Optional[dict] = None):
        self._inner = StaticRateProvider(rates if rates is not None else TEST_RATES)
        self.calls = 0

    def fetch_rates(self) -> ExchangeRateSnapshot:
        self.calls += 1
        return self._inner.fetch_rates()


class FailingRateProvider:
    """Rate provider that always fails."""

    def __init__(self):
        self.calls = 0

    def fetch_rates(self) -> ExchangeRateSnapshot:
        self.calls += 1
        raise RateProviderError("Network unavailable")


@pytest.fixture
def rate_provider() -> CountingRateProvider:
    """Provide deterministic rate provider."""
    return CountingRateProvider()


@pytest.fixture
def failing_rate_provider() -> FailingRateProvider:
    """Provide a rate provider that always fails."""
    return FailingRateProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def user_service(test_session, user_repo) -> UserService:
    """Provide test UserService."""
    return UserService(db=test_session, user_repo=user_repo)


@pytest.fixture
def ledger_service(
    test_session,
    user_repo,
    account_repo,
    transaction_repo,
    category_repo,
    recurring_repo,
) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(
        db=test_session,
        user_repo=user_repo,
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        category_repo=category_repo,
        recurring_repo=recurring_repo,
    )


@pytest.fixture
def category_service(
    test_session,
    category_repo,
    transaction_repo,
    budget_repo,
    recurring_repo,
) -> CategoryService:
    """Provide test CategoryService."""
    return CategoryService(
        db=test_session,
        category_repo=category_repo,
        transaction_repo=transaction_repo,
        budget_repo=budget_repo,
        recurring_repo=recurring_repo,
    )


@pytest.fixture
def exchange_rate_service(test_session, rate_repo, rate_provider) -> ExchangeRateService:
    """Provide test ExchangeRateService with deterministic rates."""
    return ExchangeRateService(
        db=test_session,
        rate_repo=rate_repo,
        provider=rate_provider,
        max_age_seconds=3600,
    )


@pytest.fixture
def transfer_service(
    test_session,
    account_repo,
    transaction_repo,
    exchange_rate_service,
) -> TransferService:
    """Provide test TransferService with the default funds policy."""
    return TransferService(
        db=test_session,
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        exchange_rates=exchange_rate_service,
    )


@pytest.fixture
def report_service(
    user_repo,
    account_repo,
    transaction_repo,
    category_repo,
    exchange_rate_service,
) -> ReportService:
    """Provide test ReportService."""
    return ReportService(
        user_repo=user_repo,
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        category_repo=category_repo,
        exchange_rates=exchange_rate_service,
    )


@pytest.fixture
def budget_service(
    test_session,
    user_repo,
    budget_repo,
    category_repo,
    report_service,
) -> BudgetService:
    """Provide test BudgetService."""
    return BudgetService(
        db=test_session,
        user_repo=user_repo,
        budget_repo=budget_repo,
        category_repo=category_repo,
        reports=report_service,
    )


@pytest.fixture
def goal_service(test_session, user_repo, goal_repo) -> GoalService:
    """Provide test GoalService."""
    return GoalService(db=test_session, user_repo=user_repo, goal_repo=goal_repo)


@pytest.fixture
def recurring_service(test_session, recurring_repo, ledger_service) -> RecurringService:
    """Provide test RecurringService."""
    return RecurringService(db=test_session, recurring_repo=recurring_repo, ledger=ledger_service)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def user_factory(user_service) -> Callable[..., User]:
    """Factory for creating test users."""

    def _create_user(username: Optional[str] = None, currency: str = "USD") -> User:
        if username is None:
            username = f"user-{uuid.uuid4().hex[:8]}"
        return user_service.create_user(username, currency=currency)

    return _create_user


@pytest.fixture
def account_factory(ledger_service) -> Callable[..., Account]:
    """Factory for creating test accounts; balances are in minor units."""

    def _create_account(
        user: User,
        name: Optional[str] = None,
        currency: str = "USD",
        balance: int = 0,
        kind: AccountKind = AccountKind.NORMAL,
    ) -> Account:
        if name is None:
            name = f"Account {uuid.uuid4().hex[:8]}"
        return ledger_service.create_account(
            user.user_id,
            name=name,
            currency=currency,
            balance=balance,
            kind=kind,
        )

    return _create_account


@pytest.fixture
def transaction_factory(ledger_service) -> Callable[..., Transaction]:
    """Factory for recording income and expenses."""

    def _create_transaction(
        user: User,
        account: Account,
        amount: int,
        txn_type: TransactionType = TransactionType.EXPENSE,
        description: str = "",
        category_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ) -> Transaction:
        return ledger_service.add_transaction(
            user.user_id,
            TransactionCreate(
                account_id=account.account_id,
                amount=amount,
                txn_type=txn_type,
                description=description,
                category_id=category_id,
                created_at=created_at,
            ),
        )

    return _create_transaction


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_user(user_factory) -> User:
    """A user reporting in USD."""
    return user_factory(username="alice", currency="USD")


@pytest.fixture
def usd_account(sample_user, account_factory) -> Account:
    """USD checking account holding 100.00."""
    return account_factory(sample_user, name="Checking", currency="USD", balance=10000)


@pytest.fixture
def eur_account(sample_user, account_factory) -> Account:
    """Empty EUR account."""
    return account_factory(sample_user, name="Euro Savings", currency="EUR", balance=0)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database and static rates."""
    set_settings(Settings(database_url="sqlite:///:memory:", exchange_rate_provider="static"))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rate_provider] = lambda: StaticRateProvider(TEST_RATES)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


@pytest.fixture
def api_user(client) -> Callable[..., dict]:
    """Create a user through the API and return its request headers."""

    def _create(username: Optional[str] = None, currency: str = "USD") -> dict:
        if username is None:
            username = f"user-{uuid.uuid4().hex[:8]}"
        response = client.post("/users/", json={"username": username, "currency": currency})
        assert response.status_code == 201, response.text
        return {"X-User-Id": str(response.json()["user_id"])}

    return _create


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def balance_of(ledger_service: LedgerService, account: Account) -> int:
    """Current balance of an account, read fresh from the database."""
    return ledger_service.get_account(account.user_id, account.account_id).balance
