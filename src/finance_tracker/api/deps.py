"""Dependency injection for FastAPI."""

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from finance_tracker.repositories.sqlalchemy.database import get_db
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
from finance_tracker.providers import (
    ExchangeRateProvider,
    OpenErApiRateProvider,
    StaticRateProvider,
)
from finance_tracker.services import (
    UserService,
    LedgerService,
    CategoryService,
    ExchangeRateService,
    TransferService,
    FundsPolicy,
    ReportService,
    BudgetService,
    GoalService,
    RecurringService,
)
from finance_tracker.config.settings import get_settings
from finance_tracker.core.exceptions import NotFoundError


def get_user_repo(db: Session = Depends(get_db)) -> SqlAlchemyUserRepository:
    """Provide UserRepository instance."""
    return SqlAlchemyUserRepository(db)


def get_account_repo(db: Session = Depends(get_db)) -> SqlAlchemyAccountRepository:
    """Provide AccountRepository instance."""
    return SqlAlchemyAccountRepository(db)


def get_transaction_repo(db: Session = Depends(get_db)) -> SqlAlchemyTransactionRepository:
    """Provide TransactionRepository instance."""
    return SqlAlchemyTransactionRepository(db)


def get_category_repo(db: Session = Depends(get_db)) -> SqlAlchemyCategoryRepository:
    """Provide CategoryRepository instance."""
    return SqlAlchemyCategoryRepository(db)


def get_exchange_rate_repo(db: Session = Depends(get_db)) -> SqlAlchemyExchangeRateRepository:
    """Provide ExchangeRateRepository instance."""
    return SqlAlchemyExchangeRateRepository(db)


def get_budget_repo(db: Session = Depends(get_db)) -> SqlAlchemyBudgetRepository:
    """Provide BudgetRepository instance."""
    return SqlAlchemyBudgetRepository(db)


def get_goal_repo(db: Session = Depends(get_db)) -> SqlAlchemyGoalRepository:
    """Provide GoalRepository instance."""
    return SqlAlchemyGoalRepository(db)


def get_recurring_repo(db: Session = Depends(get_db)) -> SqlAlchemyRecurringTransactionRepository:
    """Provide RecurringTransactionRepository instance."""
    return SqlAlchemyRecurringTransactionRepository(db)


def get_rate_provider() -> ExchangeRateProvider:
    """Provide the configured exchange rate provider."""
    settings = get_settings()
    if settings.exchange_rate_provider == "static":
        return StaticRateProvider()
    return OpenErApiRateProvider(
        url=settings.exchange_rate_api_url,
        timeout_seconds=settings.exchange_rate_timeout_seconds,
    )


def get_current_user_id(
    x_user_id: int = Header(..., description="ID of the acting user"),
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
) -> int:
    """Resolve the acting user from the X-User-Id header."""
    if not user_repo.get_by_id(x_user_id):
        raise NotFoundError("User", x_user_id)
    return x_user_id


def get_user_service(
    db: Session = Depends(get_db),
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
) -> UserService:
    """Provide UserService instance."""
    return UserService(
        db=db,
        user_repo=user_repo,
        default_currency=get_settings().default_currency,
    )


def get_ledger_service(
    db: Session = Depends(get_db),
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    category_repo: SqlAlchemyCategoryRepository = Depends(get_category_repo),
    recurring_repo: SqlAlchemyRecurringTransactionRepository = Depends(get_recurring_repo),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(
        db=db,
        user_repo=user_repo,
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        category_repo=category_repo,
        recurring_repo=recurring_repo,
    )


def get_category_service(
    db: Session = Depends(get_db),
    category_repo: SqlAlchemyCategoryRepository = Depends(get_category_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    budget_repo: SqlAlchemyBudgetRepository = Depends(get_budget_repo),
    recurring_repo: SqlAlchemyRecurringTransactionRepository = Depends(get_recurring_repo),
) -> CategoryService:
    """Provide CategoryService instance."""
    return CategoryService(
        db=db,
        category_repo=category_repo,
        transaction_repo=transaction_repo,
        budget_repo=budget_repo,
        recurring_repo=recurring_repo,
    )


def get_exchange_rate_service(
    db: Session = Depends(get_db),
    rate_repo: SqlAlchemyExchangeRateRepository = Depends(get_exchange_rate_repo),
    provider: ExchangeRateProvider = Depends(get_rate_provider),
) -> ExchangeRateService:
    """Provide ExchangeRateService instance."""
    return ExchangeRateService(
        db=db,
        rate_repo=rate_repo,
        provider=provider,
        max_age_seconds=get_settings().exchange_rate_max_age_seconds,
    )


def get_transfer_service(
    db: Session = Depends(get_db),
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    exchange_rates: ExchangeRateService = Depends(get_exchange_rate_service),
) -> TransferService:
    """Provide TransferService instance."""
    settings = get_settings()
    return TransferService(
        db=db,
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        exchange_rates=exchange_rates,
        funds_policy=FundsPolicy.from_config(
            settings.enforce_sufficient_funds,
            settings.overdraft_account_kinds,
        ),
    )


def get_report_service(
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    category_repo: SqlAlchemyCategoryRepository = Depends(get_category_repo),
    exchange_rates: ExchangeRateService = Depends(get_exchange_rate_service),
) -> ReportService:
    """Provide ReportService instance."""
    return ReportService(
        user_repo=user_repo,
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        category_repo=category_repo,
        exchange_rates=exchange_rates,
    )


def get_budget_service(
    db: Session = Depends(get_db),
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
    budget_repo: SqlAlchemyBudgetRepository = Depends(get_budget_repo),
    category_repo: SqlAlchemyCategoryRepository = Depends(get_category_repo),
    reports: ReportService = Depends(get_report_service),
) -> BudgetService:
    """Provide BudgetService instance."""
    return BudgetService(
        db=db,
        user_repo=user_repo,
        budget_repo=budget_repo,
        category_repo=category_repo,
        reports=reports,
    )


def get_goal_service(
    db: Session = Depends(get_db),
    user_repo: SqlAlchemyUserRepository = Depends(get_user_repo),
    goal_repo: SqlAlchemyGoalRepository = Depends(get_goal_repo),
) -> GoalService:
    """Provide GoalService instance."""
    return GoalService(db=db, user_repo=user_repo, goal_repo=goal_repo)


def get_recurring_service(
    db: Session = Depends(get_db),
    recurring_repo: SqlAlchemyRecurringTransactionRepository = Depends(get_recurring_repo),
    ledger: LedgerService = Depends(get_ledger_service),
) -> RecurringService:
    """Provide RecurringService instance."""
    return RecurringService(db=db, recurring_repo=recurring_repo, ledger=ledger)
